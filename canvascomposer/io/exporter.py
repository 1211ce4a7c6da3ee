"""Exporter — write the flattened composition to disk."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from canvascomposer.core.render_engine import Compositor

if TYPE_CHECKING:
    from canvascomposer.core.session import EditorSession


def generate_filename(prefix: str, extension: str, when: datetime | None = None) -> str:
    """Return ``prefix-YYYYMMDD-HHMMSS.extension``."""
    stamp = (when or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return f"{prefix}-{stamp}.{extension}"


def export_png(session: EditorSession, path: Path) -> None:
    """Flatten the session's visible layers and save them as a PNG file."""
    image = Compositor().flatten(session.layer_manager, session.canvas_size)
    path.write_bytes(Compositor.encode_png(image))
