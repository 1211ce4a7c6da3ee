"""Tests for export functions."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from PyQt6.QtGui import QImage

from canvascomposer.core.errors import EmptyCompositionError
from canvascomposer.core.layer import Layer
from canvascomposer.core.session import EditorSession
from canvascomposer.io.exporter import export_png, generate_filename

LayerFactory = Callable[..., Layer]


def test_generate_filename() -> None:
    when = datetime(2024, 3, 5, 14, 7, 9)
    assert generate_filename("composition", "png", when) == "composition-20240305-140709.png"


def test_generate_filename_defaults_to_now() -> None:
    name = generate_filename("generated-image", "png")
    assert name.startswith("generated-image-")
    assert name.endswith(".png")


def test_export_png(session: EditorSession, make_layer: LayerFactory, tmp_path: Path) -> None:
    session.set_aspect_ratio("16:9")
    session.layer_manager.insert(make_layer(width=100, height=100, color="red"))
    path = tmp_path / "test.png"
    export_png(session, path)
    assert path.exists()
    image = QImage(str(path))
    assert (image.width(), image.height()) == (1344, 738)
    assert image.pixelColor(50, 50).red() == 255
    assert image.pixelColor(500, 500).alpha() == 0


def test_export_empty_session_raises(session: EditorSession, tmp_path: Path) -> None:
    path = tmp_path / "empty.png"
    with pytest.raises(EmptyCompositionError):
        export_png(session, path)
    assert not path.exists()
