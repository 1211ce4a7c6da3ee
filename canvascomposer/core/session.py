"""EditorSession — one editing context: canvas size plus the layer stack."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QSize, QSizeF, pyqtSignal
from PyQt6.QtGui import QImage

from canvascomposer.config.constants import (
    ASPECT_RATIO_PRESETS,
    BATCH_STAGGER,
    DEFAULT_ASPECT_RATIO,
)
from canvascomposer.core.geometry import fit_within
from canvascomposer.core.layer import Layer
from canvascomposer.core.layer_manager import LayerManager
from canvascomposer.io.importer import decode_batch, decode_paths

if TYPE_CHECKING:
    from pathlib import Path

    from canvascomposer.io.importer import DecodeResult, ImageSource

log = logging.getLogger(__name__)

_RESOLUTION_RE = re.compile(r"(\d+)x(\d+)")


def resolve_aspect_ratio(choice: str) -> QSize:
    """Turn an aspect-ratio menu entry into a logical canvas size.

    An embedded ``WxH`` resolution (``"Landscape (1344x738)"``) wins; otherwise
    the ratio key selects a preset, and unknown keys fall back to 1:1.
    """
    match = _RESOLUTION_RE.search(choice)
    if match:
        return QSize(int(match.group(1)), int(match.group(2)))
    width, height = ASPECT_RATIO_PRESETS.get(
        choice.strip(), ASPECT_RATIO_PRESETS[DEFAULT_ASPECT_RATIO]
    )
    return QSize(width, height)


class EditorSession(QObject):
    """Owns the logical canvas size and the :class:`LayerManager`.

    The canvas has no size until an aspect ratio is chosen or the first
    layer is inserted, which applies the default preset.  Several sessions
    can live side by side; nothing here is module-global.

    Signals
    -------
    canvas_size_changed(QSize)
        Emitted when the logical size is set or reset (an empty QSize).
    layers_batch_added(list)
        Emitted once per :meth:`add_images` call with the new layers.
    """

    canvas_size_changed = pyqtSignal(QSize)
    layers_batch_added = pyqtSignal(list)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._canvas_size = QSize()
        self._layer_manager = LayerManager(self)

    # --- accessors ---

    @property
    def layer_manager(self) -> LayerManager:
        return self._layer_manager

    @property
    def canvas_size(self) -> QSize:
        """Logical canvas size; empty until established."""
        return QSize(self._canvas_size)

    @property
    def canvas_size_f(self) -> QSizeF:
        return QSizeF(self._canvas_size)

    @property
    def has_canvas_size(self) -> bool:
        return not self._canvas_size.isEmpty()

    # --- canvas sizing ---

    def set_canvas_size(self, width: int, height: int) -> None:
        """Set the logical size.

        The size may change while layers exist (the aspect-ratio menu stays
        live); existing layers keep their logical coordinates.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        size = QSize(width, height)
        if size == self._canvas_size:
            return
        self._canvas_size = size
        log.debug("Canvas size set to %dx%d", width, height)
        self.canvas_size_changed.emit(QSize(size))

    def set_aspect_ratio(self, choice: str) -> QSize:
        """Apply an aspect-ratio menu entry. Returns the resulting size."""
        size = resolve_aspect_ratio(choice)
        self.set_canvas_size(size.width(), size.height())
        return size

    def ensure_canvas_size(self) -> QSize:
        """Apply the default preset if no size has been chosen yet."""
        if not self.has_canvas_size:
            self.set_aspect_ratio(DEFAULT_ASPECT_RATIO)
        return self.canvas_size

    # --- layers ---

    def place_image(self, name: str, image: QImage, index: int = 0) -> Layer:
        """Build a layer for *image*, fitted and centred on the canvas.

        *index* staggers images that arrive in the same batch.
        """
        canvas = self.ensure_canvas_size()
        width, height = fit_within(
            image.width(), image.height(), canvas.width(), canvas.height()
        )
        return Layer(
            name=name,
            pixel_source=image,
            x=(canvas.width() - width) / 2 + index * BATCH_STAGGER,
            y=(canvas.height() - height) / 2 + index * BATCH_STAGGER,
            width=width,
            height=height,
        )

    def add_images(self, results: list[DecodeResult]) -> list[Layer]:
        """Insert a layer for every successful decode in *results*.

        Failed decodes are skipped.  The last new layer becomes active.
        """
        decoded = [r for r in results if r.image is not None]
        if not decoded:
            return []
        layers = [
            self.place_image(r.source.name, r.image, index)  # type: ignore[arg-type]
            for index, r in enumerate(decoded)
        ]
        for layer in layers:
            self._layer_manager.insert(layer)
        self._layer_manager.set_active(layers[-1].layer_id)
        log.info(
            "Added %d layer(s); %d decode failure(s)", len(layers), len(results) - len(decoded)
        )
        self.layers_batch_added.emit(layers)
        return layers

    def add_sources(self, sources: list[ImageSource]) -> list[DecodeResult]:
        """Decode *sources* concurrently, then add them in a single step."""
        results = decode_batch(sources)
        self.add_images(results)
        return results

    def add_paths(self, paths: list[Path]) -> list[DecodeResult]:
        """Read and decode image files, then add them in a single step.

        Files that cannot be read or decoded are reported in the results.
        """
        results = decode_paths(paths)
        self.add_images(results)
        return results

    def add_generated_image(self, image: QImage, name: str = "Generated Image") -> Layer:
        """Place a service-produced image on the canvas as the active layer."""
        layer = self.place_image(name, image)
        self._layer_manager.insert(layer)
        self._layer_manager.set_active(layer.layer_id)
        self.layers_batch_added.emit([layer])
        return layer

    def clear(self) -> None:
        """Drop every layer and reset the canvas size."""
        self._layer_manager.clear()
        if self.has_canvas_size:
            self._canvas_size = QSize()
            self.canvas_size_changed.emit(QSize())
