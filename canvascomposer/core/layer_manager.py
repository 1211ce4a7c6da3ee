"""LayerManager — owns the ordered layer stack and emits change signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from canvascomposer.config.constants import DUPLICATE_OFFSET
from canvascomposer.core.layer import Layer


class LayerManager(QObject):
    """Manages an ordered list of :class:`Layer` objects.

    Layers are indexed bottom-to-top: index 0 is painted first and the last
    layer is topmost.  Mutations only change the stack; observers repaint in
    response to the signals.

    Signals
    -------
    layer_added(Layer)
    layer_removed(str)
        Emitted with the removed layer's id.
    layers_reordered()
    layers_cleared()
    active_layer_changed(str)
        Emitted with the new active layer's id, or ``""`` when cleared.
    layer_visibility_changed(str, bool)
    layer_lock_changed(str, bool)
    layer_renamed(str, str)
    """

    layer_added = pyqtSignal(object)
    layer_removed = pyqtSignal(str)
    layers_reordered = pyqtSignal()
    layers_cleared = pyqtSignal()
    active_layer_changed = pyqtSignal(str)
    layer_visibility_changed = pyqtSignal(str, bool)
    layer_lock_changed = pyqtSignal(str, bool)
    layer_renamed = pyqtSignal(str, str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._layers: list[Layer] = []
        self._active_id: str = ""

    # --- queries ---

    @property
    def layers(self) -> list[Layer]:
        """Return the layer list (bottom-to-top)."""
        return list(self._layers)

    @property
    def visible_layers(self) -> list[Layer]:
        return [layer for layer in self._layers if layer.visible]

    @property
    def count(self) -> int:
        return len(self._layers)

    @property
    def active_layer(self) -> Layer | None:
        return self.layer_by_id(self._active_id)

    @property
    def active_layer_id(self) -> str:
        return self._active_id

    def layer_by_id(self, layer_id: str) -> Layer | None:
        for layer in self._layers:
            if layer.layer_id == layer_id:
                return layer
        return None

    def index_of(self, layer_id: str) -> int:
        for i, layer in enumerate(self._layers):
            if layer.layer_id == layer_id:
                return i
        return -1

    # --- stack mutations ---

    def insert(self, layer: Layer, index: int | None = None) -> None:
        """Insert *layer* at *index*, or on top when *index* is None."""
        if self.index_of(layer.layer_id) >= 0:
            raise ValueError(f"layer id already in stack: {layer.layer_id}")
        if index is None:
            index = len(self._layers)
        self._layers.insert(index, layer)
        self.layer_added.emit(layer)

    def remove(self, layer_id: str) -> Layer | None:
        """Remove a layer by id. Returns the removed layer, or None."""
        idx = self.index_of(layer_id)
        if idx < 0:
            return None
        layer = self._layers.pop(idx)
        if self._active_id == layer_id:
            self._active_id = ""
            self.active_layer_changed.emit("")
        self.layer_removed.emit(layer_id)
        return layer

    def bring_to_front(self, layer_id: str) -> None:
        """Move a layer to the top of the stack."""
        idx = self.index_of(layer_id)
        if idx < 0 or idx == len(self._layers) - 1:
            return
        layer = self._layers.pop(idx)
        self._layers.append(layer)
        self.layers_reordered.emit()

    def reorder(self, dragged_id: str, target_id: str) -> None:
        """Splice *dragged_id* so that it sits immediately above *target_id*."""
        if dragged_id == target_id:
            return
        dragged_idx = self.index_of(dragged_id)
        if dragged_idx < 0 or self.index_of(target_id) < 0:
            return
        dragged = self._layers.pop(dragged_idx)
        target_idx = self.index_of(target_id)
        self._layers.insert(target_idx + 1, dragged)
        self.layers_reordered.emit()

    def duplicate(self, layer_id: str) -> str | None:
        """Copy a layer just above the original and activate the copy.

        Returns the new layer's id, or None if *layer_id* is unknown.
        """
        idx = self.index_of(layer_id)
        if idx < 0:
            return None
        copy = self._layers[idx].clone(offset=DUPLICATE_OFFSET)
        self._layers.insert(idx + 1, copy)
        self.layer_added.emit(copy)
        self.set_active(copy.layer_id)
        return copy.layer_id

    def clear(self) -> None:
        """Remove every layer and the active selection."""
        self._layers.clear()
        had_active = bool(self._active_id)
        self._active_id = ""
        if had_active:
            self.active_layer_changed.emit("")
        self.layers_cleared.emit()

    # --- per-layer state ---

    def set_active(self, layer_id: str) -> None:
        """Make the layer with *layer_id* the active layer."""
        if self.layer_by_id(layer_id) is None:
            return
        if self._active_id != layer_id:
            self._active_id = layer_id
            self.active_layer_changed.emit(layer_id)

    def clear_active(self) -> None:
        if self._active_id:
            self._active_id = ""
            self.active_layer_changed.emit("")

    def set_visibility(self, layer_id: str, visible: bool) -> None:
        layer = self.layer_by_id(layer_id)
        if layer is not None:
            layer.visible = visible
            self.layer_visibility_changed.emit(layer_id, visible)

    def set_locked(self, layer_id: str, locked: bool) -> None:
        layer = self.layer_by_id(layer_id)
        if layer is not None:
            layer.locked = locked
            self.layer_lock_changed.emit(layer_id, locked)

    def rename(self, layer_id: str, name: str) -> None:
        """Rename a layer. Blank names are ignored."""
        name = name.strip()
        layer = self.layer_by_id(layer_id)
        if layer is not None and name:
            layer.name = name
            self.layer_renamed.emit(layer_id, name)
