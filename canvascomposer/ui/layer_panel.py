"""LayerPanel — dock widget listing the layer stack with per-layer actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QDropEvent, QIcon, QPixmap
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QDockWidget,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from canvascomposer.config.constants import HIDDEN_LAYER_TEXT_COLOR

if TYPE_CHECKING:
    from canvascomposer.core.layer import Layer
    from canvascomposer.core.layer_manager import LayerManager

_THUMBNAIL_SIZE = 32


class _LayerList(QListWidget):
    """List that turns an internal drop into a ``LayerManager.reorder`` call."""

    def __init__(self, panel: LayerPanel) -> None:
        super().__init__()
        self._panel = panel
        self.setDragDropMode(QAbstractItemView.DragDropMode.InternalMove)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)

    def dropEvent(self, event: QDropEvent | None) -> None:
        if event is None:
            return
        dragged = self.currentItem()
        target = self.itemAt(event.position().toPoint())
        # The manager owns the order; the list is rebuilt from it.
        event.setDropAction(Qt.DropAction.IgnoreAction)
        event.accept()
        if dragged is None or target is None:
            return
        self._panel.reorder(
            dragged.data(Qt.ItemDataRole.UserRole),
            target.data(Qt.ItemDataRole.UserRole),
        )


class LayerPanel(QDockWidget):
    """Dockable layer panel: select, show/hide, lock, rename, duplicate, delete, reorder.

    The list shows the topmost layer first.
    """

    def __init__(self, layer_manager: LayerManager, parent: QWidget | None = None) -> None:
        super().__init__("Layers", parent)
        self._layer_manager = layer_manager
        self._refreshing = False
        self.setAllowedAreas(
            Qt.DockWidgetArea.LeftDockWidgetArea | Qt.DockWidgetArea.RightDockWidgetArea
        )

        container = QWidget()
        layout = QVBoxLayout(container)

        self._list = _LayerList(self)
        self._list.currentRowChanged.connect(self._on_row_changed)
        self._list.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self._list)

        btn_layout = QHBoxLayout()
        self._visibility_btn = QPushButton("Show/Hide")
        self._visibility_btn.setToolTip("Toggle layer visibility")
        self._visibility_btn.clicked.connect(self._on_toggle_visibility)
        btn_layout.addWidget(self._visibility_btn)

        self._lock_btn = QPushButton("Lock")
        self._lock_btn.setToolTip("Toggle layer lock")
        self._lock_btn.clicked.connect(self._on_toggle_lock)
        btn_layout.addWidget(self._lock_btn)

        self._duplicate_btn = QPushButton("Duplicate")
        self._duplicate_btn.setToolTip("Duplicate layer")
        self._duplicate_btn.clicked.connect(self.duplicate_active)
        btn_layout.addWidget(self._duplicate_btn)

        self._delete_btn = QPushButton("Delete")
        self._delete_btn.setToolTip("Delete layer")
        self._delete_btn.clicked.connect(self.delete_active)
        btn_layout.addWidget(self._delete_btn)
        layout.addLayout(btn_layout)

        self.setWidget(container)

        layer_manager.layer_added.connect(self._refresh)
        layer_manager.layer_removed.connect(self._refresh)
        layer_manager.layers_reordered.connect(self._refresh)
        layer_manager.layers_cleared.connect(self._refresh)
        layer_manager.active_layer_changed.connect(self._refresh)
        layer_manager.layer_renamed.connect(self._on_renamed)
        layer_manager.layer_visibility_changed.connect(self._refresh)
        layer_manager.layer_lock_changed.connect(self._refresh)

        self._refresh()

    # --- list rendering ---

    @property
    def list_widget(self) -> QListWidget:
        return self._list

    def displayed_ids(self) -> list[str]:
        """Layer ids as listed, topmost first."""
        return [
            self._list.item(row).data(Qt.ItemDataRole.UserRole)  # type: ignore[union-attr]
            for row in range(self._list.count())
        ]

    def _make_item(self, layer: Layer) -> QListWidgetItem:
        item = QListWidgetItem(layer.name)
        if not layer.visible:
            font = item.font()
            font.setItalic(True)
            item.setFont(font)
            item.setForeground(QColor(HIDDEN_LAYER_TEXT_COLOR))
        states = [s for s, on in (("hidden", not layer.visible), ("locked", layer.locked)) if on]
        if states:
            item.setToolTip(", ".join(states))
        item.setData(Qt.ItemDataRole.UserRole, layer.layer_id)
        thumb = QPixmap.fromImage(layer.pixel_source).scaled(
            _THUMBNAIL_SIZE,
            _THUMBNAIL_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        item.setIcon(QIcon(thumb))
        flags = item.flags() | Qt.ItemFlag.ItemIsDragEnabled
        if not layer.locked:
            flags |= Qt.ItemFlag.ItemIsEditable
        item.setFlags(flags)
        return item

    def _refresh(self, *_args: object) -> None:
        self._refreshing = True
        self._list.blockSignals(True)
        self._list.clear()
        for layer in reversed(self._layer_manager.layers):
            item = self._make_item(layer)
            self._list.addItem(item)
            if layer.layer_id == self._layer_manager.active_layer_id:
                self._list.setCurrentItem(item)
        self._list.blockSignals(False)
        self._refreshing = False
        has_active = self._layer_manager.active_layer is not None
        for btn in (self._visibility_btn, self._lock_btn, self._duplicate_btn, self._delete_btn):
            btn.setEnabled(has_active)

    def _set_item_text(self, item: QListWidgetItem, text: str) -> None:
        self._list.blockSignals(True)
        item.setText(text)
        self._list.blockSignals(False)

    # --- slots ---

    def _on_row_changed(self, row: int) -> None:
        item = self._list.item(row)
        if item is not None:
            layer_id = item.data(Qt.ItemDataRole.UserRole)
            if isinstance(layer_id, str):
                self._layer_manager.set_active(layer_id)

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        if self._refreshing:
            return
        layer_id = item.data(Qt.ItemDataRole.UserRole)
        if isinstance(layer_id, str) and not self.rename(layer_id, item.text()):
            layer = self._layer_manager.layer_by_id(layer_id)
            if layer is not None:
                self._set_item_text(item, layer.name)

    def _on_renamed(self, layer_id: str, name: str) -> None:
        for row in range(self._list.count()):
            item = self._list.item(row)
            if item is not None and item.data(Qt.ItemDataRole.UserRole) == layer_id:
                self._set_item_text(item, name)

    def _on_toggle_visibility(self) -> None:
        layer = self._layer_manager.active_layer
        if layer is not None:
            self.toggle_visibility(layer.layer_id)

    def _on_toggle_lock(self) -> None:
        layer = self._layer_manager.active_layer
        if layer is not None:
            self.toggle_lock(layer.layer_id)

    # --- actions ---

    def toggle_visibility(self, layer_id: str) -> None:
        layer = self._layer_manager.layer_by_id(layer_id)
        if layer is not None:
            self._layer_manager.set_visibility(layer_id, not layer.visible)

    def toggle_lock(self, layer_id: str) -> None:
        layer = self._layer_manager.layer_by_id(layer_id)
        if layer is not None:
            self._layer_manager.set_locked(layer_id, not layer.locked)

    def rename(self, layer_id: str, name: str) -> bool:
        """Rename a layer unless it is locked or *name* is blank."""
        layer = self._layer_manager.layer_by_id(layer_id)
        if layer is None or layer.locked or not name.strip():
            return False
        self._layer_manager.rename(layer_id, name)
        return True

    def duplicate_active(self) -> None:
        active_id = self._layer_manager.active_layer_id
        if active_id:
            self._layer_manager.duplicate(active_id)

    def delete_active(self) -> None:
        active_id = self._layer_manager.active_layer_id
        if active_id:
            self._layer_manager.remove(active_id)

    def reorder(self, dragged_id: object, target_id: object) -> None:
        if isinstance(dragged_id, str) and isinstance(target_id, str):
            self._layer_manager.reorder(dragged_id, target_id)
