"""InteractionController — click-select, drag-move and corner resize of layers."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF, Qt

from canvascomposer.config.constants import MIN_LAYER_SIZE
from canvascomposer.core.geometry import Handle, handle_anchors, hit_handle, hit_rect

if TYPE_CHECKING:
    from canvascomposer.core.layer import Layer
    from canvascomposer.core.session import EditorSession

log = logging.getLogger(__name__)

# Corner that stays fixed while dragging each handle
_PINNED_CORNER: dict[Handle, Handle] = {
    Handle.NW: Handle.SE,
    Handle.NE: Handle.SW,
    Handle.SW: Handle.NE,
    Handle.SE: Handle.NW,
}

_RESIZE_CURSORS: dict[Handle, Qt.CursorShape] = {
    Handle.NW: Qt.CursorShape.SizeFDiagCursor,
    Handle.SE: Qt.CursorShape.SizeFDiagCursor,
    Handle.NE: Qt.CursorShape.SizeBDiagCursor,
    Handle.SW: Qt.CursorShape.SizeBDiagCursor,
}


class InteractionState(Enum):
    IDLE = auto()
    DRAGGING = auto()
    RESIZING = auto()


class InteractionController:
    """State machine turning logical pointer events into layer mutations.

    Points passed in must already be in logical canvas space (see
    :class:`~canvascomposer.core.coordinate_mapper.CoordinateMapper`).  Each
    handler returns ``True`` when the session changed and needs a repaint.
    Gesture state is private to the controller and only changes in
    :meth:`pointer_down`, :meth:`pointer_move`, :meth:`pointer_up` and
    :meth:`cancel`.
    """

    def __init__(self, session: EditorSession) -> None:
        self._session = session
        self._state: InteractionState = InteractionState.IDLE
        self._layer_id: str = ""

        # Drag state
        self._drag_offset: QPointF = QPointF()

        # Resize state
        self._handle: Handle | None = None
        self._anchor: QPointF = QPointF()

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def active_handle(self) -> Handle | None:
        return self._handle

    @property
    def is_active_operation(self) -> bool:
        return self._state is not InteractionState.IDLE

    # --- hit-testing ---

    def layer_at(self, point: QPointF) -> Layer | None:
        """Return the topmost visible layer containing *point*."""
        for layer in reversed(self._session.layer_manager.layers):
            if layer.visible and hit_rect(layer, point):
                return layer
        return None

    def _resizable_active_layer(self) -> Layer | None:
        layer = self._session.layer_manager.active_layer
        if layer is None or not layer.visible or layer.locked:
            return None
        return layer

    # --- pointer events ---

    def pointer_down(self, point: QPointF) -> bool:
        if self._state is not InteractionState.IDLE:
            self.cancel()
        manager = self._session.layer_manager

        active = self._resizable_active_layer()
        if active is not None:
            handle = hit_handle(active, point)
            if handle is not None:
                self._state = InteractionState.RESIZING
                self._layer_id = active.layer_id
                self._handle = handle
                self._anchor = handle_anchors(active)[_PINNED_CORNER[handle]]
                log.debug("Resize %s from handle %s", active.layer_id, handle.value)
                return True

        layer = self.layer_at(point)
        if layer is None:
            had_selection = manager.active_layer is not None
            manager.clear_active()
            return had_selection

        manager.set_active(layer.layer_id)
        if layer.locked:
            # selection only; locked layers never move
            return True
        manager.bring_to_front(layer.layer_id)
        self._state = InteractionState.DRAGGING
        self._layer_id = layer.layer_id
        self._drag_offset = QPointF(point.x() - layer.x, point.y() - layer.y)
        log.debug("Drag %s", layer.layer_id)
        return True

    def pointer_move(self, point: QPointF) -> bool:
        if self._state is InteractionState.IDLE:
            return False
        layer = self._session.layer_manager.layer_by_id(self._layer_id)
        if layer is None:
            # layer deleted mid-gesture
            self.cancel()
            return False
        if layer.locked:
            return False

        if self._state is InteractionState.DRAGGING:
            layer.x = point.x() - self._drag_offset.x()
            layer.y = point.y() - self._drag_offset.y()
            return True
        return self._resize(layer, point)

    def pointer_up(self) -> bool:
        was_active = self.is_active_operation
        self.cancel()
        return was_active

    def cancel(self) -> None:
        """Force the controller back to idle, e.g. when the pointer leaves the surface."""
        self._state = InteractionState.IDLE
        self._layer_id = ""
        self._handle = None
        self._drag_offset = QPointF()
        self._anchor = QPointF()

    # --- resize ---

    def _resize(self, layer: Layer, point: QPointF) -> bool:
        """Aspect-locked resize against the pinned opposite corner.

        Returns False (and leaves the layer untouched) when the new size would
        not exceed ``MIN_LAYER_SIZE`` on both axes.
        """
        handle = self._handle
        if handle is None:
            return False
        aspect = layer.aspect_ratio
        anchor = self._anchor
        new_width = layer.width
        new_height = layer.height
        width_changed = False

        if handle.moves_right:
            new_width = point.x() - anchor.x()
            width_changed = True
        elif handle.moves_left:
            new_width = anchor.x() - point.x()
            width_changed = True

        if handle.moves_bottom:
            new_height = point.y() - anchor.y()
        elif handle.moves_top:
            new_height = anchor.y() - point.y()
        if not width_changed:
            new_width = new_height * aspect

        if width_changed:
            new_height = new_width / aspect

        if new_width <= MIN_LAYER_SIZE or new_height <= MIN_LAYER_SIZE:
            return False

        layer.width = new_width
        layer.height = new_height
        layer.x = anchor.x() - new_width if handle.moves_left else anchor.x()
        layer.y = anchor.y() - new_height if handle.moves_top else anchor.y()
        return True

    # --- cursor feedback ---

    def cursor_at(self, point: QPointF) -> Qt.CursorShape:
        """Cursor hint for a hover at *point*."""
        if self._state is InteractionState.DRAGGING:
            return Qt.CursorShape.ClosedHandCursor
        if self._state is InteractionState.RESIZING and self._handle is not None:
            return _RESIZE_CURSORS[self._handle]

        active = self._session.layer_manager.active_layer
        if active is not None and active.locked:
            return Qt.CursorShape.ForbiddenCursor
        if active is not None and active.visible:
            handle = hit_handle(active, point)
            if handle is not None:
                return _RESIZE_CURSORS[handle]

        layer = self.layer_at(point)
        if layer is None:
            return Qt.CursorShape.ArrowCursor
        if layer.locked:
            return Qt.CursorShape.ForbiddenCursor
        return Qt.CursorShape.OpenHandCursor
