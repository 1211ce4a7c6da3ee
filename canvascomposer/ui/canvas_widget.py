"""CanvasWidget — displays a session and routes mouse/touch input to the controller."""

from __future__ import annotations

from PyQt6.QtCore import QEvent, QPointF, QRectF, QSize, QSizeF, Qt
from PyQt6.QtGui import (
    QColor,
    QCursor,
    QFont,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPixmap,
    QTouchEvent,
)
from PyQt6.QtWidgets import QWidget

from canvascomposer.config.constants import (
    CANVAS_BACKGROUND_COLOR,
    CHECKERBOARD_CELL_SIZE,
    CHECKERBOARD_COLOR_A,
    CHECKERBOARD_COLOR_B,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    EMPTY_CANVAS_TEXT,
    EMPTY_CANVAS_TEXT_COLOR,
    MAX_CANVAS_DISPLAY_WIDTH,
)
from canvascomposer.core.coordinate_mapper import CoordinateMapper
from canvascomposer.core.renderer import paint_session
from canvascomposer.core.session import EditorSession
from canvascomposer.tools.interaction_controller import InteractionController

_TOUCH_EVENTS = {
    QEvent.Type.TouchBegin,
    QEvent.Type.TouchUpdate,
    QEvent.Type.TouchEnd,
    QEvent.Type.TouchCancel,
}


class CanvasWidget(QWidget):
    """Shows the logical canvas scaled to fit, never wider than
    ``MAX_CANVAS_DISPLAY_WIDTH``, and centred in the widget.
    """

    def __init__(self, session: EditorSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._controller = InteractionController(session)
        self._checkerboard_tile: QPixmap | None = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)

        manager = session.layer_manager
        manager.layer_added.connect(self._repaint)
        manager.layer_removed.connect(self._repaint)
        manager.layers_reordered.connect(self._repaint)
        manager.layers_cleared.connect(self._on_cleared)
        manager.active_layer_changed.connect(self._repaint)
        manager.layer_visibility_changed.connect(self._repaint)
        manager.layer_lock_changed.connect(self._repaint)
        session.canvas_size_changed.connect(self._repaint)

    # --- accessors ---

    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def controller(self) -> InteractionController:
        return self._controller

    def logical_size(self) -> QSize:
        size = self._session.canvas_size
        if size.isEmpty():
            return QSize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
        return size

    def surface_rect(self) -> QRectF:
        """Where the canvas is displayed, in widget coordinates."""
        logical = self.logical_size()
        avail_w = min(float(self.width()), float(MAX_CANVAS_DISPLAY_WIDTH))
        avail_h = float(self.height())
        if avail_w <= 0 or avail_h <= 0:
            return QRectF()
        scale = min(avail_w / logical.width(), avail_h / logical.height())
        w = logical.width() * scale
        h = logical.height() * scale
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def mapper(self) -> CoordinateMapper:
        surface = self.surface_rect()
        return CoordinateMapper(QSizeF(self.logical_size()), surface.size(), surface.topLeft())

    def sizeHint(self) -> QSize:
        logical = self.logical_size()
        width = MAX_CANVAS_DISPLAY_WIDTH
        return QSize(width, int(width * logical.height() / logical.width()))

    # --- internal ---

    def _repaint(self, *_args: object) -> None:
        self.update()

    def _on_cleared(self) -> None:
        self._controller.cancel()
        self.update()

    # --- mouse events ---

    def mousePressEvent(self, event: QMouseEvent | None) -> None:
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        if self._controller.pointer_down(self.mapper().from_mouse_event(event)):
            self.update()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent | None) -> None:
        if event is None:
            return
        pos = self.mapper().from_mouse_event(event)
        if self._controller.pointer_move(pos):
            self.update()
        self.setCursor(QCursor(self._controller.cursor_at(pos)))

    def mouseReleaseEvent(self, event: QMouseEvent | None) -> None:
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        self._controller.pointer_up()
        self.unsetCursor()

    def leaveEvent(self, event: QEvent | None) -> None:
        # a gesture must not outlive the pointer leaving the surface
        self._controller.cancel()
        super().leaveEvent(event)

    # --- touch events ---

    def event(self, event: QEvent | None) -> bool:
        if event is not None and event.type() in _TOUCH_EVENTS:
            self._touch_event(event)  # type: ignore[arg-type]
            return True
        return super().event(event)

    def _touch_event(self, event: QTouchEvent) -> None:
        positions = [point.position() for point in event.points()]
        if self.touch(event.type(), positions):
            event.accept()
        else:
            # multi-touch is not supported
            event.ignore()

    def touch(self, kind: QEvent.Type, positions: list[QPointF]) -> bool:
        """Route one touch event given its widget-relative contact positions.

        Returns False for multi-touch, which is left to the platform.
        """
        if kind in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self._controller.pointer_up()
            return True
        pos = self.mapper().from_touch_points(positions)
        if pos is None:
            return False
        if kind == QEvent.Type.TouchBegin:
            changed = self._controller.pointer_down(pos)
        else:
            changed = self._controller.pointer_move(pos)
        if changed:
            self.update()
        return True

    # --- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:
        if event is None:
            return
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            manager = self._session.layer_manager
            active_id = manager.active_layer_id
            if active_id:
                self._controller.cancel()
                manager.remove(active_id)
                event.accept()
                return
        super().keyPressEvent(event)

    # --- painting ---

    def _checkerboard(self) -> QPixmap:
        if self._checkerboard_tile is None:
            cell = CHECKERBOARD_CELL_SIZE
            tile = QPixmap(cell * 2, cell * 2)
            tile.fill(QColor(CHECKERBOARD_COLOR_A))
            p = QPainter(tile)
            p.fillRect(0, 0, cell, cell, QColor(CHECKERBOARD_COLOR_B))
            p.fillRect(cell, cell, cell, cell, QColor(CHECKERBOARD_COLOR_B))
            p.end()
            self._checkerboard_tile = tile
        return self._checkerboard_tile

    def paintEvent(self, event: QPaintEvent | None) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(CANVAS_BACKGROUND_COLOR))
        surface = self.surface_rect()
        if surface.isEmpty():
            painter.end()
            return
        painter.drawTiledPixmap(surface, self._checkerboard())

        if self._session.layer_manager.count == 0:
            painter.setPen(QColor(EMPTY_CANVAS_TEXT_COLOR))
            font = QFont()
            font.setPointSize(14)
            painter.setFont(font)
            painter.drawText(surface, Qt.AlignmentFlag.AlignCenter, EMPTY_CANVAS_TEXT)
            painter.end()
            return

        logical = self.logical_size()
        painter.setClipRect(surface)
        painter.translate(surface.topLeft())
        painter.scale(surface.width() / logical.width(), surface.height() / logical.height())
        paint_session(painter, self._session)
        painter.end()

    def display_point(self, logical: QPointF) -> QPointF:
        """Widget coordinates of a logical canvas point."""
        return self.mapper().to_display(logical) + self.surface_rect().topLeft()
