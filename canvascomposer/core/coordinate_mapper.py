"""CoordinateMapper — display-space pointer positions to logical canvas space."""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import QPointF, QSizeF
from PyQt6.QtGui import QMouseEvent, QTouchEvent


class CoordinateMapper:
    """Maps between the displayed surface and the canvas's logical resolution.

    ``logical = raw * (logical_size / display_size)`` on each axis, where *raw*
    is relative to the displayed surface's top-left corner.  Event helpers
    subtract *origin*, the surface's top-left in widget coordinates.  A display
    size of zero (widget not laid out yet) is treated as a 1:1 mapping.
    """

    def __init__(
        self,
        logical_size: QSizeF,
        display_size: QSizeF,
        origin: QPointF | None = None,
    ) -> None:
        self._logical = QSizeF(logical_size)
        self._display = QSizeF(display_size)
        self._origin = QPointF(origin) if origin is not None else QPointF()

    @property
    def scale_x(self) -> float:
        if self._display.width() <= 0:
            return 1.0
        return self._logical.width() / self._display.width()

    @property
    def scale_y(self) -> float:
        if self._display.height() <= 0:
            return 1.0
        return self._logical.height() / self._display.height()

    def to_logical(self, raw: QPointF) -> QPointF:
        return QPointF(raw.x() * self.scale_x, raw.y() * self.scale_y)

    def to_display(self, logical: QPointF) -> QPointF:
        return QPointF(logical.x() / self.scale_x, logical.y() / self.scale_y)

    def from_mouse_event(self, event: QMouseEvent) -> QPointF:
        return self.to_logical(event.position() - self._origin)

    def from_touch_points(self, positions: Sequence[QPointF]) -> QPointF | None:
        """Map widget-relative contact positions; anything but one contact gives None."""
        if len(positions) != 1:
            return None
        return self.to_logical(positions[0] - self._origin)

    def from_touch_event(self, event: QTouchEvent) -> QPointF | None:
        """Map a single-contact touch event; multi-touch gestures give None."""
        return self.from_touch_points([point.position() for point in event.points()])
