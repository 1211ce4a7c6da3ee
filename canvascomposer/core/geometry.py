"""Geometry helpers — resize-handle anchors and hit-testing in logical space."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF

from canvascomposer.config.constants import HANDLE_HIT_SCALE, HANDLE_SIZE

if TYPE_CHECKING:
    from canvascomposer.core.layer import Layer

HANDLE_HITBOX = HANDLE_SIZE * HANDLE_HIT_SCALE
HANDLE_HITBOX_HALF = HANDLE_HITBOX / 2.0


class Handle(Enum):
    """Corner resize handles; declaration order is the hit-test priority."""

    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"

    @property
    def moves_top(self) -> bool:
        return "n" in self.value

    @property
    def moves_bottom(self) -> bool:
        return "s" in self.value

    @property
    def moves_left(self) -> bool:
        return "w" in self.value

    @property
    def moves_right(self) -> bool:
        return "e" in self.value


def handle_anchors(layer: Layer) -> dict[Handle, QPointF]:
    """Return the four corner points of *layer*'s rectangle."""
    return {
        Handle.NW: QPointF(layer.x, layer.y),
        Handle.NE: QPointF(layer.right, layer.y),
        Handle.SW: QPointF(layer.x, layer.bottom),
        Handle.SE: QPointF(layer.right, layer.bottom),
    }


def hit_handle(layer: Layer, point: QPointF) -> Handle | None:
    """Return the handle whose hit box contains *point*, or None.

    The hit box is larger than the drawn handle to make touch acquisition
    easier.  Edges are inclusive.
    """
    for handle, anchor in handle_anchors(layer).items():
        if (
            abs(point.x() - anchor.x()) <= HANDLE_HITBOX_HALF
            and abs(point.y() - anchor.y()) <= HANDLE_HITBOX_HALF
        ):
            return handle
    return None


def hit_rect(layer: Layer, point: QPointF) -> bool:
    """Inclusive point-in-rectangle test against the layer bounds."""
    return layer.x <= point.x() <= layer.right and layer.y <= point.y() <= layer.bottom


def fit_within(
    width: float, height: float, max_width: float, max_height: float
) -> tuple[float, float]:
    """Scale (*width*, *height*) down to fit the bounds, keeping the aspect ratio.

    Sizes that already fit are returned unchanged; this never scales up.
    """
    if width <= max_width and height <= max_height:
        return float(width), float(height)
    aspect = width / height
    if max_width / max_height > aspect:
        # bounds are wider than the image: height limits
        return max_height * aspect, float(max_height)
    return float(max_width), max_width / aspect
