"""Renderer — paints a session's layers and the active layer's resize handles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF, QSize
from PyQt6.QtGui import QBrush, QColor, QImage, QPainter, QPen

from canvascomposer.config.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    HANDLE_COLOR,
    HANDLE_SIZE,
    HANDLE_STROKE,
    HANDLE_STROKE_WIDTH,
)
from canvascomposer.core.geometry import handle_anchors
from canvascomposer.core.render_engine import Compositor

if TYPE_CHECKING:
    from canvascomposer.core.session import EditorSession


def paint_session(painter: QPainter, session: EditorSession) -> None:
    """Paint *session* in logical coordinates; the painter's transform maps to the device.

    Reads state only.  Handles are drawn for the active layer when it is
    visible and unlocked.
    """
    manager = session.layer_manager
    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
    for layer in manager.visible_layers:
        painter.drawImage(layer.rect, layer.pixel_source)

    active = manager.active_layer
    if active is None or not active.visible or active.locked:
        return

    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(QPen(QColor(HANDLE_STROKE), HANDLE_STROKE_WIDTH))
    painter.setBrush(QBrush(QColor(HANDLE_COLOR)))
    radius = HANDLE_SIZE / 2.0
    for anchor in handle_anchors(active).values():
        painter.drawEllipse(QPointF(anchor), radius, radius)
    painter.restore()


def render_session(session: EditorSession) -> QImage:
    """Render *session* at its logical size into a new transparent image."""
    size = session.canvas_size
    if size.isEmpty():
        size = QSize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
    image = Compositor.blank(size)
    painter = QPainter(image)
    paint_session(painter, session)
    painter.end()
    return image
