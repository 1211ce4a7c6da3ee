"""Compositor — flatten visible layers and normalize images to a target size."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QBuffer, QByteArray, QIODevice, QRectF, QSize, QSizeF, Qt
from PyQt6.QtGui import QImage, QPainter

from canvascomposer.core.errors import EmptyCompositionError

if TYPE_CHECKING:
    from canvascomposer.core.layer_manager import LayerManager


class Compositor:
    """Produces the exact-size bitmaps handed to the generation service.

    All output surfaces are ARGB32 premultiplied and start fully transparent,
    so uncovered areas stay transparent when encoded as PNG.
    """

    @staticmethod
    def blank(size: QSize) -> QImage:
        """Return a fully transparent image of *size*."""
        image = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)
        return image

    def flatten(self, layer_manager: LayerManager, canvas_size: QSize) -> QImage:
        """Paint the visible layers, bottom to top, onto a canvas of *canvas_size*.

        Locked layers are painted; hidden ones are skipped.  Raises
        :class:`EmptyCompositionError` if no layer is visible.
        """
        visible = layer_manager.visible_layers
        if not visible:
            raise EmptyCompositionError("no visible layers to composite")
        if canvas_size.isEmpty():
            raise ValueError("canvas size is not set")

        image = self.blank(canvas_size)
        painter = QPainter(image)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        for layer in visible:
            painter.drawImage(layer.rect, layer.pixel_source)
        painter.end()
        return image

    @staticmethod
    def normalize_placement(natural: QSizeF, target: QSizeF) -> QRectF:
        """Rectangle at which an image of *natural* size is drawn by :meth:`normalize`.

        The image is scaled down (never up) to fit *target*, keeping its
        aspect ratio, and centred.
        """
        scale = min(
            1.0,
            target.width() / natural.width(),
            target.height() / natural.height(),
        )
        draw_w = natural.width() * scale
        draw_h = natural.height() * scale
        return QRectF(
            (target.width() - draw_w) / 2,
            (target.height() - draw_h) / 2,
            draw_w,
            draw_h,
        )

    def normalize(self, source: QImage, target_size: QSize) -> QImage:
        """Centre *source* on a transparent canvas of *target_size*."""
        if source.isNull():
            raise ValueError("cannot normalize a null image")
        image = self.blank(target_size)
        rect = self.normalize_placement(QSizeF(source.size()), QSizeF(target_size))
        painter = QPainter(image)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.drawImage(rect, source)
        painter.end()
        return image

    @staticmethod
    def encode_png(image: QImage) -> bytes:
        """Encode *image* losslessly as PNG, preserving alpha."""
        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        image.save(buffer, "PNG")
        buffer.close()
        return bytes(data)
