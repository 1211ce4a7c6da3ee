"""Layer data model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QImage


@dataclass(eq=False)
class Layer:
    """One placed image on the canvas.

    ``pixel_source`` is the decoded bitmap; it is shared, never modified in
    place.  ``x``, ``y``, ``width`` and ``height`` are in the canvas's logical
    coordinate space and are independent of the bitmap's natural size.
    """

    name: str
    pixel_source: QImage
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    visible: bool = True
    locked: bool = False
    layer_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            self.width = float(self.natural_width)
            self.height = float(self.natural_height)

    @property
    def natural_width(self) -> int:
        return self.pixel_source.width()

    @property
    def natural_height(self) -> int:
        return self.pixel_source.height()

    @property
    def aspect_ratio(self) -> float:
        """Natural width / height of the source bitmap."""
        return self.natural_width / self.natural_height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def rect(self) -> QRectF:
        return QRectF(self.x, self.y, self.width, self.height)

    def clone(self, *, offset: float = 0.0) -> Layer:
        """Return a "<name> copy" layer with a fresh id, sharing the same bitmap."""
        return Layer(
            name=f"{self.name} copy",
            pixel_source=self.pixel_source,
            x=self.x + offset,
            y=self.y + offset,
            width=self.width,
            height=self.height,
            visible=self.visible,
            locked=self.locked,
        )
