"""Shared pytest fixtures."""

import os
from collections.abc import Callable
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QColor, QImage
from PyQt6.QtWidgets import QApplication

from canvascomposer.config.settings import AppSettings
from canvascomposer.core.layer import Layer
from canvascomposer.core.session import EditorSession

ImageFactory = Callable[..., QImage]
LayerFactory = Callable[..., Layer]


@pytest.fixture()
def make_image(qapp: QApplication) -> ImageFactory:
    """Return a factory for solid-colour ARGB images."""

    def _make(width: int = 100, height: int = 100, color: str = "red") -> QImage:
        image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(QColor(color))
        return image

    return _make


@pytest.fixture()
def make_layer(make_image: ImageFactory) -> LayerFactory:
    """Return a factory for layers backed by solid-colour images."""

    def _make(
        name: str = "layer.png",
        x: float = 0.0,
        y: float = 0.0,
        width: float = 100.0,
        height: float = 100.0,
        color: str = "red",
        natural: tuple[int, int] | None = None,
    ) -> Layer:
        nw, nh = natural if natural is not None else (int(width), int(height))
        return Layer(
            name=name,
            pixel_source=make_image(nw, nh, color),
            x=x,
            y=y,
            width=width,
            height=height,
        )

    return _make


@pytest.fixture()
def session(qapp: QApplication) -> EditorSession:
    """Create a bare EditorSession with a 1024x1024 canvas."""
    s = EditorSession()
    s.set_canvas_size(1024, 1024)
    return s


@pytest.fixture()
def settings(tmp_path: Path) -> AppSettings:
    """AppSettings backed by a throwaway INI file."""
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qs)
