"""Tests for EditorSession and aspect-ratio resolution."""

from collections.abc import Callable
from pathlib import Path

import pytest
from PyQt6.QtCore import QSize
from PyQt6.QtGui import QImage
from PyQt6.QtWidgets import QApplication
from pytestqt.qtbot import QtBot

from canvascomposer.config.constants import BATCH_STAGGER
from canvascomposer.core.errors import DecodeError
from canvascomposer.core.render_engine import Compositor
from canvascomposer.core.session import EditorSession, resolve_aspect_ratio
from canvascomposer.io.importer import DecodeResult, ImageSource

ImageFactory = Callable[..., QImage]


def _png_source(image: QImage, name: str = "img.png") -> ImageSource:
    return ImageSource(name=name, data=Compositor.encode_png(image))


@pytest.mark.parametrize(
    ("choice", "expected"),
    [
        ("1:1", QSize(1024, 1024)),
        ("16:9", QSize(1344, 738)),
        ("9:16", QSize(738, 1344)),
        ("4:3", QSize(1024, 768)),
        ("3:4", QSize(768, 1024)),
        ("16:9 (1344x738)", QSize(1344, 738)),
        ("Custom (640x480)", QSize(640, 480)),
        ("21:9", QSize(1024, 1024)),
    ],
)
def test_resolve_aspect_ratio(choice: str, expected: QSize) -> None:
    assert resolve_aspect_ratio(choice) == expected


def test_new_session_has_no_canvas_size(qapp: QApplication) -> None:
    s = EditorSession()
    assert not s.has_canvas_size
    assert s.layer_manager.count == 0


def test_set_canvas_size_rejects_non_positive(session: EditorSession) -> None:
    with pytest.raises(ValueError):
        session.set_canvas_size(0, 100)
    assert session.canvas_size == QSize(1024, 1024)


def test_set_aspect_ratio_emits(qtbot: QtBot, session: EditorSession) -> None:
    with qtbot.waitSignal(session.canvas_size_changed) as blocker:
        size = session.set_aspect_ratio("16:9")
    assert size == QSize(1344, 738)
    assert blocker.args == [QSize(1344, 738)]


def test_first_image_applies_default_size(qapp: QApplication, make_image: ImageFactory) -> None:
    s = EditorSession()
    s.add_images([DecodeResult(source=ImageSource("a.png", b""), image=make_image(50, 50))])
    assert s.canvas_size == QSize(1024, 1024)


def test_large_image_fitted_and_centred(session: EditorSession, make_image: ImageFactory) -> None:
    [layer] = session.add_images(
        [DecodeResult(source=ImageSource("wide.png", b""), image=make_image(2000, 1000))]
    )
    assert layer.width == pytest.approx(1024)
    assert layer.height == pytest.approx(512)
    assert layer.x == pytest.approx(0)
    assert layer.y == pytest.approx(256)
    assert layer.right <= 1024 and layer.bottom <= 1024


def test_small_image_keeps_natural_size(session: EditorSession, make_image: ImageFactory) -> None:
    [layer] = session.add_images(
        [DecodeResult(source=ImageSource("small.png", b""), image=make_image(200, 100))]
    )
    assert (layer.width, layer.height) == (200, 100)
    assert (layer.x, layer.y) == (412, 462)


def test_batch_is_staggered_and_last_active(
    session: EditorSession, make_image: ImageFactory
) -> None:
    results = [
        DecodeResult(source=ImageSource(f"{i}.png", b""), image=make_image(100, 100))
        for i in range(3)
    ]
    layers = session.add_images(results)
    assert [layer.name for layer in session.layer_manager.layers] == ["0.png", "1.png", "2.png"]
    for i, layer in enumerate(layers):
        assert layer.x == pytest.approx(462 + i * BATCH_STAGGER)
        assert layer.y == pytest.approx(462 + i * BATCH_STAGGER)
    assert session.layer_manager.active_layer is layers[-1]


def test_failed_decodes_are_skipped(
    qtbot: QtBot, session: EditorSession, make_image: ImageFactory
) -> None:
    bad = ImageSource("bad.png", b"junk")
    results = [
        DecodeResult(source=bad, error=DecodeError("bad.png", "corrupt")),
        DecodeResult(source=ImageSource("good.png", b""), image=make_image()),
    ]
    with qtbot.waitSignal(session.layers_batch_added) as blocker:
        layers = session.add_images(results)
    assert [layer.name for layer in layers] == ["good.png"]
    assert len(blocker.args[0]) == 1
    assert session.layer_manager.count == 1


def test_all_failed_adds_nothing(session: EditorSession) -> None:
    results = [DecodeResult(source=ImageSource("x", b""), error=DecodeError("x", "corrupt"))]
    assert session.add_images(results) == []
    assert session.layer_manager.count == 0


def test_add_sources_decodes_files(session: EditorSession, make_image: ImageFactory) -> None:
    sources = [
        _png_source(make_image(64, 32), "first.png"),
        ImageSource("broken.png", b"not an image"),
        _png_source(make_image(10, 10), "second.png"),
    ]
    results = session.add_sources(sources)
    assert [r.ok for r in results] == [True, False, True]
    assert [layer.name for layer in session.layer_manager.layers] == ["first.png", "second.png"]


def test_add_generated_image(session: EditorSession, make_image: ImageFactory) -> None:
    layer = session.add_generated_image(make_image(512, 512))
    assert layer.name == "Generated Image"
    assert session.layer_manager.active_layer is layer
    assert (layer.x, layer.y) == (256, 256)


def test_clear_resets_layers_and_size(session: EditorSession, make_image: ImageFactory) -> None:
    session.add_generated_image(make_image())
    session.clear()
    assert session.layer_manager.count == 0
    assert not session.has_canvas_size
    assert session.layer_manager.active_layer is None


def test_sessions_are_independent(qapp: QApplication, make_image: ImageFactory) -> None:
    first, second = EditorSession(), EditorSession()
    first.set_aspect_ratio("16:9")
    first.add_generated_image(make_image())
    assert second.layer_manager.count == 0
    assert not second.has_canvas_size


def test_add_paths_skips_unreadable_files(
    session: EditorSession, make_image: ImageFactory, tmp_path: Path
) -> None:
    good = tmp_path / "good.png"
    make_image(40, 40).save(str(good))
    results = session.add_paths([good, tmp_path / "vanished.png"])
    assert [r.ok for r in results] == [True, False]
    assert [layer.name for layer in session.layer_manager.layers] == ["good.png"]
