"""Tests for handle anchors, hit-testing and fit_within."""

from collections.abc import Callable

import pytest
from PyQt6.QtCore import QPointF

from canvascomposer.core.geometry import (
    HANDLE_HITBOX_HALF,
    Handle,
    fit_within,
    handle_anchors,
    hit_handle,
    hit_rect,
)
from canvascomposer.core.layer import Layer

LayerFactory = Callable[..., Layer]


def test_handle_anchors(make_layer: LayerFactory) -> None:
    layer = make_layer(x=10, y=20, width=100, height=50)
    anchors = handle_anchors(layer)
    assert list(anchors) == [Handle.NW, Handle.NE, Handle.SW, Handle.SE]
    assert anchors[Handle.NW] == QPointF(10, 20)
    assert anchors[Handle.NE] == QPointF(110, 20)
    assert anchors[Handle.SW] == QPointF(10, 70)
    assert anchors[Handle.SE] == QPointF(110, 70)


def test_handle_edge_flags() -> None:
    assert Handle.NW.moves_top and Handle.NW.moves_left
    assert Handle.SE.moves_bottom and Handle.SE.moves_right
    assert not Handle.NE.moves_left
    assert not Handle.SW.moves_top


@pytest.mark.parametrize(
    ("point", "expected"),
    [
        (QPointF(10, 20), Handle.NW),
        (QPointF(110, 20), Handle.NE),
        (QPointF(10, 70), Handle.SW),
        (QPointF(110, 70), Handle.SE),
        (QPointF(60, 45), None),
    ],
)
def test_hit_handle(make_layer: LayerFactory, point: QPointF, expected: Handle | None) -> None:
    layer = make_layer(x=10, y=20, width=100, height=50)
    assert hit_handle(layer, point) is expected


def test_hit_handle_box_is_larger_than_drawn_handle(make_layer: LayerFactory) -> None:
    layer = make_layer(x=100, y=100, width=200, height=200)
    edge = 100 - HANDLE_HITBOX_HALF
    assert hit_handle(layer, QPointF(edge, edge)) is Handle.NW
    assert hit_handle(layer, QPointF(edge - 0.01, edge)) is None


def test_hit_handle_tie_prefers_enumeration_order(make_layer: LayerFactory) -> None:
    # degenerate tiny rectangle: every anchor box contains the centre
    layer = make_layer(x=0, y=0, width=2, height=2, natural=(2, 2))
    assert hit_handle(layer, QPointF(1, 1)) is Handle.NW


def test_hit_rect_is_inclusive(make_layer: LayerFactory) -> None:
    layer = make_layer(x=10, y=10, width=50, height=30)
    assert hit_rect(layer, QPointF(10, 10))
    assert hit_rect(layer, QPointF(60, 40))
    assert hit_rect(layer, QPointF(35, 25))
    assert not hit_rect(layer, QPointF(9.9, 25))
    assert not hit_rect(layer, QPointF(35, 40.1))


def test_fit_within_leaves_small_images() -> None:
    assert fit_within(300, 200, 1024, 1024) == (300.0, 200.0)


def test_fit_within_wide_image() -> None:
    w, h = fit_within(2000, 1000, 1024, 1024)
    assert w == pytest.approx(1024)
    assert h == pytest.approx(512)


def test_fit_within_tall_image_on_wide_canvas() -> None:
    w, h = fit_within(1000, 3000, 1344, 738)
    assert h == pytest.approx(738)
    assert w == pytest.approx(246)
