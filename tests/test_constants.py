"""Tests for application constants and configuration."""

from canvascomposer.config.constants import (
    APP_NAME,
    ASPECT_RATIO_PRESETS,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    HANDLE_HIT_SCALE,
    HANDLE_SIZE,
    MIN_LAYER_SIZE,
)
from canvascomposer.config.settings import AppSettings


def test_app_name() -> None:
    assert APP_NAME == "Canvas Composer"


def test_canvas_defaults_match_default_preset() -> None:
    expected = (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
    assert ASPECT_RATIO_PRESETS[DEFAULT_ASPECT_RATIO] == expected


def test_presets_are_positive() -> None:
    for key, (w, h) in ASPECT_RATIO_PRESETS.items():
        assert w > 0 and h > 0, key


def test_portrait_presets_mirror_landscape() -> None:
    assert ASPECT_RATIO_PRESETS["9:16"] == ASPECT_RATIO_PRESETS["16:9"][::-1]
    assert ASPECT_RATIO_PRESETS["3:4"] == ASPECT_RATIO_PRESETS["4:3"][::-1]


def test_handle_hit_box_exceeds_drawn_size() -> None:
    assert HANDLE_HIT_SCALE > 1
    assert HANDLE_SIZE * HANDLE_HIT_SCALE < MIN_LAYER_SIZE * 2


def test_settings_aspect_ratio(settings: AppSettings) -> None:
    assert settings.aspect_ratio() == DEFAULT_ASPECT_RATIO
    settings.set_aspect_ratio("16:9")
    assert settings.aspect_ratio() == "16:9"
    settings.set_aspect_ratio("7:5")
    assert settings.aspect_ratio() == DEFAULT_ASPECT_RATIO


def test_settings_import_dir(settings: AppSettings) -> None:
    assert settings.last_import_dir() == ""
    settings.set_last_import_dir("/tmp/pictures")
    assert settings.last_import_dir() == "/tmp/pictures"


def test_settings_window_geometry(settings: AppSettings) -> None:
    assert settings.window_geometry() is None
    settings.save_window_geometry(b"\x01\x02\x03")
    assert settings.window_geometry() == b"\x01\x02\x03"
