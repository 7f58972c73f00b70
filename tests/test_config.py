from __future__ import annotations

import json

from polymask._config import DEFAULT_CONFIG, config_file, get_render_settings


def test_defaults_written_on_first_use(isolated_config):
    settings = get_render_settings()
    assert config_file() == isolated_config / "polymask.cfg"
    assert config_file().exists()
    assert json.loads(config_file().read_text())["stroke_width"] == DEFAULT_CONFIG["stroke_width"]
    assert settings.stroke_width == 5.0
    assert settings.corner_radius == 5.0
    assert settings.segments_per_circle == 64
    assert settings.color == "white"


def test_user_values_are_used(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text(
        json.dumps({"stroke_width": 2, "corner_radius": 0, "segments_per_circle": 16, "color": "#00ff00"})
    )
    settings = get_render_settings()
    assert settings.stroke_width == 2.0
    assert settings.corner_radius == 0.0
    assert settings.segments_per_circle == 16
    assert settings.color == "#00ff00"


def test_invalid_values_fall_back_per_key(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text(json.dumps({"stroke_width": -3, "corner_radius": "big", "segments_per_circle": 2}))
    settings = get_render_settings()
    assert settings.stroke_width == 5.0
    assert settings.corner_radius == 5.0
    assert settings.segments_per_circle == 64


def test_unreadable_config_uses_defaults(isolated_config):
    isolated_config.mkdir(parents=True)
    config_file().write_text("{not json")
    settings = get_render_settings()
    assert settings.stroke_width == 5.0
    assert settings.color == "white"
