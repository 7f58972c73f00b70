from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR_ENV = "POLYMASK_CONFIG_DIR"
CONFIG_NAME = "polymask.cfg"
DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Defaults for the polymask CLI. Lengths are in pixels.",
    "stroke_width": 5.0,
    "corner_radius": 5.0,
    "segments_per_circle": 64,
    "color": "white",
}


@dataclass(frozen=True)
class RenderSettings:
    """Resolved defaults from polymask.cfg."""

    stroke_width: float
    corner_radius: float
    segments_per_circle: int
    color: str


def config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / ".polymask"


def config_file() -> Path:
    return config_dir() / CONFIG_NAME


def ensure_user_config() -> None:
    """Ensure ~/.polymask/polymask.cfg exists with sane defaults."""

    directory = config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    target = directory / CONFIG_NAME
    if target.exists():
        return

    try:
        target.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(config_file().read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _non_negative(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number < 0:
        return fallback
    return number


def get_render_settings() -> RenderSettings:
    """Return the configured defaults, falling back per key on invalid values."""

    raw = _load_user_config()
    segments = raw.get("segments_per_circle", DEFAULT_CONFIG["segments_per_circle"])
    if isinstance(segments, bool) or not isinstance(segments, int) or segments < 3:
        segments = DEFAULT_CONFIG["segments_per_circle"]
    color = raw.get("color", DEFAULT_CONFIG["color"])
    if not isinstance(color, str) or not color.strip():
        color = DEFAULT_CONFIG["color"]

    return RenderSettings(
        stroke_width=_non_negative(raw.get("stroke_width"), DEFAULT_CONFIG["stroke_width"]),
        corner_radius=_non_negative(raw.get("corner_radius"), DEFAULT_CONFIG["corner_radius"]),
        segments_per_circle=segments,
        color=color,
    )
