from __future__ import annotations

import os
from pathlib import Path

import pytest

from polymask.modeling.drawing2d import Rect2D

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_dir = tmp_path / "config"
    monkeypatch.setenv("POLYMASK_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def square_rect() -> Rect2D:
    return Rect2D.from_bounds(0.0, 0.0, 100.0, 100.0)


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT
