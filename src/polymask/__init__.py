"""polymask: regular-polygon mask and border paths."""

from __future__ import annotations

from .modeling import (
    PolygonSpec,
    PolygonSpecError,
    Rect2D,
    Shape,
    build_polygon_path,
    classic_hexagon_path,
)

__all__ = [
    "__version__",
    "PolygonSpec",
    "PolygonSpecError",
    "Rect2D",
    "Shape",
    "build_polygon_path",
    "classic_hexagon_path",
]

__version__ = "0.1.0"
