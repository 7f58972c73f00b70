"""Geometry: path types, the polygon path builder, and affine transforms."""

from __future__ import annotations

from .drawing2d import Arc2D, Line2D, Path2D, Rect2D, Segment2D
from .polygon import (
    InvalidDimensionsError,
    InvalidRadiusError,
    InvalidSidesError,
    InvalidStrokeError,
    PolygonSpec,
    PolygonSpecError,
    Shape,
    build_polygon_path,
    build_polygon_path_from_spec,
    classic_hexagon_path,
)
from .transform import rotate_path, rotation_matrix, scale_matrix, transform_path

__all__ = [
    "Arc2D",
    "Line2D",
    "Path2D",
    "Rect2D",
    "Segment2D",
    "PolygonSpec",
    "PolygonSpecError",
    "InvalidSidesError",
    "InvalidDimensionsError",
    "InvalidStrokeError",
    "InvalidRadiusError",
    "Shape",
    "build_polygon_path",
    "build_polygon_path_from_spec",
    "classic_hexagon_path",
    "rotate_path",
    "rotation_matrix",
    "scale_matrix",
    "transform_path",
]
