"""Mask and border layers built from polygon paths.

A ``PolygonView`` mirrors a masked view on screen: the mask layer fills the
polygon to clip the view's content, the optional border layer strokes the
same path, and the whole view is rotated around its center.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Sequence

import numpy as np
import pyvista as pv

from polymask.modeling._color import CLEAR, RGBA, ColorLike, normalize_color, set_mesh_color
from polymask.modeling._fill import triangulate_path
from polymask.modeling.drawing2d import Path2D, Rect2D, _require_vec2
from polymask.modeling.polygon import Shape, build_polygon_path, classic_hexagon_path
from polymask.modeling.transform import rotate_path, rotation_matrix

FillRule = Literal["nonzero", "evenodd"]


@dataclass(frozen=True)
class LayerTransform:
    """Rotation in radians around ``anchor`` (positive turns clockwise on screen)."""

    rotation: float = 0.0
    anchor: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor", _require_vec2(self.anchor, "anchor"))
        if not math.isfinite(self.rotation):
            raise ValueError("rotation must be finite.")
        object.__setattr__(self, "rotation", float(self.rotation))

    @property
    def is_identity(self) -> bool:
        return math.isclose(math.remainder(self.rotation, 2 * math.pi), 0.0, abs_tol=1e-12)

    @property
    def rotation_deg(self) -> float:
        return math.degrees(self.rotation)

    def matrix(self) -> np.ndarray:
        return rotation_matrix(self.rotation, self.anchor)


def _to_world(points: np.ndarray, flip_y: bool) -> np.ndarray:
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    y = -pts[:, 1] if flip_y else pts[:, 1]
    return np.column_stack([pts[:, 0], y, np.zeros(pts.shape[0])])


@dataclass(frozen=True)
class ShapeLayer:
    path: Path2D
    fill_color: RGBA = CLEAR
    stroke_color: RGBA = CLEAR
    line_width: float = 0.0
    fill_rule: FillRule = "nonzero"
    transform: LayerTransform = field(default_factory=LayerTransform)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fill_color", normalize_color(self.fill_color))
        object.__setattr__(self, "stroke_color", normalize_color(self.stroke_color))
        if not math.isfinite(self.line_width) or self.line_width < 0:
            raise ValueError("line_width must be non-negative.")
        if self.fill_rule not in ("nonzero", "evenodd"):
            raise ValueError(f"Unknown fill rule {self.fill_rule!r}.")

    def presented_path(self) -> Path2D:
        """The layer's path with its transform applied."""
        if self.transform.is_identity:
            return self.path
        return rotate_path(self.path, self.transform.rotation, self.transform.anchor)

    def sample(self, segments_per_circle: int = 64) -> np.ndarray:
        return self.presented_path().sample(segments_per_circle=segments_per_circle)

    def fill_polydata(self, segments_per_circle: int = 64, flip_y: bool = False) -> pv.PolyData:
        vertices, faces = triangulate_path(self.presented_path(), segments_per_circle)
        cells = np.hstack([np.array([3, *tri], dtype=np.int64) for tri in faces]) if faces.size else None
        poly = pv.PolyData(_to_world(vertices, flip_y), cells, deep=True)
        return set_mesh_color(poly, self.fill_color)

    def stroke_polydata(self, segments_per_circle: int = 64, flip_y: bool = False) -> pv.PolyData:
        pts = self.sample(segments_per_circle)
        poly = pv.lines_from_points(_to_world(pts, flip_y))
        return set_mesh_color(poly, self.stroke_color)


@dataclass(frozen=True)
class PolygonView:
    bounds: Rect2D
    mask: ShapeLayer
    border: ShapeLayer | None = None
    transform: LayerTransform = field(default_factory=LayerTransform)
    content_color: RGBA = (0.23, 0.51, 0.96, 1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "content_color", normalize_color(self.content_color))

    @property
    def layers(self) -> list[ShapeLayer]:
        return [layer for layer in (self.mask, self.border) if layer is not None]


def setup_polygon_view(
    bounds: Rect2D,
    shape: Shape = Shape.HEXAGON,
    radius: float = 5.0,
    rotation: float = 0.0,
    line_width: float = 5.0,
    color: ColorLike = "white",
    content_color: ColorLike = (0.23, 0.51, 0.96),
) -> PolygonView:
    """Mask ``bounds`` to ``shape`` and outline it with a border of ``line_width``."""
    path = build_polygon_path(bounds, shape.sides, stroke_width=line_width, corner_radius=radius)
    transform = LayerTransform(rotation=rotation, anchor=bounds.center)
    mask = ShapeLayer(
        path=path,
        fill_color=color,
        stroke_color=CLEAR,
        line_width=line_width,
        transform=transform,
    )
    border = ShapeLayer(
        path=path,
        fill_color=CLEAR,
        stroke_color=color,
        line_width=line_width,
        transform=transform,
    )
    return PolygonView(
        bounds=bounds,
        mask=mask,
        border=border,
        transform=transform,
        content_color=content_color,
    )


def configure_layer_for_hexagon(
    bounds: Rect2D,
    rotation: float = 0.0,
    content_color: ColorLike = (0.96, 0.56, 0.49),
) -> PolygonView:
    """Mask ``bounds`` with the classic stretched hexagon, without a border."""
    transform = LayerTransform(rotation=rotation, anchor=bounds.center)
    mask = ShapeLayer(
        path=classic_hexagon_path(bounds),
        fill_color="white",
        fill_rule="evenodd",
        transform=transform,
    )
    return PolygonView(bounds=bounds, mask=mask, transform=transform, content_color=content_color)


def demo_views(size: float = 120.0, spacing: float = 20.0) -> list[PolygonView]:
    """The sample screen: a hexagon image plus five bordered polygon views."""
    if size <= 0 or spacing < 0:
        raise ValueError("size must be positive and spacing non-negative.")

    def cell(column: int, row: int) -> Rect2D:
        step = size + spacing
        return Rect2D.from_bounds(spacing + column * step, spacing + row * step, size, size)

    return [
        configure_layer_for_hexagon(cell(0, 0), rotation=math.pi / 6),
        setup_polygon_view(cell(1, 0)),
        setup_polygon_view(cell(2, 0), shape=Shape.polygon(5), rotation=math.pi / 5),
        setup_polygon_view(cell(0, 1), shape=Shape.polygon(5)),
        setup_polygon_view(cell(1, 1), shape=Shape.TRIANGLE),
        setup_polygon_view(cell(2, 1), shape=Shape.TRIANGLE, rotation=math.pi / 6),
    ]


def canvas_size(views: Sequence[PolygonView], margin: float = 20.0) -> tuple[float, float]:
    if not views:
        return (margin * 2, margin * 2)
    right = max(view.bounds.bounds[2] for view in views)
    bottom = max(view.bounds.bounds[3] for view in views)
    return (right + margin, bottom + margin)


__all__ = [
    "FillRule",
    "LayerTransform",
    "PolygonView",
    "ShapeLayer",
    "canvas_size",
    "configure_layer_for_hexagon",
    "demo_views",
    "setup_polygon_view",
]
