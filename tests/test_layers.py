from __future__ import annotations

import math

import numpy as np
import pytest

from polymask.layers import (
    LayerTransform,
    ShapeLayer,
    canvas_size,
    configure_layer_for_hexagon,
    demo_views,
    setup_polygon_view,
)
from polymask.modeling._color import CLEAR, get_mesh_color, normalize_color, to_svg_color
from polymask.modeling._fill import signed_area, triangulate_path
from polymask.modeling.drawing2d import Rect2D
from polymask.modeling.polygon import Shape, build_polygon_path

WHITE = (1.0, 1.0, 1.0, 1.0)


def test_normalize_color_variants():
    assert normalize_color("white") == WHITE
    assert normalize_color("#ff0000") == (1.0, 0.0, 0.0, 1.0)
    assert normalize_color((255, 0, 0)) == (1.0, 0.0, 0.0, 1.0)
    assert normalize_color((0.0, 0.5, 1.0, 0.25)) == (0.0, 0.5, 1.0, 0.25)
    assert normalize_color("clear") == CLEAR
    assert normalize_color(None) == CLEAR


def test_normalize_color_rejects_bad_length():
    with pytest.raises(ValueError):
        normalize_color((1.0, 0.0))


def test_svg_color():
    assert to_svg_color(WHITE) == ("#ffffff", 1.0)
    assert to_svg_color(CLEAR) == ("none", 0.0)


def test_setup_polygon_view_mask_and_border(square_rect):
    view = setup_polygon_view(square_rect)
    assert view.mask.fill_color == WHITE
    assert view.mask.stroke_color == CLEAR
    assert view.border is not None
    assert view.border.fill_color == CLEAR
    assert view.border.stroke_color == WHITE
    assert view.border.line_width == 5.0
    assert view.mask.path is view.border.path
    assert len(view.mask.path.lines) == 6
    assert len(view.mask.path.arcs) == 6
    assert view.mask.path.line_join == "round"
    assert np.allclose(view.transform.anchor, [50.0, 50.0])
    assert view.layers == [view.mask, view.border]


def test_setup_polygon_view_rotation_applies_to_presented_path(square_rect):
    view = setup_polygon_view(square_rect, shape=Shape.polygon(5), rotation=math.pi / 5)
    assert view.transform.rotation_deg == pytest.approx(36.0)
    plain = view.mask.path.sample()
    shown = view.mask.sample()
    assert not np.allclose(plain, shown)
    # rotation about the center preserves distances from it
    center = square_rect.center
    assert np.allclose(
        np.linalg.norm(plain - center, axis=1),
        np.linalg.norm(shown - center, axis=1),
    )


def test_identity_transform_returns_same_path(square_rect):
    view = setup_polygon_view(square_rect, shape=Shape.TRIANGLE)
    assert view.transform.is_identity
    assert view.mask.presented_path() is view.mask.path
    assert LayerTransform(rotation=2 * math.pi).is_identity


def test_configure_layer_for_hexagon(square_rect):
    view = configure_layer_for_hexagon(square_rect, rotation=math.pi / 6)
    assert view.border is None
    assert view.mask.fill_rule == "evenodd"
    assert view.mask.path.metadata["preset"] == "classic-hexagon"
    assert view.transform.rotation == pytest.approx(math.pi / 6)


def test_demo_views_layout():
    views = demo_views(size=100.0, spacing=10.0)
    assert len(views) == 6
    sides = [view.mask.path.metadata["sides"] for view in views]
    assert sides == [6, 6, 5, 5, 3, 3]
    rotations = [view.transform.rotation for view in views]
    assert rotations == pytest.approx([math.pi / 6, 0.0, math.pi / 5, 0.0, 0.0, math.pi / 6])
    assert views[0].border is None
    assert all(view.border is not None for view in views[1:])
    assert canvas_size(views, margin=10.0) == (340.0, 230.0)


def test_demo_views_rejects_bad_size():
    with pytest.raises(ValueError):
        demo_views(size=0.0)


def test_shape_layer_validation(square_rect):
    path = build_polygon_path(square_rect, 4)
    with pytest.raises(ValueError):
        ShapeLayer(path=path, fill_rule="winding")
    with pytest.raises(ValueError):
        ShapeLayer(path=path, line_width=-1.0)


def test_triangulated_fill_covers_polygon_area(square_rect):
    path = build_polygon_path(square_rect, 4, stroke_width=5.0)
    vertices, faces = triangulate_path(path)
    assert faces.shape == (2, 3)
    tri = vertices[faces]
    areas = 0.5 * np.abs(
        (tri[:, 1, 0] - tri[:, 0, 0]) * (tri[:, 2, 1] - tri[:, 0, 1])
        - (tri[:, 2, 0] - tri[:, 0, 0]) * (tri[:, 1, 1] - tri[:, 0, 1])
    )
    assert areas.sum() == pytest.approx(95.0 * 95.0, rel=1e-5)
    assert abs(signed_area(vertices)) == pytest.approx(95.0 * 95.0, rel=1e-5)


def test_fill_and_stroke_polydata(square_rect):
    view = setup_polygon_view(square_rect, shape=Shape.HEXAGON, radius=4.0)
    fill = view.mask.fill_polydata(segments_per_circle=32)
    assert fill.n_cells > 0
    assert np.allclose(fill.points[:, 2], 0.0)
    assert get_mesh_color(fill) == WHITE

    stroke = view.border.stroke_polydata(segments_per_circle=32, flip_y=True)
    assert stroke.n_points == view.border.sample(32).shape[0]
    assert np.all(stroke.points[:, 1] <= 0.0)
    assert get_mesh_color(stroke) == WHITE


def test_view_in_offset_rect_is_anchored_at_its_center():
    rect = Rect2D.from_bounds(20.0, 40.0, 60.0, 60.0)
    view = setup_polygon_view(rect, rotation=0.3)
    assert np.allclose(view.transform.anchor, [50.0, 70.0])
