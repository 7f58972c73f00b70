from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from polymask.modeling.drawing2d import Arc2D, Line2D, Path2D, Rect2D


def test_line2d_sample_positive():
    line = Line2D(start=(0, 0), end=(3, 4))
    pts = line.sample()
    assert pts.shape == (2, 2)
    assert np.allclose(pts[1], [3, 4])
    assert line.length == pytest.approx(5.0)


def test_line2d_invalid_coordinate():
    with pytest.raises(ValueError):
        Line2D(start=(0, 0, 0), end=(1, 1))


def test_line2d_rejects_nan():
    with pytest.raises(ValueError):
        Line2D(start=(0, float("nan")), end=(1, 1))


def test_arc2d_clockwise_sweeps_towards_larger_angles():
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle=0.0, end_angle=math.pi / 2, clockwise=True)
    pts = arc.sample(segments_per_circle=32)
    assert np.allclose(pts[0], [1.0, 0.0], atol=1e-9)
    assert np.allclose(pts[-1], [0.0, 1.0], atol=1e-9)
    assert arc.sweep == pytest.approx(math.pi / 2)
    # every sample sits in the first quadrant
    assert np.all(pts >= -1e-9)


def test_arc2d_counter_clockwise_takes_long_way():
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle=0.0, end_angle=math.pi / 2, clockwise=False)
    assert arc.sweep == pytest.approx(3 * math.pi / 2)
    pts = arc.sample(segments_per_circle=64)
    assert np.allclose(pts[-1], arc.end_point, atol=1e-9)
    assert pts[:, 1].min() < -0.9


def test_arc2d_full_circle_sweep():
    arc = Arc2D(center=(0, 0), radius=2.0, start_angle=0.0, end_angle=2 * math.pi)
    assert arc.sweep == pytest.approx(2 * math.pi)


def test_arc2d_invalid_radius():
    with pytest.raises(ValueError):
        Arc2D(center=(0, 0), radius=0.0, start_angle=0.0, end_angle=1.0)


def test_arc2d_sample_requires_three_segments():
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle=0.0, end_angle=1.0)
    with pytest.raises(ValueError):
        arc.sample(segments_per_circle=2)


def test_rect2d_center_and_bounds():
    rect = Rect2D.from_bounds(10, 20, 200, 100)
    assert np.allclose(rect.center, [110, 70])
    assert rect.min_side == 100
    assert rect.bounds == (10.0, 20.0, 210.0, 120.0)


def test_path2d_from_points_closes():
    path = Path2D.from_points([(0, 0), (1, 0), (1, 1), (0, 1)], closed=True)
    assert len(path.lines) == 4
    pts = path.sample()
    assert np.array_equal(pts[0], pts[-1])
    assert np.allclose(path.end_point, path.start)


def test_path2d_open_path_keeps_ends():
    path = Path2D.from_points([(0, 0), (1, 0.5), (2, 0)], closed=False)
    pts = path.sample()
    assert not np.allclose(pts[0], pts[-1])


def test_path2d_requires_two_points():
    with pytest.raises(ValueError):
        Path2D.from_points([(0, 0)], closed=False)


def test_path2d_rejects_unknown_segment():
    with pytest.raises(TypeError):
        Path2D(start=(0, 0), segments=("L 1 1",))


def test_path2d_is_frozen():
    path = Path2D.from_points([(0, 0), (1, 0), (0, 1)])
    with pytest.raises(dataclasses.FrozenInstanceError):
        path.closed = False
    assert isinstance(path.segments, tuple)


def test_path2d_svg_data_for_lines():
    path = Path2D.from_points([(0, 0), (1, 0), (1, 1), (0, 1)], closed=True)
    assert path.to_svg_d() == "M 0 0 L 1 0 L 1 1 L 0 1 L 0 0 Z"


def test_path2d_svg_data_for_arc():
    arc = Arc2D(center=(0, 5), radius=5.0, start_angle=-math.pi / 2, end_angle=0.0, clockwise=True)
    path = Path2D(start=(0, 0), segments=(arc,), closed=False)
    assert path.to_svg_d() == "M 0 0 A 5 5 0 0 1 5 5"


def test_path2d_bounds():
    path = Path2D.from_points([(1, 2), (4, 2), (4, 6)], closed=True)
    assert path.bounds() == (1.0, 2.0, 4.0, 6.0)


def test_path2d_coordinates_and_metadata_are_read_only():
    source = np.array([1.0, 2.0])
    path = Path2D(start=source, segments=(Line2D(source, (3, 4)),), metadata={"sides": 3})
    source[0] = 99.0
    assert path.start[0] == 1.0
    with pytest.raises(ValueError):
        path.start[0] = 5.0
    with pytest.raises(ValueError):
        path.segments[0].end[1] = 5.0
    with pytest.raises(TypeError):
        path.metadata["sides"] = 9
    assert path.metadata["sides"] == 3


def test_arc2d_pinned_end_overrides_computed_end():
    exact = (0.0, 1.0)
    arc = Arc2D(center=(0, 0), radius=1.0, start_angle=0.0, end_angle=math.pi / 2, pinned_end=exact)
    assert np.array_equal(arc.end_point, exact)
    assert np.array_equal(arc.sample(16)[-1], exact)


def test_arc2d_pinned_end_must_lie_on_arc():
    with pytest.raises(ValueError):
        Arc2D(center=(0, 0), radius=1.0, start_angle=0.0, end_angle=math.pi / 2, pinned_end=(1.0, 0.0))
