from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

import numpy as np

from .drawing2d import Arc2D, Line2D, Path2D, Segment2D, _to_vec2


def translation_matrix(offset: Sequence[float]) -> np.ndarray:
    dx, dy = _to_vec2(offset)
    mat = np.eye(3)
    mat[:2, 2] = [dx, dy]
    return mat


def rotation_matrix(angle: float, origin: Sequence[float] = (0.0, 0.0)) -> np.ndarray:
    """Rotation by ``angle`` radians around ``origin``.

    Coordinates are y-down, so a positive angle turns clockwise on screen.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    center = _to_vec2(origin)
    return translation_matrix(center) @ rot @ translation_matrix(-center)


def scale_matrix(factors: Sequence[float], origin: Sequence[float] = (0.0, 0.0)) -> np.ndarray:
    sx, sy = _to_vec2(factors)
    if sx == 0 or sy == 0:
        raise ValueError("Scale factors must be non-zero.")
    mat = np.diag([sx, sy, 1.0])
    center = _to_vec2(origin)
    return translation_matrix(center) @ mat @ translation_matrix(-center)


def apply_matrix(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1))])
    return (matrix @ homogeneous.T).T[:, :2]


def _similarity(matrix: np.ndarray) -> tuple[float, float] | None:
    """Return (scale, angle) if ``matrix`` is a rotation plus uniform scale."""
    a, b = matrix[0, 0], matrix[0, 1]
    c, d = matrix[1, 0], matrix[1, 1]
    det = a * d - b * c
    if det <= 0:
        return None
    if not (np.isclose(a, d, atol=1e-12) and np.isclose(b, -c, atol=1e-12)):
        return None
    return math.sqrt(det), math.atan2(c, a)


def _transform_segment(segment: Segment2D, matrix: np.ndarray) -> Segment2D:
    if isinstance(segment, Line2D):
        start, end = apply_matrix(matrix, np.vstack([segment.start, segment.end]))
        return Line2D(start, end)
    similarity = _similarity(matrix)
    if similarity is None:
        raise ValueError("Arcs can only be transformed by rotation, uniform scale and translation.")
    scale, angle = similarity
    center = apply_matrix(matrix, segment.center)[0]
    return Arc2D(
        center=center,
        radius=segment.radius * scale,
        start_angle=segment.start_angle + angle,
        end_angle=segment.end_angle + angle,
        clockwise=segment.clockwise,
        pinned_end=None if segment.pinned_end is None else apply_matrix(matrix, segment.pinned_end)[0],
    )


def transform_path(path: Path2D, matrix: np.ndarray) -> Path2D:
    """Return a copy of ``path`` mapped through a 3x3 affine matrix."""
    mat = np.asarray(matrix, dtype=float).reshape(3, 3)
    start = apply_matrix(mat, path.start)[0]
    segments = tuple(_transform_segment(segment, mat) for segment in path.segments)
    return replace(path, start=start, segments=segments, metadata=dict(path.metadata))


def rotate_path(path: Path2D, angle: float, origin: Sequence[float] = (0.0, 0.0)) -> Path2D:
    """Return a copy of ``path`` rotated by ``angle`` radians around ``origin``."""
    return transform_path(path, rotation_matrix(angle, origin))


__all__ = [
    "apply_matrix",
    "rotate_path",
    "rotation_matrix",
    "scale_matrix",
    "transform_path",
    "translation_matrix",
]
