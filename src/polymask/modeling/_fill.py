from __future__ import annotations

import numpy as np

from polymask.modeling.drawing2d import Path2D


def loop_points(path: Path2D, segments_per_circle: int = 64) -> np.ndarray:
    """Sample a closed path into a loop without the repeated closing point."""
    if not path.closed:
        raise ValueError("Only closed paths can be filled.")
    pts = path.sample(segments_per_circle=segments_per_circle)
    if pts.shape[0] == 0:
        return pts
    if np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    return pts


def signed_area(points: np.ndarray) -> float:
    """Shoelace area; positive for counter-clockwise loops in a y-up frame."""
    if points.shape[0] < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def ensure_winding(points: np.ndarray, clockwise: bool) -> np.ndarray:
    if points.shape[0] < 3:
        return points
    is_cw = signed_area(points) < 0
    if is_cw != clockwise:
        return points[::-1].copy()
    return points


def triangulate_path(path: Path2D, segments_per_circle: int = 64) -> tuple[np.ndarray, np.ndarray]:
    """Return (vertices, triangle indices) covering the interior of ``path``."""
    try:
        import mapbox_earcut as earcut
    except ImportError as exc:  # pragma: no cover - runtime dependency
        raise ImportError("mapbox_earcut is required for mask triangulation.") from exc

    loop = ensure_winding(loop_points(path, segments_per_circle), clockwise=False)
    if loop.shape[0] < 3:
        return loop.astype(float), np.zeros((0, 3), dtype=np.int64)

    vertices = loop.astype(np.float32)
    ring_end_indices = np.asarray([loop.shape[0]], dtype=np.uint32)
    indices = earcut.triangulate_float32(vertices, ring_end_indices)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    return loop.astype(float), faces
