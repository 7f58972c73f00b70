from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Literal, Mapping, Sequence

import numpy as np

LineJoin = Literal["miter", "round", "bevel"]


def _to_vec2(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float).reshape(2)
    return arr


def _require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    """Validated read-only copy of a 2D coordinate."""
    try:
        arr = np.array(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    arr.setflags(write=False)
    return arr


def _fmt(value: float) -> str:
    # round first so float noise like 2.4999999999 and -0.0 print cleanly
    return np.format_float_positional(round(float(value), 6) + 0.0, precision=6, trim="-")


@dataclass(frozen=True)
class Rect2D:
    """Axis-aligned rectangle in y-down screen coordinates."""

    origin: np.ndarray
    width: float
    height: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _require_vec2(self.origin, "origin"))
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "height", float(self.height))

    @classmethod
    def from_bounds(cls, x: float, y: float, width: float, height: float) -> "Rect2D":
        return cls(origin=(x, y), width=width, height=height)

    @property
    def center(self) -> np.ndarray:
        return self.origin + np.array([self.width / 2.0, self.height / 2.0])

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        x, y = float(self.origin[0]), float(self.origin[1])
        return (x, y, x + self.width, y + self.height)


@dataclass(frozen=True)
class Line2D:
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _require_vec2(self.start, "start"))
        object.__setattr__(self, "end", _require_vec2(self.end, "end"))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    def sample(self) -> np.ndarray:
        return np.vstack([self.start, self.end])


@dataclass(frozen=True)
class Arc2D:
    """Circular arc; angles in radians, measured in the y-down screen frame.

    In that frame an increasing angle turns clockwise on screen, so a
    ``clockwise`` arc sweeps from ``start_angle`` towards larger angles.
    ``pinned_end`` fixes the exact end point when the arc must meet another
    point without float drift; it has to lie on the arc's end.
    """

    center: np.ndarray
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool = True
    pinned_end: np.ndarray | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _require_vec2(self.center, "center"))
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ValueError("radius must be positive.")
        if not (np.isfinite(self.start_angle) and np.isfinite(self.end_angle)):
            raise ValueError("arc angles must be finite.")
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "start_angle", float(self.start_angle))
        object.__setattr__(self, "end_angle", float(self.end_angle))
        if self.pinned_end is not None:
            pinned = _require_vec2(self.pinned_end, "pinned_end")
            tolerance = 1e-6 * max(1.0, self.radius, float(np.abs(self.center).max()))
            if np.linalg.norm(pinned - self.point_at(self.end_angle)) > tolerance:
                raise ValueError("pinned_end must lie at the arc's end angle.")
            object.__setattr__(self, "pinned_end", pinned)

    @property
    def sweep(self) -> float:
        """Swept angle in ``[0, 2pi]`` along the arc's direction."""
        delta = self.end_angle - self.start_angle
        if not self.clockwise:
            delta = -delta
        if abs(delta) >= 2 * np.pi:
            return 2 * np.pi
        return float(np.mod(delta, 2 * np.pi))

    def point_at(self, angle: float) -> np.ndarray:
        return self.center + self.radius * np.array([np.cos(angle), np.sin(angle)])

    @property
    def start_point(self) -> np.ndarray:
        return self.point_at(self.start_angle)

    @property
    def end_point(self) -> np.ndarray:
        if self.pinned_end is not None:
            return self.pinned_end
        return self.point_at(self.end_angle)

    def sample(self, segments_per_circle: int) -> np.ndarray:
        if segments_per_circle < 3:
            raise ValueError("segments_per_circle must be >= 3.")
        span = self.sweep
        direction = 1.0 if self.clockwise else -1.0
        steps = max(int(np.ceil(segments_per_circle * (span / (2 * np.pi)))), 2)
        angles = self.start_angle + direction * np.linspace(0.0, span, steps, endpoint=True)
        x = self.center[0] + self.radius * np.cos(angles)
        y = self.center[1] + self.radius * np.sin(angles)
        points = np.column_stack([x, y])
        if self.pinned_end is not None:
            points[-1] = self.pinned_end
        return points


Segment2D = Line2D | Arc2D


def segment_end(segment: Segment2D) -> np.ndarray:
    if isinstance(segment, Line2D):
        return segment.end
    return segment.end_point


@dataclass(frozen=True)
class Path2D:
    """Immutable outline: a start point followed by line and arc segments."""

    start: np.ndarray
    segments: tuple[Segment2D, ...] = ()
    closed: bool = False
    stroke_width: float = 1.0
    line_join: LineJoin = "miter"
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _require_vec2(self.start, "start"))
        object.__setattr__(self, "segments", tuple(self.segments))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        for segment in self.segments:
            if not isinstance(segment, (Line2D, Arc2D)):
                raise TypeError(f"Unsupported path segment: {type(segment).__name__}")
        if self.stroke_width < 0:
            raise ValueError("stroke_width must be non-negative.")

    @classmethod
    def from_points(
        cls,
        points: Iterable[Sequence[float]],
        closed: bool = True,
        stroke_width: float = 1.0,
        line_join: LineJoin = "miter",
    ) -> "Path2D":
        pts = [_require_vec2(p, "point") for p in points]
        if len(pts) < 2:
            raise ValueError("Path2D requires at least two points.")
        segments = [Line2D(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if closed and not np.allclose(pts[0], pts[-1]):
            segments.append(Line2D(pts[-1], pts[0]))
        return cls(
            start=pts[0],
            segments=tuple(segments),
            closed=closed,
            stroke_width=stroke_width,
            line_join=line_join,
        )

    @property
    def lines(self) -> list[Line2D]:
        return [seg for seg in self.segments if isinstance(seg, Line2D)]

    @property
    def arcs(self) -> list[Arc2D]:
        return [seg for seg in self.segments if isinstance(seg, Arc2D)]

    @property
    def end_point(self) -> np.ndarray:
        if not self.segments:
            return self.start.copy()
        return segment_end(self.segments[-1])

    def vertices(self) -> np.ndarray:
        """End points of the straight edges, in traversal order."""
        if not self.lines:
            return np.zeros((0, 2), dtype=float)
        return np.vstack([line.end for line in self.lines])

    def sample(self, segments_per_circle: int = 64) -> np.ndarray:
        if not self.segments:
            return self.start.reshape(1, 2).copy()
        points = [self.start.reshape(1, 2)]
        for segment in self.segments:
            if isinstance(segment, Line2D):
                seg_points = segment.sample()
            else:
                seg_points = segment.sample(segments_per_circle)
            points.append(seg_points[1:])
        pts = np.vstack(points)
        if self.closed:
            if np.allclose(pts[0], pts[-1]):
                pts[-1] = pts[0]
            else:
                pts = np.vstack([pts, pts[0]])
        return pts

    def bounds(self, segments_per_circle: int = 64) -> tuple[float, float, float, float]:
        pts = self.sample(segments_per_circle=segments_per_circle)
        mins = pts.min(axis=0)
        maxs = pts.max(axis=0)
        return (float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    def to_svg_d(self) -> str:
        """Return SVG path data; SVG's sweep flag 1 is clockwise in the y-down frame."""
        parts = [f"M {_fmt(self.start[0])} {_fmt(self.start[1])}"]
        for segment in self.segments:
            if isinstance(segment, Line2D):
                parts.append(f"L {_fmt(segment.end[0])} {_fmt(segment.end[1])}")
                continue
            end = segment.end_point
            large = 1 if segment.sweep > np.pi else 0
            sweep_flag = 1 if segment.clockwise else 0
            r = _fmt(segment.radius)
            parts.append(f"A {r} {r} 0 {large} {sweep_flag} {_fmt(end[0])} {_fmt(end[1])}")
        if self.closed:
            parts.append("Z")
        return " ".join(parts)


__all__ = [
    "Arc2D",
    "Line2D",
    "LineJoin",
    "Path2D",
    "Rect2D",
    "Segment2D",
    "segment_end",
]
