"""Regular polygon outlines inscribed in a rectangle.

The builder walks the outline like a pen: it starts near the lower-right
corner of the bounding square heading in the -x direction, draws one edge,
turns through a rounded corner, and repeats once per side. Edges are inset so
that a stroke of ``stroke_width`` stays inside the rectangle.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, replace
from typing import ClassVar

import numpy as np

from .drawing2d import Arc2D, Line2D, Path2D, Rect2D, Segment2D
from .transform import rotation_matrix, scale_matrix, transform_path


class PolygonSpecError(ValueError):
    """Raised when polygon parameters cannot describe a valid outline."""


class InvalidSidesError(PolygonSpecError):
    pass


class InvalidDimensionsError(PolygonSpecError):
    pass


class InvalidStrokeError(PolygonSpecError):
    pass


class InvalidRadiusError(PolygonSpecError):
    pass


def _validate_sides(sides: object) -> int:
    if isinstance(sides, bool) or not isinstance(sides, (int, np.integer)):
        raise InvalidSidesError(f"sides must be an integer, got {sides!r}.")
    if sides < 3:
        raise InvalidSidesError(f"sides must be >= 3, got {sides}.")
    return int(sides)


def _validate_rect(rect: Rect2D) -> None:
    if not (math.isfinite(rect.width) and math.isfinite(rect.height)):
        raise InvalidDimensionsError("rectangle dimensions must be finite.")
    if rect.width <= 0 or rect.height <= 0:
        raise InvalidDimensionsError(
            f"rectangle width and height must be positive, got {rect.width} x {rect.height}."
        )


def _validate_stroke(stroke_width: float, rect: Rect2D) -> float:
    stroke_width = float(stroke_width)
    if not math.isfinite(stroke_width) or stroke_width < 0:
        raise InvalidStrokeError(f"stroke_width must be a non-negative number, got {stroke_width}.")
    if stroke_width >= rect.min_side:
        raise InvalidStrokeError(
            f"stroke_width {stroke_width} must be smaller than the rectangle's shorter side {rect.min_side}."
        )
    return stroke_width


def _validate_radius(corner_radius: float) -> float:
    corner_radius = float(corner_radius)
    if not math.isfinite(corner_radius) or corner_radius < 0:
        raise InvalidRadiusError(f"corner_radius must be a non-negative number, got {corner_radius}.")
    return corner_radius


@dataclass(frozen=True)
class PolygonSpec:
    sides: int
    corner_radius: float = 0.0
    stroke_width: float = 1.0
    rotation: float = 0.0

    def validate_for(self, rect: Rect2D) -> None:
        """Raise a ``PolygonSpecError`` if this spec cannot be drawn inside ``rect``."""
        _validate_sides(self.sides)
        _validate_rect(rect)
        _validate_stroke(self.stroke_width, rect)
        _validate_radius(self.corner_radius)
        if not math.isfinite(self.rotation):
            raise PolygonSpecError("rotation must be finite.")


def build_polygon_path(
    rect: Rect2D,
    sides: int,
    stroke_width: float = 1.0,
    corner_radius: float = 0.0,
) -> Path2D:
    """Return a closed regular-polygon path that fits ``rect`` once stroked.

    Corners are rounded with arcs of ``corner_radius``; a radius of zero yields
    a path made only of lines. The path is axis-aligned: rotation is left to
    the consumer.
    """
    sides = _validate_sides(sides)
    _validate_rect(rect)
    stroke_width = _validate_stroke(stroke_width, rect)
    corner_radius = _validate_radius(corner_radius)

    theta = 2 * math.pi / sides  # turn at every corner
    offset = corner_radius * math.tan(theta / 2)  # where rounding starts before each corner
    square_width = rect.min_side

    length = square_width - stroke_width
    if sides % 4 != 0:
        # fit flat-to-flat inside the circle rather than the square
        length = length * math.cos(theta / 2) + offset / 2
    side_length = length * math.tan(theta / 2)
    edge = side_length - offset * 2
    if edge < -1e-12:
        warnings.warn(
            f"corner_radius {corner_radius:.4g} is too large for a {sides}-sided polygon "
            f"in a {square_width:.4g} square; corner arcs overlap.",
            RuntimeWarning,
            stacklevel=2,
        )

    center = rect.center
    start = center + np.array([side_length / 2 - offset, length / 2])
    point = start
    angle = math.pi

    segments: list[Segment2D] = []
    for index in range(sides):
        last = index == sides - 1
        line_end = point + edge * np.array([math.cos(angle), math.sin(angle)])
        if last and corner_radius == 0:  # snap float drift so the outline closes exactly
            line_end = start
        segments.append(Line2D(point, line_end))
        point = line_end

        if corner_radius > 0:
            arc_center = point + corner_radius * np.array(
                [math.cos(angle + math.pi / 2), math.sin(angle + math.pi / 2)]
            )
            end_angle = angle + theta - math.pi / 2
            pinned_end = None
            if last:  # close on the start point; keep the unwrapped angle near theta of sweep
                actual = math.atan2(start[1] - arc_center[1], start[0] - arc_center[0])
                end_angle += math.remainder(actual - end_angle, 2 * math.pi)
                pinned_end = start
            arc = Arc2D(
                center=arc_center,
                radius=corner_radius,
                start_angle=angle - math.pi / 2,
                end_angle=end_angle,
                clockwise=True,
                pinned_end=pinned_end,
            )
            segments.append(arc)
            point = arc.end_point
        angle += theta

    return Path2D(
        start=start,
        segments=tuple(segments),
        closed=True,
        stroke_width=stroke_width,
        line_join="round",
        metadata={"sides": sides, "corner_radius": corner_radius, "theta": theta},
    )


def build_polygon_path_from_spec(rect: Rect2D, spec: PolygonSpec) -> Path2D:
    spec.validate_for(rect)
    return build_polygon_path(
        rect,
        spec.sides,
        stroke_width=spec.stroke_width,
        corner_radius=spec.corner_radius,
    )


def classic_hexagon_path(rect: Rect2D) -> Path2D:
    """Pointy-top hexagon stretched to fill ``rect``.

    Vertices sit at top-mid, upper-right, lower-right, bottom-mid, lower-left
    and upper-left, at quarter and three-quarter height, with an eighth of the
    width left as horizontal padding (half on each side).
    """
    _validate_rect(rect)
    base = build_polygon_path(rect, 6, stroke_width=0.0, corner_radius=0.0)
    circumradius = rect.min_side / 2.0
    padding = rect.width / 16.0
    center = rect.center

    half_width = rect.width / 2.0 - padding
    sx = half_width / (circumradius * math.cos(math.pi / 6))
    sy = (rect.height / 2.0) / circumradius
    matrix = scale_matrix((sx, sy), origin=center) @ rotation_matrix(math.pi / 2, origin=center)
    fitted = transform_path(base, matrix)

    points = fitted.vertices()
    top = int(np.argmin(points[:, 1]))
    points = np.roll(points, -top, axis=0)
    path = Path2D.from_points(points, closed=True, stroke_width=0.0)
    return replace(path, metadata={"sides": 6, "corner_radius": 0.0, "preset": "classic-hexagon"})


_SHAPE_NAMES = {
    "triangle": 3,
    "square": 4,
    "pentagon": 5,
    "hexagon": 6,
    "heptagon": 7,
    "octagon": 8,
    "nonagon": 9,
    "decagon": 10,
    "dodecagon": 12,
}


@dataclass(frozen=True)
class Shape:
    """Named polygon preset; ``Shape.polygon(n)`` covers any other side count."""

    sides: int

    TRIANGLE: ClassVar["Shape"]
    SQUARE: ClassVar["Shape"]
    PENTAGON: ClassVar["Shape"]
    HEXAGON: ClassVar["Shape"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "sides", _validate_sides(self.sides))

    @classmethod
    def polygon(cls, sides: int) -> "Shape":
        return cls(sides)

    @classmethod
    def parse(cls, value: str) -> "Shape":
        key = value.strip().lower()
        if key in _SHAPE_NAMES:
            return cls(_SHAPE_NAMES[key])
        try:
            sides = int(key)
        except ValueError as exc:
            raise InvalidSidesError(f"Unknown shape {value!r}.") from exc
        return cls(sides)

    @property
    def name(self) -> str:
        for label, sides in _SHAPE_NAMES.items():
            if sides == self.sides:
                return label
        return f"{self.sides}-gon"


Shape.TRIANGLE = Shape(3)
Shape.SQUARE = Shape(4)
Shape.PENTAGON = Shape(5)
Shape.HEXAGON = Shape(6)


__all__ = [
    "InvalidDimensionsError",
    "InvalidRadiusError",
    "InvalidSidesError",
    "InvalidStrokeError",
    "PolygonSpec",
    "PolygonSpecError",
    "Shape",
    "build_polygon_path",
    "build_polygon_path_from_spec",
    "classic_hexagon_path",
]
