"""Vector and point primitives for routing geometry.

All functions are pure and operate on plain tuples. Screen coordinates are
used throughout: +X points right and +Y points down, so "up" is (0, -1).
"""

from __future__ import annotations

import math

Point = tuple[float, float]
Vector = tuple[float, float]
Segment = tuple[Point, Point]
Bounds = tuple[float, float, float, float]
"""Axis-aligned box as (min_x, min_y, max_x, max_y)."""

Heading = tuple[int, int]

UP: Heading = (0, -1)
RIGHT: Heading = (1, 0)
DOWN: Heading = (0, 1)
LEFT: Heading = (-1, 0)

HEADINGS: tuple[Heading, ...] = (UP, RIGHT, DOWN, LEFT)


def add_vectors(a: Vector, b: Vector) -> Vector:
    return (a[0] + b[0], a[1] + b[1])


def subtract_vectors(a: Vector, b: Vector) -> Vector:
    return (a[0] - b[0], a[1] - b[1])


def scale_vector(v: Vector, scalar: float) -> Vector:
    return (v[0] * scalar, v[1] * scalar)


def point_to_vector(p: Point, origin: Point = (0.0, 0.0)) -> Vector:
    """Vector pointing from *origin* to *p*."""
    return (p[0] - origin[0], p[1] - origin[1])


def dot_product(a: Vector, b: Vector) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross_product(a: Vector, b: Vector) -> float:
    return a[0] * b[1] - a[1] * b[0]


def normalize(v: Vector) -> Vector:
    """Unit vector in the direction of *v*; the zero vector stays zero."""
    length = math.hypot(v[0], v[1])
    if length == 0:
        return (0.0, 0.0)
    return (v[0] / length, v[1] / length)


def distance_sq(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def points_equal(a: Point, b: Point) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def rotate_point(p: Point, center: Point, angle: float) -> Point:
    """Rotate *p* around *center* by *angle* radians (clockwise on screen)."""
    if angle == 0:
        return (p[0], p[1])
    cos = math.cos(angle)
    sin = math.sin(angle)
    dx = p[0] - center[0]
    dy = p[1] - center[1]
    return (
        dx * cos - dy * sin + center[0],
        dx * sin + dy * cos + center[1],
    )


def rotate_left(v: Vector) -> Vector:
    """Rotate a direction 90 degrees to the left of travel (screen space).

    Exact for axis-aligned vectors: RIGHT -> UP, DOWN -> RIGHT.
    """
    return (v[1], -v[0])


def rotate_right(v: Vector) -> Vector:
    """Rotate a direction 90 degrees to the right of travel (screen space)."""
    return (-v[1], v[0])


def scale_up(p: Point, mid: Point, multiplier: float) -> Point:
    """Move *p* away from *mid* so its distance is multiplied."""
    return (
        mid[0] + (p[0] - mid[0]) * multiplier,
        mid[1] + (p[1] - mid[1]) * multiplier,
    )


def vector_to_heading(v: Vector) -> Heading:
    """Snap an arbitrary vector to the dominant cardinal heading.

    Exact diagonals resolve to the horizontal axis and the zero vector
    resolves to RIGHT, so the result is always one of the four headings.
    """
    x, y = v
    if abs(x) >= abs(y):
        return RIGHT if x >= 0 else LEFT
    return DOWN if y > 0 else UP


def segments_intersect_at(a: Segment, b: Segment) -> Point | None:
    """Intersection point of two segments, or None.

    Parallel, collinear and zero-length segments never intersect, and
    touching at an endpoint of either segment does not count. Axis-aligned
    segments contribute their exact fixed coordinate to the result.
    """
    r = point_to_vector(a[1], a[0])
    s = point_to_vector(b[1], b[0])
    denominator = cross_product(r, s)
    if denominator == 0:
        return None

    i = point_to_vector(b[0], a[0])
    t = cross_product(i, s) / denominator
    u = cross_product(i, r) / denominator
    if not (0 < t < 1 and 0 < u < 1):
        return None

    x = a[0][0] + r[0] * t
    y = a[0][1] + r[1] * t
    if r[0] == 0:
        x = a[0][0]
    elif s[0] == 0:
        x = b[0][0]
    if r[1] == 0:
        y = a[0][1]
    elif s[1] == 0:
        y = b[0][1]
    return (x, y)


def _triangle_sign(p1: Point, p2: Point, p3: Point) -> float:
    return (p1[0] - p3[0]) * (p2[1] - p3[1]) - (p2[0] - p3[0]) * (p1[1] - p3[1])


def point_in_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """Whether *p* lies inside or on the edges of triangle abc."""
    d1 = _triangle_sign(p, a, b)
    d2 = _triangle_sign(p, b, c)
    d3 = _triangle_sign(p, c, a)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def point_inside_bounds(p: Point, bounds: Bounds) -> bool:
    """Strict interior test; points on the boundary are outside."""
    return bounds[0] < p[0] < bounds[2] and bounds[1] < p[1] < bounds[3]


def bounds_overlap(a: Bounds, b: Bounds) -> bool:
    """Whether two boxes share interior area."""
    return a[0] < b[2] and b[0] < a[2] and a[1] < b[3] and b[1] < a[3]


def common_bounds(boxes: list[Bounds]) -> Bounds:
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def bounds_center(bounds: Bounds) -> Point:
    return (
        bounds[0] + (bounds[2] - bounds[0]) / 2,
        bounds[1] + (bounds[3] - bounds[1]) / 2,
    )
