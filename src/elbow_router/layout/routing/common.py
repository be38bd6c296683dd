"""Shared types and helper functions for elbow routing."""

from __future__ import annotations

from elbow_router.layout.geometry import (
    Bounds,
    Point,
    Segment,
    distance,
    point_to_vector,
    points_equal,
    segments_intersect_at,
    vector_to_heading,
)
from elbow_router.parser.model import ArrowElement


def bbox_to_clockwise_segments(b: Bounds) -> list[Segment]:
    """The four edges of a box, wound clockwise on screen from top-left.

    Walking each edge from its first to its second vertex keeps the box
    interior on the right-hand side.
    """
    return [
        ((b[0], b[1]), (b[2], b[1])),
        ((b[2], b[1]), (b[2], b[3])),
        ((b[2], b[3]), (b[0], b[3])),
        ((b[0], b[3]), (b[0], b[1])),
    ]


def get_hit_offset(
    start: Point,
    next_point: Point,
    boxes: list[Bounds],
) -> tuple[float, float, float, Point | None]:
    """Nearest crossing of ``[start, next_point]`` with any box edge.

    Returns (ahead, right, left, hit): the distance from *start* to the
    crossing, the distance from the crossing to the hit edge's first vertex
    (escape to the right of travel), to its second vertex (escape to the
    left of travel), and the crossing point itself. Without a crossing the
    result is (inf, 0, 0, None).
    """
    best: tuple[float, float, float, Point | None] = (float("inf"), 0.0, 0.0, None)
    for box in boxes:
        for segment in bbox_to_clockwise_segments(box):
            p = segments_intersect_at((start, next_point), segment)
            if p is None:
                continue
            ahead = distance(start, p)
            if ahead < best[0]:
                best = (ahead, distance(segment[0], p), distance(segment[1], p), p)
    return best


def simplify_elbow_points(points: list[Point]) -> list[Point]:
    """Drop repeated points and merge consecutive segments with one heading."""
    if not points:
        return []

    result: list[Point] = [points[0]]
    for point in points[1:]:
        if points_equal(point, result[-1]):
            continue
        if len(result) >= 2 and vector_to_heading(
            point_to_vector(result[-1], result[-2])
        ) == vector_to_heading(point_to_vector(point, result[-1])):
            result[-1] = point
        else:
            result.append(point)
    return result


def to_world(arrow: ArrowElement, p: Point) -> Point:
    return (p[0] + arrow.x, p[1] + arrow.y)


def to_local(arrow: ArrowElement, p: Point) -> Point:
    return (p[0] - arrow.x, p[1] - arrow.y)
