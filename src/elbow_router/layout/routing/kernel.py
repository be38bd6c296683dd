"""Path-stepping kernel: ray march from the start dongle to the end dongle.

Every step proposes one axis-aligned segment from the current path tail,
so each generated point is an elbow. The tie-break rules below are load
bearing for visual stability and must be applied in this order:

1. Go straight if the end dongle is ahead, else turn toward it.
2. Never continue straight after the first step (force the turn).
3. Halve a segment that would meet the end dongle head-on.
4. Resolve obstacles on whatever candidate survived.
"""

from __future__ import annotations

import logging
from itertools import combinations

from elbow_router.layout.constants import STEP_COUNT_LIMIT
from elbow_router.layout.geometry import (
    Bounds,
    Point,
    Vector,
    bounds_overlap,
    dot_product,
    normalize,
    point_to_vector,
    points_equal,
)
from elbow_router.layout.routing.obstacles import resolve_obstacles
from elbow_router.layout.routing.trace import Observer, TraceEvent

logger = logging.getLogger(__name__)


def _segment_vector(points: list[Point]) -> Vector:
    """Unit direction of the last segment, or (0, 0) without one."""
    if len(points) < 2:
        return (0.0, 0.0)
    return normalize(point_to_vector(points[-1], points[-2]))


def next_elbow(
    points: list[Point],
    end_points: list[Point],
    boxes: list[Bounds],
    step: int = 0,
    boxes_overlap: bool = False,
    trace: Observer | None = None,
) -> Point:
    """Propose the next elbow point after ``points[-1]``."""
    start = points[-1]
    end = end_points[0]
    start_vector = _segment_vector(points)
    end_vector = (
        normalize(point_to_vector(end_points[1], end))
        if len(end_points) > 1
        else (0.0, 0.0)
    )

    horizontal = start_vector[1] == 0
    ahead = dot_product(point_to_vector(end, start), start_vector) > 0
    straight = (end[0], start[1]) if horizontal else (start[0], end[1])
    turn = (start[0], end[1]) if horizontal else (end[0], start[1])

    candidate, other = (straight, turn) if ahead else (turn, straight)
    if points_equal(candidate, start):
        candidate, other = other, candidate

    # Anti-backtracking: the previous step would already have gone further
    if (
        step > 0
        and dot_product(normalize(point_to_vector(candidate, start)), start_vector) == 1
        and not points_equal(other, start)
    ):
        candidate = other

    # Head-on: meeting the end dongle against its own direction would fold
    # the path back onto itself, so only go half way
    aligned_on_one_axis = (candidate[0] == end[0]) != (candidate[1] == end[1])
    if (
        aligned_on_one_axis
        and dot_product(normalize(point_to_vector(end, candidate)), end_vector) == -1
    ):
        candidate = (
            (start[0] + candidate[0]) / 2,
            (start[1] + candidate[1]) / 2,
        )

    if trace is not None:
        trace(TraceEvent("candidate", (start, candidate), detail=f"step={step}"))

    end_facing = (
        dot_product(normalize(point_to_vector(candidate, start)), end_vector) == 1
    )
    return resolve_obstacles(
        points,
        candidate,
        boxes,
        end,
        end_facing=end_facing,
        boxes_overlap=boxes_overlap,
        trace=trace,
    )


def route_segment(
    start_points: list[Point],
    end_points: list[Point],
    boxes: list[Bounds],
    trace: Observer | None = None,
) -> list[Point]:
    """Generate elbows from ``start_points`` until ``end_points[0]`` is reached.

    ``start_points`` is [origin, start dongle] and ``end_points`` is
    [end dongle, target]. The loop is capped at STEP_COUNT_LIMIT steps;
    hitting the cap is logged and the partial path is joined straight to
    the end dongle so a connector is always produced.
    """
    points = list(start_points)
    end = end_points[0]
    overlap = any(bounds_overlap(a, b) for a, b in combinations(boxes, 2))

    for step in range(STEP_COUNT_LIMIT):
        next_point = next_elbow(points, end_points, boxes, step, overlap, trace)
        if points_equal(next_point, end):
            break
        points.append(next_point)
    else:
        logger.error(
            "Elbow arrow routing step count limit (%d) reached at %s",
            STEP_COUNT_LIMIT,
            points[-1],
        )
        if trace is not None:
            trace(TraceEvent("step_limit", (points[-1], end)))

    return points + list(end_points)
