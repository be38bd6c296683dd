"""Obstacle resolution for a single proposed elbow segment.

The proposed segment ``[start, candidate]`` is tested against the avoidance
boxes. Far obstacles are approached and skirted; obstacles right in front
of the path are deflected around with a left or right turn. Resolution is a
single pass per step, not a search, so every call is cheap.
"""

from __future__ import annotations

from elbow_router.layout.constants import SKIRT_MARGIN, SKIRT_THRESHOLD
from elbow_router.layout.geometry import (
    Bounds,
    Point,
    add_vectors,
    distance,
    dot_product,
    normalize,
    point_inside_bounds,
    point_to_vector,
    rotate_left,
    rotate_right,
    scale_vector,
    subtract_vectors,
)
from elbow_router.layout.routing.common import get_hit_offset
from elbow_router.layout.routing.trace import Observer, TraceEvent


def _turn_blocked(start: Point, turn_point: Point, boxes: list[Bounds]) -> bool:
    """Whether a turn segment crosses into any box or ends inside one."""
    if get_hit_offset(start, turn_point, boxes)[3] is not None:
        return True
    return any(point_inside_bounds(turn_point, box) for box in boxes)


def resolve_obstacles(
    points: list[Point],
    candidate: Point,
    boxes: list[Bounds],
    target: Point,
    end_facing: bool = False,
    boxes_overlap: bool = False,
    trace: Observer | None = None,
) -> Point:
    """Adjust *candidate* so the next segment does not cut through a box.

    Boxes containing the path's last point are ignored for this step so the
    path can leave the box it starts in.
    """
    start = points[-1]
    active = [box for box in boxes if not point_inside_bounds(start, box)]
    if not active:
        return candidate

    ahead, right, left, hit = get_hit_offset(start, candidate, active)
    if hit is None:
        return candidate

    if trace is not None:
        trace(TraceEvent("obstacle_hit", (start, hit), detail=f"ahead={ahead:g}"))

    direction = normalize(point_to_vector(candidate, start))

    # Skirt: advance up to the obstacle instead of running into it
    if not end_facing and ahead > SKIRT_THRESHOLD and not boxes_overlap:
        return subtract_vectors(hit, scale_vector(direction, SKIRT_MARGIN))

    if left <= 0 and right <= 0:
        return candidate

    # Deflect: the evaluation order makes left win ties
    length = min(left, right) + SKIRT_MARGIN
    previous = normalize(point_to_vector(start, points[-2])) if len(points) > 1 else None
    turns: list[tuple[float, Point]] = []
    for turn in (rotate_left(direction), rotate_right(direction)):
        if previous is not None and dot_product(turn, previous) == -1:
            continue
        turn_point = add_vectors(start, scale_vector(turn, length))
        if _turn_blocked(start, turn_point, active):
            continue
        turns.append((distance(turn_point, target), turn_point))

    if not turns:
        return candidate

    _, best = min(turns, key=lambda t: t[0])
    if trace is not None:
        trace(TraceEvent("deflection", (start, best)))
    return best
