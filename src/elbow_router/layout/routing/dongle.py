"""Endpoint resolution, avoidance boxes and dongles.

A dongle is the short stub that carries an arrow endpoint out of its bound
shape's avoidance box before orthogonal routing starts. Its direction is
the endpoint heading, so every route leaves a shape perpendicular to the
edge it is attached to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from elbow_router.layout.binding import (
    aabb_for_element,
    is_point_in_binding_area,
)
from elbow_router.layout.constants import (
    AVOIDANCE_PADDING,
    DONGLE_CLEARANCE,
    DONGLE_CLEARANCE_ARROWHEAD,
    DONGLE_PUSH,
    HEADING_MARKER_LENGTH,
    MIN_DONGLE_LENGTH,
)
from elbow_router.layout.geometry import (
    Bounds,
    Heading,
    Point,
    add_vectors,
    distance,
    point_inside_bounds,
    point_to_vector,
    scale_vector,
    segments_intersect_at,
    vector_to_heading,
)
from elbow_router.layout.routing.common import bbox_to_clockwise_segments
from elbow_router.layout.routing.heading import heading_for_point
from elbow_router.layout.routing.trace import Observer, TraceEvent
from elbow_router.parser.model import (
    BINDABLE_TYPES,
    ArrowElement,
    BindableElement,
    Binding,
    Scene,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointResolution:
    """Bound elements, headings and avoidance boxes for both endpoints."""

    start_element: BindableElement | None
    end_element: BindableElement | None
    start_heading: Heading | None
    end_heading: Heading | None
    start_bounds: Bounds | None
    end_bounds: Bounds | None

    @property
    def avoidance_boxes(self) -> list[Bounds]:
        """Non-suppressed boxes, without duplicates for self-bound arrows."""
        boxes: list[Bounds] = []
        for box in (self.start_bounds, self.end_bounds):
            if box is not None and box not in boxes:
                boxes.append(box)
        return boxes


def resolve_bound_element(
    scene: Scene,
    binding: Binding | None,
    point: Point,
) -> BindableElement | None:
    """Element an endpoint is attached to.

    An explicit binding wins; a binding whose element is gone counts as no
    binding, and the element hovered at *point* is used instead.
    """
    if binding is not None:
        element = scene.get_non_deleted_elements_map().get(binding.element_id)
        if isinstance(element, BindableElement) and element.type in BINDABLE_TYPES:
            return element
        logger.debug(
            "Bound element '%s' not found, falling back to hover binding",
            binding.element_id,
        )
    return scene.get_hovered_element_for_binding(point)


def _clearance(arrowhead: str | None) -> float:
    return DONGLE_CLEARANCE_ARROWHEAD if arrowhead else DONGLE_CLEARANCE


def _split(
    low_edge: float,
    high_edge: float,
    low_clearance: float,
    high_clearance: float,
) -> float:
    """Line between two facing edges where their avoidance boxes meet.

    The midline, moved off an edge that would otherwise get less than its
    clearance. When the gap cannot hold both clearances it stays at the
    midline.
    """
    mid = (low_edge + high_edge) / 2
    if high_edge - low_edge < low_clearance + high_clearance:
        return mid
    return min(max(mid, low_edge + low_clearance), high_edge - high_clearance)


def adjust_avoidance_box(
    box: Bounds,
    own: Bounds,
    other: Bounds,
    clearance: float,
    other_clearance: float = 0.0,
) -> Bounds:
    """Pull the sides of *box* that face *other* back so the boxes never overlap.

    *own* and *other* are the unpadded element boxes. The axis with the
    wider gap between the elements (x on a tie) carries the split: the
    facing side sits ``DONGLE_PUSH`` short of the split line and never cuts
    into its own element. When the elements are also apart on the other
    axis, that facing side keeps the further of midline and padding.
    Both boxes of a pair compute the same split, so they at most touch.
    """
    min_x, min_y, max_x, max_y = box
    gap_x = max(other[0] - own[2], own[0] - other[2])
    gap_y = max(other[1] - own[3], own[1] - other[3])
    if gap_x <= 0 and gap_y <= 0:
        return box
    split_on_x = gap_x > 0 and gap_x >= gap_y

    if own[2] < other[0]:
        if split_on_x:
            split = _split(own[2], other[0], clearance, other_clearance)
            max_x = max(split - DONGLE_PUSH, own[2])
        else:
            max_x = max((own[2] + other[0]) / 2 - DONGLE_PUSH, max_x)
    if own[0] > other[2]:
        if split_on_x:
            split = _split(other[2], own[0], other_clearance, clearance)
            min_x = min(split + DONGLE_PUSH, own[0])
        else:
            min_x = min((own[0] + other[2]) / 2 + DONGLE_PUSH, min_x)
    if own[3] < other[1]:
        if not split_on_x:
            split = _split(own[3], other[1], clearance, other_clearance)
            max_y = max(split - DONGLE_PUSH, own[3])
        else:
            max_y = max((own[3] + other[1]) / 2 - DONGLE_PUSH, max_y)
    if own[1] > other[3]:
        if not split_on_x:
            split = _split(other[3], own[1], other_clearance, clearance)
            min_y = min(split + DONGLE_PUSH, own[1])
        else:
            min_y = min((own[1] + other[3]) / 2 + DONGLE_PUSH, min_y)

    return (min_x, min_y, max_x, max_y)


def _clear_free_dongle(
    box: Bounds,
    element: BindableElement,
    point: Point,
    opposite: Point,
    clearance: float,
) -> Bounds:
    """Pull *box* off the dongle of the free endpoint at *point*.

    The route can only reach a dongle inside a bound shape's box by cutting
    through the box, so the box gives way like it does for a second shape.
    """
    dongle = build_dongle(point, opposite, None, [])
    if not point_inside_bounds(dongle, box):
        return box
    return adjust_avoidance_box(
        box, aabb_for_element(element), (*dongle, *dongle), clearance
    )


def resolve_endpoints(
    arrow: ArrowElement,
    scene: Scene,
    start_point: Point,
    end_point: Point,
    trace: Observer | None = None,
) -> EndpointResolution:
    """Resolve bound elements, headings and avoidance boxes in world space."""
    start_element = resolve_bound_element(scene, arrow.start_binding, start_point)
    end_element = resolve_bound_element(scene, arrow.end_binding, end_point)

    start_heading = (
        heading_for_point(start_element, start_point) if start_element else None
    )
    end_heading = heading_for_point(end_element, end_point) if end_element else None

    # Endpoints dragged out of the binding area decouple from their shape
    start_bounds = (
        aabb_for_element(start_element, AVOIDANCE_PADDING)
        if is_point_in_binding_area(start_element, start_point)
        else None
    )
    end_bounds = (
        aabb_for_element(end_element, AVOIDANCE_PADDING)
        if is_point_in_binding_area(end_element, end_point)
        else None
    )

    if (
        start_bounds is not None
        and end_bounds is not None
        and start_element.id != end_element.id
    ):
        start_el_box = aabb_for_element(start_element)
        end_el_box = aabb_for_element(end_element)
        start_clearance = _clearance(arrow.start_arrowhead)
        end_clearance = _clearance(arrow.end_arrowhead)
        start_bounds = adjust_avoidance_box(
            start_bounds, start_el_box, end_el_box, start_clearance, end_clearance
        )
        end_bounds = adjust_avoidance_box(
            end_bounds, end_el_box, start_el_box, end_clearance, start_clearance
        )
    elif start_bounds is not None and end_bounds is None:
        start_bounds = _clear_free_dongle(
            start_bounds,
            start_element,
            end_point,
            start_point,
            _clearance(arrow.start_arrowhead),
        )
    elif end_bounds is not None and start_bounds is None:
        end_bounds = _clear_free_dongle(
            end_bounds,
            end_element,
            start_point,
            end_point,
            _clearance(arrow.end_arrowhead),
        )

    if trace is not None:
        for label, heading, point in (
            ("start", start_heading, start_point),
            ("end", end_heading, end_point),
        ):
            if heading is not None:
                tip = add_vectors(point, scale_vector(heading, HEADING_MARKER_LENGTH))
                trace(TraceEvent("heading", (point, tip), detail=label))
        for label, box in (("start", start_bounds), ("end", end_bounds)):
            if box is not None:
                trace(TraceEvent("avoidance_box", bounds=box, detail=label))

    return EndpointResolution(
        start_element=start_element,
        end_element=end_element,
        start_heading=start_heading,
        end_heading=end_heading,
        start_bounds=start_bounds,
        end_bounds=end_bounds,
    )


def extend_to_box_edge(point: Point, heading: Heading, boxes: list[Bounds]) -> Point:
    """Walk from *point* along *heading* until it leaves every box containing it.

    Returns the exit point on the outermost crossed edge, or *point* itself
    when no box contains it.
    """
    exit_point = point
    for box in boxes:
        if not point_inside_bounds(point, box):
            continue
        reach = (box[2] - box[0]) + (box[3] - box[1]) + 1
        ray = (point, add_vectors(point, scale_vector(heading, reach)))
        crossings = [
            p
            for segment in bbox_to_clockwise_segments(box)
            if (p := segments_intersect_at(ray, segment)) is not None
        ]
        if not crossings:
            continue
        nearest = min(crossings, key=lambda p: distance(point, p))
        if distance(point, nearest) > distance(point, exit_point):
            exit_point = nearest
    return exit_point


def build_dongle(
    point: Point,
    opposite: Point,
    heading: Heading | None,
    boxes: list[Bounds],
) -> Point:
    """Far end of the dongle stub for one endpoint.

    Without a heading the stub points toward *opposite* with a fixed length.
    """
    if heading is None:
        fallback = vector_to_heading(point_to_vector(opposite, point))
        return add_vectors(point, scale_vector(fallback, MIN_DONGLE_LENGTH))

    exit_point = extend_to_box_edge(point, heading, boxes)
    return add_vectors(exit_point, scale_vector(heading, DONGLE_PUSH))
