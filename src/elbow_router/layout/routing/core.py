"""Core elbow routing: the public route_elbow_arrow() entry point.

Routing is a pure function of the arrow and a scene snapshot. It never
mutates the scene; it returns an ElbowArrowUpdate the caller commits in one
step (see ``route_scene`` for the commit loop).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from elbow_router.layout.geometry import Point
from elbow_router.layout.routing.common import (
    simplify_elbow_points,
    to_local,
    to_world,
)
from elbow_router.layout.routing.dongle import build_dongle, resolve_endpoints
from elbow_router.layout.routing.kernel import route_segment
from elbow_router.layout.routing.trace import Observer, TraceEvent
from elbow_router.parser.model import ArrowElement, ElbowArrowUpdate, Scene


def route_elbow_arrow(
    arrow: ArrowElement,
    scene: Scene,
    trace: Observer | None = None,
) -> ElbowArrowUpdate:
    """Compute the orthogonal route between the arrow's first and last point.

    Arrows with fewer than two points are still being created and come
    back unchanged.
    """
    if len(arrow.points) < 2:
        return ElbowArrowUpdate(
            points=tuple(arrow.points),
            x=arrow.x,
            y=arrow.y,
            width=arrow.width,
            height=arrow.height,
        )

    start_point = to_world(arrow, arrow.points[0])
    end_point = to_world(arrow, arrow.points[-1])

    resolution = resolve_endpoints(arrow, scene, start_point, end_point, trace)
    boxes = resolution.avoidance_boxes

    start_dongle = build_dongle(start_point, end_point, resolution.start_heading, boxes)
    end_dongle = build_dongle(end_point, start_point, resolution.end_heading, boxes)
    if trace is not None:
        trace(TraceEvent("dongle", (start_point, start_dongle), detail="start"))
        trace(TraceEvent("dongle", (end_point, end_dongle), detail="end"))

    path = route_segment(
        [start_point, start_dongle],
        [end_dongle, end_point],
        boxes,
        trace,
    )
    return _update_from_world_points(arrow, simplify_elbow_points(path))


def _update_from_world_points(
    arrow: ArrowElement, points: list[Point]
) -> ElbowArrowUpdate:
    """Re-base *arrow* on the first world point and convert back to local."""
    origin_x, origin_y = points[0]
    rebased = replace(arrow, x=origin_x, y=origin_y)
    local = tuple(to_local(rebased, p) for p in points)
    xs = [p[0] for p in local]
    ys = [p[1] for p in local]
    return ElbowArrowUpdate(
        points=local,
        x=origin_x,
        y=origin_y,
        width=max(xs) - min(xs),
        height=max(ys) - min(ys),
    )


def reroute_bound_arrows(
    scene: Scene,
    element_ids: Iterable[str],
    trace: Observer | None = None,
) -> dict[str, ElbowArrowUpdate]:
    """Route every elbow arrow affected by a change to *element_ids*.

    An arrow is affected when it is bound to one of the elements or is one
    of them. Returns arrow id -> update, in scene z-order.
    """
    graph = scene.binding_graph()
    affected: set[str] = set()
    for element_id in element_ids:
        affected.add(element_id)
        if element_id in graph:
            affected.update(graph.successors(element_id))

    return {
        arrow.id: route_elbow_arrow(arrow, scene, trace)
        for arrow in scene.arrows()
        if arrow.elbowed and arrow.id in affected
    }


def route_scene(scene: Scene, trace: Observer | None = None) -> Scene:
    """Route all elbow arrows and commit each update to *scene*."""
    for arrow in scene.arrows():
        if arrow.elbowed:
            scene.mutate_element(arrow.id, route_elbow_arrow(arrow, scene, trace))
    return scene
