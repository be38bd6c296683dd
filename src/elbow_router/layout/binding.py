"""Binding geometry: element bounds, binding gaps and hover resolution.

Distances are measured to the element *outline* in the element's own
unrotated frame, so a point deep inside a large shape is far from it
unless the shape is filled.
"""

from __future__ import annotations

import math

from elbow_router.layout.constants import (
    BINDING_GAP_RATIO,
    MAX_BINDING_GAP,
    MIN_BINDING_GAP,
)
from elbow_router.layout.geometry import (
    Bounds,
    Point,
    point_inside_bounds,
    rotate_point,
)
from elbow_router.parser.model import (
    BINDABLE_TYPES,
    ArrowElement,
    BindableElement,
    ElementType,
    SceneElement,
)


def aabb_for_element(
    element: SceneElement,
    padding: float | tuple[float, float, float, float] = 0.0,
) -> Bounds:
    """Axis-aligned box around a (possibly rotated) element.

    The box grows to contain the rotated outline and is then extended by
    *padding*, either one value for every side or (left, top, right, bottom).
    """
    if isinstance(padding, tuple):
        left, top, right, bottom = padding
    else:
        left = top = right = bottom = padding

    if isinstance(element, ArrowElement):
        xs = [element.x + p[0] for p in element.points]
        ys = [element.y + p[1] for p in element.points]
        return (min(xs) - left, min(ys) - top, max(xs) + right, max(ys) + bottom)

    center = (element.x + element.width / 2, element.y + element.height / 2)
    corners = [
        rotate_point(c, center, element.angle)
        for c in (
            (element.x, element.y),
            (element.x + element.width, element.y),
            (element.x + element.width, element.y + element.height),
            (element.x, element.y + element.height),
        )
    ]
    return (
        min(c[0] for c in corners) - left,
        min(c[1] for c in corners) - top,
        max(c[0] for c in corners) + right,
        max(c[1] for c in corners) + bottom,
    )


def max_binding_gap(element: BindableElement) -> float:
    """Maximum distance from the outline at which an endpoint binds.

    Scales with the smaller side of the shape (diamonds use their inscribed
    edge length) and is clamped to [MIN_BINDING_GAP, MAX_BINDING_GAP].
    """
    shape_ratio = 1 / math.sqrt(2) if element.type is ElementType.DIAMOND else 1.0
    smaller_dimension = shape_ratio * min(element.width, element.height)
    return max(MIN_BINDING_GAP, min(BINDING_GAP_RATIO * smaller_dimension, MAX_BINDING_GAP))


def _folded_local_point(
    element: BindableElement, point: Point
) -> tuple[float, float, float, float]:
    """Point in the element frame, folded into the first quadrant.

    Returns (ax, ay, half_width, half_height).
    """
    cx = element.x + element.width / 2
    cy = element.y + element.height / 2
    px, py = rotate_point(point, (cx, cy), -element.angle)
    return abs(px - cx), abs(py - cy), element.width / 2, element.height / 2


def _distance_to_box_outline(ax: float, ay: float, hw: float, hh: float) -> float:
    if ax <= hw and ay <= hh:
        return min(hw - ax, hh - ay)
    return math.hypot(max(ax - hw, 0.0), max(ay - hh, 0.0))


def _distance_to_segment(p: Point, a: Point, b: Point) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p[0] - (a[0] + t * dx), p[1] - (a[1] + t * dy))


def _distance_to_ellipse_outline(px: float, py: float, a: float, b: float) -> float:
    """Distance from a first-quadrant point to an axis-aligned ellipse.

    Iterative nearest-point search on the ellipse parameterised by the unit
    vector (tx, ty); three iterations are plenty for screen precision.
    """
    if a == 0 or b == 0:
        return _distance_to_box_outline(px, py, a, b)

    tx = ty = 1 / math.sqrt(2)
    for _ in range(3):
        x = a * tx
        y = b * ty
        ex = (a * a - b * b) * tx**3 / a
        ey = (b * b - a * a) * ty**3 / b
        r = math.hypot(x - ex, y - ey)
        qx = px - ex
        qy = py - ey
        q = math.hypot(qx, qy)
        if q == 0:
            break
        tx = min(1.0, max(0.0, (qx * r / q + ex) / a))
        ty = min(1.0, max(0.0, (qy * r / q + ey) / b))
        t = math.hypot(tx, ty)
        if t == 0:
            break
        tx /= t
        ty /= t

    return math.hypot(px - a * tx, py - b * ty)


def distance_to_bindable_element(element: BindableElement, point: Point) -> float:
    """Distance from *point* to the outline of *element*."""
    ax, ay, hw, hh = _folded_local_point(element, point)
    if element.type is ElementType.DIAMOND:
        return _distance_to_segment((ax, ay), (hw, 0.0), (0.0, hh))
    if element.type is ElementType.ELLIPSE:
        return _distance_to_ellipse_outline(ax, ay, hw, hh)
    return _distance_to_box_outline(ax, ay, hw, hh)


def is_point_inside_element(element: BindableElement, point: Point) -> bool:
    """Whether *point* lies within the element's filled area."""
    ax, ay, hw, hh = _folded_local_point(element, point)
    if hw == 0 or hh == 0:
        return False
    if element.type is ElementType.DIAMOND:
        return ax / hw + ay / hh <= 1
    if element.type is ElementType.ELLIPSE:
        return (ax / hw) ** 2 + (ay / hh) ** 2 <= 1
    return ax <= hw and ay <= hh


def is_point_in_binding_area(element: BindableElement | None, point: Point) -> bool:
    """Whether *point* is inside the element's box grown by its binding gap."""
    if element is None:
        return False
    return point_inside_bounds(point, aabb_for_element(element, max_binding_gap(element)))


def binding_border_test(element: BindableElement, point: Point) -> bool:
    """Whether an endpoint at *point* would bind to *element*."""
    if distance_to_bindable_element(element, point) <= max_binding_gap(element):
        return True
    return element.background_color != "transparent" and is_point_inside_element(
        element, point
    )


def get_hovered_element_for_binding(
    point: Point,
    elements: list[SceneElement],
) -> BindableElement | None:
    """Topmost bindable element an endpoint at *point* would bind to.

    *elements* is ordered bottom to top, so the search runs in reverse.
    """
    for element in reversed(elements):
        if not isinstance(element, BindableElement):
            continue
        if element.is_deleted or element.type not in BINDABLE_TYPES:
            continue
        if binding_border_test(element, point):
            return element
    return None
