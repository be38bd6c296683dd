"""Heading resolution: which side of a shape an endpoint leaves from.

The binding box around the shape is split into four search cones that
meet at its center. The cones overlap along their shared edges, so the
fixed test order (top, right, bottom, left) is what decides points on a
boundary and keeps headings from flickering while an endpoint is dragged.
Diamond cones are rotated 45 degrees to follow the diamond's edges and
only ever resolve to LEFT or RIGHT.
"""

from __future__ import annotations

import math

from elbow_router.layout.binding import aabb_for_element, max_binding_gap
from elbow_router.layout.constants import SEARCH_CONE_MULTIPLIER
from elbow_router.layout.geometry import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Heading,
    Point,
    bounds_center,
    point_in_triangle,
    point_inside_bounds,
    rotate_point,
    scale_up,
)
from elbow_router.parser.model import BindableElement, ElementType

_CONE_HEADINGS: dict[bool, tuple[Heading, Heading, Heading, Heading]] = {
    False: (UP, RIGHT, DOWN, LEFT),
    True: (RIGHT, RIGHT, LEFT, LEFT),
}


def heading_for_point(element: BindableElement, point: Point) -> Heading | None:
    """Cardinal heading for an endpoint at *point* bound to *element*.

    Returns None when the point is outside the element's binding area.
    """
    bounds = aabb_for_element(element, max_binding_gap(element))
    if not point_inside_bounds(point, bounds):
        return None

    is_diamond = element.type is ElementType.DIAMOND
    rotation = math.pi / 4 if is_diamond else 0.0
    mid = bounds_center(bounds)

    def cone_corner(corner: Point) -> Point:
        return rotate_point(scale_up(corner, mid, SEARCH_CONE_MULTIPLIER), mid, rotation)

    top_left = cone_corner((bounds[0], bounds[1]))
    top_right = cone_corner((bounds[2], bounds[1]))
    bottom_right = cone_corner((bounds[2], bounds[3]))
    bottom_left = cone_corner((bounds[0], bounds[3]))

    top, right, bottom, left = _CONE_HEADINGS[is_diamond]
    if point_in_triangle(point, top_left, top_right, mid):
        return top
    if point_in_triangle(point, top_right, bottom_right, mid):
        return right
    if point_in_triangle(point, bottom_right, bottom_left, mid):
        return bottom
    return left
