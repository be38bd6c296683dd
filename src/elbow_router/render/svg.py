"""SVG rendering of scenes and route traces using drawsvg."""

from __future__ import annotations

import math

import drawsvg as draw

from elbow_router.layout.geometry import Bounds, Point, common_bounds
from elbow_router.layout.routing.trace import TraceEvent
from elbow_router.parser.model import ArrowElement, BindableElement, ElementType, Scene
from elbow_router.render.constants import (
    ARROWHEAD_HALF_WIDTH,
    ARROWHEAD_LENGTH,
    CANVAS_PADDING,
    EMPTY_SVG,
    TRACE_BOX_COLOR,
    TRACE_CANDIDATE_COLOR,
    TRACE_DASH,
    TRACE_DONGLE_COLOR,
    TRACE_ERROR_COLOR,
    TRACE_HEADING_COLOR,
    TRACE_HIT_COLOR,
    TRACE_HIT_RADIUS,
    TRACE_STROKE_WIDTH,
)
from elbow_router.render.style import Theme

_LINE_TRACE_COLORS = {
    "heading": TRACE_HEADING_COLOR,
    "dongle": TRACE_DONGLE_COLOR,
    "candidate": TRACE_CANDIDATE_COLOR,
    "deflection": TRACE_HIT_COLOR,
    "step_limit": TRACE_ERROR_COLOR,
}


def render_svg(
    scene: Scene,
    theme: Theme,
    trace: list[TraceEvent] | None = None,
    padding: float = CANVAS_PADDING,
) -> str:
    """Render the scene's shapes and arrows, plus an optional trace overlay."""
    elements = scene.get_non_deleted_elements()
    if not elements:
        return EMPTY_SVG

    boxes = [scene.get_element_bounds(el) for el in elements]
    if trace:
        boxes.extend(e.bounds for e in trace if e.bounds is not None)
    content = common_bounds(boxes)

    # Shift the content so its top-left corner sits at (padding, padding)
    offset = (padding - content[0], padding - content[1])
    width = content[2] - content[0] + padding * 2
    height = content[3] - content[1] + padding * 2

    d = draw.Drawing(width, height)
    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    for element in elements:
        if isinstance(element, BindableElement):
            _render_shape(d, element, theme, offset)

    for element in elements:
        if isinstance(element, ArrowElement):
            _render_arrow(d, element, theme, offset)

    if trace:
        _render_trace(d, trace, offset)

    return d.as_svg()


def _shift(p: Point, offset: Point) -> Point:
    return (p[0] + offset[0], p[1] + offset[1])


def _render_shape(
    d: draw.Drawing,
    element: BindableElement,
    theme: Theme,
    offset: Point,
) -> None:
    """Render a bindable shape in its own rotated frame."""
    x, y = _shift((element.x, element.y), offset)
    w, h = element.width, element.height
    cx, cy = x + w / 2, y + h / 2

    filled = element.background_color != "transparent"
    style = {
        "fill": element.background_color if filled else theme.shape_fill,
        "fill_opacity": theme.filled_shape_opacity if filled else 1.0,
        "stroke": theme.shape_stroke,
        "stroke_width": theme.shape_stroke_width,
    }
    if element.angle:
        style["transform"] = f"rotate({math.degrees(element.angle):g} {cx:g} {cy:g})"

    if element.type is ElementType.DIAMOND:
        path = draw.Path(**style)
        path.M(cx, y)
        path.L(x + w, cy)
        path.L(cx, y + h)
        path.L(x, cy)
        path.Z()
        d.append(path)
    elif element.type is ElementType.ELLIPSE:
        d.append(draw.Ellipse(cx, cy, w / 2, h / 2, **style))
    else:
        d.append(draw.Rectangle(x, y, w, h, **style))

    if theme.show_labels:
        d.append(draw.Text(
            element.id,
            theme.label_font_size,
            cx, cy,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            text_anchor="middle",
            dominant_baseline="central",
        ))


def _render_arrow(
    d: draw.Drawing,
    arrow: ArrowElement,
    theme: Theme,
    offset: Point,
) -> None:
    """Render an arrow as a polyline with its arrowheads."""
    pts = [_shift((arrow.x + px, arrow.y + py), offset) for px, py in arrow.points]
    if len(pts) < 2:
        return

    path = draw.Path(
        stroke=theme.arrow_color,
        stroke_width=theme.arrow_width,
        fill="none",
        stroke_linejoin=theme.arrow_linejoin,
    )
    path.M(*pts[0])
    for p in pts[1:]:
        path.L(*p)
    d.append(path)

    if arrow.end_arrowhead:
        _render_arrowhead(d, pts[-2], pts[-1], theme)
    if arrow.start_arrowhead:
        _render_arrowhead(d, pts[1], pts[0], theme)


def _render_arrowhead(d: draw.Drawing, tail: Point, tip: Point, theme: Theme) -> None:
    dx = tip[0] - tail[0]
    dy = tip[1] - tail[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return
    ux, uy = dx / length, dy / length
    bx = tip[0] - ux * ARROWHEAD_LENGTH
    by = tip[1] - uy * ARROWHEAD_LENGTH

    path = draw.Path(fill=theme.arrow_color, stroke="none")
    path.M(*tip)
    path.L(bx - uy * ARROWHEAD_HALF_WIDTH, by + ux * ARROWHEAD_HALF_WIDTH)
    path.L(bx + uy * ARROWHEAD_HALF_WIDTH, by - ux * ARROWHEAD_HALF_WIDTH)
    path.Z()
    d.append(path)


def _render_trace(d: draw.Drawing, events: list[TraceEvent], offset: Point) -> None:
    """Overlay the router's trace events: boxes, stubs, candidates and hits."""
    for event in events:
        if event.bounds is not None:
            _render_trace_box(d, event.bounds, offset)
        elif event.kind == "obstacle_hit" and len(event.points) == 2:
            hx, hy = _shift(event.points[1], offset)
            d.append(draw.Circle(hx, hy, TRACE_HIT_RADIUS, fill=TRACE_HIT_COLOR))
        elif event.kind in _LINE_TRACE_COLORS and len(event.points) == 2:
            (sx, sy), (ex, ey) = (_shift(p, offset) for p in event.points)
            kwargs = {}
            if event.kind == "candidate":
                kwargs["stroke_dasharray"] = TRACE_DASH
            d.append(draw.Line(
                sx, sy, ex, ey,
                stroke=_LINE_TRACE_COLORS[event.kind],
                stroke_width=TRACE_STROKE_WIDTH,
                **kwargs,
            ))


def _render_trace_box(d: draw.Drawing, bounds: Bounds, offset: Point) -> None:
    x, y = _shift((bounds[0], bounds[1]), offset)
    d.append(draw.Rectangle(
        x, y,
        bounds[2] - bounds[0], bounds[3] - bounds[1],
        fill="none",
        stroke=TRACE_BOX_COLOR,
        stroke_width=TRACE_STROKE_WIDTH,
        stroke_dasharray=TRACE_DASH,
    ))
