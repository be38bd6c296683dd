"""Render constants used by the SVG renderer.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 40.0
"""Default padding around the scene content."""

EMPTY_SVG: str = '<svg xmlns="http://www.w3.org/2000/svg"></svg>'
"""Document returned for a scene with nothing to draw."""

# ---------------------------------------------------------------------------
# Arrows
# ---------------------------------------------------------------------------
ARROWHEAD_LENGTH: float = 12.0
"""Length of an arrowhead triangle along the last segment."""

ARROWHEAD_HALF_WIDTH: float = 5.0
"""Half of the arrowhead base, perpendicular to the last segment."""

# ---------------------------------------------------------------------------
# Trace overlay
# ---------------------------------------------------------------------------
TRACE_STROKE_WIDTH: float = 1.0
"""Stroke width for trace overlay lines and boxes."""

TRACE_DASH: str = "4 3"
"""Dash pattern for avoidance boxes and candidate segments."""

TRACE_HIT_RADIUS: float = 3.0
"""Radius of obstacle hit markers."""

TRACE_BOX_COLOR: str = "rgba(255, 200, 50, 0.7)"
"""Avoidance box outlines."""

TRACE_HEADING_COLOR: str = "rgba(80, 180, 255, 0.9)"
"""Heading markers at bound endpoints."""

TRACE_DONGLE_COLOR: str = "rgba(80, 220, 120, 0.9)"
"""Dongle stubs."""

TRACE_CANDIDATE_COLOR: str = "rgba(180, 80, 255, 0.6)"
"""Kernel candidate segments."""

TRACE_HIT_COLOR: str = "rgba(255, 80, 80, 0.9)"
"""Obstacle hits and deflections."""

TRACE_ERROR_COLOR: str = "rgba(255, 0, 0, 1.0)"
"""Segment drawn when a route hits the step cap."""
