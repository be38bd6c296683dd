"""SVG rendering of routed scenes."""

from elbow_router.render.svg import render_svg

__all__ = ["render_svg"]
