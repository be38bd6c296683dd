"""Theme definition for scene rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a rendered scene."""

    name: str
    background_color: str
    shape_fill: str
    shape_stroke: str
    shape_stroke_width: float
    arrow_color: str
    arrow_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    show_labels: bool = True
    filled_shape_opacity: float = 0.85  # shapes with a background color
    arrow_linejoin: str = "miter"
