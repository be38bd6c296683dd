"""Dark theme."""

from elbow_router.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    shape_fill="none",
    shape_stroke="#e0e0e0",
    shape_stroke_width=1.5,
    arrow_color="#ffffff",
    arrow_width=2.0,
    label_color="#aaaaaa",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
)
