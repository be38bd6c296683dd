"""Light theme."""

from elbow_router.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    shape_fill="none",
    shape_stroke="#333333",
    shape_stroke_width=2.0,
    arrow_color="#1e1e1e",
    arrow_width=2.0,
    label_color="#666666",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=13.0,
    filled_shape_opacity=1.0,
)
