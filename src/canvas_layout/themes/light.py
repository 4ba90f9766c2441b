"""Light theme."""

from canvas_layout.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    node_fill="#ffffff",
    node_stroke="#333333",
    node_stroke_width=1.5,
    node_corner_radius=8.0,
    edge_color="#666666",
    edge_width=2.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=14.0,
    title_color="#111111",
    title_font_size=26.0,
)
