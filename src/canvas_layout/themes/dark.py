"""Dark grey theme."""

from canvas_layout.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    node_fill="#3a3a3a",
    node_stroke="#8a8a8a",
    node_stroke_width=1.5,
    node_corner_radius=8.0,
    edge_color="#9e9e9e",
    edge_width=2.0,
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=13.0,
    title_color="#ffffff",
    title_font_size=24.0,
)
