"""Theme and style constants for layout previews."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a layout preview."""

    name: str
    background_color: str
    node_fill: str
    node_stroke: str
    node_stroke_width: float
    node_corner_radius: float
    edge_color: str
    edge_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    title_color: str
    title_font_size: float
    # Rendered card footprint; matches the overlap distance budget
    node_width: float = 200.0
    node_height: float = 80.0
