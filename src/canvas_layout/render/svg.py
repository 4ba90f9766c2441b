"""SVG preview of a computed layout using drawsvg."""

from __future__ import annotations

from collections.abc import Iterable

import drawsvg as draw

from canvas_layout.parser.model import Edge, LayoutResult
from canvas_layout.render.style import Theme


def render_svg(
    result: LayoutResult,
    edges: Iterable[Edge],
    theme: Theme,
    title: str = "",
    padding: float = 60.0,
) -> str:
    """Render positioned nodes as cards joined by straight edges."""
    if not result.positions:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>\n'

    min_x, min_y, max_x, max_y = result.bounds()
    half_w = theme.node_width / 2
    half_h = theme.node_height / 2
    title_height = theme.title_font_size + 20 if title else 0.0

    # Shift so the top-left card corner sits at (padding, padding + title)
    shift_x = padding + half_w - min_x
    shift_y = padding + half_h + title_height - min_y

    width = int(max_x - min_x + theme.node_width + padding * 2)
    height = int(max_y - min_y + theme.node_height + padding * 2 + title_height)

    d = draw.Drawing(width, height)
    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            padding, padding / 2 + theme.title_font_size,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    # Edges go behind the cards
    for edge in edges:
        src = result.positions.get(edge.source)
        tgt = result.positions.get(edge.target)
        if src is None or tgt is None:
            continue
        d.append(draw.Line(
            src.x + shift_x, src.y + shift_y,
            tgt.x + shift_x, tgt.y + shift_y,
            stroke=theme.edge_color,
            stroke_width=theme.edge_width,
        ))

    for node_id, pos in result.positions.items():
        cx = pos.x + shift_x
        cy = pos.y + shift_y
        d.append(draw.Rectangle(
            cx - half_w, cy - half_h,
            theme.node_width, theme.node_height,
            rx=theme.node_corner_radius, ry=theme.node_corner_radius,
            fill=theme.node_fill,
            stroke=theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))
        d.append(draw.Text(
            node_id,
            theme.label_font_size,
            cx, cy,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            text_anchor="middle",
            dominant_baseline="central",
        ))

    svg = d.as_svg()
    if not svg.endswith("\n"):
        svg += "\n"
    return svg
