"""SVG preview rendering."""

from canvas_layout.render.svg import render_svg

__all__ = ["render_svg"]
