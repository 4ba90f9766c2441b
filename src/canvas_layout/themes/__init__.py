"""Theme definitions for layout previews."""

from canvas_layout.themes.dark import DARK_THEME
from canvas_layout.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
