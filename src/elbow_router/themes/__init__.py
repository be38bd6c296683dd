"""Theme definitions for rendered scenes."""

from elbow_router.themes.dark import DARK_THEME
from elbow_router.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
