"""Console output for the flavormap CLI."""

from flavormap.display.console import get_console, get_error_console, set_console
from flavormap.display.tables import flavors_table, natives_table, preferred_flavors_table
from flavormap.display.theme import DEFAULT_THEME, Theme

__all__ = [
    "get_console",
    "get_error_console",
    "set_console",
    "flavors_table",
    "natives_table",
    "preferred_flavors_table",
    "DEFAULT_THEME",
    "Theme",
]
