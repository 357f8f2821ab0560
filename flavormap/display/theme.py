"""Theme definitions for flavormap output."""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme configuration.

    All styling in one place for easy customization.
    """

    # Text styles (Rich style strings)
    native: str = "cyan"
    encoded_native: str = "magenta"
    mime_type: str = "green"
    kind: str = "yellow"
    missing: str = "dim"
    error: str = "bold red"
    header: str = "bold"


DEFAULT_THEME = Theme()
