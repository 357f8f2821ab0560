"""Rich renderables for registry lookups."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich.markup import escape
from rich.table import Table

from flavormap.display.theme import DEFAULT_THEME, Theme
from flavormap.flavor.identity import FlavorIdentity
from flavormap.registry.flavormap import is_encoded_native


def _native_cell(native: str, theme: Theme) -> str:
    style = theme.encoded_native if is_encoded_native(native) else theme.native
    return f"[{style}]{escape(native)}[/]"


def natives_table(
    title: str, natives: Sequence[str], theme: Theme = DEFAULT_THEME
) -> Table:
    """Ranked natives, most preferred first."""
    table = Table(title=escape(title), header_style=theme.header)
    table.add_column("#", justify="right")
    table.add_column("Native")
    for rank, native in enumerate(natives, start=1):
        table.add_row(str(rank), _native_cell(native, theme))
    return table


def flavors_table(
    title: str, flavors: Sequence[FlavorIdentity], theme: Theme = DEFAULT_THEME
) -> Table:
    """Ranked flavors with their kind and display name."""
    table = Table(title=escape(title), header_style=theme.header)
    table.add_column("#", justify="right")
    table.add_column("MIME type")
    table.add_column("Kind")
    table.add_column("Display name")
    for rank, flavor in enumerate(flavors, start=1):
        table.add_row(
            str(rank),
            f"[{theme.mime_type}]{escape(flavor.mime_type)}[/]",
            f"[{theme.kind}]{escape(flavor.kind.name)}[/]",
            escape(flavor.display_name),
        )
    return table


def preferred_flavors_table(
    mapping: Mapping[str, FlavorIdentity | None], theme: Theme = DEFAULT_THEME
) -> Table:
    """Each native with its most preferred flavor, sorted by native."""
    table = Table(title="Flavor map", header_style=theme.header)
    table.add_column("Native")
    table.add_column("Preferred flavor")
    for native in sorted(mapping):
        flavor = mapping[native]
        cell = (
            f"[{theme.mime_type}]{escape(flavor.mime_type)}[/]"
            if flavor is not None
            else f"[{theme.missing}]none[/]"
        )
        table.add_row(_native_cell(native, theme), cell)
    return table
