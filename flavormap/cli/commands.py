"""CLI command implementations.

Each command takes a registry plus its arguments, prints to the shared
console and returns an exit code. Parse errors propagate to main(), which
reports them.
"""

from __future__ import annotations

from flavormap.display.console import get_console, get_error_console
from flavormap.display.tables import flavors_table, natives_table, preferred_flavors_table
from flavormap.flavor.charsets import does_subtype_support_charset
from flavormap.flavor.identity import CHARSET_PARAM, FlavorIdentity
from flavormap.mime.mimetype import MimeType
from flavormap.registry.flavormap import (
    FlavorNativeRegistry,
    decode_flavor,
    encode_flavor,
    is_encoded_native,
)


def _print_lines(lines: list[str]) -> None:
    console = get_console()
    for line in lines:
        console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)


def cmd_natives(registry: FlavorNativeRegistry, mime_type: str, plain: bool = False) -> int:
    """Print the natives for a flavor."""
    flavor = FlavorIdentity.parse(mime_type)
    natives = registry.natives_for_flavor(flavor)
    if plain:
        _print_lines(natives)
    else:
        get_console().print(natives_table(f"Natives for {flavor.mime_type}", natives))
    return 0


def cmd_flavors(registry: FlavorNativeRegistry, native: str, plain: bool = False) -> int:
    """Print the flavors for a native."""
    flavors = registry.flavors_for_native(native)
    if plain:
        _print_lines([flavor.mime_type for flavor in flavors])
    else:
        get_console().print(flavors_table(f"Flavors for {native}", flavors))
    return 0


def cmd_expand(registry: FlavorNativeRegistry, base_type: str, plain: bool = False) -> int:
    """Print the text flavor matrix for a base type.

    Charset support is decided from the subtype and any charset parameter
    given, so `text/x-custom;charset=utf-8` expands like text/plain does.
    """
    mime = MimeType.parse(base_type)
    charset_bearing = does_subtype_support_charset(mime.sub_type, mime.parameter(CHARSET_PARAM))
    flavors = registry.expander.expand(mime.base_type, charset_bearing)
    if plain:
        _print_lines([flavor.mime_type for flavor in flavors])
    else:
        get_console().print(flavors_table(f"Expansion of {mime.base_type}", flavors))
    return 0


def cmd_encode(mime_type: str) -> int:
    """Print the encoded native for a flavor MIME type."""
    native = encode_flavor(FlavorIdentity.parse(mime_type))
    _print_lines([native or ""])
    return 0


def cmd_decode(native: str) -> int:
    """Print the flavor carried by an encoded native."""
    if not is_encoded_native(native):
        get_error_console().print(f"Not an encoded native: {native}", markup=False)
        return 1
    flavor = decode_flavor(native)
    assert flavor is not None
    _print_lines([flavor.mime_type])
    return 0


def cmd_table(registry: FlavorNativeRegistry, plain: bool = False) -> int:
    """Print every known native with its most preferred flavor."""
    mapping = registry.flavors_for_natives(None)
    if plain:
        _print_lines([
            f"{native} -> {flavor.mime_type if flavor is not None else 'none'}"
            for native, flavor in sorted(mapping.items())
        ])
    else:
        get_console().print(preferred_flavors_table(mapping))
    return 0
