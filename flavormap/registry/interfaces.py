"""Protocols at the registry's boundary.

Using Protocols enables structural subtyping: a platform layer only has to
provide the right methods, not inherit from anything in this package.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from flavormap.flavor.identity import FlavorIdentity


class PlatformMappings(Protocol):
    """Platform-supplied mappings consulted by the registry.

    Results take priority over locally registered mappings. The registry
    copies what it gets back and never mutates it.

    Example:
        class X11Mappings:
            def mappings_for_native(self, native: str) -> Sequence[FlavorIdentity]:
                if native == "image/png":
                    return [FlavorIdentity.parse("image/png")]
                return []

            def mappings_for_flavor(self, flavor: FlavorIdentity) -> Sequence[str]:
                return []
    """

    def mappings_for_native(self, native: str) -> Sequence[FlavorIdentity]:
        """Extra flavors the platform can produce from native (may be empty)."""
        ...

    def mappings_for_flavor(self, flavor: FlavorIdentity) -> Sequence[str]:
        """Extra natives the platform can produce from flavor (may be empty)."""
        ...


class FlavorMap(Protocol):
    """Bulk mapping between natives and their most preferred flavors."""

    def natives_for_flavors(
        self, flavors: Iterable[FlavorIdentity] | None
    ) -> dict[FlavorIdentity, str | None]:
        ...

    def flavors_for_natives(
        self, natives: Iterable[str] | None
    ) -> dict[str, FlavorIdentity | None]:
        ...


class FlavorTable(FlavorMap, Protocol):
    """Ordered, many-to-many mapping between natives and flavors."""

    def natives_for_flavor(self, flavor: FlavorIdentity | None) -> list[str]:
        ...

    def flavors_for_native(self, native: str | None) -> list[FlavorIdentity]:
        ...
