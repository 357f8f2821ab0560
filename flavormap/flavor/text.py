"""Expansion of a text base type into every equivalent typed flavor.

A platform usually registers a single native for, say, text/plain. Callers
asking what that native can produce expect the whole matrix: every unicode
carrier, plus every supported charset on every byte carrier, and for HTML
each of those again per document variant. The result is ordered best first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flavormap.core.constants import TEXT_HTML_BASE_TYPE, TEXT_PLAIN_BASE_TYPE
from flavormap.core.errors import MimeTypeParseError
from flavormap.flavor.charsets import does_subtype_support_charset, standard_encodings
from flavormap.flavor.identity import (
    CHARSET_PARAM,
    PLAIN_TEXT_FLAVOR,
    STRING_FLAVOR,
    FlavorIdentity,
)
from flavormap.flavor.kinds import ENCODED_TEXT_KINDS, UNICODE_TEXT_KINDS, RepresentationKind
from flavormap.mime.mimetype import MimeType

logger = logging.getLogger(__name__)

HTML_DOCUMENT_TYPES: tuple[str, ...] = ("all", "selection", "fragment")


class TextFlavorExpander:
    """Builds the ordered set of flavors equivalent to a text base type."""

    def __init__(self, charsets: Iterable[str] | None = None) -> None:
        """Initialize the expander.

        Args:
            charsets: Charset catalogue to expand across. Defaults to the
                standard encodings.
        """
        self._charsets = list(charsets) if charsets is not None else standard_encodings()

    @property
    def charsets(self) -> list[str]:
        return list(self._charsets)

    def expand(self, base_type: str, charset_bearing: bool) -> list[FlavorIdentity]:
        """Enumerate the flavors equivalent to base_type.

        Args:
            base_type: A `primary/sub` text type; parameters are ignored.
            charset_bearing: Whether the subtype can carry a charset.

        Returns:
            Distinct flavors, best first.

        Raises:
            MimeTypeParseError: If base_type doesn't parse.
        """
        base = MimeType.parse(base_type).base_type
        result: dict[FlavorIdentity, None] = {}

        if not charset_bearing:
            # Opaque 8-bit text regardless of carrier
            for kind in ENCODED_TEXT_KINDS:
                self._add(result, self._flavor(base, kind, None, None))
            return list(result)

        is_plain = base == TEXT_PLAIN_BASE_TYPE
        if is_plain:
            self._add(result, STRING_FLAVOR)

        for kind in UNICODE_TEXT_KINDS:
            for document in self._documents(base):
                self._add(result, self._flavor(base, kind, "Unicode", document))

        for charset in self._charsets:
            for kind in ENCODED_TEXT_KINDS:
                for document in self._documents(base):
                    flavor = self._flavor(base, kind, charset, document)
                    if is_plain and flavor == PLAIN_TEXT_FLAVOR:
                        flavor = PLAIN_TEXT_FLAVOR
                    self._add(result, flavor)

        if is_plain:
            self._add(result, PLAIN_TEXT_FLAVOR)

        return list(result)

    def expand_flavor(self, flavor: FlavorIdentity) -> list[FlavorIdentity]:
        """Expand a text flavor's base type.

        Charset support comes from the flavor's own charset parameter, as in
        FlavorIdentity.is_charset_text_type().
        """
        charset_bearing = does_subtype_support_charset(
            flavor.sub_type, flavor.mime.parameter(CHARSET_PARAM)
        )
        try:
            return self.expand(flavor.base_type, charset_bearing)
        except MimeTypeParseError as e:
            logger.debug("Cannot expand %s: %s", flavor.base_type, e.message)
            return []

    @staticmethod
    def _documents(base: str) -> tuple[str | None, ...]:
        if base == TEXT_HTML_BASE_TYPE:
            return HTML_DOCUMENT_TYPES
        return (None,)

    @staticmethod
    def _flavor(
        base: str,
        kind: RepresentationKind,
        charset: str | None,
        document: str | None,
    ) -> FlavorIdentity:
        primary, sub = base.split("/", 1)
        params: dict[str, str] = {}
        if charset is not None:
            params[CHARSET_PARAM] = charset
        if document is not None:
            params["document"] = document
        return FlavorIdentity(primary, sub, params, kind)

    @staticmethod
    def _add(result: dict[FlavorIdentity, None], flavor: FlavorIdentity) -> None:
        # First occurrence wins
        if flavor not in result:
            result[flavor] = None
