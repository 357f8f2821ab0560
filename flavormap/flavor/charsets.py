"""Charset catalogue used by text flavors.

Charset names are canonicalized through the `codecs` registry so that
"UTF-8", "utf8" and "U8" compare equal. Names Python does not know are kept
verbatim rather than rejected; comparison then falls back to the raw string.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterable

# Legacy names that Python's codec registry doesn't know about
_CHARSET_ALIASES: dict[str, str] = {
    "unicode": "utf-16",
    "unicodebig": "utf-16",
    "unicodelittle": "utf-16-le",
}

# Text subtypes whose charset support is fixed regardless of parameters
_SUBTYPE_CHARSET_SUPPORT: dict[str, bool] = {
    "sgml": True,
    "xml": True,
    "html": True,
    "enriched": True,
    "richtext": True,
    "uri-list": True,
    "directory": True,
    "css": True,
    "calendar": True,
    "plain": True,
    "rtf": False,
    "tab-separated-values": False,
    "t140": False,
    "rfc822-headers": False,
    "parityfec": False,
}

# Catalogue order used when expanding text flavors
STANDARD_ENCODINGS: tuple[str, ...] = (
    "US-ASCII",
    "ISO-8859-1",
    "UTF-8",
    "UTF-16BE",
    "UTF-16LE",
    "UTF-16",
)


def _lookup(name: str) -> codecs.CodecInfo | None:
    alias = _CHARSET_ALIASES.get(name.strip().lower(), name.strip())
    try:
        return codecs.lookup(alias)
    except LookupError:
        return None


def canonical_charset(name: str | None) -> str | None:
    """Canonical codec name for a charset, or the name unchanged if unknown."""
    if name is None:
        return None
    info = _lookup(name)
    return info.name if info is not None else name


def is_encoding_supported(name: str) -> bool:
    """Check whether the codec registry can encode/decode this charset."""
    return _lookup(name) is not None


def does_subtype_support_charset(sub_type: str, charset: str | None = None) -> bool:
    """Whether text/<sub_type> can carry a charset parameter.

    Known subtypes have a fixed answer. For anything else, the presence of a
    charset parameter is taken as evidence of support.
    """
    known = _SUBTYPE_CHARSET_SUPPORT.get(sub_type)
    if known is not None:
        return known
    return charset is not None


def standard_encodings(extra: Iterable[str] = ()) -> list[str]:
    """The charset catalogue: the standard encodings then any extras.

    Extras that canonicalize to an encoding already listed are dropped, as
    are names the codec registry can't resolve.
    """
    result = list(STANDARD_ENCODINGS)
    seen = {canonical_charset(name) for name in result}
    for name in extra:
        if not is_encoding_supported(name):
            continue
        canonical = canonical_charset(name)
        if canonical not in seen:
            seen.add(canonical)
            result.append(name)
    return result
