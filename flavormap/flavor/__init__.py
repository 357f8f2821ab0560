"""Data flavors: MIME types bound to in-memory representation kinds."""

from flavormap.flavor.charsets import (
    STANDARD_ENCODINGS,
    canonical_charset,
    does_subtype_support_charset,
    is_encoding_supported,
    standard_encodings,
)
from flavormap.flavor.identity import (
    ALL_HTML_FLAVOR,
    FILE_LIST_FLAVOR,
    FRAGMENT_HTML_FLAVOR,
    PLAIN_TEXT_FLAVOR,
    SELECTION_HTML_FLAVOR,
    STRING_FLAVOR,
    FlavorIdentity,
    text_plain_unicode_flavor,
)
from flavormap.flavor.kinds import (
    ENCODED_TEXT_KINDS,
    STANDARD_TEXT_KINDS,
    UNICODE_TEXT_KINDS,
    RepresentationKind,
)
from flavormap.flavor.text import HTML_DOCUMENT_TYPES, TextFlavorExpander

__all__ = [
    "FlavorIdentity",
    "RepresentationKind",
    "TextFlavorExpander",
    "STRING_FLAVOR",
    "PLAIN_TEXT_FLAVOR",
    "FILE_LIST_FLAVOR",
    "ALL_HTML_FLAVOR",
    "SELECTION_HTML_FLAVOR",
    "FRAGMENT_HTML_FLAVOR",
    "text_plain_unicode_flavor",
    "UNICODE_TEXT_KINDS",
    "ENCODED_TEXT_KINDS",
    "STANDARD_TEXT_KINDS",
    "HTML_DOCUMENT_TYPES",
    "STANDARD_ENCODINGS",
    "canonical_charset",
    "does_subtype_support_charset",
    "is_encoding_supported",
    "standard_encodings",
]
