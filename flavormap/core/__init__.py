"""Core errors, constants and helpers."""

from flavormap.core.errors import (
    ConfigError,
    FlavorMapError,
    InvalidTokenError,
    LoadError,
    MimeTypeParseError,
    MissingRepresentationClassError,
    MissingSubtypeError,
    NullArgumentError,
    PropertiesFormatError,
    TrailingGarbageError,
    UnterminatedQuoteError,
)

__all__ = [
    "FlavorMapError",
    "ConfigError",
    "LoadError",
    "PropertiesFormatError",
    "MimeTypeParseError",
    "MissingSubtypeError",
    "InvalidTokenError",
    "UnterminatedQuoteError",
    "TrailingGarbageError",
    "MissingRepresentationClassError",
    "NullArgumentError",
]
