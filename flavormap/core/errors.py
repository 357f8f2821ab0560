"""Typed exception hierarchy for flavormap."""

from __future__ import annotations


class FlavorMapError(Exception):
    """Base class for all flavormap errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(FlavorMapError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(FlavorMapError):
    """Base class for flavor map source loading errors."""

    pass


class PropertiesFormatError(LoadError):
    """Raised when a flavor map properties source contains a malformed escape."""

    pass


class MimeTypeParseError(FlavorMapError):
    """Raised when a MIME content-type string does not follow the grammar."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        self.raw = raw
        super().__init__(message)


class MissingSubtypeError(MimeTypeParseError):
    """No '/' separating primary type and subtype before the parameter list."""


class InvalidTokenError(MimeTypeParseError):
    """A type, subtype, parameter name or value is not a valid token."""


class UnterminatedQuoteError(MimeTypeParseError):
    """A quoted parameter value has no closing quote."""


class TrailingGarbageError(MimeTypeParseError):
    """Characters remain after the last parameter."""


class MissingRepresentationClassError(FlavorMapError):
    """A serialized-object flavor was constructed without a 'class' parameter."""

    def __init__(self, mime_type: str) -> None:
        self.mime_type = mime_type
        super().__init__(f"No representation class specified for: {mime_type}")


class NullArgumentError(ValueError):
    """Raised when a public entry point receives a missing or empty required argument.

    Not a FlavorMapError: this is a caller bug, not bad data.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} must not be None or empty")


def require(value: object, name: str) -> None:
    """Raise NullArgumentError if value is None or an empty string."""
    if value is None or (isinstance(value, str) and not value):
        raise NullArgumentError(name)
