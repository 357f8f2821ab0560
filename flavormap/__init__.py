"""flavormap: map platform-neutral data flavors to platform clipboard natives."""

from flavormap.core.errors import FlavorMapError, MimeTypeParseError, NullArgumentError
from flavormap.flavor import (
    PLAIN_TEXT_FLAVOR,
    STRING_FLAVOR,
    FlavorIdentity,
    RepresentationKind,
    TextFlavorExpander,
)
from flavormap.mime import MimeType, ParameterList
from flavormap.registry import FlavorNativeRegistry, create_registry

__version__ = "0.1.0"

__all__ = [
    "FlavorIdentity",
    "FlavorMapError",
    "FlavorNativeRegistry",
    "MimeType",
    "MimeTypeParseError",
    "NullArgumentError",
    "ParameterList",
    "PLAIN_TEXT_FLAVOR",
    "RepresentationKind",
    "STRING_FLAVOR",
    "TextFlavorExpander",
    "create_registry",
]
