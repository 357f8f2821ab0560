"""The flavor/native registry and its flavor map sources."""

from flavormap.registry.cache import LookupCache
from flavormap.registry.flavormap import (
    FlavorNativeRegistry,
    TextFlavorProperties,
    create_registry,
    decode_flavor,
    decode_mime_type,
    encode_flavor,
    encode_mime_type,
    is_encoded_native,
)
from flavormap.registry.interfaces import FlavorMap, FlavorTable, PlatformMappings
from flavormap.registry.properties import load_convert, parse_properties
from flavormap.registry.sources import read_source

__all__ = [
    "FlavorNativeRegistry",
    "TextFlavorProperties",
    "create_registry",
    "FlavorMap",
    "FlavorTable",
    "PlatformMappings",
    "LookupCache",
    "encode_mime_type",
    "encode_flavor",
    "is_encoded_native",
    "decode_mime_type",
    "decode_flavor",
    "parse_properties",
    "load_convert",
    "read_source",
]
