"""MIME content-type grammar."""

from flavormap.mime.mimetype import WILDCARD, MimeType
from flavormap.mime.params import ParameterList, is_token_char, is_valid_token, quote, unquote

__all__ = [
    "MimeType",
    "ParameterList",
    "WILDCARD",
    "is_token_char",
    "is_valid_token",
    "quote",
    "unquote",
]
