"""FlavorIdentity: a MIME type bound to a representation kind.

This is the key type of the flavor/native registry, so its equality and hash
contract is what every lookup depends on:

- the representation kinds must be equal;
- primary types must be equal and subtypes must match, where "*" on either
  side matches any subtype;
- for text types, the canonical charset must agree whenever either side's
  subtype supports a charset and its kind is not one of the standard
  (unicode) text kinds, and both sides must agree on whether that applies;
- for text/html, the "document" parameter must agree, and a text/html flavor
  is never equal to a flavor with any other subtype (including "*").

All other parameters and the display name are ignored. The subtype never
contributes to the hash, because "*" equals every subtype.
"""

from __future__ import annotations

from flavormap.core.constants import (
    FILE_LIST_MIME_TYPE,
    REMOTE_OBJECT_MIME_TYPE,
    SERIALIZED_OBJECT_MIME_TYPE,
)
from flavormap.core.errors import MissingRepresentationClassError, require
from flavormap.flavor.charsets import (
    canonical_charset,
    does_subtype_support_charset,
    is_encoding_supported,
)
from flavormap.flavor.kinds import (
    FILE_LIST,
    INPUT_STREAM,
    REMOTE_OBJECT,
    SERIALIZABLE_KINDS,
    STRING,
    RepresentationKind,
)
from flavormap.mime.mimetype import WILDCARD, MimeType
from flavormap.mime.params import ParameterList

CLASS_PARAM = "class"
CHARSET_PARAM = "charset"
DOCUMENT_PARAM = "document"
DISPLAY_NAME_PARAM = "humanPresentableName"

# Charset reported for encoded text flavors that don't name one
DEFAULT_TEXT_CHARSET = "UTF-8"


class FlavorIdentity:
    """A data flavor: MIME type, representation kind and display name."""

    __slots__ = ("_mime", "_kind", "_display_name")

    def __init__(
        self,
        primary_type: str,
        sub_type: str,
        params: ParameterList | dict[str, str] | None,
        kind: RepresentationKind,
        display_name: str | None = None,
    ) -> None:
        """Create a flavor from fully specified parts.

        The `class` parameter is always overwritten with the kind's canonical
        name. A `humanPresentableName` parameter supplies the display name if
        none is given and is then dropped from the MIME type.

        Raises:
            NullArgumentError: If kind is None.
            InvalidTokenError: If the types are not valid tokens.
        """
        require(kind, "kind")
        if isinstance(params, ParameterList):
            param_list = params.copy()
        else:
            param_list = ParameterList(params)
        param_list.set(CLASS_PARAM, kind.name)

        mime = MimeType(primary_type, sub_type, param_list)
        if display_name is None:
            display_name = mime.parameter(DISPLAY_NAME_PARAM) or mime.base_type
        self._mime = mime.without_parameters(DISPLAY_NAME_PARAM)
        self._kind = kind
        self._display_name = display_name

    @classmethod
    def from_kind(cls, kind: RepresentationKind, display_name: str | None = None) -> FlavorIdentity:
        """Flavor for an in-process object type, using the serialized-object MIME type."""
        require(kind, "kind")
        primary, sub = SERIALIZED_OBJECT_MIME_TYPE.split("/")
        return cls(primary, sub, None, kind, display_name)

    @classmethod
    def parse(cls, mime_type: str, display_name: str | None = None) -> FlavorIdentity:
        """Create a flavor from a MIME type string.

        Without a `class` parameter the kind defaults to INPUT_STREAM, except
        for the serialized-object type, which must name its class.

        Raises:
            NullArgumentError: If mime_type is None or empty.
            MimeTypeParseError: If mime_type doesn't parse.
            MissingRepresentationClassError: Serialized-object type without a class.
        """
        require(mime_type, "mime_type")
        return cls.from_mime(MimeType.parse(mime_type), display_name)

    @classmethod
    def from_mime(cls, mime: MimeType, display_name: str | None = None) -> FlavorIdentity:
        """Create a flavor from an already parsed MIME type."""
        require(mime, "mime")
        class_name = mime.parameter(CLASS_PARAM)
        if class_name is None:
            if mime.base_type == SERIALIZED_OBJECT_MIME_TYPE:
                raise MissingRepresentationClassError(str(mime))
            kind = INPUT_STREAM
        else:
            kind = RepresentationKind.resolve(class_name)
        return cls(mime.primary_type, mime.sub_type, mime.params, kind, display_name)

    # --- Accessors ---

    @property
    def mime(self) -> MimeType:
        return self._mime

    @property
    def kind(self) -> RepresentationKind:
        return self._kind

    @property
    def display_name(self) -> str:
        return self._display_name

    def set_display_name(self, display_name: str) -> None:
        """Change the display name; the only mutation a flavor allows."""
        self._display_name = display_name

    @property
    def mime_type(self) -> str:
        """The full MIME type string, including the class parameter."""
        return str(self._mime)

    @property
    def primary_type(self) -> str:
        return self._mime.primary_type

    @property
    def sub_type(self) -> str:
        return self._mime.sub_type

    @property
    def base_type(self) -> str:
        return self._mime.base_type

    def parameter(self, name: str) -> str | None:
        if name == DISPLAY_NAME_PARAM:
            return self._display_name
        return self._mime.parameter(name)

    def clone(self) -> FlavorIdentity:
        return FlavorIdentity(
            self.primary_type, self.sub_type, self._mime.params, self._kind, self._display_name
        )

    # --- Equality ---

    def _charset_significant(self) -> bool:
        return (
            self.primary_type == "text"
            and does_subtype_support_charset(self.sub_type, self._mime.parameter(CHARSET_PARAM))
            and not self._kind.is_standard_text
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlavorIdentity):
            return NotImplemented
        if self is other:
            return True
        if self._kind != other._kind:
            return False

        mine, theirs = self._mime, other._mime
        if mine.primary_type != theirs.primary_type:
            return False
        if mine.sub_type != theirs.sub_type and WILDCARD not in (mine.sub_type, theirs.sub_type):
            return False

        if mine.primary_type == "text":
            significant = self._charset_significant()
            if significant or other._charset_significant():
                if significant != other._charset_significant():
                    return False
                if canonical_charset(mine.parameter(CHARSET_PARAM)) != canonical_charset(
                    theirs.parameter(CHARSET_PARAM)
                ):
                    return False

            is_html = mine.sub_type == "html"
            if is_html or theirs.sub_type == "html":
                if is_html != (theirs.sub_type == "html"):
                    return False
                if mine.parameter(DOCUMENT_PARAM) != theirs.parameter(DOCUMENT_PARAM):
                    return False

        return True

    def __hash__(self) -> int:
        total = hash(self._kind) + hash(self.primary_type)
        if self.primary_type == "text":
            if self._charset_significant():
                charset = canonical_charset(self._mime.parameter(CHARSET_PARAM))
                if charset is not None:
                    total += hash(charset)
            if self.sub_type == "html":
                document = self._mime.parameter(DOCUMENT_PARAM)
                if document is not None:
                    total += hash(document)
        return total

    def matches(self, other: FlavorIdentity | MimeType | str) -> bool:
        """Wildcard-aware MIME comparison that ignores kind and parameters.

        Unlike `==`, text/* matches text/html here.
        """
        if isinstance(other, FlavorIdentity):
            other = other._mime
        return self._mime.matches(other)

    is_mime_type_equal = matches

    # --- Classification ---

    def is_mime_type_serialized_object(self) -> bool:
        return self._mime.matches(SERIALIZED_OBJECT_MIME_TYPE)

    def is_serialized_object_type(self) -> bool:
        return self._kind in SERIALIZABLE_KINDS and self.is_mime_type_serialized_object()

    def is_remote_object_type(self) -> bool:
        return self._kind == REMOTE_OBJECT and self._mime.matches(REMOTE_OBJECT_MIME_TYPE)

    def is_file_list_type(self) -> bool:
        return self._kind == FILE_LIST and self._mime.matches(FILE_LIST_MIME_TYPE)

    def is_charset_text_type(self) -> bool:
        """Text whose bytes are decoded through a charset (or unicode text)."""
        if self == STRING_FLAVOR:
            return True
        charset = self._mime.parameter(CHARSET_PARAM)
        if self.primary_type != "text" or not does_subtype_support_charset(self.sub_type, charset):
            return False
        if self._kind.is_standard_text:
            return True
        if not self._kind.is_encoded_text:
            return False
        # No charset means the default encoding, which is always supported
        return charset is None or is_encoding_supported(charset)

    def is_noncharset_text_type(self) -> bool:
        """Text that is opaque 8-bit data, such as text/rtf."""
        if self.primary_type != "text":
            return False
        if does_subtype_support_charset(self.sub_type, self._mime.parameter(CHARSET_PARAM)):
            return False
        return self._kind.is_encoded_text

    def is_text_type(self) -> bool:
        return self.is_charset_text_type() or self.is_noncharset_text_type()

    def text_charset(self) -> str | None:
        """Charset for encoded text flavors; None for non-text flavors."""
        if not self.is_charset_text_type():
            return None
        return self._mime.parameter(CHARSET_PARAM) or DEFAULT_TEXT_CHARSET

    def __repr__(self) -> str:
        text = f"mimetype={self.base_type};representationclass={self._kind.name}"
        if self.is_charset_text_type() and self._kind.is_encoded_text:
            text += f";charset={self.text_charset()}"
        return f"FlavorIdentity[{text}]"

    def __str__(self) -> str:
        return self.mime_type


# --- Well-known flavors ---

STRING_FLAVOR = FlavorIdentity.from_kind(STRING, "Unicode String")
"""Unicode text as an in-process string."""

PLAIN_TEXT_FLAVOR = FlavorIdentity.parse(
    "text/plain; charset=unicode; class=input-stream", "Plain Text"
)
"""Legacy plain text flavor (a UTF-16 byte stream)."""

FILE_LIST_FLAVOR = FlavorIdentity.parse(f"{FILE_LIST_MIME_TYPE};class=file-list")
"""A list of files."""


def _html_flavor(document: str) -> FlavorIdentity:
    return FlavorIdentity.parse(
        f"text/html; class=string;document={document};charset=Unicode"
    )


SELECTION_HTML_FLAVOR = _html_flavor("selection")
FRAGMENT_HTML_FLAVOR = _html_flavor("fragment")
ALL_HTML_FLAVOR = _html_flavor("all")


def text_plain_unicode_flavor(encoding: str) -> FlavorIdentity:
    """Plain text as a byte stream in the platform's unicode encoding."""
    return FlavorIdentity.parse(
        f"text/plain;charset={encoding};class=input-stream", "Plain Text"
    )
