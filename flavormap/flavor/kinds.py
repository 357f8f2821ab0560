"""Representation kinds: how a flavor's data is carried in memory.

The catalogue is closed (no reflective type lookup); anything outside it is
kept as an `other` kind so flavors from newer peers still round-trip.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RepresentationKind:
    """A representation kind, identified by its canonical name.

    The canonical name is what appears in a flavor's `class` parameter.
    """

    name: str

    @classmethod
    def resolve(cls, name: str) -> RepresentationKind:
        """Map a canonical name or legacy alias to a catalogue kind.

        Unknown names become an `other` kind carrying the name verbatim.
        """
        stripped = name.strip()
        known = _BY_NAME.get(stripped) or _BY_NAME.get(stripped.lower())
        return known if known is not None else cls(stripped)

    @classmethod
    def other(cls, name: str) -> RepresentationKind:
        return cls(name)

    @property
    def is_known(self) -> bool:
        return self.name in _CANONICAL

    @property
    def is_standard_text(self) -> bool:
        """Unicode text carriers, whose charset is implied."""
        return self in STANDARD_TEXT_KINDS

    @property
    def is_encoded_text(self) -> bool:
        """Byte carriers that need an explicit charset to decode text."""
        return self in ENCODED_TEXT_KINDS

    def __str__(self) -> str:
        return self.name


STRING = RepresentationKind("string")
READER = RepresentationKind("reader")
INPUT_STREAM = RepresentationKind("input-stream")
BYTE_BUFFER = RepresentationKind("byte-buffer")
CHAR_BUFFER = RepresentationKind("char-buffer")
BYTE_ARRAY = RepresentationKind("byte-array")
CHAR_ARRAY = RepresentationKind("char-array")
SERIALIZABLE = RepresentationKind("serializable")
FILE_LIST = RepresentationKind("file-list")
REMOTE_OBJECT = RepresentationKind("remote-object")
LOCAL_OBJECT_REF = RepresentationKind("local-object-ref")

# Best to worst
UNICODE_TEXT_KINDS: tuple[RepresentationKind, ...] = (READER, STRING, CHAR_BUFFER, CHAR_ARRAY)
ENCODED_TEXT_KINDS: tuple[RepresentationKind, ...] = (INPUT_STREAM, BYTE_BUFFER, BYTE_ARRAY)
STANDARD_TEXT_KINDS: frozenset[RepresentationKind] = frozenset(UNICODE_TEXT_KINDS)

# Kinds whose values are serializable objects
SERIALIZABLE_KINDS: frozenset[RepresentationKind] = frozenset({
    STRING,
    SERIALIZABLE,
    FILE_LIST,
    REMOTE_OBJECT,
})

_CANONICAL: dict[str, RepresentationKind] = {
    kind.name: kind
    for kind in (
        STRING,
        READER,
        INPUT_STREAM,
        BYTE_BUFFER,
        CHAR_BUFFER,
        BYTE_ARRAY,
        CHAR_ARRAY,
        SERIALIZABLE,
        FILE_LIST,
        REMOTE_OBJECT,
        LOCAL_OBJECT_REF,
    )
}

_ALIASES: dict[str, RepresentationKind] = {
    "str": STRING,
    "java.lang.String": STRING,
    "java.io.Reader": READER,
    "java.io.InputStream": INPUT_STREAM,
    "java.nio.ByteBuffer": BYTE_BUFFER,
    "java.nio.CharBuffer": CHAR_BUFFER,
    "bytes": BYTE_ARRAY,
    "[B": BYTE_ARRAY,
    "[C": CHAR_ARRAY,
    "java.io.Serializable": SERIALIZABLE,
    "java.util.List": FILE_LIST,
    "java.rmi.Remote": REMOTE_OBJECT,
}

_BY_NAME: dict[str, RepresentationKind] = {**_CANONICAL, **_ALIASES}
