"""Parser for flavor map sources in Java-properties-like format.

Each logical line maps a native to a MIME type:

    # comment
    UTF8_STRING=text/plain;charset=UTF-8
    PNG : image/png
    TEXT   text/plain;\\
           eoln="\\n"

A line ending in an odd number of backslashes continues on the next line
(leading whitespace of the continuation is dropped). `\\uXXXX`, `\\t`, `\\n`,
`\\r` and `\\f` escapes are decoded in both key and value; any other escaped
character stands for itself.

Unlike a dict-based properties loader, duplicate keys are all returned, in
file order, because a native may legitimately map to several flavors.
"""

from __future__ import annotations

import re

from flavormap.core.errors import PropertiesFormatError

KEY_VALUE_SEPARATORS = "=: \t\r\n\f"
STRICT_KEY_VALUE_SEPARATORS = "=:"
WHITESPACE_CHARS = " \t\r\n\f"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_SIMPLE_ESCAPES = {"t": "\t", "r": "\r", "n": "\n", "f": "\f"}


def parse_properties(text: str) -> list[tuple[str, str]]:
    """Parse properties text into ordered (key, value) pairs.

    Args:
        text: The whole source, already decoded.

    Returns:
        Every key/value pair in source order, duplicates included.

    Raises:
        PropertiesFormatError: On a malformed \\uXXXX escape.
    """
    pairs: list[tuple[str, str]] = []
    lines = iter(_LINE_BREAK.split(text))

    for line in lines:
        line = line.lstrip(WHITESPACE_CHARS)
        if not line or line[0] in "#!":
            continue

        while _continues(line):
            next_line = next(lines, "")
            line = line[:-1] + next_line.lstrip(WHITESPACE_CHARS)

        pair = _split_line(line)
        if pair is not None:
            pairs.append((load_convert(pair[0]), load_convert(pair[1])))

    return pairs


def _continues(line: str) -> bool:
    """True if the line ends in an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _split_line(line: str) -> tuple[str, str] | None:
    length = len(line)
    key_start = 0
    while key_start < length and line[key_start] in WHITESPACE_CHARS:
        key_start += 1
    if key_start == length:
        return None

    separator = key_start
    while separator < length:
        char = line[separator]
        if char == "\\":
            separator += 1
        elif char in KEY_VALUE_SEPARATORS:
            break
        separator += 1

    value_index = separator
    while value_index < length and line[value_index] in WHITESPACE_CHARS:
        value_index += 1
    if value_index < length and line[value_index] in STRICT_KEY_VALUE_SEPARATORS:
        value_index += 1
    while value_index < length and line[value_index] in WHITESPACE_CHARS:
        value_index += 1

    key = line[key_start:separator]
    value = line[value_index:] if separator < length else ""
    return key, value


def load_convert(text: str) -> str:
    """Decode backslash escapes in a key or value.

    Raises:
        PropertiesFormatError: If a \\u escape isn't followed by four hex digits.
    """
    out: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1
        if char != "\\":
            out.append(char)
            continue
        if index >= length:
            # Lone trailing backslash
            break
        char = text[index]
        index += 1
        if char == "u":
            digits = text[index:index + 4]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise PropertiesFormatError(f"Malformed \\uxxxx encoding in {text!r}")
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_SIMPLE_ESCAPES.get(char, char))
    return "".join(out)
