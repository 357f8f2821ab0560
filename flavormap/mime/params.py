"""MIME parameter lists and the RFC 2045 token alphabet.

A parameter list is the `; name=value; ...` tail of a content type. Names are
case-insensitive (stored lower-cased and trimmed); values are case-sensitive
and may be quoted strings. Two lists are equal when they hold the same
name/value pairs regardless of order, but serialization keeps insertion
order so that output is stable.
"""

from __future__ import annotations

from collections.abc import Iterator

from flavormap.core.errors import (
    InvalidTokenError,
    TrailingGarbageError,
    UnterminatedQuoteError,
)

# Characters that may not appear in a token (RFC 2045 tspecials)
TSPECIALS = '()<>@,;:\\"/[]?='

_WHITESPACE = " \t\r\n\f"


def is_token_char(char: str) -> bool:
    """Check whether a single character belongs to the token alphabet."""
    code = ord(char)
    return 0x20 < code < 0x7F and char not in TSPECIALS


def is_valid_token(value: str) -> bool:
    """Check that value is non-empty and made only of token characters."""
    return bool(value) and all(is_token_char(c) for c in value)


def quote(value: str) -> str:
    """Quote value if it contains anything outside the token alphabet.

    Backslashes and double quotes inside the value are escaped with a
    backslash. Empty values are quoted so they survive a re-parse.
    """
    if is_valid_token(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unquote(value: str) -> str:
    """Remove backslash escapes from the body of a quoted string."""
    out: list[str] = []
    escaped = False
    for char in value:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            out.append(char)
    return "".join(out)


def _skip_whitespace(raw: str, index: int) -> int:
    while index < len(raw) and raw[index] in _WHITESPACE:
        index += 1
    return index


def _normalize_name(name: str) -> str:
    return name.strip().lower()


class ParameterList:
    """Ordered-key, order-insensitive map of MIME parameter names to values."""

    def __init__(self, params: dict[str, str] | None = None) -> None:
        self._params: dict[str, str] = {}
        if params:
            for name, value in params.items():
                self.set(name, value)

    @classmethod
    def parse(cls, raw: str) -> ParameterList:
        """Parse a parameter list tail such as `; charset=utf-8; a="b c"`.

        Args:
            raw: The tail of a content type, starting with ';', or empty.

        Returns:
            The parsed ParameterList.

        Raises:
            InvalidTokenError: Missing name, '=' or value, or a value that
                starts with a character outside the token alphabet.
            UnterminatedQuoteError: A quoted value never closes.
            TrailingGarbageError: Non-whitespace left after the last parameter.
        """
        result = cls()
        length = len(raw)
        index = _skip_whitespace(raw, 0)

        while index < length and raw[index] == ";":
            index = _skip_whitespace(raw, index + 1)
            if index >= length:
                # A trailing ';' with nothing after it
                raise InvalidTokenError("Couldn't find parameter name", raw)

            start = index
            while index < length and is_token_char(raw[index]):
                index += 1
            name = raw[start:index]
            if not name:
                raise InvalidTokenError(
                    f"Invalid parameter name at index {start}", raw
                )

            index = _skip_whitespace(raw, index)
            if index >= length or raw[index] != "=":
                raise InvalidTokenError(
                    f"Couldn't find the '=' that separates parameter {name!r} from its value",
                    raw,
                )
            index = _skip_whitespace(raw, index + 1)
            if index >= length:
                raise InvalidTokenError(
                    f"Couldn't find a value for parameter named {name!r}", raw
                )

            if raw[index] == '"':
                index += 1
                start = index
                closed = False
                while index < length:
                    char = raw[index]
                    if char == "\\":
                        index += 2
                    elif char == '"':
                        closed = True
                        break
                    else:
                        index += 1
                if not closed:
                    raise UnterminatedQuoteError(
                        f"Unterminated quoted value for parameter {name!r}", raw
                    )
                value = unquote(raw[start:index])
                index += 1
            elif is_token_char(raw[index]):
                start = index
                while index < length and is_token_char(raw[index]):
                    index += 1
                value = raw[start:index]
            else:
                raise InvalidTokenError(
                    f"Unexpected character {raw[index]!r} at index {index}", raw
                )

            result.set(name, value)
            index = _skip_whitespace(raw, index)

        if index < length:
            raise TrailingGarbageError(
                f"More characters encountered in input than expected at index {index}",
                raw,
            )
        return result

    # --- Mapping access ---

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get a parameter value by case-insensitive name."""
        return self._params.get(_normalize_name(name), default)

    def set(self, name: str, value: str) -> None:
        """Set a parameter; an existing name keeps its position."""
        self._params[_normalize_name(name)] = value

    def remove(self, name: str) -> None:
        """Remove a parameter if present."""
        self._params.pop(_normalize_name(name), None)

    def names(self) -> list[str]:
        """Parameter names in insertion order."""
        return list(self._params)

    def items(self) -> list[tuple[str, str]]:
        return list(self._params.items())

    def is_empty(self) -> bool:
        return not self._params

    def copy(self) -> ParameterList:
        clone = ParameterList()
        clone._params = dict(self._params)
        return clone

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize_name(name) in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterList):
            return NotImplemented
        return self._params == other._params

    # Mutable: hash through MimeType, which freezes the items
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(f"; {name}={quote(value)}" for name, value in self._params.items())

    def __repr__(self) -> str:
        return f"ParameterList({self._params!r})"
