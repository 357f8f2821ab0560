"""Structured MIME content types.

`MimeType` is an immutable value: primary type, subtype and a parameter
list. Equality is strict (types and all parameters, order-independent);
`matches()` is the separate wildcard-aware compatibility check. Use `==`
for map keys and `matches()` when asking "can this stand in for that".
"""

from __future__ import annotations

from flavormap.core.errors import InvalidTokenError, MimeTypeParseError, MissingSubtypeError
from flavormap.mime.params import ParameterList, is_valid_token

WILDCARD = "*"


class MimeType:
    """A parsed `primary/sub; name=value` content type."""

    __slots__ = ("_primary", "_sub", "_params")

    def __init__(
        self,
        primary_type: str,
        sub_type: str,
        params: ParameterList | dict[str, str] | None = None,
    ) -> None:
        """Build a MIME type from its parts.

        Args:
            primary_type: Primary type, e.g. "text". Trimmed and lower-cased.
            sub_type: Subtype, e.g. "plain". Trimmed and lower-cased.
            params: Optional parameters; copied, never shared.

        Raises:
            InvalidTokenError: If either type is empty or has non-token characters.
        """
        primary = primary_type.strip().lower()
        sub = sub_type.strip().lower()
        if not is_valid_token(primary):
            raise InvalidTokenError(f"Primary type is invalid: {primary_type!r}", primary_type)
        if not is_valid_token(sub):
            raise InvalidTokenError(f"Sub type is invalid: {sub_type!r}", sub_type)
        self._primary = primary
        self._sub = sub
        if isinstance(params, ParameterList):
            self._params = params.copy()
        else:
            self._params = ParameterList(params)

    @classmethod
    def parse(cls, raw: str) -> MimeType:
        """Parse a content-type string.

        Raises:
            MissingSubtypeError: No '/' before the first ';' (or no '/' at all).
            InvalidTokenError: A type or parameter token is malformed.
            UnterminatedQuoteError: A quoted parameter value never closes.
            TrailingGarbageError: Junk after the parameter list.
        """
        slash = raw.find("/")
        semi = raw.find(";")
        if slash < 0 or (0 <= semi < slash):
            raise MissingSubtypeError(f"Unable to find a sub type in {raw!r}", raw)

        if semi < 0:
            primary, sub, tail = raw[:slash], raw[slash + 1:], ""
        else:
            primary, sub, tail = raw[:slash], raw[slash + 1:semi], raw[semi:]

        try:
            params = ParameterList.parse(tail)
            return cls(primary, sub, params)
        except MimeTypeParseError as e:
            # Re-raise with the full input so callers see what failed
            raise type(e)(e.message, raw) from e

    # --- Accessors ---

    @property
    def primary_type(self) -> str:
        return self._primary

    @property
    def sub_type(self) -> str:
        return self._sub

    @property
    def base_type(self) -> str:
        """`primary/sub` without parameters."""
        return f"{self._primary}/{self._sub}"

    @property
    def params(self) -> ParameterList:
        """A copy of the parameter list."""
        return self._params.copy()

    def parameter(self, name: str) -> str | None:
        return self._params.get(name)

    # --- Copies ---

    def clone(self) -> MimeType:
        return MimeType(self._primary, self._sub, self._params)

    def with_parameter(self, name: str, value: str) -> MimeType:
        params = self._params.copy()
        params.set(name, value)
        return MimeType(self._primary, self._sub, params)

    def without_parameters(self, *names: str) -> MimeType:
        params = self._params.copy()
        for name in names:
            params.remove(name)
        return MimeType(self._primary, self._sub, params)

    # --- Comparison ---

    def matches(self, other: MimeType | str) -> bool:
        """Wildcard-aware base type comparison; parameters are ignored.

        A "*" primary type or subtype on either side matches anything. A
        string that fails to parse never matches.
        """
        if isinstance(other, str):
            try:
                other = MimeType.parse(other)
            except MimeTypeParseError:
                return False
        primary_ok = WILDCARD in (self._primary, other._primary) or self._primary == other._primary
        sub_ok = WILDCARD in (self._sub, other._sub) or self._sub == other._sub
        return primary_ok and sub_ok

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MimeType):
            return NotImplemented
        return (
            self._primary == other._primary
            and self._sub == other._sub
            and self._params == other._params
        )

    def __hash__(self) -> int:
        return hash((self._primary, self._sub, frozenset(self._params.items())))

    def __str__(self) -> str:
        return self.base_type + str(self._params)

    def __repr__(self) -> str:
        return f"MimeType({str(self)!r})"
