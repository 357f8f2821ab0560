"""FlavorNativeRegistry: the bidirectional map between natives and flavors.

The registry answers two questions, "which natives can carry this flavor"
and "which flavors can this native produce", with results ordered best
first. It is built lazily from flavor map sources on first use and then
grows at runtime:

- Unknown flavors are synthesized into natives by encoding their MIME type
  behind the `JAVA_DATAFLAVOR:` prefix, and encoded natives decode back into
  flavors. Both directions are recorded so the mapping stays consistent.
- A native registered for a text type surfaces the whole text matrix (every
  carrier, charset and HTML document variant) through TextFlavorExpander.
- Mappings installed with `set_*` are explicit overrides: they are returned
  exactly as given, with no synthesis, expansion or platform mappings.

Every public operation holds one re-entrant lock for its whole duration, so a
registry can be shared between threads. Results are memoized per key and the
memo for a key is dropped whenever its table entry changes.

Example:
    registry = FlavorNativeRegistry()
    registry.natives_for_flavor(FlavorIdentity.parse("text/html;class=string"))
    registry.flavors_for_native("UTF8_STRING")
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from flavormap.core.constants import (
    DEFAULT_SOURCE_URL_ENV,
    ENCODED_NATIVE_PREFIX,
    TEXT_PLAIN_BASE_TYPE,
    get_default_flavormap_path,
)
from flavormap.core.errors import (
    FlavorMapError,
    LoadError,
    MimeTypeParseError,
    NullArgumentError,
    require,
)
from flavormap.core.utils import dedupe
from flavormap.flavor.charsets import does_subtype_support_charset, standard_encodings
from flavormap.flavor.identity import CHARSET_PARAM, FlavorIdentity
from flavormap.flavor.text import TextFlavorExpander
from flavormap.mime.mimetype import MimeType
from flavormap.registry.cache import LookupCache
from flavormap.registry.properties import parse_properties
from flavormap.registry.sources import DEFAULT_HTTP_TIMEOUT, read_source

if TYPE_CHECKING:
    import httpx

    from flavormap.config.schema import Config
    from flavormap.registry.interfaces import PlatformMappings

logger = logging.getLogger(__name__)

# Text parameters that describe the native encoding, not the flavor
_TEXT_NATIVE_PARAMS = ("charset", "class", "eoln", "terminators")

K = TypeVar("K")
V = TypeVar("V")


# --- Encoding natives ---


def encode_mime_type(mime_type: str | None) -> str | None:
    """Encode a MIME type string as a native; None stays None."""
    return ENCODED_NATIVE_PREFIX + mime_type if mime_type is not None else None


def encode_flavor(flavor: FlavorIdentity | None) -> str | None:
    """Encode a flavor's full MIME type (class included) as a native."""
    return encode_mime_type(flavor.mime_type) if flavor is not None else None


def is_encoded_native(native: str | None) -> bool:
    """Check whether a native carries an encoded MIME type."""
    return native is not None and native.startswith(ENCODED_NATIVE_PREFIX)


def decode_mime_type(native: str | None) -> str | None:
    """Recover the MIME type string from an encoded native, else None."""
    if not is_encoded_native(native):
        return None
    assert native is not None
    return native[len(ENCODED_NATIVE_PREFIX):].strip()


def decode_flavor(native: str | None) -> FlavorIdentity | None:
    """Decode an encoded native into a flavor, or None if it isn't encoded.

    Raises:
        MimeTypeParseError: If the encoded MIME type doesn't parse.
        MissingRepresentationClassError: Serialized-object type without a class.
        NullArgumentError: If the encoded MIME type is empty.
    """
    decoded = decode_mime_type(native)
    return FlavorIdentity.parse(decoded) if decoded is not None else None


@dataclass(frozen=True)
class TextFlavorProperties:
    """Text encoding details declared for a native in a flavor map source."""

    charset: str | None = None
    eoln: str | None = None
    terminators: str | None = None


def _store(table: dict[K, dict[V, None]], key: K, value: V) -> None:
    """Append value to the ordered set under key; duplicates are no-ops."""
    values = table.get(key)
    if values is None:
        values = {}
        table[key] = values
    if value not in values:
        values[value] = None


class FlavorNativeRegistry:
    """Lazily initialized, memoized, bidirectional native/flavor map.

    Attributes:
        _sources: Flavor map source locations, loaded in order.
        _native_to_flavors: native -> ordered set of flavors.
        _flavor_to_natives: flavor -> ordered set of natives.
        _text_type_to_natives: text base type -> natives, from sources only.
        _explicit_keys: Natives and flavors whose mapping was set explicitly.
    """

    def __init__(
        self,
        sources: Sequence[str] | None = None,
        *,
        charsets: Iterable[str] | None = None,
        platform: PlatformMappings | None = None,
        cache_size: int = 1024,
        source_url_env: str | None = DEFAULT_SOURCE_URL_ENV,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a registry. Nothing is loaded until first use.

        Args:
            sources: Flavor map locations (paths or URLs). Defaults to the
                flavormap.properties shipped with the package.
            charsets: Charset catalogue for text expansion. Defaults to the
                standard encodings.
            platform: Optional platform mappings consulted on lookups.
            cache_size: Per-direction memo size; 0 for unbounded.
            source_url_env: Environment variable naming one more source,
                read at initialization. None disables it.
            http_timeout: Timeout in seconds for URL sources.
            transport: Optional httpx transport for URL sources.
        """
        if sources is None:
            sources = [str(get_default_flavormap_path())]
        self._sources = list(sources)
        self._source_url_env = source_url_env
        self._http_timeout = http_timeout
        self._transport = transport
        self._platform = platform
        self._expander = TextFlavorExpander(
            charsets if charsets is not None else standard_encodings()
        )

        self._lock = threading.RLock()
        self._initialized = False

        self._native_to_flavors: dict[str, dict[FlavorIdentity, None]] = {}
        self._flavor_to_natives: dict[FlavorIdentity, dict[str, None]] = {}
        self._text_type_to_natives: dict[str, dict[str, None]] = {}
        self._text_properties: dict[str, TextFlavorProperties] = {}
        self._explicit_keys: set[str | FlavorIdentity] = set()

        self._natives_cache: LookupCache[FlavorIdentity, str] = LookupCache(
            "natives_for_flavor", cache_size
        )
        self._flavors_cache: LookupCache[str, FlavorIdentity] = LookupCache(
            "flavors_for_native", cache_size
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        platform: PlatformMappings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> FlavorNativeRegistry:
        """Create a registry from the flavor_map section of a Config."""
        settings = config.flavor_map
        default_source = settings.default_source or str(get_default_flavormap_path())
        return cls(
            [default_source, *settings.extra_sources],
            charsets=standard_encodings(settings.charsets),
            platform=platform,
            cache_size=settings.cache_size,
            source_url_env=settings.source_url_env,
            http_timeout=settings.http_timeout,
            transport=transport,
        )

    # --- Static helpers ---

    encode_mime_type = staticmethod(encode_mime_type)
    encode_flavor = staticmethod(encode_flavor)
    is_encoded_native = staticmethod(is_encoded_native)
    decode_mime_type = staticmethod(decode_mime_type)
    decode_flavor = staticmethod(decode_flavor)

    @property
    def expander(self) -> TextFlavorExpander:
        return self._expander

    # --- Initialization ---

    def ensure_initialized(self) -> None:
        """Load all flavor map sources once. Safe to call repeatedly.

        Sources that can't be read or parsed are logged and skipped; the
        registry works (possibly empty) regardless.
        """
        with self._lock:
            if self._initialized:
                return
            self._initialized = True

            locations = list(self._sources)
            if self._source_url_env:
                extra = os.environ.get(self._source_url_env)
                if extra:
                    locations.append(extra)

            for location in locations:
                self._load_source(location)

            logger.info(
                "Flavor map initialized from %d source(s): %d natives, %d flavors",
                len(locations),
                len(self._native_to_flavors),
                len(self._flavor_to_natives),
            )

    def _load_source(self, location: str) -> None:
        try:
            text = read_source(
                location, timeout=self._http_timeout, transport=self._transport
            )
            pairs = parse_properties(text)
        except LoadError as e:
            logger.warning("Ignoring flavor map source %s: %s", location, e.message)
            return

        for native, value in pairs:
            self._store_entry(native, value)
        logger.debug("Loaded %d entries from %s", len(pairs), location)

    def _store_entry(self, native: str, value: str) -> None:
        try:
            mime = MimeType.parse(value)
        except MimeTypeParseError as e:
            logger.warning("Skipping flavor map entry %r: %s", native, e.message)
            return

        if mime.primary_type == "text":
            charset = mime.parameter(CHARSET_PARAM)
            if does_subtype_support_charset(mime.sub_type, charset):
                self._text_properties[native] = TextFlavorProperties(
                    charset=charset,
                    eoln=mime.parameter("eoln"),
                    terminators=mime.parameter("terminators"),
                )
            # The flavor itself never records native encoding details
            mime = mime.without_parameters(*_TEXT_NATIVE_PARAMS)

        try:
            flavor = FlavorIdentity.from_mime(mime)
        except FlavorMapError as e:
            logger.warning("Skipping flavor map entry %r: %s", native, e.message)
            return

        if flavor.primary_type == "text":
            _store(self._text_type_to_natives, flavor.base_type, native)
        _store(self._flavor_to_natives, flavor, native)
        _store(self._native_to_flavors, native, flavor)

    # --- Cache invalidation ---

    def _native_changed(self, native: str) -> None:
        self._flavors_cache.invalidate(native)
        # The set of known natives may have changed
        self._natives_cache.invalidate(None)

    def _flavor_changed(self, flavor: FlavorIdentity) -> None:
        self._natives_cache.invalidate(flavor)

    # --- Table lookups ---

    def _native_to_flavor_lookup(self, native: str) -> list[FlavorIdentity]:
        """The flavors for native, decoding an encoded native if it is unknown."""
        stored = self._native_to_flavors.get(native)
        flavors = list(stored) if stored is not None else None

        if self._platform is not None and native not in self._explicit_keys:
            platform_flavors = list(self._platform.mappings_for_native(native))
            if platform_flavors:
                flavors = dedupe(platform_flavors + (flavors or []))

        if flavors is None and is_encoded_native(native):
            decoded = decode_mime_type(native)
            try:
                flavor = FlavorIdentity.parse(decoded or "")
            except (FlavorMapError, NullArgumentError) as e:
                logger.debug("Cannot decode native %r: %s", native, e)
                return []

            self._native_to_flavors[native] = {flavor: None}
            self._native_changed(native)
            _store(self._flavor_to_natives, flavor, native)
            self._flavor_changed(flavor)
            flavors = [flavor]

        return flavors or []

    def _flavor_to_native_lookup(self, flavor: FlavorIdentity, synthesize: bool) -> list[str]:
        """The natives for flavor, synthesizing an encoded native if asked and unknown."""
        stored = self._flavor_to_natives.get(flavor)
        natives = list(stored) if stored is not None else None

        if self._platform is not None and flavor not in self._explicit_keys:
            platform_natives = list(self._platform.mappings_for_flavor(flavor))
            if platform_natives:
                natives = dedupe(platform_natives + (natives or []))

        if natives is None:
            if not synthesize:
                return []
            encoded = encode_mime_type(flavor.mime_type)
            assert encoded is not None
            self._flavor_to_natives[flavor] = {encoded: None}
            self._flavor_changed(flavor)
            _store(self._native_to_flavors, encoded, flavor)
            self._native_changed(encoded)
            logger.debug("Synthesized native %r", encoded)
            return [encoded]

        return natives

    def _text_natives(self, base_type: str) -> list[str]:
        return list(self._text_type_to_natives.get(base_type, ()))

    # --- Public lookups ---

    def natives_for_flavor(self, flavor: FlavorIdentity | None) -> list[str]:
        """Natives that can carry flavor, best first.

        An unknown, non-text flavor gets a synthesized encoded native, which
        is recorded in both directions.

        Args:
            flavor: The flavor to look up, or None for every known native
                (in no particular order).

        Returns:
            A new list the caller may modify.
        """
        with self._lock:
            self.ensure_initialized()

            cached = self._natives_cache.get(flavor)
            if cached is not None:
                return list(cached)

            if flavor is None:
                natives = list(self._native_to_flavors)
            elif flavor in self._explicit_keys:
                natives = self._flavor_to_native_lookup(flavor, synthesize=False)
            elif flavor.is_charset_text_type():
                natives = []
                if flavor.primary_type == "text":
                    natives.extend(self._text_natives(flavor.base_type))
                natives.extend(self._text_natives(TEXT_PLAIN_BASE_TYPE))
                natives = self._with_direct_natives(flavor, dedupe(natives))
            elif flavor.is_noncharset_text_type():
                natives = self._with_direct_natives(flavor, self._text_natives(flavor.base_type))
            else:
                natives = self._flavor_to_native_lookup(flavor, synthesize=True)

            self._natives_cache.put(flavor, tuple(natives))
            return list(natives)

    def _with_direct_natives(self, flavor: FlavorIdentity, configured: list[str]) -> list[str]:
        # Natives added directly rank below those from flavor map sources
        if not configured:
            return self._flavor_to_native_lookup(flavor, synthesize=True)
        return dedupe(configured + self._flavor_to_native_lookup(flavor, synthesize=False))

    def flavors_for_native(self, native: str | None) -> list[FlavorIdentity]:
        """Flavors that native can produce, best first.

        Text flavors are expanded into every equivalent carrier and charset.
        An unknown encoded native is decoded and recorded in both directions.

        Args:
            native: The native to look up, or None for the union over all
                known natives.

        Returns:
            A new list the caller may modify.
        """
        with self._lock:
            self.ensure_initialized()

            cached = self._flavors_cache.get(native)
            if cached is not None:
                return list(cached)

            result: dict[FlavorIdentity, None] = {}
            if native is None:
                for known in self.natives_for_flavor(None):
                    for flavor in self.flavors_for_native(known):
                        if flavor not in result:
                            result[flavor] = None
            elif native in self._explicit_keys:
                result = dict.fromkeys(self._native_to_flavor_lookup(native))
            else:
                for flavor in self._native_to_flavor_lookup(native):
                    if flavor not in result:
                        result[flavor] = None
                    if flavor.primary_type == "text":
                        for expanded in self._expander.expand_flavor(flavor):
                            if expanded not in result:
                                result[expanded] = None

            self._flavors_cache.put(native, tuple(result))
            return list(result)

    def natives_for_flavors(
        self, flavors: Iterable[FlavorIdentity] | None
    ) -> dict[FlavorIdentity, str | None]:
        """Map each flavor to its most preferred native (None if it has none).

        Args:
            flavors: Flavors to map, or None for every known flavor.
        """
        with self._lock:
            keys = self.flavors_for_native(None) if flavors is None else list(flavors)
            result: dict[FlavorIdentity, str | None] = {}
            for flavor in keys:
                natives = self.natives_for_flavor(flavor)
                result[flavor] = natives[0] if natives else None
            return result

    def flavors_for_natives(
        self, natives: Iterable[str] | None
    ) -> dict[str, FlavorIdentity | None]:
        """Map each native to its most preferred flavor (None if it has none).

        Args:
            natives: Natives to map, or None for every known native.
        """
        with self._lock:
            keys = self.natives_for_flavor(None) if natives is None else list(natives)
            result: dict[str, FlavorIdentity | None] = {}
            for native in keys:
                flavors = self.flavors_for_native(native)
                result[native] = flavors[0] if flavors else None
            return result

    def text_flavor_properties(self, native: str) -> TextFlavorProperties | None:
        """Charset, end-of-line and terminator settings declared for a text native."""
        with self._lock:
            self.ensure_initialized()
            return self._text_properties.get(native)

    def is_explicit(self, key: str | FlavorIdentity) -> bool:
        """Whether key's mapping was installed with a set_* call."""
        with self._lock:
            return key in self._explicit_keys

    # --- Mutators ---

    def add_unencoded_native_for_flavor(self, flavor: FlavorIdentity, native: str) -> None:
        """Map flavor to native at the lowest priority (one direction only).

        Synthesis and platform mappings still apply to flavor afterwards.

        Raises:
            NullArgumentError: If flavor or native is None or empty.
        """
        require(native, "native")
        require(flavor, "flavor")
        with self._lock:
            self.ensure_initialized()
            _store(self._flavor_to_natives, flavor, native)
            self._flavor_changed(flavor)

    def set_natives_for_flavor(self, flavor: FlavorIdentity, natives: Sequence[str]) -> None:
        """Replace flavor's mapping with exactly natives, first most preferred.

        Marks flavor as an explicit override: no synthesis, expansion or
        platform mappings apply to it from now on. Duplicate natives keep
        their first position.

        Raises:
            NullArgumentError: If flavor or natives is None, or any native is None or empty.
        """
        require(natives, "natives")
        require(flavor, "flavor")
        for native in natives:
            require(native, "native")
        with self._lock:
            self.ensure_initialized()
            self._flavor_to_natives.pop(flavor, None)
            self._flavor_to_natives[flavor] = dict.fromkeys(natives)
            self._explicit_keys.add(flavor)
            self._flavor_changed(flavor)

    def add_flavor_for_unencoded_native(self, native: str, flavor: FlavorIdentity) -> None:
        """Map native to flavor at the lowest priority (one direction only).

        Raises:
            NullArgumentError: If native or flavor is None or empty.
        """
        require(native, "native")
        require(flavor, "flavor")
        with self._lock:
            self.ensure_initialized()
            _store(self._native_to_flavors, native, flavor)
            self._native_changed(native)

    def set_flavors_for_native(self, native: str, flavors: Sequence[FlavorIdentity]) -> None:
        """Replace native's mapping with exactly flavors, first most preferred.

        Marks native as an explicit override: no decoding, text expansion or
        platform mappings apply to it from now on.

        Raises:
            NullArgumentError: If native or flavors is None, or any flavor is None.
        """
        require(native, "native")
        require(flavors, "flavors")
        for flavor in flavors:
            require(flavor, "flavor")
        with self._lock:
            self.ensure_initialized()
            self._native_to_flavors.pop(native, None)
            self._native_to_flavors[native] = dict.fromkeys(flavors)
            self._explicit_keys.add(native)
            self._native_changed(native)

    def __repr__(self) -> str:
        state = "initialized" if self._initialized else "uninitialized"
        return f"FlavorNativeRegistry({state}, sources={self._sources!r})"


def create_registry(
    config: Config,
    *,
    platform: PlatformMappings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FlavorNativeRegistry:
    """Create an uninitialized registry configured from config."""
    return FlavorNativeRegistry.from_config(config, platform=platform, transport=transport)
