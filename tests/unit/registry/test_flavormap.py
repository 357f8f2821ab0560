"""Tests for FlavorNativeRegistry lookups, synthesis and mutation."""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import httpx
import pytest

from flavormap.config.schema import Config, FlavorMapConfig
from flavormap.core.constants import DEFAULT_SOURCE_URL_ENV
from flavormap.core.errors import NullArgumentError
from flavormap.flavor.identity import FILE_LIST_FLAVOR, STRING_FLAVOR, FlavorIdentity
from flavormap.flavor.kinds import UNICODE_TEXT_KINDS
from flavormap.registry.flavormap import (
    FlavorNativeRegistry,
    TextFlavorProperties,
    create_registry,
    encode_flavor,
)

PNG = FlavorIdentity.parse("image/png")


def flavor(mime_type: str) -> FlavorIdentity:
    return FlavorIdentity.parse(mime_type)


class StaticPlatform:
    """PlatformMappings backed by two dicts."""

    def __init__(
        self,
        for_native: dict[str, Sequence[FlavorIdentity]] | None = None,
        for_flavor: dict[FlavorIdentity, Sequence[str]] | None = None,
    ) -> None:
        self.for_native = for_native or {}
        self.for_flavor = for_flavor or {}
        self.native_calls: list[str] = []

    def mappings_for_native(self, native: str) -> Sequence[FlavorIdentity]:
        self.native_calls.append(native)
        return self.for_native.get(native, [])

    def mappings_for_flavor(self, flavor: FlavorIdentity) -> Sequence[str]:
        return self.for_flavor.get(flavor, [])


class TestInitialization:
    """Tests for loading flavor map sources."""

    def test_lazy_until_first_lookup(self, registry: FlavorNativeRegistry) -> None:
        assert "uninitialized" in repr(registry)
        registry.natives_for_flavor(PNG)
        assert "uninitialized" not in repr(registry)

    def test_ensure_initialized_is_idempotent(self, registry: FlavorNativeRegistry) -> None:
        registry.ensure_initialized()
        first = registry.natives_for_flavor(None)
        registry.ensure_initialized()
        assert registry.natives_for_flavor(None) == first
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]

    def test_all_natives(self, registry: FlavorNativeRegistry) -> None:
        assert set(registry.natives_for_flavor(None)) == {
            "UTF8_STRING", "TEXT", "text/html", "RTF", "FILE_NAME", "PNG", "image/png",
        }

    def test_text_properties_recorded(self, registry: FlavorNativeRegistry) -> None:
        assert registry.text_flavor_properties("UTF8_STRING") == TextFlavorProperties(
            charset="UTF-8", eoln="\n", terminators="0"
        )
        assert registry.text_flavor_properties("TEXT") == TextFlavorProperties(
            charset=None, eoln="\n", terminators="0"
        )
        assert registry.text_flavor_properties("RTF") is None
        assert registry.text_flavor_properties("PNG") is None

    def test_text_parameters_stripped_from_flavor(self, registry: FlavorNativeRegistry) -> None:
        first = registry.flavors_for_native("UTF8_STRING")[0]
        assert first.mime_type == "text/plain; class=input-stream"

    def test_malformed_lines_skipped(
        self, write_source: Callable[..., Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="flavormap")
        path = write_source(
            "BAD=not a mime\n"
            "OBJ=application/x-java-serialized-object\n"
            "GOOD=image/png\n"
        )
        registry = FlavorNativeRegistry([str(path)])
        assert registry.natives_for_flavor(None) == ["GOOD"]
        assert "Skipping flavor map entry 'BAD'" in caplog.text
        assert "Skipping flavor map entry 'OBJ'" in caplog.text

    def test_failed_source_contributes_nothing(
        self,
        write_source: Callable[..., Path],
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.WARNING, logger="flavormap")
        broken = write_source("EARLY=image/gif\nBROKEN=\\u12zz\n")
        good = write_source("PNG=image/png\n")
        missing = tmp_path / "missing.properties"
        registry = FlavorNativeRegistry([str(missing), str(broken), str(good)])
        assert registry.natives_for_flavor(None) == ["PNG"]
        assert caplog.text.count("Ignoring flavor map source") == 2

    def test_no_sources_still_works(self, tmp_path: Path) -> None:
        registry = FlavorNativeRegistry([str(tmp_path / "missing.properties")])
        assert registry.natives_for_flavor(PNG) == [encode_flavor(PNG)]

    def test_env_source_loaded_last(
        self,
        registry: FlavorNativeRegistry,
        write_source: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        extra = write_source("MY_PNG=image/png\n")
        monkeypatch.setenv(DEFAULT_SOURCE_URL_ENV, str(extra))
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png", "MY_PNG"]

    def test_env_source_disabled(
        self,
        sample_source: Path,
        write_source: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        extra = write_source("MY_PNG=image/png\n")
        monkeypatch.setenv(DEFAULT_SOURCE_URL_ENV, str(extra))
        registry = FlavorNativeRegistry([str(sample_source)], source_url_env=None)
        assert "MY_PNG" not in registry.natives_for_flavor(None)

    def test_malformed_env_source_is_ignored(
        self,
        registry: FlavorNativeRegistry,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A bad env var location is logged; lookups keep working."""
        caplog.set_level(logging.WARNING, logger="flavormap")
        monkeypatch.setenv(DEFAULT_SOURCE_URL_ENV, "http://[::1/flavormap.properties")
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]
        assert "Ignoring flavor map source" in caplog.text

    def test_url_source(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"REMOTE_PNG=image/png\n")

        registry = FlavorNativeRegistry(
            ["https://example.com/flavormap.properties"],
            transport=httpx.MockTransport(handler),
        )
        assert registry.natives_for_flavor(PNG) == ["REMOTE_PNG"]

    def test_from_config(self, sample_source: Path) -> None:
        config = Config(
            flavor_map=FlavorMapConfig(default_source=str(sample_source), charsets=["cp1252"])
        )
        registry = create_registry(config)
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]
        assert registry.expander.charsets[-1] == "cp1252"


class TestNativesForFlavor:
    """Tests for natives_for_flavor()."""

    def test_configured_mapping(self, registry: FlavorNativeRegistry) -> None:
        assert registry.natives_for_flavor(FILE_LIST_FLAVOR) == ["FILE_NAME"]

    def test_wildcard_flavor_finds_concrete_entry(self, registry: FlavorNativeRegistry) -> None:
        assert registry.natives_for_flavor(flavor("image/*")) == ["PNG", "image/png"]

    def test_charset_text_uses_base_type_then_plain(self, registry: FlavorNativeRegistry) -> None:
        html = flavor("text/html; class=string")
        assert registry.natives_for_flavor(html) == ["text/html", "UTF8_STRING", "TEXT"]

    def test_string_flavor_maps_to_plain_text_natives(self, registry: FlavorNativeRegistry) -> None:
        assert registry.natives_for_flavor(STRING_FLAVOR) == ["UTF8_STRING", "TEXT"]

    def test_noncharset_text_uses_base_type(self, registry: FlavorNativeRegistry) -> None:
        assert registry.natives_for_flavor(flavor("text/rtf; class=byte-array")) == ["RTF"]

    def test_unknown_flavor_synthesizes_encoded_native(
        self, registry: FlavorNativeRegistry
    ) -> None:
        custom = flavor("application/x-custom")
        natives = registry.natives_for_flavor(custom)
        assert natives == ["JAVA_DATAFLAVOR:application/x-custom; class=input-stream"]
        assert natives[0] in registry.natives_for_flavor(None)
        assert registry.flavors_for_native(natives[0]) == [custom]

    def test_unknown_charset_text_falls_back_to_plain_natives(
        self, registry: FlavorNativeRegistry
    ) -> None:
        csv = flavor("text/csv; charset=UTF-8")
        assert registry.natives_for_flavor(csv) == ["UTF8_STRING", "TEXT"]

    def test_unknown_opaque_text_synthesizes(self, registry: FlavorNativeRegistry) -> None:
        opaque = flavor("text/x-opaque")
        assert registry.natives_for_flavor(opaque) == [encode_flavor(opaque)]

    def test_results_are_copies(self, registry: FlavorNativeRegistry) -> None:
        registry.natives_for_flavor(PNG).append("junk")
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]

    def test_platform_mappings_prepended(self, sample_source: Path) -> None:
        platform = StaticPlatform(for_flavor={PNG: ["PLATFORM_PNG", "PNG"]})
        registry = FlavorNativeRegistry([str(sample_source)], platform=platform)
        assert registry.natives_for_flavor(PNG) == ["PLATFORM_PNG", "PNG", "image/png"]

    def test_platform_mapping_prevents_synthesis(self, sample_source: Path) -> None:
        custom = flavor("application/x-custom")
        platform = StaticPlatform(for_flavor={custom: ["CUSTOM"]})
        registry = FlavorNativeRegistry([str(sample_source)], platform=platform)
        assert registry.natives_for_flavor(custom) == ["CUSTOM"]


class TestFlavorsForNative:
    """Tests for flavors_for_native()."""

    def test_non_text_native(self, registry: FlavorNativeRegistry) -> None:
        assert registry.flavors_for_native("PNG") == [PNG]

    def test_text_native_expands(self, registry: FlavorNativeRegistry) -> None:
        flavors = registry.flavors_for_native("TEXT")
        assert flavors[0] == flavor("text/plain")
        assert STRING_FLAVOR in flavors
        assert len(flavors) == 1 + len(registry.expander.expand("text/plain", True))
        assert len(set(flavors)) == len(flavors)

    def test_repeated_lookups_are_stable(self, registry: FlavorNativeRegistry) -> None:
        """Without mutation in between, repeated lookups give the same ordered list."""
        first = registry.flavors_for_native("TEXT")
        second = registry.flavors_for_native("TEXT")
        assert second == first
        assert [repr(f) for f in second] == [repr(f) for f in first]
        assert second is not first

        registry.add_flavor_for_unencoded_native("TEXT", PNG)
        after = registry.flavors_for_native("TEXT")
        assert [repr(f) for f in after[: len(first)]] == [repr(f) for f in first]
        assert after[len(first)] == PNG

    def test_html_native_expands_per_document(self, registry: FlavorNativeRegistry) -> None:
        flavors = registry.flavors_for_native("text/html")
        documents = {f.parameter("document") for f in flavors[1:]}
        assert documents == {"all", "selection", "fragment"}

    def test_opaque_text_native(self, registry: FlavorNativeRegistry) -> None:
        flavors = registry.flavors_for_native("RTF")
        assert [f.kind.name for f in flavors] == ["input-stream", "byte-buffer", "byte-array"]

    def test_unknown_native(self, registry: FlavorNativeRegistry) -> None:
        assert registry.flavors_for_native("NOPE") == []

    def test_encoded_native_decodes_both_ways(self, registry: FlavorNativeRegistry) -> None:
        native = "JAVA_DATAFLAVOR:image/x-thing; class=byte-array"
        decoded = registry.flavors_for_native(native)
        assert decoded == [flavor("image/x-thing; class=byte-array")]
        assert registry.natives_for_flavor(decoded[0]) == [native]

    def test_encoded_text_native_expands(self, registry: FlavorNativeRegistry) -> None:
        native = "JAVA_DATAFLAVOR:text/plain; charset=UTF-8; class=reader"
        flavors = registry.flavors_for_native(native)
        assert flavors[0] == flavor("text/plain; class=reader")
        assert flavors[1] is STRING_FLAVOR
        # The reader/Unicode expansion equals the decoded flavor itself
        assert len(flavors) == len(registry.expander.expand("text/plain", True))
        assert [f.kind for f in flavors[2:5]] == list(UNICODE_TEXT_KINDS[1:])

    @pytest.mark.parametrize(
        "native",
        ["JAVA_DATAFLAVOR:garbage", "JAVA_DATAFLAVOR:", "JAVA_DATAFLAVOR:application/x-java-serialized-object"],
    )
    def test_malformed_encoded_native_has_no_flavors(
        self, registry: FlavorNativeRegistry, native: str
    ) -> None:
        assert registry.flavors_for_native(native) == []
        assert native not in registry.natives_for_flavor(None)

    def test_union_over_all_natives(self, registry: FlavorNativeRegistry) -> None:
        union = registry.flavors_for_native(None)
        assert PNG in union
        assert FILE_LIST_FLAVOR in union
        assert STRING_FLAVOR in union
        assert len(set(union)) == len(union)

    def test_platform_mappings_prepended(self, sample_source: Path) -> None:
        platform_flavor = flavor("image/x-platform")
        platform = StaticPlatform(for_native={"PNG": [platform_flavor]})
        registry = FlavorNativeRegistry([str(sample_source)], platform=platform)
        assert registry.flavors_for_native("PNG") == [platform_flavor, PNG]


class TestBulkLookups:
    """Tests for natives_for_flavors() and flavors_for_natives()."""

    def test_natives_for_flavors(self, registry: FlavorNativeRegistry) -> None:
        result = registry.natives_for_flavors([PNG, FILE_LIST_FLAVOR])
        assert result == {PNG: "PNG", FILE_LIST_FLAVOR: "FILE_NAME"}

    def test_flavor_without_natives_maps_to_none(self, registry: FlavorNativeRegistry) -> None:
        empty = flavor("application/x-empty")
        registry.set_natives_for_flavor(empty, [])
        assert registry.natives_for_flavors([empty]) == {empty: None}

    def test_flavors_for_natives(self, registry: FlavorNativeRegistry) -> None:
        result = registry.flavors_for_natives(["PNG", "NOPE"])
        assert result == {"PNG": PNG, "NOPE": None}

    def test_none_means_everything(self, registry: FlavorNativeRegistry) -> None:
        all_natives = registry.flavors_for_natives(None)
        assert set(all_natives) == set(registry.natives_for_flavor(None))
        assert all_natives["FILE_NAME"] == FILE_LIST_FLAVOR
        all_flavors = registry.natives_for_flavors(None)
        assert all_flavors[PNG] == "PNG"


class TestMutators:
    """Tests for add_* and set_* mutators."""

    def test_add_native_appends_lowest_priority(self, registry: FlavorNativeRegistry) -> None:
        registry.natives_for_flavor(PNG)
        registry.add_unencoded_native_for_flavor(PNG, "NEW_PNG")
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png", "NEW_PNG"]

    def test_add_duplicate_native_is_noop(self, registry: FlavorNativeRegistry) -> None:
        registry.add_unencoded_native_for_flavor(PNG, "PNG")
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]

    def test_added_text_native_ranks_after_configured(
        self, registry: FlavorNativeRegistry
    ) -> None:
        text = flavor("text/plain; class=string")
        registry.add_unencoded_native_for_flavor(text, "MY_TEXT")
        assert registry.natives_for_flavor(text) == ["UTF8_STRING", "TEXT", "MY_TEXT"]

    def test_add_native_suppresses_synthesis(self, registry: FlavorNativeRegistry) -> None:
        custom = flavor("application/x-custom")
        registry.add_unencoded_native_for_flavor(custom, "CUSTOM")
        assert registry.natives_for_flavor(custom) == ["CUSTOM"]

    def test_add_is_one_directional(self, registry: FlavorNativeRegistry) -> None:
        registry.add_unencoded_native_for_flavor(PNG, "NEW_PNG")
        assert registry.flavors_for_native("NEW_PNG") == []

    def test_add_flavor_appends(self, registry: FlavorNativeRegistry) -> None:
        gif = flavor("image/gif")
        registry.flavors_for_native("PNG")
        registry.add_flavor_for_unencoded_native("PNG", gif)
        assert registry.flavors_for_native("PNG") == [PNG, gif]

    def test_add_flavor_for_new_native_updates_all_natives(
        self, registry: FlavorNativeRegistry
    ) -> None:
        registry.natives_for_flavor(None)
        registry.add_flavor_for_unencoded_native("GIF", flavor("image/gif"))
        assert "GIF" in registry.natives_for_flavor(None)

    def test_set_natives_replaces(self, registry: FlavorNativeRegistry) -> None:
        registry.natives_for_flavor(PNG)
        registry.set_natives_for_flavor(PNG, ["B", "A", "B"])
        assert registry.natives_for_flavor(PNG) == ["B", "A"]
        assert registry.is_explicit(PNG)

    def test_set_empty_natives_suppresses_synthesis(
        self, registry: FlavorNativeRegistry
    ) -> None:
        custom = flavor("application/x-custom")
        registry.set_natives_for_flavor(custom, [])
        assert registry.natives_for_flavor(custom) == []
        assert encode_flavor(custom) not in registry.natives_for_flavor(None)

    def test_explicit_text_flavor_skips_text_natives(
        self, registry: FlavorNativeRegistry
    ) -> None:
        text = flavor("text/plain; class=string")
        registry.set_natives_for_flavor(text, ["ONLY"])
        assert registry.natives_for_flavor(text) == ["ONLY"]

    def test_explicit_flavor_skips_platform(self, sample_source: Path) -> None:
        platform = StaticPlatform(for_flavor={PNG: ["PLATFORM_PNG"]})
        registry = FlavorNativeRegistry([str(sample_source)], platform=platform)
        registry.set_natives_for_flavor(PNG, ["MINE"])
        assert registry.natives_for_flavor(PNG) == ["MINE"]

    def test_set_flavors_replaces_without_expansion(
        self, registry: FlavorNativeRegistry
    ) -> None:
        text = flavor("text/plain; charset=UTF-8")
        registry.flavors_for_native("TEXT")
        registry.set_flavors_for_native("TEXT", [text])
        assert registry.flavors_for_native("TEXT") == [text]
        assert registry.is_explicit("TEXT")

    def test_set_flavors_on_encoded_native_skips_decoding(
        self, registry: FlavorNativeRegistry
    ) -> None:
        native = encode_flavor(flavor("image/x-thing"))
        assert native is not None
        registry.set_flavors_for_native(native, [])
        assert registry.flavors_for_native(native) == []

    def test_explicit_native_skips_platform(self, sample_source: Path) -> None:
        platform = StaticPlatform(for_native={"PNG": [flavor("image/x-platform")]})
        registry = FlavorNativeRegistry([str(sample_source)], platform=platform)
        registry.set_flavors_for_native("PNG", [PNG])
        assert registry.flavors_for_native("PNG") == [PNG]
        assert "PNG" not in platform.native_calls

    @pytest.mark.parametrize(
        "call",
        [
            lambda r: r.add_unencoded_native_for_flavor(None, "X"),
            lambda r: r.add_unencoded_native_for_flavor(PNG, None),
            lambda r: r.add_unencoded_native_for_flavor(PNG, ""),
            lambda r: r.set_natives_for_flavor(None, ["X"]),
            lambda r: r.set_natives_for_flavor(PNG, None),
            lambda r: r.set_natives_for_flavor(PNG, ["X", None]),
            lambda r: r.add_flavor_for_unencoded_native(None, PNG),
            lambda r: r.add_flavor_for_unencoded_native("X", None),
            lambda r: r.set_flavors_for_native("", [PNG]),
            lambda r: r.set_flavors_for_native("X", None),
            lambda r: r.set_flavors_for_native("X", [PNG, None]),
        ],
    )
    def test_null_arguments_rejected(
        self, registry: FlavorNativeRegistry, call: Callable[[FlavorNativeRegistry], None]
    ) -> None:
        with pytest.raises(NullArgumentError):
            call(registry)

    def test_rejected_set_leaves_mapping_unchanged(
        self, registry: FlavorNativeRegistry
    ) -> None:
        with pytest.raises(NullArgumentError):
            registry.set_natives_for_flavor(PNG, ["X", None])  # type: ignore[list-item]
        assert registry.natives_for_flavor(PNG) == ["PNG", "image/png"]
