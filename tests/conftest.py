"""Shared pytest fixtures and configuration for pytest."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from flavormap.core.constants import DEFAULT_SOURCE_URL_ENV
from flavormap.registry.flavormap import FlavorNativeRegistry

SAMPLE_FLAVORMAP = """\
# Sample flavor map used across registry tests
UTF8_STRING=text/plain;charset=UTF-8;eoln="\\n";terminators=0
TEXT=text/plain;eoln="\\n";terminators=0
text/html=text/html;charset=UTF-8
RTF=text/rtf
FILE_NAME=application/x-java-file-list;class=file-list
PNG=image/png
image/png=image/png
"""


@pytest.fixture(autouse=True)
def _no_env_source(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FLAVORMAP_FILE_URL out of every test."""
    monkeypatch.delenv(DEFAULT_SOURCE_URL_ENV, raising=False)


@pytest.fixture(autouse=True)
def _restore_flavormap_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps working in later tests."""
    flavormap_logger = logging.getLogger("flavormap")
    handlers = list(flavormap_logger.handlers)
    level = flavormap_logger.level
    propagate = flavormap_logger.propagate
    yield
    flavormap_logger.handlers[:] = handlers
    flavormap_logger.setLevel(level)
    flavormap_logger.propagate = propagate


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """Write a flavor map source file and return its path."""
    counter = iter(range(1000))

    def _write(text: str, name: str | None = None) -> Path:
        path = tmp_path / (name or f"flavormap{next(counter)}.properties")
        path.write_bytes(text.encode("iso-8859-1"))
        return path

    return _write


@pytest.fixture
def sample_source(write_source: Callable[..., Path]) -> Path:
    return write_source(SAMPLE_FLAVORMAP, "sample.properties")


@pytest.fixture
def registry(sample_source: Path) -> FlavorNativeRegistry:
    """A registry loaded from the sample flavor map only."""
    return FlavorNativeRegistry([str(sample_source)])
