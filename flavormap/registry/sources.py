"""Reading flavor map sources from files and URLs.

A source location is a filesystem path, a `file://` URL or an `http(s)://`
URL. Sources are decoded as ISO-8859-1, matching the properties format, and
every failure is reported as a LoadError so the registry can log it and move
on to the next source.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import ParseResult, unquote, urlparse

import httpx

from flavormap.core.errors import LoadError

logger = logging.getLogger(__name__)

SOURCE_ENCODING = "iso-8859-1"

DEFAULT_HTTP_TIMEOUT = 10.0


def is_remote_location(location: str) -> bool:
    """True for http(s) URLs.

    Raises:
        LoadError: If location is not a parseable URL.
    """
    return _parse_location(location).scheme in ("http", "https")


def _parse_location(location: str) -> ParseResult:
    try:
        return urlparse(location)
    except ValueError as e:
        raise LoadError(f"Malformed flavor map source location {location!r}: {e}") from e


def read_source(
    location: str,
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Read a flavor map source.

    Args:
        location: Path, file:// URL or http(s):// URL.
        timeout: Request timeout in seconds for remote sources.
        transport: Optional httpx transport (tests inject a MockTransport).

    Returns:
        The decoded text of the source.

    Raises:
        LoadError: If the source can't be found, read or fetched.
    """
    if is_remote_location(location):
        return _read_url(location, timeout, transport)

    parsed = _parse_location(location)
    if parsed.scheme == "file":
        path = Path(unquote(parsed.path))
    else:
        path = Path(location).expanduser()
    return _read_file(path)


def _read_file(path: Path) -> str:
    try:
        # Use resolve() for Windows compatibility (Git Bash path format)
        resolved = path.resolve()
        is_file = resolved.is_file()
    except (OSError, ValueError) as e:
        raise LoadError(f"Invalid flavor map source path {path}: {e}") from e
    if not is_file:
        raise LoadError(f"Flavor map source not found: {path}")

    logger.debug("Reading flavor map source: %s", resolved)
    try:
        return resolved.read_bytes().decode(SOURCE_ENCODING)
    except OSError as e:
        raise LoadError(f"Failed to read flavor map source {path}: {e}") from e


def _read_url(
    url: str,
    timeout: float,
    transport: httpx.BaseTransport | None,
) -> str:
    logger.debug("Fetching flavor map source: %s", url)
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException as e:
        raise LoadError(f"Timed out fetching flavor map source {url}") from e
    except httpx.HTTPStatusError as e:
        raise LoadError(
            f"Flavor map source {url} returned HTTP {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise LoadError(f"Failed to fetch flavor map source {url}: {e}") from e

    return response.content.decode(SOURCE_ENCODING)
