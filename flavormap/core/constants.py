"""Core constants and paths for flavormap.

Single source of truth for global paths and well-known names. All modules
should import from here instead of hardcoding `Path.home() / ".flavormap"`.
"""

from pathlib import Path

FLAVORMAP_DIR_NAME = ".flavormap"

# Prefix marking natives that carry an encoded MIME type
ENCODED_NATIVE_PREFIX = "JAVA_DATAFLAVOR:"

# Environment variable naming an extra flavor map source (path or URL)
DEFAULT_SOURCE_URL_ENV = "FLAVORMAP_FILE_URL"

SERIALIZED_OBJECT_MIME_TYPE = "application/x-java-serialized-object"
FILE_LIST_MIME_TYPE = "application/x-java-file-list"
REMOTE_OBJECT_MIME_TYPE = "application/x-java-remote-object"

TEXT_PLAIN_BASE_TYPE = "text/plain"
TEXT_HTML_BASE_TYPE = "text/html"


def get_flavormap_dir() -> Path:
    """Get ~/.flavormap (global config directory)."""
    return Path.home() / FLAVORMAP_DIR_NAME


def get_defaults_dir() -> Path:
    """Get package defaults directory (shipped with package)."""
    import flavormap
    return Path(flavormap.__file__).parent / "defaults"


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_flavormap_dir() / "config.json"


def get_default_flavormap_path() -> Path:
    """Get the shipped flavormap.properties file."""
    return get_defaults_dir() / "flavormap.properties"
