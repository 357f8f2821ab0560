"""Configuration loading with layered merging.

Layers, later ones deep-merged over earlier ones:
1. Global user config (~/.flavormap/config.json), or the shipped defaults
   when there is no global config
2. Project local config (<cwd>/.flavormap/config.json)
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from flavormap.config.load_utils import read_config_layer
from flavormap.config.schema import Config
from flavormap.core.constants import (
    FLAVORMAP_DIR_NAME,
    get_default_config_path,
    get_defaults_dir,
)
from flavormap.core.errors import ConfigError
from flavormap.core.utils import deep_merge

logger = logging.getLogger(__name__)

DEFAULTS_DIR = get_defaults_dir()
DEFAULT_CONFIG = DEFAULTS_DIR / "config.json"


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration, merging the global and project layers.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the project layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If a config file is missing (explicit path only), holds
            invalid JSON, or the merged config fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    global_config = get_default_config_path()
    global_data = read_config_layer(global_config)
    if global_data:
        merged = deep_merge(merged, global_data)
        loaded_from.append(global_config)
    else:
        logger.debug("No global config at: %s, using defaults", global_config)
        default_data = read_config_layer(DEFAULT_CONFIG)
        if default_data:
            merged = deep_merge(merged, default_data)
            loaded_from.append(DEFAULT_CONFIG)

    local_config = effective_cwd / FLAVORMAP_DIR_NAME / "config.json"
    # Skip when cwd is home, the local layer would be the global one again
    if local_config.resolve() != global_config.resolve():
        local_data = read_config_layer(local_config)
        if local_data:
            merged = deep_merge(merged, local_data)
            loaded_from.append(local_config)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using defaults")
        return Config()

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    data = read_config_layer(path, required=True)
    assert data is not None

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
