"""Reading one JSON config layer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from flavormap.core.errors import ConfigError

logger = logging.getLogger(__name__)


def read_config_layer(path: Path, *, required: bool = False) -> dict[str, Any] | None:
    """Read a config layer as a JSON object.

    Args:
        path: The config file.
        required: Raise if the file is missing instead of returning None.

    Returns:
        The parsed object, {} for a blank file, or None for a missing
        optional layer.

    Raises:
        ConfigError: If a required layer is missing, or any layer is
            unreadable, not JSON, or not a JSON object.
    """
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Config layer not present: %s", path)
        return None

    logger.debug("Reading config layer: %s", path)
    try:
        # utf-8-sig tolerates a BOM left by Windows editors
        content = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config {path} must hold a JSON object, not {type(data).__name__}"
        )
    return data
