"""Configuration loading and validation."""

from flavormap.config.loader import DEFAULT_CONFIG, DEFAULTS_DIR, load_config
from flavormap.config.schema import Config, FlavorMapConfig, LoggingConfig

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULTS_DIR",
    "FlavorMapConfig",
    "LoggingConfig",
    "load_config",
]
