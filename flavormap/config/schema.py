"""Pydantic models for flavormap configuration validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flavormap.core.constants import DEFAULT_SOURCE_URL_ENV
from flavormap.flavor.charsets import is_encoding_supported


class FlavorMapConfig(BaseModel):
    """Configuration for the flavor/native registry.

    Example in config.json:
        "flavor_map": {
            "extra_sources": ["~/.flavormap/site.properties"],
            "charsets": ["windows-1252"],
            "cache_size": 256
        }
    """

    model_config = ConfigDict(extra="forbid")

    default_source: str | None = None
    """Primary flavor map source (path or URL). None = the packaged defaults."""

    extra_sources: list[str] = []
    """Sources loaded after the default one, in order."""

    source_url_env: str | None = DEFAULT_SOURCE_URL_ENV
    """Environment variable naming one more source, loaded last. None disables it."""

    charsets: list[str] = Field(
        default_factory=list,
        description="Charsets expanded in addition to the standard encodings",
    )

    cache_size: int = Field(
        default=1024,
        ge=0,
        description="Memoized lookups kept per direction (0 = unbounded)",
    )

    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for http(s) flavor map sources",
    )

    @field_validator("charsets")
    @classmethod
    def validate_charsets(cls, v: list[str]) -> list[str]:
        """Reject charset names the codec registry can't resolve."""
        unknown = [name for name in v if not is_encoding_supported(name)]
        if unknown:
            raise ValueError(f"Unsupported charsets: {', '.join(unknown)}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for log output.

    Example in config.json:
        "logging": {"level": "DEBUG"}
    """

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    """Level for the flavormap logger namespace."""


class Config(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "flavor_map": {
                "extra_sources": ["https://example.com/flavormap.properties"],
                "http_timeout": 5.0
            },
            "logging": {"level": "INFO"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    flavor_map: FlavorMapConfig = FlavorMapConfig()
    logging: LoggingConfig = LoggingConfig()
