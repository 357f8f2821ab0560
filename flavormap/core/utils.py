"""Shared utility functions for flavormap.

These are common operations used across multiple modules that don't
fit into more specific categories.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dicts. Override values take precedence.

    Lists are REPLACED, not extended, so a project config can clear a list
    such as `extra_sources` that the global config populated.

    Merge rules:
    - Dicts are recursively merged
    - Lists are REPLACED (override wins completely)
    - Other values are overwritten

    Args:
        base: Base dictionary.
        override: Dictionary with values to overlay.

    Returns:
        New merged dictionary (original dicts not modified).
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def dedupe(items: Any) -> list[Any]:
    """Return items as a list with later duplicates dropped (first occurrence wins)."""
    return list(dict.fromkeys(items))
