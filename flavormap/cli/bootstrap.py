"""Logging setup for the flavormap CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Send flavormap.* log records to stderr at the given level.

    Reconfiguring replaces the previous handler rather than adding another.

    Args:
        level: A logging level number or name such as "DEBUG".

    Returns:
        The configured flavormap namespace logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    flavormap_logger = logging.getLogger("flavormap")
    flavormap_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfigure
    flavormap_logger.handlers.clear()
    flavormap_logger.addHandler(console_handler)

    # Don't propagate to root logger
    flavormap_logger.propagate = False
    return flavormap_logger
