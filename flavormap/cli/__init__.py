"""Command-line interface."""

from flavormap.cli.main import main, run

__all__ = ["main", "run"]
