"""Entry point for the flavormap CLI."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.markup import escape

from flavormap.cli.arg_parser import parse_args
from flavormap.cli.bootstrap import configure_logging
from flavormap.cli.commands import (
    cmd_decode,
    cmd_encode,
    cmd_expand,
    cmd_flavors,
    cmd_natives,
    cmd_table,
)
from flavormap.config.loader import load_config
from flavormap.core.errors import FlavorMapError, NullArgumentError
from flavormap.display.console import get_error_console
from flavormap.registry.flavormap import create_registry

logger = logging.getLogger(__name__)


def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run one command and return its exit code."""
    args = parse_args(argv)
    error_console = get_error_console()

    try:
        config = load_config(args.config)
        configure_logging("DEBUG" if args.verbose else config.logging.level)

        if args.sources:
            flavor_map = config.flavor_map.model_copy(
                update={"extra_sources": [*config.flavor_map.extra_sources, *args.sources]}
            )
            config = config.model_copy(update={"flavor_map": flavor_map})

        if args.command == "encode":
            return cmd_encode(args.mime_type)
        if args.command == "decode":
            return cmd_decode(args.native)

        registry = create_registry(config)
        if args.command == "natives":
            return cmd_natives(registry, args.mime_type, args.plain)
        if args.command == "flavors":
            return cmd_flavors(registry, args.native, args.plain)
        if args.command == "expand":
            return cmd_expand(registry, args.base_type, args.plain)
        if args.command == "table":
            return cmd_table(registry, args.plain)

        error_console.print(f"Unknown command: {escape(args.command)}")
        return 2
    except (FlavorMapError, NullArgumentError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        error_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return 1


def main(argv: Sequence[str] | None = None) -> None:
    """Console script entry point."""
    try:
        exit_code = run(argv)
    except KeyboardInterrupt:
        exit_code = 130
    raise SystemExit(exit_code)
