"""Argument parsing for the flavormap CLI."""

import argparse
from collections.abc import Sequence
from pathlib import Path


def add_plain_arg(parser: argparse.ArgumentParser) -> None:
    """Add --plain argument to a parser."""
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print one result per line instead of a table",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="flavormap",
        description="Look up mappings between data flavors and platform clipboard natives",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Config file to use instead of the global/project layers",
    )
    parser.add_argument(
        "--source",
        action="append",
        dest="sources",
        metavar="PATH_OR_URL",
        help="Extra flavor map source, loaded after configured ones (can be repeated)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    natives_parser = subparsers.add_parser(
        "natives",
        help="List natives for a flavor, most preferred first",
    )
    natives_parser.add_argument("mime_type", help="Flavor MIME type, e.g. 'text/html;class=string'")
    add_plain_arg(natives_parser)

    flavors_parser = subparsers.add_parser(
        "flavors",
        help="List flavors for a native, most preferred first",
    )
    flavors_parser.add_argument("native", help="Native name, e.g. UTF8_STRING")
    add_plain_arg(flavors_parser)

    expand_parser = subparsers.add_parser(
        "expand",
        help="List every flavor equivalent to a text type",
    )
    expand_parser.add_argument("base_type", help="Text type, e.g. text/html")
    add_plain_arg(expand_parser)

    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode a flavor MIME type as a native",
    )
    encode_parser.add_argument("mime_type", help="Flavor MIME type")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode an encoded native back into a flavor",
    )
    decode_parser.add_argument("native", help="Encoded native (JAVA_DATAFLAVOR:...)")

    table_parser = subparsers.add_parser(
        "table",
        help="Show every known native with its preferred flavor",
    )
    add_plain_arg(table_parser)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
