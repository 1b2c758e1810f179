"""CLI entry point for oaimeta."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="oaimeta",
        description="Render OAI-PMH metadata records from repository metadata",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "-c",
        "--config",
        help="TOML configuration file (default: $OAI_CONFIG)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    # render
    render_parser = subparsers.add_parser("render", help="Render metadata records")
    commands.add_format_arguments(render_parser)
    render_parser.add_argument(
        "-g",
        "--graph",
        help="RDF file with the repository metadata (default: query the configured SPARQL endpoint)",
    )
    render_parser.add_argument(
        "--graph-format",
        default=None,
        help="RDF syntax of the graph file (default: guessed from extension)",
    )
    render_parser.add_argument("resources", nargs="+", help="Resource URIs")

    # filter
    filter_parser = subparsers.add_parser(
        "filter", help="Print the search query fragments of a format"
    )
    commands.add_format_arguments(filter_parser)
    filter_parser.add_argument(
        "--res-var",
        default="?res",
        help="Resource variable of the search query (default: ?res)",
    )

    return parser


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        config = Config.from_env_or_file(args.config)
        if args.command == "render":
            commands.handle_render(args, config)
        elif args.command == "filter":
            commands.handle_filter(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
