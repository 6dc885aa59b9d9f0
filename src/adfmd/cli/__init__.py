#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/cli/__init__.py
"""Command-line interface for adfmd.

Usage::

    adfmd to-markdown page.json -o page.md
    adfmd to-adf page.md -o page.json --indent 2
    adfmd view page.json --line-numbers

Global options (``--config``, ``--log-level``, ``--log-file``, ``--trace``)
go before the subcommand. Without ``--config`` a configuration file is
discovered as described in :mod:`adfmd.cli.config`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from adfmd import __version__
from adfmd.cli.commands import handle_to_adf, handle_to_markdown, handle_view
from adfmd.cli.config import CliConfig, resolve_cli_config
from adfmd.constants import EXIT_ERROR, EXIT_USAGE_ERROR
from adfmd.exceptions import ConfigError
from adfmd.logging_utils import LOG_LEVEL_NAMES, configure_logging

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, CliConfig], int]


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="adfmd",
        description="Convert between Atlassian Document Format (ADF) JSON and Markdown.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="PATH", help="Configuration file (.toml, .yaml, .yml or .json)")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_NAMES,
        default="WARNING",
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    to_markdown = subparsers.add_parser("to-markdown", help="Convert ADF JSON to Markdown")
    to_markdown.add_argument("input", help="ADF JSON file ('-' for stdin)")
    to_markdown.add_argument("-o", "--output", help="Output file (default: stdout)")
    to_markdown.set_defaults(handler=handle_to_markdown)

    to_adf = subparsers.add_parser("to-adf", help="Convert Markdown to ADF JSON")
    to_adf.add_argument("input", help="Markdown file ('-' for stdin)")
    to_adf.add_argument("-o", "--output", help="Output file (default: stdout)")
    to_adf.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    to_adf.set_defaults(handler=handle_to_adf)

    view = subparsers.add_parser("view", help="Print the styled read-view of a document")
    view.add_argument("input", help="ADF JSON (.json) or Markdown file ('-' for stdin)")
    view.add_argument("--line-numbers", action="store_true", help="Prefix each line with its number")
    view.add_argument("--plain", action="store_true", help="Print without colours or styles")
    view.set_defaults(handler=handle_view)

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Configure logging from the global options; ``--trace`` implies DEBUG."""
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # --help and --version exit with 0; usage errors with 2.
        return e.code if isinstance(e.code, int) else EXIT_USAGE_ERROR

    _setup_logging_level(parsed_args)

    try:
        config = resolve_cli_config(parsed_args.config)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if config.source is not None:
        logger.debug("Using configuration from %s", config.source)

    handler: CommandHandler = parsed_args.handler
    try:
        return handler(parsed_args, config)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
