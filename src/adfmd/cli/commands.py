#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/cli/commands.py
"""Subcommand handlers for the adfmd CLI.

Each handler receives the parsed arguments and the resolved
:class:`~adfmd.cli.config.CliConfig` and returns a process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from adfmd.ast.nodes import Document
from adfmd.ast.serialization import document_to_json, json_to_document
from adfmd.cli.config import CliConfig
from adfmd.constants import EXIT_ERROR, EXIT_FILE_ERROR, EXIT_SUCCESS
from adfmd.exceptions import DocumentFormatError, InputError, RenderingError
from adfmd.parsers.markdown import MarkdownParser
from adfmd.readview import DisplayLine
from adfmd.registry import ComponentRegistry, create_default_registry
from adfmd.renderers.base import BaseRenderer
from adfmd.renderers.markdown import MarkdownRenderer
from adfmd.renderers.readview import ReadViewRenderer

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def read_input(source: str) -> str:
    """Read a UTF-8 input file, or standard input for ``-``.

    Raises
    ------
    InputError
        If the file does not exist or cannot be read

    """
    if source == STDIN_MARKER:
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise InputError(f"Input file not found: {source}", input_path=source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read {source}: {e}", input_path=source, original_error=e) from e


def write_output(text: str, output: Optional[str]) -> None:
    """Write to ``output`` if given, else to standard output."""
    if output and output != STDIN_MARKER:
        BaseRenderer.write_text_output(text, output)
        logger.info("Wrote %s", output)
    else:
        sys.stdout.write(text)


def looks_like_adf(source: str, data: str) -> bool:
    """Whether an input holds ADF JSON rather than Markdown."""
    if source != STDIN_MARKER:
        return Path(source).suffix.lower() == ".json"
    return data.lstrip().startswith("{")


def load_input_document(source: str, config: CliConfig, registry: ComponentRegistry) -> Document:
    """Read ``source`` as ADF JSON or Markdown, whichever it holds."""
    data = read_input(source)
    if looks_like_adf(source, data):
        return json_to_document(data)
    return MarkdownParser(options=config.parser, registry=registry).parse(data)


def _report(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def handle_to_markdown(args: argparse.Namespace, config: CliConfig) -> int:
    """Convert an ADF JSON file to Markdown."""
    try:
        doc = json_to_document(read_input(args.input))
        markdown = MarkdownRenderer(options=config.markdown).render_to_string(doc)
        write_output(markdown, args.output)
    except InputError as e:
        _report(str(e))
        return EXIT_FILE_ERROR
    except DocumentFormatError as e:
        _report(f"Invalid ADF document: {e.message}")
        return EXIT_ERROR
    except RenderingError as e:
        _report(e.message)
        return EXIT_FILE_ERROR
    return EXIT_SUCCESS


def handle_to_adf(args: argparse.Namespace, config: CliConfig) -> int:
    """Convert a Markdown file to ADF JSON."""
    try:
        doc = MarkdownParser(options=config.parser).parse(read_input(args.input))
        write_output(document_to_json(doc, indent=args.indent) + "\n", args.output)
    except InputError as e:
        _report(str(e))
        return EXIT_FILE_ERROR
    except RenderingError as e:
        _report(e.message)
        return EXIT_FILE_ERROR
    return EXIT_SUCCESS


def _print_lines(lines: list[DisplayLine], line_numbers: bool, plain: bool) -> None:
    if plain:
        for index, line in enumerate(lines, start=1):
            prefix = f"{index:>4} " if line_numbers else ""
            print(f"{prefix}{line.content}")
        return

    from rich.console import Console
    from rich.text import Text

    console = Console(highlight=False)
    for index, line in enumerate(lines, start=1):
        text = Text()
        if line_numbers:
            text.append(f"{index:>4} ", style="dim")
        text.append(line.content, style=line.style.to_rich() if line.style else "")
        console.print(text, soft_wrap=True)


def handle_view(args: argparse.Namespace, config: CliConfig) -> int:
    """Print the read-view display lines of an ADF or Markdown file."""
    registry = create_default_registry()
    try:
        doc = load_input_document(args.input, config, registry)
    except InputError as e:
        _report(str(e))
        return EXIT_FILE_ERROR
    except DocumentFormatError as e:
        _report(f"Invalid ADF document: {e.message}")
        return EXIT_ERROR

    lines = ReadViewRenderer(options=config.read_view, registry=registry).render_lines(doc)
    _print_lines(lines, line_numbers=args.line_numbers, plain=args.plain)
    return EXIT_SUCCESS
