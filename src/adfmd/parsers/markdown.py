#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/parsers/markdown.py
"""Markdown to ADF parser.

The parser keeps a line cursor (:class:`ParseContext`) and, at each position,
lets the registry's block handlers compete for the current line in a fixed
priority order: code fence, heading, horizontal rule, blockquote, task list,
bullet list, ordered list, table and finally paragraph. Task lists must be
tried before bullet lists because ``- [ ] x`` is also a valid bullet line.

Inline spans inside blocks are handled by :mod:`adfmd.parsers.inline`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from adfmd.ast.nodes import Document
from adfmd.context import IdFactory, ParseContext, uuid_id_factory
from adfmd.exceptions import ParsingError, ValidationError
from adfmd.options.markdown import MarkdownParserOptions
from adfmd.parsers.blocks import parse_blocks
from adfmd.registry import ComponentRegistry, create_default_registry

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class MarkdownParser:
    """Convert Markdown text to an ADF :class:`Document`.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default None
        Parser options
    registry : ComponentRegistry or None, default None
        Handler lookup; a new default registry is built when omitted
    id_factory : callable or None, default None
        Source of ``localId`` values for task lists and task items. Defaults
        to random UUID4 strings; pass a deterministic factory for
        reproducible output.

    Examples
    --------
        >>> from adfmd.context import sequential_id_factory
        >>> parser = MarkdownParser(id_factory=sequential_id_factory())
        >>> doc = parser.parse("- [x] ship it")
        >>> doc.content[0].attrs
        {'localId': 'id-1'}

    """

    def __init__(
        self,
        options: Optional[MarkdownParserOptions] = None,
        registry: Optional[ComponentRegistry] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        """Initialize the parser with options."""
        if options is not None and not isinstance(options, MarkdownParserOptions):
            raise ValidationError(
                f"markdown parser expects MarkdownParserOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()
        self.registry = registry if registry is not None else create_default_registry()
        self.id_factory: IdFactory = id_factory or uuid_id_factory

    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse Markdown into a document.

        Parameters
        ----------
        input_data : str or bytes
            Markdown text; bytes are decoded as UTF-8 with replacement of
            undecodable sequences

        Returns
        -------
        Document
            Parsed document; empty input gives an empty document

        """
        if isinstance(input_data, bytes):
            input_data = input_data.decode("utf-8", errors="replace")

        lines = normalize_line_endings(input_data).split("\n")
        ctx = ParseContext(lines=lines, registry=self.registry, id_factory=self.id_factory, options=self.options)
        content = parse_blocks(ctx)
        logger.debug("Parsed %d lines of Markdown into %d top-level blocks", len(lines), len(content))
        return Document(content=content)

    def parse_file(self, path: Union[str, Path]) -> Document:
        """Read and parse a UTF-8 Markdown file.

        Raises
        ------
        ParsingError
            If the file cannot be read

        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ParsingError(f"Could not read Markdown file {path}: {e}", original_error=e) from e
        return self.parse(data)
