#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/options/markdown.py
"""Configuration options for Markdown parsing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from adfmd.constants import (
    DEFAULT_BULLET_MARKER,
    DEFAULT_COLLAPSE_BLANK_LINES,
    DEFAULT_DATE_FORMAT,
    DEFAULT_LIST_INDENT_WIDTH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
    BulletMarker,
)
from adfmd.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-ADF parsing.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to recognise pipe tables. When disabled, table lines are
        read as paragraph text.
    parse_task_lists : bool, default True
        Whether to recognise ``- [ ]`` / ``- [x]`` task items. When disabled,
        such lines become plain bullet items.

    """

    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse pipe tables into table nodes"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Parse '- [ ]' lines into task lists"},
    )


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for ADF-to-Markdown rendering.

    Parameters
    ----------
    bullet_marker : {"-", "*"}, default "-"
        Marker used for bullet list items.
    list_indent_width : int, default 2
        Spaces of indentation per nested list level.
    collapse_blank_lines : bool, default False
        Collapse runs of three or more newlines into a single blank line.
    date_format : str, default "%Y-%m-%d"
        ``strftime`` format for ``date`` nodes (rendered in UTC).

    """

    bullet_marker: BulletMarker = field(
        default=DEFAULT_BULLET_MARKER,
        metadata={"help": "Bullet list marker ('-' or '*')"},
    )
    list_indent_width: int = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={"help": "Spaces per nested list level"},
    )
    collapse_blank_lines: bool = field(
        default=DEFAULT_COLLAPSE_BLANK_LINES,
        metadata={"help": "Collapse runs of blank lines in the output"},
    )
    date_format: str = field(
        default=DEFAULT_DATE_FORMAT,
        metadata={"help": "strftime format for date nodes"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.bullet_marker not in ("-", "*"):
            raise ValueError(f"bullet_marker must be '-' or '*', got {self.bullet_marker!r}")
        if self.list_indent_width < 0:
            raise ValueError(f"list_indent_width must be non-negative, got {self.list_indent_width}")
