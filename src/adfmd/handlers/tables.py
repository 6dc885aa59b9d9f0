#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/tables.py
"""Handlers for tables, rows and cells.

Tables are written as GitHub-style pipe tables. The first row is treated as
the header and followed by a ``| --- |`` separator; when parsing, the first
data row becomes ``tableHeader`` cells and every later row ``tableCell``
cells. Column alignment is not preserved.
"""

from __future__ import annotations

import copy
import re

from adfmd.ast.nodes import Node
from adfmd.constants import DEFAULT_TABLE_ATTRS, PARSE_PRIORITY_TABLE, QUOTE_PREFIX, TABLE_SEPARATOR_CELL
from adfmd.context import ParseContext, ParseResult, RenderContext
from adfmd.handlers.base import project_children, render_children
from adfmd.parsers.inline import parse_inline
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler

TABLE_ROW_RE = re.compile(r"^\|.*\|$")
# Needs at least one dash so a row of blank cells is not mistaken for it.
TABLE_SEPARATOR_RE = re.compile(r"^\|(?=.*-)[\s\-:|]+\|$")


def split_cells(line: str) -> list[str]:
    """Split a ``| a | b |`` row into trimmed cell texts.

    Examples
    --------
        >>> split_cells("| a | **b** |")
        ['a', '**b**']

    """
    return [cell.strip() for cell in line[1:-1].split("|")]


def _cell_markdown(cell: Node, ctx: RenderContext) -> str:
    return render_children(cell.content, ctx).strip() or " "


def table_to_markdown(node: Node, ctx: RenderContext) -> str:
    lines: list[str] = []
    for row in node.children:
        if row.type != "tableRow":
            continue
        cells = [_cell_markdown(cell, ctx) for cell in row.children]
        lines.append(f"| {' | '.join(cells)} |")
        if len(lines) == 1:
            lines.append(f"| {' | '.join(TABLE_SEPARATOR_CELL for _ in cells)} |")
    if not lines:
        return ""
    return "\n".join(lines) + "\n\n"


def table_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


def table_can_parse(ctx: ParseContext) -> bool:
    return TABLE_ROW_RE.match(ctx.current_line) is not None


def _row(cells: list[str], cell_type: str) -> Node:
    return Node(
        type="tableRow",
        content=[
            Node(type=cell_type, content=[Node(type="paragraph", content=parse_inline(cell))]) for cell in cells
        ],
    )


def table_parse(ctx: ParseContext) -> ParseResult:
    """Consume consecutive pipe rows, skipping separator lines."""
    rows: list[Node] = []
    consumed = False
    while not ctx.at_end:
        line = ctx.current_line
        if TABLE_ROW_RE.match(line) is None:
            break
        ctx.advance()
        consumed = True
        if TABLE_SEPARATOR_RE.match(line):
            continue
        rows.append(_row(split_cells(line), "tableHeader" if not rows else "tableCell"))
    if not consumed:
        return ParseResult(node=None, consumed=False)
    node = Node(type="table", attrs=copy.deepcopy(DEFAULT_TABLE_ATTRS), content=rows)
    return ParseResult(node=node, consumed=True)


def table_row_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx)


def table_row_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=QUOTE_PREFIX,
        style=Style(fg=ctx.read_view_options.theme.muted),
        children=project_children(node.content, ctx),
        source=node,
    )


def table_cell_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx)


def table_cell_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


def table_header_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(style=Style(bold=True), children=project_children(node.content, ctx), source=node)


HANDLERS = (
    NodeHandler(
        type="table",
        to_markdown=table_to_markdown,
        to_read_view=table_to_read_view,
        can_parse=table_can_parse,
        parse_from_markdown=table_parse,
        parse_priority=PARSE_PRIORITY_TABLE,
    ),
    NodeHandler(type="tableRow", to_markdown=table_row_to_markdown, to_read_view=table_row_to_read_view),
    NodeHandler(type="tableCell", to_markdown=table_cell_to_markdown, to_read_view=table_cell_to_read_view),
    NodeHandler(type="tableHeader", to_markdown=table_cell_to_markdown, to_read_view=table_header_to_read_view),
)
