#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/parsers/blocks.py
"""Block-level dispatch over a :class:`ParseContext`.

At each cursor position blank lines are skipped; otherwise the registry's
parseable handlers are tried in priority order and the first one that
accepts the line *and* advances the cursor produces the block. The same
dispatch is reused recursively for blockquote bodies.
"""

from __future__ import annotations

import logging
from typing import Optional

from adfmd.ast.nodes import Node
from adfmd.context import ParseContext
from adfmd.registry import NodeHandler

logger = logging.getLogger(__name__)


def enabled_block_parsers(ctx: ParseContext) -> list[NodeHandler]:
    """Parseable handlers in dispatch order, minus those disabled by options."""
    disabled: set[str] = set()
    if not ctx.options.parse_tables:
        disabled.add("table")
    if not ctx.options.parse_task_lists:
        disabled.add("taskList")
    return [handler for handler in ctx.registry.block_parsers() if handler.type not in disabled]


def starts_block(ctx: ParseContext, exclude: str = "paragraph") -> bool:
    """Whether the current line starts a block construct other than ``exclude``."""
    for handler in enabled_block_parsers(ctx):
        if handler.type == exclude:
            continue
        if handler.can_parse is not None and handler.can_parse(ctx):
            return True
    return False


def parse_block(ctx: ParseContext) -> Optional[Node]:
    """Parse one block at the cursor.

    Returns ``None`` for skipped blank lines. The cursor always advances.
    """
    if ctx.current_line.strip() == "":
        ctx.advance()
        return None

    start = ctx.position
    for handler in enabled_block_parsers(ctx):
        if handler.can_parse is None or handler.parse_from_markdown is None or not handler.can_parse(ctx):
            continue
        result = handler.parse_from_markdown(ctx)
        if result.consumed and ctx.position > start:
            return result.node
        # Handler declined without consuming; rewind any partial movement.
        ctx.position = start

    logger.debug("No block handler accepted line %d; emitting it as text", start)
    line = ctx.current_line
    ctx.advance()
    return Node(type="paragraph", content=[Node(type="text", text=line)])


def parse_blocks(ctx: ParseContext) -> list[Node]:
    """Parse every remaining line of ``ctx`` into block nodes."""
    nodes: list[Node] = []
    while not ctx.at_end:
        node = parse_block(ctx)
        if node is not None:
            nodes.append(node)
    return nodes
