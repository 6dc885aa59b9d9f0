#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/inline.py
"""Handlers for inline widgets: status lozenges, emoji, mentions and dates."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from adfmd.ast.nodes import Node
from adfmd.constants import DATE_PLACEHOLDER
from adfmd.context import RenderContext
from adfmd.handlers.base import str_attr
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: Any, date_format: str) -> str:
    """Format a millisecond epoch timestamp as a UTC date.

    Parameters
    ----------
    timestamp : int, float or str
        Milliseconds since the epoch, as stored in ``date`` node attributes
    date_format : str
        ``strftime`` format

    Returns
    -------
    str
        The formatted date, or ``"[Date]"`` for a missing, zero or invalid
        timestamp

    Examples
    --------
        >>> format_timestamp("1700000000000", "%Y-%m-%d")
        '2023-11-14'

    """
    if not timestamp:
        return DATE_PLACEHOLDER
    try:
        seconds = float(timestamp) / 1000
        return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(date_format)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        logger.debug("Unreadable date timestamp %r: %s", timestamp, e)
        return DATE_PLACEHOLDER


def status_to_markdown(node: Node, ctx: RenderContext) -> str:
    color = str_attr(node, "color") or "neutral"
    return f"[{color.upper()}: {str_attr(node, 'text')}]"


def status_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    color = str_attr(node, "color") or "neutral"
    return ReadViewNode(
        content=f"[{str_attr(node, 'text')}]",
        style=Style(fg=ctx.read_view_options.theme.status_color(color), bold=True),
        source=node,
    )


def emoji_text(node: Node) -> str:
    """Emoji character if known, else its ``:shortName:``."""
    return str_attr(node, "text") or f":{str_attr(node, 'shortName')}:"


def emoji_to_markdown(node: Node, ctx: RenderContext) -> str:
    return emoji_text(node)


def emoji_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(content=emoji_text(node), source=node)


def mention_to_markdown(node: Node, ctx: RenderContext) -> str:
    return f"@{str_attr(node, 'text')}"


def mention_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=f"@{str_attr(node, 'text')}",
        style=Style(fg=ctx.read_view_options.theme.link, bold=True),
        source=node,
    )


def date_to_markdown(node: Node, ctx: RenderContext) -> str:
    return format_timestamp(node.get_attr("timestamp"), ctx.markdown_options.date_format)


def date_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    options = ctx.read_view_options
    return ReadViewNode(
        content=format_timestamp(node.get_attr("timestamp"), options.date_format),
        style=Style(fg=options.theme.accent),
        source=node,
    )


HANDLERS = (
    NodeHandler(type="status", to_markdown=status_to_markdown, to_read_view=status_to_read_view),
    NodeHandler(type="emoji", to_markdown=emoji_to_markdown, to_read_view=emoji_to_read_view),
    NodeHandler(type="mention", to_markdown=mention_to_markdown, to_read_view=mention_to_read_view),
    NodeHandler(type="date", to_markdown=date_to_markdown, to_read_view=date_to_read_view),
)
