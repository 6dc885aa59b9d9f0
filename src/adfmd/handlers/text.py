#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/text.py
"""Handlers for ``text`` and ``hardBreak`` nodes.

Marks are applied in list order, each wrapping the result of the previous
one, so ``[strong, em]`` renders as ``***x***`` (``**`` outermost) and
``[strong, link]`` as ``[**x**](href)``.
"""

from __future__ import annotations

from collections.abc import Callable

from adfmd.ast.nodes import Mark, Node
from adfmd.constants import HARD_BREAK_MARKDOWN
from adfmd.context import RenderContext
from adfmd.options.readview import Theme
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler


def _link(value: str, mark: Mark) -> str:
    href = mark.get_attr("href") or ""
    return f"[{value}]({href})"


MARK_WRAPPERS: dict[str, Callable[[str, Mark], str]] = {
    "strong": lambda value, _mark: f"**{value}**",
    "em": lambda value, _mark: f"*{value}*",
    "code": lambda value, _mark: f"`{value}`",
    "strike": lambda value, _mark: f"~~{value}~~",
    "underline": lambda value, _mark: f"<u>{value}</u>",
    "link": _link,
}


def apply_marks(value: str, marks: list[Mark] | None) -> str:
    """Wrap ``value`` in the Markdown syntax of each mark, innermost first.

    Unknown mark types leave the text unchanged.
    """
    for mark in marks or []:
        wrapper = MARK_WRAPPERS.get(mark.type)
        if wrapper is not None:
            value = wrapper(value, mark)
    return value


def text_to_markdown(node: Node, ctx: RenderContext) -> str:
    # Code block bodies are verbatim.
    if ctx.in_code_block:
        return node.text or ""
    return apply_marks(node.text or "", node.marks)


def mark_style(marks: list[Mark] | None, theme: Theme) -> Style:
    """Combine the display attributes of every mark on a text node."""
    fg = bg = None
    bold = italic = underline = dim = False
    for mark in marks or []:
        if mark.type == "strong":
            bold = True
        elif mark.type == "em":
            italic = True
        elif mark.type == "code":
            fg, bg = theme.code_fg, theme.code_bg
        elif mark.type == "strike":
            dim = True
        elif mark.type == "underline":
            underline = True
        elif mark.type == "link":
            fg = theme.link
            underline = True
    return Style(fg=fg, bg=bg, bold=bold, italic=italic, underline=underline, dim=dim)


def text_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=node.text or "",
        style=mark_style(node.marks, ctx.read_view_options.theme),
        source=node,
    )


def hard_break_to_markdown(node: Node, ctx: RenderContext) -> str:
    return HARD_BREAK_MARKDOWN


def hard_break_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(content="\n", source=node)


TEXT_HANDLER = NodeHandler(type="text", to_markdown=text_to_markdown, to_read_view=text_to_read_view)
HARD_BREAK_HANDLER = NodeHandler(
    type="hardBreak", to_markdown=hard_break_to_markdown, to_read_view=hard_break_to_read_view
)

HANDLERS = (TEXT_HANDLER, HARD_BREAK_HANDLER)
