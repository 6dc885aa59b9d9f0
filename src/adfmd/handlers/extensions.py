#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/extensions.py
"""Handlers for Confluence-specific block containers.

Panels, expands and media have no native Markdown syntax. They are written
in a readable approximation (a quoted block, an HTML ``<details>`` element,
an image or placeholder link) and are not parsed back.
"""

from __future__ import annotations

from adfmd.ast.nodes import Node
from adfmd.constants import DEFAULT_PANEL_ICON, DEFAULT_PANEL_TYPE, EXPAND_SYMBOL, MEDIA_SYMBOL, PANEL_ICONS
from adfmd.context import RenderContext
from adfmd.handlers.base import project_children, render_children, str_attr
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler


def panel_icon(panel_type: str) -> str:
    return PANEL_ICONS.get(panel_type, DEFAULT_PANEL_ICON)


def panel_to_markdown(node: Node, ctx: RenderContext) -> str:
    panel_type = str_attr(node, "panelType") or DEFAULT_PANEL_TYPE
    body = render_children(node.content, ctx).strip()
    quoted = "\n> ".join(body.split("\n"))
    return f"> {panel_icon(panel_type)} **{panel_type.upper()}**\n> {quoted}\n\n"


def panel_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    panel_type = str_attr(node, "panelType") or DEFAULT_PANEL_TYPE
    return ReadViewNode(
        content=f"{panel_icon(panel_type)} [{panel_type.upper()}] ",
        style=Style(fg=ctx.read_view_options.theme.panel_color(panel_type), bold=True),
        children=project_children(node.content, ctx),
        source=node,
    )


def expand_title(node: Node) -> str:
    return str_attr(node, "title") or "Expand"


def expand_to_markdown(node: Node, ctx: RenderContext) -> str:
    body = render_children(node.content, ctx)
    return f"<details>\n<summary>{expand_title(node)}</summary>\n\n{body}\n</details>\n\n"


def expand_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=f"{EXPAND_SYMBOL} {expand_title(node)}\n",
        style=Style(fg=ctx.read_view_options.theme.accent),
        children=project_children(node.content, ctx),
        source=node,
    )


def media_single_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx)


def media_single_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


def media_to_markdown(node: Node, ctx: RenderContext) -> str:
    media_id = str_attr(node, "id")
    if node.get_attr("type") == "file":
        alt = str_attr(node, "alt") or "media"
        return f"![{alt}](attachment:{media_id})\n\n"
    return f"[Media: {media_id}]\n\n"


def media_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    alt = str_attr(node, "alt") or "media"
    return ReadViewNode(
        content=f"[{MEDIA_SYMBOL} {alt}]",
        style=Style(fg=ctx.read_view_options.theme.accent),
        source=node,
    )


HANDLERS = (
    NodeHandler(type="panel", to_markdown=panel_to_markdown, to_read_view=panel_to_read_view),
    NodeHandler(type="expand", to_markdown=expand_to_markdown, to_read_view=expand_to_read_view),
    NodeHandler(type="mediaSingle", to_markdown=media_single_to_markdown, to_read_view=media_single_to_read_view),
    NodeHandler(type="media", to_markdown=media_to_markdown, to_read_view=media_to_read_view),
)
