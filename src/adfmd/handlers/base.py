#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/base.py
"""Shared helpers for node handlers and the universal fallback handler.

Container handlers render their children through :func:`render_children`
and :func:`project_children`, which resolve each child's handler from the
context's registry. Unregistered child types resolve to
:data:`UNKNOWN_HANDLER`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from adfmd.ast.nodes import Node
from adfmd.ast.serialization import node_to_dict
from adfmd.constants import CODE_FENCE, UNKNOWN_COMPONENT_LABEL
from adfmd.context import RenderContext
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler

logger = logging.getLogger(__name__)


def render_children(children: list[Node] | None, ctx: RenderContext) -> str:
    """Concatenate the Markdown of ``children``, each via its own handler."""
    if not children:
        return ""
    return "".join(ctx.registry.handler_for(child).to_markdown(child, ctx) for child in children)


def project_children(children: list[Node] | None, ctx: RenderContext) -> list[ReadViewNode]:
    """Project ``children`` to read-view nodes, each via its own handler."""
    if not children:
        return []
    return [ctx.registry.handler_for(child).to_read_view(child, ctx) for child in children]


def str_attr(node: Node, name: str, default: str = "") -> str:
    """Read a string attribute, converting non-string values with ``str``."""
    value: Any = node.get_attr(name, default)
    return value if isinstance(value, str) else str(value)


def dump_node(node: Node) -> str:
    """Pretty-print a node as JSON for diagnostics."""
    return json.dumps(node_to_dict(node), indent=2, ensure_ascii=False, default=str)


def unknown_label(node: Node) -> str:
    """Visible label identifying an unsupported node type."""
    return f"[{UNKNOWN_COMPONENT_LABEL}: {node.type}]"


def unknown_to_markdown(node: Node, ctx: RenderContext) -> str:
    """Render an unsupported node as a labelled JSON code block."""
    logger.warning("Rendering unsupported node type '%s' as JSON", node.type)
    return f"\n{CODE_FENCE}json {unknown_label(node)}\n{dump_node(node)}\n{CODE_FENCE}\n"


def unknown_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    """Project an unsupported node as a dimmed label followed by its JSON."""
    logger.warning("Projecting unsupported node type '%s' as JSON", node.type)
    return ReadViewNode(
        content=f"{unknown_label(node)}\n{dump_node(node)}",
        style=Style(fg=ctx.read_view_options.theme.unknown, dim=True),
        source=node,
    )


UNKNOWN_HANDLER = NodeHandler(
    type="unknown",
    to_markdown=unknown_to_markdown,
    to_read_view=unknown_to_read_view,
    universal=True,
)
