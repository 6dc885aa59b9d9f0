#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/lists.py
"""Handlers for bullet, ordered, task and decision lists.

Lists thread their position through the render context: entering a list
increments ``list_depth``; ordered lists give each item its number through
``ordered_list_counter`` and bullet lists clear it, so a bullet list nested
in an ordered one still renders bullet markers.
"""

from __future__ import annotations

import re

from adfmd.ast.nodes import Node
from adfmd.constants import (
    DECISION_ICON_DECIDED,
    DECISION_ICON_UNDECIDED,
    DECISION_STATE_DECIDED,
    PARSE_PRIORITY_BULLET_LIST,
    PARSE_PRIORITY_ORDERED_LIST,
    PARSE_PRIORITY_TASK_LIST,
    TASK_STATE_DONE,
    TASK_STATE_TODO,
    TASK_SYMBOL_DONE,
    TASK_SYMBOL_TODO,
)
from adfmd.context import ParseContext, ParseResult, RenderContext
from adfmd.handlers.base import project_children, render_children, str_attr
from adfmd.parsers.inline import parse_inline
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler

BULLET_ITEM_RE = re.compile(r"^([-*])\s+(.*)$")
BULLET_START_RE = re.compile(r"^[-*]\s+")
ORDERED_ITEM_RE = re.compile(r"^(\d+)\.\s+(.*)$")
ORDERED_START_RE = re.compile(r"^\d+\.\s+")
TASK_ITEM_RE = re.compile(r"^[-*]\s+\[([ xX])\]\s+(.*)$")


def list_start(node: Node) -> int:
    """First item number of an ordered list (``attrs.order``, default 1)."""
    try:
        return int(node.get_attr("order", 1))
    except (TypeError, ValueError):
        return 1


def _item_indent(ctx: RenderContext, width: int) -> str:
    return " " * (width * max(ctx.list_depth - 1, 0))


def _ordered_item_contexts(node: Node, ctx: RenderContext) -> list[tuple[Node, RenderContext]]:
    start = list_start(node)
    return [(child, ctx.enter_list(ordered_counter=start + index)) for index, child in enumerate(node.children)]


def _consume_matching(ctx: ParseContext, pattern: re.Pattern[str]) -> list[re.Match[str]]:
    """Consume consecutive lines matching ``pattern``; stop at the first other line."""
    matches: list[re.Match[str]] = []
    while not ctx.at_end:
        match = pattern.match(ctx.current_line)
        if match is None:
            break
        matches.append(match)
        ctx.advance()
    return matches


def _list_item(inline_text: str) -> Node:
    return Node(type="listItem", content=[Node(type="paragraph", content=parse_inline(inline_text))])


# --- bulletList --------------------------------------------------------------


def bullet_list_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx.enter_list()) + "\n"


def bullet_list_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx.enter_list()), source=node)


def bullet_list_can_parse(ctx: ParseContext) -> bool:
    return BULLET_START_RE.match(ctx.current_line) is not None


def bullet_list_parse(ctx: ParseContext) -> ParseResult:
    matches = _consume_matching(ctx, BULLET_ITEM_RE)
    if not matches:
        return ParseResult(node=None, consumed=False)
    items = [_list_item(match.group(2)) for match in matches]
    return ParseResult(node=Node(type="bulletList", content=items), consumed=True)


# --- orderedList -------------------------------------------------------------


def ordered_list_to_markdown(node: Node, ctx: RenderContext) -> str:
    body = "".join(
        ctx.registry.handler_for(child).to_markdown(child, child_ctx)
        for child, child_ctx in _ordered_item_contexts(node, ctx)
    )
    return body + "\n"


def ordered_list_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    children = [
        ctx.registry.handler_for(child).to_read_view(child, child_ctx)
        for child, child_ctx in _ordered_item_contexts(node, ctx)
    ]
    return ReadViewNode(children=children, source=node)


def ordered_list_can_parse(ctx: ParseContext) -> bool:
    return ORDERED_START_RE.match(ctx.current_line) is not None


def ordered_list_parse(ctx: ParseContext) -> ParseResult:
    matches = _consume_matching(ctx, ORDERED_ITEM_RE)
    if not matches:
        return ParseResult(node=None, consumed=False)
    start = int(matches[0].group(1))
    node = Node(
        type="orderedList",
        attrs={"order": start} if start != 1 else None,
        content=[_list_item(match.group(2)) for match in matches],
    )
    return ParseResult(node=node, consumed=True)


# --- listItem ----------------------------------------------------------------


def list_item_to_markdown(node: Node, ctx: RenderContext) -> str:
    options = ctx.markdown_options
    if ctx.ordered_list_counter is not None:
        marker = f"{ctx.ordered_list_counter}."
    else:
        marker = options.bullet_marker
    body = render_children(node.content, ctx).strip()
    return f"{_item_indent(ctx, options.list_indent_width)}{marker} {body}\n"


def list_item_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    options = ctx.read_view_options
    if ctx.ordered_list_counter is not None:
        marker = f"{ctx.ordered_list_counter}."
    else:
        marker = options.bullet_symbol
    indent = _item_indent(ctx, ctx.markdown_options.list_indent_width)
    return ReadViewNode(
        content=f"{indent}{marker} ",
        style=Style(fg=options.theme.muted),
        children=project_children(node.content, ctx),
        source=node,
    )


# --- taskList / taskItem -----------------------------------------------------


def task_list_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx) + "\n"


def task_list_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


def task_list_can_parse(ctx: ParseContext) -> bool:
    return TASK_ITEM_RE.match(ctx.current_line) is not None


def task_list_parse(ctx: ParseContext) -> ParseResult:
    """Parse consecutive ``- [ ]`` / ``- [x]`` lines into a task list.

    The list's ``localId`` is drawn before its items' identifiers, so a
    sequential factory numbers the list first.
    """
    if not task_list_can_parse(ctx):
        return ParseResult(node=None, consumed=False)
    list_id = ctx.new_id()
    items: list[Node] = []
    for match in _consume_matching(ctx, TASK_ITEM_RE):
        state = TASK_STATE_DONE if match.group(1).lower() == "x" else TASK_STATE_TODO
        items.append(
            Node(
                type="taskItem",
                attrs={"state": state, "localId": ctx.new_id()},
                content=parse_inline(match.group(2)),
            )
        )
    return ParseResult(node=Node(type="taskList", attrs={"localId": list_id}, content=items), consumed=True)


def task_done(node: Node) -> bool:
    return str_attr(node, "state", TASK_STATE_TODO) == TASK_STATE_DONE


def task_item_to_markdown(node: Node, ctx: RenderContext) -> str:
    checkbox = "[x]" if task_done(node) else "[ ]"
    body = render_children(node.content, ctx).strip()
    return f"{ctx.markdown_options.bullet_marker} {checkbox} {body}\n"


def task_item_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    theme = ctx.read_view_options.theme
    done = task_done(node)
    return ReadViewNode(
        content=f"{TASK_SYMBOL_DONE if done else TASK_SYMBOL_TODO} ",
        style=Style(fg=theme.success if done else theme.muted),
        children=project_children(node.content, ctx),
        source=node,
    )


# --- decisionList / decisionItem ---------------------------------------------


def decided(node: Node) -> bool:
    return str_attr(node, "state", DECISION_STATE_DECIDED) == DECISION_STATE_DECIDED


def decision_item_to_markdown(node: Node, ctx: RenderContext) -> str:
    icon = DECISION_ICON_DECIDED if decided(node) else DECISION_ICON_UNDECIDED
    body = render_children(node.content, ctx).strip()
    return f"{ctx.markdown_options.bullet_marker} [{icon}] **DECISION**: {body}\n"


def decision_item_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    theme = ctx.read_view_options.theme
    is_decided = decided(node)
    icon = DECISION_ICON_DECIDED if is_decided else DECISION_ICON_UNDECIDED
    return ReadViewNode(
        content=f"[{icon}] DECISION: ",
        style=Style(fg=theme.success if is_decided else theme.warning, bold=True),
        children=project_children(node.content, ctx),
        source=node,
    )


def decision_list_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx) + "\n"


def decision_list_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


HANDLERS = (
    NodeHandler(
        type="bulletList",
        to_markdown=bullet_list_to_markdown,
        to_read_view=bullet_list_to_read_view,
        can_parse=bullet_list_can_parse,
        parse_from_markdown=bullet_list_parse,
        parse_priority=PARSE_PRIORITY_BULLET_LIST,
    ),
    NodeHandler(
        type="orderedList",
        to_markdown=ordered_list_to_markdown,
        to_read_view=ordered_list_to_read_view,
        can_parse=ordered_list_can_parse,
        parse_from_markdown=ordered_list_parse,
        parse_priority=PARSE_PRIORITY_ORDERED_LIST,
    ),
    NodeHandler(type="listItem", to_markdown=list_item_to_markdown, to_read_view=list_item_to_read_view),
    NodeHandler(
        type="taskList",
        to_markdown=task_list_to_markdown,
        to_read_view=task_list_to_read_view,
        can_parse=task_list_can_parse,
        parse_from_markdown=task_list_parse,
        parse_priority=PARSE_PRIORITY_TASK_LIST,
    ),
    NodeHandler(type="taskItem", to_markdown=task_item_to_markdown, to_read_view=task_item_to_read_view),
    NodeHandler(type="decisionList", to_markdown=decision_list_to_markdown, to_read_view=decision_list_to_read_view),
    NodeHandler(type="decisionItem", to_markdown=decision_item_to_markdown, to_read_view=decision_item_to_read_view),
)
