#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/blocks.py
"""Handlers for the structural block nodes.

Covers the document root, paragraphs, headings, fenced code blocks,
blockquotes and horizontal rules. Every type here except ``doc`` is also a
Markdown block construct and carries ``can_parse``/``parse_from_markdown``.
"""

from __future__ import annotations

import re

from adfmd.ast.nodes import Node
from adfmd.constants import (
    CODE_FENCE,
    DOC_TYPE,
    PARSE_PRIORITY_BLOCKQUOTE,
    PARSE_PRIORITY_CODE_BLOCK,
    PARSE_PRIORITY_HEADING,
    PARSE_PRIORITY_PARAGRAPH,
    PARSE_PRIORITY_RULE,
    QUOTE_PREFIX,
    RULE_MARKDOWN,
    RULE_SYMBOL,
)
from adfmd.context import ParseContext, ParseResult, RenderContext
from adfmd.handlers.base import project_children, render_children, str_attr
from adfmd.parsers.blocks import parse_blocks, starts_block
from adfmd.parsers.inline import parse_inline
from adfmd.readview import ReadViewNode, Style
from adfmd.registry import NodeHandler

HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
RULE_RE = re.compile(r"^-{3,}$|^\*{3,}$|^_{3,}$")


def heading_level(node: Node) -> int:
    """Heading level clamped to 1-6; missing or invalid values read as 1."""
    try:
        level = int(node.get_attr("level", 1))
    except (TypeError, ValueError):
        return 1
    return min(max(level, 1), 6)


# --- doc ---------------------------------------------------------------------


def doc_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx)


def doc_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


# --- paragraph ---------------------------------------------------------------


def paragraph_to_markdown(node: Node, ctx: RenderContext) -> str:
    return render_children(node.content, ctx) + "\n\n"


def paragraph_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(children=project_children(node.content, ctx), source=node)


def paragraph_can_parse(ctx: ParseContext) -> bool:
    return ctx.current_line.strip() != ""


def paragraph_parse(ctx: ParseContext) -> ParseResult:
    """Consume lines up to a blank line or the start of another block.

    The first line is always taken, so a line that only looks like a block
    opener (``#tag``) still makes progress.
    """
    lines = [ctx.current_line]
    ctx.advance()
    while not ctx.at_end:
        line = ctx.current_line
        if line.strip() == "" or starts_block(ctx):
            break
        lines.append(line)
        ctx.advance()
    node = Node(type="paragraph", content=parse_inline("\n".join(lines)))
    return ParseResult(node=node, consumed=True)


# --- heading -----------------------------------------------------------------


def heading_to_markdown(node: Node, ctx: RenderContext) -> str:
    return "#" * heading_level(node) + " " + render_children(node.content, ctx) + "\n\n"


def heading_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    level = heading_level(node)
    theme = ctx.read_view_options.theme
    return ReadViewNode(
        content="#" * level + " ",
        style=Style(fg=theme.heading_color(level), bold=True),
        children=project_children(node.content, ctx),
        source=node,
    )


def heading_can_parse(ctx: ParseContext) -> bool:
    return HEADING_RE.match(ctx.current_line) is not None


def heading_parse(ctx: ParseContext) -> ParseResult:
    match = HEADING_RE.match(ctx.current_line)
    if match is None:
        return ParseResult(node=None, consumed=False)
    ctx.advance()
    node = Node(type="heading", attrs={"level": len(match.group(1))}, content=parse_inline(match.group(2)))
    return ParseResult(node=node, consumed=True)


# --- codeBlock ---------------------------------------------------------------


def code_block_to_markdown(node: Node, ctx: RenderContext) -> str:
    language = str_attr(node, "language")
    body = render_children(node.content, ctx.create_updated(in_code_block=True))
    return f"{CODE_FENCE}{language}\n{body}\n{CODE_FENCE}\n\n"


def code_block_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    language = str_attr(node, "language")
    theme = ctx.read_view_options.theme
    return ReadViewNode(
        content=f"{CODE_FENCE}{language}\n",
        style=Style(fg=theme.muted, bg=theme.code_block_bg),
        children=project_children(node.content, ctx.create_updated(in_code_block=True)),
        source=node,
    )


def code_block_can_parse(ctx: ParseContext) -> bool:
    return ctx.current_line.startswith(CODE_FENCE)


def code_block_parse(ctx: ParseContext) -> ParseResult:
    """Capture everything up to the closing fence (or end of input) verbatim."""
    language = ctx.current_line[len(CODE_FENCE):].strip()
    ctx.advance()
    body: list[str] = []
    while not ctx.at_end:
        line = ctx.current_line
        ctx.advance()
        if line.startswith(CODE_FENCE):
            break
        body.append(line)
    node = Node(
        type="codeBlock",
        attrs={"language": language} if language else None,
        content=[Node(type="text", text="\n".join(body))],
    )
    return ParseResult(node=node, consumed=True)


# --- blockquote --------------------------------------------------------------


def blockquote_to_markdown(node: Node, ctx: RenderContext) -> str:
    body = render_children(node.content, ctx)
    return "\n".join(f"> {line}" for line in body.split("\n")) + "\n"


def blockquote_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=QUOTE_PREFIX,
        style=Style(fg=ctx.read_view_options.theme.muted, italic=True),
        children=project_children(node.content, ctx),
        source=node,
    )


def _quoted_line(line: str) -> str | None:
    if line.startswith("> "):
        return line[2:]
    if line == ">":
        return ""
    return None


def blockquote_can_parse(ctx: ParseContext) -> bool:
    return _quoted_line(ctx.current_line) is not None


def blockquote_parse(ctx: ParseContext) -> ParseResult:
    """Collect the quoted lines and parse them as an independent block stream."""
    quoted: list[str] = []
    while not ctx.at_end:
        stripped = _quoted_line(ctx.current_line)
        if stripped is None:
            break
        quoted.append(stripped)
        ctx.advance()
    if not quoted:
        return ParseResult(node=None, consumed=False)

    content = parse_blocks(ctx.child(quoted))
    if not content:
        content = [Node(type="paragraph", content=[])]
    return ParseResult(node=Node(type="blockquote", content=content), consumed=True)


# --- rule --------------------------------------------------------------------


def rule_to_markdown(node: Node, ctx: RenderContext) -> str:
    return RULE_MARKDOWN


def rule_to_read_view(node: Node, ctx: RenderContext) -> ReadViewNode:
    return ReadViewNode(
        content=RULE_SYMBOL * ctx.read_view_options.rule_width,
        style=Style(fg=ctx.read_view_options.theme.muted, dim=True),
        source=node,
    )


def rule_can_parse(ctx: ParseContext) -> bool:
    return RULE_RE.match(ctx.current_line) is not None


def rule_parse(ctx: ParseContext) -> ParseResult:
    ctx.advance()
    return ParseResult(node=Node(type="rule"), consumed=True)


HANDLERS = (
    NodeHandler(type=DOC_TYPE, to_markdown=doc_to_markdown, to_read_view=doc_to_read_view),
    NodeHandler(
        type="paragraph",
        to_markdown=paragraph_to_markdown,
        to_read_view=paragraph_to_read_view,
        can_parse=paragraph_can_parse,
        parse_from_markdown=paragraph_parse,
        parse_priority=PARSE_PRIORITY_PARAGRAPH,
    ),
    NodeHandler(
        type="heading",
        to_markdown=heading_to_markdown,
        to_read_view=heading_to_read_view,
        can_parse=heading_can_parse,
        parse_from_markdown=heading_parse,
        parse_priority=PARSE_PRIORITY_HEADING,
    ),
    NodeHandler(
        type="codeBlock",
        to_markdown=code_block_to_markdown,
        to_read_view=code_block_to_read_view,
        can_parse=code_block_can_parse,
        parse_from_markdown=code_block_parse,
        parse_priority=PARSE_PRIORITY_CODE_BLOCK,
    ),
    NodeHandler(
        type="blockquote",
        to_markdown=blockquote_to_markdown,
        to_read_view=blockquote_to_read_view,
        can_parse=blockquote_can_parse,
        parse_from_markdown=blockquote_parse,
        parse_priority=PARSE_PRIORITY_BLOCKQUOTE,
    ),
    NodeHandler(
        type="rule",
        to_markdown=rule_to_markdown,
        to_read_view=rule_to_read_view,
        can_parse=rule_can_parse,
        parse_from_markdown=rule_parse,
        parse_priority=PARSE_PRIORITY_RULE,
    ),
)
