#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/parsers/inline.py
"""Inline Markdown parsing: text spans to ``text`` and ``hardBreak`` nodes.

Inline content is parsed with an ordered cascade of matchers. Each matcher
looks for the *first* occurrence of its construct anywhere in the remaining
text and, on success, splits it into ``before`` (plain text), the produced
node, and ``after`` (still to be parsed). The first matcher in the cascade
that succeeds wins, even if a later matcher would have matched earlier in the
text. The order is part of the syntax:

1. inline code          ```x```
2. bold + italic        ``***x***`` / ``___x___``
3. bold                 ``**x**`` / ``__x__``
4. italic               ``*x*`` / ``_x_`` (never inside a doubled delimiter)
5. strikethrough        ``~~x~~``
6. link                 ``[x](href)``
7. hard break           two spaces before a newline

Each match restarts the cascade on ``after``, so the cost is quadratic in
the worst case for long lines with many short spans.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from adfmd.ast.nodes import Mark, Node

InlineMatcher = Callable[[str], Optional["InlineMatch"]]


@dataclass
class InlineMatch:
    """A matcher's three-way split of a text span.

    Parameters
    ----------
    before : str
        Plain text preceding the match
    node : Node
        Node produced for the matched construct
    after : str
        Text following the match

    """

    before: str
    node: Node
    after: str


_CODE_RE = re.compile(r"^(.*?)`([^`]+)`(.*)\Z", re.DOTALL)
_BOLD_ITALIC_RES = (
    re.compile(r"^(.*?)\*\*\*(.+?)\*\*\*(.*)\Z", re.DOTALL),
    re.compile(r"^(.*?)___(.+?)___(.*)\Z", re.DOTALL),
)
_BOLD_RES = (
    re.compile(r"^(.*?)\*\*(.+?)\*\*(.*)\Z", re.DOTALL),
    re.compile(r"^(.*?)__(.+?)__(.*)\Z", re.DOTALL),
)
_ITALIC_RES = (
    re.compile(r"^(.*?)(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)(.*)\Z", re.DOTALL),
    re.compile(r"^(.*?)(?<!_)_(?!_)(.+?)(?<!_)_(?!_)(.*)\Z", re.DOTALL),
)
_STRIKE_RE = re.compile(r"^(.*?)~~(.+?)~~(.*)\Z", re.DOTALL)
_LINK_RE = re.compile(r"^(.*?)\[([^\]]+)\]\(([^)]+)\)(.*)\Z", re.DOTALL)
_HARD_BREAK_RE = re.compile(r"^(.*?)  \n(.*)\Z", re.DOTALL)


def _first_match(patterns: tuple[re.Pattern[str], ...], value: str) -> Optional[re.Match[str]]:
    for pattern in patterns:
        match = pattern.match(value)
        if match:
            return match
    return None


def _marked(value: str, *mark_types: str) -> Node:
    return Node(type="text", text=value, marks=[Mark(type=mark_type) for mark_type in mark_types])


def match_code(value: str) -> Optional[InlineMatch]:
    """Match inline code."""
    match = _CODE_RE.match(value)
    if not match:
        return None
    return InlineMatch(match.group(1), _marked(match.group(2), "code"), match.group(3))


def match_bold_italic(value: str) -> Optional[InlineMatch]:
    """Match ``***x***`` or ``___x___``; marks are ``[strong, em]``."""
    match = _first_match(_BOLD_ITALIC_RES, value)
    if not match:
        return None
    return InlineMatch(match.group(1), _marked(match.group(2), "strong", "em"), match.group(3))


def match_bold(value: str) -> Optional[InlineMatch]:
    """Match ``**x**`` or ``__x__``."""
    match = _first_match(_BOLD_RES, value)
    if not match:
        return None
    return InlineMatch(match.group(1), _marked(match.group(2), "strong"), match.group(3))


def match_italic(value: str) -> Optional[InlineMatch]:
    """Match ``*x*`` or ``_x_`` where neither delimiter is doubled."""
    match = _first_match(_ITALIC_RES, value)
    if not match:
        return None
    return InlineMatch(match.group(1), _marked(match.group(2), "em"), match.group(3))


def match_strike(value: str) -> Optional[InlineMatch]:
    """Match ``~~x~~``."""
    match = _STRIKE_RE.match(value)
    if not match:
        return None
    return InlineMatch(match.group(1), _marked(match.group(2), "strike"), match.group(3))


def match_link(value: str) -> Optional[InlineMatch]:
    """Match ``[text](href)``."""
    match = _LINK_RE.match(value)
    if not match:
        return None
    node = Node(type="text", text=match.group(2), marks=[Mark(type="link", attrs={"href": match.group(3)})])
    return InlineMatch(match.group(1), node, match.group(4))


def match_hard_break(value: str) -> Optional[InlineMatch]:
    """Match two trailing spaces followed by a newline."""
    match = _HARD_BREAK_RE.match(value)
    if not match:
        return None
    return InlineMatch(match.group(1), Node(type="hardBreak"), match.group(2))


INLINE_MATCHERS: tuple[InlineMatcher, ...] = (
    match_code,
    match_bold_italic,
    match_bold,
    match_italic,
    match_strike,
    match_link,
    match_hard_break,
)


def match_inline_pattern(value: str, matchers: tuple[InlineMatcher, ...] = INLINE_MATCHERS) -> Optional[InlineMatch]:
    """Apply the cascade once and return the first matcher's split, if any."""
    for matcher in matchers:
        result = matcher(value)
        if result is not None:
            return result
    return None


def parse_inline(value: str, matchers: tuple[InlineMatcher, ...] = INLINE_MATCHERS) -> list[Node]:
    """Parse a text span into inline nodes.

    Parameters
    ----------
    value : str
        Inline Markdown; may span several lines
    matchers : tuple of callables, optional
        Cascade to apply, most specific first

    Returns
    -------
    list of Node
        ``text`` nodes (with marks) and ``hardBreak`` nodes; empty for empty
        or whitespace-only input

    Examples
    --------
        >>> [n.text for n in parse_inline("Some **bold** text")]
        ['Some ', 'bold', ' text']

    """
    if not value or not value.strip():
        return []

    nodes: list[Node] = []
    remaining = value
    while remaining:
        result = match_inline_pattern(remaining, matchers)
        if result is None:
            nodes.append(Node(type="text", text=remaining))
            break
        if result.before:
            nodes.append(Node(type="text", text=result.before))
        nodes.append(result.node)
        remaining = result.after
    return nodes
