#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/readview.py
"""Read-view data types.

The read-view is a styled projection of a document used by the terminal
editor surface:

- :class:`ReadViewNode` is the output of projection: a tree mirroring the
  document, where each node carries display text and a style.
- :class:`DisplayLine` is the output of flattening: one entry per screen
  line, addressed by integer position.

Both keep a *weak* reference to the document node they came from, so a
display structure never keeps a discarded document alive. The exception is
a document the API decodes from an ADF mapping, which is owned by the
projected root or by the returned :class:`DisplayLines`.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from dataclasses import InitVar, dataclass, field
from typing import Optional

from adfmd.ast.nodes import Document, Node


@dataclass(frozen=True)
class Style:
    """Display style of a read-view node or line.

    Parameters
    ----------
    fg : str or None
        Foreground colour (``#rrggbb``)
    bg : str or None
        Background colour (``#rrggbb``)
    bold, italic, underline, dim : bool
        Text attributes
    size : int or None
        Height hint in rows

    """

    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    dim: bool = False
    size: Optional[int] = None

    @property
    def is_plain(self) -> bool:
        """Whether the style sets nothing."""
        return self == Style()

    def merged(self, other: Style | None) -> Style:
        """Return a style where set values of ``other`` override this one."""
        if other is None:
            return self
        return Style(
            fg=other.fg or self.fg,
            bg=other.bg or self.bg,
            bold=self.bold or other.bold,
            italic=self.italic or other.italic,
            underline=self.underline or other.underline,
            dim=self.dim or other.dim,
            size=other.size if other.size is not None else self.size,
        )

    def to_rich(self) -> str:
        """Render as a ``rich`` style definition string (e.g. ``"bold #7aa2f7 on #1f2335"``)."""
        parts = [name for name in ("bold", "italic", "underline", "dim") if getattr(self, name)]
        if self.fg:
            parts.append(self.fg)
        if self.bg:
            parts.append(f"on {self.bg}")
        return " ".join(parts) or "none"


def _weak(node: Node | None) -> Optional[weakref.ReferenceType[Node]]:
    return weakref.ref(node) if node is not None else None


@dataclass
class ReadViewNode:
    """A node of the projected display tree.

    Parameters
    ----------
    content : str, default ""
        Prefix or body text; may contain newlines
    style : Style or None, default None
        Display style
    children : list of ReadViewNode, default empty list
        Projected children
    source : Node or None, default None
        Originating document node (held weakly, see :attr:`source_node`)
    document : Document or None, default None
        Document this tree keeps alive; only set on roots projected from a
        decoded ADF mapping

    """

    content: str = ""
    style: Optional[Style] = None
    children: list[ReadViewNode] = field(default_factory=list)
    source: InitVar[Optional[Node]] = None
    document: Optional[Document] = field(default=None, repr=False, compare=False)
    _source_ref: Optional[weakref.ReferenceType[Node]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self, source: Optional[Node]) -> None:
        """Store the weak back-reference."""
        self._source_ref = _weak(source)

    @property
    def source_node(self) -> Optional[Node]:
        """The originating document node, or ``None`` if unset or collected."""
        return self._source_ref() if self._source_ref is not None else None


@dataclass
class DisplayLine:
    """One flattened display line.

    Parameters
    ----------
    content : str
        Line text without a trailing newline
    style : Style or None, default None
        Style of the read-view node that produced the line
    source : Node or None, default None
        Originating document node (held weakly, see :attr:`source_node`)

    """

    content: str
    style: Optional[Style] = None
    source: InitVar[Optional[Node]] = None
    _source_ref: Optional[weakref.ReferenceType[Node]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self, source: Optional[Node]) -> None:
        """Store the weak back-reference."""
        self._source_ref = _weak(source)

    @property
    def source_node(self) -> Optional[Node]:
        """The originating document node, or ``None`` if unset or collected."""
        return self._source_ref() if self._source_ref is not None else None


class DisplayLines(list):
    """Display lines together with the document that owns their sources.

    Returned when lines are produced from an ADF mapping, so the decoded
    document lives as long as the lines and :attr:`DisplayLine.source_node`
    stays resolvable.
    """

    def __init__(self, lines: Iterable[DisplayLine] = (), document: Optional[Document] = None):
        super().__init__(lines)
        self.document = document
