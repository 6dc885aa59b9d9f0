#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/renderers/readview.py
"""Read-view projection and line flattening.

Projection mirrors the Markdown dispatch but builds a :class:`ReadViewNode`
tree: every handler contributes a prefix or body string, a style and its
projected children. Flattening turns that tree into the list of
:class:`DisplayLine` objects the terminal view indexes by position.

Flattening rules
----------------
The walk is depth-first and threads a ``prefix`` string:

- ``current = prefix + node.content``.
- If ``current`` contains newlines it is split. A leaf pushes every fragment
  except trailing empty ones; a container pushes all fragments but the last,
  and the last becomes the prefix handed to its first child.
- Only the first child inherits the prefix, so a list marker and the first
  word of its item share a line; later children start from ``""``.
- A leaf without newlines is pushed as one line.
- An empty line is pushed only after a non-empty one. Output therefore
  never starts with a blank line nor has two in a row; a tree that yields
  nothing at all flattens to a single empty line.
"""

from __future__ import annotations

import logging
from typing import Optional

from adfmd.ast.nodes import Document
from adfmd.options.readview import ReadViewOptions
from adfmd.readview import DisplayLine, ReadViewNode
from adfmd.registry import ComponentRegistry
from adfmd.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)


class _LineCollector:
    """Accumulates display lines while enforcing blank-line suppression."""

    def __init__(self) -> None:
        self.lines: list[DisplayLine] = []

    def push(self, content: str, node: ReadViewNode) -> None:
        if content == "" and (not self.lines or self.lines[-1].content == ""):
            return
        self.lines.append(DisplayLine(content=content, style=node.style, source=node.source_node))

    def walk(self, node: ReadViewNode, prefix: str) -> None:
        current = prefix + node.content

        if not node.children:
            fragments = current.split("\n")
            if len(fragments) > 1:
                while fragments and fragments[-1] == "":
                    fragments.pop()
            for fragment in fragments:
                self.push(fragment, node)
            return

        *complete, carried = current.split("\n")
        for fragment in complete:
            self.push(fragment, node)
        for index, child in enumerate(node.children):
            self.walk(child, carried if index == 0 else "")


def flatten_read_view(root: ReadViewNode) -> list[DisplayLine]:
    """Flatten a read-view tree into display lines.

    Parameters
    ----------
    root : ReadViewNode
        Projected tree, usually the result of :meth:`ReadViewRenderer.project`

    Returns
    -------
    list of DisplayLine
        At least one line; never two consecutive empty lines and never a
        leading empty line unless it is the only line

    Examples
    --------
        >>> root = ReadViewNode(children=[
        ...     ReadViewNode(content="• ", children=[ReadViewNode(content="milk")]),
        ...     ReadViewNode(content=""),
        ...     ReadViewNode(content=""),
        ... ])
        >>> [line.content for line in flatten_read_view(root)]
        ['• milk', '']

    """
    collector = _LineCollector()
    collector.walk(root, "")
    if not collector.lines:
        return [DisplayLine(content="")]
    return collector.lines


class ReadViewRenderer(BaseRenderer):
    """Project ADF documents into styled display lines.

    Parameters
    ----------
    options : ReadViewOptions or None, default None
        Theme and symbol options
    registry : ComponentRegistry or None, default None
        Handler lookup; a new default registry is built when omitted

    Examples
    --------
        >>> from adfmd.ast import Document, Node, text
        >>> doc = Document(content=[Node("heading", attrs={"level": 2}, content=[text("Notes")])])
        >>> [line.content for line in ReadViewRenderer().render_lines(doc)]
        ['## Notes']

    """

    def __init__(self, options: Optional[ReadViewOptions] = None, registry: Optional[ComponentRegistry] = None):
        """Initialize the read-view renderer with options."""
        BaseRenderer._validate_options_type(options, ReadViewOptions, "read-view")
        super().__init__(registry)
        self.options: ReadViewOptions = options or ReadViewOptions()

    def project(self, doc: Document) -> ReadViewNode:
        """Project ``doc`` into a read-view tree.

        Raises
        ------
        RegistryError
            If the registry has no handler for the document root

        """
        handler = self._root_handler()
        return handler.to_read_view(doc, self._make_context(read_view_options=self.options))

    def render_lines(self, doc: Document) -> list[DisplayLine]:
        """Project and flatten ``doc``; lines are rebuilt from scratch on every call."""
        lines = flatten_read_view(self.project(doc))
        logger.debug("Flattened %d top-level blocks into %d display lines", len(doc.content), len(lines))
        return lines

    def render_to_string(self, doc: Document) -> str:
        """Plain text of the display lines, one per line."""
        return "\n".join(line.content for line in self.render_lines(doc)) + "\n"
