#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/ast/nodes.py
"""Node model for ADF (Atlassian Document Format) documents.

ADF is a tree of generic nodes. Unlike a class-per-element AST, every node
shares one shape and is distinguished by its ``type`` tag:

    - ``type``: open-ended tag (``"paragraph"``, ``"heading"``, ``"text"``...)
    - ``content``: ordered child nodes (containers)
    - ``text``: plain text (leaf ``text`` nodes only)
    - ``attrs``: attribute mapping (heading level, code language, panel type...)
    - ``marks``: inline annotations on text nodes (strong, em, link...)

The tree is a pure value tree: nodes are owned by exactly one parent, there
are no back-edges, and two trees compare equal when their values are equal.
Unknown ``type`` tags are valid; they are handled by the renderers' fallback.

"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from adfmd.constants import ADF_VERSION, DOC_TYPE, TEXT_TYPE
from adfmd.exceptions import ValidationError


@dataclass
class Mark:
    """An inline annotation attached to a text node.

    Parameters
    ----------
    type : str
        Mark tag (``strong``, ``em``, ``code``, ``strike``, ``underline``,
        ``link`` or any other string)
    attrs : dict or None, default = None
        Mark attributes (e.g. ``{"href": ...}`` for links)

    """

    type: str
    attrs: Optional[dict[str, Any]] = None

    def get_attr(self, name: str, default: Any = None) -> Any:
        """Return an attribute value, or ``default`` when absent."""
        if not self.attrs:
            return default
        return self.attrs.get(name, default)


@dataclass
class Node:
    """A node of the document tree.

    Parameters
    ----------
    type : str
        Node type tag
    content : list of Node or None, default = None
        Ordered child nodes
    text : str or None, default = None
        Text of a leaf ``text`` node
    attrs : dict or None, default = None
        Node attributes
    marks : list of Mark or None, default = None
        Inline marks, in application order

    """

    type: str
    content: Optional[list[Node]] = None
    text: Optional[str] = None
    attrs: Optional[dict[str, Any]] = None
    marks: Optional[list[Mark]] = None

    @property
    def children(self) -> list[Node]:
        """Child nodes, or an empty list for leaves."""
        return self.content or []

    @property
    def is_text(self) -> bool:
        """Whether this is a leaf ``text`` node."""
        return self.type == TEXT_TYPE

    def get_attr(self, name: str, default: Any = None) -> Any:
        """Return an attribute value, or ``default`` when absent or ``None``."""
        if not self.attrs:
            return default
        value = self.attrs.get(name)
        return default if value is None else value

    def has_mark(self, mark_type: str) -> bool:
        """Whether a mark of ``mark_type`` is attached to this node."""
        return any(mark.type == mark_type for mark in self.marks or [])

    def depth_first(self) -> Iterator[Node]:
        """Traverse the subtree depth-first, yielding self then descendants."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def plain_text(self) -> str:
        """Concatenated text of every ``text`` node in the subtree."""
        return "".join(node.text or "" for node in self.depth_first() if node.is_text)

    def copy(self) -> Node:
        """Return a deep copy of this subtree."""
        return copy.deepcopy(self)


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    type : str, default = "doc"
        Always ``"doc"``
    content : list of Node, default = empty list
        Top-level block nodes; an empty list is an empty document
    version : int, default = 1
        ADF version; must equal ``ADF_VERSION``

    Raises
    ------
    ValidationError
        If ``type`` is not ``"doc"`` or ``version`` is not ``ADF_VERSION``

    """

    type: str = DOC_TYPE
    content: list[Node] = field(default_factory=list)  # type: ignore[assignment]
    version: int = ADF_VERSION

    def __post_init__(self) -> None:
        """Validate the root invariants."""
        if self.type != DOC_TYPE:
            raise ValidationError(
                f"Document type must be '{DOC_TYPE}', got '{self.type}'",
                parameter_name="type",
                parameter_value=self.type,
            )
        if self.version != ADF_VERSION:
            raise ValidationError(
                f"Unsupported ADF version {self.version!r}; expected {ADF_VERSION}",
                parameter_name="version",
                parameter_value=self.version,
            )
        if self.content is None:
            self.content = []

    @property
    def is_empty(self) -> bool:
        """Whether the document has no top-level nodes."""
        return not self.content


def text(value: str, *marks: Mark) -> Node:
    """Build a ``text`` node, optionally with marks.

    Examples
    --------
        >>> text("bold", Mark("strong"))
        Node(type='text', content=None, text='bold', attrs=None, marks=[Mark(type='strong', attrs=None)])

    """
    return Node(type=TEXT_TYPE, text=value, marks=list(marks) or None)


def paragraph(*content: Node) -> Node:
    """Build a ``paragraph`` node holding inline content."""
    return Node(type="paragraph", content=list(content))
