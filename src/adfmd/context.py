#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/context.py
"""Per-conversion state threaded through handler calls.

:class:`RenderContext` is immutable: handlers derive nested contexts with
:meth:`RenderContext.create_updated` (deeper list level, list counter,
code-block flag) and never mutate the one they received.

:class:`ParseContext` is a small mutable record (lines plus cursor) passed by
reference to every block handler. A fresh one is created for each top-level
parse call; blockquotes re-parse their captured text in a child context
obtained from :meth:`ParseContext.child`.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional

from adfmd.ast.nodes import Node
from adfmd.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from adfmd.options.readview import ReadViewOptions

if TYPE_CHECKING:
    from adfmd.registry import ComponentRegistry

IdFactory = Callable[[], str]


def uuid_id_factory() -> str:
    """Default identifier source: a random UUID4 string."""
    return str(uuid.uuid4())


def sequential_id_factory(prefix: str = "id-") -> IdFactory:
    """Build a deterministic identifier source yielding ``prefix1``, ``prefix2``, ...

    Examples
    --------
        >>> next_id = sequential_id_factory("task-")
        >>> next_id(), next_id()
        ('task-1', 'task-2')

    """
    counter = 0

    def next_id() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}{counter}"

    return next_id


@dataclass(frozen=True)
class RenderContext:
    """Immutable state for one serialization or projection pass.

    Parameters
    ----------
    registry : ComponentRegistry
        Handler lookup for child nodes
    list_depth : int, default 0
        Current list nesting depth (1 inside a top-level list)
    ordered_list_counter : int or None, default None
        Number of the current ordered list item; ``None`` outside ordered lists
    in_code_block : bool, default False
        Whether rendering happens inside a code block
    markdown_options : MarkdownRendererOptions
        Markdown serializer options
    read_view_options : ReadViewOptions
        Read-view projection options

    """

    registry: ComponentRegistry
    list_depth: int = 0
    ordered_list_counter: Optional[int] = None
    in_code_block: bool = False
    markdown_options: MarkdownRendererOptions = field(default_factory=MarkdownRendererOptions)
    read_view_options: ReadViewOptions = field(default_factory=ReadViewOptions)

    def create_updated(self, **changes: Any) -> RenderContext:
        """Return a derived context with the given fields replaced."""
        return replace(self, **changes)

    def enter_list(self, ordered_counter: Optional[int] = None) -> RenderContext:
        """Context for the items of a nested list.

        Parameters
        ----------
        ordered_counter : int or None
            Item number for ordered lists; ``None`` for bullet lists

        """
        return replace(self, list_depth=self.list_depth + 1, ordered_list_counter=ordered_counter)


@dataclass
class ParseResult:
    """Outcome of a block handler's Markdown parse.

    Parameters
    ----------
    node : Node or None
        The produced node, if any
    consumed : bool
        Whether the handler advanced the cursor

    """

    node: Optional[Node]
    consumed: bool


@dataclass
class ParseContext:
    """Mutable cursor over the input lines of one parse call.

    Parameters
    ----------
    lines : list of str
        Input lines without line terminators
    registry : ComponentRegistry
        Handler lookup for block dispatch
    id_factory : callable
        Source of ``localId`` values for task lists and items
    options : MarkdownParserOptions
        Parser options
    position : int, default 0
        Index of the current line

    """

    lines: list[str]
    registry: ComponentRegistry
    id_factory: IdFactory = uuid_id_factory
    options: MarkdownParserOptions = field(default_factory=MarkdownParserOptions)
    position: int = 0

    @property
    def at_end(self) -> bool:
        """Whether every line has been consumed."""
        return self.position >= len(self.lines)

    @property
    def current_line(self) -> str:
        """The line under the cursor, or ``""`` past the end."""
        if self.at_end:
            return ""
        return self.lines[self.position]

    def advance(self, count: int = 1) -> None:
        """Move the cursor forward."""
        self.position += count

    def child(self, lines: list[str]) -> ParseContext:
        """A fresh context over ``lines`` sharing registry, identifiers and options."""
        return ParseContext(lines=lines, registry=self.registry, id_factory=self.id_factory, options=self.options)

    def new_id(self) -> str:
        """Draw the next identifier from the injected factory."""
        return self.id_factory()
