#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/registry.py
"""Component registry mapping node types to handlers.

Each node type is served by one :class:`NodeHandler`: a frozen record of
plain functions covering every direction the type supports (Markdown
output, read-view projection and, for block constructs, Markdown parsing).
Dispatch is a dictionary lookup on the node's ``type`` tag.

Lookup never fails: :meth:`ComponentRegistry.get` returns the universal
fallback handler for unregistered types, which renders the node as a
labelled JSON dump so unsupported content is visible instead of fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from adfmd.ast.nodes import Node
from adfmd.constants import DOC_TYPE
from adfmd.exceptions import RegistryError

if TYPE_CHECKING:
    from adfmd.context import ParseContext, ParseResult, RenderContext
    from adfmd.readview import ReadViewNode

logger = logging.getLogger(__name__)

MarkdownFn = Callable[[Node, "RenderContext"], str]
ReadViewFn = Callable[[Node, "RenderContext"], "ReadViewNode"]
CanParseFn = Callable[["ParseContext"], bool]
ParseFn = Callable[["ParseContext"], "ParseResult"]


@dataclass(frozen=True)
class NodeHandler:
    """Conversion functions for one node type.

    Parameters
    ----------
    type : str
        Node type tag served by this handler
    to_markdown : callable
        ``(node, ctx) -> str``
    to_read_view : callable
        ``(node, ctx) -> ReadViewNode``
    can_parse : callable or None
        ``(parse_ctx) -> bool``; whether the current line starts this construct
    parse_from_markdown : callable or None
        ``(parse_ctx) -> ParseResult``; consume lines and build the node
    parse_priority : int, default 100
        Order among parseable handlers (lower is tried first)
    universal : bool, default False
        Whether the handler accepts every node type (fallback only)

    """

    type: str
    to_markdown: MarkdownFn
    to_read_view: ReadViewFn
    can_parse: Optional[CanParseFn] = None
    parse_from_markdown: Optional[ParseFn] = None
    parse_priority: int = 100
    universal: bool = False

    @property
    def parseable(self) -> bool:
        """Whether the handler also parses a Markdown block construct."""
        return self.can_parse is not None and self.parse_from_markdown is not None

    def can_render(self, node: Node) -> bool:
        """Whether this handler renders ``node``."""
        return self.universal or node.type == self.type


class ComponentRegistry:
    """Registry of node handlers keyed by type tag.

    Parameters
    ----------
    handlers : iterable of NodeHandler, optional
        Handlers to register immediately
    fallback : NodeHandler, optional
        Handler for unregistered types; defaults to the built-in
        unknown-component handler

    Examples
    --------
        >>> registry = create_default_registry()
        >>> registry.get("heading").type
        'heading'
        >>> registry.get("someFutureNode").universal
        True

    """

    def __init__(self, handlers: Optional[list[NodeHandler]] = None, fallback: Optional[NodeHandler] = None):
        """Initialize the registry."""
        if fallback is None:
            from adfmd.handlers.base import UNKNOWN_HANDLER

            fallback = UNKNOWN_HANDLER
        self._handlers: dict[str, NodeHandler] = {}
        self._fallback = fallback
        self._block_parsers: Optional[list[NodeHandler]] = None
        for handler in handlers or []:
            self.register(handler)

    @property
    def fallback(self) -> NodeHandler:
        """The handler used for unregistered types."""
        return self._fallback

    def register(self, handler: NodeHandler, replace: bool = True) -> None:
        """Register a handler for its type.

        Parameters
        ----------
        handler : NodeHandler
            Handler to register
        replace : bool, default True
            Whether an existing handler for the same type may be replaced

        Raises
        ------
        RegistryError
            If ``replace`` is False and the type is already registered, or the
            handler declares only one of ``can_parse`` / ``parse_from_markdown``

        """
        if (handler.can_parse is None) != (handler.parse_from_markdown is None):
            raise RegistryError(
                f"Handler for '{handler.type}' must define both can_parse and parse_from_markdown, or neither",
                node_type=handler.type,
            )
        if not replace and handler.type in self._handlers:
            raise RegistryError(f"Handler for '{handler.type}' is already registered", node_type=handler.type)
        if handler.type in self._handlers:
            logger.debug("Replacing handler for node type '%s'", handler.type)
        self._handlers[handler.type] = handler
        self._block_parsers = None

    def unregister(self, node_type: str) -> None:
        """Remove the handler for ``node_type`` if present."""
        if self._handlers.pop(node_type, None) is not None:
            self._block_parsers = None

    def has(self, node_type: str) -> bool:
        """Whether a dedicated handler is registered for ``node_type``."""
        return node_type in self._handlers

    def get(self, node_type: str) -> NodeHandler:
        """Return the handler for ``node_type``, or the fallback handler."""
        handler = self._handlers.get(node_type)
        if handler is None:
            logger.debug("No handler for node type '%s'; using fallback", node_type)
            return self._fallback
        return handler

    def require(self, node_type: str) -> NodeHandler:
        """Return the dedicated handler for a structurally required type.

        Raises
        ------
        RegistryError
            If no handler is registered for ``node_type``

        """
        handler = self._handlers.get(node_type)
        if handler is None:
            raise RegistryError(f"No handler registered for required node type '{node_type}'", node_type=node_type)
        return handler

    def handler_for(self, node: Node) -> NodeHandler:
        """Return the handler that renders ``node``."""
        handler = self.get(node.type)
        if handler.can_render(node):
            return handler
        return self._fallback

    def block_parsers(self) -> list[NodeHandler]:
        """Parseable handlers in dispatch order (ascending priority, then type)."""
        if self._block_parsers is None:
            parseable = [handler for handler in self._handlers.values() if handler.parseable]
            self._block_parsers = sorted(parseable, key=lambda h: (h.parse_priority, h.type))
        return list(self._block_parsers)

    def types(self) -> list[str]:
        """Registered type tags in sorted order."""
        return sorted(self._handlers)

    def __contains__(self, node_type: object) -> bool:
        """Whether a dedicated handler is registered for ``node_type``."""
        return node_type in self._handlers

    def __iter__(self) -> Iterator[NodeHandler]:
        """Iterate over the registered handlers."""
        return iter(list(self._handlers.values()))

    def __len__(self) -> int:
        """Number of registered handlers."""
        return len(self._handlers)


def create_default_registry() -> ComponentRegistry:
    """Build a new registry holding every built-in handler.

    Returns
    -------
    ComponentRegistry
        A registry independent of any other call's registry

    """
    from adfmd.handlers import builtin_handlers

    registry = ComponentRegistry(builtin_handlers())
    if DOC_TYPE not in registry:  # pragma: no cover - guards edits to the builtin list
        raise RegistryError("Built-in handlers do not include the document root", node_type=DOC_TYPE)
    return registry
