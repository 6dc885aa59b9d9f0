#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/handlers/__init__.py
"""Built-in node handlers.

Each submodule exposes a ``HANDLERS`` tuple; :func:`builtin_handlers`
collects them for :func:`adfmd.registry.create_default_registry`.
"""

from __future__ import annotations

from adfmd.handlers import blocks, extensions, inline, lists, tables, text
from adfmd.handlers.base import UNKNOWN_HANDLER
from adfmd.registry import NodeHandler

_MODULES = (blocks, text, lists, tables, extensions, inline)


def builtin_handlers() -> list[NodeHandler]:
    """Return every built-in handler, one per supported node type."""
    return [handler for module in _MODULES for handler in module.HANDLERS]


__all__ = ["UNKNOWN_HANDLER", "builtin_handlers"]
