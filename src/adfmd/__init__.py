"""adfmd - bidirectional conversion between Atlassian Document Format and Markdown.

adfmd converts ADF documents (the JSON tree format used by Confluence page
bodies) to Markdown and back, and projects them into styled display lines
for terminal viewers.

Every node type is served by a handler registered in a
:class:`~adfmd.registry.ComponentRegistry`. Node types without a handler are
never dropped silently: they render as labelled JSON blocks so unsupported
content stays visible.

Examples
--------
Markdown to ADF and back:

    >>> from adfmd import from_markdown, to_markdown
    >>> doc = from_markdown("# Title\\n\\nSome **bold** text.")
    >>> print(to_markdown(doc), end="")
    # Title
    <BLANKLINE>
    Some **bold** text.
    <BLANKLINE>

Display lines for a terminal view:

    >>> from adfmd import to_display_lines
    >>> [line.content for line in to_display_lines(doc)]
    ['# Title', 'Some ', 'bold', ' text.']

See Also
--------
adfmd.ast : document tree and ADF JSON codec
adfmd.registry : handler registry

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "adfmd requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from adfmd.api import from_markdown, to_display_lines, to_markdown, to_read_view
from adfmd.ast import Document, Mark, Node, document_to_json, json_to_document, load_document
from adfmd.context import sequential_id_factory, uuid_id_factory
from adfmd.exceptions import (
    AdfMdError,
    ConfigError,
    DocumentFormatError,
    InputError,
    ParsingError,
    RegistryError,
    RenderingError,
    ValidationError,
)
from adfmd.options import MarkdownParserOptions, MarkdownRendererOptions, ReadViewOptions, Theme
from adfmd.readview import DisplayLine, DisplayLines, ReadViewNode, Style
from adfmd.registry import ComponentRegistry, NodeHandler, create_default_registry

__all__ = [
    "__version__",
    "from_markdown",
    "to_markdown",
    "to_read_view",
    "to_display_lines",
    "load_document",
    "document_to_json",
    "json_to_document",
    # Document model
    "Document",
    "Mark",
    "Node",
    # Read-view
    "DisplayLine",
    "DisplayLines",
    "ReadViewNode",
    "Style",
    # Registry
    "ComponentRegistry",
    "NodeHandler",
    "create_default_registry",
    # Identifier factories
    "sequential_id_factory",
    "uuid_id_factory",
    # Options
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "ReadViewOptions",
    "Theme",
    # Exceptions
    "AdfMdError",
    "ConfigError",
    "DocumentFormatError",
    "InputError",
    "ParsingError",
    "RegistryError",
    "RenderingError",
    "ValidationError",
]
