#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/api.py
"""High-level conversion functions.

These wrap the parser and renderers for one-shot use. Each call builds its
own contexts, so the functions are safe to call repeatedly and from
independent call sites; pass a shared ``registry`` to avoid rebuilding the
built-in handler table on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from adfmd.ast.nodes import Document
from adfmd.ast.serialization import document_from_dict
from adfmd.context import IdFactory
from adfmd.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from adfmd.options.readview import ReadViewOptions
from adfmd.parsers.markdown import MarkdownParser
from adfmd.readview import DisplayLine, DisplayLines, ReadViewNode
from adfmd.registry import ComponentRegistry
from adfmd.renderers.markdown import MarkdownRenderer
from adfmd.renderers.readview import ReadViewRenderer

logger = logging.getLogger(__name__)

DocumentSource = Union[Document, Mapping[str, Any]]


def _resolve_document(source: DocumentSource) -> Document:
    """Accept a :class:`Document` or its ADF dictionary form.

    Raises
    ------
    DocumentFormatError
        If a mapping does not have the ADF document shape
    TypeError
        If ``source`` is neither

    """
    if isinstance(source, Document):
        return source
    if isinstance(source, Mapping):
        return document_from_dict(dict(source))
    raise TypeError(f"Expected a Document or ADF mapping, got {type(source).__name__}")


def _apply_overrides(options: Any, overrides: dict[str, Any]) -> Any:
    if not overrides:
        return options
    logger.debug("Overriding %s fields: %s", type(options).__name__, sorted(overrides))
    return options.create_updated(**overrides)


def from_markdown(
    source: Union[str, bytes, Path],
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    registry: Optional[ComponentRegistry] = None,
    id_factory: Optional[IdFactory] = None,
    **kwargs: Any,
) -> Document:
    """Parse Markdown into an ADF document.

    Parameters
    ----------
    source : str, bytes or Path
        Markdown text, or a path to a Markdown file
    parser_options : MarkdownParserOptions, optional
        Parser options
    registry : ComponentRegistry, optional
        Handler lookup; defaults to a new built-in registry
    id_factory : callable, optional
        Source of task list identifiers; defaults to random UUIDs
    kwargs : Any
        Individual parser option fields overriding ``parser_options``

    Returns
    -------
    Document
        The parsed document

    Examples
    --------
        >>> doc = from_markdown("# Title\\n\\nSome **bold** text.")
        >>> [node.type for node in doc.content]
        ['heading', 'paragraph']

    """
    options = _apply_overrides(parser_options or MarkdownParserOptions(), kwargs)
    parser = MarkdownParser(options=options, registry=registry, id_factory=id_factory)
    if isinstance(source, Path):
        return parser.parse_file(source)
    return parser.parse(source)


def to_markdown(
    source: DocumentSource,
    *,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    registry: Optional[ComponentRegistry] = None,
    **kwargs: Any,
) -> str:
    """Render an ADF document as Markdown.

    Parameters
    ----------
    source : Document or mapping
        Document, or its ADF dictionary form
    renderer_options : MarkdownRendererOptions, optional
        Renderer options
    registry : ComponentRegistry, optional
        Handler lookup; defaults to a new built-in registry
    kwargs : Any
        Individual renderer option fields overriding ``renderer_options``

    Returns
    -------
    str
        Markdown text

    Raises
    ------
    RegistryError
        If ``registry`` has no handler for the document root

    """
    options = _apply_overrides(renderer_options or MarkdownRendererOptions(), kwargs)
    return MarkdownRenderer(options=options, registry=registry).render_to_string(_resolve_document(source))


def to_read_view(
    source: DocumentSource,
    *,
    options: Optional[ReadViewOptions] = None,
    registry: Optional[ComponentRegistry] = None,
) -> ReadViewNode:
    """Project an ADF document into a read-view tree.

    When ``source`` is a mapping, the returned root owns the decoded document
    (:attr:`ReadViewNode.document`) so source references stay valid.
    """
    doc = _resolve_document(source)
    root = ReadViewRenderer(options=options, registry=registry).project(doc)
    if doc is not source:
        root.document = doc
    return root


def to_display_lines(
    source: DocumentSource,
    *,
    options: Optional[ReadViewOptions] = None,
    registry: Optional[ComponentRegistry] = None,
) -> list[DisplayLine]:
    """Project and flatten an ADF document into display lines.

    Lines projected from a mapping come back as :class:`DisplayLines`, which
    keeps the decoded document alive for :attr:`DisplayLine.source_node`.

    Examples
    --------
        >>> doc = from_markdown("- [x] done\\n- [ ] todo")
        >>> [line.content for line in to_display_lines(doc)]
        ['☑ done', '☐ todo']

    """
    doc = _resolve_document(source)
    lines = ReadViewRenderer(options=options, registry=registry).render_lines(doc)
    if doc is not source:
        return DisplayLines(lines, document=doc)
    return lines
