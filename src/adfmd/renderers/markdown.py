#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/renderers/markdown.py
"""Markdown rendering of ADF documents.

The renderer walks the document depth-first, delegating every node to the
handler its type maps to in the registry. Containers concatenate their
children's Markdown and add their own framing; unsupported node types are
written as labelled JSON code blocks rather than dropped.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from adfmd.ast.nodes import Document
from adfmd.options.markdown import MarkdownRendererOptions
from adfmd.registry import ComponentRegistry
from adfmd.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

# Fenced blocks are matched first so blank runs inside code survive collapsing.
_FENCE_OR_BLANK_RUN_RE = re.compile(r"(^```[^\n]*\n.*?^```[^\n]*$)|\n{3,}", re.MULTILINE | re.DOTALL)


def collapse_blank_lines(markdown: str) -> str:
    """Reduce runs of blank lines to one, leaving fenced code untouched."""
    return _FENCE_OR_BLANK_RUN_RE.sub(lambda m: m.group(1) or "\n\n", markdown)


class MarkdownRenderer(BaseRenderer):
    """Render ADF documents to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default None
        Formatting options
    registry : ComponentRegistry or None, default None
        Handler lookup; a new default registry is built when omitted

    Examples
    --------
        >>> from adfmd.ast import Document, Node, text
        >>> doc = Document(content=[
        ...     Node("heading", attrs={"level": 1}, content=[text("Title")]),
        ... ])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title\\n\\n'

    """

    def __init__(
        self,
        options: Optional[MarkdownRendererOptions] = None,
        registry: Optional[ComponentRegistry] = None,
    ):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        super().__init__(registry)
        self.options: MarkdownRendererOptions = options or MarkdownRendererOptions()

    def render_to_string(self, doc: Document) -> str:
        """Render a document to Markdown.

        Parameters
        ----------
        doc : Document
            Document to render

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        RegistryError
            If the registry has no handler for the document root

        """
        handler = self._root_handler()
        ctx = self._make_context(markdown_options=self.options)
        markdown = handler.to_markdown(doc, ctx)
        if self.options.collapse_blank_lines:
            markdown = collapse_blank_lines(markdown)
        logger.debug("Rendered %d top-level blocks to %d characters of Markdown", len(doc.content), len(markdown))
        return markdown
