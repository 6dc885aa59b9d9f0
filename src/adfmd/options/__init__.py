#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parser and renderer options for adfmd."""

from adfmd.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from adfmd.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from adfmd.options.readview import ReadViewOptions, Theme

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "ReadViewOptions",
    "Theme",
]
