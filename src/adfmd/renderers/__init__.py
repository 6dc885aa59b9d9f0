#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/renderers/__init__.py
"""Renderers producing Markdown text and read-view display lines."""

from adfmd.renderers.base import BaseRenderer
from adfmd.renderers.markdown import MarkdownRenderer
from adfmd.renderers.readview import ReadViewRenderer, flatten_read_view

__all__ = ["BaseRenderer", "MarkdownRenderer", "ReadViewRenderer", "flatten_read_view"]
