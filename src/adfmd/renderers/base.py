#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/renderers/base.py
"""Base class for document renderers.

A renderer owns its options and a :class:`ComponentRegistry`; each call
builds a fresh :class:`RenderContext` so renderers are reusable and keep no
state between documents.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Optional, Union

from adfmd.ast.nodes import Document
from adfmd.constants import DOC_TYPE
from adfmd.context import RenderContext
from adfmd.exceptions import RenderingError, ValidationError
from adfmd.options.markdown import MarkdownRendererOptions
from adfmd.options.readview import ReadViewOptions
from adfmd.registry import ComponentRegistry, NodeHandler, create_default_registry

OutputTarget = Union[str, Path, IO[str], IO[bytes]]


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    registry : ComponentRegistry or None, default None
        Handler lookup; a new default registry is built when omitted

    """

    def __init__(self, registry: Optional[ComponentRegistry] = None):
        """Initialize the renderer with a registry."""
        self.registry = registry if registry is not None else create_default_registry()

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render ``doc`` to text."""

    def render(self, doc: Document, output: OutputTarget) -> None:
        """Render ``doc`` and write the text to ``output``.

        Parameters
        ----------
        doc : Document
            Document to render
        output : str, Path, or file-like object
            Destination path, or a text or binary stream

        Raises
        ------
        RenderingError
            If the output cannot be written

        """
        self.write_text_output(self.render_to_string(doc), output)

    def _root_handler(self) -> NodeHandler:
        return self.registry.require(DOC_TYPE)

    def _make_context(
        self,
        markdown_options: Optional[MarkdownRendererOptions] = None,
        read_view_options: Optional[ReadViewOptions] = None,
    ) -> RenderContext:
        kwargs: dict[str, Any] = {}
        if markdown_options is not None:
            kwargs["markdown_options"] = markdown_options
        if read_view_options is not None:
            kwargs["read_view_options"] = read_view_options
        return RenderContext(registry=self.registry, **kwargs)

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, renderer_name: str) -> None:
        """Reject options of the wrong class.

        Raises
        ------
        ValidationError
            If ``options`` is not None and not an instance of ``expected_type``

        """
        if options is not None and not isinstance(options, expected_type):
            raise ValidationError(
                f"{renderer_name} renderer expects {expected_type.__name__}, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )

    @staticmethod
    def write_text_output(text: str, output: OutputTarget) -> None:
        """Write ``text`` to a path or stream as UTF-8.

        Binary streams receive encoded bytes; text streams receive ``text``
        unchanged.

        Raises
        ------
        RenderingError
            If a path cannot be written
        TypeError
            If ``output`` is neither a path nor writable

        """
        if isinstance(output, (str, Path)):
            path = Path(output)
            try:
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise RenderingError(f"Could not write {path}: {e}", output_path=str(path), original_error=e) from e
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output)}")

        if isinstance(output, io.TextIOBase):
            output.write(text)
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)) or "b" in str(getattr(output, "mode", "")):
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(text)  # type: ignore[arg-type]
