#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/ast/serialization.py
"""JSON serialization and deserialization for ADF documents.

This is the codec for the exact shape exchanged with the remote document
store and persisted in cache artifacts::

    {"type": "doc", "version": 1, "content": [
        {"type": "paragraph", "content": [
            {"type": "text", "text": "Hi", "marks": [{"type": "strong"}]}
        ]}
    ]}

Optional keys are omitted from the output when unset, so decoding and
re-encoding an ADF payload preserves its shape.

Two decoding entry points exist:

- :func:`json_to_document` is strict and raises :class:`DocumentFormatError`.
- :func:`load_document` is lenient: malformed input is logged and yields
  ``None``, which callers treat as "nothing to show".

Examples
--------
    >>> from adfmd.ast.serialization import document_to_json, json_to_document
    >>> doc = json_to_document('{"type": "doc", "version": 1, "content": []}')
    >>> document_to_json(doc, indent=None)
    '{"type": "doc", "version": 1, "content": []}'

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from adfmd.ast.nodes import Document, Mark, Node
from adfmd.exceptions import DocumentFormatError, ValidationError

logger = logging.getLogger(__name__)


def mark_to_dict(mark: Mark) -> dict[str, Any]:
    """Convert a mark to its ADF dictionary form."""
    result: dict[str, Any] = {"type": mark.type}
    if mark.attrs is not None:
        result["attrs"] = mark.attrs
    return result


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node (and its subtree) to its ADF dictionary form.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        ADF dictionary with unset optional keys omitted

    """
    if isinstance(node, Document):
        return document_to_dict(node)

    result: dict[str, Any] = {"type": node.type}
    if node.attrs is not None:
        result["attrs"] = node.attrs
    if node.content is not None:
        result["content"] = [node_to_dict(child) for child in node.content]
    if node.text is not None:
        result["text"] = node.text
    if node.marks is not None:
        result["marks"] = [mark_to_dict(mark) for mark in node.marks]
    return result


def document_to_dict(document: Document) -> dict[str, Any]:
    """Convert a document to its ADF dictionary form."""
    return {
        "type": document.type,
        "version": document.version,
        "content": [node_to_dict(child) for child in document.content],
    }


def _require_mapping(data: Any, path: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DocumentFormatError(f"Expected an object, got {type(data).__name__}", path=path)
    return data


def _optional_attrs(data: dict[str, Any], path: str) -> dict[str, Any] | None:
    attrs = data.get("attrs")
    if attrs is not None and not isinstance(attrs, dict):
        raise DocumentFormatError(f"'attrs' must be an object, got {type(attrs).__name__}", path=path)
    return attrs


def dict_to_mark(data: Any, path: str = "mark") -> Mark:
    """Convert an ADF mark dictionary to a :class:`Mark`.

    Raises
    ------
    DocumentFormatError
        If the mark is not an object or has no string ``type``

    """
    data = _require_mapping(data, path)
    mark_type = data.get("type")
    if not isinstance(mark_type, str):
        raise DocumentFormatError("Mark is missing a string 'type'", path=path)
    return Mark(type=mark_type, attrs=_optional_attrs(data, path))


def dict_to_node(data: Any, path: str = "node") -> Node:
    """Convert an ADF node dictionary (and its subtree) to a :class:`Node`.

    Unknown node types are accepted as-is; only structural problems (wrong
    JSON types, missing ``type``) are rejected.

    Parameters
    ----------
    data : Any
        Decoded JSON value for one node
    path : str, default "node"
        Location used in error messages

    Returns
    -------
    Node
        The decoded node

    Raises
    ------
    DocumentFormatError
        If the value does not have the ADF node shape

    """
    data = _require_mapping(data, path)
    node_type = data.get("type")
    if not isinstance(node_type, str):
        raise DocumentFormatError("Node is missing a string 'type'", path=path)

    content = data.get("content")
    children: list[Node] | None = None
    if content is not None:
        if not isinstance(content, list):
            raise DocumentFormatError(f"'content' must be an array, got {type(content).__name__}", path=path)
        children = [dict_to_node(child, f"{path}.content[{i}]") for i, child in enumerate(content)]

    text_value = data.get("text")
    if text_value is not None and not isinstance(text_value, str):
        raise DocumentFormatError(f"'text' must be a string, got {type(text_value).__name__}", path=path)

    raw_marks = data.get("marks")
    marks: list[Mark] | None = None
    if raw_marks is not None:
        if not isinstance(raw_marks, list):
            raise DocumentFormatError(f"'marks' must be an array, got {type(raw_marks).__name__}", path=path)
        marks = [dict_to_mark(mark, f"{path}.marks[{i}]") for i, mark in enumerate(raw_marks)]

    return Node(
        type=node_type,
        content=children,
        text=text_value,
        attrs=_optional_attrs(data, path),
        marks=marks,
    )


def document_from_dict(data: Any) -> Document:
    """Convert an ADF document dictionary to a :class:`Document`.

    Raises
    ------
    DocumentFormatError
        If the root is not a ``doc`` object with version 1 and a content array,
        or the tree is nested too deeply to decode

    """
    data = _require_mapping(data, "doc")
    if data.get("type") != "doc":
        raise DocumentFormatError(f"Root node type must be 'doc', got {data.get('type')!r}", path="doc")

    content = data.get("content", [])
    if content is None:
        content = []
    if not isinstance(content, list):
        raise DocumentFormatError(f"'content' must be an array, got {type(content).__name__}", path="doc")

    try:
        children = [dict_to_node(child, f"content[{i}]") for i, child in enumerate(content)]
    except RecursionError as e:
        raise DocumentFormatError("Document is nested too deeply to decode", path="doc", original_error=e) from e
    try:
        return Document(content=children, version=data.get("version", 1))
    except ValidationError as e:
        raise DocumentFormatError(e.message, path="doc", original_error=e) from e


def document_to_json(document: Document, indent: int | None = 2) -> str:
    """Serialize a document to ADF JSON.

    Parameters
    ----------
    document : Document
        The document to serialize
    indent : int or None, default 2
        JSON indentation; ``None`` produces compact output

    Returns
    -------
    str
        ADF JSON text

    """
    return json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)


def json_to_document(json_str: str | bytes) -> Document:
    """Decode ADF JSON into a document (strict).

    Parameters
    ----------
    json_str : str or bytes
        ADF JSON text

    Returns
    -------
    Document
        The decoded document

    Raises
    ------
    DocumentFormatError
        If the text is not valid JSON or not an ADF document

    """
    try:
        data = json.loads(json_str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentFormatError(f"Invalid JSON: {e}", original_error=e) from e
    except RecursionError as e:
        raise DocumentFormatError("Document is nested too deeply to decode", original_error=e) from e
    return document_from_dict(data)


def load_document(source: Union[str, bytes, Path]) -> Document | None:
    """Decode a stored ADF document, returning ``None`` when it is unusable.

    This is the lenient load path used for cached artifacts: a missing file,
    invalid JSON or a structurally invalid document all yield ``None`` so the
    caller can fall back to fetching a fresh copy.

    Parameters
    ----------
    source : str, bytes or Path
        ADF JSON text, or a path to a file holding it

    Returns
    -------
    Document or None
        The decoded document, or ``None``

    """
    if isinstance(source, Path):
        try:
            source = source.read_bytes()
        except OSError as e:
            logger.warning("Could not read stored document: %s", e)
            return None

    try:
        return json_to_document(source)
    except DocumentFormatError as e:
        logger.warning("Discarding malformed stored document: %s", e.message)
        return None
