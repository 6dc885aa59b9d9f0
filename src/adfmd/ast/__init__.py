#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/ast/__init__.py
"""ADF document tree and its JSON codec.

Examples
--------
    >>> from adfmd.ast import Document, Mark, paragraph, text
    >>> doc = Document(content=[paragraph(text("Hello "), text("world", Mark("strong")))])
    >>> doc.content[0].plain_text()
    'Hello world'

"""

from adfmd.ast.nodes import Document, Mark, Node, paragraph, text
from adfmd.ast.serialization import (
    dict_to_mark,
    dict_to_node,
    document_from_dict,
    document_to_dict,
    document_to_json,
    json_to_document,
    load_document,
    mark_to_dict,
    node_to_dict,
)

__all__ = [
    "Document",
    "Mark",
    "Node",
    "dict_to_mark",
    "dict_to_node",
    "document_from_dict",
    "document_to_dict",
    "document_to_json",
    "json_to_document",
    "load_document",
    "mark_to_dict",
    "node_to_dict",
    "paragraph",
    "text",
]
