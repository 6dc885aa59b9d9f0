#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for ADF JSON serialization and deserialization."""

import json
import logging
import sys

import pytest

from adfmd.ast import (
    Document,
    Mark,
    Node,
    dict_to_node,
    document_from_dict,
    document_to_dict,
    document_to_json,
    json_to_document,
    load_document,
    node_to_dict,
    paragraph,
    text,
)
from adfmd.exceptions import DocumentFormatError


@pytest.mark.unit
class TestToDict:
    """Test node and document to dictionary conversion."""

    def test_text_node_omits_unset_keys(self) -> None:
        """Test that None-valued fields are left out."""
        assert node_to_dict(text("Hello")) == {"type": "text", "text": "Hello"}

    def test_marks_and_attrs(self) -> None:
        """Test marks keep their order and attributes."""
        node = text("x", Mark("strong"), Mark("link", {"href": "https://example.com"}))
        assert node_to_dict(node) == {
            "type": "text",
            "text": "x",
            "marks": [{"type": "strong"}, {"type": "link", "attrs": {"href": "https://example.com"}}],
        }

    def test_document_shape(self) -> None:
        """Test the root carries type, version and content."""
        doc = Document(content=[paragraph(text("Body"))])
        assert document_to_dict(doc) == {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Body"}]}],
        }

    def test_node_to_dict_on_document_includes_version(self) -> None:
        """Test that node_to_dict delegates for the root."""
        assert node_to_dict(Document())["version"] == 1


@pytest.mark.unit
class TestFromDict:
    """Test strict decoding of ADF dictionaries."""

    def test_round_trip_preserves_unknown_types(self) -> None:
        """Test that unrecognised node types survive decoding."""
        data = {
            "type": "doc",
            "version": 1,
            "content": [{"type": "inlineCard", "attrs": {"url": "https://example.com"}}],
        }
        doc = document_from_dict(data)
        assert doc.content[0] == Node("inlineCard", attrs={"url": "https://example.com"})
        assert document_to_dict(doc) == data

    def test_missing_content_is_empty(self) -> None:
        """Test a document without content decodes as empty."""
        assert document_from_dict({"type": "doc", "version": 1}).is_empty

    def test_wrong_root_type(self) -> None:
        """Test the root must be a doc."""
        with pytest.raises(DocumentFormatError):
            document_from_dict({"type": "paragraph", "content": []})

    def test_wrong_version(self) -> None:
        """Test unsupported versions are a format error."""
        with pytest.raises(DocumentFormatError):
            document_from_dict({"type": "doc", "version": 3, "content": []})

    def test_error_path_points_at_bad_node(self) -> None:
        """Test errors name the offending location."""
        data = {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph"}, {"type": "paragraph", "content": [{"text": "no type"}]}],
        }
        with pytest.raises(DocumentFormatError) as exc_info:
            document_from_dict(data)
        assert exc_info.value.path == "content[1].content[0]"

    def test_bad_marks(self) -> None:
        """Test marks must be an array."""
        with pytest.raises(DocumentFormatError):
            dict_to_node({"type": "text", "text": "x", "marks": "strong"})

    def test_text_must_be_string(self) -> None:
        """Test that non-string text is rejected."""
        with pytest.raises(DocumentFormatError):
            dict_to_node({"type": "text", "text": 5})


@pytest.mark.unit
class TestJson:
    """Test JSON text conversion."""

    def test_document_to_json_is_unescaped(self) -> None:
        """Test non-ASCII text is written as-is."""
        doc = Document(content=[paragraph(text("café ✓"))])
        assert "café ✓" in document_to_json(doc)

    def test_compact_output(self) -> None:
        """Test indent=None gives single-line JSON."""
        assert "\n" not in document_to_json(Document(), indent=None)

    def test_json_round_trip(self) -> None:
        """Test JSON text decodes to an equal document."""
        doc = Document(content=[Node("heading", attrs={"level": 2}, content=[text("T", Mark("em"))])])
        assert json_to_document(document_to_json(doc)) == doc

    def test_invalid_json_raises(self) -> None:
        """Test strict decoding raises on malformed JSON."""
        with pytest.raises(DocumentFormatError):
            json_to_document("{not json")

    def test_bytes_input(self) -> None:
        """Test bytes are accepted."""
        payload = json.dumps({"type": "doc", "version": 1, "content": []}).encode("utf-8")
        assert json_to_document(payload).is_empty


@pytest.mark.unit
class TestLoadDocument:
    """Test the lenient load path."""

    def test_malformed_returns_none(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test malformed input yields None and a warning."""
        with caplog.at_level(logging.WARNING):
            assert load_document("{broken") is None
        assert any("malformed" in record.message for record in caplog.records)

    def test_wrong_shape_returns_none(self) -> None:
        """Test a non-document JSON value yields None."""
        assert load_document("[1, 2, 3]") is None

    def test_deeply_nested_returns_none(self) -> None:
        """Test nesting beyond the recursion limit yields None."""
        depth = sys.getrecursionlimit() * 5
        payload = (
            '{"type":"doc","version":1,"content":['
            + '{"type":"x","content":[' * depth
            + "]}" * depth
            + "]}"
        )
        assert load_document(payload) is None

    def test_deeply_nested_dict_raises_format_error(self) -> None:
        """Test strict decoding of an over-deep tree raises DocumentFormatError."""
        node: dict = {"type": "x"}
        for _ in range(sys.getrecursionlimit() * 2):
            node = {"type": "x", "content": [node]}
        with pytest.raises(DocumentFormatError, match="nested too deeply"):
            document_from_dict({"type": "doc", "version": 1, "content": [node]})

    def test_missing_file_returns_none(self, tmp_path) -> None:
        """Test an unreadable path yields None."""
        assert load_document(tmp_path / "missing.json") is None

    def test_reads_file(self, tmp_path) -> None:
        """Test a valid stored document loads."""
        path = tmp_path / "page.json"
        path.write_text(document_to_json(Document(content=[paragraph(text("x"))])), encoding="utf-8")
        doc = load_document(path)
        assert doc is not None
        assert doc.content[0].plain_text() == "x"
