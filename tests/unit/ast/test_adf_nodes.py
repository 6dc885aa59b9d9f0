#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the ADF node model."""

import pytest

from adfmd.ast import Document, Mark, Node, paragraph, text
from adfmd.exceptions import ValidationError


@pytest.mark.unit
class TestNode:
    """Test generic node behaviour."""

    def test_children_of_leaf_is_empty_list(self) -> None:
        """Test that leaves expose an empty children list."""
        assert text("x").children == []

    def test_get_attr_default_for_missing_and_none(self) -> None:
        """Test attribute lookup falls back to the default."""
        node = Node("heading", attrs={"level": None})
        assert node.get_attr("level", 1) == 1
        assert node.get_attr("missing", "d") == "d"
        assert Node("rule").get_attr("anything") is None

    def test_has_mark(self) -> None:
        """Test mark detection."""
        node = text("x", Mark("strong"), Mark("link", {"href": "https://example.com"}))
        assert node.has_mark("strong")
        assert node.has_mark("link")
        assert not node.has_mark("em")

    def test_depth_first_order(self) -> None:
        """Test depth-first traversal yields parents before children."""
        tree = Node("blockquote", content=[paragraph(text("a"), text("b")), paragraph(text("c"))])
        assert [n.type for n in tree.depth_first()] == [
            "blockquote",
            "paragraph",
            "text",
            "text",
            "paragraph",
            "text",
        ]

    def test_plain_text(self) -> None:
        """Test plain text concatenates text leaves only."""
        para = paragraph(text("Hello "), Node("hardBreak"), text("world", Mark("strong")))
        assert para.plain_text() == "Hello world"

    def test_copy_is_deep(self) -> None:
        """Test that copies share no mutable state."""
        original = paragraph(text("a", Mark("link", {"href": "x"})))
        clone = original.copy()
        assert clone == original
        clone.content[0].marks[0].attrs["href"] = "y"
        assert original.content[0].marks[0].attrs["href"] == "x"

    def test_equality_is_by_value(self) -> None:
        """Test that structurally equal trees compare equal."""
        assert paragraph(text("a")) == paragraph(text("a"))
        assert paragraph(text("a")) != paragraph(text("a", Mark("em")))

    def test_mark_order_matters_for_equality(self) -> None:
        """Test that mark order is significant."""
        assert text("x", Mark("strong"), Mark("em")) != text("x", Mark("em"), Mark("strong"))


@pytest.mark.unit
class TestDocument:
    """Test the document root."""

    def test_defaults(self) -> None:
        """Test a new document is an empty version-1 doc."""
        doc = Document()
        assert doc.type == "doc"
        assert doc.version == 1
        assert doc.content == []
        assert doc.is_empty

    def test_none_content_becomes_empty_list(self) -> None:
        """Test content is never None."""
        assert Document(content=None).content == []  # type: ignore[arg-type]

    def test_wrong_version_rejected(self) -> None:
        """Test unsupported versions raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Document(version=2)
        assert exc_info.value.parameter_name == "version"

    def test_wrong_type_rejected(self) -> None:
        """Test the root type is fixed."""
        with pytest.raises(ValidationError):
            Document(type="paragraph")
