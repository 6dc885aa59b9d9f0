#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the high-level conversion functions."""

import gc

import pytest

import adfmd
from adfmd import (
    DisplayLines,
    Document,
    DocumentFormatError,
    ReadViewNode,
    from_markdown,
    sequential_id_factory,
    to_display_lines,
    to_markdown,
    to_read_view,
)
from adfmd.ast import document_to_dict
from adfmd.options import MarkdownParserOptions, MarkdownRendererOptions


@pytest.mark.unit
class TestFromMarkdown:
    """Test Markdown input."""

    def test_string_input(self) -> None:
        """Test parsing Markdown text."""
        doc = from_markdown("# Title\n\nbody")
        assert [node.type for node in doc.content] == ["heading", "paragraph"]

    def test_path_input(self, tmp_path) -> None:
        """Test parsing a Markdown file."""
        path = tmp_path / "page.md"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert from_markdown(path).content[0].type == "bulletList"

    def test_option_overrides(self) -> None:
        """Test keyword overrides update the parser options."""
        options = MarkdownParserOptions(parse_tables=True)
        doc = from_markdown("| a |", parser_options=options, parse_tables=False)
        assert doc.content[0].type == "paragraph"

    def test_unknown_override(self) -> None:
        """Test an unknown option name is rejected."""
        with pytest.raises(TypeError):
            from_markdown("x", not_an_option=True)

    def test_id_factory(self) -> None:
        """Test injected identifier sources are used."""
        doc = from_markdown("- [ ] a", id_factory=sequential_id_factory("t"))
        assert doc.content[0].attrs == {"localId": "t1"}


@pytest.mark.unit
class TestToMarkdown:
    """Test Markdown output."""

    def test_round_trip(self, sample_markdown: str) -> None:
        """Test the reference document renders back to canonical Markdown."""
        markdown = to_markdown(from_markdown(sample_markdown))
        assert markdown == "# Title\n\nSome **bold** and *italic* text.\n\n- [ ] todo one\n- [x] todo two\n\n"

    def test_mapping_input(self) -> None:
        """Test ADF dictionaries are accepted."""
        data = {"type": "doc", "version": 1, "content": [{"type": "rule"}]}
        assert to_markdown(data) == "\n---\n\n"

    def test_malformed_mapping(self) -> None:
        """Test a mapping without the document shape is rejected."""
        with pytest.raises(DocumentFormatError):
            to_markdown({"type": "paragraph"})

    def test_wrong_source_type(self) -> None:
        """Test unsupported inputs raise TypeError."""
        with pytest.raises(TypeError):
            to_markdown("# not a document")  # type: ignore[arg-type]

    def test_option_overrides(self) -> None:
        """Test keyword overrides update the renderer options."""
        doc = from_markdown("- a")
        assert to_markdown(doc, bullet_marker="*") == "* a\n\n"
        options = MarkdownRendererOptions(bullet_marker="*")
        assert to_markdown(doc, renderer_options=options, bullet_marker="-") == "- a\n\n"

    def test_shared_registry(self, registry) -> None:
        """Test a shared registry can serve repeated calls."""
        doc = from_markdown("# a", registry=registry)
        assert to_markdown(doc, registry=registry) == to_markdown(doc, registry=registry)

    def test_input_not_modified(self, sample_markdown: str) -> None:
        """Test rendering leaves the document unchanged."""
        doc = from_markdown(sample_markdown, id_factory=sequential_id_factory())
        before = document_to_dict(doc)
        to_markdown(doc)
        to_display_lines(doc)
        assert document_to_dict(doc) == before


@pytest.mark.unit
class TestReadView:
    """Test read-view entry points."""

    def test_to_read_view(self) -> None:
        """Test projection returns a tree rooted at the document."""
        doc = Document()
        tree = to_read_view(doc)
        assert isinstance(tree, ReadViewNode)
        assert tree.source_node is doc

    def test_to_display_lines(self, sample_markdown: str) -> None:
        """Test flattening through the public API."""
        lines = to_display_lines(from_markdown(sample_markdown))
        assert lines[0].content == "# Title"
        assert lines[-1].content == "☑ todo two"

    def test_to_display_lines_from_mapping(self) -> None:
        """Test ADF dictionaries are accepted."""
        data = {"type": "doc", "version": 1, "content": []}
        assert [line.content for line in to_display_lines(data)] == [""]

    def test_mapping_lines_keep_source_nodes(self) -> None:
        """Test lines from a mapping still resolve their source nodes."""
        lines = to_display_lines(document_to_dict(from_markdown("hello world")))
        gc.collect()
        assert isinstance(lines, DisplayLines)
        source = lines[0].source_node
        assert source is not None
        assert any(node is source for node in lines.document.depth_first())
        assert source.plain_text() == "hello world"

    def test_mapping_tree_owns_document(self) -> None:
        """Test a tree projected from a mapping keeps its document alive."""
        tree = to_read_view(document_to_dict(from_markdown("# T")))
        gc.collect()
        assert tree.document is not None
        assert tree.source_node is tree.document

    def test_document_input_is_not_retained(self) -> None:
        """Test lines from a Document hold no strong reference to it."""
        doc = from_markdown("text")
        lines = to_display_lines(doc)
        assert type(lines) is list
        assert to_read_view(doc).document is None


@pytest.mark.unit
class TestPackage:
    """Test the package surface."""

    def test_version(self) -> None:
        """Test the version string is exposed."""
        assert adfmd.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        """Test every name in __all__ exists."""
        for name in adfmd.__all__:
            assert hasattr(adfmd, name), name

    def test_document_round_trip_through_dict(self, sample_markdown: str) -> None:
        """Test a parsed document survives the dictionary form."""
        doc = from_markdown(sample_markdown, id_factory=sequential_id_factory())
        assert to_markdown(document_to_dict(doc)) == to_markdown(doc)
