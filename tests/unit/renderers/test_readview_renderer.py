#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for read-view projection and line flattening.

Test Coverage:
- Flattening rules: prefix propagation, newline splitting, blank suppression
- Projection of every built-in node family
- Styles and weak source references on display lines
"""

import gc

import pytest

from adfmd.ast import Document, Mark, Node, paragraph, text
from adfmd.exceptions import RegistryError
from adfmd.options import ReadViewOptions, Theme
from adfmd.readview import DisplayLine, ReadViewNode, Style
from adfmd.registry import ComponentRegistry
from adfmd.renderers.readview import ReadViewRenderer, flatten_read_view


def _contents(lines: list[DisplayLine]) -> list[str]:
    return [line.content for line in lines]


def _lines(*blocks: Node, options: ReadViewOptions = None) -> list[str]:
    return _contents(ReadViewRenderer(options).render_lines(Document(content=list(blocks))))


def _item(value: str) -> Node:
    return Node("listItem", content=[paragraph(text(value))])


@pytest.mark.unit
class TestFlatten:
    """Test the flattening walk on hand-built trees."""

    def test_leaf_lines_split(self) -> None:
        """Test a leaf splits on newlines and drops trailing empties."""
        assert _contents(flatten_read_view(ReadViewNode(content="a\nb\n\n"))) == ["a", "b"]

    def test_prefix_goes_to_first_child_only(self) -> None:
        """Test a container's prefix joins its first child's first line."""
        root = ReadViewNode(content="• ", children=[ReadViewNode(content="a"), ReadViewNode(content="b")])
        assert _contents(flatten_read_view(root)) == ["• a", "b"]

    def test_container_content_lines(self) -> None:
        """Test complete lines of a container are pushed before its children."""
        root = ReadViewNode(content="title\n> ", children=[ReadViewNode(content="body")])
        assert _contents(flatten_read_view(root)) == ["title", "> body"]

    def test_prefix_propagates_through_levels(self) -> None:
        """Test a carried prefix passes down through empty containers."""
        leaf = ReadViewNode(content="x")
        root = ReadViewNode(content="1. ", children=[ReadViewNode(children=[ReadViewNode(children=[leaf])])])
        assert _contents(flatten_read_view(root)) == ["1. x"]

    def test_no_consecutive_blank_lines(self) -> None:
        """Test runs of blank lines collapse to one."""
        root = ReadViewNode(
            children=[
                ReadViewNode(content="a"),
                ReadViewNode(content=""),
                ReadViewNode(content=""),
                ReadViewNode(content="b\n\n\nc"),
            ]
        )
        assert _contents(flatten_read_view(root)) == ["a", "", "b", "", "c"]

    def test_no_leading_blank_line(self) -> None:
        """Test output never starts with a blank line."""
        root = ReadViewNode(children=[ReadViewNode(content=""), ReadViewNode(content="\nx")])
        assert _contents(flatten_read_view(root)) == ["x"]

    def test_empty_tree(self) -> None:
        """Test an empty tree flattens to one empty line."""
        assert _contents(flatten_read_view(ReadViewNode())) == [""]

    def test_line_style_comes_from_pushing_node(self) -> None:
        """Test each line carries the style of the node that produced it."""
        bold = Style(bold=True)
        root = ReadViewNode(content="head\n", style=Style(dim=True), children=[ReadViewNode(content="x", style=bold)])
        lines = flatten_read_view(root)
        assert lines[0].style == Style(dim=True)
        assert lines[1].style == bold


@pytest.mark.unit
class TestProjection:
    """Test projection of documents into display lines."""

    def test_reference_document(self, parser, sample_markdown: str) -> None:
        """Test heading, spans and task items."""
        doc = parser.parse(sample_markdown)
        assert _contents(ReadViewRenderer().render_lines(doc)) == [
            "# Title",
            "Some ",
            "bold",
            " and ",
            "italic",
            " text.",
            "☐ todo one",
            "☑ todo two",
        ]

    def test_empty_document(self) -> None:
        """Test an empty document gives one empty line."""
        assert _lines() == [""]
        assert ReadViewRenderer().render_to_string(Document()) == "\n"

    def test_code_block(self) -> None:
        """Test the opening fence line and the verbatim body."""
        node = Node("codeBlock", attrs={"language": "py"}, content=[text("a = 1\nb = 2")])
        assert _lines(node) == ["```py", "a = 1", "b = 2"]

    def test_lists(self) -> None:
        """Test bullet and ordered markers."""
        assert _lines(Node("bulletList", content=[_item("a"), _item("b")])) == ["• a", "• b"]
        ordered = Node("orderedList", attrs={"order": 5}, content=[_item("a"), _item("b")])
        assert _lines(ordered) == ["5. a", "6. b"]

    def test_nested_list_indent(self) -> None:
        """Test nested items are indented by depth."""
        inner = Node("bulletList", content=[_item("b")])
        outer = Node("bulletList", content=[Node("listItem", content=[paragraph(text("a")), inner])])
        assert _lines(outer) == ["• a", "  • b"]

    def test_custom_bullet_symbol(self) -> None:
        """Test the bullet symbol option."""
        options = ReadViewOptions(bullet_symbol="*")
        assert _lines(Node("bulletList", content=[_item("a")]), options=options) == ["* a"]

    def test_rule(self) -> None:
        """Test rule width and style."""
        options = ReadViewOptions(rule_width=5, theme=Theme(muted="#000000"))
        lines = ReadViewRenderer(options).render_lines(Document(content=[Node("rule")]))
        assert _contents(lines) == ["─────"]
        assert lines[0].style == Style(fg="#000000", dim=True)

    def test_blockquote(self) -> None:
        """Test quote bars prefix the first line."""
        assert _lines(Node("blockquote", content=[paragraph(text("q"))])) == ["│ q"]

    def test_hard_break_between_text(self) -> None:
        """Test a hard break adds no line of its own between text lines."""
        assert _lines(paragraph(text("a"), Node("hardBreak"), text("b"))) == ["a", "b"]

    def test_panel_and_expand(self) -> None:
        """Test panel labels and expand titles."""
        panel = Node("panel", attrs={"panelType": "warning"}, content=[paragraph(text("careful"))])
        expand = Node("expand", attrs={"title": "More"}, content=[paragraph(text("hidden"))])
        assert _lines(panel, expand) == ["⚠ [WARNING] careful", "▶ More", "hidden"]

    def test_table(self) -> None:
        """Test rows start with a bar and header cells are bold."""
        row = Node(
            "tableRow",
            content=[
                Node("tableHeader", content=[paragraph(text("A"))]),
                Node("tableHeader", content=[paragraph(text("B"))]),
            ],
        )
        renderer = ReadViewRenderer()
        tree = renderer.project(Document(content=[Node("table", content=[row])]))
        header_cell = tree.children[0].children[0].children[0]
        assert header_cell.style == Style(bold=True)
        assert _lines(Node("table", content=[row])) == ["│ A", "B"]

    def test_inline_widgets(self) -> None:
        """Test status, mention, emoji, date and media."""
        para = paragraph(
            Node("status", attrs={"text": "Done", "color": "green"}),
            Node("mention", attrs={"text": "Sam"}),
            Node("emoji", attrs={"shortName": "tada"}),
            Node("date", attrs={"timestamp": "1700000000000"}),
        )
        media = Node("mediaSingle", content=[Node("media", attrs={"type": "file", "id": "1", "alt": "chart"})])
        assert _lines(para, media) == ["[Done]", "@Sam", ":tada:", "2023-11-14", "[📎 chart]"]

    def test_decisions(self) -> None:
        """Test decision items show their state icon."""
        node = Node(
            "decisionList",
            content=[
                Node("decisionItem", attrs={"state": "DECIDED"}, content=[text("go")]),
                Node("decisionItem", attrs={"state": "UNDECIDED"}, content=[text("hold")]),
            ],
        )
        assert _lines(node) == ["[✓] DECISION: go", "[○] DECISION: hold"]

    def test_unknown_node(self) -> None:
        """Test unsupported nodes show a label followed by their JSON."""
        lines = _lines(Node("inlineCard", attrs={"url": "u"}))
        assert lines[0] == "[Unknown Component: inlineCard]"
        assert lines[1] == "{"
        assert '  "type": "inlineCard",' in lines

    def test_missing_root_handler(self) -> None:
        """Test projection requires a doc handler."""
        with pytest.raises(RegistryError):
            ReadViewRenderer(registry=ComponentRegistry()).project(Document())


@pytest.mark.unit
class TestStyles:
    """Test styles assigned by projection."""

    def test_text_mark_styles(self) -> None:
        """Test marks map to display attributes."""
        theme = Theme()
        para = paragraph(
            text("b", Mark("strong")),
            text("i", Mark("em")),
            text("c", Mark("code")),
            text("l", Mark("link", {"href": "h"})),
            text("s", Mark("strike")),
        )
        styles = [line.style for line in ReadViewRenderer().render_lines(Document(content=[para]))]
        assert styles == [
            Style(bold=True),
            Style(italic=True),
            Style(fg=theme.code_fg, bg=theme.code_bg),
            Style(fg=theme.link, underline=True),
            Style(dim=True),
        ]

    def test_heading_style(self) -> None:
        """Test heading prefixes use the level colour."""
        theme = Theme()
        tree = ReadViewRenderer().project(Document(content=[Node("heading", attrs={"level": 2}, content=[])]))
        assert tree.children[0].style == Style(fg=theme.heading_colors[1], bold=True)

    def test_style_to_rich(self) -> None:
        """Test conversion to rich style strings."""
        assert Style(bold=True, fg="#ffffff", bg="#000000").to_rich() == "bold #ffffff on #000000"
        assert Style().to_rich() == "none"
        assert Style().is_plain

    def test_style_merged(self) -> None:
        """Test set values of the other style win."""
        merged = Style(fg="#111111", bold=True).merged(Style(fg="#222222", italic=True))
        assert merged == Style(fg="#222222", bold=True, italic=True)


@pytest.mark.unit
class TestSourceReferences:
    """Test back-references from display lines to document nodes."""

    def test_lines_reference_text_nodes(self) -> None:
        """Test each text line points at its text node."""
        node = text("hello")
        doc = Document(content=[paragraph(node)])
        lines = ReadViewRenderer().render_lines(doc)
        assert lines[0].source_node is node

    def test_references_do_not_keep_document_alive(self) -> None:
        """Test discarding the document clears the references."""
        doc = Document(content=[paragraph(text("hello"))])
        lines = ReadViewRenderer().render_lines(doc)
        del doc
        gc.collect()
        assert lines[0].source_node is None

    def test_projection_references_document(self) -> None:
        """Test the projected root points at the document."""
        doc = Document()
        assert ReadViewRenderer().project(doc).source_node is doc
