#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the Markdown renderer."""

from dataclasses import dataclass, field
from io import BytesIO, StringIO
from typing import Any

import pytest

from docublocks.ast import (
    BOLD,
    CODE,
    HIGHLIGHT,
    ITALIC,
    STRIKE,
    Admonition,
    BlockQuote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    Mark,
    Node,
    OrderedList,
    Paragraph,
    Text,
)
from docublocks.exceptions import InvalidOptionsError
from docublocks.options import MarkdownParserOptions, MarkdownRendererOptions
from docublocks.renderers.markdown import MarkdownRenderer, serialize_tree


def _doc(*blocks: Node) -> Document:
    return Document(children=list(blocks))


def _para(*runs: Node) -> Paragraph:
    return Paragraph(children=list(runs))


def _item(*blocks: Node) -> ListItem:
    return ListItem(children=list(blocks))


@pytest.mark.unit
class TestBlocks:
    """Test rendering of block nodes."""

    def test_heading(self) -> None:
        """Test ATX headings."""
        assert serialize_tree(_doc(Heading(level=3, children=[Text("Title")]))) == "### Title"

    def test_paragraphs_separated_by_blank_line(self) -> None:
        """Test block separation."""
        assert serialize_tree(_doc(_para(Text("a")), _para(Text("b")))) == "a\n\nb"

    def test_horizontal_rule(self) -> None:
        """Test thematic breaks."""
        assert serialize_tree(_doc(_para(Text("a")), HorizontalRule())) == "a\n\n---"

    def test_placeholder_document_renders_empty(self) -> None:
        """Test that the placeholder paragraph serializes to nothing."""
        assert serialize_tree(_doc(_para(Text(" ")))) == ""

    def test_block_image(self) -> None:
        """Test an image used as a block."""
        assert serialize_tree(_doc(Image(src="a.png", alt="A"))) == "![A](a.png)"


@pytest.mark.unit
class TestCodeBlocks:
    """Test fenced code rendering."""

    def test_language(self) -> None:
        """Test a fence with a language."""
        block = CodeBlock(language="python", children=[Text("x = 1")])
        assert serialize_tree(_doc(block)) == "```python\nx = 1\n```"

    def test_title(self) -> None:
        """Test the Docusaurus title suffix."""
        block = CodeBlock(language="typescript", title="example.ts", children=[Text("const x = 1;")])
        assert serialize_tree(_doc(block)) == '```typescript title="example.ts"\nconst x = 1;\n```'

    def test_no_language(self) -> None:
        """Test a bare fence."""
        assert serialize_tree(_doc(CodeBlock(children=[Text("plain")]))) == "```\nplain\n```"

    def test_fence_lengthened_for_backticks(self) -> None:
        """Test that code containing a fence gets a longer fence."""
        block = CodeBlock(language="md", children=[Text("```js\nx\n```")])
        assert serialize_tree(_doc(block)) == "````md\n```js\nx\n```\n````"

    def test_code_not_collapsed(self) -> None:
        """Test that blank lines inside code are kept."""
        block = CodeBlock(children=[Text("a\n\n\n\nb")])
        assert serialize_tree(_doc(block)) == "```\na\n\n\n\nb\n```"


@pytest.mark.unit
class TestInline:
    """Test mark wrapping."""

    @pytest.mark.parametrize(
        "mark,expected",
        [
            (BOLD, "**t**"),
            (ITALIC, "_t_"),
            (CODE, "`t`"),
            (Mark.link("/x"), "[t](/x)"),
            (HIGHLIGHT, "==t=="),
            (STRIKE, "~~t~~"),
        ],
    )
    def test_single_marks(self, mark: Mark, expected: str) -> None:
        """Test each mark on its own."""
        assert serialize_tree(_doc(_para(Text("t", marks=frozenset({mark}))))) == expected

    def test_fixed_nesting_order(self) -> None:
        """Test that marks wrap innermost first in the fixed order."""
        run = Text("t", marks=frozenset({STRIKE, BOLD, ITALIC, Mark.link("/x")}))
        assert serialize_tree(_doc(_para(run))) == "~~[_**t**_](/x)~~"

    def test_mixed_runs(self) -> None:
        """Test a paragraph of several runs."""
        para = _para(Text("Use "), Text("bold", marks=frozenset({BOLD})), Text(" text."))
        assert serialize_tree(_doc(para)) == "Use **bold** text."

    def test_inline_image_with_title(self) -> None:
        """Test an inline image with a title."""
        para = _para(Text("see "), Image(src="p.png", alt="pic", title="T"))
        assert serialize_tree(_doc(para)) == 'see ![pic](p.png "T")'

    def test_blank_lines_collapsed(self) -> None:
        """Test that runs of blank lines in text are collapsed by default."""
        assert serialize_tree(_doc(_para(Text("a\n\n\n\nb")))) == "a\n\nb"

    def test_blank_lines_kept_when_disabled(self) -> None:
        """Test that collapsing can be switched off."""
        options = MarkdownRendererOptions(collapse_blank_lines=False)
        assert serialize_tree(_doc(_para(Text("a\n\n\n\nb"))), options) == "a\n\n\n\nb"


@pytest.mark.unit
class TestContainers:
    """Test block quotes and admonitions."""

    def test_block_quote(self) -> None:
        """Test a single-paragraph quote."""
        assert serialize_tree(_doc(BlockQuote(children=[_para(Text("quoted"))]))) == "> quoted"

    def test_block_quote_single_prefix(self) -> None:
        """Test the default single-prefix rendering of multi-block quotes."""
        quote = BlockQuote(children=[_para(Text("first")), _para(Text("second"))])
        assert serialize_tree(_doc(quote)) == "> firstsecond"

    def test_block_quote_all_lines(self) -> None:
        """Test quoting every line."""
        options = MarkdownRendererOptions(quote_all_lines=True)
        quote = BlockQuote(children=[_para(Text("first\nline")), _para(Text("second"))])
        assert serialize_tree(_doc(quote), options) == "> first\n> line\n>\n> second"

    def test_admonition_with_title(self) -> None:
        """Test a titled admonition."""
        admonition = Admonition(type="tip", title="My Tip", children=[_para(Text("Body"))])
        assert serialize_tree(_doc(admonition)) == ":::tip My Tip\n\nBody\n\n:::"

    def test_admonition_without_title(self) -> None:
        """Test an untitled admonition with two blocks."""
        admonition = Admonition(type="danger", children=[_para(Text("a")), CodeBlock(children=[Text("b")])])
        assert serialize_tree(_doc(admonition)) == ":::danger\n\na\n\n```\nb\n```\n\n:::"

    def test_admonition_empty_type_defaults_to_note(self) -> None:
        """Test that an empty type renders as note."""
        assert serialize_tree(_doc(Admonition(type="", children=[_para(Text("x"))]))).startswith(":::note\n")


@pytest.mark.unit
class TestLists:
    """Test list layout."""

    def test_bullet_list(self) -> None:
        """Test a flat bullet list."""
        bullets = BulletList(children=[_item(_para(Text("a"))), _item(_para(Text("b")))])
        assert serialize_tree(_doc(bullets)) == "- a\n- b"

    def test_bullet_symbol_option(self) -> None:
        """Test a different bullet symbol."""
        bullets = BulletList(children=[_item(_para(Text("a")))])
        assert serialize_tree(_doc(bullets), MarkdownRendererOptions(bullet_symbol="*")) == "* a"

    def test_ordered_numbering(self) -> None:
        """Test that ordered items are numbered from one."""
        ordered = OrderedList(children=[_item(_para(Text(x))) for x in "abc"])
        assert serialize_tree(_doc(ordered)) == "1. a\n2. b\n3. c"

    def test_nested_mixed_lists(self) -> None:
        """Test nesting with restarted numbering."""
        tree = _doc(
            BulletList(
                children=[
                    _item(
                        _para(Text("Unordered 1")),
                        OrderedList(
                            children=[_item(_para(Text("Ordered 1.1"))), _item(_para(Text("Ordered 1.2")))]
                        ),
                        BulletList(children=[_item(_para(Text("Unordered 1.2.1")))]),
                    ),
                    _item(_para(Text("Unordered 2"))),
                ]
            )
        )
        assert serialize_tree(tree).split("\n") == [
            "- Unordered 1",
            "  1. Ordered 1.1",
            "  2. Ordered 1.2",
            "  - Unordered 1.2.1",
            "- Unordered 2",
        ]

    def test_indent_width_option(self) -> None:
        """Test a wider nesting indent."""
        tree = _doc(BulletList(children=[_item(_para(Text("a")), BulletList(children=[_item(_para(Text("b")))]))]))
        assert serialize_tree(tree, MarkdownRendererOptions(list_indent_width=4)) == "- a\n    - b"

    def test_continuation_lines_aligned(self) -> None:
        """Test that multi-line item content is aligned with the item text."""
        ordered = OrderedList(children=[_item(_para(Text("first\nsecond")))])
        assert serialize_tree(_doc(ordered)) == "1. first\n   second"

    def test_item_with_code_block(self) -> None:
        """Test block content inside an item."""
        bullets = BulletList(children=[_item(_para(Text("run:")), CodeBlock(language="sh", children=[Text("ls")]))])
        assert serialize_tree(_doc(bullets)) == "- run:\n\n  ```sh\n  ls\n  ```"

    def test_placeholder_item(self) -> None:
        """Test that a placeholder item renders as a bare marker."""
        assert serialize_tree(_doc(BulletList(children=[_item(_para(Text(" ")))]))) == "-"


@dataclass
class Callout(Node):
    """Node class outside the closed set, used to test degradation."""

    children: list = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.generic_visit(self)


@pytest.mark.unit
class TestRenderer:
    """Test renderer construction, fallbacks and output handling."""

    def test_unknown_node_degrades_to_text(self) -> None:
        """Test that unknown classes render their plain text."""
        tree = _doc(_para(Text("before")), Callout(children=[Text("inside "), Text("callout")]))
        assert serialize_tree(tree) == "before\n\ninside callout"

    def test_unknown_inline_node(self) -> None:
        """Test an unknown class inside a paragraph."""
        tree = _doc(Paragraph(children=[Text("a "), Callout(children=[Text("b")])]))
        assert serialize_tree(tree) == "a b"

    def test_non_document_root(self) -> None:
        """Test rendering a single block."""
        assert serialize_tree(Heading(level=2, children=[Text("x")])) == "## x"

    def test_trailing_whitespace_trimmed(self) -> None:
        """Test output cleanup."""
        assert serialize_tree(_doc(_para(Text("a  \r\n")))) == "a"

    def test_wrong_options_type(self) -> None:
        """Test that parser options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(MarkdownParserOptions())  # type: ignore[arg-type]

    def test_renderer_reusable(self) -> None:
        """Test that one renderer renders several trees."""
        renderer = MarkdownRenderer()
        assert renderer.render_to_string(_doc(_para(Text("a")))) == "a"
        assert renderer.render_to_string(_doc(_para(Text("b")))) == "b"

    def test_render_to_path(self, tmp_path) -> None:
        """Test writing to a file path."""
        target = tmp_path / "out.md"
        MarkdownRenderer().render(_doc(Heading(children=[Text("é")])), target)
        assert target.read_text(encoding="utf-8") == "# é"

    def test_render_to_streams(self) -> None:
        """Test writing to text and binary streams."""
        text_stream, binary_stream = StringIO(), BytesIO()
        renderer = MarkdownRenderer()
        renderer.render(_doc(_para(Text("é"))), text_stream)
        renderer.render(_doc(_para(Text("é"))), binary_stream)
        assert text_stream.getvalue() == "é"
        assert binary_stream.getvalue() == "é".encode("utf-8")

    def test_render_to_unsupported_output(self) -> None:
        """Test that non-writable outputs raise TypeError."""
        with pytest.raises(TypeError):
            MarkdownRenderer().render(_doc(_para(Text("x"))), 42)  # type: ignore[arg-type]
