#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the Markdown to document tree converter."""

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
    OrderedList,
    Paragraph,
    Text,
    find_all,
    plain_text,
)
from docublocks.exceptions import InvalidOptionsError
from docublocks.options import MarkdownParserOptions, MarkdownRendererOptions
from docublocks.parsers.markdown import MarkdownToTreeConverter, parse_markdown


@pytest.mark.unit
class TestMarkdownBasics:
    """Test basic block parsing."""

    def test_simple_paragraph(self) -> None:
        """Test parsing a simple paragraph."""
        doc = parse_markdown("This is a paragraph.")

        assert isinstance(doc, Document)
        assert doc.children == [Paragraph(children=[Text("This is a paragraph.")])]

    def test_multiple_paragraphs(self) -> None:
        """Test parsing multiple paragraphs."""
        doc = parse_markdown("First paragraph.\n\nSecond paragraph.")

        assert len(doc.children) == 2
        assert all(isinstance(child, Paragraph) for child in doc.children)

    def test_heading_levels(self) -> None:
        """Test parsing different heading levels."""
        doc = parse_markdown("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")

        assert len(doc.children) == 6
        for i, child in enumerate(doc.children):
            assert isinstance(child, Heading)
            assert child.level == i + 1
            assert child.children == [Text(f"H{i + 1}")]

    def test_soft_break_kept_in_text(self) -> None:
        """Test that a soft line break stays inside the run."""
        doc = parse_markdown("line one\nline two")
        assert doc.children == [Paragraph(children=[Text("line one\nline two")])]

    def test_horizontal_rule(self) -> None:
        """Test thematic breaks."""
        doc = parse_markdown("above\n\n---\n\nbelow")
        assert isinstance(doc.children[1], HorizontalRule)

    def test_block_quote(self) -> None:
        """Test a block quote."""
        doc = parse_markdown("> quoted")
        assert doc.children == [BlockQuote(children=[Paragraph(children=[Text("quoted")])])]

    def test_html_block_kept_as_text(self) -> None:
        """Test that raw HTML blocks become paragraph text."""
        doc = parse_markdown("<div>hi</div>")
        assert doc.children == [Paragraph(children=[Text("<div>hi</div>")])]


@pytest.mark.unit
class TestEmptyContent:
    """Test the non-empty document guarantee."""

    @pytest.mark.parametrize("markdown", ["", "   ", "\n\n\n"])
    def test_blank_input(self, markdown: str) -> None:
        """Test that blank input yields one placeholder paragraph."""
        doc = parse_markdown(markdown)
        assert doc.children == [Paragraph(children=[Text(" ")])]

    def test_empty_heading_gets_placeholder(self) -> None:
        """Test that a heading without text is filled."""
        doc = parse_markdown("#")
        assert doc.children == [Heading(level=1, children=[Text(" ")])]

    def test_empty_list_item_gets_placeholder(self) -> None:
        """Test that an empty list item is filled."""
        doc = parse_markdown("-\n- b")
        first = doc.children[0].children[0]
        assert first == ListItem(children=[Paragraph(children=[Text(" ")])])


@pytest.mark.unit
class TestInlineFormatting:
    """Test inline mark flattening."""

    def test_bold(self) -> None:
        """Test bold text between plain runs."""
        doc = parse_markdown("This is **bold** text.")
        assert doc.children[0].children == [
            Text("This is "),
            Text("bold", marks=frozenset({BOLD})),
            Text(" text."),
        ]

    def test_italic_underscore_and_star(self) -> None:
        """Test both italic delimiters."""
        for markdown in ("_styling_", "*styling*"):
            assert parse_markdown(markdown).children[0].children == [Text("styling", marks=frozenset({ITALIC}))]

    def test_nested_marks_collapse_to_one_run(self) -> None:
        """Test that nested spans produce a single run with both marks."""
        doc = parse_markdown("***both***")
        assert doc.children[0].children == [Text("both", marks=frozenset({BOLD, ITALIC}))]

    def test_partial_overlap_keeps_shared_marks(self) -> None:
        """Test that a span keeps only the marks common to all of its runs."""
        doc = parse_markdown("**bold _and italic_**")
        assert doc.children[0].children == [Text("bold and italic", marks=frozenset({BOLD}))]

    def test_inline_code(self) -> None:
        """Test code spans."""
        doc = parse_markdown("use `print()` here")
        assert doc.children[0].children[1] == Text("print()", marks=frozenset({CODE}))

    def test_strike_and_highlight(self) -> None:
        """Test strikethrough and highlight extensions."""
        doc = parse_markdown("~~gone~~ and ==marked==")
        runs = doc.children[0].children
        assert runs[0] == Text("gone", marks=frozenset({STRIKE}))
        assert runs[2] == Text("marked", marks=frozenset({HIGHLIGHT}))

    def test_extensions_disabled(self) -> None:
        """Test that disabled extensions leave the delimiters as text."""
        options = MarkdownParserOptions(parse_strikethrough=False, parse_highlight=False)
        doc = parse_markdown("~~gone~~ ==marked==", options)
        assert doc.children[0].children == [Text("~~gone~~ ==marked==")]

    def test_link(self) -> None:
        """Test that links become link-marked runs."""
        doc = parse_markdown("See [the docs](https://docusaurus.io/docs).")
        runs = doc.children[0].children
        assert runs[1] == Text("the docs", marks=frozenset({Mark.link("https://docusaurus.io/docs")}))
        assert runs[1].href == "https://docusaurus.io/docs"

    def test_bold_link(self) -> None:
        """Test formatting inside a link."""
        doc = parse_markdown("[**bold link**](/x)")
        assert doc.children[0].children == [Text("bold link", marks=frozenset({BOLD, Mark.link("/x")}))]

    def test_image(self) -> None:
        """Test inline images."""
        doc = parse_markdown('![A diagram](img/diagram.png "Diagram")')
        assert doc.children[0].children == [Image(src="img/diagram.png", alt="A diagram", title="Diagram")]

    def test_span_with_image_keeps_runs(self) -> None:
        """Test that a span containing an image is not collapsed."""
        doc = parse_markdown("**see ![pic](p.png)**")
        runs = doc.children[0].children
        assert runs[0] == Text("see ", marks=frozenset({BOLD}))
        assert isinstance(runs[1], Image)


@pytest.mark.unit
class TestCodeBlocks:
    """Test fenced and indented code."""

    def test_fenced_code(self) -> None:
        """Test language and code content."""
        doc = parse_markdown("```python\ndef f():\n    return 1\n```")
        block = doc.children[0]
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.title == ""
        assert block.code == "def f():\n    return 1"

    def test_titled_code_fence(self) -> None:
        """Test Docusaurus title extraction."""
        doc = parse_markdown('```typescript title="example.ts"\nconst x = 1;\n```')
        block = doc.children[0]
        assert block.language == "typescript"
        assert block.title == "example.ts"
        assert block.code == "const x = 1;"

    def test_title_without_language(self) -> None:
        """Test a fence with a title but no language."""
        block = parse_markdown('``` title="notes.txt"\nhello\n```').children[0]
        assert block.language == ""
        assert block.title == "notes.txt"

    def test_title_extraction_disabled(self) -> None:
        """Test that the full info string is the language when titles are off."""
        options = MarkdownParserOptions(extract_code_titles=False)
        block = parse_markdown('```ts title="a.ts"\nx\n```', options).children[0]
        assert block.language == 'ts title="a.ts"'
        assert block.title == ""

    def test_empty_code_block(self) -> None:
        """Test a fence without content."""
        block = parse_markdown("```js\n```").children[0]
        assert block.children == [Text("")]

    def test_indented_code(self) -> None:
        """Test indented code blocks."""
        block = parse_markdown("    x = 1").children[0]
        assert isinstance(block, CodeBlock)
        assert block.language == ""
        assert block.code == "x = 1"

    def test_markup_inside_code_is_literal(self) -> None:
        """Test that code content is never parsed."""
        block = parse_markdown("```md\n:::tip\n**not bold**\n:::\n```").children[0]
        assert block.code == ":::tip\n**not bold**\n:::"


@pytest.mark.unit
class TestLists:
    """Test list parsing."""

    def test_bullet_list(self) -> None:
        """Test a flat bullet list."""
        doc = parse_markdown("- a\n- b")
        assert doc.children == [
            BulletList(
                children=[
                    ListItem(children=[Paragraph(children=[Text("a")])]),
                    ListItem(children=[Paragraph(children=[Text("b")])]),
                ]
            )
        ]

    def test_ordered_list(self) -> None:
        """Test an ordered list."""
        doc = parse_markdown("1. one\n2. two\n3. three")
        assert isinstance(doc.children[0], OrderedList)
        assert len(doc.children[0].children) == 3

    def test_nested_mixed_lists(self) -> None:
        """Test an item holding an ordered list followed by a bullet list."""
        markdown = "- Unordered 1\n  1. Ordered 1.1\n  2. Ordered 1.2\n  - Unordered 1.2.1\n- Unordered 2"
        doc = parse_markdown(markdown)

        outer = doc.children[0]
        assert isinstance(outer, BulletList)
        assert len(outer.children) == 2

        first = outer.children[0]
        assert first.children[0] == Paragraph(children=[Text("Unordered 1")])
        assert isinstance(first.children[1], OrderedList)
        assert plain_text(first.children[1], joiner="|") == "Ordered 1.1|Ordered 1.2"
        assert isinstance(first.children[2], BulletList)
        assert plain_text(first.children[2]) == "Unordered 1.2.1"

    def test_bullet_two_columns_under_ordered_item(self) -> None:
        """Test that a bullet two columns right of an ordered marker is nested."""
        doc = parse_markdown("1. Ordered\n  - Bullet")

        assert len(doc.children) == 1
        item = doc.children[0].children[0]
        assert isinstance(doc.children[0], OrderedList)
        assert item.children[0] == Paragraph(children=[Text("Ordered")])
        assert isinstance(item.children[1], BulletList)
        assert plain_text(item.children[1]) == "Bullet"


@pytest.mark.unit
class TestAdmonitions:
    """Test Docusaurus admonitions."""

    def test_admonition_with_title(self) -> None:
        """Test the canonical tip example."""
        doc = parse_markdown(":::tip My Tip\nThis is a **formatted** tip with some _styling_\n:::")

        assert len(doc.children) == 1
        admonition = doc.children[0]
        assert isinstance(admonition, Admonition)
        assert admonition.type == "tip"
        assert admonition.title == "My Tip"
        assert admonition.children == [
            Paragraph(
                children=[
                    Text("This is a "),
                    Text("formatted", marks=frozenset({BOLD})),
                    Text(" tip with some "),
                    Text("styling", marks=frozenset({ITALIC})),
                ]
            )
        ]

    def test_admonition_without_title(self) -> None:
        """Test an untitled admonition."""
        admonition = parse_markdown(":::warning\n\nCareful.\n\n:::").children[0]
        assert admonition.type == "warning"
        assert admonition.title == ""

    def test_admonition_with_several_blocks(self) -> None:
        """Test block content inside an admonition."""
        markdown = ":::info Setup\n\nInstall:\n\n```bash\nnpm install\n```\n\n- one\n- two\n\n:::"
        admonition = parse_markdown(markdown).children[0]
        assert [type(child) for child in admonition.children] == [Paragraph, CodeBlock, BulletList]

    def test_empty_admonition_gets_placeholder(self) -> None:
        """Test that an admonition without content is filled."""
        admonition = parse_markdown(":::note\n:::").children[0]
        assert admonition.children == [Paragraph(children=[Text(" ")])]

    def test_unknown_type_preserved(self) -> None:
        """Test that custom admonition types survive."""
        assert parse_markdown(":::custom\nx\n:::").children[0].type == "custom"

    def test_unterminated_admonition(self) -> None:
        """Test that an opening fence without close stays text."""
        doc = parse_markdown(":::note\nfoo")
        assert find_all(doc, Admonition) == []
        assert ":::note" in plain_text(doc)

    def test_consecutive_admonitions(self) -> None:
        """Test two admonitions in a row."""
        doc = parse_markdown(":::tip\na\n:::\n:::danger\nb\n:::")
        assert [(a.type, plain_text(a)) for a in doc.children] == [("tip", "a"), ("danger", "b")]

    def test_admonitions_disabled(self) -> None:
        """Test that admonition recognition can be switched off."""
        options = MarkdownParserOptions(parse_admonitions=False)
        doc = parse_markdown(":::tip\n\nBody\n\n:::", options)
        assert find_all(doc, Admonition) == []
        assert len(doc.children) == 3


@pytest.mark.unit
class TestConverter:
    """Test converter construction and robustness."""

    def test_wrong_options_type(self) -> None:
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToTreeConverter(MarkdownRendererOptions())  # type: ignore[arg-type]

    def test_converter_reusable(self) -> None:
        """Test that one converter parses several documents."""
        converter = MarkdownToTreeConverter()
        assert converter.parse("# A").children[0].level == 1
        assert converter.parse("## B").children[0].level == 2

    @pytest.mark.parametrize(
        "markdown",
        [
            ">" * 60 + " deep",
            "- " * 40 + "deep",
            "[unclosed](",
            "**unbalanced",
            ":::\n:::\n:::",
            "```\nnever closed",
            "\x00\x01\x02",
        ],
    )
    def test_never_raises(self, markdown: str) -> None:
        """Test that odd input always yields a document."""
        doc = parse_markdown(markdown)
        assert doc.children
