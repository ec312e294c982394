#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/parsers/markdown.py
"""Markdown to document tree converter.

This module converts Docusaurus-flavored Markdown into the editable document
tree using the mistune parser in AST mode. Docusaurus admonitions are
recognized around the generic block parse (see ``docublocks.parsers.admonitions``),
and titled code fences (```` ```ts title="example.ts" ````) are split into
language and title. Lists nested under ordered items are aligned onto their
parent's content column first (see ``docublocks.parsers.lists``).

Nested inline formatting is flattened: every emphasis, strong, strikethrough,
highlight or link span becomes a single ``Text`` run whose mark set is the
span's own mark, the enclosing marks, and the marks shared by every run inside
the span.

"""

from __future__ import annotations

import logging
from typing import Any

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
    ensure_content,
)
from docublocks.constants import CODE_TITLE_RE, CODE_TITLE_STRIP_RE, DEFAULT_ADMONITION_TYPE
from docublocks.options.markdown import MarkdownParserOptions
from docublocks.parsers.admonitions import group_admonitions, isolate_admonition_fences
from docublocks.parsers.base import BaseParser
from docublocks.parsers.lists import align_nested_lists

logger = logging.getLogger(__name__)

_SPAN_MARKS: dict[str, Mark] = {
    "strong": BOLD,
    "emphasis": ITALIC,
    "strikethrough": STRIKE,
    "mark": HIGHLIGHT,
}


class MarkdownToTreeConverter(BaseParser):
    r"""Convert Markdown to the editable document tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToTreeConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    Without admonition recognition:

        >>> options = MarkdownParserOptions(parse_admonitions=False)
        >>> doc = MarkdownToTreeConverter(options).parse(":::tip\\nBody\\n:::")

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._markdown = self._create_markdown()

    def _create_markdown(self) -> Any:
        """Build the mistune parser for the configured syntax extensions."""
        import mistune
        from mistune.plugins import import_plugin

        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_highlight:
            plugins.append("mark")

        return mistune.Markdown(
            renderer=None,  # Tokens are processed here
            block=mistune.BlockParser(max_nested_level=self.options.max_nesting_depth),
            inline=mistune.InlineParser(),
            plugins=[import_plugin(name) for name in plugins],
        )

    def parse(self, input_data: str) -> Document:
        """Parse Markdown text into a Document.

        Parameters
        ----------
        input_data : str
            Markdown body (frontmatter already removed)

        Returns
        -------
        Document
            Root of the tree. Never empty: a document without blocks holds
            one placeholder paragraph.

        """
        markdown_content = input_data if isinstance(input_data, str) else str(input_data)

        if self.options.parse_admonitions:
            markdown_content = isolate_admonition_fences(markdown_content)
        markdown_content = align_nested_lists(markdown_content, self.options.list_indent_width)

        tokens, _state = self._markdown.parse(markdown_content)
        if not isinstance(tokens, list):
            tokens = []

        if self.options.parse_admonitions:
            tokens = group_admonitions(tokens)

        document = Document(children=self._process_tokens(tokens))
        ensure_content(document)

        logger.debug("Parsed %d characters into %d top-level blocks", len(markdown_content), len(document.children))
        return document

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into block nodes.

        Parameters
        ----------
        tokens : list of dict
            Mistune block token dictionaries

        Returns
        -------
        list of Node
            Block nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            if not isinstance(token, dict):
                continue
            node = self._process_token(token)
            if node is not None:
                ensure_content(node)
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting block node, or None for tokens that carry no content

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(self._children(token)))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "list_item":
            return ListItem(children=self._process_tokens(self._children(token)))
        elif token_type == "thematic_break":
            return HorizontalRule()
        elif token_type == "block_html":
            return Paragraph(children=[Text(str(token.get("raw", "")).rstrip("\n"))])
        elif token_type == "admonition":
            return self._process_admonition(token)
        elif token_type == "blank_line":
            return None

        return self._process_unknown_block(token)

    @staticmethod
    def _children(token: dict[str, Any]) -> list[dict[str, Any]]:
        children = token.get("children", [])
        return children if isinstance(children, list) else []

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token.

        Parameters
        ----------
        token : dict
            Heading token with 'attrs' (level) and 'children'

        Returns
        -------
        Heading
            Heading node

        """
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1

        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        return Heading(level=level, children=self._process_inline_tokens(self._children(token)))

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph and block_text tokens."""
        return Paragraph(children=self._process_inline_tokens(self._children(token)))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The info string's ``title="..."`` attribute moves into ``title``; the
        rest of the info string is the language. One trailing newline of the
        fenced content is dropped.

        Parameters
        ----------
        token : dict
            Code block token with 'raw' and optional 'attrs'

        Returns
        -------
        CodeBlock
            Code block node

        """
        code_content = str(token.get("raw", ""))
        if code_content.endswith("\n"):
            code_content = code_content[:-1]

        attrs = token.get("attrs", {})
        info_string = str(attrs.get("info") or "").strip() if isinstance(attrs, dict) else ""

        title = ""
        language = info_string
        if info_string and self.options.extract_code_titles:
            title_match = CODE_TITLE_RE.search(info_string)
            if title_match:
                title = title_match.group(1)
                language = CODE_TITLE_STRIP_RE.sub("", info_string).strip()

        return CodeBlock(language=language, title=title, children=[Text(code_content)])

    def _process_list(self, token: dict[str, Any]) -> BulletList | OrderedList:
        """Process list token.

        Item numbering is positional, so an ordered list's ``start`` is not
        kept.

        Parameters
        ----------
        token : dict
            List token with 'children' and 'attrs' (ordered)

        Returns
        -------
        BulletList or OrderedList
            List node

        """
        attrs = token.get("attrs", {})
        ordered = bool(attrs.get("ordered", False)) if isinstance(attrs, dict) else False

        items: list[Node] = []
        for child in self._children(token):
            if not isinstance(child, dict):
                continue
            item = ListItem(children=self._process_tokens(self._children(child)))
            ensure_content(item)
            items.append(item)

        return OrderedList(children=items) if ordered else BulletList(children=items)

    def _process_admonition(self, token: dict[str, Any]) -> Admonition:
        """Process an admonition token produced by ``group_admonitions``."""
        attrs = token.get("attrs", {})
        return Admonition(
            type=str(attrs.get("type") or DEFAULT_ADMONITION_TYPE),
            title=str(attrs.get("title") or ""),
            children=self._process_tokens(self._children(token)),
        )

    def _process_unknown_block(self, token: dict[str, Any]) -> Node | None:
        """Degrade an unrecognized block token to a paragraph of its text."""
        logger.debug("Unrecognized block token %r kept as text", token.get("type"))
        children = self._children(token)
        if children:
            runs = self._process_inline_tokens(children)
            text = "".join(run.text if isinstance(run, Text) else "" for run in runs)
            return Paragraph(children=[Text(text)] if text else [])
        raw = token.get("raw") or token.get("text")
        if raw:
            return Paragraph(children=[Text(str(raw))])
        return None

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(
        self, tokens: list[dict[str, Any]], marks: frozenset[Mark] = frozenset()
    ) -> list[Node]:
        """Process inline tokens into merged Text runs and Images.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries
        marks : frozenset of Mark, default = empty
            Marks of the enclosing spans

        Returns
        -------
        list of Node
            Inline nodes; adjacent runs with equal marks are merged and empty
            runs dropped

        """
        nodes: list[Node] = []
        for token in tokens:
            if isinstance(token, dict):
                nodes.extend(self._process_inline_token(token, marks))
        return _merge_text_runs(nodes)

    def _process_inline_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary
        marks : frozenset of Mark
            Marks of the enclosing spans

        Returns
        -------
        list of Node
            Inline node(s)

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_raw_token,
            "inline_html": self._handle_raw_token,
            "codespan": self._handle_codespan_token,
            "softbreak": self._handle_break_token,
            "linebreak": self._handle_break_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token, marks)

        span_mark = _SPAN_MARKS.get(token_type)
        if span_mark is not None:
            return self._collapse_span(token, span_mark, marks)

        # Unknown inline token: keep whatever text it carries
        if "children" in token:
            return self._process_inline_tokens(self._children(token), marks)
        return [Text(str(token.get("raw", "")), marks=marks)]

    def _handle_raw_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Handle text and inline_html tokens as literal text."""
        return [Text(str(token.get("raw", "")), marks=marks)]

    def _handle_codespan_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Handle codespan token."""
        return [Text(str(token.get("raw", "")), marks=marks | {CODE})]

    def _handle_break_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Soft and hard line breaks both become a newline in the run."""
        return [Text("\n", marks=marks)]

    def _handle_link_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Handle link token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        link_mark = Mark.link(str(attrs.get("url", "")))
        # A link mark replaces any enclosing link
        outer = frozenset(mark for mark in marks if mark.type != "link")
        return self._collapse_span(token, link_mark, outer)

    def _handle_image_token(self, token: dict[str, Any], marks: frozenset[Mark]) -> list[Node]:
        """Handle image token; alt text comes from the children."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        alt_runs = self._process_inline_tokens(self._children(token))
        alt_text = "".join(run.text for run in alt_runs if isinstance(run, Text))
        return [Image(src=str(attrs.get("url", "")), alt=alt_text, title=str(attrs.get("title") or ""))]

    def _collapse_span(self, token: dict[str, Any], mark: Mark, marks: frozenset[Mark]) -> list[Node]:
        """Collapse a formatting span into a single Text run.

        Parameters
        ----------
        token : dict
            Span token with 'children'
        mark : Mark
            The span's own mark
        marks : frozenset of Mark
            Marks of the enclosing spans

        Returns
        -------
        list of Node
            One Text run, or the span's runs unchanged when it contains an
            image

        """
        span_marks = marks | {mark}
        inner = self._process_inline_tokens(self._children(token), span_marks)

        if any(not isinstance(node, Text) for node in inner):
            return inner

        runs = [node for node in inner if isinstance(node, Text)]
        if not runs:
            return [Text("", marks=span_marks)]

        shared = frozenset.intersection(*(run.marks for run in runs))
        return [Text("".join(run.text for run in runs), marks=span_marks | shared)]


def _merge_text_runs(nodes: list[Node]) -> list[Node]:
    """Merge adjacent Text runs with equal marks and drop empty runs."""
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.text:
                continue
            previous = merged[-1] if merged else None
            if isinstance(previous, Text) and previous.marks == node.marks:
                merged[-1] = Text(previous.text + node.text, marks=node.marks)
                continue
        merged.append(node)
    return merged


def parse_markdown(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a Markdown string to a document tree.

    This is a convenience function that creates a converter and parses the
    markdown in one step.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        Root of the document tree

    Examples
    --------
    >>> from docublocks.parsers.markdown import parse_markdown
    >>> doc = parse_markdown("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToTreeConverter(options)
    return converter.parse(markdown_content)


__all__ = ["MarkdownToTreeConverter", "parse_markdown"]
