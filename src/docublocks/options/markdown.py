#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and rendering.

This module defines options for converting Docusaurus-flavored Markdown to
and from document trees.
"""
# src/docublocks/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from docublocks.constants import (
    DEFAULT_BULLET_SYMBOL,
    DEFAULT_COLLAPSE_BLANK_LINES,
    DEFAULT_EXTRACT_CODE_TITLES,
    DEFAULT_LIST_INDENT_WIDTH,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PARSE_ADMONITIONS,
    DEFAULT_PARSE_HIGHLIGHT,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_QUOTE_ALL_LINES,
    BulletSymbol,
)
from docublocks.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-tree parsing.

    Parameters
    ----------
    parse_admonitions : bool, default True
        Recognize Docusaurus ``:::type title`` ... ``:::`` admonitions.
        When False, fence lines stay ordinary paragraph text.
    parse_strikethrough : bool, default True
        Parse ``~~text~~`` as strike marks.
    parse_highlight : bool, default True
        Parse ``==text==`` as highlight marks.
    extract_code_titles : bool, default True
        Move a ``title="..."`` attribute in a code fence info string into
        the code block's ``title``. When False the whole info string is the
        language.
    max_nesting_depth : int, default 20
        Maximum block nesting depth handed to the block parser; deeper
        content degrades to paragraph text.
    list_indent_width : int, default 2
        Offset from a parent list marker at which a marker line is read as
        a nested item, even when it starts left of the parent's content
        column. Match the renderer's ``list_indent_width``.

    """

    parse_admonitions: bool = field(
        default=DEFAULT_PARSE_ADMONITIONS,
        metadata={"help": "Recognize Docusaurus ':::type title' admonitions", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse ~~text~~ as strikethrough", "importance": "advanced"},
    )
    parse_highlight: bool = field(
        default=DEFAULT_PARSE_HIGHLIGHT,
        metadata={"help": "Parse ==text== as highlight", "importance": "advanced"},
    )
    extract_code_titles: bool = field(
        default=DEFAULT_EXTRACT_CODE_TITLES,
        metadata={"help": 'Extract title="..." from code fence info strings', "importance": "core"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum block nesting depth", "type": int, "importance": "security"},
    )
    list_indent_width: int = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={"help": "Marker offset read as list nesting", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_nesting_depth`` is not positive or ``list_indent_width``
            is below 1.

        """
        super().__post_init__()
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.list_indent_width < 1:
            raise ValueError(f"list_indent_width must be at least 1, got {self.list_indent_width}")


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Markdown rendering options for converting document trees to text.

    Parameters
    ----------
    list_indent_width : int, default 2
        Spaces added per list nesting level, regardless of marker width.
    bullet_symbol : {"-", "*", "+"}, default "-"
        Marker used for bullet list items.
    quote_all_lines : bool, default False
        Prefix every line of a blockquote with ``> `` and separate its blocks
        with quoted blank lines. The default renders a single ``> `` prefix
        in front of the concatenated quote content.
    collapse_blank_lines : bool, default True
        Collapse runs of three or more newlines inside paragraph and heading
        text into one blank line. Code block content is never changed.

    """

    list_indent_width: int = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={"help": "Spaces per list nesting level", "type": int, "importance": "core"},
    )
    bullet_symbol: BulletSymbol = field(
        default=DEFAULT_BULLET_SYMBOL,
        metadata={"help": "Bullet list marker", "choices": ["-", "*", "+"], "importance": "core"},
    )
    quote_all_lines: bool = field(
        default=DEFAULT_QUOTE_ALL_LINES,
        metadata={"help": "Prefix every blockquote line with '> '", "importance": "advanced"},
    )
    collapse_blank_lines: bool = field(
        default=DEFAULT_COLLAPSE_BLANK_LINES,
        metadata={"help": "Collapse runs of blank lines inside inline text", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate indentation and marker choices.

        Raises
        ------
        ValueError
            If ``list_indent_width`` is below 1 or ``bullet_symbol`` is not a
            valid Markdown bullet.

        """
        super().__post_init__()
        if self.list_indent_width < 1:
            raise ValueError(f"list_indent_width must be at least 1, got {self.list_indent_width}")
        if self.bullet_symbol not in ("-", "*", "+"):
            raise ValueError(f"bullet_symbol must be one of '-', '*', '+', got {self.bullet_symbol!r}")
