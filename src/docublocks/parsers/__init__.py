#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing document trees from source text."""

from docublocks.parsers.admonitions import group_admonitions, isolate_admonition_fences
from docublocks.parsers.base import BaseParser
from docublocks.parsers.lists import align_nested_lists
from docublocks.parsers.markdown import MarkdownToTreeConverter, parse_markdown

__all__ = [
    "BaseParser",
    "MarkdownToTreeConverter",
    "parse_markdown",
    "isolate_admonition_fences",
    "group_admonitions",
    "align_nested_lists",
]
