#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for parsing, rendering and editing."""

from docublocks.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from docublocks.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from docublocks.options.session import EditorSessionOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "EditorSessionOptions",
]
