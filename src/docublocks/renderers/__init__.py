#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers producing text from document trees."""

from docublocks.renderers.base import BaseRenderer, InlineContentMixin
from docublocks.renderers.markdown import MarkdownRenderer, serialize_tree

__all__ = ["BaseRenderer", "InlineContentMixin", "MarkdownRenderer", "serialize_tree"]
