"""docublocks - block editing core for Docusaurus Markdown.

docublocks parses Docusaurus-flavored Markdown into a tree of typed block
and inline nodes, serializes that tree back to Markdown, and keeps a live
tree consistent while an editor applies structural edits.

Key Features
------------
- ``:::type Title`` admonitions as first-class container blocks
- Code fences with ``title="..."`` labels
- Nested mixed bullet and numbered lists
- Inline marks: bold, italic, code, link, highlight and strike
- Editor session with deferred loads while a code block is being edited
- JSON interchange format for the document tree
- YAML frontmatter and Docusaurus project file helpers

Requirements
------------
- Python 3.10+
- mistune 3, PyYAML

Examples
--------
Parse and serialize:

    >>> from docublocks import parse, serialize
    >>> tree = parse(":::tip My Tip\\n\\nUse **bold** text.\\n\\n:::")
    >>> tree.children[0].title
    'My Tip'
    >>> serialize(tree)
    ':::tip My Tip\\n\\nUse **bold** text.\\n\\n:::'

Edit a document:

    >>> from docublocks import EditorSession
    >>> from docublocks.editor import UpdateAttributes
    >>> session = EditorSession()
    >>> session.load("# Title")
    True
    >>> session.apply_edit(UpdateAttributes(path=(0,), attributes={"level": 2}))
    '## Title'

See Also
--------
docublocks.ast : Node definitions, traversal and JSON interchange
docublocks.editor : Editor session, edit commands and block templates

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from docublocks.ast import Document
from docublocks.editor import EditorSession
from docublocks.exceptions import (
    DocublocksError,
    DocumentNotFoundError,
    FileError,
    InvalidEditError,
    InvalidOptionsError,
    SessionClosedError,
)
from docublocks.frontmatter import join_frontmatter, split_frontmatter
from docublocks.options import EditorSessionOptions, MarkdownParserOptions, MarkdownRendererOptions
from docublocks.parsers.markdown import MarkdownToTreeConverter, parse_markdown
from docublocks.renderers.markdown import MarkdownRenderer, serialize_tree

__version__ = "0.1.0"


def parse(markdown: str, options: MarkdownParserOptions | None = None) -> Document:
    """Parse a Markdown body into a document tree. Never raises for any text."""
    return parse_markdown(markdown, options)


def serialize(root: Document, options: MarkdownRendererOptions | None = None) -> str:
    """Serialize a document tree to Markdown. Never raises for any tree."""
    return serialize_tree(root, options)


__all__ = [
    "__version__",
    "parse",
    "serialize",
    "parse_markdown",
    "serialize_tree",
    "MarkdownToTreeConverter",
    "MarkdownRenderer",
    "EditorSession",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "EditorSessionOptions",
    "split_frontmatter",
    "join_frontmatter",
    "DocublocksError",
    "InvalidOptionsError",
    "InvalidEditError",
    "SessionClosedError",
    "FileError",
    "DocumentNotFoundError",
]
