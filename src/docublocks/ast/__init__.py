#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/ast/__init__.py
"""Document tree model shared by the parser, the renderer and the editor.

The module consists of several components:

- nodes: node dataclasses, marks and the structural rules between them
- visitors: visitor base class and the advisory tree validator
- utils: path addressing, traversal, text extraction and cloning
- serialization: JSON interchange format

Examples
--------
    >>> from docublocks.ast import Document, Heading, Paragraph, Text, BOLD
    >>> doc = Document(children=[
    ...     Heading(level=1, children=[Text("Title")]),
    ...     Paragraph(children=[Text("Hello "), Text("world", marks={BOLD})]),
    ... ])

"""

from docublocks.ast.nodes import (
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
    NodeKind,
    OrderedList,
    Paragraph,
    Text,
    can_contain,
    ensure_content,
    get_node_children,
    is_leaf,
    placeholder_for,
)
from docublocks.ast.serialization import dict_to_tree, json_to_tree, tree_to_dict, tree_to_json
from docublocks.ast.utils import deep_copy, find_all, iter_nodes, node_at, parent_of, plain_text
from docublocks.ast.visitors import NodeVisitor, TreeValidator, validate_tree

__all__ = [
    # Nodes
    "Node",
    "NodeKind",
    "Mark",
    "BOLD",
    "ITALIC",
    "CODE",
    "STRIKE",
    "HIGHLIGHT",
    "Document",
    "Paragraph",
    "Heading",
    "BulletList",
    "OrderedList",
    "ListItem",
    "CodeBlock",
    "BlockQuote",
    "Admonition",
    "Image",
    "HorizontalRule",
    "Text",
    # Structure helpers
    "get_node_children",
    "is_leaf",
    "can_contain",
    "ensure_content",
    "placeholder_for",
    # Traversal
    "node_at",
    "parent_of",
    "iter_nodes",
    "find_all",
    "plain_text",
    "deep_copy",
    # Visitors
    "NodeVisitor",
    "TreeValidator",
    "validate_tree",
    # Serialization
    "tree_to_dict",
    "dict_to_tree",
    "tree_to_json",
    "json_to_tree",
]
