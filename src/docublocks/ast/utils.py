#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/ast/utils.py
"""Utility functions for working with document trees.

Nodes are addressed by *paths*: tuples of child indices starting at the
root. ``()`` is the root itself, ``(0,)`` its first child, ``(0, 2)`` the
third child of the first child, and so on.

Functions
---------
node_at : Resolve a path to a node
parent_of : Resolve the parent of the node at a path
iter_nodes : Depth-first iteration yielding ``(path, node)`` pairs
plain_text : Concatenated text of a subtree
deep_copy : Independent clone of a subtree

Examples
--------
    >>> doc = Document(children=[Paragraph(children=[Text("Hello")])])
    >>> node_at(doc, (0, 0))
    Text(text='Hello', marks=frozenset())
    >>> [path for path, _ in iter_nodes(doc)]
    [(), (0,), (0, 0)]

"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Sequence, TypeVar, Union

from docublocks.ast.nodes import Image, Node, Text, get_node_children

NodeT = TypeVar("NodeT", bound=Node)

Path = tuple[int, ...]


def node_at(root: Node, path: Sequence[int]) -> Node:
    """Return the node at ``path`` below ``root``.

    Parameters
    ----------
    root : Node
        Tree root
    path : sequence of int
        Child indices from the root

    Returns
    -------
    Node
        Addressed node

    Raises
    ------
    IndexError
        If any index along the path is out of range (negative indices are
        rejected too)

    """
    node = root
    for depth, index in enumerate(path):
        children = get_node_children(node)
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(children):
            raise IndexError(f"Path {tuple(path)!r} is invalid at depth {depth}")
        node = children[index]
    return node


def parent_of(root: Node, path: Sequence[int]) -> Node:
    """Return the parent of the node at ``path``.

    Raises
    ------
    IndexError
        If ``path`` is empty (the root has no parent) or invalid

    """
    if not path:
        raise IndexError("The root node has no parent")
    parent = node_at(root, path[:-1])
    node_at(parent, path[-1:])
    return parent


def iter_nodes(root: Node, _prefix: Path = ()) -> Iterator[tuple[Path, Node]]:
    """Iterate a subtree depth-first (pre-order), yielding ``(path, node)``.

    Parameters
    ----------
    root : Node
        Subtree root; its own path is ``()``

    Yields
    ------
    tuple of (tuple of int, Node)
        Path relative to ``root`` and the node found there

    """
    yield _prefix, root
    for index, child in enumerate(get_node_children(root)):
        yield from iter_nodes(child, _prefix + (index,))


def find_all(root: Node, node_type: type[NodeT]) -> list[NodeT]:
    """Collect every node of ``node_type`` in the subtree, in document order."""
    return [node for _, node in iter_nodes(root) if isinstance(node, node_type)]


def plain_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract the plain text of a node or list of nodes.

    ``Image`` nodes contribute their alt text.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes
    joiner : str, default = ""
        String placed between the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(part for part in (plain_text(node, joiner) for node in node_or_nodes) if part)

    node = node_or_nodes
    if isinstance(node, Text):
        return node.text
    if isinstance(node, Image):
        return node.alt
    return plain_text(get_node_children(node), joiner)


def deep_copy(node: NodeT) -> NodeT:
    """Return an independent clone of ``node`` and its whole subtree."""
    return copy.deepcopy(node)


__all__ = [
    "Path",
    "node_at",
    "parent_of",
    "iter_nodes",
    "find_all",
    "plain_text",
    "deep_copy",
]
