#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/editor/commands.py
"""Structural edit commands accepted by ``EditorSession.apply_edit``.

Commands are immutable values. Paths are tuples of child indices from the
document root (see ``docublocks.ast.utils``).

Examples
--------
    >>> from docublocks.ast import Paragraph, Text
    >>> InsertChild(parent_path=(), index=0, node=Paragraph(children=[Text("Intro")]))
    >>> DeleteNode(path=(2,))
    >>> UpdateAttributes(path=(0,), attributes={"level": 2})
    >>> ReplaceLeafText(path=(1, 0), text="print('hi')")

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Sequence, Union

from docublocks.ast import Node


def _as_path(value: Sequence[int]) -> tuple[int, ...]:
    return tuple(value)


@dataclass(frozen=True)
class InsertChild:
    """Insert ``node`` as the child of the node at ``parent_path``.

    Parameters
    ----------
    parent_path : tuple of int
        Path of the parent node
    index : int
        Position among the parent's children (``0 <= index <= len(children)``)
    node : Node
        Subtree to insert; the session stores its own copy

    """

    parent_path: tuple[int, ...]
    index: int
    node: Node

    def __post_init__(self) -> None:
        object.__setattr__(self, "parent_path", _as_path(self.parent_path))


@dataclass(frozen=True)
class DeleteNode:
    """Remove the node at ``path`` together with its subtree."""

    path: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))


@dataclass(frozen=True)
class UpdateAttributes:
    """Set kind-specific attributes of the node at ``path``.

    Parameters
    ----------
    path : tuple of int
        Path of the node to update
    attributes : Mapping[str, Any]
        Attribute names and new values. Supported names per kind:

        - Heading: ``level``
        - CodeBlock: ``language``, ``title``
        - Admonition: ``type``, ``title``
        - Image: ``src``, ``alt``, ``title``
        - Text: ``marks``

    """

    path: tuple[int, ...]
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))


@dataclass(frozen=True)
class ReplaceLeafText:
    """Replace the literal text of a ``Text`` node or a ``CodeBlock``."""

    path: tuple[int, ...]
    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", _as_path(self.path))


EditCommand = Union[InsertChild, DeleteNode, UpdateAttributes, ReplaceLeafText]

__all__ = ["InsertChild", "DeleteNode", "UpdateAttributes", "ReplaceLeafText", "EditCommand"]
