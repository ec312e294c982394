#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/ast/nodes.py
"""Node classes for the editable document tree.

The document tree is the shared model between the Markdown parser, the
Markdown renderer and the interactive editor session. It mirrors the block
structure a block editor works with: every block is a node, inline text is a
flat run of ``Text`` nodes each carrying a set of marks.

Node Hierarchy
--------------
All nodes inherit from the abstract ``Node`` class and support the visitor
pattern. The set of node classes is closed:

Block-level nodes:
    - Document, Paragraph, Heading, CodeBlock, BlockQuote, Admonition
    - BulletList, OrderedList, ListItem
    - HorizontalRule

Inline / leaf nodes:
    - Text (with marks), Image

Structural rules
----------------
- ``Document`` holds block nodes only.
- ``Paragraph`` and ``Heading`` hold inline nodes.
- ``BulletList`` / ``OrderedList`` hold ``ListItem`` nodes only.
- ``ListItem``, ``BlockQuote`` and ``Admonition`` hold block nodes.
- ``CodeBlock`` holds exactly one ``Text`` node with the literal code.
- ``Text``, ``Image`` and ``HorizontalRule`` are leaves.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from docublocks.constants import (
    DEFAULT_ADMONITION_TYPE,
    MARK_ORDER,
    MAX_HEADING_LEVEL,
    MIN_HEADING_LEVEL,
    PLACEHOLDER_TEXT,
)


class NodeKind(str, Enum):
    """Closed enumeration of document tree node kinds."""

    DOCUMENT = "Document"
    PARAGRAPH = "Paragraph"
    HEADING = "Heading"
    BULLET_LIST = "BulletList"
    ORDERED_LIST = "OrderedList"
    LIST_ITEM = "ListItem"
    CODE_BLOCK = "CodeBlock"
    BLOCKQUOTE = "Blockquote"
    ADMONITION = "Admonition"
    IMAGE = "Image"
    HORIZONTAL_RULE = "HorizontalRule"
    TEXT = "Text"


@dataclass(frozen=True)
class Mark:
    """Inline formatting marker attached to a ``Text`` node.

    Marks are immutable and hashable so a text run can hold them in a
    ``frozenset``. Only ``link`` marks carry an ``href``.

    Parameters
    ----------
    type : {'bold', 'italic', 'code', 'strike', 'link', 'highlight'}
        Mark type
    href : str or None, default = None
        Link target (link marks only)

    Examples
    --------
    >>> Mark("bold")
    Mark(type='bold', href=None)
    >>> Mark.link("https://docusaurus.io")
    Mark(type='link', href='https://docusaurus.io')

    """

    type: str
    href: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject unknown mark types and stray hrefs."""
        if self.type not in MARK_ORDER:
            raise ValueError(f"Unsupported mark type: {self.type!r}")
        if self.type != "link" and self.href is not None:
            raise ValueError(f"Only link marks carry an href, got href on {self.type!r}")

    @classmethod
    def link(cls, href: str) -> Mark:
        """Create a link mark pointing at ``href``."""
        return cls("link", href=href)

    @property
    def rank(self) -> int:
        """Position of this mark in the fixed wrapping order."""
        return MARK_ORDER.index(self.type)


BOLD = Mark("bold")
ITALIC = Mark("italic")
CODE = Mark("code")
STRIKE = Mark("strike")
HIGHLIGHT = Mark("highlight")


def sorted_marks(marks: frozenset[Mark] | set[Mark]) -> list[Mark]:
    """Return marks in their deterministic wrapping order (innermost first)."""
    return sorted(marks, key=lambda mark: (mark.rank, mark.href or ""))


class Node(ABC):
    """Base class for all document tree nodes.

    Subclasses declare ``kind`` (the ``NodeKind`` member) and ``type_name``
    (the name used by the JSON interchange format).

    """

    kind: ClassVar[NodeKind]
    type_name: ClassVar[str]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root node of a document tree.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document

    """

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT
    type_name: ClassVar[str] = "doc"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Paragraph(Node):
    """Paragraph of inline content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Inline nodes (``Text`` and ``Image``)

    """

    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH
    type_name: ClassVar[str] = "paragraph"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading node with level 1-6.

    Parameters
    ----------
    level : int, default = 1
        Heading level (1-6)
    children : list of Node, default = empty list
        Inline nodes

    Raises
    ------
    ValueError
        If ``level`` is outside 1-6

    """

    kind: ClassVar[NodeKind] = NodeKind.HEADING
    type_name: ClassVar[str] = "heading"

    level: int = 1
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the heading level."""
        if not isinstance(self.level, int) or not MIN_HEADING_LEVEL <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level!r}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class BulletList(Node):
    """Unordered list; children are ``ListItem`` nodes."""

    kind: ClassVar[NodeKind] = NodeKind.BULLET_LIST
    type_name: ClassVar[str] = "bulletList"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_bullet_list``."""
        return visitor.visit_bullet_list(self)


@dataclass
class OrderedList(Node):
    """Ordered list; children are ``ListItem`` nodes.

    Item numbers are not stored: they are the 1-based position of each item
    within this list.

    """

    kind: ClassVar[NodeKind] = NodeKind.ORDERED_LIST
    type_name: ClassVar[str] = "orderedList"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_ordered_list``."""
        return visitor.visit_ordered_list(self)


@dataclass
class ListItem(Node):
    """List item holding block content, possibly including nested lists."""

    kind: ClassVar[NodeKind] = NodeKind.LIST_ITEM
    type_name: ClassVar[str] = "listItem"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


def _default_code_children() -> list[Node]:
    return [Text("")]


@dataclass
class CodeBlock(Node):
    """Fenced code block.

    The literal code lives in a single ``Text`` child so that the editor can
    treat code blocks as leaf content containers.

    Parameters
    ----------
    language : str, default = ""
        Language identifier; empty means no language
    title : str, default = ""
        Docusaurus code block title (``title="..."`` in the fence info)
    children : list of Node, default = ``[Text("")]``
        Exactly one ``Text`` node holding the code

    Examples
    --------
    >>> block = CodeBlock(language="python", children=[Text("print('hi')")])
    >>> block.code
    "print('hi')"

    """

    kind: ClassVar[NodeKind] = NodeKind.CODE_BLOCK
    type_name: ClassVar[str] = "codeBlock"

    language: str = ""
    title: str = ""
    children: list[Node] = field(default_factory=_default_code_children)

    @property
    def code(self) -> str:
        """Literal code text."""
        if self.children and isinstance(self.children[0], Text):
            return self.children[0].text
        return ""

    @code.setter
    def code(self, value: str) -> None:
        self.children = [Text(value)]

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote holding block content."""

    kind: ClassVar[NodeKind] = NodeKind.BLOCKQUOTE
    type_name: ClassVar[str] = "blockquote"

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_block_quote``."""
        return visitor.visit_block_quote(self)


@dataclass
class Admonition(Node):
    """Docusaurus admonition (``:::type title`` ... ``:::``).

    Parameters
    ----------
    type : str, default = "note"
        Admonition type. Known values are note, tip, info, caution, warning
        and danger; other values are preserved as-is.
    title : str, default = ""
        Optional title shown in the callout header
    children : list of Node, default = empty list
        Block content

    """

    kind: ClassVar[NodeKind] = NodeKind.ADMONITION
    type_name: ClassVar[str] = "admonition"

    type: str = DEFAULT_ADMONITION_TYPE
    title: str = ""
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_admonition``."""
        return visitor.visit_admonition(self)


@dataclass
class HorizontalRule(Node):
    """Thematic break (``---``)."""

    kind: ClassVar[NodeKind] = NodeKind.HORIZONTAL_RULE
    type_name: ClassVar[str] = "horizontalRule"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_horizontal_rule``."""
        return visitor.visit_horizontal_rule(self)


# ============================================================================
# Inline / Leaf Nodes
# ============================================================================


@dataclass
class Image(Node):
    """Image reference.

    Parameters
    ----------
    src : str, default = ""
        Image URL or path
    alt : str, default = ""
        Alternative text
    title : str, default = ""
        Optional title

    """

    kind: ClassVar[NodeKind] = NodeKind.IMAGE
    type_name: ClassVar[str] = "image"

    src: str = ""
    alt: str = ""
    title: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_image``."""
        return visitor.visit_image(self)


@dataclass
class Text(Node):
    """Run of text with a set of inline marks.

    Parameters
    ----------
    text : str, default = ""
        Text content
    marks : frozenset of Mark, default = empty
        Inline formatting applied to the whole run

    Examples
    --------
    >>> Text("bold", marks=frozenset({BOLD})).has_mark("bold")
    True

    """

    kind: ClassVar[NodeKind] = NodeKind.TEXT
    type_name: ClassVar[str] = "text"

    text: str = ""
    marks: frozenset[Mark] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Normalize iterables of marks to a frozenset."""
        if not isinstance(self.marks, frozenset):
            self.marks = frozenset(self.marks)

    def has_mark(self, mark_type: str) -> bool:
        """Return True if a mark of ``mark_type`` applies to this run."""
        return any(mark.type == mark_type for mark in self.marks)

    @property
    def href(self) -> Optional[str]:
        """Target of the link mark, if any."""
        for mark in self.marks:
            if mark.type == "link":
                return mark.href
        return None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


# ============================================================================
# Structural helpers
# ============================================================================

BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Paragraph,
    Heading,
    BulletList,
    OrderedList,
    CodeBlock,
    BlockQuote,
    Admonition,
    HorizontalRule,
    Image,
)
INLINE_NODE_TYPES: tuple[type[Node], ...] = (Text, Image)
LIST_NODE_TYPES: tuple[type[Node], ...] = (BulletList, OrderedList)
LEAF_NODE_TYPES: tuple[type[Node], ...] = (Text, Image, HorizontalRule)

# Containers that must never be left without children
INLINE_CONTAINER_TYPES: tuple[type[Node], ...] = (Paragraph, Heading)
BLOCK_CONTAINER_TYPES: tuple[type[Node], ...] = (ListItem, BlockQuote, Admonition)


def is_leaf(node: Node) -> bool:
    """Return True for node kinds without structural children."""
    return isinstance(node, LEAF_NODE_TYPES)


def get_node_children(node: Node) -> list[Node]:
    """Get the child list of a node.

    The returned list is the node's own list, so callers that mutate it
    mutate the tree. Leaf nodes return a new empty list.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        The node's children (empty list for leaves)

    """
    if is_leaf(node):
        return []
    children = getattr(node, "children", None)
    return children if isinstance(children, list) else []


def placeholder_text() -> Text:
    """Create the single-space text node used to fill empty inline containers."""
    return Text(PLACEHOLDER_TEXT)


def placeholder_paragraph() -> Paragraph:
    """Create the paragraph used to fill empty block containers."""
    return Paragraph(children=[placeholder_text()])


def placeholder_for(node: Node) -> Optional[Node]:
    """Return the placeholder child that keeps ``node`` non-empty.

    Parameters
    ----------
    node : Node
        Container node

    Returns
    -------
    Node or None
        Placeholder child, or None when ``node`` may legitimately be empty

    """
    if isinstance(node, INLINE_CONTAINER_TYPES):
        return placeholder_text()
    if isinstance(node, (Document, *BLOCK_CONTAINER_TYPES)):
        return placeholder_paragraph()
    if isinstance(node, LIST_NODE_TYPES):
        return ListItem(children=[placeholder_paragraph()])
    if isinstance(node, CodeBlock):
        return Text("")
    return None


def ensure_content(node: Node) -> bool:
    """Fill an empty container with its placeholder child.

    Parameters
    ----------
    node : Node
        Node to check

    Returns
    -------
    bool
        True if a placeholder was inserted

    """
    if is_leaf(node) or get_node_children(node):
        return False
    placeholder = placeholder_for(node)
    if placeholder is None:
        return False
    node.children = [placeholder]  # type: ignore[attr-defined]
    return True


def can_contain(parent: Node, child: Node) -> bool:
    """Return True if ``child`` is an allowed direct child of ``parent``.

    Parameters
    ----------
    parent : Node
        Prospective parent
    child : Node
        Prospective child

    Returns
    -------
    bool
        Whether the structural rules allow the pairing

    """
    if isinstance(parent, LIST_NODE_TYPES):
        return isinstance(child, ListItem)
    if isinstance(parent, INLINE_CONTAINER_TYPES):
        return isinstance(child, INLINE_NODE_TYPES)
    if isinstance(parent, CodeBlock):
        return isinstance(child, Text) and not parent.children
    if isinstance(parent, (Document, *BLOCK_CONTAINER_TYPES)):
        return isinstance(child, BLOCK_NODE_TYPES)
    return False


__all__ = [
    "NodeKind",
    "Mark",
    "BOLD",
    "ITALIC",
    "CODE",
    "STRIKE",
    "HIGHLIGHT",
    "sorted_marks",
    "Node",
    "Document",
    "Paragraph",
    "Heading",
    "BulletList",
    "OrderedList",
    "ListItem",
    "CodeBlock",
    "BlockQuote",
    "Admonition",
    "HorizontalRule",
    "Image",
    "Text",
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "LIST_NODE_TYPES",
    "LEAF_NODE_TYPES",
    "INLINE_CONTAINER_TYPES",
    "BLOCK_CONTAINER_TYPES",
    "is_leaf",
    "get_node_children",
    "placeholder_text",
    "placeholder_paragraph",
    "placeholder_for",
    "ensure_content",
    "can_contain",
]
