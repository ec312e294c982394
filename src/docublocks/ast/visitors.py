#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/ast/visitors.py
"""Visitor pattern implementation for document tree traversal.

This module provides the visitor base class that every tree consumer
(the Markdown renderer, the validator, the JSON serializer) implements.
``NodeVisitor`` declares one abstract ``visit_*`` method per node kind, so a
concrete visitor that forgets a kind cannot be instantiated.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from docublocks.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Admonition,
    BlockQuote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    Text,
)
from docublocks.constants import ADMONITION_TYPES, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL

logger = logging.getLogger(__name__)


class NodeVisitor(ABC):
    """Abstract base class for document tree visitors.

    Subclasses implement a ``visit_*`` method for every node kind. Each
    method receives the node and returns whatever the visitor accumulates
    (``None`` for side-effect visitors).

    Examples
    --------
    Counting text runs:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node):
        ...         self.count += 1
        ...     def generic_visit(self, node):
        ...         for child in getattr(node, "children", []):
        ...             child.accept(self)
        ...     visit_document = visit_paragraph = visit_heading = generic_visit
        ...     visit_bullet_list = visit_ordered_list = visit_list_item = generic_visit
        ...     visit_code_block = visit_block_quote = visit_admonition = generic_visit
        ...     visit_image = visit_horizontal_rule = generic_visit

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_bullet_list(self, node: BulletList) -> Any:
        """Visit a BulletList node."""
        pass

    @abstractmethod
    def visit_ordered_list(self, node: OrderedList) -> Any:
        """Visit an OrderedList node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_admonition(self, node: Admonition) -> Any:
        """Visit an Admonition node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback for node classes outside the closed set.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class TreeValidator(NodeVisitor):
    """Visitor that checks the structural invariants of a document tree.

    Validation is advisory: problems are collected in ``errors`` (and
    ``warnings`` for recoverable oddities such as unknown admonition types).
    In strict mode the first error raises ``ValueError``.

    Parameters
    ----------
    strict : bool, default = False
        Whether to raise on the first structural error

    Examples
    --------
        >>> validator = TreeValidator()
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = False):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []
        self.warnings: list[str] = []

    @property
    def is_valid(self) -> bool:
        """True when no structural errors were found."""
        return not self.errors

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _add_warning(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _check_non_empty(self, node: Node, children: list[Node], context: str) -> None:
        if not children:
            self._add_error(f"{context} must not be empty")

    def _check_children(self, children: list[Node], allowed: tuple[type[Node], ...], context: str) -> None:
        for child in children:
            if not isinstance(child, allowed):
                self._add_error(f"{context} cannot contain {type(child).__name__}")
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._check_children(node.children, BLOCK_NODE_TYPES, "Document")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._check_non_empty(node, node.children, "Paragraph")
        self._check_children(node.children, INLINE_NODE_TYPES, "Paragraph")

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not MIN_HEADING_LEVEL <= node.level <= MAX_HEADING_LEVEL:
            self._add_error(f"Invalid heading level: {node.level}")
        self._check_non_empty(node, node.children, "Heading")
        self._check_children(node.children, INLINE_NODE_TYPES, "Heading")

    def visit_bullet_list(self, node: BulletList) -> None:
        """Validate a BulletList node."""
        self._check_non_empty(node, node.children, "BulletList")
        self._check_children(node.children, (ListItem,), "BulletList")

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Validate an OrderedList node."""
        self._check_non_empty(node, node.children, "OrderedList")
        self._check_children(node.children, (ListItem,), "OrderedList")

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._check_non_empty(node, node.children, "ListItem")
        self._check_children(node.children, BLOCK_NODE_TYPES, "ListItem")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if len(node.children) != 1 or not isinstance(node.children[0], Text):
            self._add_error("CodeBlock must hold exactly one Text node")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._check_non_empty(node, node.children, "Blockquote")
        self._check_children(node.children, BLOCK_NODE_TYPES, "Blockquote")

    def visit_admonition(self, node: Admonition) -> None:
        """Validate an Admonition node."""
        if node.type not in ADMONITION_TYPES:
            self._add_warning(f"Unknown admonition type preserved: {node.type!r}")
        self._check_non_empty(node, node.children, "Admonition")
        self._check_children(node.children, BLOCK_NODE_TYPES, "Admonition")

    def visit_image(self, node: Image) -> None:
        """Images carry no structure to validate."""
        return None

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Horizontal rules carry no structure to validate."""
        return None

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        if not isinstance(node.text, str):
            self._add_error(f"Text content must be a string, got {type(node.text).__name__}")


def validate_tree(root: Node, strict: bool = False) -> list[str]:
    """Validate a document tree and return the structural errors found.

    Parameters
    ----------
    root : Node
        Root of the tree to validate
    strict : bool, default = False
        Raise ``ValueError`` on the first error

    Returns
    -------
    list of str
        Error messages (empty when the tree is valid)

    """
    validator = TreeValidator(strict=strict)
    root.accept(validator)
    return validator.errors


__all__ = ["NodeVisitor", "TreeValidator", "validate_tree"]
