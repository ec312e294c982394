#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/editor/session.py
"""Interactive editing session over a live document tree.

An ``EditorSession`` owns one document tree while a user edits it. The
surrounding UI reports where the caret is (``focus`` / ``blur``) and sends
structural edit commands (``apply_edit``). After every successful edit the
tree is serialized again and a ``ContentChanged`` event carries the new
Markdown to the listener, so the persistence layer always has current text.

External reloads never destroy in-progress code editing: while a code block
holds the caret, ``load`` is queued and applied when the caret leaves it.
Only the latest queued load is kept.

State machine::

    Idle -> Loaded -> Editing -> Loaded -> ... -> Closed

Examples
--------
    >>> session = EditorSession()
    >>> session.load("# Title\\n\\nBody")
    True
    >>> session.apply_edit(UpdateAttributes(path=(0,), attributes={"level": 2}))
    '## Title\\n\\nBody'

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Sequence

from docublocks.ast import (
    Admonition,
    CodeBlock,
    Document,
    Heading,
    Image,
    Mark,
    Node,
    Text,
    can_contain,
    deep_copy,
    ensure_content,
    get_node_children,
    is_leaf,
    iter_nodes,
    node_at,
)
from docublocks.ast.nodes import INLINE_CONTAINER_TYPES
from docublocks.ast.visitors import TreeValidator
from docublocks.constants import ADMONITION_TYPES, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL, PLACEHOLDER_TEXT
from docublocks.editor.commands import DeleteNode, EditCommand, InsertChild, ReplaceLeafText, UpdateAttributes
from docublocks.editor.events import ChangeCallback, ContentChanged, EditorEvent, SessionState, TreeLoaded
from docublocks.exceptions import InvalidEditError, InvalidOptionsError, SessionClosedError
from docublocks.options.session import EditorSessionOptions
from docublocks.parsers.markdown import MarkdownToTreeConverter
from docublocks.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

# Attributes each node kind accepts through UpdateAttributes
_EDITABLE_ATTRIBUTES: dict[type, frozenset[str]] = {
    Heading: frozenset({"level"}),
    CodeBlock: frozenset({"language", "title"}),
    Admonition: frozenset({"type", "title"}),
    Image: frozenset({"src", "alt", "title"}),
    Text: frozenset({"marks"}),
}


class EditorSession:
    """Live document tree with structural edit commands.

    Parameters
    ----------
    options : EditorSessionOptions or None, default = None
        Session configuration, including the supported code block languages
    on_change : ChangeCallback or None, default = None
        Listener receiving ``TreeLoaded`` and ``ContentChanged`` events

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an ``EditorSessionOptions``

    """

    def __init__(self, options: EditorSessionOptions | None = None, on_change: Optional[ChangeCallback] = None):
        """Initialize an idle session holding an empty placeholder document."""
        if options is not None and not isinstance(options, EditorSessionOptions):
            raise InvalidOptionsError(
                converter_name="editor session",
                expected_type=EditorSessionOptions,
                received_type=type(options),
            )
        self.options: EditorSessionOptions = options or EditorSessionOptions()
        self.on_change = on_change

        self._parser = MarkdownToTreeConverter(self.options.parser_options)
        self._renderer = MarkdownRenderer(self.options.renderer_options)

        self._state = SessionState.IDLE
        self._tree: Document = self._parser.parse("")
        self._markdown = ""
        self._focused: Optional[Node] = None
        self._pending_load: Optional[str] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def tree(self) -> Document:
        """The live document tree."""
        self._check_open()
        return self._tree

    @property
    def markdown(self) -> str:
        """Serialized form of the current tree, ready to be saved."""
        self._check_open()
        return self._markdown

    @property
    def has_pending_load(self) -> bool:
        """True while a load is waiting for code editing to finish."""
        return self._pending_load is not None

    @property
    def focused_path(self) -> Optional[tuple[int, ...]]:
        """Path of the node holding the caret, if any."""
        if self._focused is None:
            return None
        return self._path_of(self._focused)

    def is_language_supported(self, language: str) -> bool:
        """Return True if ``language`` is in the session's capability set.

        An empty language means "no language" and is always supported.
        """
        normalized = language.strip().lower()
        return not normalized or normalized in self.options.supported_languages

    # ------------------------------------------------------------------
    # Loading and focus
    # ------------------------------------------------------------------

    def load(self, markdown: str) -> bool:
        """Replace the tree with the parse of ``markdown``.

        Parameters
        ----------
        markdown : str
            Markdown body (frontmatter already removed)

        Returns
        -------
        bool
            True if the tree was replaced now, False if the load was queued
            because a code block is being edited

        Raises
        ------
        SessionClosedError
            If the session has been closed

        """
        self._check_open()
        if self._state is SessionState.EDITING:
            if self._pending_load is not None:
                logger.debug("Replacing queued load with a newer one")
            self._pending_load = markdown
            logger.warning("Code block is being edited; deferring load of %d characters", len(markdown))
            return False

        self._replace_tree(markdown, deferred=False)
        return True

    def focus(self, path: Sequence[int]) -> None:
        """Report that the node at ``path`` holds the caret.

        Focusing a code block, or a node inside one, starts leaf editing.
        Moving the caret out of a code block releases it like ``blur``.

        Raises
        ------
        InvalidEditError
            If ``path`` does not address a node
        SessionClosedError
            If the session has been closed

        """
        self._check_open()
        node = self._resolve(path, None)
        if self._is_code_content(node):
            self._focused = node
            if self._state is not SessionState.IDLE:
                self._state = SessionState.EDITING
            return

        if self._state is SessionState.EDITING:
            self.blur()
            if self._tree_contains(node):
                self._focused = node
            return
        self._focused = node

    def blur(self) -> None:
        """Report that the caret left the editor; applies a queued load.

        Raises
        ------
        SessionClosedError
            If the session has been closed

        """
        self._check_open()
        self._focused = None
        if self._state is SessionState.EDITING:
            self._state = SessionState.LOADED
        if self._pending_load is not None and self._state is SessionState.LOADED:
            markdown, self._pending_load = self._pending_load, None
            self._replace_tree(markdown, deferred=True)

    def close(self) -> None:
        """Dispose of the session. Later calls raise ``SessionClosedError``."""
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        self._pending_load = None
        self._focused = None
        self.on_change = None
        logger.debug("Editor session closed")

    def __enter__(self) -> EditorSession:
        """Use the session as a context manager that closes it on exit."""
        return self

    def __exit__(self, *exc_info: Any) -> None:
        """Close the session."""
        self.close()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def apply_edit(self, command: EditCommand) -> str:
        """Apply a structural edit command.

        The command is validated completely before the tree is touched, so a
        rejected command leaves the tree unchanged. Containers emptied by a
        deletion receive their placeholder content.

        Parameters
        ----------
        command : EditCommand
            ``InsertChild``, ``DeleteNode``, ``UpdateAttributes`` or
            ``ReplaceLeafText``

        Returns
        -------
        str
            Markdown of the edited tree

        Raises
        ------
        InvalidEditError
            If the command cannot be applied to the current tree
        SessionClosedError
            If the session has been closed

        """
        self._check_open()
        if self._state is SessionState.IDLE:
            raise InvalidEditError("No document has been loaded", command=command)

        if isinstance(command, InsertChild):
            self._insert_child(command)
        elif isinstance(command, DeleteNode):
            self._delete_node(command)
        elif isinstance(command, UpdateAttributes):
            self._update_attributes(command)
        elif isinstance(command, ReplaceLeafText):
            self._replace_leaf_text(command)
        else:
            raise InvalidEditError(f"Unsupported edit command: {type(command).__name__}", command=command)

        edited = self._markdown = self._renderer.render_to_string(self._tree)
        self._emit(ContentChanged(markdown=edited, command=command))
        if self._pending_load is not None and self._state is SessionState.LOADED:
            markdown, self._pending_load = self._pending_load, None
            self._replace_tree(markdown, deferred=True)
        return edited

    def _insert_child(self, command: InsertChild) -> None:
        parent = self._resolve(command.parent_path, command)
        if not isinstance(command.node, Node):
            raise InvalidEditError(
                f"Cannot insert {type(command.node).__name__}: not a document node",
                command=command,
                path=command.parent_path,
            )
        if is_leaf(parent) or not can_contain(parent, command.node):
            raise InvalidEditError(
                f"{type(parent).__name__} cannot contain {type(command.node).__name__}",
                command=command,
                path=command.parent_path,
            )

        children = get_node_children(parent)
        if isinstance(command.index, bool) or not isinstance(command.index, int):
            raise InvalidEditError("Insert index must be an integer", command=command, path=command.parent_path)
        if not 0 <= command.index <= len(children):
            raise InvalidEditError(
                f"Insert index {command.index} out of range 0..{len(children)}",
                command=command,
                path=command.parent_path,
            )

        node = deep_copy(command.node)
        for _path, descendant in iter_nodes(node):
            ensure_content(descendant)
        validator = TreeValidator()
        node.accept(validator)
        if validator.errors:
            raise InvalidEditError(
                f"Inserted subtree is malformed: {validator.errors[0]}",
                command=command,
                path=command.parent_path,
            )
        if isinstance(node, CodeBlock):
            self._warn_unsupported_language(node.language)

        children.insert(command.index, node)

    def _delete_node(self, command: DeleteNode) -> None:
        if not command.path:
            raise InvalidEditError("The document root cannot be deleted", command=command, path=command.path)
        parent = self._resolve(command.path[:-1], command)
        self._resolve(command.path, command)

        children = get_node_children(parent)
        removed = children.pop(command.path[-1])
        if ensure_content(parent):
            logger.debug("Filled emptied %s with placeholder content", type(parent).__name__)

        # Code editing continues on the empty text that replaced the deleted one
        if self._focused is removed and isinstance(parent, CodeBlock):
            self._focused = parent.children[0]
        elif self._focused is not None and not self._tree_contains(self._focused):
            logger.debug("Focused node was deleted with %s", type(removed).__name__)
            self._focused = None
            if self._state is SessionState.EDITING:
                self._state = SessionState.LOADED

    def _update_attributes(self, command: UpdateAttributes) -> None:
        node = self._resolve(command.path, command)
        allowed = _EDITABLE_ATTRIBUTES.get(type(node), frozenset())
        unknown = sorted(set(command.attributes) - allowed)
        if unknown:
            raise InvalidEditError(
                f"{type(node).__name__} has no editable attribute(s): {', '.join(unknown)}",
                command=command,
                path=command.path,
            )

        updates = {name: self._coerce_attribute(node, name, value, command) for name, value in command.attributes.items()}
        for name, value in updates.items():
            setattr(node, name, value)

    def _coerce_attribute(self, node: Node, name: str, value: Any, command: UpdateAttributes) -> Any:
        """Validate one attribute value and return the value to store."""
        if name == "level":
            if isinstance(value, bool) or not isinstance(value, int) or not MIN_HEADING_LEVEL <= value <= MAX_HEADING_LEVEL:
                raise InvalidEditError(
                    f"Heading level must be an integer between 1 and 6, got {value!r}",
                    command=command,
                    path=command.path,
                )
            return value

        if name == "marks":
            return self._coerce_marks(value, command)

        if not isinstance(value, str):
            raise InvalidEditError(
                f"Attribute '{name}' must be a string, got {type(value).__name__}",
                command=command,
                path=command.path,
            )
        if isinstance(node, CodeBlock) and name == "language":
            value = value.strip()
            self._warn_unsupported_language(value)
        if isinstance(node, Admonition) and name == "type":
            value = value.strip()
            if not value:
                raise InvalidEditError("Admonition type cannot be empty", command=command, path=command.path)
            if value not in ADMONITION_TYPES:
                logger.warning("Unknown admonition type %r kept as given", value)
        return value

    @staticmethod
    def _coerce_marks(value: Any, command: UpdateAttributes) -> frozenset[Mark]:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise InvalidEditError("marks must be a collection of Mark values", command=command, path=command.path)
        marks: set[Mark] = set()
        for item in value:
            try:
                if isinstance(item, Mark):
                    marks.add(item)
                elif isinstance(item, Mapping):
                    mark_type = item.get("type")
                    marks.add(Mark.link(str(item.get("href", ""))) if mark_type == "link" else Mark(mark_type))
                else:
                    marks.add(Mark(item))
            except ValueError as exc:
                raise InvalidEditError(str(exc), command=command, path=command.path, original_error=exc) from exc
        if len([mark for mark in marks if mark.type == "link"]) > 1:
            raise InvalidEditError("A text run can carry only one link", command=command, path=command.path)
        return frozenset(marks)

    def _replace_leaf_text(self, command: ReplaceLeafText) -> None:
        node = self._resolve(command.path, command)
        if not isinstance(command.text, str):
            raise InvalidEditError(
                f"Leaf text must be a string, got {type(command.text).__name__}",
                command=command,
                path=command.path,
            )

        if isinstance(node, CodeBlock):
            node.code = command.text
        elif isinstance(node, Text):
            text = command.text
            if not text and self._is_sole_inline_child(command.path, node):
                text = PLACEHOLDER_TEXT
            node.text = text
        else:
            raise InvalidEditError(
                f"{type(node).__name__} has no leaf text to replace",
                command=command,
                path=command.path,
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._state is SessionState.CLOSED:
            raise SessionClosedError()

    def _resolve(self, path: Sequence[int], command: Optional[EditCommand]) -> Node:
        try:
            return node_at(self._tree, tuple(path))
        except (IndexError, TypeError) as exc:
            raise InvalidEditError(
                f"No node at path {tuple(path)!r}",
                command=command,
                path=tuple(path),
                original_error=exc,
            ) from exc

    def _path_of(self, target: Node) -> Optional[tuple[int, ...]]:
        for path, node in iter_nodes(self._tree):
            if node is target:
                return path
        return None

    def _tree_contains(self, target: Node) -> bool:
        return self._path_of(target) is not None

    def _is_code_content(self, node: Node) -> bool:
        """True for a code block or the text node inside one."""
        if isinstance(node, CodeBlock):
            return True
        path = self._path_of(node)
        return bool(path) and isinstance(node_at(self._tree, path[:-1]), CodeBlock)

    def _is_sole_inline_child(self, path: tuple[int, ...], node: Node) -> bool:
        parent = node_at(self._tree, path[:-1])
        return isinstance(parent, INLINE_CONTAINER_TYPES) and get_node_children(parent) == [node]

    def _warn_unsupported_language(self, language: str) -> None:
        if not self.is_language_supported(language):
            logger.warning("Code block language %r is not in the supported set", language)

    def _replace_tree(self, markdown: str, deferred: bool) -> None:
        self._tree = self._parser.parse(markdown)
        self._markdown = self._renderer.render_to_string(self._tree)
        self._focused = None
        self._state = SessionState.LOADED
        logger.debug("Loaded tree with %d top-level blocks", len(self._tree.children))
        self._emit(TreeLoaded(markdown=self._markdown, deferred=deferred))

    def _emit(self, event: EditorEvent) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(event)
        except Exception as e:
            # A failing listener must not corrupt the session
            logger.warning(f"Change listener raised exception: {e}", exc_info=True)


__all__ = ["EditorSession"]
