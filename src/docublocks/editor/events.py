#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/editor/events.py
"""Session states and change events emitted by ``EditorSession``.

Examples
--------
    >>> def on_change(event: EditorEvent) -> None:
    ...     if isinstance(event, ContentChanged):
    ...         save_buffer(event.markdown)
    >>>
    >>> session = EditorSession(on_change=on_change)

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from docublocks.editor.commands import EditCommand


class SessionState(str, Enum):
    """Lifecycle states of an editor session.

    ``IDLE`` until the first load, ``LOADED`` while a tree is available,
    ``EDITING`` while a code block holds the caret, and ``CLOSED`` after
    disposal.
    """

    IDLE = "idle"
    LOADED = "loaded"
    EDITING = "editing"
    CLOSED = "closed"


@dataclass(frozen=True)
class TreeLoaded:
    """A freshly parsed tree replaced the session's tree.

    Parameters
    ----------
    markdown : str
        Serialized form of the new tree
    deferred : bool, default False
        True when the load was queued during code editing and applied later

    """

    markdown: str
    deferred: bool = False


@dataclass(frozen=True)
class ContentChanged:
    """An edit command changed the tree.

    Parameters
    ----------
    markdown : str
        Serialized form of the edited tree
    command : EditCommand or None
        The command that produced the change

    """

    markdown: str
    command: Optional[EditCommand] = None


EditorEvent = Union[TreeLoaded, ContentChanged]

ChangeCallback = Callable[[EditorEvent], None]
"""Type alias for session change listeners.

Listener exceptions are logged and never interrupt the session.
"""

__all__ = ["SessionState", "TreeLoaded", "ContentChanged", "EditorEvent", "ChangeCallback"]
