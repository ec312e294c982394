#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Interactive editing: the live session, edit commands, events and block templates."""

from docublocks.editor.commands import DeleteNode, EditCommand, InsertChild, ReplaceLeafText, UpdateAttributes
from docublocks.editor.events import ChangeCallback, ContentChanged, EditorEvent, SessionState, TreeLoaded
from docublocks.editor.session import EditorSession
from docublocks.editor.templates import BLOCK_TEMPLATES, BlockTemplate, get_template, new_block, search_templates

__all__ = [
    "EditorSession",
    # Commands
    "InsertChild",
    "DeleteNode",
    "UpdateAttributes",
    "ReplaceLeafText",
    "EditCommand",
    # Events
    "SessionState",
    "TreeLoaded",
    "ContentChanged",
    "EditorEvent",
    "ChangeCallback",
    # Templates
    "BlockTemplate",
    "BLOCK_TEMPLATES",
    "get_template",
    "new_block",
    "search_templates",
]
