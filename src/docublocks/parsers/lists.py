#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/parsers/lists.py
"""Alignment of lists nested under ordered items.

Nested lists are written ``list_indent_width`` columns right of their parent
marker, whatever the width of that marker. Under ``1. `` this leaves the
nested marker left of the parent's content column, where CommonMark starts a
new list instead of nesting. ``align_nested_lists`` runs on the raw text
before the block parser and moves such items right onto the content column
of their parent, together with every line that belongs to them.

A marker line counts as nested when it starts at least ``indent_width``
columns right of the enclosing item's marker. Marker lines closer than that
stay siblings. Lines inside fenced code move with the item holding the fence.
Block quote prefixes are kept and the lines after them are aligned the same
way.

Examples
--------
    >>> align_nested_lists("1. Ordered\\n  - Bullet")
    '1. Ordered\\n   - Bullet'

"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from docublocks.constants import (
    BLOCKQUOTE_PREFIX_RE,
    DEFAULT_LIST_INDENT_WIDTH,
    LIST_MARKER_RE,
    THEMATIC_BREAK_RE,
)
from docublocks.parsers.admonitions import closes_code_fence, code_fence_marker

logger = logging.getLogger(__name__)


class _OpenItem(NamedTuple):
    """List item still open at the current line, in source columns."""

    marker_column: int
    content_column: int
    shift: int


def _content_column(match: re.Match[str]) -> int:
    start = len(match.group("indent")) + len(match.group("marker"))
    gap = len(match.group("gap"))
    # Empty items and items opening with indented code start one column after the marker
    if gap == 0 or gap > 4:
        return start + 1
    return start + gap


def _shifted(prefix: str, body: str, shift: int) -> str:
    if shift and body.strip():
        return f"{prefix}{' ' * shift}{body}"
    return f"{prefix}{body}"


def align_nested_lists(markdown: str, indent_width: int = DEFAULT_LIST_INDENT_WIDTH) -> str:
    """Move list items nested under wide markers onto their parent's content column.

    Parameters
    ----------
    markdown : str
        Markdown source
    indent_width : int, default 2
        Smallest offset from the parent marker at which a marker line is
        read as nested

    Returns
    -------
    str
        Source with nested items re-indented. Returned unchanged when no
        line moves.

    """
    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    output: list[str] = []
    stack: list[_OpenItem] = []
    quote = ""
    code_marker: Optional[str] = None
    code_shift = 0
    moved = 0

    for line in lines:
        prefix_match = BLOCKQUOTE_PREFIX_RE.match(line)
        prefix = prefix_match.group(0) if prefix_match else ""
        body = line[len(prefix) :]

        if code_marker is not None:
            if closes_code_fence(body, code_marker):
                code_marker = None
            output.append(_shifted(prefix, body, code_shift))
            if code_shift and body.strip():
                moved += 1
            continue

        if not body.strip():
            output.append(line)
            continue

        if prefix != quote:
            stack.clear()
            quote = prefix

        indent = len(body) - len(body.lstrip(" "))
        marker = None if THEMATIC_BREAK_RE.match(body) else LIST_MARKER_RE.match(body)

        if marker is None:
            while stack and indent <= stack[-1].marker_column:
                stack.pop()
            shift = stack[-1].shift if stack else 0
            content = body
        else:
            while (
                stack
                and indent < stack[-1].content_column
                and indent < stack[-1].marker_column + indent_width
            ):
                stack.pop()
            shift = stack[-1].shift if stack else 0
            if stack and indent < stack[-1].content_column:
                shift += stack[-1].content_column - indent
            stack.append(_OpenItem(indent, _content_column(marker), shift))
            content = body[marker.end() :]

        code_marker = code_fence_marker(content)
        code_shift = shift
        if shift:
            moved += 1
        output.append(_shifted(prefix, body, shift))

    if not moved:
        return markdown

    logger.debug("Aligned %d nested list line(s)", moved)
    return "\n".join(output)


__all__ = ["align_nested_lists"]
