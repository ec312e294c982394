#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/parsers/admonitions.py
"""Recognition of Docusaurus admonitions.

CommonMark has no notion of ``:::type title`` ... ``:::`` callouts, so they
are recognized in two steps around the generic block parser:

1. ``isolate_admonition_fences`` runs on the raw text. Every column-0 opening
   line that is followed later by a column-0 bare ``:::`` line is paired with
   it, and both lines are surrounded by blank lines so the block parser emits
   each fence as a paragraph of its own. Lines inside fenced code are never
   touched, and fence lines without a partner are left as they are.

2. ``group_admonitions`` runs on the top-level block tokens. A paragraph
   holding only an opening fence starts a group that ends at the next
   paragraph holding only ``:::``. The whole run is replaced by one
   ``admonition`` token whose children are the blocks in between. An opening
   fence that is never closed stays an ordinary paragraph.

Examples
--------
    >>> isolate_admonition_fences(":::tip My Tip\\nBody\\n:::")
    '\\n:::tip My Tip\\n\\nBody\\n\\n:::\\n'

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from docublocks.constants import ADMONITION_CLOSE_RE, ADMONITION_OPEN_RE, CODE_FENCE_RE

logger = logging.getLogger(__name__)


def code_fence_marker(line: str) -> Optional[str]:
    """Return the fence marker when ``line`` opens fenced code, else None."""
    fence = CODE_FENCE_RE.match(line)
    # A backtick info string may not contain backticks
    if fence is None or (fence.group("marker").startswith("`") and "`" in fence.group("info")):
        return None
    return fence.group("marker")


def closes_code_fence(line: str, marker: str) -> bool:
    """Return whether ``line`` closes fenced code opened with ``marker``."""
    stripped = line.strip()
    return bool(stripped) and set(stripped) == {marker[0]} and len(stripped) >= len(marker)


def find_fence_pairs(lines: list[str]) -> list[tuple[int, int]]:
    """Pair admonition opening lines with their closing lines.

    Parameters
    ----------
    lines : list of str
        Source lines without line terminators

    Returns
    -------
    list of tuple of (int, int)
        ``(open_index, close_index)`` pairs in document order

    """
    pairs: list[tuple[int, int]] = []
    pending: Optional[int] = None
    code_marker: Optional[str] = None

    for index, line in enumerate(lines):
        if code_marker is not None:
            if closes_code_fence(line, code_marker):
                code_marker = None
            continue

        code_marker = code_fence_marker(line)
        if code_marker is not None:
            continue

        if ADMONITION_CLOSE_RE.match(line):
            if pending is not None:
                pairs.append((pending, index))
                pending = None
        elif pending is None and ADMONITION_OPEN_RE.match(line):
            pending = index

    return pairs


def isolate_admonition_fences(markdown: str) -> str:
    """Surround paired admonition fence lines with blank lines.

    Parameters
    ----------
    markdown : str
        Markdown source

    Returns
    -------
    str
        Source with every paired fence line on a paragraph of its own.
        Returned unchanged when no pair exists.

    """
    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    pairs = find_fence_pairs(lines)
    if not pairs:
        return markdown

    fence_lines = {index for pair in pairs for index in pair}
    output: list[str] = []
    for index, line in enumerate(lines):
        if index in fence_lines:
            output.extend(("", line, ""))
        else:
            output.append(line)

    logger.debug("Isolated %d admonition fence pair(s)", len(pairs))
    return "\n".join(output)


def _sole_text(token: dict[str, Any]) -> Optional[str]:
    """Return the text of a paragraph token made only of text runs."""
    if token.get("type") != "paragraph":
        return None
    children = token.get("children")
    if not isinstance(children, list) or not children:
        return None
    if any(not isinstance(child, dict) or child.get("type") != "text" for child in children):
        return None
    return "".join(str(child.get("raw", "")) for child in children)


def _find_close(tokens: list[dict[str, Any]], start: int) -> Optional[int]:
    for index in range(start, len(tokens)):
        text = _sole_text(tokens[index])
        if text is not None and ADMONITION_CLOSE_RE.match(text):
            return index
    return None


def group_admonitions(tokens: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Replace fence-delimited runs of block tokens with admonition tokens.

    Parameters
    ----------
    tokens : list of dict
        Top-level block tokens from the block parser

    Returns
    -------
    list of dict
        New token list. Admonition tokens have the shape
        ``{"type": "admonition", "attrs": {"type": ..., "title": ...},
        "children": [...]}``.

    """
    result: list[dict[str, Any]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        text = _sole_text(token)
        match = ADMONITION_OPEN_RE.match(text) if text is not None else None
        if match is None:
            result.append(token)
            index += 1
            continue

        close_index = _find_close(tokens, index + 1)
        if close_index is None:
            logger.debug("Unterminated admonition fence kept as text: %r", text)
            result.append(token)
            index += 1
            continue

        result.append(
            {
                "type": "admonition",
                "attrs": {"type": match.group(1), "title": (match.group(2) or "").strip()},
                "children": tokens[index + 1 : close_index],
            }
        )
        index = close_index + 1

    return result


__all__ = [
    "code_fence_marker",
    "closes_code_fence",
    "find_fence_pairs",
    "isolate_admonition_fences",
    "group_admonitions",
]
