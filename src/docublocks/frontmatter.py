#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/frontmatter.py
"""YAML frontmatter handling for Docusaurus documents.

Only the Markdown body reaches the editor core; the frontmatter block is
split off on read and joined back on save.

Examples
--------
    >>> metadata, body = split_frontmatter("---\\ntitle: Intro\\n---\\n# Hello\\n")
    >>> metadata
    {'title': 'Intro'}
    >>> join_frontmatter(metadata, body)
    '---\\ntitle: Intro\\n---\\n# Hello\\n'

"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its frontmatter mapping and Markdown body.

    Parameters
    ----------
    text : str
        Complete file content

    Returns
    -------
    tuple[dict, str]
        Frontmatter mapping (empty when absent) and the remaining body

    Notes
    -----
    A block that is not valid YAML leaves the whole text as the body. A
    block holding something other than a mapping is dropped and yields an
    empty mapping.

    """
    if not (text.startswith("---\n") or text.startswith("---\r\n")):
        return {}, text

    lines = text.splitlines(keepends=True)
    end_index = -1

    for i in range(1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIMITER:
            end_index = i
            break

    if end_index <= 0:
        return {}, text

    yaml_content = "".join(lines[1:end_index])
    body = "".join(lines[end_index + 1 :])

    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        logger.warning(f"Malformed YAML frontmatter, keeping it in the body: {e}")
        return {}, text

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        logger.warning(f"Ignoring frontmatter of type {type(data).__name__}; expected a mapping")
        return {}, body
    return data, body


def join_frontmatter(metadata: Mapping[str, Any] | None, body: str) -> str:
    """Prefix ``body`` with a YAML frontmatter block.

    Parameters
    ----------
    metadata : Mapping or None
        Frontmatter fields in their original order; nothing is added when empty
    body : str
        Markdown body

    Returns
    -------
    str
        File content ending with a newline

    """
    if body and not body.endswith("\n"):
        body += "\n"

    if not metadata:
        return body

    yaml_content = yaml.safe_dump(
        dict(metadata),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )

    if not yaml_content.endswith("\n"):
        yaml_content += "\n"

    return f"---\n{yaml_content}---\n{body}"


__all__ = ["split_frontmatter", "join_frontmatter", "FRONTMATTER_DELIMITER"]
