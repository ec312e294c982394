#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/editor/templates.py
"""Block templates offered by the editor's insert menu.

Each template produces a fresh subtree ready for an ``InsertChild``
command. Admonition templates default their title to the capitalized type.

Examples
--------
    >>> block = new_block("tip")
    >>> block.type, block.title
    ('tip', 'Tip')
    >>> [template.name for template in search_templates("head")]
    ['heading1', 'heading2', 'heading3']

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from docublocks.ast import (
    Admonition,
    BlockQuote,
    BulletList,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    Text,
)
from docublocks.ast.nodes import placeholder_paragraph, placeholder_text


@dataclass(frozen=True)
class BlockTemplate:
    """Named factory for a block subtree.

    Parameters
    ----------
    name : str
        Identifier passed to ``new_block``
    title : str
        Menu label
    description : str
        One-line menu description
    factory : Callable[..., Node]
        Builds the subtree; receives the keyword attributes given to ``new_block``

    """

    name: str
    title: str
    description: str
    factory: Callable[..., Node]

    def create(self, **attrs: Any) -> Node:
        """Build a fresh subtree."""
        return self.factory(**attrs)


def _inline(text: str) -> list[Node]:
    return [Text(text)] if text else [placeholder_text()]


def _heading(level: int) -> Callable[..., Node]:
    def factory(text: str = "") -> Node:
        return Heading(level=level, children=_inline(text))

    return factory


def _paragraph(text: str = "") -> Node:
    return Paragraph(children=_inline(text))


def _bullet_list(text: str = "") -> Node:
    return BulletList(children=[ListItem(children=[Paragraph(children=_inline(text))])])


def _numbered_list(text: str = "") -> Node:
    return OrderedList(children=[ListItem(children=[Paragraph(children=_inline(text))])])


def _code_block(language: str = "", title: str = "", code: str = "") -> Node:
    return CodeBlock(language=language, title=title, children=[Text(code)])


def _blockquote(text: str = "") -> Node:
    return BlockQuote(children=[Paragraph(children=_inline(text))])


def _admonition(admonition_type: str) -> Callable[..., Node]:
    def factory(title: str | None = None, text: str = "") -> Node:
        return Admonition(
            type=admonition_type,
            title=admonition_type.capitalize() if title is None else title,
            children=[Paragraph(children=_inline(text))] if text else [placeholder_paragraph()],
        )

    return factory


def _horizontal_rule() -> Node:
    return HorizontalRule()


BLOCK_TEMPLATES: tuple[BlockTemplate, ...] = (
    BlockTemplate("heading1", "Heading 1", "Big section heading", _heading(1)),
    BlockTemplate("heading2", "Heading 2", "Medium section heading", _heading(2)),
    BlockTemplate("heading3", "Heading 3", "Small section heading", _heading(3)),
    BlockTemplate("bullet_list", "Bulleted List", "Create a simple bulleted list", _bullet_list),
    BlockTemplate("numbered_list", "Numbered List", "Create a numbered list", _numbered_list),
    BlockTemplate("code_block", "Code Block", "Add code with syntax highlighting", _code_block),
    BlockTemplate("blockquote", "Blockquote", "Add a quote", _blockquote),
    BlockTemplate("tip", "Tip Admonition", "Add a tip admonition box", _admonition("tip")),
    BlockTemplate("note", "Note Admonition", "Add a note admonition box", _admonition("note")),
    BlockTemplate("warning", "Warning Admonition", "Add a warning admonition box", _admonition("warning")),
    BlockTemplate("danger", "Danger Admonition", "Add a danger admonition box", _admonition("danger")),
    BlockTemplate("horizontal_rule", "Divider", "Add a horizontal rule", _horizontal_rule),
    BlockTemplate("paragraph", "Text", "Start writing plain text", _paragraph),
)

_TEMPLATES_BY_NAME: dict[str, BlockTemplate] = {template.name: template for template in BLOCK_TEMPLATES}


def get_template(name: str) -> BlockTemplate:
    """Look up a template by name.

    Raises
    ------
    KeyError
        If no template has that name

    """
    try:
        return _TEMPLATES_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown block template: {name!r}") from None


def new_block(name: str, **attrs: Any) -> Node:
    """Create a fresh block from the named template.

    Parameters
    ----------
    name : str
        Template name (see ``BLOCK_TEMPLATES``)
    **attrs : Any
        Template-specific options such as ``text``, ``language`` or ``title``

    Returns
    -------
    Node
        New subtree

    Raises
    ------
    KeyError
        If the template does not exist
    TypeError
        If the template does not accept one of ``attrs``

    """
    return get_template(name).create(**attrs)


def search_templates(query: str) -> list[BlockTemplate]:
    """Return templates whose menu title contains ``query`` (case-insensitive).

    An empty query returns every template in menu order.
    """
    needle = query.strip().lower()
    return [template for template in BLOCK_TEMPLATES if needle in template.title.lower()]


__all__ = ["BlockTemplate", "BLOCK_TEMPLATES", "get_template", "new_block", "search_templates"]
