#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/ast/serialization.py
"""JSON interchange format for document trees.

The format follows the JSON content model of block editors: every node is an
object with a ``type`` and, depending on the kind, ``attrs``, ``content``
(child nodes), ``text`` and ``marks``.

    {"schema_version": 1, "type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 1},
         "content": [{"type": "text", "text": "Title"}]},
        {"type": "paragraph", "content": [
            {"type": "text", "text": "bold", "marks": [{"type": "bold"}]}]}
    ]}

Link marks carry their target as ``{"type": "link", "attrs": {"href": ...}}``.
Code blocks with empty code omit ``content``.

Examples
--------
    >>> from docublocks.ast import Document, Heading, Text
    >>> doc = Document(children=[Heading(level=1, children=[Text("Title")])])
    >>> tree = json_to_tree(tree_to_json(doc))
    >>> tree.children[0].level
    1

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from docublocks.ast.nodes import (
    Admonition,
    BlockQuote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    Mark,
    Node,
    OrderedList,
    Paragraph,
    Text,
    ensure_content,
    sorted_marks,
)
from docublocks.constants import DEFAULT_ADMONITION_TYPE

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


# ============================================================================
# Serialization
# ============================================================================


def _serialize_marks(node: Text) -> list[dict[str, Any]]:
    marks: list[dict[str, Any]] = []
    for mark in sorted_marks(node.marks):
        if mark.type == "link":
            marks.append({"type": "link", "attrs": {"href": mark.href}})
        else:
            marks.append({"type": mark.type})
    return marks


def _serialize_text(node: Text) -> dict[str, Any]:
    result: dict[str, Any] = {"type": node.type_name, "text": node.text}
    if node.marks:
        result["marks"] = _serialize_marks(node)
    return result


def _serialize_children_node(node: Node) -> dict[str, Any]:
    return {
        "type": node.type_name,
        "content": [tree_to_dict(child) for child in node.children],  # type: ignore[attr-defined]
    }


def _serialize_heading(node: Heading) -> dict[str, Any]:
    result = _serialize_children_node(node)
    result["attrs"] = {"level": node.level}
    return result


def _serialize_code_block(node: CodeBlock) -> dict[str, Any]:
    result: dict[str, Any] = {
        "type": node.type_name,
        "attrs": {"language": node.language, "title": node.title},
    }
    if node.code:
        result["content"] = [{"type": "text", "text": node.code}]
    return result


def _serialize_admonition(node: Admonition) -> dict[str, Any]:
    result = _serialize_children_node(node)
    result["attrs"] = {"type": node.type, "title": node.title}
    return result


def _serialize_image(node: Image) -> dict[str, Any]:
    return {"type": node.type_name, "attrs": {"src": node.src, "alt": node.alt, "title": node.title}}


def _serialize_horizontal_rule(node: HorizontalRule) -> dict[str, Any]:
    return {"type": node.type_name}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: _serialize_children_node,
    Paragraph: _serialize_children_node,
    Heading: _serialize_heading,
    BulletList: _serialize_children_node,
    OrderedList: _serialize_children_node,
    ListItem: _serialize_children_node,
    CodeBlock: _serialize_code_block,
    BlockQuote: _serialize_children_node,
    Admonition: _serialize_admonition,
    Image: _serialize_image,
    HorizontalRule: _serialize_horizontal_rule,
    Text: _serialize_text,
}


def tree_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree node to its interchange dictionary.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node and its subtree

    Raises
    ------
    ValueError
        If ``node`` is not one of the document tree classes

    Examples
    --------
    >>> tree_to_dict(Text("Hello"))
    {'type': 'text', 'text': 'Hello'}

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


# ============================================================================
# Deserialization
# ============================================================================


def _attrs(data: dict[str, Any]) -> dict[str, Any]:
    attrs = data.get("attrs") or {}
    if not isinstance(attrs, dict):
        raise ValueError(f"'attrs' must be an object, got {type(attrs).__name__}")
    return attrs


def _deserialize_marks(data: dict[str, Any], strict_mode: bool) -> frozenset[Mark]:
    marks: set[Mark] = set()
    for mark_data in data.get("marks") or []:
        mark_type = mark_data.get("type")
        try:
            if mark_type == "link":
                marks.add(Mark.link(str(_attrs(mark_data).get("href") or "")))
            else:
                marks.add(Mark(mark_type))
        except ValueError:
            if strict_mode:
                raise
            logger.warning("Unknown mark type '%s', skipping", mark_type)
    return frozenset(marks)


def _deserialize_children(data: dict[str, Any], strict_mode: bool, inline: bool = False) -> list[Node]:
    content = data.get("content") or []
    if not isinstance(content, list):
        raise ValueError(f"'content' must be an array, got {type(content).__name__}")
    return [_dict_to_node(child, strict_mode, inline=inline) for child in content]


def _deserialize_text(data: dict[str, Any], strict_mode: bool) -> Text:
    return Text(str(data.get("text", "")), marks=_deserialize_marks(data, strict_mode))


def _deserialize_document(data: dict[str, Any], strict_mode: bool) -> Document:
    return Document(children=_deserialize_children(data, strict_mode))


def _deserialize_paragraph(data: dict[str, Any], strict_mode: bool) -> Paragraph:
    return Paragraph(children=_deserialize_children(data, strict_mode, inline=True))


def _deserialize_heading(data: dict[str, Any], strict_mode: bool) -> Heading:
    level = _attrs(data).get("level", 1)
    return Heading(level=level, children=_deserialize_children(data, strict_mode, inline=True))


def _deserialize_bullet_list(data: dict[str, Any], strict_mode: bool) -> BulletList:
    return BulletList(children=_deserialize_children(data, strict_mode))


def _deserialize_ordered_list(data: dict[str, Any], strict_mode: bool) -> OrderedList:
    return OrderedList(children=_deserialize_children(data, strict_mode))


def _deserialize_list_item(data: dict[str, Any], strict_mode: bool) -> ListItem:
    return ListItem(children=_deserialize_children(data, strict_mode))


def _deserialize_code_block(data: dict[str, Any], strict_mode: bool) -> CodeBlock:
    attrs = _attrs(data)
    code = "".join(str(child.get("text", "")) for child in data.get("content") or [])
    return CodeBlock(
        language=str(attrs.get("language") or ""),
        title=str(attrs.get("title") or ""),
        children=[Text(code)],
    )


def _deserialize_block_quote(data: dict[str, Any], strict_mode: bool) -> BlockQuote:
    return BlockQuote(children=_deserialize_children(data, strict_mode))


def _deserialize_admonition(data: dict[str, Any], strict_mode: bool) -> Admonition:
    attrs = _attrs(data)
    return Admonition(
        type=str(attrs.get("type") or DEFAULT_ADMONITION_TYPE),
        title=str(attrs.get("title") or ""),
        children=_deserialize_children(data, strict_mode),
    )


def _deserialize_image(data: dict[str, Any], strict_mode: bool) -> Image:
    attrs = _attrs(data)
    return Image(
        src=str(attrs.get("src") or ""),
        alt=str(attrs.get("alt") or ""),
        title=str(attrs.get("title") or ""),
    )


def _deserialize_horizontal_rule(data: dict[str, Any], strict_mode: bool) -> HorizontalRule:
    return HorizontalRule()


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], bool], Node]] = {
    "doc": _deserialize_document,
    "paragraph": _deserialize_paragraph,
    "heading": _deserialize_heading,
    "bulletList": _deserialize_bullet_list,
    "orderedList": _deserialize_ordered_list,
    "listItem": _deserialize_list_item,
    "codeBlock": _deserialize_code_block,
    "blockquote": _deserialize_block_quote,
    "admonition": _deserialize_admonition,
    "image": _deserialize_image,
    "horizontalRule": _deserialize_horizontal_rule,
    "text": _deserialize_text,
}


def _flatten_text(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    text = str(data.get("text", ""))
    return text + "".join(_flatten_text(child) for child in data.get("content") or [])


def _dict_to_node(data: dict[str, Any], strict_mode: bool, inline: bool = False) -> Node:
    if not isinstance(data, dict):
        raise ValueError(f"Node data must be an object, got {type(data).__name__}")

    node_type = data.get("type")
    deserializer = _DESERIALIZATION_DISPATCH.get(node_type) if isinstance(node_type, str) else None
    if deserializer is None:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type}")
        logger.warning("Unknown node type '%s', degrading to text", node_type)
        text = Text(_flatten_text(data))
        return text if inline else Paragraph(children=[text])

    node = deserializer(data, strict_mode)
    ensure_content(node)
    return node


def dict_to_tree(data: dict[str, Any], strict_mode: bool = True) -> Node:
    """Convert an interchange dictionary back to a tree node.

    Empty containers are filled with their placeholder children so the
    result satisfies the same invariants as a parsed tree.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node
    strict_mode : bool, default True
        If True, raise ValueError on unknown node or mark types.
        If False, unknown nodes degrade to their flattened text and
        unknown marks are dropped.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the data is structurally invalid, or contains an unknown type
        while ``strict_mode`` is True

    """
    return _dict_to_node(data, strict_mode)


def tree_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string of the form ``{"schema_version": 1, "type": ..., ...}``

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **tree_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_tree(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string produced by ``tree_to_json``.

    A missing ``schema_version`` is treated as version 1.

    Parameters
    ----------
    json_str : str
        JSON string representation
    strict_mode : bool, default True
        Passed through to ``dict_to_tree``

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the schema version is unsupported or the data is invalid
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError("Top-level JSON value must be an object")

    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if not isinstance(schema_version, int) or isinstance(schema_version, bool):
        raise ValueError(f"Schema version must be an integer, got {type(schema_version).__name__}")
    if schema_version != SCHEMA_VERSION:
        if strict_mode:
            raise ValueError(f"Unsupported schema version: {schema_version}")
        logger.warning("Schema version %s differs from supported version %s", schema_version, SCHEMA_VERSION)

    return dict_to_tree(data, strict_mode=strict_mode)


__all__ = [
    "SCHEMA_VERSION",
    "tree_to_dict",
    "dict_to_tree",
    "tree_to_json",
    "json_to_tree",
]
