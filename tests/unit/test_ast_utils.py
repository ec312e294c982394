#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for tree addressing and traversal utilities."""

import pytest

from docublocks.ast import (
    BOLD,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    Image,
    ListItem,
    Paragraph,
    Text,
    deep_copy,
    find_all,
    iter_nodes,
    node_at,
    parent_of,
    plain_text,
)


@pytest.fixture
def doc() -> Document:
    """Provide a small tree with nested lists."""
    return Document(
        children=[
            Heading(level=1, children=[Text("Title")]),
            BulletList(
                children=[
                    ListItem(children=[Paragraph(children=[Text("one")])]),
                    ListItem(
                        children=[
                            Paragraph(children=[Text("two "), Text("bold", marks={BOLD})]),
                            BulletList(children=[ListItem(children=[Paragraph(children=[Text("nested")])])]),
                        ]
                    ),
                ]
            ),
            CodeBlock(language="py", children=[Text("x = 1")]),
        ]
    )


@pytest.mark.unit
class TestNodeAt:
    """Test path addressing."""

    def test_empty_path_is_root(self, doc: Document) -> None:
        """Test that the empty path addresses the root."""
        assert node_at(doc, ()) is doc

    def test_nested_path(self, doc: Document) -> None:
        """Test addressing a deeply nested node."""
        node = node_at(doc, (1, 1, 1, 0, 0, 0))
        assert node == Text("nested")

    def test_list_path_accepted(self, doc: Document) -> None:
        """Test that any sequence of ints works as a path."""
        assert node_at(doc, [2, 0]) == Text("x = 1")

    @pytest.mark.parametrize("path", [(3,), (0, 1), (-1,), (2, 0, 0)])
    def test_invalid_paths(self, doc: Document, path: tuple) -> None:
        """Test that out-of-range, negative and too-deep paths raise IndexError."""
        with pytest.raises(IndexError):
            node_at(doc, path)

    def test_bool_index_rejected(self, doc: Document) -> None:
        """Test that booleans are not accepted as indices."""
        with pytest.raises(IndexError):
            node_at(doc, (True,))

    def test_parent_of(self, doc: Document) -> None:
        """Test finding the parent of a node."""
        assert parent_of(doc, (1, 0)) is doc.children[1]
        with pytest.raises(IndexError):
            parent_of(doc, ())
        with pytest.raises(IndexError):
            parent_of(doc, (1, 5))


@pytest.mark.unit
class TestTraversal:
    """Test traversal helpers."""

    def test_iter_nodes_preorder(self, doc: Document) -> None:
        """Test pre-order traversal with paths."""
        pairs = list(iter_nodes(doc))
        assert pairs[0] == ((), doc)
        assert pairs[1][0] == (0,)
        assert pairs[2] == ((0, 0), Text("Title"))
        assert pairs[-1] == ((2, 0), Text("x = 1"))
        for path, node in pairs:
            assert node_at(doc, path) is node

    def test_find_all(self, doc: Document) -> None:
        """Test collecting nodes by class in document order."""
        lists = find_all(doc, BulletList)
        assert len(lists) == 2
        assert lists[0] is doc.children[1]
        assert [t.text for t in find_all(doc, Text)] == ["Title", "one", "two ", "bold", "nested", "x = 1"]

    def test_plain_text(self, doc: Document) -> None:
        """Test plain text extraction."""
        assert plain_text(doc.children[0]) == "Title"
        assert plain_text(doc.children[1]) == "onetwo boldnested"
        assert plain_text(doc.children[1].children, joiner="|") == "one|two bold|nested"

    def test_plain_text_uses_image_alt(self) -> None:
        """Test that images contribute their alt text."""
        para = Paragraph(children=[Text("see "), Image(src="a.png", alt="diagram")])
        assert plain_text(para) == "see diagram"

    def test_deep_copy_is_independent(self, doc: Document) -> None:
        """Test that a copy shares no mutable state with the original."""
        clone = deep_copy(doc)
        assert clone == doc
        clone.children[0].children[0].text = "Changed"
        assert doc.children[0].children[0].text == "Title"
