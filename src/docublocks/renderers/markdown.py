#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/renderers/markdown.py
"""Markdown rendering from document trees.

This module renders the editable document tree back to Docusaurus-flavored
Markdown. Rendering is total: every tree produces output and node classes
outside the closed set degrade to their plain text.

List layout
-----------
Bullet items use the configured bullet symbol; ordered items are numbered
``1.``, ``2.``, ... within their immediate list. Each nesting level adds
``list_indent_width`` spaces regardless of the parent marker width. An item's
own blocks come first, with continuation lines aligned to the item text, and
its nested lists follow on the next lines:

    - Unordered 1
      1. Ordered 1.1
      2. Ordered 1.2
      - Unordered 1.2.1
    - Unordered 2

"""

from __future__ import annotations

import logging
import re

from docublocks.ast import (
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
    plain_text,
)
from docublocks.ast.nodes import BLOCK_NODE_TYPES, LIST_NODE_TYPES, sorted_marks
from docublocks.ast.visitors import NodeVisitor
from docublocks.constants import DEFAULT_ADMONITION_TYPE
from docublocks.options.markdown import MarkdownRendererOptions
from docublocks.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)

_MIN_FENCE_LENGTH = 3
_BACKTICK_RUN_RE = re.compile(r"`{3,}")
_KNOWN_NODE_TYPES: tuple[type[Node], ...] = (Document, ListItem, Text, *BLOCK_NODE_TYPES)


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render document trees to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> from docublocks.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, children=[Text("Title")])])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []

    def render_to_string(self, document: Node) -> str:  # type: ignore[override]
        """Render a document tree to a Markdown string.

        Parameters
        ----------
        document : Node
            Root of the tree, normally a ``Document``. Any other node is
            rendered as a single block.

        Returns
        -------
        str
            Markdown text with trailing whitespace removed

        """
        self._output = []
        self._dispatch_node(document)
        result = "".join(self._output)
        self._output = []

        logger.debug("Rendered %s to %d characters", type(document).__name__, len(result))
        return self._cleanup_output(result)

    def _cleanup_output(self, text: str) -> str:
        """Normalize line endings and trim trailing whitespace."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return text.rstrip()

    # ------------------------------------------------------------------
    # Block helpers
    # ------------------------------------------------------------------

    def _dispatch_node(self, node: Node) -> None:
        if isinstance(node, _KNOWN_NODE_TYPES):
            node.accept(self)
        else:
            self.generic_visit(node)

    def _render_block(self, node: Node) -> str:
        """Render a single block into a string without touching the output."""
        saved_output = self._output
        self._output = []
        self._dispatch_node(node)
        result = "".join(self._output)
        self._output = saved_output
        return result.strip("\n")

    def _join_blocks(self, nodes: list[Node]) -> str:
        """Render blocks and join them with one blank line."""
        return "\n\n".join(self._render_block(node) for node in nodes)

    def _render_inline(self, content: list[Node]) -> str:
        text = self._render_inline_content(content)
        if self.options.collapse_blank_lines:
            text = re.sub(r"\n{3,}", "\n\n", text)
        return text

    @staticmethod
    def _indent(text: str, width: int) -> str:
        """Indent every non-empty line of ``text`` by ``width`` spaces."""
        pad = " " * width
        return "\n".join(pad + line if line.strip() else line for line in text.split("\n"))

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node; top-level blocks are separated by a blank line."""
        self._output.append(self._join_blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node as an ATX heading."""
        level = max(1, min(6, node.level))
        self._output.append(f"{'#' * level} {self._render_inline(node.children)}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline(node.children))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node.

        The opening fence carries the language and, when set, the Docusaurus
        ``title="..."`` attribute. The fence is lengthened when the code
        itself contains a run of three or more backticks.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        code = node.code
        longest_run = max((len(run) for run in _BACKTICK_RUN_RE.findall(code)), default=0)
        fence = "`" * max(_MIN_FENCE_LENGTH, longest_run + 1)

        info = node.language or ""
        if node.title:
            info += f' title="{node.title}"'

        self._output.append(f"{fence}{info}\n{code}\n{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        By default the concatenated content of the child blocks gets a single
        ``> `` prefix. With ``quote_all_lines`` every line is prefixed and the
        child blocks are separated by quoted blank lines.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        if not self.options.quote_all_lines:
            content = "".join(self._render_block(child) for child in node.children)
            self._output.append(f"> {content}")
            return

        quoted = self._join_blocks(node.children)
        self._output.append("\n".join(f"> {line}" if line else ">" for line in quoted.split("\n")))

    def visit_admonition(self, node: Admonition) -> None:
        """Render an Admonition node as a ``:::type title`` fenced block."""
        admonition_type = node.type or DEFAULT_ADMONITION_TYPE
        title = f" {node.title}" if node.title else ""
        body = self._join_blocks(node.children)
        self._output.append(f":::{admonition_type}{title}\n\n{body}\n\n:::")

    def visit_bullet_list(self, node: BulletList) -> None:
        """Render a BulletList node."""
        rendered = [self._render_list_item(item, self.options.bullet_symbol) for item in node.children]
        self._output.append("\n".join(rendered))

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Render an OrderedList node, numbering items from 1."""
        rendered = [self._render_list_item(item, f"{index}.") for index, item in enumerate(node.children, start=1)]
        self._output.append("\n".join(rendered))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem outside a list with a bullet marker."""
        self._output.append(self._render_list_item(node, self.options.bullet_symbol))

    def _render_list_item(self, item: Node, marker: str) -> str:
        """Render one list item with its marker.

        Parameters
        ----------
        item : Node
            List item (other nodes are rendered as the item's only block)
        marker : str
            Item marker without the trailing space

        Returns
        -------
        str
            Rendered item including nested lists

        """
        children = item.children if isinstance(item, ListItem) else [item]
        blocks = [child for child in children if not isinstance(child, LIST_NODE_TYPES)]
        nested = [child for child in children if isinstance(child, LIST_NODE_TYPES)]

        prefix = f"{marker} "
        content = self._join_blocks(blocks).strip()
        first, _, rest = content.partition("\n")
        lines = [f"{prefix}{first}".rstrip()]
        if rest:
            lines.append(self._indent(rest, len(prefix)))

        for child in nested:
            lines.append(self._indent(self._render_block(child), self.options.list_indent_width))

        return "\n".join(lines)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Render a HorizontalRule node."""
        self._output.append("---")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text run, wrapping its marks innermost first.

        Marks nest in the fixed order bold, italic, code, link, highlight,
        strike, so ``{bold, italic}`` renders as ``_**text**_``.

        Parameters
        ----------
        node : Text
            Text run to render

        """
        text = node.text
        for mark in sorted_marks(node.marks):
            if mark.type == "bold":
                text = f"**{text}**"
            elif mark.type == "italic":
                text = f"_{text}_"
            elif mark.type == "code":
                text = f"`{text}`"
            elif mark.type == "link":
                text = f"[{text}]({mark.href or ''})"
            elif mark.type == "highlight":
                text = f"=={text}=="
            elif mark.type == "strike":
                text = f"~~{text}~~"
        self._output.append(text)

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        title = f' "{node.title}"' if node.title else ""
        self._output.append(f"![{node.alt}]({node.src}{title})")

    def generic_visit(self, node: Node) -> None:
        """Render a node outside the closed set as its plain text."""
        logger.debug("No rendering for %s, using its text", type(node).__name__)
        self._output.append(plain_text(node))


def serialize_tree(root: Node, options: MarkdownRendererOptions | None = None) -> str:
    """Render a document tree to Markdown.

    This is a convenience function that creates a renderer and renders the
    tree in one step.

    Parameters
    ----------
    root : Node
        Root of the tree, normally a ``Document``
    options : MarkdownRendererOptions or None, default = None
        Rendering configuration

    Returns
    -------
    str
        Markdown text

    Examples
    --------
    >>> from docublocks.parsers.markdown import parse_markdown
    >>> serialize_tree(parse_markdown("- a\\n- b"))
    '- a\\n- b'

    """
    return MarkdownRenderer(options).render_to_string(root)


__all__ = ["MarkdownRenderer", "serialize_tree"]
