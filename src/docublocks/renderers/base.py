#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/renderers/base.py
"""Base classes for document tree renderers.

This module defines the abstract base class that renderers inherit from,
plus the inline-capture mixin shared by text renderers.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from docublocks.ast import Document, Node
from docublocks.exceptions import InvalidOptionsError
from docublocks.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for document tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class PlainRenderer(BaseRenderer):
        ...     def render_to_string(self, doc):
        ...         return plain_text(doc)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string.

        Parameters
        ----------
        doc : Document
            Root of the tree to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the tree and write it to a path or stream.

        Parameters
        ----------
        doc : Document
            Root of the tree to render
        output : str, Path, IO[bytes] or IO[str]
            Destination file path or open stream

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or an IO stream.

        Binary streams receive UTF-8 encoded bytes.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Raises
        ------
        TypeError
            If output type is not supported

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        mode = getattr(output, "mode", "")
        if "b" in mode or _is_binary_stream(output):
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(text)  # type: ignore[arg-type]


def _is_binary_stream(stream: object) -> bool:
    from io import BufferedIOBase, BytesIO, RawIOBase

    return isinstance(stream, (BytesIO, BufferedIOBase, RawIOBase))


class InlineContentMixin:
    """Mixin providing inline content capture for text-based renderers.

    The implementing class must have:
    - A ``_output`` attribute (list[str]) for accumulating output
    - Visitor methods that append to ``_output``

    """

    _output: list[str]

    def _dispatch_node(self, node: Node) -> None:
        """Visit ``node``; renderers override this to intercept unknown classes."""
        node.accept(self)

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        self._output = []

        for node in content:
            self._dispatch_node(node)

        result = "".join(self._output)
        self._output = saved_output
        return result
