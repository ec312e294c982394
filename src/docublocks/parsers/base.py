#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that parsers inherit from. The
BaseParser provides a consistent interface for converting source text into
the docublocks document tree.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from docublocks.ast import Document
from docublocks.exceptions import InvalidOptionsError
from docublocks.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    ``parse`` must never raise for string input: content the parser cannot
    classify is kept as plain paragraph text.

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: str) -> Document:
        """Parse source text into a document tree.

        Parameters
        ----------
        input_data : str
            Source text

        Returns
        -------
        Document
            Root of the parsed tree

        """
        raise NotImplementedError
