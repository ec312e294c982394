#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for interactive editor sessions."""
# src/docublocks/options/session.py

from __future__ import annotations

from dataclasses import dataclass, field

from docublocks.constants import DEFAULT_SUPPORTED_LANGUAGES
from docublocks.options.base import CloneFrozenMixin
from docublocks.options.markdown import MarkdownParserOptions, MarkdownRendererOptions


@dataclass(frozen=True)
class EditorSessionOptions(CloneFrozenMixin):
    """Options for an ``EditorSession``.

    The set of code block languages is an explicit capability of the session
    rather than a process-wide registry: two sessions may offer different
    languages.

    Parameters
    ----------
    supported_languages : tuple of str
        Language identifiers offered for code blocks. Languages outside the
        set are still accepted but logged as a warning.
    parser_options : MarkdownParserOptions
        Options used when loading Markdown into the session
    renderer_options : MarkdownRendererOptions
        Options used when serializing the tree after each edit

    """

    supported_languages: tuple[str, ...] = field(
        default=DEFAULT_SUPPORTED_LANGUAGES,
        metadata={"help": "Code block languages offered by the editor", "importance": "core"},
    )
    parser_options: MarkdownParserOptions = field(
        default_factory=MarkdownParserOptions,
        metadata={"help": "Markdown parsing options", "importance": "advanced"},
    )
    renderer_options: MarkdownRendererOptions = field(
        default_factory=MarkdownRendererOptions,
        metadata={"help": "Markdown rendering options", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize the language set to a tuple of lowercase identifiers.

        Raises
        ------
        ValueError
            If a language identifier is not a non-empty string.

        """
        languages = tuple(self.supported_languages)
        for language in languages:
            if not isinstance(language, str) or not language.strip():
                raise ValueError(f"Language identifiers must be non-empty strings, got {language!r}")
        object.__setattr__(self, "supported_languages", tuple(language.strip().lower() for language in languages))
