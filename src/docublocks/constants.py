#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the docublocks library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Document Tree Defaults - placeholder content and enumerated attribute values
3. Markdown Syntax - regular expressions for Docusaurus extensions
4. Parser / Renderer Defaults - option default values
5. Editor Defaults - language capability set and session settings
6. Project Layout - Docusaurus directory and file naming
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

MarkType = Literal["bold", "italic", "code", "strike", "link", "highlight"]
AdmonitionType = Literal["note", "tip", "info", "caution", "warning", "danger"]
BulletSymbol = Literal["-", "*", "+"]
FileClassification = Literal["doc", "blog_post", "config_file", "category_metadata"]

# =============================================================================
# Document Tree Defaults
# =============================================================================

# Text used to fill containers that would otherwise be empty
PLACEHOLDER_TEXT = " "

ADMONITION_TYPES: tuple[str, ...] = ("note", "tip", "info", "caution", "warning", "danger")
DEFAULT_ADMONITION_TYPE = "note"

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

# Wrapping order for inline marks, innermost first
MARK_ORDER: tuple[str, ...] = ("bold", "italic", "code", "link", "highlight", "strike")

# =============================================================================
# Markdown Syntax
# =============================================================================

ADMONITION_OPEN_RE = re.compile(r"^:::(\w+)(?:\s+(.+?))?\s*$")
ADMONITION_CLOSE_RE = re.compile(r"^:::\s*$")

# Docusaurus code fence title: ```ts title="example.ts"
CODE_TITLE_RE = re.compile(r'title="([^"]+)"')
CODE_TITLE_STRIP_RE = re.compile(r'\s*title="[^"]+"')

# Opening line of a fenced code block (backticks or tildes)
CODE_FENCE_RE = re.compile(r"^[ \t]*(?P<marker>`{3,}|~{3,})(?P<info>.*)$")

# List item start: indentation, bullet or ordinal marker, gap before content
LIST_MARKER_RE = re.compile(r"^(?P<indent> *)(?P<marker>[-*+]|\d{1,9}[.)])(?P<gap> +|$)")
THEMATIC_BREAK_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
BLOCKQUOTE_PREFIX_RE = re.compile(r"^(?: {0,3}> ?)*")

# =============================================================================
# Parser / Renderer Defaults
# =============================================================================

DEFAULT_PARSE_ADMONITIONS = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_HIGHLIGHT = True
DEFAULT_EXTRACT_CODE_TITLES = True
DEFAULT_MAX_NESTING_DEPTH = 20

DEFAULT_LIST_INDENT_WIDTH = 2
DEFAULT_BULLET_SYMBOL: BulletSymbol = "-"
DEFAULT_QUOTE_ALL_LINES = False
DEFAULT_COLLAPSE_BLANK_LINES = True

# =============================================================================
# Editor Defaults
# =============================================================================

# Languages offered by the code block language picker
DEFAULT_SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "bash",
    "c",
    "cpp",
    "csharp",
    "css",
    "go",
    "html",
    "java",
    "javascript",
    "json",
    "jsx",
    "markdown",
    "python",
    "rust",
    "shell",
    "sql",
    "tsx",
    "typescript",
    "yaml",
)

# =============================================================================
# Project Layout
# =============================================================================

DOCS_DIR = "docs"
BLOG_DIR = "blog"
MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md", ".mdx")
CATEGORY_METADATA_FILENAME = "_category_.json"
CONFIG_FILENAMES: tuple[str, ...] = (
    "docusaurus.config.ts",
    "docusaurus.config.js",
    "sidebars.ts",
    "sidebars.js",
)
DEFAULT_CATEGORY_LINK_TYPE = "generated-index"
