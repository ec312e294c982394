#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docublocks/cli.py
"""Command-line interface for docublocks.

Subcommands
-----------
fmt
    Normalize a Markdown document through parse and serialize. The
    frontmatter block is kept verbatim.
tree
    Print the document tree of a Markdown file as interchange JSON.
ls
    List the classified files of a Docusaurus project.

Examples
--------
    $ docublocks fmt docs/intro.md --check
    $ docublocks fmt docs/intro.md --in-place
    $ docublocks tree docs/intro.md --indent 2
    $ docublocks ls my-site --rich

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docublocks.ast import tree_to_json
from docublocks.exceptions import FileError
from docublocks.frontmatter import split_frontmatter
from docublocks.logging_utils import configure_logging
from docublocks.parsers.markdown import parse_markdown
from docublocks.renderers.markdown import serialize_tree
from docublocks.workspace import FileSystemStore, ProjectFile

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_CHECK_FAILED = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3


def _get_version() -> str:
    """Get the installed version of docublocks."""
    from docublocks import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="docublocks",
        description="Parse, normalize and inspect Docusaurus Markdown documents.",
    )
    parser.add_argument("--version", action="version", version=f"docublocks {_get_version()}")

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with very verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    fmt_parser = subparsers.add_parser("fmt", help="Normalize a Markdown document")
    fmt_parser.add_argument("file", type=Path, help="Markdown file to normalize")
    mode = fmt_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the file is not already normalized",
    )
    mode.add_argument("--in-place", action="store_true", help="Rewrite the file instead of printing")
    fmt_parser.set_defaults(handler=_cmd_fmt)

    tree_parser = subparsers.add_parser("tree", help="Print the document tree as JSON")
    tree_parser.add_argument("file", type=Path, help="Markdown file to parse")
    tree_parser.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indentation (default: 2)")
    tree_parser.set_defaults(handler=_cmd_tree)

    ls_parser = subparsers.add_parser("ls", help="List the files of a Docusaurus project")
    ls_parser.add_argument("root", type=Path, help="Project directory")
    ls_parser.add_argument("--rich", action="store_true", help="Use rich terminal output for the listing and log messages")
    ls_parser.set_defaults(handler=_cmd_ls)

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=getattr(parsed_args, "rich", False),
    )


def _read_text(path: Path) -> str:
    return FileSystemStore(path.parent).read_text(path.name)


def format_document(text: str) -> str:
    """Normalize a complete document, keeping its frontmatter block verbatim.

    Parameters
    ----------
    text : str
        File content, optionally starting with YAML frontmatter

    Returns
    -------
    str
        Normalized content ending with a newline (empty for an empty body)

    """
    _metadata, body = split_frontmatter(text)
    header = text[: len(text) - len(body)]
    stripped = body.lstrip("\r\n")
    leading = body[: len(body) - len(stripped)] if header else ""

    formatted = serialize_tree(parse_markdown(stripped))
    if formatted.strip():
        formatted += "\n"
    else:
        formatted = ""
    return f"{header}{leading}{formatted}"


def _cmd_fmt(parsed_args: argparse.Namespace) -> int:
    path: Path = parsed_args.file
    original = _read_text(path)
    formatted = format_document(original)

    if parsed_args.check:
        if formatted != original:
            print(f"would reformat {path}", file=sys.stderr)
            return EXIT_CHECK_FAILED
        return EXIT_SUCCESS

    if parsed_args.in_place:
        if formatted != original:
            path.write_text(formatted, encoding="utf-8")
            logger.info(f"Reformatted {path}")
        return EXIT_SUCCESS

    sys.stdout.write(formatted)
    return EXIT_SUCCESS


def _cmd_tree(parsed_args: argparse.Namespace) -> int:
    if parsed_args.indent < 0:
        print("Error: --indent must be non-negative", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    _metadata, body = split_frontmatter(_read_text(parsed_args.file))
    print(tree_to_json(parse_markdown(body), indent=parsed_args.indent))
    return EXIT_SUCCESS


def _print_listing(entries: list[ProjectFile], root: Path) -> None:
    for entry in entries:
        print(f"{entry.classification:<18} {entry.path.relative_to(root)}")


def _print_rich_listing(entries: list[ProjectFile], root: Path) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Docusaurus project: {root}")
    table.add_column("Kind", style="cyan")
    table.add_column("Path", style="green")
    for entry in entries:
        table.add_row(entry.classification, str(entry.path.relative_to(root)))

    console = Console()
    console.print(table)


def _cmd_ls(parsed_args: argparse.Namespace) -> int:
    root: Path = parsed_args.root
    if not root.is_dir():
        print(f"Error: Not a directory: {root}", file=sys.stderr)
        return EXIT_FILE_ERROR

    entries = FileSystemStore(root).list_files()
    if parsed_args.rich:
        _print_rich_listing(entries, root)
    else:
        _print_listing(entries, root)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the exit code."""
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits for --help, --version and usage errors
        return e.code if isinstance(e.code, int) else EXIT_VALIDATION_ERROR

    if parsed_args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args)

    try:
        return parsed_args.handler(parsed_args)
    except FileError as e:
        logger.debug("File error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR


if __name__ == "__main__":
    sys.exit(main())
