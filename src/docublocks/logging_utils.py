#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Root logger wiring for the ``docublocks`` entry point.

Everything under ``docublocks`` logs through ``logging.getLogger(__name__)``
and never touches handlers. The CLI calls ``configure_logging`` once after
parsing its arguments; tests and embedding applications configure logging
themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    # Unrecognized names log at INFO
    level = getattr(logging, str(log_level).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _console_handler(use_rich: bool, trace_mode: bool, formatter: logging.Formatter) -> logging.Handler:
    if not use_rich:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        return handler

    from rich.console import Console
    from rich.logging import RichHandler

    # RichHandler draws level and time columns itself
    rich_handler = RichHandler(console=Console(stderr=True), show_time=trace_mode, show_path=trace_mode)
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    return rich_handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    use_rich: bool = False,
) -> logging.Logger:
    """Install console and optional file handlers on the root logger.

    Handlers installed by an earlier call are removed first, so calling this
    again reconfigures rather than duplicates output.

    Parameters
    ----------
    log_level : int | str
        Level number or name such as ``"DEBUG"``; unknown names mean INFO
    log_file : str, optional
        File that receives the same records as the console, appended to
    trace_mode : bool, default False
        Prefix records with time, level and logger name
    use_rich : bool, default False
        Write console records through ``rich.logging.RichHandler``

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt=_TRACE_DATE_FORMAT if trace_mode else None,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    console = _console_handler(use_rich, trace_mode, formatter)
    console.setLevel(level)
    root.addHandler(console)

    if not log_file:
        return root

    try:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        root.warning("Cannot open log file %s, logging to the console only: %s", log_file, exc)
        return root

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    root.debug("Appending log records to %s", log_file)
    return root
