"""
Logging configuration for the mediatracks CLI.

Library modules only create `logging.getLogger(__name__)` loggers; handlers
are attached to the "mediatracks" logger here, by the CLI callback.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from mediatracks.console import err_console

LOGGER_NAME = "mediatracks"

FILE_FORMAT = "%(asctime)s | %(levelname)-5s | [%(name)s] %(message)s"

_console_handler: logging.Handler | None = None
_console_level: int = logging.INFO


def _parse_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _build_console_handler(rich_console: bool) -> logging.Handler:
    if not rich_console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        return handler

    # Paths and XML snippets in messages are not Rich markup
    return RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _build_file_handler(log_file: Path | str) -> logging.Handler:
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Path | str | None = None,
    rich_console: bool = True,
    quiet_console: bool = False,
) -> logging.Logger:
    """
    Configure the "mediatracks" logger.

    Calling it again replaces (and closes) the handlers from the previous call.

    Args:
        log_level: Console level name (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        log_file: Also write every record, DEBUG included, to this file
        rich_console: RichHandler on stderr; plain "LEVEL: message" lines if False
        quiet_console: Start with the console limited to WARNING and above

    Returns:
        The configured logger.
    """
    global _console_handler, _console_level

    _console_level = _parse_level(log_level)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _console_handler = _build_console_handler(rich_console)
    logger.addHandler(_console_handler)
    set_console_quiet(quiet_console)

    if log_file:
        logger.addHandler(_build_file_handler(log_file))
        logger.setLevel(min(_console_level, logging.DEBUG))
    else:
        logger.setLevel(_console_level)

    return logger


def set_console_quiet(quiet: bool = True) -> None:
    """
    Limit console output to WARNING and above, or restore the configured level.

    The log file, if any, is not affected.
    """
    if _console_handler is None:
        return
    _console_handler.setLevel(max(_console_level, logging.WARNING) if quiet else _console_level)
