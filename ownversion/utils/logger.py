"""
Logging for ownversion.

The library logs under the ``ownversion`` namespace behind a
``NullHandler``: until :func:`configure_logging` runs, records only reach
the handlers the host application configured. The CLI calls
:func:`configure_logging` with its ``-v`` count:

=========  =========  ==========================================
verbosity  level      format
=========  =========  ==========================================
0          WARNING    ``LEVEL: message``
1          INFO       ``LEVEL: message``
2+         DEBUG      timestamp, logger name, level and message
=========  =========  ==========================================
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from ownversion.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "ownversion"

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

_HANDLER_NAME = "ownversion-cli"
_lock = threading.Lock()

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class LevelColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, *, color: bool, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno) if self.color else None
        if color is None:
            return super().format(record)

        # Other handlers may format the same record
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level.

    Examples:
        >>> level_for_verbosity(0) == logging.WARNING
        True
        >>> level_for_verbosity(5) == logging.DEBUG
        True
    """
    index = min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)
    return VERBOSITY_LEVELS[index]


def _stream_supports_color(stream: IO[str]) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, OSError, ValueError):
        return False


def configure_logging(
    verbosity: int = 0,
    *,
    color: bool = True,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Send ``ownversion`` log records to *stream* (stderr by default).

    Calling it again replaces the handler installed by the previous call.

    Returns:
        The ``ownversion`` root logger.
    """
    target = stream if stream is not None else sys.stderr
    level = level_for_verbosity(verbosity)
    fmt = LOG_VERBOSE_FORMAT if verbosity >= 2 else LOG_DEFAULT_FORMAT

    handler = logging.StreamHandler(target)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        LevelColorFormatter(
            fmt,
            color=color and _stream_supports_color(target),
            datefmt=LOG_DATE_FORMAT,
        )
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    with _lock:
        _remove_cli_handler(root)
        root.addHandler(handler)
        root.setLevel(level)
        root.propagate = False

    return root


def reset_logging() -> None:
    """Undo :func:`configure_logging`."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    with _lock:
        _remove_cli_handler(root)
        root.setLevel(logging.NOTSET)
        root.propagate = True


def _remove_cli_handler(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the ``ownversion`` namespace.

    ``get_logger("http")`` and ``get_logger("ownversion.http")`` return the
    same logger; ``get_logger()`` returns the namespace root.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
