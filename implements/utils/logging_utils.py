"""Root logger setup for the implements-check command.

The library modules only create named loggers; handlers are installed here,
and only by the CLI.
"""

import logging
import sys
from typing import Optional, TextIO

DEFAULT_LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below a level."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def resolve_level(name: Optional[str], default: int) -> int:
    """Translate a level name such as 'debug' or 'INFO' into a logging level."""
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def configure_cli_logging(
    log_level: Optional[str] = "WARNING",
    print_level: Optional[str] = "ERROR",
    *,
    fmt: str = DEFAULT_LOG_FORMAT,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> logging.Logger:
    """Route diagnostics logging of a check run to the console.

    log_level is the threshold of the root logger. Records at or above
    print_level are written to stderr, everything below it to stdout, so
    traversal debug output never mixes with error output.

    Args:
        log_level: Level name for the root logger (default WARNING)
        print_level: Level name from which records go to stderr (default ERROR)
        fmt: Format string for both handlers
        stdout: Stream for low-level records (default sys.stdout)
        stderr: Stream for high-level records (default sys.stderr)

    Returns:
        The 'implements' package logger
    """
    level = resolve_level(log_level, logging.WARNING)
    split_level = max(resolve_level(print_level, logging.ERROR), logging.DEBUG)
    formatter = logging.Formatter(fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    low_handler = logging.StreamHandler(stream=stdout or sys.stdout)
    low_handler.setLevel(logging.DEBUG)
    low_handler.addFilter(_BelowLevelFilter(split_level))
    low_handler.setFormatter(formatter)

    high_handler = logging.StreamHandler(stream=stderr or sys.stderr)
    high_handler.setLevel(split_level)
    high_handler.setFormatter(formatter)

    root.addHandler(low_handler)
    root.addHandler(high_handler)

    return logging.getLogger("implements")
