"""Logging setup for script-parser.

One format for every module: ISO 8601 timestamp, level, logger name and
message, separated by pipes.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler added by setup_logging so repeated calls reuse it.
_HANDLER_ATTR = "_script_parser_log_handler"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger with the project formatter.

    Calling this again reuses the handler it added earlier, updating its
    level (and its stream, when *stream* is given).  Handlers added by
    other code are left alone.

    Args:
        level: A standard logging level name (e.g. ``"DEBUG"``).
        stream: Where to write log records.  Defaults to *stderr*.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            handler.setLevel(numeric_level)
            if stream is not None and isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)
            return

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called *name*."""
    return logging.getLogger(name)
