"""Logging for ngcontext.

Every handler writes to stderr or a file: when the MCP server runs over stdio,
stdout belongs to the protocol and a stray log line corrupts the stream.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "ngcontext"
_CONSOLE_FORMAT = "[ngcontext] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Chatty dependencies are held at WARNING unless --verbose is given.
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "mcp", "fastmcp")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``ngcontext`` or the ``ngcontext.<name>`` child logger."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install the console handler (stderr unless ``stream`` is given) and an optional file sink.

    Safe to call repeatedly; handlers from an earlier call are replaced.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(stream or sys.stderr), _CONSOLE_FORMAT)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)

    return logger


__all__ = ["configure_logging", "get_logger"]
