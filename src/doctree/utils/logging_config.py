"""Logging setup shared by the library and the command line."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from doctree.config import DOCTREE_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONTEXT_SKIP = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra={...}`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value for key, value in record.__dict__.items() if key not in _CONTEXT_SKIP
        }
        if not context:
            return base
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{base} [{pairs}]"


def configure_logging(level: str | int | None = None, *, stream: TextIO | None = None) -> None:
    """Install a single stderr handler on the ``doctree`` logger."""
    logger = logging.getLogger("doctree")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level or DOCTREE_LOG_LEVEL)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``doctree`` namespace."""
    return logging.getLogger(name)
