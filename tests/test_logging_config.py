"""Tests for logging setup."""

from __future__ import annotations

import io
import logging

from doctree.utils.logging_config import ContextFormatter, configure_logging, get_logger


def test_context_formatter_appends_extra_fields() -> None:
    record = logging.LogRecord("doctree.test", logging.INFO, __file__, 1, "Indexed %d", (3,), None)
    record.version = "v1.4.x"

    line = ContextFormatter("%(levelname)s %(message)s").format(record)

    assert line == "INFO Indexed 3 [version='v1.4.x']"


def test_configure_logging_replaces_handlers() -> None:
    logger = logging.getLogger("doctree")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    stream = io.StringIO()
    try:
        configure_logging("DEBUG", stream=io.StringIO())
        configure_logging("DEBUG", stream=stream)
        get_logger("doctree.sample").debug("hello", extra={"slug": "a/b"})

        assert len(logger.handlers) == 1
        assert stream.getvalue().rstrip().endswith("doctree.sample: hello [slug='a/b']")
    finally:
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)
