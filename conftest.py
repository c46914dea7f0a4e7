"""Root conftest.py for pytest configuration and hooks."""

from __future__ import annotations

import logging

import pytest

_TOUCHED_LOGGERS = ("", "markdown_it", "frontmatter")


@pytest.fixture(autouse=True)
def _reset_eden_logging():
    """Keep log levels set by one test from leaking into the next."""
    levels = {name: logging.getLogger(name).level for name in _TOUCHED_LOGGERS}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
