"""Tests for the managed Rich logging handler."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from eden.logging_setup import configure_logging


def _managed_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler) and getattr(h, "_eden_managed", False)]


def test_installs_a_single_handler(monkeypatch):
    monkeypatch.delenv("EDEN_LOG_LEVEL", raising=False)

    configure_logging()
    configure_logging()

    assert len(_managed_handlers()) == 1
    assert logging.getLogger().level == logging.INFO


def test_level_from_environment_and_argument(monkeypatch):
    monkeypatch.setenv("EDEN_LOG_LEVEL", "warning")

    configure_logging()
    assert logging.getLogger().level == logging.WARNING

    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info(monkeypatch):
    monkeypatch.delenv("EDEN_LOG_LEVEL", raising=False)

    assert configure_logging("chatty") == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_parser_loggers_stay_quiet_unless_debugging(monkeypatch):
    monkeypatch.delenv("EDEN_LOG_LEVEL", raising=False)

    configure_logging("info")
    assert logging.getLogger("markdown_it").level == logging.WARNING

    configure_logging("debug")
    assert logging.getLogger("markdown_it").level == logging.DEBUG


def test_reuses_handler_installed_earlier():
    configure_logging()
    first = _managed_handlers()[0]

    configure_logging("warning")

    assert _managed_handlers() == [first]
