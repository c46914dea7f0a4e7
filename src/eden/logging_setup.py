"""Logging for Eden builds.

All modules log through ``logging.getLogger(__name__)``. The CLI calls
:func:`configure_logging` once per command; it owns a single ``RichHandler``
on the root logger and reuses it on later calls, so repeated builds in one
process (tests, notebooks) never stack handlers.
"""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "console"]

LOG_LEVEL_ENV: Final[str] = "EDEN_LOG_LEVEL"
_DEFAULT_LEVEL: Final[int] = logging.INFO
_MANAGED_ATTR: Final[str] = "_eden_managed"

# Parser libraries that log per token or per file at DEBUG
_QUIET_LOGGERS: Final[tuple[str, ...]] = ("markdown_it", "frontmatter")

console = Console()


def _resolve_level(level_name: str | None) -> int:
    name = (level_name or os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    level = logging.getLevelName(name) if name else _DEFAULT_LEVEL
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def _managed_handler(root: logging.Logger) -> RichHandler | None:
    return next(
        (h for h in root.handlers if isinstance(h, RichHandler) and getattr(h, _MANAGED_ATTR, False)),
        None,
    )


def _new_handler() -> RichHandler:
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        markup=True,
        log_time_format="[%H:%M:%S]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _MANAGED_ATTR, True)
    return handler


def configure_logging(level_name: str | None = None) -> int:
    """Install (or reuse) the Rich handler and set the root level.

    Args:
        level_name: ``"DEBUG"``, ``"info"`` and so on. Falls back to
            ``EDEN_LOG_LEVEL`` and then INFO; unknown names mean INFO.

    Returns:
        The effective root level.

    """
    root = logging.getLogger()
    if _managed_handler(root) is None:
        root.handlers.clear()
        root.addHandler(_new_handler())

    level = _resolve_level(level_name)
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    logging.captureWarnings(True)
    return level
