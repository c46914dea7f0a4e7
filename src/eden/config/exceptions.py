"""Custom exceptions for configuration handling.

Every error in this module is fatal to the whole build and is raised before
the Render stage begins.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from eden.exceptions import EdenError


class ConfigError(EdenError):
    """Base exception for all configuration-related errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the site configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Site configuration file not found: {path}")


class ConfigValidationError(ConfigError):
    """Raised when the site configuration fails validation."""

    def __init__(self, path: Path | None, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.path = path
        self.errors = list(errors or [])
        location = f" in {path}" if path else ""
        details = "; ".join(_format_error(err) for err in self.errors)
        super().__init__(
            f"Site configuration{location} failed validation with {len(self.errors)} error(s)"
            + (f": {details}" if details else ".")
        )


class UnknownStrategyError(ConfigError):
    """Raised when a url-strategy or page-url-strategy cannot be resolved."""

    def __init__(self, option: str, strategy: object, reason: str | None = None) -> None:
        self.option = option
        self.strategy = strategy
        self.reason = reason
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Unknown {option} {strategy!r}{suffix}")


class WrapperTemplateNotFoundError(ConfigError):
    """Raised when the configured wrapper template is missing from the template store."""

    def __init__(self, wrapper: str, available: Sequence[str]) -> None:
        self.wrapper = wrapper
        self.available = list(available)
        super().__init__(
            f"Wrapper template '{wrapper}' not found. Available: {', '.join(self.available) or '(none)'}"
        )


class IndexContentNotFoundError(ConfigError):
    """Raised when the configured index page has no content in the default language."""

    def __init__(self, index: str, lang: str) -> None:
        self.index = index
        self.lang = lang
        super().__init__(f"Index content '{index}' not found for default language '{lang}'")


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
