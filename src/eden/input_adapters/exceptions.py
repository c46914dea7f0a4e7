"""Exceptions for the content and template loaders.

Both are fatal only to the file that raised them; the Load stage turns them
into ``invalid-content`` / ``invalid-template`` warnings and carries on.
"""

from __future__ import annotations

from pathlib import Path

from eden.exceptions import EdenError


class InputAdapterError(EdenError):
    """Base exception for loader errors."""


class ContentParseError(InputAdapterError):
    """Raised when a content file cannot be parsed."""

    def __init__(self, path: Path, reason: str | Exception) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse content file '{path}': {reason}")


class TemplateParseError(InputAdapterError):
    """Raised when a template file cannot be parsed."""

    def __init__(self, path: Path, reason: str | Exception) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse template file '{path}': {reason}")
