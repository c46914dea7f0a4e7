"""Custom exceptions for the output writer."""

from __future__ import annotations

from pathlib import Path

from eden.exceptions import EdenError


class OutputWriterError(EdenError):
    """Raised when a page cannot be written."""

    def __init__(self, path: Path | str, reason: str | Exception) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")


class UnsafeOutputPathError(OutputWriterError):
    """Raised when a url strategy maps a page outside the output directory."""

    def __init__(self, path: Path | str, output_dir: Path) -> None:
        self.output_dir = output_dir
        super().__init__(path, f"resolves outside the output directory {output_dir}")
