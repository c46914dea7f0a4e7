"""Exceptions for the build orchestrator."""

from eden.exceptions import EdenError


class OrchestrationError(EdenError):
    """Base exception for orchestration errors."""


class ReportWriteError(OrchestrationError):
    """Raised when the dev-mode HTML report cannot be written."""

    def __init__(self, path: str, reason: str | Exception) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write build report '{path}': {reason}")
