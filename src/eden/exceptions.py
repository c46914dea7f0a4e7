"""Centralized exceptions for the Eden application."""


class EdenError(Exception):
    """Base exception for all Eden errors."""


class TemplateShapeError(EdenError):
    """Raised when a template tree cannot be classified as literal or directive.

    This is a programmer error in the template itself, not a missing-data
    problem, so it is propagated instead of being turned into a warning.
    """

    def __init__(self, node: object, reason: str) -> None:
        self.node = node
        self.reason = reason
        super().__init__(f"Malformed template node {node!r}: {reason}")
