"""A module for Eden's command-line interface."""

from eden.cli.main import app

__all__ = ["app", "main"]


def main() -> None:
    """Entry point for the CLI."""
    app()
