"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer

from eden.config.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    IndexContentNotFoundError,
    UnknownStrategyError,
    WrapperTemplateNotFoundError,
)
from eden.exceptions import EdenError, TemplateShapeError
from eden.logging_setup import console
from eden.orchestration.exceptions import ReportWriteError
from eden.output_adapters.exceptions import OutputWriterError


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback. If False, print a short error.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]📄 Site Not Found:[/bold red] {e}")
        console.print("Pass the path to [bold]site.yaml[/bold] or run from inside the site directory.")
        raise typer.Exit(1) from e
    except ConfigValidationError as e:
        if debug:
            raise
        console.print(f"[bold red]⚙️ Invalid Configuration:[/bold red] {e}")
        raise typer.Exit(1) from e
    except UnknownStrategyError as e:
        if debug:
            raise
        console.print(f"[bold red]🧭 Unknown Strategy:[/bold red] {e}")
        console.print("Use [cyan]flat[/cyan], [cyan]nested[/cyan] or a [cyan]module:function[/cyan] reference.")
        raise typer.Exit(1) from e
    except (WrapperTemplateNotFoundError, IndexContentNotFoundError) as e:
        if debug:
            raise
        console.print(f"[bold red]🏗️ Site Structure Error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]⚙️ Configuration Error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except TemplateShapeError as e:
        if debug:
            raise
        console.print(f"[bold red]🧩 Malformed Template:[/bold red] {e}")
        raise typer.Exit(1) from e
    except (OutputWriterError, ReportWriteError) as e:
        if debug:
            raise
        console.print(f"[bold red]💾 Write Error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except EdenError as e:
        if debug:
            raise
        console.print(f"[bold red]🚨 Build Error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]💥 An unexpected error occurred:[/bold red] {e}")
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
