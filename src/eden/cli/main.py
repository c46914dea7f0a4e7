"""Main Typer application for Eden."""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any

import typer

from eden.cli.errorhandler import handle_cli_errors
from eden.config import BuildSettings, SiteConfig, find_site_config, load_site_config
from eden.config.exceptions import ConfigNotFoundError
from eden.config.settings import DEFAULT_SITE_FILE
from eden.logging_setup import configure_logging, console
from eden.orchestration import BuildOrchestrator, print_report
from eden.output_adapters import clean_output

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="eden",
    help="Build a static multi-language site from content, templates and site.yaml",
    add_completion=False,
)


class BuildMode(StrEnum):
    PROD = "prod"
    DEV = "dev"


SiteFileArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to site.yaml (searched upward from the current directory if omitted)"),
]
OutputDirOption = Annotated[
    Path | None,
    typer.Option("--output-dir", "-o", help="Directory for the generated site (overrides output-dir)"),
]


def _load_site(site_file: Path | None) -> SiteConfig:
    if site_file is None:
        site_file = find_site_config(Path.cwd())
        if site_file is None:
            raise ConfigNotFoundError(Path.cwd() / DEFAULT_SITE_FILE)
    return load_site_config(site_file)


def _settings(output_dir: Path | None, mode: BuildMode | None = None) -> BuildSettings:
    # Only explicit flags override EDEN_* environment values
    overrides: dict[str, Any] = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir.resolve()
    if mode is not None:
        overrides["mode"] = mode.value
    return BuildSettings(**overrides)


@app.callback()
def _main() -> None:
    """Eden static site builder."""


@app.command()
def build(
    site_file: SiteFileArgument = None,
    output_dir: OutputDirOption = None,
    mode: Annotated[
        BuildMode | None,
        typer.Option("--mode", "-m", help="dev builds add inline markers and an HTML warning report"),
    ] = None,
    *,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks and debug logs")] = False,
) -> None:
    """Build the site into the output directory."""
    configure_logging("DEBUG" if debug else None)
    with handle_cli_errors(debug=debug):
        site_config = _load_site(site_file)
        settings = _settings(output_dir, mode)
        orchestrator = BuildOrchestrator(site_config, settings)
        result = orchestrator.build()
        print_report(result, console)
        console.print(f"📁 Output: [cyan]{orchestrator.output_dir}[/cyan]")


@app.command()
def clean(
    site_file: SiteFileArgument = None,
    output_dir: OutputDirOption = None,
    *,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks")] = False,
) -> None:
    """Remove the generated site."""
    configure_logging("DEBUG" if debug else None)
    with handle_cli_errors(debug=debug):
        site_config = _load_site(site_file)
        settings = _settings(output_dir)
        target = settings.output_dir or site_config.abs_output_dir
        if clean_output(target):
            console.print(f"[green]✓ Removed {target}[/green]")
        else:
            console.print(f"[dim]Nothing to remove at {target}[/dim]")
