"""Warning report.

Printed to the terminal with rich after every build; dev builds also get an
HTML version written to ``_report.html`` in the output directory.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.console import Console
from rich.table import Table

from eden.orchestration.exceptions import ReportWriteError
from eden.rendering.warnings import EdenWarning

if TYPE_CHECKING:
    from eden.orchestration.build import BuildResult

logger = logging.getLogger(__name__)

REPORT_FILENAME = "_report.html"
REPORT_TEMPLATE = "report.html.jinja2"


def count_by_type(warnings: Iterable[EdenWarning]) -> dict[str, int]:
    counts = Counter(warning.type for warning in warnings)
    return dict(sorted(counts.items()))


def group_by_type(warnings: Iterable[EdenWarning]) -> dict[str, list[EdenWarning]]:
    grouped: dict[str, list[EdenWarning]] = {}
    for warning in warnings:
        grouped.setdefault(warning.type, []).append(warning)
    return dict(sorted(grouped.items()))


def print_report(result: BuildResult, console: Console) -> None:
    """Print timings and warnings of a finished build."""
    timings = Table(title="Build stages", show_header=True, header_style="bold")
    timings.add_column("Stage")
    timings.add_column("Seconds", justify="right")
    for stage, seconds in result.timings.items():
        timings.add_row(stage, f"{seconds:.3f}")
    console.print(timings)

    if not result.warnings:
        console.print(f"[green]✓ Built {len(result.pages)} page(s) without warnings[/green]")
        return

    table = Table(title=f"{len(result.warnings)} warning(s)", show_header=True, header_style="bold yellow")
    table.add_column("Type", style="yellow")
    table.add_column("Message")
    for warning_type, warnings in group_by_type(result.warnings).items():
        for warning in warnings:
            table.add_row(warning_type, warning.message)
    console.print(table)
    console.print(f"[yellow]Built {len(result.pages)} page(s) with {len(result.warnings)} warning(s)[/yellow]")


def _environment() -> Environment:
    template_dir = Path(str(files("eden").joinpath("resources")))
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "jinja2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html_report(result: BuildResult) -> str:
    grouped: dict[str, list[dict[str, Any]]] = {
        warning_type: [{"message": w.message, "fields": w.to_dict()} for w in warnings]
        for warning_type, warnings in group_by_type(result.warnings).items()
    }
    template = _environment().get_template(REPORT_TEMPLATE)
    return template.render(
        pages=len(result.pages),
        timings=result.timings,
        counts=count_by_type(result.warnings),
        grouped=grouped,
        total=len(result.warnings),
    )


def write_html_report(result: BuildResult, output_dir: Path) -> Path:
    """Write ``_report.html`` into ``output_dir``.

    Raises:
        ReportWriteError: If the file cannot be written

    """
    target = output_dir / REPORT_FILENAME
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_html_report(result), encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(str(target), exc) from exc
    logger.info("Wrote build report to %s", target)
    return target
