from eden.orchestration.build import BuildOrchestrator, BuildResult, LoadedSite, Stage
from eden.orchestration.exceptions import OrchestrationError, ReportWriteError
from eden.orchestration.report import print_report, render_html_report, write_html_report

__all__ = [
    "BuildOrchestrator",
    "BuildResult",
    "LoadedSite",
    "OrchestrationError",
    "ReportWriteError",
    "Stage",
    "print_report",
    "render_html_report",
    "write_html_report",
]
