"""Shared Rich display functions for exposure reports.

Provides table builders and summary printers used by the expose and
remove commands.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from vendorexpose.models.exposure import ExposureReport
from vendorexpose.utils.formatting import console, print_info, print_success, print_warning


def _display_path(path: Path, base: Path) -> str:
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)


def create_results_table(report: ExposureReport, base: Path) -> Table:
    """Create a Rich table displaying per-folder results.

    Args:
        report: Report of the run.
        base: Directory paths are shown relative to (the project root).

    Returns:
        Rich Table with Status, Module, Folder, Method and Details columns.
    """
    table = Table(
        title="Exposure Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Module", no_wrap=True)
    table.add_column("Folder")
    table.add_column("Method", width=8)
    table.add_column("Details")

    for result in report.results:
        outcome = result.outcome
        if outcome.success:
            status = "[success]OK[/success]"
            method = outcome.method.value if outcome.method else "-"
            details = _display_path(result.request.target, base)
        elif result.conflict is not None:
            status = "[warning]CONFLICT[/warning]"
            method = "-"
            details = f"owned by {result.conflict}"
        else:
            status = "[error]FAIL[/error]"
            method = "-"
            details = outcome.error or "Unknown error"

        table.add_row(
            status,
            f"[module]{escape(result.request.module)}[/module]",
            escape(result.request.folder),
            method,
            f"[muted]{escape(details)}[/muted]",
        )

    return table


def print_report_summary(report: ExposureReport, base: Path) -> None:
    """Print a summary of a run.

    Args:
        report: Report of the run.
        base: Directory removed paths are shown relative to.
    """
    for path in report.removed:
        console.print(f"[removed]-[/removed] {escape(_display_path(path, base))}")

    for name, reason in report.skipped_modules.items():
        print_warning(f"Module {escape(name)} skipped: {escape(reason)}")

    exposed = len(report.exposed)
    failed = len(report.failures)
    removed = len(report.removed)

    if not report.results and not removed:
        print_info("No web directories to expose.")
    elif not report.results:
        print_success(f"{removed} resource(s) removed.")
    elif failed:
        console.print(
            f"\n[success]{exposed} exposed[/success], [error]{failed} failed[/error], "
            f"{removed} removed"
        )
    else:
        print_success(f"{exposed} folder(s) exposed, {removed} stale resource(s) removed.")
