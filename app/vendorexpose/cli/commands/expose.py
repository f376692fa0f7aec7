"""Expose command for publishing module folders.

This module provides the `vendorexpose expose` command, which runs a
full exposure pass over the root project and every installed package.
"""

from pathlib import Path
from typing import Annotated

import typer

from vendorexpose.cli.display import create_results_table, print_report_summary
from vendorexpose.core.config import ExposeMethodChoice, SettingsError, load_settings
from vendorexpose.core.notify import ConsoleNotifier
from vendorexpose.core.orchestrator import ExposureOrchestrator
from vendorexpose.core.paths import ResourcesUnavailableError
from vendorexpose.packages import PackageIndexError, load_packages
from vendorexpose.utils.formatting import console, print_error

app = typer.Typer(
    name="expose",
    help="Expose web folders of all modules.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def expose(
    ctx: typer.Context,
    project: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help="Project root (web root).",
            file_okay=False,
        ),
    ] = Path("."),
    method: Annotated[
        ExposeMethodChoice | None,
        typer.Option(
            "--method",
            "-m",
            help="Expose method (overrides VENDOR_EXPOSE_METHOD).",
            case_sensitive=False,
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Exit with an error if any folder could not be exposed.",
        ),
    ] = False,
) -> None:
    """Expose web folders of the root project and all installed modules.

    Each module of the exposable type lists its public folders under
    "expose". Those folders are symlinked (or copied) into the resources
    directory, and resources of removed modules are cleaned up.

    Examples:
        vendorexpose expose                  # Use configured method (auto)
        vendorexpose expose --method copy    # Force copies
        vendorexpose expose -p /srv/site     # Different project root
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    project_root = project.resolve()

    try:
        settings = load_settings(project_root, method=method)
        layout = settings.layout(project_root)
        packages = load_packages(layout)
    except (SettingsError, PackageIndexError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    orchestrator = ExposureOrchestrator(layout, settings, ConsoleNotifier(quiet=quiet))
    try:
        report = orchestrator.run(packages)
    except ResourcesUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if report.results and not quiet:
        console.print(create_results_table(report, project_root))
    print_report_summary(report, project_root)

    if strict and report.has_problems:
        raise typer.Exit(code=1)
