"""Remove command for cleaning up after an uninstalled module.

This module provides the `vendorexpose remove` command, which deletes
everything exposed for a single module without touching the others.
"""

from pathlib import Path
from typing import Annotated

import typer

from vendorexpose.cli.display import print_report_summary
from vendorexpose.core.config import SettingsError, load_settings
from vendorexpose.core.notify import ConsoleNotifier
from vendorexpose.core.orchestrator import ExposureOrchestrator
from vendorexpose.models.package import PackageHandle
from vendorexpose.utils.formatting import print_error, print_info

app = typer.Typer(
    name="remove",
    help="Remove exposed folders of one module.",
    invoke_without_command=True,
    # Allow options after the module name
    context_settings={"allow_interspersed_args": True},
)


@app.callback(invoke_without_command=True)
def remove(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Module name, e.g. acme/widgets."),
    ],
    project: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help="Project root (web root).",
            file_okay=False,
        ),
    ] = Path("."),
) -> None:
    """Remove the exposed web folders of an uninstalled module.

    Only the named module's resources are deleted; run
    `vendorexpose expose` for a full reconciliation instead.

    Examples:
        vendorexpose remove acme/widgets
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    project_root = project.resolve()

    try:
        settings = load_settings(project_root)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    orchestrator = ExposureOrchestrator(
        settings.layout(project_root), settings, ConsoleNotifier(quiet=quiet)
    )
    report = orchestrator.remove_module(PackageHandle(name=name))

    if report.skipped_modules:
        print_report_summary(report, project_root)
        raise typer.Exit(code=1)
    if not report.removed:
        print_info(f"Nothing exposed for module {name}.")
        return
    print_report_summary(report, project_root)
