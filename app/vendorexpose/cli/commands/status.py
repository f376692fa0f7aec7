"""Status command for inspecting the exposure registry.

This module provides the `vendorexpose status` command, which lists the
targets recorded in the resources directory.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from vendorexpose.core.config import SettingsError, load_settings
from vendorexpose.core.notify import ConsoleNotifier
from vendorexpose.core.registry import ResourceRegistry
from vendorexpose.utils.formatting import console, create_registry_table, print_error, print_info

app = typer.Typer(
    name="status",
    help="Show exposed resources.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options for status."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def status(
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
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the resources recorded in the registry.

    Examples:
        vendorexpose status
        vendorexpose status --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    project_root = project.resolve()
    try:
        settings = load_settings(project_root)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    layout = settings.layout(project_root)
    registry = ResourceRegistry(layout.resources_dir, ConsoleNotifier()).load()
    records = registry.raw_records

    if output_format == OutputFormat.JSON:
        data = [
            {"target": target, "module": record.module, "method": record.method}
            for target, record in sorted(records.items())
        ]
        console.print_json(json.dumps(data))
        return

    if not records:
        print_info(f"No resources exposed under {layout.resources_dir}.")
        return

    console.print(create_registry_table(records))
    console.print(f"\n[dim]{len(registry)} resource(s) in {layout.resources_dir}[/dim]")
