"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from vendorexpose import __version__
from vendorexpose.cli.commands import expose, remove, status
from vendorexpose.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="vendorexpose",
    help="Expose web folders of vendor packages under the public web root.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"vendorexpose version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send debug logging to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """vendorexpose - publish vendor package assets under the web root.

    Symlinks (or copies) the folders each vendor module declares in its
    "expose" list into the resources directory, and cleans up after
    removed modules.
    """
    _configure_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(expose.app, name="expose")
app.add_typer(remove.app, name="remove")
app.add_typer(status.app, name="status")


if __name__ == "__main__":
    app()
