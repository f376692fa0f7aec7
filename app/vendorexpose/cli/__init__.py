"""CLI package for vendorexpose.

This package contains the Typer application and all subcommands.
"""

from vendorexpose.cli.main import app

__all__ = ["app"]
