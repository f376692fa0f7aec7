"""CLI commands for vendorexpose.

This package contains all subcommand implementations.
"""

from vendorexpose.cli.commands import expose, remove, status

__all__ = ["expose", "remove", "status"]
