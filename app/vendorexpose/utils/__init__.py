"""Utility modules for vendorexpose.

This module exports commonly used utility functions.
"""

from vendorexpose.utils.formatting import (
    console,
    create_registry_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_registry_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
