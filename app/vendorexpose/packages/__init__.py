"""Package index reading for the root project and installed dependencies."""

from vendorexpose.packages.index import (
    PackageIndexError,
    PackageRecord,
    find_package,
    load_installed_packages,
    load_packages,
    load_root_package,
)

__all__ = [
    "PackageIndexError",
    "PackageRecord",
    "find_package",
    "load_installed_packages",
    "load_packages",
    "load_root_package",
]
