"""Package models supplied by the dependency manager.

This module defines the immutable package handle the exposure engine
works from, and the change events that decide between a full
reconciliation run and a targeted removal.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Package type that participates in web exposure
MODULE_TYPE = "vendor-module"


class PackageChange(Enum):
    """Kind of change the dependency manager applied to a package."""

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"


@dataclass(frozen=True, slots=True)
class PackageHandle:
    """A package as reported by the dependency manager.

    Attributes:
        name: Unique package name, usually "vendor/package".
        type: Package type; only MODULE_TYPE packages are exposed.
        install_path: Declared install location (absolute, or relative to
            the project root). None means "<vendor dir>/<name>".
        extra: Free-form package metadata; the "expose" key holds the list
            of folders to publish.
        is_root: True for the project's own package.
    """

    name: str
    type: str = "library"
    install_path: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    is_root: bool = False

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def declared_expose(self) -> Any:
        """Raw "expose" value from the package metadata (unvalidated)."""
        return self.extra.get("expose")


@dataclass(frozen=True, slots=True)
class PackageEvent:
    """A single package change reported for this run.

    Attributes:
        change: What happened to the package.
        package: The package after the change (or the removed package).
    """

    change: PackageChange
    package: PackageHandle

    @property
    def is_uninstall(self) -> bool:
        """Check if this event removed the package."""
        return self.change == PackageChange.UNINSTALL
