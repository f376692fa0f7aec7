"""Package index reading.

This module reads the two JSON files describing a project's packages:

- <project>/vendor.json: the root project's own package metadata
- <vendor>/installed.json: every installed dependency package

Only the fields needed to identify a package and its exposed folders
are interpreted; everything else in the files is ignored.

Example installed.json::

    {"packages": [
        {"name": "acme/widgets", "type": "vendor-module",
         "extra": {"expose": ["client", "images"]}}
    ]}
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vendorexpose.core.paths import ProjectLayout
from vendorexpose.models.package import PackageHandle

logger = logging.getLogger(__name__)


class PackageIndexError(Exception):
    """Raised when a package index file cannot be read or is invalid."""


class PackageRecord(BaseModel):
    """A package entry as written by the dependency manager.

    Attributes:
        name: Package name.
        type: Package type.
        install_path: Optional install location ("install-path" in JSON).
        extra: Free-form metadata, including "expose".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Annotated[str, Field(min_length=1, description="Package name")]
    type: Annotated[str, Field(description="Package type")] = "library"
    install_path: Annotated[
        str | None,
        Field(alias="install-path", description="Install location"),
    ] = None
    extra: Annotated[dict[str, Any], Field(default_factory=dict, description="Extra metadata")]

    def to_handle(self, is_root: bool = False) -> PackageHandle:
        """Convert to the handle used by the exposure engine."""
        return PackageHandle(
            name=self.name,
            type=self.type,
            install_path=self.install_path,
            extra=dict(self.extra),
            is_root=is_root,
        )


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise PackageIndexError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise PackageIndexError(f"Failed to read {path}: {e}") from e


def load_root_package(layout: ProjectLayout) -> PackageHandle | None:
    """Load the root project's package metadata.

    Args:
        layout: Project layout.

    Returns:
        Root PackageHandle, or None if the project has no vendor.json.

    Raises:
        PackageIndexError: If the file is unreadable or invalid.
    """
    path = layout.root_package_path
    if not path.exists():
        logger.debug("No root package metadata at %s", path)
        return None

    try:
        record = PackageRecord.model_validate(_read_json(path))
    except ValidationError as e:
        raise PackageIndexError(f"Invalid root package in {path}: {e}") from e
    # The root project is always installed at the project root
    return record.to_handle(is_root=True)


def load_installed_packages(layout: ProjectLayout) -> list[PackageHandle]:
    """Load every installed package from the index.

    The index may be an object with a "packages" list or a bare list.

    Args:
        layout: Project layout.

    Returns:
        Installed packages in index order; empty if there is no index.

    Raises:
        PackageIndexError: If the index is unreadable or invalid.
    """
    path = layout.installed_index_path
    if not path.exists():
        logger.debug("No installed package index at %s", path)
        return []

    data = _read_json(path)
    entries = data.get("packages", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise PackageIndexError(f"Expected a list of packages in {path}")

    packages: list[PackageHandle] = []
    for position, entry in enumerate(entries):
        try:
            packages.append(PackageRecord.model_validate(entry).to_handle())
        except ValidationError as e:
            raise PackageIndexError(f"Invalid package #{position} in {path}: {e}") from e
    return packages


def load_packages(layout: ProjectLayout) -> list[PackageHandle]:
    """Load the root project followed by every installed package.

    Args:
        layout: Project layout.

    Returns:
        Packages in processing order.

    Raises:
        PackageIndexError: If either file is unreadable or invalid.
    """
    packages = load_installed_packages(layout)
    root = load_root_package(layout)
    return [root, *packages] if root is not None else packages


def find_package(packages: list[PackageHandle], name: str) -> PackageHandle | None:
    """Find a package by name."""
    for package in packages:
        if package.name == name:
            return package
    return None
