"""Project path management for vendorexpose.

This module derives every location the exposure engine touches from the
project root and the configured folder names:

- Dependency folder: <project>/vendor/
- Managed resources root: <project>/resources/
- Registry file: <project>/resources/.exposed.toml
"""

import logging
import shutil
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

logger = logging.getLogger(__name__)

# Application identifier
APP_NAME = "vendorexpose"

# Project-level settings file
SETTINGS_FILENAME = "vendorexpose.toml"

# Root package metadata and installed package index
ROOT_PACKAGE_FILENAME = "vendor.json"
INSTALLED_INDEX_FILENAME = "installed.json"

# Registry file kept inside the resources root
REGISTRY_FILENAME = ".exposed.toml"

DEFAULT_VENDOR_DIR = "vendor"
DEFAULT_RESOURCES_DIR = "resources"


class ResourcesUnavailableError(RuntimeError):
    """Raised when the managed resources root cannot be created."""


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    """Resolved directory layout of a project.

    Attributes:
        project_root: Absolute project (web root) directory.
        vendor_dir: Directory dependency packages are installed into.
        resources_dir: Managed directory exposures are written into.
    """

    project_root: Path
    vendor_dir: Path
    resources_dir: Path

    @classmethod
    def from_root(
        cls,
        project_root: Path,
        vendor_dir: str = DEFAULT_VENDOR_DIR,
        resources_dir: str = DEFAULT_RESOURCES_DIR,
    ) -> "ProjectLayout":
        """Build a layout from a project root and folder names.

        Args:
            project_root: Project directory; made absolute.
            vendor_dir: Dependency folder, relative to the project root.
            resources_dir: Resources folder, relative to the project root.

        Returns:
            ProjectLayout with absolute paths.
        """
        root = project_root.absolute()
        return cls(
            project_root=root,
            vendor_dir=root / vendor_dir,
            resources_dir=root / resources_dir,
        )

    @property
    def registry_path(self) -> Path:
        """Path to the registry file inside the resources root."""
        return self.resources_dir / REGISTRY_FILENAME

    @property
    def root_package_path(self) -> Path:
        """Path to the root project's package metadata."""
        return self.project_root / ROOT_PACKAGE_FILENAME

    @property
    def installed_index_path(self) -> Path:
        """Path to the installed package index."""
        return self.vendor_dir / INSTALLED_INDEX_FILENAME

    @property
    def settings_path(self) -> Path:
        """Path to the project settings file."""
        return self.project_root / SETTINGS_FILENAME


def ensure_resources_dir(path: Path) -> Path:
    """Create the managed resources root if it doesn't exist.

    Args:
        path: Resources directory to create.

    Returns:
        The created/existing directory path.

    Raises:
        ResourcesUnavailableError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create resources directory {path}: Permission denied"
        raise ResourcesUnavailableError(msg) from e
    except OSError as e:
        msg = f"Cannot create resources directory {path}: {e}"
        raise ResourcesUnavailableError(msg) from e
    if not path.is_dir():
        msg = f"Cannot create resources directory {path}: not a directory"
        raise ResourcesUnavailableError(msg)
    return path


def get_bundled_resources() -> list[Traversable]:
    """Get the static files shipped for the resources root.

    Returns:
        Bundled files from vendorexpose/data/resources (.htaccess, web.config).
    """
    bundle = resources.files("vendorexpose.data").joinpath("resources")
    return sorted((f for f in bundle.iterdir() if f.is_file()), key=lambda f: f.name)


def seed_resources(path: Path, files: list[Traversable] | None = None) -> list[Path]:
    """Copy static support files into the resources root when missing.

    Existing files are never overwritten, so local edits survive.

    Args:
        path: Resources directory (must exist).
        files: Files to seed. If None, uses the bundled files.

    Returns:
        Paths of the files that were created.
    """
    seeded: list[Path] = []
    for source in files if files is not None else get_bundled_resources():
        target = path / source.name
        if target.exists() or target.is_symlink():
            continue
        try:
            with source.open("rb") as src, target.open("wb") as dst:
                shutil.copyfileobj(src, dst)
        except OSError as e:
            logger.warning("Could not seed %s: %s", target, e)
            continue
        logger.debug("Seeded %s", target)
        seeded.append(target)
    return seeded


def reserved_names(files: list[Traversable] | None = None) -> frozenset[str]:
    """Names at the top of the resources root that are not exposures.

    Args:
        files: Seed files in use. If None, uses the bundled files.

    Returns:
        The registry file name plus the seed file names.
    """
    names = {source.name for source in (files if files is not None else get_bundled_resources())}
    names.add(REGISTRY_FILENAME)
    return frozenset(names)


def stays_inside(path: Path, root: Path) -> bool:
    """Check that the directories leading to path are real directories of root.

    Exposures are symlinks into module folders. A target below one of
    them would resolve into the module itself, so any link between root
    and path makes the check fail. path itself may be a link.

    Args:
        path: Absolute path below root.
        root: Managed resources root.

    Returns:
        True if path.parent resolves to the same place below root.
    """
    try:
        relative = path.parent.relative_to(root)
    except ValueError:
        return False
    return path.parent.resolve() == root.resolve().joinpath(relative)
