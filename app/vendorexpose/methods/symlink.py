"""Symlink expose method.

Exposes a module folder by linking to it from the resources root, which
avoids duplicating files and picks up module updates immediately.
"""

import os
import shutil
from pathlib import Path

from vendorexpose.methods.base import ExposeMethod, ExposureFailedError
from vendorexpose.models.exposure import ExposureOutcome, MethodName


def link_value(source: Path, target: Path) -> str:
    """Compute what the link at target should contain.

    A relative link is used when source and target share a common
    ancestor below the filesystem root, so the tree keeps working when
    the project directory is moved. Otherwise the absolute source path
    is used.

    Args:
        source: Absolute path being linked to.
        target: Absolute path of the link.

    Returns:
        Link contents.
    """
    source_abs = os.path.abspath(source)
    parent_abs = os.path.abspath(target.parent)
    try:
        common = os.path.commonpath([source_abs, parent_abs])
    except ValueError:
        # Different drives on Windows
        return source_abs
    if common == os.path.splitdrive(common)[0] + os.sep:
        return source_abs
    return os.path.relpath(source_abs, parent_abs)


class SymlinkMethod(ExposeMethod):
    """Expose a folder by creating a symbolic link to it."""

    name = "symlink"
    method_name = MethodName.SYMLINK

    def _expose(self, source: Path, target: Path) -> ExposureOutcome:
        if not source.exists():
            raise ExposureFailedError(f"Source does not exist: {source}")

        value = link_value(source, target)

        if target.is_symlink():
            if os.readlink(target) == value:
                return ExposureOutcome.ok(MethodName.SYMLINK, "link already up to date")
            target.unlink()
        elif target.is_dir():
            # Left behind by a previous copy
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()

        target.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(value, target, target_is_directory=source.is_dir())
        return ExposureOutcome.ok(MethodName.SYMLINK, f"linked to {value}")

    def _remove(self, target: Path) -> None:
        if target.is_symlink():
            target.unlink()
        elif target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
