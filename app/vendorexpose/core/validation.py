"""Safety checks for folder and module names declared by packages.

A package declares which of its folders are web accessible. Those names
end up joined onto filesystem paths, so anything that could escape the
package root (absolute paths, traversal) is rejected up front.
"""

from collections.abc import Sequence
from typing import Any


class InvalidExposurePathError(ValueError):
    """Raised when a module declares a folder or name that is unsafe to expose.

    Attributes:
        module: Name of the offending module.
        path: The rejected value.
    """

    def __init__(self, module: str, path: Any, detail: str = "Invalid module folder") -> None:
        self.module = module
        self.path = path
        super().__init__(f"{detail} {path!r} in module {module}")


def validate_folder(folder: Any) -> bool:
    """Check whether a declared folder is safe to expose.

    Any "." is rejected, not only "..", so dotfiles and names such as
    "v1.2" are refused as well.

    Args:
        folder: Folder name relative to the module root.

    Returns:
        True if the folder may be exposed, False otherwise.
    """
    if not isinstance(folder, str) or not folder:
        return False
    if "." in folder:
        return False
    if folder.startswith("/"):
        return False
    if folder.startswith("\\"):
        return False
    return True


def validate_folders(module: str, folders: Sequence[Any]) -> list[str]:
    """Validate every folder a module declares.

    The whole list is checked before anything is returned, so callers
    never act on a partially validated list.

    Args:
        module: Module name, used in the error.
        folders: Declared folder names.

    Returns:
        The folders, unchanged, as a list of strings.

    Raises:
        InvalidExposurePathError: On the first folder that fails validation.
    """
    for folder in folders:
        if not validate_folder(folder):
            raise InvalidExposurePathError(module, folder)
    return list(folders)


def validate_module_name(name: str) -> list[str]:
    """Split a module name into path segments, rejecting unsafe names.

    Args:
        name: Module name such as "acme/widgets".

    Returns:
        The "/" separated segments of the name.

    Raises:
        InvalidExposurePathError: If the name is absolute, uses backslashes,
            or contains empty, "." or ".." segments.
    """
    if not name or name.startswith("/") or "\\" in name:
        raise InvalidExposurePathError(name, name, "Invalid module name")
    segments = name.split("/")
    for segment in segments:
        if segment in ("", ".", ".."):
            raise InvalidExposurePathError(name, name, "Invalid module name")
    return segments
