"""Registry of exposed resources.

This module provides the ResourceRegistry, which remembers every target
written into the resources root together with the method that created it
and the module that owns it. The record survives between runs in
<resources>/.exposed.toml so targets of removed or renamed modules can be
found and deleted with the matching strategy.
"""

import logging
import os
import tomllib
from collections.abc import Iterable
from pathlib import Path
from tempfile import NamedTemporaryFile

import tomli_w
from pydantic import ValidationError

from vendorexpose.core.notify import LoggingNotifier, Notifier
from vendorexpose.core.paths import REGISTRY_FILENAME, stays_inside
from vendorexpose.methods import method_for, remove_path
from vendorexpose.models.exposure import MethodName
from vendorexpose.models.registry import ExposureRecord, RegistryFile

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base exception for registry-related errors."""


class RegistryCorruptError(RegistryError):
    """Raised when the registry file cannot be parsed or validated."""


def read_registry_file(path: Path) -> RegistryFile:
    """Load and validate a registry file.

    Args:
        path: Registry file path.

    Returns:
        Validated RegistryFile; empty if the file does not exist.

    Raises:
        RegistryCorruptError: If the TOML or its content is invalid.
        RegistryError: If the file exists but cannot be read.
    """
    if not path.exists():
        return RegistryFile()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise RegistryCorruptError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise RegistryError(f"Failed to read registry: {e}") from e

    try:
        return RegistryFile.model_validate(data)
    except ValidationError as e:
        raise RegistryCorruptError(f"Invalid registry content: {e}") from e


def write_registry_file(registry: RegistryFile, path: Path) -> Path:
    """Write a registry file atomically.

    Writes to a temporary file in the same directory, then renames it
    over the registry with os.replace().

    Args:
        registry: Contents to write.
        path: Registry file path.

    Returns:
        Path where the registry was saved.

    Raises:
        RegistryError: If the file cannot be written.
    """
    data = {
        "version": registry.version,
        "exposures": {
            target: {"method": record.method, "module": record.module}
            for target, record in sorted(registry.exposures.items())
        },
    }

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f"{REGISTRY_FILENAME}.",
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise RegistryError(f"Failed to write registry: {e}") from e

    return path


class ResourceRegistry:
    """Tracks exposed targets under a resources root.

    Targets are stored relative to the resources root with "/" separators,
    so the registry stays valid when the project directory moves. The
    public API takes and returns absolute paths.

    Attributes:
        resources_dir: Managed resources root.
    """

    def __init__(self, resources_dir: Path, notifier: Notifier | None = None) -> None:
        """Initialize the registry (empty until load() is called).

        Args:
            resources_dir: Managed resources root.
            notifier: Sink for warnings; defaults to logging only.
        """
        self.resources_dir = resources_dir
        self._notifier = notifier or LoggingNotifier()
        self._records: dict[str, ExposureRecord] = {}

    @property
    def path(self) -> Path:
        """Path to the registry file."""
        return self.resources_dir / REGISTRY_FILENAME

    @property
    def records(self) -> dict[Path, ExposureRecord]:
        """Copy of all records, keyed by absolute target path."""
        return {self._absolute(key): record for key, record in self._records.items()}

    @property
    def raw_records(self) -> dict[str, ExposureRecord]:
        """Copy of all records, keyed by relative target path."""
        return dict(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> "ResourceRegistry":
        """Read the registry file.

        A missing file yields an empty registry (first run). A corrupt or
        unreadable file also yields an empty registry, with a warning;
        leftovers on disk are then caught by sweep_untracked().

        Returns:
            self, for chaining.
        """
        try:
            registry = read_registry_file(self.path)
        except RegistryError as e:
            logger.warning("Ignoring registry %s: %s", self.path, e)
            self._notifier.warning(f"Registry {self.path} is unreadable, starting empty: {e}")
            registry = RegistryFile()
        self._records = dict(registry.exposures)
        return self

    def save(self) -> Path:
        """Persist the registry.

        Returns:
            Path of the registry file.

        Raises:
            RegistryError: If the file cannot be written.
        """
        return write_registry_file(RegistryFile(exposures=self._records), self.path)

    def get(self, target: Path) -> ExposureRecord | None:
        """Get the record for a target, if any."""
        key = self._key(target)
        return self._records.get(key) if key is not None else None

    def owner_of(self, target: Path) -> str | None:
        """Get the module owning a target, if any."""
        record = self.get(target)
        return record.module if record else None

    def targets_for(self, module: str) -> list[Path]:
        """Get every target recorded for a module."""
        return [
            self._absolute(key) for key, record in self._records.items() if record.module == module
        ]

    def record_exposure(self, target: Path, method: MethodName | str, module: str) -> None:
        """Insert or update the record for a target.

        A "none" method never replaces an existing record, since nothing
        was written and the existing artifact still needs its own removal
        strategy.

        Args:
            target: Absolute exposed path inside the resources root.
            method: Concrete method that created the target.
            module: Owning module name.

        Raises:
            ValueError: If target is not inside the resources root.
        """
        key = self._key(target)
        if key is None:
            msg = f"Target {target} is outside {self.resources_dir}"
            raise ValueError(msg)

        method_name = MethodName(method)
        existing = self._records.get(key)
        if method_name == MethodName.NONE and existing is not None:
            if existing.module == module:
                return
            method_name = MethodName(existing.method)

        self._records[key] = ExposureRecord(method=method_name.value, module=module)

    def forget(self, target: Path) -> ExposureRecord | None:
        """Drop a record without touching the disk."""
        key = self._key(target)
        return self._records.pop(key, None) if key is not None else None

    def remove_target(self, target: Path) -> bool:
        """Remove a recorded target from disk, then from the registry.

        Emptied parent directories are removed up to the resources root.
        On failure the record is kept so the next run retries. A target
        whose parent path runs through a link is only forgotten, so
        nothing behind the link is deleted.

        Args:
            target: Absolute recorded target.

        Returns:
            True if the target was removed (or already gone).
        """
        key = self._key(target)
        record = self._records.get(key) if key is not None else None
        if record is None:
            return False

        if not stays_inside(target, self.resources_dir):
            # Reached through another exposure's link; the path is not ours on disk
            del self._records[key]
            self._notifier.warning(f"Not removing {target}: a parent directory is a link")
            return False

        outcome = method_for(record.method).remove_directory(target)
        if outcome.failed:
            self._notifier.warning(f"Could not remove {target}: {outcome.error}")
            return False

        del self._records[key]
        logger.debug("Removed %s (%s, %s)", target, record.method, record.module)
        self.prune_empty_parents(target)
        return True

    def prune_stale(self, current_targets: Iterable[Path]) -> list[Path]:
        """Remove every recorded target not in current_targets.

        Args:
            current_targets: Targets claimed by current modules.

        Returns:
            Targets that were removed.
        """
        current = {self._key(t) for t in current_targets}
        stale = sorted(key for key in self._records if key not in current)

        removed: list[Path] = []
        for key in stale:
            target = self._absolute(key)
            if self.remove_target(target):
                removed.append(target)
        return removed

    def remove_module(self, module: str) -> list[Path]:
        """Remove every target owned by a module.

        Args:
            module: Module name.

        Returns:
            Targets that were removed.
        """
        return [target for target in sorted(self.targets_for(module)) if self.remove_target(target)]

    def sweep_untracked(
        self,
        current_targets: Iterable[Path],
        reserved: Iterable[str] = (),
    ) -> list[Path]:
        """Delete entries under the resources root nothing accounts for.

        An entry survives if it is a recorded or current target, a
        directory on the way to one, or a reserved name directly in the
        resources root (registry file, seeded guard files). Everything else
        was left behind by a lost registry or an interrupted run.

        Args:
            current_targets: Targets claimed by current modules.
            reserved: File names to keep at the top of the resources root.

        Returns:
            Paths that were deleted.
        """
        if not self.resources_dir.is_dir():
            return []

        keep = {self._key(t) for t in current_targets} | set(self._records)
        keep.discard(None)
        ancestors: set[str] = set()
        for key in keep:
            parts = key.split("/")
            for i in range(1, len(parts)):
                ancestors.add("/".join(parts[:i]))

        reserved_names = set(reserved) | {REGISTRY_FILENAME}
        removed: list[Path] = []
        self._sweep(self.resources_dir, "", keep, ancestors, reserved_names, removed)
        return removed

    def prune_empty_parents(self, path: Path) -> None:
        """Remove empty directories above path, stopping at the resources root."""
        parent = path.parent
        root = self.resources_dir
        while parent != root and parent.is_relative_to(root):
            try:
                parent.rmdir()
            except FileNotFoundError:
                pass
            except OSError:
                # Not empty (or not a directory)
                break
            else:
                logger.debug("Removed empty directory %s", parent)
            parent = parent.parent

    def _sweep(
        self,
        directory: Path,
        prefix: str,
        keep: set[str],
        ancestors: set[str],
        reserved: set[str],
        removed: list[Path],
    ) -> None:
        for entry in sorted(directory.iterdir()):
            key = f"{prefix}{entry.name}"
            if not prefix and entry.name in reserved:
                continue
            if key in keep:
                continue
            if key in ancestors and entry.is_dir() and not entry.is_symlink():
                self._sweep(entry, f"{key}/", keep, ancestors, reserved, removed)
                continue
            try:
                remove_path(entry)
            except OSError as e:
                self._notifier.warning(f"Could not remove untracked {entry}: {e}")
                continue
            logger.debug("Swept untracked %s", entry)
            removed.append(entry)
        if prefix and not any(directory.iterdir()):
            directory.rmdir()

    def _key(self, target: Path) -> str | None:
        try:
            return target.relative_to(self.resources_dir).as_posix()
        except ValueError:
            return None

    def _absolute(self, key: str) -> Path:
        return self.resources_dir.joinpath(*key.split("/"))
