"""Copy expose method.

Mirrors a module folder into the resources root as real files, for
filesystems or platforms where symbolic links are unavailable.
"""

import filecmp
import logging
import shutil
from pathlib import Path

from vendorexpose.methods.base import ExposeMethod, remove_path
from vendorexpose.models.exposure import ExposureOutcome, MethodName

logger = logging.getLogger(__name__)


class CopyMethod(ExposeMethod):
    """Expose a folder by recursively copying it.

    The target ends up mirroring the source: new and changed files are
    copied, unchanged files (same size and mtime) are left in place, and
    entries no longer present in the source are deleted. A missing source
    is not an error since exposed folders are optional.
    """

    name = "copy"
    method_name = MethodName.COPY

    def _expose(self, source: Path, target: Path) -> ExposureOutcome:
        if not source.exists():
            logger.debug("Source %s does not exist, nothing to copy", source)
            return ExposureOutcome.ok(MethodName.COPY, "source missing, nothing copied")

        # Never write through a link into the module itself
        if target.is_symlink():
            target.unlink()

        target.parent.mkdir(parents=True, exist_ok=True)

        if source.is_dir():
            copied = self._mirror(source, target, source.resolve(), frozenset())
        else:
            if target.is_dir():
                shutil.rmtree(target)
            copied = self._copy_file(source, target)

        return ExposureOutcome.ok(MethodName.COPY, f"{copied} file(s) copied")

    def _remove(self, target: Path) -> None:
        remove_path(target)

    def _mirror(self, source: Path, target: Path, root: Path, ancestors: frozenset[Path]) -> int:
        """Recursively mirror a directory.

        Directory links are followed only while they stay inside root and
        do not point back at a directory being copied.

        Args:
            source: Existing source directory.
            target: Target directory (created if missing).
            root: Resolved top-level source directory.
            ancestors: Resolved directories already being copied above source.

        Returns:
            Number of files written.
        """
        if target.exists() and not target.is_dir():
            target.unlink()
        target.mkdir(exist_ok=True)

        ancestors = ancestors | {source.resolve()}
        copied = 0
        expected: set[str] = set()

        for entry in sorted(source.iterdir()):
            expected.add(entry.name)
            dest = target / entry.name
            if dest.is_symlink():
                dest.unlink()

            if entry.is_dir():
                real = entry.resolve()
                if entry.is_symlink() and (real in ancestors or not real.is_relative_to(root)):
                    logger.warning("Skipping directory link %s, it leaves %s or loops", entry, root)
                    expected.discard(entry.name)
                    continue
                copied += self._mirror(entry, dest, root, ancestors)
            elif entry.exists():
                if dest.is_dir():
                    shutil.rmtree(dest)
                copied += self._copy_file(entry, dest)
            else:
                logger.warning("Skipping dangling link %s", entry)
                expected.discard(entry.name)

        for existing in target.iterdir():
            if existing.name not in expected:
                logger.debug("Removing %s, no longer in %s", existing, source)
                remove_path(existing)

        return copied

    def _copy_file(self, source: Path, target: Path) -> int:
        """Copy one file unless the target is already identical.

        Returns:
            1 if the file was written, 0 if it was already up to date.
        """
        if target.is_file() and filecmp.cmp(source, target, shallow=True):
            return 0
        shutil.copy2(source, target)
        return 1
