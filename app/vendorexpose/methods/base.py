"""Abstract base class for expose methods.

This module defines the ExposeMethod interface that every strategy for
mirroring a module folder into the resources root implements.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from vendorexpose.models.exposure import ExposureOutcome, MethodName

logger = logging.getLogger(__name__)


class ExposureFailedError(Exception):
    """Raised inside a method when a folder cannot be mirrored."""


class ExposeMethod(ABC):
    """Abstract base class for all expose methods.

    Methods project a source directory onto a target path. Expected
    failures (missing source, permission denied, symlinks unsupported)
    never propagate; they come back as a failed ExposureOutcome.

    Example:
        >>> method = SymlinkMethod()
        >>> outcome = method.expose_directory(source, target)
        >>> if outcome.failed:
        ...     print(outcome.error)
    """

    #: Label used in logs and CLI output
    name: str = ""
    #: Concrete method recorded for exposures made by this strategy
    method_name: MethodName | None = None

    def expose_directory(self, source: Path, target: Path) -> ExposureOutcome:
        """Mirror source onto target.

        Args:
            source: Absolute path of the folder to expose.
            target: Absolute path to expose it at.

        Returns:
            ExposureOutcome naming the concrete method on success.
        """
        try:
            check_disjoint(source, target)
            outcome = self._expose(source, target)
        except ExposureFailedError as e:
            outcome = ExposureOutcome.fail(str(e))
        except (OSError, NotImplementedError) as e:
            outcome = ExposureOutcome.fail(f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.exception("%s failed unexpectedly for %s", self.name, target)
            outcome = ExposureOutcome.fail(f"{type(e).__name__}: {e}")

        if outcome.success:
            logger.debug("%s exposed %s -> %s", self.name, source, target)
        else:
            logger.debug("%s failed for %s: %s", self.name, target, outcome.error)
        return outcome

    def remove_directory(self, target: Path) -> ExposureOutcome:
        """Remove a target previously created by this method.

        Args:
            target: Absolute exposed path.

        Returns:
            ExposureOutcome indicating success or failure.
        """
        try:
            self._remove(target)
        except OSError as e:
            return ExposureOutcome.fail(str(e))
        return ExposureOutcome(success=True, method=self.method_name)

    @abstractmethod
    def _expose(self, source: Path, target: Path) -> ExposureOutcome:
        """Perform the exposure.

        May raise ExposureFailedError or OSError for expected failures.
        """

    def _remove(self, target: Path) -> None:
        """Delete whatever is at target (default: any kind of entry)."""
        remove_path(target)


def check_disjoint(source: Path, target: Path) -> None:
    """Make sure source and target are separate places on disk.

    The target itself is not resolved, since it may be an earlier link to
    source. Its parent is, so a target reached through a link into the
    module is caught.

    Raises:
        ExposureFailedError: If target is source, or one contains the other.
    """
    real_source = source.resolve()
    real_target = target.parent.resolve() / target.name
    if (
        real_target == real_source
        or real_target.is_relative_to(real_source)
        or real_source.is_relative_to(real_target)
    ):
        msg = f"Target {target} overlaps its source {real_source}"
        raise ExposureFailedError(msg)


def remove_path(path: Path) -> bool:
    """Delete a file, symlink or directory tree.

    Symlinks (including links to directories and dead links) are
    unlinked, never followed.

    Args:
        path: Path to delete.

    Returns:
        True if something was deleted, False if nothing existed.

    Raises:
        OSError: If the deletion fails.
    """
    if path.is_symlink():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    if path.exists():
        path.unlink()
        return True
    return False
