"""Exposure request and outcome models.

This module defines the data structures passed between the orchestrator
and the expose methods: one request per exposed folder, the outcome of
mirroring it, and the report summarizing a whole run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class MethodName(str, Enum):
    """Concrete method that produced an exposure.

    Attributes:
        SYMLINK: Target is a symbolic link to the source.
        COPY: Target is a real copy of the source tree.
        NONE: Nothing was written (exposure disabled).
    """

    SYMLINK = "symlink"
    COPY = "copy"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ExposeRequest:
    """One folder of one module to mirror into the resources root.

    Attributes:
        module: Name of the module declaring the folder.
        folder: Relative folder name as declared by the module.
        source: Absolute path of the folder inside the module.
        target: Absolute path the folder is exposed at.
    """

    module: str
    folder: str
    source: Path
    target: Path


@dataclass(frozen=True, slots=True)
class ExposureOutcome:
    """Result of a single expose or remove operation.

    Attributes:
        success: Whether the operation completed.
        method: Concrete method used on success, None on failure.
        message: Optional detail for successful operations.
        error: Failure reason, None on success.
    """

    success: bool
    method: MethodName | None = None
    message: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, method: MethodName, message: str | None = None) -> "ExposureOutcome":
        """Build a successful outcome for the given method."""
        return cls(success=True, method=method, message=message)

    @classmethod
    def fail(cls, error: str) -> "ExposureOutcome":
        """Build a failed outcome with the given reason."""
        return cls(success=False, error=error)

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success


@dataclass(frozen=True, slots=True)
class ExposureResult:
    """Outcome of one exposure request within a run.

    Attributes:
        request: The request that was processed.
        outcome: What the expose method reported.
        conflict: Name of the module already owning the target, if the
            request was skipped because of a conflict.
    """

    request: ExposeRequest
    outcome: ExposureOutcome
    conflict: str | None = None


@dataclass(slots=True)
class ExposureReport:
    """Summary of one orchestrator run.

    Attributes:
        results: One entry per processed folder, in processing order.
        skipped_modules: Module name to reason, for modules whose
            configuration was rejected.
        removed: Target paths removed from disk during cleanup.
    """

    results: list[ExposureResult] = field(default_factory=list)
    skipped_modules: dict[str, str] = field(default_factory=dict)
    removed: list[Path] = field(default_factory=list)

    @property
    def exposed(self) -> list[ExposureResult]:
        """Results whose exposure succeeded."""
        return [r for r in self.results if r.outcome.success]

    @property
    def failures(self) -> list[ExposureResult]:
        """Results whose exposure failed, conflicts included."""
        return [r for r in self.results if not r.outcome.success]

    @property
    def conflicts(self) -> list[ExposureResult]:
        """Results skipped because another module owns the target."""
        return [r for r in self.results if r.conflict is not None]

    @property
    def has_problems(self) -> bool:
        """Check if any folder failed or any module was skipped."""
        return bool(self.failures or self.skipped_modules)
