"""No-op expose method used when exposure is disabled."""

from pathlib import Path

from vendorexpose.methods.base import ExposeMethod
from vendorexpose.models.exposure import ExposureOutcome, MethodName


class NullMethod(ExposeMethod):
    """Expose method that never touches the filesystem."""

    name = "none"
    method_name = MethodName.NONE

    def _expose(self, source: Path, target: Path) -> ExposureOutcome:
        return ExposureOutcome.ok(MethodName.NONE, "exposure disabled")

    def _remove(self, target: Path) -> None:
        return None
