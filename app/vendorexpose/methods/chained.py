"""Chained expose method with ordered fallback."""

import logging
from collections.abc import Iterable
from pathlib import Path

from vendorexpose.methods.base import ExposeMethod, remove_path
from vendorexpose.models.exposure import ExposureOutcome

logger = logging.getLogger(__name__)


class ChainedMethod(ExposeMethod):
    """Try several methods in order until one succeeds.

    The outcome carries the concrete method that won, so the registry can
    later remove the target with the matching strategy. The winner of the
    most recent call is also kept in last_method.

    Attributes:
        methods: Candidate methods, in the order they are tried.
        last_method: Method that succeeded on the last call, if any.
    """

    name = "chain"

    def __init__(self, methods: Iterable[ExposeMethod]) -> None:
        """Initialize the chain.

        Args:
            methods: Candidate methods, tried first to last.
        """
        self.methods: tuple[ExposeMethod, ...] = tuple(methods)
        self.last_method: ExposeMethod | None = None

    def _expose(self, source: Path, target: Path) -> ExposureOutcome:
        self.last_method = None
        errors: list[str] = []

        for method in self.methods:
            outcome = method.expose_directory(source, target)
            if outcome.success:
                self.last_method = method
                return outcome
            logger.info("%s failed for %s, trying next method: %s", method.name, target, outcome.error)
            errors.append(f"{method.name}: {outcome.error}")

        detail = "; ".join(errors) if errors else "no methods configured"
        return ExposureOutcome.fail(f"All candidate methods failed ({detail})")

    def _remove(self, target: Path) -> None:
        remove_path(target)
