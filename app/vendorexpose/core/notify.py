"""Notification sinks for human-readable progress.

The exposure engine reports per-module and per-folder progress through a
Notifier. The console implementation prints through the shared Rich
consoles; other implementations can collect or discard messages.
"""

import logging
from abc import ABC, abstractmethod

from rich.markup import escape

from vendorexpose.utils.formatting import console, print_error, print_warning

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Receives progress, warning and error lines."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Report progress."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Report a non-fatal problem."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Report a failure."""

    def module(self, name: str) -> None:
        """Announce that a module's folders are about to be exposed."""
        self.info(f"Exposing web directories for module {name}:")

    def folder(self, folder: str, method: str | None) -> None:
        """Report one exposed folder."""
        suffix = f" ({method})" if method else ""
        self.info(f"  - {folder}{suffix}")


class ConsoleNotifier(Notifier):
    """Notifier printing to the terminal.

    Attributes:
        quiet: If True, progress lines are suppressed; warnings and errors
            are still printed.
    """

    def __init__(self, quiet: bool = False) -> None:
        self.quiet = quiet

    def info(self, message: str) -> None:
        logger.debug(message)
        if not self.quiet:
            console.print(escape(message))

    def warning(self, message: str) -> None:
        logger.debug("warning: %s", message)
        print_warning(escape(message))

    def error(self, message: str) -> None:
        logger.debug("error: %s", message)
        print_error(escape(message))

    def module(self, name: str) -> None:
        logger.debug("Exposing module %s", name)
        if not self.quiet:
            console.print(f"Exposing web directories for module [module]{escape(name)}[/]:")

    def folder(self, folder: str, method: str | None) -> None:
        if not self.quiet:
            suffix = f" [muted]({method})[/]" if method else ""
            console.print(f"  - [info]{escape(folder)}[/]{suffix}")


class LoggingNotifier(Notifier):
    """Notifier that only writes to the module logger."""

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)
