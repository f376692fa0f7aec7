"""Unit tests for notifiers."""

import logging

import pytest
from vendorexpose.core.notify import ConsoleNotifier, LoggingNotifier


class TestConsoleNotifier:
    """Tests for ConsoleNotifier."""

    def test_prints_progress(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Module and folder lines go to stdout."""
        notifier = ConsoleNotifier()

        notifier.module("acme/widgets")
        notifier.folder("client", "symlink")

        out = capsys.readouterr().out
        assert "acme/widgets" in out
        assert "client" in out
        assert "symlink" in out

    def test_quiet_suppresses_progress(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Quiet mode hides progress but still shows warnings."""
        notifier = ConsoleNotifier(quiet=True)

        notifier.module("acme/widgets")
        notifier.info("progress")
        notifier.warning("careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "careful" in captured.err

    def test_markup_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Names that look like Rich markup are printed literally."""
        ConsoleNotifier().info("folder [bold]x[/bold]")

        assert "[bold]x[/bold]" in capsys.readouterr().out

    def test_error_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors go to stderr."""
        ConsoleNotifier().error("broken")

        assert "broken" in capsys.readouterr().err


class TestLoggingNotifier:
    """Tests for LoggingNotifier."""

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each message is logged at its level."""
        notifier = LoggingNotifier()

        with caplog.at_level(logging.INFO, logger="vendorexpose.core.notify"):
            notifier.module("acme/widgets")
            notifier.warning("careful")
            notifier.error("broken")

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert levels == [
            (logging.INFO, "Exposing web directories for module acme/widgets:"),
            (logging.WARNING, "careful"),
            (logging.ERROR, "broken"),
        ]
