"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from vendorexpose.core.config import METHOD_ENV
from vendorexpose.core.notify import Notifier
from vendorexpose.core.paths import ProjectLayout
from vendorexpose.models.package import MODULE_TYPE, PackageHandle


class RecordingNotifier(Notifier):
    """Notifier collecting (level, message) pairs for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of(self, level: str) -> list[str]:
        """Messages recorded at a level."""
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture(autouse=True)
def clean_method_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's VENDOR_EXPOSE_METHOD out of the tests."""
    monkeypatch.delenv(METHOD_ENV, raising=False)


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier recording every message."""
    return RecordingNotifier()


@pytest.fixture
def layout(tmp_path: Path) -> ProjectLayout:
    """Layout of an empty project under tmp_path/proj."""
    project = tmp_path / "proj"
    project.mkdir()
    return ProjectLayout.from_root(project)


ModuleFactory = Callable[..., PackageHandle]


@pytest.fixture
def make_module(layout: ProjectLayout) -> ModuleFactory:
    """Factory installing a fake vendor module and returning its handle.

    Each folder gets an app.js file whose content names the module and
    folder. The expose list defaults to the created folders.
    """

    def _make(
        name: str,
        folders: Sequence[str] = ("client",),
        expose: Sequence[object] | None = None,
        type: str = MODULE_TYPE,
    ) -> PackageHandle:
        root = layout.vendor_dir.joinpath(*name.split("/"))
        root.mkdir(parents=True, exist_ok=True)
        for folder in folders:
            directory = root / folder
            directory.mkdir(parents=True, exist_ok=True)
            (directory / "app.js").write_text(f"// {name}/{folder}\n")
        declared = list(expose) if expose is not None else list(folders)
        return PackageHandle(name=name, type=type, extra={"expose": declared})

    return _make


def tree(root: Path) -> dict[str, bytes]:
    """Map every file below root (relative POSIX path) to its content."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
