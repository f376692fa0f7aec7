"""Unit tests for ModuleDescriptor."""

from pathlib import Path

import pytest
from vendorexpose.core.module import ModuleDescriptor
from vendorexpose.core.paths import ProjectLayout
from vendorexpose.core.validation import InvalidExposurePathError
from vendorexpose.models.package import MODULE_TYPE, PackageHandle


def _module(layout: ProjectLayout, **kwargs: object) -> ModuleDescriptor:
    kwargs.setdefault("name", "acme/widgets")
    kwargs.setdefault("type", MODULE_TYPE)
    return ModuleDescriptor(PackageHandle(**kwargs), layout)  # type: ignore[arg-type]


class TestExposedFolders:
    """Tests for ModuleDescriptor.exposed_folders."""

    def test_declared_folders(self, layout: ProjectLayout) -> None:
        """Declared folders are returned in order."""
        module = _module(layout, extra={"expose": ["client", "images"]})

        assert module.exposed_folders() == ["client", "images"]

    def test_other_types_expose_nothing(self, layout: ProjectLayout) -> None:
        """Packages of other types are ignored even with an expose list."""
        module = _module(layout, type="library", extra={"expose": ["client"]})

        assert module.is_exposable is False
        assert module.exposed_folders() == []

    @pytest.mark.parametrize("extra", [{}, {"expose": []}, {"expose": None}])
    def test_nothing_declared(self, layout: ProjectLayout, extra: dict) -> None:
        """Missing or empty declarations expose nothing."""
        assert _module(layout, extra=extra).exposed_folders() == []

    def test_string_declaration_rejected(self, layout: ProjectLayout) -> None:
        """A bare string instead of a list is invalid."""
        with pytest.raises(InvalidExposurePathError, match="Invalid expose list"):
            _module(layout, extra={"expose": "client"}).exposed_folders()

    def test_mapping_declaration_rejected(self, layout: ProjectLayout) -> None:
        """A mapping instead of a list is invalid."""
        with pytest.raises(InvalidExposurePathError):
            _module(layout, extra={"expose": {"client": True}}).exposed_folders()

    def test_traversal_rejected(self, layout: ProjectLayout) -> None:
        """Unsafe folders reject the whole declaration."""
        with pytest.raises(InvalidExposurePathError):
            _module(layout, extra={"expose": ["client", "../../etc"]}).exposed_folders()

    def test_custom_module_type(self, layout: ProjectLayout) -> None:
        """The exposable type can be configured."""
        package = PackageHandle(name="acme/theme", type="web-theme", extra={"expose": ["css"]})

        module = ModuleDescriptor(package, layout, module_type="web-theme")

        assert module.exposed_folders() == ["css"]


class TestModulePaths:
    """Tests for install_path and resource_path."""

    def test_default_install_path(self, layout: ProjectLayout) -> None:
        """Dependencies live at <vendor>/<name>."""
        assert _module(layout).install_path() == layout.vendor_dir / "acme" / "widgets"

    def test_root_package_installs_at_project_root(self, layout: ProjectLayout) -> None:
        """The root package's sources are the project itself."""
        module = _module(layout, name="acme/site", is_root=True, install_path="ignored")

        assert module.install_path() == layout.project_root

    def test_relative_install_path(self, layout: ProjectLayout) -> None:
        """Relative declared paths resolve against the project root."""
        module = _module(layout, install_path="packages/widgets")

        assert module.install_path() == layout.project_root / "packages" / "widgets"

    def test_absolute_install_path(self, layout: ProjectLayout, tmp_path: Path) -> None:
        """Absolute declared paths are used as they are."""
        elsewhere = tmp_path / "shared" / "widgets"

        assert _module(layout, install_path=str(elsewhere)).install_path() == elsewhere

    def test_resource_path_keeps_vendor_segment(self, layout: ProjectLayout) -> None:
        """Targets are grouped by vendor and package name."""
        assert _module(layout).resource_path() == layout.resources_dir / "acme" / "widgets"

    def test_unsafe_name_rejected(self, layout: ProjectLayout) -> None:
        """Names escaping the resources root are rejected."""
        with pytest.raises(InvalidExposurePathError, match="Invalid module name"):
            _module(layout, name="../evil").resource_path()


class TestRequests:
    """Tests for ModuleDescriptor.requests."""

    def test_builds_source_and_target(self, layout: ProjectLayout) -> None:
        """One request per folder, mapping source to target."""
        module = _module(layout, extra={"expose": ["client", "js/dist"]})

        requests = module.requests()

        assert [r.folder for r in requests] == ["client", "js/dist"]
        assert requests[0].module == "acme/widgets"
        assert requests[0].source == layout.vendor_dir / "acme" / "widgets" / "client"
        assert requests[0].target == layout.resources_dir / "acme" / "widgets" / "client"
        assert requests[1].target == layout.resources_dir / "acme" / "widgets" / "js" / "dist"

    def test_no_requests_without_folders(self, layout: ProjectLayout) -> None:
        """Modules exposing nothing produce no requests, even with odd names."""
        assert _module(layout, name="../evil").requests() == []
