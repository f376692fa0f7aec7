"""Module descriptor resolving where a package's folders come from and go to.

A module is any package of the exposable type, including the project's
own root package. The descriptor turns the package handle reported by
the dependency manager into source and target paths.
"""

from collections.abc import Sequence
from pathlib import Path

from vendorexpose.core.paths import ProjectLayout
from vendorexpose.core.validation import (
    InvalidExposurePathError,
    validate_folders,
    validate_module_name,
)
from vendorexpose.models.exposure import ExposeRequest
from vendorexpose.models.package import MODULE_TYPE, PackageHandle


class ModuleDescriptor:
    """Resolves paths and exposed folders for one package.

    Example:
        >>> module = ModuleDescriptor(package, layout)
        >>> for request in module.requests():
        ...     method.expose_directory(request.source, request.target)
    """

    def __init__(
        self,
        package: PackageHandle,
        layout: ProjectLayout,
        module_type: str = MODULE_TYPE,
    ) -> None:
        """Initialize the descriptor.

        Args:
            package: Package handle from the dependency manager.
            layout: Project layout the package lives in.
            module_type: Package type whose folders are exposed.
        """
        self.package = package
        self.layout = layout
        self.module_type = module_type

    @property
    def name(self) -> str:
        """Module name."""
        return self.package.name

    @property
    def is_exposable(self) -> bool:
        """Check if the package has the exposable type."""
        return self.package.type == self.module_type

    def exposed_folders(self) -> list[str]:
        """Get the validated folders this module exposes.

        Returns:
            Folder names relative to the module root; empty if the package
            is not exposable or declares nothing.

        Raises:
            InvalidExposurePathError: If any declared folder is unsafe or
                the declaration is not a list.
        """
        if not self.is_exposable:
            return []

        declared = self.package.declared_expose
        if not declared:
            return []
        if isinstance(declared, str) or not isinstance(declared, Sequence):
            raise InvalidExposurePathError(self.name, declared, "Invalid expose list")
        return validate_folders(self.name, declared)

    def install_path(self) -> Path:
        """Get the absolute source directory of the module.

        Returns:
            The project root for the root package, the declared install
            path (relative paths resolve against the project root), or
            <vendor dir>/<name> otherwise.
        """
        if self.package.is_root:
            return self.layout.project_root
        if self.package.install_path:
            declared = Path(self.package.install_path)
            if declared.is_absolute():
                return declared
            return self.layout.project_root / declared
        return self.layout.vendor_dir.joinpath(*validate_module_name(self.name))

    def resource_path(self) -> Path:
        """Get the directory the module's folders are exposed under.

        The name segments are kept ("acme/widgets" becomes
        <resources>/acme/widgets) so same-named packages from different
        vendors never collide.

        Returns:
            Absolute target directory for this module.

        Raises:
            InvalidExposurePathError: If the module name is unsafe.
        """
        return self.layout.resources_dir.joinpath(*validate_module_name(self.name))

    def requests(self) -> list[ExposeRequest]:
        """Build one ExposeRequest per exposed folder.

        All validation happens before any request is returned.

        Returns:
            Requests in declaration order.

        Raises:
            InvalidExposurePathError: If a folder or the module name is unsafe.
        """
        folders = self.exposed_folders()
        if not folders:
            return []
        source_root = self.install_path()
        target_root = self.resource_path()
        return [
            ExposeRequest(
                module=self.name,
                folder=folder,
                source=source_root / folder,
                target=target_root / folder,
            )
            for folder in folders
        ]
