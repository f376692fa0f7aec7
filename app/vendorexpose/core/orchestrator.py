"""Exposure orchestration.

This module provides the ExposureOrchestrator, which drives a complete
exposure run: it prepares the resources root, exposes every folder of
every exposable module with the configured method, records the results,
and removes whatever earlier runs left behind. It also handles the
cheaper targeted path used when a single package is uninstalled.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from vendorexpose.core.config import ExposeSettings
from vendorexpose.core.module import ModuleDescriptor
from vendorexpose.core.notify import LoggingNotifier, Notifier
from vendorexpose.core.paths import (
    ProjectLayout,
    ensure_resources_dir,
    reserved_names,
    seed_resources,
    stays_inside,
)
from vendorexpose.core.registry import RegistryError, ResourceRegistry
from vendorexpose.core.validation import InvalidExposurePathError
from vendorexpose.methods import ExposeMethod, create_method, remove_path
from vendorexpose.models.exposure import (
    ExposeRequest,
    ExposureOutcome,
    ExposureReport,
    ExposureResult,
)
from vendorexpose.models.package import PackageEvent, PackageHandle

logger = logging.getLogger(__name__)


class ExposureOrchestrator:
    """Drives exposure runs for a project.

    Example:
        >>> settings = load_settings(project_root)
        >>> orchestrator = ExposureOrchestrator(settings.layout(project_root), settings)
        >>> report = orchestrator.run(packages)
        >>> print(len(report.exposed), len(report.failures))
    """

    def __init__(
        self,
        layout: ProjectLayout,
        settings: ExposeSettings | None = None,
        notifier: Notifier | None = None,
        method: ExposeMethod | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            layout: Project layout to operate on.
            settings: Exposure settings; defaults apply when None.
            notifier: Sink for progress and warnings; logging only when None.
            method: Expose method overriding the one selected by settings.
        """
        self.layout = layout
        self.settings = settings or ExposeSettings()
        self._notifier = notifier or LoggingNotifier()
        self._method = method

    def resolve_method(self) -> ExposeMethod:
        """Get the expose method for this run."""
        if self._method is not None:
            return self._method
        return create_method(self.settings.method)

    def prepare(self) -> ResourceRegistry:
        """Create and seed the resources root, then load the registry.

        Returns:
            Loaded ResourceRegistry.

        Raises:
            ResourcesUnavailableError: If the resources root cannot be created.
        """
        resources_dir = ensure_resources_dir(self.layout.resources_dir)
        for seeded in seed_resources(resources_dir):
            logger.info("Created %s", seeded)
        return ResourceRegistry(resources_dir, self._notifier).load()

    def run(self, packages: Iterable[PackageHandle]) -> ExposureReport:
        """Expose all modules and reconcile the resources root.

        Modules with invalid configuration are reported and skipped; their
        existing exposures are left alone. Folder failures are reported
        and the run carries on. A folder whose target equals, contains or
        lies below a target already taken in this run is a conflict.

        Args:
            packages: Every current package, root project first.

        Returns:
            ExposureReport describing the run.

        Raises:
            ResourcesUnavailableError: If the resources root cannot be created.
        """
        registry = self.prepare()
        method = self.resolve_method()
        logger.debug("Using %s method for %s", method.name, self.layout.project_root)

        modules = [
            ModuleDescriptor(package, self.layout, self.settings.module_type)
            for package in packages
        ]
        modules = [module for module in modules if module.is_exposable]

        report = ExposureReport()
        # Targets kept or exposed in this run, with their module
        claimed: dict[Path, str] = {}
        planned: list[tuple[ModuleDescriptor, list[ExposeRequest]]] = []

        for module in modules:
            try:
                requests = module.requests()
            except InvalidExposurePathError as e:
                report.skipped_modules[module.name] = str(e)
                self._notifier.error(f"Skipping module {module.name}: {e}")
                for target in registry.targets_for(module.name):
                    claimed[target] = module.name
                continue
            planned.append((module, requests))

        owners = self._assign_owners(planned, registry, claimed)
        report.removed.extend(registry.prune_stale(owners))

        for module, requests in planned:
            if not requests:
                continue
            self._notifier.module(module.name)
            for request in requests:
                result = self._expose(request, method, registry, owners, claimed)
                report.results.append(result)

        report.removed.extend(registry.prune_stale(claimed))
        report.removed.extend(registry.sweep_untracked(claimed, reserved_names()))
        for path in report.removed:
            logger.info("Removed stale resource %s", path)

        self._save(registry)
        return report

    def remove_module(self, package: PackageHandle) -> ExposureReport:
        """Remove everything exposed for one uninstalled package.

        Deletes the module's recorded targets and its resource directory,
        then prunes parent directories left empty. Other modules are not
        touched.

        Args:
            package: The removed package.

        Returns:
            ExposureReport listing removed paths.
        """
        report = ExposureReport()
        if not self.layout.resources_dir.is_dir():
            return report

        registry = ResourceRegistry(self.layout.resources_dir, self._notifier).load()
        module = ModuleDescriptor(package, self.layout, self.settings.module_type)
        report.removed.extend(registry.remove_module(module.name))

        try:
            resource_path = module.resource_path()
        except InvalidExposurePathError as e:
            report.skipped_modules[module.name] = str(e)
            self._notifier.error(f"Cannot remove resources of {module.name}: {e}")
            self._save(registry)
            return report

        if self._owned_elsewhere(registry, resource_path):
            logger.debug("Keeping %s, other modules expose below it", resource_path)
        elif not stays_inside(resource_path, registry.resources_dir):
            self._notifier.warning(f"Not removing {resource_path}: a parent directory is a link")
        elif resource_path.exists() or resource_path.is_symlink():
            try:
                remove_path(resource_path)
            except OSError as e:
                self._notifier.warning(f"Could not remove {resource_path}: {e}")
            else:
                report.removed.append(resource_path)
                registry.prune_empty_parents(resource_path)

        if report.removed:
            self._notifier.info(f"Removed web directories for module {module.name}")
        self._save(registry)
        return report

    def apply_events(
        self,
        events: Iterable[PackageEvent],
        packages: Iterable[PackageHandle],
    ) -> ExposureReport:
        """Handle the package changes of one dependency manager run.

        When every change is an uninstall, only the removed modules are
        cleaned up. Any install or update triggers a full run.

        Args:
            events: Package changes applied in this run.
            packages: Every current package, root project first.

        Returns:
            ExposureReport for the work performed.
        """
        events = list(events)
        if events and all(event.is_uninstall for event in events):
            report = ExposureReport()
            for event in events:
                partial = self.remove_module(event.package)
                report.removed.extend(partial.removed)
                report.skipped_modules.update(partial.skipped_modules)
            return report
        return self.run(packages)

    @staticmethod
    def _assign_owners(
        planned: list[tuple[ModuleDescriptor, list[ExposeRequest]]],
        registry: ResourceRegistry,
        kept: dict[Path, str],
    ) -> dict[Path, str]:
        """Decide which module gets each demanded target.

        The recorded owner keeps a target for as long as it still asks for
        it. Otherwise the first module asking for it wins, root project
        first. Targets kept for skipped modules stay with them.
        """
        demand: dict[Path, list[str]] = {}
        for _module, requests in planned:
            for request in requests:
                demand.setdefault(request.target, []).append(request.module)

        owners = dict(kept)
        for target, names in demand.items():
            if target in owners:
                continue
            recorded = registry.owner_of(target)
            owners[target] = recorded if recorded in names else names[0]
        return owners

    def _expose(
        self,
        request: ExposeRequest,
        method: ExposeMethod,
        registry: ResourceRegistry,
        owners: dict[Path, str],
        claimed: dict[Path, str],
    ) -> ExposureResult:
        """Expose one folder, unless it collides with another target."""
        owner = owners[request.target]
        if owner != request.module:
            return self._conflict(
                request, owner, f"{request.target} is already exposed by module {owner}"
            )

        nested = self._overlapping(request.target, claimed)
        if nested is not None:
            owner = claimed[nested]
            return self._conflict(
                request, owner, f"{request.target} overlaps {nested} of module {owner}"
            )

        if not stays_inside(request.target, registry.resources_dir):
            message = (
                f"Could not expose folder {request.folder} of module {request.module}: "
                f"a parent of {request.target} is a link"
            )
            self._notifier.warning(message)
            return ExposureResult(request=request, outcome=ExposureOutcome.fail(message))

        claimed[request.target] = request.module
        outcome = method.expose_directory(request.source, request.target)

        if outcome.success and outcome.method is not None:
            registry.record_exposure(request.target, outcome.method, request.module)
            self._notifier.folder(request.folder, outcome.method.value)
        else:
            self._notifier.warning(
                f"Could not expose folder {request.folder} of module {request.module}: "
                f"{outcome.error}"
            )
        return ExposureResult(request=request, outcome=outcome)

    def _conflict(self, request: ExposeRequest, owner: str, detail: str) -> ExposureResult:
        message = (
            f"Conflict: {detail}, skipping folder {request.folder} of module {request.module}"
        )
        self._notifier.warning(message)
        return ExposureResult(
            request=request, outcome=ExposureOutcome.fail(message), conflict=owner
        )

    @staticmethod
    def _overlapping(target: Path, claimed: dict[Path, str]) -> Path | None:
        """Find a claimed target that contains target or lies below it."""
        for other in claimed:
            if other != target and (other.is_relative_to(target) or target.is_relative_to(other)):
                return other
        return None

    def _owned_elsewhere(self, registry: ResourceRegistry, path: Path) -> bool:
        """Check if any remaining record lies at or below path."""
        return any(target == path or target.is_relative_to(path) for target in registry.records)

    def _save(self, registry: ResourceRegistry) -> None:
        try:
            registry.save()
        except RegistryError as e:
            self._notifier.error(f"Could not save registry: {e}")
