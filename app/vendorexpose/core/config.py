"""Exposure settings and method selection.

This module provides the settings model and the loader that merges its
sources. From lowest to highest priority:

1. Built-in defaults
2. <project>/vendorexpose.toml
3. VENDOR_EXPOSE_METHOD environment variable
4. Explicit override (the CLI --method option)

Example vendorexpose.toml::

    method = "copy"
    resources_dir = "public/resources"
"""

import logging
import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vendorexpose.core.paths import DEFAULT_RESOURCES_DIR, DEFAULT_VENDOR_DIR, ProjectLayout
from vendorexpose.models.package import MODULE_TYPE

logger = logging.getLogger(__name__)

# Environment variable selecting the expose method
METHOD_ENV = "VENDOR_EXPOSE_METHOD"


class ExposeMethodChoice(str, Enum):
    """Configurable expose methods.

    Attributes:
        NONE: Do not expose anything.
        COPY: Always copy folders.
        SYMLINK: Always symlink folders.
        AUTO: Symlink, falling back to copy when symlinks fail.
    """

    NONE = "none"
    COPY = "copy"
    SYMLINK = "symlink"
    AUTO = "auto"


class SettingsError(Exception):
    """Raised when the project settings file cannot be used."""


class ExposeSettings(BaseModel):
    """Settings for an exposure run.

    Attributes:
        method: Expose method to use.
        vendor_dir: Dependency folder, relative to the project root.
        resources_dir: Managed resources folder, relative to the project root.
        module_type: Package type whose folders are exposed.
    """

    model_config = ConfigDict(extra="forbid")

    method: Annotated[
        ExposeMethodChoice,
        Field(description="Expose method (none, copy, symlink, auto)"),
    ] = ExposeMethodChoice.AUTO
    vendor_dir: Annotated[
        str,
        Field(min_length=1, description="Dependency folder"),
    ] = DEFAULT_VENDOR_DIR
    resources_dir: Annotated[
        str,
        Field(min_length=1, description="Managed resources folder"),
    ] = DEFAULT_RESOURCES_DIR
    module_type: Annotated[
        str,
        Field(min_length=1, description="Package type to expose"),
    ] = MODULE_TYPE

    @field_validator("vendor_dir", "resources_dir")
    @classmethod
    def validate_relative_dir(cls, value: str) -> str:
        """Keep configured folders inside the project root."""
        parts = Path(value).parts
        if Path(value).is_absolute() or ".." in parts:
            msg = f"Folder must be relative to the project root: {value!r}"
            raise ValueError(msg)
        return value

    def layout(self, project_root: Path) -> ProjectLayout:
        """Resolve the project layout for these settings.

        Args:
            project_root: Project directory.

        Returns:
            ProjectLayout using the configured folder names.
        """
        return ProjectLayout.from_root(project_root, self.vendor_dir, self.resources_dir)


def method_from_env() -> ExposeMethodChoice | None:
    """Read the expose method from the environment.

    Unrecognized values fall back to AUTO with a warning.

    Returns:
        The selected method, or None if the variable is unset or empty.
    """
    raw = os.environ.get(METHOD_ENV, "").strip().lower()
    if not raw:
        return None
    try:
        return ExposeMethodChoice(raw)
    except ValueError:
        logger.warning("Unknown %s value %r, using %s", METHOD_ENV, raw, ExposeMethodChoice.AUTO.value)
        return ExposeMethodChoice.AUTO


def load_settings(
    project_root: Path,
    method: ExposeMethodChoice | None = None,
) -> ExposeSettings:
    """Load settings for a project.

    Args:
        project_root: Project directory containing the optional settings file.
        method: Explicit method override, taking precedence over everything.

    Returns:
        Validated ExposeSettings.

    Raises:
        SettingsError: If the settings file is unreadable or invalid.
    """
    settings_path = ProjectLayout.from_root(project_root).settings_path
    data: dict[str, object] = {}

    if settings_path.exists():
        try:
            with open(settings_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
        except OSError as e:
            raise SettingsError(f"Failed to read {settings_path}: {e}") from e
        logger.debug("Loaded settings from %s", settings_path)

    env_method = method_from_env()
    if env_method is not None:
        data["method"] = env_method.value
    if method is not None:
        data["method"] = method.value

    try:
        return ExposeSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e
