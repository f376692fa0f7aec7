"""Pydantic models for the exposure registry file.

This module defines the structure of the .exposed.toml file kept in the
resources directory, which maps every exposed target to the method that
created it and the module that owns it.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type alias for recorded methods
RecordedMethodType = Literal["symlink", "copy", "none"]

REGISTRY_VERSION = "1.0"


class ExposureRecord(BaseModel):
    """Registry entry for a single exposed target.

    Attributes:
        method: Method that created the target ("symlink", "copy" or "none").
        module: Name of the module owning the target.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: Annotated[RecordedMethodType, Field(description="Method that created the target")]
    module: Annotated[str, Field(min_length=1, description="Owning module name")]


class RegistryFile(BaseModel):
    """Complete registry file contents.

    Attributes:
        version: Registry schema version.
        exposures: Target path (relative to the resources root, POSIX
            separators) to its ExposureRecord.
    """

    model_config = ConfigDict(extra="forbid")

    version: Annotated[str, Field(description="Registry schema version")] = REGISTRY_VERSION
    exposures: Annotated[
        dict[str, ExposureRecord],
        Field(default_factory=dict, description="Exposed targets"),
    ]

    @field_validator("exposures")
    @classmethod
    def validate_relative_keys(cls, value: dict[str, ExposureRecord]) -> dict[str, ExposureRecord]:
        """Reject target keys that could point outside the resources root."""
        for key in value:
            parts = key.split("/")
            if not key or key.startswith("/") or "\\" in key or ".." in parts or "" in parts:
                msg = f"Invalid registry target path: {key!r}"
                raise ValueError(msg)
        return value
