"""Data models for vendorexpose.

This module exports the core data structures used throughout the application.
"""

from vendorexpose.models.exposure import (
    ExposeRequest,
    ExposureOutcome,
    ExposureReport,
    ExposureResult,
    MethodName,
)
from vendorexpose.models.package import MODULE_TYPE, PackageChange, PackageEvent, PackageHandle
from vendorexpose.models.registry import REGISTRY_VERSION, ExposureRecord, RegistryFile

__all__ = [
    "MODULE_TYPE",
    "REGISTRY_VERSION",
    "ExposeRequest",
    "ExposureOutcome",
    "ExposureRecord",
    "ExposureReport",
    "ExposureResult",
    "MethodName",
    "PackageChange",
    "PackageEvent",
    "PackageHandle",
    "RegistryFile",
]
