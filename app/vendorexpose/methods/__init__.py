"""Expose methods for mirroring module folders into the resources root.

This module provides the abstract ExposeMethod and its concrete
strategies (null, copy, symlink, chained), plus factories selecting a
strategy from configuration or from a recorded method name.
"""

from vendorexpose.core.config import ExposeMethodChoice
from vendorexpose.methods.base import ExposeMethod, ExposureFailedError, remove_path
from vendorexpose.methods.chained import ChainedMethod
from vendorexpose.methods.copy import CopyMethod
from vendorexpose.methods.null import NullMethod
from vendorexpose.methods.symlink import SymlinkMethod
from vendorexpose.models.exposure import MethodName


def create_method(choice: ExposeMethodChoice = ExposeMethodChoice.AUTO) -> ExposeMethod:
    """Get the expose method for a configured choice.

    Args:
        choice: Configured method; AUTO tries symlink first, then copy.

    Returns:
        A fresh ExposeMethod instance.
    """
    if choice == ExposeMethodChoice.NONE:
        return NullMethod()
    if choice == ExposeMethodChoice.COPY:
        return CopyMethod()
    if choice == ExposeMethodChoice.SYMLINK:
        return SymlinkMethod()
    return ChainedMethod([SymlinkMethod(), CopyMethod()])


def method_for(name: MethodName | str) -> ExposeMethod:
    """Get the method able to remove a target recorded with the given name.

    Args:
        name: Recorded method ("symlink", "copy" or "none").

    Returns:
        The matching concrete ExposeMethod.

    Raises:
        ValueError: If the name is not a known method.
    """
    method = MethodName(name)
    if method == MethodName.SYMLINK:
        return SymlinkMethod()
    if method == MethodName.COPY:
        return CopyMethod()
    return NullMethod()


__all__ = [
    "ChainedMethod",
    "CopyMethod",
    "ExposeMethod",
    "ExposureFailedError",
    "NullMethod",
    "SymlinkMethod",
    "create_method",
    "method_for",
    "remove_path",
]
