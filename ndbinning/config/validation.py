"""
Configuration Validation Utilities

This module provides the error types of the package and validation
functions for axis and grid configurations.

Import Policy:
    from ndbinning.config.validation import ConfigurationError, validate_config, warn_if_unsafe

DO NOT use: from ndbinning.config.validation import *
"""

import warnings
from typing import List, Tuple

import numpy as np

from ndbinning.config.defaults import (
    DEFAULT_DTYPE,
    DEFAULT_MAX_STORAGE_CELLS,
    DEFAULT_MIN_CLOSED_BINS,
)
from ndbinning.config.enums import AxisBoundaryType
from ndbinning.config.grid_config import AxisConfig, GridConfig
from ndbinning.config.yaml_loader import get_default


class ConfigurationError(Exception):
    """Raised when an axis, grid or serialized record is invalid."""

    pass


class DimensionMismatchError(ValueError):
    """Raised when a point or index tuple has the wrong number of entries."""

    pass


class ConfigurationWarning(Warning):
    """Warning for potentially unsafe configuration choices."""

    pass


def check_dimensions(expected: int, values, what: str = "point") -> tuple:
    """Return ``values`` as a tuple after checking its length.

    Raises:
        DimensionMismatchError: If the length differs from ``expected``.
    """
    if np.ndim(values) == 0:
        values = (values,)
    values = tuple(values)
    if len(values) != expected:
        raise DimensionMismatchError(
            f"{what} has {len(values)} entries, grid has {expected} axes"
        )
    return values


def validate_config(config, raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Validate an axis or grid configuration.

    Args:
        config: AxisConfig or GridConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        ConfigurationError: If validation fails and raise_on_error=True
    """
    errors = config.validate()

    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []


def warn_if_unsafe(config: GridConfig) -> List[str]:
    """Check for potentially unsafe configuration choices.

    These are not errors, but choices that may lead to:
    - Excessive memory use
    - Periodic neighbourhoods that silently cover the whole axis
    - Loss of precision when accumulating

    Warnings are issued via Python's warnings module.

    Args:
        config: GridConfig to check

    Returns:
        List of warning messages (empty if no warnings)
    """
    warnings_list = []

    # Check 1: storage size
    max_cells = get_default("warnings.max_storage_cells", DEFAULT_MAX_STORAGE_CELLS)
    cells = config.storage_cells()
    if cells > max_cells:
        warnings_list.append(
            f"Grid needs {cells} storage cells (limit {max_cells}). "
            "Consider fewer bins or fewer axes."
        )

    # Check 2: tiny periodic axes
    min_closed = get_default("warnings.min_closed_bins", DEFAULT_MIN_CLOSED_BINS)
    for i, axis in enumerate(config.axes):
        if axis.boundary_type == AxisBoundaryType.CLOSED and axis.get_n_bins() < min_closed:
            warnings_list.append(
                f"axis[{i}] is closed with only {axis.get_n_bins()} bin(s). "
                "Every neighbourhood query will return the whole axis."
            )

    # Check 3: reduced precision storage
    if np.dtype(config.dtype) != np.dtype(DEFAULT_DTYPE):
        warnings_list.append(
            f"dtype is {np.dtype(config.dtype)}, accumulating with fill() may lose precision. "
            f"Use {DEFAULT_DTYPE} unless memory is tight."
        )

    for warning_msg in warnings_list:
        warnings.warn(warning_msg, ConfigurationWarning, stacklevel=2)

    return warnings_list


def create_validated_config(axes=None, warn: bool = True, **kwargs) -> GridConfig:
    """Create a GridConfig and validate it.

    Args:
        axes: List of AxisConfig instances or axis dictionaries
            (default: a single default axis)
        warn: If True, call warn_if_unsafe on the result
        **kwargs: Remaining GridConfig fields (value_type, dtype)

    Returns:
        Validated GridConfig

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if axes is not None:
        kwargs["axes"] = [a if isinstance(a, AxisConfig) else AxisConfig.from_dict(a) for a in axes]
    config = GridConfig(**kwargs)

    validate_config(config, raise_on_error=True)
    if warn:
        warn_if_unsafe(config)

    return config
