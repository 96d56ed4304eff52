"""Configuration Module

Enums, defaults, configuration dataclasses and validation for ndbinning.

Default Configuration (loaded from defaults.yaml):
    from ndbinning.config import get_default

    max_dims = get_default('any_grid.max_dimensions')

Recommended Usage:
    from ndbinning.config import AxisConfig, create_validated_config
    from ndbinning.config.enums import AxisBoundaryType

    config = create_validated_config(axes=[
        AxisConfig(min=0.0, max=1.0, n_bins=10),
        AxisConfig(min=0.0, max=360.0, n_bins=36, boundary_type=AxisBoundaryType.CLOSED),
    ])
    grid = config.build()

Import Policy:
    DO NOT use: from ndbinning.config import *

Submodules:
    enums: AxisType, AxisBoundaryType, ValueType
    yaml_loader: YAML configuration loader (get_default, get_defaults)
    grid_config: Configuration dataclasses (AxisConfig, GridConfig)
    validation: Error types and validation utilities
"""

from ndbinning.config.enums import AxisBoundaryType, AxisType, ValueType
# Import YAML loader functions first (no circular dependencies)
from ndbinning.config.yaml_loader import get_default, get_defaults, reload_defaults
from ndbinning.config.grid_config import AxisConfig, GridConfig
from ndbinning.config.validation import (
    ConfigurationError,
    ConfigurationWarning,
    DimensionMismatchError,
    check_dimensions,
    create_validated_config,
    validate_config,
    warn_if_unsafe,
)


__all__ = [
    # Enums
    "AxisType",
    "AxisBoundaryType",
    "ValueType",
    # YAML loader
    "get_default",
    "get_defaults",
    "reload_defaults",
    # Dataclasses
    "AxisConfig",
    "GridConfig",
    # Validation
    "ConfigurationError",
    "ConfigurationWarning",
    "DimensionMismatchError",
    "check_dimensions",
    "validate_config",
    "warn_if_unsafe",
    "create_validated_config",
]
