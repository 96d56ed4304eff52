"""N-dimensional Binning and Lookup Grids

Binned lookup tables over bounded or periodic N-dimensional coordinate
spaces, built from per-axis binning strategies.

Key Principles:
- Every axis carries underflow and overflow bins around its real bins
- Equidistant and variable-width axes mix freely in one grid
- Open, bound and closed (periodic) boundary policies per axis
- Multilinear interpolation on bin lower-left edges
- Only configuration is serialized, never cell contents

Version: 1.0
"""

__version__ = "1.0"

# Configuration
from ndbinning.config.enums import AxisBoundaryType, AxisType, ValueType
from ndbinning.config.grid_config import AxisConfig, GridConfig
from ndbinning.config.validation import (
    ConfigurationError,
    ConfigurationWarning,
    DimensionMismatchError,
    create_validated_config,
)

# Core data structures
from ndbinning.core.axis import Axis, EquidistantAxis, VariableAxis
from ndbinning.core.grid import Grid
from ndbinning.core.any_grid import (
    AnyGrid,
    GridTypeRegistry,
    GridTypeTag,
    create_any_grid,
    get_default_registry,
)

# Serialization
from ndbinning.io.variant import from_variant, load_variant, save_variant, to_variant

__all__ = [
    # Version
    "__version__",
    # Configuration
    "AxisBoundaryType",
    "AxisType",
    "ValueType",
    "AxisConfig",
    "GridConfig",
    "ConfigurationError",
    "ConfigurationWarning",
    "DimensionMismatchError",
    "create_validated_config",
    # Core
    "Axis",
    "EquidistantAxis",
    "VariableAxis",
    "Grid",
    "AnyGrid",
    "GridTypeRegistry",
    "GridTypeTag",
    "create_any_grid",
    "get_default_registry",
    # Serialization
    "from_variant",
    "load_variant",
    "save_variant",
    "to_variant",
]
