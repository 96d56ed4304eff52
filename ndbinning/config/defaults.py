"""Default Configuration Values - Single Source of Truth

This module contains all default values for axis and grid configuration.
These are the canonical defaults that should be used throughout the codebase.

Import Policy:
    from ndbinning.config.defaults import DEFAULT_BOUNDARY_TYPE, DEFAULT_DTYPE

DO NOT use: from ndbinning.config.defaults import *
"""

from ndbinning.config.enums import AxisBoundaryType, ValueType

# ============================================================================
# Axis Defaults
# ============================================================================

DEFAULT_BOUNDARY_TYPE = AxisBoundaryType.OPEN
DEFAULT_AXIS_MIN = 0.0
DEFAULT_AXIS_MAX = 1.0
DEFAULT_N_BINS = 10
DEFAULT_MIN_CLOSED_BINS = 3  # below this a periodic neighbourhood covers the whole axis

# ============================================================================
# Grid Defaults
# ============================================================================

DEFAULT_VALUE_TYPE = ValueType.DOUBLE
DEFAULT_DTYPE = "float64"
DEFAULT_NEIGHBORHOOD_SIZE = 1
DEFAULT_MAX_STORAGE_CELLS = 50_000_000  # ~400 MB of float64 scalars
DEFAULT_MAX_DIMENSIONS = 3  # type-erased grids registered by default

# ============================================================================
# Serialization Defaults
# ============================================================================

VARIANT_TYPE_KEY = "type"
VARIANT_PAYLOAD_KEY = "payload"
