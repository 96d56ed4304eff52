"""Core binning: axes, grids, interpolation and type-erased grids."""

from ndbinning.core.axis import Axis, EquidistantAxis, VariableAxis
from ndbinning.core.grid import Grid
from ndbinning.core.interpolation import interpolate
from ndbinning.core.any_grid import (
    AnyGrid,
    GridTypeRegistry,
    GridTypeTag,
    RegisteredGrid,
    create_any_grid,
    get_default_registry,
)

__all__ = [
    "Axis",
    "EquidistantAxis",
    "VariableAxis",
    "Grid",
    "interpolate",
    "AnyGrid",
    "GridTypeRegistry",
    "GridTypeTag",
    "RegisteredGrid",
    "create_any_grid",
    "get_default_registry",
]
