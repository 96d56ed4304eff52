"""
Configuration Enums for ndbinning

This module defines the enumeration types used by axes, grids and the
type-erased grid registry.

Import Policy:
    from ndbinning.config.enums import AxisType, AxisBoundaryType, ValueType

DO NOT use: from ndbinning.config.enums import *
"""

from enum import Enum


class AxisType(Enum):
    """Binning strategy of a single axis.

    Options:
        EQUIDISTANT: n bins of identical width between min and max
        VARIABLE: Bins delimited by an explicit, strictly increasing edge list
    """
    EQUIDISTANT = "Equidistant"
    VARIABLE = "Variable"


class AxisBoundaryType(Enum):
    """How an axis treats coordinates and neighbours past its domain.

    Options:
        OPEN: Out-of-range coordinates fall into the underflow/overflow bins,
            neighbour queries may reach those bins
        BOUND: Indexing as OPEN, but neighbour queries are clipped to the
            real bins
        CLOSED: Periodic axis; coordinates and neighbours wrap around

    Note:
        CLOSED axes never return the underflow or overflow bin from a
        coordinate lookup.
    """
    OPEN = "Open"
    BOUND = "Bound"
    CLOSED = "Closed"


class ValueType(Enum):
    """Value stored in each grid cell.

    Options:
        DOUBLE: Scalar float
        VECTOR2: 2-component float vector
        VECTOR3: 3-component float vector
    """
    DOUBLE = "double"
    VECTOR2 = "vector2"
    VECTOR3 = "vector3"

    @property
    def shape(self) -> tuple:
        """Trailing storage shape of one cell."""
        return _VALUE_SHAPES[self]

    @classmethod
    def from_shape(cls, shape) -> "ValueType":
        """Find the value type with the given cell shape.

        Raises:
            ValueError: If no value type has this shape.
        """
        shape = tuple(shape)
        for value_type, value_shape in _VALUE_SHAPES.items():
            if value_shape == shape:
                return value_type
        raise ValueError(f"No value type with cell shape {shape}")


_VALUE_SHAPES = {
    ValueType.DOUBLE: (),
    ValueType.VECTOR2: (2,),
    ValueType.VECTOR3: (3,),
}
