"""Axis and Grid Configuration Dataclasses

Plain, serializable descriptions of axes and grids. A configuration can be
validated without building anything, converted to and from dictionaries,
and turned into the live objects with ``build()``.

Import Policy:
    from ndbinning.config.grid_config import AxisConfig, GridConfig

DO NOT use: from ndbinning.config.grid_config import *
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from ndbinning.config.defaults import (
    DEFAULT_AXIS_MAX,
    DEFAULT_AXIS_MIN,
    DEFAULT_BOUNDARY_TYPE,
    DEFAULT_DTYPE,
    DEFAULT_N_BINS,
    DEFAULT_VALUE_TYPE,
)
from ndbinning.config.enums import AxisBoundaryType, AxisType, ValueType


def _is_number(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def _is_edge_list(value) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    return isinstance(value, (list, tuple))


@dataclass
class AxisConfig:
    """Configuration of a single axis.

    Attributes:
        axis_type: EQUIDISTANT uses min/max/n_bins, VARIABLE uses edges
        boundary_type: Boundary policy of the axis
        min, max: Domain of an equidistant axis
        n_bins: Number of real bins of an equidistant axis
        edges: Strictly increasing bin edges of a variable axis
    """

    axis_type: AxisType = AxisType.EQUIDISTANT
    boundary_type: AxisBoundaryType = DEFAULT_BOUNDARY_TYPE
    min: float = DEFAULT_AXIS_MIN
    max: float = DEFAULT_AXIS_MAX
    n_bins: int = DEFAULT_N_BINS
    edges: Optional[list[float]] = None

    def validate(self) -> list[str]:
        """Validate axis configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not isinstance(self.axis_type, AxisType):
            errors.append(f"axis_type must be an AxisType, got {self.axis_type!r}")
        if not isinstance(self.boundary_type, AxisBoundaryType):
            errors.append(f"boundary_type must be an AxisBoundaryType, got {self.boundary_type!r}")

        if self.axis_type == AxisType.EQUIDISTANT:
            if isinstance(self.n_bins, bool) or not isinstance(self.n_bins, (int, np.integer)):
                errors.append(f"n_bins must be an integer, got {self.n_bins!r}")
            elif self.n_bins < 1:
                errors.append(f"n_bins must be >= 1, got {self.n_bins}")
            if not (_is_number(self.min) and _is_number(self.max)):
                errors.append(f"min ({self.min!r}) and max ({self.max!r}) must be numbers")
            elif not (math.isfinite(self.min) and math.isfinite(self.max)):
                errors.append(f"min ({self.min}) and max ({self.max}) must be finite")
            elif self.max <= self.min:
                errors.append(f"max ({self.max}) must be > min ({self.min})")

        elif self.axis_type == AxisType.VARIABLE:
            if self.edges is None:
                errors.append("edges must contain at least 2 values")
            elif not _is_edge_list(self.edges):
                errors.append(f"edges must be a list of numbers, got {self.edges!r}")
            elif len(self.edges) < 2:
                errors.append("edges must contain at least 2 values")
            else:
                if not all(_is_number(e) for e in self.edges):
                    errors.append(f"edges must be numbers, got {list(self.edges)}")
                elif not all(math.isfinite(e) for e in self.edges):
                    errors.append(f"edges must be finite, got {list(self.edges)}")
                elif any(b <= a for a, b in zip(self.edges[:-1], self.edges[1:])):
                    errors.append(f"edges must be strictly increasing, got {list(self.edges)}")

        return errors

    def get_n_bins(self) -> int:
        """Number of real bins described by this configuration."""
        if self.axis_type == AxisType.VARIABLE:
            if not _is_edge_list(self.edges):
                return 0
            return max(len(self.edges) - 1, 0)
        return int(self.n_bins)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary with enum values as strings."""
        data = {
            "axis_type": self.axis_type.value,
            "boundary_type": self.boundary_type.value,
        }
        if self.axis_type == AxisType.VARIABLE:
            data["edges"] = [float(e) for e in self.edges]
        else:
            data["min"] = float(self.min)
            data["max"] = float(self.max)
            data["n_bins"] = int(self.n_bins)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AxisConfig":
        """Create from a dictionary produced by ``to_dict``."""
        axis_type = AxisType(data.get("axis_type", AxisType.EQUIDISTANT.value))
        boundary_type = AxisBoundaryType(data.get("boundary_type", DEFAULT_BOUNDARY_TYPE.value))
        if axis_type == AxisType.VARIABLE:
            return cls(
                axis_type=axis_type,
                boundary_type=boundary_type,
                edges=list(data.get("edges", [])),
            )
        return cls(
            axis_type=axis_type,
            boundary_type=boundary_type,
            min=data.get("min", DEFAULT_AXIS_MIN),
            max=data.get("max", DEFAULT_AXIS_MAX),
            n_bins=data.get("n_bins", DEFAULT_N_BINS),
        )

    def build(self):
        """Build the axis described by this configuration.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        from ndbinning.core.axis import EquidistantAxis, VariableAxis

        if self.axis_type == AxisType.VARIABLE:
            return VariableAxis(self.edges, self.boundary_type)
        return EquidistantAxis(self.min, self.max, self.n_bins, self.boundary_type)


@dataclass
class GridConfig:
    """Configuration of an N-dimensional grid.

    Attributes:
        axes: One AxisConfig per dimension, axis 0 first
        value_type: Value stored in each cell
        dtype: Floating point storage dtype
    """

    axes: list[AxisConfig] = field(default_factory=lambda: [AxisConfig()])
    value_type: ValueType = DEFAULT_VALUE_TYPE
    dtype: str = DEFAULT_DTYPE

    def validate(self) -> list[str]:
        """Validate grid configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.axes:
            errors.append("A grid needs at least one axis")
        for i, axis in enumerate(self.axes):
            errors.extend(f"axis[{i}]: {err}" for err in axis.validate())

        if not isinstance(self.value_type, ValueType):
            errors.append(f"value_type must be a ValueType, got {self.value_type!r}")

        try:
            if np.dtype(self.dtype).kind != "f":
                errors.append(f"dtype must be a floating point type, got {self.dtype}")
        except TypeError:
            errors.append(f"dtype {self.dtype!r} is not understood by numpy")

        return errors

    def storage_cells(self) -> int:
        """Number of storage cells, including underflow and overflow bins."""
        return math.prod(axis.get_n_bins() + 2 for axis in self.axes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary with enum values as strings."""
        return {
            "axes": [axis.to_dict() for axis in self.axes],
            "value_type": self.value_type.value,
            "dtype": str(self.dtype),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GridConfig":
        """Create from a dictionary produced by ``to_dict``."""
        return cls(
            axes=[AxisConfig.from_dict(a) for a in data.get("axes", [])],
            value_type=ValueType(data.get("value_type", DEFAULT_VALUE_TYPE.value)),
            dtype=data.get("dtype", DEFAULT_DTYPE),
        )

    def build(self):
        """Build an empty grid described by this configuration.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        from ndbinning.core.grid import Grid

        return Grid(
            [axis.build() for axis in self.axes],
            value_shape=self.value_type.shape,
            dtype=self.dtype,
        )
