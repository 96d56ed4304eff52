"""Type-erased grids.

``AnyGrid`` is a uniform interface over grids of any supported combination
of value type and axis flavours. The set of supported combinations is a
closed registry: asking for an unregistered combination fails with
ConfigurationError instead of producing a grid.

Runtime API:
    - create_any_grid(axes, value_type) -> AnyGrid
    - get_default_registry() -> GridTypeRegistry
    - GridTypeRegistry.register(tag) / is_registered(tag) / list_types()

Import Policy:
    from ndbinning.core.any_grid import AnyGrid, GridTypeTag, create_any_grid

DO NOT use: from ndbinning.core.any_grid import *
"""

import itertools
import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ndbinning.config.defaults import (
    DEFAULT_MAX_DIMENSIONS,
    DEFAULT_NEIGHBORHOOD_SIZE,
    DEFAULT_VALUE_TYPE,
)
from ndbinning.config.enums import AxisBoundaryType, AxisType, ValueType
from ndbinning.config.validation import ConfigurationError
from ndbinning.config.yaml_loader import get_default
from ndbinning.core.axis import Axis
from ndbinning.core.grid import Grid

logger = logging.getLogger(__name__)

AxisKind = Tuple[AxisType, AxisBoundaryType]


@dataclass(frozen=True)
class GridTypeTag:
    """Identity of a concrete grid type.

    Attributes:
        value_type: Value stored in each cell
        axis_kinds: ``(AxisType, AxisBoundaryType)`` per axis, axis 0 first
    """

    value_type: ValueType
    axis_kinds: Tuple[AxisKind, ...]

    @classmethod
    def from_axes(cls, axes: Sequence[Axis], value_type: ValueType = DEFAULT_VALUE_TYPE) -> "GridTypeTag":
        return cls(
            ValueType(value_type),
            tuple((axis.axis_type, axis.boundary_type) for axis in axes),
        )

    @property
    def ndim(self) -> int:
        return len(self.axis_kinds)

    def __str__(self):
        kinds = ", ".join(f"{a.value}/{b.value}" for a, b in self.axis_kinds)
        return f"Grid<{self.value_type.value}, {kinds}>"


class AnyGrid(ABC):
    """Grid interface independent of value type and axis flavours."""

    @property
    @abstractmethod
    def type_tag(self) -> GridTypeTag:
        ...

    @property
    def ndim(self) -> int:
        return self.type_tag.ndim

    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def get_n_bins(self) -> Tuple[int, ...]:
        ...

    @abstractmethod
    def is_inside(self, point) -> bool:
        ...

    @abstractmethod
    def get_global_bin_index(self, point) -> int:
        ...

    @abstractmethod
    def at(self, point):
        ...

    @abstractmethod
    def set_at(self, point, value) -> int:
        ...

    @abstractmethod
    def fill(self, point, weight=1.0) -> int:
        ...

    @abstractmethod
    def interpolate(self, point):
        ...

    @abstractmethod
    def closest_points_indices(self, point) -> Set[int]:
        ...

    @abstractmethod
    def neighborhood_indices_at(self, point, size=DEFAULT_NEIGHBORHOOD_SIZE) -> Set[int]:
        ...


class RegisteredGrid(AnyGrid):
    """AnyGrid backed by a concrete Grid of a registered type."""

    def __init__(self, grid: Grid, type_tag: GridTypeTag):
        self._grid = grid
        self._type_tag = type_tag

    @property
    def type_tag(self) -> GridTypeTag:
        return self._type_tag

    @property
    def grid(self) -> Grid:
        """The underlying concrete grid."""
        return self._grid

    def size(self) -> int:
        return self._grid.size()

    def get_n_bins(self) -> Tuple[int, ...]:
        return self._grid.get_n_bins()

    def is_inside(self, point) -> bool:
        return self._grid.is_inside(point)

    def get_global_bin_index(self, point) -> int:
        return self._grid.get_global_bin_index(point)

    def at(self, point):
        return self._grid.at(point)

    def set_at(self, point, value) -> int:
        return self._grid.set_at(point, value)

    def fill(self, point, weight=1.0) -> int:
        return self._grid.fill(point, weight)

    def interpolate(self, point):
        return self._grid.interpolate(point)

    def closest_points_indices(self, point) -> Set[int]:
        return self._grid.closest_points_indices(point)

    def neighborhood_indices_at(self, point, size=DEFAULT_NEIGHBORHOOD_SIZE) -> Set[int]:
        return self._grid.neighborhood_indices_at(point, size)

    def __repr__(self):
        return f"RegisteredGrid({self._type_tag})"


class GridTypeRegistry:
    """Closed set of grid types that create_any_grid may instantiate.

    Validation:
        - Registered tags only
        - Duplicate registrations warn and are ignored
    """

    def __init__(self, tags: Optional[Iterable[GridTypeTag]] = None):
        self._tags: dict[GridTypeTag, None] = {}
        for tag in tags or ():
            self.register(tag)

    def register(self, tag: GridTypeTag) -> None:
        """Add a grid type to the registry."""
        if tag in self._tags:
            warnings.warn(f"Grid type '{tag}' already registered.", UserWarning, stacklevel=2)
            return
        self._tags[tag] = None

    def register_all(self, value_types: Iterable[ValueType], max_dimensions: int) -> None:
        """Register every axis-flavour combination up to ``max_dimensions`` axes."""
        kinds = list(itertools.product(AxisType, AxisBoundaryType))
        count = 0
        for value_type in value_types:
            for n_dim in range(1, max_dimensions + 1):
                for combo in itertools.product(kinds, repeat=n_dim):
                    tag = GridTypeTag(ValueType(value_type), combo)
                    if tag not in self._tags:
                        self._tags[tag] = None
                        count += 1
        logger.debug(f"Registered {count} grid types (up to {max_dimensions}D)")

    def is_registered(self, tag: GridTypeTag) -> bool:
        return tag in self._tags

    def list_types(self) -> List[GridTypeTag]:
        return list(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def create(self, axes: Sequence[Axis], value_type: ValueType = DEFAULT_VALUE_TYPE) -> AnyGrid:
        """Build an empty grid of a registered type.

        Raises:
            ConfigurationError: If the combination of axes and value type
                is not registered.
        """
        try:
            value_type = ValueType(value_type)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown value type {value_type!r}") from exc
        axes = list(axes)
        for i, axis in enumerate(axes):
            if not isinstance(axis, Axis):
                raise ConfigurationError(f"axis[{i}] is not an Axis: {axis!r}")

        tag = GridTypeTag.from_axes(axes, value_type)
        if tag not in self._tags:
            raise ConfigurationError(
                f"Unsupported grid type {tag}. {len(self._tags)} types are registered."
            )
        return RegisteredGrid(Grid(axes, value_shape=value_type.shape), tag)


# Global registry instance
_default_registry: Optional[GridTypeRegistry] = None


def get_default_registry() -> GridTypeRegistry:
    """Registry populated from the ``any_grid`` section of defaults.yaml."""
    global _default_registry
    if _default_registry is None:
        registry = GridTypeRegistry()
        registry.register_all(
            [ValueType(v) for v in get_default("any_grid.value_types", [DEFAULT_VALUE_TYPE.value])],
            int(get_default("any_grid.max_dimensions", DEFAULT_MAX_DIMENSIONS)),
        )
        _default_registry = registry
    return _default_registry


def create_any_grid(axes: Sequence[Axis], value_type: ValueType = DEFAULT_VALUE_TYPE,
                    registry: Optional[GridTypeRegistry] = None) -> AnyGrid:
    """Build a type-erased grid from the given registry (default registry if None)."""
    if registry is None:
        registry = get_default_registry()
    return registry.create(axes, value_type)
