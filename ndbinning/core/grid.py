"""
N-dimensional binned grid.

A Grid owns one Axis per dimension and a flat numpy array with one cell
per combination of local bin indices, underflow and overflow bins
included. Cells are addressed by point, by local index tuple or by global
index.

Memory layout: axis 0 is the most significant (slowest varying) index,
the last axis varies fastest.

Import Policy:
    from ndbinning.core.grid import Grid

DO NOT use: from ndbinning.core.grid import *
"""

import copy
import itertools
import logging
import math
from typing import Sequence, Set, Tuple

import numpy as np

from ndbinning.config.defaults import DEFAULT_DTYPE, DEFAULT_NEIGHBORHOOD_SIZE
from ndbinning.config.validation import ConfigurationError, check_dimensions
from ndbinning.core.axis import Axis, NeighborhoodSize, normalize_neighborhood_size
from ndbinning.core.interpolation import interpolate as interpolate_corners

logger = logging.getLogger(__name__)


class Grid:
    """Binned N-dimensional lookup table.

    Args:
        axes: Axis instances, axis 0 first. The grid keeps its own copies.
        value_shape: Shape of one cell, ``()`` for scalars or ``(k,)`` for
            k-component vectors
        dtype: Floating point dtype of the storage

    Raises:
        ConfigurationError: If no axes are given, an entry is not an Axis,
            or the dtype is not a floating point type.

    Example:
        >>> grid = Grid([EquidistantAxis(0.0, 4.0, 4)])
        >>> grid.size()
        6
        >>> grid.get_global_bin_index((2.5,))
        3
    """

    def __init__(self, axes: Sequence[Axis], value_shape: Tuple[int, ...] = (),
                 dtype=DEFAULT_DTYPE):
        axes = tuple(axes)
        if not axes:
            raise ConfigurationError("A grid needs at least one axis")
        for i, axis in enumerate(axes):
            if not isinstance(axis, Axis):
                raise ConfigurationError(f"axis[{i}] is not an Axis: {axis!r}")
        try:
            dtype = np.dtype(dtype)
        except TypeError as exc:
            raise ConfigurationError(f"dtype {dtype!r} is not understood by numpy") from exc
        if dtype.kind != "f":
            raise ConfigurationError(f"dtype must be a floating point type, got {dtype}")

        self._axes = tuple(copy.deepcopy(axis) for axis in axes)
        self._n_bins = tuple(axis.get_n_bins() for axis in self._axes)

        strides = [1] * len(self._axes)
        for i in range(len(self._axes) - 2, -1, -1):
            strides[i] = strides[i + 1] * (self._n_bins[i + 1] + 2)
        self._strides = tuple(strides)
        self._size = math.prod(n + 2 for n in self._n_bins)

        self._value_shape = tuple(int(s) for s in value_shape)
        self._values = np.zeros((self._size,) + self._value_shape, dtype=dtype)

        logger.debug(
            f"Created {self.ndim}D grid with bins {self._n_bins}, "
            f"{self._size} cells of shape {self._value_shape}"
        )

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def ndim(self) -> int:
        return len(self._axes)

    @property
    def axes(self) -> Tuple[Axis, ...]:
        return self._axes

    @property
    def value_shape(self) -> Tuple[int, ...]:
        return self._value_shape

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def strides(self) -> Tuple[int, ...]:
        return self._strides

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the storage, indexed by global bin index."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def get_axes(self) -> Tuple[Axis, ...]:
        return self._axes

    def size(self) -> int:
        """Number of cells, underflow and overflow bins included."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def get_n_bins(self) -> Tuple[int, ...]:
        """Number of real bins per axis."""
        return self._n_bins

    def get_min(self) -> Tuple[float, ...]:
        return tuple(axis.get_min() for axis in self._axes)

    def get_max(self) -> Tuple[float, ...]:
        return tuple(axis.get_max() for axis in self._axes)

    # ------------------------------------------------------------------
    # Index folding
    # ------------------------------------------------------------------

    def _fold(self, indices) -> int:
        return sum(i * s for i, s in zip(indices, self._strides))

    def _check_local(self, indices) -> Tuple[int, ...]:
        indices = check_dimensions(self.ndim, indices, what="Local index tuple")
        return tuple(axis.check_index(i) for axis, i in zip(self._axes, indices))

    def get_local_bin_indices_from_point(self, point) -> Tuple[int, ...]:
        """Local bin index on every axis for ``point``."""
        point = check_dimensions(self.ndim, point)
        return tuple(axis.get_bin(x) for axis, x in zip(self._axes, point))

    def get_global_bin_index(self, point) -> int:
        """Global index of the cell containing ``point``.

        Out-of-domain coordinates resolve to underflow or overflow bins
        (or wrap on CLOSED axes); they never raise.
        """
        return self._fold(self.get_local_bin_indices_from_point(point))

    def get_global_bin_index_from_local(self, indices) -> int:
        """Fold a local index tuple into a global index.

        Raises:
            DimensionMismatchError: If the tuple length differs from ndim.
            IndexError: If an index is outside ``[0, n_bins + 1]``.
        """
        return self._fold(self._check_local(indices))

    def get_local_bin_indices(self, global_index: int) -> Tuple[int, ...]:
        """Unfold a global index into local indices.

        Raises:
            IndexError: If ``global_index`` is outside ``[0, size)``.
        """
        remainder = int(global_index)
        if not 0 <= remainder < self._size:
            raise IndexError(f"Global bin index {global_index} outside [0, {self._size})")
        indices = []
        for stride in self._strides:
            indices.append(remainder // stride)
            remainder %= stride
        return tuple(indices)

    def is_inside(self, point) -> bool:
        """True if every coordinate lies in ``[min, max)`` of its axis."""
        point = check_dimensions(self.ndim, point)
        return all(axis.is_inside(x) for axis, x in zip(self._axes, point))

    # ------------------------------------------------------------------
    # Bin geometry
    # ------------------------------------------------------------------

    def get_bin_center(self, indices) -> Tuple[float, ...]:
        indices = self._check_local(indices)
        return tuple(axis.get_bin_center(i) for axis, i in zip(self._axes, indices))

    def get_lower_left_bin_edge(self, indices) -> Tuple[float, ...]:
        indices = self._check_local(indices)
        return tuple(axis.get_lower_left_bin_edge(i) for axis, i in zip(self._axes, indices))

    def get_upper_right_bin_edge(self, indices) -> Tuple[float, ...]:
        indices = self._check_local(indices)
        return tuple(axis.get_upper_right_bin_edge(i) for axis, i in zip(self._axes, indices))

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def _cell(self, global_index: int):
        if self._value_shape:
            # View, so in-place edits reach the storage
            return self._values[global_index]
        return float(self._values[global_index])

    def _check_global(self, global_index: int) -> int:
        global_index = int(global_index)
        if not 0 <= global_index < self._size:
            raise IndexError(f"Global bin index {global_index} outside [0, {self._size})")
        return global_index

    def at(self, point):
        """Value of the cell containing ``point``."""
        return self._cell(self.get_global_bin_index(point))

    def at_global(self, global_index: int):
        return self._cell(self._check_global(global_index))

    def at_local(self, indices):
        return self._cell(self.get_global_bin_index_from_local(indices))

    def _resolve_key(self, key) -> int:
        if isinstance(key, (int, np.integer)):
            return self._check_global(key)
        return self.get_global_bin_index_from_local(key)

    def __getitem__(self, key):
        """``grid[g]`` reads a global index, ``grid[i, j, ...]`` a local tuple."""
        return self._cell(self._resolve_key(key))

    def __setitem__(self, key, value):
        self._values[self._resolve_key(key)] = value

    def set_at(self, point, value) -> int:
        """Overwrite the cell containing ``point``; returns its global index."""
        global_index = self.get_global_bin_index(point)
        self._values[global_index] = value
        return global_index

    def fill(self, point, weight=1.0) -> int:
        """Add ``weight`` to the cell containing ``point``; returns its global index."""
        global_index = self.get_global_bin_index(point)
        self._values[global_index] += weight
        return global_index

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------

    def interpolate(self, point):
        """Multilinear interpolation at ``point``.

        Each cell value is taken as the field value at the lower-left edge of
        its bin. The 2**N nodes used are the bin containing ``point`` and, per
        axis, its upper neighbour (wrapped on CLOSED axes, the overflow bin
        past the last real bin otherwise). Points outside the domain are
        extrapolated from the underflow or overflow bin.
        """
        point = check_dimensions(self.ndim, point)
        point = tuple(axis.wrap_coordinate(x) for axis, x in zip(self._axes, point))
        local = tuple(axis.get_bin(x) for axis, x in zip(self._axes, point))

        lower_left = [axis.get_lower_left_bin_edge(i) for axis, i in zip(self._axes, local)]
        upper_right = [axis.get_upper_right_bin_edge(i) for axis, i in zip(self._axes, local)]
        upper = [axis.upper_corner_bin(i) for axis, i in zip(self._axes, local)]

        corner_values = []
        for corner in range(2 ** self.ndim):
            node = [upper[d] if (corner >> d) & 1 else local[d] for d in range(self.ndim)]
            corner_values.append(self._values[self._fold(node)])

        return interpolate_corners(point, lower_left, upper_right, corner_values)

    # ------------------------------------------------------------------
    # Neighbour search
    # ------------------------------------------------------------------

    def neighborhood_indices(self, indices,
                             size: NeighborhoodSize = DEFAULT_NEIGHBORHOOD_SIZE) -> Set[int]:
        """Global indices of the cells around a local index tuple.

        The result is the Cartesian product of the per-axis neighbourhoods
        (see Axis.neighborhood_indices), so it is empty as soon as one axis
        contributes no bins.

        Args:
            indices: Local index tuple of the centre cell
            size: Half-width on every axis, or a ``(lower, upper)`` pair
        """
        indices = self._check_local(indices)
        size = normalize_neighborhood_size(size)
        per_axis = [axis.neighborhood_indices(i, size) for axis, i in zip(self._axes, indices)]
        return {self._fold(combo) for combo in itertools.product(*per_axis)}

    def neighborhood_indices_at(self, point,
                                size: NeighborhoodSize = DEFAULT_NEIGHBORHOOD_SIZE) -> Set[int]:
        """Like neighborhood_indices, centred on the cell containing ``point``."""
        return self.neighborhood_indices(self.get_local_bin_indices_from_point(point), size)

    def closest_points_indices_from_local(self, indices) -> Set[int]:
        """Global indices of the bin and its upper neighbour on every axis."""
        return self.neighborhood_indices(indices, (0, 1))

    def closest_points_indices(self, point) -> Set[int]:
        """Global indices of the up to 2**N cells whose nodes enclose ``point``.

        CLOSED axes pair the last real bin with bin 1, BOUND axes drop the
        neighbour past the last real bin, OPEN axes keep the overflow bin.
        """
        return self.closest_points_indices_from_local(self.get_local_bin_indices_from_point(point))

    def __repr__(self):
        axes = ", ".join(repr(axis) for axis in self._axes)
        return f"Grid(axes=[{axes}], value_shape={self._value_shape}, dtype={self.dtype})"
