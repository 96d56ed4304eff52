"""
Axis binning strategies.

An axis maps a coordinate to a local bin index in ``[0, n_bins + 1]``:
index 0 is the underflow bin, ``n_bins + 1`` the overflow bin and
``1..n_bins`` are the real bins. Two flavours exist:

    - EquidistantAxis: ``n_bins`` bins of equal width on ``[min, max)``
    - VariableAxis: bins delimited by strictly increasing edges

Both support the three boundary policies of AxisBoundaryType. Axes are
immutable once constructed.

Import Policy:
    from ndbinning.core.axis import EquidistantAxis, VariableAxis

DO NOT use: from ndbinning.core.axis import *
"""

import math
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple, Union

import numpy as np

from ndbinning.config.defaults import DEFAULT_BOUNDARY_TYPE
from ndbinning.config.enums import AxisBoundaryType, AxisType
from ndbinning.config.grid_config import AxisConfig
from ndbinning.config.validation import ConfigurationError, validate_config


NeighborhoodSize = Union[int, Tuple[int, int]]


def normalize_neighborhood_size(size: NeighborhoodSize) -> Tuple[int, int]:
    """Turn ``size`` into a ``(lower, upper)`` pair of non-negative ints.

    Raises:
        ValueError: If a size is negative or the pair has the wrong length.
    """
    if isinstance(size, (int, np.integer)):
        lower = upper = int(size)
    else:
        size = tuple(size)
        if len(size) != 2:
            raise ValueError(f"Neighbourhood size must be an int or a (lower, upper) pair, got {size}")
        lower, upper = int(size[0]), int(size[1])
    if lower < 0 or upper < 0:
        raise ValueError(f"Neighbourhood size must be non-negative, got ({lower}, {upper})")
    return lower, upper


class Axis(ABC):
    """Common behaviour of all axis flavours.

    Subclasses provide the bin edges and the coordinate lookup; boundary
    handling, neighbour queries and bin geometry live here.
    """

    def __init__(self, boundary_type: AxisBoundaryType = DEFAULT_BOUNDARY_TYPE):
        try:
            self._boundary_type = AxisBoundaryType(boundary_type)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown boundary type {boundary_type!r}") from exc

    # ------------------------------------------------------------------
    # Flavour queries
    # ------------------------------------------------------------------

    @property
    def boundary_type(self) -> AxisBoundaryType:
        return self._boundary_type

    @property
    @abstractmethod
    def axis_type(self) -> AxisType:
        ...

    def is_equidistant(self) -> bool:
        return self.axis_type == AxisType.EQUIDISTANT

    def is_variable(self) -> bool:
        return self.axis_type == AxisType.VARIABLE

    def is_closed(self) -> bool:
        return self._boundary_type == AxisBoundaryType.CLOSED

    # ------------------------------------------------------------------
    # Domain
    # ------------------------------------------------------------------

    @abstractmethod
    def get_n_bins(self) -> int:
        """Number of real bins."""

    @abstractmethod
    def get_min(self) -> float:
        ...

    @abstractmethod
    def get_max(self) -> float:
        ...

    @abstractmethod
    def get_bin_edges(self) -> np.ndarray:
        """Copy of the ``n_bins + 1`` real bin edges."""

    @abstractmethod
    def to_config(self) -> AxisConfig:
        """Configuration that rebuilds an equal axis."""

    def is_inside(self, x: float) -> bool:
        """True if ``min <= x < max``, independent of the boundary type."""
        return self.get_min() <= x < self.get_max()

    # ------------------------------------------------------------------
    # Coordinate lookup
    # ------------------------------------------------------------------

    @abstractmethod
    def _find_bin(self, x: float) -> int:
        """Real bin of a coordinate known to lie in ``[min, max)``."""

    def wrap_coordinate(self, x: float) -> float:
        """Periodic image of ``x`` in ``[min, max)`` for CLOSED axes.

        Other boundary types and non-finite coordinates are returned unchanged.
        """
        x = float(x)
        if not self.is_closed() or not math.isfinite(x):
            return x
        lo, hi = self.get_min(), self.get_max()
        wrapped = lo + math.fmod(x - lo, hi - lo)
        if wrapped < lo:
            wrapped += hi - lo
        # fmod rounding can land exactly on max
        if wrapped >= hi:
            wrapped = lo
        return wrapped

    def get_bin(self, x: float) -> int:
        """Local bin index of coordinate ``x``.

        OPEN and BOUND axes return 0 below ``min`` and ``n_bins + 1`` at or
        above ``max``. CLOSED axes wrap finite coordinates into the real
        bins; non-finite coordinates have no periodic image and fall into
        the underflow (``-inf``) or overflow (``+inf``, NaN) bin.
        """
        x = self.wrap_coordinate(x)
        if x < self.get_min():
            return 0
        if not x < self.get_max():
            return self.get_n_bins() + 1
        return self._find_bin(x)

    # ------------------------------------------------------------------
    # Local index handling
    # ------------------------------------------------------------------

    def check_index(self, idx: int) -> int:
        """Return ``idx`` as an int after checking it is a valid local index.

        Raises:
            IndexError: If ``idx`` is outside ``[0, n_bins + 1]``.
        """
        idx = int(idx)
        if not 0 <= idx <= self.get_n_bins() + 1:
            raise IndexError(f"Local bin index {idx} outside [0, {self.get_n_bins() + 1}]")
        return idx

    def wrap_bin(self, idx: int) -> int:
        """Map an arbitrary integer onto a bin this axis can address.

        CLOSED axes wrap periodically into ``[1, n_bins]``, BOUND axes clamp
        to the real bins and OPEN axes clamp to ``[0, n_bins + 1]``.
        """
        n = self.get_n_bins()
        if self._boundary_type == AxisBoundaryType.CLOSED:
            return 1 + (int(idx) - 1) % n
        if self._boundary_type == AxisBoundaryType.BOUND:
            return min(max(int(idx), 1), n)
        return min(max(int(idx), 0), n + 1)

    def upper_corner_bin(self, idx: int) -> int:
        """Bin whose lower-left edge is the upper interpolation node of ``idx``."""
        idx = self.check_index(idx)
        if self.is_closed():
            return self.wrap_bin(idx + 1)
        return min(idx + 1, self.get_n_bins() + 1)

    def neighborhood_indices(self, idx: int, size: NeighborhoodSize = 1) -> List[int]:
        """Local indices within ``size`` bins of ``idx``.

        Args:
            idx: Local bin index in ``[0, n_bins + 1]``
            size: Window half-width, or a ``(lower, upper)`` pair

        Returns:
            Neighbour indices in window order. OPEN axes clip the window to
            ``[0, n_bins + 1]``. BOUND axes clip it to the real bins, and
            CLOSED axes wrap it; for both, a window centred on the underflow
            or overflow bin is empty. A CLOSED window wider than the axis
            yields every real bin once.
        """
        idx = self.check_index(idx)
        lower, upper = normalize_neighborhood_size(size)
        n = self.get_n_bins()

        if self._boundary_type == AxisBoundaryType.OPEN:
            return list(range(max(0, idx - lower), min(n + 1, idx + upper) + 1))

        if idx == 0 or idx == n + 1:
            return []

        if self._boundary_type == AxisBoundaryType.BOUND:
            return list(range(max(1, idx - lower), min(n, idx + upper) + 1))

        if lower + upper + 1 >= n:
            return list(range(1, n + 1))
        return [self.wrap_bin(i) for i in range(idx - lower, idx + upper + 1)]

    # ------------------------------------------------------------------
    # Bin geometry
    # ------------------------------------------------------------------

    @abstractmethod
    def get_lower_left_bin_edge(self, idx: int) -> float:
        ...

    @abstractmethod
    def get_upper_right_bin_edge(self, idx: int) -> float:
        ...

    def get_bin_center(self, idx: int) -> float:
        return 0.5 * (self.get_lower_left_bin_edge(idx) + self.get_upper_right_bin_edge(idx))

    def get_bin_width(self, idx: int = 1) -> float:
        return self.get_upper_right_bin_edge(idx) - self.get_lower_left_bin_edge(idx)

    def __eq__(self, other):
        if not isinstance(other, Axis):
            return NotImplemented
        return self.to_config() == other.to_config()

    def __hash__(self):
        return hash((self.axis_type, self._boundary_type, tuple(self.get_bin_edges())))


class EquidistantAxis(Axis):
    """Axis with ``n_bins`` bins of width ``(max - min) / n_bins``.

    Bin ``i`` covers ``[min + (i - 1) * width, min + i * width)``. The
    underflow and overflow bins are given the same width for geometric
    queries.

    Attributes:
        min, max: Domain of the axis
        n_bins: Number of real bins
    """

    def __init__(
        self,
        min: float,
        max: float,
        n_bins: int,
        boundary_type: AxisBoundaryType = DEFAULT_BOUNDARY_TYPE,
    ):
        super().__init__(boundary_type)
        validate_config(AxisConfig(
            axis_type=AxisType.EQUIDISTANT,
            boundary_type=self._boundary_type,
            min=min,
            max=max,
            n_bins=n_bins,
        ))
        self._min = float(min)
        self._max = float(max)
        self._n_bins = int(n_bins)
        self._width = (self._max - self._min) / self._n_bins

    @property
    def axis_type(self) -> AxisType:
        return AxisType.EQUIDISTANT

    def get_n_bins(self) -> int:
        return self._n_bins

    def get_min(self) -> float:
        return self._min

    def get_max(self) -> float:
        return self._max

    def get_bin_edges(self) -> np.ndarray:
        return np.linspace(self._min, self._max, self._n_bins + 1)

    def _find_bin(self, x: float) -> int:
        # Clamp guards against rounding just below max
        return min(int(math.floor((x - self._min) / self._width)) + 1, self._n_bins)

    def get_lower_left_bin_edge(self, idx: int) -> float:
        return self._min + (self.check_index(idx) - 1) * self._width

    def get_upper_right_bin_edge(self, idx: int) -> float:
        return self._min + self.check_index(idx) * self._width

    def get_bin_width(self, idx: int = 1) -> float:
        self.check_index(idx)
        return self._width

    def to_config(self) -> AxisConfig:
        return AxisConfig(
            axis_type=AxisType.EQUIDISTANT,
            boundary_type=self._boundary_type,
            min=self._min,
            max=self._max,
            n_bins=self._n_bins,
        )

    def __repr__(self):
        return (
            f"EquidistantAxis(min={self._min}, max={self._max}, "
            f"n_bins={self._n_bins}, boundary_type={self._boundary_type.value})"
        )


class VariableAxis(Axis):
    """Axis with bins delimited by explicit, strictly increasing edges.

    Bin ``i`` covers ``[edges[i - 1], edges[i])``. The underflow and
    overflow bins borrow the width of the first and last real bin for
    geometric queries.

    Attributes:
        edges: ``n_bins + 1`` strictly increasing edges
    """

    def __init__(
        self,
        edges: Sequence[float],
        boundary_type: AxisBoundaryType = DEFAULT_BOUNDARY_TYPE,
    ):
        super().__init__(boundary_type)
        validate_config(AxisConfig(
            axis_type=AxisType.VARIABLE,
            boundary_type=self._boundary_type,
            edges=edges,
        ))
        self._edges = np.array(edges, dtype=np.float64)

    @property
    def axis_type(self) -> AxisType:
        return AxisType.VARIABLE

    def get_n_bins(self) -> int:
        return len(self._edges) - 1

    def get_min(self) -> float:
        return float(self._edges[0])

    def get_max(self) -> float:
        return float(self._edges[-1])

    def get_bin_edges(self) -> np.ndarray:
        return self._edges.copy()

    def _find_bin(self, x: float) -> int:
        return int(np.searchsorted(self._edges, x, side="right"))

    def get_lower_left_bin_edge(self, idx: int) -> float:
        idx = self.check_index(idx)
        if idx == 0:
            return float(2.0 * self._edges[0] - self._edges[1])
        return float(self._edges[idx - 1])

    def get_upper_right_bin_edge(self, idx: int) -> float:
        idx = self.check_index(idx)
        n = self.get_n_bins()
        if idx == n + 1:
            return float(2.0 * self._edges[n] - self._edges[n - 1])
        return float(self._edges[idx])

    def to_config(self) -> AxisConfig:
        return AxisConfig(
            axis_type=AxisType.VARIABLE,
            boundary_type=self._boundary_type,
            edges=self._edges.tolist(),
        )

    def __repr__(self):
        return f"VariableAxis(edges={self._edges.tolist()}, boundary_type={self._boundary_type.value})"
