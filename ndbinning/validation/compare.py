"""Cross-check of Grid.interpolate against scipy.

Grid interpolation treats every cell value as the field value at the
lower-left edge of its bin. On the inside of the domain this is the same
piecewise multilinear field that ``scipy.interpolate.RegularGridInterpolator``
builds from the bin edges, so the two must agree to rounding.
"""

import logging
from typing import Optional

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from ndbinning.core.grid import Grid

logger = logging.getLogger(__name__)


def node_coordinates(grid: Grid) -> list:
    """Interpolation node positions per axis: the ``n_bins + 1`` bin edges."""
    return [axis.get_bin_edges() for axis in grid.axes]


def node_values(grid: Grid) -> np.ndarray:
    """Cell values arranged on the node lattice.

    The node at edge ``k`` is the cell with local index ``k + 1``. The last
    edge is the overflow cell, except on CLOSED axes where it is bin 1.
    """
    cell_indices = []
    for axis in grid.axes:
        n = axis.get_n_bins()
        indices = np.arange(1, n + 2)
        if axis.is_closed():
            indices[-1] = 1
        cell_indices.append(indices)

    lattice = np.meshgrid(*cell_indices, indexing="ij")
    flat = sum(idx * stride for idx, stride in zip(lattice, grid.strides))
    return grid.values[flat]


def reference_interpolator(grid: Grid) -> RegularGridInterpolator:
    """scipy interpolator over the same nodes and values as ``grid``."""
    return RegularGridInterpolator(
        node_coordinates(grid),
        node_values(grid),
        method="linear",
        bounds_error=True,
    )


def sample_points(grid: Grid, n_points: int, seed: Optional[int] = None) -> np.ndarray:
    """Uniform random points inside the domain, shape ``(n_points, ndim)``."""
    rng = np.random.default_rng(seed)
    lo = np.array(grid.get_min())
    hi = np.array(grid.get_max())
    return lo + rng.random((n_points, grid.ndim)) * (hi - lo)


def compute_l2_norm(values_eval: np.ndarray, values_ref: np.ndarray) -> float:
    """Compute L2 relative norm.

    L2 = ||V - V_ref||_2 / ||V_ref||_2
    """
    diff = np.asarray(values_eval) - np.asarray(values_ref)
    denom = np.sqrt(np.sum(np.asarray(values_ref) ** 2))
    if denom < 1e-12:
        return 0.0
    return float(np.sqrt(np.sum(diff ** 2)) / denom)


def compute_linf_norm(values_eval: np.ndarray, values_ref: np.ndarray) -> float:
    """Compute Linf relative norm.

    Linf = max|V - V_ref| / max|V_ref|
    """
    diff = np.asarray(values_eval) - np.asarray(values_ref)
    denom = np.max(np.abs(values_ref))
    if denom < 1e-12:
        return 0.0
    return float(np.max(np.abs(diff)) / denom)


def compare_interpolation(grid: Grid, points: Optional[np.ndarray] = None,
                          n_points: int = 200, seed: Optional[int] = 0) -> dict:
    """Compare Grid.interpolate with the scipy reference.

    Args:
        grid: Grid to check
        points: Points inside the domain, shape ``(m, ndim)``; sampled
            uniformly if None
        n_points: Number of sampled points when ``points`` is None
        seed: Random seed for sampling

    Returns:
        Dictionary with ``max_abs_error``, ``l2`` and ``linf`` relative norms
        and ``n_points``.
    """
    if points is None:
        points = sample_points(grid, n_points, seed)
    points = np.atleast_2d(np.asarray(points, dtype=float))

    evaluated = np.array([grid.interpolate(p) for p in points])
    reference = reference_interpolator(grid)(points)

    result = {
        "max_abs_error": float(np.max(np.abs(evaluated - reference))),
        "l2": compute_l2_norm(evaluated, reference),
        "linf": compute_linf_norm(evaluated, reference),
        "n_points": len(points),
    }
    logger.info(
        f"Interpolation check on {result['n_points']} points: "
        f"max |err| = {result['max_abs_error']:.3e}, L2 = {result['l2']:.3e}"
    )
    return result
