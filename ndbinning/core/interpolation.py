"""Multilinear interpolation on the corners of an N-dimensional box.

The corners of the box are numbered ``0 .. 2**N - 1``: corner ``c`` sits on
the upper face of axis ``d`` if bit ``d`` of ``c`` is set, otherwise on the
lower face.
"""

from typing import Sequence

import numpy as np

from ndbinning.config.validation import DimensionMismatchError


def corner_fractions(position: Sequence[float], lower_left: Sequence[float],
                     upper_right: Sequence[float]) -> list:
    """Relative position of ``position`` inside the box, one fraction per axis.

    A degenerate span (``upper == lower``) gives fraction 0 so the lower
    corner carries the full weight.
    """
    fractions = []
    for x, lo, hi in zip(position, lower_left, upper_right):
        span = hi - lo
        fractions.append((x - lo) / span if span != 0 else 0.0)
    return fractions


def corner_weight(corner: int, fractions: Sequence[float]) -> float:
    """Weight of one corner for the given per-axis fractions."""
    weight = 1.0
    for d, f in enumerate(fractions):
        weight *= f if (corner >> d) & 1 else 1.0 - f
    return weight


def interpolate(position, lower_left, upper_right, corner_values):
    """Multilinear interpolation of corner values at ``position``.

    Args:
        position: Point to evaluate, one coordinate per axis
        lower_left: Lower corner of the box
        upper_right: Upper corner of the box
        corner_values: ``2**N`` values (scalars or arrays of equal shape)
            in corner order

    Returns:
        Interpolated value, a float for scalar corners or an ndarray.

    Raises:
        DimensionMismatchError: If the argument lengths do not agree.
    """
    n_dim = len(position)
    if len(lower_left) != n_dim or len(upper_right) != n_dim:
        raise DimensionMismatchError(
            f"Box corners have {len(lower_left)}/{len(upper_right)} entries for a {n_dim}D position"
        )
    if len(corner_values) != 2 ** n_dim:
        raise DimensionMismatchError(
            f"Expected {2 ** n_dim} corner values for a {n_dim}D position, got {len(corner_values)}"
        )

    fractions = corner_fractions(position, lower_left, upper_right)

    result = 0.0
    for corner, value in enumerate(corner_values):
        result = result + corner_weight(corner, fractions) * np.asarray(value, dtype=float)

    if np.ndim(result) == 0:
        return float(result)
    return result
