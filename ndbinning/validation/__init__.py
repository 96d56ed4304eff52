"""Reference checks of grid interpolation."""

from ndbinning.validation.compare import (
    compare_interpolation,
    compute_l2_norm,
    compute_linf_norm,
    reference_interpolator,
)

__all__ = [
    "compare_interpolation",
    "compute_l2_norm",
    "compute_linf_norm",
    "reference_interpolator",
]
