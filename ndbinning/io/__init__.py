"""Serialization of axis and grid configurations."""

from ndbinning.io.variant import (
    axis_from_variant,
    axis_to_variant,
    from_variant,
    grid_from_variant,
    grid_to_variant,
    load_variant,
    save_variant,
    to_variant,
)

__all__ = [
    "axis_from_variant",
    "axis_to_variant",
    "from_variant",
    "grid_from_variant",
    "grid_to_variant",
    "load_variant",
    "save_variant",
    "to_variant",
]
