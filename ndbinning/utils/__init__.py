"""Utility functions for ndbinning."""

from ndbinning.utils.visualization import plot_grid_1d, plot_grid_2d, real_bin_values

__all__ = ["plot_grid_1d", "plot_grid_2d", "real_bin_values"]
