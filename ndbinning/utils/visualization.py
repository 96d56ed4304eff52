"""Simple visualization utilities for 1D and 2D grids."""

import logging

import numpy as np
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def real_bin_values(grid, component: int = None) -> np.ndarray:
    """Cell values of the real bins, shape ``grid.get_n_bins()``.

    Args:
        grid: Grid to read
        component: For vector cells, the component to return. If None the
            vector magnitude is returned.
    """
    shape = tuple(n + 2 for n in grid.get_n_bins()) + grid.value_shape
    values = grid.values.reshape(shape)[tuple(slice(1, -1) for _ in range(grid.ndim))]
    if grid.value_shape:
        if component is None:
            return np.linalg.norm(values, axis=-1)
        return values[..., component]
    return values


def _finish(fig, save_path):
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Saved: {save_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_grid_1d(
    grid,
    component: int = None,
    title: str = 'Grid Contents',
    xlabel: str = 'x',
    save_path: str = None,
):
    """Step plot of a 1D grid over its bin edges.

    Args:
        grid: 1D Grid
        component: Vector component to plot (magnitude if None)
        title: Plot title
        xlabel: Axis label
        save_path: If provided, save to file
    """
    if grid.ndim != 1:
        raise ValueError(f"plot_grid_1d needs a 1D grid, got {grid.ndim}D")

    fig, ax = plt.subplots(figsize=(10, 6))

    ax.stairs(real_bin_values(grid, component), grid.axes[0].get_bin_edges(), linewidth=2)
    ax.set_xlabel(xlabel)
    ax.set_ylabel('Value')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    _finish(fig, save_path)


def plot_grid_2d(
    grid,
    component: int = None,
    title: str = 'Grid Contents',
    xlabel: str = 'axis 0',
    ylabel: str = 'axis 1',
    save_path: str = None,
):
    """Heatmap of a 2D grid over its (possibly variable) bin edges.

    Args:
        grid: 2D Grid
        component: Vector component to plot (magnitude if None)
        title: Plot title
        xlabel, ylabel: Axis labels
        save_path: If provided, save to file
    """
    if grid.ndim != 2:
        raise ValueError(f"plot_grid_2d needs a 2D grid, got {grid.ndim}D")

    fig, ax = plt.subplots(figsize=(10, 6))

    mesh = ax.pcolormesh(
        grid.axes[0].get_bin_edges(),
        grid.axes[1].get_bin_edges(),
        real_bin_values(grid, component).T,  # Transpose so axis 0 runs along x
        cmap='viridis',
        shading='flat',
    )

    plt.colorbar(mesh, ax=ax, label='Value')
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)

    _finish(fig, save_path)
