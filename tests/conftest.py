"""Pytest configuration and shared fixtures for ndbinning tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from ndbinning.config.enums import AxisBoundaryType
from ndbinning.core.axis import EquidistantAxis, VariableAxis
from ndbinning.core.grid import Grid


# Fixtures for axes


@pytest.fixture
def equidistant_axis():
    """Four unit-width bins on [0, 4)."""
    return EquidistantAxis(0.0, 4.0, 4)


@pytest.fixture
def variable_axis():
    """Two bins with edges {0, 1, 4}."""
    return VariableAxis([0.0, 1.0, 4.0])


@pytest.fixture
def closed_axis():
    """Ten periodic bins on [0, 1)."""
    return EquidistantAxis(0.0, 1.0, 10, AxisBoundaryType.CLOSED)


# Fixtures for grids


@pytest.fixture
def grid_1d(equidistant_axis):
    """1D grid with each cell set to its global index."""
    grid = Grid([equidistant_axis])
    for g in range(grid.size()):
        grid[g] = g
    return grid


@pytest.fixture
def grid_2d():
    """2D equidistant grid, 4 x 3 bins."""
    return Grid([EquidistantAxis(0.0, 4.0, 4), EquidistantAxis(0.0, 3.0, 3)])


@pytest.fixture
def grid_3d():
    """3D equidistant grid, 2 x 3 x 2 bins."""
    return Grid([
        EquidistantAxis(0.0, 2.0, 2),
        EquidistantAxis(0.0, 3.0, 3),
        EquidistantAxis(0.0, 2.0, 2),
    ])


@pytest.fixture
def mixed_grid():
    """Equidistant x variable grid, 4 x 2 bins."""
    return Grid([EquidistantAxis(0.0, 1.0, 4), VariableAxis([0.0, 0.5, 3.0])])


@pytest.fixture
def interpolation_grid():
    """3D grid with node values 10..80 on the lower-left edges of bins 1 and 2."""
    grid = Grid([
        EquidistantAxis(1.0, 3.0, 2),
        EquidistantAxis(1.0, 5.0, 2),
        EquidistantAxis(1.0, 7.0, 2),
    ])
    grid.set_at((1.0, 1.0, 1.0), 10.0)
    grid.set_at((2.0, 1.0, 1.0), 20.0)
    grid.set_at((1.0, 3.0, 1.0), 30.0)
    grid.set_at((2.0, 3.0, 1.0), 40.0)
    grid.set_at((1.0, 1.0, 4.0), 50.0)
    grid.set_at((2.0, 1.0, 4.0), 60.0)
    grid.set_at((1.0, 3.0, 4.0), 70.0)
    grid.set_at((2.0, 3.0, 4.0), 80.0)
    return grid


@pytest.fixture
def variant_dir(tmp_path):
    """Temporary directory for record files."""
    path = tmp_path / "records"
    path.mkdir()
    return path
