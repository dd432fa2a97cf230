"""Test configuration for gridfill."""

import numpy as np
import pytest

from gridfill.grid import Axis, Grid2D


@pytest.fixture
def flat_grid():
    """5x5 field of ones with a single undefined cell in the middle."""
    grid = np.ones((5, 5))
    grid[2, 2] = np.nan
    return grid


@pytest.fixture
def checkerboard_grid():
    """8x8 random field with every other cell undefined."""
    rng = np.random.default_rng(42)
    grid = rng.uniform(-1.0, 1.0, (8, 8))
    ix, iy = np.indices(grid.shape)
    grid[(ix + iy) % 2 == 0] = np.nan
    return grid


@pytest.fixture
def smooth_grid():
    """Smooth 24x16 field with an undefined block away from the edges."""
    x = np.linspace(0.0, np.pi, 24)
    y = np.linspace(0.0, np.pi, 16)
    grid = np.sin(x)[:, None] * np.cos(y)[None, :] + 2.0
    grid[6:18, 4:12] = np.nan
    return grid


@pytest.fixture
def lon_axis():
    """Circular longitude axis, 30 degree step."""
    return Axis(np.arange(0.0, 360.0, 30.0))


@pytest.fixture
def lat_axis():
    """Latitude axis, 20 degree step."""
    return Axis(np.arange(-80.0, 81.0, 20.0))


@pytest.fixture
def global_grid(lon_axis, lat_axis):
    """Global grid of ones on the longitude/latitude axes."""
    return Grid2D(lon_axis, lat_axis, np.ones((lon_axis.size, lat_axis.size)))
