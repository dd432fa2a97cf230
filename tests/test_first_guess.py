"""Tests for first-guess seeding."""

import numpy as np
import pytest

from gridfill.errors import InvalidArgumentError
from gridfill.first_guess import apply_first_guess, set_zero, set_zonal_average
from gridfill.mask import undefined_mask
from gridfill.types import FirstGuess


def zonal_grid():
    """4x3 grid: line 0 partly defined, line 1 undefined, line 2 defined."""
    grid = np.array([
        [1.0, np.nan, 5.0],
        [np.nan, np.nan, 6.0],
        [3.0, np.nan, 7.0],
        [np.nan, np.nan, 8.0],
    ])
    return grid, undefined_mask(grid)


class TestZero:
    """Test the zero first guess."""

    def test_undefined_cells_set_to_zero(self, flat_grid):
        mask = undefined_mask(flat_grid)
        set_zero(flat_grid, mask)
        assert flat_grid[2, 2] == 0.0
        assert np.count_nonzero(flat_grid == 1.0) == 24


class TestZonalAverage:
    """Test the zonal average first guess."""

    @pytest.mark.parametrize("num_threads", [1, 2, 3])
    def test_mean_of_defined_cells_along_x(self, num_threads):
        grid, mask = zonal_grid()
        set_zonal_average(grid, mask, num_threads)
        np.testing.assert_array_equal(grid[:, 0], [1.0, 2.0, 3.0, 2.0])

    def test_fully_undefined_line_set_to_zero(self):
        grid, mask = zonal_grid()
        set_zonal_average(grid, mask, 1)
        np.testing.assert_array_equal(grid[:, 1], [0.0, 0.0, 0.0, 0.0])

    def test_defined_line_unchanged(self):
        grid, mask = zonal_grid()
        set_zonal_average(grid, mask, 1)
        np.testing.assert_array_equal(grid[:, 2], [5.0, 6.0, 7.0, 8.0])

    def test_parallel_matches_sequential(self, checkerboard_grid):
        sequential = checkerboard_grid.copy()
        parallel = checkerboard_grid.copy()
        mask = undefined_mask(checkerboard_grid)
        set_zonal_average(sequential, mask, 1)
        set_zonal_average(parallel, mask, 4)
        np.testing.assert_array_equal(sequential, parallel)

    def test_float32_grid(self):
        grid, mask = zonal_grid()
        grid = grid.astype(np.float32)
        set_zonal_average(grid, mask, 2)
        assert grid.dtype == np.float32
        assert grid[1, 0] == pytest.approx(2.0)


class TestApplyFirstGuess:
    """Test first-guess dispatch."""

    def test_zero(self):
        grid, mask = zonal_grid()
        apply_first_guess(grid, mask, FirstGuess.ZERO, 1)
        assert grid[1, 0] == 0.0

    def test_zonal_average(self):
        grid, mask = zonal_grid()
        apply_first_guess(grid, mask, FirstGuess.ZONAL_AVERAGE, 1)
        assert grid[1, 0] == 2.0

    def test_rejects_unknown_kind(self):
        grid, mask = zonal_grid()
        with pytest.raises(InvalidArgumentError):
            apply_first_guess(grid, mask, "zero", 1)
