"""Tests for undefined-cell masks and grid checks."""

import numpy as np
import pytest

from gridfill.errors import InvalidArgumentError
from gridfill.mask import check_grid, has_undefined, undefined_mask


class TestUndefinedMask:
    """Test mask construction from NaN cells."""

    def test_flags_nan_cells(self, flat_grid):
        mask = undefined_mask(flat_grid)
        expected = np.zeros((5, 5), dtype=bool)
        expected[2, 2] = True
        np.testing.assert_array_equal(mask, expected)

    def test_same_shape_as_grid(self, checkerboard_grid):
        mask = undefined_mask(checkerboard_grid)
        assert mask.shape == checkerboard_grid.shape
        assert mask.dtype == bool
        assert mask.sum() == 32

    def test_mask_is_a_snapshot(self, flat_grid):
        mask = undefined_mask(flat_grid)
        flat_grid[2, 2] = 1.0
        assert mask[2, 2]

    def test_has_undefined(self, flat_grid):
        assert has_undefined(flat_grid)
        assert not has_undefined(np.ones((3, 3)))


class TestCheckGrid:
    """Test rejection of arrays that cannot be filled."""

    def test_accepts_float_grids(self):
        grid = np.zeros((3, 4), dtype=np.float32)
        assert check_grid(grid) is grid

    @pytest.mark.parametrize("grid", [
        np.zeros(5),
        np.zeros((2, 2, 2)),
        np.zeros((3, 3), dtype=np.int64),
        np.zeros((1, 5)),
        [[0.0, 1.0], [2.0, 3.0]],
    ])
    def test_rejects_invalid_grids(self, grid):
        with pytest.raises(InvalidArgumentError):
            check_grid(grid)
