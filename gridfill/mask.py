
import numpy as np

from gridfill.errors import InvalidArgumentError


def check_grid(grid: np.ndarray) -> np.ndarray:
    """Ensure grid is a 2D floating-point array of at least 2x2 points."""
    if not isinstance(grid, np.ndarray):
        raise InvalidArgumentError(f"grid must be a numpy array, got {type(grid).__name__}")
    if grid.ndim != 2:
        raise InvalidArgumentError(f"grid must be two-dimensional, got {grid.ndim} dimension(s)")
    if not np.issubdtype(grid.dtype, np.floating):
        raise InvalidArgumentError(f"grid must hold floating-point values, got {grid.dtype}")
    if min(grid.shape) < 2:
        raise InvalidArgumentError(f"grid must have at least 2 points per axis, got {grid.shape}")
    return grid


def undefined_mask(grid: np.ndarray) -> np.ndarray:
    """Boolean mask flagging the undefined (NaN) cells of a grid.

    Computed once per fill: cells filled during relaxation keep their flag.
    """
    return np.isnan(grid)


def has_undefined(grid: np.ndarray) -> bool:
    """True if at least one cell of the grid is undefined."""
    return bool(np.isnan(grid).any())
