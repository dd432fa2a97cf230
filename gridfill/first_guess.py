"""
First guess applied to undefined cells before relaxation.
"""

import logging

import numba
import numpy as np

from gridfill.errors import InvalidArgumentError
from gridfill.threads import dispatch
from gridfill.types import FirstGuess

logger = logging.getLogger(__name__)


@numba.njit(cache=True, nogil=True)
def _zonal_average_band(grid: np.ndarray, mask: np.ndarray, y_start: int, y_end: int) -> None:
    """Replace masked cells of lines [y_start, y_end) by the mean of the line.

    A line whose cells are all masked is set to zero.
    """
    x_size = grid.shape[0]
    for iy in range(y_start, y_end):
        count = 0
        mean = 0.0
        for ix in range(x_size):
            if not mask[ix, iy]:
                count += 1
                mean += (grid[ix, iy] - mean) / count
        first_guess = mean if count else 0.0
        for ix in range(x_size):
            if mask[ix, iy]:
                grid[ix, iy] = first_guess


def set_zero(grid: np.ndarray, mask: np.ndarray) -> None:
    """Seed undefined cells with 0."""
    grid[mask] = 0


def set_zonal_average(grid: np.ndarray, mask: np.ndarray, num_threads: int) -> None:
    """Seed undefined cells with the mean of the defined cells along X.

    Lines of constant Y are independent, so they are split across workers
    without any synchronization.
    """
    dispatch(
        lambda y_start, y_end: _zonal_average_band(grid, mask, y_start, y_end),
        grid.shape[1],
        num_threads,
    )


def apply_first_guess(
    grid: np.ndarray,
    mask: np.ndarray,
    first_guess: FirstGuess,
    num_threads: int,
) -> None:
    """Seed the undefined cells of ``grid`` according to ``first_guess``."""
    if first_guess is FirstGuess.ZERO:
        set_zero(grid, mask)
    elif first_guess is FirstGuess.ZONAL_AVERAGE:
        set_zonal_average(grid, mask, num_threads)
    else:
        raise InvalidArgumentError(f"Invalid guess type: {first_guess!r}")
    logger.debug("Seeded %d cell(s) with %s first guess",
                 int(mask.sum()), first_guess.value)
