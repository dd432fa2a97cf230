"""
LOESS extrapolation of undefined grid values.

Each undefined cell is replaced by a weighted mean of the defined cells of
a rectangular window around it, using the tri-cube weight function

    w(d) = (1 - |d|^3)^3 for d <= 1, 0 otherwise

where d = sqrt((dx / nx)^2 + (dy / ny)^2) is measured in grid steps. Output
cells depend only on the input grid, so rows are split across workers with
no synchronization. A cell with no defined neighbour in its window stays
undefined.
"""

from __future__ import annotations

import logging
import math

import numba
import numpy as np

from gridfill import defaults
from gridfill.grid import Axis, Grid2D
from gridfill.mask import check_grid
from gridfill.threads import dispatch, resolve_num_threads
from gridfill.types import LoessWindow

logger = logging.getLogger(__name__)


@numba.njit(cache=True, nogil=True)
def _tricube(d: float) -> float:
    if d > 1.0:
        return 0.0
    return (1.0 - d * d * d) ** 3


@numba.njit(cache=True, nogil=True)
def _loess_band(
    values: np.ndarray,
    result: np.ndarray,
    x_windows: np.ndarray,
    x_offsets: np.ndarray,
    y_windows: np.ndarray,
    y_offsets: np.ndarray,
    nx: int,
    ny: int,
    start: int,
    end: int,
) -> int:
    """Fill rows [start, end) of result; returns how many cells were filled.

    Window tables hold one row per grid index; -1 marks an unused slot.
    """
    filled = 0
    for ix in range(start, end):
        for iy in range(values.shape[1]):
            z = values[ix, iy]
            if math.isnan(z):
                value = 0.0
                weight = 0.0
                for a in range(x_windows.shape[1]):
                    wx = x_windows[ix, a]
                    if wx < 0:
                        continue
                    dx = x_offsets[ix, a] / nx
                    for b in range(y_windows.shape[1]):
                        wy = y_windows[iy, b]
                        if wy < 0:
                            continue
                        zi = values[wx, wy]
                        if not math.isnan(zi):
                            dy = y_offsets[iy, b] / ny
                            wi = _tricube(math.sqrt(dx * dx + dy * dy))
                            value += wi * zi
                            weight += wi
                if weight != 0.0:
                    z = value / weight
                    filled += 1
            result[ix, iy] = z
    return filled


def window_table(axis: Axis, half_width: int,
                 boundary: str = defaults.LOESS_BOUNDARY) -> tuple[np.ndarray, np.ndarray]:
    """Window indexes and their signed distances, in steps, for every node.

    Rows shorter than ``2 * half_width`` (windows truncated at an edge) are
    padded with -1.
    """
    width = 2 * half_width
    indexes = np.full((axis.size, width), -1, dtype=np.int64)
    offsets = np.zeros((axis.size, width), dtype=np.float64)
    for index in range(axis.size):
        frame = axis.find_indexes(axis[index], half_width, boundary)
        if frame is None:
            continue
        indexes[index, :frame.size] = frame
        offsets[index, :frame.size] = [axis.index_distance(index, item) for item in frame]
    return indexes, offsets


def loess(
    grid: Grid2D,
    nx: int = defaults.DEFAULT_LOESS_HALF_WIDTH,
    ny: int = defaults.DEFAULT_LOESS_HALF_WIDTH,
    num_threads: int = defaults.DEFAULT_NUM_THREADS,
) -> np.ndarray:
    """Fill undefined values using locally weighted regression (LOESS).

    Args:
        grid: Grid to extrapolate; left unchanged
        nx: Half-window, in grid points, along the X axis
        ny: Half-window, in grid points, along the Y axis
        num_threads: 0 uses all CPUs, 1 disables parallelism entirely

    Returns:
        A new array shaped like the grid, with undefined values replaced
        where the window held at least one defined value.

    Raises:
        InvalidArgumentError: Non-positive half-window or thread count < 0.
        WorkerFaultError: A worker thread raised; all workers were joined.
    """
    window = LoessWindow(nx, ny)
    num_threads = resolve_num_threads(num_threads)

    values = check_grid(grid.array)
    result = np.empty(values.shape, dtype=values.dtype)
    x_windows, x_offsets = window_table(grid.x, window.nx)
    y_windows, y_offsets = window_table(grid.y, window.ny)

    filled = dispatch(
        lambda start, end: _loess_band(
            values, result, x_windows, x_offsets, y_windows, y_offsets,
            window.nx, window.ny, start, end),
        values.shape[0],
        num_threads,
    )
    undefined = int(np.isnan(values).sum())
    logger.info("LOESS filled %d of %d undefined cell(s)", sum(filled), undefined)
    return result
