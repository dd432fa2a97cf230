"""
Gauss-Seidel relaxation of the undefined cells of a grid.

One sweep visits the grid column by column (X outer, Y inner) and moves every
masked cell towards the mean of its four neighbours, reading values already
updated earlier in the same sweep. To run a sweep on several threads the
Y range is cut into contiguous bands, one worker per band. The first cell of
a band reads the last cell of the previous band in the same column, so a
worker may only start column ``ix`` once its predecessor has finished it.
Each band boundary carries a PipelineCursor through which the upstream worker
publishes the number of columns it has completed; the downstream worker polls
it with a short sleep. The resulting update order is the sequential one.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable

import numba
import numpy as np

from gridfill import defaults
from gridfill.threads import run_workers, split_range

logger = logging.getLogger(__name__)


@numba.njit(cache=True, nogil=True)
def _x_neighbors(ix: int, x_size: int, is_circle: bool) -> tuple[int, int]:
    """Left and right neighbours of column ix (wrapped or reflected at edges)."""
    if ix == 0:
        ix0 = x_size - 1 if is_circle else 1
    else:
        ix0 = ix - 1
    if ix == x_size - 1:
        ix1 = 0 if is_circle else x_size - 2
    else:
        ix1 = ix + 1
    return ix0, ix1


@numba.njit(cache=True, nogil=True)
def _relax_column(
    grid: np.ndarray,
    mask: np.ndarray,
    ix0: int,
    ix: int,
    ix1: int,
    y_start: int,
    y_end: int,
    relaxation: float,
) -> float:
    """Relax the masked cells of column ix between y_start and y_end.

    Returns the largest absolute correction applied.
    """
    y_size = grid.shape[1]
    max_residual = 0.0
    for iy in range(y_start, y_end):
        if not mask[ix, iy]:
            continue
        iy0 = 1 if iy == 0 else iy - 1
        iy1 = y_size - 2 if iy == y_size - 1 else iy + 1
        residual = (0.25 * (grid[ix0, iy] + grid[ix1, iy] +
                            grid[ix, iy0] + grid[ix, iy1]) -
                    grid[ix, iy]) * relaxation
        grid[ix, iy] += residual
        if abs(residual) > max_residual:
            max_residual = abs(residual)
    return max_residual


@numba.njit(cache=True, nogil=True)
def _relax_band(
    grid: np.ndarray,
    mask: np.ndarray,
    is_circle: bool,
    y_start: int,
    y_end: int,
    relaxation: float,
) -> float:
    """Sequential sweep of a band that has no neighbouring band to wait on."""
    x_size = grid.shape[0]
    max_residual = 0.0
    for ix in range(x_size):
        ix0, ix1 = _x_neighbors(ix, x_size, is_circle)
        residual = _relax_column(grid, mask, ix0, ix, ix1, y_start, y_end, relaxation)
        if residual > max_residual:
            max_residual = residual
    return max_residual


class PipelineCursor:
    """Number of columns a band has completed in the current sweep.

    Written by exactly one worker and read by the worker of the next band.
    The position never decreases; a fresh cursor is used for every sweep.
    """

    __slots__ = ("_position", "_poll_interval", "_sleep")

    def __init__(
        self,
        poll_interval: float = defaults.PIPELINE_POLL_INTERVAL,
        *,
        _sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._position = 0
        self._poll_interval = poll_interval
        self._sleep = _sleep

    @property
    def position(self) -> int:
        return self._position

    def publish(self, position: int) -> None:
        """Announce that the first ``position`` columns are done."""
        if position > self._position:
            self._position = position

    def close(self) -> None:
        """Release any waiter, whether the band finished or failed."""
        self._position = sys.maxsize

    def wait_for(self, position: int) -> None:
        """Block until at least ``position`` columns have been published."""
        while self._position < position:
            self._sleep(self._poll_interval)


def _pipelined_band(
    grid: np.ndarray,
    mask: np.ndarray,
    is_circle: bool,
    relaxation: float,
    y_start: int,
    y_end: int,
    pipe_in: PipelineCursor | None,
    pipe_out: PipelineCursor | None,
) -> float:
    """Worker for one band of a multi-threaded sweep."""
    x_size = grid.shape[0]
    max_residual = 0.0
    try:
        for ix in range(x_size):
            if pipe_in is not None:
                pipe_in.wait_for(ix + 1)
            ix0, ix1 = _x_neighbors(ix, x_size, is_circle)
            residual = _relax_column(grid, mask, ix0, ix, ix1, y_start, y_end, relaxation)
            if residual > max_residual:
                max_residual = residual
            if pipe_out is not None:
                pipe_out.publish(ix + 1)
    finally:
        if pipe_out is not None:
            pipe_out.close()
    return max_residual


def gauss_seidel_sweep(
    grid: np.ndarray,
    mask: np.ndarray,
    is_circle: bool,
    relaxation: float,
    num_threads: int,
) -> float:
    """Perform one relaxation sweep over the masked cells, in place.

    Args:
        grid: 2D array indexed [ix, iy], modified in place
        mask: Cells to relax (the cells that were undefined before seeding)
        is_circle: True if column 0 and the last column are neighbours
        relaxation: Damping factor applied to each correction
        num_threads: Number of bands (already resolved, >= 1)

    Returns:
        The largest absolute correction applied during the sweep.
    """
    bands = split_range(grid.shape[1], num_threads)
    relaxation = float(relaxation)
    is_circle = bool(is_circle)

    if len(bands) == 1:
        y_start, y_end = bands[0]
        results = run_workers([
            lambda: _relax_band(grid, mask, is_circle, y_start, y_end, relaxation)
        ])
        return float(results[0])

    cursors = [PipelineCursor() for _ in range(len(bands) - 1)]
    tasks = []
    for index, (y_start, y_end) in enumerate(bands):
        pipe_in = cursors[index - 1] if index > 0 else None
        pipe_out = cursors[index] if index < len(cursors) else None
        tasks.append(
            lambda y_start=y_start, y_end=y_end, pipe_in=pipe_in, pipe_out=pipe_out:
            _pipelined_band(grid, mask, is_circle, relaxation,
                            y_start, y_end, pipe_in, pipe_out)
        )
    return float(max(run_workers(tasks)))
