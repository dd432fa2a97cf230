"""
Replace undefined values of a grid by relaxation.

Undefined cells are seeded with a first guess, then relaxed with
Gauss-Seidel sweeps of the discrete Laplace operator until the largest
correction of a sweep falls below epsilon or the iteration budget runs out.
Running out of budget is not an error: the result reports it.
"""

from __future__ import annotations

import logging

import numpy as np

from gridfill import defaults
from gridfill.first_guess import apply_first_guess
from gridfill.grid import Grid2D
from gridfill.mask import check_grid, has_undefined, undefined_mask
from gridfill.relaxation import gauss_seidel_sweep
from gridfill.threads import resolve_num_threads
from gridfill.types import FillResult, FirstGuess, RelaxationConfig

logger = logging.getLogger(__name__)


def relax(
    grid: np.ndarray,
    first_guess: FirstGuess,
    config: RelaxationConfig,
) -> FillResult:
    """Fill the undefined cells of ``grid`` in place.

    The mask of undefined cells is computed once, before seeding, so cells
    filled along the way keep being relaxed until the end of the run.
    """
    check_grid(grid)
    if not has_undefined(grid):
        return FillResult()

    num_threads = resolve_num_threads(config.num_threads)
    mask = undefined_mask(grid)
    logger.debug("Filling %d undefined cell(s) of a %dx%d grid with %d thread(s)",
                 int(mask.sum()), grid.shape[0], grid.shape[1], num_threads)

    apply_first_guess(grid, mask, first_guess, num_threads)

    result = FillResult(converged=False)
    for _ in range(config.max_iterations):
        residual = gauss_seidel_sweep(
            grid, mask, config.is_circle, config.relaxation, num_threads)
        result.iterations += 1
        result.residual = residual
        result.residuals.append(residual)
        logger.debug("Sweep %d: max residual %.6e", result.iterations, residual)
        if residual < config.epsilon:
            result.converged = True
            break

    if result.converged:
        logger.info("Relaxation converged after %d iteration(s), residual %.6e",
                    result.iterations, result.residual)
    else:
        logger.info("Relaxation budget exhausted after %d iteration(s), residual %.6e",
                    result.iterations, result.residual)
    return result


def gauss_seidel(
    grid: np.ndarray | Grid2D,
    first_guess: FirstGuess | str = defaults.DEFAULT_FIRST_GUESS,
    is_circle: bool | None = None,
    max_iterations: int | None = None,
    epsilon: float | None = None,
    relaxation: float | None = None,
    num_threads: int | None = None,
) -> FillResult:
    """Replace all undefined (NaN) values of a grid using Gauss-Seidel relaxation.

    Args:
        grid: 2D float array indexed [ix, iy], or a Grid2D; filled in place
        first_guess: "zero" or "zonal_average" (mean of defined values along X)
        is_circle: True if the X axis wraps around. Defaults to the X axis
            circularity of a Grid2D, False for a bare array.
        max_iterations: Sweep budget. Defaults to the number of grid cells.
        epsilon: Stop once the largest correction of a sweep is below this.
        relaxation: Damping factor in (0, 2); 1 is plain Gauss-Seidel.
        num_threads: 0 uses all CPUs, 1 disables parallelism entirely.

    Returns:
        FillResult with the number of sweeps and the final residual.
        Unpacks as ``iterations, residual = gauss_seidel(...)``.

    Raises:
        InvalidArgumentError: Bad option, checked before any work starts.
        WorkerFaultError: A worker thread raised; all workers were joined.
    """
    if isinstance(grid, Grid2D):
        if is_circle is None:
            is_circle = grid.x.is_circle
        grid = grid.array
    elif is_circle is None:
        is_circle = False

    first_guess = FirstGuess.parse(first_guess)
    check_grid(grid)
    config = RelaxationConfig.for_grid(
        grid.shape,
        is_circle=is_circle,
        max_iterations=max_iterations,
        epsilon=epsilon,
        relaxation=relaxation,
        num_threads=num_threads,
    )
    return relax(grid, first_guess, config)
