"""Fill undefined values of regular 2D grids.

Two independent methods are provided:

- gauss_seidel: relaxation of the discrete Laplace equation over the
  undefined cells, in place, optionally on a circular X axis
- loess: tri-cube weighted local regression, returning a new array

Example:
    from gridfill import gauss_seidel, loess

    iterations, residual = gauss_seidel(grid, first_guess="zonal_average",
                                        is_circle=True)
"""

from .errors import GridFillError, InvalidArgumentError, WorkerFaultError
from .fill import gauss_seidel, relax
from .grid import Axis, Boundary, Grid2D
from .extrapolation import loess
from .types import FillResult, FirstGuess, LoessWindow, RelaxationConfig

__all__ = [
    'gauss_seidel',
    'relax',
    'loess',
    # Grid
    'Axis',
    'Boundary',
    'Grid2D',
    # Types
    'FillResult',
    'FirstGuess',
    'LoessWindow',
    'RelaxationConfig',
    # Errors
    'GridFillError',
    'InvalidArgumentError',
    'WorkerFaultError',
]
