"""Core data types for gridfill."""

import enum
from dataclasses import dataclass, field

from gridfill import defaults
from gridfill.errors import InvalidArgumentError


class FirstGuess(enum.Enum):
    """How undefined cells are seeded before relaxation starts."""

    ZERO = "zero"
    ZONAL_AVERAGE = "zonal_average"

    @classmethod
    def parse(cls, value: "FirstGuess | str") -> "FirstGuess":
        """Accept a member or its string value ("zero", "zonal_average")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidArgumentError(f"Invalid guess type: {value!r}")


@dataclass
class RelaxationConfig:
    """Parameters of a Gauss-Seidel fill.

    Attributes:
        is_circle: True if the X axis wraps (e.g. longitudes over 360 degrees)
        max_iterations: Sweep budget; exhausting it is a reported outcome
        epsilon: Residual below which relaxation stops
        relaxation: Damping factor applied to each correction, in (0, 2)
        num_threads: 0 = all CPUs, 1 = sequential sweep without synchronization
    """
    is_circle: bool = False
    max_iterations: int = 0
    epsilon: float = defaults.DEFAULT_EPSILON
    relaxation: float = defaults.DEFAULT_RELAXATION
    num_threads: int = defaults.DEFAULT_NUM_THREADS

    def __post_init__(self) -> None:
        if self.max_iterations < 0:
            raise InvalidArgumentError(
                f"max_iterations must be >= 0, got {self.max_iterations}")
        if not self.epsilon >= 0:
            raise InvalidArgumentError(f"epsilon must be >= 0, got {self.epsilon}")
        if not defaults.MIN_RELAXATION < self.relaxation < defaults.MAX_RELAXATION:
            raise InvalidArgumentError(
                f"relaxation must lie in ({defaults.MIN_RELAXATION}, "
                f"{defaults.MAX_RELAXATION}), got {self.relaxation}")
        if self.num_threads < 0:
            raise InvalidArgumentError(
                f"num_threads must be >= 0, got {self.num_threads}")

    @classmethod
    def for_grid(
        cls,
        shape: tuple[int, int],
        is_circle: bool = False,
        max_iterations: int | None = None,
        epsilon: float | None = None,
        relaxation: float | None = None,
        num_threads: int | None = None,
    ) -> "RelaxationConfig":
        """Build a config, taking unset values from gridfill.defaults."""
        if max_iterations is None:
            max_iterations = defaults.DEFAULT_MAX_ITERATIONS
        if max_iterations is None:
            max_iterations = shape[0] * shape[1]
        return cls(
            is_circle=bool(is_circle),
            max_iterations=int(max_iterations),
            epsilon=defaults.DEFAULT_EPSILON if epsilon is None else float(epsilon),
            relaxation=defaults.DEFAULT_RELAXATION if relaxation is None else float(relaxation),
            num_threads=defaults.DEFAULT_NUM_THREADS if num_threads is None else int(num_threads),
        )


@dataclass(frozen=True)
class LoessWindow:
    """Half-window of a LOESS fill, in grid points along each axis."""
    nx: int = defaults.DEFAULT_LOESS_HALF_WIDTH
    ny: int = defaults.DEFAULT_LOESS_HALF_WIDTH

    def __post_init__(self) -> None:
        for name in ("nx", "ny"):
            value = getattr(self, name)
            if int(value) != value or value < 1:
                raise InvalidArgumentError(
                    f"{name} must be a positive integer, got {value!r}")


@dataclass
class FillResult:
    """Outcome of a Gauss-Seidel fill.

    Unpacks as ``(iterations, residual)``.
    """
    iterations: int = 0
    residual: float = 0.0
    converged: bool = True
    residuals: list[float] = field(default_factory=list)

    def __iter__(self):
        return iter((self.iterations, self.residual))
