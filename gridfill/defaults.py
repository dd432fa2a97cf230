"""Central place for gridfill default settings."""

# Gauss-Seidel relaxation
DEFAULT_FIRST_GUESS: str = "zonal_average"
DEFAULT_EPSILON: float = 1e-4
DEFAULT_RELAXATION: float = 1.0
DEFAULT_MAX_ITERATIONS: int | None = None  # None = x size * y size of the grid
MIN_RELAXATION: float = 0.0  # exclusive
MAX_RELAXATION: float = 2.0  # exclusive, SOR diverges beyond

# Threading
DEFAULT_NUM_THREADS: int = 0  # 0 = all CPUs, 1 = sequential
PIPELINE_POLL_INTERVAL: float = 5e-6  # Seconds slept between cursor polls

# LOESS extrapolation
DEFAULT_LOESS_HALF_WIDTH: int = 3
LOESS_BOUNDARY: str = "sym"  # Window mode used near grid edges

# Axis
CIRCLE_DEGREES: float = 360.0
CIRCLE_EPSILON: float = 1e-6
