"""
In-memory axis and grid used by the fill algorithms.

An Axis is a monotonic set of coordinates, optionally circular (longitudes
covering 360 degrees). A Grid2D pairs an X and a Y axis with a value array
indexed [ix, iy].
"""

from __future__ import annotations

import enum
import math

import numpy as np

from gridfill import defaults
from gridfill.errors import InvalidArgumentError


class Boundary(enum.Enum):
    """How window indexes falling outside a non-circular axis are handled."""

    SYM = "sym"          # Reflect about the edge node
    WRAP = "wrap"        # Wrap around as if the axis were periodic
    EXPAND = "expand"    # Repeat the edge node
    UNDEF = "undef"      # Drop the index (shorter window)

    @classmethod
    def parse(cls, value: "Boundary | str") -> "Boundary":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidArgumentError(f"Invalid boundary mode: {value!r}") from None


class Axis:
    """Monotonic coordinate axis.

    Attributes:
        is_circle: True if the first and last nodes are neighbours. Detected
            from the coordinates when not given: a regular axis whose span
            plus one step covers 360 degrees.
    """

    def __init__(self, values, is_circle: bool | None = None):
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 1 or values.size < 2:
            raise InvalidArgumentError("an axis needs a 1D array of at least 2 coordinates")
        steps = np.diff(values)
        if not (np.all(steps > 0) or np.all(steps < 0)):
            raise InvalidArgumentError("axis coordinates must be strictly monotonic")

        self._values = values
        self._ascending = bool(steps[0] > 0)
        self._sorted = values if self._ascending else values[::-1]
        self._sorted_indexes = np.arange(values.size, dtype=np.float64)
        step = (values[-1] - values[0]) / (values.size - 1)
        self._regular = bool(np.allclose(steps, step, rtol=0.0,
                                         atol=defaults.CIRCLE_EPSILON * abs(step)))
        if is_circle is None:
            is_circle = self._regular and math.isclose(
                abs(values[-1] - values[0]) + abs(step), defaults.CIRCLE_DEGREES,
                abs_tol=defaults.CIRCLE_EPSILON)
        self.is_circle = bool(is_circle)

    def __repr__(self) -> str:
        return (f"Axis(size={self.size}, min={self.min_value()}, "
                f"max={self.max_value()}, is_circle={self.is_circle})")

    def __len__(self) -> int:
        return self._values.size

    def __getitem__(self, index):
        return self._values[index]

    @property
    def size(self) -> int:
        return self._values.size

    @property
    def is_ascending(self) -> bool:
        return self._ascending

    @property
    def is_regular(self) -> bool:
        return self._regular

    def min_value(self) -> float:
        return float(self._sorted[0])

    def max_value(self) -> float:
        return float(self._sorted[-1])

    def _position(self, coordinate: float) -> float | None:
        """Fractional index of a coordinate, None if outside the axis."""
        low, high = self._sorted[0], self._sorted[-1]
        if self.is_circle:
            coordinate = low + math.fmod(coordinate - low, defaults.CIRCLE_DEGREES)
            if coordinate < low:
                coordinate += defaults.CIRCLE_DEGREES
            if coordinate > high:
                # Between the last node and the first one, one turn later
                gap = low + defaults.CIRCLE_DEGREES - high
                position = (self.size - 1) + (coordinate - high) / gap
                return position if self._ascending else (self.size - 1) - position
        elif coordinate < low or coordinate > high:
            return None
        position = float(np.interp(coordinate, self._sorted, self._sorted_indexes))
        return position if self._ascending else (self.size - 1) - position

    def find_index(self, coordinate: float, bounded: bool = False) -> int:
        """Index of the node nearest to coordinate.

        Returns -1 for a coordinate outside a non-circular axis, unless
        ``bounded`` is set, in which case the nearest edge node is returned.
        """
        position = self._position(coordinate)
        if position is None:
            if not bounded:
                return -1
            return 0 if (coordinate < self.min_value()) == self._ascending else self.size - 1
        index = int(math.floor(position + 0.5))
        return index % self.size if self.is_circle else min(max(index, 0), self.size - 1)

    def find_indexes(
        self,
        coordinate: float,
        size: int,
        boundary: Boundary | str = Boundary.SYM,
    ) -> np.ndarray | None:
        """Indexes of the ``2 * size`` nodes framing a coordinate.

        The window runs from ``size - 1`` nodes before the lower node of the
        interval containing the coordinate to ``size`` nodes after it. Near
        the edges of a non-circular axis the indexes are reflected, wrapped,
        clamped or dropped according to ``boundary``; a circular axis always
        wraps. Returns None if the coordinate is outside the axis.
        """
        if size < 1:
            raise InvalidArgumentError(f"window size must be >= 1, got {size}")
        boundary = Boundary.parse(boundary)
        position = self._position(coordinate)
        if position is None:
            return None

        n = self.size
        lower = int(math.floor(position))
        if not self.is_circle:
            lower = min(max(lower, 0), n - 2)
        indexes = np.arange(lower - size + 1, lower + size + 1, dtype=np.int64)

        if self.is_circle or boundary is Boundary.WRAP:
            return indexes % n
        if boundary is Boundary.EXPAND:
            return np.clip(indexes, 0, n - 1)
        if boundary is Boundary.UNDEF:
            return indexes[(indexes >= 0) & (indexes < n)]
        # Reflect about the edge nodes: -1 -> 1, n -> n - 2
        period = 2 * (n - 1)
        indexes = np.abs(indexes) % period
        return np.where(indexes >= n, period - indexes, indexes)

    def index_distance(self, origin: int, index: int) -> int:
        """Signed number of steps from origin to index (shortest way on a circle)."""
        delta = index - origin
        if self.is_circle:
            delta %= self.size
            if delta > self.size // 2:
                delta -= self.size
        return delta


class Grid2D:
    """Values on a grid defined by an X and a Y axis, indexed [ix, iy]."""

    def __init__(self, x: Axis, y: Axis, array: np.ndarray):
        if array.ndim != 2 or array.shape != (x.size, y.size):
            raise InvalidArgumentError(
                f"array shape {array.shape} does not match axes ({x.size}, {y.size})")
        self.x = x
        self.y = y
        self.array = array

    def __repr__(self) -> str:
        return f"Grid2D(x={self.x!r}, y={self.y!r}, dtype={self.array.dtype})"

    @property
    def shape(self) -> tuple[int, int]:
        return self.array.shape

    def value(self, ix: int, iy: int) -> float:
        return self.array[ix, iy]
