"""Piecewise-linear table interpolation for the thermochemistry calculators.

The Gibbs-energy lookups were historically described as "pchip", but the
behaviour relied on by every plot grid is plain linear interpolation with
clamping at both table edges.  No cubic scheme is applied here.
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class InterpolationTable:
    """Immutable table of samples of a scalar function.

    Attributes:
        x: Independent-variable samples, strictly increasing.
        y: Dependent-variable samples, one per ``x`` entry.
    """

    x: tuple[float, ...]
    y: tuple[float, ...]

    def __post_init__(self) -> None:
        """Validate the table so that queries can never produce NaN."""
        object.__setattr__(self, "x", tuple(float(v) for v in self.x))
        object.__setattr__(self, "y", tuple(float(v) for v in self.y))
        if len(self.x) < 2:
            raise ValueError("table must contain at least 2 points.")
        if len(self.x) != len(self.y):
            raise ValueError("x and y must have the same length.")
        if not all(math.isfinite(v) for v in self.x + self.y):
            raise ValueError("table values must be finite.")
        for lo, hi in zip(self.x, self.x[1:]):
            if hi <= lo:
                raise ValueError("x must be strictly increasing.")

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[float, float]]) -> InterpolationTable:
        """Build a table from ``(x, y)`` pairs."""
        return cls(x=tuple(p[0] for p in pairs), y=tuple(p[1] for p in pairs))


def interpolate(table: InterpolationTable, target_x: float) -> float:
    """Evaluate the table at *target_x* by linear interpolation.

    Queries at or beyond either end of the table return the end value
    (no extrapolation).  Interior knots return their tabulated value
    exactly.

    Args:
        table: Validated interpolation table.
        target_x: Query point.

    Returns:
        Interpolated value.

    Raises:
        ValueError: If target_x is NaN.
    """
    if math.isnan(target_x):
        raise ValueError("target_x must not be NaN.")
    xs, ys = table.x, table.y
    if target_x <= xs[0]:
        return ys[0]
    if target_x >= xs[-1]:
        return ys[-1]

    # Interval [x[i], x[i+1]) containing target_x.
    i = bisect.bisect_right(xs, target_x) - 1
    t = (target_x - xs[i]) / (xs[i + 1] - xs[i])
    return ys[i] + t * (ys[i + 1] - ys[i])


def interpolate_many(table: InterpolationTable, xs: ArrayLike) -> NDArray[np.float64]:
    """Vectorised :func:`interpolate` used to build plot grids.

    Args:
        table: Validated interpolation table.
        xs: Query points of any shape.

    Returns:
        Array of interpolated values with the shape of *xs*.
    """
    return np.interp(
        np.asarray(xs, dtype=float),
        np.asarray(table.x),
        np.asarray(table.y),
    )
