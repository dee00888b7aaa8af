"""Tests for the piecewise-linear table interpolator."""

import math

import numpy as np
import pytest

from powertrain_lab.core.constants import GIBBS_H2O_GAS, GIBBS_TEMPERATURES
from powertrain_lab.core.interpolation import (
    InterpolationTable,
    interpolate,
    interpolate_many,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_table() -> InterpolationTable:
    """Return a small table with a non-monotone dependent variable."""
    return InterpolationTable(x=(0.0, 1.0, 3.0, 6.0), y=(2.0, 4.0, 1.0, 1.5))


# ---------------------------------------------------------------------------
# Query behaviour
# ---------------------------------------------------------------------------


def test_clamps_below_first_point() -> None:
    """Queries at or below x[0] must return y[0]."""
    table = _sample_table()
    for x in (-1e9, -3.0, -1e-12, 0.0):
        assert interpolate(table, x) == table.y[0]


def test_clamps_above_last_point() -> None:
    """Queries at or above x[-1] must return y[-1]."""
    table = _sample_table()
    for x in (6.0, 6.0 + 1e-12, 10.0, 1e9):
        assert interpolate(table, x) == table.y[-1]


def test_exact_at_knots() -> None:
    """Every knot must return its tabulated value exactly."""
    table = _sample_table()
    for xi, yi in zip(table.x, table.y):
        assert interpolate(table, xi) == yi


def test_exact_at_gibbs_table_knots() -> None:
    """Knot exactness must hold for the shipped Gibbs table too."""
    table = InterpolationTable(x=GIBBS_TEMPERATURES, y=GIBBS_H2O_GAS)
    for xi, yi in zip(table.x, table.y):
        assert interpolate(table, xi) == yi


def test_linear_blend_at_midpoint() -> None:
    """The midpoint of an interval is the mean of its end values."""
    table = _sample_table()
    assert interpolate(table, 0.5) == pytest.approx(3.0)
    assert interpolate(table, 2.0) == pytest.approx(2.5)
    assert interpolate(table, 4.5) == pytest.approx(1.25)


def test_result_between_neighbouring_values() -> None:
    """Interior queries must lie between the bracketing y values."""
    table = _sample_table()
    for lo_x, hi_x, lo_y, hi_y in zip(table.x, table.x[1:], table.y, table.y[1:]):
        for frac in (0.01, 0.25, 0.5, 0.75, 0.99):
            x = lo_x + frac * (hi_x - lo_x)
            y = interpolate(table, x)
            assert min(lo_y, hi_y) <= y <= max(lo_y, hi_y)


def test_no_cubic_smoothing() -> None:
    """Between two Gibbs knots the curve must be a straight line."""
    table = InterpolationTable(x=GIBBS_TEMPERATURES, y=GIBBS_H2O_GAS)
    mid = interpolate(table, 750.0)
    assert mid == pytest.approx((GIBBS_H2O_GAS[1] + GIBBS_H2O_GAS[2]) / 2.0)


def test_vectorised_matches_scalar() -> None:
    """interpolate_many must agree with interpolate on a dense grid."""
    table = _sample_table()
    grid = np.linspace(-2.0, 8.0, 201)
    vec = interpolate_many(table, grid)
    assert vec.shape == grid.shape
    for x, y in zip(grid, vec):
        assert abs(interpolate(table, float(x)) - y) < 1e-12


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_from_pairs() -> None:
    """from_pairs must split (x, y) pairs into the two axes."""
    table = InterpolationTable.from_pairs([(1.0, 10.0), (2.0, 20.0)])
    assert table.x == (1.0, 2.0)
    assert table.y == (10.0, 20.0)


def test_lists_are_stored_as_tuples() -> None:
    """The table must not alias caller-owned lists."""
    xs = [0.0, 1.0]
    table = InterpolationTable(x=xs, y=[0.0, 1.0])  # type: ignore[arg-type]
    xs.append(2.0)
    assert table.x == (0.0, 1.0)


@pytest.mark.parametrize(
    "x, y",
    [
        ((1.0,), (1.0,)),
        ((), ()),
        ((0.0, 1.0), (0.0,)),
        ((0.0, 0.0), (1.0, 2.0)),
        ((0.0, 2.0, 1.0), (1.0, 2.0, 3.0)),
        ((0.0, math.nan), (1.0, 2.0)),
        ((0.0, 1.0), (1.0, math.inf)),
    ],
)
def test_malformed_tables_rejected(x: tuple, y: tuple) -> None:
    """Degenerate tables must fail at construction time."""
    with pytest.raises(ValueError):
        InterpolationTable(x=x, y=y)


def test_nan_query_rejected() -> None:
    """A NaN query has no interval and must raise ValueError."""
    with pytest.raises(ValueError):
        interpolate(_sample_table(), math.nan)


def test_infinite_queries_clamp() -> None:
    """Infinite queries fall on the table edges."""
    table = _sample_table()
    assert interpolate(table, -math.inf) == 2.0
    assert interpolate(table, math.inf) == 1.5
