"""Tests for the steam-reforming equilibrium extent solver."""

import math

import pytest

from powertrain_lab.core.equilibrium import (
    BISECTION_ITERATIONS,
    mole_fractions,
    reforming_residual,
    solve_extent,
)

_PRESSURES: tuple[float, ...] = (0.1, 0.5, 1.0, 10.0, 100.0)
_NORMAL_KP: tuple[float, ...] = (1e-6, 1e-3, 0.1, 1.0, 10.0, 1e3, 1e6)


def _reference_extent(kp: float, p_total: float) -> float:
    """Closed-form root of the equilibrium relation."""
    root_kp = math.sqrt(kp)
    return math.sqrt(2.0 * root_kp / (math.sqrt(27.0) * p_total + 2.0 * root_kp))


# ---------------------------------------------------------------------------
# Degenerate ranges
# ---------------------------------------------------------------------------


def test_complete_reaction_shortcut() -> None:
    """Kp above 1e12 must return 0.9999 for any pressure."""
    for p in _PRESSURES:
        assert solve_extent(2e12, p) == 0.9999


def test_suppressed_reaction_shortcut() -> None:
    """Kp below 1e-12 must return 1e-4 for any pressure."""
    for p in _PRESSURES:
        assert solve_extent(1e-13, p) == 1e-4


# ---------------------------------------------------------------------------
# Bisection accuracy
# ---------------------------------------------------------------------------


def test_unit_kp_unit_pressure_matches_reference() -> None:
    """Kp = 1, p = 1 must match the high-precision root within 1e-6."""
    expected = math.sqrt(2.0 / (2.0 + 3.0 * math.sqrt(3.0)))
    assert abs(solve_extent(1.0, 1.0) - expected) < 1e-6


def test_residual_near_zero() -> None:
    """Plugging the solution back must reproduce Kp within 1e-6 relative."""
    for kp in _NORMAL_KP:
        for p in _PRESSURES[1:]:
            x = solve_extent(kp, p)
            lhs = reforming_residual(x, kp, p) + kp
            assert abs(lhs - kp) / kp < 1e-6, f"kp={kp}, p={p}"


def test_matches_closed_form_root() -> None:
    """The bisection result must agree with the closed-form root."""
    for kp in _NORMAL_KP:
        for p in _PRESSURES[1:]:
            assert solve_extent(kp, p) == pytest.approx(
                _reference_extent(kp, p), rel=1e-9
            )


def test_fixed_iteration_count() -> None:
    """The solver performs exactly fifty halvings."""
    assert BISECTION_ITERATIONS == 50


def test_extent_falls_with_pressure() -> None:
    """Higher pressure must suppress conversion (mole-increasing reaction)."""
    extents = [solve_extent(1.0, p) for p in _PRESSURES]
    assert extents == sorted(extents, reverse=True)


def test_extent_rises_with_kp() -> None:
    """A larger equilibrium constant must give a larger extent."""
    extents = [solve_extent(kp, 1.0) for kp in _NORMAL_KP]
    assert extents == sorted(extents)


# ---------------------------------------------------------------------------
# Mole fractions
# ---------------------------------------------------------------------------


def test_mole_fraction_closure() -> None:
    """The four mole fractions must sum to 1 for any solved extent."""
    kps = [10.0**e for e in range(-11, 12)]
    for kp in kps:
        for p in _PRESSURES:
            fractions = mole_fractions(solve_extent(kp, p))
            assert abs(fractions.total() - 1.0) < 1e-6


def test_mole_fractions_values() -> None:
    """x = 0.5 gives 3 total moles with the stoichiometric split."""
    f = mole_fractions(0.5)
    assert f.ch4 == pytest.approx(0.5 / 3.0)
    assert f.h2o == pytest.approx(0.5 / 3.0)
    assert f.co == pytest.approx(0.5 / 3.0)
    assert f.h2 == pytest.approx(1.5 / 3.0)


def test_mole_fractions_rejects_out_of_range_extent() -> None:
    """Extents outside [0, 1] are not physical."""
    with pytest.raises(ValueError):
        mole_fractions(1.5)
    with pytest.raises(ValueError):
        mole_fractions(-0.1)


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "kp, p",
    [
        (0.0, 1.0),
        (-1.0, 1.0),
        (math.inf, 1.0),
        (math.nan, 1.0),
        (1.0, 0.0),
        (1.0, -5.0),
        (1.0, math.inf),
    ],
)
def test_invalid_query_rejected(kp: float, p: float) -> None:
    """Non-positive or non-finite inputs must raise ValueError."""
    with pytest.raises(ValueError):
        solve_extent(kp, p)
