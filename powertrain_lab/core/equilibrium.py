"""Equilibrium extent solver for methane steam reforming.

Reaction: CH4 + H2O <-> CO + 3 H2, starting from an equimolar feed.  With
extent ``x`` the equilibrium relation is::

    27 x^4 p^2 / (4 (1 - x)^2 (1 + x)^2) = Kp

The extent is found by a fixed-count bisection.  The iteration count is
not convergence-driven so that the numeric output surfaces stay
reproducible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

KP_COMPLETE: float = 1e12  # above this the reaction is treated as complete
KP_SUPPRESSED: float = 1e-12  # below this the reaction is treated as suppressed
EXTENT_COMPLETE: float = 0.9999
EXTENT_SUPPRESSED: float = 1e-4

BRACKET_LOW: float = 1e-6
BRACKET_HIGH: float = 1.0 - 1e-6
BISECTION_ITERATIONS: int = 50


# ---------------------------------------------------------------------------
# Mole fractions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MoleFractions:
    """Equilibrium gas composition for a given extent of reaction.

    Attributes:
        ch4: Methane mole fraction.
        h2o: Steam mole fraction.
        co: Carbon monoxide mole fraction.
        h2: Hydrogen mole fraction.
    """

    ch4: float
    h2o: float
    co: float
    h2: float

    def total(self) -> float:
        """Sum of all four fractions (1.0 up to rounding)."""
        return self.ch4 + self.h2o + self.co + self.h2


def mole_fractions(extent: float) -> MoleFractions:
    """Return the equilibrium mole fractions for *extent*.

    Total moles for an equimolar feed are ``2 + 2x``.

    Raises:
        ValueError: If extent is outside [0, 1].
    """
    if not 0.0 <= extent <= 1.0:
        raise ValueError("extent must be between 0.0 and 1.0.")
    total_moles = 2.0 + 2.0 * extent
    return MoleFractions(
        ch4=(1.0 - extent) / total_moles,
        h2o=(1.0 - extent) / total_moles,
        co=extent / total_moles,
        h2=3.0 * extent / total_moles,
    )


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------


def reforming_residual(extent: float, kp: float, p_total: float) -> float:
    """Residual of the equilibrium relation at *extent*.

    Monotonically increasing in *extent* on (0, 1).
    """
    return (27.0 * extent**4 * p_total**2) / (
        4.0 * (1.0 - extent) ** 2 * (1.0 + extent) ** 2
    ) - kp


def solve_extent(kp: float, p_total: float) -> float:
    """Solve the reforming equilibrium for the extent of reaction.

    Args:
        kp: Equilibrium constant (finite, > 0).
        p_total: Total pressure in atm (finite, > 0).

    Returns:
        Extent of reaction in (0, 1).

    Raises:
        ValueError: If kp or p_total is non-finite or not positive.
    """
    if not math.isfinite(kp) or kp <= 0.0:
        raise ValueError("kp must be finite and > 0.")
    if not math.isfinite(p_total) or p_total <= 0.0:
        raise ValueError("p_total must be finite and > 0.")

    if kp > KP_COMPLETE:
        return EXTENT_COMPLETE
    if kp < KP_SUPPRESSED:
        return EXTENT_SUPPRESSED

    low: float = BRACKET_LOW
    high: float = BRACKET_HIGH
    for _ in range(BISECTION_ITERATIONS):
        mid = (low + high) / 2.0
        if reforming_residual(mid, kp, p_total) > 0.0:
            high = mid
        else:
            low = mid
    return (low + high) / 2.0
