"""Methane steam-reforming equilibrium.

The reaction Gibbs energy is built from the formation tables
(dG_CO + 3 * dG_H2 - dG_CH4 - dG_H2O, with dG_H2 = 0) and interpolated in
temperature.  The equilibrium constant then feeds the extent solver.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from powertrain_lab.core.constants import (
    GIBBS_CH4,
    GIBBS_CO,
    GIBBS_H2O_GAS,
    GIBBS_TEMPERATURES,
    R_GAS,
)
from powertrain_lab.core.equilibrium import (
    EXTENT_SUPPRESSED,
    MoleFractions,
    mole_fractions,
    solve_extent,
)
from powertrain_lab.core.interpolation import InterpolationTable, interpolate

REFORMING_GIBBS = InterpolationTable(
    x=GIBBS_TEMPERATURES,
    # dG_H2 is zero at every temperature.
    y=tuple(
        co - ch4 - h2o
        for co, ch4, h2o in zip(GIBBS_CO, GIBBS_CH4, GIBBS_H2O_GAS)
    ),
)

SWEEP_PRESSURES: tuple[float, ...] = (1.0, 10.0, 100.0)


@dataclass(frozen=True)
class ReformingEquilibrium:
    """Equilibrium state of the reformer at one operating point.

    Attributes:
        temperature: Temperature in K.
        pressure: Total pressure in atm.
        gibbs_kj: Reaction Gibbs energy in kJ/mol.
        kp: Equilibrium constant.
        extent: Extent of reaction (0-1).
        fractions: Equilibrium mole fractions.
    """

    temperature: float
    pressure: float
    gibbs_kj: float
    kp: float
    extent: float
    fractions: MoleFractions


def reaction_gibbs(temperature: float) -> float:
    """Reaction Gibbs energy in kJ/mol at *temperature* K."""
    return interpolate(REFORMING_GIBBS, temperature)


def equilibrium_constant(temperature: float) -> float:
    """Equilibrium constant Kp = exp(-dG / (R T)).

    Raises:
        ValueError: If temperature is not positive.
    """
    if temperature <= 0.0:
        raise ValueError("temperature must be > 0.")
    return math.exp(-reaction_gibbs(temperature) * 1e3 / (R_GAS * temperature))


def _solve(kp: float, pressure: float) -> float:
    # Kp underflows to exactly 0.0 below roughly 23 K.
    if kp == 0.0:
        return EXTENT_SUPPRESSED
    return solve_extent(kp, pressure)


def reforming_equilibrium(temperature: float, pressure: float) -> ReformingEquilibrium:
    """Solve the reformer composition at one temperature and pressure."""
    kp = equilibrium_constant(temperature)
    extent = _solve(kp, pressure)
    return ReformingEquilibrium(
        temperature=temperature,
        pressure=pressure,
        gibbs_kj=reaction_gibbs(temperature),
        kp=kp,
        extent=extent,
        fractions=mole_fractions(extent),
    )


def pressure_sweep(
    temperature: float,
    pressures: Sequence[float] = SWEEP_PRESSURES,
) -> list[ReformingEquilibrium]:
    """Equilibrium at a fixed temperature over several pressures."""
    return [reforming_equilibrium(temperature, p) for p in pressures]


def hydrogen_fraction_surface(
    temperatures: ArrayLike,
    pressures: ArrayLike,
) -> NDArray[np.float64]:
    """Equilibrium H2 mole fraction on a (pressure, temperature) grid.

    Returns:
        Array of shape ``(len(pressures), len(temperatures))``.
    """
    t = np.asarray(temperatures, dtype=float)
    p = np.asarray(pressures, dtype=float)
    kps = [equilibrium_constant(float(ti)) for ti in t]
    surface = np.empty((p.size, t.size))
    for i, pi in enumerate(p):
        for j, kp in enumerate(kps):
            surface[i, j] = mole_fractions(_solve(kp, float(pi))).h2
    return surface
