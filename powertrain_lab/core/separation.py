"""Minimum thermodynamic work to separate CO2 from a gas mixture.

For an ideal mixture the reversible work to extract one mole of CO2 at
mole fraction ``y`` is ``W = R T ln(1 / y)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from powertrain_lab.core.constants import R_GAS

PPM: float = 1e6


@dataclass(frozen=True)
class SeparationWork:
    """Separation work for direct air capture versus a concentrated source.

    Attributes:
        reference_j_mol: Work from the reference (flue-gas) stream in J/mol.
        dac_j_mol: Work from ambient air in J/mol.
        ratio: ``dac_j_mol / reference_j_mol``.
        ln_reference: ln(1 / y) for the reference stream.
        ln_dac: ln(1 / y) for ambient air.
    """

    reference_j_mol: float
    dac_j_mol: float
    ratio: float
    ln_reference: float
    ln_dac: float


def separation_work(
    co2_ppm: float,
    reference_pct: float,
    temperature: float,
) -> SeparationWork:
    """Compare the separation work from air and from a reference stream.

    Args:
        co2_ppm: Atmospheric CO2 concentration in ppm (0 < ppm < 1e6).
        reference_pct: Reference stream CO2 concentration in % vol
            (0 < pct < 100).
        temperature: Temperature in K (> 0).

    Raises:
        ValueError: If any argument is out of range.
    """
    if not 0.0 < co2_ppm < PPM:
        raise ValueError("co2_ppm must be between 0 and 1e6 (exclusive).")
    if not 0.0 < reference_pct < 100.0:
        raise ValueError("reference_pct must be between 0 and 100 (exclusive).")
    if temperature <= 0.0:
        raise ValueError("temperature must be > 0.")

    ln_ref = math.log(100.0 / reference_pct)
    ln_dac = math.log(PPM / co2_ppm)
    return SeparationWork(
        reference_j_mol=R_GAS * temperature * ln_ref,
        dac_j_mol=R_GAS * temperature * ln_dac,
        ratio=ln_dac / ln_ref,
        ln_reference=ln_ref,
        ln_dac=ln_dac,
    )


def separation_work_curve(ppm: ArrayLike, temperature: float) -> NDArray[np.float64]:
    """Separation work in kJ/mol over a range of concentrations, floored at 0."""
    c = np.asarray(ppm, dtype=float)
    return np.maximum(0.0, R_GAS * temperature * np.log(PPM / c) / 1000.0)


def separation_work_surface(
    temperatures: ArrayLike,
    log10_ppm: ArrayLike,
) -> NDArray[np.float64]:
    """Separation work in kJ/mol on a (log10 ppm, temperature) grid.

    Returns:
        Array of shape ``(len(log10_ppm), len(temperatures))``.
    """
    t = np.asarray(temperatures, dtype=float)
    c = np.power(10.0, np.asarray(log10_ppm, dtype=float))
    work = R_GAS * t[np.newaxis, :] * np.log(PPM / c)[:, np.newaxis] / 1000.0
    return np.maximum(0.0, work)
