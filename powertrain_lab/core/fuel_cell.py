"""Hydrogen fuel-cell thermodynamics and stack sizing.

Reaction: H2 + 1/2 O2 -> H2O(g).  The reversible cell voltage follows
from the Gibbs energy of formation of water vapour::

    E_rev = -dG * 1e3 / (n * F),   n = 2

Stack sizing is a direct evaluation: the per-cell power follows from the
operating point and the active area, and the cell count is rounded up to
reach the target power.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from powertrain_lab.core.constants import (
    FARADAY,
    GIBBS_H2O_GAS,
    GIBBS_TEMPERATURES,
    R_GAS,
)
from powertrain_lab.core.interpolation import (
    InterpolationTable,
    interpolate,
    interpolate_many,
)

N_ELECTRONS: int = 2

WATER_VAPOUR_GIBBS = InterpolationTable(x=GIBBS_TEMPERATURES, y=GIBBS_H2O_GAS)

# ---------------------------------------------------------------------------
# Thermodynamics
# ---------------------------------------------------------------------------


def gibbs_energy(temperature: float) -> float:
    """Gibbs energy of formation of water vapour in kJ/mol at *temperature* K."""
    return interpolate(WATER_VAPOUR_GIBBS, temperature)


def reversible_voltage(temperature: float) -> float:
    """Reversible (open-circuit) cell voltage in V at *temperature* K."""
    return -gibbs_energy(temperature) * 1e3 / (N_ELECTRONS * FARADAY)


def gibbs_energy_at_pressure(temperature: float, p_h2: float) -> float:
    """Gibbs energy in kJ/mol corrected for hydrogen partial pressure.

    Args:
        temperature: Temperature in K.
        p_h2: Hydrogen partial pressure in atm (> 0).

    Raises:
        ValueError: If p_h2 is not positive.
    """
    if p_h2 <= 0.0:
        raise ValueError("p_h2 must be > 0.")
    return gibbs_energy(temperature) + (R_GAS * temperature / 1e3) * math.log(p_h2)


def reversible_voltage_curve(temperatures: ArrayLike) -> NDArray[np.float64]:
    """Reversible voltage in V evaluated on a temperature grid."""
    dg = interpolate_many(WATER_VAPOUR_GIBBS, temperatures)
    return -dg * 1e3 / (N_ELECTRONS * FARADAY)


def gibbs_surface(
    temperatures: ArrayLike,
    pressures: ArrayLike,
) -> NDArray[np.float64]:
    """Pressure-corrected Gibbs energy on a (pressure, temperature) grid.

    Args:
        temperatures: Temperature samples in K (columns).
        pressures: Hydrogen partial pressures in atm (rows, all > 0).

    Returns:
        Array of shape ``(len(pressures), len(temperatures))`` in kJ/mol.
    """
    t = np.asarray(temperatures, dtype=float)
    p = np.asarray(pressures, dtype=float)
    if np.any(p <= 0.0):
        raise ValueError("pressures must all be > 0.")
    dg = interpolate_many(WATER_VAPOUR_GIBBS, t)
    return dg[np.newaxis, :] + (R_GAS * t[np.newaxis, :] / 1e3) * np.log(p)[:, np.newaxis]


# ---------------------------------------------------------------------------
# Stack sizing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StackSizing:
    """Result of sizing a fuel-cell stack for a target power.

    Attributes:
        area_cm2: Active area per cell in cm^2.
        power_density_w_cm2: Areal power density in W/cm^2.
        cell_power_kw: Power per cell in kW.
        cells_required: Number of cells (rounded up).
        actual_power_kw: Stack power with ``cells_required`` cells in kW.
        stack_height_cm: Stack height in cm.
        volume_l: Stack envelope volume in litres.
    """

    area_cm2: float
    power_density_w_cm2: float
    cell_power_kw: float
    cells_required: int
    actual_power_kw: float
    stack_height_cm: float
    volume_l: float


def size_stack(
    cell_voltage: float,
    current_density_ma_cm2: float,
    width_cm: float,
    height_cm: float,
    cell_thickness_mm: float,
    target_power_kw: float,
    margin: float = 1.0,
) -> StackSizing:
    """Size a stack of identical cells for a target electrical power.

    Args:
        cell_voltage: Operating cell voltage in V.
        current_density_ma_cm2: Operating current density in mA/cm^2.
        width_cm: Cell width in cm.
        height_cm: Cell height in cm.
        cell_thickness_mm: Repeat-unit thickness in mm.
        target_power_kw: Required stack power in kW.
        margin: Design margin multiplier applied to the target (>= 1.0).

    Returns:
        The resulting :class:`StackSizing`.

    Raises:
        ValueError: If any dimension or operating value is not positive,
            or margin < 1.0.
    """
    for name, value in (
        ("cell_voltage", cell_voltage),
        ("current_density_ma_cm2", current_density_ma_cm2),
        ("width_cm", width_cm),
        ("height_cm", height_cm),
        ("cell_thickness_mm", cell_thickness_mm),
        ("target_power_kw", target_power_kw),
    ):
        if value <= 0.0:
            raise ValueError(f"{name} must be > 0.")
    if margin < 1.0:
        raise ValueError("margin must be >= 1.0.")

    area = width_cm * height_cm
    power_density = cell_voltage * current_density_ma_cm2 / 1000.0
    cell_power_kw = power_density * area / 1000.0
    cells = math.ceil(target_power_kw * margin / cell_power_kw)
    stack_height = cell_thickness_mm / 10.0 * cells

    return StackSizing(
        area_cm2=area,
        power_density_w_cm2=power_density,
        cell_power_kw=cell_power_kw,
        cells_required=cells,
        actual_power_kw=cells * cell_power_kw,
        stack_height_cm=stack_height,
        volume_l=width_cm * height_cm * stack_height / 1000.0,
    )


def stack_power_curve(
    sizing: StackSizing,
    extra_cells: int = 30,
) -> tuple[NDArray[np.int64], NDArray[np.float64]]:
    """Stack power against cell count, from 1 to required + *extra_cells*."""
    if extra_cells < 0:
        raise ValueError("extra_cells must be >= 0.")
    cells = np.arange(1, sizing.cells_required + extra_cells + 1)
    return cells, cells * sizing.cell_power_kw
