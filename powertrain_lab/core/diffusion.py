"""Steady-state Li-ion diffusion across a separator.

Fick's first law with a linear concentration drop over the separator
thickness: ``J = -D * dC / L``.  A thinner separator gives a steeper
gradient and a proportionally higher flux (and current density).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

MICRON: float = 1e-6
PROFILE_CENTER: float = -25e-6  # m


@dataclass(frozen=True)
class SeparatorComparison:
    """Steady fluxes through two separators under the same driving force.

    Attributes:
        flux_a: Flux through separator a in mol/(m^2*s).
        flux_b: Flux through separator b in mol/(m^2*s).
        gradient_a: Concentration gradient across a in mol/m^4.
        gradient_b: Concentration gradient across b in mol/m^4.
        increase_pct: Relative flux increase of b over a in percent.
    """

    flux_a: float
    flux_b: float
    gradient_a: float
    gradient_b: float
    increase_pct: float


def steady_flux(diffusivity: float, thickness: float, delta_c: float) -> float:
    """Steady diffusive flux in mol/(m^2*s).

    Args:
        diffusivity: Diffusion coefficient in m^2/s (> 0).
        thickness: Separator thickness in m (> 0).
        delta_c: Concentration difference in mol/m^3.

    Raises:
        ValueError: If diffusivity or thickness is not positive.
    """
    if diffusivity <= 0.0:
        raise ValueError("diffusivity must be > 0.")
    if thickness <= 0.0:
        raise ValueError("thickness must be > 0.")
    return -diffusivity * delta_c / thickness


def compare_separators(
    diffusivity: float,
    thickness_a_um: float,
    thickness_b_um: float,
    delta_c_mol_l: float,
) -> SeparatorComparison:
    """Compare two separator thicknesses (in micrometres)."""
    if thickness_a_um <= 0.0 or thickness_b_um <= 0.0:
        raise ValueError("separator thicknesses must be > 0.")
    if delta_c_mol_l <= 0.0:
        raise ValueError("delta_c_mol_l must be > 0.")
    la = thickness_a_um * MICRON
    lb = thickness_b_um * MICRON
    delta_c = delta_c_mol_l * 1e3
    grad_a = delta_c / la
    grad_b = delta_c / lb
    return SeparatorComparison(
        flux_a=steady_flux(diffusivity, la, delta_c),
        flux_b=steady_flux(diffusivity, lb, delta_c),
        gradient_a=grad_a,
        gradient_b=grad_b,
        increase_pct=(grad_b / grad_a - 1.0) * 100.0,
    )


def concentration_profile(
    x: ArrayLike,
    thickness: float,
    c_high: float,
    c_low: float,
    center: float = PROFILE_CENTER,
) -> NDArray[np.float64]:
    """Piecewise-linear steady concentration profile across a separator.

    Positions left of the separator sit at *c_high*, right of it at
    *c_low*, with a linear drop inside.  All lengths are in m.
    """
    if thickness <= 0.0:
        raise ValueError("thickness must be > 0.")
    pos = np.asarray(x, dtype=float)
    left = center - thickness / 2.0
    inside = c_high - (c_high - c_low) * (pos - left) / thickness
    return np.clip(inside, min(c_low, c_high), max(c_low, c_high))


def transient_surface(
    x: ArrayLike,
    tau: ArrayLike,
    thickness: float,
    c_high: float,
    c_low: float,
    center: float = PROFILE_CENTER,
) -> NDArray[np.float64]:
    """Pseudo-transient relaxation from uniform *c_high* to the steady profile.

    Uses ``alpha = 1 - exp(-tau)`` as the blend toward steady state.

    Returns:
        Array of shape ``(len(tau), len(x))`` in the units of c_high.
    """
    steady = concentration_profile(x, thickness, c_high, c_low, center)
    alpha = 1.0 - np.exp(-np.asarray(tau, dtype=float))
    return (1.0 - alpha)[:, np.newaxis] * c_high + alpha[:, np.newaxis] * steady[np.newaxis, :]
