"""CLI entrypoint for the Powertrain Lab calculators and simulator."""

from __future__ import annotations

import sys

from powertrain_lab import __version__
from powertrain_lab.config import load_vehicle_spec
from powertrain_lab.core.fuel_cell import reversible_voltage
from powertrain_lab.core.reforming import reforming_equilibrium
from powertrain_lab.core.simulation import DEMO_DRIVE_CYCLE, simulate_drive_cycle


def main() -> None:
    """Run a short demonstration of the thermochemistry and powertrain cores."""
    print(f"Powertrain Lab v{__version__}")
    print("=" * 56)

    # -- Fuel cell ------------------------------------------------------------
    print("\nReversible H2/O2 cell voltage:")
    print(f"  {'T (K)':>7}  {'E_rev (V)':>9}")
    for temperature in (298.15, 500.0, 1000.0, 1500.0):
        print(f"  {temperature:7.1f}  {reversible_voltage(temperature):9.4f}")

    # -- Reforming ------------------------------------------------------------
    eq = reforming_equilibrium(1000.0, 10.0)
    print(f"\nCH4 reforming at {eq.temperature:.0f} K, {eq.pressure:.0f} atm:")
    print(f"  dG = {eq.gibbs_kj:.3f} kJ/mol   Kp = {eq.kp:.3e}   x = {eq.extent:.4f}")
    f = eq.fractions
    print(f"  CH4 {f.ch4:.4f}  H2O {f.h2o:.4f}  CO {f.co:.4f}  H2 {f.h2:.4f}")

    # -- Powertrain -----------------------------------------------------------
    spec = load_vehicle_spec()
    print(f"\nVehicle: {spec.name}")
    print("-" * 56)
    result = simulate_drive_cycle(spec, DEMO_DRIVE_CYCLE)

    print(f"  {'t (s)':>6}  {'km/h':>6}  {'kW':>7}  {'SOC %':>6}  State")
    for t, snap in zip(result["time"], result["snapshots"]):
        if round(t / 0.02) % 100 == 0:
            print(
                f"  {t:6.1f}  {snap.speed_kmh:6.1f}  {snap.electrical_power_kw:7.1f}"
                f"  {snap.soc:6.2f}  {snap.drive_state.value}"
            )

    print("\nDemo complete.")


if __name__ == "__main__":
    sys.exit(main() or 0)
