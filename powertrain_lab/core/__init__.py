"""Core calculation and simulation modules for Powertrain Lab."""

from powertrain_lab.core.diffusion import (
    SeparatorComparison,
    compare_separators,
    concentration_profile,
    steady_flux,
    transient_surface,
)
from powertrain_lab.core.drive_state import DriveState, classify_drive_state
from powertrain_lab.core.equilibrium import (
    MoleFractions,
    mole_fractions,
    reforming_residual,
    solve_extent,
)
from powertrain_lab.core.fuel_cell import (
    StackSizing,
    gibbs_energy,
    gibbs_energy_at_pressure,
    gibbs_surface,
    reversible_voltage,
    reversible_voltage_curve,
    size_stack,
    stack_power_curve,
)
from powertrain_lab.core.interpolation import (
    InterpolationTable,
    interpolate,
    interpolate_many,
)
from powertrain_lab.core.reforming import (
    ReformingEquilibrium,
    equilibrium_constant,
    hydrogen_fraction_surface,
    pressure_sweep,
    reaction_gibbs,
    reforming_equilibrium,
)
from powertrain_lab.core.separation import (
    SeparationWork,
    separation_work,
    separation_work_curve,
    separation_work_surface,
)
from powertrain_lab.core.simulation import (
    DEMO_DRIVE_CYCLE,
    MAX_TIME_STEP,
    DriveSegment,
    PedalIntent,
    PowertrainSession,
    SimulationState,
    TelemetrySnapshot,
    advance,
    compute_telemetry,
    simulate_drive_cycle,
)
from powertrain_lab.core.vehicle import VehicleSpec

__all__ = [
    "DEMO_DRIVE_CYCLE",
    "DriveSegment",
    "DriveState",
    "InterpolationTable",
    "MAX_TIME_STEP",
    "MoleFractions",
    "PedalIntent",
    "PowertrainSession",
    "ReformingEquilibrium",
    "SeparationWork",
    "SeparatorComparison",
    "SimulationState",
    "StackSizing",
    "TelemetrySnapshot",
    "VehicleSpec",
    "advance",
    "classify_drive_state",
    "compare_separators",
    "compute_telemetry",
    "concentration_profile",
    "equilibrium_constant",
    "gibbs_energy",
    "gibbs_energy_at_pressure",
    "gibbs_surface",
    "hydrogen_fraction_surface",
    "interpolate",
    "interpolate_many",
    "mole_fractions",
    "pressure_sweep",
    "reaction_gibbs",
    "reforming_equilibrium",
    "reforming_residual",
    "reversible_voltage",
    "reversible_voltage_curve",
    "separation_work",
    "separation_work_curve",
    "separation_work_surface",
    "simulate_drive_cycle",
    "size_stack",
    "solve_extent",
    "stack_power_curve",
    "steady_flux",
    "transient_surface",
]
