"""Drive-state labelling for the powertrain simulator.

The label is recomputed from scratch every tick; there is no transition
history.
"""

from enum import Enum

GAS_ACTIVE_THRESHOLD: float = 0.05
BRAKE_ACTIVE_THRESHOLD: float = 0.05
MOVING_SPEED: float = 0.5  # m/s
COASTING_SPEED: float = 1.0  # m/s
REGEN_ACTIVE_KW: float = 1.0


class DriveState(str, Enum):
    """Operating-mode label shown by the host UI."""

    STANDBY = "STANDBY"
    LAUNCH = "LAUNCH"
    ACCELERATING = "ACCELERATING"
    COASTING = "COASTING"
    BRAKING = "BRAKING"
    REGEN_BRAKING = "REGEN BRAKING"


def classify_drive_state(
    gas_level: float,
    brake_level: float,
    speed: float,
    regen_power_kw: float,
) -> DriveState:
    """Return the drive state for an instantaneous vehicle state.

    Rules are checked in priority order and the first match wins.

    Args:
        gas_level: Smoothed accelerator level (0.0-1.0).
        brake_level: Smoothed brake level (0.0-1.0).
        speed: Vehicle speed in m/s.
        regen_power_kw: Regenerative recovery power in kW (>= 0).

    Returns:
        The matching :class:`DriveState`.
    """
    if gas_level > GAS_ACTIVE_THRESHOLD and speed > MOVING_SPEED:
        return DriveState.ACCELERATING
    if brake_level > BRAKE_ACTIVE_THRESHOLD and speed > MOVING_SPEED:
        if regen_power_kw > REGEN_ACTIVE_KW:
            return DriveState.REGEN_BRAKING
        return DriveState.BRAKING
    if speed > COASTING_SPEED:
        return DriveState.COASTING
    if gas_level > 0.0:
        return DriveState.LAUNCH
    return DriveState.STANDBY
