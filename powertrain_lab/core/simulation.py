"""Real-time vehicle dynamics and electrical simulation.

A single lumped longitudinal vehicle is advanced by small time steps from
two pedal-intent booleans.  Every tick runs, in order:

    1. Pedal smoothing (first-order lag, separate rise/fall rates).
    2. Force balance and speed update (speed floored at zero).
    3. Electrical draw or regenerative recovery, plus auxiliary load.
    4. State-of-charge, odometry and energy accumulation.
    5. Cosmetic rotation/phase accumulators for the energy-flow display.

``SimulationState`` is immutable: :func:`advance` returns a new state and
:func:`compute_telemetry` derives every displayed quantity from a state
and the vehicle spec.  :class:`PowertrainSession` is the single owner of
the current state for an interactive host.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from powertrain_lab.core.drive_state import DriveState, classify_drive_state
from powertrain_lab.core.vehicle import VehicleSpec

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_TIME_STEP: float = 0.1  # s, bounds integration error after clock stalls

GAS_RISE_RATE: float = 2.5  # 1/s
GAS_FALL_RATE: float = 4.0
BRAKE_RISE_RATE: float = 4.0
BRAKE_FALL_RATE: float = 6.0

ROLLING_MIN_SPEED: float = 0.1  # m/s, no resistance below this
REGEN_MIN_SPEED: float = 1.0  # m/s
IDLE_DRAIN_KW: float = 1.0  # standby draw when fully at rest
INITIAL_SOC: float = 80.0  # %
GRAVITY: float = 9.81  # m/s^2
EFFICIENCY_MIN_DISTANCE_KM: float = 0.01

# Energy-flow animation
PHASE_DRAW_KW: float = 2.0
PHASE_REGEN_KW: float = -1.0
PHASE_RATE_SCALE_KW: float = 20.0
PHASE_MIN_RATE: float = 0.2
PHASE_MAX_RATE: float = 8.0

_TWO_PI: float = 2.0 * math.pi

# ---------------------------------------------------------------------------
# State containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PedalIntent:
    """Pedal signals sampled by the host immediately before a tick.

    Attributes:
        accelerator: Accelerator pedal held.
        brake: Brake pedal held.
    """

    accelerator: bool = False
    brake: bool = False


@dataclass(frozen=True)
class SimulationState:
    """Lumped vehicle state advanced once per tick.

    Attributes:
        speed: Longitudinal speed in m/s (>= 0).
        soc: Battery state of charge in percent (0.0-100.0).
        gas_level: Smoothed accelerator level (0.0-1.0).
        brake_level: Smoothed brake level (0.0-1.0).
        phase: Energy-flow animation phase, wraps in [0, 1).
        rotation: Wheel rotation angle in radians, wraps modulo 2*pi.
        distance: Cumulative distance travelled in m.
        energy_kj: Cumulative |electrical power| * dt in kW*s.
        acceleration: Longitudinal acceleration of the last tick in m/s^2.
    """

    speed: float = 0.0
    soc: float = INITIAL_SOC
    gas_level: float = 0.0
    brake_level: float = 0.0
    phase: float = 0.0
    rotation: float = 0.0
    distance: float = 0.0
    energy_kj: float = 0.0
    acceleration: float = 0.0

    def __post_init__(self) -> None:
        """Validate state bounds."""
        if self.speed < 0.0:
            raise ValueError("speed must be >= 0.")
        if not 0.0 <= self.soc <= 100.0:
            raise ValueError("soc must be between 0.0 and 100.0.")
        if not 0.0 <= self.gas_level <= 1.0:
            raise ValueError("gas_level must be between 0.0 and 1.0.")
        if not 0.0 <= self.brake_level <= 1.0:
            raise ValueError("brake_level must be between 0.0 and 1.0.")
        if self.distance < 0.0:
            raise ValueError("distance must be >= 0.")
        if self.energy_kj < 0.0:
            raise ValueError("energy_kj must be >= 0.")


@dataclass(frozen=True)
class TelemetrySnapshot:
    """Display quantities derived from a :class:`SimulationState`.

    Attributes:
        speed_kmh: Vehicle speed in km/h.
        soc: Battery state of charge in percent.
        gas_level: Smoothed accelerator level.
        brake_level: Smoothed brake level.
        electrical_power_kw: Battery power in kW (negative = charging).
        regen_power_kw: Regenerative recovery power in kW (>= 0).
        motor_torque: Motor shaft torque in N*m.
        motor_rpm: Motor speed in rev/min.
        acceleration_g: Longitudinal acceleration in g.
        battery_current: Pack current in A (negative = charging).
        drag_power_kw: Aerodynamic drag power in kW.
        distance_km: Distance travelled in km.
        energy_used_kwh: Cumulative energy throughput in kWh.
        efficiency_wh_km: Consumption in Wh/km, 0.0 until 10 m travelled.
        drive_state: Operating-mode label.
    """

    speed_kmh: float
    soc: float
    gas_level: float
    brake_level: float
    electrical_power_kw: float
    regen_power_kw: float
    motor_torque: float
    motor_rpm: float
    acceleration_g: float
    battery_current: float
    drag_power_kw: float
    distance_km: float
    energy_used_kwh: float
    efficiency_wh_km: float
    drive_state: DriveState


# ---------------------------------------------------------------------------
# Physics helpers
# ---------------------------------------------------------------------------


def _smooth_pedal(level: float, held: bool, rise: float, fall: float, dt: float) -> float:
    if held:
        return min(1.0, level + dt * rise)
    return max(0.0, level - dt * fall)


def _electrical_power(
    gas_level: float,
    brake_level: float,
    speed: float,
    spec: VehicleSpec,
) -> tuple[float, float]:
    """Return ``(electrical_power_kw, regen_power_kw)`` for a state.

    Motor draw is the mechanical output grossed up by the motor
    efficiency.  Regeneration only happens off-throttle above
    ``REGEN_MIN_SPEED`` and is capped at the vehicle's regen limit.  A fully
    idle vehicle draws exactly ``IDLE_DRAIN_KW`` instead of the
    auxiliary load.
    """
    propulsion: float = gas_level * spec.max_motor_force
    braking: float = brake_level * spec.max_brake_force

    power_kw: float = 0.0
    regen_kw: float = 0.0
    if gas_level > 0.0:
        power_kw = propulsion * speed / spec.motor_efficiency / 1000.0
    elif brake_level > 0.0 and speed > REGEN_MIN_SPEED:
        regen_kw = min(
            braking * speed * spec.regen_efficiency / 1000.0, spec.regen_limit
        )
        power_kw = -regen_kw
    power_kw += spec.auxiliary_load

    if speed == 0.0 and gas_level == 0.0:
        power_kw = IDLE_DRAIN_KW
    return power_kw, regen_kw


def _phase_rate(power_kw: float) -> float:
    """Signed animation rate of the energy-flow phase in cycles/s."""
    if power_kw > PHASE_DRAW_KW:
        direction = 1.0
    elif power_kw < PHASE_REGEN_KW:
        direction = -1.0
    else:
        return 0.0
    rate = min(PHASE_MAX_RATE, max(PHASE_MIN_RATE, abs(power_kw) / PHASE_RATE_SCALE_KW))
    return rate * direction


# ---------------------------------------------------------------------------
# Integrator
# ---------------------------------------------------------------------------


def advance(
    state: SimulationState,
    dt: float,
    intent: PedalIntent,
    spec: VehicleSpec,
) -> SimulationState:
    """Advance the vehicle by one tick.

    Args:
        state: Current state.
        dt: Elapsed wall time in seconds; clamped to ``MAX_TIME_STEP``.
        intent: Pedal signals sampled for this tick.
        spec: Vehicle constants.

    Returns:
        The next state.

    Raises:
        ValueError: If dt is negative.
    """
    if dt < 0.0:
        raise ValueError("dt must be >= 0.")
    if dt > MAX_TIME_STEP:
        logger.debug("Clamping dt=%.3fs to %.3fs", dt, MAX_TIME_STEP)
        dt = MAX_TIME_STEP

    # 1. Pedal smoothing
    gas = _smooth_pedal(
        state.gas_level, intent.accelerator, GAS_RISE_RATE, GAS_FALL_RATE, dt
    )
    brake = _smooth_pedal(
        state.brake_level, intent.brake, BRAKE_RISE_RATE, BRAKE_FALL_RATE, dt
    )

    # 2. Force balance
    propulsion: float = gas * spec.max_motor_force
    braking: float = brake * spec.max_brake_force
    aero_drag: float = spec.drag_area * state.speed * state.speed
    drag: float = (
        aero_drag + spec.rolling_resistance if state.speed > ROLLING_MIN_SPEED else 0.0
    )
    net_force: float = propulsion - drag
    if state.speed > 0.0:
        net_force -= braking
    acceleration: float = net_force / spec.mass
    speed: float = max(0.0, state.speed + acceleration * dt)

    # 3. Electrical model on the updated speed
    power_kw, _ = _electrical_power(gas, brake, speed, spec)

    # 4. Energy, SOC and odometry
    energy_kwh: float = power_kw * dt / 3600.0
    soc: float = state.soc - (energy_kwh / spec.demo_capacity) * 100.0
    soc = max(0.0, min(100.0, soc))

    # 5. Visual accumulators
    wheel_omega: float = speed / spec.wheel_radius
    rotation: float = (state.rotation - wheel_omega * dt) % _TWO_PI
    phase: float = (state.phase + _phase_rate(power_kw) * dt) % 1.0

    return SimulationState(
        speed=speed,
        soc=soc,
        gas_level=gas,
        brake_level=brake,
        phase=phase,
        rotation=rotation,
        distance=state.distance + speed * dt,
        energy_kj=state.energy_kj + abs(power_kw) * dt,
        acceleration=acceleration,
    )


def compute_telemetry(state: SimulationState, spec: VehicleSpec) -> TelemetrySnapshot:
    """Derive the displayed telemetry for *state*.

    Drag power uses the post-tick speed cubed, so the snapshot depends on
    *state* and *spec* alone.
    """
    power_kw, regen_kw = _electrical_power(
        state.gas_level, state.brake_level, state.speed, spec
    )

    propulsion: float = state.gas_level * spec.max_motor_force
    wheel_omega: float = state.speed / spec.wheel_radius
    motor_omega: float = wheel_omega * spec.gear_ratio
    motor_rpm: float = motor_omega * 60.0 / _TWO_PI
    motor_torque: float = propulsion * spec.wheel_radius / spec.gear_ratio

    distance_km: float = state.distance / 1000.0
    energy_kwh: float = state.energy_kj / 3600.0
    efficiency: float = (
        energy_kwh * 1000.0 / distance_km
        if distance_km > EFFICIENCY_MIN_DISTANCE_KM
        else 0.0
    )

    return TelemetrySnapshot(
        speed_kmh=state.speed * 3.6,
        soc=state.soc,
        gas_level=state.gas_level,
        brake_level=state.brake_level,
        electrical_power_kw=power_kw,
        regen_power_kw=regen_kw,
        motor_torque=motor_torque,
        motor_rpm=motor_rpm,
        acceleration_g=state.acceleration / GRAVITY,
        battery_current=power_kw * 1000.0 / spec.battery_voltage,
        drag_power_kw=spec.drag_area * state.speed**3 / 1000.0,
        distance_km=distance_km,
        energy_used_kwh=energy_kwh,
        efficiency_wh_km=efficiency,
        drive_state=classify_drive_state(
            state.gas_level, state.brake_level, state.speed, regen_kw
        ),
    )


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


class PowertrainSession:
    """Owns the simulation state for one interactive session.

    Input handlers latch pedal intent with :meth:`set_intent`; the frame
    callback calls :meth:`tick` with the elapsed wall time.

    Attributes:
        spec: Vehicle constants for this session.
    """

    __slots__ = ("spec", "_state", "_intent")

    def __init__(self, spec: VehicleSpec, state: SimulationState | None = None):
        """Start a session at rest, or from *state* if given."""
        self.spec: VehicleSpec = spec
        self._state: SimulationState = state if state is not None else SimulationState()
        self._intent: PedalIntent = PedalIntent()

    @property
    def state(self) -> SimulationState:
        """Latest published state."""
        return self._state

    @property
    def intent(self) -> PedalIntent:
        """Currently latched pedal intent."""
        return self._intent

    def set_intent(
        self,
        accelerator: bool | None = None,
        brake: bool | None = None,
    ) -> None:
        """Latch pedal signals; ``None`` leaves a pedal unchanged."""
        self._intent = PedalIntent(
            accelerator=self._intent.accelerator if accelerator is None else accelerator,
            brake=self._intent.brake if brake is None else brake,
        )

    def tick(
        self,
        dt: float,
        intent: PedalIntent | None = None,
    ) -> tuple[SimulationState, TelemetrySnapshot]:
        """Advance one frame and publish the new state and telemetry.

        Args:
            dt: Elapsed wall time since the previous tick in seconds.
            intent: Pedal signals for this tick.  Defaults to the latched
                intent.

        Returns:
            The new state and its telemetry.
        """
        sampled = self._intent if intent is None else intent
        self._state = advance(self._state, dt, sampled, self.spec)
        return self._state, compute_telemetry(self._state, self.spec)

    def telemetry(self) -> TelemetrySnapshot:
        """Telemetry for the latest published state."""
        return compute_telemetry(self._state, self.spec)

    def reset(self) -> None:
        """Return to the initial state and release both pedals."""
        logger.debug("Resetting powertrain session for %s", self.spec.name)
        self._state = SimulationState()
        self._intent = PedalIntent()


# ---------------------------------------------------------------------------
# Scripted drive cycles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DriveSegment:
    """A span of constant pedal intent in a scripted drive cycle.

    Attributes:
        duration: Segment length in seconds (>= 0).
        accelerator: Accelerator held throughout the segment.
        brake: Brake held throughout the segment.
    """

    duration: float
    accelerator: bool = False
    brake: bool = False

    def __post_init__(self) -> None:
        """Validate segment parameters."""
        if self.duration < 0.0:
            raise ValueError("duration must be >= 0.")

    @property
    def intent(self) -> PedalIntent:
        """Pedal intent held during this segment."""
        return PedalIntent(accelerator=self.accelerator, brake=self.brake)


DEMO_DRIVE_CYCLE: tuple[DriveSegment, ...] = (
    DriveSegment(duration=2.0),
    DriveSegment(duration=8.0, accelerator=True),
    DriveSegment(duration=5.0),
    DriveSegment(duration=5.0, brake=True),
    DriveSegment(duration=2.0),
)


def simulate_drive_cycle(
    spec: VehicleSpec,
    segments: Sequence[DriveSegment],
    dt: float = 0.02,
    initial_state: SimulationState | None = None,
) -> dict[str, Any]:
    """Replay a scripted drive cycle at a fixed tick.

    Each segment is run for ``round(duration / dt)`` ticks.

    Args:
        spec: Vehicle constants.
        segments: Ordered pedal segments.
        dt: Tick length in seconds (0 < dt <= ``MAX_TIME_STEP``).
        initial_state: Starting state.  Defaults to the vehicle at rest.

    Returns:
        Dictionary containing:
            time        -- Elapsed time after each tick (list[float]).
            snapshots   -- Telemetry after each tick (list[TelemetrySnapshot]).
            speed_kmh   -- Speed trace (list[float]).
            soc         -- SOC trace (list[float]).
            power_kw    -- Electrical power trace (list[float]).
            drive_state -- Drive-state trace (list[DriveState]).
            final_state -- State after the last tick (SimulationState).

    Raises:
        ValueError: If dt is outside (0, MAX_TIME_STEP].
    """
    if not 0.0 < dt <= MAX_TIME_STEP:
        raise ValueError(f"dt must be in (0, {MAX_TIME_STEP}].")

    state = initial_state if initial_state is not None else SimulationState()
    times: list[float] = []
    snapshots: list[TelemetrySnapshot] = []
    step = 0

    for segment in segments:
        intent = segment.intent
        for _ in range(int(round(segment.duration / dt))):
            state = advance(state, dt, intent, spec)
            step += 1
            times.append(step * dt)
            snapshots.append(compute_telemetry(state, spec))

    return {
        "time": times,
        "snapshots": snapshots,
        "speed_kmh": [s.speed_kmh for s in snapshots],
        "soc": [s.soc for s in snapshots],
        "power_kw": [s.electrical_power_kw for s in snapshots],
        "drive_state": [s.drive_state for s in snapshots],
        "final_state": state,
    }
