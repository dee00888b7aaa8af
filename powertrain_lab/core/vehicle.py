"""Vehicle specification for the powertrain energy-flow simulator."""

from dataclasses import dataclass, fields

_EFFICIENCY_FIELDS: tuple[str, ...] = ("motor_efficiency", "regen_efficiency")


@dataclass(frozen=True)
class VehicleSpec:
    """Static constants describing a battery-electric vehicle.

    Attributes:
        name: Display name of the vehicle.
        mass: Kerb mass in kg.
        drag_coefficient: Aerodynamic drag coefficient Cd.
        frontal_area: Frontal area in m^2.
        air_density: Air density in kg/m^3.
        rolling_resistance: Constant rolling resistance force in N.
        wheel_radius: Wheel radius in m.
        gear_ratio: Single-speed reduction ratio.
        max_motor_torque: Peak motor torque in N*m.
        max_motor_rpm: Peak motor speed in rev/min.
        max_motor_power: Peak motor electrical power in kW.
        max_motor_force: Peak propulsive force at the wheels in N.
        max_brake_force: Peak braking force in N.
        regen_limit: Regenerative braking power cap in kW.
        motor_efficiency: Motor efficiency (0.0-1.0].
        regen_efficiency: Regenerative braking efficiency (0.0-1.0].
        battery_capacity: Nominal pack energy in kWh (label only).
        battery_voltage: Pack voltage in V.
        auxiliary_load: Constant HVAC/auxiliary load in kW.
        demo_capacity: Scaled pack energy in kWh used for SOC math.
    """

    name: str
    mass: float
    drag_coefficient: float
    frontal_area: float
    air_density: float
    rolling_resistance: float
    wheel_radius: float
    gear_ratio: float
    max_motor_torque: float
    max_motor_rpm: float
    max_motor_power: float
    max_motor_force: float
    max_brake_force: float
    regen_limit: float
    motor_efficiency: float
    regen_efficiency: float
    battery_capacity: float
    battery_voltage: float
    auxiliary_load: float
    demo_capacity: float

    def __post_init__(self) -> None:
        """Validate vehicle parameters."""
        if not self.name:
            raise ValueError("Vehicle name must not be empty.")
        for f in fields(self):
            if f.name == "name":
                continue
            if getattr(self, f.name) <= 0.0:
                raise ValueError(f"{f.name} must be > 0.0.")
        for name in _EFFICIENCY_FIELDS:
            if getattr(self, name) > 1.0:
                raise ValueError(f"{name} must be <= 1.0.")

    @property
    def drag_area(self) -> float:
        """Lumped aerodynamic term 0.5 * rho * Cd * A in kg/m."""
        return 0.5 * self.air_density * self.drag_coefficient * self.frontal_area
