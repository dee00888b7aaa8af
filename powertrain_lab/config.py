"""Configuration loader for the powertrain simulator."""

import logging
from pathlib import Path

import yaml

from powertrain_lab.core.vehicle import VehicleSpec

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
VEHICLE_SPEC_PATH: Path = DATA_DIR / "vehicle_spec.yaml"

_REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "mass",
    "drag_coefficient",
    "frontal_area",
    "air_density",
    "rolling_resistance",
    "wheel_radius",
    "gear_ratio",
    "max_motor_torque",
    "max_motor_rpm",
    "max_motor_power",
    "max_motor_force",
    "max_brake_force",
    "regen_limit",
    "motor_efficiency",
    "regen_efficiency",
    "battery_capacity",
    "battery_voltage",
    "auxiliary_load",
    "demo_capacity",
)

_NUMERIC_FIELDS: tuple[str, ...] = _REQUIRED_FIELDS[1:]  # all except name


def load_vehicle_spec(path: Path | None = None) -> VehicleSpec:
    """Load the simulated vehicle from a YAML file.

    The file holds a top-level ``vehicle`` mapping with one entry per
    :class:`VehicleSpec` field.

    Args:
        path: Optional override for the vehicle spec file path.

    Returns:
        The validated :class:`VehicleSpec`.

    Raises:
        FileNotFoundError: If the spec file does not exist.
        ValueError: If the file is malformed, a field is missing or
            non-numeric, or a value is out of range.
    """
    spec_path = path or VEHICLE_SPEC_PATH
    if not spec_path.exists():
        raise FileNotFoundError(f"Vehicle spec file not found: {spec_path}")

    with open(spec_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict) or not isinstance(data.get("vehicle"), dict):
        raise ValueError(f"{spec_path} must contain a 'vehicle' mapping")
    entry: dict = data["vehicle"]

    # --- Validate required fields ---
    for field in _REQUIRED_FIELDS:
        if field not in entry:
            raise ValueError(f"Vehicle spec is missing required field '{field}'")

    # --- Validate numeric types (bool is not a number here) ---
    for field in _NUMERIC_FIELDS:
        val = entry[field]
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ValueError(
                f"Vehicle spec '{field}' must be numeric, got {type(val).__name__}"
            )

    spec = VehicleSpec(
        name=str(entry["name"]),
        **{field: float(entry[field]) for field in _NUMERIC_FIELDS},
    )
    logger.debug("Loaded vehicle spec %r from %s", spec.name, spec_path)
    return spec
