#!/usr/bin/env python
"""Run the demo drive cycle and export its telemetry.

This script:

1. Loads the vehicle spec from ``data/vehicle_spec.yaml``.
2. Replays the demo drive cycle (or a cycle scaled by ``--repeat``).
3. Saves per-tick telemetry to ``results/drive_cycle.csv``.
4. Prints a structured summary.

Usage
-----
::

    python scripts/run_drive_cycle.py [--dt 0.02] [--repeat 1]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from powertrain_lab.analysis.telemetry import (  # noqa: E402
    summarize_drive_cycle,
    telemetry_to_frame,
)
from powertrain_lab.config import load_vehicle_spec  # noqa: E402
from powertrain_lab.core.simulation import (  # noqa: E402
    DEMO_DRIVE_CYCLE,
    simulate_drive_cycle,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "drive_cycle.csv")

logger = logging.getLogger("run_drive_cycle")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dt", type=float, default=0.02, help="tick length (s)")
    parser.add_argument(
        "--repeat", type=int, default=1, help="number of demo cycles to chain"
    )
    return parser.parse_args()


def main() -> None:
    """Run the export pipeline."""
    args = _parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    spec = load_vehicle_spec()
    segments = DEMO_DRIVE_CYCLE * max(1, args.repeat)
    logger.info("Simulating %d segments for %s at dt=%.3fs", len(segments), spec.name, args.dt)

    result = simulate_drive_cycle(spec, segments, dt=args.dt)
    frame = telemetry_to_frame(result["snapshots"], time=result["time"])

    os.makedirs(RESULTS_DIR, exist_ok=True)
    frame.to_csv(OUTPUT_PATH, index=False)
    logger.info("Wrote %d rows to %s", len(frame), OUTPUT_PATH)

    summary = summarize_drive_cycle(frame)
    print("=" * 60)
    print("DRIVE CYCLE SUMMARY")
    print("=" * 60)
    print(f"  Duration        : {summary['duration_s']:.1f} s")
    print(f"  Distance        : {summary['distance_km']:.3f} km")
    print(f"  Top speed       : {summary['top_speed_kmh']:.1f} km/h")
    print(f"  Peak draw       : {summary['peak_power_kw']:.1f} kW")
    print(f"  Peak regen      : {summary['peak_regen_kw']:.1f} kW")
    print(f"  Regen recovered : {summary['regen_energy_kwh'] * 1000:.1f} Wh")
    print(f"  SOC change      : {summary['soc_delta']:+.2f} %")
    print(f"  Efficiency      : {summary['efficiency_wh_km']:.0f} Wh/km")
    print("  Time share per drive state:")
    for state, share in sorted(summary["state_share"].items(), key=lambda x: -x[1]):
        print(f"    {state:<14} {share:6.1%}")


if __name__ == "__main__":
    main()
