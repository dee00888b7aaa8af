"""Tests for telemetry frames and drive-cycle summaries."""

import pytest

from powertrain_lab.analysis.telemetry import summarize_drive_cycle, telemetry_to_frame
from powertrain_lab.config import load_vehicle_spec
from powertrain_lab.core.simulation import (
    DEMO_DRIVE_CYCLE,
    DriveSegment,
    simulate_drive_cycle,
)


def _sample_result() -> dict:
    return simulate_drive_cycle(load_vehicle_spec(), DEMO_DRIVE_CYCLE)


def test_frame_has_one_row_per_tick() -> None:
    """The frame mirrors the snapshot list with a leading time column."""
    result = _sample_result()
    frame = telemetry_to_frame(result["snapshots"], result["time"])
    assert len(frame) == len(result["snapshots"])
    assert frame.columns[0] == "time"
    assert "drive_state" in frame.columns
    assert frame["speed_kmh"].tolist() == result["speed_kmh"]


def test_frame_stores_state_labels_as_text() -> None:
    """Drive states are exported as their display strings."""
    result = _sample_result()
    frame = telemetry_to_frame(result["snapshots"])
    assert "time" not in frame.columns
    assert "REGEN BRAKING" in set(frame["drive_state"])


def test_frame_rejects_mismatched_time() -> None:
    """time must line up with the snapshots."""
    result = _sample_result()
    with pytest.raises(ValueError):
        telemetry_to_frame(result["snapshots"], result["time"][:-1])


def test_summary_of_demo_cycle() -> None:
    """The demo cycle accelerates, recovers energy and ends near rest."""
    result = _sample_result()
    summary = summarize_drive_cycle(telemetry_to_frame(result["snapshots"], result["time"]))
    assert summary["duration_s"] == pytest.approx(22.0)
    assert summary["top_speed_kmh"] == pytest.approx(max(result["speed_kmh"]))
    assert summary["peak_regen_kw"] > 0.0
    assert summary["regen_energy_kwh"] > 0.0
    assert summary["soc_delta"] < 0.0
    assert summary["distance_km"] > 0.0
    assert sum(summary["state_share"].values()) == pytest.approx(1.0)


def test_summary_requires_time_and_rows() -> None:
    """Empty frames and frames without time are rejected."""
    spec = load_vehicle_spec()
    idle = simulate_drive_cycle(spec, (DriveSegment(duration=1.0),))
    with pytest.raises(ValueError):
        summarize_drive_cycle(telemetry_to_frame(idle["snapshots"]))
    with pytest.raises(ValueError):
        summarize_drive_cycle(telemetry_to_frame([], []))
