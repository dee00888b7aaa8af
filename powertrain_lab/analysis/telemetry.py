"""Tabular telemetry and drive-cycle summaries.

This module converts per-tick :class:`TelemetrySnapshot` sequences into a
:class:`pandas.DataFrame` and reduces a drive cycle to a handful of
headline figures for the dashboard and the export script.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

import pandas as pd

from powertrain_lab.core.simulation import TelemetrySnapshot

# ---------------------------------------------------------------------------
# Frame construction
# ---------------------------------------------------------------------------


def telemetry_to_frame(
    snapshots: Sequence[TelemetrySnapshot],
    time: Sequence[float] | None = None,
) -> pd.DataFrame:
    """Build one row per snapshot.

    Args:
        snapshots: Telemetry in tick order.
        time: Optional elapsed time per snapshot in seconds.  Must match
            ``snapshots`` in length.

    Returns:
        A DataFrame with one column per telemetry field (``drive_state``
        as its display string) and a leading ``time`` column when *time*
        is given.

    Raises:
        ValueError: If *time* and *snapshots* differ in length.
    """
    if time is not None and len(time) != len(snapshots):
        raise ValueError("time and snapshots must have the same length.")

    rows: list[dict[str, Any]] = []
    for snap in snapshots:
        row = asdict(snap)
        row["drive_state"] = snap.drive_state.value
        rows.append(row)

    columns = list(TelemetrySnapshot.__dataclass_fields__)
    frame = pd.DataFrame(rows, columns=columns)
    if time is not None:
        frame.insert(0, "time", list(time))
    return frame


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def summarize_drive_cycle(frame: pd.DataFrame) -> dict[str, Any]:
    """Reduce a telemetry frame with a ``time`` column to headline figures.

    Returns:
        Dictionary containing:
            duration_s         -- Elapsed time of the last row.
            distance_km        -- Distance at the last row.
            top_speed_kmh      -- Maximum speed.
            peak_power_kw      -- Maximum battery draw.
            peak_regen_kw      -- Maximum regenerative power.
            regen_energy_kwh   -- Energy recovered by regeneration.
            soc_delta          -- Final minus initial SOC in points.
            efficiency_wh_km   -- Consumption at the last row.
            state_share        -- Fraction of ticks per drive state.

    Raises:
        ValueError: If the frame is empty or lacks a ``time`` column.
    """
    if frame.empty:
        raise ValueError("frame must contain at least one row.")
    if "time" not in frame.columns:
        raise ValueError("frame must have a 'time' column.")

    dt = frame["time"].diff().fillna(frame["time"].iloc[0])
    regen_energy_kwh = float((frame["regen_power_kw"] * dt).sum() / 3600.0)
    last = frame.iloc[-1]
    share = frame["drive_state"].value_counts(normalize=True)

    return {
        "duration_s": float(last["time"]),
        "distance_km": float(last["distance_km"]),
        "top_speed_kmh": float(frame["speed_kmh"].max()),
        "peak_power_kw": float(frame["electrical_power_kw"].max()),
        "peak_regen_kw": float(frame["regen_power_kw"].max()),
        "regen_energy_kwh": regen_energy_kwh,
        "soc_delta": float(last["soc"] - frame["soc"].iloc[0]),
        "efficiency_wh_km": float(last["efficiency_wh_km"]),
        "state_share": {str(k): float(v) for k, v in share.items()},
    }
