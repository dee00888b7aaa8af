"""Powertrain Lab Dashboard.

Interactive teaching dashboard built with Streamlit and Plotly.  Hosts
the six calculators: fuel-cell thermodynamics, fuel-cell stack sizing,
CO2 separation work, CH4 steam reforming, Li-ion diffusion and the
powertrain energy-flow simulator.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
import streamlit as st

from powertrain_lab.analysis.telemetry import summarize_drive_cycle, telemetry_to_frame
from powertrain_lab.config import load_vehicle_spec
from powertrain_lab.core.constants import GIBBS_H2O_GAS, GIBBS_TEMPERATURES
from powertrain_lab.core.diffusion import (
    compare_separators,
    concentration_profile,
    transient_surface,
)
from powertrain_lab.core.fuel_cell import (
    gibbs_energy,
    gibbs_surface,
    reversible_voltage,
    reversible_voltage_curve,
    size_stack,
    stack_power_curve,
)
from powertrain_lab.core.reforming import (
    hydrogen_fraction_surface,
    pressure_sweep,
    reforming_equilibrium,
)
from powertrain_lab.core.separation import (
    separation_work,
    separation_work_curve,
    separation_work_surface,
)
from powertrain_lab.core.simulation import (
    DriveSegment,
    PowertrainSession,
    simulate_drive_cycle,
)

# ---------------------------------------------------------------------------
# Plot grids
# ---------------------------------------------------------------------------

_FC_TEMPS = np.linspace(298.0, 3000.0, 40)
_FC_PRESSURES = np.linspace(0.2, 1.0, 20)
_FC_TEMPS_FINE = np.linspace(298.0, 3000.0, 150)
_REFORM_TEMPS = np.linspace(600.0, 1500.0, 20)
_REFORM_PRESSURES = np.array([0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 50.0, 100.0])
_SEP_TEMPS = np.linspace(250.0, 450.0, 20)
_SEP_LOG_PPM = np.linspace(1.0, 6.0, 30)
_LI_X = np.linspace(-100e-6, 50e-6, 150)
_LI_X_COARSE = np.linspace(-100e-6, 50e-6, 40)
_LI_TAU = np.linspace(0.01, 5.01, 20)

_STEP_SECONDS: float = 1.0
_FRAME_DT: float = 1.0 / 60.0


def _surface(x, y, z, title: str, x_title: str, y_title: str, z_title: str) -> go.Figure:
    fig = go.Figure(go.Surface(x=x, y=y, z=z, colorscale="Turbo"))
    fig.update_layout(
        title=title,
        height=450,
        margin=dict(l=0, r=0, t=40, b=0),
        scene=dict(
            xaxis_title=x_title,
            yaxis_title=y_title,
            zaxis_title=z_title,
        ),
    )
    return fig


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------


def _fuel_cell_tab() -> None:
    temperature = st.slider("Temperature T (K)", 298, 3000, 500, step=1)
    dg = gibbs_energy(float(temperature))
    col1, col2 = st.columns(2)
    col1.metric("dG H2O(g)", f"{dg:.3f} kJ/mol")
    col2.metric("E_rev", f"{reversible_voltage(float(temperature)):.4f} V")

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=_FC_TEMPS_FINE, y=reversible_voltage_curve(_FC_TEMPS_FINE), name="E_rev")
    )
    fig.add_trace(
        go.Scatter(
            x=GIBBS_TEMPERATURES,
            y=reversible_voltage_curve(GIBBS_TEMPERATURES),
            mode="markers",
            name="Table points",
        )
    )
    fig.update_layout(xaxis_title="Temperature (K)", yaxis_title="E_rev (V)", height=350)
    st.plotly_chart(fig, use_container_width=True)

    st.plotly_chart(
        _surface(
            _FC_TEMPS,
            _FC_PRESSURES,
            gibbs_surface(_FC_TEMPS, _FC_PRESSURES),
            f"Gibbs free energy surface | T={temperature} K",
            "Temperature (K)",
            "pH2 (atm)",
            "dG (kJ/mol)",
        ),
        use_container_width=True,
    )
    st.table(
        {
            "T (K)": list(GIBBS_TEMPERATURES),
            "dG (kJ/mol)": list(GIBBS_H2O_GAS),
            "E_rev (V)": [round(v, 4) for v in reversible_voltage_curve(GIBBS_TEMPERATURES)],
        }
    )


def _stack_tab() -> None:
    col1, col2, col3 = st.columns(3)
    cell_voltage = col1.slider("Cell voltage (V)", 0.4, 1.0, 0.6, step=0.01)
    current_density = col1.slider("Current density (mA/cm2)", 100, 3000, 2000, step=50)
    width = col2.slider("Cell width (cm)", 5, 40, 20)
    height = col2.slider("Cell height (cm)", 5, 40, 20)
    thickness = col3.slider("Cell thickness (mm)", 1.0, 10.0, 3.0, step=0.5)
    target = col3.slider("Target power (kW)", 10, 200, 84)

    sizing = size_stack(
        cell_voltage, float(current_density), float(width), float(height), thickness, float(target)
    )
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Cells required", sizing.cells_required)
    m2.metric("Actual power", f"{sizing.actual_power_kw:.2f} kW")
    m3.metric("Stack height", f"{sizing.stack_height_cm:.1f} cm")
    m4.metric("Volume", f"{sizing.volume_l:.2f} L")

    cells, power = stack_power_curve(sizing)
    fig = go.Figure(go.Scatter(x=cells, y=power, name="Stack power"))
    fig.add_trace(
        go.Scatter(
            x=[sizing.cells_required],
            y=[sizing.actual_power_kw],
            mode="markers",
            name="Chosen point",
        )
    )
    fig.update_layout(xaxis_title="Number of cells", yaxis_title="Power (kW)", height=350)
    st.plotly_chart(fig, use_container_width=True)


def _separation_tab() -> None:
    col1, col2, col3 = st.columns(3)
    ppm = col1.number_input("Atmospheric CO2 (ppm)", 10.0, 10000.0, 400.0, step=10.0)
    ref = col2.number_input("Reference conc (% vol)", 1.0, 99.0, 10.0, step=1.0)
    temperature = col3.number_input("Temperature T (K)", 250.0, 450.0, 298.15, step=10.0)

    work = separation_work(ppm, ref, temperature)
    m1, m2, m3 = st.columns(3)
    m1.metric("Flue-gas work", f"{work.reference_j_mol / 1000:.2f} kJ/mol")
    m2.metric("Direct air capture work", f"{work.dac_j_mol / 1000:.2f} kJ/mol")
    m3.metric("DAC / flue-gas", f"{work.ratio:.2f}x")

    ppm_grid = np.power(10.0, np.linspace(1.0, 6.0, 100))
    fig = go.Figure(go.Scatter(x=ppm_grid, y=separation_work_curve(ppm_grid, temperature)))
    fig.update_layout(
        xaxis_type="log", xaxis_title="CO2 (ppm)", yaxis_title="Work (kJ/mol)", height=350
    )
    st.plotly_chart(fig, use_container_width=True)
    st.plotly_chart(
        _surface(
            _SEP_TEMPS,
            _SEP_LOG_PPM,
            separation_work_surface(_SEP_TEMPS, _SEP_LOG_PPM),
            "Minimum separation work",
            "Temperature (K)",
            "log10 ppm",
            "Work (kJ/mol)",
        ),
        use_container_width=True,
    )


def _reforming_tab() -> None:
    col1, col2 = st.columns(2)
    temperature = col1.number_input("Temperature T (K)", 300.0, 3000.0, 1000.0, step=10.0)
    pressure = col2.number_input("Total pressure p (atm)", 0.1, 200.0, 10.0, step=1.0)

    eq = reforming_equilibrium(temperature, pressure)
    m1, m2, m3 = st.columns(3)
    m1.metric("dG", f"{eq.gibbs_kj:.3f} kJ/mol")
    m2.metric("Kp", f"{eq.kp:.3e}")
    m3.metric("Extent x", f"{eq.extent:.4f}")

    sweep = pressure_sweep(temperature)
    labels = [f"{r.pressure:g} atm" for r in sweep]
    fig = go.Figure()
    for species in ("ch4", "h2o", "co", "h2"):
        fig.add_trace(
            go.Bar(x=labels, y=[getattr(r.fractions, species) for r in sweep], name=species.upper())
        )
    fig.update_layout(barmode="group", yaxis_title="Mole fraction", height=350)
    st.plotly_chart(fig, use_container_width=True)

    st.plotly_chart(
        _surface(
            _REFORM_TEMPS,
            np.log10(_REFORM_PRESSURES),
            hydrogen_fraction_surface(_REFORM_TEMPS, _REFORM_PRESSURES),
            "Equilibrium H2 mole fraction",
            "Temperature (K)",
            "log10 p (atm)",
            "y_H2",
        ),
        use_container_width=True,
    )


def _diffusion_tab() -> None:
    col1, col2 = st.columns(2)
    diffusivity = col1.number_input("Diffusion coeff D (m2/s)", 1e-12, 1e-8, 5e-10, format="%.2e")
    delta_c = col1.number_input("dC separator (mol/L)", 0.1, 5.0, 2.0, step=0.1)
    la = col2.number_input("Thickness a (um)", 1.0, 500.0, 150.0, step=1.0)
    lb = col2.number_input("Thickness b (um)", 1.0, 500.0, 100.0, step=1.0)

    cmp = compare_separators(diffusivity, la, lb, delta_c)
    m1, m2, m3 = st.columns(3)
    m1.metric("Flux (a)", f"{cmp.flux_a:.5f} mol/(m2 s)")
    m2.metric("Flux (b)", f"{cmp.flux_b:.5f} mol/(m2 s)")
    m3.metric("Current density change", f"{cmp.increase_pct:+.1f} %")

    c_high = delta_c * 1e3
    fig = go.Figure()
    for label, thickness in (("Profile (a)", la), ("Profile (b)", lb)):
        profile = concentration_profile(_LI_X, thickness * 1e-6, c_high, 0.0)
        fig.add_trace(go.Scatter(x=_LI_X * 1e6, y=profile / 1e3, name=label))
    fig.update_layout(xaxis_title="x (um)", yaxis_title="Li+ (mol/L)", height=350)
    st.plotly_chart(fig, use_container_width=True)

    surface = transient_surface(_LI_X_COARSE, _LI_TAU, lb * 1e-6, c_high, 0.0) / 1e3
    st.plotly_chart(
        _surface(
            _LI_X_COARSE * 1e6,
            _LI_TAU,
            surface,
            "Pseudo-transient relaxation",
            "x (um)",
            "tau",
            "Li+ (mol/L)",
        ),
        use_container_width=True,
    )


def _powertrain_tab() -> None:
    spec = load_vehicle_spec()
    st.caption(
        f"{spec.name}: {spec.mass:.0f} kg, {spec.max_motor_power:.0f} kW motor, "
        f"{spec.battery_capacity} kWh pack ({spec.demo_capacity} kWh demo capacity)"
    )

    # ── Stepped session ─────────────────────────────────────────────────
    st.subheader("Drive it")
    if "session" not in st.session_state:
        st.session_state["session"] = PowertrainSession(spec)
    session: PowertrainSession = st.session_state["session"]

    c_gas, c_coast, c_brake, c_reset = st.columns(4)
    pressed: tuple[bool, bool] | None = None
    if c_gas.button("Accelerate 1 s"):
        pressed = (True, False)
    if c_coast.button("Coast 1 s"):
        pressed = (False, False)
    if c_brake.button("Brake 1 s"):
        pressed = (False, True)
    if c_reset.button("Reset"):
        session.reset()

    if pressed is not None:
        session.set_intent(accelerator=pressed[0], brake=pressed[1])
        for _ in range(round(_STEP_SECONDS / _FRAME_DT)):
            session.tick(_FRAME_DT)
        session.set_intent(accelerator=False, brake=False)

    snap = session.telemetry()
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Speed", f"{snap.speed_kmh:.0f} km/h")
    m2.metric("Battery power", f"{snap.electrical_power_kw:.1f} kW")
    m3.metric("SOC", f"{snap.soc:.2f} %")
    m4.metric("State", snap.drive_state.value)
    m5, m6, m7, m8 = st.columns(4)
    m5.metric("Motor torque", f"{snap.motor_torque:.0f} N m")
    m6.metric("Motor speed", f"{snap.motor_rpm:.0f} rpm")
    m7.metric("Battery current", f"{snap.battery_current:.1f} A")
    m8.metric("Efficiency", f"{snap.efficiency_wh_km:.0f} Wh/km")

    # ── Scripted drive cycle ────────────────────────────────────────────
    st.subheader("Drive cycle")
    col1, col2, col3 = st.columns(3)
    accel_s = col1.slider("Accelerate (s)", 0.0, 20.0, 8.0, step=0.5)
    coast_s = col2.slider("Coast (s)", 0.0, 20.0, 5.0, step=0.5)
    brake_s = col3.slider("Brake (s)", 0.0, 20.0, 5.0, step=0.5)
    segments = (
        DriveSegment(duration=accel_s, accelerator=True),
        DriveSegment(duration=coast_s),
        DriveSegment(duration=brake_s, brake=True),
    )
    result = simulate_drive_cycle(spec, segments)
    if not result["snapshots"]:
        st.info("Set a non-zero segment duration to run a drive cycle.")
        return

    frame = telemetry_to_frame(result["snapshots"], time=result["time"])
    summary = summarize_drive_cycle(frame)
    s1, s2, s3, s4 = st.columns(4)
    s1.metric("Top speed", f"{summary['top_speed_kmh']:.0f} km/h")
    s2.metric("Peak draw", f"{summary['peak_power_kw']:.0f} kW")
    s3.metric("Regen recovered", f"{summary['regen_energy_kwh'] * 1000:.1f} Wh")
    s4.metric("SOC change", f"{summary['soc_delta']:+.2f} %")

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=frame["time"], y=frame["speed_kmh"], name="Speed (km/h)"))
    fig.add_trace(
        go.Scatter(x=frame["time"], y=frame["electrical_power_kw"], name="Battery power (kW)")
    )
    fig.add_trace(go.Scatter(x=frame["time"], y=frame["soc"], name="SOC (%)", yaxis="y2"))
    fig.update_layout(
        xaxis_title="Time (s)",
        yaxis2=dict(overlaying="y", side="right", title="SOC (%)"),
        height=400,
    )
    st.plotly_chart(fig, use_container_width=True)


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(page_title="Future Powertrain Lab", layout="wide")
    st.title("Future Powertrain for Sustainable Community")

    tabs = st.tabs(
        [
            "Fuel Cell Thermo",
            "Fuel Cell Stack",
            "CO2 Separation",
            "CH4 Reforming",
            "Li-ion Battery",
            "Powertrain",
        ]
    )
    with tabs[0]:
        _fuel_cell_tab()
    with tabs[1]:
        _stack_tab()
    with tabs[2]:
        _separation_tab()
    with tabs[3]:
        _reforming_tab()
    with tabs[4]:
        _diffusion_tab()
    with tabs[5]:
        _powertrain_tab()


if __name__ == "__main__":
    main()
