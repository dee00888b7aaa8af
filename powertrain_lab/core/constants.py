"""Physical constants shared by the thermochemistry calculators."""

R_GAS: float = 8.314  # J/(mol*K)
FARADAY: float = 96485.0  # C/mol

# Temperature grid of the standard Gibbs energy tables (K).
GIBBS_TEMPERATURES: tuple[float, ...] = (
    298.15,
    500.0,
    1000.0,
    1500.0,
    2000.0,
    2500.0,
    3000.0,
)

# Standard Gibbs energies of formation on GIBBS_TEMPERATURES (kJ/mol).
GIBBS_H2O_GAS: tuple[float, ...] = (
    -228.582,
    -219.051,
    -192.590,
    -164.376,
    -135.528,
    -106.416,
    -77.163,
)
GIBBS_CO: tuple[float, ...] = (
    -137.163,
    -155.414,
    -200.275,
    -243.740,
    -286.034,
    -327.356,
    -367.816,
)
GIBBS_CH4: tuple[float, ...] = (
    -50.768,
    -32.741,
    19.492,
    74.918,
    130.802,
    186.622,
    242.332,
)
