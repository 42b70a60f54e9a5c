from __future__ import annotations

"""Physical constants and calibration values for impact and deflection modelling.

All values in SI units unless otherwise noted.
"""

# --- Earth parameters ---
EARTH_RADIUS_KM: float = 6371.0
"""Mean radius of Earth in km (haversine distances)."""

EARTH_DIAMETER_KM: float = 12742.0
"""Mean diameter of Earth in km. Upper bound for crater diameter."""

LUNAR_DISTANCE_KM: float = 384400.0
"""Mean Earth-Moon distance in km, used as a human-scale miss distance unit."""

GRAVITATIONAL_CONSTANT: float = 6.674e-11
"""Newtonian constant of gravitation in m³/(kg·s²)."""

STANDARD_GRAVITY_M_S2: float = 9.81
"""Standard gravity in m/s² (ion thruster specific impulse conversion)."""

# --- Time ---
SECONDS_PER_YEAR: float = 365.25 * 86400.0
"""Julian year in seconds."""

# --- Asteroid bulk properties ---
ASTEROID_DENSITY_KG_M3: float = 3000.0
"""Bulk rock density assumed for every asteroid, kg/m³."""

DEFAULT_ASTEROID_MASS_KG: float = 1e9
"""Mass substituted by the method selector when the supplied mass is unusable."""

MAX_ASTEROID_MASS_KG: float = 1e21
"""Infinite masses are clamped to this before the selector computes mass ratios."""

DEFAULT_SIMULATION_MASS_KG: float = 1e12
"""Mass substituted by the outcome simulator when the supplied mass is unusable."""

MIN_SIMULATION_MASS_KG: float = 1e5
"""Lower bound on asteroid mass inside the outcome simulator."""

MIN_SPACECRAFT_MASS_KG: float = 500.0
"""Lower bound on any spacecraft mass, kg."""

MAX_MASS_RATIO: float = 1e8
"""Upper bound on asteroid/spacecraft mass ratio inside the outcome simulator."""

# --- Energy ---
MEGATON_TNT_J: float = 4.184e15
"""Energy released by one megaton of TNT, in joules."""

MIN_ENERGY_MT: float = 1e-6
"""Floor applied to energy in megatons before the crater cube root."""

CRATER_COEFFICIENT_KM: float = 0.6
"""Crater diameter in km per cube root of megatons."""

# --- Seismic heuristics ---
SEISMIC_MAGNITUDE_OFFSET: float = 4.8
"""Offset in the Gutenberg-Richter energy relation Mw = (log10 E - 4.8) / 1.5."""

SEISMIC_MAGNITUDE_DIVISOR: float = 1.5
"""Divisor in the Gutenberg-Richter energy relation."""

MIN_MAGNITUDE: float = -1.0
"""Lowest reported moment magnitude."""

MAX_MAGNITUDE: float = 12.0
"""Highest reported moment magnitude."""

SHAKING_KM_PER_MAGNITUDE: float = 25.0
"""Strong shaking radius slope, km per magnitude unit."""

SHAKING_RADIUS_CAP_KM: float = 500.0
"""Cap on the strong shaking radius."""

DAMAGE_KM_PER_MAGNITUDE: float = 10.0
"""Structural damage radius slope, km per magnitude unit."""

DAMAGE_RADIUS_CAP_KM: float = 200.0
"""Cap on the structural damage radius."""

FELT_KM_PER_MAGNITUDE: float = 50.0
"""Felt radius slope, km per magnitude unit."""

FELT_RADIUS_CAP_KM: float = 1000.0
"""Cap on the felt radius."""

# --- Map effect radii (km) ---
MAP_CRATER_KM_PER_DIAMETER_KM: float = 8.0
"""Crater zone radius drawn on the map per km of impactor diameter."""

MAP_MIN_CRATER_RADIUS_KM: float = 3.0
"""Smallest crater zone radius drawn on the map."""

MAP_DAMAGE_KM_PER_SQRT_MT: float = 1.8
"""Damage zone radius per square root of megatons."""

MAP_MIN_DAMAGE_RADIUS_KM: float = 15.0
"""Smallest damage zone radius."""

MAP_SHAKING_KM_PER_SQRT_MT: float = 4.0
"""Shaking zone radius per square root of megatons."""

MAP_MIN_SHAKING_RADIUS_KM: float = 40.0
"""Smallest shaking zone radius."""

# --- Casualty model ---
CRATER_ZONE_FRACTION: float = 0.2
"""Outer edge of the crater zone as a fraction of the effect radius."""

SEVERE_ZONE_FRACTION: float = 0.5
"""Outer edge of the severe damage zone as a fraction of the effect radius."""

MODERATE_ZONE_FRACTION: float = 0.8
"""Outer edge of the moderate damage zone as a fraction of the effect radius."""

MAX_CASUALTY_RATE: float = 0.85
"""Ceiling on the per-city casualty rate after density adjustment."""

RURAL_DENSITY_FRACTION: float = 0.35
"""Share of regional density living outside registered cities."""

RURAL_CASUALTY_RATES: tuple[float, float, float, float] = (0.80, 0.35, 0.15, 0.04)
"""Rural casualty fractions for the crater, severe, moderate and light zones."""

MIN_DISTANCE_KM: float = 0.01
"""Great-circle distances below this are reported as zero."""

# --- Validation thresholds ---
MAX_REALISTIC_RADIUS_KM: float = 2000.0
"""Effect radii above this raise an advisory warning."""

MAX_PLAUSIBLE_POPULATION: float = 5e8
"""Totals above this raise an advisory warning."""

MAX_AFFECTED_CITIES: int = 50
"""More affected cities than this raise an advisory warning."""

EMPTY_ZONE_RADIUS_KM: float = 50.0
"""A zero total above this radius raises an advisory warning."""

EXPECTED_RURAL_DENSITY_FRACTION: float = 0.3
"""Share of the regional density expected outside cities; rural estimates above twice this raise a warning."""

# --- Orbital defaults ---
DEFAULT_SEMI_MAJOR_AXIS_AU: float = 1.0
"""Semi-major axis substituted for missing orbital data."""

DEFAULT_MEAN_MOTION_DEG_DAY: float = 0.01
"""Mean motion substituted for missing orbital data."""

DEFAULT_EPOCH_JD: float = 2461000.5
"""Osculation epoch substituted for missing orbital data (2025-09-19 TDB)."""

MAX_ECCENTRICITY: float = 0.99
"""Eccentricities are clamped below this to keep the ellipse bound."""

KEPLER_TOLERANCE: float = 1e-6
"""Convergence tolerance on the eccentric anomaly step, radians."""

KEPLER_MAX_ITERATIONS: int = 10
"""Newton-Raphson iteration limit for Kepler's equation."""
