"""Projected outcome of a deflection mission.

Each method has a deliberately simplified momentum model. Its efficiency
scales the nominal delta-V, and that effective delta-V is turned into a
deflection angle and an along-track miss distance accumulated over the
remaining warning time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

from neodefense.core.catalog import DEFLECTION_METHODS, DeflectionMethod, DeflectionMethodSpec
from neodefense.utils.constants import (
    DEFAULT_SIMULATION_MASS_KG,
    GRAVITATIONAL_CONSTANT,
    LUNAR_DISTANCE_KM,
    MAX_MASS_RATIO,
    MIN_SIMULATION_MASS_KG,
    MIN_SPACECRAFT_MASS_KG,
    SECONDS_PER_YEAR,
    STANDARD_GRAVITY_M_S2,
)

MAX_MISS_DISTANCE_KM = 1e7
"""Miss distance cap (about 26 lunar distances)."""

METHOD_RELIABILITY = {
    "kinetic": 0.85,
    "gravity": 0.95,
    "nuclear": 0.70,
    "laser": 0.60,
    "ion": 0.90,
    "mass_driver": 0.75,
}
"""Per-method success factor applied to the mission success probability."""

DEFAULT_METHOD_RELIABILITY = 0.7

FALLBACK_METHOD = "kinetic"
"""Catalog entry supplying spacecraft and timing data for unknown methods."""

# (ratio threshold, multiplier) checked in order; "above" entries use >, "below" use <
MASS_RATIO_MULTIPLIERS = {
    "kinetic": ((1e6, 0.3), (1e5, 0.7)),
    "nuclear": ((1e7, 0.4), (1e6, 0.8)),
    "gravity": ((5e5, 0.5), (5e4, 0.8)),
    "laser": ((5e4, 0.3), (1e4, 0.7)),
    "ion": ((5e4, 0.4), (1e4, 0.8)),
    "mass_driver": ((5e4, 0.6), (1e4, 0.9)),
}
SMALL_RATIO_PENALTY = {
    "kinetic": (100, 0.8),
    "nuclear": (1e5, 0.7),
    "gravity": (1e3, 0.9),
    "laser": (100, 0.8),
    "ion": (500, 0.9),
    "mass_driver": (500, 0.8),
}

MISSION_ENERGY_BASE_J = {
    "kinetic": 1e13,
    "gravity": 1e11,
    "nuclear": 1e15,
    "laser": 1e12,
    "ion": 1e10,
    "mass_driver": 1e12,
}
"""Energy budget of a reference mission (10 mm/s, 1500 kg, 10 years)."""


@dataclass
class MethodPhysics:
    """Momentum model output for one method."""

    momentum_transfer: float  # N·s
    efficiency: float


@dataclass
class DeflectionOutcome:
    """Projected result of a deflection mission.

    Attributes:
        miss_distance_km: Achieved miss distance in km.
        miss_distance_ld: Achieved miss distance in lunar distances.
        deflection_angle_deg: Small-angle deflection in degrees.
        energy_efficiency_pct: Kinetic energy imparted over mission input energy, %.
        success_probability_pct: Mission success probability, %.
        momentum_transfer_ns: Momentum delivered to the asteroid in N·s.
        mass_efficiency_pct: Closeness of the mass ratio to the method's sweet spot, %.
        orbital_velocity_change_m_s: Effective velocity change in m/s.
        spacecraft_mass_kg: Spacecraft mass used in the model.
        mass_ratio: Asteroid-to-spacecraft mass ratio used in the model.
        within_mass_tolerance: Whether the spacecraft mass sits inside the
            method's tolerance band.
    """

    miss_distance_km: float = 0.0
    miss_distance_ld: float = 0.0
    deflection_angle_deg: float = 0.0
    energy_efficiency_pct: float = 0.0
    success_probability_pct: float = 0.0
    momentum_transfer_ns: float = 0.0
    mass_efficiency_pct: float = 0.0
    orbital_velocity_change_m_s: float = 0.0
    spacecraft_mass_kg: float = 0.0
    mass_ratio: float = 0.0
    within_mass_tolerance: bool = False


def simulate(
    delta_v_mm_s: float,
    years_to_impact: float,
    relative_velocity_km_s: float,
    asteroid_mass_kg: float | None = None,
    method: str | DeflectionMethod = "kinetic",
    spacecraft_mass_kg: float | None = None,
    orbital_radius_au: float = 1.0,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> DeflectionOutcome:
    """Project the outcome of a deflection mission.

    Args:
        delta_v_mm_s: Nominal delta-V in mm/s. Zero or less means no
            deflection is attempted and an all-zero outcome is returned.
        years_to_impact: Time between the push and the predicted impact, years.
        relative_velocity_km_s: Encounter velocity relative to Earth, km/s.
        asteroid_mass_kg: Asteroid mass. Missing or unusable values fall
            back to 1e12 kg; the mass is floored at 1e5 kg.
        method: Deflection method key. Unknown keys are simulated with
            generic physics on the kinetic impactor's catalog entry.
        spacecraft_mass_kg: Optional override of the method's reference
            spacecraft mass; floored at 500 kg.
        orbital_radius_au: Heliocentric distance used for the geometric factor.
        catalog: Deflection method catalog.

    Returns:
        DeflectionOutcome for the mission.
    """
    dv = _finite_or(delta_v_mm_s, 0.0)
    if dv <= 0:
        return DeflectionOutcome()

    key = method.value if isinstance(method, DeflectionMethod) else str(method)
    spec = catalog.get(key)
    if spec is None:
        logger.warning("Unknown deflection method %s, using generic physics", key)
        spec = catalog.get(FALLBACK_METHOD) or DEFLECTION_METHODS[FALLBACK_METHOD]

    years = max(0.0, _finite_or(years_to_impact, 0.0))
    v_rel = max(0.0, _finite_or(relative_velocity_km_s, 0.0))
    time_sec = years * SECONDS_PER_YEAR

    override = _finite_or(spacecraft_mass_kg, 0.0)
    spacecraft_mass = max(MIN_SPACECRAFT_MASS_KG, override if override > 0 else spec.reference_spacecraft_mass)
    mass = _finite_or(asteroid_mass_kg, 0.0)
    asteroid_mass = max(MIN_SIMULATION_MASS_KG, mass if mass > 0 else DEFAULT_SIMULATION_MASS_KG)
    mass_ratio = min(MAX_MASS_RATIO, asteroid_mass / spacecraft_mass)

    ratio_multiplier = mass_ratio_multiplier(key, mass_ratio)
    physics = method_physics(key, spacecraft_mass, asteroid_mass, v_rel, time_sec, ratio_multiplier)

    effective_dv_km_s = dv * 1e-6 * physics.efficiency
    angle_deg = math.degrees(effective_dv_km_s / v_rel) if v_rel > 0 else 0.0

    geometric_factor = math.sqrt(max(0.0, _finite_or(orbital_radius_au, 1.0)))
    miss_km = min(abs(effective_dv_km_s * time_sec * geometric_factor), MAX_MISS_DISTANCE_KM)

    success = _timing_factor(spec, years) * ratio_multiplier * METHOD_RELIABILITY.get(key, DEFAULT_METHOD_RELIABILITY)

    imparted_j = 0.5 * asteroid_mass * (effective_dv_km_s * 1000.0) ** 2
    input_j = mission_input_energy(key, dv, spacecraft_mass, years)
    energy_efficiency = min(100.0, imparted_j / input_j * 100.0) if input_j > 0 else 0.0

    tol_lo, tol_hi = spec.mass_tolerance
    reference = spec.reference_spacecraft_mass
    within_tolerance = reference * tol_lo <= spacecraft_mass <= reference * tol_hi

    outcome = DeflectionOutcome(
        miss_distance_km=miss_km,
        miss_distance_ld=miss_km / LUNAR_DISTANCE_KM,
        deflection_angle_deg=angle_deg,
        energy_efficiency_pct=energy_efficiency,
        success_probability_pct=min(100.0, success * 100.0),
        momentum_transfer_ns=physics.momentum_transfer,
        mass_efficiency_pct=mass_efficiency(spec, mass_ratio),
        orbital_velocity_change_m_s=effective_dv_km_s * 1000.0,
        spacecraft_mass_kg=spacecraft_mass,
        mass_ratio=mass_ratio,
        within_mass_tolerance=within_tolerance,
    )
    logger.debug(
        "Simulated %s: dv=%.2f mm/s, miss=%.1f km, success=%.1f%%",
        key, dv, outcome.miss_distance_km, outcome.success_probability_pct,
    )
    return outcome


def method_physics(
    method: str,
    spacecraft_mass_kg: float,
    asteroid_mass_kg: float,
    relative_velocity_km_s: float,
    time_sec: float,
    ratio_multiplier: float = 1.0,
) -> MethodPhysics:
    """Momentum transfer and efficiency of a method.

    These are plausibility proxies with fixed constants, not engineering
    models.
    """
    m = spacecraft_mass_kg

    if method == "kinetic":
        # Approach speed plus ~20 km/s closing from the transfer orbit
        impact_velocity = math.sqrt(relative_velocity_km_s**2 + 20.0**2) * 1000.0
        momentum = m * impact_velocity * 2.5  # ejecta enhancement
        efficiency = 0.15 * min(2.0, m / 500.0)
    elif method == "gravity":
        hover_distance_m = 100.0
        force = GRAVITATIONAL_CONSTANT * m * asteroid_mass_kg / hover_distance_m**2
        momentum = force * time_sec
        efficiency = 0.95 * min(3.0, m / 1000.0)
    elif method == "nuclear":
        yield_kt = m / 100.0
        impulse = math.sqrt(yield_kt) * 1e6
        momentum = impulse * 10.0
        efficiency = 0.85 * min(1.5, m / 2000.0)
    elif method == "laser":
        power_mw = m / 100.0
        momentum = power_mw * 1e6 * time_sec * 0.001 * 3.0  # coupling coefficient
        efficiency = 0.25 * min(2.0, m / 1500.0)
    elif method == "ion":
        power_kw = m / 10.0
        thrust_n = power_kw * 1000.0 / (3000.0 * STANDARD_GRAVITY_M_S2)  # Isp 3000 s
        momentum = thrust_n * time_sec * 1.2
        efficiency = 0.9 * min(1.8, m / 800.0)
    elif method == "mass_driver":
        ejection_rate = m / 1000.0  # kg/s
        momentum = ejection_rate * 1000.0 * time_sec * 4.0
        efficiency = 0.6 * min(2.5, m / 1200.0)
    else:
        momentum = 0.0
        efficiency = 0.1

    return MethodPhysics(momentum_transfer=momentum, efficiency=efficiency * ratio_multiplier)


def mass_ratio_multiplier(method: str, mass_ratio: float) -> float:
    """Effectiveness multiplier for a method at a given mass ratio."""
    for threshold, multiplier in MASS_RATIO_MULTIPLIERS.get(method, ()):
        if mass_ratio > threshold:
            return multiplier
    small = SMALL_RATIO_PENALTY.get(method)
    if small is not None and mass_ratio < small[0]:
        return small[1]
    return 1.0


def mass_efficiency(spec: DeflectionMethodSpec, mass_ratio: float) -> float:
    """Percentage closeness of the mass ratio to the geometric centre of the effective range."""
    lo, hi = spec.effective_mass_ratio
    center = math.sqrt(lo * hi)
    return min(100.0, 100.0 / math.sqrt(abs(mass_ratio - center) / center + 1.0))


def mission_input_energy(method: str, delta_v_mm_s: float, spacecraft_mass_kg: float, years_to_impact: float) -> float:
    """Rough energy budget in joules for delivering a mission.

    Scales a per-method reference budget with delta-V and spacecraft mass;
    longer lead times spread the effort and lower it.
    """
    base = MISSION_ENERGY_BASE_J.get(method, 1e12)
    dv_factor = (max(delta_v_mm_s, 0.0) / 10.0) ** 1.5
    mass_factor = (max(spacecraft_mass_kg, 0.0) / 1500.0) ** 0.8
    time_factor = max(0.1, years_to_impact / 10.0)
    return base * dv_factor * mass_factor / time_factor


def _timing_factor(spec: DeflectionMethodSpec, years: float) -> float:
    window_lo, window_hi = spec.warning_time.optimal
    if years < window_lo:
        shortfall = (window_lo - years) / window_lo
        return max(0.1, 1.0 - shortfall)
    elif years > window_hi:
        return 0.9
    return 1.0


def _finite_or(value, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default
