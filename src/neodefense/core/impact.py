"""Impact energy, cratering and seismic effect estimates.

The formulas are deliberately simple scaling laws tuned for plausibility:
energy from a uniform-density sphere, crater size from a cube-root energy
law, and seismic radii that grow linearly with moment magnitude.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

from neodefense.utils.constants import (
    ASTEROID_DENSITY_KG_M3,
    CRATER_COEFFICIENT_KM,
    DAMAGE_KM_PER_MAGNITUDE,
    DAMAGE_RADIUS_CAP_KM,
    EARTH_DIAMETER_KM,
    FELT_KM_PER_MAGNITUDE,
    FELT_RADIUS_CAP_KM,
    MAP_CRATER_KM_PER_DIAMETER_KM,
    MAP_DAMAGE_KM_PER_SQRT_MT,
    MAP_MIN_CRATER_RADIUS_KM,
    MAP_MIN_DAMAGE_RADIUS_KM,
    MAP_MIN_SHAKING_RADIUS_KM,
    MAP_SHAKING_KM_PER_SQRT_MT,
    MAX_MAGNITUDE,
    MEGATON_TNT_J,
    MIN_ENERGY_MT,
    MIN_MAGNITUDE,
    SEISMIC_MAGNITUDE_DIVISOR,
    SEISMIC_MAGNITUDE_OFFSET,
    SHAKING_KM_PER_MAGNITUDE,
    SHAKING_RADIUS_CAP_KM,
)

# Ordered from most to least severe; first threshold exceeded wins.
ATMOSPHERIC_EFFECTS: tuple[tuple[float, str], ...] = (
    (1e6, "Global climate change, nuclear winter"),
    (1e5, "Regional climate effects, dust clouds"),
    (1e3, "Local atmospheric disturbance"),
    (1.0, "Airburst effects, shock waves"),
)
NO_ATMOSPHERIC_EFFECT = "None"


@dataclass(frozen=True)
class ImpactEffectProfile:
    """Consequences of an impact derived from diameter and velocity.

    Attributes:
        diameter_km: Impactor diameter in km.
        velocity_km_s: Impact velocity in km/s.
        mass_kg: Impactor mass in kg.
        energy_j: Kinetic energy in joules.
        energy_mt: Kinetic energy in megatons of TNT.
        crater_diameter_km: Final crater diameter in km.
        magnitude: Equivalent seismic moment magnitude (Mw).
        shaking_radius_km: Radius of strong ground shaking in km.
        damage_radius_km: Radius of structural damage in km.
        felt_radius_km: Radius within which shaking is felt in km.
        atmospheric_effect: Qualitative atmospheric consequence.
        latitude: Impact latitude, if supplied.
        longitude: Impact longitude, if supplied.
    """

    diameter_km: float
    velocity_km_s: float
    mass_kg: float
    energy_j: float
    energy_mt: float
    crater_diameter_km: float
    magnitude: float
    shaking_radius_km: int
    damage_radius_km: int
    felt_radius_km: int
    atmospheric_effect: str
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class ImpactZoneRadii:
    """Radii of the damage zones drawn around an impact point, in km."""

    crater_km: float
    damage_km: float
    shaking_km: float


@dataclass(frozen=True)
class AsteroidPhysicalProfile:
    """Physical description of an asteroid derived from survey estimates.

    Attributes:
        diameter_km: Mean of the minimum and maximum diameter estimates, km.
        velocity_km_s: Relative velocity at closest approach, km/s.
        density_kg_m3: Bulk density, kg/m³.
        mass_kg: Mass of a uniform sphere with this diameter and density.
    """

    diameter_km: float
    velocity_km_s: float
    density_kg_m3: float
    mass_kg: float

    @classmethod
    def from_estimates(
        cls,
        diameter_min_km: float,
        diameter_max_km: float,
        velocity_km_s: float,
        density_kg_m3: float = ASTEROID_DENSITY_KG_M3,
    ) -> AsteroidPhysicalProfile:
        """Build a profile from a diameter estimate range and approach velocity."""
        diameter = (_non_negative(diameter_min_km) + _non_negative(diameter_max_km)) / 2.0
        return cls(
            diameter_km=diameter,
            velocity_km_s=_non_negative(velocity_km_s),
            density_kg_m3=density_kg_m3,
            mass_kg=asteroid_mass(diameter, density_kg_m3),
        )

    def impact_metrics(self, impact_lat: float | None = None, impact_lng: float | None = None) -> ImpactEffectProfile:
        """Impact effects if this body struck Earth at its approach velocity."""
        return impact_metrics(self.diameter_km, self.velocity_km_s, impact_lat, impact_lng)


def asteroid_mass(diameter_km: float, density_kg_m3: float = ASTEROID_DENSITY_KG_M3) -> float:
    """Mass in kg of a uniform sphere with the given diameter."""
    d = _non_negative(diameter_km)
    radius_m = d * 1000.0 / 2.0
    return density_kg_m3 * (4.0 / 3.0) * math.pi * radius_m**3


def impact_metrics(
    diameter_km: float,
    velocity_km_s: float,
    impact_lat: float | None = None,
    impact_lng: float | None = None,
) -> ImpactEffectProfile:
    """Compute energy, crater, seismic and atmospheric effects of an impact.

    Non-numeric or negative diameters and velocities are treated as zero;
    the function always returns a profile.

    Args:
        diameter_km: Impactor diameter in km.
        velocity_km_s: Impact velocity in km/s.
        impact_lat: Optional impact latitude in degrees.
        impact_lng: Optional impact longitude in degrees.

    Returns:
        ImpactEffectProfile for the impact.
    """
    d = _non_negative(diameter_km)
    v = _non_negative(velocity_km_s)

    mass_kg = asteroid_mass(d)
    velocity_m_s = v * 1000.0
    energy_j = 0.5 * mass_kg * velocity_m_s**2
    energy_mt = energy_j / MEGATON_TNT_J

    crater_km = min(EARTH_DIAMETER_KM, CRATER_COEFFICIENT_KM * max(MIN_ENERGY_MT, energy_mt) ** (1.0 / 3.0))
    magnitude = seismic_magnitude(energy_j)
    shaking, damage, felt = seismic_radii(magnitude)

    logger.debug("Impact d=%.3f km v=%.2f km/s: %.3g Mt, Mw=%.2f", d, v, energy_mt, magnitude)
    return ImpactEffectProfile(
        diameter_km=d,
        velocity_km_s=v,
        mass_kg=mass_kg,
        energy_j=energy_j,
        energy_mt=energy_mt,
        crater_diameter_km=crater_km,
        magnitude=magnitude,
        shaking_radius_km=shaking,
        damage_radius_km=damage,
        felt_radius_km=felt,
        atmospheric_effect=atmospheric_effect(energy_mt),
        latitude=_optional_float(impact_lat),
        longitude=_optional_float(impact_lng),
    )


def seismic_magnitude(energy_j: float) -> float:
    """Moment magnitude equivalent of a seismic energy release, clamped to [-1, 12]."""
    mw = (math.log10(max(1.0, energy_j)) - SEISMIC_MAGNITUDE_OFFSET) / SEISMIC_MAGNITUDE_DIVISOR
    return max(MIN_MAGNITUDE, min(MAX_MAGNITUDE, mw))


def seismic_radii(magnitude: float) -> tuple[int, int, int]:
    """Strong shaking, damage and felt radii in km for a magnitude.

    Each radius is linear in magnitude with its own slope and cap.
    Negative magnitudes give zero radii.
    """
    m = max(0.0, magnitude)
    shaking = round(min(SHAKING_RADIUS_CAP_KM, m * SHAKING_KM_PER_MAGNITUDE))
    damage = round(min(DAMAGE_RADIUS_CAP_KM, m * DAMAGE_KM_PER_MAGNITUDE))
    felt = round(min(FELT_RADIUS_CAP_KM, m * FELT_KM_PER_MAGNITUDE))
    return shaking, damage, felt


def atmospheric_effect(energy_mt: float) -> str:
    """Qualitative atmospheric consequence for an energy in megatons."""
    for threshold, description in ATMOSPHERIC_EFFECTS:
        if energy_mt > threshold:
            return description
    return NO_ATMOSPHERIC_EFFECT


def impact_zone_radii(diameter_km: float, energy_mt: float) -> ImpactZoneRadii:
    """Map radii for the crater, damage and shaking zones of an impact.

    The shaking radius is the effect radius used for casualty estimation.
    """
    d = _non_negative(diameter_km)
    root_mt = math.sqrt(_non_negative(energy_mt))
    return ImpactZoneRadii(
        crater_km=max(MAP_MIN_CRATER_RADIUS_KM, d * MAP_CRATER_KM_PER_DIAMETER_KM),
        damage_km=max(MAP_MIN_DAMAGE_RADIUS_KM, root_mt * MAP_DAMAGE_KM_PER_SQRT_MT),
        shaking_km=max(MAP_MIN_SHAKING_RADIUS_KM, root_mt * MAP_SHAKING_KM_PER_SQRT_MT),
    )


def torino_proxy(energy_mt: float, probability: float = 1.0) -> int:
    """Simplified 0-10 Torino-style hazard score.

    Energy sets the ceiling, and lower impact probabilities knock the
    score down in steps of two.

    Args:
        energy_mt: Impact energy in megatons.
        probability: Impact probability in [0, 1].

    Returns:
        Integer hazard score between 0 and 10.
    """
    p = _non_negative(probability)
    if p < 1e-6:
        return 0

    energy_score = max(0, min(10, round(math.log10(_non_negative(energy_mt) + 1.0))))

    if p >= 0.01:
        score = energy_score
    elif p >= 0.001:
        score = energy_score - 2
    elif p >= 0.0001:
        score = energy_score - 4
    else:
        score = 0
    return max(0, score)


def _non_negative(value: Any) -> float:
    """Coerce to a finite, non-negative float (0.0 otherwise)."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(result) or result < 0:
        return 0.0
    return result


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None
