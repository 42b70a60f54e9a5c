"""Population-at-risk estimates for an impact location and effect radius.

Casualties come from two sources that are summed:

* registered cities inside the effect radius, with a casualty rate that
  decays across four concentric damage zones and is adjusted for density;
* a rural background from a coarse regional density table spread over the
  zone annuli.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache

import numpy as np

logger = logging.getLogger(__name__)
from numpy.typing import NDArray

from neodefense.data.cities import CITIES, City
from neodefense.utils.constants import (
    CRATER_ZONE_FRACTION,
    EARTH_RADIUS_KM,
    EMPTY_ZONE_RADIUS_KM,
    EXPECTED_RURAL_DENSITY_FRACTION,
    MAX_AFFECTED_CITIES,
    MAX_CASUALTY_RATE,
    MAX_PLAUSIBLE_POPULATION,
    MAX_REALISTIC_RADIUS_KM,
    MIN_DISTANCE_KM,
    MODERATE_ZONE_FRACTION,
    RURAL_CASUALTY_RATES,
    RURAL_DENSITY_FRACTION,
    SEVERE_ZONE_FRACTION,
)

# Casualty fraction at the inner edge of each zone. Each zone decays to the
# next zone's peak so the rate never increases with distance.
CRATER_RATE = 0.95
SEVERE_PEAK_RATE = 0.60
MODERATE_PEAK_RATE = 0.25
LIGHT_PEAK_RATE = 0.08
SEVERE_DECAY = 1.5

# (name, lng_min, lng_max, lat_min, lat_max, default density, sub-regions)
REGIONAL_DENSITY: tuple = (
    ("Asia", 60, 150, 5, 55, 200, (
        ("East Asia", 100, 140, 20, 45, 350),
        ("South Asia", 65, 100, 5, 35, 400),
        ("Southeast Asia", 95, 150, -10, 25, 180),
    )),
    ("Europe", -15, 60, 35, 75, 120, (
        ("Central Europe", 5, 25, 45, 60, 200),
        ("Southern Europe", -10, 20, 35, 50, 170),
    )),
    ("North America", -170, -50, 25, 75, 20, (
        ("United States", -130, -70, 30, 50, 35),
        ("Canada", -140, -50, 45, 75, 4),
        ("Mexico and Central America", -120, -80, 15, 35, 65),
    )),
    ("Africa", -20, 55, -35, 40, 35, (
        ("East Africa", 25, 40, 0, 15, 80),
        ("West and Central Africa", -10, 25, 0, 20, 45),
        ("Southern Africa", 15, 35, -35, 0, 50),
    )),
    ("South America", -85, -35, -60, 15, 20, (
        ("Brazil", -75, -45, -30, 10, 25),
        ("Northern South America", -80, -60, -20, 15, 35),
    )),
    ("Oceania", 110, 180, -50, -10, 3, ()),
)
"""Coarse population density bands in people/km². First match wins."""

REMOTE_DENSITY = 1
"""Density for oceans, polar regions and anything outside the bands."""


@dataclass
class AffectedCity:
    """A registered city inside the effect radius.

    Attributes:
        name: City name.
        distance_km: Great-circle distance from the impact point, rounded.
        population: Registered population.
        at_risk: Estimated casualties.
        impact_factor: Zone casualty fraction before density adjustment.
        casualty_rate: Final casualty fraction applied to the population.
        damage_level: complete, severe, moderate or light.
        density: Registered density in people/km².
    """

    name: str
    distance_km: int
    population: int
    at_risk: int
    impact_factor: float
    casualty_rate: float
    damage_level: str
    density: float


@dataclass
class PopulationImpact:
    """Breakdown of population at risk for one impact."""

    total: int
    urban: int
    rural: int
    cities: list[AffectedCity] = field(default_factory=list)


@dataclass
class PopulationValidation:
    """Diagnostic companion to a population-at-risk estimate.

    Attributes:
        is_valid: False only when the estimate is internally inconsistent.
        warnings: Advisory messages; none of them block the estimate.
        total_population: Total population at risk.
        urban_population: City component.
        rural_population: Rural component.
        cities_in_range: Number of registered cities inside the radius.
        largest_city: Most affected city, if any.
    """

    is_valid: bool
    warnings: list[str]
    total_population: int = 0
    urban_population: int = 0
    rural_population: int = 0
    cities_in_range: int = 0
    largest_city: AffectedCity | None = None


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km between two points.

    Latitudes are clamped to [-90, 90] and longitudes wrapped to [-180, 180).
    NaN input gives infinity; distances under 10 m are reported as zero.
    """
    try:
        values = [float(v) for v in (lat1, lng1, lat2, lng2)]
    except (TypeError, ValueError):
        return math.inf
    if not all(math.isfinite(v) for v in values):
        logger.warning("Invalid coordinates in distance calculation")
        return math.inf
    distances = _haversine(values[0], values[1], np.array([values[2]]), np.array([values[3]]))
    return float(distances[0])


def regional_density(lat: float, lng: float) -> float:
    """Approximate population density (people/km²) for a location."""
    for _, lng_lo, lng_hi, lat_lo, lat_hi, default, subregions in REGIONAL_DENSITY:
        if lng_lo <= lng <= lng_hi and lat_lo <= lat <= lat_hi:
            for _, s_lng_lo, s_lng_hi, s_lat_lo, s_lat_hi, density in subregions:
                if s_lng_lo <= lng <= s_lng_hi and s_lat_lo <= lat <= s_lat_hi:
                    return density
            return default
    return REMOTE_DENSITY


def assess_population(
    lat: float,
    lng: float,
    radius_km: float,
    cities: tuple[City, ...] = CITIES,
) -> PopulationImpact:
    """Estimate casualties inside an effect radius with a per-city breakdown.

    Args:
        lat: Impact latitude in degrees.
        lng: Impact longitude in degrees.
        radius_km: Effect radius in km.
        cities: City registry to use.

    Returns:
        PopulationImpact with cities sorted by casualties, largest first.
    """
    if not _valid_inputs(lat, lng, radius_km):
        logger.warning("Invalid impact parameters lat=%s lng=%s radius=%s", lat, lng, radius_km)
        return PopulationImpact(total=0, urban=0, rural=0)

    lat = max(-90.0, min(90.0, float(lat)))
    lng = _wrap_longitude(float(lng))
    radius_km = float(radius_km)
    if radius_km <= 0:
        return PopulationImpact(total=0, urban=0, rural=0)

    affected: list[AffectedCity] = []
    if cities:
        city_lat, city_lng = _registry_arrays(cities)
        distances = _haversine(lat, lng, city_lat, city_lng)
        for idx in np.flatnonzero(distances <= radius_km):
            affected.append(_affected_city(cities[idx], float(distances[idx]), radius_km))

    affected.sort(key=lambda c: c.at_risk, reverse=True)
    urban = sum(c.at_risk for c in affected)
    rural = estimate_rural_population(lat, lng, radius_km)

    logger.debug(
        "Population at risk (%.2f, %.2f, r=%.0f km): urban=%d rural=%d cities=%d",
        lat, lng, radius_km, urban, rural, len(affected),
    )
    return PopulationImpact(total=urban + rural, urban=urban, rural=rural, cities=affected)


def population_at_risk(
    lat: float,
    lng: float,
    radius_km: float,
    cities: tuple[City, ...] = CITIES,
) -> int:
    """Total estimated casualties for an impact location and effect radius."""
    return assess_population(lat, lng, radius_km, cities).total


def estimate_rural_population(lat: float, lng: float, radius_km: float) -> int:
    """Casualties among people living outside registered cities.

    Each zone annulus is populated at a fraction of the regional density and
    has its own rural casualty rate.
    """
    if radius_km <= 0:
        return 0
    rural_density = regional_density(lat, lng) * RURAL_DENSITY_FRACTION

    edges = [
        0.0,
        radius_km * CRATER_ZONE_FRACTION,
        radius_km * SEVERE_ZONE_FRACTION,
        radius_km * MODERATE_ZONE_FRACTION,
        radius_km,
    ]
    total = 0.0
    for inner, outer, rate in zip(edges[:-1], edges[1:], RURAL_CASUALTY_RATES):
        annulus_area = math.pi * (outer**2 - inner**2)
        total += annulus_area * rural_density * rate
    return round(total)


def validate(
    lat: float,
    lng: float,
    radius_km: float,
    cities: tuple[City, ...] = CITIES,
) -> PopulationValidation:
    """Run a population estimate and report advisory warnings about it.

    Out-of-range coordinates are normalized for the estimate and reported
    here. Only an urban component larger than the total marks the result
    invalid.
    """
    result = PopulationValidation(is_valid=True, warnings=[])

    if not _valid_inputs(lat, lng, radius_km):
        result.warnings.append("Invalid input parameters")
        return result
    lat, lng, radius_km = float(lat), float(lng), float(radius_km)

    if lat < -90 or lat > 90:
        result.warnings.append("Latitude out of range (-90 to 90)")
    if lng < -180 or lng > 180:
        result.warnings.append("Longitude out of range (-180 to 180)")
    if radius_km <= 0 or radius_km > MAX_REALISTIC_RADIUS_KM:
        result.warnings.append("Impact radius seems unrealistic (0-2000 km)")

    impact = assess_population(lat, lng, radius_km, cities)
    result.total_population = impact.total
    result.urban_population = impact.urban
    result.rural_population = impact.rural
    result.cities_in_range = len(impact.cities)
    result.largest_city = impact.cities[0] if impact.cities else None

    if impact.total > MAX_PLAUSIBLE_POPULATION:
        result.warnings.append("Population at risk seems very high - check calculation")
    if impact.total == 0 and radius_km > EMPTY_ZONE_RADIUS_KM:
        result.warnings.append("No population found in large impact zone - may indicate calculation issue")
    if impact.urban > impact.total:
        result.is_valid = False
        result.warnings.append("Urban population exceeds total - calculation error")
    if len(impact.cities) > MAX_AFFECTED_CITIES:
        result.warnings.append("Very large number of cities affected - check radius")

    expected_rural = math.pi * radius_km**2 * regional_density(lat, lng) * EXPECTED_RURAL_DENSITY_FRACTION
    if radius_km > 0 and impact.rural > expected_rural * 2:
        result.warnings.append("Rural population estimate may be too high")

    if result.warnings:
        logger.debug("Population validation warnings: %s", result.warnings)
    return result


def zone_impact_factor(distance_km: float, radius_km: float) -> tuple[float, str]:
    """Casualty fraction and damage level at a distance inside the radius."""
    crater = radius_km * CRATER_ZONE_FRACTION
    severe = radius_km * SEVERE_ZONE_FRACTION
    moderate = radius_km * MODERATE_ZONE_FRACTION

    if distance_km <= crater:
        return CRATER_RATE, "complete"
    elif distance_km <= severe:
        x = (distance_km - crater) / (severe - crater)
        floor = math.exp(-SEVERE_DECAY)
        decay = (math.exp(-SEVERE_DECAY * x) - floor) / (1.0 - floor)
        return MODERATE_PEAK_RATE + (SEVERE_PEAK_RATE - MODERATE_PEAK_RATE) * decay, "severe"
    elif distance_km <= moderate:
        x = (distance_km - severe) / (moderate - severe)
        return LIGHT_PEAK_RATE + (MODERATE_PEAK_RATE - LIGHT_PEAK_RATE) * (1.0 - x * x), "moderate"
    else:
        x = (distance_km - moderate) / (radius_km - moderate)
        return max(0.0, LIGHT_PEAK_RATE * (1.0 - x)), "light"


def _affected_city(city: City, distance_km: float, radius_km: float) -> AffectedCity:
    impact_factor, damage_level = zone_impact_factor(distance_km, radius_km)

    # Building collapse dominates in dense cores
    casualty_rate = impact_factor
    if city.density > 15000:
        casualty_rate *= 1.3
    elif city.density > 8000:
        casualty_rate *= 1.15
    elif city.density < 2000:
        casualty_rate *= 0.6
    casualty_rate = min(casualty_rate, MAX_CASUALTY_RATE)

    return AffectedCity(
        name=city.name,
        distance_km=round(distance_km),
        population=city.population,
        at_risk=round(city.population * casualty_rate),
        impact_factor=impact_factor,
        casualty_rate=casualty_rate,
        damage_level=damage_level,
        density=city.density,
    )


@lru_cache(maxsize=8)
def _registry_arrays(cities: tuple[City, ...]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Latitude and longitude arrays for a registry."""
    lats = np.array([c.lat for c in cities], dtype=np.float64)
    lngs = np.array([c.lng for c in cities], dtype=np.float64)
    lats.setflags(write=False)
    lngs.setflags(write=False)
    return lats, lngs


def _haversine(
    lat1: float, lng1: float, lat2: NDArray[np.float64], lng2: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Vectorized haversine from one point to many, in km."""
    phi1 = np.radians(np.clip(lat1, -90.0, 90.0))
    phi2 = np.radians(np.clip(lat2, -90.0, 90.0))
    lam1 = np.radians(_wrap_longitude(lng1))
    lam2 = np.radians(_wrap_longitude(lng2))

    a = np.sin((phi2 - phi1) / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin((lam2 - lam1) / 2.0) ** 2
    a = np.clip(a, 0.0, 1.0)
    distances = EARTH_RADIUS_KM * 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return np.where(distances < MIN_DISTANCE_KM, 0.0, distances)


def _wrap_longitude(lng):
    return ((lng + 180.0) % 360.0) - 180.0


def _valid_inputs(lat, lng, radius_km) -> bool:
    try:
        values = [float(v) for v in (lat, lng, radius_km)]
    except (TypeError, ValueError):
        return False
    return all(math.isfinite(v) for v in values)
