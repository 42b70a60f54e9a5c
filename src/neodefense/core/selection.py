"""Deflection method selection and mission sizing.

Every catalog method is scored out of roughly 100 points:

* mass ratio fit (40): how well the asteroid/spacecraft mass ratio sits in
  the method's sweet spot;
* timing fit (30): how well the warning time matches the method's window;
* reliability (20): base reliability, reduced at extreme mass ratios;
* hazard bonus (10): favours proven methods when the object is hazardous.

The highest total wins and is sized into a concrete mission configuration.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

from neodefense.core.catalog import (
    DEFLECTION_METHODS,
    MASS_CATEGORIES,
    DeflectionMethodSpec,
    MassCategory,
    categorize_mass,
    estimate_cost,
)
from neodefense.utils.constants import DEFAULT_ASTEROID_MASS_KG, MAX_ASTEROID_MASS_KG, MIN_SPACECRAFT_MASS_KG

MASS_SCORE_MAX = 40.0
TIMING_SCORE_MAX = 30.0
RELIABILITY_SCORE_MAX = 20.0
HAZARD_BONUS_MAX = 10.0

HAZARD_BONUS = {
    "kinetic": 10.0,  # proven by DART
    "gravity": 8.0,
    "ion": 7.0,
    "nuclear": 5.0,
    "mass_driver": 4.0,
    "laser": 2.0,
}
"""Hazard bonus per method, ordered by flight heritage."""

NON_HAZARDOUS_BONUS = 5.0
"""Flat bonus awarded to every method when the object is not hazardous."""

PROVEN_READINESS_LEVEL = 8
"""Technology readiness level at or above which a method counts as proven."""

PROVEN_RELIABILITY_BOOST = 1.3
"""Reliability multiplier for proven methods against hazardous objects."""

FAST_DEPLOY_METHODS = frozenset({"kinetic", "nuclear"})
LONG_DURATION_METHODS = frozenset({"gravity", "ion", "laser"})

MIN_YEARS_TO_IMPACT = 0.1
"""Warning times are floored at this when scoring, years."""

# (exponent, cap) of the spacecraft mass scale (mass / 1e9 kg) ** exponent
CATEGORY_MASS_SCALING = {
    "tiny": (0.0, 1.0),
    "small": (0.10, 2.5),
    "medium": (0.15, 4.0),
    "large": (0.20, 6.0),
    "massive": (0.22, 10.0),
    "ultra_massive": (0.25, 15.0),
}

METHOD_MASS_SCALE_CAP = {
    "kinetic": 3.0,
    "gravity": 4.0,
    "nuclear": 15.0,
    "laser": 4.0,
    "ion": 4.0,
    "mass_driver": 10.0,
}
"""Largest spacecraft mass multiple each method can field."""


@dataclass
class MethodScore:
    """Score breakdown for one method.

    Attributes:
        method: Method key.
        mass_ratio: Asteroid mass divided by the method's base spacecraft mass.
        mass_score: Mass ratio fit, 0-40.
        timing_score: Warning time fit, 0-30.
        reliability_score: Adjusted reliability, 0-20 (up to 26 for proven
            methods against hazardous objects).
        hazard_score: Hazard bonus, 0-10.
    """

    method: str
    mass_ratio: float
    mass_score: float
    timing_score: float
    reliability_score: float
    hazard_score: float

    @property
    def total(self) -> float:
        return self.mass_score + self.timing_score + self.reliability_score + self.hazard_score


@dataclass
class MissionConfiguration:
    """Sized mission for a selected method.

    Attributes:
        method: Method key.
        spacecraft_mass_kg: Spacecraft mass in kg.
        delta_v_mm_s: Target delta-V in mm/s.
        mission_duration_years: Mission duration in years.
        years_to_impact: Warning time, clamped to [1, 50] years.
        estimated_cost_musd: Estimated cost in millions of USD.
        development_time_years: Pessimistic development time in years.
        reliability: Catalog reliability of the method.
        complexity: Operational complexity tag.
    """

    method: str
    spacecraft_mass_kg: int
    delta_v_mm_s: float
    mission_duration_years: float
    years_to_impact: float
    estimated_cost_musd: float
    development_time_years: float
    reliability: float
    complexity: str


@dataclass
class SelectionResult:
    """Outcome of method selection.

    Attributes:
        method: Winning method key.
        score: Winning total score.
        config: Mission configuration for the winner.
        classification: Mass category of the asteroid.
        scores: Score breakdown for every method, in catalog order.
    """

    method: str
    score: float
    config: MissionConfiguration
    classification: MassCategory
    scores: dict[str, MethodScore] = field(default_factory=dict)

    def ranking(self) -> list[MethodScore]:
        """All method scores, best first."""
        return sorted(self.scores.values(), key=lambda s: s.total, reverse=True)


@dataclass
class DefenseRecommendation:
    """Human-readable summary of a selected defense."""

    urgency: str
    summary: str
    threat_assessment: str
    confidence: str
    cost_summary: str
    selection: SelectionResult


def select_method(
    asteroid_mass_kg: float,
    years_to_impact: float,
    is_hazardous: bool = False,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
    categories: Mapping[str, MassCategory] = MASS_CATEGORIES,
) -> SelectionResult:
    """Score every deflection method and size a mission for the best one.

    Ties go to the method encountered first in catalog order.

    Args:
        asteroid_mass_kg: Asteroid mass in kg. Non-positive, NaN or non-numeric
            values fall back to 1e9 kg; infinity is clamped to 1e21 kg.
        years_to_impact: Warning time in years.
        is_hazardous: Whether the object is flagged potentially hazardous.
        catalog: Deflection method catalog.
        categories: Mass category table.

    Returns:
        SelectionResult with the winning method and its configuration.
    """
    mass = _usable_mass(asteroid_mass_kg)
    years = _usable_years(years_to_impact)
    classification = categorize_mass(mass, categories)

    scores: dict[str, MethodScore] = {}
    best: MethodScore | None = None
    for key, spec in catalog.items():
        score = score_method(spec, mass, years, is_hazardous)
        scores[key] = score
        logger.debug(
            "%s: ratio=%.3g mass=%.1f timing=%.1f rel=%.1f hazard=%.1f total=%.1f",
            key, score.mass_ratio, score.mass_score, score.timing_score,
            score.reliability_score, score.hazard_score, score.total,
        )
        if best is None or score.total > best.total:
            best = score

    if best is None:
        logger.error("Deflection catalog is empty")
        raise ValueError("Deflection catalog is empty")

    config = configure_mission(catalog[best.method], mass, years, categories)
    logger.debug("Selected %s (score %.1f) for %.3g kg, %.1f years", best.method, best.total, mass, years)
    return SelectionResult(
        method=best.method,
        score=round(best.total, 2),
        config=config,
        classification=classification,
        scores=scores,
    )


def score_method(spec: DeflectionMethodSpec, asteroid_mass_kg: float, years_to_impact: float, is_hazardous: bool) -> MethodScore:
    """Score one method for an asteroid mass and warning time."""
    mass_ratio = asteroid_mass_kg / spec.spacecraft_mass.base
    return MethodScore(
        method=spec.key,
        mass_ratio=mass_ratio,
        mass_score=_calculate_mass_score(spec, mass_ratio),
        timing_score=_calculate_timing_score(spec, years_to_impact),
        reliability_score=_calculate_reliability_score(spec, mass_ratio, is_hazardous),
        hazard_score=_calculate_hazard_score(spec, is_hazardous),
    )


def configure_mission(
    spec: DeflectionMethodSpec,
    asteroid_mass_kg: float,
    years_to_impact: float,
    categories: Mapping[str, MassCategory] = MASS_CATEGORIES,
) -> MissionConfiguration:
    """Size spacecraft mass, delta-V and duration for a method and asteroid.

    Nominal values are scaled up with asteroid mass, adjusted for urgency or
    spare time, then clamped into the method's catalog ranges.
    """
    method = spec.key
    mass_b = asteroid_mass_kg / 1e9  # billions of kg
    category = categorize_mass(asteroid_mass_kg, categories)
    window_lo, window_hi = spec.warning_time.optimal

    exponent, cap = CATEGORY_MASS_SCALING.get(category.key, (0.0, 1.0))
    mass_scale = max(1.0, min(cap, mass_b**exponent)) if mass_b > 0 else 1.0
    mass_scale = min(mass_scale, METHOD_MASS_SCALE_CAP.get(method, cap))

    spacecraft_mass = spec.spacecraft_mass.base * mass_scale
    delta_v = sum(spec.delta_v.optimal) / 2.0 * _delta_v_scale(method, mass_b)
    duration = (spec.mission_duration.min + spec.mission_duration.max) / 2.0

    if years_to_impact < window_lo:
        # Short warning forces aggressive missions
        if method in FAST_DEPLOY_METHODS:
            delta_v *= 1.5
            duration = spec.mission_duration.min
        else:
            delta_v *= 1.2
            duration = max(spec.mission_duration.min, duration * 0.7)
    elif years_to_impact > window_hi and method in ("gravity", "ion"):
        duration = years_to_impact * 0.4
        delta_v *= 0.8

    # Slow-push methods stretch the mission instead of growing the spacecraft
    if mass_b > 1000 and method in LONG_DURATION_METHODS:
        duration *= min(2.0, 1.0 + 0.5 * math.log10(mass_b / 1000))

    spacecraft_mass = _clamp(
        round(spacecraft_mass),
        max(spec.spacecraft_mass.min, MIN_SPACECRAFT_MASS_KG),
        spec.spacecraft_mass.max,
    )
    delta_v = _clamp(round(delta_v, 1), spec.delta_v.min, spec.delta_v.max)
    duration = _clamp(round(duration, 1), spec.mission_duration.min, spec.mission_duration.max)

    cost = estimate_cost(method, spacecraft_mass / spec.spacecraft_mass.base, {method: spec})
    return MissionConfiguration(
        method=method,
        spacecraft_mass_kg=int(spacecraft_mass),
        delta_v_mm_s=delta_v,
        mission_duration_years=duration,
        years_to_impact=_clamp(years_to_impact, 1.0, 50.0),
        estimated_cost_musd=round(cost),
        development_time_years=spec.development_time.max,
        reliability=spec.reliability,
        complexity=spec.operational_complexity,
    )


def recommend_defense(
    asteroid_mass_kg: float,
    years_to_impact: float,
    is_hazardous: bool = False,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> DefenseRecommendation:
    """Select a method and describe the resulting defense plan."""
    selection = select_method(asteroid_mass_kg, years_to_impact, is_hazardous, catalog)
    spec = catalog[selection.method]
    config = selection.config
    category = selection.classification

    return DefenseRecommendation(
        urgency=_urgency_label(_usable_years(years_to_impact)),
        summary=(
            f"Deploy {spec.name} with {config.spacecraft_mass_kg}kg spacecraft delivering "
            f"{config.delta_v_mm_s}mm/s over {config.mission_duration_years} years"
        ),
        threat_assessment=f"{category.label} asteroid poses {category.threat_level} threat",
        confidence=f"{round(min(selection.score, 100.0))}% mission confidence",
        cost_summary=(
            f"Estimated ${config.estimated_cost_musd:,.0f}M USD over "
            f"{config.development_time_years} years development"
        ),
        selection=selection,
    )


def _calculate_mass_score(spec: DeflectionMethodSpec, mass_ratio: float) -> float:
    """
    Score the mass ratio against the method's envelope on a log scale.
    Gaussian inside the peak, linear fade to the bounds, log penalties outside.
    """
    envelope = spec.optimal_mass_ratio
    peak_lo, peak_hi = (math.log10(p) for p in envelope.peak)
    log_ratio = math.log10(max(mass_ratio, 1e-30))
    edge_score = MASS_SCORE_MAX * math.exp(-0.5)

    if peak_lo <= log_ratio <= peak_hi:
        center = (peak_lo + peak_hi) / 2.0
        half_width = max((peak_hi - peak_lo) / 2.0, 1e-9)
        deviation = abs(log_ratio - center) / half_width
        return MASS_SCORE_MAX * math.exp(-0.5 * deviation**2)
    elif envelope.min <= mass_ratio <= envelope.max:
        if log_ratio < peak_lo:
            span = peak_lo - math.log10(envelope.min)
            frac = (peak_lo - log_ratio) / span if span > 0 else 1.0
        else:
            span = math.log10(envelope.max) - peak_hi
            frac = (log_ratio - peak_hi) / span if span > 0 else 1.0
        return edge_score * (1.0 - 0.5 * frac)
    elif mass_ratio < envelope.min:
        # Overkill: spacecraft far heavier than needed
        under = math.log10(envelope.min / mass_ratio)
        return max(2.0, 12.0 - 4.0 * under)
    else:
        # Inadequate: asteroid far beyond what the method can push
        over = math.log10(mass_ratio / envelope.max)
        return max(1.0, 12.0 - 6.0 * over)


def _calculate_timing_score(spec: DeflectionMethodSpec, years_to_impact: float) -> float:
    """
    Score warning time against the method's optimal window.
    Fast-deploy methods tolerate short warning better; long-duration
    methods gain from extra time.
    """
    window_lo, window_hi = spec.warning_time.optimal
    years = max(years_to_impact, MIN_YEARS_TO_IMPACT)

    if window_lo <= years <= window_hi:
        return TIMING_SCORE_MAX
    elif years < window_lo:
        urgency_ratio = window_lo / years
        if spec.key in FAST_DEPLOY_METHODS:
            return max(9.0, 27.0 - urgency_ratio * 3.0)
        return max(3.0, 21.0 - urgency_ratio * 6.0)
    else:
        excess = years / window_hi
        if spec.key in LONG_DURATION_METHODS:
            return min(TIMING_SCORE_MAX, 18.0 + math.log(excess) * 4.5)
        return max(15.0, 27.0 - (excess - 1.0) * 2.4)


def _calculate_reliability_score(spec: DeflectionMethodSpec, mass_ratio: float, is_hazardous: bool) -> float:
    """Reliability scaled to 20 points, adjusted for extreme mass ratios."""
    reliability = spec.reliability
    envelope = spec.optimal_mass_ratio

    if mass_ratio > envelope.peak[1] * 2:
        if spec.key in ("kinetic", "laser"):
            reliability *= 0.7
        elif spec.key == "nuclear":
            reliability *= 0.9
    elif mass_ratio < envelope.min / 2 and spec.key == "nuclear":
        reliability *= 0.8

    score = reliability * RELIABILITY_SCORE_MAX
    if is_hazardous and spec.technology_readiness >= PROVEN_READINESS_LEVEL:
        score *= PROVEN_RELIABILITY_BOOST
    return score


def _calculate_hazard_score(spec: DeflectionMethodSpec, is_hazardous: bool) -> float:
    """Bonus toward flight-proven methods for hazardous objects."""
    if is_hazardous:
        return HAZARD_BONUS.get(spec.key, NON_HAZARDOUS_BONUS)
    return NON_HAZARDOUS_BONUS


def _delta_v_scale(method: str, mass_b: float) -> float:
    """Delta-V multiplier for an asteroid of ``mass_b`` billion kg."""
    if method == "nuclear":
        if mass_b > 50000:
            return 15.0
        elif mass_b > 10000:
            return 8.0 + (mass_b / 10000) * 3.0
        elif mass_b > 1000:
            return 4.0 + (mass_b / 1000) * 2.0
        elif mass_b > 100:
            return 2.0 + mass_b / 100
        return 1.0 + (mass_b / 100) * 0.5
    elif method == "kinetic":
        if mass_b > 1000:
            return 2.5
        elif mass_b > 100:
            return 1.5 + mass_b / 1000
        return 1.0 + (mass_b / 100) * 0.5
    elif method == "mass_driver":
        if mass_b > 5000:
            return 8.0
        elif mass_b > 500:
            return 3.0 + (mass_b / 1000) * 2.0
        return 1.0 + mass_b / 100
    return 1.0 + 0.3 * math.log10(mass_b + 1)


def _urgency_label(years_to_impact: float) -> str:
    if years_to_impact < 5:
        return "URGENT"
    elif years_to_impact < 10:
        return "HIGH PRIORITY"
    elif years_to_impact < 20:
        return "MEDIUM PRIORITY"
    return "LONG-TERM PLANNING"


def _usable_mass(mass_kg: float) -> float:
    try:
        mass = float(mass_kg)
    except (TypeError, ValueError):
        mass = math.nan
    if math.isnan(mass) or mass <= 0:
        logger.warning("Unusable asteroid mass %r, assuming %.0e kg", mass_kg, DEFAULT_ASTEROID_MASS_KG)
        return DEFAULT_ASTEROID_MASS_KG
    return min(mass, MAX_ASTEROID_MASS_KG)


def _usable_years(years: float) -> float:
    try:
        value = float(years)
    except (TypeError, ValueError):
        value = math.nan
    if math.isnan(value):
        logger.warning("Unusable warning time %r, assuming %.1f years", years, MIN_YEARS_TO_IMPACT)
        return MIN_YEARS_TO_IMPACT
    return max(MIN_YEARS_TO_IMPACT, min(value, 1e6))


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
