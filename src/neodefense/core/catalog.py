"""Knowledge base of asteroid deflection techniques and mass categories.

Ranges are calibrated against flown and proposed missions (DART, Deep
Impact, gravity tractor and ion shepherd studies, nuclear standoff
analyses). They are game-balance constants rather than derived physics;
changing them changes which method the selector recommends.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


class DeflectionMethod(Enum):
    """Deflection techniques, in selector iteration order."""

    KINETIC = "kinetic"
    GRAVITY = "gravity"
    NUCLEAR = "nuclear"
    LASER = "laser"
    ION = "ion"
    MASS_DRIVER = "mass_driver"


@dataclass(frozen=True)
class DeltaVRange:
    """Deliverable velocity change in mm/s."""

    min: float
    max: float
    optimal: tuple[float, float]


@dataclass(frozen=True)
class SpacecraftMassRange:
    """Spacecraft mass in kg. ``base`` is the nominal design point."""

    base: float
    min: float
    max: float


@dataclass(frozen=True)
class YearRange:
    """A span of years."""

    min: float
    max: float


@dataclass(frozen=True)
class WarningWindow:
    """Usable and optimal warning time before impact, in years."""

    min: float
    max: float
    optimal: tuple[float, float]


@dataclass(frozen=True)
class MassRatioRange:
    """Asteroid-to-spacecraft mass ratios a method handles.

    ``peak`` is the sweet spot; ``min``/``max`` bound the usable range.
    """

    min: float
    max: float
    peak: tuple[float, float]


@dataclass(frozen=True)
class DeflectionMethodSpec:
    """Catalog entry for one deflection technique.

    Attributes:
        key: Catalog key, e.g. ``"kinetic"``.
        name: Display name.
        description: One-line description of the technique.
        examples: Flown or proposed missions using it.
        delta_v: Deliverable delta-V in mm/s.
        spacecraft_mass: Spacecraft mass envelope in kg.
        momentum_enhancement: Momentum multiplication factor (beta).
        development_time: Development time in years.
        mission_duration: Mission duration in years.
        warning_time: Warning time window in years.
        optimal_mass_ratio: Mass ratio envelope used by the selector.
        mass_effectiveness: How effectiveness scales with target mass.
        reliability: Probability of mission success in [0, 1].
        technology_readiness: Technology readiness level, 1-10.
        cost_base: Base cost in millions of USD.
        cost_scale_factor: Exponent controlling how cost grows with scale.
        operational_complexity: low, medium, high or extreme.
        political_feasibility: very_low, low, medium or high.
        advantages: Strategic advantages.
        limitations: Strategic limitations.
        reference_spacecraft_mass: Spacecraft mass the outcome simulator
            assumes when none is supplied, in kg.
        mass_tolerance: Fractional bounds around ``reference_spacecraft_mass``
            within which the spacecraft is considered well-sized.
        effective_mass_ratio: Mass ratio range over which the simulator
            credits the method with full mass efficiency.
    """

    key: str
    name: str
    description: str
    examples: str
    delta_v: DeltaVRange
    spacecraft_mass: SpacecraftMassRange
    momentum_enhancement: float
    development_time: YearRange
    mission_duration: YearRange
    warning_time: WarningWindow
    optimal_mass_ratio: MassRatioRange
    mass_effectiveness: str
    reliability: float
    technology_readiness: int
    cost_base: float
    cost_scale_factor: float
    operational_complexity: str
    political_feasibility: str
    advantages: tuple[str, ...]
    limitations: tuple[str, ...]
    reference_spacecraft_mass: float
    mass_tolerance: tuple[float, float]
    effective_mass_ratio: tuple[float, float]


@dataclass(frozen=True)
class MassCategory:
    """Asteroid size class keyed on mass.

    Attributes:
        key: Category key, e.g. ``"medium"``.
        label: Display label.
        mass_range: Nominal [lo, hi) mass range in kg.
        description: Short description.
        typical_diameter: Typical diameter for the class.
        threat_level: Scale of devastation on impact.
        optimal_methods: Method keys best suited to the class.
        deployment_urgency: How quickly a response must be mounted.
    """

    key: str
    label: str
    mass_range: tuple[float, float]
    description: str
    typical_diameter: str
    threat_level: str
    optimal_methods: tuple[str, ...]
    deployment_urgency: str


# optimal_mass_ratio envelopes are recalibrated selector values, orders of magnitude above effective_mass_ratio.
_METHODS = {
    "kinetic": DeflectionMethodSpec(
        key="kinetic",
        name="Kinetic Impactor",
        description="High-velocity spacecraft collision transfers momentum to asteroid",
        examples="DART (2022), Deep Impact (2005), AIDA concept",
        delta_v=DeltaVRange(min=1, max=50, optimal=(5, 25)),
        spacecraft_mass=SpacecraftMassRange(base=800, min=400, max=15000),
        momentum_enhancement=2.8,  # ejecta beta measured by DART
        development_time=YearRange(min=2.5, max=5),
        mission_duration=YearRange(min=0.8, max=3.5),
        warning_time=WarningWindow(min=5, max=25, optimal=(8, 20)),
        optimal_mass_ratio=MassRatioRange(min=100, max=5e6, peak=(1e3, 1e6)),
        mass_effectiveness="decreases_rapidly_above_peak",
        reliability=0.88,
        technology_readiness=9,
        cost_base=450,
        cost_scale_factor=1.8,
        operational_complexity="medium",
        political_feasibility="high",
        advantages=("Proven technology", "Fast deployment", "High precision", "Predictable outcomes"),
        limitations=(
            "Mass-limited effectiveness",
            "Single-use",
            "Requires precise trajectory",
            "Limited to smaller asteroids",
        ),
        reference_spacecraft_mass=850,
        mass_tolerance=(0.59, 1.41),
        effective_mass_ratio=(100, 1e6),
    ),
    "gravity": DeflectionMethodSpec(
        key="gravity",
        name="Gravity Tractor",
        description="Spacecraft uses gravitational attraction to slowly deflect asteroid",
        examples="ESA NEO-MAPP studies, NASA gravity tractor concepts",
        delta_v=DeltaVRange(min=0.01, max=8, optimal=(0.1, 3)),
        spacecraft_mass=SpacecraftMassRange(base=3500, min=1500, max=25000),
        momentum_enhancement=1.0,
        development_time=YearRange(min=4, max=8),
        mission_duration=YearRange(min=8, max=25),
        warning_time=WarningWindow(min=15, max=60, optimal=(20, 45)),
        optimal_mass_ratio=MassRatioRange(min=1e3, max=1e8, peak=(1e5, 1e7)),
        mass_effectiveness="scales_well_with_time",
        reliability=0.94,
        technology_readiness=7,
        cost_base=1200,
        cost_scale_factor=2.2,
        operational_complexity="high",
        political_feasibility="high",
        advantages=("Extremely precise", "Works on any composition", "Scalable with time", "No surface contact"),
        limitations=("Very slow", "Long missions", "High fuel requirements", "Complex operations"),
        reference_spacecraft_mass=2000,
        mass_tolerance=(0.5, 1.5),
        effective_mass_ratio=(1e3, 5e5),
    ),
    "nuclear": DeflectionMethodSpec(
        key="nuclear",
        name="Nuclear Standoff Burst",
        description="Nuclear device creates massive impulse through X-ray ablation",
        examples="Project Icarus (1968), NASA nuclear deflection studies",
        delta_v=DeltaVRange(min=5, max=1000, optimal=(20, 400)),
        spacecraft_mass=SpacecraftMassRange(base=8000, min=3000, max=80000),
        momentum_enhancement=25,
        development_time=YearRange(min=4, max=12),
        mission_duration=YearRange(min=1, max=5),
        warning_time=WarningWindow(min=1, max=15, optimal=(2, 10)),
        optimal_mass_ratio=MassRatioRange(min=1e5, max=1e12, peak=(1e8, 1e11)),
        mass_effectiveness="excellent_for_massive_objects",
        reliability=0.75,
        technology_readiness=6,
        cost_base=3500,
        cost_scale_factor=2.8,
        operational_complexity="extreme",
        political_feasibility="very_low",
        advantages=("Handles massive asteroids", "Fast execution", "Enormous energy", "Last resort capability"),
        limitations=("Political barriers", "Fragmentation risk", "Complex technology", "International treaties"),
        reference_spacecraft_mass=5000,
        mass_tolerance=(0.33, 1.67),
        effective_mass_ratio=(1e5, 1e7),
    ),
    "laser": DeflectionMethodSpec(
        key="laser",
        name="Laser Ablation Array",
        description="High-power laser array creates continuous thrust through surface ablation",
        examples="DE-STAR concept, Breakthrough Starshot scalability studies",
        delta_v=DeltaVRange(min=0.1, max=25, optimal=(1, 12)),
        spacecraft_mass=SpacecraftMassRange(base=4500, min=2000, max=35000),
        momentum_enhancement=4.2,
        development_time=YearRange(min=8, max=15),
        mission_duration=YearRange(min=3, max=18),
        warning_time=WarningWindow(min=8, max=30, optimal=(12, 25)),
        optimal_mass_ratio=MassRatioRange(min=100, max=1e6, peak=(1e3, 1e5)),
        mass_effectiveness="power_limited_scaling",
        reliability=0.65,
        technology_readiness=4,
        cost_base=2800,
        cost_scale_factor=3.1,
        operational_complexity="extreme",
        political_feasibility="medium",
        advantages=("Continuous thrust", "Precise control", "Distance operation", "Scalable power"),
        limitations=("Unproven technology", "Enormous power requirements", "Beam diffraction", "Complex targeting"),
        reference_spacecraft_mass=1750,
        mass_tolerance=(0.57, 1.43),
        effective_mass_ratio=(100, 5e4),
    ),
    "ion": DeflectionMethodSpec(
        key="ion",
        name="Ion Beam Shepherd",
        description="Ion beam creates continuous low thrust on asteroid surface",
        examples="NASA JPL shepherd concepts, ESA ion deflection studies",
        delta_v=DeltaVRange(min=0.05, max=12, optimal=(0.3, 6)),
        spacecraft_mass=SpacecraftMassRange(base=2800, min=1200, max=20000),
        momentum_enhancement=1.4,
        development_time=YearRange(min=5, max=9),
        mission_duration=YearRange(min=4, max=20),
        warning_time=WarningWindow(min=10, max=35, optimal=(15, 28)),
        optimal_mass_ratio=MassRatioRange(min=1e3, max=1e8, peak=(1e5, 1e7)),
        mass_effectiveness="steady_scaling_with_time",
        reliability=0.91,
        technology_readiness=8,
        cost_base=950,
        cost_scale_factor=2.0,
        operational_complexity="high",
        political_feasibility="high",
        advantages=("High efficiency", "Proven ion technology", "Precise control", "Long operational life"),
        limitations=("Very low thrust", "Close proximity required", "Long mission times", "Complex operations"),
        reference_spacecraft_mass=1400,
        mass_tolerance=(0.57, 1.43),
        effective_mass_ratio=(500, 5e4),
    ),
    "mass_driver": DeflectionMethodSpec(
        key="mass_driver",
        name="Surface Mass Driver",
        description="Surface-mounted electromagnetic launcher ejects asteroid material for thrust",
        examples="Space tug concepts, asteroid mining propulsion studies",
        delta_v=DeltaVRange(min=2, max=180, optimal=(8, 80)),
        spacecraft_mass=SpacecraftMassRange(base=6500, min=3500, max=45000),
        momentum_enhancement=6.8,
        development_time=YearRange(min=6, max=12),
        mission_duration=YearRange(min=2, max=12),
        warning_time=WarningWindow(min=8, max=25, optimal=(10, 20)),
        optimal_mass_ratio=MassRatioRange(min=1e5, max=1e10, peak=(1e6, 1e9)),
        mass_effectiveness="excellent_for_large_objects",
        reliability=0.82,
        technology_readiness=5,
        cost_base=1800,
        cost_scale_factor=2.4,
        operational_complexity="extreme",
        political_feasibility="medium",
        advantages=("Uses asteroid material", "High thrust potential", "Reduces asteroid mass", "Scalable"),
        limitations=(
            "Complex surface operations",
            "Landing required",
            "Composition dependent",
            "Unproven technology",
        ),
        reference_spacecraft_mass=3500,
        mass_tolerance=(1.0, 1.0),
        effective_mass_ratio=(500, 5e4),
    ),
}

DEFLECTION_METHODS: Mapping[str, DeflectionMethodSpec] = MappingProxyType(_METHODS)
"""Read-only catalog of the six deflection techniques, in selector order."""

_CATEGORIES = {
    "tiny": MassCategory(
        key="tiny",
        label="Tiny",
        mass_range=(1e6, 1e9),
        description="Small near-Earth objects",
        typical_diameter="1-10 meters",
        threat_level="minimal",
        optimal_methods=("kinetic", "laser"),
        deployment_urgency="low",
    ),
    "small": MassCategory(
        key="small",
        label="Small",
        mass_range=(1e9, 1e11),
        description="House to building-sized asteroids",
        typical_diameter="10-50 meters",
        threat_level="local",
        optimal_methods=("kinetic", "gravity", "ion"),
        deployment_urgency="medium",
    ),
    "medium": MassCategory(
        key="medium",
        label="Medium",
        mass_range=(1e11, 1e13),
        description="City-killer asteroids",
        typical_diameter="50-200 meters",
        threat_level="regional",
        optimal_methods=("kinetic", "nuclear", "mass_driver"),
        deployment_urgency="high",
    ),
    "large": MassCategory(
        key="large",
        label="Large",
        mass_range=(1e13, 1e15),
        description="Regional devastation asteroids",
        typical_diameter="200-500 meters",
        threat_level="continental",
        optimal_methods=("nuclear", "mass_driver", "gravity"),
        deployment_urgency="critical",
    ),
    "massive": MassCategory(
        key="massive",
        label="Massive",
        mass_range=(1e15, 1e17),
        description="Global catastrophe asteroids",
        typical_diameter="500-1000 meters",
        threat_level="global",
        optimal_methods=("nuclear", "mass_driver"),
        deployment_urgency="maximum",
    ),
    "ultra_massive": MassCategory(
        key="ultra_massive",
        label="Ultra-Massive",
        mass_range=(1e17, 1e20),
        description="Extinction-level asteroids",
        typical_diameter="1+ kilometers",
        threat_level="extinction",
        optimal_methods=("nuclear",),
        deployment_urgency="absolute",
    ),
}

MASS_CATEGORIES: Mapping[str, MassCategory] = MappingProxyType(_CATEGORIES)
"""Read-only mass categories, smallest first."""


def method_spec(
    key: str | DeflectionMethod,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> DeflectionMethodSpec:
    """Look up a catalog entry.

    Args:
        key: Method key or DeflectionMethod member.
        catalog: Catalog to search.

    Returns:
        The matching DeflectionMethodSpec.

    Raises:
        ValueError: If the key is not in the catalog.
    """
    name = key.value if isinstance(key, DeflectionMethod) else key
    try:
        return catalog[name]
    except KeyError:
        logger.error("Unknown deflection method: %s", name)
        raise ValueError(f"Unknown deflection method: {name}")


def optimal_mass_ratio_range(
    key: str | DeflectionMethod,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> tuple[float, float]:
    """Mass ratio range over which a method is fully mass-efficient."""
    return method_spec(key, catalog).effective_mass_ratio


def mass_tolerance(
    key: str | DeflectionMethod,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> tuple[float, float]:
    """Fractional spacecraft mass bounds around the method's reference mass.

    Kinetic impactors, for example, stay well-sized between 0.59x and 1.41x
    their 850 kg reference spacecraft.
    """
    return method_spec(key, catalog).mass_tolerance


def categorize_mass(
    mass_kg: float,
    categories: Mapping[str, MassCategory] = MASS_CATEGORIES,
) -> MassCategory:
    """Find the mass category for an asteroid.

    The top category absorbs everything at or above its lower bound, and the
    bottom category absorbs anything smaller than its lower bound, so every
    positive mass lands in exactly one category.
    """
    ordered = sorted(categories.values(), key=lambda c: c.mass_range[0])
    if not math.isfinite(mass_kg) and mass_kg > 0:
        return ordered[-1]
    if math.isnan(mass_kg) or mass_kg < ordered[0].mass_range[0]:
        return ordered[0]
    for category in ordered[:-1]:
        lo, hi = category.mass_range
        if lo <= mass_kg < hi:
            return category
    return ordered[-1]


def estimate_cost(
    key: str | DeflectionMethod,
    mass_scale: float,
    catalog: Mapping[str, DeflectionMethodSpec] = DEFLECTION_METHODS,
) -> float:
    """Mission cost in millions of USD for a spacecraft scaled by ``mass_scale``."""
    spec = method_spec(key, catalog)
    return spec.cost_base * max(mass_scale, 0.0) ** (spec.cost_scale_factor / 2.0)
