"""Preset impact scenarios for demonstrations and teaching.

Each scenario carries the energy figure quoted in its public narrative
(``reported_energy_mt``). Evaluating a scenario recomputes the effects
from diameter and velocity with the impact model, so the two need not agree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

from neodefense.core.casualties import PopulationImpact, assess_population
from neodefense.core.impact import ImpactEffectProfile, ImpactZoneRadii, impact_metrics, impact_zone_radii, torino_proxy


@dataclass(frozen=True)
class Fragment:
    """A secondary impact of a fragmented body."""

    lat: float
    lng: float
    energy_mt: float


@dataclass(frozen=True)
class Scenario:
    """A preset impact scenario.

    Attributes:
        key: Scenario key.
        name: Display name.
        description: One-line description.
        kind: historical, what-if, catastrophic, regional-threat or complex.
        asteroid_name: Name of the impactor.
        diameter_km: Impactor diameter in km.
        velocity_km_s: Impact velocity in km/s.
        miss_distance_km: Miss distance in km; zero for an impact.
        event_date: Date of the encounter.
        reported_energy_mt: Energy quoted for the scenario, Mt TNT.
        classification: Orbit family.
        impact_lat: Impact latitude in degrees.
        impact_lng: Impact longitude in degrees.
        fragments: Secondary impacts, if the body fragmented.
    """

    key: str
    name: str
    description: str
    kind: str
    asteroid_name: str
    diameter_km: float
    velocity_km_s: float
    miss_distance_km: float
    event_date: date
    reported_energy_mt: float
    classification: str
    impact_lat: float
    impact_lng: float
    fragments: tuple[Fragment, ...] = ()


@dataclass
class FragmentAssessment:
    """Effects of one fragment impact."""

    fragment: Fragment
    radii: ImpactZoneRadii
    population_at_risk: int


@dataclass
class ScenarioAssessment:
    """Computed consequences of a scenario.

    Attributes:
        scenario: The evaluated scenario.
        effects: Impact effects of the main body.
        radii: Map zone radii of the main impact.
        population: Population at risk inside the shaking radius.
        torino: Torino-style hazard score assuming the impact happens.
        fragments: Assessments of secondary impacts.
    """

    scenario: Scenario
    effects: ImpactEffectProfile
    radii: ImpactZoneRadii
    population: PopulationImpact
    torino: int
    fragments: list[FragmentAssessment] = field(default_factory=list)

    @property
    def total_population_at_risk(self) -> int:
        return self.population.total + sum(f.population_at_risk for f in self.fragments)


_SCENARIOS = {
    "apophis-2029": Scenario(
        key="apophis-2029",
        name="99942 Apophis - 2029 Flyby",
        description="Historical close approach of Apophis asteroid in April 2029",
        kind="historical",
        asteroid_name="99942 Apophis",
        diameter_km=0.37,
        velocity_km_s=7.42,
        miss_distance_km=31000,
        event_date=date(2029, 4, 13),
        reported_energy_mt=1151,
        classification="Aten",
        impact_lat=35.7,
        impact_lng=139.7,
    ),
    "tunguska-modern": Scenario(
        key="tunguska-modern",
        name="Modern Tunguska Event",
        description="What if the 1908 Tunguska event happened today over a major city?",
        kind="what-if",
        asteroid_name="Tunguska-2025",
        diameter_km=0.06,
        velocity_km_s=27.0,
        miss_distance_km=0,
        event_date=date(2025, 10, 15),
        reported_energy_mt=10,
        classification="Apollo",
        impact_lat=40.7,
        impact_lng=-74.0,
    ),
    "extinction-event": Scenario(
        key="extinction-event",
        name="Extinction-Level Asteroid",
        description="A massive asteroid similar to the one that ended the age of dinosaurs",
        kind="catastrophic",
        asteroid_name="Chicxulub-2025",
        diameter_km=10.0,
        velocity_km_s=20.0,
        miss_distance_km=0,
        event_date=date(2025, 12, 25),
        reported_energy_mt=1e8,
        classification="Apollo",
        impact_lat=21.0,
        impact_lng=-89.0,
    ),
    "city-killer": Scenario(
        key="city-killer",
        name="City-Killer Asteroid",
        description="A 300-meter asteroid threatening a major metropolitan area",
        kind="regional-threat",
        asteroid_name="Urban-Threat-1",
        diameter_km=0.3,
        velocity_km_s=18.0,
        miss_distance_km=0,
        event_date=date(2026, 3, 15),
        reported_energy_mt=2000,
        classification="Apollo",
        impact_lat=51.5,
        impact_lng=-0.1,
    ),
    "asteroid-shower": Scenario(
        key="asteroid-shower",
        name="Fragmented Asteroid Shower",
        description="A large asteroid breaks apart, creating multiple impact threats",
        kind="complex",
        asteroid_name="Fragment-Alpha",
        diameter_km=0.15,
        velocity_km_s=22.0,
        miss_distance_km=0,
        event_date=date(2027, 8, 8),
        reported_energy_mt=400,
        classification="Apollo",
        impact_lat=35.7,
        impact_lng=139.7,
        fragments=(
            Fragment(lat=40.7, lng=-74.0, energy_mt=100),  # New York
            Fragment(lat=51.5, lng=-0.1, energy_mt=50),  # London
            Fragment(lat=-23.6, lng=-46.6, energy_mt=25),  # Sao Paulo
        ),
    ),
}

SCENARIOS: Mapping[str, Scenario] = MappingProxyType(_SCENARIOS)
"""Read-only preset scenarios keyed by scenario key."""


def get_scenario(key: str) -> Scenario:
    """Look up a preset scenario.

    Raises:
        ValueError: If no scenario has this key.
    """
    try:
        return SCENARIOS[key]
    except KeyError:
        logger.error("Unknown scenario: %s", key)
        raise ValueError(f"Unknown scenario: {key}")


def evaluate_scenario(key: str) -> ScenarioAssessment:
    """Compute impact effects and population at risk for a preset scenario.

    The shaking-zone radius of each impact is used as the casualty radius.
    """
    scenario = get_scenario(key)
    effects = impact_metrics(scenario.diameter_km, scenario.velocity_km_s, scenario.impact_lat, scenario.impact_lng)
    radii = impact_zone_radii(scenario.diameter_km, effects.energy_mt)
    population = assess_population(scenario.impact_lat, scenario.impact_lng, radii.shaking_km)

    fragments = []
    for fragment in scenario.fragments:
        fragment_radii = impact_zone_radii(0.0, fragment.energy_mt)
        fragments.append(
            FragmentAssessment(
                fragment=fragment,
                radii=fragment_radii,
                population_at_risk=assess_population(fragment.lat, fragment.lng, fragment_radii.shaking_km).total,
            )
        )

    logger.debug("Scenario %s: %.3g Mt, %d at risk", key, effects.energy_mt, population.total)
    return ScenarioAssessment(
        scenario=scenario,
        effects=effects,
        radii=radii,
        population=population,
        torino=torino_proxy(effects.energy_mt, 1.0),
        fragments=fragments,
    )
