"""
NEO Defense — asteroid deflection planning and impact consequences for Python.

Open-source library for propagating asteroid orbits, estimating impact
energy and casualties, and choosing a deflection mission. Built as a
transparent teaching model: every heuristic is a named constant.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from neodefense.core.orbit import OrbitalElements, HeliocentricPosition, position, solve_kepler, classify_orbit
from neodefense.core.impact import AsteroidPhysicalProfile, ImpactEffectProfile, impact_metrics, impact_zone_radii, torino_proxy
from neodefense.core.casualties import PopulationImpact, PopulationValidation, population_at_risk, assess_population, validate, haversine_km
from neodefense.core.catalog import DeflectionMethod, DeflectionMethodSpec, MassCategory, DEFLECTION_METHODS, MASS_CATEGORIES, method_spec, optimal_mass_ratio_range, mass_tolerance, categorize_mass
from neodefense.core.selection import MissionConfiguration, SelectionResult, DefenseRecommendation, select_method, recommend_defense
from neodefense.core.deflection import DeflectionOutcome, simulate
from neodefense.data.cities import CITIES, City
from neodefense.data.neo import NeoRecord, CloseApproach, parse_neo_feed
from neodefense.data.scenarios import SCENARIOS, Scenario, get_scenario, evaluate_scenario

__all__ = [
    "__version__",
    "OrbitalElements",
    "HeliocentricPosition",
    "position",
    "solve_kepler",
    "classify_orbit",
    "AsteroidPhysicalProfile",
    "ImpactEffectProfile",
    "impact_metrics",
    "impact_zone_radii",
    "torino_proxy",
    "PopulationImpact",
    "PopulationValidation",
    "population_at_risk",
    "assess_population",
    "validate",
    "haversine_km",
    "DeflectionMethod",
    "DeflectionMethodSpec",
    "MassCategory",
    "DEFLECTION_METHODS",
    "MASS_CATEGORIES",
    "method_spec",
    "optimal_mass_ratio_range",
    "mass_tolerance",
    "categorize_mass",
    "MissionConfiguration",
    "SelectionResult",
    "DefenseRecommendation",
    "select_method",
    "recommend_defense",
    "DeflectionOutcome",
    "simulate",
    "CITIES",
    "City",
    "NeoRecord",
    "CloseApproach",
    "parse_neo_feed",
    "SCENARIOS",
    "Scenario",
    "get_scenario",
    "evaluate_scenario",
]
