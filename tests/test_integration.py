"""Integration test: parse → assess impact → select → simulate end-to-end."""
from __future__ import annotations

from datetime import date

import pytest

import neodefense
from neodefense import (
    NeoRecord,
    assess_population,
    impact_zone_radii,
    position,
    select_method,
    simulate,
)

# Small hazardous object in NeoWS form (no network calls)
SAMPLE_NEO = {
    "id": "3542519",
    "name": "(2010 PK9)",
    "is_potentially_hazardous_asteroid": True,
    "estimated_diameter": {
        "kilometers": {"estimated_diameter_min": "0.12", "estimated_diameter_max": "0.27"},
    },
    "close_approach_data": [
        {
            "close_approach_date": "2031-07-21",
            "relative_velocity": {"kilometers_per_second": "18.3"},
            "miss_distance": {"kilometers": "1523000"},
            "orbiting_body": "Earth",
        }
    ],
    "orbital_data": {
        "epoch_osculation": "2461000.5",
        "eccentricity": ".6",
        "semi_major_axis": "1.4",
        "inclination": "7.3",
        "ascending_node_longitude": "120.0",
        "perihelion_argument": "45.0",
        "mean_anomaly": "300.0",
        "mean_motion": ".59",
    },
}

NOW = date(2026, 1, 1)
IMPACT_SITE = (51.5, -0.1)


@pytest.fixture
def record() -> NeoRecord:
    return NeoRecord.from_neows(SAMPLE_NEO)


class TestEndToEnd:
    """Full pipeline on a parsed record."""

    def test_pipeline(self, record: NeoRecord):
        profile = record.profile(NOW)
        effects = profile.impact_metrics(*IMPACT_SITE)
        assert effects.energy_mt > 1.0

        radii = impact_zone_radii(profile.diameter_km, effects.energy_mt)
        impact = assess_population(*IMPACT_SITE, radii.shaking_km)
        assert impact.total > 0
        assert impact.cities, "London should be inside the shaking radius"

        years = (record.next_approach(NOW).date - NOW).days / 365.25
        selection = select_method(profile.mass_kg, years, record.is_hazardous)
        config = selection.config

        outcome = simulate(
            config.delta_v_mm_s,
            years,
            profile.velocity_km_s,
            profile.mass_kg,
            selection.method,
            spacecraft_mass_kg=config.spacecraft_mass_kg,
        )
        assert outcome.miss_distance_km > 0
        assert 0 < outcome.success_probability_pct <= 100
        assert outcome.spacecraft_mass_kg == config.spacecraft_mass_kg

    def test_orbit_propagates_from_record(self, record: NeoRecord):
        elements = record.elements
        pos = position(elements, elements.epoch_jd + 365.25)
        a, e = elements.semi_major_axis_au, elements.eccentricity
        assert pos.converged
        assert a * (1 - e) - 1e-9 <= pos.distance_au <= a * (1 + e) + 1e-9
        assert record.orbit_class == "Apollo (Earth-crossing)"


class TestPublicApi:
    """The package root re-exports the public API."""

    def test_all_names_resolve(self):
        for name in neodefense.__all__:
            assert hasattr(neodefense, name), f"neodefense.{name} missing"

    def test_version(self):
        assert neodefense.__version__ == "0.1.0-dev"
