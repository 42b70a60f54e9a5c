"""Tests for impact energy, crater, seismic and hazard estimates."""
from __future__ import annotations

import math

import pytest

from neodefense.core.impact import (
    AsteroidPhysicalProfile,
    asteroid_mass,
    atmospheric_effect,
    impact_metrics,
    impact_zone_radii,
    seismic_magnitude,
    seismic_radii,
    torino_proxy,
)


# 370 m stony body at 7.42 km/s
APOPHIS_DIAMETER_KM = 0.37
APOPHIS_VELOCITY_KM_S = 7.42
APOPHIS_ENERGY_MT = 523.49


class TestImpactMetrics:
    """Test suite for impact_metrics."""

    def test_energy_from_uniform_sphere(self):
        """Energy is half m v^2 for a 3000 kg/m^3 sphere."""
        effects = impact_metrics(APOPHIS_DIAMETER_KM, APOPHIS_VELOCITY_KM_S)
        assert effects.mass_kg == pytest.approx(7.9566e10, rel=1e-3)
        assert effects.energy_j == pytest.approx(2.1903e18, rel=1e-3)
        assert effects.energy_mt == pytest.approx(APOPHIS_ENERGY_MT, rel=1e-3)

    def test_crater_and_seismic_effects(self):
        """Crater, magnitude and radii follow the scaling laws."""
        effects = impact_metrics(APOPHIS_DIAMETER_KM, APOPHIS_VELOCITY_KM_S, 35.7, 139.7)
        assert effects.crater_diameter_km == pytest.approx(0.6 * APOPHIS_ENERGY_MT ** (1 / 3), rel=1e-3)
        assert effects.magnitude == pytest.approx(9.027, abs=0.01)
        assert effects.shaking_radius_km == 226
        assert effects.damage_radius_km == 90
        assert effects.felt_radius_km == 451
        assert effects.atmospheric_effect == "Airburst effects, shock waves"
        assert effects.latitude == 35.7
        assert effects.longitude == 139.7

    def test_zero_diameter(self):
        """A zero-size body produces no energy and no radii."""
        effects = impact_metrics(0.0, 20.0)
        assert effects.energy_j == 0.0
        assert effects.energy_mt == 0.0
        assert effects.crater_diameter_km == pytest.approx(0.006)
        assert effects.magnitude == -1.0
        assert (effects.shaking_radius_km, effects.damage_radius_km, effects.felt_radius_km) == (0, 0, 0)
        assert effects.atmospheric_effect == "None"

    def test_invalid_inputs_treated_as_zero(self):
        """NaN, negative and non-numeric inputs never raise."""
        for d, v in [(float("nan"), 10.0), (-1.0, 10.0), ("big", 10.0), (1.0, None)]:
            effects = impact_metrics(d, v)
            assert effects.energy_mt == 0.0
            assert math.isfinite(effects.crater_diameter_km)

    def test_crater_capped_at_earth_diameter(self):
        """A planet-sized impactor cannot dig a crater larger than Earth."""
        effects = impact_metrics(1000.0, 70.0)
        assert effects.crater_diameter_km == 12742.0
        assert effects.magnitude == 12.0
        assert effects.atmospheric_effect == "Global climate change, nuclear winter"

    def test_energy_grows_with_size_and_speed(self):
        """Energy is monotone in diameter and velocity."""
        energies = [impact_metrics(d, 20.0).energy_mt for d in (0.01, 0.1, 0.5, 1.0, 5.0)]
        assert energies == sorted(energies)
        energies = [impact_metrics(0.1, v).energy_mt for v in (5.0, 11.0, 20.0, 40.0)]
        assert energies == sorted(energies)

    def test_invalid_location_dropped(self):
        """Non-numeric coordinates are recorded as None."""
        effects = impact_metrics(0.1, 20.0, "north", float("nan"))
        assert effects.latitude is None
        assert effects.longitude is None


class TestSeismic:
    """Test suite for seismic magnitude and radii."""

    def test_magnitude_clamped(self):
        assert seismic_magnitude(0.0) == -1.0
        assert seismic_magnitude(1e40) == 12.0
        assert seismic_magnitude(10**11.8) == pytest.approx(4.667, abs=1e-3)

    def test_radii_linear_in_magnitude(self):
        """Radii scale at 25, 10 and 50 km per magnitude unit."""
        assert seismic_radii(4.0) == (100, 40, 200)
        assert seismic_radii(12.0) == (300, 120, 600)

    def test_negative_magnitude_gives_zero(self):
        assert seismic_radii(-1.0) == (0, 0, 0)

    def test_radii_monotone(self):
        previous = (0, 0, 0)
        for m in range(0, 13):
            radii = seismic_radii(float(m))
            assert all(r >= p for r, p in zip(radii, previous)), f"Radii shrank at Mw={m}"
            previous = radii


class TestAtmosphericEffect:
    """Test suite for the atmospheric effect thresholds."""

    @pytest.mark.parametrize(
        "energy_mt, expected",
        [
            (0.5, "None"),
            (1.0, "None"),
            (1.5, "Airburst effects, shock waves"),
            (1000.0, "Airburst effects, shock waves"),
            (1001.0, "Local atmospheric disturbance"),
            (1e5 + 1, "Regional climate effects, dust clouds"),
            (2e6, "Global climate change, nuclear winter"),
        ],
    )
    def test_thresholds(self, energy_mt: float, expected: str):
        assert atmospheric_effect(energy_mt) == expected


class TestTorinoProxy:
    """Test suite for the simplified hazard score."""

    def test_certain_impact_scored_by_energy(self):
        assert torino_proxy(1000.0, 1.0) == 3
        assert torino_proxy(APOPHIS_ENERGY_MT) == 3

    def test_low_probability_reduces_score(self):
        assert torino_proxy(1000.0, 0.005) == 1
        assert torino_proxy(1000.0, 0.0005) == 0
        assert torino_proxy(1e8, 0.0005) == 4

    def test_negligible_probability_is_zero(self):
        assert torino_proxy(1e8, 1e-7) == 0

    def test_score_capped_at_ten(self):
        assert torino_proxy(1e12, 1.0) == 10


class TestZoneRadii:
    """Test suite for the map zone radii."""

    def test_apophis_radii(self):
        radii = impact_zone_radii(APOPHIS_DIAMETER_KM, APOPHIS_ENERGY_MT)
        assert radii.crater_km == 3.0
        assert radii.damage_km == pytest.approx(1.8 * math.sqrt(APOPHIS_ENERGY_MT))
        assert radii.shaking_km == pytest.approx(4.0 * math.sqrt(APOPHIS_ENERGY_MT))

    def test_minimum_radii(self):
        radii = impact_zone_radii(0.0, 0.0)
        assert (radii.crater_km, radii.damage_km, radii.shaking_km) == (3.0, 15.0, 40.0)

    def test_crater_scales_with_diameter(self):
        assert impact_zone_radii(10.0, 1e8).crater_km == 80.0


class TestAsteroidPhysicalProfile:
    """Test suite for profiles built from survey estimates."""

    def test_from_estimates_averages_diameter(self):
        profile = AsteroidPhysicalProfile.from_estimates(0.3, 0.44, APOPHIS_VELOCITY_KM_S)
        assert profile.diameter_km == pytest.approx(0.37)
        assert profile.density_kg_m3 == 3000.0
        assert profile.mass_kg == pytest.approx(asteroid_mass(0.37))

    def test_profile_impact_metrics(self):
        profile = AsteroidPhysicalProfile.from_estimates(0.3, 0.44, APOPHIS_VELOCITY_KM_S)
        assert profile.impact_metrics().energy_mt == pytest.approx(APOPHIS_ENERGY_MT, rel=1e-3)

    def test_custom_density(self):
        """Mass scales linearly with density."""
        assert asteroid_mass(1.0, 1500.0) == pytest.approx(asteroid_mass(1.0) / 2)
