"""Tests for the deflection method catalog and mass categories."""
from __future__ import annotations

import math

import numpy as np
import pytest

from neodefense.core.catalog import (
    DEFLECTION_METHODS,
    MASS_CATEGORIES,
    DeflectionMethod,
    categorize_mass,
    estimate_cost,
    mass_tolerance,
    method_spec,
    optimal_mass_ratio_range,
)

EXPECTED_METHODS = ["kinetic", "gravity", "nuclear", "laser", "ion", "mass_driver"]


class TestCatalogIntegrity:
    """Test suite for catalog entry consistency."""

    def test_six_methods_in_order(self):
        assert list(DEFLECTION_METHODS) == EXPECTED_METHODS
        assert [m.value for m in DeflectionMethod] == EXPECTED_METHODS

    def test_keys_match_entries(self):
        for key, spec in DEFLECTION_METHODS.items():
            assert spec.key == key

    @pytest.mark.parametrize("key", EXPECTED_METHODS)
    def test_ranges_ordered(self, key: str):
        """Every min <= optimal <= max holds for every range."""
        spec = DEFLECTION_METHODS[key]
        dv = spec.delta_v
        assert dv.min <= dv.optimal[0] <= dv.optimal[1] <= dv.max
        sc = spec.spacecraft_mass
        assert sc.min <= sc.base <= sc.max
        assert spec.development_time.min <= spec.development_time.max
        assert spec.mission_duration.min <= spec.mission_duration.max
        wt = spec.warning_time
        assert wt.min <= wt.optimal[0] <= wt.optimal[1] <= wt.max
        ratio = spec.optimal_mass_ratio
        assert ratio.min <= ratio.peak[0] <= ratio.peak[1] <= ratio.max
        lo, hi = spec.mass_tolerance
        assert 0 < lo <= 1.0 <= hi
        assert spec.effective_mass_ratio[0] < spec.effective_mass_ratio[1]

    @pytest.mark.parametrize("key", EXPECTED_METHODS)
    def test_scalar_attributes_in_range(self, key: str):
        spec = DEFLECTION_METHODS[key]
        assert 0.0 <= spec.reliability <= 1.0
        assert 1 <= spec.technology_readiness <= 10
        assert spec.cost_base > 0
        assert spec.momentum_enhancement >= 1.0
        assert spec.operational_complexity in ("low", "medium", "high", "extreme")
        assert spec.political_feasibility in ("very_low", "low", "medium", "high")
        assert spec.advantages and spec.limitations

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            DEFLECTION_METHODS["warp"] = DEFLECTION_METHODS["kinetic"]


class TestLookups:
    """Test suite for catalog lookups."""

    def test_method_spec_by_key_and_enum(self):
        assert method_spec("ion").name == "Ion Beam Shepherd"
        assert method_spec(DeflectionMethod.NUCLEAR) is DEFLECTION_METHODS["nuclear"]

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="Unknown deflection method: warp"):
            method_spec("warp")

    def test_mass_tolerance(self):
        assert mass_tolerance("kinetic") == (0.59, 1.41)
        assert mass_tolerance("mass_driver") == (1.0, 1.0)
        with pytest.raises(ValueError):
            mass_tolerance("warp")

    def test_optimal_mass_ratio_range(self):
        assert optimal_mass_ratio_range("kinetic") == (100, 1e6)
        assert optimal_mass_ratio_range(DeflectionMethod.NUCLEAR) == (1e5, 1e7)

    def test_custom_catalog(self):
        catalog = {"kinetic": DEFLECTION_METHODS["kinetic"]}
        assert method_spec("kinetic", catalog).key == "kinetic"
        with pytest.raises(ValueError):
            method_spec("ion", catalog)


class TestCategorizeMass:
    """Test suite for mass classification."""

    @pytest.mark.parametrize(
        "mass, expected",
        [
            (999_999.0, "tiny"),
            (1e6, "tiny"),
            (1e9, "small"),
            (5e12, "medium"),
            (1e14, "large"),
            (5e16, "massive"),
            (1e17, "ultra_massive"),
            (1e21, "ultra_massive"),
        ],
    )
    def test_boundaries(self, mass: float, expected: str):
        assert categorize_mass(mass).key == expected

    def test_every_mass_has_exactly_one_category(self):
        """Categories tile the mass axis with half-open ranges."""
        for mass in np.logspace(0, 24, 241):
            category = categorize_mass(float(mass))
            lo, hi = category.mass_range
            if category.key == "tiny":
                assert mass < hi
            elif category.key == "ultra_massive":
                assert mass >= lo
            else:
                assert lo <= mass < hi

    def test_non_finite_masses(self):
        assert categorize_mass(math.inf).key == "ultra_massive"
        assert categorize_mass(math.nan).key == "tiny"
        assert categorize_mass(-5.0).key == "tiny"

    def test_categories_contiguous(self):
        ordered = list(MASS_CATEGORIES.values())
        for lower, upper in zip(ordered, ordered[1:]):
            assert lower.mass_range[1] == upper.mass_range[0]


class TestEstimateCost:
    """Test suite for cost scaling."""

    def test_base_cost_at_unit_scale(self):
        assert estimate_cost("kinetic", 1.0) == pytest.approx(450.0)

    def test_cost_grows_with_scale(self):
        assert estimate_cost("kinetic", 4.0) == pytest.approx(450.0 * 4.0**0.9)
        assert estimate_cost("nuclear", 2.0) > estimate_cost("nuclear", 1.0)
