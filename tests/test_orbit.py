"""Tests for Keplerian propagation and orbit classification."""
from __future__ import annotations

import math
from datetime import datetime, timezone

import numpy as np
import pytest

from neodefense.core.orbit import (
    OrbitalElements,
    classify_orbit,
    julian_date,
    position,
    solve_kepler,
)


# NeoWS orbital_data block for 99942 Apophis (values are strings on the wire)
APOPHIS_ORBITAL_DATA = {
    "orbit_id": "220",
    "epoch_osculation": "2461000.5",
    "eccentricity": ".1911952231601588",
    "semi_major_axis": ".9223803567860679",
    "inclination": "3.336603053149075",
    "ascending_node_longitude": "203.8907302434879",
    "perihelion_argument": "126.6726624087432",
    "mean_anomaly": "142.8937058463596",
    "mean_motion": "1.112119542702545",
}


@pytest.fixture
def apophis() -> OrbitalElements:
    return OrbitalElements.from_mapping(APOPHIS_ORBITAL_DATA)


class TestKeplerSolver:
    """Test suite for the Newton-Raphson Kepler solver."""

    def test_circular_orbit_shortcut(self):
        """e=0 returns E=M exactly without iterating."""
        for M in (0.0, 0.5, 1.234, math.pi, 6.0):
            solution = solve_kepler(M, 0.0)
            assert solution.eccentric_anomaly == M
            assert solution.converged
            assert solution.iterations == 0

    def test_converges_for_moderate_eccentricities(self):
        """Random (M, e) with e in [0, 0.9] converge within 10 iterations."""
        rng = np.random.default_rng(42)
        for M, e in zip(rng.uniform(0, 2 * math.pi, 200), rng.uniform(0, 0.9, 200)):
            solution = solve_kepler(float(M), float(e))
            E = solution.eccentric_anomaly
            assert solution.converged, f"Not converged for M={M}, e={e}"
            assert solution.iterations <= 10
            assert abs(E - e * math.sin(E) - M) < 1e-6

    def test_high_eccentricity_near_perihelion(self):
        """e=0.9 with tiny mean anomaly still converges."""
        solution = solve_kepler(1e-3, 0.9)
        assert solution.converged
        E = solution.eccentric_anomaly
        assert abs(E - 0.9 * math.sin(E) - 1e-3) < 1e-6


class TestPosition:
    """Test suite for heliocentric position."""

    def test_circular_orbit_radius_equals_semi_major_axis(self):
        """Circular orbit gives r = a at any epoch."""
        elements = OrbitalElements(semi_major_axis_au=2.0, mean_anomaly_deg=37.0)
        pos = position(elements, elements.epoch_jd + 123.4)
        assert pos.distance_au == pytest.approx(2.0)
        assert np.linalg.norm(pos.vector) == pytest.approx(2.0)

    def test_quarter_orbit_in_ecliptic(self):
        """Mean anomaly of 90 deg on an unrotated circle lies on the +y axis."""
        elements = OrbitalElements(mean_anomaly_deg=90.0)
        pos = position(elements)
        np.testing.assert_array_almost_equal(pos.vector, [0.0, 1.0, 0.0])

    def test_inclination_rotates_out_of_plane(self):
        """A 90 deg inclination moves the +y point onto the +z axis."""
        elements = OrbitalElements(mean_anomaly_deg=90.0, inclination_deg=90.0)
        pos = position(elements)
        np.testing.assert_array_almost_equal(pos.vector, [0.0, 0.0, 1.0])

    def test_mean_motion_advances_anomaly(self):
        """After a quarter period the body has moved 90 deg around a circle."""
        elements = OrbitalElements(mean_motion_deg_day=1.0)
        pos = position(elements, elements.epoch_jd + 90.0)
        np.testing.assert_array_almost_equal(pos.vector, [0.0, 1.0, 0.0])

    def test_apophis_distance_between_perihelion_and_aphelion(self, apophis: OrbitalElements):
        """Apophis stays between a(1-e) and a(1+e)."""
        a, e = apophis.semi_major_axis_au, apophis.eccentricity
        for offset in (0.0, 50.0, 200.0, 400.0):
            pos = position(apophis, apophis.epoch_jd + offset)
            assert a * (1 - e) - 1e-9 <= pos.distance_au <= a * (1 + e) + 1e-9
            assert np.linalg.norm(pos.vector) == pytest.approx(pos.distance_au)

    def test_datetime_epoch(self, apophis: OrbitalElements):
        """A datetime epoch gives the same result as its Julian date."""
        t = datetime(2029, 4, 13, 21, 46, tzinfo=timezone.utc)
        by_datetime = position(apophis, t)
        by_jd = position(apophis, julian_date(t))
        assert by_datetime.x == pytest.approx(by_jd.x)
        assert by_datetime.y == pytest.approx(by_jd.y)
        assert by_datetime.z == pytest.approx(by_jd.z)

    def test_missing_elements_render_default_orbit(self):
        """None elements fall back to a unit circular orbit."""
        pos = position(None)
        assert pos.distance_au == pytest.approx(1.0)
        assert pos.converged

    def test_nan_elements_render_default_values(self):
        """NaN angles, mean motion and epoch fall back to benign defaults."""
        nan = float("nan")
        elements = OrbitalElements(
            mean_anomaly_deg=nan,
            mean_motion_deg_day=nan,
            inclination_deg=nan,
            ascending_node_deg=nan,
            perihelion_arg_deg=nan,
            epoch_jd=nan,
        )
        pos = position(elements, 2461000.5)
        assert pos.converged
        assert pos.distance_au == pytest.approx(1.0)
        np.testing.assert_array_almost_equal(pos.vector, [1.0, 0.0, 0.0])

    def test_nan_eccentricity_and_axis(self):
        elements = OrbitalElements(semi_major_axis_au=float("nan"), eccentricity=float("nan"), mean_anomaly_deg=90.0)
        pos = position(elements)
        np.testing.assert_array_almost_equal(pos.vector, [0.0, 1.0, 0.0])

    def test_non_numeric_epoch_uses_element_epoch(self, apophis: OrbitalElements):
        """A garbage epoch is treated as the osculation epoch."""
        assert position(apophis, "soon").x == pytest.approx(position(apophis).x)


class TestOrbitalElements:
    """Test suite for building elements from loose data."""

    def test_parses_neows_strings(self, apophis: OrbitalElements):
        """String fields are converted to floats."""
        assert apophis.semi_major_axis_au == pytest.approx(0.92238, rel=1e-4)
        assert apophis.eccentricity == pytest.approx(0.19120, rel=1e-4)
        assert apophis.epoch_jd == 2461000.5
        assert apophis.period_days == pytest.approx(360.0 / 1.112119542702545)

    def test_missing_fields_use_defaults(self):
        """An empty mapping gives a circular unit orbit."""
        elements = OrbitalElements.from_mapping({})
        assert elements == OrbitalElements()
        assert OrbitalElements.from_mapping(None) == OrbitalElements()

    def test_garbage_fields_use_defaults(self):
        """Non-numeric and non-finite fields are replaced."""
        elements = OrbitalElements.from_mapping(
            {"semi_major_axis": "n/a", "eccentricity": "abc", "inclination": float("nan"), "mean_motion": None}
        )
        assert elements.semi_major_axis_au == 1.0
        assert elements.eccentricity == 0.0
        assert elements.inclination_deg == 0.0
        assert elements.mean_motion_deg_day == 0.01

    def test_unbound_eccentricity_is_clamped(self):
        """Hyperbolic eccentricities are clamped to stay elliptical."""
        assert OrbitalElements.from_mapping({"eccentricity": "1.5"}).eccentricity == 0.99
        assert OrbitalElements.from_mapping({"eccentricity": "-0.2"}).eccentricity == 0.0

    def test_julian_date_j2000(self):
        """J2000.0 is JD 2451545.0."""
        assert julian_date(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == pytest.approx(2451545.0)


class TestClassifyOrbit:
    """Test suite for orbit family classification."""

    @pytest.mark.parametrize(
        "a, expected",
        [
            (0.92, "Aten (Earth-crossing)"),
            (1.3, "Apollo (Earth-crossing)"),
            (1.5, "Apollo (Earth-crossing)"),
            (2.0, "Amor (Mars-crossing)"),
            (4.2, "Main Belt"),
        ],
    )
    def test_families(self, a: float, expected: str):
        assert classify_orbit(a) == expected
