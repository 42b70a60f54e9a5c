"""Tests for NeoWS record parsing."""
from __future__ import annotations

import copy
from datetime import date, datetime, timezone

import pytest

from neodefense.data.neo import CloseApproach, NeoRecord, parse_neo_feed


# Trimmed NeoWS lookup response for 99942 Apophis
SAMPLE_NEO = {
    "id": "2099942",
    "neo_reference_id": "2099942",
    "name": "99942 Apophis (2004 MN4)",
    "absolute_magnitude_h": 19.09,
    "estimated_diameter": {
        "kilometers": {
            "estimated_diameter_min": 0.3,
            "estimated_diameter_max": 0.44,
        },
        "meters": {
            "estimated_diameter_min": 300.0,
            "estimated_diameter_max": 440.0,
        },
    },
    "is_potentially_hazardous_asteroid": True,
    "close_approach_data": [
        {
            "close_approach_date": "2036-03-27",
            "relative_velocity": {"kilometers_per_second": "4.1", "kilometers_per_hour": "14760"},
            "miss_distance": {"kilometers": "46000000"},
            "orbiting_body": "Earth",
        },
        {
            "close_approach_date": "2029-04-13",
            "close_approach_date_full": "2029-Apr-13 21:46",
            "relative_velocity": {"kilometers_per_second": "7.42", "kilometers_per_hour": "26712"},
            "miss_distance": {"astronomical": "0.000254", "kilometers": "38012"},
            "orbiting_body": "Earth",
        },
        {
            "close_approach_date": "2021-03-06",
            "relative_velocity": {"kilometers_per_second": "3.39"},
            "miss_distance": {"kilometers": "16857000"},
            "orbiting_body": "Earth",
        },
    ],
    "orbital_data": {
        "orbit_id": "220",
        "epoch_osculation": "2461000.5",
        "eccentricity": ".1911952231601588",
        "semi_major_axis": ".9223803567860679",
        "inclination": "3.336603053149075",
        "ascending_node_longitude": "203.8907302434879",
        "perihelion_argument": "126.6726624087432",
        "mean_anomaly": "142.8937058463596",
        "mean_motion": "1.112119542702545",
    },
}


def _neo(neo_id: str, diameter_km: float | None = 0.1) -> dict:
    obj = {"id": neo_id, "name": f"({neo_id})", "is_potentially_hazardous_asteroid": False}
    if diameter_km is not None:
        obj["estimated_diameter"] = {
            "kilometers": {"estimated_diameter_min": diameter_km, "estimated_diameter_max": diameter_km}
        }
    return obj


@pytest.fixture
def apophis() -> NeoRecord:
    return NeoRecord.from_neows(SAMPLE_NEO)


class TestNeoRecord:
    """Test suite for NeoRecord parsing."""

    def test_basic_fields(self, apophis: NeoRecord):
        assert apophis.neo_id == "2099942"
        assert apophis.name == "99942 Apophis (2004 MN4)"
        assert apophis.is_hazardous is True
        assert apophis.diameter_km == pytest.approx(0.37)

    def test_close_approaches_sorted(self, apophis: NeoRecord):
        dates = [a.date for a in apophis.close_approaches]
        assert dates == [date(2021, 3, 6), date(2029, 4, 13), date(2036, 3, 27)]
        flyby = apophis.close_approaches[1]
        assert flyby.relative_velocity_km_s == pytest.approx(7.42)
        assert flyby.miss_distance_km == pytest.approx(38012.0)
        assert flyby.orbiting_body == "Earth"

    def test_next_approach(self, apophis: NeoRecord):
        assert apophis.next_approach(date(2026, 1, 1)).date == date(2029, 4, 13)
        assert apophis.next_approach(datetime(2029, 4, 13, 23, 0, tzinfo=timezone.utc)).date == date(2029, 4, 13)
        assert apophis.next_approach(date(2030, 1, 1)).date == date(2036, 3, 27)

    def test_next_approach_after_all_returns_latest(self, apophis: NeoRecord):
        assert apophis.next_approach(date(2050, 1, 1)).date == date(2036, 3, 27)

    def test_profile_uses_next_approach_velocity(self, apophis: NeoRecord):
        profile = apophis.profile(date(2026, 1, 1))
        assert profile.velocity_km_s == pytest.approx(7.42)
        assert profile.diameter_km == pytest.approx(0.37)
        assert profile.mass_kg == pytest.approx(7.9566e10, rel=1e-3)

    def test_orbital_elements(self, apophis: NeoRecord):
        assert apophis.elements is not None
        assert apophis.elements.semi_major_axis_au == pytest.approx(0.92238, rel=1e-4)
        assert apophis.orbit_class == "Aten (Earth-crossing)"

    def test_without_orbital_data(self):
        record = NeoRecord.from_neows(_neo("1"))
        assert record.elements is None
        assert record.orbit_class is None
        assert record.close_approaches == []
        assert record.next_approach() is None
        assert record.profile().velocity_km_s == 0.0

    def test_missing_diameter_raises(self):
        with pytest.raises(ValueError, match="diameter"):
            NeoRecord.from_neows(_neo("2", diameter_km=None))

    def test_non_numeric_diameter_raises(self):
        data = copy.deepcopy(SAMPLE_NEO)
        data["estimated_diameter"]["kilometers"]["estimated_diameter_min"] = "unknown"
        with pytest.raises(ValueError):
            NeoRecord.from_neows(data)

    def test_bad_close_approach_skipped(self):
        data = copy.deepcopy(SAMPLE_NEO)
        data["close_approach_data"].append({"relative_velocity": {"kilometers_per_second": "5"}})
        data["close_approach_data"].append(
            {"close_approach_date": "2040-01-01", "relative_velocity": {"kilometers_per_second": "fast"}}
        )
        record = NeoRecord.from_neows(data)
        assert len(record.close_approaches) == 4
        assert record.close_approaches[-1] == CloseApproach(date(2040, 1, 1), 0.0, 0.0, "Earth")


class TestParseNeoFeed:
    """Test suite for feed and browse parsing."""

    def test_feed_grouped_by_date(self):
        payload = {
            "element_count": 3,
            "near_earth_objects": {
                "2025-10-02": [_neo("b")],
                "2025-10-01": [SAMPLE_NEO, _neo("a")],
            },
        }
        records = parse_neo_feed(payload)
        assert [r.neo_id for r in records] == ["2099942", "a", "b"]

    def test_browse_list(self):
        records = parse_neo_feed({"near_earth_objects": [_neo("a"), _neo("b")]})
        assert [r.neo_id for r in records] == ["a", "b"]

    def test_skips_objects_without_diameter(self):
        records = parse_neo_feed({"near_earth_objects": [_neo("a"), _neo("bad", None), _neo("c")]})
        assert [r.neo_id for r in records] == ["a", "c"]

    def test_deduplicates_by_id(self):
        payload = {"near_earth_objects": {"2025-10-01": [_neo("a")], "2025-10-02": [_neo("a"), _neo("b")]}}
        assert [r.neo_id for r in parse_neo_feed(payload)] == ["a", "b"]

    def test_empty_payload(self):
        assert parse_neo_feed({}) == []
