"""Near-Earth object records from the NASA NeoWS JSON format.

Only parsing lives here; fetching the JSON is left to the caller. NeoWS
serializes most numbers as strings, so every numeric field is coerced.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Mapping

logger = logging.getLogger(__name__)

from neodefense.core.impact import AsteroidPhysicalProfile
from neodefense.core.orbit import OrbitalElements, classify_orbit


@dataclass(frozen=True)
class CloseApproach:
    """One close approach of a body to Earth.

    Attributes:
        date: Calendar date of closest approach.
        relative_velocity_km_s: Velocity relative to Earth in km/s.
        miss_distance_km: Geocentric miss distance in km.
        orbiting_body: Body being approached.
    """

    date: date
    relative_velocity_km_s: float
    miss_distance_km: float
    orbiting_body: str = "Earth"


@dataclass
class NeoRecord:
    """A near-Earth object as reported by NeoWS.

    Attributes:
        neo_id: NeoWS identifier.
        name: Designation and name.
        is_hazardous: Potentially hazardous asteroid flag.
        diameter_min_km: Lower diameter estimate in km.
        diameter_max_km: Upper diameter estimate in km.
        close_approaches: Close approaches, sorted by date.
        elements: Orbital elements, when orbital data was included.
    """

    neo_id: str
    name: str
    is_hazardous: bool
    diameter_min_km: float
    diameter_max_km: float
    close_approaches: list[CloseApproach] = field(default_factory=list)
    elements: OrbitalElements | None = None

    @classmethod
    def from_neows(cls, data: Mapping[str, Any]) -> NeoRecord:
        """Parse a NeoWS near-Earth object.

        Args:
            data: One object from a NeoWS feed, lookup or browse response.

        Returns:
            A parsed NeoRecord.

        Raises:
            ValueError: If the object has no usable diameter estimate.
        """
        try:
            estimate = data["estimated_diameter"]["kilometers"]
            diameter_min = float(estimate["estimated_diameter_min"])
            diameter_max = float(estimate["estimated_diameter_max"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Missing or invalid diameter estimate in NEO %s: %s", data.get("id", "?"), e)
            raise ValueError(f"Missing or invalid diameter estimate: {e}")

        approaches = []
        for entry in data.get("close_approach_data") or []:
            approach = _parse_approach(entry)
            if approach is not None:
                approaches.append(approach)
        approaches.sort(key=lambda a: a.date)

        orbital_data = data.get("orbital_data")
        elements = OrbitalElements.from_mapping(orbital_data) if orbital_data else None

        return cls(
            neo_id=str(data.get("id", "")),
            name=str(data.get("name", "")).strip(),
            is_hazardous=bool(data.get("is_potentially_hazardous_asteroid", False)),
            diameter_min_km=diameter_min,
            diameter_max_km=diameter_max,
            close_approaches=approaches,
            elements=elements,
        )

    @property
    def diameter_km(self) -> float:
        """Mean of the diameter estimates."""
        return (self.diameter_min_km + self.diameter_max_km) / 2.0

    def next_approach(self, now: datetime | date | None = None) -> CloseApproach | None:
        """Earliest approach on or after ``now``, else the most recent past one."""
        if not self.close_approaches:
            return None
        if now is None:
            now = datetime.now(timezone.utc)
        today = now.date() if isinstance(now, datetime) else now

        for approach in self.close_approaches:
            if approach.date >= today:
                return approach
        return self.close_approaches[-1]

    def profile(self, now: datetime | date | None = None) -> AsteroidPhysicalProfile:
        """Physical profile using the velocity of the next close approach."""
        approach = self.next_approach(now)
        velocity = approach.relative_velocity_km_s if approach is not None else 0.0
        return AsteroidPhysicalProfile.from_estimates(self.diameter_min_km, self.diameter_max_km, velocity)

    @property
    def orbit_class(self) -> str | None:
        """Orbit family, when orbital elements are known."""
        if self.elements is None:
            return None
        return classify_orbit(self.elements.semi_major_axis_au)


def parse_neo_feed(payload: Mapping[str, Any]) -> list[NeoRecord]:
    """Parse every object in a NeoWS feed or browse response.

    Feed responses group objects by date; browse responses list them
    directly. Objects without a usable diameter estimate are skipped.

    Args:
        payload: Decoded NeoWS JSON.

    Returns:
        List of NeoRecord objects, de-duplicated by id.
    """
    groups = payload.get("near_earth_objects", [])
    if isinstance(groups, Mapping):
        objects = [obj for day in sorted(groups) for obj in groups[day]]
    else:
        objects = list(groups)

    records: list[NeoRecord] = []
    seen: set[str] = set()
    for obj in objects:
        try:
            record = NeoRecord.from_neows(obj)
        except ValueError:
            logger.warning("Skipping NEO %s without diameter estimate", obj.get("id", "?"))
            continue
        if record.neo_id and record.neo_id in seen:
            continue
        seen.add(record.neo_id)
        records.append(record)

    logger.debug("Parsed %d NEO records from %d objects", len(records), len(objects))
    return records


def _parse_approach(entry: Mapping[str, Any]) -> CloseApproach | None:
    """Parse one close-approach entry, or None if it is unusable."""
    try:
        approach_date = date.fromisoformat(str(entry["close_approach_date"])[:10])
    except (KeyError, TypeError, ValueError):
        logger.debug("Skipping close approach without a valid date: %s", entry)
        return None

    velocity = _nested_float(entry, "relative_velocity", "kilometers_per_second")
    miss = _nested_float(entry, "miss_distance", "kilometers")
    return CloseApproach(
        date=approach_date,
        relative_velocity_km_s=velocity,
        miss_distance_km=miss,
        orbiting_body=str(entry.get("orbiting_body", "Earth")),
    )


def _nested_float(entry: Mapping[str, Any], outer: str, inner: str) -> float:
    try:
        value = float(entry[outer][inner])
    except (KeyError, TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0
