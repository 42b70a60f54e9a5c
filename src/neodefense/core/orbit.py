"""Two-body Keplerian propagation of asteroid orbits.

Positions are heliocentric ecliptic coordinates in AU. The model ignores
planetary perturbations; it is meant to place bodies plausibly in a scene,
not to predict close approaches.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

import numpy as np

logger = logging.getLogger(__name__)
from numpy.typing import NDArray
from scipy.optimize import newton
from sgp4.api import jday

from neodefense.utils.constants import (
    DEFAULT_EPOCH_JD,
    DEFAULT_MEAN_MOTION_DEG_DAY,
    DEFAULT_SEMI_MAJOR_AXIS_AU,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
    MAX_ECCENTRICITY,
)

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class OrbitalElements:
    """Osculating Keplerian elements of a heliocentric orbit.

    Attributes:
        semi_major_axis_au: Semi-major axis in AU.
        eccentricity: Eccentricity in [0, 1).
        inclination_deg: Inclination to the ecliptic in degrees.
        ascending_node_deg: Longitude of the ascending node in degrees.
        perihelion_arg_deg: Argument of perihelion in degrees.
        mean_anomaly_deg: Mean anomaly at epoch in degrees.
        mean_motion_deg_day: Mean motion in degrees per day.
        epoch_jd: Osculation epoch as a Julian date.
    """

    semi_major_axis_au: float = DEFAULT_SEMI_MAJOR_AXIS_AU
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    ascending_node_deg: float = 0.0
    perihelion_arg_deg: float = 0.0
    mean_anomaly_deg: float = 0.0
    mean_motion_deg_day: float = DEFAULT_MEAN_MOTION_DEG_DAY
    epoch_jd: float = DEFAULT_EPOCH_JD

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> OrbitalElements:
        """Build elements from a NeoWS-style ``orbital_data`` mapping.

        NeoWS serializes every element as a string. Missing, empty or
        non-numeric fields fall back to a circular, unit-AU, zero-inclination
        orbit so the body can always be drawn.

        Args:
            data: Mapping with keys such as ``semi_major_axis``, ``eccentricity``,
                ``inclination``, ``ascending_node_longitude``, ``perihelion_argument``,
                ``mean_anomaly``, ``mean_motion`` and ``epoch_osculation``.

        Returns:
            A populated OrbitalElements.
        """
        data = data or {}
        a = _coerce(data.get("semi_major_axis"), DEFAULT_SEMI_MAJOR_AXIS_AU)
        if a <= 0:
            logger.warning("Non-positive semi-major axis %.4f, using %.1f AU", a, DEFAULT_SEMI_MAJOR_AXIS_AU)
            a = DEFAULT_SEMI_MAJOR_AXIS_AU

        return cls(
            semi_major_axis_au=a,
            eccentricity=_clamp_eccentricity(_coerce(data.get("eccentricity"), 0.0)),
            inclination_deg=_coerce(data.get("inclination"), 0.0),
            ascending_node_deg=_coerce(data.get("ascending_node_longitude"), 0.0),
            perihelion_arg_deg=_coerce(data.get("perihelion_argument"), 0.0),
            mean_anomaly_deg=_coerce(data.get("mean_anomaly"), 0.0),
            mean_motion_deg_day=_coerce(data.get("mean_motion"), DEFAULT_MEAN_MOTION_DEG_DAY),
            epoch_jd=_coerce(data.get("epoch_osculation"), DEFAULT_EPOCH_JD),
        )

    @property
    def period_days(self) -> float:
        """Orbital period in days derived from the mean motion."""
        if self.mean_motion_deg_day <= 0:
            return math.inf
        return 360.0 / self.mean_motion_deg_day


@dataclass
class KeplerSolution:
    """Eccentric anomaly and solver diagnostics.

    Attributes:
        eccentric_anomaly: Eccentric anomaly in radians.
        converged: Whether the last Newton step was below tolerance.
        iterations: Number of Newton iterations performed.
    """

    eccentric_anomaly: float
    converged: bool
    iterations: int


@dataclass
class HeliocentricPosition:
    """Heliocentric ecliptic position of a body.

    Attributes:
        x: X coordinate in AU.
        y: Y coordinate in AU.
        z: Z coordinate in AU.
        distance_au: Distance from the Sun in AU.
        true_anomaly_deg: True anomaly at the requested epoch in degrees.
        converged: Kepler solver convergence flag.
    """

    x: float
    y: float
    z: float
    distance_au: float
    true_anomaly_deg: float
    converged: bool = True

    @property
    def vector(self) -> NDArray[np.float64]:
        """Position as a numpy array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)


def julian_date(t: datetime) -> float:
    """Convert a datetime to a Julian date (naive datetimes are taken as UTC)."""
    if t.tzinfo is not None:
        t = t.astimezone(timezone.utc)
    jd, fr = jday(t.year, t.month, t.day, t.hour, t.minute, t.second + t.microsecond / 1e6)
    return jd + fr


def solve_kepler(mean_anomaly: float, eccentricity: float) -> KeplerSolution:
    """Solve Kepler's equation E - e sin E = M by Newton-Raphson.

    At most ``KEPLER_MAX_ITERATIONS`` steps are taken. A solver that runs out
    of iterations returns its last iterate with ``converged=False`` rather
    than raising.

    Args:
        mean_anomaly: Mean anomaly in radians.
        eccentricity: Orbit eccentricity.

    Returns:
        KeplerSolution with the eccentric anomaly in radians.
    """
    if eccentricity == 0.0:
        return KeplerSolution(eccentric_anomaly=mean_anomaly, converged=True, iterations=0)

    def kepler(E: float) -> float:
        return E - eccentricity * math.sin(E) - mean_anomaly

    def kepler_prime(E: float) -> float:
        return 1.0 - eccentricity * math.cos(E)

    # Starting at pi keeps highly eccentric orbits from overshooting near perihelion
    if eccentricity < 0.8:
        E0 = mean_anomaly + eccentricity * math.sin(mean_anomaly)
    else:
        E0 = math.pi

    root, info = newton(
        kepler,
        E0,
        fprime=kepler_prime,
        tol=KEPLER_TOLERANCE,
        maxiter=KEPLER_MAX_ITERATIONS,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        logger.warning("Kepler solver stopped after %d iterations (M=%.6f, e=%.4f)", info.iterations, mean_anomaly, eccentricity)

    return KeplerSolution(eccentric_anomaly=float(root), converged=bool(info.converged), iterations=int(info.iterations))


def position(elements: OrbitalElements | None, epoch: float | datetime | None = None) -> HeliocentricPosition:
    """Compute the heliocentric ecliptic position of a body at an epoch.

    Args:
        elements: Orbital elements. ``None`` is treated as a default circular orbit.
        epoch: Julian date or datetime to evaluate at. Defaults to the
            elements' own epoch.

    Returns:
        HeliocentricPosition in AU.
    """
    if elements is None:
        elements = OrbitalElements()

    epoch_jd = _coerce(elements.epoch_jd, DEFAULT_EPOCH_JD)
    if isinstance(epoch, datetime):
        jd = julian_date(epoch)
    else:
        jd = _coerce(epoch, epoch_jd)

    e = _clamp_eccentricity(_coerce(elements.eccentricity, 0.0))
    a = _coerce(elements.semi_major_axis_au, DEFAULT_SEMI_MAJOR_AXIS_AU)
    if a <= 0:
        a = DEFAULT_SEMI_MAJOR_AXIS_AU
    mean_anomaly = _coerce(elements.mean_anomaly_deg, 0.0)
    mean_motion = _coerce(elements.mean_motion_deg_day, DEFAULT_MEAN_MOTION_DEG_DAY)

    dt_days = jd - epoch_jd
    M = math.radians(mean_anomaly + mean_motion * dt_days) % TWO_PI

    solution = solve_kepler(M, e)
    E = solution.eccentric_anomaly

    nu = math.atan2(math.sqrt(1.0 - e * e) * math.sin(E), math.cos(E) - e)
    r = a * (1.0 - e * math.cos(E))

    orbital_plane = np.array([r * math.cos(nu), r * math.sin(nu), 0.0], dtype=np.float64)
    rotation = _perifocal_to_ecliptic(
        math.radians(_coerce(elements.ascending_node_deg, 0.0)),
        math.radians(_coerce(elements.inclination_deg, 0.0)),
        math.radians(_coerce(elements.perihelion_arg_deg, 0.0)),
    )
    x, y, z = rotation @ orbital_plane

    logger.debug("Position at JD %.2f: r=%.4f AU, nu=%.2f deg", jd, r, math.degrees(nu))
    return HeliocentricPosition(
        x=float(x),
        y=float(y),
        z=float(z),
        distance_au=float(r),
        true_anomaly_deg=math.degrees(nu) % 360.0,
        converged=solution.converged,
    )


def classify_orbit(semi_major_axis_au: float) -> str:
    """Classify an orbit into a near-Earth asteroid family by semi-major axis."""
    if semi_major_axis_au < 1.3:
        return "Aten (Earth-crossing)"
    elif semi_major_axis_au < 1.665:
        return "Apollo (Earth-crossing)"
    elif semi_major_axis_au < 4.2:
        return "Amor (Mars-crossing)"
    else:
        return "Main Belt"


def _perifocal_to_ecliptic(raan: float, inc: float, argp: float) -> NDArray[np.float64]:
    """3-1-3 rotation matrix Rz(raan) @ Rx(inc) @ Rz(argp)."""
    cO, sO = math.cos(raan), math.sin(raan)
    ci, si = math.cos(inc), math.sin(inc)
    cw, sw = math.cos(argp), math.sin(argp)

    rz_node = np.array([[cO, -sO, 0.0], [sO, cO, 0.0], [0.0, 0.0, 1.0]])
    rx_inc = np.array([[1.0, 0.0, 0.0], [0.0, ci, -si], [0.0, si, ci]])
    rz_peri = np.array([[cw, -sw, 0.0], [sw, cw, 0.0], [0.0, 0.0, 1.0]])
    return rz_node @ rx_inc @ rz_peri


def _clamp_eccentricity(e: float) -> float:
    """Keep eccentricity inside [0, MAX_ECCENTRICITY]."""
    if not math.isfinite(e) or e < 0:
        logger.warning("Invalid eccentricity %s, using circular orbit", e)
        return 0.0
    if e > MAX_ECCENTRICITY:
        logger.warning("Eccentricity %.4f is not elliptical, clamping to %.2f", e, MAX_ECCENTRICITY)
        return MAX_ECCENTRICITY
    return e


def _coerce(value: Any, default: float) -> float:
    """Convert a loosely typed value to a finite float, or return the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result
