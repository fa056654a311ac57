"""Low-precision sub-solar point calculation."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class SunState:
    """Sub-solar point for the rendered instant; inactive when no sun is drawn."""

    active: bool = False
    longitude: float = 0.0
    latitude: float = 0.0


def _as_utc(when: Optional[datetime]) -> datetime:
    if when is None:
        return datetime.now(timezone.utc)
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def equation_of_time_hours(day_of_year: int) -> float:
    """Apparent minus mean solar time, in hours, from two sinusoidal terms."""

    return -0.171 * math.sin(0.0337 * day_of_year + 0.465) - 0.1299 * math.sin(
        0.01787 * day_of_year - 0.168
    )


def solar_declination(day_of_year: int) -> float:
    """Solar declination in degrees from a single sinusoid over the year."""

    return math.degrees(0.4095 * math.sin(0.016906 * (day_of_year - 80.086)))


def subsolar_point(when: Optional[datetime] = None) -> Tuple[float, float]:
    """Return the ``(longitude, latitude)`` directly beneath the sun.

    Naive datetimes are interpreted as UTC. ``None`` means now.
    """

    utc = _as_utc(when)
    day_of_year = utc.timetuple().tm_yday
    seconds = utc.hour * 3600 + utc.minute * 60 + utc.second
    solar_noon = SECONDS_PER_DAY / 2.0 + equation_of_time_hours(day_of_year) * -3600.0
    longitude = (seconds - solar_noon) * (-360.0 / SECONDS_PER_DAY)
    longitude = (longitude + 180.0) % 360.0 - 180.0
    return longitude, solar_declination(day_of_year)


def compute_sun(when: Optional[datetime] = None) -> SunState:
    longitude, latitude = subsolar_point(when)
    return SunState(active=True, longitude=longitude, latitude=latitude)
