from __future__ import annotations
from datetime import datetime, timezone

from .coords import normalize_angle

# Lightweight time utilities (no external deps).
# Everything is UTC internally; naive datetimes are taken as UTC.

J2000_JD = 2451545.0
UNIX_EPOCH_JD = 2440587.5


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def date_to_julian_day(dt: datetime) -> float:
    """Julian Day of an instant, counted from the Unix epoch."""
    return _as_utc(dt).timestamp() / 86400.0 + UNIX_EPOCH_JD


def gmst_deg(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees, not normalized.
    Low-precision IAU polynomial.
    """
    T = (jd - J2000_JD) / 36525.0
    return (280.46061837
            + 360.98564736629 * (jd - J2000_JD)
            + 0.000387933 * T * T
            - T * T * T / 38710000.0)


def utc_hours(dt: datetime) -> float:
    """Fractional UTC hours since midnight."""
    dt = _as_utc(dt)
    return dt.hour + dt.minute / 60.0 + dt.second / 3600.0


def calculate_lst(dt: datetime, longitude: float) -> float:
    """
    Local Sidereal Time in hours [0, 24).

    The polynomial is evaluated at the full JD and the UTC hours since
    midnight are then added on top of it.
    """
    gmst = gmst_deg(date_to_julian_day(dt)) + 15.0 * utc_hours(dt)
    lst = normalize_angle(gmst + longitude) / 15.0
    return 0.0 if lst >= 24.0 else lst
