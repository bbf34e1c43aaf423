"""
SimClock — simulated date/time shown on the control panel.

The clock ticker advances the simulated UTC instant by one second per
tick. The user may jump to an arbitrary date/time or back to "now".

    clock.tick()          — one clock tick (+1 s)
    clock.set_utc(dt)     — jump to a chosen instant
    clock.realtime()      — resynchronise with the system clock
    clock.lst(lon_deg)    — Local Sidereal Time in hours
"""

from __future__ import annotations
from datetime import datetime, timezone, timedelta
from typing import Optional

from .astro_time import calculate_lst, date_to_julian_day


class SimClock:
    """
    Parameters
    ----------
    start_utc : instant to start from (default: now)
    """

    def __init__(self, start_utc: Optional[datetime] = None):
        self._utc = _to_utc(start_utc) if start_utc is not None else datetime.now(timezone.utc)

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def utc(self) -> datetime:
        return self._utc

    @property
    def jd(self) -> float:
        return date_to_julian_day(self._utc)

    # ── Controls ─────────────────────────────────────────────────────────────

    def tick(self, seconds: float = 1.0) -> datetime:
        self._utc += timedelta(seconds=seconds)
        return self._utc

    def set_utc(self, dt: datetime):
        self._utc = _to_utc(dt)

    def realtime(self):
        self._utc = datetime.now(timezone.utc)

    # ── Astronomy ────────────────────────────────────────────────────────────

    def lst(self, lon_deg: float) -> float:
        """Local Sidereal Time in hours [0, 24)."""
        return calculate_lst(self._utc, lon_deg)

    def date_label(self) -> str:
        return self._utc.strftime("%Y-%m-%d")

    def time_label(self) -> str:
        return self._utc.strftime("%H:%M:%S")


def _to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
