"""Tests for Julian Day and Local Sidereal Time."""

from datetime import datetime, timedelta, timezone

import pytest

from telescope_sim.core.astro_time import calculate_lst, date_to_julian_day, gmst_deg, utc_hours
from telescope_sim.core.coords import normalize_angle
from telescope_sim.core.time_controller import SimClock


class TestJulianDay:
    def test_j2000(self):
        dt = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert date_to_julian_day(dt) == pytest.approx(2451545.0)

    def test_unix_epoch(self):
        dt = datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert date_to_julian_day(dt) == pytest.approx(2440587.5)

    def test_naive_is_utc(self):
        naive = datetime(2024, 6, 1, 22, 30)
        aware = naive.replace(tzinfo=timezone.utc)
        assert date_to_julian_day(naive) == date_to_julian_day(aware)

    def test_other_timezone(self):
        cet = timezone(timedelta(hours=1))
        dt = datetime(2024, 6, 1, 23, 30, tzinfo=cet)
        assert date_to_julian_day(dt) == pytest.approx(
            date_to_julian_day(datetime(2024, 6, 1, 22, 30, tzinfo=timezone.utc)))


class TestLocalSiderealTime:
    """LST = (GMST polynomial + 15·UTC hours + longitude) mod 360 / 15."""

    def test_range(self):
        start = datetime(1999, 12, 31, tzinfo=timezone.utc)
        for day in range(0, 9000, 397):
            for hour in (0, 7, 13, 23):
                dt = start + timedelta(days=day, hours=hour, minutes=17)
                for lon in (-180.0, -75.3, 0.0, 10.33, 179.99):
                    lst = calculate_lst(dt, lon)
                    assert 0.0 <= lst < 24.0

    def test_matches_formula(self):
        dt = datetime(2024, 3, 20, 3, 0, 0, tzinfo=timezone.utc)
        lon = -70.7972
        expected = normalize_angle(gmst_deg(date_to_julian_day(dt)) + 15.0 * utc_hours(dt) + lon) / 15.0
        assert calculate_lst(dt, lon) == pytest.approx(expected)

    def test_longitude_shift(self):
        dt = datetime(2024, 3, 20, 3, 0, 0, tzinfo=timezone.utc)
        a = calculate_lst(dt, 0.0)
        b = calculate_lst(dt, 15.0)
        assert (b - a) % 24.0 == pytest.approx(1.0)

    def test_utc_hours(self):
        assert utc_hours(datetime(2024, 1, 1, 6, 30, 36, tzinfo=timezone.utc)) == pytest.approx(6.51)


class TestSimClock:
    def test_tick_advances_one_second(self):
        clock = SimClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
        clock.tick()
        clock.tick()
        assert clock.utc == datetime(2024, 1, 1, 0, 0, 2, tzinfo=timezone.utc)

    def test_set_utc_accepts_naive(self):
        clock = SimClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
        clock.set_utc(datetime(2025, 5, 5, 5, 5, 5))
        assert clock.utc.tzinfo is not None
        assert clock.time_label() == "05:05:05"
        assert clock.date_label() == "2025-05-05"

    def test_realtime(self):
        clock = SimClock(datetime(2000, 1, 1, tzinfo=timezone.utc))
        clock.realtime()
        assert abs((datetime.now(timezone.utc) - clock.utc).total_seconds()) < 5.0

    def test_lst_in_range(self):
        clock = SimClock(datetime(2024, 3, 20, tzinfo=timezone.utc))
        assert 0.0 <= clock.lst(-75.0) < 24.0
