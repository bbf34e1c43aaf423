"""Tests for angle conversions, normalization and coordinate transforms."""

import math

import pytest

from telescope_sim.core.coords import (
    angular_separation,
    calculate_airmass,
    calculate_alt_az,
    clamp_dec,
    degrees_to_hours,
    degrees_to_radians,
    format_dec,
    format_ra,
    hours_to_degrees,
    hours_to_radians,
    normalize_angle,
    normalize_hours,
    offset_to_sky,
    radians_to_degrees,
    radians_to_hours,
    sky_offset,
)


class TestConversions:
    """Linear unit scalings."""

    def test_degrees_radians(self):
        assert degrees_to_radians(180.0) == pytest.approx(math.pi)
        assert radians_to_degrees(math.pi / 2) == pytest.approx(90.0)

    def test_hours_radians(self):
        assert hours_to_radians(12.0) == pytest.approx(math.pi)
        assert radians_to_hours(math.pi / 2) == pytest.approx(6.0)

    def test_hours_degrees(self):
        assert hours_to_degrees(1.5) == pytest.approx(22.5)
        assert degrees_to_hours(90.0) == pytest.approx(6.0)


class TestNormalization:
    """Range invariants of normalize/clamp helpers."""

    @pytest.mark.parametrize("hours", [-1e-17, -0.5, 0.0, 12.0, 23.9999, 24.0, 36.5, -48.25, 1e6])
    def test_normalize_hours_range(self, hours):
        h = normalize_hours(hours)
        assert 0.0 <= h < 24.0

    def test_normalize_hours_values(self):
        assert normalize_hours(25.0) == pytest.approx(1.0)
        assert normalize_hours(-1.0) == pytest.approx(23.0)

    @pytest.mark.parametrize("angle", [-1e-15, -90.0, 0.0, 359.999, 360.0, 725.0])
    def test_normalize_angle_range(self, angle):
        a = normalize_angle(angle)
        assert 0.0 <= a < 360.0

    @pytest.mark.parametrize("dec,expected", [(-120.0, -90.0), (-90.0, -90.0), (12.5, 12.5),
                                              (90.0, 90.0), (91.0, 90.0)])
    def test_clamp_dec(self, dec, expected):
        assert clamp_dec(dec) == expected


class TestAltAz:
    """Equatorial to horizontal transform."""

    def test_meridian_near_zenith(self):
        """Latitude 40°, Dec 30° on the meridian sits at altitude 80°."""
        altaz = calculate_alt_az(ra=12.0, dec=30.0, lst=12.0, latitude=40.0)
        assert altaz.altitude == pytest.approx(80.0, abs=1e-9)
        assert min(abs(altaz.azimuth - 180.0), abs(altaz.azimuth % 360.0)) < 1e-3

    def test_north_of_zenith_on_meridian(self):
        altaz = calculate_alt_az(ra=0.0, dec=60.0, lst=0.0, latitude=40.0)
        assert altaz.altitude == pytest.approx(70.0, abs=1e-9)
        assert min(altaz.azimuth, 360.0 - altaz.azimuth) == pytest.approx(0.0, abs=1e-3)

    def test_west_after_transit(self):
        """Positive hour angle puts the object in the west (az > 180)."""
        altaz = calculate_alt_az(ra=10.0, dec=0.0, lst=13.0, latitude=40.0)
        assert 180.0 < altaz.azimuth < 360.0

    def test_east_before_transit(self):
        altaz = calculate_alt_az(ra=16.0, dec=0.0, lst=13.0, latitude=40.0)
        assert 0.0 < altaz.azimuth < 180.0

    def test_pole_does_not_divide_by_zero(self):
        altaz = calculate_alt_az(ra=3.0, dec=10.0, lst=5.0, latitude=90.0)
        assert altaz.altitude == pytest.approx(10.0)
        assert 0.0 <= altaz.azimuth <= 360.0

    def test_below_horizon(self):
        altaz = calculate_alt_az(ra=0.0, dec=-60.0, lst=0.0, latitude=40.0)
        assert altaz.altitude < 0.0


class TestAirmass:
    """1/sin(alt) above the horizon, 0 otherwise."""

    @pytest.mark.parametrize("alt", [0.5, 10.0, 30.0, 45.0, 89.0, 90.0])
    def test_above_horizon(self, alt):
        assert calculate_airmass(alt) == pytest.approx(1.0 / math.sin(math.radians(alt)))

    def test_thirty_degrees(self):
        assert calculate_airmass(30.0) == pytest.approx(2.0)

    @pytest.mark.parametrize("alt", [0.0, -0.1, -45.0, -90.0])
    def test_at_or_below_horizon(self, alt):
        assert calculate_airmass(alt) == 0.0


class TestAngularSeparation:
    """Flat-sky separation with cos(dec1) scaling."""

    def test_formula(self):
        ra1, dec1, ra2, dec2 = 10.0, 40.0, 10.1, 41.0
        expected = math.sqrt(((ra2 - ra1) * 15.0 * math.cos(math.radians(dec1))) ** 2
                             + (dec2 - dec1) ** 2)
        assert angular_separation(ra1, dec1, ra2, dec2) == pytest.approx(expected)

    def test_not_symmetric(self):
        forward = angular_separation(10.0, 0.0, 10.1, 60.0)
        backward = angular_separation(10.1, 60.0, 10.0, 0.0)
        assert forward != pytest.approx(backward)

    def test_zero_for_same_point(self):
        assert angular_separation(5.0, -20.0, 5.0, -20.0) == 0.0


class TestOffsets:
    """View offsets used by the finder and the instrument views."""

    def test_offset_round_trip(self):
        dx, dy = sky_offset(12.02, 30.1, 12.0, 30.0)
        ra, dec = offset_to_sky(dx, dy, 12.0, 30.0)
        assert ra == pytest.approx(12.02)
        assert dec == pytest.approx(30.1)

    def test_offset_scaled_by_center_dec(self):
        dx, dy = sky_offset(1.0 + 1.0 / 15.0, 60.0, 1.0, 60.0)
        assert dx == pytest.approx(0.5)
        assert dy == 0.0


class TestFormatting:
    def test_format_ra(self):
        assert format_ra(12.5) == "12h 30m 0.0s"

    def test_format_dec_negative(self):
        assert format_dec(-30.5) == "-30° 30′ 0.0″"

    def test_format_dec_positive(self):
        assert format_dec(7.25).startswith("+07° 15′")
