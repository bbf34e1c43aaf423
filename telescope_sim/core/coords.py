from __future__ import annotations
import math

from .types import AltAz


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------

def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0

def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi

def hours_to_radians(hours: float) -> float:
    return hours * math.pi / 12.0

def radians_to_hours(radians: float) -> float:
    return radians * 12.0 / math.pi

def hours_to_degrees(hours: float) -> float:
    return hours * 15.0

def degrees_to_hours(degrees: float) -> float:
    return degrees / 15.0


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_angle(angle: float) -> float:
    """Wrap degrees into [0, 360)."""
    angle = angle % 360.0
    return 0.0 if angle >= 360.0 else angle

def normalize_hours(hours: float) -> float:
    """Wrap hours into [0, 24)."""
    hours = hours % 24.0
    # -1e-17 % 24 rounds to 24.0
    return 0.0 if hours >= 24.0 else hours

def clamp_dec(dec: float) -> float:
    """Declination saturates at the poles, it never wraps."""
    return clamp(dec, -90.0, 90.0)


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def calculate_alt_az(ra: float, dec: float, lst: float, latitude: float) -> AltAz:
    """
    Equatorial -> horizontal.

    Args:
        ra: Right ascension (hours)
        dec: Declination (degrees)
        lst: Local sidereal time (hours)
        latitude: Site latitude (degrees)

    Returns:
        AltAz in degrees. Azimuth is measured from North through East.
    """
    ha = math.radians(normalize_hours(lst - ra) * 15.0)
    dec_r = math.radians(dec)
    lat = math.radians(latitude)

    sin_alt = math.sin(dec_r) * math.sin(lat) + math.cos(dec_r) * math.cos(lat) * math.cos(ha)
    alt = math.asin(clamp(sin_alt, -1.0, 1.0))

    denom = math.cos(lat) * math.cos(alt)
    if denom == 0.0:
        # Pole or zenith: azimuth is undefined, pick North
        cos_az = 1.0
    else:
        cos_az = (math.sin(dec_r) - math.sin(lat) * math.sin(alt)) / denom
    az = math.degrees(math.acos(clamp(cos_az, -1.0, 1.0)))

    if math.sin(ha) > 0:
        az = 360.0 - az

    return AltAz(altitude=math.degrees(alt), azimuth=az)


def calculate_airmass(altitude: float) -> float:
    """
    Plane-parallel airmass 1/sin(alt).
    Returns 0 at or below the horizon: callers must read 0 as "unobservable".
    """
    if altitude <= 0:
        return 0.0
    return 1.0 / math.sin(math.radians(altitude))


def angular_separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
    """
    Flat-sky separation in degrees, RA scaled by cos(dec1).
    Only valid across a degrees-wide field; not symmetric in its arguments.
    """
    dra = (ra2 - ra1) * 15.0 * math.cos(math.radians(dec1))
    ddec = dec2 - dec1
    return math.sqrt(dra * dra + ddec * ddec)


def sky_offset(ra: float, dec: float, center_ra: float, center_dec: float) -> tuple[float, float]:
    """(dx, dy) in degrees of a point relative to a field centre, dx scaled by cos(center_dec)."""
    cos_dec = math.cos(math.radians(center_dec))
    return (ra - center_ra) * 15.0 * cos_dec, dec - center_dec


def offset_to_sky(dx: float, dy: float, center_ra: float, center_dec: float) -> tuple[float, float]:
    """Inverse of sky_offset: degrees offset -> (ra hours, dec degrees)."""
    cos_dec = math.cos(math.radians(center_dec))
    if cos_dec == 0.0:
        return center_ra, center_dec + dy
    return center_ra + dx / (15.0 * cos_dec), center_dec + dy


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_ra(ra_hours: float) -> str:
    h = math.floor(ra_hours)
    m = math.floor((ra_hours - h) * 60)
    s = ((ra_hours - h) * 60 - m) * 60
    return f"{h:02d}h {m:02d}m {s:.1f}s"

def format_dec(dec_degrees: float) -> str:
    sign = "+" if dec_degrees >= 0 else "-"
    a = abs(dec_degrees)
    d = math.floor(a)
    m = math.floor((a - d) * 60)
    s = ((a - d) * 60 - m) * 60
    return f"{sign}{d:02d}° {m:02d}′ {s:.1f}″"
