"""
Core package — pure math, time and randomness shared by every component.

    coords        — angle conversions, alt/az, separations, airmass
    astro_time    — Julian Day, GMST, Local Sidereal Time
    noise_model   — Poisson / normal variates
    radiometry    — magnitudes, photon fluxes, Planck law
    scheduler     — virtual-time tick source
    time_controller — simulated date/time
"""
from .types import (
    AltAz,
    BackgroundStar,
    CelestialObject,
    FieldConfig,
    ObjectType,
    PointingInfo,
    SlewTarget,
    TelescopeConfig,
)
from .coords import (
    angular_separation,
    calculate_airmass,
    calculate_alt_az,
    clamp_dec,
    normalize_angle,
    normalize_hours,
)
from .astro_time import calculate_lst, date_to_julian_day
from .noise_model import NoiseModel, rng_from_seed
from .scheduler import Scheduler, Ticker
from .time_controller import SimClock

__all__ = [
    "AltAz",
    "BackgroundStar",
    "CelestialObject",
    "FieldConfig",
    "ObjectType",
    "PointingInfo",
    "SlewTarget",
    "TelescopeConfig",
    "angular_separation",
    "calculate_airmass",
    "calculate_alt_az",
    "clamp_dec",
    "normalize_angle",
    "normalize_hours",
    "calculate_lst",
    "date_to_julian_day",
    "NoiseModel",
    "rng_from_seed",
    "Scheduler",
    "Ticker",
    "SimClock",
]
