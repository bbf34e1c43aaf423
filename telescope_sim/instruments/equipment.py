"""
Equipment Database - Telescopes, Filters, Photometer and Mount settings

Static tables used by the simulator:
- Telescopes (aperture + observing site)
- Photometric filters (zero point, extinction, sky brightness)
- Photometer apertures and integration times
- Spectrometer slit geometry
- Mount slew speeds
"""

from __future__ import annotations
from dataclasses import dataclass

from ..atmosphere.atmospheric_model import EXTINCTION_COEFF, SKY_BRIGHTNESS
from ..core.radiometry import ZERO_POINT_PHOTONS
from ..core.types import TelescopeConfig


# Fallback telescope used when none is selected (12" scope, Villanova)
DEFAULT_TELESCOPE_DIAM = 0.3048     # m


# Telescope Database
TELESCOPES = (
    TelescopeConfig(
        name='VU 12" Meade telescope',
        diameter=0.3048,
        latitude=40.0369,
        longitude=-75.2426,
        altitude=152.0,
    ),
    TelescopeConfig(
        name='VU 20" Planewave telescope',
        diameter=0.508,
        latitude=40.0369,
        longitude=-75.2426,
        altitude=152.0,
    ),
    TelescopeConfig(
        name="CTIO 4-m Blanco telescope",
        diameter=4.0,
        latitude=-30.1667,
        longitude=-70.7972,
        altitude=2202.0,
    ),
)


@dataclass(frozen=True, slots=True)
class FilterBand:
    """Photometric band calibration"""
    name: str
    zero_point: float       # photons/s/m² for a 0-mag source
    extinction: float       # mag per airmass
    sky_brightness: float   # mag/arcsec²


# Johnson UBV
FILTERS = {
    band: FilterBand(band,
                     zero_point=ZERO_POINT_PHOTONS[band],
                     extinction=EXTINCTION_COEFF[band],
                     sky_brightness=SKY_BRIGHTNESS[band])
    for band in ("U", "B", "V")
}


# Photometer
APERTURE_SIZES = (5, 10, 20, 40)                # arcsec
INTEGRATION_TIMES = (0.01, 0.1, 1.0, 10.0)      # seconds
DEFAULT_APERTURE_INDEX = 2                      # 20"
DEFAULT_INTEGRATION_INDEX = 2                   # 1 s

# Spectrometer slit
SLIT_WIDTH_DEG = 0.3 / 60.0
SLIT_HEIGHT_DEG = 1.0 / 60.0

# Fields of view (degrees) of the three views
FINDER_FOV_DEG = 2.0
PHOTOMETER_FOV_DEG = 5.0 / 60.0
SPEC_FOV_DEG = 0.25


@dataclass(frozen=True, slots=True)
class SlewSpeed:
    step_deg: float         # degrees moved per tick
    interval_ms: float      # tick period
    label: str

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0


SLEW_SPEEDS = (
    SlewSpeed(0.0005, 50.0, "Slew: Ultra Slow"),
    SlewSpeed(0.001, 25.0, "Slew: Slow"),
    SlewSpeed(0.001, 12.5, "Slew: Medium"),
    SlewSpeed(0.002, 12.5, "Slew: Fast"),
    SlewSpeed(0.04, 12.5, "Slew: Ultra Fast"),
)
DEFAULT_SLEW_SPEED_INDEX = 2
