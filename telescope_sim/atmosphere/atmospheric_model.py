"""
Atmospheric model used by the photometer.

  1. apply_extinction(flux, band, X): Bouguer-Lambert dimming
  2. sky_photons(...)              : sky background collected in the aperture
  3. scintillation_sigma(...)      : fractional scintillation noise (Young 1967)
"""

from __future__ import annotations
import math
from typing import Mapping

from ..core.radiometry import ZERO_POINT_PHOTONS, mag_to_flux


# ---------------------------------------------------------------------------
# Extinction coefficients (magnitudes per unit airmass)
# ---------------------------------------------------------------------------

EXTINCTION_COEFF = {
    'U': 0.50,
    'B': 0.25,
    'V': 0.15,
}

# Dark-sky surface brightness, mag/arcsec²
SKY_BRIGHTNESS = {
    'U': 22.0,
    'B': 22.7,
    'V': 21.6,
}

# Empirical scale turning aperture solid angle into sky photons
SKY_SCALE = 1e10

# Atmospheric scale height for scintillation, metres
SCINTILLATION_SCALE_HEIGHT_M = 8000.0


def apply_extinction(flux: float, band: str, airmass_x: float,
                     coeffs: Mapping[str, float] = EXTINCTION_COEFF) -> float:
    """Flux after passing through airmass_x of atmosphere. Unknown bands use V."""
    k = coeffs.get(band, coeffs['V'])
    return flux * 10.0 ** (-0.4 * k * airmass_x)


def aperture_solid_angle(aperture_arcsec: float) -> float:
    """Solid angle (sr) used for the sky term: π·(aperture in radians)²."""
    return math.pi * (aperture_arcsec / 3600.0 * math.pi / 180.0) ** 2


def sky_photons(band: str, airmass_x: float, area_m2: float,
                integration_s: float, aperture_arcsec: float,
                sky_brightness: Mapping[str, float] = SKY_BRIGHTNESS,
                zero_points: Mapping[str, float] = ZERO_POINT_PHOTONS,
                extinction: Mapping[str, float] = EXTINCTION_COEFF,
                scale: float = SKY_SCALE) -> float:
    """
    Mean sky-background photons collected through the aperture.

    Args:
        band: Filter name
        airmass_x: Airmass of the pointing
        area_m2: Telescope collecting area
        integration_s: Exposure time
        aperture_arcsec: Photometer aperture size
        scale: Solid-angle to photon scale (SKY_SCALE)

    Returns:
        Expected photon count (to be Poisson sampled)
    """
    sky_mag = sky_brightness.get(band, sky_brightness['V'])
    flux = mag_to_flux(sky_mag, band, zero_points)
    flux = apply_extinction(flux, band, airmass_x, extinction)
    return flux * area_m2 * integration_s * aperture_solid_angle(aperture_arcsec) * scale


def scintillation_sigma(diameter_m: float, airmass_x: float,
                        site_altitude_m: float, integration_s: float) -> float:
    """
    Fractional scintillation noise:
    0.09 · D^(-2/3) · X^(7/4) · exp(-h/8000) · t^(-1/2)
    """
    return (0.09 * diameter_m ** (-2.0 / 3.0)
            * airmass_x ** 1.75
            * math.exp(-site_altitude_m / SCINTILLATION_SCALE_HEIGHT_M)
            * integration_s ** -0.5)
