"""
Atmosphere package — extinction, sky background and scintillation.

Main exports:
    apply_extinction     — Bouguer-Lambert dimming per band
    sky_photons          — sky background through the photometer aperture
    scintillation_sigma  — fractional scintillation noise
"""
from .atmospheric_model import (
    EXTINCTION_COEFF,
    SKY_BRIGHTNESS,
    apply_extinction,
    aperture_solid_angle,
    sky_photons,
    scintillation_sigma,
)

__all__ = [
    "EXTINCTION_COEFF",
    "SKY_BRIGHTNESS",
    "apply_extinction",
    "aperture_solid_angle",
    "sky_photons",
    "scintillation_sigma",
]
