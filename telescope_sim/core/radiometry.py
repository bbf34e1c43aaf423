"""
Radiometry

Magnitudes, photon fluxes and thermal spectra:
- magnitude -> photon flux through a U/B/V filter
- Planck spectral radiance
- spectral photon rates for the spectrometer
"""

from __future__ import annotations
import math
from typing import Mapping

import numpy as np
from scipy.constants import h as H_PLANCK, c as C_LIGHT, k as K_BOLTZMANN


# Photons/s/m² from a 0-magnitude source, per band
ZERO_POINT_PHOTONS = {
    'U': 1.8e10,
    'B': 4.0e10,
    'V': 3.6e10,
}

# Spectrometer flux scale: F_lambda = 10^(-0.4 (m + 21.10)) erg/s/cm²/Å
SPECTRAL_ZERO_POINT_MAG = 21.10
ERG_CM2_TO_W_M2 = 1e-3


def mag_to_flux(mag: float, band: str,
                zero_points: Mapping[str, float] = ZERO_POINT_PHOTONS) -> float:
    """
    Photon flux (photons/s/m²) of a source of magnitude mag.
    Unknown bands use the V zero point.
    """
    zp = zero_points.get(band, zero_points['V'])
    return zp * 10.0 ** (-0.4 * mag)


def collecting_area(diameter_m: float) -> float:
    """Clear aperture area in m²"""
    return math.pi * (diameter_m / 2.0) ** 2


def photon_energy(wavelength_angstrom):
    """Photon energy in J (scalar or array)."""
    return (H_PLANCK * C_LIGHT) / (np.asarray(wavelength_angstrom, dtype=float) * 1e-10)


def blackbody(wavelength_angstrom, temperature: float):
    """
    Planck spectral radiance B(λ, T) = 2hc² / (λ⁵ (exp(hc/λkT) - 1))

    Args:
        wavelength_angstrom: wavelength(s) in Å (scalar or array)
        temperature: K

    Returns:
        Radiance in W/sr/m³, same shape as the input
    """
    lam = np.asarray(wavelength_angstrom, dtype=float) * 1e-10
    with np.errstate(over="ignore"):
        expo = np.expm1((H_PLANCK * C_LIGHT) / (lam * K_BOLTZMANN * temperature))
    result = (2.0 * H_PLANCK * C_LIGHT ** 2) / (lam ** 5 * expo)
    if result.ndim == 0:
        return float(result)
    return result


def spectral_flux_si(mag: float) -> float:
    """Continuum flux density in W/m²/Å for the spectrometer's magnitude scale."""
    return 10.0 ** (-0.4 * (mag + SPECTRAL_ZERO_POINT_MAG)) * ERG_CM2_TO_W_M2


def spectral_photon_rates(relative_flux, wavelengths, mag: float,
                          area_m2: float) -> np.ndarray:
    """
    Photons/s per 1 Å bin collected by a telescope of area area_m2.

    relative_flux is the normalized spectral shape on the wavelengths grid.
    """
    rel = np.asarray(relative_flux, dtype=float)
    return rel * (spectral_flux_si(mag) / photon_energy(wavelengths)) * area_m2
