"""
Spectral synthesis for the spectrometer.

Stars:   atlas spectrum for the object's spectral type, interpolated onto
         the instrument grid; blackbody at a type-derived temperature when
         the atlas is unavailable or has no entry for the class.
Galaxies: redshifted 4000 K continuum with Ca II H+K and G-band absorption.

Every spectrum is normalized so its peak is 1 (galaxies: the continuum peak,
absorption is applied after normalization).
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from ..core.radiometry import blackbody
from ..core.types import CelestialObject
from ..errors import SpectralLibraryError
from .library import SpectralLibrary, interpolate_spectrum

logger = logging.getLogger(__name__)


DEFAULT_TEMPERATURE_K = 5800.0
GALAXY_CONTINUUM_K = 4000.0

# (base temperature, K per subtype digit)
_TEMPERATURE_TABLE = {
    'O': (45000.0, 2000.0),
    'B': (25000.0, 2000.0),
    'A': (9500.0, 500.0),
    'F': (7200.0, 300.0),
    'G': (6000.0, 200.0),
    'K': (5000.0, 300.0),
    'M': (3500.0, 200.0),
}


@dataclass(frozen=True, slots=True)
class GalaxyLine:
    name: str
    wavelength: float   # rest wavelength, Å
    fwhm: float         # Å
    depth: float        # central optical depth

    @property
    def sigma(self) -> float:
        return self.fwhm / (2.0 * math.sqrt(2.0 * math.log(2.0)))


GALAXY_LINES = (
    GalaxyLine("Ca II K", 3933.663, 15.0, 0.5),
    GalaxyLine("Ca II H", 3968.492, 15.0, 0.6),
    GalaxyLine("G-band", 4300.000, 11.0, 0.3),
    GalaxyLine("G-band", 4310.000, 11.0, 0.3),
)


class SpectrumSource(Enum):
    LIBRARY = "library"
    BLACKBODY = "blackbody"
    GALAXY = "galaxy"


@dataclass(frozen=True)
class SynthesizedSpectrum:
    flux: np.ndarray
    source: SpectrumSource
    matched_type: str = ""


def temperature_from_spectral_type(spectral_type: str) -> float:
    """Rough effective temperature from class letter and subtype digit."""
    if not spectral_type:
        return DEFAULT_TEMPERATURE_K
    letter = spectral_type[0]
    digit = spectral_type[1] if len(spectral_type) > 1 else ""
    subtype = int(digit) if digit.isdigit() else 0
    if letter not in _TEMPERATURE_TABLE:
        return DEFAULT_TEMPERATURE_K
    base, per_subtype = _TEMPERATURE_TABLE[letter]
    return base - subtype * per_subtype


def normalize_peak(flux: np.ndarray) -> np.ndarray:
    peak = float(np.max(flux)) if flux.size else 0.0
    if peak <= 0.0:
        return np.zeros_like(flux, dtype=float)
    return flux / peak


def blackbody_spectrum(temperature: float, wavelengths) -> np.ndarray:
    return normalize_peak(np.atleast_1d(blackbody(wavelengths, temperature)))


def stellar_spectrum(spectral_type: str, wavelengths,
                     library: Optional[SpectralLibrary] = None) -> SynthesizedSpectrum:
    """Relative stellar flux on the wavelengths grid."""
    wavelengths = np.asarray(wavelengths, dtype=float)
    if library is not None:
        entry = library.find(spectral_type)
        if entry is not None:
            logger.debug("Atlas spectrum for %r (actual: %s)", spectral_type, entry.spec_type)
            flux = interpolate_spectrum(entry.wavelength, entry.flux, wavelengths)
            return SynthesizedSpectrum(normalize_peak(flux), SpectrumSource.LIBRARY, entry.spec_type)

    logger.debug("Blackbody spectrum for %r", spectral_type)
    temp = temperature_from_spectral_type(spectral_type)
    return SynthesizedSpectrum(blackbody_spectrum(temp, wavelengths), SpectrumSource.BLACKBODY)


def galaxy_spectrum(redshift: float, wavelengths,
                    lines: Sequence[GalaxyLine] = GALAXY_LINES) -> np.ndarray:
    """
    Observed-frame galaxy spectrum.

    Args:
        redshift: z of the galaxy
        wavelengths: observed wavelength grid (Å)
        lines: absorption lines at rest wavelengths

    Returns:
        Relative flux; the continuum peaks at 1 before absorption
    """
    rest = np.asarray(wavelengths, dtype=float) / (1.0 + redshift)
    continuum = normalize_peak(np.atleast_1d(blackbody(rest, GALAXY_CONTINUUM_K)))

    absorption = np.ones_like(rest)
    for line in lines:
        tau = line.depth * np.exp(-0.5 * ((rest - line.wavelength) / line.sigma) ** 2)
        absorption *= np.exp(-tau)
    return continuum * absorption


class SpectralSynthesizer:
    """
    Spectrum factory with a lazily loaded atlas.

    The atlas file is read at most once. If it cannot be read, the error is
    logged and kept in library_error, and stars fall back to blackbodies.
    """

    def __init__(self, library_path: Optional[str | Path] = None,
                 library: Optional[SpectralLibrary] = None,
                 galaxy_lines: Sequence[GalaxyLine] = GALAXY_LINES):
        self.library_path = Path(library_path) if library_path is not None else None
        self._library = library
        self._attempted = library is not None
        self.library_error: Optional[SpectralLibraryError] = None
        self.galaxy_lines = tuple(galaxy_lines)

    @property
    def library(self) -> Optional[SpectralLibrary]:
        if not self._attempted:
            self._attempted = True
            if self.library_path is not None:
                try:
                    self._library = SpectralLibrary.from_json(self.library_path)
                except SpectralLibraryError as e:
                    logger.error("Spectral library unavailable, using blackbodies: %s", e)
                    self.library_error = e
        return self._library

    def synthesize(self, obj: CelestialObject, wavelengths) -> SynthesizedSpectrum:
        if obj.is_galaxy:
            flux = galaxy_spectrum(obj.redshift, wavelengths, self.galaxy_lines)
            return SynthesizedSpectrum(flux, SpectrumSource.GALAXY)
        return stellar_spectrum(obj.spec_type, wavelengths, self.library)
