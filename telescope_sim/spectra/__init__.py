"""
Spectra package — stellar atlas lookup and spectrum synthesis.

Usage:
    from telescope_sim.spectra import SpectralSynthesizer
    synth = SpectralSynthesizer("data/jacoby_atlas.json")
    spec = synth.synthesize(obj, wavelengths)
"""
from .library import SpectralLibrary, SpectralLibraryEntry, interpolate_spectrum
from .spectral_codes import SPECTRAL_CODES, spectral_code_for, spectral_type_for
from .synthesis import (
    GALAXY_LINES,
    GalaxyLine,
    SpectralSynthesizer,
    SpectrumSource,
    SynthesizedSpectrum,
    blackbody_spectrum,
    galaxy_spectrum,
    stellar_spectrum,
    temperature_from_spectral_type,
)

__all__ = [
    "SpectralLibrary",
    "SpectralLibraryEntry",
    "interpolate_spectrum",
    "SPECTRAL_CODES",
    "spectral_code_for",
    "spectral_type_for",
    "GALAXY_LINES",
    "GalaxyLine",
    "SpectralSynthesizer",
    "SpectrumSource",
    "SynthesizedSpectrum",
    "blackbody_spectrum",
    "galaxy_spectrum",
    "stellar_spectrum",
    "temperature_from_spectral_type",
]
