"""
Instruments package — equipment tables, photometer and spectrometer.

Usage:
    from telescope_sim.instruments import Photometer, Spectrometer
    phot = Photometer(catalog, engine.pointing_info, scheduler, config)
    phot.configure(filter="B")
    phot.begin_integration()
"""
from .base import Instrument
from .equipment import FILTERS, SLEW_SPEEDS, TELESCOPES, FilterBand, SlewSpeed
from .photometer import ApertureContents, Photometer, PhotometryResult
from .spectrometer import PlotMode, Spectrometer, SpectrumResult

__all__ = [
    "Instrument",
    "FILTERS",
    "SLEW_SPEEDS",
    "TELESCOPES",
    "FilterBand",
    "SlewSpeed",
    "ApertureContents",
    "Photometer",
    "PhotometryResult",
    "PlotMode",
    "Spectrometer",
    "SpectrumResult",
]
