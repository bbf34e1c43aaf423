"""
Stellar spectral library (Jacoby, Hunter & Christian 1984 atlas format).

Resource layout (JSON):
    {
      "wavelength": [Å ...],             # shared grid, increasing
      "spectra":    [[flux ...], ...],   # one row per star
      "spec_types": ["G5 V", ...],
      "spec_codes": [50505000, ...]
    }

The library is loaded once and never modified; lookups return read-only views.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from ..errors import SpectralLibraryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpectralLibraryEntry:
    wavelength: np.ndarray
    flux: np.ndarray
    spec_type: str
    code: int = 0


class SpectralLibrary:
    """In-memory spectral atlas with spectral-type lookup"""

    def __init__(self, wavelength: Sequence[float], spectra: Sequence[Sequence[float]],
                 spec_types: Sequence[str], spec_codes: Optional[Sequence[int]] = None,
                 source: str = "<memory>"):
        wave = np.asarray(wavelength, dtype=float)
        flux = np.asarray(spectra, dtype=float)
        types = [str(t) for t in spec_types]
        codes = [int(c) for c in spec_codes] if spec_codes is not None else [0] * len(types)

        if wave.ndim != 1 or wave.size < 2:
            raise SpectralLibraryError(source, "wavelength grid must be a 1-D list of at least 2 points")
        if flux.ndim != 2 or flux.shape[1] != wave.size:
            raise SpectralLibraryError(source, f"spectra shape {flux.shape} does not match grid of {wave.size}")
        if len(types) != flux.shape[0] or len(codes) != flux.shape[0]:
            raise SpectralLibraryError(source, "spec_types/spec_codes length does not match spectra")

        wave.setflags(write=False)
        flux.setflags(write=False)
        self.wavelength = wave
        self.spectra = flux
        self.spec_types = tuple(types)
        self.spec_codes = tuple(codes)
        self.source = source

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict, source: str = "<memory>") -> "SpectralLibrary":
        try:
            return cls(
                wavelength=data["wavelength"],
                spectra=data["spectra"],
                spec_types=data["spec_types"],
                spec_codes=data.get("spec_codes"),
                source=source,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SpectralLibraryError(source, f"malformed library ({e})") from e

    @classmethod
    def from_json(cls, path: str | Path) -> "SpectralLibrary":
        path = Path(path)
        logger.info("Loading spectral library %s", path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SpectralLibraryError(path.name, str(e)) from e
        lib = cls.from_dict(data, source=path.name)
        logger.info("Loaded %d stellar spectra", len(lib))
        return lib

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.spec_types)

    def entry(self, index: int) -> SpectralLibraryEntry:
        return SpectralLibraryEntry(
            wavelength=self.wavelength,
            flux=self.spectra[index],
            spec_type=self.spec_types[index],
            code=self.spec_codes[index],
        )

    def find(self, spectral_type: str) -> Optional[SpectralLibraryEntry]:
        """
        Exact (case-insensitive) type match, else the first entry of the same
        spectral class letter, else None.
        """
        if not spectral_type:
            return None
        key = spectral_type.lower()
        for i, t in enumerate(self.spec_types):
            if t.lower() == key:
                return self.entry(i)

        letter = spectral_type[0].upper()
        for i, t in enumerate(self.spec_types):
            if t[:1].upper() == letter:
                return self.entry(i)
        return None

    def find_by_code(self, code: int) -> Optional[SpectralLibraryEntry]:
        for i, c in enumerate(self.spec_codes):
            if c == code:
                return self.entry(i)
        return None


def interpolate_spectrum(source_wavelengths, source_flux, target_wavelengths) -> np.ndarray:
    """
    Linear interpolation onto a new grid.
    Exact at source grid points, flat (endpoint value) outside the source range.
    """
    src_w = np.asarray(source_wavelengths, dtype=float)
    src_f = np.asarray(source_flux, dtype=float)
    if src_w.size > 1 and src_w[0] > src_w[-1]:
        src_w = src_w[::-1]
        src_f = src_f[::-1]
    return np.interp(np.asarray(target_wavelengths, dtype=float), src_w, src_f)
