"""
Spectrometer — long-slit spectrum accumulation, 3900–4500 Å at 1 Å.

The object in the slit is the catalog object nearest the pointing among
those inside the rectangular slit. While integrating, every 250 ms tick
adds one second of Poisson-sampled photons per wavelength bin.

Photon rates per bin:
    F_λ  = 10^(-0.4·(m_eff + 21.10)) · 1e-3       W/m²/Å
    rate = shape(λ) · F_λ / (hc/λ) · area         photons/s
with m_eff = 0.45·m for galaxies and m for stars.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

import numpy as np

from ..core.coords import angular_separation
from ..core.noise_model import NoiseModel
from ..core.radiometry import collecting_area, spectral_photon_rates
from ..core.scheduler import Scheduler, Ticker
from ..core.types import CelestialObject
from ..errors import PreconditionError
from ..spectra.synthesis import SpectralSynthesizer, SpectrumSource
from .base import PointingSource, require_idle

if TYPE_CHECKING:
    from ..catalogs.catalog import Catalog
    from ..config import EngineConfig

logger = logging.getLogger(__name__)


class PlotMode(Enum):
    SCATTER = "scatter"     # accumulating
    LINE = "line"           # finalized


@dataclass(frozen=True)
class SpectrumResult:
    wavelengths: np.ndarray
    counts: np.ndarray
    elapsed: int                # seconds of exposure
    total_counts: int
    mean_snr: float
    object_name: str = ""

    def status_line(self) -> str:
        return (f"Time: {self.elapsed}s   Total Counts: {self.total_counts}   "
                f"Mean SNR: {self.mean_snr:.2f}")


def mean_snr(counts: np.ndarray) -> float:
    """Mean of sqrt(count) over the bins that received photons."""
    nonzero = counts[counts > 0]
    if nonzero.size == 0:
        return 0.0
    return float(np.mean(np.sqrt(nonzero)))


class Spectrometer:
    """
    Args:
        catalog: Field catalog queried for the slit object
        pointing: Callable returning the current PointingInfo
        scheduler: Tick source for the integration ticker
        synthesizer: Spectral shapes for stars and galaxies
        config: Engine configuration (default: DEFAULT_CONFIG)
        noise: Random variate source
    """

    def __init__(self, catalog: "Catalog", pointing: PointingSource, scheduler: Scheduler,
                 synthesizer: Optional[SpectralSynthesizer] = None,
                 config: Optional["EngineConfig"] = None,
                 noise: Optional[NoiseModel] = None):
        if config is None:
            from ..config import DEFAULT_CONFIG
            config = DEFAULT_CONFIG
        self.catalog = catalog
        self.pointing = pointing
        self.scheduler = scheduler
        self.config = config
        self.synthesizer = synthesizer if synthesizer is not None else SpectralSynthesizer(
            galaxy_lines=config.galaxy_lines)
        self.noise = noise if noise is not None else NoiseModel()

        self.wavelengths = config.wavelengths
        self.counts = np.zeros(len(self.wavelengths), dtype=np.int64)
        self.rates = np.zeros(len(self.wavelengths), dtype=float)
        self.elapsed = 0
        self.current_object: Optional[CelestialObject] = None
        self.observed_object: Optional[CelestialObject] = None     # source of counts
        self.spectrum_source: Optional[SpectrumSource] = None
        self.plot_mode = PlotMode.SCATTER
        self.integrating = False
        self._ticker: Optional[Ticker] = None

    # ── Slit ─────────────────────────────────────────────────────────────────

    def update_slit(self) -> Optional[CelestialObject]:
        """Pick the object in the slit nearest the pointing (or None)."""
        info = self.pointing()
        inside = self.catalog.find_objects_in_slit(
            info.ra, info.dec, self.config.slit_width_deg, self.config.slit_height_deg)
        nearest = None
        min_dist = math.inf
        for obj in inside:
            d = angular_separation(info.ra, info.dec, obj.ra, obj.dec)
            if d < min_dist:
                min_dist = d
                nearest = obj
        self.current_object = nearest
        return nearest

    def slit_status(self) -> str:
        obj = self.current_object
        if obj is None:
            return "No object in slit"
        return f"Object {obj.name} ({obj.type_label}) is within the slit"

    def configure(self, *, plot_mode: Optional[PlotMode] = None):
        require_idle(self, "change spectrometer settings")
        if plot_mode is not None:
            self.plot_mode = PlotMode(plot_mode)

    # ── Integration ──────────────────────────────────────────────────────────

    def photon_rates(self, obj: CelestialObject) -> np.ndarray:
        """Photons/s per wavelength bin for obj through the current telescope."""
        info = self.pointing()
        diameter = info.telescope.diameter if info.telescope is not None \
            else self.config.default_telescope_diameter
        area = collecting_area(diameter)

        spectrum = self.synthesizer.synthesize(obj, self.wavelengths)
        self.spectrum_source = spectrum.source
        eff_mag = obj.mag * self.config.galaxy_mag_scale if obj.is_galaxy else obj.mag
        return spectral_photon_rates(spectrum.flux, self.wavelengths, eff_mag, area)

    def begin_integration(self) -> bool:
        """
        Start accumulating. Returns False if already integrating.

        Raises:
            PreconditionError: no object in the slit
        """
        if self.integrating:
            return False
        if self.current_object is None:
            raise PreconditionError("No object in slit")

        self.rates = self.photon_rates(self.current_object)
        self.observed_object = self.current_object
        self.integrating = True
        self.elapsed = 0
        self.plot_mode = PlotMode.SCATTER
        self.counts[:] = 0
        self._ticker = self.scheduler.every(self.config.spectrometer_interval_s, self.tick,
                                            name="spectrometer")
        logger.info("Spectrometer integration started on %s (%s)",
                    self.current_object.name, self.spectrum_source.value)
        return True

    def tick(self):
        if not self.integrating:
            return
        self.elapsed += 1
        self.counts += self.noise.poisson_array(self.rates)

    def finalize(self):
        """Stop accumulating and freeze the spectrum."""
        if not self.integrating:
            return
        self.integrating = False
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self.plot_mode = PlotMode.LINE
        logger.info("Spectrometer integration stopped after %ds", self.elapsed)

    def clear(self):
        require_idle(self, "clear the spectrum")
        self.counts[:] = 0
        self.elapsed = 0
        self.observed_object = None

    # ── Results ──────────────────────────────────────────────────────────────

    def result(self) -> SpectrumResult:
        counts = self.counts.copy()
        return SpectrumResult(
            wavelengths=self.wavelengths.copy(),
            counts=counts,
            elapsed=self.elapsed,
            total_counts=int(counts.sum()),
            mean_snr=mean_snr(counts),
            object_name=self.observed_object.name if self.observed_object is not None else "",
        )

    def probe(self, wavelength: float) -> Optional[tuple[float, int]]:
        """(bin wavelength, counts) nearest to wavelength; finalized spectra only."""
        if self.plot_mode != PlotMode.LINE:
            return None
        i = int(np.argmin(np.abs(self.wavelengths - wavelength)))
        return float(self.wavelengths[i]), int(self.counts[i])
