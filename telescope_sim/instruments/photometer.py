"""
Photometer — aperture photometry through U, B or V filters.

Integration
-----------
  begin_integration() arms a 100 ms ticker; after t/0.1 ticks the ticker is
  cancelled and perform_photometry() runs exactly once.

Measurement model (per object inside the aperture)
--------------------------------------------------
  counts  = Poisson(flux(m_band) · 10^(-0.4·k·X) · area · t)
  + sky   = Poisson(sky_flux · 10^(-0.4·k·X) · area · t · Ω · 1e10)    atmosphere on
  + scint = N(0,1) · σ_scint · counts                                  atmosphere on, telescope set
  total   = max(0, round(sum))

An empty aperture reports a single "SKY" reading.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from ..atmosphere.atmospheric_model import apply_extinction, scintillation_sigma, sky_photons
from ..core.coords import calculate_airmass
from ..core.noise_model import NoiseModel
from ..core.radiometry import collecting_area, mag_to_flux
from ..core.scheduler import Scheduler, Ticker
from ..core.types import CelestialObject
from ..errors import PreconditionError
from .base import PointingSource, require_idle

if TYPE_CHECKING:
    from ..catalogs.catalog import Catalog
    from ..config import EngineConfig

logger = logging.getLogger(__name__)

SKY_LABEL = "SKY"


@dataclass(frozen=True)
class PhotometryResult:
    counts: Dict[str, int]
    filter: str
    aperture: float             # arcsec
    integration_time: float     # s
    airmass: float
    observation_number: int
    atmosphere: bool = True
    below_horizon: bool = False

    @property
    def total_counts(self) -> int:
        return sum(self.counts.values())

    def log_lines(self) -> List[str]:
        return [
            f"{self.observation_number}. {name}: filter={self.filter}, "
            f"aperture={self.aperture:g}\", t={self.integration_time:g}s, "
            f"airmass={self.airmass:.2f}, counts={n:,}"
            for name, n in self.counts.items()
        ]


@dataclass
class ApertureContents:
    objects: List[CelestialObject] = field(default_factory=list)

    @property
    def is_sky(self) -> bool:
        return not self.objects

    def describe(self) -> str:
        if self.is_sky:
            return f"Object {SKY_LABEL} is within the aperture"
        return ", ".join(f"Object {o.name} ({o.type_label}) is within the aperture"
                         for o in self.objects)


class Photometer:
    """
    Args:
        catalog: Field catalog queried for objects in the aperture
        pointing: Callable returning the current PointingInfo
        scheduler: Tick source for the integration ticker
        config: Engine configuration (default: DEFAULT_CONFIG)
        noise: Random variate source
    """

    def __init__(self, catalog: "Catalog", pointing: PointingSource, scheduler: Scheduler,
                 config: Optional["EngineConfig"] = None,
                 noise: Optional[NoiseModel] = None):
        if config is None:
            from ..config import DEFAULT_CONFIG
            config = DEFAULT_CONFIG
        self.catalog = catalog
        self.pointing = pointing
        self.scheduler = scheduler
        self.config = config
        self.noise = noise if noise is not None else NoiseModel()

        self.filter = config.default_filter
        self.aperture_index = config.default_aperture_index
        self.integration_index = config.default_integration_index
        self.atmosphere_enabled = True

        self.integrating = False
        self.progress = 0.0         # percent
        self.observation_count = 0
        self.history: List[PhotometryResult] = []
        self.field_loaded = False

        self._ticker: Optional[Ticker] = None
        self._step = 0
        self._total_steps = 0.0

    # ── Settings ─────────────────────────────────────────────────────────────

    @property
    def aperture(self) -> float:
        return self.config.aperture_sizes[self.aperture_index]

    @property
    def integration_time(self) -> float:
        return self.config.integration_times[self.integration_index]

    def configure(self, *, filter: Optional[str] = None, aperture_index: Optional[int] = None,
                  integration_index: Optional[int] = None, atmosphere: Optional[bool] = None):
        """
        Change settings. All values are validated before any is applied.

        Raises:
            PreconditionError: an integration is running
            ValueError: unknown filter or index out of range
        """
        require_idle(self, "change photometer settings")
        if filter is not None and filter not in self.config.filters:
            raise ValueError(f"Unknown filter: {filter}")
        if aperture_index is not None and not 0 <= aperture_index < len(self.config.aperture_sizes):
            raise ValueError(f"Aperture index out of range: {aperture_index}")
        if integration_index is not None and not 0 <= integration_index < len(self.config.integration_times):
            raise ValueError(f"Integration index out of range: {integration_index}")

        if filter is not None:
            self.filter = filter
        if aperture_index is not None:
            self.aperture_index = aperture_index
        if integration_index is not None:
            self.integration_index = integration_index
        if atmosphere is not None:
            self.atmosphere_enabled = atmosphere

    def cycle_aperture(self) -> float:
        self.configure(aperture_index=(self.aperture_index + 1) % len(self.config.aperture_sizes))
        return self.aperture

    def cycle_integration_time(self) -> float:
        self.configure(integration_index=(self.integration_index + 1) % len(self.config.integration_times))
        return self.integration_time

    def toggle_atmosphere(self) -> bool:
        self.configure(atmosphere=not self.atmosphere_enabled)
        return self.atmosphere_enabled

    # ── Integration ──────────────────────────────────────────────────────────

    def begin_integration(self) -> bool:
        """
        Start a timed integration. Returns False if one is already running.

        Raises:
            PreconditionError: no field loaded
        """
        if self.integrating:
            return False
        self._require_field()

        logger.info("Starting photometer integration (%s, %g\", %gs)",
                    self.filter, self.aperture, self.integration_time)
        self.integrating = True
        self.progress = 0.0
        self._step = 0
        self._total_steps = self.integration_time / self.config.photometer_interval_s
        self._ticker = self.scheduler.every(self.config.photometer_interval_s, self.tick,
                                            name="photometer")
        return True

    def tick(self):
        if not self.integrating:
            return
        self._step += 1
        self.progress = min(100.0, self._step / self._total_steps * 100.0)
        if self._step >= self._total_steps - 1e-9:
            self.finalize()

    def finalize(self) -> Optional[PhotometryResult]:
        """Complete the integration and take the measurement."""
        if not self.integrating:
            return None
        self._cancel_ticker()
        self.integrating = False
        self.progress = 0.0
        logger.info("Photometer integration complete")
        return self.perform_photometry()

    def abort(self):
        """Stop without measuring."""
        self._cancel_ticker()
        self.integrating = False
        self.progress = 0.0

    def _cancel_ticker(self):
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _require_field(self):
        if not self.field_loaded:
            raise PreconditionError("Photometry requires a loaded field")

    # ── Measurement ──────────────────────────────────────────────────────────

    def aperture_contents(self) -> ApertureContents:
        info = self.pointing()
        return ApertureContents(self.catalog.find_objects_in_aperture(info.ra, info.dec, self.aperture))

    def perform_photometry(self) -> PhotometryResult:
        """
        One measurement at the current pointing and settings.

        Raises:
            PreconditionError: no field loaded
        """
        self._require_field()
        info = self.pointing()
        telescope = info.telescope
        band = self.filter
        t = self.integration_time
        aperture = self.aperture

        below_horizon = False
        airmass = 1.0
        if self.atmosphere_enabled and telescope is not None:
            airmass = calculate_airmass(info.altitude)
            below_horizon = info.altitude <= 0.0

        objects = self.catalog.find_objects_in_aperture(info.ra, info.dec, aperture)
        counts = self._simulate(objects, aperture, t, airmass, telescope)

        self.observation_count += 1
        result = PhotometryResult(
            counts=counts,
            filter=band,
            aperture=aperture,
            integration_time=t,
            airmass=airmass,
            observation_number=self.observation_count,
            atmosphere=self.atmosphere_enabled,
            below_horizon=below_horizon,
        )
        self.history.append(result)
        for line in result.log_lines():
            logger.info(line)
        return result

    def _sky_photons(self, band: str, airmass: float, area: float, t: float, aperture: float) -> float:
        cfg = self.config
        return sky_photons(band, airmass, area, t, aperture, cfg.sky_brightness,
                           cfg.zero_points, cfg.extinction_coeffs, cfg.sky_scale)

    def _simulate(self, objects: List[CelestialObject], aperture: float, t: float,
                  airmass: float, telescope) -> Dict[str, int]:
        cfg = self.config
        band = self.filter
        diameter = telescope.diameter if telescope is not None else cfg.default_telescope_diameter
        area = collecting_area(diameter)
        noise = self.noise
        results: Dict[str, int] = {}

        if self.atmosphere_enabled:
            # Field sky reading; only reported when the aperture is empty
            sky_counts = noise.poisson(self._sky_photons(band, airmass, area, t, aperture))
            if not objects:
                results[SKY_LABEL] = sky_counts
        elif not objects:
            results[SKY_LABEL] = 0

        sigma = 0.0
        if self.atmosphere_enabled and telescope is not None:
            sigma = scintillation_sigma(diameter, airmass, telescope.altitude, t)

        for obj in objects:
            flux = mag_to_flux(obj.magnitude(band), band, cfg.zero_points)
            if self.atmosphere_enabled:
                flux = apply_extinction(flux, band, airmass, cfg.extinction_coeffs)
            obj_counts = noise.poisson(flux * area * t)

            total = float(obj_counts)
            if self.atmosphere_enabled:
                total += noise.poisson(self._sky_photons(band, airmass, area, t, aperture))
            if self.atmosphere_enabled and telescope is not None:
                total += noise.normal() * sigma * obj_counts

            results[obj.name] = max(0, math.floor(total + 0.5))
        return results
