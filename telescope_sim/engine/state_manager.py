"""
Observatory Engine

Owns every piece of session state and wires the components together:
- Scheduler (single tick source) and simulated clock
- Catalog of the selected field
- Mount (pointing + slew)
- Photometer and spectrometer

Front ends call the command methods and read data snapshots; nothing here
draws or blocks.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

import numpy as np

from ..catalogs.catalog import Catalog
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.astro_time import calculate_lst
from ..core.coords import calculate_alt_az, format_dec, format_ra
from ..core.noise_model import NoiseModel, UniformSource, rng_from_seed, seed_from_text
from ..core.scheduler import Scheduler
from ..core.time_controller import SimClock
from ..core.types import (
    BackgroundStar,
    CelestialObject,
    FieldConfig,
    PointingInfo,
    SlewTarget,
    TelescopeConfig,
)
from ..catalogs.fields import find_field
from ..errors import CatalogLoadError
from ..instruments.photometer import Photometer, PhotometryResult
from ..instruments.spectrometer import Spectrometer
from ..mount.pointing import Pointing
from ..mount.slew import Direction, SlewState, TelescopeMount
from ..spectra.synthesis import SpectralSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class EngineState:
    """Session selections"""
    telescope: Optional[TelescopeConfig] = None
    field: Optional[FieldConfig] = None
    selected_object: Optional[CelestialObject] = None
    catalog_error: Optional[CatalogLoadError] = None
    clock_ticks: int = 0


@dataclass(frozen=True)
class ViewSnapshot:
    """What a renderer needs for one view (finder, photometer or spectrometer)"""
    center_ra: float
    center_dec: float
    fov_deg: float
    objects: List[CelestialObject] = field(default_factory=list)
    background_stars: List[BackgroundStar] = field(default_factory=list)


@dataclass(frozen=True)
class EngineSnapshot:
    pointing: PointingInfo
    ra_label: str
    dec_label: str
    slew_state: SlewState
    slew_speed: str
    field_name: str
    finder: ViewSnapshot
    photometer_view: ViewSnapshot
    spectrometer_view: ViewSnapshot
    photometer_integrating: bool
    photometer_progress: float
    spectrometer_integrating: bool
    slit_status: str


class ObservatoryEngine:
    """
    Complete simulator session.

    Args:
        config: Constant tables and tick rates
        scheduler: Tick source (default: new virtual-time Scheduler)
        start_utc: Simulated start instant (default: now)
        rng: NumPy generator for instrument noise and background stars
        uniform: Zero-argument uniform source for instrument noise (tests)
        synthesizer: Spectrum factory (default: atlas under config.data_dir)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG,
                 scheduler: Optional[Scheduler] = None,
                 start_utc: Optional[datetime] = None,
                 rng: Optional[np.random.Generator] = None,
                 uniform: Optional[UniformSource] = None,
                 synthesizer: Optional[SpectralSynthesizer] = None):
        self.config = config
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.clock = SimClock(start_utc)
        self.state = EngineState()
        self.rng = rng

        self.catalog = Catalog()
        self.mount = TelescopeMount(self.scheduler, Pointing(),
                                    speeds=config.slew_speeds,
                                    speed_index=config.default_slew_speed_index)
        self.synthesizer = synthesizer if synthesizer is not None else SpectralSynthesizer(
            library_path=config.spectral_library_path, galaxy_lines=config.galaxy_lines)

        noise = NoiseModel(uniform=uniform, rng=rng)
        self.photometer = Photometer(self.catalog, self.pointing_info, self.scheduler,
                                     config=config, noise=noise)
        self.spectrometer = Spectrometer(self.catalog, self.pointing_info, self.scheduler,
                                         synthesizer=self.synthesizer, config=config, noise=noise)

        self._clock_ticker = self.scheduler.every(config.clock_interval_s, self._on_clock_tick,
                                                  name="clock")

    # -----------------------------------------------------------------------
    # Selections
    # -----------------------------------------------------------------------

    def select_telescope(self, telescope: TelescopeConfig | int) -> TelescopeConfig:
        """Select by config or by index into config.telescopes."""
        if isinstance(telescope, int):
            if not 0 <= telescope < len(self.config.telescopes):
                raise ValueError(f"Telescope index out of range: {telescope}")
            telescope = self.config.telescopes[telescope]
        self.state.telescope = telescope
        logger.info("Telescope: %s (%gm aperture)", telescope.name, telescope.diameter)
        return telescope

    def select_field(self, obs_field: FieldConfig | str) -> FieldConfig:
        """
        Point at a field, load its catalog and regenerate background stars.
        Running exposures end first: the photometer is aborted and the
        spectrum is finalized on the old field.

        Raises:
            ValueError: unknown field name
            CatalogLoadError: catalog unreadable (the sample catalog is
                installed and background stars are still generated)
        """
        if isinstance(obs_field, str):
            found = find_field(obs_field, self.config.fields)
            if found is None:
                raise ValueError(f"Unknown field: {obs_field}")
            obs_field = found

        self.mount.abort()
        self.photometer.abort()
        self.spectrometer.finalize()
        self.state.field = obs_field
        self.state.selected_object = None
        self.state.catalog_error = None
        self.mount.pointing.move_to(obs_field.ra, obs_field.dec)
        logger.info("Field: %s", obs_field.name)

        try:
            self.catalog.load_from_file(self.config.catalog_path(obs_field))
        except CatalogLoadError as e:
            self.state.catalog_error = e
            raise
        finally:
            self.catalog.generate_background_stars(
                obs_field.ra, obs_field.dec, self.config.finder_fov_deg,
                dense=obs_field.background, rng=self._background_rng(obs_field),
                params=self.config.background)
            self.photometer.field_loaded = True
            self.spectrometer.update_slit()
        return obs_field

    def _background_rng(self, obs_field: FieldConfig) -> np.random.Generator:
        if self.rng is not None:
            return self.rng
        return rng_from_seed(seed_from_text(obs_field.name))

    def set_datetime(self, dt: datetime):
        self.clock.set_utc(dt)

    def use_current_time(self):
        self.clock.realtime()

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def telescope(self) -> Optional[TelescopeConfig]:
        return self.state.telescope

    @property
    def slew_state(self) -> SlewState:
        return self.mount.state

    def pointing_info(self) -> PointingInfo:
        """Current pointing; LST and alt/az are 0 until a telescope is selected."""
        ra, dec = self.mount.pointing.as_tuple()
        telescope = self.state.telescope
        lst = altitude = azimuth = 0.0
        if telescope is not None:
            lst = calculate_lst(self.clock.utc, telescope.longitude)
            altaz = calculate_alt_az(ra, dec, lst, telescope.latitude)
            altitude, azimuth = altaz.altitude, altaz.azimuth
        return PointingInfo(ra=ra, dec=dec, lst=lst, altitude=altitude, azimuth=azimuth,
                            telescope=telescope, utc=self.clock.utc)

    def view(self, fov_deg: float) -> ViewSnapshot:
        ra, dec = self.mount.pointing.as_tuple()
        return ViewSnapshot(
            center_ra=ra,
            center_dec=dec,
            fov_deg=fov_deg,
            objects=self.catalog.objects_in_view(ra, dec, fov_deg),
            background_stars=self.catalog.background_in_view(ra, dec, fov_deg),
        )

    def snapshot(self) -> EngineSnapshot:
        info = self.pointing_info()
        return EngineSnapshot(
            pointing=info,
            ra_label=format_ra(info.ra),
            dec_label=format_dec(info.dec),
            slew_state=self.mount.state,
            slew_speed=self.mount.speed.label,
            field_name=self.state.field.name if self.state.field is not None else "",
            finder=self.view(self.config.finder_fov_deg),
            photometer_view=self.view(self.config.photometer_fov_deg),
            spectrometer_view=self.view(self.config.spec_fov_deg),
            photometer_integrating=self.photometer.integrating,
            photometer_progress=self.photometer.progress,
            spectrometer_integrating=self.spectrometer.integrating,
            slit_status=self.spectrometer.slit_status(),
        )

    # -----------------------------------------------------------------------
    # Time
    # -----------------------------------------------------------------------

    def advance(self, dt: float) -> int:
        """Run the simulation forward dt seconds; returns ticks fired."""
        fired = self.scheduler.advance(dt)
        # Slit object follows the pointing, frozen during an exposure
        if not self.spectrometer.integrating:
            self.spectrometer.update_slit()
        return fired

    def _on_clock_tick(self):
        self.clock.tick(self.config.clock_interval_s)
        self.state.clock_ticks += 1

    # -----------------------------------------------------------------------
    # Slewing
    # -----------------------------------------------------------------------

    def start_slew(self, direction: Direction | str) -> bool:
        return self.mount.start_slew(direction)

    def stop_slew(self):
        self.mount.stop_slew()

    def abort_slew(self):
        self.mount.abort()

    def cycle_slew_speed(self) -> str:
        return self.mount.cycle_speed().label

    def slew_to(self, ra: float, dec: float, name: str = ""):
        self.mount.slew_to(SlewTarget(ra, dec, name))

    def select_object(self, obj: CelestialObject):
        """Select a catalog object and auto-slew to it."""
        self.state.selected_object = obj
        self.mount.slew_to(SlewTarget.from_object(obj))

    def select_at_offset(self, dx_deg: float, dy_deg: float) -> Optional[CelestialObject]:
        """Finder click at a sky offset from the centre; slews if an object is near."""
        ra, dec = self.mount.pointing.as_tuple()
        obj = self.catalog.select_at_offset(dx_deg, dy_deg, ra, dec)
        if obj is not None:
            self.select_object(obj)
        return obj

    # -----------------------------------------------------------------------
    # Instruments
    # -----------------------------------------------------------------------

    def take_photometry(self) -> PhotometryResult:
        """Immediate measurement without the timed integration."""
        return self.photometer.perform_photometry()

    def shutdown(self):
        """Cancel every ticker."""
        self.mount.abort()
        self.photometer.abort()
        self.spectrometer.finalize()
        self._clock_ticker.cancel()
