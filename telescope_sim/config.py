"""
Engine configuration.

Every constant table the simulator uses (telescopes, fields, filters,
photometer settings, slew speeds, spectrometer grid, tick rates) bundled
in one immutable object. The engine hands it to each component at
construction time.

    cfg = DEFAULT_CONFIG.with_overrides(data_dir=Path("/srv/catalogs"))
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

import numpy as np

from .atmosphere.atmospheric_model import SKY_SCALE
from .catalogs.background import DEFAULT_BACKGROUND, BackgroundStarParams
from .catalogs.fields import FIELDS
from .core.types import FieldConfig, TelescopeConfig
from .instruments.equipment import (
    APERTURE_SIZES,
    DEFAULT_APERTURE_INDEX,
    DEFAULT_INTEGRATION_INDEX,
    DEFAULT_SLEW_SPEED_INDEX,
    DEFAULT_TELESCOPE_DIAM,
    FILTERS,
    FINDER_FOV_DEG,
    INTEGRATION_TIMES,
    PHOTOMETER_FOV_DEG,
    SLEW_SPEEDS,
    SLIT_HEIGHT_DEG,
    SLIT_WIDTH_DEG,
    SPEC_FOV_DEG,
    TELESCOPES,
    FilterBand,
    SlewSpeed,
)
from .spectra.synthesis import GALAXY_LINES, GalaxyLine


@dataclass(frozen=True)
class EngineConfig:
    # Equipment and sky
    telescopes: Tuple[TelescopeConfig, ...] = TELESCOPES
    fields: Tuple[FieldConfig, ...] = FIELDS
    filters: Mapping[str, FilterBand] = field(default_factory=lambda: MappingProxyType(dict(FILTERS)))
    default_filter: str = "V"
    sky_scale: float = SKY_SCALE

    # Fallback telescope (no telescope selected)
    default_telescope_diameter: float = DEFAULT_TELESCOPE_DIAM

    # Photometer
    aperture_sizes: Tuple[float, ...] = APERTURE_SIZES
    integration_times: Tuple[float, ...] = INTEGRATION_TIMES
    default_aperture_index: int = DEFAULT_APERTURE_INDEX
    default_integration_index: int = DEFAULT_INTEGRATION_INDEX

    # Spectrometer
    slit_width_deg: float = SLIT_WIDTH_DEG
    slit_height_deg: float = SLIT_HEIGHT_DEG
    spectrum_min_wave: float = 3900.0       # Å
    spectrum_max_wave: float = 4500.0       # Å, inclusive
    spectrum_step: float = 1.0              # Å
    galaxy_mag_scale: float = 0.45          # galaxy brightness convention
    galaxy_lines: Tuple[GalaxyLine, ...] = GALAXY_LINES

    # Views
    finder_fov_deg: float = FINDER_FOV_DEG
    photometer_fov_deg: float = PHOTOMETER_FOV_DEG
    spec_fov_deg: float = SPEC_FOV_DEG
    background: BackgroundStarParams = DEFAULT_BACKGROUND

    # Mount
    slew_speeds: Tuple[SlewSpeed, ...] = SLEW_SPEEDS
    default_slew_speed_index: int = DEFAULT_SLEW_SPEED_INDEX

    # Tick periods (seconds)
    clock_interval_s: float = 1.0
    photometer_interval_s: float = 0.1
    spectrometer_interval_s: float = 0.25

    # Resources
    data_dir: Path = Path("data")
    spectral_library_file: str = "jacoby_atlas.json"

    def __post_init__(self):
        if any(t <= 0 for t in self.integration_times):
            raise ValueError(f"Integration times must be positive: {self.integration_times}")
        for name in ("clock_interval_s", "photometer_interval_s", "spectrometer_interval_s"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    # ── Derived tables ───────────────────────────────────────────────────────

    @property
    def zero_points(self) -> Dict[str, float]:
        return {b: f.zero_point for b, f in self.filters.items()}

    @property
    def extinction_coeffs(self) -> Dict[str, float]:
        return {b: f.extinction for b, f in self.filters.items()}

    @property
    def sky_brightness(self) -> Dict[str, float]:
        return {b: f.sky_brightness for b, f in self.filters.items()}

    @property
    def wavelengths(self) -> np.ndarray:
        """Spectrometer grid, both ends included."""
        n = int(round((self.spectrum_max_wave - self.spectrum_min_wave) / self.spectrum_step)) + 1
        return self.spectrum_min_wave + np.arange(n, dtype=float) * self.spectrum_step

    @property
    def spectral_library_path(self) -> Path:
        return Path(self.data_dir) / self.spectral_library_file

    def catalog_path(self, obs_field: FieldConfig) -> Path:
        return Path(self.data_dir) / obs_field.filename

    def with_overrides(self, **changes) -> "EngineConfig":
        """Copy with some fields replaced (unknown names raise TypeError)."""
        return replace(self, **changes)


DEFAULT_CONFIG = EngineConfig()
