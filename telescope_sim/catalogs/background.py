"""
Synthetic background stars for the finder, photometer and spectrometer views.

Positions are uniform in a box of side fov_deg around the field centre.
The RA half-width is fov/15 hours with no cos(dec) stretch, so the box is
narrower on the sky than in declination away from the equator.

Magnitudes follow a power-law luminosity function: with u ~ U(0,1),
    x = u·(10^(0.6·m_max) − 10^(0.6·m_min)) + 10^(0.6·m_min)
    m = log10(x) / 0.6
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.types import BackgroundStar

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BackgroundStarParams:
    dense_count: int = 50000    # fields flagged background=True
    sparse_count: int = 1000
    mag_min: float = 5.0        # brightest
    mag_max: float = 15.0       # faintest
    mag_exponent: float = 0.6


DEFAULT_BACKGROUND = BackgroundStarParams()


def luminosity_function_magnitudes(u: np.ndarray, params: BackgroundStarParams = DEFAULT_BACKGROUND) -> np.ndarray:
    """Map uniform draws onto magnitudes in [mag_min, mag_max]."""
    a = params.mag_exponent
    x_min = 10.0 ** (a * params.mag_min)
    x_max = 10.0 ** (a * params.mag_max)
    x = u * (x_max - x_min) + x_min
    return np.log10(x) / a


def generate_background_stars(center_ra: float, center_dec: float, fov_deg: float,
                              dense: bool = False,
                              rng: Optional[np.random.Generator] = None,
                              params: BackgroundStarParams = DEFAULT_BACKGROUND) -> List[BackgroundStar]:
    """
    Args:
        center_ra: Field centre RA (hours)
        center_dec: Field centre Dec (degrees)
        fov_deg: Box size in degrees
        dense: Use the dense star count
        rng: NumPy generator (default: fresh unseeded generator)

    Returns:
        New list of BackgroundStar
    """
    rng = rng if rng is not None else np.random.default_rng()
    n = params.dense_count if dense else params.sparse_count

    ra = center_ra + (rng.random(n) - 0.5) * fov_deg / 15.0
    dec = center_dec + (rng.random(n) - 0.5) * fov_deg
    mags = luminosity_function_magnitudes(rng.random(n), params)

    stars = [BackgroundStar(float(r), float(d), float(m)) for r, d, m in zip(ra, dec, mags)]
    logger.info("Generated %d background stars", len(stars))
    return stars
