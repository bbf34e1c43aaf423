"""
Catalog — objects of the current field plus its synthetic background stars.

Query interface
---------------
  catalog.find_objects_in_aperture(ra, dec, aperture_arcsec)
  catalog.find_objects_in_slit(ra, dec, width_deg, height_deg)
  catalog.get_nearest_object(ra, dec)        → NearestObject(object, distance)
  catalog.objects_in_view(ra, dec, fov_deg)  → objects inside a view box
  catalog.search_by_name("ngc")              → substring match
  catalog.statistics()                       → counts and magnitude range

Replacement rules
-----------------
  Loading a catalog replaces every object (file order is kept).
  Regenerating the background replaces every background star.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from ..core.coords import angular_separation, offset_to_sky, sky_offset
from ..core.types import BackgroundStar, CelestialObject, ObjectType
from ..errors import CatalogLoadError
from .background import DEFAULT_BACKGROUND, BackgroundStarParams, generate_background_stars
from .loader import load_catalog_file, records_to_objects
from .sample_data import SAMPLE_DATA

logger = logging.getLogger(__name__)

# Finder clicks further than this from any object select nothing
SELECT_THRESHOLD_DEG = 0.1


@dataclass(frozen=True)
class NearestObject:
    object: Optional[CelestialObject]
    distance: float


@dataclass(frozen=True)
class CatalogStatistics:
    total_objects: int
    stars: int
    galaxies: int
    background_stars: int
    brightest_mag: float
    faintest_mag: float
    avg_mag: float


class Catalog:
    """In-memory store for the selected field"""

    def __init__(self, sample_data: Sequence[Mapping] = SAMPLE_DATA):
        self.objects: List[CelestialObject] = []
        self.background_stars: List[BackgroundStar] = []
        self._sample_data = tuple(sample_data)

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    def load_objects(self, objects: Iterable[CelestialObject]) -> List[CelestialObject]:
        self.objects = list(objects)
        return self.objects

    def load_records(self, records: Iterable[Mapping], source: str = "<records>") -> List[CelestialObject]:
        """Replace the catalog from raw records; falls back to the sample on error."""
        try:
            objects = records_to_objects(records, source)
        except CatalogLoadError:
            self.load_sample_data()
            raise
        return self.load_objects(objects)

    def load_from_file(self, path: str | Path) -> List[CelestialObject]:
        """
        Replace the catalog from a JSON file.

        Raises:
            CatalogLoadError: after installing the sample catalog
        """
        try:
            objects = load_catalog_file(path)
        except CatalogLoadError as e:
            logger.error("Error loading catalog: %s", e)
            self.load_sample_data()
            raise
        return self.load_objects(objects)

    def load_sample_data(self) -> List[CelestialObject]:
        logger.warning("Loading sample catalog data")
        return self.load_objects(records_to_objects(self._sample_data, "sample data"))

    def generate_background_stars(self, center_ra: float, center_dec: float, fov_deg: float,
                                  dense: bool = False,
                                  rng: Optional[np.random.Generator] = None,
                                  params: BackgroundStarParams = DEFAULT_BACKGROUND) -> List[BackgroundStar]:
        self.background_stars = generate_background_stars(
            center_ra, center_dec, fov_deg, dense=dense, rng=rng, params=params)
        return self.background_stars

    def clear(self):
        self.objects = []
        self.background_stars = []

    def __len__(self) -> int:
        return len(self.objects)

    # -----------------------------------------------------------------------
    # Spatial queries
    # -----------------------------------------------------------------------

    def find_objects_in_aperture(self, center_ra: float, center_dec: float,
                                 aperture_arcsec: float) -> List[CelestialObject]:
        """Objects within half the aperture diameter of the centre (flat-sky separation)."""
        radius_deg = aperture_arcsec / 3600.0 / 2.0
        return [o for o in self.objects
                if angular_separation(center_ra, center_dec, o.ra, o.dec) <= radius_deg]

    def find_objects_in_slit(self, center_ra: float, center_dec: float,
                             slit_width_deg: float, slit_height_deg: float) -> List[CelestialObject]:
        """Objects inside the rectangular slit (RA offset scaled by cos(center_dec))."""
        cos_dec = math.cos(math.radians(center_dec))
        half_w = slit_width_deg / 2.0
        half_h = slit_height_deg / 2.0
        return [o for o in self.objects
                if abs((o.ra - center_ra) * 15.0 * cos_dec) <= half_w
                and abs(o.dec - center_dec) <= half_h]

    def get_nearest_object(self, ra: float, dec: float) -> NearestObject:
        nearest = None
        min_distance = math.inf
        for obj in self.objects:
            d = angular_separation(ra, dec, obj.ra, obj.dec)
            if d < min_distance:
                min_distance = d
                nearest = obj
        return NearestObject(nearest, min_distance)

    def select_near(self, ra: float, dec: float,
                    threshold_deg: float = SELECT_THRESHOLD_DEG) -> Optional[CelestialObject]:
        """Nearest object if it lies within threshold_deg, else None."""
        hit = self.get_nearest_object(ra, dec)
        if hit.object is not None and hit.distance < threshold_deg:
            return hit.object
        return None

    def select_at_offset(self, dx_deg: float, dy_deg: float, center_ra: float,
                         center_dec: float) -> Optional[CelestialObject]:
        """Finder click: offset from the view centre (degrees) -> nearby object."""
        ra, dec = offset_to_sky(dx_deg, dy_deg, center_ra, center_dec)
        return self.select_near(ra, dec)

    def objects_in_view(self, center_ra: float, center_dec: float,
                        fov_deg: float) -> List[CelestialObject]:
        half = fov_deg / 2.0
        out = []
        for o in self.objects:
            dx, dy = sky_offset(o.ra, o.dec, center_ra, center_dec)
            if abs(dx) <= half and abs(dy) <= half:
                out.append(o)
        return out

    def background_in_view(self, center_ra: float, center_dec: float,
                           fov_deg: float) -> List[BackgroundStar]:
        half = fov_deg / 2.0
        out = []
        for s in self.background_stars:
            dx, dy = sky_offset(s.ra, s.dec, center_ra, center_dec)
            if abs(dx) <= half and abs(dy) <= half:
                out.append(s)
        return out

    # -----------------------------------------------------------------------
    # Browsing
    # -----------------------------------------------------------------------

    def objects_by_magnitude(self, ascending: bool = True) -> List[CelestialObject]:
        return sorted(self.objects, key=lambda o: o.mag, reverse=not ascending)

    def objects_by_type(self, obj_type: ObjectType) -> List[CelestialObject]:
        return [o for o in self.objects if o.obj_type == obj_type]

    def stars(self) -> List[CelestialObject]:
        return self.objects_by_type(ObjectType.STAR)

    def galaxies(self) -> List[CelestialObject]:
        return self.objects_by_type(ObjectType.GALAXY)

    def search_by_name(self, query: str) -> List[CelestialObject]:
        q = query.lower()
        return [o for o in self.objects if q in o.name.lower()]

    def to_frame(self) -> pd.DataFrame:
        """Table snapshot (catalog order) for display."""
        return pd.DataFrame(
            [(o.name, o.ra, o.dec, o.mag, o.spec_type, o.type_label) for o in self.objects],
            columns=["name", "ra", "dec", "mag", "spec_type", "type"],
        )

    def statistics(self) -> CatalogStatistics:
        mags = self.to_frame()["mag"]
        return CatalogStatistics(
            total_objects=len(self.objects),
            stars=len(self.stars()),
            galaxies=len(self.galaxies()),
            background_stars=len(self.background_stars),
            brightest_mag=float(mags.min()) if len(mags) else math.nan,
            faintest_mag=float(mags.max()) if len(mags) else math.nan,
            avg_mag=float(mags.mean()) if len(mags) else math.nan,
        )
