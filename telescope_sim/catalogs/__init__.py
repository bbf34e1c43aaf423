"""
Catalogs package — field catalogs, background stars and spatial queries.

Usage:
    from telescope_sim.catalogs import Catalog
    catalog = Catalog()
    catalog.load_from_file("data/PLEIADES.json")
    inside = catalog.find_objects_in_aperture(ra, dec, aperture_arcsec=20)
"""
from .background import BackgroundStarParams, DEFAULT_BACKGROUND, generate_background_stars
from .catalog import Catalog, CatalogStatistics, NearestObject
from .fields import FIELDS, find_field
from .loader import load_catalog_file, records_to_objects
from .sample_data import SAMPLE_DATA

__all__ = [
    "BackgroundStarParams",
    "DEFAULT_BACKGROUND",
    "generate_background_stars",
    "Catalog",
    "CatalogStatistics",
    "NearestObject",
    "FIELDS",
    "find_field",
    "load_catalog_file",
    "records_to_objects",
    "SAMPLE_DATA",
]
