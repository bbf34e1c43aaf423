"""
Observing fields offered by the simulator.

Each field points at a JSON catalog under the data directory. Fields with
background=True get the dense synthetic star field.
"""

from __future__ import annotations
from typing import Optional

from ..core.types import FieldConfig


FIELDS = (
    FieldConfig("Coma Berenices galaxy cluster", "COMAFLD.json",  12.98722222, 27.68361111),
    FieldConfig("Bootes galaxy cluster",         "BOOTFLD.json",  14.50833333, 31.49138888),
    FieldConfig("Corona Borealis galaxy cluster", "CRBORFLD.json", 15.40944444, 27.50166666),
    FieldConfig("Ursa Major I galaxy cluster",   "UMA1FLD.json",  11.80638888, 55.60083333),
    FieldConfig("Ursa Major II galaxy cluster",  "UMA2FLD.json",  10.99611111, 56.80777777),
    FieldConfig("Pleiades star cluster",         "PLEIADES.json",  3.731944,   24.25),
    FieldConfig("Stellar Temperature Group",     "STARTEMP.json",  5.90,        7.40, background=True),
    FieldConfig("Atmospheric Effects Group",     "ATMOGRP.json",  14.71,       16.41, background=True),
)


def find_field(name: str, fields=FIELDS) -> Optional[FieldConfig]:
    """Field by name (case-insensitive), or None."""
    key = name.strip().lower()
    for f in fields:
        if f.name.lower() == key:
            return f
    return None
