"""
Telescope pointing (field centre).

RA is kept in [0, 24) hours and Dec in [-90, 90] degrees after every update.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..core.coords import clamp_dec, normalize_hours


@dataclass(slots=True)
class Pointing:
    center_ra: float = 0.0      # hours
    center_dec: float = 0.0     # degrees

    def __post_init__(self):
        self.move_to(self.center_ra, self.center_dec)

    def move_to(self, ra: float, dec: float):
        self.center_ra = normalize_hours(ra)
        self.center_dec = clamp_dec(dec)

    def move_by(self, d_ra: float, d_dec: float):
        self.move_to(self.center_ra + d_ra, self.center_dec + d_dec)

    def as_tuple(self) -> tuple[float, float]:
        return self.center_ra, self.center_dec
