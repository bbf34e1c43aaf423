from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ObjectType(Enum):
    """Catalog object kind (values match the objType field of catalog files)"""
    STAR = 0
    GALAXY = 1


@dataclass(frozen=True, slots=True)
class CelestialObject:
    name: str
    ra: float               # hours
    dec: float              # degrees
    mag: float              # V magnitude
    bv: float = 0.0         # B-V color
    ub: float = 0.0         # U-B color
    redshift: float = 0.0
    obj_type: ObjectType = ObjectType.STAR
    code: int = 0
    spec_type: str = ""

    def magnitude(self, band: str) -> float:
        """Magnitude through a U/B/V filter (anything else is treated as V)."""
        if band == "U":
            return self.mag + self.bv + self.ub
        if band == "B":
            return self.mag + self.bv
        return self.mag

    @property
    def is_star(self) -> bool:
        return self.obj_type == ObjectType.STAR

    @property
    def is_galaxy(self) -> bool:
        return self.obj_type == ObjectType.GALAXY

    @property
    def type_label(self) -> str:
        return "Star" if self.is_star else "Galaxy"


@dataclass(frozen=True, slots=True)
class BackgroundStar:
    ra: float
    dec: float
    magnitude: float


@dataclass(frozen=True, slots=True)
class TelescopeConfig:
    name: str
    diameter: float         # metres
    latitude: float         # degrees, north positive
    longitude: float        # degrees, east positive
    altitude: float = 0.0   # metres above sea level


@dataclass(frozen=True, slots=True)
class FieldConfig:
    name: str
    filename: str           # catalog resource under the data directory
    ra: float               # field centre, hours
    dec: float              # field centre, degrees
    background: bool = False  # dense synthetic star field


@dataclass(frozen=True, slots=True)
class SlewTarget:
    ra: float
    dec: float
    name: str = ""

    @classmethod
    def from_object(cls, obj: CelestialObject) -> "SlewTarget":
        return cls(ra=obj.ra, dec=obj.dec, name=obj.name)


@dataclass(frozen=True, slots=True)
class AltAz:
    altitude: float
    azimuth: float


@dataclass(frozen=True, slots=True)
class PointingInfo:
    """Where the telescope points right now (display / instrument input)"""
    ra: float                   # hours
    dec: float                  # degrees
    lst: float                  # hours, 0 without a telescope
    altitude: float             # degrees, 0 without a telescope
    azimuth: float
    telescope: Optional[TelescopeConfig]
    utc: datetime
