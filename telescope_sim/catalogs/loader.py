"""
Catalog Loader

Turns catalog records (the JSON field files, or any list of dicts) into
CelestialObject instances. Optional fields (bv, ub, redshift, code,
specType) default to 0 / "" when missing or null.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping

import pandas as pd

from ..core.types import CelestialObject, ObjectType
from ..errors import CatalogLoadError

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = ("name", "ra", "dec", "mag", "objType")
OPTIONAL_NUMERIC = {"bv": 0.0, "ub": 0.0, "redshift": 0.0, "code": 0}


def _pick_col(df: pd.DataFrame, *names: str) -> str | None:
    cols = {c.lower().strip(): c for c in df.columns}
    for n in names:
        if n.lower() in cols:
            return cols[n.lower()]
    return None


def records_to_frame(records: Iterable[Mapping], source: str = "<records>") -> pd.DataFrame:
    """
    Normalize raw records into a frame with canonical column names.

    Raises:
        CatalogLoadError: a required field is missing or not numeric
    """
    try:
        df = pd.DataFrame.from_records(list(records))
    except (TypeError, ValueError) as e:
        raise CatalogLoadError(source, f"records are not a list of objects ({e})") from e

    out = pd.DataFrame(index=df.index)
    for field in REQUIRED_FIELDS:
        col = _pick_col(df, field)
        if col is None:
            if df.empty:
                out[field] = pd.Series(dtype=object)
                continue
            raise CatalogLoadError(source, f"missing required field '{field}'")
        out[field] = df[col]

    for field in ("ra", "dec", "mag", "objType"):
        out[field] = pd.to_numeric(out[field], errors="coerce")
        if out[field].isna().any():
            raise CatalogLoadError(source, f"non-numeric or null values in '{field}'")

    bad_types = ~out["objType"].isin([t.value for t in ObjectType])
    if bad_types.any():
        raise CatalogLoadError(source, "objType must be 0 (star) or 1 (galaxy)")

    for field, default in OPTIONAL_NUMERIC.items():
        col = _pick_col(df, field)
        values = pd.to_numeric(df[col], errors="coerce") if col is not None else None
        out[field] = values.fillna(default) if values is not None else default

    col = _pick_col(df, "specType", "spec_type")
    out["specType"] = df[col].fillna("").astype(str) if col is not None else ""
    out["name"] = out["name"].astype(str)
    return out


def frame_to_objects(df: pd.DataFrame) -> List[CelestialObject]:
    return [
        CelestialObject(
            name=row.name,
            ra=float(row.ra),
            dec=float(row.dec),
            mag=float(row.mag),
            bv=float(row.bv),
            ub=float(row.ub),
            redshift=float(row.redshift),
            obj_type=ObjectType(int(row.objType)),
            code=int(row.code),
            spec_type=row.specType,
        )
        for row in df.itertuples(index=False)
    ]


def records_to_objects(records: Iterable[Mapping], source: str = "<records>") -> List[CelestialObject]:
    return frame_to_objects(records_to_frame(records, source))


def load_catalog_file(path: str | Path) -> List[CelestialObject]:
    """
    Read a JSON catalog (a list of object records).

    Raises:
        CatalogLoadError: file missing, unreadable, or malformed
    """
    path = Path(path)
    logger.info("Loading catalog: %s", path.name)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(path.name, str(e)) from e

    if not isinstance(data, list):
        raise CatalogLoadError(path.name, "expected a list of object records")

    objects = records_to_objects(data, source=path.name)
    logger.info("Loaded %d objects from %s", len(objects), path.name)
    return objects
