"""Shared fixtures: deterministic noise, small catalogs and a virtual-time engine."""

import json
from datetime import datetime, timezone
from itertools import cycle

import numpy as np
import pytest

from telescope_sim.catalogs.catalog import Catalog
from telescope_sim.config import DEFAULT_CONFIG
from telescope_sim.core.noise_model import NoiseModel
from telescope_sim.core.scheduler import Scheduler
from telescope_sim.core.types import CelestialObject, FieldConfig, ObjectType, PointingInfo
from telescope_sim.engine.state_manager import ObservatoryEngine


START_UTC = datetime(2024, 3, 20, 3, 0, 0, tzinfo=timezone.utc)

TEST_FIELD = FieldConfig("Test field", "TESTFLD.json", 12.0, 30.0)
MISSING_FIELD = FieldConfig("Missing field", "NOPE.json", 5.0, -10.0)

TEST_RECORDS = [
    {"name": "Star A", "ra": 12.0, "dec": 30.0, "mag": 10.0, "bv": 0.65, "ub": 0.2,
     "objType": 0, "code": 50205000, "specType": "G2 V"},
    {"name": "Star B", "ra": 12.01, "dec": 30.05, "mag": 12.5, "bv": 1.1,
     "objType": 0, "specType": "K0 III"},
    {"name": "Galaxy C", "ra": 11.995, "dec": 29.97, "mag": 14.0, "bv": 0.9, "ub": 0.4,
     "redshift": 0.02, "objType": 1, "code": 10},
]


class SequenceUniform:
    """Uniform source replaying fixed values forever"""

    def __init__(self, *values):
        self._it = cycle(values)

    def __call__(self):
        return next(self._it)


class MeanNoise(NoiseModel):
    """Noise stub: Poisson returns the rounded mean, normal returns z"""

    def __init__(self, z=0.0):
        super().__init__(uniform=SequenceUniform(0.5))
        self.z = z

    def poisson(self, lam):
        return int(round(lam)) if lam > 0 else 0

    def normal(self):
        return self.z


def make_pointing(ra=12.0, dec=30.0, altitude=90.0, telescope=None):
    info = PointingInfo(ra=ra, dec=dec, lst=0.0, altitude=altitude, azimuth=0.0,
                        telescope=telescope, utc=START_UTC)
    return lambda: info


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def test_objects():
    return [
        CelestialObject("Star A", 12.0, 30.0, 10.0, bv=0.65, ub=0.2, spec_type="G2 V", code=50205000),
        CelestialObject("Star B", 12.01, 30.05, 12.5, bv=1.1, spec_type="K0 III"),
        CelestialObject("Galaxy C", 11.995, 29.97, 14.0, bv=0.9, ub=0.4, redshift=0.02,
                        obj_type=ObjectType.GALAXY, code=10),
    ]


@pytest.fixture
def catalog(test_objects):
    cat = Catalog()
    cat.load_objects(test_objects)
    return cat


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / TEST_FIELD.filename).write_text(json.dumps(TEST_RECORDS), encoding="utf-8")
    return tmp_path


@pytest.fixture
def config(data_dir):
    return DEFAULT_CONFIG.with_overrides(
        data_dir=data_dir,
        fields=(TEST_FIELD, MISSING_FIELD) + DEFAULT_CONFIG.fields,
    )


@pytest.fixture
def engine(config, scheduler):
    eng = ObservatoryEngine(config, scheduler=scheduler, start_utc=START_UTC,
                            uniform=SequenceUniform(0.3, 0.7, 0.5, 0.9, 0.1))
    yield eng
    eng.shutdown()
