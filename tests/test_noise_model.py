"""Tests for Poisson / normal variates and seeding helpers."""

import math

import numpy as np
import pytest

from conftest import SequenceUniform
from telescope_sim.core.noise_model import NoiseModel, hash_u64, rng_from_seed, seed_from_text


class TestPoisson:
    def test_zero_and_negative_mean(self):
        noise = NoiseModel(uniform=SequenceUniform(0.5))
        assert noise.poisson(0.0) == 0
        assert noise.poisson(-3.0) == 0

    def test_knuth_with_stub_uniform(self):
        """lam=1: products 0.5, 0.25; e^-1 is crossed at k=2 -> result 1."""
        noise = NoiseModel(uniform=SequenceUniform(0.5))
        assert noise.poisson(1.0) == 1

    def test_knuth_small_uniform(self):
        noise = NoiseModel(uniform=SequenceUniform(0.01))
        assert noise.poisson(2.0) == 0

    def test_large_mean_uses_normal_approximation(self):
        noise = NoiseModel(uniform=SequenceUniform(math.exp(-0.5), 0.5))
        # z = sqrt(1) * cos(pi) = -1 -> round(100 - 10) = 90
        assert noise.poisson(100.0) == 90

    @pytest.mark.parametrize("lam", [10.0, 100.0])
    def test_mean_and_variance(self, lam):
        noise = NoiseModel(rng=np.random.default_rng(2024))
        samples = np.array([noise.poisson(lam) for _ in range(20000)])
        assert samples.mean() == pytest.approx(lam, rel=0.02)
        assert samples.var() == pytest.approx(lam, rel=0.08)
        assert (samples >= 0).all()
        assert samples.dtype.kind == "i"

    def test_poisson_array(self):
        noise = NoiseModel(rng=np.random.default_rng(1))
        out = noise.poisson_array(np.array([0.0, 5.0, 50.0]))
        assert out.shape == (3,)
        assert out[0] == 0
        assert out.dtype == np.int64


class TestNormal:
    def test_zero_draws_skipped(self):
        """Exact zeros are redrawn: 0.0 is skipped, then u1 = u2 = 0.5."""
        noise = NoiseModel(uniform=SequenceUniform(0.0, 0.5, 0.5))
        assert noise.normal() == pytest.approx(-math.sqrt(2.0 * math.log(2.0)))

    def test_standard_moments(self):
        noise = NoiseModel(rng=np.random.default_rng(7))
        z = np.array([noise.normal() for _ in range(20000)])
        assert abs(z.mean()) < 0.05
        assert z.std() == pytest.approx(1.0, abs=0.05)
        assert np.isfinite(z).all()


class TestSeeding:
    def test_rng_from_seed_deterministic(self):
        a = rng_from_seed(42).random(5)
        b = rng_from_seed(42).random(5)
        np.testing.assert_array_equal(a, b)

    def test_seed_from_text_stable(self):
        assert seed_from_text("Pleiades") == seed_from_text("Pleiades")
        assert seed_from_text("Pleiades") != seed_from_text("Bootes")

    def test_hash_range(self):
        assert 0 <= hash_u64(1, 2, 3) < 2 ** 64
