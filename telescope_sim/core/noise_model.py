"""
Noise Model Utilities

Random variates used by every instrument simulation:
- Poisson photon counts (Knuth for small means, normal approximation above)
- Standard normal deviates (Box-Muller)
- Deterministic generator seeding (SplitMix64)

All draws come from a single uniform(0,1) source. By default that is a
NumPy Generator; tests pass any zero-argument callable instead.
"""

from __future__ import annotations
import math
from typing import Callable, Optional

import numpy as np

UniformSource = Callable[[], float]

# Above this mean the multiplicative algorithm underflows / gets slow
POISSON_KNUTH_LIMIT = 30.0


class NoiseModel:
    """
    Photon-statistics generator.

    Args:
        uniform: Zero-argument callable returning floats in [0, 1)
        rng: NumPy generator used when no uniform source is given
    """

    def __init__(self, uniform: Optional[UniformSource] = None,
                 rng: Optional[np.random.Generator] = None):
        if uniform is None:
            gen = rng if rng is not None else np.random.default_rng()
            uniform = gen.random
        self._uniform = uniform

    def uniform(self) -> float:
        return float(self._uniform())

    def _uniform_open(self) -> float:
        # (0, 1): an exact zero would hit log(0)
        u = 0.0
        while u == 0.0:
            u = self.uniform()
        return u

    def normal(self) -> float:
        """Standard normal deviate via Box-Muller."""
        u1 = self._uniform_open()
        u2 = self._uniform_open()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def poisson(self, lam: float) -> int:
        """
        Poisson deviate with mean lam.

        For lam < 30 uses Knuth's product-of-uniforms algorithm (exact).
        Otherwise round(max(0, lam + sqrt(lam)·Z)).
        """
        if lam <= 0.0:
            return 0
        if lam < POISSON_KNUTH_LIMIT:
            limit = math.exp(-lam)
            k = 0
            p = 1.0
            while True:
                k += 1
                p *= self.uniform()
                if p <= limit:
                    return k - 1
        return int(round(max(0.0, lam + math.sqrt(lam) * self.normal())))

    def poisson_array(self, rates: np.ndarray) -> np.ndarray:
        """Independent Poisson deviate for every element of rates."""
        return np.fromiter((self.poisson(float(r)) for r in rates),
                           dtype=np.int64, count=len(rates))


def splitmix64(x: int) -> int:
    """
    SplitMix64 hash function for deterministic RNG seeding

    Args:
        x: Input seed (64-bit integer)

    Returns:
        Hashed 64-bit integer
    """
    x = (x + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    return (z ^ (z >> 31)) & 0xFFFFFFFFFFFFFFFF


def hash_u64(*vals: int) -> int:
    """Hash several integers into one 64-bit seed."""
    x = 0xA5A5A5A5A5A5A5A5
    for v in vals:
        x ^= (v & 0xFFFFFFFFFFFFFFFF)
        x = splitmix64(x)
    return x


def rng_from_seed(seed_u64: int) -> np.random.Generator:
    """NumPy Generator from a 64-bit seed."""
    return np.random.default_rng(np.uint64(seed_u64))


def seed_from_text(text: str) -> int:
    """Stable 64-bit seed from a string (e.g. a field name)."""
    return hash_u64(*text.encode("utf-8"))
