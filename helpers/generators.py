from __future__ import annotations
from typing import Optional
import numpy as np

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


def entropy_seed() -> int:
    """A fresh seed drawn from the operating system's entropy pool."""
    return int(np.random.SeedSequence().entropy)


class RNGenerator:
    """
    Random number generator strategy. Everything is derived from the seed
    given at construction so that information() suffices to reproduce a run.
    """
    name = "RNGenerator"

    def __init__(self, seed: Optional[int] = None):
        self.seed: int = entropy_seed() if seed is None else int(seed)
        self._gen = self._make(self.seed)

    def _make(self, seed: int) -> np.random.Generator:
        raise NotImplementedError

    def information(self) -> str:
        return f"{self.name} with seed {self.seed}"

    def next_boolean(self) -> bool:
        return bool(self._gen.integers(0, 2))

    def next_double(self) -> float:
        return float(self._gen.random())

    def next_float(self) -> float:
        return float(self._gen.random(dtype=np.float32))

    def next_gaussian(self) -> float:
        return float(self._gen.standard_normal())

    def next_int(self, n: Optional[int] = None) -> int:
        if n is None:
            return int(self._gen.integers(INT32_MIN, INT32_MAX, endpoint=True))
        return int(self._gen.integers(0, n))

    def next_long(self) -> int:
        return int(self._gen.integers(INT64_MIN, INT64_MAX, endpoint=True, dtype=np.int64))


class StandardRNG(RNGenerator):
    """Default strategy on top of numpy's PCG64 bit generator."""
    name = "StandardRNG (PCG64)"

    def _make(self, seed: int) -> np.random.Generator:
        return np.random.Generator(np.random.PCG64(seed))


class MersenneRNG(RNGenerator):
    name = "MersenneRNG (MT19937)"

    def _make(self, seed: int) -> np.random.Generator:
        return np.random.Generator(np.random.MT19937(seed))
