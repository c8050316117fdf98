"""
Adapters between the objective contract (fitness/gradient at a point) and the
call shapes external local optimizers expect.

All adapters share one EvaluationCore doing the iteration counting, the
best-point tracking and the optional normalization to the unit hypercube.
The adapters themselves only unpack the optimizer's arguments:

- ScalarAdapter:   f(x) -> energy
- GradientAdapter: g(x) -> gradient
- OffsetAdapter:   f(n, params) -> energy, params holding x at params[1:n+1]

Adapters are owned by exactly one optimization run; they are not reentrant.
"""
from __future__ import annotations
from typing import List, Optional
import numpy as np

from .base import Bounds, FitnessBackend, GradientBackend, as_bounds, denormalize, normalizes


class EvaluationCore:
    """
    Bookkeeping shared by all adapters of one run.

    If the objective declares does_normalize and bounds are given, points
    coming from the optimizer live in [0,1]^D and are denormalized before
    reaching the objective. Otherwise points are passed through untouched.
    """
    def __init__(self, objective: FitnessBackend, bounds: Optional[Bounds] = None, keep_trace: bool = False):
        assert isinstance(objective, FitnessBackend), f"{objective!r} has no fitness()"
        self.objective = objective
        self.iter: int = 0
        self.trace: Optional[List[float]] = [] if keep_trace else None
        self._best_e: float = np.inf
        self._best_p: Optional[np.ndarray] = None
        self._bounds = as_bounds(bounds) if bounds is not None and normalizes(objective) else None

    @property
    def normalizing(self) -> bool:
        return self._bounds is not None

    @property
    def span(self) -> Optional[np.ndarray]:
        if self._bounds is None:
            return None
        return self._bounds[1] - self._bounds[0]

    def to_physical(self, point) -> np.ndarray:
        p = np.asarray(point, dtype=float)
        if self._bounds is None:
            return p
        return denormalize(self._bounds, p)

    def fitness(self, point) -> float:
        phys = self.to_physical(point)
        e = self.objective.fitness(phys, self.iter)
        self.record(phys, e)
        if self.trace is not None:
            self.trace.append(float(e))
        self.iter += 1
        return e

    def gradient(self, point, out_gradient: np.ndarray) -> float:
        phys = self.to_physical(point)
        e = self.objective.gradient(phys, out_gradient, self.iter)
        if self._bounds is not None:
            # dE/dn = dE/dx * (hi - lo)
            out_gradient *= self.span
        self.iter += 1
        return e

    def record(self, point: np.ndarray, energy: float) -> None:
        if self._best_p is None:
            self._best_p = np.empty(len(point), dtype=float)
        # strict improvement: first occurrence of the minimum wins
        if energy < self._best_e:
            self._best_e = float(energy)
            self._best_p[:] = point

    def best_energy(self) -> float:
        return self._best_e

    def best_point(self) -> Optional[np.ndarray]:
        if self._best_p is None or not np.isfinite(self._best_e):
            return None
        return self._best_p.copy()


class _Adapter:

    def __init__(self, objective, bounds: Optional[Bounds] = None, core: Optional[EvaluationCore] = None,
                 keep_trace: bool = False):
        self.core = core if core is not None else EvaluationCore(objective, bounds, keep_trace)

    @property
    def iteration(self) -> int:
        return self.core.iter

    def __call__(self, *args):
        return self.evaluate(*args)


class ScalarAdapter(_Adapter):
    """
    Energy-only adapter, e.g. scipy.optimize.minimize(adapter, x0).

    Some optimizers do not hand back the best point they have seen (or none at
    all when they hit their evaluation limit), so the best energy and point are
    kept here for retrieval after the run.
    """

    def evaluate(self, point) -> float:
        return self.core.fitness(point)

    def best_energy(self) -> float:
        return self.core.best_energy()

    def best_point(self) -> Optional[np.ndarray]:
        """Best point seen so far, in physical coordinates."""
        return self.core.best_point()


class GradientAdapter(_Adapter):
    """Gradient-only adapter, e.g. jac= of scipy.optimize.minimize."""

    def __init__(self, objective: GradientBackend, bounds: Optional[Bounds] = None,
                 core: Optional[EvaluationCore] = None):
        super().__init__(objective, bounds, core)
        assert isinstance(self.core.objective, GradientBackend), f"{self.core.objective!r} has no gradient()"
        self._last_e: float = np.inf

    def evaluate(self, point) -> np.ndarray:
        grad = np.zeros(len(point), dtype=float)
        self._last_e = self.core.gradient(point, grad)
        return grad

    def last_energy(self) -> float:
        return self._last_e


class OffsetAdapter(_Adapter):
    """
    Adapter for legacy routines passing (n, params) with the n coordinates
    stored from params[offset] on (offset 1 for one-based buffers).
    """

    def __init__(self, objective, bounds: Optional[Bounds] = None, core: Optional[EvaluationCore] = None,
                 offset: int = 1, keep_trace: bool = False):
        super().__init__(objective, bounds, core, keep_trace)
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        self.offset = int(offset)
        self._work: Optional[np.ndarray] = None

    def evaluate(self, length: int, raw_params) -> float:
        n = int(length)
        assert len(raw_params) >= n + self.offset, "parameter buffer shorter than length + offset"
        if self._work is None or len(self._work) != n:
            self._work = np.empty(n, dtype=float)
        self._work[:] = raw_params[self.offset:self.offset + n]
        return self.core.fitness(self._work)

    def pack(self, point) -> np.ndarray:
        """Build an offset buffer holding point."""
        p = np.asarray(point, dtype=float)
        buf = np.zeros(len(p) + self.offset, dtype=float)
        buf[self.offset:] = p
        return buf

    def best_energy(self) -> float:
        return self.core.best_energy()

    def best_point(self) -> Optional[np.ndarray]:
        return self.core.best_point()
