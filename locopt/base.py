from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable
import numpy as np

# Bounds are a [2][dim] array (row 0 = lower, row 1 = upper). Lists of
# (lo, hi) pairs are converted by from_pairs().
Bounds = Union[Sequence[Sequence[float]], np.ndarray]

BOUNDS_NONE = "none"
BOUNDS_SOME = "some"
BOUNDS_ALL = "all"

_EPS = 1e-12


def from_pairs(pairs: List[Tuple[float, float]]) -> np.ndarray:
    lo = np.array([b[0] for b in pairs], dtype=float)
    hi = np.array([b[1] for b in pairs], dtype=float)
    return np.stack([lo, hi])


def as_bounds(bounds: Bounds) -> np.ndarray:
    """
    Return bounds as a float array of shape (2, dim).

    Lists of (lo, hi) pairs are not accepted here, use from_pairs().
    """
    arr = np.asarray(bounds, dtype=float)
    assert arr.ndim == 2, "bounds must be two-dimensional"
    assert arr.shape[0] == 2, "bounds must hold exactly a lower and an upper row"
    assert np.all(arr[0] <= arr[1]), f"lower bound above upper bound: {arr}"
    return np.ascontiguousarray(arr)


def project(x: np.ndarray, bounds: Bounds) -> np.ndarray:
    b = as_bounds(bounds)
    return np.minimum(np.maximum(x, b[0]), b[1])


def normalize(bounds: Bounds, point, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Map a physical point into the unit hypercube spanned by bounds.

    normalized[i] = (point[i] - lower[i]) / (upper[i] - lower[i])

    A point outside of bounds is a caller error and trips an assertion.
    """
    b = as_bounds(bounds)
    p = np.asarray(point, dtype=float)
    assert b[0].shape == b[1].shape
    assert p.shape == b[0].shape, f"point has {p.shape} coordinates, bounds {b[0].shape}"
    if out is None:
        out = np.empty_like(p)
    assert out.shape == p.shape

    diff = b[1] - b[0]
    assert np.all(diff > 0.0), f"cannot normalize over a zero-width bound: {b}"
    out[:] = (p - b[0]) / diff
    assert np.all((out >= 0.0) & (out <= 1.0)), f"normalized point outside [0,1]: {out}"
    return out


def denormalize(bounds: Bounds, normalized, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Inverse of normalize(): point[i] = normalized[i] * (upper[i] - lower[i]) + lower[i]."""
    b = as_bounds(bounds)
    n = np.asarray(normalized, dtype=float)
    assert b[0].shape == b[1].shape
    assert n.shape == b[0].shape, f"point has {n.shape} coordinates, bounds {b[0].shape}"
    if out is None:
        out = np.empty_like(n)
    assert out.shape == n.shape

    assert np.all((n >= -_EPS) & (n <= 1.0 + _EPS)), f"normalized point outside [0,1]: {n}"

    diff = b[1] - b[0]
    out[:] = n * diff + b[0]
    # last-ulp rounding may step over the upper bound
    np.clip(out, b[0], b[1], out=out)
    return out


@runtime_checkable
class FitnessBackend(Protocol):
    """Anything that can evaluate a scalar energy at a point."""

    def fitness(self, point: np.ndarray, iteration: int) -> float:
        ...


@runtime_checkable
class GradientBackend(FitnessBackend, Protocol):
    """A fitness backend that can also fill an analytic gradient."""

    def gradient(self, point: np.ndarray, out_gradient: np.ndarray, iteration: int) -> float:
        ...


class Objective:
    """
    Base class for concrete problems driven by the local optimizers.

    Subclasses implement fitness() and, if gradient based optimizers shall be
    used, gradient(). Setting does_normalize to True makes the adapters hand
    normalized points to the optimizer and physical points to fitness().
    """
    does_normalize: bool = False
    bounds_type: str = BOUNDS_NONE

    def fitness(self, point: np.ndarray, iteration: int) -> float:
        raise NotImplementedError

    def gradient(self, point: np.ndarray, out_gradient: np.ndarray, iteration: int) -> float:
        raise NotImplementedError

    def bounds(self, point: np.ndarray) -> np.ndarray:
        """Best estimate bounds around point, shape (2, dim)."""
        raise NotImplementedError

    def ident(self) -> str:
        return type(self).__name__


def normalizes(objective) -> bool:
    return bool(getattr(objective, "does_normalize", False))


@dataclass
class LocOptResult:
    x: np.ndarray
    f: float
    n_evals: int
    converged: bool
    message: str = ""
    trace: Optional[List[float]] = None

    def as_dict(self) -> Dict:
        return {"x": self.x.copy(), "f": float(self.f), "n_evals": self.n_evals,
                "converged": self.converged, "message": self.message}


class LocalOptimizer:
    """
    Solver-agnostic local optimization interface: given an objective and a
    starting point, return a locally optimized point and its energy.
    """
    def __init__(self, options: Optional[Dict] = None, context=None):
        self.options: Dict = options or {}
        self.context = context

    def optimize(self, objective, x0) -> LocOptResult:
        if self.context is not None:
            self.context.stats.increment_local_opts()
        return self._optimize(objective, np.array(x0, dtype=float))

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        raise NotImplementedError

    def ident(self) -> str:
        return type(self).__name__
