from typing import Optional
import numpy as np

from locopt.base import BOUNDS_ALL, BOUNDS_NONE, Objective


class HarmonicObjective(Objective):
    """
    f(x) = sum_i a * (x_i - x0)^2 + b

    Minimum at x_i = x0 with f = dim * b. Bounded in [low, high] per
    coordinate if both are given, unbounded otherwise.
    """

    def __init__(self, a: float, x0: float, b: float = 0.0,
                 low: Optional[float] = None, high: Optional[float] = None,
                 normalized: bool = False, context=None):
        self.a = float(a)
        self.x0 = float(x0)
        self.b = float(b)
        self.low = low
        self.high = high
        self.bounds_type = BOUNDS_ALL if low is not None and high is not None else BOUNDS_NONE
        self.does_normalize = normalized
        self.context = context

    def ident(self) -> str:
        return f"harmonic function: a = {self.a}; x0 = {self.x0}; b = {self.b}"

    def fitness(self, point: np.ndarray, iteration: int) -> float:
        if self.context is not None:
            self.context.stats.increment_fitness_evals()
        d = np.asarray(point, dtype=float) - self.x0
        return float(np.sum(self.a * d * d + self.b))

    def gradient(self, point: np.ndarray, out_gradient: np.ndarray, iteration: int) -> float:
        if self.context is not None:
            self.context.stats.increment_gradient_evals()
        d = np.asarray(point, dtype=float) - self.x0
        out_gradient[:] = 2.0 * self.a * d
        return float(np.sum(self.a * d * d + self.b))

    def bounds(self, point: np.ndarray) -> np.ndarray:
        dim = len(point)
        if self.bounds_type == BOUNDS_ALL:
            return np.stack([np.full(dim, float(self.low)), np.full(dim, float(self.high))])
        # best guess: a box around the current point and the minimum
        p = np.asarray(point, dtype=float)
        width = np.abs(p - self.x0) + 1.0
        return np.stack([np.minimum(p, self.x0) - width, np.maximum(p, self.x0) + width])
