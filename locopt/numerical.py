from __future__ import annotations
import numpy as np

from .base import Objective

_SQRT_EPS = float(np.sqrt(np.finfo(float).eps))


class NumericalGradientObjective(Objective):
    """
    Wrap a fitness-only objective so gradient based optimizers can drive it.
    Gradients come from a three point (or, with two_point, a forward) stencil
    with a step of 1000*sqrt(eps)*x_i, or sqrt(eps) where x_i is zero.
    """

    def __init__(self, objective, two_point: bool = False):
        self.objective = objective
        self.two_point = two_point
        self.does_normalize = bool(getattr(objective, "does_normalize", False))
        self.bounds_type = getattr(objective, "bounds_type", "none")

    def ident(self) -> str:
        return "numerical gradients of " + getattr(self.objective, "ident", lambda: repr(self.objective))()

    def fitness(self, point: np.ndarray, iteration: int) -> float:
        return self.objective.fitness(point, iteration)

    def bounds(self, point: np.ndarray) -> np.ndarray:
        return self.objective.bounds(point)

    def gradient(self, point: np.ndarray, out_gradient: np.ndarray, iteration: int) -> float:
        x = np.array(point, dtype=float)
        e0 = self.objective.fitness(x, iteration)
        for i in range(len(x)):
            orig = x[i]
            h = 1000.0 * _SQRT_EPS * orig
            if h == 0.0:
                h = _SQRT_EPS

            x[i] = orig + h
            e1 = self.objective.fitness(x, iteration)
            if self.two_point:
                x[i] = orig
                out_gradient[i] = (e1 - e0) / h
                continue

            x[i] = orig - h
            e2 = self.objective.fitness(x, iteration)
            x[i] = orig
            out_gradient[i] = (e1 - e2) / (2.0 * h)

        return e0
