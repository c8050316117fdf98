import numpy as np

from locopt.base import BOUNDS_ALL, Objective


def griewank(x: np.ndarray) -> float:
    """
    Griewank benchmark function.
    Global minimum at x = 0, f = 0. Bounds typically [-600, 600]^D.
    """
    x = np.asarray(x, dtype=float)
    s = np.sum(x * x) / 4000.0
    p = np.prod(np.cos(x / np.sqrt(np.arange(1, len(x) + 1, dtype=float))))
    return 1.0 + s - p


def griewank_gradient(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    sq = np.sqrt(np.arange(1, len(x) + 1, dtype=float))
    c = np.cos(x / sq)
    grad = x / 2000.0
    for i in range(len(x)):
        others = np.prod(np.delete(c, i))
        grad[i] += others * np.sin(x[i] / sq[i]) / sq[i]
    return grad


class GriewankObjective(Objective):
    """Griewank function on a symmetric box, counted in the context's statistics if given."""
    bounds_type = BOUNDS_ALL

    def __init__(self, dim: int, half_width: float = 600.0, normalized: bool = False, context=None):
        self.dim = int(dim)
        self.half_width = float(half_width)
        self.does_normalize = normalized
        self.context = context

    def ident(self) -> str:
        return f"griewank {self.dim}D in [-{self.half_width}, {self.half_width}]"

    def fitness(self, point: np.ndarray, iteration: int) -> float:
        if self.context is not None:
            self.context.stats.increment_fitness_evals()
        return griewank(point)

    def gradient(self, point: np.ndarray, out_gradient: np.ndarray, iteration: int) -> float:
        if self.context is not None:
            self.context.stats.increment_gradient_evals()
        out_gradient[:] = griewank_gradient(point)
        return griewank(point)

    def bounds(self, point: np.ndarray) -> np.ndarray:
        return np.stack([np.full(self.dim, -self.half_width), np.full(self.dim, self.half_width)])
