from __future__ import annotations
import logging
import warnings
from typing import Dict, Optional, Tuple
import numpy as np
from scipy.optimize import Bounds as ScipyBounds
from scipy.optimize import minimize

from .adapters import GradientAdapter, OffsetAdapter, ScalarAdapter
from .base import (BOUNDS_ALL, BOUNDS_NONE, LocalOptimizer, LocOptResult, as_bounds,
                   normalize, normalizes, project)

logger = logging.getLogger(__name__)


def _objective_bounds(objective, x0: np.ndarray) -> Optional[np.ndarray]:
    if getattr(objective, "bounds_type", BOUNDS_NONE) == BOUNDS_NONE:
        return None
    return as_bounds(objective.bounds(x0))


def _search_space(objective, x0: np.ndarray, borders: Optional[np.ndarray]) -> Tuple[np.ndarray, Optional[ScipyBounds]]:
    """Starting point and scipy bounds in the space the optimizer works in."""
    if borders is None:
        return x0, None
    x0 = project(x0, borders)
    if normalizes(objective):
        dim = len(x0)
        return normalize(borders, x0), ScipyBounds(np.zeros(dim), np.ones(dim))
    return x0, ScipyBounds(borders[0], borders[1])


def _pick_best(res_f: float, res_x: np.ndarray, adapter) -> Tuple[float, np.ndarray]:
    # the optimizer's final iterate is not guaranteed to be the best one seen
    best_p = adapter.best_point()
    if best_p is not None and adapter.best_energy() < res_f:
        return adapter.best_energy(), best_p
    return res_f, res_x


class BoundedLocOpt(LocalOptimizer):
    """
    Derivative-free, fully bound-constrained local optimization.

    Options:
    - method: scipy method, one of COBYQA (default), Powell, Nelder-Mead
    - max_evals: maximum number of fitness evaluations (default 2000)
    - initial_trust_radius: initial trust region radius (default 0.1)
    - converged_trust_radius: final trust region radius (default 1e-6)
    """
    METHODS = ("COBYQA", "Powell", "Nelder-Mead")

    def __init__(self, options: Optional[Dict] = None, context=None):
        super().__init__(options, context)
        opt = self.options
        self.method: str = str(opt.get("method", "COBYQA"))
        self.max_evals: int = int(opt.get("max_evals", 2000))
        self.initial_radius: float = float(opt.get("initial_trust_radius", 0.1))
        self.converged_radius: float = float(opt.get("converged_trust_radius", 1e-6))
        self.keep_trace: bool = bool(opt.get("keep_trace", False))
        if self.method not in self.METHODS:
            raise ValueError(f"Unknown bounded method: {self.method}")

    def ident(self) -> str:
        return f"BOUNDED LOCAL OPTIMIZATION ({self.method})"

    def _method_options(self) -> Dict:
        if self.method == "COBYQA":
            return {"maxfev": self.max_evals,
                    "initial_tr_radius": self.initial_radius,
                    "final_tr_radius": self.converged_radius}
        if self.method == "Nelder-Mead":
            return {"maxfev": self.max_evals, "xatol": self.converged_radius, "fatol": self.converged_radius}
        return {"maxfev": self.max_evals, "xtol": self.converged_radius}

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        bounds_type = getattr(objective, "bounds_type", BOUNDS_NONE)
        if bounds_type != BOUNDS_ALL:
            warnings.warn(f"{self.ident()} is fully bound-constrained, the objective is bounded "
                          f"to degree '{bounds_type}'. Continuing with best estimate bounds.")
        borders = as_bounds(objective.bounds(x0))
        start, scipy_bounds = _search_space(objective, x0, borders)

        adapter = ScalarAdapter(objective, borders, keep_trace=self.keep_trace)
        logger.debug("%s starting from %s", self.ident(), x0)
        res = minimize(adapter, start, method=self.method, bounds=scipy_bounds,
                       options=self._method_options())

        x = adapter.core.to_physical(res.x).copy()
        f, x = _pick_best(float(res.fun), x, adapter)
        logger.debug("%s finished after %d evaluations: %s", self.ident(), adapter.iteration, res.message)
        return LocOptResult(x=x, f=f, n_evals=adapter.iteration, converged=bool(res.success),
                            message=str(res.message), trace=adapter.core.trace)


class ConjugateGradientLocOpt(LocalOptimizer):
    """
    Nonlinear conjugate gradient (scipy CG) fed by separate energy and
    gradient callables.

    Options:
    - max_iter: maximum number of iterations (default 1000)
    - gtol: gradient norm convergence threshold (default 1e-6)
    """
    def __init__(self, options: Optional[Dict] = None, context=None):
        super().__init__(options, context)
        opt = self.options
        self.max_iter: int = int(opt.get("max_iter", 1000))
        self.gtol: float = float(opt.get("gtol", 1e-6))

    def ident(self) -> str:
        return "CONJUGATE GRADIENT LOCAL OPTIMIZATION"

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        energies = ScalarAdapter(objective)
        gradients = GradientAdapter(objective)

        res = minimize(energies, x0, jac=gradients, method="CG",
                       options={"maxiter": self.max_iter, "gtol": self.gtol})
        n_evals = energies.iteration + gradients.iteration

        if res.status == 1:
            # iteration limit: fall back to the best point the adapter has seen
            logger.warning("Too many iterations in %s. Not converged!", self.ident())
            best_p = energies.best_point()
            if best_p is None:
                return LocOptResult(x=x0.copy(), f=np.inf, n_evals=n_evals, converged=False,
                                    message=str(res.message))
            return LocOptResult(x=best_p, f=energies.best_energy(), n_evals=n_evals, converged=False,
                                message=str(res.message))

        f, x = _pick_best(float(res.fun), np.array(res.x, dtype=float), energies)
        return LocOptResult(x=x, f=f, n_evals=n_evals, converged=bool(res.success), message=str(res.message))


class LBFGSLocOpt(LocalOptimizer):
    """
    Limited memory BFGS (scipy L-BFGS-B), energy and gradient from one call.

    Options:
    - n_corrections: number of stored corrections (default 7)
    - max_iter: maximum number of iterations (default 1000)
    - conv: relative energy convergence (default 1e-10)
    - gtol: projected gradient convergence (default 1e-6)
    - max_linesearch: maximum line search steps (default 20)
    """
    def __init__(self, options: Optional[Dict] = None, context=None):
        super().__init__(options, context)
        opt = self.options
        self.n_corrections: int = int(opt.get("n_corrections", 7))
        self.max_iter: int = int(opt.get("max_iter", 1000))
        self.conv: float = float(opt.get("conv", 1e-10))
        self.gtol: float = float(opt.get("gtol", 1e-6))
        self.max_linesearch: int = int(opt.get("max_linesearch", 20))

    def ident(self) -> str:
        return "L-BFGS LOCAL OPTIMIZATION"

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        borders = _objective_bounds(objective, x0)
        start, scipy_bounds = _search_space(objective, x0, borders)
        gradients = GradientAdapter(objective, borders)

        def energy_and_gradient(x):
            g = gradients.evaluate(x)
            return gradients.last_energy(), g

        res = minimize(energy_and_gradient, start, jac=True, method="L-BFGS-B", bounds=scipy_bounds,
                       options={"maxcor": self.n_corrections, "maxiter": self.max_iter,
                                "ftol": self.conv, "gtol": self.gtol, "maxls": self.max_linesearch})
        x = gradients.core.to_physical(res.x).copy()
        return LocOptResult(x=x, f=float(res.fun), n_evals=gradients.iteration, converged=bool(res.success),
                            message=str(res.message))


def _powell_one_based(n: int, params: np.ndarray, method, options: Dict,
                      bounds: Optional[ScipyBounds] = None) -> Tuple[float, int]:
    """
    Minimize method(n, params) over params[1:n+1] in the style of the classic
    one-based routines: the optimum is written back into params, the minimum
    and a status (0 ok, 1 too many evaluations, 2 other) are returned.
    """
    trial = params.copy()

    def fun(x):
        trial[1:n + 1] = x
        return method(n, trial)

    res = minimize(fun, params[1:n + 1].copy(), method="Powell", bounds=bounds, options=options)
    params[1:n + 1] = res.x
    if res.success:
        status = 0
    elif res.status in (1, 2):
        status = 1
    else:
        status = 2
    return float(res.fun), status


class PowellLocOpt(LocalOptimizer):
    """
    Derivative-free direction set search (scipy Powell) driven through the
    one-based (n, params) calling convention.

    Options:
    - max_evals: maximum number of fitness evaluations (default 5000)
    - conv: convergence threshold on the fitness (default 1e-8)
    - xtol: step vector tolerance (default 1e-6)
    """
    def __init__(self, options: Optional[Dict] = None, context=None):
        super().__init__(options, context)
        opt = self.options
        self.max_evals: int = int(opt.get("max_evals", 5000))
        self.conv: float = float(opt.get("conv", 1e-8))
        self.xtol: float = float(opt.get("xtol", 1e-6))
        self.keep_trace: bool = bool(opt.get("keep_trace", False))

    def ident(self) -> str:
        return "POWELL LOCAL OPTIMIZATION"

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        borders = _objective_bounds(objective, x0)
        start, scipy_bounds = _search_space(objective, x0, borders)
        dims = len(start)

        adapter = OffsetAdapter(objective, borders, offset=1, keep_trace=self.keep_trace)
        params = adapter.pack(start)
        fmin, status = _powell_one_based(dims, params, adapter, bounds=scipy_bounds,
                                         options={"maxfev": self.max_evals, "ftol": self.conv, "xtol": self.xtol})
        if status == 1:
            logger.warning("Too many iterations in %s.", self.ident())
        elif status == 2:
            logger.warning("%s terminated abnormally.", self.ident())

        x = adapter.core.to_physical(params[1:]).copy()
        f, x = _pick_best(fmin, x, adapter)
        return LocOptResult(x=x, f=f, n_evals=adapter.iteration, converged=(status == 0), trace=adapter.core.trace)
