from __future__ import annotations
from typing import List, Optional
import numpy as np

from .base import LocalOptimizer, LocOptResult


class ChainedLocOpt(LocalOptimizer):
    """
    Run several local optimizers one after the other, each starting from the
    previous result. A stage ending at or above cutoff stops the chain and the
    energy is clamped to cutoff.
    """
    def __init__(self, stages: List[LocalOptimizer], cutoff: float = np.inf, context=None):
        super().__init__({"cutoff": cutoff}, context)
        if not stages:
            raise ValueError("Wrong input for chained local optimization: no stages.")
        self.stages: List[LocalOptimizer] = list(stages)
        self.cutoff: float = float(cutoff)

    def ident(self) -> str:
        s = "CHAINED LOCAL OPTIMIZATION:"
        for stage in self.stages:
            s += "\n\t" + stage.ident()
        s += f"\n\tcutoff: {self.cutoff}"
        return s

    def _optimize(self, objective, x0: np.ndarray) -> LocOptResult:
        x = x0
        n_evals = 0
        res: Optional[LocOptResult] = None
        for stage in self.stages:
            res = stage.optimize(objective, x)
            n_evals += res.n_evals
            if res.f >= self.cutoff:
                return LocOptResult(x=res.x, f=self.cutoff, n_evals=n_evals, converged=False,
                                    message=f"cutoff reached in {stage.ident()}")
            x = res.x
        return LocOptResult(x=res.x, f=res.f, n_evals=n_evals, converged=res.converged, message=res.message)
