# experiments/run_locopt.py
import argparse
import logging
from pathlib import Path

import numpy as np

from benchmarks.griewank import GriewankObjective
from benchmarks.harmonic import HarmonicObjective
from helpers.context import RunContext
from helpers.random_utils import random_point_in_bounds
from helpers.recorder import RunConfig, create_run_dir, save_run_metadata, save_statistics_report, save_trace_csv
from locopt.chained import ChainedLocOpt
from locopt.drivers import BoundedLocOpt, ConjugateGradientLocOpt, LBFGSLocOpt, PowellLocOpt

DRIVERS = {
    "bounded": BoundedLocOpt,
    "cg": ConjugateGradientLocOpt,
    "lbfgs": LBFGSLocOpt,
    "powell": PowellLocOpt,
}


def build_problem(name: str, dim: int, ctx: RunContext):
    if name == "griewank":
        return GriewankObjective(dim, half_width=600.0, normalized=True, context=ctx)
    if name == "harmonic":
        return HarmonicObjective(a=1.0, x0=4.2, low=0.0, high=46.2, normalized=True, context=ctx)
    raise ValueError(f"Unknown problem: {name}")


def build_driver(names, ctx: RunContext, keep_trace: bool):
    stages = [DRIVERS[n]({"keep_trace": keep_trace}, context=ctx) for n in names]
    if len(stages) == 1:
        return stages[0]
    return ChainedLocOpt(stages)


def multistart(problem, driver, ctx: RunContext, dim: int, n_starts: int):
    """Local optimizations from n_starts random points, best result first."""
    results = []
    for _ in range(n_starts):
        ctx.stats.increment_trials()
        x0 = random_point_in_bounds(problem.bounds(np.zeros(dim)), lot=ctx.lottery)
        res = driver.optimize(problem, x0)
        if not np.isfinite(res.f):
            ctx.stats.increment_sanity_discards()
            continue
        results.append(res)
    results.sort(key=lambda r: r.f)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--problem", type=str, default="griewank", choices=["griewank", "harmonic"])
    parser.add_argument("--D", type=int, default=5, help="Dimension of the problem")
    parser.add_argument("--driver", type=str, nargs="+", default=["bounded"], choices=sorted(DRIVERS),
                        help="Local optimizer(s); more than one are chained")
    parser.add_argument("--starts", type=int, default=10, help="Number of random starting points")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--stats", action="store_true", help="Enable detailed statistics")
    parser.add_argument("--out", type=str, default=None, help="Results root (default data/results)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    ctx = RunContext.create(seed=args.seed, detailed_stats=args.stats)
    problem = build_problem(args.problem, args.D, ctx)
    driver = build_driver(args.driver, ctx, keep_trace=len(args.driver) == 1)

    results = multistart(problem, driver, ctx, args.D, args.starts)
    best = results[0] if results else None

    run_dir = create_run_dir(f"{args.problem}_{args.D}d", root=Path(args.out) if args.out else None)
    cfg = RunConfig(problem=args.problem, algorithm="+".join(args.driver), dim=args.D, seed=args.seed,
                    rng=ctx.lottery.information())
    extra = {"n_results": len(results)}
    if best is not None:
        extra.update({"f_best": float(best.f), "x_best": [float(v) for v in best.x]})
        if best.trace:
            save_trace_csv(run_dir, best.trace)
    save_run_metadata(run_dir, cfg, extra)
    report = ctx.stats.get_output()
    save_statistics_report(run_dir, report)

    print("Best:", None if best is None else best.as_dict())
    print("\n".join(report))
    return run_dir


if __name__ == "__main__":
    main()
