from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence


# Project root: .../package
PROJECT_ROOT = Path(__file__).resolve().parents[1]

RESULTS_ROOT = PROJECT_ROOT / "data" / "results"


@dataclass
class RunConfig:
    """Minimal run configuration metadata to store with each local optimization run."""
    problem: str         # e.g. "harmonic_5d"
    algorithm: str       # e.g. "bounded", "cg", "lbfgs", "powell"
    dim: int
    seed: int
    rng: str = ""        # generator information string


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def create_run_dir(problem: str, root: Path | None = None) -> Path:
    """
    Create and return a unique directory for a single run.

    Structure:
        {root}/{problem}/run_YYYYmmdd_HHMMSS_XXXX/
    """
    if not problem:
        raise ValueError("problem name must not be empty")
    base = Path(root) if root is not None else RESULTS_ROOT
    base = base / problem
    _ensure_dir(base)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = datetime.now().strftime("%f")[-4:]
    run_dir = base / f"run_{timestamp}_{suffix}"
    n = 0
    while run_dir.exists():
        n += 1
        run_dir = base / f"run_{timestamp}_{suffix}_{n}"
    _ensure_dir(run_dir)
    return run_dir


def save_trace_csv(run_dir: Path, energies: Sequence[float], best: Sequence[float] | None = None) -> Path:
    """
    Save the energy trace of a local optimization:
        iter, energy, best_energy
    The running best is computed if not given.
    """
    if best is None:
        best = []
        current = float("inf")
        for e in energies:
            current = min(current, float(e))
            best.append(current)

    path = Path(run_dir) / "trace.csv"
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["iter", "energy", "best_energy"])
        for i, (e, b) in enumerate(zip(energies, best)):
            writer.writerow([i, e, b])
    return path


def save_statistics_report(run_dir: Path, lines: Iterable[str]) -> Path:
    """Write the detailed statistics report lines to statistics.txt."""
    path = Path(run_dir) / "statistics.txt"
    path.write_text("\n".join(lines) + "\n")
    return path


def save_run_metadata(run_dir: Path, config: RunConfig, extra: Dict[str, Any] | None = None) -> Path:
    """
    Save run configuration and optional extra info to metadata.json.
    """
    meta: Dict[str, Any] = asdict(config)
    if extra:
        meta.update(extra)

    path = Path(run_dir) / "metadata.json"
    with path.open("w") as f:
        json.dump(meta, f, indent=2)
    return path
