"""
Detailed optimization statistics.

Counting is off by default: every increment is a no-op and every read is
zero until enable_all_details() is called. Once enabled it stays enabled.
Counters are process local, runs spread over several processes are not
summed up.
"""
from __future__ import annotations
import threading
from typing import Dict, List


class _Counter:
    """Monotonic counter with its own lock."""
    __slots__ = ("_value", "_lock")

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class DummyDetailedStats:
    """Backend used while statistics are disabled."""

    def increment_trials(self) -> None:
        pass

    def increment_local_opts(self) -> None:
        pass

    def increment_fitness_evals(self) -> None:
        pass

    def increment_gradient_evals(self) -> None:
        pass

    def increment_sanity_discards(self) -> None:
        pass

    def increment_unknown(self, key: str) -> None:
        pass

    def get_total_trials(self) -> int:
        return 0

    def get_total_local_opts(self) -> int:
        return 0

    def get_total_fitness_evals(self) -> int:
        return 0

    def get_total_gradient_evals(self) -> int:
        return 0

    def get_total_sanity_discards(self) -> int:
        return 0

    def get_all_unknown_counters(self) -> Dict[str, int]:
        return {}


class BasicDetailedStats:

    def __init__(self):
        self._trials = _Counter()
        self._local_opts = _Counter()
        self._fitness_evals = _Counter()
        self._gradient_evals = _Counter()
        self._sanity_discards = _Counter()
        self._unknown: Dict[str, _Counter] = {}
        self._unknown_lock = threading.Lock()

    def increment_trials(self) -> None:
        self._trials.increment()

    def increment_local_opts(self) -> None:
        self._local_opts.increment()

    def increment_fitness_evals(self) -> None:
        self._fitness_evals.increment()

    def increment_gradient_evals(self) -> None:
        self._gradient_evals.increment()

    def increment_sanity_discards(self) -> None:
        self._sanity_discards.increment()

    def increment_unknown(self, key: str) -> None:
        with self._unknown_lock:
            counter = self._unknown.get(key)
            if counter is None:
                counter = self._unknown[key] = _Counter()
        counter.increment()

    def get_total_trials(self) -> int:
        return self._trials.value

    def get_total_local_opts(self) -> int:
        return self._local_opts.value

    def get_total_fitness_evals(self) -> int:
        return self._fitness_evals.value

    def get_total_gradient_evals(self) -> int:
        return self._gradient_evals.value

    def get_total_sanity_discards(self) -> int:
        return self._sanity_discards.value

    def get_all_unknown_counters(self) -> Dict[str, int]:
        with self._unknown_lock:
            items = list(self._unknown.items())
        return {k: c.value for k, c in items}


class DetailStatistics:
    """Facade forwarding to the currently installed backend."""

    def __init__(self, enabled: bool = False):
        self._lock = threading.Lock()
        self._enabled = False
        self._backend = DummyDetailedStats()
        if enabled:
            self.enable_all_details()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable_all_details(self) -> None:
        with self._lock:
            if not self._enabled:
                self._backend = BasicDetailedStats()
                self._enabled = True

    def increment_trials(self) -> None:
        self._backend.increment_trials()

    def increment_local_opts(self) -> None:
        self._backend.increment_local_opts()

    def increment_fitness_evals(self) -> None:
        self._backend.increment_fitness_evals()

    def increment_gradient_evals(self) -> None:
        self._backend.increment_gradient_evals()

    def increment_sanity_discards(self) -> None:
        self._backend.increment_sanity_discards()

    def increment_unknown(self, key: str) -> None:
        self._backend.increment_unknown(key)

    def get_total_trials(self) -> int:
        return self._backend.get_total_trials()

    def get_total_local_opts(self) -> int:
        return self._backend.get_total_local_opts()

    def get_total_fitness_evals(self) -> int:
        return self._backend.get_total_fitness_evals()

    def get_total_gradient_evals(self) -> int:
        return self._backend.get_total_gradient_evals()

    def get_total_sanity_discards(self) -> int:
        return self._backend.get_total_sanity_discards()

    def get_all_unknown_counters(self) -> Dict[str, int]:
        return self._backend.get_all_unknown_counters()

    def get_output(self) -> List[str]:
        if not self._enabled:
            return [
                "#######################################",
                "",
                "Detailed statistics were not enabled.",
                "",
                "#######################################",
            ]

        b = self._backend
        trials = b.get_total_trials()
        out = [
            "",
            "",
            "#######################################",
            "",
            "",
            "                 WARNING",
            "IF YOU INTEND TO BASE ANYTHING FOR PUBLICATIONS",
            "ON THESE COUNTERS REMEMBER THEY ARE APPROXIMATIVE.",
            "THEY SHOULD BE SENSIBLE FOR RELATIVE COMPARISONS",
            "(APPLE TO APPLE) BUT WE MAKE NO GUARANTEES!",
            "THEY ONLY COVER THIS PROCESS, RUNS SPREAD OVER",
            "SEVERAL PROCESSES ARE NOT ACCOUNTED FOR.",
            "",
            "",
            "#######################################",
            "",
            f"Total number of trials:                {trials}",
            f"      translated to child individuals: {2 * trials}",
            f"Number of sanity based discards:       {b.get_total_sanity_discards()}",
            f"Number of local optimizations:         {b.get_total_local_opts()}",
            f"Number of fitness evaluations:         {b.get_total_fitness_evals()}",
            f"Number of gradient evaluations:        {b.get_total_gradient_evals()}",
        ]
        for key, value in b.get_all_unknown_counters().items():
            out.append(f"Number of {key}: {value}")
        out += ["", "#######################################", "", ""]
        return out


_stats = DetailStatistics()


def get_statistics() -> DetailStatistics:
    return _stats


def enable_all_details() -> None:
    _stats.enable_all_details()


def increment_trials() -> None:
    _stats.increment_trials()


def increment_local_opts() -> None:
    _stats.increment_local_opts()


def increment_fitness_evals() -> None:
    _stats.increment_fitness_evals()


def increment_gradient_evals() -> None:
    _stats.increment_gradient_evals()


def increment_sanity_discards() -> None:
    _stats.increment_sanity_discards()


def increment_unknown(key: str) -> None:
    _stats.increment_unknown(key)


def get_total_trials() -> int:
    return _stats.get_total_trials()


def get_total_local_opts() -> int:
    return _stats.get_total_local_opts()


def get_total_fitness_evals() -> int:
    return _stats.get_total_fitness_evals()


def get_total_gradient_evals() -> int:
    return _stats.get_total_gradient_evals()


def get_total_sanity_discards() -> int:
    return _stats.get_total_sanity_discards()


def get_all_unknown_counters() -> Dict[str, int]:
    return _stats.get_all_unknown_counters()


def get_output() -> List[str]:
    return _stats.get_output()
