"""
Process-wide random number facility.

All stochastic decisions of a run draw from one Lottery so that a run can be
reproduced from the seed of the installed generator. Reproducibility only
holds while draws are serialized: the facility is safe to use from several
threads, but interleaved draws come out in an unpredictable order.

    set_generator(StandardRNG(42))
    lot = get_instance()
    lot.next_double()
"""
from __future__ import annotations
import logging
import threading
from typing import Optional

from .generators import RNGenerator, StandardRNG

logger = logging.getLogger(__name__)


class LotteryNotInitializedError(RuntimeError):
    """Raised by a strict Lottery when drawing before a generator was installed."""


class Lottery:
    """
    Front end to an exchangeable RNGenerator.

    A non-strict lottery without a generator initializes itself from system
    entropy on first use and logs a warning, which makes the run silently
    non-reproducible. A strict lottery raises LotteryNotInitializedError instead.
    """
    def __init__(self, generator: Optional[RNGenerator] = None, strict: bool = False):
        self._rng: Optional[RNGenerator] = generator
        self.strict = strict
        self._lock = threading.Lock()

    def set_generator(self, generator: RNGenerator) -> None:
        """Install generator, replacing (and dropping the stream of) the previous one."""
        with self._lock:
            self._rng = generator

    @property
    def initialized(self) -> bool:
        return self._rng is not None

    def _generator(self) -> RNGenerator:
        # caller holds the lock
        if self._rng is None:
            if self.strict:
                raise LotteryNotInitializedError("Lottery got no random number generator!")
            rng = StandardRNG()
            logger.warning("Lottery got no random number generator! Initialized: %s",
                           rng.information(), stack_info=True)
            self._rng = rng
        return self._rng

    def information(self) -> str:
        with self._lock:
            return self._generator().information()

    def next_boolean(self) -> bool:
        with self._lock:
            return self._generator().next_boolean()

    def next_double(self) -> float:
        with self._lock:
            return self._generator().next_double()

    def next_float(self) -> float:
        with self._lock:
            return self._generator().next_float()

    def next_gaussian(self) -> float:
        with self._lock:
            return self._generator().next_gaussian()

    def next_int(self, n: Optional[int] = None) -> int:
        """Full signed 32 bit range, or [0, n) if n is given."""
        if n is not None and n <= 0:
            raise ValueError(f"bound must be positive, got {n}")
        with self._lock:
            return self._generator().next_int(n)

    def next_long(self) -> int:
        with self._lock:
            return self._generator().next_long()


_instance = Lottery()
_instance_lock = threading.Lock()


def get_instance() -> Lottery:
    return _instance


def set_generator(generator: RNGenerator) -> None:
    """Install generator in the process-wide lottery."""
    with _instance_lock:
        _instance.set_generator(generator)


def reset() -> None:
    """Drop the process-wide generator, back to the uninitialized state."""
    with _instance_lock:
        with _instance._lock:
            _instance._rng = None
