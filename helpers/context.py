from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from . import lottery as _lottery
from . import stats as _stats
from .generators import RNGenerator, StandardRNG
from .lottery import Lottery
from .stats import DetailStatistics


@dataclass
class RunContext:
    """
    Randomness and counters of one run, handed to whoever needs them instead
    of going through the process-wide instances.
    """
    lottery: Lottery = field(default_factory=lambda: Lottery(strict=True))
    stats: DetailStatistics = field(default_factory=DetailStatistics)

    @classmethod
    def create(cls, seed: Optional[int] = None, generator: Optional[RNGenerator] = None,
               detailed_stats: bool = False) -> "RunContext":
        """
        Isolated context with a strict lottery. Either a generator or a seed
        for the default StandardRNG has to be given.
        """
        if generator is None:
            if seed is None:
                raise ValueError("RunContext needs a seed or a generator")
            generator = StandardRNG(seed)
        return cls(lottery=Lottery(generator, strict=True),
                   stats=DetailStatistics(enabled=detailed_stats))

    @classmethod
    def process_default(cls) -> "RunContext":
        """Context wrapping the process-wide lottery and statistics."""
        return cls(lottery=_lottery.get_instance(), stats=_stats.get_statistics())
