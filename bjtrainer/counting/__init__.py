"""Card counting systems."""

from typing import Callable

from bjtrainer.counting.base import CountingSystem
from bjtrainer.counting.hilo import HiLoSystem, hi_lo_value
from bjtrainer.counting.hiopt import HiOpt1System, HiOpt2System
from bjtrainer.counting.ko import KOSystem
from bjtrainer.counting.omega2 import Omega2System
from bjtrainer.counting.zen import ZenSystem

# Systems the simulator tracks alongside the shoe's own Hi-Lo count,
# keyed by play-strategy name.
COUNTING_SYSTEMS: dict[str, Callable[[], CountingSystem]] = {
    "ko": KOSystem,
    "hiopt1": HiOpt1System,
    "hiopt2": HiOpt2System,
    "omega2": Omega2System,
    "zen": ZenSystem,
}


def create_counting_system(name: str) -> CountingSystem:
    """Build a fresh counter for a play-strategy name."""
    try:
        return COUNTING_SYSTEMS[name]()
    except KeyError:
        raise ValueError(f"Unknown counting system: {name}") from None


__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "KOSystem",
    "HiOpt1System",
    "HiOpt2System",
    "Omega2System",
    "ZenSystem",
    "COUNTING_SYSTEMS",
    "create_counting_system",
    "hi_lo_value",
]
