"""Zen Count card counting system."""

from typing import Mapping

from bjtrainer.cards import Rank
from bjtrainer.counting.base import CountingSystem


class ZenSystem(CountingSystem):
    """
    Zen Count.

    Multi-level and balanced. Unlike Omega II the ace carries a -1 tag, so no
    ace side count is needed for betting.

    Tag values:
        2, 3, 7: +1
        4, 5, 6: +2
        8, 9: 0
        10-K: -2
        A: -1
    """

    _TAG_VALUES: Mapping[Rank, float] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 2,
        Rank.FIVE: 2,
        Rank.SIX: 2,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
        Rank.ACE: -1,
    }

    @property
    def name(self) -> str:
        return "Zen Count"

    @property
    def tag_values(self) -> Mapping[Rank, float]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True
