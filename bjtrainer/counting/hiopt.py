"""Hi-Opt I and Hi-Opt II card counting systems."""

from typing import Mapping

from bjtrainer.cards import Rank
from bjtrainer.counting.base import CountingSystem


class HiOpt1System(CountingSystem):
    """
    Hi-Opt I counting system.

    Single-level and balanced. Twos and aces are neutral, which makes it
    more accurate for playing decisions than Hi-Lo.

    Tag values:
        3-6: +1
        2, 7-9, A: 0
        10-K: -1
    """

    _TAG_VALUES: Mapping[Rank, float] = {
        Rank.TWO: 0,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 0,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
        Rank.ACE: 0,
    }

    @property
    def name(self) -> str:
        return "Hi-Opt I"

    @property
    def tag_values(self) -> Mapping[Rank, float]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True


class HiOpt2System(CountingSystem):
    """
    Hi-Opt II counting system.

    Multi-level and balanced, with fours and fives worth +2 and ten-value
    cards worth -2. Aces are neutral.
    """

    _TAG_VALUES: Mapping[Rank, float] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 2,
        Rank.FIVE: 2,
        Rank.SIX: 1,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
        Rank.ACE: 0,
    }

    @property
    def name(self) -> str:
        return "Hi-Opt II"

    @property
    def tag_values(self) -> Mapping[Rank, float]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True
