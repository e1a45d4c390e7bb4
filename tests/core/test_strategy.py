"""Tests for basic strategy, index plays and decision explanations."""

import pytest

from bjtrainer.cards import Card, cards_from_string
from bjtrainer.hand import Action
from bjtrainer.strategy import (
    FAB_4,
    ILLUSTRIOUS_18,
    StrategyCode,
    explain_decision,
    find_deviations,
    get_basic_strategy_action,
    get_basic_strategy_code,
    get_decision_summary,
    get_deviation_action,
    get_strategy_action,
    lookup,
    should_take_insurance,
)
from bjtrainer.strategy.basic import DEALER_UPCARDS, HARD_TABLE, PAIR_TABLE, SOFT_TABLE
from bjtrainer.strategy.reasoning import describe_hand, get_decision_reasoning

ALL_ACTIONS = list(Action)
NO_EXTRAS = [Action.HIT, Action.STAND]

DEALER = {
    2: "2D", 3: "3D", 4: "4D", 5: "5D", 6: "6D",
    7: "7D", 8: "8D", 9: "9D", 10: "KD", 11: "AD",
}


def up(value: int) -> Card:
    return Card.from_string(DEALER[value])


class TestTables:
    """Tests for the chart contents."""

    def test_tables_are_complete(self):
        for dealer in DEALER_UPCARDS:
            for total in range(5, 22):
                assert (total, dealer) in HARD_TABLE
            for total in range(13, 22):
                assert (total, dealer) in SOFT_TABLE
            for key in range(2, 12):
                assert (key, dealer) in PAIR_TABLE

    @pytest.mark.parametrize("dealer", range(2, 11))
    def test_hard_17_always_stand(self, dealer):
        assert get_basic_strategy_code(cards_from_string("10S 7H"), up(dealer)) == StrategyCode.S

    def test_hard_17_vs_ace_surrenders_under_h17(self):
        assert get_basic_strategy_code(cards_from_string("10S 7H"), up(11)) == StrategyCode.Rs

    @pytest.mark.parametrize("dealer", DEALER_UPCARDS)
    def test_hard_11_always_double(self, dealer):
        assert get_basic_strategy_code(cards_from_string("6S 5H"), up(dealer)) == StrategyCode.D

    @pytest.mark.parametrize("dealer", DEALER_UPCARDS)
    def test_pair_aces_and_eights_always_split(self, dealer):
        assert get_basic_strategy_code(cards_from_string("AS AH"), up(dealer)) == StrategyCode.P
        assert get_basic_strategy_code(cards_from_string("8S 8H"), up(dealer)) == StrategyCode.P

    @pytest.mark.parametrize("dealer", DEALER_UPCARDS)
    def test_pair_tens_never_split(self, dealer):
        assert get_basic_strategy_code(cards_from_string("KS 10H"), up(dealer)) == StrategyCode.S

    def test_pair_fives_play_as_ten(self):
        assert get_basic_strategy_code(cards_from_string("5S 5H"), up(9)) == StrategyCode.D
        assert get_basic_strategy_code(cards_from_string("5S 5H"), up(10)) == StrategyCode.H

    def test_soft_19_doubles_against_six(self):
        assert get_basic_strategy_code(cards_from_string("AS 8H"), up(6)) == StrategyCode.Ds
        assert get_basic_strategy_code(cards_from_string("AS 8H"), up(5)) == StrategyCode.S

    @pytest.mark.parametrize("dealer,expected", [(3, StrategyCode.H), (4, StrategyCode.S), (7, StrategyCode.H)])
    def test_hard_12_vs_dealer(self, dealer, expected):
        assert get_basic_strategy_code(cards_from_string("10S 2H"), up(dealer)) == expected


class TestLookup:
    def test_pair_checked_first(self):
        cell = lookup(cards_from_string("8S 8H"), up(10))
        assert cell == ("pair", 8, 10, StrategyCode.P)

    def test_soft_then_hard(self):
        assert lookup(cards_from_string("AS 7H"), up(9)).table == "soft"
        assert lookup(cards_from_string("AS 7H 9C"), up(9)) == ("hard", 17, 9, StrategyCode.S)

    def test_hard_total_clamped(self):
        """Hard totals under 5 use the hard 5 row."""
        assert lookup(cards_from_string("2S"), up(6)).key == 5
        assert lookup(cards_from_string("AS AH AC"), up(6)).table == "soft"


class TestBasicStrategyAction:
    def test_surrender_falls_back_to_hit(self):
        cards = cards_from_string("10S 6H")
        assert get_basic_strategy_action(cards, up(10), ALL_ACTIONS) == Action.SURRENDER
        assert get_basic_strategy_action(cards, up(10), NO_EXTRAS) == Action.HIT

    def test_double_stand_falls_back_to_stand(self):
        """Soft 18 vs 3 doubles with two cards, stands with three."""
        assert get_basic_strategy_action(cards_from_string("AS 7H"), up(3), ALL_ACTIONS) == Action.DOUBLE
        assert get_basic_strategy_action(cards_from_string("AS 4H 3C"), up(3), NO_EXTRAS) == Action.STAND

    def test_split_falls_back_to_hit(self):
        assert get_basic_strategy_action(cards_from_string("2S 2H"), up(2), NO_EXTRAS) == Action.HIT

    @pytest.mark.parametrize(
        "code,fallback",
        [
            (StrategyCode.H, Action.HIT),
            (StrategyCode.S, Action.STAND),
            (StrategyCode.D, Action.HIT),
            (StrategyCode.Ds, Action.STAND),
            (StrategyCode.P, Action.HIT),
            (StrategyCode.Ph, Action.HIT),
            (StrategyCode.Rh, Action.HIT),
            (StrategyCode.Rs, Action.STAND),
        ],
    )
    def test_code_fallbacks(self, code, fallback):
        assert code.resolve(NO_EXTRAS) == fallback
        assert code.resolve(ALL_ACTIONS) == code.primary


class TestIllustrious18:
    """Tests for the Illustrious 18 deviations."""

    def test_deviation_counts(self):
        assert len(ILLUSTRIOUS_18) == 17
        assert len(FAB_4) == 4

    def test_insurance_index(self):
        assert should_take_insurance(3.0)
        assert not should_take_insurance(2.9)

    def test_16_vs_10_stands_at_zero(self):
        cards = cards_from_string("10S 6H")
        assert get_deviation_action(cards, up(10), 0.0, ALL_ACTIONS) == Action.STAND
        assert get_deviation_action(cards, up(10), -0.5, ALL_ACTIONS) is None

    def test_negative_index_hits(self):
        """12 vs 4 hits at or below TC 0."""
        cards = cards_from_string("10S 2H")
        assert get_deviation_action(cards, up(4), 0.0, ALL_ACTIONS) == Action.HIT
        assert get_deviation_action(cards, up(4), -3.0, ALL_ACTIONS) == Action.HIT
        assert get_deviation_action(cards, up(4), 0.5, ALL_ACTIONS) is None

    def test_double_10_vs_ace(self):
        cards = cards_from_string("6S 4H")
        assert get_strategy_action(cards, up(11), ALL_ACTIONS, 4.0) == Action.DOUBLE
        assert get_strategy_action(cards, up(11), ALL_ACTIONS, 3.9) == Action.HIT

    def test_split_tens_vs_six(self):
        cards = cards_from_string("KS QH")
        assert get_strategy_action(cards, up(6), ALL_ACTIONS, 4.0) == Action.SPLIT
        assert get_strategy_action(cards, up(6), ALL_ACTIONS, 3.0) == Action.STAND

    def test_pair_cell_ignores_hard_total_plays(self):
        """8,8 vs 10 is a pair cell, so the 16 vs 10 index play does not apply."""
        cards = cards_from_string("8S 8H")
        assert get_deviation_action(cards, up(10), 5.0, ALL_ACTIONS) is None
        assert get_strategy_action(cards, up(10), ALL_ACTIONS, 5.0) == Action.SPLIT

    def test_no_count_means_basic_strategy(self):
        cards = cards_from_string("10S 6H")
        assert get_strategy_action(cards, up(10), ALL_ACTIONS) == Action.SURRENDER


class TestFab4:
    """Tests for the Fab 4 surrender deviations."""

    def test_surrender_wins_over_stand(self):
        """At +4 both 15 vs 10 plays are active; surrender comes first."""
        cell = lookup(cards_from_string("10S 5H"), up(10))
        active = find_deviations(cell, 4.0)
        assert [play.action for play in active] == [Action.SURRENDER, Action.STAND]
        assert get_deviation_action(cards_from_string("10S 5H"), up(10), 4.0, ALL_ACTIONS) == Action.SURRENDER

    def test_unavailable_surrender_skips_stand_play(self):
        """A three-card 15 vs 10 at +4 cannot surrender, so the chart's hit applies."""
        cards = cards_from_string("10S 3H 2C")
        assert get_deviation_action(cards, up(10), 4.0, NO_EXTRAS) == Action.HIT
        assert get_strategy_action(cards, up(10), NO_EXTRAS, 4.0) == Action.HIT

    def test_unavailable_surrender_uses_chart_fallback(self):
        cards = cards_from_string("10S 3H 2C")
        assert get_deviation_action(cards, up(10), 1.0, NO_EXTRAS) == Action.HIT

    def test_14_vs_10_surrender(self):
        cards = cards_from_string("10S 4H")
        assert get_deviation_action(cards, up(10), 3.0, ALL_ACTIONS) == Action.SURRENDER
        assert get_deviation_action(cards, up(10), 2.0, ALL_ACTIONS) is None

    def test_15_vs_9_surrender(self):
        cards = cards_from_string("9S 6H")
        assert get_strategy_action(cards, up(9), ALL_ACTIONS, 2.0) == Action.SURRENDER
        assert get_strategy_action(cards, up(9), ALL_ACTIONS, 1.0) == Action.HIT


class TestReasoning:
    """Tests for decision explanations."""

    @pytest.mark.parametrize(
        "cards,expected",
        [
            ("8S 8H", "Pair of 8s"),
            ("AS AH", "Pair of Aces"),
            ("AS 7H", "Soft 18"),
            ("10S 6H", "Hard 16"),
        ],
    )
    def test_describe_hand(self, cards, expected):
        assert describe_hand(cards_from_string(cards), up(7)) == expected

    def test_explain_decision(self):
        text = explain_decision(cards_from_string("10S 6H"), Card.from_string("10C"))
        assert text == "Hard 16 vs dealer 10♣: Basic strategy says surrender (hit if not allowed)."

    def test_explain_decision_with_count(self):
        text = explain_decision(cards_from_string("10S 6H"), Card.from_string("10C"), 0.0)
        assert text.endswith("At true count +0.0: Stand on 16 vs 10 at TC 0 or higher.")

    def test_decision_summary(self):
        summary = get_decision_summary(
            cards_from_string("10S 6H"), up(10), Action.HIT, Action.SURRENDER
        )
        assert summary == "Hard 16: should surrender, chose hit"

    def test_decision_reasoning(self):
        cards = cards_from_string("6S 5H")
        assert get_decision_reasoning(cards, up(6), Action.DOUBLE, Action.DOUBLE).endswith(
            "You correctly chose double down."
        )
        assert get_decision_reasoning(cards, up(6), Action.HIT, Action.DOUBLE).endswith(
            "You chose hit instead of double down."
        )
