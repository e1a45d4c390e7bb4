"""Tests for statistics calculations."""

import pytest
from decimal import Decimal

from bjtrainer.statistics import (
    KellyCalculator,
    calculate_player_advantage,
    get_recommended_bet,
)
from bjtrainer.statistics.advantage import units_for_true_count


class TestPlayerAdvantage:
    """Tests for the count-based edge estimate."""

    def test_neutral_count_favors_house(self):
        assert calculate_player_advantage(0) == pytest.approx(-0.005)

    def test_edge_breaks_even_at_one(self):
        assert calculate_player_advantage(1) == pytest.approx(0.0)

    def test_edge_grows_half_percent_per_count(self):
        assert calculate_player_advantage(4) == pytest.approx(0.015)
        assert calculate_player_advantage(-2) == pytest.approx(-0.015)


class TestBetRamp:
    """Tests for the 1-2-4-8-12 bet ramp."""

    @pytest.mark.parametrize(
        "true_count,units",
        [(-3, 1), (0, 1), (1.9, 1), (2, 2), (3, 4), (4.5, 8), (5, 12), (9, 12)],
    )
    def test_units(self, true_count, units):
        assert units_for_true_count(true_count) == units

    @pytest.mark.parametrize(
        "true_count,amount",
        [(0, "5"), (2, "10"), (3, "20"), (4, "40"), (5, "60")],
    )
    def test_recommended_amounts(self, true_count, amount):
        """Test a $5 unit gives 5/10/20/40/60."""
        rec = get_recommended_bet(true_count, 5, Decimal("1000"))
        assert rec.amount == Decimal(amount)

    def test_capped_at_bankroll(self):
        rec = get_recommended_bet(5, 5, Decimal("30"))
        assert rec.units == 12
        assert rec.amount == Decimal("30")

    def test_includes_advantage(self):
        rec = get_recommended_bet(3, 10, Decimal("1000"))
        assert rec.advantage == pytest.approx(0.01)


class TestKellyCalculator:
    """Tests for Kelly criterion calculations."""

    @pytest.fixture
    def calculator(self):
        return KellyCalculator(
            bankroll=Decimal("10000"),
            min_bet=Decimal("10"),
            max_bet=Decimal("500"),
            kelly_fraction=0.5,
        )

    def test_no_edge_bets_minimum(self, calculator):
        assert calculator.optimal_bet(Decimal("0")) == Decimal("10")
        assert calculator.optimal_bet(Decimal("-0.02")) == Decimal("10")

    def test_half_kelly(self, calculator):
        """Test a 1% edge on $10,000 at half Kelly bets $50."""
        assert calculator.optimal_bet(Decimal("0.01")) == Decimal("50")

    def test_bet_for_true_count(self, calculator):
        assert calculator.bet_for_true_count(0) == Decimal("10")
        assert calculator.bet_for_true_count(3) == Decimal("50")
        assert calculator.bet_for_true_count(20) == Decimal("475")

    def test_clamped_to_max_bet(self, calculator):
        assert calculator.bet_for_true_count(30) == Decimal("500")

    def test_bet_scales_with_bankroll(self):
        small = KellyCalculator(Decimal("2000"), Decimal("10"), Decimal("500"), 0.5)
        assert small.bet_for_true_count(3) == Decimal("10")
        assert small.bet_for_true_count(5) == Decimal("20")
