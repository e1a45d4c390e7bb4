"""Tests for table and simulation configuration."""

from decimal import Decimal

import pytest

from bjtrainer.config import GameSettings, SimulationDefaults


class TestGameSettings:
    """Tests for GameSettings."""

    def test_environment_defaults(self, monkeypatch):
        monkeypatch.setenv("BJ_DECKS", "2")
        monkeypatch.setenv("BJ_HIT_SOFT_17", "false")
        monkeypatch.setenv("BJ_MIN_BET", "25")
        monkeypatch.setenv("BJ_BANKROLL", "2500")
        settings = GameSettings()
        assert settings.number_of_decks == 2
        assert not settings.hit_soft_17
        assert settings.minimum_bet == 25
        assert settings.starting_bankroll == Decimal("2500")

    def test_bankroll_coerced_to_decimal(self):
        settings = GameSettings(starting_bankroll=150)
        assert isinstance(settings.starting_bankroll, Decimal)
        assert settings.starting_bankroll == Decimal("150")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"number_of_decks": 0},
            {"number_of_decks": 9},
            {"penetration": 0.0},
            {"penetration": 1.2},
            {"blackjack_payout": 0.5},
            {"minimum_bet": 0},
            {"minimum_bet": 100, "maximum_bet": 50},
            {"number_of_ai_players": 10},
            {"human_seat_position": -1},
        ],
    )
    def test_invalid_settings(self, overrides):
        with pytest.raises(ValueError):
            GameSettings(**overrides)

    def test_with_overrides_returns_copy(self, settings):
        changed = settings.with_overrides(number_of_decks=2)
        assert changed.number_of_decks == 2
        assert settings.number_of_decks == 6

    def test_settings_are_frozen(self, settings):
        with pytest.raises(AttributeError):
            settings.number_of_decks = 2

    def test_total_seats(self, settings):
        assert settings.total_seats == 1
        assert settings.with_overrides(number_of_ai_players=3).total_seats == 4

    def test_presets(self):
        assert not GameSettings.vegas_strip().hit_soft_17
        assert GameSettings.downtown_vegas().hit_soft_17
        single = GameSettings.single_deck()
        assert single.number_of_decks == 1
        assert not single.allow_surrender
        assert not single.allow_double_after_split
        assert GameSettings.atlantic_city().number_of_decks == 8


class TestSimulationDefaults:
    def test_chunk_size_from_environment(self, monkeypatch):
        monkeypatch.setenv("BJ_SIM_CHUNK_SIZE", "50")
        assert SimulationDefaults().chunk_size == 50

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            SimulationDefaults(chunk_size=0)
