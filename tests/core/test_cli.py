"""Tests for the simulation command line."""

import json
from decimal import Decimal

import pytest

from bjtrainer.cli import build_config, build_parser, main


class TestBuildConfig:
    def test_defaults(self):
        config = build_config(build_parser().parse_args([]))
        assert config.play_strategy == "basic"
        assert config.bet_system == "flat"
        assert config.number_of_hands == 10000
        assert config.bet_spread == {1: 1, 2: 2, 3: 4, 4: 8, 5: 12}

    def test_rule_preset_and_overrides(self):
        args = build_parser().parse_args(
            ["--rules", "single-deck", "--decks", "2", "--bankroll", "250.50", "--spread", "wong"]
        )
        config = build_config(args)
        assert config.settings.number_of_decks == 2
        assert not config.settings.allow_surrender
        assert config.settings.starting_bankroll == Decimal("250.50")
        assert config.bet_spread[5] == 16

    def test_unknown_play_strategy_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--play", "card_shark"])


class TestMain:
    """Tests for the bjtrainer-sim entry point."""

    def test_prints_summary(self, capsys):
        code = main(["--hands", "20", "--seed", "1", "--bankroll", "100000", "--chunk-size", "7"])
        assert code == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary["done"] is True
        assert summary["seed"] == 1
        assert summary["results"]["rounds_played"] == 20
        assert len(summary["results"]["bankroll_history"]) == 21
        assert Decimal(summary["results"]["final_bankroll"]) > 0

    def test_no_history(self, capsys):
        main(["--hands", "5", "--seed", "2", "--play", "hilo", "--bet-system", "spread", "--no-history"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["play_strategy"] == "hilo"
        assert summary["results"]["bankroll_history"] == []

    def test_invalid_config_returns_error(self, capsys):
        assert main(["--bet", "0"]) == 2
        assert capsys.readouterr().out == ""
