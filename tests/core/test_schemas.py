"""Tests for the pydantic export models."""

import json
from decimal import Decimal

from bjtrainer.cards import Card
from bjtrainer.hand import Action, HandResult
from bjtrainer.schemas import CardModel, GameStateModel, SimulationSummary
from bjtrainer.simulation import SimulationConfig, create_simulation, run_simulation_chunk


class TestCardModel:
    def test_face_up_card(self):
        model = CardModel.from_card(Card.from_string("AS"))
        assert model == CardModel(rank="A", suit="spades", value=11, face_up=True)

    def test_face_down_card_is_hidden(self):
        model = CardModel.from_card(Card.from_string("KH").face_down())
        assert model.rank == "?"
        assert model.suit == "?"
        assert model.value == 0
        assert not model.face_up


class TestGameStateModel:
    """Tests for whole-table exports."""

    def test_hole_card_hidden_during_player_turn(self, make_engine):
        engine = make_engine("10S AD 9H 6C", allow_insurance=False)
        engine.place_bet(0, 10)
        engine.deal()

        model = GameStateModel.from_state(engine.get_state())
        dealer = model.dealer_hand
        assert dealer.value == 11
        assert dealer.is_soft
        assert not dealer.is_blackjack
        assert dealer.cards[1].rank == "?"
        assert model.phase == "player_turn"
        assert model.players[0].hands[0].value == 19
        assert model.shoe_state.count_info.running_count == -2

    def test_settled_round(self, make_engine):
        engine = make_engine("10S 7D 9H 10C")
        engine.place_bet(0, 10)
        engine.deal()
        engine.player_action(Action.STAND)
        engine.start_dealer_turn()
        engine.resolve_all_hands()

        model = GameStateModel.from_state(engine.get_state())
        assert model.dealer_hand.value == 17
        assert model.dealer_hand.cards[1].rank == "10"
        assert model.round_results[0].result == HandResult.WIN
        assert model.round_results[0].payout == Decimal("10")
        assert model.players[0].bankroll == Decimal("1010")
        assert model.players[0].hands[0].result == HandResult.WIN

    def test_json_round_trip(self, engine):
        engine.place_bet(0, 10)
        engine.deal()
        data = json.loads(GameStateModel.from_state(engine.get_state()).model_dump_json())
        assert data["round_number"] == 1
        assert len(data["players"][0]["hands"][0]["cards"]) >= 2
        assert GameStateModel.model_validate(data).round_number == 1


class TestSimulationSummary:
    def test_from_state(self, settings):
        config = SimulationConfig(number_of_hands=20, settings=settings, seed=8)
        state = create_simulation(config)
        run_simulation_chunk(state)

        summary = SimulationSummary.from_state(state)
        assert summary.done
        assert summary.seed == 8
        assert summary.results.rounds_played == 20
        assert summary.results.final_bankroll == state.results.final_bankroll
        assert len(summary.results.bankroll_history) == 21

    def test_without_history(self, settings):
        config = SimulationConfig(number_of_hands=5, settings=settings, seed=8)
        state = create_simulation(config)
        run_simulation_chunk(state)

        summary = SimulationSummary.from_state(state, include_history=False)
        assert summary.results.bankroll_history == []
        assert len(state.results.bankroll_history) == 6
