"""Tests for the event emitter."""

from bjtrainer.game import EventEmitter, EventType, GameEvent


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_and_catch_all_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []
        emitter.subscribe(typed.append, EventType.BET_PLACED)
        emitter.subscribe(everything.append)

        emitter.emit_new(EventType.BET_PLACED, amount=10)
        emitter.emit_new(EventType.CARD_DEALT, card="A♠")

        assert [event.event_type for event in typed] == [EventType.BET_PLACED]
        assert [event.event_type for event in everything] == [
            EventType.BET_PLACED,
            EventType.CARD_DEALT,
        ]
        assert typed[0].data == {"amount": 10}

    def test_emit_without_listeners_builds_nothing(self):
        emitter = EventEmitter()
        assert not emitter.wants(EventType.ROUND_STARTED)
        assert emitter.emit_new(EventType.ROUND_STARTED) is None
        assert emitter.history == []

    def test_unsubscribe(self):
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append, EventType.PLAYER_HIT)
        emitter.unsubscribe(seen.append, EventType.PLAYER_HIT)
        emitter.unsubscribe(seen.append, EventType.PLAYER_STAND)

        assert not emitter.wants(EventType.PLAYER_HIT)
        emitter.emit_new(EventType.PLAYER_HIT)
        assert seen == []

    def test_history_keeps_most_recent(self):
        emitter = EventEmitter(history_limit=2)
        for round_number in range(3):
            emitter.emit_new(EventType.ROUND_ENDED, round_number=round_number)

        assert [event.data["round_number"] for event in emitter.history] == [1, 2]
        emitter.clear_history()
        assert emitter.history == []

    def test_handler_may_unsubscribe_itself(self):
        emitter = EventEmitter()
        calls = []

        def once(event: GameEvent) -> None:
            calls.append(event)
            emitter.unsubscribe(once)

        emitter.subscribe(once)
        emitter.emit_new(EventType.SHOE_SHUFFLED)
        emitter.emit_new(EventType.SHOE_SHUFFLED)
        assert len(calls) == 1

    def test_event_str(self):
        event = GameEvent(EventType.INVALID_ACTION, {"message": "No such seat"})
        assert str(event) == "INVALID_ACTION: {'message': 'No such seat'}"
