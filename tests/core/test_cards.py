"""Tests for Card, Rank and Suit."""

import pytest

from bjtrainer.cards import Card, Rank, Suit, cards_from_string, standard_deck


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.face_up

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.NINE, Suit.HEARTS).value == 9
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_is_ace(self):
        """Test ace detection."""
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_card_is_ten_value(self):
        """Test ten-value detection."""
        for rank in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING):
            assert Card(rank, Suit.SPADES).is_ten_value
        assert not Card(Rank.NINE, Suit.SPADES).is_ten_value
        assert not Card(Rank.ACE, Suit.SPADES).is_ten_value

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("text", ["", "A", "1S", "AX", "11H"])
    def test_card_from_string_invalid(self, text):
        """Test that unparsable strings raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_str(self):
        """Test string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"

    def test_face_down_card_hides_itself(self):
        """Test that a face-down card prints as hidden but keeps its label."""
        card = Card(Rank.QUEEN, Suit.CLUBS).face_down()
        assert not card.face_up
        assert str(card) == "??"
        assert card.label == "Q♣"

    def test_reveal_keeps_identity(self):
        """Test that face orientation is not part of equality."""
        hole = Card(Rank.SIX, Suit.DIAMONDS).face_down()
        revealed = hole.revealed()
        assert revealed.face_up
        assert revealed == hole
        assert hash(revealed) == hash(hole)

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestSuit:
    def test_red_suits(self):
        assert Suit.HEARTS.is_red
        assert Suit.DIAMONDS.is_red
        assert not Suit.CLUBS.is_red
        assert not Suit.SPADES.is_red


class TestDeckHelpers:
    """Tests for deck construction helpers."""

    def test_standard_deck_has_all_cards(self):
        """Test that a deck contains all 52 unique cards."""
        deck = standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_cards_from_string(self):
        """Test parsing a space-separated card list."""
        cards = cards_from_string("AS 10H 7c")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.TEN, Suit.HEARTS),
            Card(Rank.SEVEN, Suit.CLUBS),
        ]
