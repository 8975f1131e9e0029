"""Tests for card and deck representation."""

import pytest
from treys import Card as TreysCard

from pokerodds.errors import DuplicateCard, InvalidCard
from pokerodds.game.cards import (
    Card, Deck, Rank, Suit,
    ensure_distinct, full_deck, parse_cards,
)


class TestCard:
    def test_from_string(self):
        card = Card.from_string("AS")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        assert Card.from_string("10H") == Card.from_string("Th")
        assert Card.from_string("10h").rank == Rank.TEN

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_symbolic_construction(self):
        assert Card("A", "H") == Card(Rank.ACE, Suit.HEARTS)
        assert Card("10", "c") == Card(Rank.TEN, Suit.CLUBS)

    def test_str(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "AS"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10H"

    def test_rank_value(self):
        assert Card("2", "H").rank_value == 0
        assert Card("5", "H").rank_value == 3
        assert Card("A", "H").rank_value == 12

    def test_rank_values_increase(self):
        values = [Card(rank, Suit.CLUBS).rank_value for rank in Rank]
        assert values == list(range(13))

    def test_invalid_rank(self):
        with pytest.raises(InvalidCard, match="rank"):
            Card("1", "H")

    def test_invalid_suit(self):
        with pytest.raises(InvalidCard, match="suit"):
            Card("A", "X")

    def test_invalid_card_is_value_error(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_invalid_string_length(self):
        with pytest.raises(InvalidCard):
            Card.from_string("A")

    def test_equality_and_hash(self):
        card1 = Card.from_string("As")
        card2 = Card("A", "S")
        assert card1 == card2
        assert len({card1, card2}) == 1
        assert Card("A", "S") != Card("A", "H")

    def test_immutable(self):
        card = Card("A", "S")
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_to_treys(self):
        assert Card.from_string("As").to_treys() == TreysCard.new("As")
        assert Card.from_string("10d").to_treys() == TreysCard.new("Td")


class TestParseCards:
    def test_spaced(self, cards):
        assert [str(c) for c in cards("AH KH 10H")] == ["AH", "KH", "10H"]

    def test_packed(self):
        assert [str(c) for c in parse_cards("AhKh10hJh")] == ["AH", "KH", "10H", "JH"]

    def test_packed_with_t(self):
        assert [str(c) for c in parse_cards("AsTs")] == ["AS", "10S"]

    def test_commas(self):
        assert len(parse_cards("2c, 3d,4h")) == 3

    def test_list(self):
        assert parse_cards(["2c", "3d"]) == [Card("2", "C"), Card("3", "D")]

    def test_empty(self):
        assert parse_cards("") == []

    def test_dangling_character(self):
        with pytest.raises(InvalidCard):
            parse_cards("AhK")


class TestDistinct:
    def test_distinct_ok(self, cards):
        ensure_distinct(cards("AH KH QH"))

    def test_duplicate_raises(self, cards):
        with pytest.raises(DuplicateCard, match="AH"):
            ensure_distinct(cards("AH KH AH"))


class TestDeck:
    def test_full_deck(self):
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_deck_order(self):
        cards = full_deck()
        assert str(cards[0]) == "2H"
        assert str(cards[3]) == "2S"
        assert str(cards[-1]) == "AS"

    def test_without(self, cards):
        known = cards("AH KH")
        deck = Deck.without(known)
        assert len(deck) == 50
        assert Card("A", "H") not in deck

    def test_without_board_and_hero(self, cards):
        known = cards("AS AH KS KH KD 2C 3D")
        deck = Deck.without(known)
        assert len(deck) == 45
        assert not set(known) & set(deck)

    def test_fresh_each_time(self, cards):
        Deck.without(cards("AH KH QH"))
        assert len(Deck()) == 52

    def test_immutable_cards(self):
        assert isinstance(Deck().cards, tuple)
