"""
Five-card hand evaluation.

Hands are scored as a category (High Card up to Royal Flush) plus an
ordered tuple of tie-break rank values. Two scores are compared category
first, then tie-breakers left to right.
"""

import itertools
import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Generic, Iterator, Sequence, TypeVar

from pokerodds.errors import DuplicateCard, InsufficientCards, InvalidHandSize
from .cards import Card, Rank

T = TypeVar("T")

HAND_LABELS = (
    "High Card",
    "One Pair",
    "Two Pair",
    "Three of a Kind",
    "Straight",
    "Flush",
    "Full House",
    "Four of a Kind",
    "Straight Flush",
    "Royal Flush",
)

ROYAL_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})
WHEEL_RANKS = frozenset({Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE})


class HandCategory(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return HAND_LABELS[self]


class Outcome(Enum):
    """Result of comparing one hand against another, from the first hand's side."""
    WIN = 1
    LOSS = -1
    TIE = 0

    @property
    def sign(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return {Outcome.WIN: "win", Outcome.LOSS: "lose", Outcome.TIE: "tie"}[self]


@total_ordering
@dataclass(frozen=True)
class HandScore:
    """Category plus tie-breakers. Never mutated, only compared."""
    category: HandCategory
    tiebreakers: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "category", HandCategory(self.category))
        object.__setattr__(self, "tiebreakers", tuple(int(t) for t in self.tiebreakers))

    @property
    def label(self) -> str:
        return self.category.label

    def __lt__(self, other: "HandScore") -> bool:
        if not isinstance(other, HandScore):
            return NotImplemented
        return compare(self, other) is Outcome.LOSS


def compare(a: HandScore, b: HandScore) -> Outcome:
    """Order two scores: category first, then tie-breakers element-wise."""
    if a.category != b.category:
        return Outcome.WIN if a.category > b.category else Outcome.LOSS
    for x, y in zip(a.tiebreakers, b.tiebreakers):
        if x > y:
            return Outcome.WIN
        if x < y:
            return Outcome.LOSS
    return Outcome.TIE


def evaluate(cards: Sequence[Card]) -> HandScore:
    """
    Score exactly five cards.

    Args:
        cards: The five cards, in any order

    Returns:
        HandScore for the hand

    Raises:
        InvalidHandSize: Unless exactly five cards are given
        DuplicateCard: If a card appears twice
    """
    if len(cards) != 5:
        raise InvalidHandSize(f"Hand evaluator requires exactly 5 cards, got {len(cards)}")
    if len(set(cards)) != 5:
        raise DuplicateCard(f"Duplicate card in hand: {' '.join(map(str, cards))}")

    ordered = sorted(cards, key=lambda c: c.rank_value, reverse=True)
    ranks = [c.rank_value for c in ordered]
    counts = Counter(ranks)
    is_flush = len({c.suit for c in ordered}) == 1

    straight_high = None
    if len(counts) == 5:
        if ranks[0] - ranks[-1] == 4:
            straight_high = ranks[0]
        elif set(ranks) == WHEEL_RANKS:
            straight_high = int(Rank.FIVE)

    if is_flush and set(ranks) == ROYAL_RANKS:
        return HandScore(HandCategory.ROYAL_FLUSH)

    if is_flush and straight_high is not None:
        return HandScore(HandCategory.STRAIGHT_FLUSH, (straight_high,))

    # Groups ordered by size, then rank: e.g. [(9, 3), (4, 2)]
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    sizes = [size for _, size in groups]

    if sizes[0] == 4:
        quad = groups[0][0]
        kicker = groups[1][0]
        return HandScore(HandCategory.FOUR_OF_A_KIND, (quad, kicker))

    if sizes == [3, 2]:
        return HandScore(HandCategory.FULL_HOUSE, (groups[0][0], groups[1][0]))

    if is_flush:
        return HandScore(HandCategory.FLUSH, tuple(ranks))

    if straight_high is not None:
        return HandScore(HandCategory.STRAIGHT, (straight_high,))

    if sizes[0] == 3:
        trip = groups[0][0]
        rest = [r for r in ranks if r != trip]
        return HandScore(HandCategory.THREE_OF_A_KIND, (trip, *rest))

    if sizes[:2] == [2, 2]:
        high_pair, low_pair, kicker = groups[0][0], groups[1][0], groups[2][0]
        return HandScore(HandCategory.TWO_PAIR, (high_pair, low_pair, kicker))

    if sizes[0] == 2:
        pair = groups[0][0]
        rest = [r for r in ranks if r != pair]
        return HandScore(HandCategory.ONE_PAIR, (pair, *rest))

    return HandScore(HandCategory.HIGH_CARD, tuple(ranks))


def combination(n: int, k: int) -> int:
    """Exact binomial coefficient n choose k (0 when k is out of range)."""
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


class Combinations(Generic[T]):
    """
    Lazy fixed-size subsets of a sequence.

    Iterating again starts over; len() is the exact subset count.
    """

    def __init__(self, items: Sequence[T], size: int):
        self.items = tuple(items)
        self.size = size

    def __iter__(self) -> Iterator[tuple[T, ...]]:
        return itertools.combinations(self.items, self.size)

    def __len__(self) -> int:
        return combination(len(self.items), self.size)


def combinations(items: Sequence[T], size: int) -> Combinations[T]:
    return Combinations(items, size)


@dataclass(frozen=True)
class BestHand:
    """The strongest five cards found and their score."""
    cards: tuple[Card, ...]
    score: HandScore

    @property
    def category(self) -> HandCategory:
        return self.score.category

    @property
    def label(self) -> str:
        return self.score.label

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.cards)


def best_five(cards: Sequence[Card]) -> BestHand:
    """
    Pick the strongest five-card hand from 5 to 7 cards.

    Every five-card subset is scored; the first maximal one is kept.

    Raises:
        InsufficientCards: Fewer than five cards
        InvalidHandSize: More than seven cards
    """
    if len(cards) < 5:
        raise InsufficientCards(f"Need at least 5 cards to make a hand, got {len(cards)}")
    if len(cards) > 7:
        raise InvalidHandSize(f"Best hand is chosen from at most 7 cards, got {len(cards)}")

    best_cards = None
    best_score = None
    for combo in combinations(cards, 5):
        score = evaluate(combo)
        if best_score is None or compare(score, best_score) is Outcome.WIN:
            best_cards, best_score = combo, score
    return BestHand(cards=best_cards, score=best_score)


def describe(score: HandScore) -> str:
    """Short human description, e.g. 'Full House, 2s full of 5s'."""
    names = [Rank(v).symbol for v in score.tiebreakers]
    category = score.category
    if category == HandCategory.ROYAL_FLUSH:
        return category.label
    if category in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
        return f"{category.label}, {names[0]} high"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"{category.label}, {names[0]}s with {names[1]} kicker"
    if category == HandCategory.FULL_HOUSE:
        return f"{category.label}, {names[0]}s full of {names[1]}s"
    if category == HandCategory.TWO_PAIR:
        return f"{category.label}, {names[0]}s and {names[1]}s"
    if category in (HandCategory.THREE_OF_A_KIND, HandCategory.ONE_PAIR):
        return f"{category.label}, {names[0]}s"
    return f"{category.label}, {names[0]} high"
