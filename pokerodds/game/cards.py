"""Card and deck representation utilities."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Iterator, Union

from treys import Card as TreysCard

from pokerodds.errors import DuplicateCard, InvalidCard


class Rank(IntEnum):
    """Card ranks (0-12 where 12 is Ace)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12

    @property
    def symbol(self) -> str:
        return RANK_STR[self]

    @classmethod
    def parse(cls, value: Union["Rank", str]) -> "Rank":
        """Coerce a rank member or symbol ('2'-'10', 'T', 'J', 'Q', 'K', 'A')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in STR_RANK:
                return STR_RANK[key]
        raise InvalidCard(f"Invalid rank: {value!r}")


class Suit(Enum):
    """Card suits."""
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    SPADES = "S"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["Suit", str]) -> "Suit":
        """Coerce a suit member or letter ('H', 'D', 'C', 'S')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for suit in cls:
                if suit.value == key:
                    return suit
        raise InvalidCard(f"Invalid suit: {value!r}")


# Mapping for string conversion
RANK_STR = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4", Rank.FIVE: "5",
    Rank.SIX: "6", Rank.SEVEN: "7", Rank.EIGHT: "8", Rank.NINE: "9",
    Rank.TEN: "10", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
    Rank.ACE: "A",
}
STR_RANK = {v: k for k, v in RANK_STR.items()}
STR_RANK["T"] = Rank.TEN

# treys wants single-character ranks and lowercase suits
TREYS_RANK = {rank: ("T" if rank is Rank.TEN else sym) for rank, sym in RANK_STR.items()}


@dataclass(frozen=True)
class Card:
    """A playing card. Identity is the (rank, suit) pair and nothing else."""
    rank: Rank
    suit: Suit

    def __post_init__(self):
        object.__setattr__(self, "rank", Rank.parse(self.rank))
        object.__setattr__(self, "suit", Suit.parse(self.suit))

    @property
    def rank_value(self) -> int:
        """Numeric rank used for all comparisons (0 for 2 up to 12 for Ace)."""
        return int(self.rank)

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'AS', '10h', 'Th', '2c'."""
        s = s.strip()
        if len(s) not in (2, 3):
            raise InvalidCard(f"Invalid card string: {s!r}")
        return cls(rank=Rank.parse(s[:-1]), suit=Suit.parse(s[-1]))

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(f"{TREYS_RANK[self.rank]}{self.suit.value.lower()}")


def parse_cards(cards: Union[str, Iterable[str]]) -> list[Card]:
    """
    Parse several cards at once.

    Accepts a whitespace/comma separated string ('AH KH 10H'), a packed
    string ('AhKhTh') or an iterable of card labels.
    """
    if isinstance(cards, str):
        text = cards.replace(",", " ")
        if " " in text.strip():
            labels = text.split()
        else:
            labels = _split_packed(text.strip())
    else:
        labels = list(cards)
    return [Card.from_string(label) for label in labels]


def _split_packed(text: str) -> list[str]:
    labels = []
    i = 0
    while i < len(text):
        size = 3 if text.startswith("10", i) else 2
        label = text[i:i + size]
        if len(label) < 2:
            raise InvalidCard(f"Invalid card string: {label!r}")
        labels.append(label)
        i += size
    return labels


def ensure_distinct(cards: Iterable[Card]) -> None:
    """Raise DuplicateCard if any card appears more than once."""
    seen: set[Card] = set()
    for card in cards:
        if card in seen:
            raise DuplicateCard(f"Duplicate card: {card}")
        seen.add(card)


def full_deck() -> list[Card]:
    """All 52 cards, rank-major, suits in H/D/C/S order."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


class Deck:
    """
    The 52-card deck minus cards already assigned.

    Immutable; build a new one for every calculation.
    """

    def __init__(self, exclude: Iterable[Card] = ()):
        excluded = frozenset(exclude)
        self.cards: tuple[Card, ...] = tuple(c for c in full_deck() if c not in excluded)

    @classmethod
    def without(cls, known: Iterable[Card]) -> "Deck":
        """Fresh deck with the known cards filtered out."""
        return cls(exclude=known)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards
