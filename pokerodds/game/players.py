"""Players taking part in a hand."""

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from pokerodds.errors import InvalidCard, InvalidPlayerHand
from .cards import Card, ensure_distinct

HERO_ID = 0


@dataclass(frozen=True)
class Player:
    """
    A seat at the table.

    Hole cards are either fully known (two cards, visible) or unknown to
    the calculator. Folded players take no part in probability math.
    """
    id: int
    cards: tuple[Card, ...] = ()
    active: bool = True
    cards_visible: bool = False
    name: str = field(default="", compare=False)

    def __post_init__(self):
        cards = tuple(c if isinstance(c, Card) else _to_card(c) for c in self.cards)
        if len(cards) not in (0, 2):
            raise InvalidPlayerHand(
                f"Player {self.id} must hold 0 or 2 hole cards, got {len(cards)}"
            )
        ensure_distinct(cards)
        object.__setattr__(self, "cards", cards)
        if not self.name:
            object.__setattr__(self, "name", "YOU" if self.id == HERO_ID else f"Player {self.id}")

    @property
    def is_hero(self) -> bool:
        return self.id == HERO_ID

    @property
    def is_known(self) -> bool:
        """Both hole cards are assigned and visible to the calculator."""
        return len(self.cards) == 2 and self.cards_visible

    def with_cards(self, cards: Sequence[Card], visible: bool = True) -> "Player":
        return replace(self, cards=tuple(cards), cards_visible=visible)

    def folded(self) -> "Player":
        return replace(self, active=False)


def active_players(players: Iterable[Player]) -> list[Player]:
    """Players still in the hand."""
    return [p for p in players if p.active]


def _to_card(value: object) -> Card:
    if isinstance(value, str):
        return Card.from_string(value)
    raise InvalidCard(f"Invalid card: {value!r}")
