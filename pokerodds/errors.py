"""Error types raised by the hand evaluation and equity engine."""

from dataclasses import dataclass


class PokerOddsError(Exception):
    """Base class for every failure the engine reports to callers."""
    kind = "PokerOddsError"

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": str(self)}


class InvalidCard(PokerOddsError, ValueError):
    """Bad rank or suit at card construction."""
    kind = "InvalidCard"


class DuplicateCard(PokerOddsError, ValueError):
    """The same card appears twice among hands, board or deck."""
    kind = "DuplicateCard"


class InvalidHandSize(PokerOddsError):
    """Evaluator was given a card count it cannot score."""
    kind = "InvalidHandSize"


class InsufficientCards(PokerOddsError):
    """Fewer than 5 cards supplied to the best-hand selector."""
    kind = "InsufficientCards"


class InvalidHeroHand(PokerOddsError):
    """Hero does not hold exactly 2 hole cards."""
    kind = "InvalidHeroHand"


class InvalidCommunitySize(PokerOddsError):
    """Board does not hold exactly 5 cards when estimating."""
    kind = "InvalidCommunitySize"


class InsufficientOpponents(PokerOddsError):
    """Fewer than 2 active players, hero included."""
    kind = "InsufficientOpponents"


class InvalidPlayerHand(PokerOddsError):
    """A player holds something other than 0 or 2 hole cards."""
    kind = "InvalidPlayerHand"


@dataclass(frozen=True)
class Failure:
    """Structured failure returned instead of raising."""
    kind: str
    message: str

    @classmethod
    def from_error(cls, error: PokerOddsError) -> "Failure":
        return cls(kind=error.kind, message=str(error))

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}
