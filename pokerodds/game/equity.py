"""
Win probability on a complete board.

Heads-up equity is computed exactly by enumerating every two-card holding
an unknown opponent could have. Several opponents are combined with the
following policy:

- Opponents whose hole cards are known and visible are compared directly.
  Losing to any one of them makes the win probability 0.
- The remaining unknown opponents are treated as independent, so the
  heads-up equity is raised to the power of their count. This is an
  approximation: opponents draw from the same deck, so their hands are
  not really independent.
- A tie with a known opponent is not discounted: it neither forces 0 nor
  counts as half a win. Only the unknown opponents lower the probability.

Hidden hole cards still take part in duplicate-card checks but stay in
the enumeration deck, since the calculator does not know them.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from pokerodds.errors import (
    Failure,
    InsufficientOpponents,
    InvalidCommunitySize,
    InvalidHeroHand,
    PokerOddsError,
)
from .cards import Card, Deck, ensure_distinct
from .evaluator import (
    BestHand,
    HandCategory,
    HandScore,
    Outcome,
    best_five,
    combination,
    combinations,
    compare,
)
from .players import Player, active_players

logger = logging.getLogger(__name__)

HOLE_CARDS = 2
BOARD_CARDS = 5


@dataclass
class EquityConfig:
    """Configuration for equity calculations."""
    parallel: bool = False          # Fan opponent holdings out to worker processes
    max_workers: Optional[int] = None
    chunk_size: int = 128           # Holdings per worker task


@dataclass(frozen=True)
class HeadsUpTally:
    """Win/tie/loss counts of hero against every possible opponent holding."""
    wins: int = 0
    ties: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.ties + self.losses

    @property
    def equity(self) -> float:
        """Ties count as half a win."""
        if self.total == 0:
            return 0.0
        return (self.wins + self.ties / 2) / self.total

    def __add__(self, other: "HeadsUpTally") -> "HeadsUpTally":
        return HeadsUpTally(
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            losses=self.losses + other.losses,
        )


@dataclass(frozen=True)
class OpponentResult:
    """A known opponent's best hand and how hero fares against it."""
    player_id: int
    name: str
    cards: tuple[Card, ...]
    best_hand: BestHand
    outcome: Outcome  # From hero's side

    @property
    def score(self) -> HandScore:
        return self.best_hand.score

    @property
    def label(self) -> str:
        return self.best_hand.label


@dataclass(frozen=True)
class HandAnalysis:
    """Everything computed for one request."""
    hero_cards: tuple[Card, ...]
    community: tuple[Card, ...]
    best_hand: BestHand
    probability: float
    active_players: int
    unknown_opponents: int
    tally: Optional[HeadsUpTally] = None  # None when a known opponent beats hero
    opponents: tuple[OpponentResult, ...] = field(default_factory=tuple)

    @property
    def score(self) -> HandScore:
        return self.best_hand.score

    @property
    def category(self) -> HandCategory:
        return self.best_hand.category

    @property
    def label(self) -> str:
        return self.best_hand.label

    def to_dict(self) -> dict:
        return {
            "hero_cards": [str(c) for c in self.hero_cards],
            "community": [str(c) for c in self.community],
            "best_hand": [str(c) for c in self.best_hand.cards],
            "category": int(self.category),
            "tiebreakers": list(self.score.tiebreakers),
            "label": self.label,
            "probability": self.probability,
            "active_players": self.active_players,
            "opponents": [
                {
                    "id": o.player_id,
                    "name": o.name,
                    "cards": [str(c) for c in o.cards],
                    "best_hand": [str(c) for c in o.best_hand.cards],
                    "category": int(o.score.category),
                    "label": o.label,
                    "outcome": o.outcome.label,
                }
                for o in self.opponents
            ],
        }


def independence_equity(p_single: float, num_opponents: int) -> float:
    """
    Combine heads-up equity over several opponents as if independent.

    Args:
        p_single: Equity against one unknown opponent
        num_opponents: Number of unknown opponents

    Returns:
        p_single ** num_opponents
    """
    return p_single ** num_opponents


def _tally_holdings(
    hero_score: HandScore,
    community: tuple[Card, ...],
    holdings: Sequence[tuple[Card, Card]],
) -> HeadsUpTally:
    """Score hero against each holding. Module level so workers can run it."""
    outcomes = np.fromiter(
        (compare(hero_score, best_five((*h, *community)).score).sign for h in holdings),
        dtype=np.int8,
        count=len(holdings),
    )
    # Shift -1/0/1 to bins 0/1/2: loss, tie, win
    counts = np.bincount(outcomes + 1, minlength=3)
    return HeadsUpTally(wins=int(counts[2]), ties=int(counts[1]), losses=int(counts[0]))


def _tally_chunk(args: tuple) -> HeadsUpTally:
    return _tally_holdings(*args)


class EquityCalculator:
    """
    Exact equity on a complete board.

    Holds no state between calls; every calculation builds its own deck.
    """

    def __init__(self, config: Optional[EquityConfig] = None):
        self.config = config or EquityConfig()

    def heads_up(
        self,
        hero: Sequence[Card],
        community: Sequence[Card],
        dead: Sequence[Card] = (),
    ) -> HeadsUpTally:
        """
        Tally hero against every holding of one unknown opponent.

        Args:
            hero: Hero's two hole cards
            community: The five board cards
            dead: Other cards known to be out of the deck

        Returns:
            HeadsUpTally over C(remaining, 2) holdings
        """
        hero, community = self._validate_cards(hero, community, dead)
        hero_score = best_five((*hero, *community)).score
        return self._enumerate(hero_score, hero, community, tuple(dead))

    def win_probability(
        self,
        hero: Sequence[Card],
        community: Sequence[Card],
        players: Sequence[Player],
    ) -> float:
        """
        Probability that hero holds the winning hand.

        Args:
            hero: Hero's two hole cards
            community: The five board cards
            players: Players at the table; folded ones are ignored and a
                seat with the hero's id is not counted as an opponent

        Returns:
            Probability in [0, 1]
        """
        return self.analyze(hero, community, players).probability

    def analyze(
        self,
        hero: Sequence[Card],
        community: Sequence[Card],
        players: Sequence[Player],
    ) -> HandAnalysis:
        """Compute hero's best hand, win probability and known-opponent outcomes."""
        opponents = [p for p in active_players(players) if not p.is_hero]
        known = [p for p in opponents if p.is_known]
        unknown = [p for p in opponents if not p.is_known]
        dead = tuple(c for p in known for c in p.cards)
        hidden = tuple(c for p in unknown for c in p.cards)

        hero, community = self._validate_cards(hero, community, (*dead, *hidden))
        if not opponents:
            raise InsufficientOpponents("You need at least 2 active players")

        best = best_five((*hero, *community))

        results = []
        for opp in known:
            opp_best = best_five((*opp.cards, *community))
            outcome = compare(best.score, opp_best.score)
            results.append(OpponentResult(
                player_id=opp.id,
                name=opp.name,
                cards=opp.cards,
                best_hand=opp_best,
                outcome=outcome,
            ))

        tally = None
        beaten_by = [r for r in results if r.outcome is Outcome.LOSS]
        if beaten_by:
            logger.debug(
                "Hero %s loses to known opponent(s) %s",
                best.label, ", ".join(r.name for r in beaten_by),
            )
            probability = 0.0
        elif not unknown:
            probability = 1.0
        else:
            tally = self._enumerate(best.score, hero, community, dead)
            probability = independence_equity(tally.equity, len(unknown))

        logger.debug(
            "Hero %s (%s): p=%.4f with %d known and %d unknown opponent(s)",
            " ".join(map(str, hero)), best.label, probability, len(known), len(unknown),
        )

        return HandAnalysis(
            hero_cards=hero,
            community=community,
            best_hand=best,
            probability=probability,
            active_players=len(opponents) + 1,
            unknown_opponents=len(unknown),
            tally=tally,
            opponents=tuple(results),
        )

    def _validate_cards(
        self,
        hero: Optional[Sequence[Card]],
        community: Optional[Sequence[Card]],
        others: Sequence[Card],
    ) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
        if hero is None or len(hero) != HOLE_CARDS:
            count = 0 if hero is None else len(hero)
            raise InvalidHeroHand(f"You need exactly 2 cards in your hand, got {count}")
        if community is None or len(community) != BOARD_CARDS:
            count = 0 if community is None else len(community)
            raise InvalidCommunitySize(
                f"All 5 community cards must be provided, got {count}"
            )
        hero, community = tuple(hero), tuple(community)
        ensure_distinct((*hero, *community, *others))
        return hero, community

    def _enumerate(
        self,
        hero_score: HandScore,
        hero: tuple[Card, ...],
        community: tuple[Card, ...],
        dead: tuple[Card, ...],
    ) -> HeadsUpTally:
        deck = Deck.without((*hero, *community, *dead))
        holdings = list(combinations(deck, HOLE_CARDS))

        logger.debug(
            "Enumerating %d opponent holdings from %d remaining cards",
            combination(len(deck), HOLE_CARDS), len(deck),
        )

        if not self.config.parallel:
            tally = _tally_holdings(hero_score, community, holdings)
        else:
            size = max(1, self.config.chunk_size)
            tasks = [
                (hero_score, community, holdings[i:i + size])
                for i in range(0, len(holdings), size)
            ]
            logger.debug("Fanning out %d chunks to worker processes", len(tasks))
            with ProcessPoolExecutor(max_workers=self.config.max_workers) as ex:
                tally = sum(ex.map(_tally_chunk, tasks), HeadsUpTally())

        logger.debug(
            "Heads-up tally: %d wins, %d ties, %d losses", tally.wins, tally.ties, tally.losses
        )
        return tally


def win_probability(
    hero: Sequence[Card],
    community: Sequence[Card],
    players: Sequence[Player],
    config: Optional[EquityConfig] = None,
) -> float:
    """Win probability for hero against the active players."""
    return EquityCalculator(config).win_probability(hero, community, players)


def analyze_hand(
    hero: Sequence[Card],
    community: Sequence[Card],
    players: Sequence[Player],
    config: Optional[EquityConfig] = None,
) -> HandAnalysis:
    """Full analysis for hero against the active players."""
    return EquityCalculator(config).analyze(hero, community, players)


def try_analyze(
    hero: Sequence[Card],
    community: Sequence[Card],
    players: Sequence[Player],
    config: Optional[EquityConfig] = None,
) -> Union[HandAnalysis, Failure]:
    """
    Like analyze_hand, but report engine errors as a Failure record.

    Only PokerOddsError is converted; anything else propagates.
    """
    try:
        return analyze_hand(hero, community, players, config)
    except PokerOddsError as e:
        logger.info("Analysis rejected (%s): %s", e.kind, e)
        return Failure.from_error(e)
