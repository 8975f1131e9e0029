"""Game representation module."""

from .cards import Card, Rank, Suit, Deck, parse_cards
from .players import Player, HERO_ID, active_players
from .evaluator import (
    HandCategory,
    HandScore,
    BestHand,
    Outcome,
    HAND_LABELS,
    evaluate,
    compare,
    best_five,
    combination,
    combinations,
    describe,
)
from .equity import (
    EquityCalculator,
    EquityConfig,
    HandAnalysis,
    HeadsUpTally,
    OpponentResult,
    analyze_hand,
    try_analyze,
    win_probability,
)

__all__ = [
    # Cards
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "parse_cards",
    # Players
    "Player",
    "HERO_ID",
    "active_players",
    # Evaluation
    "HandCategory",
    "HandScore",
    "BestHand",
    "Outcome",
    "HAND_LABELS",
    "evaluate",
    "compare",
    "best_five",
    "combination",
    "combinations",
    "describe",
    # Equity
    "EquityCalculator",
    "EquityConfig",
    "HandAnalysis",
    "HeadsUpTally",
    "OpponentResult",
    "analyze_hand",
    "try_analyze",
    "win_probability",
]
