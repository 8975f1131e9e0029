"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from pokerodds.game.cards import full_deck, parse_cards


@pytest.fixture
def cards():
    """Parse card labels: cards('AH KH') -> [AH, KH]."""
    return parse_cards


@pytest.fixture
def rng():
    """Seeded generator so sampled hands are reproducible."""
    return np.random.default_rng(20240601)


@pytest.fixture
def random_hand(rng):
    """Draw n distinct cards from a fresh deck."""
    deck = full_deck()

    def _random_hand(n=5):
        return [deck[i] for i in rng.choice(len(deck), size=n, replace=False)]

    return _random_hand
