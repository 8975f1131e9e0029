"""
pokerodds: Texas Hold'em hand strength and win probability

Classifies hands, picks the best five of seven cards and computes a
player's chance of holding the winning hand once the board is complete.
"""

__version__ = "0.1.0"
