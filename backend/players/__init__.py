"""
Player implementations for the snake simulation.

This module contains the player abstractions and implementations
that choose snake directions in autoplay mode.
"""

from .base import Player
from .heuristic_player import HeuristicSolver
from .random_player import RandomPlayer
from .variant_registry import get_player_class, create_player, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'HeuristicSolver',
    'RandomPlayer',
    'get_player_class',
    'create_player',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
