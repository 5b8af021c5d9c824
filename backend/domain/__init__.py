"""
Domain entities for the snake simulation.

This module contains the core game entities and the simulation engine,
independent of presentation concerns (rendering, audio, timing).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, CellState, Direction, FOOD_STATES
from .position import Position
from .snake import Snake
from .game_state import BoardSnapshot, GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'CellState', 'Direction', 'FOOD_STATES',
    'Position',
    'Snake',
    'BoardSnapshot',
    'GameState',
]
