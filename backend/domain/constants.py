"""
Game constants for the snake simulation.
"""

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Movement directions. Declaration order is the solver's tie-break order."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, column) offset of one step in this direction."""
        return _DELTAS[self]

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = (UP, DOWN, LEFT, RIGHT)


class CellState(str, Enum):
    """What occupies a grid cell. OUTSIDE is never stored in the grid."""

    EMPTY = "EMPTY"
    SNAKE = "SNAKE"
    FOOD = "FOOD"
    SUPER_FOOD = "SUPER_FOOD"
    ANTI_FOOD = "ANTI_FOOD"
    OBSTACLE = "OBSTACLE"
    OUTSIDE = "OUTSIDE"


FOOD_STATES = frozenset({CellState.FOOD, CellState.SUPER_FOOD, CellState.ANTI_FOOD})
FATAL_STATES = frozenset({CellState.OUTSIDE, CellState.SNAKE, CellState.OBSTACLE})

# Game settings
INITIAL_SNAKE_LENGTH = 3
INITIAL_DIRECTION = RIGHT
MAX_QUEUED_TURNS = 2

# Food roll: u < SUPER_FOOD_CHANCE -> super, u < ANTI_FOOD_THRESHOLD -> anti, else normal
SUPER_FOOD_CHANCE = 0.25
ANTI_FOOD_THRESHOLD = 0.50

# One obstacle per this many points
POINTS_PER_OBSTACLE = 4

# Eating anti food at this score ends the game
ANTI_FOOD_FATAL_SCORE = -2

DEFAULT_ROWS = 20
DEFAULT_COLUMNS = 20
DEFAULT_TICK_MS = 100
