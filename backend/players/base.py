"""
Base player interface for the game engine.
"""

import random
from typing import Optional

from domain.constants import Direction
from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    A player reads the game state and returns the direction it wants the
    snake to take next. Players never mutate the state; the driving loop
    submits their choice through GameState.request_direction_change().

    Every variant takes the same constructor arguments: the state it is bound
    to and the random source for any choice it leaves to chance.

    `running` is the autoplay switch the driving loop consults before asking
    for a move.
    """

    name = "player"
    running = False

    def __init__(self, game_state: Optional[GameState] = None, rng: Optional[random.Random] = None):
        self.game_state = game_state
        self._random = rng or random.Random()
        self.running = False

    def toggle_running(self) -> bool:
        self.running = not self.running
        return self.running

    def is_running(self) -> bool:
        return self.running

    def get_move(self, game_state: GameState) -> Direction:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: Direction.UP, DOWN, LEFT, RIGHT
        """
        raise NotImplementedError
