"""
Random player implementation - picks random safe moves.
"""

from domain.constants import FATAL_STATES, VALID_MOVES, Direction
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls, obstacles and
    self-collisions. Serves as a baseline for the heuristic solver.
    """

    name = "random"

    def get_move(self, game_state: GameState) -> Direction:
        head = game_state.head_position()

        # peek_collision already treats the vacating tail as free
        valid_moves = [
            move
            for move in VALID_MOVES
            if game_state.peek_collision(head.translate(move)) not in FATAL_STATES
            and move != game_state.direction.opposite()
        ]

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self._random.choice(valid_moves)
