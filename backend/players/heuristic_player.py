"""
Heuristic autoplay solver.

Scores every safe move by how cheaply the snake can reach the food while
keeping a way back to its own tail afterwards, falls back to chasing the tail,
and only then to any move that does not kill it outright.
"""

import logging
from typing import Dict, List

from domain.constants import FATAL_STATES, VALID_MOVES, Direction
from domain.game_state import GameState
from domain.position import Position
from .base import Player
from .pathfinding import adjacencies, search, shift

logger = logging.getLogger(__name__)


class HeuristicSolver(Player):
    """
    Picks the next direction for the snake of a bound GameState.

    The solver only reads the state. `running` is a mode flag for the driving
    loop and has no effect on the choice itself.
    """

    name = "heuristic"

    def get_next_move(self) -> Direction:
        """Choose a direction for the bound game state."""
        if self.game_state is None:
            raise RuntimeError("HeuristicSolver has no game state bound.")
        return self.get_move(self.game_state)

    def get_move(self, game_state: GameState) -> Direction:
        head = game_state.head_position()
        candidates = self.safe_directions(game_state)

        if not candidates:
            return game_state.direction

        costs: Dict[Direction, int] = {
            direction: self.heuristic(game_state, head.translate(direction))
            for direction in candidates
        }
        # min() keeps the first of equal costs, so ties follow VALID_MOVES order
        best = min(candidates, key=lambda d: costs[d])
        logger.debug(f"Move costs {costs} -> {best.value}")
        return best

    @staticmethod
    def safe_directions(game_state: GameState) -> List[Direction]:
        """Directions whose next head cell is not an immediate fatal collision."""
        head = game_state.head_position()
        return [
            direction
            for direction in VALID_MOVES
            if game_state.peek_collision(head.translate(direction)) not in FATAL_STATES
        ]

    def heuristic(self, game_state: GameState, cell: Position) -> int:
        """
        Cost of moving the head into `cell`; lower is better.

        - path length to the food, if after eating the tail is still reachable
        - 2*R*C minus path length to the tail, if only the tail is reachable
        - 4*R*C if neither is
        """
        rows, columns = game_state.rows, game_state.columns
        size = rows * columns * 2
        head = game_state.head_position()
        tail = game_state.tail_position()
        # pending growth keeps the tail in place for that many extra ticks
        snake = game_state.snake_positions() + [tail] * game_state.growth_credit
        food = game_state.food_position()

        if cell not in adjacencies(head, rows, columns):
            return 0

        path_to_food = search(cell, food, rows, columns, snake) if food is not None else None

        if path_to_food is not None:
            snake_at_food = shift(snake, path_to_food, collect=True)
            body = set(snake_at_food)
            for nxt in adjacencies(food, rows, columns):
                if nxt in body:
                    continue
                if search(nxt, tail, rows, columns, snake_at_food) is not None:
                    return len(path_to_food)

        path_to_tail = search(cell, tail, rows, columns, snake)
        if path_to_tail is not None:
            return size - len(path_to_tail)

        return size * 2
