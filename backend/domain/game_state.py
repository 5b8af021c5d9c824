"""
GameState - the snake simulation engine.

Owns the grid, the snake body, food and obstacle placement and the queue of
pending direction changes. `advance()` is the only state transition; every
branch that changes the board goes through `_move_snake`, which keeps the grid
and the snake body in lockstep.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import (
    ANTI_FOOD_FATAL_SCORE,
    ANTI_FOOD_THRESHOLD,
    FATAL_STATES,
    FOOD_STATES,
    INITIAL_DIRECTION,
    INITIAL_SNAKE_LENGTH,
    MAX_QUEUED_TURNS,
    POINTS_PER_OBSTACLE,
    SUPER_FOOD_CHANCE,
    CellState,
    Direction,
)
from .position import Position
from .snake import Snake

logger = logging.getLogger(__name__)

DEATH_REASONS = {
    CellState.OUTSIDE: "wall",
    CellState.SNAKE: "self",
    CellState.OBSTACLE: "obstacle",
}

BOARD_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.SNAKE: "S",
    CellState.FOOD: "F",
    CellState.SUPER_FOOD: "*",
    CellState.ANTI_FOOD: "-",
    CellState.OBSTACLE: "#",
}


@dataclass(frozen=True)
class BoardSnapshot:
    """
    An immutable copy of the board at a point in time, handed to renderers
    and recorders so they never hold a reference to the live engine.
    """

    rows: int
    columns: int
    cells: Tuple[Tuple[CellState, ...], ...]
    snake: Tuple[Position, ...]
    direction: Direction
    score: int
    game_over: bool
    tick: int

    @property
    def head(self) -> Position:
        return self.snake[0]


class GameState:
    """
    The simulation state of one game session.

    Attributes:
        rows, columns: board dimensions
        direction: the direction the snake moved on the last tick
        score: signed score, starts at 0
        game_over: True once the snake has collided; never reset
        tick: number of advance() calls that were applied
        snake: the Snake entity (read it, do not mutate it)
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        sounds_enabled: bool = True,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        audio=None,
        snake_positions: Optional[Sequence[Position]] = None,
        direction: Direction = INITIAL_DIRECTION,
    ):
        if rows <= 0 or columns <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{columns}.")
        if snake_positions is None and columns <= INITIAL_SNAKE_LENGTH:
            raise ValueError(
                f"Board needs more than {INITIAL_SNAKE_LENGTH} columns for the initial snake."
            )

        self.rows = rows
        self.columns = columns
        self.direction = direction
        self.score = 0
        self.game_over = False
        self.tick = 0

        self._grid: List[List[CellState]] = [
            [CellState.EMPTY for _ in range(columns)] for _ in range(rows)
        ]
        self._dir_changes: deque = deque()
        self._random = rng if rng is not None else random.Random(seed)
        self._sounds_enabled = sounds_enabled
        self._audio = audio

        if snake_positions is None:
            r = rows // 2
            snake_positions = [Position(r, c) for c in range(INITIAL_SNAKE_LENGTH, 0, -1)]
        self.snake = self._add_snake(snake_positions)
        self._add_food()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _add_snake(self, positions: Sequence[Position]) -> Snake:
        positions = [Position(*p) for p in positions]
        for pos in positions:
            if self._outside(pos):
                raise ValueError(f"Snake segment out of bounds at {pos}.")
        for a, b in zip(positions, positions[1:]):
            if abs(a.row - b.row) + abs(a.column - b.column) != 1:
                raise ValueError(f"Snake segments {a} and {b} are not adjacent.")

        snake = Snake(positions)
        for pos in snake:
            self._grid[pos.row][pos.column] = CellState.SNAKE
        return snake

    def set_food(self, position: Position, kind: CellState = CellState.FOOD) -> None:
        """
        Replace the current food with `kind` at `position`.

        Useful for scripted scenarios; normal play places food randomly.
        """
        position = Position(*position)
        if kind not in FOOD_STATES:
            raise ValueError(f"{kind} is not a food type.")
        if self._outside(position):
            raise ValueError(f"Food out of bounds at {position}.")
        current = self.food_position()
        if position != current and self.cell(position) != CellState.EMPTY:
            raise ValueError(f"Cell {position} is occupied by {self.cell(position)}.")
        if current is not None:
            self._grid[current.row][current.column] = CellState.EMPTY
        self._grid[position.row][position.column] = kind

    def set_obstacles(self, positions: Iterable[Position]) -> None:
        """Replace every obstacle on the board with the given positions."""
        positions = [Position(*p) for p in positions]
        for pos in positions:
            if self._outside(pos):
                raise ValueError(f"Obstacle out of bounds at {pos}.")
            if self.cell(pos) not in (CellState.EMPTY, CellState.OBSTACLE):
                raise ValueError(f"Cell {pos} is occupied by {self.cell(pos)}.")
        for pos in self.obstacle_positions():
            self._grid[pos.row][pos.column] = CellState.EMPTY
        for pos in positions:
            self._grid[pos.row][pos.column] = CellState.OBSTACLE

    def set_sounds_enabled(self, enabled: bool) -> None:
        self._sounds_enabled = enabled

    @property
    def sounds_enabled(self) -> bool:
        return self._sounds_enabled

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def head_position(self) -> Position:
        return self.snake.head

    def tail_position(self) -> Position:
        return self.snake.tail

    def snake_positions(self) -> List[Position]:
        """Head-to-tail list of the snake's segments."""
        return self.snake.as_list()

    @property
    def growth_credit(self) -> int:
        return self.snake.growth_credit

    @property
    def pending_directions(self) -> Tuple[Direction, ...]:
        return tuple(self._dir_changes)

    @property
    def grid(self) -> Tuple[Tuple[CellState, ...], ...]:
        """Read-only copy of the grid, indexed [row][column]."""
        return tuple(tuple(row) for row in self._grid)

    def cell(self, position: Position) -> CellState:
        if self._outside(position):
            return CellState.OUTSIDE
        return self._grid[position[0]][position[1]]

    def _positions_with(self, state: CellState) -> List[Position]:
        return [
            Position(r, c)
            for r in range(self.rows)
            for c in range(self.columns)
            if self._grid[r][c] == state
        ]

    def empty_positions(self) -> List[Position]:
        return self._positions_with(CellState.EMPTY)

    def obstacle_positions(self) -> List[Position]:
        return self._positions_with(CellState.OBSTACLE)

    def food_position(self) -> Optional[Position]:
        """Position of the food cell, or None when the board had no room for one."""
        for r in range(self.rows):
            for c in range(self.columns):
                if self._grid[r][c] in FOOD_STATES:
                    return Position(r, c)
        return None

    # ------------------------------------------------------------------
    # Direction queue
    # ------------------------------------------------------------------

    def _last_direction(self) -> Direction:
        if not self._dir_changes:
            return self.direction
        return self._dir_changes[-1]

    def can_change_direction(self, new_direction: Direction) -> bool:
        if len(self._dir_changes) >= MAX_QUEUED_TURNS:
            return False
        last = self._last_direction()
        return new_direction != last and new_direction != last.opposite()

    def request_direction_change(self, new_direction: Direction) -> bool:
        """
        Queue a turn for a coming tick.

        Returns True if the turn was queued. Repeats, reversals and requests
        beyond the queue capacity are ignored.
        """
        new_direction = Direction(new_direction)
        if not self.can_change_direction(new_direction):
            return False
        self._dir_changes.append(new_direction)
        return True

    # ------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------

    def _outside(self, position: Position) -> bool:
        row, column = position
        return row < 0 or row >= self.rows or column < 0 or column >= self.columns

    def peek_collision(self, position: Position) -> CellState:
        """
        Classify what the head would hit at `position` on the next tick.

        The tail cell counts as empty, since it vacates on the same tick,
        unless growth credit is pending and the tail stays put.
        """
        position = Position(*position)
        if self._outside(position):
            return CellState.OUTSIDE
        if position == self.snake.tail and self.snake.growth_credit == 0:
            return CellState.EMPTY
        return self._grid[position.row][position.column]

    # ------------------------------------------------------------------
    # State transition
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """Execute one tick. Does nothing once the game is over."""
        if self.game_over:
            return

        if self._dir_changes:
            self.direction = self._dir_changes.popleft()

        new_head = self.snake.head.translate(self.direction)
        hit = self.peek_collision(new_head)

        if hit in FATAL_STATES:
            self._end_game(DEATH_REASONS[hit])
        elif hit == CellState.ANTI_FOOD and self.score == ANTI_FOOD_FATAL_SCORE:
            self._end_game("anti_food")
        elif hit == CellState.EMPTY:
            self._move_snake(new_head, tail_removals=1)
        elif hit == CellState.FOOD:
            self._move_snake(new_head, tail_removals=0)
            self._food_eaten(hit, 1)
        elif hit == CellState.SUPER_FOOD:
            self._move_snake(new_head, tail_removals=0)
            self.snake.growth_credit += 1
            self._food_eaten(hit, 2)
        elif hit == CellState.ANTI_FOOD:
            self._move_snake(new_head, tail_removals=2)
            self._food_eaten(hit, -1)

        self.tick += 1

    def _move_snake(self, new_head: Position, tail_removals: int) -> None:
        """
        Remove up to `tail_removals` tail segments, then add `new_head`.

        Pending growth credit cancels removals one for one. Removals never
        take more segments than the snake has.
        """
        cancelled = min(self.snake.growth_credit, tail_removals)
        self.snake.growth_credit -= cancelled
        removals = min(tail_removals - cancelled, len(self.snake))

        for _ in range(removals):
            tail = self.snake.pop_tail()
            self._grid[tail.row][tail.column] = CellState.EMPTY

        self.snake.push_head(new_head)
        self._grid[new_head.row][new_head.column] = CellState.SNAKE

    def _food_eaten(self, kind: CellState, points: int) -> None:
        self.score += points
        logger.debug(f"Ate {kind.value} at tick {self.tick}, score {self.score}")
        self._add_food()
        self._rebalance_obstacles()
        self._play("play_eat")

    def _end_game(self, reason: str) -> None:
        self.game_over = True
        self.snake.alive = False
        self.snake.death_reason = reason
        self.snake.death_tick = self.tick
        logger.info(f"Game over at tick {self.tick}: {reason} (score {self.score})")
        self._play("play_game_over")

    def _play(self, cue: str) -> None:
        """Request an audio cue. A failing sink never interrupts the tick."""
        if not self._sounds_enabled or self._audio is None:
            return
        try:
            getattr(self._audio, cue)()
        except Exception as e:
            logger.warning(f"Audio cue {cue} failed: {e}")

    # ------------------------------------------------------------------
    # Food and obstacles
    # ------------------------------------------------------------------

    def _add_food(self) -> None:
        empty = self.empty_positions()
        if not empty:
            logger.debug("Board is full, no food placed")
            return

        pos = empty[self._random.randrange(len(empty))]
        roll = self._random.random()

        if roll < SUPER_FOOD_CHANCE:
            kind = CellState.SUPER_FOOD
        elif roll < ANTI_FOOD_THRESHOLD:
            kind = CellState.ANTI_FOOD
        else:
            kind = CellState.FOOD
        self._grid[pos.row][pos.column] = kind

    def _rebalance_obstacles(self) -> None:
        """Bring the obstacle count to one per POINTS_PER_OBSTACLE points."""
        target = max(0, self.score // POINTS_PER_OBSTACLE)
        empty = self.empty_positions()
        obstacles = self.obstacle_positions()

        while len(obstacles) < target and empty:
            pos = empty.pop(self._random.randrange(len(empty)))
            self._grid[pos.row][pos.column] = CellState.OBSTACLE
            obstacles.append(pos)

        while len(obstacles) > target:
            pos = obstacles.pop(self._random.randrange(len(obstacles)))
            self._grid[pos.row][pos.column] = CellState.EMPTY
            empty.append(pos)

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            rows=self.rows,
            columns=self.columns,
            cells=self.grid,
            snake=tuple(self.snake),
            direction=self.direction,
            score=self.score,
            game_over=self.game_over,
            tick=self.tick,
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty
        H = snake head, S = snake body
        F = food, * = super food, - = anti food
        # = obstacle
        Row 0 is at the top; column labels are at the bottom.
        """
        board = [[BOARD_SYMBOLS[state] for state in row] for row in self._grid]
        head = self.snake.head
        board[head.row][head.column] = "X" if self.game_over else "H"

        result = [f"{r:2d} {' '.join(board[r])}" for r in range(self.rows)]
        result.append("   " + " ".join(str(c % 10) for c in range(self.columns)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, score={self.score}, length={len(self.snake)}, "
            f"direction={self.direction.value}, game_over={self.game_over}>"
        )
