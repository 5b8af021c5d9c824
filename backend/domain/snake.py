"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Iterator, List, Optional, Set

from .position import Position


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of Position from head at index 0 to tail at the end
        growth_credit: segments still owed; each one skips a tail removal
        alive: whether the snake is still alive
        death_reason: e.g., 'wall', 'self', 'obstacle', 'anti_food'
        death_tick: the tick on which the snake died
    """

    def __init__(self, positions: Iterable[Position]):
        self.positions = deque(positions)
        if not self.positions:
            raise ValueError("Snake must have at least one position")
        self._occupied: Set[Position] = set(self.positions)
        if len(self._occupied) != len(self.positions):
            raise ValueError("Snake positions must be distinct")
        self.growth_credit = 0
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def push_head(self, position: Position) -> None:
        self.positions.appendleft(position)
        self._occupied.add(position)

    def pop_tail(self) -> Position:
        tail = self.positions.pop()
        self._occupied.discard(tail)
        return tail

    def as_list(self) -> List[Position]:
        return list(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, position: object) -> bool:
        return position in self._occupied

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __repr__(self) -> str:
        return f"<Snake head={self.head} length={len(self)} credit={self.growth_credit}>"
