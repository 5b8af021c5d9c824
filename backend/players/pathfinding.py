"""
Breadth-first search over the board with a shifting snake body.

The snake's own body is the obstacle set, but it does not stand still: by the
time the real head has walked L cells along a path, the last L segments of the
body have vacated and the path cells themselves are occupied. `shift` builds
that moved body and `search` re-evaluates it at every expansion.
"""

from collections import deque
from typing import Dict, List, Optional, Sequence

from domain.position import Position

Path = List[Position]


def adjacencies(position: Position, rows: int, columns: int) -> List[Position]:
    """In-bounds 4-neighbours of `position`, in the order left, down, right, up."""
    row, column = position
    candidates = (
        Position(row, column - 1),
        Position(row + 1, column),
        Position(row, column + 1),
        Position(row - 1, column),
    )
    return [p for p in candidates if 0 <= p.row < rows and 0 <= p.column < columns]


def shift(snake: Sequence[Position], path: Sequence[Position], collect: bool = False) -> List[Position]:
    """
    Return the head-first body after the head has walked along `path`.

    `path[0]` is the first cell the head enters. With `collect` the body keeps
    one extra segment, as it does after eating. A tail repeated in `snake`
    stands for pending growth and vacates one tick later per copy.
    """
    length = len(snake) + (1 if collect else 0)
    moved = list(reversed(path)) + list(snake)
    return moved[:length]


def search(
    start: Position,
    end: Position,
    rows: int,
    columns: int,
    snake: Sequence[Position],
) -> Optional[Path]:
    """
    Shortest path from `start` to `end` (both inclusive) avoiding the
    shifting body, or None if `end` is unreachable.
    """
    queue = deque([start])
    paths: Dict[Position, Path] = {start: [start]}

    while queue:
        current = queue.popleft()
        path = paths[current]
        if current == end:
            return path

        blocked = set(shift(snake, path))
        for nxt in adjacencies(current, rows, columns):
            if nxt in blocked or nxt in paths:
                continue
            paths[nxt] = path + [nxt]
            queue.append(nxt)

    return None
