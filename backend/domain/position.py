"""
Position value type for grid coordinates.
"""

from typing import NamedTuple

from .constants import Direction


class Position(NamedTuple):
    """An immutable (row, column) grid coordinate."""

    row: int
    column: int

    def translate(self, direction: Direction) -> "Position":
        """Return the neighbouring position one step towards `direction`."""
        d_row, d_col = direction.delta
        return Position(self.row + d_row, self.column + d_col)

    def __repr__(self) -> str:
        return f"({self.row}, {self.column})"
