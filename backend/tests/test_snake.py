"""
Tests for the small domain types: Direction, Position and Snake.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import Direction, Position, Snake, UP, DOWN, LEFT, RIGHT, VALID_MOVES


class TestDirection:

    def test_valid_moves_order(self):
        """Tie-break order is UP, DOWN, LEFT, RIGHT."""
        assert VALID_MOVES == (UP, DOWN, LEFT, RIGHT)

    def test_opposites(self):
        assert UP.opposite() == DOWN
        assert DOWN.opposite() == UP
        assert LEFT.opposite() == RIGHT
        assert RIGHT.opposite() == LEFT

    def test_deltas(self):
        """Row grows downward, column grows to the right."""
        assert UP.delta == (-1, 0)
        assert DOWN.delta == (1, 0)
        assert LEFT.delta == (0, -1)
        assert RIGHT.delta == (0, 1)

    def test_string_values(self):
        assert Direction("LEFT") is LEFT
        assert RIGHT.value == "RIGHT"


class TestPosition:

    def test_translate(self):
        pos = Position(5, 5)
        assert pos.translate(UP) == Position(4, 5)
        assert pos.translate(DOWN) == Position(6, 5)
        assert pos.translate(LEFT) == Position(5, 4)
        assert pos.translate(RIGHT) == Position(5, 6)

    def test_translate_can_leave_the_board(self):
        assert Position(0, 0).translate(UP) == Position(-1, 0)

    def test_tuple_equality_and_hashing(self):
        assert Position(1, 2) == (1, 2)
        assert {Position(1, 2), Position(1, 2)} == {Position(1, 2)}

    def test_repr(self):
        assert repr(Position(3, 4)) == "(3, 4)"


class TestSnake:

    def test_head_and_tail(self):
        snake = Snake([Position(0, 2), Position(0, 1), Position(0, 0)])
        assert snake.head == Position(0, 2)
        assert snake.tail == Position(0, 0)
        assert len(snake) == 3
        assert snake.alive is True
        assert snake.growth_credit == 0
        assert snake.death_reason is None

    def test_push_and_pop_keep_membership(self):
        snake = Snake([Position(0, 2), Position(0, 1), Position(0, 0)])
        snake.push_head(Position(0, 3))
        assert Position(0, 3) in snake
        assert snake.pop_tail() == Position(0, 0)
        assert Position(0, 0) not in snake
        assert snake.as_list() == [Position(0, 3), Position(0, 2), Position(0, 1)]

    def test_iteration_is_head_first(self):
        body = [Position(2, 2), Position(2, 1), Position(3, 1)]
        assert list(Snake(body)) == body

    def test_empty_snake_rejected(self):
        with pytest.raises(ValueError):
            Snake([])

    def test_duplicate_segments_rejected(self):
        with pytest.raises(ValueError):
            Snake([Position(0, 0), Position(0, 1), Position(0, 0)])

    def test_repr(self):
        snake = Snake([Position(1, 1)])
        assert "length=1" in repr(snake)
