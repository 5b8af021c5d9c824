"""
Tests for services/renderer.py - Pillow board rendering.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import CellState, GameState, Position, UP, DOWN, LEFT, RIGHT
from services.renderer import (
    BANNER_HEIGHT,
    BoardRenderer,
    ColorScheme,
    eye_offsets,
    hex_to_rgb,
)


@pytest.fixture
def game():
    state = GameState(6, 8, sounds_enabled=False, seed=1)
    state.set_food(Position(0, 0), CellState.SUPER_FOOD)
    state.set_obstacles([Position(5, 7)])
    return state


def centre(renderer, position, top=BANNER_HEIGHT):
    size = renderer.cell_size
    return position.column * size + size // 2, top + position.row * size + size // 2


class TestHelpers:

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FF8000") == (255, 128, 0)
        assert hex_to_rgb("1B1E2B") == (27, 30, 43)

    def test_eye_offsets_follow_direction(self):
        assert eye_offsets(UP, 32) == ((8, 8), (24, 8))
        assert eye_offsets(RIGHT, 32) == ((24, 8), (24, 24))
        assert eye_offsets(DOWN, 32) == ((24, 24), (8, 24))
        assert eye_offsets(LEFT, 32) == ((8, 24), (8, 8))


class TestBoardRenderer:

    def test_image_size(self, game):
        renderer = BoardRenderer(cell_size=10)
        assert renderer.image_size(game.snapshot()) == (80, 60 + BANNER_HEIGHT)
        no_banner = BoardRenderer(cell_size=10, show_banner=False)
        assert no_banner.image_size(game.snapshot()) == (80, 60)

    def test_render_returns_rgb_image(self, game):
        renderer = BoardRenderer()
        img = renderer.render(game.snapshot())
        assert img.mode == "RGB"
        assert img.size == renderer.image_size(game.snapshot())

    def test_cell_colours(self, game):
        renderer = BoardRenderer()
        img = renderer.render(game.snapshot())
        assert img.getpixel(centre(renderer, Position(0, 0))) == hex_to_rgb(ColorScheme.SUPER_FOOD)
        assert img.getpixel(centre(renderer, Position(5, 7))) == hex_to_rgb(ColorScheme.OBSTACLE)
        assert img.getpixel(centre(renderer, Position(3, 2))) == hex_to_rgb(ColorScheme.SNAKE)
        assert img.getpixel(centre(renderer, Position(1, 5))) == hex_to_rgb(ColorScheme.EMPTY)

    def test_head_is_drawn_with_eyes(self, game):
        renderer = BoardRenderer()
        img = renderer.render(game.snapshot())
        head = game.head_position()
        assert img.getpixel(centre(renderer, head)) == hex_to_rgb(ColorScheme.HEAD)

        x = head.column * renderer.cell_size
        y = BANNER_HEIGHT + head.row * renderer.cell_size
        for ex, ey in eye_offsets(game.direction, renderer.cell_size):
            assert img.getpixel((x + ex, y + ey)) == hex_to_rgb(ColorScheme.EYE)

    def test_without_banner(self, game):
        renderer = BoardRenderer(show_banner=False)
        img = renderer.render(game.snapshot())
        assert img.getpixel(centre(renderer, Position(0, 0), top=0)) == hex_to_rgb(ColorScheme.SUPER_FOOD)

    def test_dead_reveal(self, game):
        game.advance()
        game.set_obstacles([Position(3, 5)])
        game.advance()
        assert game.game_over is True

        renderer = BoardRenderer()
        snapshot = game.snapshot()
        body = snapshot.snake

        partial = renderer.render(snapshot, dead_reveal=2)
        assert partial.getpixel(centre(renderer, body[0])) == hex_to_rgb(ColorScheme.DEAD_HEAD)
        assert partial.getpixel(centre(renderer, body[1])) == hex_to_rgb(ColorScheme.DEAD_BODY)
        assert partial.getpixel(centre(renderer, body[2])) == hex_to_rgb(ColorScheme.SNAKE)

        full = renderer.render(snapshot, dead_reveal=len(body))
        assert full.getpixel(centre(renderer, body[-1])) == hex_to_rgb(ColorScheme.DEAD_BODY)
