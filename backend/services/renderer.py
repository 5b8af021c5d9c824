"""
Board rendering with Pillow.

Draws a BoardSnapshot as an RGB image:
- one coloured tile per cell state (empty, body, food variants, obstacle)
- the head drawn darker with eyes facing the current direction
- a score banner above the board
- a "dead" style for game over, revealed segment by segment
"""

from typing import Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.constants import CellState, Direction
from domain.game_state import BoardSnapshot

CELL_SIZE = 32  # Size of each grid cell in pixels
BANNER_HEIGHT = 40

# Head rotation in degrees, clockwise from "facing up"
DIRECTION_ROTATION: Dict[Direction, int] = {
    Direction.UP: 0,
    Direction.RIGHT: 90,
    Direction.DOWN: 180,
    Direction.LEFT: 270,
}


class ColorScheme:
    """Tile colours per cell state"""

    EMPTY = "#1B1E2B"
    GRID_LINE = "#2A2F42"
    SNAKE = "#4F7022"
    HEAD = "#3A5418"
    FOOD = "#EA2014"
    SUPER_FOOD = "#F2C230"
    ANTI_FOOD = "#2F6FDE"
    OBSTACLE = "#7A7F8C"
    DEAD_BODY = "#5C5C5C"
    DEAD_HEAD = "#8B1A1A"
    EYE = "#FFFFFF"
    BANNER_BG = "#10121A"
    SCORE_TEXT = "#FFFFFF"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


CELL_COLORS: Dict[CellState, str] = {
    CellState.EMPTY: ColorScheme.EMPTY,
    CellState.SNAKE: ColorScheme.SNAKE,
    CellState.FOOD: ColorScheme.FOOD,
    CellState.SUPER_FOOD: ColorScheme.SUPER_FOOD,
    CellState.ANTI_FOOD: ColorScheme.ANTI_FOOD,
    CellState.OBSTACLE: ColorScheme.OBSTACLE,
}


def eye_offsets(direction: Direction, cell_size: int) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Pixel offsets (x, y) of the two eyes inside a head tile.

    The eyes are laid out for a head facing up and rotated clockwise by
    DIRECTION_ROTATION[direction] around the tile centre.
    """
    quarter = cell_size // 4
    up_layout = ((quarter, quarter), (cell_size - quarter, quarter))
    turns = DIRECTION_ROTATION[direction] // 90

    eyes = []
    for x, y in up_layout:
        for _ in range(turns):
            # 90 degrees clockwise in image coordinates
            x, y = cell_size - y, x
        eyes.append((x, y))
    return eyes[0], eyes[1]


class BoardRenderer:
    """Render board snapshots to Pillow images"""

    def __init__(self, cell_size: int = CELL_SIZE, show_banner: bool = True):
        self.cell_size = cell_size
        self.show_banner = show_banner
        self.font = ImageFont.load_default()

    def image_size(self, snapshot: BoardSnapshot) -> Tuple[int, int]:
        banner = BANNER_HEIGHT if self.show_banner else 0
        return snapshot.columns * self.cell_size, snapshot.rows * self.cell_size + banner

    def render(self, snapshot: BoardSnapshot, dead_reveal: Optional[int] = None) -> Image.Image:
        """
        Render one frame.

        Args:
            snapshot: the board to draw
            dead_reveal: when set, the first `dead_reveal` segments (head
                first) are drawn in the dead style

        Returns:
            An RGB image
        """
        width, height = self.image_size(snapshot)
        img = Image.new('RGB', (width, height), hex_to_rgb(ColorScheme.BANNER_BG))
        draw = ImageDraw.Draw(img)
        top = BANNER_HEIGHT if self.show_banner else 0

        if self.show_banner:
            label = f"SCORE {snapshot.score}"
            if snapshot.game_over:
                label += "   GAME OVER"
            draw.text((10, BANNER_HEIGHT // 3), label, fill=hex_to_rgb(ColorScheme.SCORE_TEXT), font=self.font)

        for r, row in enumerate(snapshot.cells):
            for c, state in enumerate(row):
                self._draw_cell(draw, c * self.cell_size, top + r * self.cell_size, hex_to_rgb(CELL_COLORS[state]))

        self._draw_grid(draw, snapshot, top)

        if dead_reveal is not None:
            for i, pos in enumerate(snapshot.snake[:dead_reveal]):
                color = ColorScheme.DEAD_HEAD if i == 0 else ColorScheme.DEAD_BODY
                self._draw_cell(draw, pos.column * self.cell_size, top + pos.row * self.cell_size, hex_to_rgb(color))
            if dead_reveal > 0:
                return img

        self._draw_head(draw, snapshot, top)
        return img

    def _draw_grid(self, draw: ImageDraw.ImageDraw, snapshot: BoardSnapshot, top: int) -> None:
        line = hex_to_rgb(ColorScheme.GRID_LINE)
        width = snapshot.columns * self.cell_size
        height = snapshot.rows * self.cell_size
        for i in range(snapshot.columns + 1):
            x = i * self.cell_size
            draw.line([x, top, x, top + height], fill=line, width=1)
        for i in range(snapshot.rows + 1):
            y = top + i * self.cell_size
            draw.line([0, y, width, y], fill=line, width=1)

    def _draw_head(self, draw: ImageDraw.ImageDraw, snapshot: BoardSnapshot, top: int) -> None:
        head = snapshot.head
        x = head.column * self.cell_size
        y = top + head.row * self.cell_size
        self._draw_cell(draw, x, y, hex_to_rgb(ColorScheme.HEAD), padding=0)

        eye_size = max(2, self.cell_size // 5)
        for ex, ey in eye_offsets(snapshot.direction, self.cell_size):
            cx, cy = x + ex, y + ey
            draw.ellipse(
                [cx - eye_size // 2, cy - eye_size // 2, cx + eye_size // 2, cy + eye_size // 2],
                fill=hex_to_rgb(ColorScheme.EYE)
            )

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        color: Tuple[int, int, int],
        padding: int = 1
    ) -> None:
        """Draw a single tile"""
        draw.rectangle(
            [x + padding, y + padding, x + self.cell_size - padding - 1, y + self.cell_size - padding - 1],
            fill=color
        )
