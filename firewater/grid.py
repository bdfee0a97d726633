"""Level grid: cell types, coordinate conversion and collision rules."""

from __future__ import annotations

import logging
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Tuple, Union

log = logging.getLogger(__name__)

Vec2 = Tuple[float, float]
Cell = Tuple[int, int]


class CellType(IntEnum):
    """Kinds of cell a level map is made of; values match the map files."""

    EMPTY = 0
    FLOOR = 1
    WALL = 2
    DOOR_FIRE = 3
    DOOR_WATER = 4
    GEM_FIRE = 5
    GEM_WATER = 6
    GEM_GREEN = 7
    LAVA = 8
    WATER = 9
    POISON = 10
    BUTTON = 11
    LEVER = 12
    PLATFORM = 13
    FAN = 14
    BOX = 15
    STONE = 16


_PASSABLE = frozenset(
    {
        CellType.EMPTY,
        CellType.BUTTON,
        CellType.LEVER,
        CellType.PLATFORM,
        CellType.GEM_FIRE,
        CellType.GEM_WATER,
        CellType.FLOOR,
    }
)
_FIRE_ONLY = frozenset({CellType.LAVA, CellType.DOOR_FIRE})
_WATER_ONLY = frozenset({CellType.WATER, CellType.DOOR_WATER})


class GridSystem:
    """A rectangular grid of cells laid over a background centred on the origin."""

    def __init__(
        self,
        cell_size: int = 25,
        background_width: int = 975,
        background_height: int = 725,
    ) -> None:
        self.cell_size = cell_size
        self.background_width = background_width
        self.background_height = background_height
        self.grid_width = background_width // cell_size
        self.grid_height = background_height // cell_size
        self._cells = self._blank()
        log.info(
            "GridSystem initialized with empty grid: %dx%d",
            self.grid_width,
            self.grid_height,
        )

    def _blank(self) -> list[list[CellType]]:
        return [
            [CellType.EMPTY] * self.grid_width for _ in range(self.grid_height)
        ]

    @property
    def min_x(self) -> float:
        return -self.background_width / 2.0

    @property
    def max_x(self) -> float:
        return self.background_width / 2.0

    @property
    def min_y(self) -> float:
        return -self.background_height / 2.0

    @property
    def max_y(self) -> float:
        return self.background_height / 2.0

    def load_from_file(self, path: Union[str, Path]) -> None:
        """Load the grid from a text file of whitespace-separated cell values."""
        with open(path, encoding="utf-8") as handle:
            self.load_lines(handle)
        log.info("Grid loaded from file: %s", path)

    def load_lines(self, lines: Iterable[str]) -> None:
        """Replace the grid with rows of cell values, one row per line.

        Rows and columns beyond the grid are ignored; a row ends at its first
        token that is not an integer. Unknown cell values raise ValueError.
        """
        self._cells = self._blank()
        for y, line in zip(range(self.grid_height), lines):
            row = self._cells[y]
            for x, token in zip(range(self.grid_width), line.split()):
                try:
                    value = int(token)
                except ValueError:
                    break
                try:
                    row[x] = CellType(value)
                except ValueError:
                    raise ValueError(
                        f"unknown cell value {value} at row {y}, column {x}"
                    ) from None

    def is_valid_grid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height

    def get_cell(self, x: int, y: int) -> CellType:
        """Return the cell at (x, y), or EMPTY outside the grid."""
        if self.is_valid_grid_position(x, y):
            return self._cells[y][x]
        return CellType.EMPTY

    def cell_to_game_position(self, grid_x: int, grid_y: int) -> Vec2:
        """Centre of a cell in game coordinates (y grows upwards)."""
        half = self.cell_size / 2.0
        world_x = self.min_x + grid_x * self.cell_size + half
        world_y = self.max_y - grid_y * self.cell_size - half
        return (world_x, world_y)

    def game_to_cell_position(self, world_pos: Vec2) -> Cell:
        """Cell containing a game position, clamped to the grid."""
        relative_x = world_pos[0] + self.max_x
        relative_y = self.max_y - world_pos[1]
        grid_x = int(relative_x / self.cell_size)
        grid_y = int(relative_y / self.cell_size)
        grid_x = max(0, min(grid_x, self.grid_width - 1))
        grid_y = max(0, min(grid_y, self.grid_height - 1))
        return (grid_x, grid_y)

    def can_move_on(self, cell_type: CellType, is_fireboy: bool) -> bool:
        if cell_type in _PASSABLE:
            return True
        if cell_type in _FIRE_ONLY:
            return is_fireboy
        if cell_type in _WATER_ONLY:
            return not is_fireboy
        return False

    def check_collision(
        self, world_pos: Vec2, size: Vec2, is_fireboy: bool, delta_x: int = 0
    ) -> bool:
        """Whether a character at world_pos would collide.

        Moving right checks the right edge, moving left the left edge, and
        otherwise the cell under the centre.
        """
        x, y = world_pos
        if delta_x > 0:
            probe = (x + size[0] / 2.0, y)
        elif delta_x < 0:
            probe = (x - size[0] / 2.0, y)
        else:
            probe = (x, y)
        cell = self.get_cell(*self.game_to_cell_position(probe))
        return not self.can_move_on(cell, is_fireboy)