"""Player characters: movement, jumping, gravity and sprite animation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from firewater.grid import CellType, GridSystem
from firewater.sprites import PathLike, Sprite, Vec2, resource_path

JUMP_SPEED = 7
FALL_SPEED = 5.0
ANIMATION_PERIOD = 7


class Character(Sprite, ABC):
    """A character that walks, jumps and falls on a grid."""

    def __init__(self, image_path: PathLike, size: Optional[Vec2] = None) -> None:
        super().__init__(image_path, 10, size)
        self.is_moving = False
        self.current_sprite = False
        self.is_jumping = False
        self.jump_height = 0
        self.jump_max_height = 90
        self.is_on_ground = True
        self.up_key_was_pressed = False
        self.facing_right = True
        self._animation_frame = 0
        self.pivot = (0.0, -self.size[1] / 2 - 13.5)

    def set_image(self, image_path: PathLike) -> None:
        super().set_image(image_path)
        self._apply_flip()

    def _apply_flip(self) -> None:
        sx, sy = self.scale
        self.scale = (abs(sx) if self.facing_right else -abs(sx), sy)

    def move(
        self, delta_x: int, up_key_pressed: bool, grid: GridSystem, is_fireboy: bool
    ) -> None:
        """Walk horizontally unless blocked, and start a jump on a fresh key press."""
        self.is_moving = delta_x != 0
        if delta_x < 0:
            self.facing_right = False
        elif delta_x > 0:
            self.facing_right = True
        self._apply_flip()

        x, y = self.position
        new_pos = (x + delta_x, y)
        if not grid.check_collision(new_pos, self.size, is_fireboy, delta_x):
            self.position = new_pos

        if up_key_pressed and not self.up_key_was_pressed and self.is_on_ground:
            self.is_jumping = True
            self.is_on_ground = False
            self.jump_height = 0
        self.up_key_was_pressed = up_key_pressed

        self.update_animation()

    @staticmethod
    def _landing_y(grid: GridSystem, cell: Tuple[int, int]) -> float:
        return grid.cell_to_game_position(*cell)[1] + (grid.cell_size / 2.0 - 12.0)

    def update_jump(self, grid: GridSystem) -> None:
        """Advance a jump by one frame: rise to the peak, then fall to a floor."""
        if not self.is_jumping:
            return
        x, y = self.position
        if self.jump_height < self.jump_max_height:
            top = grid.game_to_cell_position((x, y + self.jump_max_height))
            if grid.get_cell(*top) is CellType.FLOOR:
                self.jump_height = self.jump_max_height
            else:
                y += JUMP_SPEED
                self.jump_height += JUMP_SPEED
        else:
            next_y = y - FALL_SPEED
            below = grid.game_to_cell_position((x, next_y))
            if grid.get_cell(*below) is CellType.FLOOR:
                self.is_jumping = False
                self.is_on_ground = True
                self.jump_height = 0
                y = self._landing_y(grid, below)
            else:
                y = next_y
        self.position = (x, y)

    def apply_gravity(self, grid: GridSystem) -> None:
        """Fall one step when not jumping, snapping onto a floor when reached."""
        if self.is_jumping:
            return
        x, y = self.position
        next_y = y - FALL_SPEED
        below = grid.game_to_cell_position((x, next_y))
        if grid.get_cell(*below) is CellType.FLOOR:
            self.is_on_ground = True
            y = self._landing_y(grid, below)
        else:
            self.is_on_ground = False
            y = next_y
        self.position = (x, y)

    def _animate(self, front: str, side: str, side_run: str) -> None:
        if self.is_jumping:
            self.set_image(front)
            self._animation_frame = 0
        elif self.is_moving:
            if self._animation_frame % ANIMATION_PERIOD == 0:
                self.set_image(side_run if self.current_sprite else side)
                self.current_sprite = not self.current_sprite
            self._animation_frame += 1
        else:
            self.set_image(front)
            self._animation_frame = 0

    @abstractmethod
    def update_animation(self) -> None:
        """Choose the sprite image for the current frame."""


class Fireboy(Character):
    """The fire character."""

    def __init__(
        self, resource_dir: Optional[PathLike] = None, size: Optional[Vec2] = None
    ) -> None:
        self._front = resource_path("material/character/fireboy-front.png", resource_dir)
        self._side = resource_path("material/character/fireboy-side.png", resource_dir)
        self._side_run = resource_path(
            "material/character/fireboy-side-run.png", resource_dir
        )
        super().__init__(self._front, size)

    def update_animation(self) -> None:
        self._animate(self._front, self._side, self._side_run)


class Watergirl(Character):
    """The water character."""

    def __init__(
        self, resource_dir: Optional[PathLike] = None, size: Optional[Vec2] = None
    ) -> None:
        self._front = resource_path(
            "material/character/watergirl-front.png", resource_dir
        )
        self._side = resource_path("material/character/watergirl-side.png", resource_dir)
        self._side_run = resource_path(
            "material/character/watergirl-side-run.png", resource_dir
        )
        super().__init__(self._front, size)

    def update_animation(self) -> None:
        self._animate(self._front, self._side, self._side_run)