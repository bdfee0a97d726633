"""Drawable scene objects: backgrounds, buttons and doors."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Tuple, Union

Vec2 = Tuple[float, float]
PathLike = Union[str, Path]

RESOURCE_DIR = Path("resources")


def resource_path(relative: str, resource_dir: Optional[PathLike] = None) -> str:
    """Path of a resource file below the resource directory."""
    return str(Path(resource_dir if resource_dir is not None else RESOURCE_DIR) / relative)


def image_size(image_path: PathLike) -> Vec2:
    """Width and height of an image file in pixels."""
    import pygame

    width, height = pygame.image.load(str(image_path)).get_size()
    return (float(width), float(height))


class Sprite:
    """An image placed in the scene, with a draw order and a transform."""

    def __init__(
        self,
        image_path: PathLike,
        z_index: float = 0,
        size: Optional[Vec2] = None,
    ) -> None:
        self.image_path = str(image_path)
        self.z_index = z_index
        if size is None:
            size = image_size(image_path)
        self.size: Vec2 = (float(size[0]), float(size[1]))
        self.position: Vec2 = (0.0, 0.0)
        self.scale: Vec2 = (1.0, 1.0)
        self.pivot: Vec2 = (0.0, 0.0)
        self.visible = True

    def set_image(self, image_path: PathLike) -> None:
        """Show a different image; the sprite keeps its size."""
        self.image_path = str(image_path)


class BackgroundImage(Sprite):
    """A full-screen image drawn behind everything else."""

    def __init__(self, image_path: PathLike, size: Optional[Vec2] = None) -> None:
        super().__init__(image_path, -10, size)
        self.width = int(self.size[0])
        self.height = int(self.size[1])

    @property
    def x(self) -> int:
        return int(self.position[0])

    @property
    def y(self) -> int:
        return int(self.position[1])


class Button(Sprite):
    """A clickable image with an optional click callback."""

    def __init__(
        self,
        image_path: PathLike,
        position: Vec2 = (0.0, 0.0),
        z_index: float = 0,
        size: Optional[Vec2] = None,
    ) -> None:
        super().__init__(image_path, z_index, size)
        self.width = int(self.size[0])
        self.height = int(self.size[1])
        self.position = (float(position[0]), float(position[1]))
        self.interactable = True
        self.on_click: Optional[Callable[[], None]] = None

    def is_clicked(self, mouse_x: float, mouse_y: float) -> bool:
        """Whether a point in game coordinates hits the visible, active button."""
        if not self.interactable or not self.visible:
            return False
        x, y = self.position
        half_w = self.width // 2
        half_h = self.height // 2
        return x - half_w <= mouse_x <= x + half_w and y - half_h <= mouse_y <= y + half_h

    def handle_click(self, mouse_x: float, mouse_y: float) -> bool:
        """Run the callback if the point hits the button; report whether it did."""
        if not self.is_clicked(mouse_x, mouse_y):
            return False
        if self.on_click is not None:
            self.on_click()
        return True


class Door(Sprite):
    """A level exit door, hidden once opened."""

    def __init__(self, image_path: PathLike, size: Optional[Vec2] = None) -> None:
        super().__init__(image_path, 10, size)
        self.is_open = False
        self.pivot = (-self.size[0] / 2 + 15.0, -self.size[1] / 2 + 15.0)

    def set_open(self, is_open: bool) -> None:
        self.is_open = is_open
        self.visible = not is_open