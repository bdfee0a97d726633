"""Game state machine: title screen, level selection and play."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from functools import partial
from typing import Callable, Dict, List, Optional

from firewater.character import Character, Fireboy, Watergirl
from firewater.grid import GridSystem
from firewater.sprites import (
    BackgroundImage,
    Button,
    Door,
    PathLike,
    Sprite,
    Vec2,
    resource_path,
)

log = logging.getLogger(__name__)

LEVEL_BUTTON_YS = (-220, -102, 16, 134, 252)
BACK_BUTTON_POSITION = (-450.0, -250.0)
MOVE_STEP = 5


class State(Enum):
    """Screens the game moves between."""

    START = auto()
    LEVEL_SELECT = auto()
    GAME_PLAY = auto()
    GAME_WIN = auto()
    GAME_OVER = auto()
    END = auto()


@dataclass(frozen=True)
class InputState:
    """One frame of input.

    ``pressed`` holds the names of keys held down ("LEFT", "RIGHT", "UP",
    "A", "D", "W", "RETURN"); ``mouse`` is in game coordinates;
    ``exit_requested`` is set when Escape was released or the window closed.
    """

    pressed: frozenset = frozenset()
    mouse: Vec2 = (0.0, 0.0)
    mouse_left: bool = False
    exit_requested: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "pressed", frozenset(self.pressed))


def convert_to_game_coordinates(
    screen_x: int, screen_y: int, window_width: int, window_height: int
) -> Vec2:
    """Window pixel position to game coordinates: centred, y pointing up."""
    return (screen_x - window_width // 2, window_height // 2 - screen_y)


def restrict_player_position(player: Character, grid: GridSystem) -> None:
    """Keep a character inside the map bounds."""
    x, y = player.position
    x = min(max(x, grid.min_x), grid.max_x)
    y = min(max(y, grid.min_y), grid.max_y)
    player.position = (x, y)


def handle_collision(player: Character, app: "App", is_fireboy: bool) -> None:
    """Nudge a character that stands in a blocked cell to a free neighbour."""
    x, y = player.position
    size = player.size
    if not app.check_character_collision((x, y), size, is_fireboy, 0):
        return
    adjustment = app.grid.cell_size / 4.0
    candidates = (
        (x, y - adjustment),
        (x, y + adjustment),
        (x - adjustment, y),
        (x + adjustment, y),
    )
    for candidate in candidates:
        if not app.check_character_collision(candidate, size, is_fireboy, 0):
            player.position = candidate
            return


class App:
    """The whole game: its scene, its grid and the current screen."""

    def __init__(
        self,
        resource_dir: Optional[PathLike] = None,
        image_size: Optional[Callable[[str], Vec2]] = None,
    ) -> None:
        log.debug("Game Initialize")
        self.resource_dir = resource_dir
        self._image_size = image_size
        self.state = State.START
        self.current_level = 1
        self.level_completed = False
        self.finished = False
        self.grid = GridSystem()
        self.grid_loaded = False
        self.fireboy: Optional[Fireboy] = None
        self.watergirl: Optional[Watergirl] = None
        self._scene: List[Sprite] = []

        self.title_background = self._add(
            self._background("material/background/cover.png")
        )
        self.level_select_background = self._add(
            self._background("material/background/level-page.png")
        )

        self.level_buttons: List[Button] = []
        for level, y in enumerate(LEVEL_BUTTON_YS, start=1):
            image = "current-level.png" if level == 1 else "unlevel.png"
            button = self._button(f"material/background/button/{image}", (0.0, float(y)))
            button.interactable = level == 1
            button.on_click = partial(self._enter_level, level, level != 5)
            self.level_buttons.append(self._add(button))

        self.back_button = self._add(
            self._button("material/background/button/back-button.png", BACK_BUTTON_POSITION)
        )
        self.back_button.on_click = self._back_to_title

        self.level_backgrounds: Dict[int, BackgroundImage] = {
            1: self._add(self._background("material/background/rlevel1.png"))
        }

        self.fireboy_door = self._add(self._door("material/props/door/door-fireboy.png"))
        self.watergirl_door = self._add(
            self._door("material/props/door/door-watergirl.png")
        )

    # scene construction

    def _path(self, relative: str) -> str:
        return resource_path(relative, self.resource_dir)

    def _size(self, path: str) -> Optional[Vec2]:
        return self._image_size(path) if self._image_size is not None else None

    def _background(self, relative: str) -> BackgroundImage:
        path = self._path(relative)
        return BackgroundImage(path, self._size(path))

    def _button(self, relative: str, position: Vec2) -> Button:
        path = self._path(relative)
        return Button(path, position, size=self._size(path))

    def _door(self, relative: str) -> Door:
        path = self._path(relative)
        return Door(path, self._size(path))

    def _add(self, sprite, visible: bool = False):
        sprite.visible = visible
        self._scene.append(sprite)
        return sprite

    def sprites(self) -> List[Sprite]:
        """Every object in the scene, in drawing order."""
        return sorted(self._scene, key=lambda sprite: sprite.z_index)

    # button callbacks

    def _hide_level_buttons(self) -> None:
        for button in self.level_buttons:
            button.visible = False

    def _enter_level(self, level: int, hide_back: bool) -> None:
        self.state = State.GAME_PLAY
        self._hide_level_buttons()
        if hide_back:
            self.back_button.visible = False
        self.level_select_background.visible = False
        background = self.level_backgrounds.get(level)
        if background is not None:
            background.visible = True

    def _back_to_title(self) -> None:
        self.state = State.START
        self._hide_level_buttons()
        self.back_button.visible = False
        self.level_select_background.visible = False

    # screens

    def _check_exit(self, inputs: InputState) -> None:
        if inputs.exit_requested:
            self.state = State.END

    def start(self, inputs: InputState) -> None:
        """Title screen: Return opens level selection."""
        self.title_background.visible = True
        if "RETURN" in inputs.pressed:
            self.state = State.LEVEL_SELECT
        self._check_exit(inputs)

    def level_select(self, inputs: InputState) -> None:
        """Level selection: show the buttons and dispatch a left click."""
        if self.state is not State.LEVEL_SELECT:
            return
        self.title_background.visible = False
        self.level_select_background.visible = True
        for button in (*self.level_buttons, self.back_button):
            button.visible = True
        if inputs.mouse_left:
            mouse_x, mouse_y = inputs.mouse
            any(
                button.handle_click(mouse_x, mouse_y)
                for button in (*self.level_buttons, self.back_button)
            )
        self._check_exit(inputs)

    def _control(
        self, character: Character, inputs: InputState, keys: tuple, is_fireboy: bool
    ) -> None:
        left, right, up = keys
        delta_x = 0
        if left in inputs.pressed:
            delta_x = -MOVE_STEP
        if right in inputs.pressed:
            delta_x = MOVE_STEP
        # horizontal movement uses fire rules for both characters
        character.move(delta_x, up in inputs.pressed, self.grid, True)
        character.update_jump(self.grid)
        character.apply_gravity(self.grid)
        restrict_player_position(character, self.grid)
        handle_collision(character, self, is_fireboy)

    def game_play(self, inputs: InputState) -> None:
        """One frame of play: load the level if needed, then move both characters."""
        if not self.grid_loaded and not self.load_level_grid(self.current_level):
            log.error("Failed to load level %d", self.current_level)
            return
        if self.fireboy is not None:
            self._control(self.fireboy, inputs, ("LEFT", "RIGHT", "UP"), True)
        if self.watergirl is not None:
            self._control(self.watergirl, inputs, ("A", "D", "W"), False)
        self._check_exit(inputs)

    def game_win(self, inputs: InputState) -> None:
        """Win screen: only waits for the player to quit."""
        self._check_exit(inputs)

    def game_over(self, inputs: InputState) -> None:
        """Game-over screen: only waits for the player to quit."""
        self._check_exit(inputs)

    def end(self) -> None:
        """Finish the game: enter the END state and mark the loop as done."""
        log.debug("Game End")
        self.state = State.END
        self.finished = True

    def step(self, inputs: InputState) -> bool:
        """Run the current screen for one frame; False once the game has ended."""
        if self.finished:
            return False
        if self.state is State.END:
            self.end()
            return False
        handlers = {
            State.START: self.start,
            State.LEVEL_SELECT: self.level_select,
            State.GAME_PLAY: self.game_play,
            State.GAME_WIN: self.game_win,
            State.GAME_OVER: self.game_over,
        }
        handlers[self.state](inputs)
        return True

    # levels

    def check_character_collision(
        self, position: Vec2, size: Vec2, is_fireboy: bool, delta_x: int = 0
    ) -> bool:
        """Grid collision test; never collides before a grid is loaded."""
        if not self.grid_loaded:
            return False
        return self.grid.check_collision(position, size, is_fireboy, delta_x)

    def _character_size(self, relative: str) -> Optional[Vec2]:
        return self._size(self._path(relative))

    def load_level_grid(self, level_number: int) -> bool:
        """Load a level's grid and place its characters and doors.

        A missing grid file is logged and leaves the grid unloaded; an unknown
        level number returns False.
        """
        path = self._path(f"map/level{level_number}_grid.txt")
        try:
            self.grid.load_from_file(path)
        except OSError:
            log.error("Failed to open grid file: %s", path)
        else:
            self.grid_loaded = True
            log.info("Successfully loaded grid for level %d", level_number)

        if level_number == 1:
            self._place_level_one()
        elif level_number not in (2, 3, 4, 5):
            log.error("Invalid level number: %d", level_number)
            return False

        for y in range(self.grid.grid_height):
            log.debug(
                " ".join(
                    str(int(self.grid.get_cell(x, y))) for x in range(self.grid.grid_width)
                )
            )
        return True

    def _place_level_one(self) -> None:
        if self.fireboy is None:
            self.fireboy = Fireboy(
                self.resource_dir,
                self._character_size("material/character/fireboy-front.png"),
            )
            self.fireboy.position = self.grid.cell_to_game_position(35, 5)
            self._add(self.fireboy, visible=True)
        if self.watergirl is None:
            self.watergirl = Watergirl(
                self.resource_dir,
                self._character_size("material/character/watergirl-front.png"),
            )
            self.watergirl.position = self.grid.cell_to_game_position(3, 17)
            self._add(self.watergirl, visible=True)

        for door, cell in ((self.fireboy_door, (32, 14)), (self.watergirl_door, (4, 27))):
            door.position = self.grid.cell_to_game_position(*cell)
            door.set_open(False)
            door.visible = True