"""Command-line entry point: opens a window and runs the game loop."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from firewater.app import App, InputState, convert_to_game_coordinates
from firewater.grid import GridSystem
from firewater.sprites import RESOURCE_DIR

log = logging.getLogger(__name__)

_KEY_NAMES = ("LEFT", "RIGHT", "UP", "A", "D", "W", "RETURN")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    grid = GridSystem()
    parser = argparse.ArgumentParser(prog="firewater", description="Run the game.")
    parser.add_argument(
        "--resources", default=str(RESOURCE_DIR), help="directory holding the game assets"
    )
    parser.add_argument("--width", type=int, default=grid.background_width)
    parser.add_argument("--height", type=int, default=grid.background_height)
    parser.add_argument("--fps", type=int, default=60)
    return parser.parse_args(argv)


def read_input(
    keys: Iterable[str],
    mouse_pos: Tuple[int, int],
    mouse_buttons: Sequence[bool],
    window_size: Tuple[int, int],
    quit_requested: bool,
) -> InputState:
    """Build a frame's input from held key names and raw mouse state."""
    return InputState(
        pressed=frozenset(keys),
        mouse=convert_to_game_coordinates(
            mouse_pos[0], mouse_pos[1], window_size[0], window_size[1]
        ),
        mouse_left=bool(mouse_buttons[0]) if mouse_buttons else False,
        exit_requested=quit_requested,
    )


def _draw(pygame, screen, app: App, cache: Dict[str, object]) -> None:
    width, height = screen.get_size()
    screen.fill((0, 0, 0))
    for sprite in app.sprites():
        if not sprite.visible:
            continue
        image = cache.get(sprite.image_path)
        if image is None:
            image = pygame.image.load(sprite.image_path).convert_alpha()
            cache[sprite.image_path] = image
        if sprite.scale[0] < 0:
            image = pygame.transform.flip(image, True, False)
        centre_x = sprite.position[0] - sprite.pivot[0]
        centre_y = sprite.position[1] - sprite.pivot[1]
        rect = image.get_rect(center=(width / 2 + centre_x, height / 2 - centre_y))
        screen.blit(image, rect)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    import pygame

    try:
        pygame.init()
        screen = pygame.display.set_mode((args.width, args.height))
    except pygame.error as exc:
        log.error("Cannot open the game window: %s", exc)
        return 1

    key_codes = {name: getattr(pygame, f"K_{name.lower()}" if len(name) == 1 else f"K_{name}")
                 for name in _KEY_NAMES}
    app = App(resource_dir=args.resources)
    clock = pygame.time.Clock()
    cache: Dict[str, object] = {}
    try:
        while True:
            quit_requested = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_requested = True
                elif event.type == pygame.KEYUP and event.key == pygame.K_ESCAPE:
                    quit_requested = True
            held = pygame.key.get_pressed()
            inputs = read_input(
                (name for name, code in key_codes.items() if held[code]),
                pygame.mouse.get_pos(),
                pygame.mouse.get_pressed(),
                screen.get_size(),
                quit_requested,
            )
            if not app.step(inputs):
                break
            _draw(pygame, screen, app, cache)
            pygame.display.flip()
            clock.tick(args.fps)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())