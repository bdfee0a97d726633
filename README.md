# firewater

A small two-player cooperative platformer. One player steers the fire
character and the other steers the water character, through a level laid out
on a grid of 25-pixel cells. The grid is 39 × 29 cells on a 975 × 725
playfield.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
firewater
```

The game opens a pygame window on the title screen.

| Screen        | Controls                                                         |
|---------------|------------------------------------------------------------------|
| Title         | Enter opens level select                                         |
| Level select  | Click a level button to play it. Only level 1 is open. Back returns to the title |
| Playing       | Fire: ← → move, ↑ jump. Water: A D move, W jump                  |
| Any screen    | Releasing Escape or closing the window ends the game             |

Options:

- `--resources DIR` sets the directory that holds the game assets. The default is `resources`.
- `--width N` and `--height N` set the window size. The defaults are 975 and 725.
- `--fps N` sets the frame rate. The default is 60.

### Assets

The assets are not part of the package. They are read from the resource
directory:

- `material/background/cover.png`, `level-page.png` and `rlevel1.png`
- `material/background/button/current-level.png`, `unlevel.png` and `back-button.png`
- `material/props/door/door-fireboy.png` and `door-watergirl.png`
- `material/character/fireboy-front.png`, `fireboy-side.png` and `fireboy-side-run.png`
- the same three images for `watergirl`
- `map/level1_grid.txt`, the level map

If a map file is missing, an error is logged and the grid stays empty. With
an empty grid the characters never collide with anything.

## Level files

A level file is plain text. It holds whitespace-separated integers, one grid
row per line, read from top to bottom. Each number is a `CellType` value:

| Value | Cell       | Value | Cell     |
|-------|------------|-------|----------|
| 0     | EMPTY      | 9     | WATER    |
| 1     | FLOOR      | 10    | POISON   |
| 2     | WALL       | 11    | BUTTON   |
| 3     | DOOR_FIRE  | 12    | LEVER    |
| 4     | DOOR_WATER | 13    | PLATFORM |
| 5     | GEM_FIRE   | 14    | FAN      |
| 6     | GEM_WATER  | 15    | BOX      |
| 7     | GEM_GREEN  | 16    | STONE    |
| 8     | LAVA       |       |          |

Loading follows these rules:

- Rows and columns past the grid's size are ignored.
- A row ends at its first token that is not an integer.
- Cells that the file does not fill stay `EMPTY`.
- An integer that is not a `CellType` value raises `ValueError`.

FLOOR is what characters land on. WALL blocks movement, and so do POISON,
FAN, BOX, STONE and GEM_GREEN. LAVA and DOOR_FIRE let only the fire character
pass, and WATER and DOOR_WATER let only the water character pass.

## Using the pieces in code

```python
from firewater.grid import CellType, GridSystem
from firewater.character import Fireboy

grid = GridSystem()
grid.load_lines(["0 0 0", "1 1 1"])
print(grid.get_cell(1, 1))               # CellType.FLOOR
print(grid.cell_to_game_position(0, 0))  # (-475.0, 350.0), centre of the top-left cell

hero = Fireboy(size=(30.0, 40.0))        # an explicit size avoids reading the image
hero.move(5, False, grid, True)
hero.apply_gravity(grid)
```

`firewater.app.App` holds the screen state machine: `State.START`,
`LEVEL_SELECT`, `GAME_PLAY`, `GAME_WIN`, `GAME_OVER` and `END`.

To run it, advance it one frame at a time with `App.step(inputs)`. The
`inputs` argument is an `InputState` that gives the held key names, the mouse
position in game coordinates, the left mouse button and whether an exit was
requested. `step` returns `False` once the game has ended.

To build an `App` without image files, pass `image_size=` a callable that
returns each image's width and height. `App.sprites()` lists the scene objects
in drawing order.

## What it does not do

- There is no win or lose condition. Nothing leads to the win and game-over
  screens, doors never open and gems cannot be collected.
- Poison, lava and water only block movement. They do not harm a character.
- Only level 1 is laid out. Levels 2–5 have locked buttons, and nothing is
  placed for them.
- When a character walks, it is checked against the fire character's passage
  rules, whichever character it is.
- There is no sound and no saved progress.