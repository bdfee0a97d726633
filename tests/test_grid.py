import pytest

from firewater.grid import CellType, GridSystem


@pytest.fixture
def grid():
    return GridSystem()


def _row(grid, value, count=None):
    return " ".join([str(int(value))] * (count or grid.grid_width))


def test_new_grid_is_empty(grid):
    cells = {
        grid.get_cell(x, y)
        for y in range(grid.grid_height)
        for x in range(grid.grid_width)
    }
    assert cells == {CellType.EMPTY}


def test_dimensions_follow_background(grid):
    assert grid.cell_size == 25
    assert grid.grid_width * grid.cell_size == 975
    assert grid.grid_height * grid.cell_size == 725


def test_bounds_span_background(grid):
    assert grid.max_x - grid.min_x == 975
    assert grid.max_y - grid.min_y == 725
    assert grid.min_x == -grid.max_x
    assert grid.min_y == -grid.max_y


def test_cell_game_round_trip(grid):
    for y in range(grid.grid_height):
        for x in range(grid.grid_width):
            assert grid.game_to_cell_position(grid.cell_to_game_position(x, y)) == (x, y)


def test_adjacent_cells_are_one_cell_apart(grid):
    x0, y0 = grid.cell_to_game_position(0, 0)
    x1, _ = grid.cell_to_game_position(1, 0)
    _, y1 = grid.cell_to_game_position(0, 1)
    assert x1 - x0 == grid.cell_size
    assert y0 - y1 == grid.cell_size


def test_game_to_cell_clamps(grid):
    assert grid.game_to_cell_position((-10000.0, 10000.0)) == (0, 0)
    assert grid.game_to_cell_position((10000.0, -10000.0)) == (
        grid.grid_width - 1,
        grid.grid_height - 1,
    )


def test_load_lines_reads_values(grid):
    grid.load_lines(["1 2 3", "5"])
    assert grid.get_cell(0, 0) is CellType.FLOOR
    assert grid.get_cell(1, 0) is CellType.WALL
    assert grid.get_cell(2, 0) is CellType.DOOR_FIRE
    assert grid.get_cell(0, 1) is CellType.GEM_FIRE
    assert grid.get_cell(3, 0) is CellType.EMPTY


def test_load_lines_resets_previous_grid(grid):
    grid.load_lines(["2 2 2"])
    grid.load_lines(["0 1"])
    assert grid.get_cell(0, 0) is CellType.EMPTY
    assert grid.get_cell(1, 0) is CellType.FLOOR
    assert grid.get_cell(2, 0) is CellType.EMPTY


def test_load_lines_stops_row_at_non_integer(grid):
    grid.load_lines(["2 x 2", "2"])
    assert grid.get_cell(0, 0) is CellType.WALL
    assert grid.get_cell(1, 0) is CellType.EMPTY
    assert grid.get_cell(2, 0) is CellType.EMPTY
    assert grid.get_cell(0, 1) is CellType.WALL


def test_load_lines_ignores_overflow(grid):
    lines = [_row(grid, CellType.WALL, grid.grid_width + 10)] * (grid.grid_height + 5)
    grid.load_lines(lines)
    assert all(
        grid.get_cell(x, y) is CellType.WALL
        for y in range(grid.grid_height)
        for x in range(grid.grid_width)
    )
    assert grid.get_cell(grid.grid_width, 0) is CellType.EMPTY
    assert grid.get_cell(0, grid.grid_height) is CellType.EMPTY


def test_load_lines_rejects_unknown_value(grid):
    with pytest.raises(ValueError):
        grid.load_lines(["0 99"])


def test_load_from_file(grid, tmp_path):
    path = tmp_path / "level1_grid.txt"
    path.write_text("0 9\n4 0\n", encoding="utf-8")
    grid.load_from_file(path)
    assert grid.get_cell(1, 0) is CellType.WATER
    assert grid.get_cell(0, 1) is CellType.DOOR_WATER


def test_load_from_missing_file(grid, tmp_path):
    with pytest.raises(FileNotFoundError):
        grid.load_from_file(tmp_path / "missing.txt")


@pytest.mark.parametrize(
    "x, y, valid",
    [(0, 0, True), (-1, 0, False), (0, -1, False), (None, 0, False), (0, None, False)],
)
def test_is_valid_grid_position(grid, x, y, valid):
    x = grid.grid_width if x is None else x
    y = grid.grid_height if y is None else y
    assert grid.is_valid_grid_position(x, y) is valid


def test_get_cell_outside_is_empty(grid):
    grid.load_lines([_row(grid, CellType.WALL)])
    assert grid.get_cell(-1, 0) is CellType.EMPTY
    assert grid.get_cell(grid.grid_width, 0) is CellType.EMPTY


@pytest.mark.parametrize(
    "cell, fire, water",
    [
        (CellType.EMPTY, True, True),
        (CellType.FLOOR, True, True),
        (CellType.WALL, False, False),
        (CellType.BUTTON, True, True),
        (CellType.LEVER, True, True),
        (CellType.PLATFORM, True, True),
        (CellType.GEM_FIRE, True, True),
        (CellType.GEM_WATER, True, True),
        (CellType.GEM_GREEN, False, False),
        (CellType.LAVA, True, False),
        (CellType.WATER, False, True),
        (CellType.DOOR_FIRE, True, False),
        (CellType.DOOR_WATER, False, True),
        (CellType.POISON, False, False),
        (CellType.FAN, False, False),
        (CellType.BOX, False, False),
        (CellType.STONE, False, False),
    ],
)
def test_can_move_on(grid, cell, fire, water):
    assert grid.can_move_on(cell, True) is fire
    assert grid.can_move_on(cell, False) is water


def _grid_with_wall_at(grid, wx, wy):
    lines = []
    for y in range(wy + 1):
        row = ["0"] * grid.grid_width
        if y == wy:
            row[wx] = str(int(CellType.WALL))
        lines.append(" ".join(row))
    grid.load_lines(lines)


def test_check_collision_directions(grid):
    _grid_with_wall_at(grid, 6, 3)
    pos = grid.cell_to_game_position(5, 3)
    size = (2 * grid.cell_size, 10.0)
    assert grid.check_collision(pos, size, True, 5) is True
    assert grid.check_collision(pos, size, True, -5) is False
    assert grid.check_collision(pos, size, True, 0) is False
    assert grid.check_collision(grid.cell_to_game_position(6, 3), size, False) is True


def test_check_collision_lava(grid):
    grid.load_lines([str(int(CellType.LAVA))])
    pos = grid.cell_to_game_position(0, 0)
    assert grid.check_collision(pos, (10.0, 10.0), True, 0) is False
    assert grid.check_collision(pos, (10.0, 10.0), False, 0) is True