from labyrinth.maze import MazeGrid, generate_maze, is_solvable, shortest_path
from maze_test_utils import TINY_ROWS, rows_to_layout


def _grid(rows):
    return MazeGrid.from_layout(rows_to_layout(rows))


def test_tiny_maze_shortest_path():
    path = shortest_path(_grid(TINY_ROWS))
    assert path == [(1, 1), (2, 1), (3, 1), (3, 2), (3, 3)]


def test_disconnected_exit_is_unsolvable():
    rows = [
        "#####",
        "#   #",
        "#####",
        "#  E#",
        "#####",
    ]
    assert is_solvable(_grid(rows)) is False


def test_missing_exit_is_unsolvable():
    rows = [
        "#####",
        "#   #",
        "#####",
    ]
    assert is_solvable(_grid(rows)) is False


def test_start_outside_grid():
    assert is_solvable(_grid(TINY_ROWS), start=(9, 9)) is False


def test_custom_start_position():
    rows = [
        "#######",
        "# #   #",
        "# # # #",
        "#   #E#",
        "#######",
    ]
    g = _grid(rows)
    assert is_solvable(g)
    assert is_solvable(g, start=(3, 1))
    assert shortest_path(g, start=(5, 3)) == [(5, 3)]


def test_cycles_are_fine():
    rows = [
        "#######",
        "#     #",
        "# ### #",
        "#    E#",
        "#######",
    ]
    path = shortest_path(_grid(rows))
    assert path[0] == (1, 1) and path[-1] == (5, 3)
    assert len(path) == 7


def test_generated_mazes_are_solvable():
    for seed in range(10):
        assert is_solvable(generate_maze(25, 25, seed=seed))
