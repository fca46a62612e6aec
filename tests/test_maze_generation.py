import random

import pytest

from labyrinth.maze import (
    EXIT,
    OPEN,
    WALL,
    MazeConfig,
    MazeGenerator,
    MazeRecord,
    generate_maze,
    is_solvable,
    validate_maze,
)
from labyrinth.maze import generator as generator_mod
from labyrinth.maze.generator import check_dimensions, exit_for
from maze_test_utils import boundary_cells


def test_five_by_five_end_to_end():
    g = generate_maze(5, 5, seed=1)
    assert (g.width, g.height) == (5, 5)
    assert g.get(3, 3) is EXIT
    for cell in [(1, 1), (2, 1), (3, 1), (3, 2)]:
        assert g.get(*cell) is OPEN
    for x, y in boundary_cells(5, 5):
        assert g.get(x, y) is WALL
    assert is_solvable(g)


def test_generated_record_validates():
    g = generate_maze(15, 20, seed=4)
    record = MazeRecord.from_grid(g, name="Fifteen by twenty")
    data = record.to_dict()
    result = validate_maze(data)
    assert result.success, result.errors
    assert data["exit"] == {"x": 13, "y": 18}
    assert data["playerStart"] == {"x": 1, "y": 1, "direction": 1}


@pytest.mark.parametrize("size", [(3, 5), (5, 3), (4, 4), (7, 7), (10, 6), (21, 21), (33, 17), (51, 51)])
def test_structure_invariants_across_sizes(size):
    w, h = size
    for seed in range(5):
        g = generate_maze(w, h, seed=seed)
        assert len(g.rows) == h and all(len(r) == w for r in g.rows)
        for x, y in boundary_cells(w, h):
            assert g.get(x, y) is WALL, f"{w}x{h} seed {seed}: boundary opened at {(x, y)}"
        assert g.count(EXIT) == 1
        assert g.find_exit() == exit_for(w, h)
        assert g.get(1, 1) is OPEN
        assert is_solvable(g), f"{w}x{h} seed {seed} not solvable"


def test_same_seed_same_maze():
    assert generate_maze(31, 31, seed=2024) == generate_maze(31, 31, seed=2024)


def test_injected_rng_reproducible():
    a = generate_maze(21, 21, rng=random.Random(7))
    b = generate_maze(21, 21, rng=random.Random(7))
    assert a == b


def test_different_seeds_vary():
    base = generate_maze(31, 31, seed=0)
    assert any(generate_maze(31, 31, seed=s) != base for s in range(1, 6))


def test_unseeded_generator_records_seed():
    out = MazeGenerator(MazeConfig(width=11, height=11)).run()
    assert isinstance(out.seed, int)
    assert generate_maze(11, 11, seed=out.seed) == out.grid


def test_metrics_collected():
    out = MazeGenerator(MazeConfig(width=21, height=21, seed=5)).run()
    m = out.metrics
    for k in ["path_cells", "filled_cells", "open_cells", "fallback_used", "runtime_ms", "phase_ms"]:
        assert k in m
    assert m["fallback_used"] is False
    assert out.path_found is True
    assert m["open_cells"] == 21 * 21 - out.grid.count(WALL)
    assert set(m["phase_ms"]) == {"guarantee_path", "fill_remaining"}


def test_metrics_disabled():
    out = MazeGenerator(MazeConfig(width=9, height=9, seed=5), enable_metrics=False).run()
    assert out.metrics == {}


def test_fallback_opens_exit_and_logs(monkeypatch, capsys):
    monkeypatch.setattr(generator_mod, "ensure_path", lambda grid, start, target, visited: False)
    out = MazeGenerator(MazeConfig(width=11, height=11, seed=3)).run()
    assert out.path_found is False
    assert out.metrics["fallback_used"] is True
    assert out.grid.get(9, 9) is EXIT
    assert "path_guarantor_fallback" in capsys.readouterr().out


@pytest.mark.parametrize(
    "w,h",
    [(3, 3), (2, 5), (5, 2), (0, 7), (-5, 7), (True, 7), (7.0, 7), ("9", 9), (None, 9)],
)
def test_invalid_dimensions_rejected(w, h):
    with pytest.raises(ValueError):
        check_dimensions(w, h)
    with pytest.raises(ValueError):
        generate_maze(w, h)
