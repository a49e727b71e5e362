import pytest

from maze_explorer.core.algorithms import make_algorithm
from maze_explorer.core.grid import (
    check_invariants,
    clone_maze,
    count_visited,
    create_empty_maze,
    is_walkable,
    manhattan_distance,
    maze_from_rows,
    maze_to_rows,
    reset_visitation,
)
from maze_explorer.core.types import CellType, Position

STRUCTURAL = {CellType.WALL, CellType.PATH, CellType.START, CellType.END}


def test_manhattan_distance():
    assert manhattan_distance(Position(0, 0), Position(4, 4)) == 8
    assert manhattan_distance(Position(3, 1), Position(1, 2)) == 3
    assert manhattan_distance(Position(2, 2), Position(2, 2)) == 0


def test_is_walkable_guards_bounds(open_5x5):
    grid = open_5x5.grid
    assert is_walkable(grid, Position(0, 0))
    assert not is_walkable(grid, Position(2, 2))
    for p in (Position(-1, 0), Position(0, -1), Position(5, 0), Position(0, 5), Position(99, 99)):
        assert not is_walkable(grid, p)


def test_neighbors_order_up_right_down_left(open_5x5):
    ns = open_5x5.grid.neighbors4(Position(1, 1))
    assert ns == [Position(0, 1), Position(1, 2), Position(2, 1), Position(1, 0)]
    # wall at (2,2) is filtered
    assert Position(2, 2) not in open_5x5.grid.neighbors4(Position(1, 2))


def test_clone_is_deep(open_5x5):
    open_5x5.parents[Position(0, 1)] = Position(0, 0)
    copy = clone_maze(open_5x5)
    assert copy == open_5x5

    copy.grid.cell(Position(1, 1)).kind = CellType.WALL
    copy.grid.cell(Position(1, 2)).visited = True
    copy.parents[Position(0, 1)] = Position(1, 1)
    copy.parents[Position(3, 3)] = Position(3, 2)

    assert open_5x5.grid.cell(Position(1, 1)).kind == CellType.PATH
    assert not open_5x5.grid.cell(Position(1, 2)).visited
    assert open_5x5.parents == {Position(0, 1): Position(0, 0)}


@pytest.mark.parametrize("name", ["bfs", "dfs", "astar", "dijkstra"])
def test_reset_visitation_clears_search_state(open_5x5, name):
    algo = make_algorithm(name, open_5x5)
    algo.run_to_completion()
    searched = algo.maze
    assert count_visited(searched.grid) > 0

    clean = reset_visitation(searched)
    assert clean.parents == {}
    for cell in clean.grid:
        assert cell.kind in STRUCTURAL
        assert not cell.visited
        assert cell.g is None and cell.h is None and cell.f is None
    assert maze_to_rows(clean) == maze_to_rows(open_5x5)
    check_invariants(clean)

    # the searched maze itself is left alone
    assert count_visited(searched.grid) > 0


def test_reset_visitation_clears_alternate_paths(open_5x5):
    open_5x5.grid.cell(Position(1, 1)).kind = CellType.ALTERNATE_PATH
    clean = reset_visitation(open_5x5)
    assert clean.grid.cell(Position(1, 1)).kind == CellType.PATH


def test_maze_text_layout_round_trip(open_5x5):
    assert open_5x5.width == 5 and open_5x5.height == 5
    assert open_5x5.start == Position(0, 0)
    assert open_5x5.end == Position(4, 4)
    assert maze_to_rows(open_5x5)[2] == "..#.."


@pytest.mark.parametrize("rows", [
    [],
    ["S..", "..", "..E"],
    ["S..", "...", "..."],
    ["S.E", "..E"],
    ["S.x", "..E"],
])
def test_bad_layouts_rejected(rows):
    with pytest.raises(ValueError):
        maze_from_rows(rows)


def test_create_empty_maze():
    maze = create_empty_maze(5, 7)
    assert maze.width == 5 and maze.height == 7
    assert maze.grid.cell(Position(0, 0)).is_start
    kinds = {c.kind for c in maze.grid}
    assert kinds == {CellType.WALL, CellType.START}


@pytest.mark.parametrize("w,h", [(1, 5), (5, 1), (0, 0)])
def test_create_empty_maze_rejects_degenerate_sizes(w, h):
    with pytest.raises(ValueError):
        create_empty_maze(w, h)


def test_check_invariants(open_5x5):
    check_invariants(open_5x5)

    walled = clone_maze(open_5x5)
    walled.grid.cell(walled.end).kind = CellType.WALL
    with pytest.raises(ValueError):
        check_invariants(walled)

    moved = clone_maze(open_5x5)
    moved.end = Position(3, 3)
    with pytest.raises(ValueError):
        check_invariants(moved)

    doubled = clone_maze(open_5x5)
    doubled.grid.cell(Position(2, 0)).is_start = True
    with pytest.raises(ValueError):
        check_invariants(doubled)
