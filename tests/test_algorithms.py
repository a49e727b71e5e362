from math import inf

import pytest

from maze_explorer.core.algorithms import ALGORITHMS, algorithm_label, make_algorithm
from maze_explorer.core.astar import AStarAlgo
from maze_explorer.core.bfs import BFSAlgo
from maze_explorer.core.dfs import DFSAlgo
from maze_explorer.core.dijkstra import DijkstraAlgo
from maze_explorer.core.generator import generate_maze
from maze_explorer.core.grid import (
    check_invariants, clone_grid, clone_maze, count_visited, manhattan_distance,
    maze_from_rows, maze_to_rows,
)
from maze_explorer.core.types import CellType, MazeData, Position

NAMES = sorted(ALGORITHMS)


def _assert_route(maze, path):
    assert path[0] == maze.start
    assert path[-1] == maze.end
    assert len(set(path)) == len(path)
    for a, b in zip(path, path[1:]):
        assert manhattan_distance(a, b) == 1
        assert maze.grid.is_walkable(b)


def test_bfs_open_5x5_scenario(open_5x5):
    algo = BFSAlgo(clone_maze(open_5x5))
    last = algo.run_to_completion()
    assert last.is_done and last.success
    assert last.status == "done"
    assert last.path_length == 9
    assert last.visited_count <= 25
    _assert_route(open_5x5, last.path)


@pytest.mark.parametrize("name", NAMES)
def test_every_algorithm_finds_the_end(open_5x5, name):
    algo = make_algorithm(name, open_5x5)
    last = algo.run_to_completion()
    assert last.success
    assert algo.is_done and algo.success
    _assert_route(open_5x5, last.path)
    if name != "dfs":
        assert last.path_length == 9
    else:
        assert last.path_length >= 9


@pytest.mark.parametrize("name", NAMES)
def test_solution_cells_marked(open_5x5, name):
    last = make_algorithm(name, open_5x5).run_to_completion()
    grid = last.grid
    for p in last.path[1:-1]:
        assert grid.cell(p).kind == CellType.SOLUTION
    assert grid.cell(open_5x5.start).is_start
    assert grid.cell(open_5x5.end).kind == CellType.END
    solution_cells = [c.position for c in grid if c.kind == CellType.SOLUTION]
    assert sorted(solution_cells, key=lambda p: (p.row, p.col)) == \
        sorted(last.path[1:-1], key=lambda p: (p.row, p.col))
    check_invariants(MazeData(grid, open_5x5.start, open_5x5.end))


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("size", [9, 15, 21])
def test_bfs_and_dijkstra_agree_on_length(seed, size):
    maze = generate_maze(size, size, seed=seed)
    bfs = make_algorithm("bfs", maze).run_to_completion()
    dij = make_algorithm("dijkstra", maze).run_to_completion()
    astar = make_algorithm("astar", maze).run_to_completion()
    assert bfs.success and dij.success and astar.success
    assert bfs.path_length == dij.path_length == astar.path_length


@pytest.mark.parametrize("name", NAMES)
def test_step_after_done_is_a_no_op(open_5x5, name):
    algo = make_algorithm(name, open_5x5)
    algo.run_to_completion()
    frozen = clone_grid(algo.grid)
    parents = dict(algo.maze.parents)
    assert algo.step() is None
    assert algo.step() is None
    assert algo.grid == frozen
    assert algo.maze.parents == parents


@pytest.mark.parametrize("name", NAMES)
def test_unreachable_end_is_a_normal_outcome(sealed_maze, name):
    algo = make_algorithm(name, sealed_maze)
    steps = list(algo.run())
    last = steps[-1]
    assert all(not s.is_done for s in steps[:-1])
    assert last.is_done and not last.success
    assert last.status == "no_path"
    assert last.path_length == 0
    assert last.path is None
    # the four cells of the start pocket
    assert last.visited_count == 4
    assert algo.step() is None


@pytest.mark.parametrize("name", NAMES)
def test_running_steps_report_progress(open_5x5, name):
    algo = make_algorithm(name, open_5x5)
    first = algo.step()
    assert not first.is_done
    assert first.status == "running"
    assert first.path_length == 0
    assert first.current == open_5x5.start
    assert first.visited_count == count_visited(first.grid)
    assert first.visited_count >= 2

    prev = first.elapsed_time
    for res in algo.run():
        assert res.elapsed_time >= prev
        prev = res.elapsed_time


def test_start_marked_on_construction(open_5x5):
    algo = BFSAlgo(clone_maze(open_5x5))
    cell = algo.grid.cell(open_5x5.start)
    assert cell.visited
    assert cell.kind == CellType.VISITING
    assert count_visited(algo.grid) == 1


def test_snapshot_is_independent(open_5x5):
    algo = BFSAlgo(clone_maze(open_5x5))
    res = algo.step()
    assert res.grid is not algo.grid
    res.grid.cell(Position(1, 1)).kind = CellType.WALL
    assert algo.grid.cell(Position(1, 1)).kind != CellType.WALL


@pytest.mark.parametrize("name", NAMES)
def test_run_never_touches_the_source_maze(open_5x5, name):
    before = maze_to_rows(open_5x5)
    make_algorithm(name, open_5x5).run_to_completion()
    assert maze_to_rows(open_5x5) == before
    assert open_5x5.parents == {}
    assert count_visited(open_5x5.grid) == 0


def test_frontier_cells_are_visiting(open_5x5):
    algo = BFSAlgo(clone_maze(open_5x5))
    res = algo.step()
    assert res.grid.cell(Position(0, 1)).kind == CellType.VISITING
    assert res.grid.cell(Position(1, 0)).kind == CellType.VISITING
    res = algo.step()
    assert res.current == Position(0, 1)
    assert res.grid.cell(Position(0, 1)).kind == CellType.VISITED
    assert algo.maze.parent_of(Position(0, 2)) == Position(0, 1)


def test_dfs_dives_where_bfs_widens():
    layout = [
        "S..",
        "...",
        "..E",
    ]
    bfs = BFSAlgo(maze_from_rows(layout))
    dfs = DFSAlgo(maze_from_rows(layout))
    bfs_order = [bfs.step().current for _ in range(3)]
    dfs_order = [dfs.step().current for _ in range(3)]
    assert bfs_order == [Position(0, 0), Position(0, 1), Position(1, 0)]
    assert dfs_order == [Position(0, 0), Position(0, 1), Position(0, 2)]


def test_astar_seeds_costs(open_5x5):
    algo = AStarAlgo(clone_maze(open_5x5))
    s = algo.grid.cell(open_5x5.start)
    assert (s.g, s.h, s.f) == (0, 8, 8)
    last = algo.run_to_completion()
    end = last.grid.cell(open_5x5.end)
    assert end.g == last.path_length - 1
    assert end.f == end.g + end.h


def test_astar_expands_fewer_cells_than_bfs_on_open_grid(open_7x7):
    bfs = make_algorithm("bfs", open_7x7).run_to_completion()
    astar = make_algorithm("astar", open_7x7).run_to_completion()
    assert astar.path_length == bfs.path_length == 13
    assert astar.visited_count <= bfs.visited_count


def test_dijkstra_starts_with_infinite_costs(open_5x5):
    algo = DijkstraAlgo(clone_maze(open_5x5))
    assert algo.grid.cell(open_5x5.start).g == 0
    assert algo.grid.cell(Position(2, 2)).g == inf
    assert algo.grid.cell(open_5x5.end).g == inf
    last = algo.run_to_completion()
    assert last.grid.cell(open_5x5.end).g == last.path_length - 1


def test_registry():
    assert set(ALGORITHMS) == {"bfs", "dfs", "astar", "dijkstra"}
    assert algorithm_label("astar") == "A*"
    assert algorithm_label("BFS") == "BFS"
    with pytest.raises(ValueError):
        make_algorithm("greedy", maze_from_rows(["S.E"]))
