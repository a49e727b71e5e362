# src/maze_explorer/core/generator.py
#!/usr/bin/env python3
"""
Maze generation: randomized recursive backtracking on the skip-one lattice,
followed by a few carving passes that open cycles near the exit.

Only even-offset cells are lattice nodes; linking two nodes carves the cell
between them. The spanning carve alone gives a perfect maze, which is a dull
thing to search, so the post-processing adds:
  - extra openings (walls that bridge two path cells),
  - three approach corridors into the end corner,
  - a guaranteed open neighbor next to the end.
The validator runs last, so the result always has a path.
"""

import logging
import random
from typing import List, Optional

from maze_explorer.core.grid import create_empty_maze, set_end
from maze_explorer.core.types import CellType, Grid, MazeData, Position
from maze_explorer.core.validator import ensure_solvable

logger = logging.getLogger(__name__)

EXTRA_OPENING_RATIO = 0.15
APPROACH_CORRIDORS = 3
END_REGION = 3


def generate_maze(width: int, height: int, seed: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> MazeData:
    if rng is None:
        rng = random.Random(seed)

    maze = create_empty_maze(width, height)
    end = _pick_end(maze, rng)
    set_end(maze, end)
    logger.debug("generating %dx%d maze (seed=%s), end at %s", width, height, seed, end)

    _carve_lattice(maze.grid, maze.start, rng)
    _add_openings(maze.grid, rng)
    _add_approach_corridors(maze.grid, end, rng)
    _open_end_neighbor(maze.grid, end, rng)
    return ensure_solvable(maze)


def _pick_end(maze: MazeData, rng: random.Random) -> Position:
    corners = [
        Position(0, maze.width - 1),
        Position(maze.height - 1, 0),
        Position(maze.height - 1, maze.width - 1),
    ]
    corners = [p for p in corners if p != maze.start]
    return rng.choice(corners)


def _unvisited_lattice_neighbors(grid: Grid, p: Position) -> List[Position]:
    candidates = [
        p.offset(-2, 0),
        p.offset(2, 0),
        p.offset(0, -2),
        p.offset(0, 2),
    ]
    return [n for n in candidates if grid.in_bounds(n) and grid.cell(n).kind == CellType.WALL]


def _carve_lattice(grid: Grid, origin: Position, rng: random.Random) -> None:
    """Depth-first backtracker. Each stack frame holds a node and its shuffled candidates."""

    def enter(p: Position) -> List[Position]:
        cell = grid.cell(p)
        if not cell.is_start and not cell.is_end:
            cell.kind = CellType.PATH
        neighbors = _unvisited_lattice_neighbors(grid, p)
        rng.shuffle(neighbors)
        return neighbors

    stack = [(origin, iter(enter(origin)))]
    while stack:
        p, pending = stack[-1]
        for n in pending:
            if grid.cell(n).kind != CellType.WALL:
                continue
            mid = Position((p.row + n.row) // 2, (p.col + n.col) // 2)
            grid.cell(mid).kind = CellType.PATH
            stack.append((n, iter(enter(n))))
            break
        else:
            stack.pop()


def _is_path(grid: Grid, row: int, col: int) -> bool:
    p = Position(row, col)
    return grid.in_bounds(p) and grid.cell(p).kind == CellType.PATH


def _add_openings(grid: Grid, rng: random.Random) -> None:
    """Knock out interior walls that sit between two path cells."""
    if grid.width < 3 or grid.height < 3:
        return
    for _ in range(int(grid.width * grid.height * EXTRA_OPENING_RATIO)):
        row = rng.randrange(grid.height - 2) + 1
        col = rng.randrange(grid.width - 2) + 1
        cell = grid.cells[row][col]
        if cell.kind != CellType.WALL:
            continue
        horizontal = _is_path(grid, row, col - 1) and _is_path(grid, row, col + 1)
        vertical = _is_path(grid, row - 1, col) and _is_path(grid, row + 1, col)
        diagonal = _is_path(grid, row - 1, col - 1) and _is_path(grid, row + 1, col + 1)
        if horizontal or vertical or diagonal:
            cell.kind = CellType.PATH


def _add_approach_corridors(grid: Grid, end: Position, rng: random.Random) -> None:
    for _ in range(APPROACH_CORRIDORS):
        row = min(max(end.row - END_REGION + rng.randrange(END_REGION * 2), 0), grid.height - 1)
        col = min(max(end.col - END_REGION + rng.randrange(END_REGION * 2), 0), grid.width - 1)
        if grid.cells[row][col].kind != CellType.PATH:
            continue

        while (row, col) != (end.row, end.col):
            if rng.random() < 0.5:
                row += (row < end.row) - (row > end.row)
            else:
                col += (col < end.col) - (col > end.col)
            cell = grid.cells[row][col]
            if not cell.is_start and not cell.is_end:
                cell.kind = CellType.PATH


def _open_end_neighbor(grid: Grid, end: Position, rng: random.Random) -> None:
    adjacent = [
        end.offset(-1, 0),
        end.offset(0, 1),
        end.offset(1, 0),
        end.offset(0, -1),
    ]
    adjacent = [p for p in adjacent if grid.in_bounds(p)]
    if not adjacent:
        return
    if any(grid.cell(p).kind == CellType.PATH for p in adjacent):
        return
    # the start is the only non-wall, non-path kind a neighbor can have here
    candidates = [p for p in adjacent if not grid.cell(p).is_start] or adjacent
    choice = rng.choice(candidates)
    if not grid.cell(choice).is_start:
        grid.cell(choice).kind = CellType.PATH
