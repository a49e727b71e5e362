# src/maze_explorer/core/grid.py
#!/usr/bin/env python3
"""
Grid helpers shared by the generator, the validator and the step algorithms.

Everything that hands a maze to someone else goes through clone_maze(), so a
search run never writes into the clean maze kept for reset.
"""

from dataclasses import replace
from typing import Iterable, List

from maze_explorer.core.types import (
    DERIVED_KINDS, Cell, CellType, Grid, MazeData, Position,
)

_CHAR_FOR_KIND = {
    CellType.WALL: "#",
    CellType.PATH: ".",
    CellType.START: "S",
    CellType.END: "E",
    CellType.VISITED: "v",
    CellType.VISITING: "o",
    CellType.SOLUTION: "*",
    CellType.ALTERNATE_PATH: "+",
}


def is_walkable(grid: Grid, p: Position) -> bool:
    return grid.is_walkable(p)


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def clone_grid(grid: Grid) -> Grid:
    cells = [[replace(c) for c in row] for row in grid.cells]
    return Grid(grid.width, grid.height, cells)


def clone_maze(maze: MazeData) -> MazeData:
    return MazeData(
        grid=clone_grid(maze.grid),
        start=maze.start,
        end=maze.end,
        parents=dict(maze.parents),
    )


def reset_visitation(maze: MazeData) -> MazeData:
    """Clone with search scratch cleared and derived kinds restored."""
    out = clone_maze(maze)
    out.parents.clear()
    for cell in out.grid:
        cell.clear_scratch()
        if cell.kind in DERIVED_KINDS:
            cell.kind = cell.structural_kind()
    return out


def count_visited(grid: Grid) -> int:
    return sum(1 for c in grid if c.visited)


def create_empty_maze(width: int, height: int) -> MazeData:
    """All walls, START at (0,0). The end is provisional until the generator flags one."""
    if width < 2 or height < 2:
        raise ValueError(f"maze must be at least 2x2, got {width}x{height}")
    cells = [
        [Cell(CellType.WALL, Position(r, c)) for c in range(width)]
        for r in range(height)
    ]
    start = Position(0, 0)
    cells[0][0] = Cell(CellType.START, start, is_start=True)
    return MazeData(Grid(width, height, cells), start, Position(height - 1, width - 1))


def set_end(maze: MazeData, p: Position) -> None:
    maze.grid.cells[p.row][p.col] = Cell(CellType.END, p, is_end=True)
    maze.end = p


def maze_from_rows(rows: Iterable[str]) -> MazeData:
    """
    Build a maze from a text layout:
      '#' wall, '.' path, 'S' start, 'E' end.
    """
    lines = [r.strip() for r in rows if r.strip()]
    if not lines:
        raise ValueError("empty maze layout")
    width = len(lines[0])
    if any(len(r) != width for r in lines):
        raise ValueError("ragged maze layout")

    cells: List[List[Cell]] = []
    starts: List[Position] = []
    ends: List[Position] = []
    for r, line in enumerate(lines):
        row: List[Cell] = []
        for c, ch in enumerate(line):
            p = Position(r, c)
            if ch == "#":
                row.append(Cell(CellType.WALL, p))
            elif ch == ".":
                row.append(Cell(CellType.PATH, p))
            elif ch == "S":
                row.append(Cell(CellType.START, p, is_start=True))
                starts.append(p)
            elif ch == "E":
                row.append(Cell(CellType.END, p, is_end=True))
                ends.append(p)
            else:
                raise ValueError(f"unknown maze character {ch!r} at {p}")
        cells.append(row)

    if len(starts) != 1 or len(ends) != 1:
        raise ValueError(f"layout needs exactly one S and one E, got {len(starts)} and {len(ends)}")
    return MazeData(Grid(width, len(lines), cells), starts[0], ends[0])


def maze_to_rows(maze: MazeData) -> List[str]:
    return ["".join(_CHAR_FOR_KIND[c.kind] for c in row) for row in maze.grid.cells]


def check_invariants(maze: MazeData) -> None:
    """Raise ValueError on the first broken structural invariant."""
    grid = maze.grid
    if len(grid.cells) != grid.height or any(len(r) != grid.width for r in grid.cells):
        raise ValueError("cells size mismatch")

    starts = [c.position for c in grid if c.is_start]
    ends = [c.position for c in grid if c.is_end]
    if len(starts) != 1:
        raise ValueError(f"expected one start cell, found {len(starts)}")
    if len(ends) != 1:
        raise ValueError(f"expected one end cell, found {len(ends)}")
    if starts[0] == ends[0]:
        raise ValueError("start and end share a cell")
    if starts[0] != maze.start or ends[0] != maze.end:
        raise ValueError("start/end positions out of sync with cell flags")
    for p in (maze.start, maze.end):
        if grid.cell(p).kind == CellType.WALL:
            raise ValueError(f"{p} is a wall")
