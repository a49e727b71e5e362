# src/maze_explorer/core/validator.py
#!/usr/bin/env python3
import logging
from collections import deque

from maze_explorer.core.grid import clone_maze
from maze_explorer.core.types import CellType, MazeData, Position

logger = logging.getLogger(__name__)


def has_path(maze: MazeData) -> bool:
    """Plain BFS reachability from start to end over walkable cells."""
    grid = maze.grid
    seen = {maze.start}
    queue = deque([maze.start])
    while queue:
        u = queue.popleft()
        if u == maze.end:
            return True
        for v in grid.neighbors4(u):
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return False


def carve_direct_path(maze: MazeData) -> MazeData:
    """Zigzag corridor from start to end, columns first, then rows."""
    out = clone_maze(maze)
    grid = out.grid
    row, col = out.start.row, out.start.col
    end = out.end
    while (row, col) != (end.row, end.col):
        if col < end.col:
            col += 1
        elif col > end.col:
            col -= 1
        elif row < end.row:
            row += 1
        else:
            row -= 1

        cell = grid.cell(Position(row, col))
        if not cell.is_start and not cell.is_end:
            cell.kind = CellType.PATH
    return out


def ensure_solvable(maze: MazeData) -> MazeData:
    if has_path(maze):
        return maze
    logger.warning("no path from %s to %s, carving a direct corridor", maze.start, maze.end)
    return carve_direct_path(maze)
