# src/maze_explorer/core/multipath.py
#!/usr/bin/env python3
"""
Several start -> end routes that differ enough to be worth cycling through.

Best effort only:
  1) depth-first enumeration with backtracking; the neighbor order is
     permuted by the current path length so consecutive routes wander apart,
  2) if that leaves us short, a breadth-first supplement: uniform-cost search
     where cells already used by earlier routes are expensive.
A route is kept only if it shares at most MAX_OVERLAP of its cells with every
route kept before it.
"""

import heapq
import logging
from itertools import count
from typing import Dict, List, Optional, Sequence

from maze_explorer.core.grid import clone_maze
from maze_explorer.core.types import CellType, Grid, MazeData, Position

logger = logging.getLogger(__name__)

Path = List[Position]

MAX_OVERLAP = 0.7
DFS_BUDGET = 20000      # node entries before the enumeration gives up


def path_overlap(a: Sequence[Position], b: Sequence[Position]) -> float:
    sa, sb = set(a), set(b)
    if not sa or not sb:
        return 0.0
    return len(sa & sb) / max(len(sa), len(sb))


def count_turns(path: Sequence[Position]) -> int:
    turns = 0
    for prev, cur, nxt in zip(path, path[1:], path[2:]):
        d1 = (cur.row - prev.row, cur.col - prev.col)
        d2 = (nxt.row - cur.row, nxt.col - cur.col)
        if d1 != d2:
            turns += 1
    return turns


def _ordered_neighbors(p: Position, depth: int) -> List[Position]:
    dirs = [
        p.offset(-1, 0),
        p.offset(0, 1),
        p.offset(1, 0),
        p.offset(0, -1),
    ]
    if depth % 4 == 0:
        dirs.reverse()
    elif depth % 3 == 0:
        dirs[0], dirs[3] = dirs[3], dirs[0]
    elif depth % 2 == 0:
        dirs[1], dirs[2] = dirs[2], dirs[1]
    return dirs


class _Collector:
    def __init__(self, max_paths: int):
        self.max_paths = max_paths
        self.paths: List[Path] = []

    @property
    def full(self) -> bool:
        return len(self.paths) >= self.max_paths

    def offer(self, path: Sequence[Position]) -> bool:
        if any(path_overlap(path, kept) > MAX_OVERLAP for kept in self.paths):
            return False
        self.paths.append(list(path))
        return True


def _depth_first(grid: Grid, start: Position, end: Position, out: _Collector, budget: int) -> None:
    path: Path = [start]
    on_path = {start}
    stack = [iter(_ordered_neighbors(start, len(path)))]
    entries = 1

    while stack and not out.full and entries < budget:
        for nxt in stack[-1]:
            if grid.is_walkable(nxt) and nxt not in on_path:
                break
        else:
            stack.pop()
            on_path.discard(path.pop())
            continue

        path.append(nxt)
        on_path.add(nxt)
        entries += 1
        if nxt == end:
            out.offer(path)
            on_path.discard(path.pop())
            continue
        stack.append(iter(_ordered_neighbors(nxt, len(path))))

    logger.debug("depth-first enumeration: %d routes after %d entries", len(out.paths), entries)


def _cheapest_route(grid: Grid, start: Position, end: Position, usage: Dict[Position, int]) -> Optional[Path]:
    """Uniform-cost search; a cell costs 1 plus a heavy penalty per earlier use."""
    penalty = grid.width * grid.height
    tie = count()
    best = {start: 0}
    parent: Dict[Position, Position] = {}
    pq = [(0, next(tie), start)]
    while pq:
        d, _, u = heapq.heappop(pq)
        if d != best.get(u):
            continue
        if u == end:
            route = [u]
            while u != start:
                u = parent[u]
                route.append(u)
            route.reverse()
            return route
        for v in grid.neighbors4(u):
            alt = d + 1 + penalty * usage.get(v, 0)
            if alt < best.get(v, alt + 1):
                best[v] = alt
                parent[v] = u
                heapq.heappush(pq, (alt, next(tie), v))
    return None


def _breadth_first(grid: Grid, start: Position, end: Position, out: _Collector) -> None:
    usage: Dict[Position, int] = {}
    for route in out.paths:
        for p in route[1:-1]:
            usage[p] = usage.get(p, 0) + 1

    for _ in range(out.max_paths * 4):
        if out.full:
            return
        route = _cheapest_route(grid, start, end, usage)
        if route is None:
            return
        out.offer(route)
        for p in route[1:-1]:
            usage[p] = usage.get(p, 0) + 1


def find_diverse_paths(grid: Grid, start: Position, end: Position, max_paths: int = 3,
                       budget: int = DFS_BUDGET) -> List[Path]:
    if max_paths <= 0 or not grid.is_walkable(start) or not grid.is_walkable(end):
        return []

    out = _Collector(max_paths)
    _depth_first(grid, start, end, out, budget)
    if not out.full:
        _breadth_first(grid, start, end, out)

    return sorted(out.paths, key=lambda p: (len(p), count_turns(p)))


def generate_multiple_solutions(maze: MazeData, max_paths: int = 3) -> List[Path]:
    return find_diverse_paths(maze.grid, maze.start, maze.end, max_paths)


def show_solution(maze: MazeData, solutions: Sequence[Sequence[Position]], index: int) -> MazeData:
    """Clone with solutions[index] marked SOLUTION and every other route ALTERNATE_PATH."""
    out = clone_maze(maze)
    for cell in out.grid:
        if cell.kind in (CellType.SOLUTION, CellType.ALTERNATE_PATH):
            cell.kind = cell.structural_kind()
    if not solutions:
        return out

    index %= len(solutions)
    for i, route in enumerate(solutions):
        if i == index:
            continue
        _paint(out.grid, route, CellType.ALTERNATE_PATH)
    _paint(out.grid, solutions[index], CellType.SOLUTION)
    return out


def _paint(grid: Grid, route: Sequence[Position], kind: CellType) -> None:
    for p in route:
        cell = grid.cell(p)
        if not cell.is_start and not cell.is_end:
            cell.kind = kind
