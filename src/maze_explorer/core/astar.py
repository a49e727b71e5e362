# src/maze_explorer/core/astar.py
#!/usr/bin/env python3
"""
A*: one expansion per step() for animation.

Heuristic:
- Manhattan distance to the end (4-connected grid, unit cost, admissible).

Tie-breaking in the PQ:
- (f, seq, cell): lower f, then the cell discovered first. A relaxed cell is
  re-pushed with its first seq, so ties keep discovery order; the stale
  entry is skipped when it surfaces.
"""

import heapq
from typing import Dict, List, Set, Tuple

from maze_explorer.core.grid import manhattan_distance
from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import Position


class AStarAlgo(SearchAlgo):
    name = "A*"

    def _seed(self) -> None:
        self.open_pq: List[Tuple[int, int, Position]] = []    # (f, seq, cell)
        self.open_set: Set[Position] = set()
        self.closed_set: Set[Position] = set()
        self.seq: Dict[Position, int] = {}

        s = self.grid.cell(self.start)
        s.g = 0
        s.h = self._h(self.start)
        s.f = s.h
        self._push(self.start)

    def _h(self, p: Position) -> int:
        return manhattan_distance(p, self.end)

    def _push(self, p: Position) -> None:
        if p not in self.seq:
            self.seq[p] = len(self.seq)
        self.open_set.add(p)
        heapq.heappush(self.open_pq, (self.grid.cell(p).f, self.seq[p], p))

    def _has_frontier(self) -> bool:
        return bool(self.open_set)

    def _pop(self) -> Position:
        while True:
            f, _, p = heapq.heappop(self.open_pq)
            if p in self.open_set and f == self.grid.cell(p).f:
                self.open_set.remove(p)
                return p

    def _expand(self, u: Position) -> None:
        self.closed_set.add(u)
        g_u = self.grid.cell(u).g
        for v in self.grid.neighbors4(u):
            if v in self.closed_set:
                continue
            cell = self.grid.cell(v)
            alt = g_u + 1
            if v not in self.open_set:
                self._discover(v, u)
            elif alt >= cell.g:
                continue
            else:
                self.maze.parents[v] = u

            cell.g = alt
            cell.h = self._h(v)
            cell.f = cell.g + cell.h
            self._push(v)
