# src/maze_explorer/core/dijkstra.py
#!/usr/bin/env python3
import heapq
from math import inf
from typing import Dict, List, Set, Tuple

from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import Position


class DijkstraAlgo(SearchAlgo):
    """
    Uniform-cost search with unit edges.

    A cell is queued the first time it is seen; later observations may still
    lower its g and move its parent before it is popped. Heap entries are
    (g, seq, cell) with seq fixed at discovery, and entries whose g is out of
    date are skipped.
    """

    name = "Dijkstra"

    def _seed(self) -> None:
        for cell in self.grid:
            cell.g = inf
        self.grid.cell(self.start).g = 0
        self.open_pq: List[Tuple[float, int, Position]] = []
        self.queued: Set[Position] = set()
        self.seq: Dict[Position, int] = {}
        self._push(self.start)

    def _push(self, p: Position) -> None:
        if p not in self.seq:
            self.seq[p] = len(self.seq)
        self.queued.add(p)
        heapq.heappush(self.open_pq, (self.grid.cell(p).g, self.seq[p], p))

    def _has_frontier(self) -> bool:
        return bool(self.queued)

    def _pop(self) -> Position:
        while True:
            g, _, p = heapq.heappop(self.open_pq)
            if p in self.queued and g == self.grid.cell(p).g:
                self.queued.remove(p)
                return p

    def _expand(self, u: Position) -> None:
        alt = self.grid.cell(u).g + 1
        for v in self.grid.neighbors4(u):
            cell = self.grid.cell(v)
            if alt < cell.g:
                cell.g = alt
                self.maze.parents[v] = u
                if not cell.visited:
                    self._discover(v, u)
                    self._push(v)
                elif v in self.queued:
                    self._push(v)
