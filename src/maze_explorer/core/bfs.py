# src/maze_explorer/core/bfs.py
#!/usr/bin/env python3
from collections import deque
from typing import Deque

from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import Position


class BFSAlgo(SearchAlgo):
    """FIFO frontier; first discovery fixes the parent, so the path is shortest."""

    name = "BFS"

    def _seed(self) -> None:
        self.queue: Deque[Position] = deque([self.start])

    def _has_frontier(self) -> bool:
        return bool(self.queue)

    def _pop(self) -> Position:
        return self.queue.popleft()

    def _expand(self, u: Position) -> None:
        for v in self.grid.neighbors4(u):
            if not self.grid.cell(v).visited:
                self._discover(v, u)
                self.queue.append(v)
