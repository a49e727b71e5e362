# src/maze_explorer/core/dfs.py
#!/usr/bin/env python3
from typing import List

from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import Position


class DFSAlgo(SearchAlgo):
    """LIFO frontier. Neighbors are pushed left, down, right, up; no shortest-path guarantee."""

    name = "DFS"

    def _seed(self) -> None:
        self.stack: List[Position] = [self.start]

    def _has_frontier(self) -> bool:
        return bool(self.stack)

    def _pop(self) -> Position:
        return self.stack.pop()

    def _expand(self, u: Position) -> None:
        for v in reversed(self.grid.neighbors4(u)):
            if not self.grid.cell(v).visited:
                self._discover(v, u)
                self.stack.append(v)
