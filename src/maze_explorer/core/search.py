# src/maze_explorer/core/search.py
#!/usr/bin/env python3
"""
Shared stepping machinery for the search algorithms.

API used by the session driver and the viewer:
- construct with an owned maze copy
- step() -> AlgorithmStep, one expansion per call, None once finished

One instance serves one run. A reset throws the instance away and builds a
new one from a fresh clone.
"""

import logging
import time
from typing import Iterator, List, Optional

from maze_explorer.core.grid import clone_grid, count_visited
from maze_explorer.core.types import AlgorithmStep, CellType, MazeData, Position

logger = logging.getLogger(__name__)


class SearchAlgo:
    name: str = "search"

    def __init__(self, maze: MazeData):
        self.maze = maze
        self.grid = maze.grid
        self.start = maze.start
        self.end = maze.end
        self._done = False
        self._success = False
        self._t0 = time.perf_counter()

        cell = self.grid.cell(self.start)
        cell.visited = True
        if not cell.is_end:
            cell.kind = CellType.VISITING
        self._seed()

    # -------------------- hooks --------------------

    def _seed(self) -> None:
        """Initialise costs and the frontier with the start node."""
        raise NotImplementedError

    def _has_frontier(self) -> bool:
        raise NotImplementedError

    def _pop(self) -> Position:
        raise NotImplementedError

    def _expand(self, u: Position) -> None:
        """Discover or relax the neighbors of u."""
        raise NotImplementedError

    # -------------------- helpers --------------------

    def _discover(self, v: Position, parent: Position) -> None:
        cell = self.grid.cell(v)
        cell.visited = True
        self.maze.parents[v] = parent
        if not cell.is_end:
            cell.kind = CellType.VISITING

    def _reconstruct_path(self) -> List[Position]:
        path: List[Position] = []
        cur: Optional[Position] = self.end
        while cur is not None:
            path.append(cur)
            if cur == self.start:
                break
            cur = self.maze.parents.get(cur)
        path.reverse()
        for p in path:
            cell = self.grid.cell(p)
            if not cell.is_start and not cell.is_end:
                cell.kind = CellType.SOLUTION
        return path

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def _snapshot(self, current: Optional[Position] = None, path: Optional[List[Position]] = None) -> AlgorithmStep:
        return AlgorithmStep(
            grid=clone_grid(self.grid),
            visited_count=count_visited(self.grid),
            path_length=len(path) if path else 0,
            elapsed_time=self._elapsed_ms(),
            is_done=self._done,
            success=self._success,
            current=current,
            path=path,
        )

    # -------------------- main stepping logic --------------------

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def success(self) -> bool:
        return self._success

    def step(self) -> Optional[AlgorithmStep]:
        if self._done:
            return None

        if not self._has_frontier():
            self._done = True
            logger.debug("%s: frontier exhausted, no path to %s", self.name, self.end)
            return self._snapshot()

        u = self._pop()
        if u == self.end:
            self._done = True
            self._success = True
            path = self._reconstruct_path()
            logger.debug("%s: reached %s, path length %d", self.name, u, len(path))
            return self._snapshot(current=u, path=path)

        cell = self.grid.cell(u)
        if not cell.is_start and not cell.is_end:
            cell.kind = CellType.VISITED
        self._expand(u)
        return self._snapshot(current=u)

    def run(self) -> Iterator[AlgorithmStep]:
        while True:
            res = self.step()
            if res is None:
                return
            yield res

    def run_to_completion(self) -> Optional[AlgorithmStep]:
        last = None
        for last in self.run():
            pass
        return last
