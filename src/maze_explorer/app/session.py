# src/maze_explorer/app/session.py
#!/usr/bin/env python3
"""
Display-free driver around the core.

Owns the clean maze, the maze currently on screen, the running algorithm
instance and the stats the viewer prints. The viewer only forwards input
here and draws `session.maze`.

States: "Idle" | "Running" | "Paused" | "Done" | "No path"
"""

import logging
import random
import time
from typing import List, Optional

from maze_explorer.app.config import Settings, clamp_size, clamp_speed, step_delay_ms
from maze_explorer.core.algorithms import algorithm_label, make_algorithm
from maze_explorer.core.generator import generate_maze
from maze_explorer.core.grid import reset_visitation
from maze_explorer.core.multipath import generate_multiple_solutions, show_solution
from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import AlgorithmStep, MazeData, Position
from maze_explorer.core.validator import ensure_solvable

logger = logging.getLogger(__name__)

FINISHED = ("Done", "No path")


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class ExplorerSession:
    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or Settings()
        self.rng = rng or random.Random(self.settings.seed)

        self.size = clamp_size(self.settings.size)
        self.algorithm = self.settings.algorithm
        self.speed = clamp_speed(self.settings.speed)
        self.auto_regenerate = self.settings.auto_regenerate

        self.algo: Optional[SearchAlgo] = None
        self.running = False
        self.state = "Idle"
        self.solutions: List[List[Position]] = []
        self.current_solution = 0
        self.steps = 0
        self._last_step_t: Optional[float] = None
        self._regenerate_at: Optional[float] = None

        self.clean_maze: MazeData = self._build_maze()
        self.maze: MazeData = self.clean_maze
        self.stats = self._fresh_stats(path_len=self._first_solution_len())

    # ---------- maze lifecycle ----------

    def _build_maze(self) -> MazeData:
        maze = ensure_solvable(generate_maze(self.size, self.size, rng=self.rng))
        self.solutions = generate_multiple_solutions(maze, 3)
        self.current_solution = 0
        logger.info("new %dx%d maze, end at (%d, %d), %d solutions",
                    self.size, self.size, maze.end.row, maze.end.col, len(self.solutions))
        return maze

    def new_maze(self) -> None:
        self.clean_maze = self._build_maze()
        self._discard_run()
        self.maze = self.clean_maze
        self.stats = self._fresh_stats(path_len=self._first_solution_len())

    def set_size(self, n: int) -> None:
        n = clamp_size(n)
        if n == self.size:
            return
        self.size = n
        self.new_maze()

    def bump_size(self, dv: int) -> None:
        self.set_size(self.size + 2 * dv)

    def set_speed(self, v: int) -> None:
        self.speed = clamp_speed(v)

    def bump_speed(self, dv: int) -> None:
        self.set_speed(self.speed + dv)

    @property
    def delay_ms(self) -> int:
        return step_delay_ms(self.speed)

    # ---------- algorithm control ----------

    def select_algorithm(self, name: str) -> None:
        label = algorithm_label(name)
        self.algorithm = name.lower()
        logger.info("algorithm switched to %s", label)
        self.reset()

    def start(self) -> None:
        if self.state in FINISHED:
            self.reset()
        self._ensure_algo()
        self.running = True
        self.state = "Running"

    def pause(self) -> None:
        if self.state in FINISHED:
            return
        self.running = False
        self.state = "Paused"

    def toggle_run(self) -> None:
        if self.running:
            self.pause()
        else:
            self.start()

    def step(self) -> Optional[AlgorithmStep]:
        """Advance the current run by one expansion."""
        if self.state in FINISHED:
            return None
        res = self._ensure_algo().step()
        if res is None:
            return None
        self._apply(res)
        return res

    def tick(self, now: Optional[float] = None) -> Optional[AlgorithmStep]:
        """Called every frame; steps when running and the delay has elapsed."""
        now = _now_ms() if now is None else now
        if self._regenerate_at is not None:
            if now >= self._regenerate_at:
                logger.info("regenerating maze after a failed search")
                self.new_maze()
            return None
        if not self.running:
            return None
        if self._last_step_t is not None and now - self._last_step_t < self.delay_ms:
            return None
        self._last_step_t = now
        res = self.step()
        if res is not None and res.is_done and not res.success and self.auto_regenerate:
            self._regenerate_at = now + self.settings.regenerate_delay_ms
        return res

    def reset(self) -> None:
        self._discard_run()
        self.maze = reset_visitation(self.clean_maze)
        self.stats = self._fresh_stats()

    def cycle_solution(self) -> Optional[int]:
        """Show the next precomputed route; returns its index, or None if there are none."""
        if not self.solutions:
            return None
        self.reset()
        self.current_solution = (self.current_solution + 1) % len(self.solutions)
        self.maze = show_solution(self.clean_maze, self.solutions, self.current_solution)
        self.stats["path_len"] = len(self.solutions[self.current_solution])
        return self.current_solution

    # ---------- internals ----------

    def _ensure_algo(self) -> SearchAlgo:
        if self.algo is None:
            self.algo = make_algorithm(self.algorithm, self.clean_maze)
            self.steps = 0
        return self.algo

    def _discard_run(self) -> None:
        self.algo = None
        self.running = False
        self.state = "Idle"
        self.steps = 0
        self._last_step_t = None
        self._regenerate_at = None

    def _apply(self, res: AlgorithmStep) -> None:
        self.steps += 1
        self.maze = MazeData(res.grid, self.clean_maze.start, self.clean_maze.end)
        self.stats.update(
            visited=res.visited_count,
            path_len=res.path_length,
            elapsed_ms=res.elapsed_time,
            steps=self.steps,
        )
        if res.is_done:
            self.running = False
            self.state = "Done" if res.success else "No path"
            if res.success:
                logger.debug("path found in %.1f ms with %d cells", res.elapsed_time, res.path_length)
            else:
                logger.warning("%s found no path to the end", algorithm_label(self.algorithm))
        self.stats["state"] = self.state

    def _first_solution_len(self) -> int:
        return len(self.solutions[0]) if self.solutions else 0

    def _fresh_stats(self, path_len: int = 0) -> dict:
        return {
            "algo": algorithm_label(self.algorithm),
            "visited": 0,
            "path_len": path_len,
            "elapsed_ms": 0.0,
            "steps": 0,
            "state": self.state,
        }
