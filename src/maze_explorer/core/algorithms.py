# src/maze_explorer/core/algorithms.py
#!/usr/bin/env python3
from typing import Dict, Type

from maze_explorer.core.astar import AStarAlgo
from maze_explorer.core.bfs import BFSAlgo
from maze_explorer.core.dfs import DFSAlgo
from maze_explorer.core.dijkstra import DijkstraAlgo
from maze_explorer.core.grid import clone_maze
from maze_explorer.core.search import SearchAlgo
from maze_explorer.core.types import MazeData

ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    "bfs": BFSAlgo,
    "dfs": DFSAlgo,
    "astar": AStarAlgo,
    "dijkstra": DijkstraAlgo,
}


def algorithm_label(name: str) -> str:
    return _lookup(name).name


def make_algorithm(name: str, maze: MazeData) -> SearchAlgo:
    """New run on a private clone of `maze`."""
    return _lookup(name)(clone_maze(maze))


def _lookup(name: str) -> Type[SearchAlgo]:
    try:
        return ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown algorithm {name!r}, expected one of {sorted(ALGORITHMS)}") from None
