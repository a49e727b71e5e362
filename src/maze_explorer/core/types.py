# src/maze_explorer/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


class CellType(str, Enum):
    WALL = "wall"
    PATH = "path"
    START = "start"
    END = "end"
    VISITED = "visited"
    VISITING = "visiting"
    SOLUTION = "solution"
    ALTERNATE_PATH = "alternate-path"


# kinds written by a search or by solution display; reset restores them
DERIVED_KINDS = frozenset({
    CellType.VISITED,
    CellType.VISITING,
    CellType.SOLUTION,
    CellType.ALTERNATE_PATH,
})


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)


@dataclass
class Cell:
    kind: CellType
    position: Position
    visited: bool = False
    is_start: bool = False
    is_end: bool = False
    g: Optional[float] = None   # cost so far (A*, Dijkstra)
    h: Optional[float] = None   # heuristic (A*)
    f: Optional[float] = None   # g + h (A*)

    def structural_kind(self) -> CellType:
        """Kind this cell shows when no search or solution is drawn on it."""
        if self.is_start:
            return CellType.START
        if self.is_end:
            return CellType.END
        if self.kind == CellType.WALL:
            return CellType.WALL
        return CellType.PATH

    def clear_scratch(self) -> None:
        self.visited = False
        self.g = None
        self.h = None
        self.f = None


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[Cell]]             # [row][col]

    def in_bounds(self, p: Position) -> bool:
        return 0 <= p.row < self.height and 0 <= p.col < self.width

    def cell(self, p: Position) -> Cell:
        return self.cells[p.row][p.col]

    def is_walkable(self, p: Position) -> bool:
        return self.in_bounds(p) and self.cells[p.row][p.col].kind != CellType.WALL

    def neighbors4(self, p: Position) -> List[Position]:
        """Walkable 4-connected neighbors in up, right, down, left order."""
        candidates = [
            p.offset(-1, 0),
            p.offset(0, 1),
            p.offset(1, 0),
            p.offset(0, -1),
        ]
        return [n for n in candidates if self.is_walkable(n)]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row


@dataclass
class MazeData:
    grid: Grid
    start: Position
    end: Position
    parents: Dict[Position, Position] = field(default_factory=dict)  # child -> parent

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def parent_of(self, p: Position) -> Optional[Position]:
        return self.parents.get(p)


@dataclass
class AlgorithmStep:
    grid: Grid                          # snapshot, safe to keep
    visited_count: int
    path_length: int = 0
    elapsed_time: float = 0.0           # ms since the run started
    is_done: bool = False
    success: bool = False
    current: Optional[Position] = None
    path: Optional[List[Position]] = None

    @property
    def status(self) -> str:
        if not self.is_done:
            return "running"
        return "done" if self.success else "no_path"
