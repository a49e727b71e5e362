import pytest

from maze_explorer.core.grid import maze_from_rows

OPEN_5X5 = [
    "S....",
    ".....",
    "..#..",
    ".....",
    "....E",
]

# start pocket sealed off from the end
SEALED = [
    "S.#.",
    "..#.",
    "###.",
    "...E",
]

OPEN_7X7 = [
    "S......",
    ".......",
    ".......",
    ".......",
    ".......",
    ".......",
    "......E",
]


@pytest.fixture
def open_5x5():
    return maze_from_rows(OPEN_5X5)


@pytest.fixture
def sealed_maze():
    return maze_from_rows(SEALED)


@pytest.fixture
def open_7x7():
    return maze_from_rows(OPEN_7X7)
