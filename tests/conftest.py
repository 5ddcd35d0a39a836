import numpy as np
import pytest

from sudokugen.board import Board

SOLVED_ROWS = (
    (5, 3, 4, 6, 7, 8, 9, 1, 2),
    (6, 7, 2, 1, 9, 5, 3, 4, 8),
    (1, 9, 8, 3, 4, 2, 5, 6, 7),
    (8, 5, 9, 7, 6, 1, 4, 2, 3),
    (4, 2, 6, 8, 5, 3, 7, 9, 1),
    (7, 1, 3, 9, 2, 4, 8, 5, 6),
    (9, 6, 1, 5, 3, 7, 2, 8, 4),
    (2, 8, 7, 4, 1, 9, 6, 3, 5),
    (3, 4, 5, 2, 8, 6, 1, 7, 9),
)


def assert_complete_and_valid(board: Board) -> None:
    digits = list(range(1, 10))
    grid = board.grid
    for i in range(9):
        assert sorted(grid[i, :].tolist()) == digits
        assert sorted(grid[:, i].tolist()) == digits
    for x0 in range(0, 9, 3):
        for y0 in range(0, 9, 3):
            assert sorted(grid[x0 : x0 + 3, y0 : y0 + 3].flatten().tolist()) == digits


@pytest.fixture
def solved_board() -> Board:
    return Board.from_rows(SOLVED_ROWS)


@pytest.fixture
def given_board() -> Board:
    return Board.from_rows(SOLVED_ROWS, mark_givens=True)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
