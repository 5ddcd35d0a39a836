from __future__ import annotations

import time
from logging import getLogger
from typing import Final

import numpy as np

from sudokugen.board import SIZE, Board

__all__ = [
    "BacktrackingSolver",
    "SearchTimeoutError",
    "count_solutions",
]


logger = getLogger(__name__)
CELLS: Final[int] = SIZE * SIZE


class SearchTimeoutError(TimeoutError):
    pass


def _position_to_cell(position: int) -> tuple[int, int]:
    y, x = divmod(position, SIZE)
    return x, y


class BacktrackingSolver:
    """Randomized depth-first search for one completion of a board.

    Cells are visited in raster order with ``x`` advancing fastest. Empty cells
    try the values 1-9 in a freshly shuffled order, so repeated runs on the same
    board can return different completions.
    """

    def __init__(
        self,
        rng: np.random.Generator | int | None = None,
        *,
        time_limit: float | None = None,
    ) -> None:
        if not isinstance(rng, np.random.Generator):
            rng = np.random.default_rng(rng)
        self.rng = rng
        self.time_limit = time_limit
        self.nodes = 0
        self._deadline: float | None = None

    def solve(self, board: Board) -> bool:
        """Fill every empty cell of ``board`` in place.

        Returns ``False`` when the board has no valid completion. In that case,
        and when the time limit is hit, the board is left as it was given.
        """
        self.nodes = 0
        if not board.is_valid():
            logger.debug("Starting grid already breaks a row, column or box rule")
            return False
        self._deadline = (
            None if self.time_limit is None else time.monotonic() + self.time_limit
        )
        solved = self._solve_from(board, 0)
        logger.debug("Search finished (solved=%s) after %d nodes", solved, self.nodes)
        return solved

    def _solve_from(self, board: Board, position: int) -> bool:
        if position == CELLS:
            return True

        x, y = _position_to_cell(position)
        if board.grid[x, y] != 0:
            return self._solve_from(board, position + 1)

        self._check_deadline()
        for value in (self.rng.permutation(SIZE) + 1).tolist():  # Shuffle 1-9
            if not board.is_available(x, y, value):
                continue
            self.nodes += 1
            board.grid[x, y] = value
            try:
                solved = self._solve_from(board, position + 1)
            except SearchTimeoutError:
                board.grid[x, y] = 0
                raise
            if solved:
                return True
            board.grid[x, y] = 0

        return False

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.monotonic() > self._deadline:
            msg = f"Search exceeded its {self.time_limit}s time limit."
            raise SearchTimeoutError(msg)


def count_solutions(board: Board, limit: int = 2) -> int:
    """Count completions of ``board`` exactly, stopping once ``limit`` are found.

    Deterministic alternative to sampling: ``count_solutions(board) == 1`` means
    the puzzle is provably unique. ``board`` itself is not modified.
    """
    if limit < 1:
        msg = f"limit must be positive, got {limit}"
        raise ValueError(msg)

    work = board.copy()
    found = 0

    def _count_from(position: int) -> None:
        nonlocal found
        while position < CELLS and work.grid[_position_to_cell(position)] != 0:
            position += 1
        if position == CELLS:
            found += 1
            return

        x, y = _position_to_cell(position)
        for value in work.candidates(x, y):
            work.grid[x, y] = value
            _count_from(position + 1)
            work.grid[x, y] = 0
            if found >= limit:
                return

    # A board that already breaks the rules has no completion at all.
    if work.is_valid():
        _count_from(0)
    logger.debug("Exact count: %d solution(s) (limit %d)", found, limit)
    return found
