"""Read/write contracts between the engine and whatever displays the grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sudokugen.board import SIZE, Board

__all__ = [
    "CellState",
    "GridSink",
    "GridSource",
    "PlayingField",
    "read_board",
    "write_board",
]


class GridSource(Protocol):
    def value_at(self, x: int, y: int) -> int: ...

    def is_given(self, x: int, y: int) -> bool: ...


class GridSink(Protocol):
    def write(self, x: int, y: int, value: int, *, editable: bool) -> None: ...


def read_board(source: GridSource) -> Board:
    """Snapshot ``source`` into a new board; later edits to either are independent."""
    board = Board.empty()
    for x in range(SIZE):
        for y in range(SIZE):
            board.set_value(x, y, source.value_at(x, y))
            board.set_given(x, y, source.is_given(x, y))
    return board


def write_board(board: Board, sink: GridSink, *, lock_givens: bool = True) -> None:
    for x in range(SIZE):
        for y in range(SIZE):
            editable = not (lock_givens and board.is_given(x, y))
            sink.write(x, y, board.value_at(x, y), editable=editable)


@dataclass
class CellState:
    value: int = 0
    editable: bool = True


class PlayingField:
    """In-memory grid of cell states, usable as both source and sink."""

    def __init__(self) -> None:
        self.cells = [[CellState() for _y in range(SIZE)] for _x in range(SIZE)]

    def cell(self, x: int, y: int) -> CellState:
        if not (0 <= x < SIZE and 0 <= y < SIZE):
            msg = f"Cell ({x}, {y}) is outside the playing field."
            raise IndexError(msg)
        return self.cells[x][y]

    def value_at(self, x: int, y: int) -> int:
        return self.cell(x, y).value

    def is_given(self, x: int, y: int) -> bool:
        return not self.cell(x, y).editable

    def write(self, x: int, y: int, value: int, *, editable: bool) -> None:
        cell = self.cell(x, y)
        cell.value = value
        cell.editable = editable
