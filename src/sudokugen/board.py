from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Final

import numpy as np
import numpy.typing as npt

__all__ = [
    "BOX",
    "SIZE",
    "Board",
    "InvalidCoordinateError",
]


SIZE: Final[int] = 9
BOX: Final[int] = 3


class InvalidCoordinateError(IndexError):
    pass


def _check_coordinate(x: int, y: int) -> None:
    if not (0 <= x < SIZE and 0 <= y < SIZE):
        msg = f"Cell ({x}, {y}) is outside the {SIZE}x{SIZE} board."
        raise InvalidCoordinateError(msg)


def _check_value(value: int, low: int = 0) -> None:
    if not low <= value <= SIZE:
        msg = f"Cell value must be in [{low}, {SIZE}], got {value}."
        raise ValueError(msg)


class Board:
    """A 9x9 Sudoku grid indexed ``(x, y)``, ``x`` being the column.

    Values live in ``grid[x, y]``; 0 marks an empty cell. ``givens`` is a
    separate mask of cells fixed by the puzzle, independent of their value.
    """

    def __init__(
        self,
        grid: npt.ArrayLike | None = None,
        givens: npt.ArrayLike | None = None,
    ) -> None:
        if grid is None:
            grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        grid = np.array(grid, dtype=np.int8)
        if grid.shape != (SIZE, SIZE):
            msg = f"Board grid must have shape ({SIZE}, {SIZE}), got {grid.shape}."
            raise ValueError(msg)
        if grid.min() < 0 or grid.max() > SIZE:
            msg = f"Board values must be in [0, {SIZE}]."
            raise ValueError(msg)

        if givens is None:
            givens = np.zeros((SIZE, SIZE), dtype=np.bool_)
        givens = np.array(givens, dtype=np.bool_)
        if givens.shape != (SIZE, SIZE):
            msg = f"Givens mask must have shape ({SIZE}, {SIZE}), got {givens.shape}."
            raise ValueError(msg)

        self.grid: npt.NDArray[np.int8] = grid
        self.givens: npt.NDArray[np.bool_] = givens

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[int]], *, mark_givens: bool = False
    ) -> Board:
        """Build a board from row-major values, ``rows[y][x]``."""
        grid = np.array(rows, dtype=np.int8).T
        givens = grid != 0 if mark_givens else None
        return cls(grid, givens)

    def value_at(self, x: int, y: int) -> int:
        _check_coordinate(x, y)
        return int(self.grid[x, y])

    def set_value(self, x: int, y: int, value: int) -> None:
        _check_coordinate(x, y)
        _check_value(value)
        self.grid[x, y] = value

    def is_given(self, x: int, y: int) -> bool:
        _check_coordinate(x, y)
        return bool(self.givens[x, y])

    def set_given(self, x: int, y: int, given: bool = True) -> None:  # noqa: FBT001, FBT002
        _check_coordinate(x, y)
        self.givens[x, y] = given

    def row_values(self, y: int) -> set[int]:
        _check_coordinate(0, y)
        return set(self.grid[:, y].tolist())

    def column_values(self, x: int) -> set[int]:
        _check_coordinate(x, 0)
        return set(self.grid[x, :].tolist())

    def box_values(self, x: int, y: int) -> set[int]:
        _check_coordinate(x, y)
        x0, y0 = BOX * (x // BOX), BOX * (y // BOX)
        return set(self.grid[x0 : x0 + BOX, y0 : y0 + BOX].flatten().tolist())

    def is_available(self, x: int, y: int, value: int) -> bool:
        # 0 is always present wherever a cell is empty, so it is not a real
        # constraint and asking about it is a caller bug.
        _check_value(value, low=1)
        return (
            value not in self.row_values(y)
            and value not in self.column_values(x)
            and value not in self.box_values(x, y)
        )

    def candidates(self, x: int, y: int) -> list[int]:
        """Values still placeable at ``(x, y)``, ignoring its current value."""
        _check_coordinate(x, y)
        used = self.row_values(y) | self.column_values(x) | self.box_values(x, y)
        used.discard(int(self.grid[x, y]))
        return [value for value in range(1, SIZE + 1) if value not in used]

    def filled_cells(self) -> list[tuple[int, int]]:
        return [(int(x), int(y)) for x, y in np.argwhere(self.grid != 0)]

    def removable_cells(self) -> list[tuple[int, int]]:
        """Filled cells that are not givens."""
        mask = (self.grid != 0) & ~self.givens
        return [(int(x), int(y)) for x, y in np.argwhere(mask)]

    def is_complete(self) -> bool:
        return bool(np.all(self.grid != 0))

    def is_valid(self) -> bool:
        """No filled cell repeats a value within its row, column or box."""
        for house in self._houses():
            filled = house[house != 0]
            if len(np.unique(filled)) != len(filled):
                return False
        return True

    def _houses(self) -> Iterator[npt.NDArray[np.int8]]:
        for i in range(SIZE):
            yield self.grid[i, :]
            yield self.grid[:, i]
        for x0 in range(0, SIZE, BOX):
            for y0 in range(0, SIZE, BOX):
                yield self.grid[x0 : x0 + BOX, y0 : y0 + BOX].flatten()

    def serialize(self) -> str:
        """All 81 values, ``x`` outer and ``y`` inner, as a string of digits."""
        return "".join(str(value) for value in self.grid.flatten().tolist())

    def rows(self) -> list[list[int]]:
        return self.grid.T.tolist()

    def copy(self) -> Board:
        return Board(self.grid.copy(), self.givens.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({self.serialize()!r})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(value) if value else "." for value in row)
            for row in self.rows()
        )
