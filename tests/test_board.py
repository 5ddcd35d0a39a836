import numpy as np
import pytest

from conftest import SOLVED_ROWS
from sudokugen.board import Board, InvalidCoordinateError


def test_empty_board_is_all_zero():
    board = Board.empty()
    assert board.serialize() == "0" * 81
    assert not board.givens.any()
    assert board.is_valid()
    assert not board.is_complete()


def test_from_rows_indexes_by_column_then_row(solved_board):
    assert solved_board.value_at(0, 0) == 5
    assert solved_board.value_at(1, 0) == 3
    assert solved_board.value_at(0, 1) == 6
    assert solved_board.rows() == [list(row) for row in SOLVED_ROWS]


def test_set_value_is_unconditional():
    board = Board.empty()
    board.set_value(0, 0, 7)
    board.set_value(1, 0, 7)
    assert board.value_at(0, 0) == 7
    assert board.value_at(1, 0) == 7
    assert not board.is_valid()


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (9, 0), (0, 9), (12, 12)])
def test_invalid_coordinates_are_rejected(x, y):
    board = Board.empty()
    with pytest.raises(InvalidCoordinateError):
        board.value_at(x, y)
    with pytest.raises(InvalidCoordinateError):
        board.set_value(x, y, 1)
    with pytest.raises(InvalidCoordinateError):
        board.box_values(x, y)


def test_out_of_range_value_is_rejected():
    board = Board.empty()
    with pytest.raises(ValueError):
        board.set_value(0, 0, 10)
    with pytest.raises(ValueError):
        Board(np.full((9, 9), 11))


def test_bad_shape_is_rejected():
    with pytest.raises(ValueError):
        Board(np.zeros((3, 3)))


def test_constraint_sets(solved_board):
    solved_board.set_value(0, 4, 0)
    assert solved_board.row_values(4) == {0, 2, 6, 8, 5, 3, 7, 9, 1}
    assert solved_board.column_values(1) == set(range(1, 10))
    assert solved_board.box_values(4, 4) == {7, 6, 1, 8, 5, 3, 9, 2, 4}
    assert solved_board.box_values(8, 8) == solved_board.box_values(6, 6)


@pytest.mark.parametrize(
    "conflict",
    [(0, 4), (4, 0), (3, 3)],
    ids=["row", "column", "box"],
)
def test_is_available_detects_each_conflict_type(conflict):
    board = Board.empty()
    board.set_value(*conflict, 5)
    assert not board.is_available(4, 4, 5)
    assert all(board.is_available(4, 4, v) for v in range(1, 10) if v != 5)


def test_is_available_ignores_unrelated_cells():
    board = Board.empty()
    board.set_value(0, 0, 5)
    assert board.is_available(4, 4, 5)


def test_is_available_rejects_zero():
    board = Board.empty()
    with pytest.raises(ValueError):
        board.is_available(0, 0, 0)


def test_candidates(solved_board):
    solved_board.set_value(4, 4, 0)
    assert solved_board.candidates(4, 4) == [5]
    assert Board.empty().candidates(0, 0) == list(range(1, 10))


def test_removable_cells_skip_givens(solved_board):
    solved_board.set_given(0, 0)
    solved_board.set_value(1, 0, 0)
    removable = solved_board.removable_cells()
    assert (0, 0) not in removable
    assert (1, 0) not in removable
    assert len(removable) == 79
    assert len(solved_board.filled_cells()) == 80


def test_given_and_empty_are_independent():
    board = Board.empty()
    board.set_given(2, 3)
    assert board.is_given(2, 3)
    assert board.value_at(2, 3) == 0


def test_serialize_walks_columns_first(solved_board):
    text = solved_board.serialize()
    assert len(text) == 81
    assert text[:9] == "".join(str(row[0]) for row in SOLVED_ROWS)


def test_validity(solved_board):
    assert solved_board.is_complete()
    assert solved_board.is_valid()
    solved_board.set_value(0, 0, 3)
    assert not solved_board.is_valid()


def test_copy_is_independent(given_board):
    clone = given_board.copy()
    clone.set_value(0, 0, 0)
    clone.set_given(0, 0, False)
    assert given_board.value_at(0, 0) == 5
    assert given_board.is_given(0, 0)
    assert clone != given_board
