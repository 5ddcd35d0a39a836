from __future__ import annotations

from functools import partial
from itertools import repeat
from logging import getLogger
from typing import TYPE_CHECKING, Final, Literal, NamedTuple

import numpy as np
import numpy.typing as npt

from sudokugen.board import SIZE, Board
from sudokugen.solver import BacktrackingSolver, count_solutions

if TYPE_CHECKING:
    from concurrent.futures import Executor


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_SAMPLES",
    "CarvedPuzzle",
    "PuzzleGenerator",
    "PuzzleSample",
    "carve_puzzle",
    "estimate_solution_count",
    "generate_full",
    "generate_puzzles",
]


logger = getLogger(__name__)
DEFAULT_SAMPLES: Final[int] = 15
DEFAULT_MAX_ATTEMPTS: Final[int] = 1000


def _split_rng_seeds(rng: np.random.Generator, count: int) -> tuple[int, ...]:
    return tuple(rng.integers(0, 2**32 - 1, size=count).tolist())


def generate_full(rng: np.random.Generator | int | None = None) -> Board:
    """Solve an empty board; each seed gives a different complete grid."""
    board = Board.empty()
    if not BacktrackingSolver(rng).solve(board):
        msg = "Failed to fill an empty Sudoku board."
        raise RuntimeError(msg)
    return board


def _sample_solution(grid: npt.NDArray[np.int8], seed: int) -> str | None:
    board = Board(grid)
    if BacktrackingSolver(seed).solve(board):
        return board.serialize()
    return None


def estimate_solution_count(
    board: Board,
    samples: int = DEFAULT_SAMPLES,
    rng: np.random.Generator | int | None = None,
    *,
    executor: Executor | None = None,
) -> int:
    """Approximate the number of solutions of ``board`` by repeated solving.

    The randomized solver runs ``samples`` times on independent copies of the
    board and the distinct completed grids are counted. Runs that find no
    completion add nothing, so an unsolvable board gives 0. ``board`` is not
    modified.

    The result is a lower bound on the true count and at most ``samples``. A
    puzzle with several solutions can still score 1: if the search reaches a
    second solution with probability ``p``, a two-solution puzzle is reported
    as unique with probability ``(1 - p) ** samples + p ** samples``. Use
    :func:`sudokugen.solver.count_solutions` for an exact answer.
    """
    if samples < 1:
        msg = f"samples must be positive, got {samples}"
        raise ValueError(msg)
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)

    seeds = _split_rng_seeds(rng, samples)
    grids = repeat(board.grid.copy(), samples)
    if executor is None:
        results = map(_sample_solution, grids, seeds)
    else:
        results = executor.map(_sample_solution, grids, seeds)

    solutions = {result for result in results if result is not None}
    return len(solutions)


class CarvedPuzzle(NamedTuple):
    puzzle: Board
    solution: Board
    removed: int
    attempts: int
    target: int

    @property
    def complete(self) -> bool:
        return self.removed >= self.target


def carve_puzzle(  # noqa: PLR0913
    full_board: Board,
    target_removals: int,
    rng: np.random.Generator | int | None = None,
    *,
    samples: int = DEFAULT_SAMPLES,
    max_attempts: int | None = None,
    uniqueness: Literal["sampled", "exact"] = "sampled",
    executor: Executor | None = None,
) -> CarvedPuzzle:
    """Clear cells from ``full_board`` while the puzzle stays unique.

    Each attempt clears a random filled cell that is not a given and keeps the
    removal only if the solution count is exactly 1. Carving stops after
    ``target_removals`` removals, after ``max_attempts`` attempts, or when no
    removable cell is left. The remaining filled cells of the returned puzzle
    are all givens. ``full_board`` is not modified.
    """
    if not 0 <= target_removals <= SIZE * SIZE:
        msg = f"target_removals must be in [0, {SIZE * SIZE}], got {target_removals}"
        raise ValueError(msg)
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    if max_attempts is None:
        max_attempts = DEFAULT_MAX_ATTEMPTS

    match uniqueness:
        case "sampled":
            count = partial(
                estimate_solution_count, samples=samples, rng=rng, executor=executor
            )
        case "exact":
            count = partial(count_solutions, limit=2)
        case _:
            msg = f"Unknown uniqueness check: {uniqueness}"
            raise ValueError(msg)

    puzzle = full_board.copy()
    removed = attempts = 0
    while removed < target_removals and attempts < max_attempts:
        cells = puzzle.removable_cells()
        if not cells:
            break
        x, y = cells[int(rng.integers(len(cells)))]
        attempts += 1

        value = puzzle.value_at(x, y)
        puzzle.set_value(x, y, 0)
        solutions = count(puzzle)
        if solutions == 1:
            removed += 1
        else:
            puzzle.set_value(x, y, value)
        logger.debug(
            "Attempt %d: clear (%d, %d) -> %d solution(s), %d/%d removed",
            attempts,
            x,
            y,
            solutions,
            removed,
            target_removals,
        )

    if removed < target_removals:
        logger.warning(
            "Could only remove %d of %d cells after %d attempts",
            removed,
            target_removals,
            attempts,
        )
    puzzle.givens = puzzle.grid != 0
    return CarvedPuzzle(
        puzzle=puzzle,
        solution=full_board.copy(),
        removed=removed,
        attempts=attempts,
        target=target_removals,
    )


class PuzzleSample(NamedTuple):
    puzzle: Board
    answer: Board
    difficulty: int
    removed: int


class PuzzleGenerator:
    def __init__(
        self,
        difficulty: int | tuple[int, int],
        rng: np.random.Generator | int | None = None,
        *,
        samples: int = DEFAULT_SAMPLES,
        max_attempts: int | None = None,
    ) -> None:
        self.difficulties = (
            (difficulty,)
            if isinstance(difficulty, int)
            else tuple(range(difficulty[0], difficulty[1]))
        )
        if not self.difficulties:
            msg = f"Empty difficulty range: {difficulty}"
            raise ValueError(msg)
        if not isinstance(rng, np.random.Generator):
            rng = np.random.default_rng(rng)
        self.rng = rng
        self.samples = samples
        self.max_attempts = max_attempts

    def __call__(self) -> PuzzleSample:
        difficulty = int(self.rng.choice(self.difficulties))
        answer = generate_full(self.rng)
        carved = carve_puzzle(
            answer,
            difficulty,
            self.rng,
            samples=self.samples,
            max_attempts=self.max_attempts,
        )
        return PuzzleSample(
            puzzle=carved.puzzle,
            answer=carved.solution,
            difficulty=difficulty,
            removed=carved.removed,
        )


def _generate_one(
    seed: int, difficulty: int | tuple[int, int], samples: int
) -> PuzzleSample:
    return PuzzleGenerator(difficulty, seed, samples=samples)()


def generate_puzzles(
    count: int,
    difficulty: int | tuple[int, int],
    rng: np.random.Generator | int | None = None,
    executor: Executor | None = None,
    *,
    samples: int = DEFAULT_SAMPLES,
) -> tuple[PuzzleSample, ...]:
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)

    seeds = _split_rng_seeds(rng, count)
    build = partial(_generate_one, difficulty=difficulty, samples=samples)
    if executor is None:
        return tuple(map(build, seeds))
    return tuple(executor.map(build, seeds))
