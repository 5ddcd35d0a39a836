import os
from logging import basicConfig, getLogger

import numpy as np

from sudokugen.board import Board, InvalidCoordinateError
from sudokugen.collaborator import PlayingField, read_board, write_board
from sudokugen.generator import (
    DEFAULT_SAMPLES,
    carve_puzzle,
    estimate_solution_count,
    generate_full,
    generate_puzzles,
)
from sudokugen.solver import BacktrackingSolver, SearchTimeoutError, count_solutions

__all__ = [
    "BacktrackingSolver",
    "Board",
    "InvalidCoordinateError",
    "PlayingField",
    "SearchTimeoutError",
    "carve_puzzle",
    "count_solutions",
    "estimate_solution_count",
    "generate_full",
    "generate_puzzles",
    "main",
    "read_board",
    "write_board",
]


logger = getLogger(__name__)


def main(
    *,
    removals: int = 45,
    samples: int = DEFAULT_SAMPLES,
    rng_seed: int | None = None,
    max_attempts: int | None = None,
) -> None:
    basicConfig(level=os.environ.get("SUDOKUGEN_LOG_LEVEL", "INFO"))

    rng = np.random.default_rng(rng_seed)
    logger.info("Filling an empty board...")
    solution = generate_full(rng)
    logger.info("Carving %d cells (%d samples per check)...", removals, samples)
    carved = carve_puzzle(
        solution,
        removals,
        rng,
        samples=samples,
        max_attempts=max_attempts,
    )
    logger.info(
        "Removed %d cells in %d attempts. Puzzle:\n%s",
        carved.removed,
        carved.attempts,
        carved.puzzle,
    )
    logger.info("Solution:\n%s", carved.solution)
