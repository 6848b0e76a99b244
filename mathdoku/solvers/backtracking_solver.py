"""Backtracking solver that prunes with a full rule check after every placement."""

from __future__ import annotations
import logging

from .base_solver import BaseSolver
from ..core.puzzle import MathdokuPuzzle
from ..core.validator import is_consistent

logger = logging.getLogger(__name__)


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over the empty cells in row-major order.

    Each empty cell tries 1..N in increasing order; after every placement
    rows, columns and full cages are validated fail-fast, and the branch is
    abandoned as soon as a rule breaks. The search is deterministic.
    A cancel() from another thread unwinds it without a solution.
    """

    name = "Backtracking"

    def _solve(self, puzzle: MathdokuPuzzle) -> bool:
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0

        if not is_consistent(puzzle):
            logger.debug("Board breaks a rule before the search starts")
            return False

        solved = self._backtrack(puzzle)
        logger.debug(
            "Search %s after %d iterations, %d backtracks",
            "succeeded" if solved else "failed",
            self.stats.iterations,
            self.stats.backtracks,
        )
        return solved

    def _backtrack(self, puzzle: MathdokuPuzzle) -> bool:
        """
        Recursive backtracking algorithm.

        Returns True if a full valid assignment was reached, False to make
        the caller try its next candidate.
        """
        self.stats.iterations += 1
        board = puzzle.board

        cell = board.first_empty_cell()
        if cell is None:
            return True

        row, col = cell
        for value in range(1, board.size + 1):
            if self.cancelled:
                return False
            board.set(row, col, value)
            self.stats.nodes_explored += 1

            if is_consistent(puzzle) and self._backtrack(puzzle):
                return True

            board.clear(row, col)

        self.stats.backtracks += 1
        return False
