"""A playing session: the operations a GUI, CLI or test drives."""

from __future__ import annotations
import logging
import random
from typing import Iterable, Optional

from ..core.board import DEFAULT_SIZE
from ..core.cage import Position
from ..core.errors import ConfigurationError, UnsolvableError
from ..core.puzzle import MathdokuPuzzle
from ..core.validator import ValidationReport, validate, is_won
from ..generator import MathdokuGenerator
from ..solvers import BacktrackingSolver, SolverStats
from .history import EditHistory
from .loader import parse_puzzle

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the current puzzle, its edit history and the hint cell.

    Generation, loading, solving and validation all act on the one
    MathdokuPuzzle held here, one call at a time.
    """

    def __init__(self, seed: Optional[int] = None, highlight_mistakes: bool = False):
        """
        Args:
            seed: Random seed for generation and hint choice.
            highlight_mistakes: Start with mistake highlighting enabled.
        """
        self.rng = random.Random(seed)
        self.generator = MathdokuGenerator(seed=seed)
        self.solver = BacktrackingSolver()
        self.puzzle = MathdokuPuzzle(DEFAULT_SIZE)
        self.history = EditHistory()
        self.highlight_mistakes = highlight_mistakes
        self.hint_cell: Optional[Position] = None

    @property
    def board(self):
        return self.puzzle.board

    @property
    def size(self) -> int:
        return self.puzzle.size

    def reset(self, size: int = DEFAULT_SIZE) -> None:
        """Drop the current puzzle, history and hint."""
        self.puzzle = MathdokuPuzzle(size)
        self.history.clear()
        self.hint_cell = None

    def generate(self, size: int) -> MathdokuPuzzle:
        """Replace the current puzzle with a freshly generated one."""
        puzzle = self.generator.generate(size)
        self.reset(size)
        self.puzzle = puzzle
        return puzzle

    def load(self, lines: Iterable[str]) -> SolverStats:
        """
        Replace the current puzzle with one read from definition lines.

        The puzzle is solved before it is accepted, which also stores its
        solution for hints.

        Returns:
            Stats of the verifying solver run.

        Raises:
            ConfigurationError: If the definition is malformed.
            UnsolvableError: If the puzzle has no solution.
        """
        try:
            puzzle = parse_puzzle(lines)
            solution, stats = self.solver.solve(puzzle)
            if solution is None:
                raise UnsolvableError("Game cannot be solved with the given data")
        except (ConfigurationError, UnsolvableError) as e:
            logger.warning("Rejected puzzle definition: %s", e)
            self.reset(DEFAULT_SIZE)
            raise

        self.reset(puzzle.size)
        self.puzzle = puzzle
        return stats

    def load_file(self, path: str) -> SolverStats:
        """Load a definition file, see load()."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            self.reset(DEFAULT_SIZE)
            raise ConfigurationError(f"Could not read {path}: {e}") from e
        return self.load(lines)

    def apply_edit(self, row: int, col: int, value: int) -> bool:
        """
        Enter a value into a cell, or clear it with value 0.

        A value can only go into an empty cell and only a filled cell can be
        cleared; any other edit is ignored.

        Returns:
            True if the edit was applied and recorded.
        """
        if not self.board.in_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board")
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")

        current = self.board.get(row, col)
        if (value != 0 and current != 0) or (value == 0 and current == 0):
            return False

        self.history.record(row, col, value)
        self.board.set(row, col, value)
        logger.debug("Edit (%d, %d) -> %d", row, col, value)
        return True

    def undo(self) -> bool:
        return self.history.undo(self.board) is not None

    def redo(self) -> bool:
        return self.history.redo(self.board) is not None

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def clear_all(self) -> None:
        """Wipe every value and the edit history. This cannot be undone."""
        self.board.reset_values()
        self.history.clear()

    def solve(self) -> bool:
        """
        Show the solution on the board.

        Puzzles without a stored solution are solved first.

        Returns:
            False if the puzzle has no solution.
        """
        if self.puzzle.solution is None:
            probe = self.puzzle.copy()
            probe.board.reset_values()
            solution, _ = self.solver.solve(probe)
            if solution is None:
                return False
            self.puzzle.solution = solution
        return self.puzzle.apply_solution()

    def request_hint(self) -> Optional[Position]:
        """
        Pick a cell that is empty or holds a wrong value.

        The same cell is returned until the player fixes it.

        Returns:
            The hinted cell, or None if the board matches the solution.
        """
        solution = self.puzzle.solution
        if solution is None:
            return None

        wrong = self.board.values != solution
        if self.hint_cell is not None and wrong[self.hint_cell.row, self.hint_cell.col]:
            return self.hint_cell

        candidates = [Position(int(r), int(c)) for r, c in zip(*wrong.nonzero())]
        self.hint_cell = self.rng.choice(candidates) if candidates else None
        return self.hint_cell

    def toggle_mistake_highlighting(self) -> bool:
        self.highlight_mistakes = not self.highlight_mistakes
        return self.highlight_mistakes

    def mistakes(self) -> ValidationReport:
        """
        Current rule violations.

        Returns an empty report while mistake highlighting is off.
        """
        if not self.highlight_mistakes:
            return ValidationReport(complete=self.board.is_full())
        return validate(self.puzzle)

    def is_won(self) -> bool:
        return is_won(self.puzzle)
