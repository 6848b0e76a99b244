"""The puzzle aggregate shared by the generator, validator, solver and session."""

from __future__ import annotations
from typing import List, Optional
import numpy as np

from .board import MathdokuBoard, Side, DEFAULT_SIZE
from .cage import Cage, Label


class MathdokuPuzzle:
    """
    A board together with its cage partition and (optionally) its solved grid.

    The board and cage list are replaced wholesale whenever a new puzzle is
    generated or loaded; cell values change as the player edits the board.
    """

    def __init__(self, size: int = DEFAULT_SIZE):
        self.board = MathdokuBoard(size)
        self.cages: List[Cage] = []
        self.solution: Optional[np.ndarray] = None

    @property
    def size(self) -> int:
        return self.board.size

    def reset(self, size: int = DEFAULT_SIZE) -> None:
        """Drop everything and start over with an empty board of the given size."""
        self.board.resize(size)
        self.cages = []
        self.solution = None

    def copy(self) -> MathdokuPuzzle:
        new_puzzle = MathdokuPuzzle(self.size)
        new_puzzle.board = self.board.copy()
        new_puzzle.cages = [Cage(list(cage.cells)) for cage in self.cages]
        new_puzzle.solution = None if self.solution is None else self.solution.copy()
        return new_puzzle

    def set_cages(self, cages: List[Cage]) -> None:
        """Install a cage partition, marking membership and deriving the walls."""
        self.cages = list(cages)
        self.board.in_cage[:] = False
        for cage in self.cages:
            for row, col in cage:
                self.board.in_cage[row, col] = True
        self.setup_walls()

    def setup_walls(self) -> None:
        """Put a wall on every side whose neighbor belongs to another cage."""
        self.board.reset_walls()
        for cage in self.cages:
            for row, col in cage:
                for side in Side:
                    d_row, d_col = side.offset
                    neighbor = (row + d_row, col + d_col)
                    if self.board.in_bounds(*neighbor) and neighbor not in cage:
                        self.board.set_wall(row, col, side)

    def label_for(self, cage: Cage) -> Optional[Label]:
        """Return the parsed label of a cage, or None if no cell carries one."""
        for row, col in sorted(cage.cells):
            text = self.board.get_label(row, col)
            if text:
                return Label.parse(text)
        return None

    def cage_values(self, cage: Cage) -> List[int]:
        return [int(self.board.values[row, col]) for row, col in cage]

    def is_partition(self) -> bool:
        """Check that the cages cover every cell exactly once."""
        counts = np.zeros((self.size, self.size), dtype=np.int32)
        for cage in self.cages:
            for row, col in cage:
                if not self.board.in_bounds(row, col):
                    return False
                counts[row, col] += 1
        return bool(np.all(counts == 1))

    def apply_solution(self) -> bool:
        """
        Copy the solved grid onto the live board.

        Returns:
            False if there is no solved grid to apply.
        """
        if self.solution is None:
            return False
        self.board.values = self.solution.copy()
        return True

    def __repr__(self) -> str:
        solved = "yes" if self.solution is not None else "no"
        return f"MathdokuPuzzle(size={self.size}, cages={len(self.cages)}, solution={solved})"
