"""Mathdoku board storage: cell values, cage walls and labels."""

from __future__ import annotations
from enum import IntEnum
from typing import List, Optional, Tuple
import numpy as np


DEFAULT_SIZE = 6
MIN_SIZE = 2
MAX_SIZE = 9


class Side(IntEnum):
    """The four sides of a cell, used to index the wall flags."""
    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3

    @property
    def opposite(self) -> Side:
        return _OPPOSITE[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """Row and column delta to the neighbor on this side."""
        return _OFFSETS[self]


_OPPOSITE = {
    Side.TOP: Side.BOTTOM,
    Side.BOTTOM: Side.TOP,
    Side.LEFT: Side.RIGHT,
    Side.RIGHT: Side.LEFT,
}

_OFFSETS = {
    Side.TOP: (-1, 0),
    Side.BOTTOM: (1, 0),
    Side.LEFT: (0, -1),
    Side.RIGHT: (0, 1),
}


class MathdokuBoard:
    """
    Square grid of cells for a Mathdoku puzzle.

    Each cell has a value (0 = empty, else 1..size), a label string,
    a cage-membership flag and four wall flags. The board is pure storage:
    it does not enforce any game rule.
    """

    def __init__(self, size: int = DEFAULT_SIZE, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            size: Number of rows (and columns).
            grid: Optional initial values. If None, creates an empty board.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")

        self.resize(size)

        if grid is not None:
            if grid.shape != (size, size):
                raise ValueError(f"Grid shape must be ({size}, {size})")
            self.values = grid.copy().astype(np.int32)

    def resize(self, size: int) -> None:
        """Reallocate all cells for a new size, clearing values, walls and labels."""
        self.size = size
        self.values = np.zeros((size, size), dtype=np.int32)
        self.walls = np.zeros((size, size, len(Side)), dtype=bool)
        self.in_cage = np.zeros((size, size), dtype=bool)
        self.labels: List[List[str]] = [["" for _ in range(size)] for _ in range(size)]

    def copy(self) -> MathdokuBoard:
        """Create a deep copy of the board."""
        new_board = MathdokuBoard(self.size)
        new_board.values = self.values.copy()
        new_board.walls = self.walls.copy()
        new_board.in_cage = self.in_cage.copy()
        new_board.labels = [row[:] for row in self.labels]
        return new_board

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.values[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        self.values[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.values[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.values[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        return self.values[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.values[:, col]

    def get_label(self, row: int, col: int) -> str:
        return self.labels[row][col]

    def set_label(self, row: int, col: int, label: str) -> None:
        self.labels[row][col] = label

    def has_wall(self, row: int, col: int, side: Side) -> bool:
        """Check if a cage edge lies on the given side of the cell."""
        return bool(self.walls[row, col, side])

    def set_wall(self, row: int, col: int, side: Side) -> None:
        """
        Put a cage edge on one side of a cell.

        The mirrored flag on the neighbor is set too, so walls stay
        consistent from both sides. Sides on the outer border are ignored.
        """
        d_row, d_col = side.offset
        n_row, n_col = row + d_row, col + d_col
        if not self.in_bounds(n_row, n_col):
            return
        self.walls[row, col, side] = True
        self.walls[n_row, n_col, side.opposite] = True

    def reset_walls(self) -> None:
        """Remove every wall flag."""
        self.walls[:] = False

    def reset_values(self) -> None:
        """Reset every cell to empty."""
        self.values[:] = 0

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        rows, cols = np.nonzero(self.values == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def first_empty_cell(self) -> Optional[Tuple[int, int]]:
        """Get the row-major-first empty cell, or None if the board is full."""
        flat = np.flatnonzero(self.values == 0)
        if flat.size == 0:
            return None
        return divmod(int(flat[0]), self.size)

    def count_empty(self) -> int:
        return int(np.sum(self.values == 0))

    def count_filled(self) -> int:
        return int(np.sum(self.values != 0))

    def is_full(self) -> bool:
        """Check if all cells hold a value."""
        return self.count_empty() == 0

    def to_string(self) -> str:
        """Convert values to a compact row-major string, 0 for empty cells."""
        return ''.join(str(v) for v in self.values.flatten())

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> MathdokuBoard:
        """Create a board from a 2D list of values."""
        arr = np.array(data, dtype=np.int32)
        return cls(arr.shape[0], arr)

    def __str__(self) -> str:
        """Pretty-print the board with its cage walls."""
        lines = []
        for i in range(self.size):
            border = '+'
            for j in range(self.size):
                closed = i == 0 or self.has_wall(i, j, Side.TOP)
                border += ('---' if closed else '   ') + '+'
            lines.append(border)

            row_str = ''
            for j in range(self.size):
                row_str += '|' if j == 0 or self.has_wall(i, j, Side.LEFT) else ' '
                val = self.values[i, j]
                row_str += f' {val} ' if val else ' . '
            lines.append(row_str + '|')

        lines.append('+' + '---+' * self.size)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"MathdokuBoard(size={self.size}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MathdokuBoard):
            return False
        return self.size == other.size and np.array_equal(self.values, other.values)
