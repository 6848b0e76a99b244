"""Mathdoku puzzle generator: random Latin square, random cages, derived labels."""

from __future__ import annotations
import bisect
import logging
import os
import random
from collections import deque
from math import prod
from typing import Deque, List, Optional, Sequence
import numpy as np

from ..core.board import MIN_SIZE, MAX_SIZE
from ..core.cage import Cage, Label, Operator, Position
from ..core.puzzle import MathdokuPuzzle

logger = logging.getLogger(__name__)

# Cumulative percentages for cage sizes 1..8
CAGE_SIZE_CUMULATIVE_WEIGHTS = (5, 20, 45, 70, 86, 94, 97, 100)


def sum_target(values: Sequence[int]) -> int:
    return sum(values)


def product_target(values: Sequence[int]) -> int:
    return prod(values)


def subtraction_target(values: Sequence[int]) -> Optional[int]:
    """Largest value minus the sum of the rest, or None if that is negative."""
    largest = max(values)
    target = largest - (sum(values) - largest)
    return target if target >= 0 else None


def division_target(values: Sequence[int]) -> Optional[int]:
    """
    Divide the largest value by each of the others in turn.

    Returns:
        The quotient, or None if any step of the chain leaves a remainder.
    """
    ordered = sorted(values, reverse=True)
    largest, divisors = ordered[0], ordered[1:]

    target = largest
    for divisor in divisors:
        target //= divisor

    if target * prod(divisors) != largest:
        return None
    return target


_TARGET_FUNCTIONS = {
    Operator.ADD: sum_target,
    Operator.SUBTRACT: subtraction_target,
    Operator.MULTIPLY: product_target,
    Operator.DIVIDE: division_target,
}


class MathdokuGenerator:
    """
    Generator for Mathdoku puzzles.

    Algorithm:
    1. Build the Latin square (r + c) mod N + 1
    2. Shuffle its rows, then its columns (Fisher-Yates)
    3. Grow random cages from unassigned cells in row-major order
    4. Pick a random operator per cage and derive its target
    5. Derive the cage walls

    Generated puzzles are not checked for a unique solution.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate(self, size: int) -> MathdokuPuzzle:
        """
        Generate a puzzle of the given size.

        Args:
            size: Number of rows/columns.

        Returns:
            A MathdokuPuzzle with cages, labels and walls set, empty values
            and the generated grid stored as its solution.
        """
        if size < MIN_SIZE or size > MAX_SIZE:
            raise ValueError(f"Size must be {MIN_SIZE}-{MAX_SIZE}, got {size}")

        solution = self.generate_latin_square(size)

        puzzle = MathdokuPuzzle(size)
        cages = self.generate_cages(size)
        for cage in cages:
            anchor = cage.anchor
            label = self.generate_label([int(solution[r, c]) for r, c in cage])
            puzzle.board.set_label(anchor.row, anchor.col, str(label))

        puzzle.set_cages(cages)
        puzzle.solution = solution

        logger.debug("Generated %dx%d puzzle with %d cages", size, size, len(cages))
        return puzzle

    def generate_batch(self, count: int, size: int) -> List[MathdokuPuzzle]:
        """Generate several puzzles of the same size."""
        return [self.generate(size) for _ in range(count)]

    def generate_latin_square(self, size: int) -> np.ndarray:
        """Build the cyclic Latin square and shuffle its rows and columns."""
        idx = np.arange(size)
        grid = (idx[:, None] + idx[None, :]) % size + 1

        for row in range(size - 1, 0, -1):
            other = self.rng.randint(0, row)
            grid[[row, other], :] = grid[[other, row], :]

        for col in range(size - 1, 0, -1):
            other = self.rng.randint(0, col)
            grid[:, [col, other]] = grid[:, [other, col]]

        return grid.astype(np.int32)

    def generate_cages(self, size: int) -> List[Cage]:
        """Partition the board into randomly grown cages."""
        assigned = np.zeros((size, size), dtype=bool)
        cages = []
        for row in range(size):
            for col in range(size):
                if not assigned[row, col]:
                    cages.append(self._grow_cage(assigned, Position(row, col)))
        return cages

    def _grow_cage(self, assigned: np.ndarray, seed_cell: Position) -> Cage:
        """
        Grow one cage from a seed cell.

        Frontier cells take turns: the head cell tries its neighbors in a
        random order, each admitted with probability 1/2, then moves to the
        back of the frontier.
        """
        size = assigned.shape[0]
        max_size = min(size, self._free_region_size(assigned, seed_cell))
        target_size = self.draw_cage_size(max_size)

        assigned[seed_cell.row, seed_cell.col] = True
        cells = [seed_cell]
        frontier: Deque[Position] = deque([seed_cell])

        while len(cells) < target_size:
            row, col = frontier[0]
            directions = [(-1, 0), (0, 1), (1, 0), (0, -1)]
            self.rng.shuffle(directions)

            for d_row, d_col in directions:
                if len(cells) == target_size:
                    break
                admit = self.rng.random() < 0.5
                neighbor = Position(row + d_row, col + d_col)
                if (admit and 0 <= neighbor.row < size and 0 <= neighbor.col < size
                        and not assigned[neighbor.row, neighbor.col]):
                    assigned[neighbor.row, neighbor.col] = True
                    cells.append(neighbor)
                    frontier.append(neighbor)

            frontier.rotate(-1)

        return Cage(cells)

    @staticmethod
    def _free_region_size(assigned: np.ndarray, start: Position) -> int:
        """Size of the unassigned 4-connected region containing start."""
        size = assigned.shape[0]
        visited = assigned.copy()
        visited[start.row, start.col] = True
        queue = deque([start])
        count = 1
        while queue:
            row, col = queue.popleft()
            for n_row, n_col in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
                if 0 <= n_row < size and 0 <= n_col < size and not visited[n_row, n_col]:
                    visited[n_row, n_col] = True
                    queue.append((n_row, n_col))
                    count += 1
        return count

    def draw_cage_size(self, max_size: int) -> int:
        """
        Draw a cage size from the fixed distribution, redrawing while it exceeds max_size.

        Size 1 is always acceptable, so the loop terminates.
        """
        while True:
            chance = self.rng.randint(1, 100)
            cage_size = bisect.bisect_left(CAGE_SIZE_CUMULATIVE_WEIGHTS, chance) + 1
            if cage_size <= max_size:
                return cage_size

    def generate_label(self, values: Sequence[int]) -> Label:
        """
        Pick a random operator for a cage and derive its target.

        Subtraction and division can be rejected; the operator is then drawn
        again. Sum and product never fail, so the loop terminates.
        """
        if len(values) == 1:
            return Label(values[0])

        operators = list(Operator)
        attempts = 0
        while True:
            attempts += 1
            operator = self.rng.choice(operators)
            target = _TARGET_FUNCTIONS[operator](values)
            if target is not None:
                if attempts > 1:
                    logger.debug("Label for %s found after %d attempts", list(values), attempts)
                return Label(target, operator)

    @staticmethod
    def save_to_folder(puzzles: List[MathdokuPuzzle], folder_path: str, prefix: str = "puzzle") -> List[str]:
        """
        Save puzzles to a folder as individual definition files.

        Args:
            puzzles: List of MathdokuPuzzle objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").

        Returns:
            Paths of the written files.
        """
        from ..game.loader import to_text

        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(to_text(puzzle))
            paths.append(file_path)
        return paths
