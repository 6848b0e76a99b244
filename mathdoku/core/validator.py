"""Validation of Mathdoku boards against the game rules."""

from __future__ import annotations
from dataclasses import dataclass, field
from math import prod
from typing import Dict, List, Sequence, TYPE_CHECKING
import numpy as np

from .cage import Cage, Label, Operator

if TYPE_CHECKING:
    from .board import MathdokuBoard
    from .puzzle import MathdokuPuzzle


@dataclass
class ValidationReport:
    """
    Every rule violation found on a board.

    Attributes:
        incorrect_rows: Row index -> columns of the cells holding duplicated values.
        incorrect_columns: Column index -> rows of the cells holding duplicated values.
        incorrect_cages: Full cages whose values miss their label.
        complete: True if every cell holds a value.
    """
    incorrect_rows: Dict[int, List[int]] = field(default_factory=dict)
    incorrect_columns: Dict[int, List[int]] = field(default_factory=dict)
    incorrect_cages: List[Cage] = field(default_factory=list)
    complete: bool = False

    @property
    def rows_correct(self) -> bool:
        return not self.incorrect_rows

    @property
    def columns_correct(self) -> bool:
        return not self.incorrect_columns

    @property
    def cages_correct(self) -> bool:
        return not self.incorrect_cages

    @property
    def is_correct(self) -> bool:
        """True if no rule is broken (the board may still have empty cells)."""
        return self.rows_correct and self.columns_correct and self.cages_correct

    @property
    def is_won(self) -> bool:
        return self.is_correct and self.complete


def find_duplicates(line: Sequence[int]) -> List[int]:
    """
    Find the positions of nonzero values that occur more than once.

    Args:
        line: The values of a row or column (0 = empty).

    Returns:
        Sorted indices of every cell involved in a duplicate.
    """
    values = np.asarray(line)
    filled = values[values != 0]
    uniques, counts = np.unique(filled, return_counts=True)
    repeated = uniques[counts > 1]
    if repeated.size == 0:
        return []
    return [int(i) for i in np.flatnonzero(np.isin(values, repeated))]


def _has_duplicate(line: np.ndarray) -> bool:
    filled = line[line != 0]
    return len(filled) != len(np.unique(filled))


def find_incorrect_rows(board: MathdokuBoard, fail_fast: bool = False) -> Dict[int, List[int]]:
    """
    Find rows where two filled cells share a value.

    Args:
        board: The board to check.
        fail_fast: Stop at the first incorrect row.

    Returns:
        Row index -> positions of the duplicated cells in that row.
    """
    incorrect = {}
    for row in range(board.size):
        line = board.get_row(row)
        if _has_duplicate(line):
            incorrect[row] = find_duplicates(line)
            if fail_fast:
                break
    return incorrect


def find_incorrect_columns(board: MathdokuBoard, fail_fast: bool = False) -> Dict[int, List[int]]:
    """Column counterpart of find_incorrect_rows."""
    incorrect = {}
    for col in range(board.size):
        line = board.get_col(col)
        if _has_duplicate(line):
            incorrect[col] = find_duplicates(line)
            if fail_fast:
                break
    return incorrect


def is_cage_satisfied(values: Sequence[int], label: Label) -> bool:
    """
    Check whether the values of a full cage reach the label's target.

    Subtraction accepts any cell as the minuend: the cage is correct if
    ``sum - 2 * v == ±target`` for some value v. Division sorts the values
    and requires ``target * (all but the largest) == largest``.
    """
    target = label.target
    operator = label.operator

    if operator is None:
        return len(values) == 1 and values[0] == target

    if operator is Operator.ADD:
        return sum(values) == target

    if operator is Operator.SUBTRACT:
        total = sum(values)
        return any(abs(total - 2 * v) == abs(target) for v in values)

    if operator is Operator.MULTIPLY:
        return prod(values) == target

    if operator is Operator.DIVIDE:
        if target == 0:
            return False
        ordered = sorted(values)
        return target * prod(ordered[:-1]) == ordered[-1]

    return False


def find_incorrect_cages(puzzle: MathdokuPuzzle, fail_fast: bool = False) -> List[Cage]:
    """
    Find full cages whose values do not satisfy their label.

    Cages with an empty cell, and cages without a label, are never reported.
    """
    incorrect = []
    for cage in puzzle.cages:
        label = puzzle.label_for(cage)
        if label is None:
            continue
        values = puzzle.cage_values(cage)
        if 0 in values:
            continue
        if not is_cage_satisfied(values, label):
            incorrect.append(cage)
            if fail_fast:
                break
    return incorrect


def are_rows_correct(board: MathdokuBoard) -> bool:
    return not find_incorrect_rows(board, fail_fast=True)


def are_columns_correct(board: MathdokuBoard) -> bool:
    return not find_incorrect_columns(board, fail_fast=True)


def are_cages_correct(puzzle: MathdokuPuzzle) -> bool:
    return not find_incorrect_cages(puzzle, fail_fast=True)


def is_consistent(puzzle: MathdokuPuzzle) -> bool:
    """
    Fail-fast check that no rule is broken by the values entered so far.

    Args:
        puzzle: The puzzle to check.

    Returns:
        True if rows, columns and full cages are all correct.
    """
    return (
        are_rows_correct(puzzle.board)
        and are_columns_correct(puzzle.board)
        and are_cages_correct(puzzle)
    )


def validate(puzzle: MathdokuPuzzle) -> ValidationReport:
    """
    Collect every violation on the board.

    Args:
        puzzle: The puzzle to check.

    Returns:
        A ValidationReport listing incorrect rows, columns and cages.
    """
    return ValidationReport(
        incorrect_rows=find_incorrect_rows(puzzle.board),
        incorrect_columns=find_incorrect_columns(puzzle.board),
        incorrect_cages=find_incorrect_cages(puzzle),
        complete=puzzle.board.is_full(),
    )


def is_won(puzzle: MathdokuPuzzle) -> bool:
    """Check the win condition: every cell filled and no rule broken."""
    return puzzle.board.is_full() and is_consistent(puzzle)
