"""Unit tests for rule validation."""

import pytest
import numpy as np
from mathdoku.core.board import MathdokuBoard
from mathdoku.core.cage import Label
from mathdoku.core.validator import (
    find_duplicates,
    find_incorrect_rows,
    find_incorrect_columns,
    find_incorrect_cages,
    is_cage_satisfied,
    is_consistent,
    is_won,
    validate,
)
from mathdoku.game.loader import parse_puzzle


def five_by_five_with_subtraction():
    """A 5x5 puzzle with a "3-" cage over cells 1 and 2 and singles elsewhere."""
    lines = ["3- 1,2"] + [f"1 {cell}" for cell in range(3, 26)]
    return parse_puzzle(lines)


class TestRowsAndColumns:
    """Tests for duplicate detection."""

    def test_find_duplicates(self):
        assert find_duplicates([3, 5, 3, 0]) == [0, 2]
        assert find_duplicates([3, 5, 1, 0]) == []
        assert find_duplicates([0, 0, 0]) == []
        assert find_duplicates([2, 2, 1, 2]) == [0, 1, 3]

    def test_row_with_duplicate(self):
        """A row [3, 5, 3, 0] is incorrect with the duplicate at 0 and 2."""
        grid = np.zeros((4, 4), dtype=np.int32)
        grid[0] = [3, 5, 3, 0]
        board = MathdokuBoard(4, grid)

        assert find_incorrect_rows(board) == {0: [0, 2]}

        board.clear(0, 2)
        assert find_incorrect_rows(board) == {}

    def test_columns(self):
        board = MathdokuBoard.from_2d_list([
            [1, 2, 3],
            [1, 3, 0],
            [2, 3, 0],
        ])
        assert find_incorrect_columns(board) == {0: [0, 1], 1: [1, 2]}
        assert len(find_incorrect_columns(board, fail_fast=True)) == 1

    def test_fail_fast_stops_at_first_row(self):
        board = MathdokuBoard.from_2d_list([
            [1, 1, 0],
            [2, 2, 0],
            [0, 0, 0],
        ])
        assert find_incorrect_rows(board) == {0: [0, 1], 1: [0, 1]}
        assert find_incorrect_rows(board, fail_fast=True) == {0: [0, 1]}

    def test_empty_cells_never_conflict(self):
        board = MathdokuBoard(4)
        assert find_incorrect_rows(board) == {}
        assert find_incorrect_columns(board) == {}


class TestCageArithmetic:
    """Tests for is_cage_satisfied."""

    def test_single_cell(self):
        assert is_cage_satisfied([4], Label(4))
        assert not is_cage_satisfied([3], Label(4))
        assert not is_cage_satisfied([4, 4], Label(4))

    def test_sum(self):
        assert is_cage_satisfied([1, 2, 3], Label.parse("6+"))
        assert not is_cage_satisfied([1, 2, 4], Label.parse("6+"))

    def test_subtraction(self):
        """Values 5 and 2 reach "3-"; 6 and 2 (difference 4) do not."""
        label = Label.parse("3-")
        assert is_cage_satisfied([5, 2], label)
        assert is_cage_satisfied([2, 5], label)
        assert not is_cage_satisfied([6, 2], label)

    def test_subtraction_any_cell_can_be_largest(self):
        # 6 - 1 - 2 = 3
        assert is_cage_satisfied([1, 6, 2], Label.parse("3-"))
        assert is_cage_satisfied([3, 2, 1], Label.parse("0-"))

    def test_product(self):
        assert is_cage_satisfied([2, 3, 4], Label.parse("24×"))
        assert not is_cage_satisfied([2, 3, 3], Label.parse("24×"))

    def test_division(self):
        """Values 8 and 1 reach "8÷"; 3 and 1 do not."""
        label = Label.parse("8÷")
        assert is_cage_satisfied([8, 1], label)
        assert is_cage_satisfied([1, 8], label)
        assert not is_cage_satisfied([3, 1], label)

    def test_division_chain(self):
        assert is_cage_satisfied([8, 4, 2], Label.parse("1÷"))
        assert is_cage_satisfied([2, 6], Label.parse("3÷"))
        assert not is_cage_satisfied([2, 6], Label.parse("0÷"))


class TestCageValidation:
    """Tests for cage checks on a puzzle."""

    def test_subtraction_cage_on_board(self):
        puzzle = five_by_five_with_subtraction()
        puzzle.board.set(0, 0, 5)
        puzzle.board.set(0, 1, 2)
        assert find_incorrect_cages(puzzle) == []

        puzzle.board.set(0, 1, 1)
        incorrect = find_incorrect_cages(puzzle)
        assert len(incorrect) == 1
        assert incorrect[0] is puzzle.cages[0]

    def test_partial_cage_is_not_checked(self):
        puzzle = five_by_five_with_subtraction()
        puzzle.board.set(0, 0, 5)
        assert find_incorrect_cages(puzzle) == []

    def test_collect_all_reports_every_cage(self):
        puzzle = five_by_five_with_subtraction()
        # Singles labelled 1 holding other values
        puzzle.board.set(0, 2, 2)
        puzzle.board.set(0, 3, 3)
        assert len(find_incorrect_cages(puzzle)) == 2
        assert len(find_incorrect_cages(puzzle, fail_fast=True)) == 1


class TestReports:
    """Tests for the combined checks."""

    def test_solved_scenario_reports_nothing(self, scenario_a_puzzle, scenario_a_solution):
        puzzle = scenario_a_puzzle
        puzzle.board.values = np.array(scenario_a_solution, dtype=np.int32)

        report = validate(puzzle)
        assert report.incorrect_rows == {}
        assert report.incorrect_columns == {}
        assert report.incorrect_cages == []
        assert report.complete
        assert report.is_won
        assert is_consistent(puzzle)
        assert is_won(puzzle)

    def test_incomplete_board_is_not_won(self, scenario_a_puzzle):
        puzzle = scenario_a_puzzle
        puzzle.board.set(0, 0, 1)

        report = validate(puzzle)
        assert report.is_correct
        assert not report.is_won
        assert is_consistent(puzzle)
        assert not is_won(puzzle)

    def test_report_lists_all_mistakes(self, scenario_a_puzzle):
        puzzle = scenario_a_puzzle
        puzzle.board.values = np.array([
            [1, 1, 3],
            [2, 3, 1],
            [3, 1, 2],
        ], dtype=np.int32)

        report = validate(puzzle)
        assert report.incorrect_rows == {0: [0, 1]}
        assert report.incorrect_columns == {1: [0, 2]}
        assert report.incorrect_cages == [puzzle.cages[0]]
        assert not report.is_won
        assert not is_consistent(puzzle)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
