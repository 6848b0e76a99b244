"""Shared fixtures for the Mathdoku tests."""

import pytest
from mathdoku.game.loader import parse_puzzle

# 3x3 board: a "6+" cage over the top row, every other cell its own cage
SCENARIO_A = ["6+ 1,2,3", "2 4", "3 5", "1 6", "3 7", "1 8", "2 9"]

SCENARIO_A_SOLUTION = [
    [1, 2, 3],
    [2, 3, 1],
    [3, 1, 2],
]


@pytest.fixture
def scenario_a():
    return list(SCENARIO_A)


@pytest.fixture
def scenario_a_solution():
    return [row[:] for row in SCENARIO_A_SOLUTION]


@pytest.fixture
def scenario_a_puzzle():
    return parse_puzzle(SCENARIO_A)


@pytest.fixture
def scenario_a_file(tmp_path):
    path = tmp_path / "scenario.txt"
    path.write_text("\n".join(SCENARIO_A) + "\n", encoding="utf-8")
    return str(path)
