"""Tests for the command-line interface."""

import pytest
from mathdoku.cli import main


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "generate" in capsys.readouterr().out


def test_generate(capsys, tmp_path):
    output = tmp_path / "puzzles"
    main(["generate", "--size", "4", "--count", "2", "--seed", "1", "--output", str(output)])

    out = capsys.readouterr().out
    assert "--- Puzzle 1 (4x4" in out
    assert "--- Puzzle 2 (4x4" in out
    assert "Total puzzles generated: 2" in out
    assert (output / "puzzle_1.txt").exists()
    assert (output / "puzzle_2.txt").exists()


def test_generate_invalid_size(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["generate", "--size", "12"])
    assert exc.value.code == 1
    assert "Error" in capsys.readouterr().out


def test_solve(capsys, scenario_a_file):
    main(["solve", scenario_a_file, "--verbose"])

    out = capsys.readouterr().out
    assert "6+ 1,2,3" in out
    assert "✓ Solved in" in out
    assert "Iterations:" in out
    assert "| 2 | 3 | 1 |" in out


def test_solve_malformed_file(capsys, tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("3+ 1,2\n1 4\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["solve", str(path)])
    assert exc.value.code == 1
    assert "too few" in capsys.readouterr().out


def test_check_solved(capsys, scenario_a_file):
    main(["check", scenario_a_file, "--values", "1 2 3, 2 3 1, 3 1 2"])
    assert "✓ Solved!" in capsys.readouterr().out


def test_check_partial(capsys, scenario_a_file):
    main(["check", scenario_a_file, "--values", "0,0,0,2,3,1,3,1,2"])
    assert "No mistakes so far (3 cells empty)" in capsys.readouterr().out


def test_check_reports_mistakes(capsys, scenario_a_file):
    main(["check", scenario_a_file, "--values", "1 1 3 2 3 1 3 1 2"])

    out = capsys.readouterr().out
    assert "✗ Row 1: duplicates in columns [1, 2]" in out
    assert "✗ Column 2" in out
    assert "✗ Cage 6+ [1, 2, 3]" in out
    assert "Solved" not in out


def test_check_wrong_value_count(capsys, scenario_a_file):
    with pytest.raises(SystemExit):
        main(["check", scenario_a_file, "--values", "1 2 3 4"])
    assert "expected 9 values" in capsys.readouterr().out


def test_check_rejects_non_integer_values(capsys, scenario_a_file):
    with pytest.raises(SystemExit) as exc:
        main(["check", scenario_a_file, "--values", "1 2 3 2 3 1 3 1 b"])
    assert exc.value.code == 1
    assert "integer" in capsys.readouterr().out


def test_check_multi_digit_values(capsys, tmp_path):
    """On a 10x10 board the value 10 fills one cell, not two."""
    path = tmp_path / "ten.txt"
    path.write_text("\n".join(f"1 {cell}" for cell in range(1, 101)), encoding="utf-8")
    values = ["10"] + ["0"] * 99

    main(["check", str(path), "--values", " ".join(values)])

    out = capsys.readouterr().out
    assert "expected" not in out
    assert "✗ Cage 1 [1]: target not reached" in out
