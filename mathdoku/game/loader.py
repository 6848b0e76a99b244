"""
Reading and writing the text puzzle definition format.

One cage per line::

    <label> <cellId>[,<cellId>...]

``cellId`` is a 1-based row-major index into the N x N board and N is the
integer square root of the largest id. ``label`` is a target optionally
followed by one of ``+ − × ÷`` (ASCII ``- x * /`` are accepted too).
"""

from __future__ import annotations
import logging
from math import isqrt
from typing import Iterable, List, Tuple

from ..core.cage import Cage, Label, Position
from ..core.errors import ConfigurationError
from ..core.puzzle import MathdokuPuzzle

logger = logging.getLogger(__name__)


def _split_line(line: str) -> Tuple[str, List[int]]:
    """Split a definition line into its label text and cell ids."""
    if " " not in line:
        raise ConfigurationError(f"Incorrect file configuration: label could not be found in {line!r}")

    label_text, cell_text = line.split(" ", 1)
    cell_ids = []
    for token in cell_text.split(","):
        token = token.strip()
        if not token.isdecimal():
            raise ConfigurationError(
                f"Incorrect file configuration: cell number must be an integer, got {token!r}"
            )
        cell_ids.append(int(token))
    return label_text, cell_ids


def _board_size(largest_cell: int) -> int:
    size = isqrt(largest_cell)
    if size == 0 or size * size != largest_cell:
        raise ConfigurationError(
            f"Incorrect file configuration: the board must be a square, largest cell is {largest_cell}"
        )
    return size


def parse_puzzle(lines: Iterable[str]) -> MathdokuPuzzle:
    """
    Build a puzzle from definition lines.

    Blank lines are ignored. The returned puzzle has cages, labels and walls
    set but no solution; solving it is the caller's job.

    Args:
        lines: The definition, one cage per line.

    Returns:
        The parsed MathdokuPuzzle.

    Raises:
        ConfigurationError: If the text is malformed, a cage is not connected,
            two cages overlap or the cages leave cells uncovered.
    """
    stripped = [line.strip() for line in lines]
    stripped = [line for line in stripped if line]
    if not stripped:
        raise ConfigurationError("Incorrect file configuration: the file is empty")

    definitions = [_split_line(line) for line in stripped]
    size = _board_size(max(max(cell_ids) for _, cell_ids in definitions))

    puzzle = MathdokuPuzzle(size)
    cages = []
    covered = set()

    for label_text, cell_ids in definitions:
        if 0 in cell_ids:
            raise ConfigurationError("Incorrect file configuration: cell numbers start at 1")

        cage = Cage([Position(*divmod(cell_id - 1, size)) for cell_id in cell_ids])
        if not cage.is_connected():
            raise ConfigurationError(f"Cage {cell_ids} is not connected")
        if len(set(cage.cells)) != len(cage.cells) or covered.intersection(cage.cells):
            raise ConfigurationError(f"Cage {cell_ids} overlaps another cage")
        covered.update(cage.cells)

        try:
            label = Label.parse(label_text)
        except ValueError as e:
            raise ConfigurationError(f"Incorrect file configuration: {e}") from e
        if label.operator is None and len(cage) > 1:
            raise ConfigurationError(f"Cage {cell_ids} has several cells but no operator")

        # The label goes on the first cell listed
        first = cage.cells[0]
        puzzle.board.set_label(first.row, first.col, str(label))
        cages.append(cage)

    if len(covered) != size * size:
        raise ConfigurationError("Incorrect file configuration: the board has too few cells")

    puzzle.set_cages(cages)
    logger.debug("Parsed %dx%d puzzle with %d cages", size, size, len(cages))
    return puzzle


def load_puzzle_file(path: str) -> MathdokuPuzzle:
    """Read a definition file and parse it."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_puzzle(f.read().splitlines())


def to_text(puzzle: MathdokuPuzzle) -> str:
    """Render a puzzle in the definition format, anchor cell first on each line."""
    lines = []
    size = puzzle.size
    for cage in puzzle.cages:
        label = puzzle.label_for(cage)
        cells = sorted(cage.cells)
        cell_ids = ",".join(str(row * size + col + 1) for row, col in cells)
        lines.append(f"{label} {cell_ids}")
    return "\n".join(lines) + "\n"
