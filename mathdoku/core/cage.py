"""Cages, positions and cage labels."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Iterable, Iterator, List, NamedTuple, Optional, Set


class Position(NamedTuple):
    """A (row, column) pair, 0-indexed."""
    row: int
    col: int


class Operator(Enum):
    """Arithmetic operators a cage label can carry."""
    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        """
        Look up an operator by its canonical symbol or an ASCII alias.

        Raises:
            ValueError: If the symbol is not a known operator.
        """
        try:
            return _OPERATOR_SYMBOLS[symbol]
        except KeyError:
            raise ValueError(f"Unknown operator {symbol!r}") from None


_OPERATOR_SYMBOLS = {
    "+": Operator.ADD,
    "−": Operator.SUBTRACT,
    "-": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "X": Operator.MULTIPLY,
    "*": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
    "/": Operator.DIVIDE,
}


@dataclass(frozen=True)
class Label:
    """
    A parsed cage label: ``[target][operator]``.

    The operator is None only for single-cell cages, in which case the
    target is the value of that cell.
    """
    target: int
    operator: Optional[Operator] = None

    @classmethod
    def parse(cls, text: str) -> Label:
        """
        Parse label text such as ``"6+"``, ``"3-"``, ``"8÷"`` or ``"4"``.

        Raises:
            ValueError: If the text has no integer target or an unknown operator.
        """
        return _parse_label(text.strip())

    def __str__(self) -> str:
        if self.operator is None:
            return str(self.target)
        return f"{self.target}{self.operator.symbol}"


@lru_cache(maxsize=1024)
def _parse_label(text: str) -> Label:
    digits = text
    operator = None
    if text and not text[-1].isdecimal():
        operator = Operator.from_symbol(text[-1])
        digits = text[:-1]
    if not digits.isdecimal():
        raise ValueError(f"Label {text!r} has no integer target")
    return Label(int(digits), operator)


@dataclass
class Cage:
    """A 4-connected group of cells sharing one arithmetic constraint."""
    cells: List[Position] = field(default_factory=list)

    @classmethod
    def from_cells(cls, cells: Iterable[tuple]) -> Cage:
        return cls([Position(int(r), int(c)) for r, c in cells])

    @property
    def anchor(self) -> Position:
        """The row-major-first cell, which carries the cage label."""
        return min(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.cells)

    def __contains__(self, position: object) -> bool:
        return position in self.cells

    def is_connected(self) -> bool:
        """Check that every cell is reachable from every other through shared edges."""
        if not self.cells:
            return False
        members: Set[Position] = set(self.cells)
        start = self.cells[0]
        seen = {start}
        queue = [start]
        while queue:
            row, col = queue.pop()
            for neighbor in (Position(row - 1, col), Position(row + 1, col),
                             Position(row, col - 1), Position(row, col + 1)):
                if neighbor in members and neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return len(seen) == len(members)
