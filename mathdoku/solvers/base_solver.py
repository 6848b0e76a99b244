"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import threading
import time
import tracemalloc

import numpy as np

from ..core.errors import InternalInvariantViolation
from ..core.puzzle import MathdokuPuzzle


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Mathdoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak memory with tracemalloc (slows the search).
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """
        Ask a running search to give up as soon as possible.

        Safe to call from another thread. A cancelled solver stays cancelled,
        so later calls to solve() return no solution.
        """
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def solve(self, puzzle: MathdokuPuzzle) -> tuple[Optional[np.ndarray], SolverStats]:
        """
        Solve a puzzle in place, with timing and optional memory tracking.

        The search fills cells of the live board while probing. On success the
        solved grid is stored in ``puzzle.solution`` and every cell is reset to
        empty; call ``puzzle.apply_solution()`` to show it.

        Args:
            puzzle: The puzzle to solve.

        Returns:
            Tuple of (solved grid or None, stats).

        Raises:
            InternalInvariantViolation: If the cages are not an exact partition.
        """
        if not puzzle.is_partition():
            raise InternalInvariantViolation("Cages do not partition the board")

        self.stats = SolverStats(algorithm=self.name)

        if self.track_memory:
            tracemalloc.start()

        start_time = time.perf_counter()
        try:
            solved = self._solve(puzzle)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                current, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        if self.cancelled:
            self.stats.extra["cancelled"] = True

        self.stats.solved = solved
        if not solved:
            return None, self.stats

        puzzle.solution = puzzle.board.values.copy()
        puzzle.board.reset_values()
        return puzzle.solution.copy(), self.stats

    @abstractmethod
    def _solve(self, puzzle: MathdokuPuzzle) -> bool:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            puzzle: The puzzle to fill in place.

        Returns:
            True if the board now holds a full valid assignment.
        """
        pass
