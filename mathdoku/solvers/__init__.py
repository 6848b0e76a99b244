"""Solvers module for Mathdoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
]
