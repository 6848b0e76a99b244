"""Mathdoku puzzle generator, validator and backtracking solver."""

from .core import (
    MathdokuBoard,
    MathdokuPuzzle,
    Cage,
    Label,
    Operator,
    Position,
    MathdokuError,
    ConfigurationError,
    UnsolvableError,
    InternalInvariantViolation,
)
from .generator import MathdokuGenerator
from .solvers import BacktrackingSolver
from .game import EditHistory, GameSession

__version__ = "1.0.0"
