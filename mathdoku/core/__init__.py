"""Core module for Mathdoku board representation and validation."""

from .board import MathdokuBoard, Side, DEFAULT_SIZE, MIN_SIZE, MAX_SIZE
from .cage import Cage, Label, Operator, Position
from .errors import MathdokuError, ConfigurationError, UnsolvableError, InternalInvariantViolation
from .puzzle import MathdokuPuzzle
from .validator import ValidationReport, is_cage_satisfied, is_consistent, is_won, validate

__all__ = [
    "MathdokuBoard",
    "Side",
    "DEFAULT_SIZE",
    "MIN_SIZE",
    "MAX_SIZE",
    "Cage",
    "Label",
    "Operator",
    "Position",
    "MathdokuError",
    "ConfigurationError",
    "UnsolvableError",
    "InternalInvariantViolation",
    "MathdokuPuzzle",
    "ValidationReport",
    "is_cage_satisfied",
    "is_consistent",
    "is_won",
    "validate",
]
