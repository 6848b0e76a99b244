"""Generator module for creating Mathdoku puzzles."""

from .generator import MathdokuGenerator, CAGE_SIZE_CUMULATIVE_WEIGHTS

__all__ = ["MathdokuGenerator", "CAGE_SIZE_CUMULATIVE_WEIGHTS"]
