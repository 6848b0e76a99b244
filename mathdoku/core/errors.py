"""Exception types raised by the Mathdoku engine."""


class MathdokuError(Exception):
    """Base class for all puzzle errors."""


class ConfigurationError(MathdokuError):
    """The puzzle definition is malformed (bad text, bad cages, bad coverage)."""


class UnsolvableError(MathdokuError):
    """A structurally valid puzzle has no satisfying assignment."""


class InternalInvariantViolation(MathdokuError):
    """The cage set handed to the solver is not an exact partition of the board."""
