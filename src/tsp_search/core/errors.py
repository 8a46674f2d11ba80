"""
Error taxonomy for the TSP local search package.

All errors are raised synchronously at the point of violation and are
never retried internally.
"""


class TSPError(Exception):
    """Base class for every error raised by this package."""


class OutOfRangeError(TSPError, IndexError):
    """A city id lies outside [1, n]."""


class InvalidPositionError(TSPError, IndexError):
    """A tour position lies outside [1, n] or breaks a move's distinctness rule."""


class InvalidTourError(TSPError, ValueError):
    """A supplied tour is not a permutation of the cities 1..n."""


class InvalidParameterError(TSPError, ValueError):
    """A problem matrix or search parameter is invalid."""
