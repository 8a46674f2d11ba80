"""Core components: Problem, Tour, moves, MoveEvaluator and errors."""

from .errors import (
    TSPError,
    OutOfRangeError,
    InvalidPositionError,
    InvalidTourError,
    InvalidParameterError,
)
from .problem import Problem, distance, size, random_tour
from .tour import (
    Move,
    MoveKind,
    Tour,
    full_cost,
    is_valid,
    delta_swap,
    delta_flip,
    swap,
    flip,
    as_tour,
)
from .evaluator import MoveEvaluator

__all__ = [
    "TSPError",
    "OutOfRangeError",
    "InvalidPositionError",
    "InvalidTourError",
    "InvalidParameterError",
    "Problem",
    "distance",
    "size",
    "random_tour",
    "Move",
    "MoveKind",
    "Tour",
    "full_cost",
    "is_valid",
    "delta_swap",
    "delta_flip",
    "swap",
    "flip",
    "as_tour",
    "MoveEvaluator",
]
