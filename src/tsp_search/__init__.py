"""
TSP Local Search

Incremental local-search heuristics for the Traveling Salesman Problem:
O(1) swap and segment-reversal deltas, steepest-descent hill climbing,
simulated annealing and tabu search.
"""

from .core.errors import (
    TSPError,
    OutOfRangeError,
    InvalidPositionError,
    InvalidTourError,
    InvalidParameterError,
)
from .core.problem import Problem, distance, size, random_tour
from .core.tour import (
    Move,
    MoveKind,
    Tour,
    full_cost,
    is_valid,
    delta_swap,
    delta_flip,
    swap,
    flip,
)
from .core.evaluator import MoveEvaluator
from .solvers import (
    SearchResult,
    hill_climb,
    simulated_anneal,
    tabu_search,
    Strategy,
    search,
    multi_start,
    HillClimbParams,
    AnnealingParams,
    TabuParams,
)

__version__ = "1.0.0"

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
    "MoveEvaluator",
    "SearchResult",
    "hill_climb",
    "simulated_anneal",
    "tabu_search",
    "Strategy",
    "search",
    "multi_start",
    "HillClimbParams",
    "AnnealingParams",
    "TabuParams",
]
