"""Local search drivers: hill climbing, simulated annealing and tabu search."""

from .result import SearchResult, SearchState
from .hill_climbing import hill_climb, run_hill_climbing, HillClimbParams
from .annealing import simulated_anneal, run_annealing, AnnealingParams
from .tabu import tabu_search, run_tabu_search, TabuParams, TabuList
from .search import Strategy, search, multi_start, default_params

__all__ = [
    "SearchResult",
    "SearchState",
    "hill_climb",
    "run_hill_climbing",
    "HillClimbParams",
    "simulated_anneal",
    "run_annealing",
    "AnnealingParams",
    "tabu_search",
    "run_tabu_search",
    "TabuParams",
    "TabuList",
    "Strategy",
    "search",
    "multi_start",
    "default_params",
]
