"""
Strategy dispatch for the local search drivers.

The three drivers share the Tour/Move interface; this module picks one
by tag, supplies a random start when none is given, and runs independent
restarts over the same read-only problem.
"""

import logging
import random
from enum import Enum
from typing import Optional, Sequence, Union

from ..core.errors import InvalidParameterError
from ..core.problem import Problem, random_tour
from ..core.tour import Tour, as_tour
from .annealing import AnnealingParams, run_annealing
from .hill_climbing import HillClimbParams, run_hill_climbing
from .result import SearchResult
from .tabu import TabuParams, run_tabu_search

logger = logging.getLogger(__name__)


class Strategy(Enum):
    """
    Local search strategy.

    HILL_CLIMBING: deterministic best improvement
    SIMULATED_ANNEALING: stochastic acceptance with geometric cooling
    TABU: best admissible move with a forbidden-position horizon
    """

    HILL_CLIMBING = "hc"
    SIMULATED_ANNEALING = "sa"
    TABU = "tabu"


_PARAMS = {
    Strategy.HILL_CLIMBING: HillClimbParams,
    Strategy.SIMULATED_ANNEALING: AnnealingParams,
    Strategy.TABU: TabuParams,
}


def default_params(strategy: Strategy):
    """Default parameter object for a strategy."""
    return _PARAMS[strategy]()


def search(
    problem: Problem,
    tour: Optional[Union[Tour, Sequence[int]]] = None,
    strategy: Strategy = Strategy.HILL_CLIMBING,
    params=None,
    *,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Run one local search.

    Args:
        problem: The problem instance
        tour: Starting tour; a random permutation if None
        strategy: Which driver to run
        params: Parameters matching the strategy (defaults if None)
        rng: Random number generator for the start and for annealing

    Returns:
        SearchResult of the driver

    Raises:
        InvalidParameterError: If params do not match the strategy
    """
    try:
        strategy = Strategy(strategy)
    except ValueError as exc:
        raise InvalidParameterError(f"unknown strategy {strategy!r}") from exc
    if rng is None:
        rng = random.Random()
    if params is None:
        params = default_params(strategy)
    if not isinstance(params, _PARAMS[strategy]):
        raise InvalidParameterError(
            f"{strategy.name} expects {_PARAMS[strategy].__name__}, "
            f"got {type(params).__name__}"
        )

    start = as_tour(problem, random_tour(problem, rng) if tour is None else tour)

    if strategy is Strategy.HILL_CLIMBING:
        return run_hill_climbing(start, params)
    if strategy is Strategy.SIMULATED_ANNEALING:
        return run_annealing(start, params, rng=rng)
    return run_tabu_search(start, params)


def multi_start(
    problem: Problem,
    strategy: Strategy = Strategy.HILL_CLIMBING,
    params=None,
    *,
    starts: int = 5,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Best result over independent random restarts.

    Args:
        problem: The problem instance, shared by every restart
        strategy: Which driver to run
        params: Parameters matching the strategy
        starts: Number of restarts
        rng: Random number generator

    Returns:
        The lowest-cost SearchResult
    """
    if starts < 1:
        raise InvalidParameterError(f"starts must be at least 1, got {starts}")
    if rng is None:
        rng = random.Random()

    best: Optional[SearchResult] = None
    for k in range(starts):
        result = search(problem, None, strategy, params, rng=rng)
        logger.debug(f"Restart {k + 1}/{starts}: cost={result.cost:.4f}")
        if best is None or result.cost < best.cost:
            best = result
    return best
