"""
Steepest-descent hill climbing.

Every iteration scans the whole neighbourhood and applies the best
improving move. The search converges at a local optimum or stops at
the iteration cap.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from ..core.errors import InvalidParameterError
from ..core.evaluator import MoveEvaluator
from ..core.problem import Problem
from ..core.tour import Move, MoveKind, Tour, as_tour
from .result import SearchResult, SearchState

logger = logging.getLogger(__name__)

# A move must lower the cost by more than this to count as improving
IMPROVEMENT_EPS = 1e-9


@dataclass
class HillClimbParams:
    """
    Parameters for hill climbing.

    Attributes:
        max_iter: Iteration cap (number of applied moves)
        kind: Neighbourhood move type
    """

    max_iter: int = 10_000
    kind: MoveKind = MoveKind.FLIP

    def __post_init__(self) -> None:
        if not isinstance(self.max_iter, numbers.Integral) or self.max_iter < 0:
            raise InvalidParameterError(
                f"max_iter must be a non-negative integer, got {self.max_iter}"
            )


def run_hill_climbing(tour: Tour, params: HillClimbParams) -> SearchResult:
    """
    Run steepest descent on a tour in place.

    Args:
        tour: Working tour, owned by this run
        params: Hill climbing parameters

    Returns:
        SearchResult; converged is False only when max_iter was hit
    """
    evaluator = MoveEvaluator(params.kind)
    state = SearchState.RUNNING
    capped = False
    trace = [tour.cost]
    iteration = 0

    logger.info(
        f"Hill climbing start: n={tour.n}, cost={tour.cost:.4f}, "
        f"max_iter={params.max_iter}"
    )

    while state is SearchState.RUNNING:
        if iteration >= params.max_iter:
            logger.debug("Hill climbing stopped at iteration cap")
            state = SearchState.CONVERGED
            capped = True
            break

        best = evaluator.best_move(tour)
        if best is None or best[2] >= -IMPROVEMENT_EPS:
            state = SearchState.CONVERGED
            break

        i, j, _ = best
        tour.apply(Move(params.kind, i, j))
        iteration += 1
        trace.append(tour.cost)
        logger.debug(f"Iteration {iteration}: move ({i}, {j}), cost={tour.cost:.4f}")

    result = SearchResult.from_tour(
        "hill_climbing",
        tour,
        cost_trace=trace,
        iterations=iteration,
        converged=not capped,
    )
    logger.info(
        f"Hill climbing done: cost={result.cost:.4f}, iterations={iteration}, "
        f"converged={result.converged}"
    )
    return result


def hill_climb(
    problem: Problem,
    tour: Union[Tour, Sequence[int]],
    max_iter: int = 10_000,
    *,
    kind: MoveKind = MoveKind.FLIP,
) -> Tuple[list, float]:
    """
    Improve a tour by steepest descent.

    Args:
        problem: The problem instance
        tour: Starting tour (left untouched)
        max_iter: Iteration cap
        kind: Neighbourhood move type

    Returns:
        (final tour, final cost)
    """
    params = HillClimbParams(max_iter=max_iter, kind=kind)
    result = run_hill_climbing(as_tour(problem, tour), params)
    return result.tour, result.cost
