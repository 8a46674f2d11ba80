"""
Tabu search over segment reversals.

Every iteration applies the best admissible flip, improving or not. The
two endpoint positions of the applied move become tabu for the next
ntabu iterations. When every move is tabu, the iteration ignores tabu
status instead of stalling.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from ..core.errors import InvalidParameterError
from ..core.evaluator import MoveEvaluator
from ..core.problem import Problem
from ..core.tour import Move, MoveKind, Tour, as_tour
from .result import SearchResult

logger = logging.getLogger(__name__)


@dataclass
class TabuParams:
    """
    Parameters for tabu search.

    Attributes:
        ntabu: Tabu horizon, iterations a moved position stays forbidden
        niter: Total iteration budget
    """

    ntabu: int = 5
    niter: int = 200

    def __post_init__(self) -> None:
        if not isinstance(self.ntabu, numbers.Integral) or self.ntabu <= 0:
            raise InvalidParameterError(
                f"ntabu must be a positive integer, got {self.ntabu}"
            )
        if not isinstance(self.niter, numbers.Integral) or self.niter < 0:
            raise InvalidParameterError(
                f"niter must be a non-negative integer, got {self.niter}"
            )


class TabuList:
    """
    Position -> expiry iteration.

    A position with expiry e is forbidden as a move endpoint in every
    iteration t <= e.
    """

    def __init__(self, ntabu: int):
        self.ntabu = ntabu
        self._expiry: Dict[int, int] = {}

    def is_tabu(self, position: int, t: int) -> bool:
        return self._expiry.get(position, 0) >= t

    def admissible(self, t: int):
        """Predicate over (i, j) for iteration t."""
        return lambda i, j: not (self.is_tabu(i, t) or self.is_tabu(j, t))

    def add(self, position: int, t: int) -> None:
        self._expiry[position] = t + self.ntabu

    def expiry(self, position: int) -> int:
        """Stored expiry, 0 for a position never moved."""
        return self._expiry.get(position, 0)

    def __len__(self) -> int:
        return len(self._expiry)


def run_tabu_search(tour: Tour, params: TabuParams) -> SearchResult:
    """
    Run tabu search on a tour in place.

    Args:
        tour: Working tour, owned by this run
        params: Tabu parameters

    Returns:
        SearchResult with the final tour and the cost after every iteration
    """
    evaluator = MoveEvaluator(MoveKind.FLIP)
    tabu = TabuList(params.ntabu)
    trace: List[float] = []
    fallbacks = 0

    logger.info(
        f"Tabu search start: n={tour.n}, cost={tour.cost:.4f}, "
        f"ntabu={params.ntabu}, niter={params.niter}"
    )

    for t in range(1, params.niter + 1):
        best = evaluator.best_move(tour, tabu.admissible(t))
        if best is None:
            fallbacks += 1
            logger.debug(f"Iteration {t}: every move is tabu, ignoring tabu status")
            best = evaluator.best_move(tour)

        i, j, _ = best
        tour.apply(Move(MoveKind.FLIP, i, j))
        tabu.add(i, t)
        tabu.add(j, t)
        trace.append(tour.cost)

        if t % 50 == 0:
            logger.debug(f"Iteration {t}/{params.niter}: cost={tour.cost:.4f}")

    result = SearchResult.from_tour(
        "tabu_search",
        tour,
        cost_trace=trace,
        iterations=params.niter,
        converged=False,
        fallbacks=fallbacks,
    )
    logger.info(
        f"Tabu search done: cost={result.cost:.4f}, best seen="
        f"{min(trace, default=result.cost):.4f}, fallbacks={fallbacks}"
    )
    return result


def tabu_search(
    problem: Problem,
    tour: Union[Tour, Sequence[int]],
    ntabu: int,
    niter: int,
) -> Tuple[list, float, List[float]]:
    """
    Explore the flip neighbourhood with a position-based tabu list.

    Args:
        problem: The problem instance
        tour: Starting tour (left untouched)
        ntabu: Tabu horizon
        niter: Iteration budget

    Returns:
        (final tour, final cost, cost after each iteration)
    """
    params = TabuParams(ntabu=ntabu, niter=niter)
    result = run_tabu_search(as_tour(problem, tour), params)
    return result.tour, result.cost, result.cost_trace
