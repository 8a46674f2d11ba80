"""
Simulated annealing over segment reversals.

One random flip is proposed per step and accepted with the Metropolis
criterion. After kT proposals the temperature is multiplied by r; the
search stops once it falls below Tmin.

The returned tour is the last accepted state. No best-ever incumbent is
kept; callers that need one must track it themselves.
"""

import logging
import math
import numbers
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from ..core.errors import InvalidParameterError
from ..core.evaluator import MoveEvaluator
from ..core.problem import Problem
from ..core.tour import Move, MoveKind, Tour, as_tour
from .result import SearchResult

logger = logging.getLogger(__name__)


@dataclass
class AnnealingParams:
    """
    Parameters for simulated annealing.

    Attributes:
        Tmax: Initial temperature (> 0)
        Tmin: Stopping temperature (0 < Tmin < Tmax)
        r: Cooling ratio in (0, 1)
        kT: Proposals per temperature level
    """

    Tmax: float = 10.0
    Tmin: float = 1e-3
    r: float = 0.95
    kT: int = 100

    def __post_init__(self) -> None:
        for name in ("Tmax", "Tmin", "r"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameterError(
                    f"{name} must be finite, got {getattr(self, name)}"
                )
        if not self.Tmax > 0:
            raise InvalidParameterError(f"Tmax must be positive, got {self.Tmax}")
        if not 0 < self.Tmin < self.Tmax:
            raise InvalidParameterError(
                f"Tmin must be in (0, Tmax={self.Tmax}), got {self.Tmin}"
            )
        if not 0 < self.r < 1:
            raise InvalidParameterError(f"r must be in (0, 1), got {self.r}")
        if not isinstance(self.kT, numbers.Integral) or self.kT <= 0:
            raise InvalidParameterError(f"kT must be a positive integer, got {self.kT}")


def accept(delta: float, T: float, rng: random.Random) -> bool:
    """Metropolis criterion."""
    if delta <= 0:
        return True
    return rng.random() < math.exp(-delta / T)


def run_annealing(
    tour: Tour,
    params: AnnealingParams,
    *,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Run simulated annealing on a tour in place.

    Args:
        tour: Working tour, owned by this run
        params: Annealing parameters
        rng: Random number generator

    Returns:
        SearchResult with the last accepted tour and one trace entry per
        temperature level
    """
    if rng is None:
        rng = random.Random()

    evaluator = MoveEvaluator(MoveKind.FLIP)
    T = params.Tmax
    trace = []
    proposals = 0
    accepted = 0

    logger.info(
        f"Simulated annealing start: n={tour.n}, cost={tour.cost:.4f}, "
        f"Tmax={params.Tmax}, Tmin={params.Tmin}, r={params.r}, kT={params.kT}"
    )

    while T >= params.Tmin:
        for _ in range(params.kT):
            i, j, delta = evaluator.random_move(tour, rng)
            proposals += 1
            if accept(delta, T, rng):
                tour.apply(Move(MoveKind.FLIP, i, j))
                accepted += 1
        trace.append(tour.cost)
        logger.debug(f"T={T:.4g}: cost={tour.cost:.4f}, accepted={accepted}/{proposals}")
        T *= params.r

    result = SearchResult.from_tour(
        "simulated_annealing",
        tour,
        cost_trace=trace,
        iterations=proposals,
        converged=True,
    )
    logger.info(
        f"Simulated annealing done: cost={result.cost:.4f}, "
        f"levels={len(trace)}, accepted={accepted}/{proposals}"
    )
    return result


def simulated_anneal(
    problem: Problem,
    tour: Union[Tour, Sequence[int]],
    Tmax: float,
    Tmin: float,
    r: float,
    kT: int,
    *,
    rng: Optional[random.Random] = None,
) -> Tuple[list, float]:
    """
    Improve a tour by simulated annealing.

    Args:
        problem: The problem instance
        tour: Starting tour (left untouched)
        Tmax: Initial temperature
        Tmin: Stopping temperature
        r: Cooling ratio
        kT: Proposals per temperature level
        rng: Random number generator

    Returns:
        (last accepted tour, its cost)
    """
    params = AnnealingParams(Tmax=Tmax, Tmin=Tmin, r=r, kT=kT)
    result = run_annealing(as_tour(problem, tour), params, rng=rng)
    return result.tour, result.cost
