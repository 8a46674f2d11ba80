"""
Search outcome shared by all drivers.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..core.tour import Tour

logger = logging.getLogger(__name__)

# Drift between tracked and recomputed cost tolerated before warning
DRIFT_TOLERANCE = 1e-6


class SearchState(Enum):
    """Driver state machine."""

    RUNNING = "running"
    CONVERGED = "converged"


@dataclass
class SearchResult:
    """
    Outcome of one local search run.

    Attributes:
        strategy: Name of the driver that produced the result
        tour: Final visiting order
        cost: Cost of the final tour
        cost_trace: Costs recorded by the driver (per iteration or per
            temperature level)
        iterations: Number of iterations (or proposals) performed
        converged: True if the driver stopped on its own criterion
            rather than on a budget
        fallbacks: Tabu iterations where every move was forbidden
    """

    strategy: str
    tour: List[int]
    cost: float
    cost_trace: List[float] = field(default_factory=list)
    iterations: int = 0
    converged: bool = False
    fallbacks: int = 0

    @classmethod
    def from_tour(cls, strategy: str, tour: Tour, **kwargs) -> "SearchResult":
        """
        Build a result, checking the tracked cost against a full recomputation.

        Args:
            strategy: Driver name
            tour: Final tour
            **kwargs: Remaining SearchResult fields
        """
        drift = tour.resync()
        if abs(drift) > DRIFT_TOLERANCE:
            logger.warning(f"{strategy}: tracked cost drifted by {drift:.3e}")
        return cls(strategy=strategy, tour=tour.cities, cost=tour.cost, **kwargs)

    def __repr__(self) -> str:
        return (
            f"SearchResult(strategy={self.strategy}, cost={self.cost:.4f}, "
            f"iterations={self.iterations}, converged={self.converged})"
        )
