"""
Move evaluator shared by the search drivers.

Enumerates the neighbourhood of a tour together with each move's cost
delta. Deltas are computed from the current tour only; no candidate tour
is ever materialized.
"""

import random
from typing import Callable, Iterator, Optional, Tuple

from .tour import MoveKind, Tour, delta_flip, delta_swap

ScoredMove = Tuple[int, int, float]


class MoveEvaluator:
    """
    Scores every move of one kind for a given tour.

    Attributes:
        kind: Neighbourhood used (FLIP by default)
    """

    def __init__(self, kind: MoveKind = MoveKind.FLIP):
        self.kind = kind
        self._delta = delta_flip if kind is MoveKind.FLIP else delta_swap

    def moves(self, tour: Tour) -> Iterator[ScoredMove]:
        """
        Lazily yield all n(n-1)/2 moves with their deltas.

        Scan order is ascending i, then ascending j.

        Args:
            tour: The tour to evaluate

        Yields:
            (i, j, delta) with 1 <= i < j <= n
        """
        n = len(tour)
        problem = tour.problem
        for i in range(1, n):
            for j in range(i + 1, n + 1):
                yield i, j, self._delta(problem, tour, i, j)

    def best_move(
        self,
        tour: Tour,
        admissible: Optional[Callable[[int, int], bool]] = None,
    ) -> Optional[ScoredMove]:
        """
        Find the move with the most negative delta.

        Ties keep the first move in scan order.

        Args:
            tour: The tour to evaluate
            admissible: Optional filter on (i, j)

        Returns:
            (i, j, delta), or None if no move is admissible
        """
        best: Optional[ScoredMove] = None
        for i, j, delta in self.moves(tour):
            if admissible is not None and not admissible(i, j):
                continue
            if best is None or delta < best[2]:
                best = (i, j, delta)
        return best

    def random_move(self, tour: Tour, rng: random.Random) -> ScoredMove:
        """
        Draw one move uniformly among the n(n-1)/2 pairs.

        Args:
            tour: The tour to evaluate
            rng: Random number generator

        Returns:
            (i, j, delta) with i < j
        """
        i, j = sorted(rng.sample(range(1, len(tour) + 1), 2))
        return i, j, self._delta(tour.problem, tour, i, j)
