"""
Tour representation and the two move primitives.

A tour is an ordered list of all cities 1..n, implicitly closed into a
cycle. Positions are 1-based: position 1 is the first city and the edge
from position n back to position 1 is part of the cost.

Both moves have O(1) cost deltas:
- swap(i, j) exchanges the cities at positions i and j; only the edges
  incident to those two positions change.
- flip(i, j) reverses the block of positions [i, j]; with a symmetric
  cost matrix the internal edges keep their cost, so only the two
  boundary edges change.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, MutableSequence, Optional, Sequence

from .errors import InvalidPositionError, InvalidTourError, TSPError
from .problem import Problem


class MoveKind(Enum):
    """Neighbourhood move types."""

    SWAP = "swap"  # Exchange two positions
    FLIP = "flip"  # Reverse a contiguous segment (2-opt)


@dataclass(frozen=True)
class Move:
    """
    A move identified by two tour positions.

    Attributes:
        kind: SWAP or FLIP
        i: First position (1-based)
        j: Second position (1-based); flips need i < j
    """

    kind: MoveKind
    i: int
    j: int


def is_valid(tour: Sequence[int], n: Optional[int] = None) -> bool:
    """
    Check that a tour is a permutation of exactly the cities 1..n.

    Args:
        tour: Sequence of city ids
        n: Expected number of cities (defaults to len(tour))

    Returns:
        True if every city appears exactly once and nothing else does
    """
    cities = list(tour)
    if n is None:
        n = len(cities)
    if len(cities) != n:
        return False
    if not all(
        isinstance(c, numbers.Integral) and not isinstance(c, bool) for c in cities
    ):
        return False
    return set(cities) == set(range(1, n + 1))


def full_cost(problem: Problem, tour: Sequence[int]) -> float:
    """
    Total cost of the closed tour, O(n).

    Args:
        problem: The problem instance
        tour: Sequence of city ids

    Returns:
        Sum of consecutive edge costs including the wraparound edge
    """
    cities = list(tour)
    total = 0.0
    for a, b in zip(cities, cities[1:] + cities[:1]):
        total += problem.distance(a, b)
    return total


def _check_position(n: int, p: int) -> None:
    if not 1 <= p <= n:
        raise InvalidPositionError(f"position {p} outside [1, {n}]")


def _check_swap(n: int, i: int, j: int) -> None:
    _check_position(n, i)
    _check_position(n, j)
    if i == j:
        raise InvalidPositionError(f"swap needs distinct positions, got ({i}, {j})")


def _check_flip(n: int, i: int, j: int) -> None:
    _check_position(n, i)
    _check_position(n, j)
    if i >= j:
        raise InvalidPositionError(f"flip needs i < j, got ({i}, {j})")


def delta_swap(problem: Problem, tour: Sequence[int], i: int, j: int) -> float:
    """
    Cost change of exchanging the cities at positions i and j.

    Only the edges starting at positions i-1, i, j-1 and j (cyclically)
    are touched. Adjacent positions share an edge, so the set of edges is
    deduplicated before summing.

    Raises:
        InvalidPositionError: If a position is out of range or i == j
    """
    n = len(tour)
    _check_swap(n, i, j)

    def after(p: int) -> int:
        # City at position p once the exchange has been applied
        if p == i:
            return tour[j - 1]
        if p == j:
            return tour[i - 1]
        return tour[p - 1]

    # Edge k joins position k and position k % n + 1
    edges = {(i - 2) % n + 1, i, (j - 2) % n + 1, j}
    delta = 0.0
    for k in edges:
        nxt = k % n + 1
        delta += problem.edge(after(k), after(nxt))
        delta -= problem.edge(tour[k - 1], tour[nxt - 1])
    return delta


def delta_flip(problem: Problem, tour: Sequence[int], i: int, j: int) -> float:
    """
    Cost change of reversing the positions [i, j].

    The edge entering position i and the edge leaving position j are
    replaced; every internal edge keeps its cost under a symmetric matrix.
    Reversing the whole tour yields the same cycle.

    Raises:
        InvalidPositionError: If a position is out of range or i >= j
    """
    n = len(tour)
    _check_flip(n, i, j)
    if j - i + 1 >= n:
        return 0.0

    prev_city = tour[(i - 2) % n]
    next_city = tour[j % n]
    first, last = tour[i - 1], tour[j - 1]
    return (
        problem.edge(prev_city, last)
        + problem.edge(first, next_city)
        - problem.edge(prev_city, first)
        - problem.edge(last, next_city)
    )


def swap(tour: MutableSequence[int], i: int, j: int) -> None:
    """Exchange the cities at positions i and j in place."""
    if isinstance(tour, Tour):
        tour.swap(i, j)
        return
    _check_swap(len(tour), i, j)
    tour[i - 1], tour[j - 1] = tour[j - 1], tour[i - 1]


def flip(tour: MutableSequence[int], i: int, j: int) -> None:
    """Reverse the positions [i, j] in place."""
    if isinstance(tour, Tour):
        tour.flip(i, j)
        return
    _check_flip(len(tour), i, j)
    tour[i - 1 : j] = tour[i - 1 : j][::-1]


_DELTAS = {MoveKind.SWAP: delta_swap, MoveKind.FLIP: delta_flip}
_APPLY = {MoveKind.SWAP: swap, MoveKind.FLIP: flip}


class Tour:
    """
    A mutable tour bound to a problem, with an incrementally tracked cost.

    Every move goes through apply(): the delta is computed (and the
    positions validated) before the single in-place edit, and the cost is
    updated right after it, so the city order and the cost never disagree.

    Attributes:
        problem: The problem instance (shared, read-only)
        cost: Tracked cost of the current tour
    """

    def __init__(self, problem: Problem, cities: Sequence[int]):
        """
        Initialize a tour.

        Args:
            problem: The problem instance
            cities: Initial visiting order

        Raises:
            InvalidTourError: If cities is not a permutation of 1..n
        """
        cities = list(cities)
        if not is_valid(cities, problem.n):
            raise InvalidTourError(
                f"tour must be a permutation of 1..{problem.n}, got {cities}"
            )
        self.problem = problem
        self._cities: List[int] = cities
        self._cost = full_cost(problem, cities)
        self._last_move: Optional[Move] = None

    @property
    def cities(self) -> List[int]:
        """Copy of the current visiting order."""
        return list(self._cities)

    @property
    def cost(self) -> float:
        return self._cost

    @property
    def n(self) -> int:
        return len(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cities)

    def __getitem__(self, index):
        # 0-based like any sequence, so the delta functions accept a Tour
        return self._cities[index]

    def city_at(self, position: int) -> int:
        """City occupying a 1-based position."""
        _check_position(len(self._cities), position)
        return self._cities[position - 1]

    def delta(self, move: Move) -> float:
        """Cost change move would cause, without applying it."""
        return _DELTAS[move.kind](self.problem, self._cities, move.i, move.j)

    def apply(self, move: Move) -> float:
        """
        Apply a move in place and update the tracked cost.

        Returns:
            The cost delta of the move
        """
        delta = self.delta(move)
        _APPLY[move.kind](self._cities, move.i, move.j)
        self._cost += delta
        self._last_move = move
        return delta

    def undo(self) -> float:
        """
        Revert the most recent move.

        Both moves are their own inverse, so undoing re-applies it.

        Returns:
            The cost delta of the revert
        """
        if self._last_move is None:
            raise TSPError("no move to undo")
        move = self._last_move
        delta = self.apply(move)
        self._last_move = None
        return delta

    def swap(self, i: int, j: int) -> float:
        return self.apply(Move(MoveKind.SWAP, i, j))

    def flip(self, i: int, j: int) -> float:
        return self.apply(Move(MoveKind.FLIP, i, j))

    def verify(self, rel_tol: float = 1e-9, abs_tol: float = 1e-9) -> bool:
        """Check the tracked cost against a full recomputation."""
        return math.isclose(
            self._cost, full_cost(self.problem, self._cities),
            rel_tol=rel_tol, abs_tol=abs_tol,
        )

    def resync(self) -> float:
        """
        Replace the tracked cost by a full recomputation.

        Returns:
            The accumulated drift (tracked minus exact)
        """
        exact = full_cost(self.problem, self._cities)
        drift = self._cost - exact
        self._cost = exact
        return drift

    def copy(self) -> "Tour":
        """Create an independent copy sharing the same problem."""
        other = Tour.__new__(Tour)
        other.problem = self.problem
        other._cities = list(self._cities)
        other._cost = self._cost
        other._last_move = None
        return other

    def __repr__(self) -> str:
        return f"Tour(n={self.n}, cost={self._cost:.4f})"


def as_tour(problem: Problem, tour) -> Tour:
    """
    Private working copy of a starting tour for a search driver.

    Args:
        problem: The problem instance
        tour: Tour object or sequence of city ids

    Raises:
        InvalidTourError: If the cities are not a permutation of 1..n
    """
    if isinstance(tour, Tour):
        if tour.problem is not problem:
            return Tour(problem, tour.cities)
        return tour.copy()
    return Tour(problem, tour)
