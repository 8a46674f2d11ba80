"""Tests for steepest-descent hill climbing."""

import sys
import os
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from tsp_search import (
    Problem,
    Tour,
    MoveKind,
    MoveEvaluator,
    InvalidParameterError,
    InvalidTourError,
    HillClimbParams,
    hill_climb,
    full_cost,
    is_valid,
    random_tour,
)
from tsp_search.solvers import run_hill_climbing
from tsp_search.solvers.hill_climbing import IMPROVEMENT_EPS

UNIT_SQUARE = [(0, 0), (0, 1), (1, 1), (1, 0)]


@pytest.mark.parametrize("start", [[1, 2, 3, 4], [1, 2, 4, 3], [1, 3, 2, 4]])
def test_unit_square_converges_to_perimeter(start):
    """Every cyclic ordering of the unit square reaches cost 4."""
    p = Problem.from_coordinates(UNIT_SQUARE)
    tour, cost = hill_climb(p, start, max_iter=100)
    assert cost == pytest.approx(4.0)
    assert full_cost(p, tour) == pytest.approx(4.0)
    assert is_valid(tour, 4)


def test_does_not_modify_input():
    p = Problem.random_euclidean(10, seed=0)
    start = random_tour(p, random.Random(0))
    copy = list(start)
    hill_climb(p, start)
    assert start == copy


def test_monotone_and_local_optimum():
    """Costs never increase and no flip improves the final tour."""
    p = Problem.random_euclidean(25, seed=11)
    tour = Tour(p, random_tour(p, random.Random(11)))
    result = run_hill_climbing(tour, HillClimbParams())
    trace = result.cost_trace
    assert all(b < a for a, b in zip(trace, trace[1:]))
    assert result.converged
    assert result.iterations == len(trace) - 1

    final = Tour(p, result.tour)
    best = MoveEvaluator().best_move(final)
    assert best[2] >= -IMPROVEMENT_EPS
    assert result.cost == pytest.approx(full_cost(p, result.tour))


def test_iteration_cap():
    p = Problem.random_euclidean(30, seed=4)
    tour = Tour(p, random_tour(p, random.Random(4)))
    result = run_hill_climbing(tour, HillClimbParams(max_iter=2))
    assert result.iterations == 2
    assert not result.converged
    assert len(result.cost_trace) == 3
    assert is_valid(result.tour, 30)


def test_zero_iterations_returns_start():
    p = Problem.random_euclidean(8, seed=2)
    start = random_tour(p, random.Random(2))
    tour, cost = hill_climb(p, start, max_iter=0)
    assert tour == start
    assert cost == pytest.approx(full_cost(p, start))


def test_swap_neighbourhood():
    p = Problem.random_euclidean(12, seed=6)
    start = random_tour(p, random.Random(6))
    tour, cost = hill_climb(p, start, kind=MoveKind.SWAP)
    assert is_valid(tour, 12)
    assert cost <= full_cost(p, start) + 1e-9


def test_invalid_arguments():
    p = Problem.random_euclidean(5, seed=1)
    with pytest.raises(InvalidParameterError):
        hill_climb(p, [1, 2, 3, 4, 5], max_iter=-1)
    with pytest.raises(InvalidTourError):
        hill_climb(p, [1, 2, 3, 4, 4])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
