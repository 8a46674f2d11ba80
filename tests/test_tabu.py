"""Tests for tabu search."""

import sys
import os
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from tsp_search import (
    Problem,
    Tour,
    InvalidParameterError,
    TabuParams,
    tabu_search,
    hill_climb,
    full_cost,
    is_valid,
    random_tour,
)
from tsp_search.solvers import run_tabu_search, TabuList


@pytest.fixture
def recorded_moves(monkeypatch):
    """Record every move applied to any Tour."""
    moves = []
    original = Tour.apply

    def apply(self, move):
        moves.append(move)
        return original(self, move)

    monkeypatch.setattr(Tour, "apply", apply)
    return moves


def test_trace_has_one_entry_per_iteration():
    p = Problem.random_euclidean(10, seed=0)
    start = random_tour(p, random.Random(0))
    tour, cost, trace = tabu_search(p, start, ntabu=3, niter=40)
    assert len(trace) == 40
    assert trace[-1] == pytest.approx(cost)
    assert cost == pytest.approx(full_cost(p, tour))
    assert is_valid(tour, 10)


def test_accepts_non_improving_moves():
    """Started at a local optimum, tabu search still moves, uphill if needed."""
    p = Problem.random_euclidean(12, seed=6)
    start, start_cost = hill_climb(p, random_tour(p, random.Random(6)))
    _, _, trace = tabu_search(p, start, ntabu=5, niter=10)
    assert len(trace) == 10
    assert max(trace) > start_cost + 1e-9


def test_tabu_positions_not_reused(recorded_moves):
    """A position moved at t is not an endpoint in t+1 .. t+ntabu."""
    ntabu = 3
    p = Problem.random_euclidean(10, seed=1)
    tour = Tour(p, random_tour(p, random.Random(1)))
    result = run_tabu_search(tour, TabuParams(ntabu=ntabu, niter=60))

    assert result.fallbacks == 0
    assert len(recorded_moves) == 60
    for t, move in enumerate(recorded_moves, start=1):
        for s in range(max(1, t - ntabu), t):
            previous = recorded_moves[s - 1]
            assert not {move.i, move.j} & {previous.i, previous.j}


def test_fallback_when_everything_is_tabu():
    """With ntabu large relative to n the search still makes progress."""
    p = Problem.random_euclidean(4, seed=2)
    tour = Tour(p, [1, 2, 3, 4])
    result = run_tabu_search(tour, TabuParams(ntabu=10, niter=8))
    assert result.fallbacks > 0
    assert len(result.cost_trace) == 8
    assert is_valid(result.tour, 4)
    assert result.cost == pytest.approx(full_cost(p, result.tour))


def test_tabu_list_expiry():
    tabu = TabuList(ntabu=2)
    tabu.add(4, t=5)
    assert tabu.expiry(4) == 7
    assert tabu.is_tabu(4, 6)
    assert tabu.is_tabu(4, 7)
    assert not tabu.is_tabu(4, 8)
    assert not tabu.is_tabu(1, 1)
    admissible = tabu.admissible(6)
    assert not admissible(1, 4)
    assert admissible(1, 2)


@pytest.mark.parametrize("ntabu, niter", [(0, 10), (-1, 10), (3, -1), (1.5, 10)])
def test_invalid_parameters(ntabu, niter):
    p = Problem.random_euclidean(5, seed=0)
    with pytest.raises(InvalidParameterError):
        tabu_search(p, [1, 2, 3, 4, 5], ntabu, niter)


def test_zero_iterations():
    p = Problem.random_euclidean(6, seed=3)
    tour, cost, trace = tabu_search(p, [1, 2, 3, 4, 5, 6], 2, 0)
    assert tour == [1, 2, 3, 4, 5, 6]
    assert trace == []


def test_deterministic():
    p = Problem.random_euclidean(12, seed=4)
    start = random_tour(p, random.Random(4))
    assert tabu_search(p, start, 4, 30) == tabu_search(p, start, 4, 30)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
