"""Tests for strategy dispatch and restarts."""

import sys
import os
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from tsp_search import (
    Problem,
    Strategy,
    HillClimbParams,
    AnnealingParams,
    TabuParams,
    InvalidParameterError,
    search,
    multi_start,
    full_cost,
    is_valid,
    hill_climb,
)


@pytest.mark.parametrize(
    "strategy, params",
    [
        (Strategy.HILL_CLIMBING, HillClimbParams(max_iter=500)),
        (Strategy.SIMULATED_ANNEALING, AnnealingParams(Tmax=1.0, Tmin=0.01, r=0.8, kT=50)),
        (Strategy.TABU, TabuParams(ntabu=3, niter=20)),
    ],
)
def test_every_strategy_returns_valid_tour(strategy, params):
    p = Problem.random_euclidean(12, seed=0)
    result = search(p, None, strategy, params, rng=random.Random(0))
    assert is_valid(result.tour, 12)
    assert result.cost == pytest.approx(full_cost(p, result.tour))


def test_string_tags_and_defaults():
    p = Problem.random_euclidean(8, seed=1)
    result = search(p, [1, 2, 3, 4, 5, 6, 7, 8], "hc")
    assert result.strategy == "hill_climbing"
    assert result.converged


def test_matches_direct_call():
    p = Problem.random_euclidean(10, seed=2)
    start = list(range(1, 11))
    tour, cost = hill_climb(p, start)
    result = search(p, start, Strategy.HILL_CLIMBING)
    assert result.tour == tour
    assert result.cost == pytest.approx(cost)


def test_unknown_strategy_rejected():
    p = Problem.random_euclidean(5, seed=0)
    with pytest.raises(InvalidParameterError):
        search(p, None, "annealing")


def test_mismatched_params_rejected():
    p = Problem.random_euclidean(5, seed=0)
    with pytest.raises(InvalidParameterError):
        search(p, None, Strategy.TABU, HillClimbParams())


def test_multi_start_shares_problem_and_keeps_best():
    p = Problem.random_euclidean(15, seed=3)
    costs_before = p.costs.copy()
    best = multi_start(p, Strategy.HILL_CLIMBING, starts=4, rng=random.Random(3))
    single = search(p, None, Strategy.HILL_CLIMBING, rng=random.Random(3))
    assert best.cost <= single.cost + 1e-9
    assert (p.costs == costs_before).all()


def test_multi_start_needs_one_start():
    p = Problem.random_euclidean(5, seed=0)
    with pytest.raises(InvalidParameterError):
        multi_start(p, starts=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
