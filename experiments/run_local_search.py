#!/usr/bin/env python3
"""
Run the local search drivers on a random Euclidean instance.

Usage:
    python -m experiments.run_local_search --cities 50 --strategy all
    python -m experiments.run_local_search -n 30 -S sa --t-max 5 --seed 123
"""

import sys
import os
import argparse
import logging
import random
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tsp_search import (
    Problem,
    Strategy,
    HillClimbParams,
    AnnealingParams,
    TabuParams,
    full_cost,
    random_tour,
    search,
)


def build_params(args):
    """Parameter objects per strategy from the command line."""
    return {
        Strategy.HILL_CLIMBING: HillClimbParams(max_iter=args.max_iter),
        Strategy.SIMULATED_ANNEALING: AnnealingParams(
            Tmax=args.t_max, Tmin=args.t_min, r=args.ratio, kT=args.k_t
        ),
        Strategy.TABU: TabuParams(ntabu=args.ntabu, niter=args.niter),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Run TSP local search on a random instance"
    )
    parser.add_argument(
        "--cities", "-n",
        type=int,
        default=50,
        help="Number of cities (default: 50)"
    )
    parser.add_argument(
        "--strategy", "-S",
        choices=["hc", "sa", "tabu", "all"],
        default="all",
        help="Driver to run (default: all)"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=42,
        help="Random seed (default: 42)"
    )
    parser.add_argument("--max-iter", type=int, default=10_000, help="Hill climbing cap")
    parser.add_argument("--t-max", type=float, default=1.0, help="SA initial temperature")
    parser.add_argument("--t-min", type=float, default=1e-3, help="SA stopping temperature")
    parser.add_argument("--ratio", type=float, default=0.95, help="SA cooling ratio")
    parser.add_argument("--k-t", type=int, default=200, help="SA proposals per level")
    parser.add_argument("--ntabu", type=int, default=5, help="Tabu horizon")
    parser.add_argument("--niter", type=int, default=200, help="Tabu iterations")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    print("=" * 60)
    print("TSP LOCAL SEARCH")
    print("=" * 60)
    print(f"\nParameters:")
    print(f"  Cities:   {args.cities}")
    print(f"  Strategy: {args.strategy}")
    print(f"  Seed:     {args.seed}")

    problem = Problem.random_euclidean(args.cities, seed=args.seed)
    start = random_tour(problem, random.Random(args.seed))
    baseline = full_cost(problem, start)
    print(f"\nRandom start cost: {baseline:.4f}")

    params = build_params(args)
    strategies = list(Strategy) if args.strategy == "all" else [Strategy(args.strategy)]

    print("\n" + "=" * 60)
    print(f"{'Strategy':<22}{'Cost':>10}{'Impr.':>9}{'Iters':>9}{'Time':>9}")
    print("-" * 60)
    for strategy in strategies:
        t0 = time.perf_counter()
        result = search(
            problem, start, strategy, params[strategy],
            rng=random.Random(args.seed),
        )
        elapsed = time.perf_counter() - t0
        improvement = 100 * (baseline - result.cost) / baseline
        print(
            f"{result.strategy:<22}{result.cost:>10.4f}{improvement:>8.1f}%"
            f"{result.iterations:>9}{elapsed:>8.2f}s"
        )
    print("=" * 60)


if __name__ == "__main__":
    main()
