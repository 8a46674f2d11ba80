"""
Problem definition for the Traveling Salesman Problem.

A problem is an immutable square cost matrix over the cities 1..n.
It is created once and shared, read-only, by every search.
"""

import random
from typing import Optional, Union

import networkx as nx
import numpy as np

from .errors import InvalidParameterError, OutOfRangeError


class Problem:
    """
    Represents a TSP instance.

    Cities are identified by the integers 1..n; the cost of travelling
    from city i to city j is costs[i-1, j-1].

    Attributes:
        n: Number of cities
        costs: Read-only (n, n) cost matrix
    """

    def __init__(self, costs):
        """
        Initialize a TSP instance from a cost matrix.

        Args:
            costs: Square array-like of non-negative finite costs with a
                zero diagonal

        Raises:
            InvalidParameterError: If the matrix violates any invariant
        """
        try:
            matrix = np.array(costs, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(f"cost matrix is not numeric: {exc}") from exc
        self._validate_matrix(matrix)
        matrix.setflags(write=False)

        self._costs = matrix
        # Nested lists make scalar lookups in the move deltas cheap
        self._rows = matrix.tolist()

    @staticmethod
    def _validate_matrix(matrix: np.ndarray) -> None:
        """Validate shape and contents of the cost matrix."""
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise InvalidParameterError(
                f"cost matrix must be square, got shape {matrix.shape}"
            )
        if matrix.shape[0] < 2:
            raise InvalidParameterError("a problem needs at least 2 cities")
        if not np.all(np.isfinite(matrix)):
            raise InvalidParameterError("cost matrix must be finite")
        if np.any(matrix < 0):
            raise InvalidParameterError("costs must be non-negative")
        if np.any(np.diag(matrix) != 0):
            raise InvalidParameterError("cost(i, i) must be 0")

    @classmethod
    def from_coordinates(cls, coords) -> "Problem":
        """
        Build a Euclidean instance from planar coordinates.

        Args:
            coords: (n, 2) array-like; row k holds the position of city k+1

        Returns:
            Problem with pairwise Euclidean distances
        """
        points = np.asarray(coords, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise InvalidParameterError(
                f"coordinates must have shape (n, 2), got {points.shape}"
            )
        diff = points[:, np.newaxis, :] - points[np.newaxis, :, :]
        distances = np.sqrt(np.sum(np.square(diff), axis=-1))
        return cls(distances)

    @classmethod
    def random_euclidean(cls, n: int, seed: int = 42) -> "Problem":
        """Uniformly random cities in the unit square."""
        if n < 2:
            raise InvalidParameterError("n must be at least 2")
        rng = np.random.default_rng(seed)
        return cls.from_coordinates(rng.random(size=(n, 2)))

    @classmethod
    def from_graph(cls, graph: nx.Graph, weight: str = "weight") -> "Problem":
        """
        Build an instance from a complete weighted graph.

        Nodes are taken in sorted order and mapped to the cities 1..n.

        Args:
            graph: Complete networkx graph
            weight: Edge attribute holding the cost

        Returns:
            Problem with the graph's edge weights as costs
        """
        nodes = sorted(graph.nodes)
        for a, u in enumerate(nodes):
            for v in nodes[a + 1 :]:
                if not graph.has_edge(u, v):
                    raise InvalidParameterError(
                        f"graph must be complete, missing edge ({u}, {v})"
                    )
        matrix = nx.to_numpy_array(graph, nodelist=nodes, weight=weight)
        return cls(matrix)

    @property
    def n(self) -> int:
        """Number of cities."""
        return len(self._rows)

    @property
    def costs(self) -> np.ndarray:
        """Read-only cost matrix."""
        return self._costs

    @property
    def is_symmetric(self) -> bool:
        """True when cost(i, j) == cost(j, i) for every pair."""
        return bool(np.array_equal(self._costs, self._costs.T))

    @property
    def graph(self) -> nx.Graph:
        """Complete weighted graph on the cities 1..n."""
        G = nx.Graph()
        G.add_nodes_from(range(1, self.n + 1))
        for i in range(1, self.n + 1):
            for j in range(i + 1, self.n + 1):
                G.add_edge(i, j, weight=self._rows[i - 1][j - 1])
        return G

    def distance(self, i: int, j: int) -> float:
        """
        Cost of travelling from city i to city j.

        Raises:
            OutOfRangeError: If i or j is not in [1, n]
        """
        n = len(self._rows)
        if not (1 <= i <= n and 1 <= j <= n):
            raise OutOfRangeError(f"cities ({i}, {j}) outside [1, {n}]")
        return self._rows[i - 1][j - 1]

    def edge(self, i: int, j: int) -> float:
        """Unchecked cost lookup for the hot path of the move deltas."""
        return self._rows[i - 1][j - 1]

    def __repr__(self) -> str:
        return f"Problem(n={self.n}, symmetric={self.is_symmetric})"


def distance(problem: Problem, i: int, j: int) -> float:
    """Cost between cities i and j."""
    return problem.distance(i, j)


def size(problem: Problem) -> int:
    """Number of cities in the problem."""
    return problem.n


def random_tour(
    problem: Union[Problem, int], rng: Optional[random.Random] = None
) -> list:
    """
    Random permutation of the cities 1..n.

    Args:
        problem: Problem instance or number of cities
        rng: Random number generator

    Returns:
        List of city ids in random order
    """
    if rng is None:
        rng = random.Random()
    n = problem.n if isinstance(problem, Problem) else int(problem)
    cities = list(range(1, n + 1))
    rng.shuffle(cities)
    return cities
