# tsplib_bench/problem.py
from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)

NEIGHBOUR_COUNT = 10


class Point(NamedTuple):
    x: int
    y: int


class ProblemType(Enum):
    TSP = "TSP"
    ATSP = "ATSP"


class WeightType(Enum):
    EXPLICIT = "EXPLICIT"
    EUC_2D = "EUC_2D"


class NearestNeighbours(Sequence[int]):
    """Closest nodes to one node, ascending by weight, plus the largest admitted weight."""

    def __init__(self, nodes: Sequence[int], max_weight: float = 0.0):
        self._nodes: Tuple[int, ...] = tuple(int(v) for v in nodes)
        self.max = float(max_weight)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, idx):
        return self._nodes[idx]

    def __iter__(self) -> Iterator[int]:
        return iter(self._nodes)

    def __contains__(self, v) -> bool:
        return v in self._nodes

    def __eq__(self, other) -> bool:
        if isinstance(other, NearestNeighbours):
            return self._nodes == other._nodes and self.max == other.max
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._nodes, self.max))

    def __repr__(self) -> str:
        return f"NearestNeighbours({list(self._nodes)}, max={self.max:g})"


class Problem(ABC):
    """What a solver gets to see of a problem: a weighted, fixed-size node set."""

    @property
    @abstractmethod
    def size(self) -> int: ...

    @abstractmethod
    def weight(self, from_: int, to: int) -> float: ...

    @property
    @abstractmethod
    def symmetric(self) -> bool: ...

    @property
    def first(self) -> Optional[int]:
        return 0

    @property
    def last(self) -> Optional[int]:
        return 0

    @abstractmethod
    def neighbours(self, v: int) -> NearestNeighbours: ...


class TSPLIBProblem(Problem):
    """
    A TSP/ATSP instance backed by a dense weight matrix.

    The matrix is frozen at construction. The only state that changes afterwards
    is the lazily filled nearest-neighbour cache and the externally assigned
    ``best`` value.
    """

    def __init__(self, name: str, comment: str, size: int, weights,
                 weight_type: WeightType, problem_type: ProblemType):
        mat = np.array(weights, dtype=np.float64)
        if size == 0 and mat.size == 0:
            mat = mat.reshape(0, 0)
        if mat.shape != (size, size):
            raise ValueError(f"Expected a {size}x{size} weight matrix, got shape {mat.shape}")
        mat.setflags(write=False)

        self.name = name
        self.comment = comment
        self.type = problem_type
        self.weight_type = weight_type
        self.best: Optional[float] = None
        self._size = int(size)
        self._weights = mat
        self._neighbours: Optional[List[Optional[NearestNeighbours]]] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def symmetric(self) -> bool:
        return self.type is ProblemType.TSP

    def weight(self, from_: int, to: int) -> float:
        return float(self._weights[from_, to])

    def neighbours(self, v: int) -> NearestNeighbours:
        if not 0 <= v < self._size:
            raise IndexError(f"node {v} out of range for {self._size} nodes")
        if self._neighbours is None:
            self._neighbours = [None] * self._size
        result = self._neighbours[v]
        if result is None:
            result = self._compute_neighbours(v)
            self._neighbours[v] = result
        return result

    def _compute_neighbours(self, v: int) -> NearestNeighbours:
        # stable sort over nodes in index order == equal weights drained by increasing index
        others = np.array([c for c in range(self._size) if c != v], dtype=np.intp)
        if others.size == 0:
            return NearestNeighbours([])
        row = self._weights[v, others]
        order = np.argsort(row, kind="stable")[:NEIGHBOUR_COUNT]
        max_weight = 0.0
        for w in row[order]:
            if w > max_weight:
                max_weight = float(w)
        logger.debug("neighbours(%d) of %s computed, max=%g", v, self.name, max_weight)
        return NearestNeighbours(others[order].tolist(), max_weight)

    def __repr__(self) -> str:
        return (f"TSPLIBProblem(name={self.name!r}, type={self.type.value}, "
                f"weight_type={self.weight_type.value}, size={self._size})")
