# tsplib_bench/solver.py
"""
Baseline tour builders used by the benchmark harness.

Both work on the generic ``Problem`` surface only: ``size``, ``weight``,
``symmetric``, ``first`` and the 10-nearest-neighbour candidate lists.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging
import random
import time

from .metrics import tour_length
from .problem import Problem

logger = logging.getLogger(__name__)


class Solver(ABC):
    name: str = "solver"

    @abstractmethod
    def solve(self, problem: Problem) -> List[int]:
        """Return a permutation of ``range(problem.size)`` starting at ``problem.first``."""


def nn_init_on_candidates(problem: Problem, start: Optional[int] = None) -> List[int]:
    n = problem.size
    if n == 0:
        return []
    used = [False] * n
    if start is None:
        start = problem.first if problem.first is not None else 0
    used[start] = True
    tour = [start]
    remaining = [i for i in range(n) if i != start]
    while len(tour) < n:
        u = tour[-1]
        chosen = -1
        for v in problem.neighbours(u):
            if not used[v]:
                chosen = v; break
        if chosen == -1:
            # candidates exhausted: cheapest unused node
            best_w = None
            for v in remaining:
                if not used[v]:
                    w = problem.weight(u, v)
                    if best_w is None or w < best_w:
                        best_w = w; chosen = v
        used[chosen] = True
        tour.append(chosen)
    return tour


def two_opt_delta(problem: Problem, tour: List[int], i: int, k: int) -> float:
    """Change in length when tour[i+1..k] is reversed (i < k)."""
    n = len(tour)
    w = problem.weight
    a, b = tour[i], tour[i + 1]
    c, d = tour[k], tour[(k + 1) % n]
    delta = (w(a, c) + w(b, d)) - (w(a, b) + w(c, d))
    if not problem.symmetric:
        # the reversed segment is now walked backwards
        for m in range(i + 1, k):
            delta += w(tour[m + 1], tour[m]) - w(tour[m], tour[m + 1])
    return delta


def apply_two_opt_and_update_pos(tour: List[int], pos: List[int], i: int, k: int):
    if k < i: i, k = k, i
    tour[i+1:k+1] = reversed(tour[i+1:k+1])
    for idx in range(i+1, k+1):
        pos[tour[idx]] = idx


def local_search_2opt(problem: Problem, tour: List[int], time_budget_s: float = 1.0) -> List[int]:
    """First-improvement 2-opt restricted to each node's nearest neighbours."""
    n = len(tour)
    if n < 4:
        return tour
    pos = [0] * n
    for idx, v in enumerate(tour):
        pos[v] = idx
    deadline = time.time() + time_budget_s
    improved = True
    moves = 0
    while improved and time.time() < deadline:
        improved = False
        for i in range(n - 1):
            a = tour[i]
            for c in problem.neighbours(a):
                k = pos[c]
                # position 0 stays put so the tour keeps its fixed first node
                if k <= i + 1:
                    continue
                delta = two_opt_delta(problem, tour, i, k)
                if delta < -1e-9:
                    apply_two_opt_and_update_pos(tour, pos, i, k)
                    improved = True
                    moves += 1
                    break
    logger.debug("2-opt applied %d moves", moves)
    return tour


@dataclass
class NearestNeighbourSolver(Solver):
    name: str = "nearest_neighbour"

    def solve(self, problem: Problem) -> List[int]:
        return nn_init_on_candidates(problem)


@dataclass
class TwoOptSolver(Solver):
    time_budget_s: float = 1.0
    restarts: int = 0
    seed: Optional[int] = None
    name: str = "two_opt"

    def solve(self, problem: Problem) -> List[int]:
        rng = random.Random(self.seed)
        best = local_search_2opt(problem, nn_init_on_candidates(problem), self.time_budget_s)
        best_len = tour_length(problem, best)
        for _ in range(self.restarts if len(best) > 3 else 0):
            # randomised restart: shuffle everything after the fixed first node
            tour = best[:1] + rng.sample(best[1:], len(best) - 1)
            tour = local_search_2opt(problem, tour, self.time_budget_s)
            length = tour_length(problem, tour)
            if length < best_len:
                best, best_len = tour, length
        return best


SOLVERS = {
    "nearest_neighbour": NearestNeighbourSolver,
    "two_opt": TwoOptSolver,
}


def build_solver(kind: str, params: Optional[Dict[str, Any]] = None) -> Solver:
    if kind not in SOLVERS:
        raise ValueError(f"Unknown solver {kind!r}; expected one of {sorted(SOLVERS)}")
    try:
        return SOLVERS[kind](**(params or {}))
    except TypeError as e:
        raise ValueError(f"Bad parameters for solver {kind!r}: {e}") from e
