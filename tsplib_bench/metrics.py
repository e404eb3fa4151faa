# tsplib_bench/metrics.py
from __future__ import annotations
from typing import Callable, List, Optional

from .problem import Problem


def tour_length(problem: Problem, tour: List[int]) -> float:
    """
    Length of ``tour`` on ``problem``.

    The tour is closed back to its first node when the problem has a fixed
    ``last`` node (always the case for TSPLIB problems); otherwise it is open.
    """
    n = len(tour)
    if n == 0:
        return 0.0
    s = 0.0
    for i in range(n - 1):
        s += problem.weight(tour[i], tour[i + 1])
    if problem.last is not None:
        s += problem.weight(tour[-1], tour[0])
    return s


def gap_pct(length: float, best: Optional[float]) -> Optional[float]:
    if best is None or best == 0:
        return None
    return 100.0 * (length - best) / best


def build_eval_fn(problem: Problem) -> Callable[[List[int]], float]:
    """Returns eval_tour(tour) bound to ``problem``, for the harness and the solvers alike."""
    def eval_tour(tour: List[int]) -> float:
        return tour_length(problem, tour)
    return eval_tour


def is_valid_tour(problem: Problem, tour: List[int]) -> bool:
    if sorted(tour) != list(range(problem.size)):
        return False
    if problem.first is not None and tour and tour[0] != problem.first:
        return False
    return True
