# tsplib_bench/convert.py
"""
ATSP -> TSP conversion.

The asymmetric instance is embedded in a symmetric one with twice the nodes:
node ``i`` keeps its index and gets a twin ``n + i``. Travelling ``i -> j`` in the
ATSP becomes the undirected edge ``(n + i, j)``. Twin edges ``(i, n + i)`` are free,
every crossing edge carries an extra ``M`` and edges inside either half cost
``2M``, so an optimal symmetric tour alternates halves through all twin edges
and is exactly ``n * M`` longer than the optimal asymmetric tour.
"""
from __future__ import annotations
import logging

import numpy as np

from .problem import ProblemType, TSPLIBProblem, WeightType

logger = logging.getLogger(__name__)


def _addend(weights: np.ndarray) -> float:
    n = weights.shape[0]
    if n == 0:
        return 1.0
    return n * max(float(weights.max()), 0.0) + 1.0


def symmetric_offset(weights: np.ndarray) -> float:
    """Length added to every tour that uses all twin edges."""
    return weights.shape[0] * _addend(weights)


def convert_to_symmetric(weights: np.ndarray) -> np.ndarray:
    w = np.asarray(weights, dtype=np.float64)
    n = w.shape[0]
    m = _addend(w)
    out = np.full((2 * n, 2 * n), 2.0 * m)
    out[n:, :n] = w + m
    out[:n, n:] = (w + m).T
    idx = np.arange(n)
    out[idx, n + idx] = 0.0
    out[n + idx, idx] = 0.0
    np.fill_diagonal(out, 0.0)
    return out


def to_symmetric(atsp: TSPLIBProblem) -> TSPLIBProblem:
    """Return a symmetric equivalent of ``atsp``, or ``atsp`` itself if it already is one."""
    if atsp.symmetric:
        return atsp

    name = atsp.name + "(SYM)"
    weights = convert_to_symmetric(atsp.weights)
    logger.info("converted %s (%d nodes) to %s (%d nodes)", atsp.name, atsp.size, name, weights.shape[0])
    return TSPLIBProblem(name, atsp.comment, weights.shape[0], weights,
                         WeightType.EXPLICIT, ProblemType.TSP)
