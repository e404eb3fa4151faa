# tsplib_bench/tsplib.py
from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging
import math

import numpy as np

from .errors import MalformedInstance
from .problem import Point, ProblemType, TSPLIBProblem, WeightType

logger = logging.getLogger(__name__)

TOKEN_NAME = "NAME:"
TOKEN_TYPE = "TYPE:"
TOKEN_COMMENT = "COMMENT:"
TOKEN_DIMENSION = "DIMENSION:"
TOKEN_EDGE_WEIGHT_TYPE = "EDGE_WEIGHT_TYPE:"
TOKEN_EDGE_WEIGHT_SECTION = "EDGE_WEIGHT_SECTION"
TOKEN_NODE_COORD_SECTION = "NODE_COORD_SECTION"
TOKEN_EOF = "EOF"

_PROBLEM_TYPES = {t.value: t for t in ProblemType}
_WEIGHT_TYPES = {t.value: t for t in WeightType}


class _Section(Enum):
    HEADER = "header"
    EDGE_WEIGHTS = "edge_weights"
    NODE_COORDS = "node_coords"


def _number(tok: str, what: str, line_no: int) -> float:
    try:
        val = float(tok)
    except ValueError:
        raise MalformedInstance(f"{what} {tok!r} is not a number", line_no) from None
    if not math.isfinite(val):
        raise MalformedInstance(f"{what} {tok!r} is not a finite number", line_no)
    return val


def euclidean_weights(points: List[Point]) -> np.ndarray:
    """Rounded EUC_2D distances (round half to even), zero on the diagonal."""
    if not points:
        return np.zeros((0, 0), dtype=np.float64)
    xy = np.array(points, dtype=np.float64)
    diff = xy[:, None, :] - xy[None, :, :]
    return np.rint(np.sqrt((diff ** 2).sum(-1)))


class _ProblemBuilder:
    """Accumulates header fields and section data while lines are fed in."""

    def __init__(self):
        self.name = ""
        self.comment = ""
        self.size: Optional[int] = None
        self.problem_type: Optional[ProblemType] = None
        self.weight_type: Optional[WeightType] = None
        self.section = _Section.HEADER
        self.weights: Optional[np.ndarray] = None
        self.points: Optional[List[Point]] = None
        # EDGE_WEIGHT_SECTION fill cursor
        self.x = 0
        self.y = 0
        self.filled = 0

    def feed(self, raw: str, line_no: int) -> None:
        if self.section is _Section.EDGE_WEIGHTS:
            line = raw.strip()
            if line.startswith(TOKEN_EOF):
                self._close_section(line_no)
            elif line:
                self._fill_weights(line, line_no)
            return
        if self.section is _Section.NODE_COORDS:
            line = raw.strip()
            if line.startswith(TOKEN_EOF):
                self._close_section(line_no)
            elif line:
                self._add_point(line, line_no)
            return

        line = raw.strip().replace(" :", ":")
        if line.startswith(TOKEN_NAME):
            self.name = line[len(TOKEN_NAME):].strip()
        elif line.startswith(TOKEN_TYPE):
            value = line[len(TOKEN_TYPE):].strip().upper()
            self.problem_type = _PROBLEM_TYPES.get(value)
            if self.problem_type is None:
                logger.warning("line %d: unsupported TYPE %r", line_no, value)
        elif line.startswith(TOKEN_COMMENT):
            self.comment = line[len(TOKEN_COMMENT):].strip()
        elif line.startswith(TOKEN_DIMENSION):
            value = line[len(TOKEN_DIMENSION):].strip()
            try:
                self.size = int(value)
            except ValueError:
                raise MalformedInstance(f"DIMENSION {value!r} is not an integer", line_no) from None
            if self.size < 0:
                raise MalformedInstance(f"DIMENSION {self.size} is negative", line_no)
            if self.weights is not None and self.weights.shape != (self.size, self.size):
                raise MalformedInstance(
                    f"DIMENSION {self.size} does not match the {self.weights.shape[0]}-node data section", line_no)
            if self.points is not None and len(self.points) != self.size:
                raise MalformedInstance(
                    f"DIMENSION {self.size} does not match the {len(self.points)}-node data section", line_no)
        elif line.startswith(TOKEN_EDGE_WEIGHT_TYPE):
            value = line[len(TOKEN_EDGE_WEIGHT_TYPE):].strip().upper()
            self.weight_type = _WEIGHT_TYPES.get(value)
            if self.weight_type is None:
                logger.warning("line %d: unsupported EDGE_WEIGHT_TYPE %r", line_no, value)
        elif line.startswith(TOKEN_EDGE_WEIGHT_SECTION):
            self._open_section(_Section.EDGE_WEIGHTS, line_no)
            self.weights = np.zeros((self.size, self.size), dtype=np.float64)
        elif line.startswith(TOKEN_NODE_COORD_SECTION):
            self._open_section(_Section.NODE_COORDS, line_no)
            self.points = []
        elif line and not line.startswith(TOKEN_EOF):
            logger.debug("line %d: ignoring %r", line_no, line)

    def _open_section(self, section: _Section, line_no: int) -> None:
        if self.weights is not None or self.points is not None:
            raise MalformedInstance(f"{section.name} follows an earlier data section", line_no)
        missing = [field for field, val in (("TYPE", self.problem_type),
                                            ("EDGE_WEIGHT_TYPE", self.weight_type),
                                            ("DIMENSION", self.size)) if val is None]
        if missing:
            raise MalformedInstance(f"{', '.join(missing)} must precede the data section", line_no)
        self.section = section

    def _fill_weights(self, line: str, line_no: int) -> None:
        n = self.size
        for tok in line.split():
            if self.filled >= n * n:
                raise MalformedInstance(f"more than {n * n} values in EDGE_WEIGHT_SECTION", line_no)
            val = _number(tok, "weight", line_no)
            if val < 0:
                raise MalformedInstance(f"weight {tok!r} is negative", line_no)
            self.weights[self.x, self.y] = 0.0 if self.x == self.y else val
            self.filled += 1
            if self.y == n - 1:
                self.x += 1
                self.y = 0
            else:
                self.y += 1

    def _add_point(self, line: str, line_no: int) -> None:
        parts = line.split()
        if len(parts) < 3:
            raise MalformedInstance(f"expected 'index x y', got {line!r}", line_no)
        # the index column is validated but points keep file order
        _number(parts[0], "node index", line_no)
        x = int(_number(parts[1], "x coordinate", line_no))
        y = int(_number(parts[2], "y coordinate", line_no))
        self.points.append(Point(x, y))

    def _close_section(self, line_no: Optional[int]) -> None:
        if self.section is _Section.EDGE_WEIGHTS:
            expected = self.size * self.size
            if self.filled != expected:
                raise MalformedInstance(
                    f"EDGE_WEIGHT_SECTION has {self.filled} values, expected {expected}", line_no)
        elif self.section is _Section.NODE_COORDS:
            if len(self.points) != self.size:
                raise MalformedInstance(
                    f"NODE_COORD_SECTION has {len(self.points)} nodes, DIMENSION is {self.size}", line_no)
            self.weights = euclidean_weights(self.points)
        self.section = _Section.HEADER

    def build(self) -> TSPLIBProblem:
        self._close_section(None)
        if self.weights is None:
            raise MalformedInstance("no EDGE_WEIGHT_SECTION or NODE_COORD_SECTION found")
        return TSPLIBProblem(self.name, self.comment, self.size, self.weights,
                             self.weight_type, self.problem_type)


def parse_tsplib(source: Union[str, Iterable[str]]) -> TSPLIBProblem:
    """
    Parse TSPLIB text into a problem.

    ``source`` is the whole text or any iterable of lines (an open file works).
    Supported: NAME, TYPE (TSP/ATSP), COMMENT, DIMENSION, EDGE_WEIGHT_TYPE
    (EXPLICIT/EUC_2D), a FULL_MATRIX EDGE_WEIGHT_SECTION or a NODE_COORD_SECTION.
    Anything else on a header line is skipped.
    """
    lines = source.splitlines() if isinstance(source, str) else source
    builder = _ProblemBuilder()
    for line_no, raw in enumerate(lines, start=1):
        builder.feed(raw, line_no)
    problem = builder.build()
    logger.debug("parsed %r", problem)
    return problem


def load_tsplib(path: Union[str, Path]) -> TSPLIBProblem:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return parse_tsplib(f)
