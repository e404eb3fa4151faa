# tsplib_bench/writer.py
from __future__ import annotations
from pathlib import Path
from typing import TextIO, Union
import io
import logging

from .problem import TSPLIBProblem

logger = logging.getLogger(__name__)


def write_tsplib(problem: TSPLIBProblem, sink: TextIO) -> None:
    """
    Write ``problem`` as an EXPLICIT / FULL_MATRIX TSPLIB file.

    TSP and ATSP are written the same way; only the TYPE line differs.
    Weights are truncated to integers, so fractional matrices do not survive a
    write/parse round trip.
    """
    sink.write(f"NAME: {problem.name}\n")
    sink.write(f"TYPE: {'TSP' if problem.symmetric else 'ATSP'}\n")
    sink.write(f"COMMENT: {problem.comment}\n")
    sink.write(f"DIMENSION: {problem.size}\n")
    sink.write("EDGE_WEIGHT_TYPE: EXPLICIT\n")
    sink.write("EDGE_WEIGHT_FORMAT: FULL_MATRIX\n")
    sink.write("DISPLAY_DATA_TYPE: TWOD_DISPLAY\n")
    sink.write("EDGE_WEIGHT_SECTION\n")

    # pad every column to the width of the biggest weight
    rows = [[int(problem.weight(x, y)) for y in range(problem.size)] for x in range(problem.size)]
    biggest = 0
    for row in rows:
        for value in row:
            if value > biggest:
                biggest = value
    width = len(str(biggest))
    for row in rows:
        sink.write(" ".join(str(value).rjust(width) for value in row) + "\n")
    sink.write("EOF\n")
    sink.flush()


def save_tsplib(problem: TSPLIBProblem, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        write_tsplib(problem, f)
    logger.info("wrote %s (%d nodes) to %s", problem.name, problem.size, path)


def dumps_tsplib(problem: TSPLIBProblem) -> str:
    buf = io.StringIO()
    write_tsplib(problem, buf)
    return buf.getvalue()
