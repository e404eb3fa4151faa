# tsplib_bench/benchmark.py
from __future__ import annotations
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union
import csv
import json
import logging
import re
import statistics
import time

from .convert import symmetric_offset, to_symmetric
from .metrics import gap_pct, is_valid_tour, tour_length
from .problem import TSPLIBProblem
from .solver import Solver
from .tsplib import load_tsplib

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    problem: str
    solver: str
    size: int
    runs: int
    best_known: Optional[float]
    best: float
    mean: float
    worst: float
    gap_best_pct: Optional[float]
    gap_mean_pct: Optional[float]
    mean_time_s: float
    total_time_s: float


def _slug(name: str) -> str:
    return re.sub(r"[^\w.-]+", "_", name).strip("_") or "problem"


def load_problems(entries: Iterable[Tuple[Union[str, Path], Optional[float]]],
                  symmetrize: bool = False) -> List[TSPLIBProblem]:
    """
    Load ``(path, best_known)`` pairs.

    With ``symmetrize`` every ATSP is replaced by its symmetric equivalent and
    its best-known length is shifted by the conversion offset so gaps stay
    comparable.
    """
    problems = []
    for path, best in entries:
        problem = load_tsplib(path)
        problem.best = best
        if symmetrize and not problem.symmetric:
            offset = symmetric_offset(problem.weights)
            problem = to_symmetric(problem)
            problem.best = best + offset if best is not None else None
        logger.info("loaded %s: %s n=%d best=%s", path, problem.type.value, problem.size, problem.best)
        problems.append(problem)
    return problems


class TSPLIBTester:
    """Runs every solver ``runs`` times on every problem and records length and time."""

    def __init__(self, log_dir: Union[str, Path], problems: List[TSPLIBProblem],
                 solvers: List[Solver], runs: int = 1):
        if runs < 1:
            raise ValueError(f"runs must be >= 1, got {runs}")
        self.log_dir = Path(log_dir)
        self.problems = problems
        self.solvers = solvers
        self.runs = runs

    def run_once(self, problem: TSPLIBProblem, solver: Solver) -> Tuple[List[int], float, float]:
        start = time.perf_counter()
        tour = solver.solve(problem)
        runtime = time.perf_counter() - start
        if not is_valid_tour(problem, tour):
            raise ValueError(f"{solver.name} returned an invalid tour for {problem.name}")
        return tour, tour_length(problem, tour), runtime

    def test_problem(self, problem: TSPLIBProblem, solver: Solver) -> RunSummary:
        out_dir = self.log_dir / _slug(solver.name)
        out_dir.mkdir(parents=True, exist_ok=True)
        log_path = out_dir / f"{_slug(problem.name)}.jsonl"

        lengths: List[float] = []
        times: List[float] = []
        with open(log_path, "w", encoding="utf-8") as w:
            for run in range(self.runs):
                tour, length, runtime = self.run_once(problem, solver)
                lengths.append(length); times.append(runtime)
                w.write(json.dumps({"event": "run", "run": run, "length": length,
                                    "runtime": runtime, "tour": tour}) + "\n")
                logger.debug("%s on %s run %d: %.1f in %.3fs", solver.name, problem.name, run, length, runtime)

            mean = statistics.mean(lengths)
            summary = RunSummary(
                problem=problem.name,
                solver=solver.name,
                size=problem.size,
                runs=self.runs,
                best_known=problem.best,
                best=min(lengths),
                mean=mean,
                worst=max(lengths),
                gap_best_pct=gap_pct(min(lengths), problem.best),
                gap_mean_pct=gap_pct(mean, problem.best),
                mean_time_s=statistics.mean(times),
                total_time_s=sum(times),
            )
            w.write(json.dumps({"event": "summary", **asdict(summary)}) + "\n")

        logger.info("%s on %s: best=%.1f mean=%.1f gap=%s time=%.3fs",
                    solver.name, problem.name, summary.best, summary.mean,
                    "n/a" if summary.gap_best_pct is None else f"{summary.gap_best_pct:.2f}%",
                    summary.mean_time_s)
        return summary

    def start_tests(self) -> List[RunSummary]:
        rows = []
        for problem in self.problems:
            for solver in self.solvers:
                rows.append(self.test_problem(problem, solver))
        if rows:
            write_summary_csv(rows, self.log_dir / "summary.csv")
        return rows


def write_summary_csv(rows: List[RunSummary], path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(asdict(rows[0]).keys()))
        w.writeheader()
        for r in rows:
            w.writerow(asdict(r))
    logger.info("wrote %s with %d rows", path, len(rows))
