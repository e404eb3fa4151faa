# tsplib_bench/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .solver import Solver, build_solver


@dataclass
class BenchmarkConfig:
    problems: List[Tuple[Path, Optional[float]]]
    solvers: List[Tuple[str, Dict[str, Any]]]
    runs: int = 1
    results_dir: Path = Path("results")
    symmetrize: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def build_solvers(self) -> List[Solver]:
        return [build_solver(kind, params) for kind, params in self.solvers]


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    val = cfg.get(key) or {}
    if not isinstance(val, dict):
        raise ValueError(f"config: '{key}' must be a mapping")
    return val


def parse_config(cfg: Dict[str, Any], base_dir: Union[str, Path] = ".") -> BenchmarkConfig:
    """
    Turn a loaded YAML mapping into a BenchmarkConfig.

    Layout (see configs/benchmark.yaml):
      paths:     {problems_dir, results_dir}   relative to ``base_dir``
      benchmark: {runs, symmetrize, problems: [{file, best}]}
      solvers:   [{kind, params}]
    """
    if not isinstance(cfg, dict):
        raise ValueError("config: top level must be a mapping")
    base_dir = Path(base_dir)
    paths = _section(cfg, "paths")
    bench = _section(cfg, "benchmark")

    problems_dir = base_dir / paths.get("problems_dir", ".")
    results_dir = base_dir / paths.get("results_dir", "results")

    problems: List[Tuple[Path, Optional[float]]] = []
    for i, entry in enumerate(bench.get("problems") or []):
        if isinstance(entry, str):
            entry = {"file": entry}
        if not isinstance(entry, dict) or "file" not in entry:
            raise ValueError(f"config: benchmark.problems[{i}] needs a 'file'")
        best = entry.get("best")
        problems.append((problems_dir / entry["file"], float(best) if best is not None else None))
    if not problems:
        raise ValueError("config: benchmark.problems is empty")

    solvers: List[Tuple[str, Dict[str, Any]]] = []
    for i, entry in enumerate(cfg.get("solvers") or []):
        if isinstance(entry, str):
            entry = {"kind": entry}
        if not isinstance(entry, dict) or "kind" not in entry:
            raise ValueError(f"config: solvers[{i}] needs a 'kind'")
        solvers.append((entry["kind"], dict(entry.get("params") or {})))
    if not solvers:
        raise ValueError("config: solvers is empty")

    runs = int(bench.get("runs", 1))
    if runs < 1:
        raise ValueError(f"config: benchmark.runs must be >= 1, got {runs}")

    known = {"paths", "benchmark", "solvers"}
    out = BenchmarkConfig(
        problems=problems,
        solvers=solvers,
        runs=runs,
        results_dir=results_dir,
        symmetrize=bool(bench.get("symmetrize", False)),
        extra={k: v for k, v in cfg.items() if k not in known},
    )
    # fail early on unknown solver kinds / parameters
    out.build_solvers()
    return out


def load_config(path: Union[str, Path]) -> BenchmarkConfig:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    return parse_config(cfg, base_dir=path.parent)
