#!/usr/bin/env python3
import argparse, os, sys, logging

# Make project root importable even if you run this from scripts/
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tsplib_bench.benchmark import TSPLIBTester, load_problems
from tsplib_bench.config import load_config

def main():
    ap = argparse.ArgumentParser(description="Run every configured solver on every configured TSPLIB problem.")
    ap.add_argument('--config', required=True, help='Path to YAML config (configs/benchmark.yaml)')
    ap.add_argument('--runs', type=int, default=None, help='Override benchmark.runs')
    ap.add_argument('--results_dir', default=None, help='Override paths.results_dir')
    ap.add_argument('--log-level', default='INFO')
    args = ap.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    runs = args.runs if args.runs is not None else cfg.runs
    results_dir = args.results_dir or cfg.results_dir

    problems = load_problems(cfg.problems, symmetrize=cfg.symmetrize)
    tester = TSPLIBTester(results_dir, problems, cfg.build_solvers(), runs)
    rows = tester.start_tests()

    for r in rows:
        gap = "n/a" if r.gap_best_pct is None else f"{r.gap_best_pct:.2f}%"
        print(f"[INFO] {r.problem:<20} {r.solver:<18} best={r.best:.1f}  mean={r.mean:.1f}  gap={gap}  time={r.mean_time_s:.3f}s")
    print(f"\nAll done. Results -> {results_dir}")

if __name__ == "__main__":
    main()
