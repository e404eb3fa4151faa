#!/usr/bin/env python3
"""
Convert an ATSP file into its symmetric equivalent and write it as a
FULL_MATRIX TSPLIB file. Symmetric inputs are copied through unchanged.

Usage (from repo root):
  python scripts/convert_atsp.py problems/sample5.atsp results/sample5.sym.tsp
"""
import argparse, os, sys, logging

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tsplib_bench import MalformedInstance, load_tsplib, save_tsplib, symmetric_offset, to_symmetric

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="TSPLIB .atsp/.tsp file")
    ap.add_argument("output", help="where to write the symmetric problem")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        problem = load_tsplib(args.input)
    except MalformedInstance as e:
        print(f"[ERROR] {args.input}: {e}", file=sys.stderr); sys.exit(2)

    sym = to_symmetric(problem)
    if sym is problem:
        print(f"[WARN] {problem.name} is already symmetric; writing it unchanged.")
    else:
        print(f"[INFO] {problem.name}: n={problem.size} -> {sym.name}: n={sym.size}, "
              f"tour offset={symmetric_offset(problem.weights):g}")
    save_tsplib(sym, args.output)
    print(f"[OK] wrote {args.output}")

if __name__ == "__main__":
    main()
