"""Evaluation harness: run many CNF files and save results.csv"""

from __future__ import annotations

import csv
import logging
import os
from typing import Dict, Iterable, List, Optional

from solver import SolveResult, solve_dimacs

logger = logging.getLogger(__name__)


def find_cnf_files(path: str) -> List[str]:
    """If path is a file -> [path]. If directory -> all *.cnf under it."""
    if os.path.isfile(path):
        return [path]

    cnfs: List[str] = []
    for root, _, files in os.walk(path):
        for f in files:
            if f.endswith(".cnf"):
                cnfs.append(os.path.join(root, f))
    cnfs.sort()
    return cnfs


def _result_to_row(cnf_path: str, result: SolveResult) -> Dict[str, object]:
    return {
        "file": os.path.basename(cnf_path),
        "path": cnf_path,
        "status": result.status,
        "runtime_sec": round(result.runtime_sec, 6),
        "decisions": result.stats.decisions,
        "backtracks": result.stats.backtracks,
        "conflicts": result.stats.conflicts,
        "propagations": result.stats.propagations,
    }


def run_benchmarks(
    cnf_files: Iterable[str],
    out_csv: str = "results.csv",
    timeout_sec: Optional[float] = 10.0,
) -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []

    for cnf_path in cnf_files:
        result = solve_dimacs(cnf_path, timeout_sec=timeout_sec)
        row = _result_to_row(cnf_path, result)
        rows.append(row)

        print(
            f"{os.path.basename(cnf_path)} -> {result.status} "
            f"({row['runtime_sec']}s, decisions={row['decisions']}, backtracks={row['backtracks']})"
        )

    fieldnames = list(rows[0].keys()) if rows else []
    with open(out_csv, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow(r)

    logger.info("saved %d rows to %s", len(rows), out_csv)
    print(f"\nSaved results to: {out_csv}")
    return rows


if __name__ == "__main__":
    import argparse

    ap = argparse.ArgumentParser(description="Run DPLL solver benchmarks")
    ap.add_argument("path", help="A .cnf file or directory containing .cnf files")
    ap.add_argument("--out", default="results.csv")
    ap.add_argument("--timeout", type=float, default=10.0)
    args = ap.parse_args()

    cnfs = find_cnf_files(args.path)
    run_benchmarks(cnfs, out_csv=args.out, timeout_sec=args.timeout)
