"""Run the solver on one DIMACS CNF file or one Sudoku puzzle."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from errors import ParseError
from solver import solve_cnf, solve_dimacs
from sudoku import Sudoku

EXIT_SAT = 0
EXIT_UNSAT = 1
EXIT_TIMEOUT = 2


def _print_result(result) -> None:
    print("\n=== RESULT ===")
    print("Status:", result.status)
    print("Runtime (sec):", round(result.runtime_sec, 6))
    print("Decisions:", result.stats.decisions)
    print("Backtracks:", result.stats.backtracks)
    print("Conflicts:", result.stats.conflicts)
    print("Propagations:", result.stats.propagations)


def run_dimacs(path: str, timeout_sec: Optional[float]) -> int:
    result = solve_dimacs(path, timeout_sec=timeout_sec)
    _print_result(result)

    if result.status == "SAT":
        print("Assignment:")
        for v, val in sorted(result.assignment.items()):
            print(f"  {v} = {val}")
        return EXIT_SAT
    return EXIT_TIMEOUT if result.status == "TIMEOUT" else EXIT_UNSAT


def run_sudoku(path: str, dim: int, timeout_sec: Optional[float]) -> int:
    puzzle = Sudoku.from_file(dim, path)
    print(puzzle)
    result = solve_cnf(puzzle.to_formula(), timeout_sec=timeout_sec)
    _print_result(result)

    if result.status == "TIMEOUT":
        return EXIT_TIMEOUT
    solution = puzzle.interpret_solution(result.environment)
    if solution is None:
        print("No solution")
        return EXIT_UNSAT
    print()
    print(solution)
    return EXIT_SAT


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="DPLL SAT solver")
    ap.add_argument("path", help="Path to a DIMACS CNF file, or a puzzle file with --sudoku")
    ap.add_argument("--sudoku", type=int, metavar="DIM", help="Read PATH as a Sudoku puzzle of block dimension DIM")
    ap.add_argument("--timeout", type=float, default=None)
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.sudoku is not None:
            return run_sudoku(args.path, args.sudoku, args.timeout)
        return run_dimacs(args.path, args.timeout)
    except (OSError, ParseError) as exc:
        ap.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
