"""DIMACS CNF parser.

Clauses can be split across multiple lines, so we read tokens until we hit 0.
"""
from __future__ import annotations

from typing import Iterable, List

from core import BoolLiteral, Clause, Formula
from errors import DimacsParseError


def parse_dimacs_lines(lines: Iterable[str]) -> Formula:
    clauses: List[Clause] = []
    current_lits: List[BoolLiteral] = []

    for line_no, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()

        # Skip comments / problem line / empty lines
        if not line or line.startswith("c") or line.startswith("p"):
            continue
        # SATLIB benchmarks end with a "%" trailer
        if line.startswith("%"):
            break

        for tok in line.split():
            try:
                value = int(tok)
            except ValueError:
                raise DimacsParseError(f"expected an integer literal, got {tok!r}", line=line_no) from None

            if value == 0:
                # End of this clause
                if current_lits:
                    clauses.append(Clause(*current_lits))
                    current_lits = []
                continue

            if value < 0:
                current_lits.append(BoolLiteral.make_neg(str(-value)))
            else:
                current_lits.append(BoolLiteral.make_pos(str(value)))

    # If the file forgot a trailing 0, still keep the last clause.
    if current_lits:
        clauses.append(Clause(*current_lits))

    return Formula(*clauses)


def parse_dimacs(path: str) -> Formula:
    with open(path, "r") as f:
        return parse_dimacs_lines(f)
