"""DPLL search with unit propagation and chronological backtracking.

core.py has the formula algebra.
This file is the *engine* that searches it until SAT/UNSAT/timeout.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from core import BoolLiteral, Clause, Formula
from env import Environment
from errors import SolverTimeoutError

logger = logging.getLogger(__name__)

# Stack frames used per bound variable, plus headroom for the caller.
_FRAMES_PER_VARIABLE = 2
_RECURSION_HEADROOM = 200


@dataclass
class SolveStats:
    decisions: int = 0
    backtracks: int = 0
    conflicts: int = 0
    propagations: int = 0


@dataclass
class SolveResult:
    status: str  # "SAT", "UNSAT", or "TIMEOUT"
    runtime_sec: float
    stats: SolveStats
    environment: Optional[Environment] = None

    @property
    def assignment(self) -> Dict[str, bool]:
        if self.environment is None:
            return {}
        return self.environment.to_dict()


def substitute(clauses: Sequence[Clause], literal: BoolLiteral) -> Tuple[Clause, ...]:
    """Set `literal` to true in every clause, dropping the satisfied ones."""
    reduced = []
    for clause in clauses:
        new_clause = clause.reduce(literal)
        if new_clause is not None:
            reduced.append(new_clause)
    return tuple(reduced)


def _assume(environment: Environment, literal: BoolLiteral) -> Environment:
    """Bind the literal's variable so that the literal is true."""
    if literal.polarity:
        return environment.put_true(literal.variable)
    return environment.put_false(literal.variable)


class DPLLSearch:
    """
    One depth-first search. Each recursive call binds exactly one new
    variable, so the depth is bounded by the number of variables.
    """

    def __init__(self, timeout_sec: Optional[float] = None):
        self.timeout_sec = timeout_sec
        self.stats = SolveStats()
        self.start = time.perf_counter()

    def elapsed(self) -> float:
        return time.perf_counter() - self.start

    def timed_out(self) -> bool:
        return self.timeout_sec is not None and self.elapsed() > self.timeout_sec

    def search(self, clauses: Tuple[Clause, ...], environment: Environment) -> Optional[Environment]:
        if not clauses:
            return environment

        if self.timed_out():
            raise SolverTimeoutError(time_spent=self.elapsed())

        # min() keeps the first of several equally short clauses.
        clause = min(clauses, key=len)
        if clause.is_empty():
            self.stats.conflicts += 1
            return None

        literal = clause.choose_literal()
        if len(clause) == 1:
            self.stats.propagations += 1
            return self.search(substitute(clauses, literal), _assume(environment, literal))

        self.stats.decisions += 1
        logger.debug("decide %r (%d clauses left)", literal, len(clauses))
        solution = self.search(substitute(clauses, literal), _assume(environment, literal))
        if solution is not None:
            return solution

        self.stats.backtracks += 1
        negation = literal.negate()
        logger.debug("backtrack, trying %r", negation)
        return self.search(substitute(clauses, negation), _assume(environment, negation))


def _ensure_recursion_limit(num_variables: int) -> None:
    needed = num_variables * _FRAMES_PER_VARIABLE + _RECURSION_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug("raising recursion limit to %d", needed)
        sys.setrecursionlimit(needed)


def solve_cnf(formula: Formula, timeout_sec: Optional[float] = None) -> SolveResult:
    search = DPLLSearch(timeout_sec=timeout_sec)
    _ensure_recursion_limit(len(formula.variables()))

    try:
        environment = search.search(formula.clauses, Environment())
    except SolverTimeoutError as exc:
        logger.info("search stopped: %s", exc)
        return SolveResult("TIMEOUT", search.elapsed(), search.stats)

    if environment is None:
        result = SolveResult("UNSAT", search.elapsed(), search.stats)
    else:
        assert formula.is_satisfied_by(environment), "solver returned a non-satisfying environment"
        result = SolveResult("SAT", search.elapsed(), search.stats, environment)

    logger.info(
        "%s in %.6fs (decisions=%d, backtracks=%d, propagations=%d)",
        result.status,
        result.runtime_sec,
        result.stats.decisions,
        result.stats.backtracks,
        result.stats.propagations,
    )
    return result


def solve(formula: Formula) -> Optional[Environment]:
    """
    An environment under which every clause of `formula` is true, or None
    if the formula is unsatisfiable. Variables left unbound are don't-cares.
    """
    return solve_cnf(formula).environment


def solve_dimacs(path: str, **kwargs) -> SolveResult:
    from parser import parse_dimacs
    formula = parse_dimacs(path)
    return solve_cnf(formula, **kwargs)
