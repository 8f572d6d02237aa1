"""Brute-force oracles shared by the tests."""

from __future__ import annotations

import random
from itertools import product
from typing import Iterator, List, Sequence

from core import BoolLiteral, Clause, Formula, Variable
from env import Environment


def environments(variables: Sequence[Variable]) -> Iterator[Environment]:
    """Every total assignment over `variables`."""
    for values in product((True, False), repeat=len(variables)):
        env = Environment()
        for variable, value in zip(variables, values):
            env = env.put(variable, value)
        yield env


def equivalent(f: Formula, g: Formula) -> bool:
    variables = sorted(set(f.variables()) | set(g.variables()))
    return all(f.is_satisfied_by(e) == g.is_satisfied_by(e) for e in environments(variables))


def brute_force_satisfiable(formula: Formula) -> bool:
    return any(formula.is_satisfied_by(e) for e in environments(formula.variables()))


def random_formula(rng: random.Random, num_vars: int, num_clauses: int, max_width: int = 3) -> Formula:
    names: List[str] = [f"x{i}" for i in range(num_vars)]
    clauses = []
    for _ in range(num_clauses):
        width = rng.randint(1, max_width)
        clauses.append(Clause(*[BoolLiteral(rng.choice(names), rng.random() < 0.5) for _ in range(width)]))
    return Formula(*clauses)
