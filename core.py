# Makes type hints behave as forward references, allowing us to use the class name in type hints before the class is defined.
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from env import Bool, Environment


@dataclass(frozen=True, order=True)
class Variable:
    """An atomic proposition. Two variables are the same iff their names are."""
    name: str

    def __repr__(self) -> str:
        return self.name


def _as_variable(variable: Union[Variable, str]) -> Variable:
    if isinstance(variable, Variable):
        return variable
    return Variable(variable)


class BoolLiteral:
    """
    A boolean literal for `variable`.
    polarity:
    * True  means the literal is positive (x)
    * False means the literal is negative (¬x)
    """
    __slots__ = ("variable", "polarity")

    def __init__(self, variable: Union[Variable, str], polarity: bool):
        self.variable = _as_variable(variable)
        self.polarity = polarity

    def __repr__(self) -> str:
        prefix = ""
        if not self.polarity:
            prefix = "¬"
        return prefix + self.variable.name

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoolLiteral):
            return False
        return self.variable == other.variable and self.polarity == other.polarity

    def __hash__(self):
        return hash((self.variable, self.polarity))

    def __invert__(self) -> BoolLiteral:
        return self.negate()

    @staticmethod
    def make_pos(variable: Union[Variable, str]) -> BoolLiteral:
        return BoolLiteral(variable, True)

    @staticmethod
    def make_neg(variable: Union[Variable, str]) -> BoolLiteral:
        return BoolLiteral(variable, False)

    def negate(self) -> BoolLiteral:
        return BoolLiteral(self.variable, not self.polarity)

    def negates(self, other: BoolLiteral) -> bool:
        """True iff `other` is this literal's complement."""
        return self.variable == other.variable and self.polarity != other.polarity

    def evaluate(self, environment: Environment) -> Bool:
        value = environment.get(self.variable)
        return value if self.polarity else value.negate()


class Clause:
    """
    A CNF clause (an OR of literals).

    Literals are kept in insertion order so that choose_literal is
    reproducible; duplicates are dropped on construction.
    """
    __slots__ = ("literals",)

    def __init__(self, *literals: BoolLiteral):
        unique: List[BoolLiteral] = []
        for literal in literals:
            assert isinstance(literal, BoolLiteral), f"not a literal: {literal!r}"
            if literal not in unique:
                unique.append(literal)
        self.literals: Tuple[BoolLiteral, ...] = tuple(unique)

    @classmethod
    def _wrap(cls, literals: Tuple[BoolLiteral, ...]) -> Clause:
        # Caller guarantees the tuple is already duplicate free.
        clause = cls.__new__(cls)
        clause.literals = literals
        return clause

    def __repr__(self) -> str:
        if not self.literals:
            return "{}"
        return "{" + ", ".join(repr(l) for l in self.literals) + "}"

    def __iter__(self) -> Iterator[BoolLiteral]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __contains__(self, literal: BoolLiteral) -> bool:
        return literal in self.literals

    def __eq__(self, other) -> bool:
        # Two clauses are equal if they have the same set of literals
        return isinstance(other, Clause) and frozenset(self.literals) == frozenset(other.literals)

    def __hash__(self) -> int:
        return hash(frozenset(self.literals))

    @staticmethod
    def make(*lit_strings: str) -> Clause:
        """Convenience for small tests: Clause.make("a","-b","c")"""
        literals: List[BoolLiteral] = []
        for lit_string in lit_strings:
            if lit_string.startswith("-"):
                literals.append(BoolLiteral.make_neg(lit_string[1:]))
            else:
                literals.append(BoolLiteral.make_pos(lit_string))
        return Clause(*literals)

    def size(self) -> int:
        return len(self.literals)

    def is_empty(self) -> bool:
        return not self.literals

    def add(self, literal: BoolLiteral) -> Clause:
        if literal in self.literals:
            return self
        return Clause._wrap(self.literals + (literal,))

    def union(self, other: Clause) -> Clause:
        """The disjunction of this clause and `other`."""
        merged = list(self.literals)
        for literal in other.literals:
            if literal not in merged:
                merged.append(literal)
        return Clause._wrap(tuple(merged))

    def is_tautology(self) -> bool:
        """True if the clause holds some literal together with its negation."""
        return any(literal.negate() in self.literals for literal in self.literals if literal.polarity)

    def choose_literal(self) -> BoolLiteral:
        assert self.literals, "choose_literal requires a non-empty clause"
        return self.literals[0]

    def reduce(self, literal: BoolLiteral) -> Optional[Clause]:
        """Assume `literal` is true.

        - `literal` in the clause   => None, the clause is satisfied
        - ¬`literal` in the clause  => the clause without ¬`literal`
        - otherwise                 => the clause unchanged
        """
        if literal in self.literals:
            return None
        negation = literal.negate()
        if negation not in self.literals:
            return self
        return Clause._wrap(tuple(l for l in self.literals if l != negation))

    def evaluate(self, environment: Environment) -> Bool:
        """Three-valued truth of the clause under a partial assignment."""
        result = Bool.FALSE
        for literal in self.literals:
            value = literal.evaluate(environment)
            if value is Bool.TRUE:
                return Bool.TRUE
            if value is Bool.UNDEFINED:
                result = Bool.UNDEFINED
        return result


class Formula:
    """
    An immutable boolean formula in conjunctive normal form.

    The clauses c1, c2, ..., cn represent (c1 and c2 and ... and cn); the
    empty formula is vacuously true. Duplicate clauses are allowed.
    """
    __slots__ = ("clauses",)

    def __init__(self, *clauses: Clause):
        for clause in clauses:
            assert isinstance(clause, Clause), f"not a clause: {clause!r}"
        self.clauses: Tuple[Clause, ...] = tuple(clauses)

    @classmethod
    def _wrap(cls, clauses: Iterable[Clause]) -> Formula:
        formula = cls.__new__(cls)
        formula.clauses = tuple(clauses)
        return formula

    @staticmethod
    def of_variable(variable: Union[Variable, str]) -> Formula:
        """The formula holding the single clause (variable)."""
        return Formula(Clause(BoolLiteral.make_pos(variable)))

    def __repr__(self) -> str:
        return "Formula[" + ", ".join(repr(c) for c in self.clauses) + "]"

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    def __eq__(self, other) -> bool:
        return isinstance(other, Formula) and self.clauses == other.clauses

    def __hash__(self) -> int:
        return hash(self.clauses)

    def __and__(self, other: Formula) -> Formula:
        return self.and_(other)

    def __or__(self, other: Formula) -> Formula:
        return self.or_(other)

    def __invert__(self) -> Formula:
        return self.not_()

    def add_clause(self, clause: Clause) -> Formula:
        assert isinstance(clause, Clause), f"not a clause: {clause!r}"
        return Formula._wrap(self.clauses + (clause,))

    def and_(self, other: Formula) -> Formula:
        return Formula._wrap(self.clauses + other.clauses)

    def or_(self, other: Formula) -> Formula:
        """Distribute over both conjunctions: (a & b) | (c & d) => (a|c) & (a|d) & (b|c) & (b|d).

        Tautological clauses are left out of the result.
        """
        clauses: List[Clause] = []
        for clause1 in self.clauses:
            for clause2 in other.clauses:
                merged = clause1.union(clause2)
                if not merged.is_tautology():
                    clauses.append(merged)
        return Formula._wrap(clauses)

    def not_(self) -> Formula:
        """De Morgan per clause, then `or_` the pieces back into CNF.

        !((a | b) & c) => (!a & !b) | !c => (!a | !c) & (!b | !c)
        """
        result: Optional[Formula] = None
        for clause in self.clauses:
            negated = Formula._wrap(Clause(literal.negate()) for literal in clause)
            result = negated if result is None else result.or_(negated)
        if result is None:
            # not(true) is the formula with one empty clause
            return Formula(Clause())
        return result

    def variables(self) -> List[Variable]:
        """Collect all variables that appear in the formula, sorted by name."""
        seen = {literal.variable for clause in self.clauses for literal in clause}
        return sorted(seen)

    def evaluate(self, environment: Environment) -> Bool:
        result = Bool.TRUE
        for clause in self.clauses:
            value = clause.evaluate(environment)
            if value is Bool.FALSE:
                return Bool.FALSE
            if value is Bool.UNDEFINED:
                result = Bool.UNDEFINED
        return result

    def is_satisfied_by(self, environment: Environment) -> bool:
        return self.evaluate(environment) is Bool.TRUE
