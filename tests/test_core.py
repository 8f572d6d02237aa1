import random

import pytest

from core import BoolLiteral, Clause, Formula, Variable
from env import Bool, Environment
from helpers import environments, equivalent, random_formula

a = BoolLiteral.make_pos("a")
b = BoolLiteral.make_pos("b")
c = BoolLiteral.make_pos("c")
d = BoolLiteral.make_pos("d")
na = a.negate()
nb = b.negate()
nc = c.negate()


class TestLiteral:
    def test_variables_compare_by_name(self):
        assert Variable("x") == Variable("x")
        assert hash(Variable("x")) == hash(Variable("x"))
        assert BoolLiteral.make_pos("x") == BoolLiteral.make_pos(Variable("x"))

    def test_negation_is_involutive(self):
        for literal in (a, na):
            assert literal.negate().negate() == literal
        assert ~~a == a

    def test_negates_is_symmetric(self):
        assert a.negates(na)
        assert na.negates(a)
        assert not a.negates(a)
        assert not a.negates(nb)

    def test_repr(self):
        assert repr(a) == "a"
        assert repr(na) == "¬a"

    def test_evaluate(self):
        env = Environment().put_true(a.variable)
        assert a.evaluate(env) is Bool.TRUE
        assert na.evaluate(env) is Bool.FALSE
        assert b.evaluate(env) is Bool.UNDEFINED


class TestClause:
    def test_duplicates_are_dropped(self):
        clause = Clause(a, b, a)
        assert len(clause) == 2
        assert clause.add(b) is clause

    def test_add_returns_new_clause(self):
        clause = Clause(a)
        bigger = clause.add(nb)
        assert len(clause) == 1
        assert bigger == Clause(nb, a)

    def test_make(self):
        assert Clause.make("a", "-b") == Clause(a, nb)

    def test_reduce_satisfied(self):
        assert Clause(a, nb).reduce(a) is None

    def test_reduce_removes_negation(self):
        assert Clause(na, b, c).reduce(a) == Clause(b, c)
        assert Clause(na).reduce(a).is_empty()

    def test_reduce_unrelated(self):
        clause = Clause(b, nc)
        assert clause.reduce(a) == clause

    def test_choose_literal_is_stable(self):
        clause = Clause(nb, a, c)
        assert clause.choose_literal() == nb
        assert clause.choose_literal() == nb

    def test_choose_literal_on_empty_clause(self):
        with pytest.raises(AssertionError):
            Clause().choose_literal()

    def test_tautology(self):
        assert Clause(a, b, na).is_tautology()
        assert not Clause(a, nb).is_tautology()

    def test_evaluate(self):
        clause = Clause(a, nb)
        assert clause.evaluate(Environment()) is Bool.UNDEFINED
        assert clause.evaluate(Environment().put_false(a.variable).put_true(b.variable)) is Bool.FALSE
        assert clause.evaluate(Environment().put_false(b.variable)) is Bool.TRUE
        assert Clause().evaluate(Environment()) is Bool.FALSE


class TestFormula:
    def test_add_clause_does_not_mutate(self):
        f = Formula(Clause(a))
        g = f.add_clause(Clause(b))
        assert len(f) == 1
        assert list(g) == [Clause(a), Clause(b)]

    def test_of_variable(self):
        assert Formula.of_variable("a") == Formula(Clause(a))

    def test_and_concatenates(self):
        f = Formula(Clause(a, nb))
        g = Formula(Clause(c, na))
        assert (f & g).clauses == (Clause(a, nb), Clause(c, na))

    def test_or_distributes_unit_clauses(self):
        # (a & b) | (c & d) => (a|c) & (a|d) & (b|c) & (b|d)
        f = Formula(Clause(a), Clause(b))
        g = Formula(Clause(c), Clause(d))
        assert (f | g).clauses == (Clause(a, c), Clause(a, d), Clause(b, c), Clause(b, d))

    def test_or_drops_tautologies(self):
        assert len(Formula(Clause(a)) | Formula(Clause(na))) == 0

    def test_or_keeps_long_clauses_whole(self):
        f = Formula(Clause(a, b))
        g = Formula(Clause(c, d), Clause(na, nb))
        assert equivalent(f | g, Formula(Clause(a, b, c, d)))

    def test_not(self):
        # !((a | b) & c) => (!a | !c) & (!b | !c)
        f = Formula(Clause(a, b), Clause(c))
        assert (~f).clauses == (Clause(na, nc), Clause(nb, nc))

    def test_not_of_constants(self):
        true = Formula()
        false = Formula(Clause())
        assert ~true == false
        assert ~false == true

    def test_variables(self):
        f = Formula(Clause(nc, a), Clause(a, b))
        assert f.variables() == [a.variable, b.variable, c.variable]

    def test_evaluate(self):
        f = Formula(Clause(a), Clause(nb, c))
        assert f.evaluate(Environment().put_true(a.variable)) is Bool.UNDEFINED
        assert f.evaluate(Environment().put_false(a.variable)) is Bool.FALSE
        assert f.is_satisfied_by(Environment().put_true(a.variable).put_false(b.variable))


@pytest.mark.parametrize("seed", range(25))
def test_operators_match_truth_tables(seed):
    rng = random.Random(seed)
    f = random_formula(rng, num_vars=4, num_clauses=rng.randint(0, 3))
    g = random_formula(rng, num_vars=4, num_clauses=rng.randint(0, 3))
    variables = sorted(set(f.variables()) | set(g.variables()))

    for env in environments(variables):
        in_f = f.is_satisfied_by(env)
        in_g = g.is_satisfied_by(env)
        assert (f & g).is_satisfied_by(env) == (in_f and in_g)
        assert (f | g).is_satisfied_by(env) == (in_f or in_g)
        assert (~f).is_satisfied_by(env) == (not in_f)


@pytest.mark.parametrize("seed", range(10))
def test_algebraic_identities(seed):
    rng = random.Random(1000 + seed)
    f = random_formula(rng, num_vars=4, num_clauses=2)
    g = random_formula(rng, num_vars=4, num_clauses=2)
    h = random_formula(rng, num_vars=4, num_clauses=2)

    assert equivalent(~~f, f)
    assert equivalent(f | g, g | f)
    assert equivalent(f & g, g & f)
    assert equivalent((f | g) | h, f | (g | h))
    assert equivalent((f & g) & h, f & (g & h))
    assert equivalent(~(f & g), ~f | ~g)
    assert equivalent(~(f | g), ~f & ~g)
