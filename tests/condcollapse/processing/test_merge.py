from condcollapse.forms.clauses import Clause
from condcollapse.processing.merge import try_collapse, try_collapse_flip, try_collapse_pair
from condcollapse.relations.rules import CollapseRule

P, Q, R, V, V1, V2 = "(p == 1)", "q", "(r == 1)", "(v == 0)", "(v == 1)", "(v == 2)"


# --- single-clause shrink ---

def test_single_shrink_drops_implied_alternative():
    rule = CollapseRule.new([P], [V])
    assert try_collapse(Clause.of(P, Q, V), rule) == Clause.of(P, Q)


def test_single_shrink_needs_prerequisites_and_alternative():
    rule = CollapseRule.new([P], [V])
    assert try_collapse(Clause.of(Q, V), rule) is None
    assert try_collapse(Clause.of(P, Q), rule) is None


def test_single_shrink_ignores_pair_rules():
    assert try_collapse(Clause.of(P, V1), CollapseRule.new([P], [V1, V2])) is None


def test_single_shrink_keeps_order_and_input():
    c = Clause.of(Q, V, P)
    out = try_collapse(c, CollapseRule.new([P], [V]))
    assert out.literals == (Q, P)
    assert c.literals == (Q, V, P)


# --- flip merge ---

def test_flip_merge():
    a = Clause.of("(os == 1)", "b", "not x")
    b = Clause.of("(os == 1)", "b", "x")
    assert try_collapse_flip(a, b) == Clause.of("(os == 1)", "b")
    assert try_collapse_flip(b, a) == Clause.of("(os == 1)", "b")


def test_flip_merge_keeps_first_operand_order():
    out = try_collapse_flip(Clause.of("x", "b", "a"), Clause.of("a", "b", "not x"))
    assert out.literals == ("b", "a")


def test_flip_merge_rejects_two_differences():
    assert try_collapse_flip(Clause.of("a", "not x", "not y"), Clause.of("a", "x", "y")) is None
    assert try_collapse_flip(Clause.of("a", "x"), Clause.of("b", "x")) is None


def test_flip_merge_needs_equal_length():
    assert try_collapse_flip(Clause.of("a", "x"), Clause.of("not x")) is None


def test_flip_merge_never_flips_equalities():
    eq, neg = "(a == 1)", "not (a == 1)"
    assert try_collapse_flip(Clause.of(eq), Clause.of(neg)) is None
    assert try_collapse_flip(Clause.of(neg), Clause.of(eq)) is None
    assert try_collapse_flip(Clause.of(neg, "x"), Clause.of(eq, "x")) is None


def test_identical_clauses_collapse_to_one():
    assert try_collapse_flip(Clause.of("a", "b"), Clause.of("b", "a")) == Clause.of("a", "b")


# --- rule-guided merge ---

def test_pair_merge():
    rule = CollapseRule.new([P], [V1, V2])
    assert try_collapse_pair(Clause.of(P, Q, V1), Clause.of(P, Q, V2), rule) == Clause.of(P, Q)
    assert try_collapse_pair(Clause.of(P, Q, V2), Clause.of(P, Q, V1), rule) == Clause.of(P, Q)


def test_pair_merge_needs_prerequisite_in_both():
    rule = CollapseRule.new([P], [V1, V2])
    assert try_collapse_pair(Clause.of(P, Q, V1), Clause.of(R, Q, V2), rule) is None


def test_pair_merge_rejects_other_differences():
    rule = CollapseRule.new([P], [V1, V2])
    assert try_collapse_pair(Clause.of(P, Q, V1), Clause.of(P, "not q", V2), rule) is None
    assert try_collapse_pair(Clause.of(P, Q, V1), Clause.of(P, Q, V), rule) is None
    assert try_collapse_pair(Clause.of(P, V1), Clause.of(P, Q, V2), rule) is None


def test_pair_merge_ignores_single_rules():
    assert try_collapse_pair(Clause.of(P, V1), Clause.of(P, V2), CollapseRule.new([P], [V1])) is None
