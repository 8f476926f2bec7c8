"""Tests for the term AST: free variables, substitution, alpha-equivalence."""

from typedsets.helpers import TYPE, app, forall, impl, lam, ref, v
from typedsets.terms import (
    App,
    Lam,
    Pi,
    Sort,
    Var,
    alpha_eq,
    fresh_name,
    free_vars,
    pretty,
    refs,
    subst,
)


def test_free_vars_skip_bound() -> None:
    t = Pi("x", Var("A"), App(Var("x"), Var("z")))
    assert free_vars(t) == {"A", "z"}


def test_refs_collects_nested_names() -> None:
    t = ref("subset-def", v("T"), ref("emptyset", v("T")), v("s"))
    assert refs(t) == {"subset-def", "emptyset"}


def test_subst_replaces_free_occurrences() -> None:
    t = app(v("f"), v("x"), v("y"))
    assert subst(t, {"x": v("a")}) == app(v("f"), v("a"), v("y"))


def test_subst_is_simultaneous() -> None:
    t = app(v("x"), v("y"))
    assert subst(t, {"x": v("y"), "y": v("x")}) == app(v("y"), v("x"))


def test_subst_leaves_bound_variable_alone() -> None:
    t = Lam("x", TYPE, Var("x"))
    assert subst(t, {"x": v("a")}) == t


def test_subst_avoids_capture() -> None:
    t = Lam("y", TYPE, App(Var("x"), Var("y")))
    out = subst(t, {"x": Var("y")})
    assert out == Lam("y1", TYPE, App(Var("y"), Var("y1")))


def test_fresh_name() -> None:
    assert fresh_name("x", {"x"}) == "x1"
    assert fresh_name("x", {"x", "x1", "x2"}) == "x3"


class TestAlphaEq:
    def test_renamed_binder(self) -> None:
        assert alpha_eq(lam([("x", TYPE)], v("x")), lam([("y", TYPE)], v("y")))

    def test_swapped_names(self) -> None:
        a = lam([("x", TYPE), ("y", TYPE)], v("x"))
        b = lam([("y", TYPE), ("x", TYPE)], v("y"))
        assert alpha_eq(a, b)

    def test_different_binding_structure(self) -> None:
        a = lam([("x", TYPE), ("y", TYPE)], v("x"))
        b = lam([("x", TYPE), ("y", TYPE)], v("y"))
        assert not alpha_eq(a, b)

    def test_free_versus_bound(self) -> None:
        assert not alpha_eq(lam([("x", TYPE)], v("x")), lam([("y", TYPE)], v("x")))

    def test_refs_compare_argumentwise(self) -> None:
        assert alpha_eq(ref("not", v("A")), ref("not", v("A")))
        assert not alpha_eq(ref("not", v("A")), ref("not", v("B")))


class TestPretty:
    def test_sort(self) -> None:
        assert pretty(TYPE) == ":type"
        assert pretty(Sort("kind")) == ":kind"

    def test_implication_chain(self) -> None:
        assert pretty(impl(v("A"), v("B"), v("C"))) == "(==> A B C)"

    def test_dependent_product(self) -> None:
        assert pretty(forall([("x", v("A"))], app(v("P"), v("x")))) == "(forall [x A] (P x))"

    def test_reference(self) -> None:
        assert pretty(ref("subset-def", v("T"), v("s"), v("s"))) == "(subset-def T s s)"
        assert pretty(ref("absurd")) == "absurd"
