"""Tests for the powerset of relations."""

import pytest

from typedsets.env import EntryKind, Environment
from typedsets.helpers import TYPE, app, forall, impl, ref, v
from typedsets.kernel import check, convertible
from typedsets.powerrel import powerrel, rel_elem
from typedsets.proof import Proof
from typedsets.rel import rel, releq
from typedsets.terms import alpha_eq

T, U, X, R, S, u = v("T"), v("U"), v("X"), v("R"), v("S"), v("u")

TUX = (("T", TYPE), ("U", TYPE), ("X", powerrel(T, U)))
UNIQUE = TUX + (("u", ref("rel-unique-def", T, U, X)),)
THE = ref("the-rel-ax", T, U, X, u)


def test_powerrel_is_a_predicate_on_relations(library: Environment) -> None:
    assert convertible(library, powerrel(T, U), impl(rel(T, U), TYPE))
    assert convertible(library, rel_elem(T, U, R, X), app(X, R))


@pytest.mark.parametrize(
    "name, statement",
    [
        ("rel-ex-intro-thm", impl(rel_elem(T, U, R, X), ref("rel-ex-def", T, U, X))),
        ("the-rel-single", ref("rel-single-def", T, U, X)),
        (
            "the-rel-lemma",
            forall([("R", rel(T, U))], impl(rel_elem(T, U, R, X), releq(T, U, R, THE))),
        ),
    ],
)
def test_theorem_statements(library: Environment, name: str, statement) -> None:
    entry = library.lookup(name)
    assert entry.kind == EntryKind.THEOREM
    assert alpha_eq(entry.type, statement)


@pytest.mark.parametrize("name", ["the-rel-ax", "the-rel-prop"])
def test_descriptor_is_postulated(library: Environment, name: str) -> None:
    assert library.lookup(name).kind == EntryKind.AXIOM


def test_members_are_releq(library: Environment) -> None:
    ctx = UNIQUE + (
        ("R", rel(T, U)),
        ("S", rel(T, U)),
        ("HR", rel_elem(T, U, R, X)),
        ("HS", rel_elem(T, U, S, X)),
    )
    pf = Proof(library, ctx)
    pf.have(
        "a",
        releq(T, U, R, S),
        by=app(ref("the-rel-single", T, U, X, u), R, S, v("HR"), v("HS")),
    )
    check(library, ctx, pf.qed("a"), releq(T, U, R, S))


class TestImplicitForms:
    def test_rel_elem_reads_the_second_argument(self, library: Environment) -> None:
        ctx = TUX + (("R", rel(T, U)),)
        assert library.expand(ctx, "rel-elem%", R, X) == rel_elem(T, U, R, X)

    def test_the_rel(self, library: Environment) -> None:
        assert library.expand(UNIQUE, "the-rel%", X, u) == THE
