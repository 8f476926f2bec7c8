"""Tests for partial functions."""

import pytest

from typedsets.env import EntryKind, Environment
from typedsets.helpers import TYPE, app, forall, lam, ref, v
from typedsets.kernel import check, convertible
from typedsets.notation import forall_in
from typedsets.pfun import pdom, pfun, ptotal
from typedsets.prelude import and_, ex
from typedsets.proof import Proof
from typedsets.rel import identity, rel
from typedsets.sets import elem, set_, set_equal, subset
from typedsets.terms import alpha_eq

T, U, f, frm, to = v("T"), v("U"), v("f"), v("from"), v("to")
x = v("x")

TUFF = (("T", TYPE), ("U", TYPE), ("f", rel(T, U)), ("from", set_(T)))


@pytest.mark.parametrize(
    "name, statement",
    [
        ("ridentity-pfun", forall([("from", set_(T))], pfun(T, T, identity(T), frm))),
        (
            "pfun-fun-prop",
            forall([("from", set_(T))], pfun(T, U, ref("pfun-fun", T, U, f), frm)),
        ),
        ("pdom-subset", subset(T, pdom(T, U, f, frm), frm)),
        ("ridentity-total", forall([("from", set_(T))], ptotal(T, T, identity(T), frm))),
        (
            "pfun-fun-total",
            forall([("from", set_(T))], ptotal(T, U, ref("pfun-fun", T, U, f), frm)),
        ),
    ],
)
def test_theorem_statements(library: Environment, name: str, statement) -> None:
    entry = library.lookup(name)
    assert entry.kind == EntryKind.THEOREM
    assert alpha_eq(entry.type, statement)


@pytest.mark.parametrize("name", ["pcompose-pfun", "pinjective-single"])
def test_unproved_statements_are_conjectures(library: Environment, name: str) -> None:
    entry = library.lookup(name)
    assert entry.kind == EntryKind.CONJECTURE
    assert entry.body is None


def test_total_means_domain_equality(library: Environment) -> None:
    assert convertible(library, ptotal(T, U, f, frm), set_equal(T, pdom(T, U, f, frm), frm))


def test_actual_domain(library: Environment) -> None:
    y = v("y")
    expected = and_(elem(T, x, frm), ex(U, lam([("y", U)], app(f, x, y))))
    assert convertible(library, elem(T, x, pdom(T, U, f, frm)), expected)


def test_bijective_is_injective_and_surjective(library: Environment) -> None:
    args = (T, U, f, frm, to)
    assert convertible(
        library,
        ref("pbijective", *args),
        and_(ref("pinjective", *args), ref("psurjective", *args)),
    )


def test_identity_is_total_on_a_given_domain(library: Environment) -> None:
    ctx = (("T", TYPE), ("from", set_(T)))
    pf = Proof(library, ctx)
    pf.have("a", ptotal(T, T, identity(T), frm), by=app(ref("ridentity-total", T), frm))
    image = forall_in(("x", T, frm), ex(T, lam([("y", T)], app(identity(T), x, v("y")))))
    pf.have("b", image, by=app(ref("ptotal-domain", T, T, identity(T), frm), pf["a"]))
    check(library, ctx, pf.qed("b"), image)


class TestImplicitForms:
    def test_pfun(self, library: Environment) -> None:
        assert library.expand(TUFF, "pfun%", f, frm) == pfun(T, U, f, frm)

    def test_ptotal_domain(self, library: Environment) -> None:
        assert library.expand(TUFF, "ptotal-domain%", f, frm) == ref(
            "ptotal-domain", T, U, f, frm
        )
