"""Typed sets as predicates.

A set whose elements are of type ``T`` is a predicate ``T ==> type``:
membership of ``x`` in ``s`` is just ``(s x)``. The set theory is therefore
typed, and quite different from untyped axiomatic theories such as ZF, but
most elementary constructions have a natural counterpart.

Two equalities are provided:

  - ``seteq``      mutual inclusion
  - ``set-equal``  Leibniz equality: every predicate on sets agrees

Leibniz equality implies ``seteq`` by instantiating the predicate with
membership. The converse cannot be derived, because membership of an element
does not lift to an arbitrary predicate on sets; it is the axiom
``seteq-implies-set-equal-ax``.
"""

from __future__ import annotations

from .env import Environment
from .helpers import TYPE, app, forall, impl, lam, ref, v
from .implicit import on_set, traced
from .kernel import Context
from .prelude.prop import absurd, and_, iff, not_, truth
from .proof import Proof
from .terms import Term

T, s, P = v("T"), v("s"), v("P")
s1, s2, s3 = v("s1"), v("s2"), v("s3")
x = v("x")


def set_(ty: Term) -> Term:
    return ref("set", ty)


def elem(ty: Term, a: Term, st: Term) -> Term:
    return ref("elem-def", ty, a, st)


def fullset(ty: Term) -> Term:
    return ref("fullset", ty)


def emptyset(ty: Term) -> Term:
    return ref("emptyset", ty)


def subset(ty: Term, a: Term, b: Term) -> Term:
    return ref("subset-def", ty, a, b)


def seteq(ty: Term, a: Term, b: Term) -> Term:
    return ref("seteq-def", ty, a, b)


def set_equal(ty: Term, a: Term, b: Term) -> Term:
    return ref("set-equality", ty, a, b)


def psubset(ty: Term, a: Term, b: Term) -> Term:
    return ref("psubset-def", ty, a, b)


def install(env: Environment) -> None:
    env.define("set", [("T", TYPE)], impl(T, TYPE), doc="The type of sets whose elements are of type `T`.")
    env.define(
        "elem-def",
        [("T", TYPE), ("x", T), ("s", set_(T))],
        app(s, x),
        doc="Set membership: `x` is an element of `s`.",
    )

    ts = [("T", TYPE), ("s", set_(T))]
    t12 = [("T", TYPE), ("s1", set_(T)), ("s2", set_(T))]
    t123 = t12 + [("s3", set_(T))]

    _install_bounds(env)
    _install_subset(env, ts, t12, t123)
    _install_seteq(env, ts, t12, t123)
    _install_set_equal(env, ts, t12, t123)
    _install_psubset(env, ts, t12, t123)
    _install_implicits(env)


def _install_bounds(env: Environment) -> None:
    env.define(
        "fullset",
        [("T", TYPE)],
        lam([("x", T)], truth()),
        doc="The full set of a type: all inhabitants of `T` are elements.",
    )
    env.theorem(
        "fullset-intro",
        [("T", TYPE)],
        forall([("x", T)], elem(T, x, fullset(T))),
        lam([("x", T)], ref("truth-is-true")),
        doc="Introduction rule for the full set.",
    )
    env.define(
        "emptyset", [("T", TYPE)], lam([("x", T)], absurd()), doc="The empty set of a type."
    )
    env.theorem(
        "emptyset-prop",
        [("T", TYPE)],
        forall([("x", T)], not_(elem(T, x, emptyset(T)))),
        lam([("x", T), ("H", elem(T, x, emptyset(T)))], v("H")),
        doc="The main property of the empty set.",
    )


def _install_subset(env: Environment, ts, t12, t123) -> None:
    env.define(
        "subset-def",
        t12,
        forall([("x", T)], impl(elem(T, x, s1), elem(T, x, s2))),
        doc="`s1` is a subset of `s2`.",
    )

    pf = Proof(env, ts, name="subset-refl-thm")
    with pf.assume(("x", T), ("H", elem(T, x, s))):
        pf.have("a", elem(T, x, s), by=v("H"))
    env.theorem("subset-refl-thm", ts, subset(T, s, s), pf.qed("a"), doc="The subset relation is reflexive.")

    pf = Proof(env, t123, name="subset-trans-thm")
    with pf.assume(("H1", subset(T, s1, s2)), ("H2", subset(T, s2, s3))):
        with pf.assume(("x", T)):
            pf.have("a", impl(elem(T, x, s1), elem(T, x, s2)), by=app(v("H1"), x))
            pf.have("b", impl(elem(T, x, s2), elem(T, x, s3)), by=app(v("H2"), x))
            pf.have(
                "c",
                impl(elem(T, x, s1), elem(T, x, s3)),
                by=pf.call("impl-trans%", pf["a"], pf["b"]),
            )
    env.theorem(
        "subset-trans-thm",
        t123,
        impl(subset(T, s1, s2), subset(T, s2, s3), subset(T, s1, s3)),
        pf.qed("c"),
        doc="The subset relation is transitive.",
    )

    params = [("T", TYPE), ("P", impl(T, TYPE)), ("s1", set_(T)), ("s2", set_(T))]

    def on(st: Term) -> Term:
        return forall([("x", T)], impl(elem(T, x, st), app(P, x)))

    pf = Proof(env, params, name="subset-prop")
    with pf.assume(("H1", on(s2)), ("H2", subset(T, s1, s2))):
        with pf.assume(("x", T), ("Hx", elem(T, x, s1))):
            pf.have("a", elem(T, x, s2), by=app(v("H2"), x, v("Hx")))
            pf.have("b", app(P, x), by=app(v("H1"), x, pf["a"]))
    env.theorem(
        "subset-prop",
        params,
        impl(on(s2), subset(T, s1, s2), on(s1)),
        pf.qed("b"),
        doc="Preservation of properties on subsets.",
    )

    pf = Proof(env, ts, name="subset-emptyset-lower-bound")
    with pf.assume(("x", T), ("Hx", elem(T, x, emptyset(T)))):
        pf.have("a", absurd(), by=v("Hx"))
        pf.have("b", elem(T, x, s), by=app(ref("ex-falso", elem(T, x, s)), pf["a"]))
    env.theorem(
        "subset-emptyset-lower-bound",
        ts,
        subset(T, emptyset(T), s),
        pf.qed("b"),
        doc="The empty set is a subset of every set.",
    )

    pf = Proof(env, ts, name="subset-fullset-upper-bound")
    with pf.assume(("x", T), ("Hx", elem(T, x, s))):
        pf.have("a", elem(T, x, fullset(T)), by=ref("truth-is-true"))
    env.theorem(
        "subset-fullset-upper-bound",
        ts,
        subset(T, s, fullset(T)),
        pf.qed("a"),
        doc="The full set is a superset of every set.",
    )


def _install_seteq(env: Environment, ts, t12, t123) -> None:
    env.define(
        "seteq-def",
        t12,
        and_(subset(T, s1, s2), subset(T, s2, s1)),
        doc="Equality on sets, based on the subset relation.",
    )

    pf = Proof(env, ts, name="seteq-refl-thm")
    pf.have("a", subset(T, s, s), by=ref("subset-refl-thm", T, s))
    pf.have("b", seteq(T, s, s), by=pf.call("and-intro%", pf["a"], pf["a"]))
    env.theorem("seteq-refl-thm", ts, seteq(T, s, s), pf.qed("b"), doc="Set equality is reflexive.")

    pf = Proof(env, t12, name="seteq-sym-thm")
    with pf.assume(("H", seteq(T, s1, s2))):
        pf.have("a", subset(T, s1, s2), by=pf.call("and-elim-left%", v("H")))
        pf.have("b", subset(T, s2, s1), by=pf.call("and-elim-right%", v("H")))
        pf.have("c", seteq(T, s2, s1), by=pf.call("and-intro%", pf["b"], pf["a"]))
    env.theorem(
        "seteq-sym-thm",
        t12,
        impl(seteq(T, s1, s2), seteq(T, s2, s1)),
        pf.qed("c"),
        doc="Set equality is symmetric.",
    )

    pf = Proof(env, t123, name="seteq-trans-thm")
    with pf.assume(("H1", seteq(T, s1, s2)), ("H2", seteq(T, s2, s3))):
        pf.have("a1", subset(T, s1, s2), by=pf.call("and-elim-left%", v("H1")))
        pf.have("b1", subset(T, s2, s3), by=pf.call("and-elim-left%", v("H2")))
        pf.have(
            "c1",
            subset(T, s1, s3),
            by=app(ref("subset-trans-thm", T, s1, s2, s3), pf["a1"], pf["b1"]),
        )
        pf.have("a2", subset(T, s2, s1), by=pf.call("and-elim-right%", v("H1")))
        pf.have("b2", subset(T, s3, s2), by=pf.call("and-elim-right%", v("H2")))
        pf.have(
            "c2",
            subset(T, s3, s1),
            by=app(ref("subset-trans-thm", T, s3, s2, s1), pf["b2"], pf["a2"]),
        )
        pf.have("d", seteq(T, s1, s3), by=pf.call("and-intro%", pf["c1"], pf["c2"]))
    env.theorem(
        "seteq-trans-thm",
        t123,
        impl(seteq(T, s1, s2), seteq(T, s2, s3), seteq(T, s1, s3)),
        pf.qed("d"),
        doc="Set equality is transitive.",
    )


def _install_set_equal(env: Environment, ts, t12, t123) -> None:
    pred = impl(set_(T), TYPE)
    env.define(
        "set-equality",
        t12,
        forall([("P", pred)], iff(app(P, s1), app(P, s2))),
        doc="Leibniz-style equality for sets: every predicate agrees on `s1` and `s2`.",
    )

    params = t12 + [("P", pred)]
    pf = Proof(env, params, name="set-equal-prop")
    with pf.assume(("Heq", set_equal(T, s1, s2)), ("Hs1", app(P, s1))):
        pf.have("a", iff(app(P, s1), app(P, s2)), by=app(v("Heq"), P))
        pf.have("b", impl(app(P, s1), app(P, s2)), by=pf.call("iff-elim-if%", pf["a"]))
        pf.have("c", app(P, s2), by=app(pf["b"], v("Hs1")))
    env.theorem(
        "set-equal-prop",
        params,
        impl(set_equal(T, s1, s2), app(P, s1), app(P, s2)),
        pf.qed("c"),
    )

    pf = Proof(env, ts, name="set-equal-refl-thm")
    with pf.assume(("P", pred)):
        pf.have("a", iff(app(P, s), app(P, s)), by=ref("iff-refl", app(P, s)))
    env.theorem(
        "set-equal-refl-thm", ts, set_equal(T, s, s), pf.qed("a"), doc="Reflexivity of set equality."
    )

    Q = v("Q")
    pf = Proof(env, t12, name="set-equal-sym-thm")
    with pf.assume(("H", set_equal(T, s1, s2)), ("Q", pred)):
        pf.have("a", iff(app(Q, s1), app(Q, s2)), by=app(v("H"), Q))
        pf.have(
            "b",
            iff(app(Q, s2), app(Q, s1)),
            by=app(ref("iff-sym", app(Q, s1), app(Q, s2)), pf["a"]),
        )
    env.theorem(
        "set-equal-sym-thm",
        t12,
        impl(set_equal(T, s1, s2), set_equal(T, s2, s1)),
        pf.qed("b"),
        doc="Symmetry of set equality.",
    )

    pf = Proof(env, t123, name="set-equal-trans-thm")
    with pf.assume(("H1", set_equal(T, s1, s2)), ("H2", set_equal(T, s2, s3)), ("Q", pred)):
        pf.have("a", iff(app(Q, s1), app(Q, s2)), by=app(v("H1"), Q))
        pf.have("b", iff(app(Q, s2), app(Q, s3)), by=app(v("H2"), Q))
        pf.have(
            "c",
            iff(app(Q, s1), app(Q, s3)),
            by=app(ref("iff-trans", app(Q, s1), app(Q, s2), app(Q, s3)), pf["a"], pf["b"]),
        )
    env.theorem(
        "set-equal-trans-thm",
        t123,
        impl(set_equal(T, s1, s2), set_equal(T, s2, s3), set_equal(T, s1, s3)),
        pf.qed("c"),
        doc="Transitivity of set equality.",
    )

    pf = Proof(env, t12, name="set-equal-implies-subset")
    with pf.assume(("H", set_equal(T, s1, s2)), ("x", T)):
        qx = pf.pose("Qx", lam([("X", set_(T))], elem(T, x, v("X"))))
        pf.have("a", iff(elem(T, x, s1), elem(T, x, s2)), by=app(v("H"), qx))
        pf.have("b", impl(elem(T, x, s1), elem(T, x, s2)), by=pf.call("iff-elim-if%", pf["a"]))
    env.theorem(
        "set-equal-implies-subset",
        t12,
        impl(set_equal(T, s1, s2), subset(T, s1, s2)),
        pf.qed("b"),
        doc="Going from Leibniz equality to the subset relation is easy.",
    )

    pf = Proof(env, t12, name="set-equal-implies-seteq")
    with pf.assume(("H", set_equal(T, s1, s2))):
        # first s1 ⊆ s2, then s2 ⊆ s1
        pf.have("a", subset(T, s1, s2), by=app(ref("set-equal-implies-subset", T, s1, s2), v("H")))
        pf.have("b1", set_equal(T, s2, s1), by=app(ref("set-equal-sym-thm", T, s1, s2), v("H")))
        pf.have("b", subset(T, s2, s1), by=app(ref("set-equal-implies-subset", T, s2, s1), pf["b1"]))
        pf.have("c", seteq(T, s1, s2), by=pf.call("and-intro%", pf["a"], pf["b"]))
    env.theorem(
        "set-equal-implies-seteq",
        t12,
        impl(set_equal(T, s1, s2), seteq(T, s1, s2)),
        pf.qed("c"),
        doc="Leibniz equality implies subset-based equality.",
    )

    env.axiom(
        "seteq-implies-set-equal-ax",
        t12,
        impl(seteq(T, s1, s2), set_equal(T, s1, s2)),
        doc=(
            "Going from subset-based equality to Leibniz equality requires this "
            "axiom: membership cannot be lifted to an arbitrary predicate on sets."
        ),
    )
    env.theorem(
        "set-equal-seteq",
        t12,
        iff(seteq(T, s1, s2), set_equal(T, s1, s2)),
        app(
            ref("iff-intro", seteq(T, s1, s2), set_equal(T, s1, s2)),
            ref("seteq-implies-set-equal-ax", T, s1, s2),
            ref("set-equal-implies-seteq", T, s1, s2),
        ),
        doc="Set equality and subset-based equality coincide (axiomatically).",
    )


def _install_psubset(env: Environment, ts, t12, t123) -> None:
    env.define(
        "psubset-def",
        t12,
        and_(subset(T, s1, s2), not_(seteq(T, s1, s2))),
        doc="`s1` is a proper subset of `s2`: a subset, but distinct.",
    )

    pf = Proof(env, ts, name="psubset-antirefl")
    with pf.assume(("H", psubset(T, s, s))):
        pf.have("a", not_(seteq(T, s, s)), by=pf.call("and-elim-right%", v("H")))
        pf.have("b", seteq(T, s, s), by=ref("seteq-refl-thm", T, s))
        pf.have("c", absurd(), by=app(pf["a"], pf["b"]))
    env.theorem("psubset-antirefl", ts, not_(psubset(T, s, s)), pf.qed("c"))

    both = and_(psubset(T, s1, s2), psubset(T, s2, s1))
    pf = Proof(env, t12, name="psubset-antisym")
    with pf.assume(("H", both)):
        left = pf.call("and-elim-left%", v("H"))
        right = pf.call("and-elim-right%", v("H"))
        pf.have("a", not_(seteq(T, s1, s2)), by=pf.call("and-elim-right%", left))
        pf.have("b", subset(T, s1, s2), by=pf.call("and-elim-left%", left))
        pf.have("c", subset(T, s2, s1), by=pf.call("and-elim-left%", right))
        pf.have("d", seteq(T, s1, s2), by=pf.call("and-intro%", pf["b"], pf["c"]))
        pf.have("e", absurd(), by=app(pf["a"], pf["d"]))
    env.theorem("psubset-antisym", t12, not_(both), pf.qed("e"))

    # The case split goes through Leibniz rewriting: no decidable equality.
    pf = Proof(env, t123, name="psubset-trans-thm")
    with pf.assume(("H1", psubset(T, s1, s2)), ("H2", psubset(T, s2, s3))):
        pf.have(
            "a",
            subset(T, s1, s3),
            by=app(
                ref("subset-trans-thm", T, s1, s2, s3),
                pf.call("and-elim-left%", v("H1")),
                pf.call("and-elim-left%", v("H2")),
            ),
        )
        with pf.assume(("H", seteq(T, s1, s3))):
            pf.have(
                "b",
                set_equal(T, s1, s3),
                by=app(ref("seteq-implies-set-equal-ax", T, s1, s3), v("H")),
            )
            shape = lam([("X", set_(T))], psubset(T, v("X"), s2))
            pf.have(
                "c",
                psubset(T, s3, s2),
                by=app(ref("set-equal-prop", T, s1, s3, shape), pf["b"], v("H1")),
            )
            pf.have(
                "d",
                absurd(),
                by=app(ref("psubset-antisym", T, s2, s3), pf.call("and-intro%", v("H2"), pf["c"])),
            )
        pf.have("e", psubset(T, s1, s3), by=pf.call("and-intro%", pf["a"], pf["d"]))
    env.theorem(
        "psubset-trans-thm",
        t123,
        impl(psubset(T, s1, s2), psubset(T, s2, s3), psubset(T, s1, s3)),
        pf.qed("e"),
        doc="The proper subset relation is transitive.",
    )

    empty = emptyset(T)
    pf = Proof(env, ts, name="psubset-emptyset")
    with pf.assume(("H", psubset(T, empty, s))):
        with pf.assume(("H'", seteq(T, s, empty))):
            pf.have("a", not_(seteq(T, empty, s)), by=pf.call("and-elim-right%", v("H")))
            pf.have("b", seteq(T, empty, s), by=app(ref("seteq-sym-thm", T, s, empty), v("H'")))
            pf.have("c", absurd(), by=app(pf["a"], pf["b"]))
    env.theorem(
        "psubset-emptyset",
        ts,
        impl(psubset(T, empty, s), not_(seteq(T, s, empty))),
        pf.qed("c"),
    )

    pf = Proof(env, ts, name="psubset-emptyset-conv")
    with pf.assume(("H", not_(seteq(T, s, empty)))):
        pf.have("a", subset(T, empty, s), by=ref("subset-emptyset-lower-bound", T, s))
        with pf.assume(("H'", seteq(T, empty, s))):
            pf.have("b", seteq(T, s, empty), by=app(ref("seteq-sym-thm", T, empty, s), v("H'")))
            pf.have("c", absurd(), by=app(v("H"), pf["b"]))
        pf.have("d", psubset(T, empty, s), by=pf.call("and-intro%", pf["a"], pf["c"]))
    env.theorem(
        "psubset-emptyset-conv",
        ts,
        impl(not_(seteq(T, s, empty)), psubset(T, empty, s)),
        pf.qed("d"),
    )

    env.theorem(
        "psubset-emptyset-equiv",
        ts,
        iff(psubset(T, empty, s), not_(seteq(T, s, empty))),
        app(
            ref("iff-intro", psubset(T, empty, s), not_(seteq(T, s, empty))),
            ref("psubset-emptyset", T, s),
            ref("psubset-emptyset-conv", T, s),
        ),
    )


def _install_implicits(env: Environment) -> None:
    def elem_(env: Environment, ctx: Context, a: tuple[Term, Term], st: tuple[Term, Term]) -> Term:
        return traced("elem", ctx, elem(a[1], a[0], st[0]))

    env.register_implicit("elem", elem_, "Object `x` is a member of set `s`.")
    for name, entry in (
        ("subset", "subset-def"),
        ("subset-refl", "subset-refl-thm"),
        ("subset-trans", "subset-trans-thm"),
        ("seteq", "seteq-def"),
        ("seteq-refl", "seteq-refl-thm"),
        ("seteq-sym", "seteq-sym-thm"),
        ("seteq-trans", "seteq-trans-thm"),
        ("set-equal", "set-equality"),
        ("set-equal-refl", "set-equal-refl-thm"),
        ("set-equal-sym", "set-equal-sym-thm"),
        ("set-equal-trans", "set-equal-trans-thm"),
        ("psubset", "psubset-def"),
        ("psubset-trans", "psubset-trans-thm"),
    ):
        env.register_implicit(name, on_set(entry), f"Implicit form of `{entry}`.")
