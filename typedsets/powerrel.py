"""The powerset of relations.

``(powerrel T U)`` is the type of sets whose elements are relations of type
``(rel T U)``. The existential, uniqueness and descriptor constructions of
the prelude are repeated here one level up, with ``releq`` in place of
equality.
"""

from __future__ import annotations

from collections.abc import Callable

from .env import Environment
from .helpers import TYPE, app, forall, impl, ref, v
from .implicit import fetch_powerrel_types, traced
from .kernel import Context
from .prelude import and_
from .proof import Proof
from .rel import rel, releq
from .terms import Term

T, U, X, A = v("T"), v("U"), v("X"), v("A")
R, S, u = v("R"), v("S"), v("u")


def powerrel(t: Term, w: Term) -> Term:
    return ref("powerrel", t, w)


def rel_elem(t: Term, w: Term, r: Term, xs: Term) -> Term:
    return ref("rel-elem-def", t, w, r, xs)


def install(env: Environment) -> None:
    tu = [("T", TYPE), ("U", TYPE)]
    tux = tu + [("X", powerrel(T, U))]

    env.define(
        "powerrel",
        tu,
        impl(rel(T, U), TYPE),
        doc="The type of sets whose elements are relations of type `(rel T U)`.",
    )
    env.define(
        "rel-elem-def",
        tu + [("R", rel(T, U)), ("X", powerrel(T, U))],
        app(X, R),
        doc="The relation `R` is an element of `X`.",
    )
    rel_ex = ref("rel-ex-def", T, U, X)
    env.define(
        "rel-ex-def",
        tux,
        forall(
            [("alpha", TYPE)],
            impl(forall([("R", rel(T, U))], impl(rel_elem(T, U, R, X), v("alpha"))), v("alpha")),
        ),
        doc="There exists a relation in `X`.",
    )

    each = forall([("R", rel(T, U))], impl(rel_elem(T, U, R, X), A))
    pf = Proof(env, tux + [("A", TYPE)], name="rel-ex-elim-thm")
    with pf.assume(("H1", rel_ex), ("H2", each)):
        pf.have("a", impl(each, A), by=app(v("H1"), A))
        pf.have("b", A, by=app(pf["a"], v("H2")))
    env.theorem(
        "rel-ex-elim-thm",
        tux + [("A", TYPE)],
        impl(rel_ex, each, A),
        pf.qed("b"),
        doc="The elimination rule for the relation existential.",
    )

    pf = Proof(env, tux + [("R", rel(T, U))], name="rel-ex-intro-thm")
    with pf.assume(
        ("H", rel_elem(T, U, R, X)),
        ("A", TYPE),
        ("Q", forall([("S", rel(T, U))], impl(rel_elem(T, U, S, X), A))),
    ):
        pf.have("a", impl(rel_elem(T, U, R, X), A), by=app(v("Q"), R))
        pf.have("b", A, by=app(pf["a"], v("H")))
    env.theorem(
        "rel-ex-intro-thm",
        tux + [("R", rel(T, U))],
        impl(rel_elem(T, U, R, X), rel_ex),
        pf.qed("b"),
        doc="Introduction rule for the relation existential.",
    )

    env.define(
        "rel-single-def",
        tux,
        forall(
            [("R", rel(T, U)), ("S", rel(T, U))],
            impl(rel_elem(T, U, R, X), rel_elem(T, U, S, X), releq(T, U, R, S)),
        ),
        doc="There is at most one relation in `X`, up to `releq`.",
    )
    env.define(
        "rel-unique-def",
        tux,
        and_(rel_ex, ref("rel-single-def", T, U, X)),
        doc="There is exactly one relation in `X`, up to `releq`.",
    )

    _install_descriptor(env, tux + [("u", ref("rel-unique-def", T, U, X))])

    for name, entry, pos in (
        ("rel-elem", "rel-elem-def", 1),
        ("rel-ex", "rel-ex-def", 0),
        ("rel-ex-elim", "rel-ex-elim-thm", 0),
        ("rel-ex-intro", "rel-ex-intro-thm", 0),
        ("rel-single", "rel-single-def", 0),
        ("rel-unique", "rel-unique-def", 0),
        ("the-rel", "the-rel-ax", 0),
        ("the-rel-lemma", "the-rel-lemma", 0),
    ):
        env.register_implicit(f"{name}%", _on_powerrel(entry, pos), f"Implicit form of `{entry}`.")


def _install_descriptor(env: Environment, params) -> None:
    the = ref("the-rel-ax", T, U, X, u)
    env.axiom(
        "the-rel-ax",
        params,
        rel(T, U),
        doc="The unique relation of `X`, given the uniqueness proof `u`.",
    )
    env.axiom(
        "the-rel-prop",
        params,
        rel_elem(T, U, the, X),
        doc="The descriptor relation belongs to `X`.",
    )

    pf = Proof(env, params, name="the-rel-lemma")
    pf.have("a", ref("rel-single-def", T, U, X), by=pf.call("and-elim-right%", u))
    pf.have("b", rel_elem(T, U, the, X), by=ref("the-rel-prop", T, U, X, u))
    with pf.assume(("R", rel(T, U)), ("HR", rel_elem(T, U, R, X))):
        pf.have(
            "c",
            impl(rel_elem(T, U, R, X), rel_elem(T, U, the, X), releq(T, U, R, the)),
            by=app(pf["a"], R, the),
        )
        pf.have("d", releq(T, U, R, the), by=app(pf["c"], v("HR"), pf["b"]))
    env.theorem(
        "the-rel-lemma",
        params,
        forall([("R", rel(T, U))], impl(rel_elem(T, U, R, X), releq(T, U, R, the))),
        pf.qed("d"),
        doc="Any relation of `X` is `releq` to the descriptor.",
    )

    lemma = ref("the-rel-lemma", T, U, X, u)
    pf = Proof(env, params, name="the-rel-single")
    with pf.assume(
        ("R", rel(T, U)),
        ("S", rel(T, U)),
        ("HR", rel_elem(T, U, R, X)),
        ("HS", rel_elem(T, U, S, X)),
    ):
        pf.have("a", releq(T, U, R, the), by=app(lemma, R, v("HR")))
        pf.have("b", releq(T, U, S, the), by=app(lemma, S, v("HS")))
        pf.have("c", releq(T, U, the, S), by=app(ref("releq-sym", T, U, S, the), pf["b"]))
        pf.have("d", releq(T, U, R, S), by=app(ref("releq-trans", T, U, R, the, S), pf["a"], pf["c"]))
    env.theorem(
        "the-rel-single",
        params,
        ref("rel-single-def", T, U, X),
        pf.qed("d"),
        doc="Any two relations of `X` are `releq`.",
    )


def _on_powerrel(entry: str, pos: int) -> Callable[..., Term]:
    """Implicit form of ``entry``: ``T`` and ``U`` come from argument ``pos``, a powerrel."""

    def expand(env: Environment, ctx: Context, *typed: tuple[Term, Term]) -> Term:
        t, w = fetch_powerrel_types(env, typed[pos][1])
        return traced(entry, ctx, ref(entry, t, w, *(a for a, _ in typed)))

    return expand
