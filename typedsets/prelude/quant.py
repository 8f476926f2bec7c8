"""Existential quantification, uniqueness and definite description.

  ex T P      := Π α:type. (Π x:T. P x ==> α) ==> α
  single T P  := Π x y:T. P x ==> P y ==> equal T x y
  unique T P  := and (ex T P) (single T P)

The descriptor ``the`` cannot be derived in the calculus, which has no
choice operator: it is postulated together with its defining property.
"""

from __future__ import annotations

from typedsets.env import Environment
from typedsets.helpers import TYPE, app, forall, impl, lam, ref, v
from typedsets.implicit import fetch_impl_domain, traced
from typedsets.kernel import Context
from typedsets.proof import Proof
from typedsets.terms import Term

from .equal import equal
from .prop import and_

T, P, A = v("T"), v("P"), v("A")
x, y = v("x"), v("y")


def ex(ty: Term, pred: Term) -> Term:
    return ref("ex", ty, pred)


def install(env: Environment) -> None:
    tp = [("T", TYPE), ("P", impl(T, TYPE))]

    env.define(
        "ex",
        tp,
        forall(
            [("alpha", TYPE)],
            impl(forall([("x", T)], impl(app(P, x), v("alpha"))), v("alpha")),
        ),
        doc="There exists an `x` of type `T` such that `(P x)`.",
    )
    env.theorem(
        "ex-intro",
        tp + [("x", T)],
        impl(app(P, x), ex(T, P)),
        lam(
            [
                ("H", app(P, x)),
                ("alpha", TYPE),
                ("f", forall([("y", T)], impl(app(P, y), v("alpha")))),
            ],
            app(v("f"), x, v("H")),
        ),
        doc="Introduction rule: a witness `x` with `(P x)`.",
    )
    env.theorem(
        "ex-elim",
        tp + [("A", TYPE)],
        impl(ex(T, P), forall([("x", T)], impl(app(P, x), A)), A),
        lam(
            [("H", ex(T, P)), ("f", forall([("x", T)], impl(app(P, x), A)))],
            app(v("H"), A, v("f")),
        ),
        doc="Elimination rule: `A` follows from any witness.",
    )

    env.define(
        "single",
        tp,
        forall([("x", T), ("y", T)], impl(app(P, x), app(P, y), equal(T, x, y))),
        doc="There is at most one `x` such that `(P x)`.",
    )
    env.define(
        "unique",
        tp,
        and_(ex(T, P), ref("single", T, P)),
        doc="There is exactly one `x` such that `(P x)`.",
    )

    tpu = tp + [("u", ref("unique", T, P))]
    the = ref("the", T, P, v("u"))
    env.axiom("the", tpu, T, doc="The unique `x` such that `(P x)`.")
    env.axiom("the-prop", tpu, app(P, the), doc="The descriptor satisfies `P`.")

    pf = Proof(env, tpu, name="the-lemma")
    pf.pose("single", app(ref("and-elim-right", ex(T, P), ref("single", T, P)), v("u")))
    with pf.assume(("y", T), ("Hy", app(P, y))):
        pf.have(
            "a",
            equal(T, y, the),
            by=app(pf["single"], y, the, v("Hy"), ref("the-prop", T, P, v("u"))),
        )
    env.theorem(
        "the-lemma",
        tpu,
        forall([("y", T)], impl(app(P, y), equal(T, y, the))),
        pf.qed("a"),
        doc="Any `y` satisfying `P` is the descriptor.",
    )

    def ex_intro(env: Environment, ctx: Context, p: tuple[Term, Term], w: tuple[Term, Term]) -> Term:
        return traced("ex-intro%", ctx, ref("ex-intro", fetch_impl_domain(env, p[1]), p[0], w[0]))

    env.register_implicit("ex-intro%", ex_intro, "`(ex-intro% P x)` for a predicate `P`.")
