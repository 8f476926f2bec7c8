"""Leibniz equality: ``x`` equals ``y`` when every predicate agrees on them."""

from __future__ import annotations

from typedsets.env import Environment
from typedsets.helpers import TYPE, app, forall, impl, lam, ref, v
from typedsets.implicit import traced, unfold_to
from typedsets.kernel import Context
from typedsets.proof import Proof
from typedsets.terms import Term

from .prop import iff

T, P = v("T"), v("P")
x, y, z = v("x"), v("y"), v("z")


def equal(ty: Term, a: Term, b: Term) -> Term:
    return ref("equal", ty, a, b)


def install(env: Environment) -> None:
    txy = [("T", TYPE), ("x", T), ("y", T)]
    pred = impl(T, TYPE)

    env.define(
        "equal",
        txy,
        forall([("P", pred)], iff(app(P, x), app(P, y))),
        doc="Leibniz equality of `x` and `y` at type `T`.",
    )
    env.theorem(
        "eq-refl",
        [("T", TYPE), ("x", T)],
        equal(T, x, x),
        lam([("P", pred)], ref("iff-refl", app(P, x))),
    )
    env.theorem(
        "eq-sym",
        txy,
        impl(equal(T, x, y), equal(T, y, x)),
        lam(
            [("H", equal(T, x, y)), ("P", pred)],
            app(ref("iff-sym", app(P, x), app(P, y)), app(v("H"), P)),
        ),
    )

    params = [("T", TYPE), ("x", T), ("y", T), ("z", T)]
    pf = Proof(env, params, name="eq-trans")
    with pf.assume(("H1", equal(T, x, y)), ("H2", equal(T, y, z))):
        with pf.assume(("Q", pred)):
            pf.have(
                "a",
                iff(app(v("Q"), x), app(v("Q"), z)),
                by=app(
                    ref("iff-trans", app(v("Q"), x), app(v("Q"), y), app(v("Q"), z)),
                    app(v("H1"), v("Q")),
                    app(v("H2"), v("Q")),
                ),
            )
    env.theorem(
        "eq-trans",
        params,
        impl(equal(T, x, y), equal(T, y, z), equal(T, x, z)),
        pf.qed("a"),
    )

    env.theorem(
        "eq-subst",
        [("T", TYPE), ("P", pred), ("x", T), ("y", T)],
        impl(equal(T, x, y), app(P, x), app(P, y)),
        lam(
            [("H", equal(T, x, y))],
            app(ref("iff-elim-if", app(P, x), app(P, y)), app(v("H"), P)),
        ),
        doc="Rewriting with an equality.",
    )

    def eq_sym(env: Environment, ctx: Context, h: tuple[Term, Term]) -> Term:
        eq = unfold_to(env, h[1], "equal")
        return traced("eq-sym%", ctx, app(ref("eq-sym", *eq.args), h[0]))

    def eq_trans(env: Environment, ctx: Context, h1: tuple[Term, Term], h2: tuple[Term, Term]) -> Term:
        first = unfold_to(env, h1[1], "equal")
        second = unfold_to(env, h2[1], "equal")
        ty, a, b = first.args
        return traced(
            "eq-trans%", ctx, app(ref("eq-trans", ty, a, b, second.args[2]), h1[0], h2[0])
        )

    env.register_implicit("eq-sym%", eq_sym, "Symmetry of an equality proof.")
    env.register_implicit("eq-trans%", eq_trans, "Chain two equality proofs.")
