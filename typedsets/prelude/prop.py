"""Propositional connectives, impredicatively encoded.

  absurd     := Π α:type. α
  not A      := A ==> absurd
  truth      := not absurd
  and A B    := Π C:type. (A ==> B ==> C) ==> C
  or A B     := Π C:type. (A ==> C) ==> (B ==> C) ==> C
  iff A B    := and (A ==> B) (B ==> A)

Every introduction and elimination rule is a theorem with a checked proof
term; nothing here is postulated.
"""

from __future__ import annotations

from typedsets.env import Environment
from typedsets.errors import IllTypedError
from typedsets.helpers import TYPE, app, forall, impl, lam, ref, v
from typedsets.implicit import fetch_impl_domain, traced, unfold_to
from typedsets.kernel import Context, whnf
from typedsets.proof import Proof
from typedsets.terms import Pi, Term, occurs, pretty

A, B, C = v("A"), v("B"), v("C")


def absurd() -> Term:
    return ref("absurd")


def truth() -> Term:
    return ref("truth")


def not_(a: Term) -> Term:
    return ref("not", a)


def and_(a: Term, b: Term) -> Term:
    return ref("and", a, b)


def and_all(*props: Term) -> Term:
    """Right-nested conjunction ``(and a (and b c))``."""
    out = props[-1]
    for p in reversed(props[:-1]):
        out = and_(p, out)
    return out


def or_(a: Term, b: Term) -> Term:
    return ref("or", a, b)


def iff(a: Term, b: Term) -> Term:
    return ref("iff", a, b)


def install(env: Environment) -> None:
    env.define(
        "absurd", [], forall([("alpha", TYPE)], v("alpha")), doc="The false proposition."
    )
    env.define("not", [("A", TYPE)], impl(A, absurd()), doc="Negation of `A`.")
    env.define("truth", [], not_(absurd()), doc="The true proposition.")
    env.theorem(
        "truth-is-true", [], truth(), lam([("x", absurd())], v("x")),
        doc="The truth is provable.",
    )
    env.theorem(
        "ex-falso",
        [("A", TYPE)],
        impl(absurd(), A),
        lam([("H", absurd())], app(v("H"), A)),
        doc="From absurdity, anything follows.",
    )
    env.theorem("impl-refl", [("A", TYPE)], impl(A, A), lam([("x", A)], v("x")))
    env.theorem(
        "impl-trans",
        [("A", TYPE), ("B", TYPE), ("C", TYPE)],
        impl(impl(A, B), impl(B, C), impl(A, C)),
        lam(
            [("f", impl(A, B)), ("g", impl(B, C)), ("x", A)],
            app(v("g"), app(v("f"), v("x"))),
        ),
        doc="Implication is transitive.",
    )

    ab = [("A", TYPE), ("B", TYPE)]

    # conjunction
    env.define(
        "and", ab, forall([("C", TYPE)], impl(impl(A, B, C), C)), doc="Conjunction."
    )
    env.theorem(
        "and-intro",
        ab,
        impl(A, B, and_(A, B)),
        lam(
            [("a", A), ("b", B), ("C", TYPE), ("f", impl(A, B, C))],
            app(v("f"), v("a"), v("b")),
        ),
    )
    env.theorem(
        "and-elim-left",
        ab,
        impl(and_(A, B), A),
        lam([("p", and_(A, B))], app(v("p"), A, lam([("a", A), ("b", B)], v("a")))),
    )
    env.theorem(
        "and-elim-right",
        ab,
        impl(and_(A, B), B),
        lam([("p", and_(A, B))], app(v("p"), B, lam([("a", A), ("b", B)], v("b")))),
    )

    # disjunction
    env.define(
        "or",
        ab,
        forall([("C", TYPE)], impl(impl(A, C), impl(B, C), C)),
        doc="Disjunction.",
    )
    env.theorem(
        "or-intro-left",
        ab,
        impl(A, or_(A, B)),
        lam(
            [("a", A), ("C", TYPE), ("f", impl(A, C)), ("g", impl(B, C))],
            app(v("f"), v("a")),
        ),
    )
    env.theorem(
        "or-intro-right",
        ab,
        impl(B, or_(A, B)),
        lam(
            [("b", B), ("C", TYPE), ("f", impl(A, C)), ("g", impl(B, C))],
            app(v("g"), v("b")),
        ),
    )
    env.theorem(
        "or-elim",
        [("A", TYPE), ("B", TYPE), ("C", TYPE)],
        impl(or_(A, B), impl(A, C), impl(B, C), C),
        lam(
            [("p", or_(A, B)), ("f", impl(A, C)), ("g", impl(B, C))],
            app(v("p"), C, v("f"), v("g")),
        ),
    )

    # equivalence
    env.define("iff", ab, and_(impl(A, B), impl(B, A)), doc="Logical equivalence.")
    env.theorem(
        "iff-intro",
        ab,
        impl(impl(A, B), impl(B, A), iff(A, B)),
        ref("and-intro", impl(A, B), impl(B, A)),
    )
    env.theorem(
        "iff-elim-if",
        ab,
        impl(iff(A, B), impl(A, B)),
        ref("and-elim-left", impl(A, B), impl(B, A)),
    )
    env.theorem(
        "iff-elim-only-if",
        ab,
        impl(iff(A, B), impl(B, A)),
        ref("and-elim-right", impl(A, B), impl(B, A)),
    )
    env.theorem(
        "iff-refl",
        [("A", TYPE)],
        iff(A, A),
        app(ref("iff-intro", A, A), ref("impl-refl", A), ref("impl-refl", A)),
    )

    pf = Proof(env, ab, name="iff-sym")
    with pf.assume(("H", iff(A, B))):
        pf.have("a", impl(A, B), by=app(ref("iff-elim-if", A, B), v("H")))
        pf.have("b", impl(B, A), by=app(ref("iff-elim-only-if", A, B), v("H")))
        pf.have("c", iff(B, A), by=app(ref("iff-intro", B, A), pf["b"], pf["a"]))
    env.theorem("iff-sym", ab, impl(iff(A, B), iff(B, A)), pf.qed("c"))

    abc = [("A", TYPE), ("B", TYPE), ("C", TYPE)]
    pf = Proof(env, abc, name="iff-trans")
    with pf.assume(("H1", iff(A, B)), ("H2", iff(B, C))):
        pf.have(
            "a",
            impl(A, C),
            by=app(
                ref("impl-trans", A, B, C),
                app(ref("iff-elim-if", A, B), v("H1")),
                app(ref("iff-elim-if", B, C), v("H2")),
            ),
        )
        pf.have(
            "b",
            impl(C, A),
            by=app(
                ref("impl-trans", C, B, A),
                app(ref("iff-elim-only-if", B, C), v("H2")),
                app(ref("iff-elim-only-if", A, B), v("H1")),
            ),
        )
        pf.have("c", iff(A, C), by=app(ref("iff-intro", A, C), pf["a"], pf["b"]))
    env.theorem("iff-trans", abc, impl(iff(A, B), iff(B, C), iff(A, C)), pf.qed("c"))

    _install_implicits(env)


def _install_implicits(env: Environment) -> None:
    def and_intro(env: Environment, ctx: Context, a: tuple[Term, Term], b: tuple[Term, Term]) -> Term:
        return traced("and-intro%", ctx, app(ref("and-intro", a[1], b[1]), a[0], b[0]))

    def and_elim(side: str):
        def expand(env: Environment, ctx: Context, p: tuple[Term, Term]) -> Term:
            conj = unfold_to(env, p[1], "and")
            return traced(side, ctx, app(ref(side, *conj.args), p[0]))

        return expand

    def iff_elim(side: str):
        def expand(env: Environment, ctx: Context, p: tuple[Term, Term]) -> Term:
            equiv = unfold_to(env, p[1], "iff")
            return traced(side, ctx, app(ref(side, *equiv.args), p[0]))

        return expand

    def iff_intro(env: Environment, ctx: Context, f: tuple[Term, Term], g: tuple[Term, Term]) -> Term:
        lhs = fetch_impl_domain(env, f[1])
        rhs = fetch_impl_domain(env, g[1])
        return traced("iff-intro%", ctx, app(ref("iff-intro", lhs, rhs), f[0], g[0]))

    def impl_trans(env: Environment, ctx: Context, f: tuple[Term, Term], g: tuple[Term, Term]) -> Term:
        second = whnf(env, g[1])
        if not isinstance(second, Pi) or occurs(second.name, second.body):
            raise IllTypedError(f"Not an implication: {pretty(g[1])}")
        return traced(
            "impl-trans%",
            ctx,
            app(
                ref("impl-trans", fetch_impl_domain(env, f[1]), second.domain, second.body),
                f[0],
                g[0],
            ),
        )

    env.register_implicit("and-intro%", and_intro, "Conjunction of two proofs.")
    env.register_implicit("and-elim-left%", and_elim("and-elim-left"))
    env.register_implicit("and-elim-right%", and_elim("and-elim-right"))
    env.register_implicit("iff-intro%", iff_intro)
    env.register_implicit("iff-elim-if%", iff_elim("iff-elim-if"))
    env.register_implicit("iff-elim-only-if%", iff_elim("iff-elim-only-if"))
    env.register_implicit("impl-trans%", impl_trans)
