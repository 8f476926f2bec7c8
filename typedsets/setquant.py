"""Quantifiers over the elements of a set rather than a whole type.

``forall-in`` and ``exists-in`` are notations (see ``notation.py``), so
their introduction and elimination rules below are theorems derived from
the ambient ``ex``/``Π`` rules.

The definite description ``the-element`` is postulated: the calculus has no
choice operator, so a uniqueness proof alone cannot produce the element.
"""

from __future__ import annotations

import logging

from .env import Environment
from .helpers import TYPE, app, forall, impl, lam, ref, v
from .implicit import on_set
from .notation import exists_in, forall_in
from .prelude import and_, equal
from .proof import Proof
from .sets import elem, set_

logger = logging.getLogger(__name__)

T, s, P, A = v("T"), v("s"), v("P"), v("A")
x, y, z, u = v("x"), v("y"), v("z"), v("u")


def install(env: Environment) -> None:
    tsp = [("T", TYPE), ("s", set_(T)), ("P", impl(T, TYPE))]

    _install_rules(env, tsp)

    env.define(
        "single-in-prop",
        tsp,
        forall_in(
            ("x", T, s),
            forall_in(("y", T, s), impl(app(P, x), app(P, y), equal(T, x, y))),
        ),
        doc="There exists at most one element of `s` such that `P`.",
    )
    env.define(
        "unique-in-prop",
        tsp,
        and_(exists_in(("x", T, s), app(P, x)), ref("single-in-prop", T, s, P)),
        doc="There exists a unique element of `s` such that `P`.",
    )

    _install_descriptor(env, tsp + [("u", ref("unique-in-prop", T, s, P))])

    for name, entry in (
        ("ex-in-elim", "ex-in-elim-thm"),
        ("ex-in-intro", "ex-in-intro-thm"),
        ("forall-in-intro", "forall-in-intro-thm"),
        ("forall-in-elim", "forall-in-elim-thm"),
        ("single-in", "single-in-prop"),
        ("unique-in", "unique-in-prop"),
        ("the-element", "the-element-ax"),
        ("the-element-prop", "the-element-prop-ax"),
        ("the-element-lemma", "the-element-lemma-thm"),
    ):
        env.register_implicit(name, on_set(entry), f"Implicit form of `{entry}`.")
    logger.debug("Installed quantifiers over sets")


def _install_rules(env: Environment, tsp) -> None:
    params = tsp + [("A", TYPE)]
    hex_ = exists_in(("x", T, s), app(P, x))
    ha = forall_in(("y", T, s), impl(app(P, y), A))

    pf = Proof(env, params, name="ex-in-elim-thm")
    with pf.assume(("Hex", hex_), ("HA", ha)):
        q = pf.pose("Q", lam([("x", T)], and_(elem(T, x, s), app(P, x))))
        with pf.assume(("z", T), ("Hz", app(q, z))):
            pf.have(
                "a",
                A,
                by=app(
                    v("HA"),
                    z,
                    pf.call("and-elim-left%", v("Hz")),
                    pf.call("and-elim-right%", v("Hz")),
                ),
            )
        pf.have("b", A, by=app(ref("ex-elim", T, q, A), v("Hex"), pf["a"]))
    env.theorem(
        "ex-in-elim-thm",
        params,
        impl(hex_, ha, A),
        pf.qed("b"),
        doc="Elimination rule for `exists-in`: the target `A` may not mention the witness.",
    )

    params = tsp + [("x", T)]
    pf = Proof(env, params, name="ex-in-intro-thm")
    with pf.assume(("H1", elem(T, x, s)), ("H2", app(P, x))):
        q = lam([("y", T)], and_(elem(T, y, s), app(P, y)))
        pf.have(
            "a",
            exists_in(("y", T, s), app(P, y)),
            by=app(ref("ex-intro", T, q, x), pf.call("and-intro%", v("H1"), v("H2"))),
        )
    env.theorem(
        "ex-in-intro-thm",
        params,
        impl(elem(T, x, s), app(P, x), exists_in(("y", T, s), app(P, y))),
        pf.qed("a"),
        doc="Introduction rule for `exists-in` from a member witness.",
    )

    pointwise = forall([("x", T)], impl(elem(T, x, s), app(P, x)))
    env.theorem(
        "forall-in-intro-thm",
        tsp,
        impl(pointwise, forall_in(("x", T, s), app(P, x))),
        lam([("H", pointwise)], v("H")),
        doc="Introduction rule for `forall-in`: prove `P` for any member.",
    )
    env.theorem(
        "forall-in-elim-thm",
        tsp + [("x", T)],
        impl(forall_in(("y", T, s), app(P, y)), elem(T, x, s), app(P, x)),
        lam(
            [("H", forall_in(("y", T, s), app(P, y))), ("Hx", elem(T, x, s))],
            app(v("H"), x, v("Hx")),
        ),
        doc="Instantiate a `forall-in` at a member of the set.",
    )


def _install_descriptor(env: Environment, params) -> None:
    the = ref("the-element-ax", T, s, P, u)
    prop = ref("the-element-prop-ax", T, s, P, u)

    env.axiom(
        "the-element-ax",
        params,
        T,
        doc="The unique element of `s` satisfying `P`, given the uniqueness proof `u`.",
    )
    env.axiom(
        "the-element-prop-ax",
        params,
        and_(elem(T, the, s), app(P, the)),
        doc="The descriptor is a member of `s` and satisfies `P`.",
    )

    pf = Proof(env, params, name="the-element-lemma-thm")
    with pf.assume(("y", T), ("Hy1", elem(T, y, s)), ("Hy2", app(P, y))):
        single = pf.pose("single", pf.call("and-elim-right%", u))
        pf.have(
            "a",
            equal(T, y, the),
            by=app(
                single,
                y,
                v("Hy1"),
                the,
                pf.call("and-elim-left%", prop),
                v("Hy2"),
                pf.call("and-elim-right%", prop),
            ),
        )
    env.theorem(
        "the-element-lemma-thm",
        params,
        forall_in(("y", T, s), impl(app(P, y), equal(T, y, the))),
        pf.qed("a"),
        doc="Any member of `s` satisfying `P` equals the descriptor.",
    )

    env.theorem(
        "the-element-elem",
        params,
        elem(T, the, s),
        app(ref("and-elim-left", elem(T, the, s), app(P, the)), prop),
        doc="The descriptor is a member of `s`.",
    )
    env.theorem(
        "the-element-sat",
        params,
        app(P, the),
        app(ref("and-elim-right", elem(T, the, s), app(P, the)), prop),
        doc="The descriptor satisfies `P`.",
    )
