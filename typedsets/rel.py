"""Relations between the elements of two types.

A relation from ``T`` to ``U`` has type ``T ==> U ==> type``: ``(R x y)``
holds when ``x`` and ``y`` are related. As for sets, two equalities are
provided (``releq`` by mutual inclusion, ``rel-equal`` à la Leibniz) and
the direction from the former to the latter is an axiom.
"""

from __future__ import annotations

from .env import Environment
from .helpers import TYPE, app, forall, impl, lam, ref, v
from .implicit import on_rel
from .prelude import absurd, and_, equal, ex, iff, not_, truth
from .proof import Proof
from .terms import Term

T, U, V, W = v("T"), v("U"), v("V"), v("W")
R, R1, R2, R3, P = v("R"), v("R1"), v("R2"), v("R3"), v("P")
x, y, z = v("x"), v("y"), v("z")


def rel(t: Term, u: Term) -> Term:
    return ref("rel", t, u)


def identity(t: Term) -> Term:
    return ref("identity", t)


def subrel(t: Term, u: Term, a: Term, b: Term) -> Term:
    return ref("subrel", t, u, a, b)


def releq(t: Term, u: Term, a: Term, b: Term) -> Term:
    return ref("releq", t, u, a, b)


def rel_equal(t: Term, u: Term, a: Term, b: Term) -> Term:
    return ref("rel-equal", t, u, a, b)


def rcomp(t: Term, u: Term, w: Term, a: Term, b: Term) -> Term:
    """``(rcomp T U V R1 R2)``: first ``R1`` from ``T`` to ``U``, then ``R2``."""
    return ref("rcomp", t, u, w, a, b)


def install(env: Environment) -> None:
    tu = [("T", TYPE), ("U", TYPE)]
    env.define("rel", tu, impl(T, U, TYPE), doc="The type of relations.")
    env.define(
        "dom",
        tu + [("R", rel(T, U))],
        lam([("x", T)], ex(U, lam([("y", U)], app(R, x, y)))),
        doc="The domain of relation `R`.",
    )
    env.define(
        "ran",
        tu + [("R", rel(T, U))],
        lam([("y", U)], ex(T, lam([("x", T)], app(R, x, y)))),
        doc="The range of relation `R`.",
    )

    _install_properties(env)
    _install_bounds(env, tu)
    _install_subrel(env, tu)
    _install_rel_equal(env, tu)
    _install_rcomp(env)
    _install_implicits(env)


def _install_properties(env: Environment) -> None:
    t = [("T", TYPE)]
    tr = t + [("R", rel(T, T))]
    ident = identity(T)

    env.define(
        "identity",
        t,
        lam([("x", T), ("y", T)], equal(T, x, y)),
        doc="The identity relation on `T`.",
    )
    env.define("reflexive", tr, forall([("x", T)], app(R, x, x)), doc="A reflexive relation.")
    env.define(
        "symmetric",
        tr,
        forall([("x", T), ("y", T)], impl(app(R, x, y), app(R, y, x))),
        doc="A symmetric relation.",
    )
    env.define(
        "transitive",
        tr,
        forall([("x", T), ("y", T), ("z", T)], impl(app(R, x, y), app(R, y, z), app(R, x, z))),
        doc="A transitive relation.",
    )
    env.define(
        "equivalence",
        tr,
        and_(ref("reflexive", T, R), and_(ref("symmetric", T, R), ref("transitive", T, R))),
        doc="An equivalence relation.",
    )

    env.theorem(
        "ident-refl",
        t,
        ref("reflexive", T, ident),
        lam([("x", T)], ref("eq-refl", T, x)),
    )

    pf = Proof(env, t, name="ident-sym")
    with pf.assume(("x", T), ("y", T), ("Hx", app(ident, x, y))):
        pf.have("a", equal(T, x, y), by=v("Hx"))
        pf.have("b", equal(T, y, x), by=pf.call("eq-sym%", pf["a"]))
    env.theorem("ident-sym", t, ref("symmetric", T, ident), pf.qed("b"))

    pf = Proof(env, t, name="ident-trans")
    with pf.assume(
        ("x", T), ("y", T), ("z", T), ("H1", app(ident, x, y)), ("H2", app(ident, y, z))
    ):
        pf.have("a", equal(T, x, y), by=v("H1"))
        pf.have("b", equal(T, y, z), by=v("H2"))
        pf.have("c", equal(T, x, z), by=pf.call("eq-trans%", pf["a"], pf["b"]))
    env.theorem("ident-trans", t, ref("transitive", T, ident), pf.qed("c"))

    pf = Proof(env, t, name="ident-equiv")
    pf.have(
        "a",
        None,
        by=pf.call(
            "and-intro%",
            ref("ident-refl", T),
            pf.call("and-intro%", ref("ident-sym", T), ref("ident-trans", T)),
        ),
    )
    env.theorem(
        "ident-equiv",
        t,
        ref("equivalence", T, ident),
        pf.qed("a"),
        doc="The identity on `T` is an equivalence relation.",
    )


def _install_bounds(env: Environment, tu) -> None:
    env.define(
        "fullrel",
        tu,
        lam([("x", T), ("y", U)], truth()),
        doc="The full (total) relation between `T` and `U`.",
    )
    env.theorem(
        "fullrel-prop",
        tu,
        forall([("x", T), ("y", U)], app(ref("fullrel", T, U), x, y)),
        lam([("x", T), ("y", U)], ref("truth-is-true")),
    )
    env.define("emptyrel", tu, lam([("x", T), ("y", U)], absurd()), doc="The empty relation.")
    env.theorem(
        "emptyrel-prop",
        tu,
        forall([("x", T), ("y", U)], not_(app(ref("emptyrel", T, U), x, y))),
        lam([("x", T), ("y", U), ("H", app(ref("emptyrel", T, U), x, y))], v("H")),
    )


def _install_subrel(env: Environment, tu) -> None:
    tur = tu + [("R", rel(T, U))]
    tu12 = tu + [("R1", rel(T, U)), ("R2", rel(T, U))]
    tu123 = tu12 + [("R3", rel(T, U))]

    env.define(
        "subrel",
        tu12,
        forall([("x", T), ("y", U)], impl(app(R1, x, y), app(R2, x, y))),
        doc="The subset ordering for relations.",
    )
    env.theorem(
        "subrel-refl",
        tur,
        subrel(T, U, R, R),
        lam([("x", T), ("y", U), ("H", app(R, x, y))], v("H")),
    )

    pf = Proof(env, tu123, name="subrel-trans")
    with pf.assume(("H1", subrel(T, U, R1, R2)), ("H2", subrel(T, U, R2, R3))):
        with pf.assume(("x", T), ("y", U)):
            pf.have("a", impl(app(R1, x, y), app(R2, x, y)), by=app(v("H1"), x, y))
            pf.have("b", impl(app(R2, x, y), app(R3, x, y)), by=app(v("H2"), x, y))
            pf.have(
                "c",
                impl(app(R1, x, y), app(R3, x, y)),
                by=pf.call("impl-trans%", pf["a"], pf["b"]),
            )
    env.theorem(
        "subrel-trans",
        tu123,
        impl(subrel(T, U, R1, R2), subrel(T, U, R2, R3), subrel(T, U, R1, R3)),
        pf.qed("c"),
    )

    env.define(
        "releq",
        tu12,
        and_(subrel(T, U, R1, R2), subrel(T, U, R2, R1)),
        doc="Subset-based equality on relations.",
    )

    pf = Proof(env, tur, name="releq-refl")
    pf.have("a", subrel(T, U, R, R), by=ref("subrel-refl", T, U, R))
    pf.have("b", None, by=pf.call("and-intro%", pf["a"], pf["a"]))
    env.theorem("releq-refl", tur, releq(T, U, R, R), pf.qed("b"))

    pf = Proof(env, tu12, name="releq-sym")
    with pf.assume(("H", releq(T, U, R1, R2))):
        pf.have(
            "a",
            None,
            by=pf.call(
                "and-intro%",
                pf.call("and-elim-right%", v("H")),
                pf.call("and-elim-left%", v("H")),
            ),
        )
    env.theorem(
        "releq-sym", tu12, impl(releq(T, U, R1, R2), releq(T, U, R2, R1)), pf.qed("a")
    )

    pf = Proof(env, tu123, name="releq-trans")
    with pf.assume(("H1", releq(T, U, R1, R2)), ("H2", releq(T, U, R2, R3))):
        pf.have("a", subrel(T, U, R1, R2), by=pf.call("and-elim-left%", v("H1")))
        pf.have("b", subrel(T, U, R2, R3), by=pf.call("and-elim-left%", v("H2")))
        pf.have(
            "c",
            subrel(T, U, R1, R3),
            by=app(ref("subrel-trans", T, U, R1, R2, R3), pf["a"], pf["b"]),
        )
        pf.have("d", subrel(T, U, R3, R2), by=pf.call("and-elim-right%", v("H2")))
        pf.have("e", subrel(T, U, R2, R1), by=pf.call("and-elim-right%", v("H1")))
        pf.have(
            "f",
            subrel(T, U, R3, R1),
            by=app(ref("subrel-trans", T, U, R3, R2, R1), pf["d"], pf["e"]),
        )
        pf.have("g", releq(T, U, R1, R3), by=pf.call("and-intro%", pf["c"], pf["f"]))
    env.theorem(
        "releq-trans",
        tu123,
        impl(releq(T, U, R1, R2), releq(T, U, R2, R3), releq(T, U, R1, R3)),
        pf.qed("g"),
    )


def _install_rel_equal(env: Environment, tu) -> None:
    tur = tu + [("R", rel(T, U))]
    tu12 = tu + [("R1", rel(T, U)), ("R2", rel(T, U))]
    tu123 = tu12 + [("R3", rel(T, U))]
    pred = impl(rel(T, U), TYPE)

    env.define(
        "rel-equal",
        tu12,
        forall([("P", pred)], iff(app(P, R1), app(P, R2))),
        doc=(
            "Leibniz-style equality for relations: for any predicate `P`, "
            "`(P R1)` if and only if `(P R2)`."
        ),
    )

    params = tu12 + [("P", pred)]
    pf = Proof(env, params, name="rel-equal-prop")
    with pf.assume(("H", rel_equal(T, U, R1, R2)), ("HR1", app(P, R1))):
        pf.have("a", iff(app(P, R1), app(P, R2)), by=app(v("H"), P))
        pf.have("b", impl(app(P, R1), app(P, R2)), by=pf.call("and-elim-left%", pf["a"]))
        pf.have("c", app(P, R2), by=app(pf["b"], v("HR1")))
    env.theorem(
        "rel-equal-prop",
        params,
        impl(rel_equal(T, U, R1, R2), app(P, R1), app(P, R2)),
        pf.qed("c"),
    )

    env.theorem(
        "rel-equal-refl",
        tur,
        rel_equal(T, U, R, R),
        lam([("P", pred)], ref("iff-refl", app(P, R))),
    )

    pf = Proof(env, tu12, name="rel-equal-sym")
    with pf.assume(("H", rel_equal(T, U, R1, R2)), ("P", pred)):
        with pf.assume(("H1", app(P, R2))):
            pf.have("a", impl(app(P, R2), app(P, R1)), by=pf.call("and-elim-right%", app(v("H"), P)))
            pf.have("b", app(P, R1), by=app(pf["a"], v("H1")))
        with pf.assume(("H2", app(P, R1))):
            pf.have("c", impl(app(P, R1), app(P, R2)), by=pf.call("and-elim-left%", app(v("H"), P)))
            pf.have("d", app(P, R2), by=app(pf["c"], v("H2")))
        pf.have("e", iff(app(P, R2), app(P, R1)), by=pf.call("iff-intro%", pf["b"], pf["d"]))
    env.theorem(
        "rel-equal-sym",
        tu12,
        impl(rel_equal(T, U, R1, R2), rel_equal(T, U, R2, R1)),
        pf.qed("e"),
    )

    pf = Proof(env, tu123, name="rel-equal-trans")
    with pf.assume(("H1", rel_equal(T, U, R1, R2)), ("H2", rel_equal(T, U, R2, R3)), ("P", pred)):
        with pf.assume(("H3", app(P, R1))):
            pf.have("a", None, by=pf.call("and-elim-left%", app(v("H1"), P)))
            pf.have("b", app(P, R2), by=app(pf["a"], v("H3")))
            pf.have("c", None, by=pf.call("and-elim-left%", app(v("H2"), P)))
            pf.have("d", app(P, R3), by=app(pf["c"], pf["b"]))
        with pf.assume(("H4", app(P, R3))):
            pf.have("e", None, by=pf.call("and-elim-right%", app(v("H2"), P)))
            pf.have("f", app(P, R2), by=app(pf["e"], v("H4")))
            pf.have("g", None, by=pf.call("and-elim-right%", app(v("H1"), P)))
            pf.have("h", app(P, R1), by=app(pf["g"], pf["f"]))
        pf.have("i", iff(app(P, R1), app(P, R3)), by=pf.call("iff-intro%", pf["d"], pf["h"]))
    env.theorem(
        "rel-equal-trans",
        tu123,
        impl(rel_equal(T, U, R1, R2), rel_equal(T, U, R2, R3), rel_equal(T, U, R1, R3)),
        pf.qed("i"),
    )

    pf = Proof(env, tu12, name="rel-equal-implies-subrel")
    with pf.assume(("H", rel_equal(T, U, R1, R2)), ("x", T), ("y", U)):
        qxy = pf.pose("Qxy", lam([("R", rel(T, U))], app(R, x, y)))
        pf.have("a", iff(app(R1, x, y), app(R2, x, y)), by=app(v("H"), qxy))
        pf.have("b", impl(app(R1, x, y), app(R2, x, y)), by=pf.call("and-elim-left%", pf["a"]))
    env.theorem(
        "rel-equal-implies-subrel",
        tu12,
        impl(rel_equal(T, U, R1, R2), subrel(T, U, R1, R2)),
        pf.qed("b"),
    )

    pf = Proof(env, tu12, name="rel-equal-implies-releq")
    with pf.assume(("H", rel_equal(T, U, R1, R2))):
        pf.have(
            "a", subrel(T, U, R1, R2), by=app(ref("rel-equal-implies-subrel", T, U, R1, R2), v("H"))
        )
        pf.have("b", rel_equal(T, U, R2, R1), by=app(ref("rel-equal-sym", T, U, R1, R2), v("H")))
        pf.have(
            "c", subrel(T, U, R2, R1), by=app(ref("rel-equal-implies-subrel", T, U, R2, R1), pf["b"])
        )
        pf.have("d", releq(T, U, R1, R2), by=pf.call("and-intro%", pf["a"], pf["c"]))
    env.theorem(
        "rel-equal-implies-releq",
        tu12,
        impl(rel_equal(T, U, R1, R2), releq(T, U, R1, R2)),
        pf.qed("d"),
    )

    env.axiom(
        "releq-implies-rel-equal-ax",
        tu12,
        impl(releq(T, U, R1, R2), rel_equal(T, U, R1, R2)),
        doc=(
            "As for sets, going from subset-based equality to the Leibniz-style "
            "one requires an axiom."
        ),
    )

    pf = Proof(env, tu12, name="rel-equal-releq")
    pf.have(
        "a",
        None,
        by=pf.call(
            "and-intro%",
            ref("rel-equal-implies-releq", T, U, R1, R2),
            ref("releq-implies-rel-equal-ax", T, U, R1, R2),
        ),
    )
    env.theorem(
        "rel-equal-releq",
        tu12,
        iff(rel_equal(T, U, R1, R2), releq(T, U, R1, R2)),
        pf.qed("a"),
        doc="Coincidence of Leibniz-style and subset-based equality for relations.",
    )


def _install_rcomp(env: Environment) -> None:
    env.define(
        "rcomp",
        [("T", TYPE), ("U", TYPE), ("V", TYPE), ("R1", rel(T, U)), ("R2", rel(U, V))],
        lam(
            [("x", T), ("z", V)],
            ex(U, lam([("y", U)], and_(app(R1, x, y), app(R2, y, z)))),
        ),
        doc="Sequential relational composition.",
    )

    params = [
        ("T", TYPE),
        ("U", TYPE),
        ("V", TYPE),
        ("W", TYPE),
        ("R1", rel(T, U)),
        ("R2", rel(U, V)),
        ("R3", rel(V, W)),
    ]
    r12 = rcomp(T, U, V, R1, R2)
    r23 = rcomp(U, V, W, R2, R3)
    left = rcomp(T, U, W, R1, r23)
    right = rcomp(T, V, W, r12, R3)

    aux = params + [("x", T), ("z", W)]
    goal = app(right, x, z)
    k, t = v("k"), v("t")

    pf = Proof(env, aux, name="rcomp-assoc-aux1")
    with pf.assume(("H", app(left, x, z))):
        pf.have(
            "a",
            ex(U, lam([("k", U)], and_(app(R1, x, k), app(r23, k, z)))),
            by=v("H"),
        )
        with pf.assume(("y", U), ("Hy", and_(app(R1, x, y), app(r23, y, z)))):
            pf.have(
                "b",
                ex(V, lam([("k", V)], and_(app(R2, y, k), app(R3, k, z)))),
                by=pf.call("and-elim-right%", v("Hy")),
            )
            with pf.assume(("t", V), ("Ht", and_(app(R2, y, t), app(R3, t, z)))):
                pf.have(
                    "c",
                    and_(app(R1, x, y), app(R2, y, t)),
                    by=pf.call(
                        "and-intro%",
                        pf.call("and-elim-left%", v("Hy")),
                        pf.call("and-elim-left%", v("Ht")),
                    ),
                )
                pf.have(
                    "d",
                    app(r12, x, t),
                    by=app(
                        ref("ex-intro", U, lam([("k", U)], and_(app(R1, x, k), app(R2, k, t))), y),
                        pf["c"],
                    ),
                )
                pf.have("e", app(R3, t, z), by=pf.call("and-elim-right%", v("Ht")))
                pf.have("f", and_(app(r12, x, t), app(R3, t, z)), by=pf.call("and-intro%", pf["d"], pf["e"]))
                pf.have(
                    "g",
                    goal,
                    by=app(
                        ref("ex-intro", V, lam([("k", V)], and_(app(r12, x, k), app(R3, k, z))), t),
                        pf["f"],
                    ),
                )
            pf.have(
                "h",
                goal,
                by=app(
                    ref("ex-elim", V, lam([("k", V)], and_(app(R2, y, k), app(R3, k, z))), goal),
                    pf["b"],
                    pf["g"],
                ),
            )
        pf.have(
            "i",
            goal,
            by=app(
                ref("ex-elim", U, lam([("k", U)], and_(app(R1, x, k), app(r23, k, z))), goal),
                pf["a"],
                pf["h"],
            ),
        )
    env.theorem(
        "rcomp-assoc-aux1",
        aux,
        impl(app(left, x, z), goal),
        pf.qed("i"),
        doc="Forward containment of the associativity of composition, pointwise.",
    )
    if env.allow_conjectures:
        env.conjecture(
            "rcomp-assoc",
            params,
            rel_equal(T, W, left, right),
            doc="Relational composition is associative (backward containment unproved).",
        )


def _install_implicits(env: Environment) -> None:
    for name in (
        "dom",
        "ran",
        "subrel",
        "subrel-refl",
        "subrel-trans",
        "releq",
        "releq-refl",
        "releq-sym",
        "releq-trans",
        "rel-equal",
        "rel-equal-refl",
        "rel-equal-sym",
        "rel-equal-trans",
    ):
        env.register_implicit(f"{name}%", on_rel(name), f"Implicit form of `{name}`.")
