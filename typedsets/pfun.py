"""Partial functions as relations restricted to a domain set.

A partial function is a relation ``f : (rel T U)`` together with a domain
``from : (set T)`` such that every element of ``from`` has at most one image.
Outside ``from``, ``f`` need not be functional at all.

Type-theoretic functions ``T ==> U`` are total and native to the calculus;
the encoding here is for the cases where the domain matters.
"""

from __future__ import annotations

from .env import Environment
from .helpers import TYPE, app, forall, impl, lam, ref, v
from .implicit import on_rel
from .notation import exists_in, forall_in
from .prelude import and_, and_all, equal, ex
from .proof import Proof
from .rel import identity, rel
from .sets import elem, set_, set_equal, seteq, subset
from .terms import Term

T, U, V = v("T"), v("U"), v("V")
f, g = v("f"), v("g")
frm, to = v("from"), v("to")
x, y, z, w = v("x"), v("y"), v("z"), v("w")
y1, y2, x1, x2 = v("y1"), v("y2"), v("x1"), v("x2")


def pfun(t: Term, u: Term, fn: Term, domain: Term) -> Term:
    return ref("pfun", t, u, fn, domain)


def pdom(t: Term, u: Term, fn: Term, domain: Term) -> Term:
    return ref("pdom", t, u, fn, domain)


def ptotal(t: Term, u: Term, fn: Term, domain: Term) -> Term:
    return ref("ptotal", t, u, fn, domain)


def install(env: Environment) -> None:
    tuf = [("T", TYPE), ("U", TYPE), ("f", rel(T, U))]
    tuff = tuf + [("from", set_(T))]

    env.define(
        "pfun",
        tuff,
        forall_in(
            ("x", T, frm),
            forall([("y1", U), ("y2", U)], impl(app(f, x, y1), app(f, x, y2), equal(U, y1, y2))),
        ),
        doc=(
            "`f` is a partial function on the domain `from`: right-unique for "
            "arguments in `from`."
        ),
    )

    _install_graphs(env)

    env.define(
        "pdom",
        tuff,
        lam([("x", T)], and_(elem(T, x, frm), ex(U, lam([("y", U)], app(f, x, y))))),
        doc="The actual domain of `f`, taking antecedents in `from`.",
    )
    env.define(
        "pran",
        tuff,
        lam([("y", U)], exists_in(("x", T, frm), app(f, x, y))),
        doc="The range of `f`, taking antecedents in `from`.",
    )
    env.theorem(
        "pdom-subset",
        tuff,
        subset(T, pdom(T, U, f, frm), frm),
        lam(
            [("x", T), ("Hx", elem(T, x, pdom(T, U, f, frm)))],
            app(ref("and-elim-left", elem(T, x, frm), ex(U, lam([("y", U)], app(f, x, y)))), v("Hx")),
        ),
        doc="The actual domain is included in the declared one.",
    )
    env.define(
        "ptotal",
        tuff,
        set_equal(T, pdom(T, U, f, frm), frm),
        doc="`f` is total with respect to the domain `from`.",
    )

    pf = Proof(env, tuff, name="ptotal-domain")
    dom = pdom(T, U, f, frm)
    with pf.assume(("Htot", ptotal(T, U, f, frm))):
        with pf.assume(("x", T), ("Hx", elem(T, x, frm))):
            pf.have("a", set_equal(T, frm, dom), by=app(ref("set-equal-sym-thm", T, dom, frm), v("Htot")))
            pf.have("b", seteq(T, frm, dom), by=app(ref("set-equal-implies-seteq", T, frm, dom), pf["a"]))
            pf.have("c", elem(T, x, dom), by=app(pf.call("and-elim-left%", pf["b"]), x, v("Hx")))
            pf.have("d", ex(U, lam([("y", U)], app(f, x, y))), by=pf.call("and-elim-right%", pf["c"]))
    env.theorem(
        "ptotal-domain",
        tuff,
        impl(ptotal(T, U, f, frm), forall_in(("x", T, frm), ex(U, lam([("y", U)], app(f, x, y))))),
        pf.qed("d"),
        doc="Every element of the domain of a total partial function has an image.",
    )

    _install_totality(env)
    _install_composition(env)
    _install_jections(env)

    for name in (
        "pfun",
        "pdom",
        "pran",
        "pdom-subset",
        "ptotal",
        "ptotal-domain",
        "pinjective",
        "psurjective",
        "pbijective",
    ):
        env.register_implicit(f"{name}%", on_rel(name), f"Implicit form of `{name}`.")


def _install_graphs(env: Environment) -> None:
    t = [("T", TYPE)]
    rid = identity(T)
    pf = Proof(env, t, name="ridentity-pfun")
    with pf.assume(
        ("from", set_(T)),
        ("x", T),
        ("Hx", elem(T, x, frm)),
        ("y1", T),
        ("y2", T),
        ("Hid1", app(rid, x, y1)),
        ("Hid2", app(rid, x, y2)),
    ):
        pf.have(
            "a",
            equal(T, y1, y2),
            by=pf.call("eq-trans%", pf.call("eq-sym%", v("Hid1")), v("Hid2")),
        )
    env.theorem(
        "ridentity-pfun",
        t,
        forall([("from", set_(T))], pfun(T, T, rid, frm)),
        pf.qed("a"),
        doc="The identity relation is a partial function on any domain set.",
    )

    tuf = [("T", TYPE), ("U", TYPE), ("f", impl(T, U))]
    env.define(
        "pfun-fun",
        tuf,
        lam([("x", T), ("y", U)], equal(U, app(f, x), y)),
        doc="The graph of a (total) type-theoretic function `f`.",
    )
    graph = ref("pfun-fun", T, U, f)
    pf = Proof(env, tuf, name="pfun-fun-prop")
    with pf.assume(
        ("from", set_(T)),
        ("x", T),
        ("Hx", elem(T, x, frm)),
        ("y1", U),
        ("y2", U),
        ("Hy1", app(graph, x, y1)),
        ("Hy2", app(graph, x, y2)),
    ):
        pf.have(
            "a",
            equal(U, y1, y2),
            by=pf.call("eq-trans%", pf.call("eq-sym%", v("Hy1")), v("Hy2")),
        )
    env.theorem(
        "pfun-fun-prop",
        tuf,
        forall([("from", set_(T))], pfun(T, U, graph, frm)),
        pf.qed("a"),
        doc="The graph of a function is a partial function on any domain restriction.",
    )


def _total_on_every_domain(
    env: Environment, name: str, params, u: Term, graph: Term, image: Term, refl: Term, doc: str
) -> None:
    """Prove ``∀ from. ptotal graph from`` given ``refl : graph x image``."""
    pf = Proof(env, params, name=name)
    with pf.assume(("from", set_(T))):
        dom = pdom(T, u, graph, frm)
        with pf.assume(("x", T), ("Hx", elem(T, x, dom))):
            pf.have("a", elem(T, x, frm), by=pf.call("and-elim-left%", v("Hx")))
        with pf.assume(("x", T), ("Hx", elem(T, x, frm))):
            pf.have("b1", app(graph, x, image), by=refl)
            pf.have(
                "b2",
                ex(u, lam([("y", u)], app(graph, x, y))),
                by=app(ref("ex-intro", u, lam([("y", u)], app(graph, x, y)), image), pf["b1"]),
            )
            pf.have("b", elem(T, x, dom), by=pf.call("and-intro%", v("Hx"), pf["b2"]))
        pf.have("c", seteq(T, dom, frm), by=pf.call("and-intro%", pf["a"], pf["b"]))
        pf.have(
            "d",
            set_equal(T, dom, frm),
            by=app(ref("seteq-implies-set-equal-ax", T, dom, frm), pf["c"]),
        )
    env.theorem(
        name,
        params,
        forall([("from", set_(T))], ptotal(T, u, graph, frm)),
        pf.qed("d"),
        doc=doc,
    )


def _install_totality(env: Environment) -> None:
    _total_on_every_domain(
        env,
        "pfun-fun-total",
        [("T", TYPE), ("U", TYPE), ("f", impl(T, U))],
        U,
        ref("pfun-fun", T, U, f),
        app(f, x),
        ref("eq-refl", U, app(f, x)),
        "The graph of a type-theoretic function is total on every domain.",
    )
    _total_on_every_domain(
        env,
        "ridentity-total",
        [("T", TYPE)],
        T,
        identity(T),
        x,
        ref("eq-refl", T, x),
        "The identity relation is total on every domain.",
    )


def _install_composition(env: Environment) -> None:
    params = [
        ("T", TYPE),
        ("U", TYPE),
        ("V", TYPE),
        ("f", rel(U, V)),
        ("ffrom", set_(U)),
        ("g", rel(T, U)),
        ("gfrom", set_(T)),
    ]
    ffrom, gfrom = v("ffrom"), v("gfrom")
    env.define(
        "pcompose",
        params,
        lam(
            [("x", T), ("z", V)],
            impl(
                elem(T, x, gfrom),
                ex(U, lam([("y", U)], and_all(elem(U, y, ffrom), app(g, x, y), app(f, y, z)))),
            ),
        ),
        doc="Composition of the partial functions `g` (on `gfrom`) then `f` (on `ffrom`).",
    )
    if env.allow_conjectures:
        env.conjecture(
            "pcompose-pfun",
            params,
            impl(
                pfun(U, V, f, ffrom),
                pfun(T, U, g, gfrom),
                pfun(T, V, ref("pcompose", T, U, V, f, ffrom, g, gfrom), gfrom),
            ),
            doc="The composition of two partial functions is a partial function.",
        )


def _install_jections(env: Environment) -> None:
    params = [("T", TYPE), ("U", TYPE), ("f", rel(T, U)), ("from", set_(T)), ("to", set_(U))]
    env.define(
        "pinjective",
        params,
        forall_in(
            ("x1", T, frm),
            forall_in(
                ("x2", T, frm),
                forall_in(
                    ("y1", U, to),
                    forall_in(
                        ("y2", U, to),
                        impl(app(f, x1, y1), app(f, x2, y2), equal(U, y1, y2), equal(T, x1, x2)),
                    ),
                ),
            ),
        ),
        doc="An injective partial function.",
    )
    env.define(
        "psurjective",
        params,
        forall_in(("y", U, to), exists_in(("x", T, frm), app(f, x, y))),
        doc="A surjective partial function.",
    )
    env.define(
        "pbijective",
        params,
        and_(ref("pinjective", T, U, f, frm, to), ref("psurjective", T, U, f, frm, to)),
        doc="A bijective partial function.",
    )
    if env.allow_conjectures:
        maps_to = lam([("x", T)], forall_in(("w", U, to), impl(app(f, x, w), equal(U, w, z))))
        env.conjecture(
            "pinjective-single",
            params,
            impl(
                pfun(T, U, f, frm),
                ref("pinjective", T, U, f, frm, to),
                forall_in(("z", U, to), ref("single-in-prop", T, frm, maps_to)),
            ),
            doc="At most one antecedent in `from` maps only to a given `z`.",
        )
