"""Type inference and conversion for the Calculus of Constructions.

The kernel is the only trusted component: an entry reaches the environment
only after every term in it has been typed here.

  - ``type`` : ``kind``, and ``kind`` has no type
  - products are impredicative: ``Π x:A. B`` lives in the sort of ``B``
  - a ``Ref`` to a definition unfolds (delta) to its body; theorems, axioms
    and conjectures are opaque
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .errors import IllTypedError, TypeMismatchError, UnknownNameError
from .terms import (
    App,
    Lam,
    Pi,
    Ref,
    Sort,
    Term,
    Var,
    alpha_eq,
    free_vars,
    fresh_name,
    pretty,
    rename,
    subst,
)

if TYPE_CHECKING:
    from .env import Environment

logger = logging.getLogger(__name__)

Context = tuple[tuple[str, Term], ...]

EMPTY: Context = ()


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------


def ctx_lookup(ctx: Context, name: str) -> Term | None:
    for i in range(len(ctx) - 1, -1, -1):
        if ctx[i][0] == name:
            return ctx[i][1]
    return None


def ctx_names(ctx: Context) -> frozenset[str]:
    return frozenset(n for n, _ in ctx)


def _open_binder(ctx: Context, t: Pi | Lam) -> tuple[str, Term]:
    """Pick a name for ``t``'s bound variable that does not shadow ``ctx``."""
    names = ctx_names(ctx)
    if t.name not in names:
        return t.name, t.body
    renamed = fresh_name(t.name, names | free_vars(t.body))
    return renamed, rename(t, renamed)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def unfold(env: Environment, t: Ref) -> Term | None:
    """Delta-unfold a reference to a definition (``None`` when opaque)."""
    entry = env.lookup(t.name)
    if not entry.is_transparent or entry.body is None:
        return None
    return subst(entry.body, {p.name: a for p, a in zip(entry.params, t.args)})


def reduce_step(env: Environment, t: Term) -> Term | None:
    """One head reduction step (beta, or delta on the head), if any."""
    match t:
        case App(Lam() as f, arg):
            return subst(f.body, {f.name: arg})
        case App(fn, arg):
            reduced = reduce_step(env, fn)
            return None if reduced is None else App(reduced, arg)
        case Ref():
            return unfold(env, t)
    return None


def whnf(env: Environment, t: Term) -> Term:
    """Weak-head normal form under beta and delta reduction."""
    while True:
        step = reduce_step(env, t)
        if step is None:
            return t
        t = step


def normalize(env: Environment, t: Term) -> Term:
    """Full beta-delta normal form (used for display and tests)."""
    t = whnf(env, t)
    match t:
        case Pi(name, domain, body):
            return Pi(name, normalize(env, domain), normalize(env, body))
        case Lam(name, domain, body):
            return Lam(name, normalize(env, domain), normalize(env, body))
        case App(fn, arg):
            return App(normalize(env, fn), normalize(env, arg))
        case Ref(name, args):
            return Ref(name, tuple(normalize(env, a) for a in args))
    return t


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def convertible(env: Environment, a: Term, b: Term) -> bool:
    if alpha_eq(a, b):
        return True
    if (
        isinstance(a, Ref)
        and isinstance(b, Ref)
        and a.name == b.name
        and all(convertible(env, x, y) for x, y in zip(a.args, b.args))
    ):
        return True
    a = whnf(env, a)
    b = whnf(env, b)
    match a, b:
        case Sort(x), Sort(y):
            return x == y
        case Var(x), Var(y):
            return x == y
        case (Pi(), Pi()) | (Lam(), Lam()):
            if not convertible(env, a.domain, b.domain):
                return False
            z = fresh_name(a.name, free_vars(a.body) | free_vars(b.body))
            return convertible(env, rename(a, z), rename(b, z))
        case Lam(), _:
            return _eta(env, a, b)
        case _, Lam():
            return _eta(env, b, a)
        case App(f1, x1), App(f2, x2):
            return convertible(env, f1, f2) and convertible(env, x1, x2)
        case Ref(n1, args1), Ref(n2, args2):
            return n1 == n2 and all(
                convertible(env, x, y) for x, y in zip(args1, args2)
            )
    return False


def _eta(env: Environment, lam: Lam, other: Term) -> bool:
    z = fresh_name(lam.name, free_vars(lam.body) | free_vars(other))
    return convertible(env, rename(lam, z), App(other, Var(z)))


# ---------------------------------------------------------------------------
# Typing
# ---------------------------------------------------------------------------


def infer(env: Environment, ctx: Context, t: Term) -> Term:
    """Infer the type of ``t`` in ``ctx``; raise if it has none."""
    match t:
        case Sort("type"):
            return Sort("kind")
        case Sort(name):
            raise IllTypedError(f"Sort :{name} has no type")
        case Var(name):
            ty = ctx_lookup(ctx, name)
            if ty is None:
                raise IllTypedError(f"Variable '{name}' is not bound")
            return ty
        case Pi():
            infer_sort(env, ctx, t.domain)
            name, body = _open_binder(ctx, t)
            return infer_sort(env, ctx + ((name, t.domain),), body)
        case Lam():
            infer_sort(env, ctx, t.domain)
            name, body = _open_binder(ctx, t)
            body_ty = infer(env, ctx + ((name, t.domain),), body)
            return Pi(name, t.domain, body_ty)
        case App(fn, arg):
            fn_ty = whnf(env, infer(env, ctx, fn))
            if not isinstance(fn_ty, Pi):
                raise IllTypedError(
                    f"Cannot apply {pretty(fn)} of non-product type {pretty(fn_ty)}"
                )
            check(env, ctx, arg, fn_ty.domain)
            return subst(fn_ty.body, {fn_ty.name: arg})
        case Ref(name, args):
            return _infer_ref(env, ctx, name, args)
    raise TypeError(f"Unknown term type: {type(t)}")


def _infer_ref(
    env: Environment, ctx: Context, name: str, args: tuple[Term, ...]
) -> Term:
    if name not in env:
        raise UnknownNameError(f"Reference to unregistered name '{name}'")
    entry = env.lookup(name)
    if len(args) != len(entry.params):
        raise IllTypedError(
            f"'{name}' expects {len(entry.params)} arguments, got {len(args)}"
        )
    mapping: dict[str, Term] = {}
    for param, arg in zip(entry.params, args):
        check(env, ctx, arg, subst(param.type, mapping))
        mapping[param.name] = arg
    return subst(entry.type, mapping)


def infer_sort(env: Environment, ctx: Context, t: Term) -> Sort:
    """Check that ``t`` is a type (its own type is a sort) and return the sort."""
    ty = whnf(env, infer(env, ctx, t))
    if not isinstance(ty, Sort):
        raise IllTypedError(f"{pretty(t)} is not a type (its type is {pretty(ty)})")
    return ty


def check(env: Environment, ctx: Context, t: Term, expected: Term) -> None:
    actual = infer(env, ctx, t)
    if not convertible(env, actual, expected):
        logger.debug("Mismatch on %s", pretty(t))
        raise TypeMismatchError(
            f"Term {pretty(t)} has type {pretty(actual)}, expected {pretty(expected)}",
            expected=pretty(expected),
            actual=pretty(actual),
        )


def check_telescope(
    env: Environment, params: Sequence[tuple[str, Term]]
) -> Context:
    """Check a parameter list left to right and return it as a context."""
    ctx: Context = EMPTY
    seen: set[str] = set()
    for name, ty in params:
        if name in seen:
            raise IllTypedError(f"Parameter '{name}' is declared twice")
        seen.add(name)
        infer_sort(env, ctx, ty)
        ctx = ctx + ((name, ty),)
    return ctx
