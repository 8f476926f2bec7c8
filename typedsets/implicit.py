"""Recovering type parameters from the types of values.

An implicit form receives its arguments together with their inferred types
and rebuilds the fully explicit call. The lookups below are the pure
functions that destructure such a type tag, e.g. ``(set T)`` → ``T``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .errors import IllTypedError
from .kernel import Context, reduce_step, whnf
from .terms import Pi, Ref, Sort, Term, occurs, pretty

if TYPE_CHECKING:
    from .env import Environment

logger = logging.getLogger(__name__)


def unfold_to(env: Environment, ty: Term, name: str) -> Ref:
    """Reduce ``ty`` step by step until its head is a reference to ``name``."""
    current = ty
    while True:
        if isinstance(current, Ref) and current.name == name:
            return current
        step = reduce_step(env, current)
        if step is None:
            raise IllTypedError(f"Expected a '{name}' type, got {pretty(ty)}")
        current = step


def fetch_impl_domain(env: Environment, ty: Term) -> Term:
    """The ``T`` of a type ``T ==> X``."""
    reduced = whnf(env, ty)
    if not isinstance(reduced, Pi):
        raise IllTypedError(f"Not a product type: {pretty(ty)}")
    return reduced.domain


def fetch_set_type(env: Environment, ty: Term) -> Term:
    """The ``T`` of a set type ``(set T)`` (or its unfolding ``T ==> type``)."""
    current = ty
    while True:
        if isinstance(current, Ref) and current.name == "set":
            return current.args[0]
        if (
            isinstance(current, Pi)
            and not occurs(current.name, current.body)
            and whnf(env, current.body) == Sort("type")
        ):
            return current.domain
        step = reduce_step(env, current)
        if step is None:
            raise IllTypedError(f"Not a set type: {pretty(ty)}")
        current = step


def fetch_rel_types(env: Environment, ty: Term) -> tuple[Term, Term]:
    """The ``T`` and ``U`` of a relation type ``(rel T U)``."""
    current = ty
    while True:
        if isinstance(current, Ref) and current.name == "rel":
            return current.args[0], current.args[1]
        if isinstance(current, Pi):
            inner = whnf(env, current.body)
            if isinstance(inner, Pi) and whnf(env, inner.body) == Sort("type"):
                return current.domain, inner.domain
            break
        step = reduce_step(env, current)
        if step is None:
            break
        current = step
    raise IllTypedError(f"Not a relation type: {pretty(ty)}")


def fetch_powerrel_types(env: Environment, ty: Term) -> tuple[Term, Term]:
    """The ``T`` and ``U`` of a relation powerset type ``(powerrel T U)``."""
    current = ty
    while True:
        if isinstance(current, Ref) and current.name == "powerrel":
            return current.args[0], current.args[1]
        if isinstance(current, Pi):
            return fetch_rel_types(env, current.domain)
        step = reduce_step(env, current)
        if step is None:
            raise IllTypedError(f"Not a relation powerset type: {pretty(ty)}")
        current = step


def traced(name: str, ctx: Context, result: Term) -> Term:
    logger.debug(
        "implicit %s expanded to %s (context depth %d)", name, pretty(result), len(ctx)
    )
    return result


def on_set(entry: str) -> Callable[..., Term]:
    """Implicit form of ``entry``: ``T`` is recovered from the first argument, a set."""

    def expand(env: Environment, ctx: Context, *typed: tuple[Term, Term]) -> Term:
        ty = fetch_set_type(env, typed[0][1])
        return traced(entry, ctx, Ref(entry, (ty, *(t for t, _ in typed))))

    return expand


def on_rel(entry: str) -> Callable[..., Term]:
    """Implicit form of ``entry``: ``T`` and ``U`` come from the first argument, a relation."""

    def expand(env: Environment, ctx: Context, *typed: tuple[Term, Term]) -> Term:
        t, u = fetch_rel_types(env, typed[0][1])
        return traced(entry, ctx, Ref(entry, (t, u, *(a for a, _ in typed))))

    return expand
