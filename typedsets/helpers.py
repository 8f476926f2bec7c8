"""Builder helpers for constructing terms.

These are the primary public API for writing definitions, statements and
proof terms. Library modules use these rather than constructing AST nodes
directly.
"""

from __future__ import annotations

from collections.abc import Sequence

from typedsets.terms import App, Lam, Pi, Ref, Sort, Term, Var

TYPE = Sort("type")
KIND = Sort("kind")

Binding = tuple[str, Term]


def v(name: str) -> Var:
    return Var(name)


def ref(name: str, *args: Term) -> Ref:
    return Ref(name=name, args=tuple(args))


def app(fn: Term, *args: Term) -> Term:
    """Curried application: ``app(f, a, b)`` is ``((f a) b)``."""
    out = fn
    for a in args:
        out = App(out, a)
    return out


def lam(bindings: Sequence[Binding], body: Term) -> Term:
    """``lam([("x", T), ("y", U)], b)`` is ``λ x:T. λ y:U. b``."""
    out = body
    for name, domain in reversed(bindings):
        out = Lam(name, domain, out)
    return out


def forall(bindings: Sequence[Binding], body: Term) -> Term:
    out = body
    for name, domain in reversed(bindings):
        out = Pi(name, domain, out)
    return out


def impl(*types: Term) -> Term:
    """``impl(A, B, C)`` is ``A ==> B ==> C`` (right nested)."""
    if not types:
        raise ValueError("impl needs at least one type")
    out = types[-1]
    for t in reversed(types[:-1]):
        out = Pi("_", t, out)
    return out


def set_of(binding: Binding, body: Term) -> Term:
    """Set-builder ``{x:T | body}``, which is simply ``λ x:T. body``."""
    name, domain = binding
    return Lam(name, domain, body)
