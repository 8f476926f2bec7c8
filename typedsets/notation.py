"""Quantifiers restricted to the elements of a set.

    forall_in(("x", T, s), body)  ≡  Π x:T. (elem T x s) ==> body
    exists_in(("x", T, s), body)  ≡  ex T (λ x:T. and (elem T x s) body)

A binding is the triple ``(name, type, set)``; anything else is rejected
with a ``NotationError`` carrying the offending binding.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import NotationError
from .helpers import impl
from .prelude import and_, ex
from .sets import elem
from .terms import Lam, Pi, Term, Var

SetBinding = tuple[str, Term, Term]


def _unpack(form: str, binding: Sequence[object]) -> tuple[str, Term, Term]:
    if len(binding) != 3 or not isinstance(binding[0], str):
        raise NotationError(
            f"Binding of `{form}` should be of the form `[x T s]`.", binding
        )
    name, ty, st = binding
    return name, ty, st  # type: ignore[return-value]


def forall_in(binding: SetBinding, body: Term) -> Term:
    name, ty, st = _unpack("forall-in", binding)
    return Pi(name, ty, impl(elem(ty, Var(name), st), body))


def exists_in(binding: SetBinding, body: Term) -> Term:
    name, ty, st = _unpack("exists-in", binding)
    return ex(ty, Lam(name, ty, and_(elem(ty, Var(name), st), body)))
