"""Proof scripts: assume / have / pose / qed.

A script builds a closed proof term step by step::

    pf = Proof(env, params)
    with pf.assume(("x", T), ("H", elem(T, v("x"), s))):
        pf.have("a", elem(T, v("x"), s), by=v("H"))
    env.theorem("subset-refl-thm", params, subset(T, s, s), pf.qed("a"))

Each ``have`` is type-checked when it is stated. When an ``assume`` block
closes, every fact established inside it is abstracted over the assumed
variables, so ``a`` above becomes ``λ x:T. λ H:(elem T x s). H``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .env import Environment, ParamSpec
from .errors import IllTypedError, IncompleteProofError, KernelError
from .kernel import Context, check, check_telescope, infer, infer_sort
from .terms import Lam, Pi, Term, pretty

logger = logging.getLogger(__name__)


@dataclass
class _Scope:
    start: int
    facts: list[str] = field(default_factory=list)
    poses: list[str] = field(default_factory=list)


class Proof:
    def __init__(self, env: Environment, params: ParamSpec = (), name: str | None = None):
        self.env = env
        self.name = name
        self._ctx: list[tuple[str, Term]] = list(check_telescope(env, params))
        self._scopes: list[_Scope] = []
        self._facts: dict[str, tuple[Term, Term]] = {}
        self._poses: dict[str, Term] = {}

    @property
    def ctx(self) -> Context:
        return tuple(self._ctx)

    # -- steps ----------------------------------------------------------------

    @contextmanager
    def assume(self, *bindings: tuple[str, Term]) -> Iterator[Proof]:
        start = len(self._ctx)
        try:
            for name, ty in bindings:
                if any(n == name for n, _ in self._ctx):
                    raise IllTypedError(f"Assumption '{name}' shadows a variable in scope")
                infer_sort(self.env, self.ctx, ty)
                self._ctx.append((name, ty))
        except KernelError as e:
            del self._ctx[start:]
            raise e.within(self.name) if self.name else e
        self._scopes.append(_Scope(start))
        try:
            yield self
        except BaseException:
            self._drop_scope()
            raise
        self._close_scope()

    def have(self, label: str, ty: Term | None, *, by: Term) -> Term:
        """State fact ``label`` of type ``ty`` (``None`` to infer it) proved ``by``."""
        if label in self._facts or label in self._poses:
            raise IllTypedError(f"Label '{label}' is already used in this proof")
        try:
            if ty is None:
                ty = infer(self.env, self.ctx, by)
            else:
                infer_sort(self.env, self.ctx, ty)
                check(self.env, self.ctx, by, ty)
        except KernelError as e:
            logger.debug("Step %r failed: %s", label, e.message)
            e.message = f"step <{label}>: {e.message}"
            raise e.within(self.name) if self.name else e
        self._facts[label] = (by, ty)
        if self._scopes:
            self._scopes[-1].facts.append(label)
        logger.debug("have <%s> : %s", label, pretty(ty))
        return by

    def pose(self, label: str, term: Term) -> Term:
        """Local abbreviation, scoped to the enclosing ``assume`` block."""
        if label in self._facts or label in self._poses:
            raise IllTypedError(f"Label '{label}' is already used in this proof")
        infer(self.env, self.ctx, term)
        self._poses[label] = term
        if self._scopes:
            self._scopes[-1].poses.append(label)
        return term

    def __getitem__(self, label: str) -> Term:
        if label in self._poses:
            return self._poses[label]
        if label in self._facts:
            return self._facts[label][0]
        raise IllTypedError(f"Unknown proof label '{label}'")

    def type_of(self, label: str) -> Term:
        return self._facts[label][1]

    def call(self, implicit: str, *args: Term) -> Term:
        """Expand an implicit form in the current context."""
        return self.env.expand(self.ctx, implicit, *args)

    def infer(self, term: Term) -> Term:
        return infer(self.env, self.ctx, term)

    def qed(self, conclusion: str | Term) -> Term:
        if self._scopes:
            raise IncompleteProofError(
                f"{len(self._scopes)} assumption block(s) still open", self.name
            )
        if isinstance(conclusion, str):
            if conclusion not in self._facts:
                raise IncompleteProofError(
                    f"Conclusion <{conclusion}> was never established", self.name
                )
            return self._facts[conclusion][0]
        return conclusion

    # -- scopes -----------------------------------------------------------------

    def _drop_scope(self) -> None:
        scope = self._scopes.pop()
        del self._ctx[scope.start :]
        for label in scope.facts:
            del self._facts[label]
        for label in scope.poses:
            del self._poses[label]

    def _close_scope(self) -> None:
        scope = self._scopes.pop()
        bound = self._ctx[scope.start :]
        del self._ctx[scope.start :]
        for label in scope.poses:
            del self._poses[label]
        for label in scope.facts:
            term, ty = self._facts[label]
            for name, domain in reversed(bound):
                term = Lam(name, domain, term)
                ty = Pi(name, domain, ty)
            self._facts[label] = (term, ty)
            if self._scopes:
                self._scopes[-1].facts.append(label)
