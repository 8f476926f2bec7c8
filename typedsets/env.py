"""The global definitional environment.

An environment E = (e₁, ..., eₙ) is an ordered, append-only sequence of
named entries. Each entry is checked against the entries registered before
it, so the registration order is a dependency order: a term may only
reference names that already exist.

Entry kinds:
  - DEFINITION  parameters + body, transparent (unfolds during conversion)
  - THEOREM     parameters + statement + checked proof term, opaque
  - AXIOM       parameters + statement, postulated without proof
  - CONJECTURE  parameters + statement, unverified; no proof may use it
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import (
    DuplicateNameError,
    IncompleteProofError,
    KernelError,
    UnknownNameError,
    UnverifiedReferenceError,
)
from .kernel import Context, check, check_telescope, infer, infer_sort
from .terms import Term, refs

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    DEFINITION = "definition"
    THEOREM = "theorem"
    AXIOM = "axiom"
    CONJECTURE = "conjecture"


@dataclass(frozen=True)
class Param:
    """A named, typed parameter of an entry."""

    name: str
    type: Term


@dataclass(frozen=True)
class Entry:
    """A registered entry.

    ``type`` is the inferred type of the body for definitions, and the
    statement for every other kind. ``body`` is the definition body or the
    proof term of a theorem.
    """

    name: str
    kind: EntryKind
    params: tuple[Param, ...]
    type: Term
    body: Term | None = None
    doc: str = ""

    @property
    def is_transparent(self) -> bool:
        return self.kind == EntryKind.DEFINITION

    @property
    def telescope(self) -> tuple[tuple[str, Term], ...]:
        return tuple((p.name, p.type) for p in self.params)


@dataclass(frozen=True)
class Implicit:
    """A named expansion that recovers type arguments from its arguments' types.

    ``expand(env, ctx, *typed_args)`` receives ``(term, type)`` pairs and
    returns the explicit term.
    """

    name: str
    expand: Callable[..., Term]
    doc: str = ""


ParamSpec = Sequence[tuple[str, Term]]


@dataclass
class Environment:
    """Ordered registry of checked entries.

    ``allow_conjectures`` tells library modules whether to register their
    unverified statements.
    """

    allow_conjectures: bool = True
    _entries: dict[str, Entry] = field(default_factory=dict)
    _implicits: dict[str, Implicit] = field(default_factory=dict)

    # -- lookup -------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> Entry:
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownNameError(f"No entry named '{name}'")
        return entry

    def get(self, name: str) -> Entry | None:
        return self._entries.get(name)

    def of_kind(self, kind: EntryKind) -> tuple[Entry, ...]:
        return tuple(e for e in self._entries.values() if e.kind == kind)

    def axioms(self) -> tuple[Entry, ...]:
        return self.of_kind(EntryKind.AXIOM)

    def conjectures(self) -> tuple[Entry, ...]:
        return self.of_kind(EntryKind.CONJECTURE)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def dependencies(self, t: Term) -> set[str]:
        """Names referenced by ``t``, following the bodies of definitions."""
        seen: set[str] = set()
        todo = list(refs(t))
        while todo:
            name = todo.pop()
            if name in seen:
                continue
            seen.add(name)
            entry = self._entries.get(name)
            if entry is not None and entry.is_transparent and entry.body is not None:
                todo.extend(refs(entry.body))
        return seen

    # -- registration ---------------------------------------------------------

    def define(self, name: str, params: ParamSpec, body: Term, doc: str = "") -> Entry:
        def build(ctx: Context) -> Entry:
            ty = infer(self, ctx, body)
            return Entry(name, EntryKind.DEFINITION, _params(params), ty, body, doc)

        return self._register(name, params, (body,), build)

    def theorem(
        self,
        name: str,
        params: ParamSpec,
        statement: Term,
        proof: Term | None,
        doc: str = "",
    ) -> Entry:
        if proof is None:
            logger.error("Theorem %r submitted without a proof", name)
            raise IncompleteProofError("Theorem has no proof term", name)

        def build(ctx: Context) -> Entry:
            infer_sort(self, ctx, statement)
            for used in sorted(self.dependencies(proof)):
                found = self.get(used)
                if found is not None and found.kind == EntryKind.CONJECTURE:
                    raise UnverifiedReferenceError(
                        f"Proof relies on conjecture '{used}'"
                    )
            check(self, ctx, proof, statement)
            return Entry(
                name, EntryKind.THEOREM, _params(params), statement, proof, doc
            )

        return self._register(name, params, (statement, proof), build)

    def axiom(self, name: str, params: ParamSpec, statement: Term, doc: str = "") -> Entry:
        def build(ctx: Context) -> Entry:
            infer_sort(self, ctx, statement)
            return Entry(name, EntryKind.AXIOM, _params(params), statement, None, doc)

        entry = self._register(name, params, (statement,), build)
        logger.warning("Axiom %r postulated without proof", name)
        return entry

    def conjecture(
        self, name: str, params: ParamSpec, statement: Term, doc: str = ""
    ) -> Entry:
        def build(ctx: Context) -> Entry:
            infer_sort(self, ctx, statement)
            return Entry(
                name, EntryKind.CONJECTURE, _params(params), statement, None, doc
            )

        entry = self._register(name, params, (statement,), build)
        logger.warning("Conjecture %r registered unverified", name)
        return entry

    def add(self, entry: Entry) -> Entry:
        """Re-submit an existing entry (e.g. one read back from JSON)."""
        params = entry.telescope
        match entry.kind:
            case EntryKind.DEFINITION:
                if entry.body is None:
                    raise IncompleteProofError("Definition has no body", entry.name)
                return self.define(entry.name, params, entry.body, entry.doc)
            case EntryKind.THEOREM:
                return self.theorem(
                    entry.name, params, entry.type, entry.body, entry.doc
                )
            case EntryKind.AXIOM:
                return self.axiom(entry.name, params, entry.type, entry.doc)
            case EntryKind.CONJECTURE:
                return self.conjecture(entry.name, params, entry.type, entry.doc)

    def _register(
        self,
        name: str,
        params: ParamSpec,
        terms: tuple[Term, ...],
        build: Callable[[Context], Entry],
    ) -> Entry:
        if name in self._entries:
            logger.error("Rejected %r: name already registered", name)
            raise DuplicateNameError("Name is already registered", name)
        used: set[str] = set()
        for _, ty in params:
            used |= refs(ty)
        for t in terms:
            used |= refs(t)
        missing = sorted(n for n in used if n not in self._entries)
        if missing:
            logger.error("Rejected %r: unregistered names %s", name, missing)
            raise UnknownNameError(
                f"References unregistered name(s): {', '.join(missing)}", name
            )
        try:
            ctx = check_telescope(self, params)
            entry = build(ctx)
        except KernelError as e:
            logger.error("Rejected %r: %s", name, e.message)
            raise e.within(name)
        self._entries[name] = entry
        logger.debug("Registered %s %r", entry.kind.value, name)
        return entry

    # -- implicit forms -----------------------------------------------------

    def register_implicit(
        self, name: str, expand: Callable[..., Term], doc: str = ""
    ) -> None:
        if name in self._implicits:
            raise DuplicateNameError("Implicit form is already registered", name)
        self._implicits[name] = Implicit(name, expand, doc)

    def implicit(self, name: str) -> Implicit:
        found = self._implicits.get(name)
        if found is None:
            raise UnknownNameError(f"No implicit form named '{name}'")
        return found

    @property
    def implicits(self) -> tuple[Implicit, ...]:
        return tuple(self._implicits.values())

    def expand(self, ctx: Context, name: str, *args: Term) -> Term:
        """Expand implicit form ``name`` applied to ``args`` in ``ctx``."""
        typed: list[tuple[Term, Term]] = [(a, infer(self, ctx, a)) for a in args]
        return self.implicit(name).expand(self, ctx, *typed)

    def copy_implicits(self, other: Environment) -> None:
        for imp in other.implicits:
            if imp.name not in self._implicits:
                self._implicits[imp.name] = imp

    def describe(self) -> dict[str, Any]:
        return {kind.value: len(self.of_kind(kind)) for kind in EntryKind}


def _params(params: ParamSpec) -> tuple[Param, ...]:
    return tuple(Param(n, t) for n, t in params)
