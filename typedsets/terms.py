"""Terms of the Calculus of Constructions with named definitions.

A term is one of:
  - Sorts (``type`` and ``kind``)
  - Variables
  - Dependent products ``Π x:A. B`` (written ``==>`` when x is unused)
  - Abstractions ``λ x:A. b``
  - Applications ``f a``
  - References to registered entries, applied to all their parameters

Propositions, sets and relations are all terms: a set over ``T`` is a
predicate ``T ==> type`` and a proof of a proposition is a term of that
proposition (its type).
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Term AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Sort:
    """A universe: ``type`` (propositions and data types) or ``kind``."""

    name: str


@dataclass(frozen=True)
class Var:
    """A bound or context variable.

    Example: x
    """

    name: str


@dataclass(frozen=True)
class Pi:
    """Dependent product.

    Example: Π x:T. (s x)   — Pi("x", Var("T"), App(Var("s"), Var("x")))
    Example: A ==> B        — Pi("_", A, B)
    """

    name: str
    domain: Term
    body: Term


@dataclass(frozen=True)
class Lam:
    """Abstraction.

    Example: λ x:T. truth  — the full set of T
    """

    name: str
    domain: Term
    body: Term


@dataclass(frozen=True)
class App:
    """Application of a term to a single argument."""

    fn: Term
    arg: Term


@dataclass(frozen=True)
class Ref:
    """Reference to a registered entry applied to all of its parameters.

    Example: (subset-def T s1 s2) — Ref("subset-def", (T, s1, s2))
    """

    name: str
    args: tuple[Term, ...] = ()


# Union of all term forms
Term = Sort | Var | Pi | Lam | App | Ref

Binder = Pi | Lam


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------


def free_vars(t: Term) -> frozenset[str]:
    match t:
        case Var(name):
            return frozenset((name,))
        case Sort():
            return frozenset()
        case Pi(name, domain, body) | Lam(name, domain, body):
            return free_vars(domain) | (free_vars(body) - {name})
        case App(fn, arg):
            return free_vars(fn) | free_vars(arg)
        case Ref(_, args):
            out: frozenset[str] = frozenset()
            for a in args:
                out |= free_vars(a)
            return out
    raise TypeError(f"Unknown term type: {type(t)}")


def occurs(name: str, t: Term) -> bool:
    return name in free_vars(t)


def fresh_name(base: str, avoid: set[str] | frozenset[str]) -> str:
    """Return ``base`` decorated with a numeric suffix so it is not in ``avoid``."""
    stem = base.rstrip("0123456789") or "x"
    i = 1
    while f"{stem}{i}" in avoid:
        i += 1
    return f"{stem}{i}"


def refs(t: Term) -> frozenset[str]:
    """Names of all entries referenced by ``t``."""
    match t:
        case Var() | Sort():
            return frozenset()
        case Pi(_, domain, body) | Lam(_, domain, body):
            return refs(domain) | refs(body)
        case App(fn, arg):
            return refs(fn) | refs(arg)
        case Ref(name, args):
            out = frozenset((name,))
            for a in args:
                out |= refs(a)
            return out
    raise TypeError(f"Unknown term type: {type(t)}")


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


def subst(t: Term, mapping: dict[str, Term]) -> Term:
    """Simultaneous capture-avoiding substitution of variables."""
    if not mapping:
        return t
    match t:
        case Var(name):
            return mapping.get(name, t)
        case Sort():
            return t
        case App(fn, arg):
            return App(subst(fn, mapping), subst(arg, mapping))
        case Ref(name, args):
            return Ref(name, tuple(subst(a, mapping) for a in args))
        case Pi() | Lam():
            return _subst_binder(t, mapping)
    raise TypeError(f"Unknown term type: {type(t)}")


def _subst_binder(t: Binder, mapping: dict[str, Term]) -> Term:
    domain = subst(t.domain, mapping)
    inner = {k: val for k, val in mapping.items() if k != t.name and occurs(k, t.body)}
    if not inner:
        return type(t)(t.name, domain, t.body)
    name = t.name
    incoming: set[str] = set()
    for val in inner.values():
        incoming |= free_vars(val)
    if name in incoming:
        # the binder would capture a free variable of a replacement
        avoid = incoming | free_vars(t.body) | set(inner)
        renamed = fresh_name(name, avoid)
        inner = {**inner, name: Var(renamed)}
        name = renamed
    return type(t)(name, domain, subst(t.body, inner))


def rename(t: Binder, new_name: str) -> Term:
    """The body of binder ``t`` with its bound variable renamed."""
    if new_name == t.name:
        return t.body
    return subst(t.body, {t.name: Var(new_name)})


# ---------------------------------------------------------------------------
# Alpha-equivalence
# ---------------------------------------------------------------------------


def alpha_eq(a: Term, b: Term) -> bool:
    return _alpha(a, b, {}, {}, 0)


def _alpha(
    a: Term, b: Term, left: dict[str, int], right: dict[str, int], depth: int
) -> bool:
    match a, b:
        case Var(x), Var(y):
            lx, ry = left.get(x), right.get(y)
            if lx is None and ry is None:
                return x == y
            return lx == ry
        case Sort(x), Sort(y):
            return x == y
        case (Pi(), Pi()) | (Lam(), Lam()):
            if not _alpha(a.domain, b.domain, left, right, depth):
                return False
            return _alpha(
                a.body,
                b.body,
                {**left, a.name: depth},
                {**right, b.name: depth},
                depth + 1,
            )
        case App(f1, a1), App(f2, a2):
            return _alpha(f1, f2, left, right, depth) and _alpha(
                a1, a2, left, right, depth
            )
        case Ref(n1, args1), Ref(n2, args2):
            return (
                n1 == n2
                and len(args1) == len(args2)
                and all(
                    _alpha(x, y, left, right, depth) for x, y in zip(args1, args2)
                )
            )
    return False


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


def pretty(t: Term) -> str:
    """Render a term in the s-expression notation used in error messages."""
    match t:
        case Sort(name):
            return f":{name}"
        case Var(name):
            return name
        case Pi(name, domain, body):
            if name == "_" or not occurs(name, body):
                parts = [pretty(domain)]
                rest = body
                while isinstance(rest, Pi) and (rest.name == "_" or not occurs(rest.name, rest.body)):
                    parts.append(pretty(rest.domain))
                    rest = rest.body
                parts.append(pretty(rest))
                return f"(==> {' '.join(parts)})"
            return f"(forall [{name} {pretty(domain)}] {pretty(body)})"
        case Lam(name, domain, body):
            return f"(lambda [{name} {pretty(domain)}] {pretty(body)})"
        case App():
            spine: list[Term] = []
            head: Term = t
            while isinstance(head, App):
                spine.append(head.arg)
                head = head.fn
            args = " ".join(pretty(x) for x in reversed(spine))
            return f"({pretty(head)} {args})"
        case Ref(name, args):
            if not args:
                return name
            return f"({name} {' '.join(pretty(a) for a in args)})"
    raise TypeError(f"Unknown term type: {type(t)}")
