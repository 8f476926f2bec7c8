"""JSON serialization for terms and entries.

Every node serializes to a dict with a "type" discriminator field.
Round-trip: term_from_json(term_to_json(t)) == t for all t.

An environment is exported as its ordered entry list. Loading re-submits
each entry to a fresh environment, so whatever is loaded has been
re-checked by the kernel.
"""

from __future__ import annotations

import json
from typing import Any

from .env import Entry, EntryKind, Environment, Param
from .terms import App, Lam, Pi, Ref, Sort, Term, Var


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------


def term_to_json(t: Term) -> dict[str, Any]:
    match t:
        case Sort(name):
            return {"type": "sort", "name": name}
        case Var(name):
            return {"type": "var", "name": name}
        case Pi(name, domain, body):
            return {
                "type": "pi",
                "name": name,
                "domain": term_to_json(domain),
                "body": term_to_json(body),
            }
        case Lam(name, domain, body):
            return {
                "type": "lambda",
                "name": name,
                "domain": term_to_json(domain),
                "body": term_to_json(body),
            }
        case App(fn, arg):
            return {"type": "app", "fn": term_to_json(fn), "arg": term_to_json(arg)}
        case Ref(name, args):
            return {"type": "ref", "name": name, "args": [term_to_json(a) for a in args]}
    raise TypeError(f"Unknown term type: {type(t)}")


def term_from_json(d: dict[str, Any]) -> Term:
    if not isinstance(d, dict):
        raise ValueError(f"Not a term node: {d!r}")
    t = d.get("type")
    if t == "sort":
        return Sort(d["name"])
    elif t == "var":
        return Var(d["name"])
    elif t == "pi":
        return Pi(d["name"], term_from_json(d["domain"]), term_from_json(d["body"]))
    elif t == "lambda":
        return Lam(d["name"], term_from_json(d["domain"]), term_from_json(d["body"]))
    elif t == "app":
        return App(term_from_json(d["fn"]), term_from_json(d["arg"]))
    elif t == "ref":
        return Ref(d["name"], tuple(term_from_json(a) for a in d["args"]))
    raise ValueError(f"Unknown term type: {t}")


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


def entry_to_json(e: Entry) -> dict[str, Any]:
    return {
        "type": "entry",
        "name": e.name,
        "kind": e.kind.value,
        "params": [{"name": p.name, "type": term_to_json(p.type)} for p in e.params],
        "statement": term_to_json(e.type),
        "body": None if e.body is None else term_to_json(e.body),
        "doc": e.doc,
    }


def entry_from_json(d: dict[str, Any]) -> Entry:
    if not isinstance(d, dict) or d.get("type") != "entry":
        kind = d.get("type") if isinstance(d, dict) else type(d).__name__
        raise ValueError(f"Not an entry: {kind!r}")
    params = tuple(
        Param(name=p["name"], type=term_from_json(p["type"])) for p in d["params"]
    )
    body = d.get("body")
    return Entry(
        name=d["name"],
        kind=EntryKind(d["kind"]),
        params=params,
        type=term_from_json(d["statement"]),
        body=None if body is None else term_from_json(body),
        doc=d.get("doc", ""),
    )


# ---------------------------------------------------------------------------
# Convenience: dump / load entire environments as JSON strings
# ---------------------------------------------------------------------------


def env_to_json(env: Environment) -> dict[str, Any]:
    return {
        "type": "environment",
        "entries": [entry_to_json(e) for e in env],
    }


def entries_from_json(d: dict[str, Any]) -> list[Entry]:
    if not isinstance(d, dict) or d.get("type") != "environment":
        kind = d.get("type") if isinstance(d, dict) else type(d).__name__
        raise ValueError(f"Not an environment: {kind!r}")
    return [entry_from_json(e) for e in d["entries"]]


def dumps(env: Environment) -> str:
    return json.dumps(env_to_json(env), indent=2)


def loads(s: str) -> Environment:
    """Rebuild an environment; raises ``KernelError`` on the first rejected entry."""
    env = Environment()
    for entry in entries_from_json(json.loads(s)):
        env.add(entry)
    return env
