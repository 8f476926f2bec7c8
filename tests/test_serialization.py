"""Tests for JSON export and re-import."""

import json

import pytest

from typedsets.env import EntryKind, Environment
from typedsets.errors import TypeMismatchError
from typedsets.helpers import TYPE, app, forall, impl, lam, ref, v
from typedsets.prelude import absurd
from typedsets.serialization import (
    dumps,
    entries_from_json,
    entry_from_json,
    entry_to_json,
    loads,
    term_from_json,
    term_to_json,
)


@pytest.mark.parametrize(
    "term",
    [
        TYPE,
        v("x"),
        forall([("x", v("A"))], app(v("P"), v("x"))),
        lam([("x", v("A")), ("y", v("B"))], v("x")),
        ref("subset-def", v("T"), ref("emptyset", v("T")), v("s")),
        impl(v("A"), absurd()),
    ],
)
def test_term_round_trip(term) -> None:
    assert term_from_json(term_to_json(term)) == term


def test_term_tags() -> None:
    d = term_to_json(lam([("x", TYPE)], v("x")))
    assert d["type"] == "lambda"
    assert d["domain"] == {"type": "sort", "name": "type"}
    assert d["body"] == {"type": "var", "name": "x"}


def test_unknown_tag() -> None:
    with pytest.raises(ValueError, match="Unknown term type"):
        term_from_json({"type": "quote"})


def test_entry_round_trip(logic: Environment) -> None:
    entry = logic.lookup("and-intro")
    assert entry_from_json(entry_to_json(entry)) == entry


@pytest.mark.parametrize("node", ["sort", None, ["var", "x"]])
def test_non_object_node(node) -> None:
    with pytest.raises(ValueError, match="Not a term node"):
        term_from_json(node)


def test_nested_non_object_node() -> None:
    with pytest.raises(ValueError):
        term_from_json({"type": "app", "fn": "f", "arg": {"type": "var", "name": "x"}})


def test_not_an_entry() -> None:
    with pytest.raises(ValueError):
        entry_from_json({"type": "var", "name": "x"})


def test_not_an_environment() -> None:
    with pytest.raises(ValueError):
        entries_from_json({"type": "entry"})
    with pytest.raises(ValueError, match="list"):
        entries_from_json([])  # type: ignore[arg-type]


def test_environment_round_trip(logic: Environment) -> None:
    restored = loads(dumps(logic))
    assert restored.names == logic.names
    assert list(restored) == list(logic)


def test_library_round_trip(library: Environment) -> None:
    restored = loads(dumps(library))
    assert restored.names == library.names
    assert restored.lookup("rcomp-assoc").kind == EntryKind.CONJECTURE


def test_loading_rechecks_proofs(logic: Environment) -> None:
    data = json.loads(dumps(logic))
    for e in data["entries"]:
        if e["name"] == "impl-refl":
            e["statement"] = term_to_json(absurd())
    with pytest.raises(TypeMismatchError) as info:
        loads(json.dumps(data))
    assert info.value.entry == "impl-refl"
