"""Tests for whole-environment re-checking."""

import dataclasses

from typedsets.check import CheckResult, Diagnostic, Severity, check_entries, check_environment
from typedsets.env import Environment
from typedsets.helpers import ref


class TestLibrary:
    def test_library_is_consistent(self, library: Environment) -> None:
        result = check_environment(library)
        assert result.is_consistent
        assert result.entry_count == len(library)

    def test_axioms_are_reported(self, library: Environment) -> None:
        result = check_environment(library)
        assert {d.entry for d in result.infos} == {
            "the",
            "the-prop",
            "seteq-implies-set-equal-ax",
            "releq-implies-rel-equal-ax",
            "the-element-ax",
            "the-element-prop-ax",
            "the-rel-ax",
            "the-rel-prop",
        }
        assert all(d.check == "axiom" for d in result.infos)

    def test_conjectures_are_warnings(self, library: Environment) -> None:
        result = check_environment(library)
        assert {d.entry for d in result.warnings} == {
            "rcomp-assoc",
            "pcompose-pfun",
            "pinjective-single",
        }


def test_tampered_proof_is_reported(library: Environment) -> None:
    entries = list(library)
    i = next(k for k, e in enumerate(entries) if e.name == "subset-refl-thm")
    entries[i] = dataclasses.replace(entries[i], body=ref("truth-is-true"))

    result = check_entries(entries, name="tampered")

    assert not result.is_consistent
    first = result.errors[0]
    assert first.entry == "subset-refl-thm"
    assert first.check == "type_mismatch"
    # later entries that cite it are rejected as unknown
    assert any(d.check == "unknown_name" for d in result.errors[1:])


def test_empty_input() -> None:
    result = check_entries([])
    assert result.entry_count == 0
    assert result.is_consistent
    assert result.diagnostics == ()


def test_severity_filters() -> None:
    diags = (
        Diagnostic("axiom", Severity.INFO, "a", "Postulated without proof"),
        Diagnostic("conjecture", Severity.WARNING, "b", "Unverified statement"),
        Diagnostic("type_mismatch", Severity.ERROR, "c", "bad"),
    )
    result = CheckResult("demo", 3, diags)
    assert [d.entry for d in result.errors] == ["c"]
    assert [d.entry for d in result.warnings] == ["b"]
    assert [d.entry for d in result.infos] == ["a"]
    assert not result.is_consistent


def test_definition_without_body_is_reported(logic: Environment) -> None:
    entries = list(logic)
    i = next(k for k, e in enumerate(entries) if e.name == "not")
    entries[i] = dataclasses.replace(entries[i], body=None)

    result = check_entries(entries, name="bodiless")

    first = result.errors[0]
    assert first.entry == "not"
    assert first.check == "incomplete_proof"
    assert first.message == "Definition has no body"
