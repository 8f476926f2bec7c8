import json
from pathlib import Path

import pytest

from typedsets.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TYPEDSETS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TYPEDSETS_ALLOW_CONJECTURES", raising=False)


def test_no_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage: typedsets" in capsys.readouterr().out


def test_check(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("library: ")
    assert "All entries accepted" in out
    assert "3 unverified conjectures" in out


def test_check_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["consistent"] is True
    assert data["axiom_count"] == 8


def test_check_without_conjectures(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TYPEDSETS_ALLOW_CONJECTURES", "false")
    assert main(["check", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["conjecture_count"] == 0


def test_invalid_configuration(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TYPEDSETS_LOG_LEVEL", "chatty")
    assert main(["check"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_show(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["show", "subset-def", "seteq-implies-set-equal-ax"]) == 0
    out = capsys.readouterr().out
    assert "definition subset-def" in out
    assert "axiom seteq-implies-set-equal-ax" in out


def test_show_unknown(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["show", "no-such-entry"]) == 1
    assert "no-such-entry" in capsys.readouterr().err


def test_axioms(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["axioms"]) == 0
    out = capsys.readouterr().out
    assert "Axioms (8):" in out
    assert "rcomp-assoc" in out


def test_reference(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["reference"]) == 0
    assert "## Powerset of relations" in capsys.readouterr().out


def test_export_then_check(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "library.json"
    assert main(["export", "-o", str(target)]) == 0
    assert json.loads(target.read_text())["type"] == "environment"
    capsys.readouterr()

    assert main(["check", str(target)]) == 0
    assert capsys.readouterr().out.startswith("library: ")


def test_check_tampered_export(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "bad.json"
    assert main(["export", "-o", str(target)]) == 0
    data = json.loads(target.read_text())
    for e in data["entries"]:
        if e["name"] == "seteq-refl-thm":
            e["body"] = {"type": "ref", "name": "truth-is-true", "args": []}
    target.write_text(json.dumps(data))
    capsys.readouterr()

    assert main(["check", str(target)]) == 1
    out = capsys.readouterr().out
    assert "[type_mismatch] 'seteq-refl-thm'" in out


def test_check_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", str(tmp_path / "absent.json")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_check_definition_without_body(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    target = tmp_path / "bodiless.json"
    assert main(["export", "-o", str(target)]) == 0
    data = json.loads(target.read_text())
    for e in data["entries"]:
        if e["name"] == "subset-def":
            e["body"] = None
    target.write_text(json.dumps(data))
    capsys.readouterr()

    assert main(["check", str(target)]) == 1
    assert "[incomplete_proof] 'subset-def'" in capsys.readouterr().out


def test_check_malformed_term(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "malformed.json"
    entry = {
        "type": "entry",
        "name": "oops",
        "kind": "axiom",
        "params": [],
        "statement": "absurd",
        "body": None,
        "doc": "",
    }
    target.write_text(json.dumps({"type": "environment", "entries": [entry]}))

    assert main(["check", str(target)]) == 1
    assert "Cannot read" in capsys.readouterr().err
