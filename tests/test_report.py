from typedsets.check import CheckResult, Diagnostic, Severity, check_environment
from typedsets.env import Environment
from typedsets.library import build_sections
from typedsets.reference import render_reference
from typedsets.report import format_audit, format_entry, format_report, format_signature, report_json


def _result() -> CheckResult:
    return CheckResult(
        "demo",
        4,
        (
            Diagnostic("axiom", Severity.INFO, "ax", "Postulated without proof"),
            Diagnostic("conjecture", Severity.WARNING, "hope", "Unverified statement"),
            Diagnostic("type_mismatch", Severity.ERROR, "bad", "Term x has type A, expected B"),
        ),
    )


class TestFormatReport:
    def test_consistent(self, logic: Environment) -> None:
        text = format_report(check_environment(logic, name="prop"))
        assert text.splitlines()[0] == f"prop: {len(logic)} entries"
        assert "✓ All entries accepted (0 errors)" in text
        assert "Axioms: 0" in text

    def test_errors_and_warnings(self) -> None:
        text = format_report(_result())
        assert "× 1 entry rejected" in text
        assert "[type_mismatch] 'bad'" in text
        assert "1 unverified conjecture" in text
        assert "'hope': Unverified statement" in text

    def test_verbose_lists_axioms(self) -> None:
        assert "    - 'ax'" not in format_report(_result())
        assert "    - 'ax'" in format_report(_result(), verbose=True)


def test_report_json() -> None:
    data = report_json(_result())
    assert data["name"] == "demo"
    assert data["consistent"] is False
    assert data["error_count"] == 1
    assert data["conjecture_count"] == 1
    assert data["axiom_count"] == 1
    assert data["diagnostics"][2] == {
        "check": "type_mismatch",
        "severity": "error",
        "entry": "bad",
        "message": "Term x has type A, expected B",
    }


def test_signature(logic: Environment) -> None:
    assert format_signature(logic.lookup("impl-refl")) == "impl-refl [A :type] : (==> A A)"
    assert format_signature(logic.lookup("absurd")) == "absurd : :type"


def test_format_entry(logic: Environment) -> None:
    text = format_entry(logic.lookup("not"))
    assert text.splitlines()[0] == "definition not [A :type] : :type"
    assert "body: (==> A absurd)" in text


def test_audit(library: Environment) -> None:
    text = format_audit(library)
    assert "Axioms (8):" in text
    assert "Conjectures (3):" in text
    assert "seteq-implies-set-equal-ax [T :type] [s1 (set T)] [s2 (set T)]" in text


def test_reference_document() -> None:
    env, sections = build_sections()
    text = render_reference(env, sections)
    assert text.startswith("# typedsets library reference")
    for title in ("## Typed sets", "## Relations", "## Partial functions", "## Axiom audit"):
        assert title in text
    assert "### `subset-def` (definition)" in text
    assert "- `rcomp-assoc`" in text
    assert "- `subset`: Implicit form of `subset-def`." in text
