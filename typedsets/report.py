"""Rendering check results and entries for people and for tools.

The audit lists what the environment takes on trust: every axiom, and every
conjecture no proof is allowed to use.
"""

from __future__ import annotations

from typing import Any

from .check import CheckResult
from .env import Entry, EntryKind, Environment
from .terms import pretty


def format_report(result: CheckResult, verbose: bool = False) -> str:
    """Human-readable report for terminal output."""
    lines = []
    lines.append(f"{result.name}: {result.entry_count} entries")

    if result.is_consistent:
        lines.append("  ✓ All entries accepted (0 errors)")
    else:
        lines.append(f"  × {len(result.errors)} entr{'ies' if len(result.errors) > 1 else 'y'} rejected")

    for diag in result.errors:
        lines.append(f"    - [{diag.check}] '{diag.entry}': {diag.message} (ERROR)")

    if result.warnings:
        n = len(result.warnings)
        lines.append(f"  ⚠ {n} unverified conjecture{'s' if n > 1 else ''}")
        for diag in result.warnings:
            lines.append(f"    - '{diag.entry}': {diag.message}")

    lines.append(f"  Axioms: {len(result.infos)}")
    if verbose:
        for diag in result.infos:
            lines.append(f"    - '{diag.entry}'")

    return "\n".join(lines)


def report_json(result: CheckResult) -> dict[str, Any]:
    """Machine-readable report."""
    return {
        "name": result.name,
        "consistent": result.is_consistent,
        "entry_count": result.entry_count,
        "error_count": len(result.errors),
        "conjecture_count": len(result.warnings),
        "axiom_count": len(result.infos),
        "diagnostics": [
            {
                "check": d.check,
                "severity": d.severity.value,
                "entry": d.entry,
                "message": d.message,
            }
            for d in result.diagnostics
        ],
    }


def format_signature(entry: Entry) -> str:
    params = " ".join(f"[{p.name} {pretty(p.type)}]" for p in entry.params)
    head = f"{entry.name} {params}".rstrip()
    return f"{head} : {pretty(entry.type)}"


def format_audit(env: Environment) -> str:
    """Every non-constructive principle and unverified statement the environment rests on."""
    lines = []
    axioms = env.axioms()
    conjectures = env.conjectures()
    lines.append(f"Axioms ({len(axioms)}):")
    for e in axioms:
        lines.append(f"  {format_signature(e)}")
        if e.doc:
            lines.append(f"      {e.doc}")
    lines.append(f"Conjectures ({len(conjectures)}):")
    for e in conjectures:
        lines.append(f"  {format_signature(e)}")
    return "\n".join(lines)


def format_entry(entry: Entry) -> str:
    lines = [f"{entry.kind.value} {format_signature(entry)}"]
    if entry.doc:
        lines.append(f"  {entry.doc}")
    if entry.body is not None:
        label = "body" if entry.kind == EntryKind.DEFINITION else "proof"
        lines.append(f"  {label}: {pretty(entry.body)}")
    return "\n".join(lines)

