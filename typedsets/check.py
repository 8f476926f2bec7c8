"""Re-checking a whole environment.

Every entry is re-submitted, in order, to a fresh environment. Rejections
become ERROR diagnostics instead of exceptions so a single run reports all
of them. Axioms and conjectures are accepted but reported: INFO for the
postulated principles, WARNING for the unverified statements.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .env import Entry, EntryKind, Environment
from .errors import KernelError

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    entry: str | None
    message: str


@dataclass(frozen=True)
class CheckResult:
    name: str
    entry_count: int
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def infos(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.INFO)

    @property
    def is_consistent(self) -> bool:
        return len(self.errors) == 0


def check_entries(entries: Iterable[Entry], name: str = "library") -> CheckResult:
    fresh = Environment()
    diagnostics: list[Diagnostic] = []
    count = 0
    for entry in entries:
        count += 1
        try:
            fresh.add(entry)
        except KernelError as e:
            diagnostics.append(
                Diagnostic(_check_name(e), Severity.ERROR, entry.name, e.message)
            )
            continue
        match entry.kind:
            case EntryKind.AXIOM:
                diagnostics.append(
                    Diagnostic("axiom", Severity.INFO, entry.name, "Postulated without proof")
                )
            case EntryKind.CONJECTURE:
                diagnostics.append(
                    Diagnostic(
                        "conjecture", Severity.WARNING, entry.name, "Unverified statement"
                    )
                )
    result = CheckResult(name, count, tuple(diagnostics))
    logger.info(
        "Checked %d entries of %s: %d error(s), %d warning(s)",
        count,
        name,
        len(result.errors),
        len(result.warnings),
    )
    return result


def check_environment(env: Environment, name: str = "library") -> CheckResult:
    return check_entries(iter(env), name)


def _check_name(error: KernelError) -> str:
    """``TypeMismatchError`` → ``type_mismatch``."""
    stem = type(error).__name__.removesuffix("Error")
    out = []
    for i, ch in enumerate(stem):
        if ch.isupper() and i:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)
