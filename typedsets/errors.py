"""Errors raised by the kernel when an entry is rejected.

A rejected entry never reaches the environment: correctness is binary.
"""

from __future__ import annotations


class KernelError(Exception):
    """Base class for every rejection.

    ``entry`` names the definition/theorem being submitted, when known.
    """

    def __init__(self, message: str, entry: str | None = None):
        super().__init__(message)
        self.message = message
        self.entry = entry

    def __str__(self) -> str:
        if self.entry is None:
            return self.message
        return f"{self.entry}: {self.message}"

    def within(self, entry: str) -> KernelError:
        """Attach the name of the entry being checked (once)."""
        if self.entry is None:
            self.entry = entry
        return self


class DuplicateNameError(KernelError):
    """An entry with this name is already registered."""


class UnknownNameError(KernelError):
    """A term references an entry that is not (yet) registered."""


class IllTypedError(KernelError):
    """A term has no type (unbound variable, bad application, arity...)."""


class TypeMismatchError(IllTypedError):
    """A term's type is not convertible to the expected one."""

    def __init__(
        self, message: str, expected: str, actual: str, entry: str | None = None
    ):
        super().__init__(message, entry)
        self.expected = expected
        self.actual = actual


class NotationError(KernelError):
    """A notation was used with a malformed binding."""

    def __init__(self, message: str, binding: object):
        super().__init__(message)
        self.binding = binding


class IncompleteProofError(KernelError):
    """A proof script did not produce a closed proof term."""


class UnverifiedReferenceError(KernelError):
    """A proof relies on a conjecture."""
