"""typedsets: typed sets, relations and partial functions on a small proof kernel."""

from .terms import App, Lam, Pi, Ref, Sort, Term, Var, alpha_eq, pretty
from .helpers import KIND, TYPE, app, forall, impl, lam, ref, set_of, v
from .errors import (
    DuplicateNameError,
    IllTypedError,
    IncompleteProofError,
    KernelError,
    NotationError,
    TypeMismatchError,
    UnknownNameError,
    UnverifiedReferenceError,
)
from .env import Entry, EntryKind, Environment, Param
from .proof import Proof
from .notation import exists_in, forall_in
from .sets import elem, emptyset, fullset, psubset, set_, set_equal, seteq, subset
from .library import build_library, load_library
from .check import CheckResult, Diagnostic, Severity, check_environment
from .serialization import dumps, loads
from .config import Settings
from .result import Err, Ok, Result

__all__ = [
    # Terms
    "App", "Lam", "Pi", "Ref", "Sort", "Term", "Var", "alpha_eq", "pretty",
    # Helpers
    "KIND", "TYPE", "app", "forall", "impl", "lam", "ref", "set_of", "v",
    # Errors
    "DuplicateNameError", "IllTypedError", "IncompleteProofError", "KernelError",
    "NotationError", "TypeMismatchError", "UnknownNameError",
    "UnverifiedReferenceError",
    # Environment and proofs
    "Entry", "EntryKind", "Environment", "Param", "Proof",
    # Notations and set builders
    "exists_in", "forall_in",
    "elem", "emptyset", "fullset", "psubset", "set_", "set_equal", "seteq", "subset",
    # Library
    "build_library", "load_library",
    "CheckResult", "Diagnostic", "Severity", "check_environment",
    # Serialization
    "dumps", "loads",
    # Config / result
    "Settings", "Err", "Ok", "Result",
]
