"""The ambient logic: connectives, equality and quantifiers."""

from .equal import equal
from .prop import and_, and_all, absurd, iff, not_, or_, truth
from .quant import ex

__all__ = ["absurd", "and_", "and_all", "equal", "ex", "iff", "not_", "or_", "truth"]
