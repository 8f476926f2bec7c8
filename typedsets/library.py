"""Assemble the whole library into one environment.

Each section installs its entries into the environment in turn; the order
below is the dependency order (every section refers to earlier ones by
name).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from . import pfun, powerrel, rel, sets, setquant
from .config import Settings
from .env import Entry, Environment
from .errors import KernelError
from .prelude import prop, quant
from .prelude.equal import install as install_equal
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    install: Callable[[Environment], None]


SECTIONS: tuple[Section, ...] = (
    Section("prop", "Propositional logic", prop.install),
    Section("equal", "Leibniz equality", install_equal),
    Section("quant", "Quantifiers and definite description", quant.install),
    Section("sets", "Typed sets", sets.install),
    Section("rel", "Relations", rel.install),
    Section("setquant", "Quantifiers over sets", setquant.install),
    Section("pfun", "Partial functions", pfun.install),
    Section("powerrel", "Powerset of relations", powerrel.install),
)


def build_sections(
    settings: Settings | None = None,
) -> tuple[Environment, list[tuple[Section, tuple[Entry, ...]]]]:
    """Build the library, also returning the entries contributed by each section."""
    settings = settings or Settings()
    env = Environment(allow_conjectures=settings.allow_conjectures)
    contributed: list[tuple[Section, tuple[Entry, ...]]] = []
    for section in SECTIONS:
        before = len(env)
        section.install(env)
        entries = tuple(env)[before:]
        logger.info("Section %s: %d entries", section.key, len(entries))
        contributed.append((section, entries))
    return env, contributed


def build_library(settings: Settings | None = None) -> Environment:
    env, _ = build_sections(settings)
    return env


def load_library(settings: Settings | None = None) -> Result[Environment, KernelError]:
    try:
        return Ok(build_library(settings))
    except KernelError as e:
        logger.error("Library rejected: %s", e)
        return Err(e)
