"""Worked scenarios on a concrete two-element type.

``Two`` is postulated together with its inhabitants ``two-a`` and ``two-b``;
everything else is derived from the library.
"""

from __future__ import annotations

from .config import Settings
from .env import Environment
from .helpers import TYPE, app, ref
from .library import build_library
from .pfun import pfun, ptotal
from .prelude import not_
from .rel import identity
from .sets import elem, fullset, psubset, seteq, subset

TWO = ref("Two")
TWO_A = ref("two-a")
TWO_B = ref("two-b")


def install_two(env: Environment) -> None:
    env.axiom("Two", [], TYPE, doc="A type with two elements.")
    env.axiom("two-a", [], TWO, doc="The first element of `Two`.")
    env.axiom("two-b", [], TWO, doc="The second element of `Two`.")


def install_fullset_scenario(env: Environment) -> None:
    full = fullset(TWO)
    env.theorem(
        "two-a-in-fullset", [], elem(TWO, TWO_A, full), app(ref("fullset-intro", TWO), TWO_A)
    )
    env.theorem(
        "two-b-in-fullset", [], elem(TWO, TWO_B, full), app(ref("fullset-intro", TWO), TWO_B)
    )
    env.theorem(
        "two-fullset-subset", [], subset(TWO, full, full), ref("subset-refl-thm", TWO, full)
    )
    env.theorem(
        "two-fullset-seteq", [], seteq(TWO, full, full), ref("seteq-refl-thm", TWO, full)
    )
    env.theorem(
        "two-fullset-not-psubset",
        [],
        not_(psubset(TWO, full, full)),
        ref("psubset-antirefl", TWO, full),
    )


def install_identity_scenario(env: Environment) -> None:
    full = fullset(TWO)
    rid = identity(TWO)
    env.theorem(
        "two-identity-pfun",
        [],
        pfun(TWO, TWO, rid, full),
        app(ref("ridentity-pfun", TWO), full),
    )
    env.theorem(
        "two-identity-ptotal",
        [],
        ptotal(TWO, TWO, rid, full),
        app(ref("ridentity-total", TWO), full),
    )


def two_element_env(settings: Settings | None = None) -> Environment:
    env = build_library(settings)
    install_two(env)
    install_fullset_scenario(env)
    install_identity_scenario(env)
    return env
