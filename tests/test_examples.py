"""The two-element scenarios, checked end to end."""

import pytest

from typedsets.check import check_environment
from typedsets.env import EntryKind, Environment
from typedsets.examples import TWO, TWO_A, two_element_env
from typedsets.kernel import infer
from typedsets.sets import elem, fullset


@pytest.fixture(scope="module")
def two() -> Environment:
    return two_element_env()


def test_two_is_postulated(two: Environment) -> None:
    for name in ("Two", "two-a", "two-b"):
        assert two.lookup(name).kind == EntryKind.AXIOM
    assert infer(two, (), TWO_A) == TWO


@pytest.mark.parametrize(
    "name",
    [
        "two-a-in-fullset",
        "two-b-in-fullset",
        "two-fullset-subset",
        "two-fullset-seteq",
        "two-fullset-not-psubset",
        "two-identity-pfun",
        "two-identity-ptotal",
    ],
)
def test_scenario_theorems(two: Environment, name: str) -> None:
    assert two.lookup(name).kind == EntryKind.THEOREM


def test_membership_statement(two: Environment) -> None:
    assert two.lookup("two-a-in-fullset").type == elem(TWO, TWO_A, fullset(TWO))


def test_scenario_recheck(two: Environment) -> None:
    result = check_environment(two, name="two")
    assert result.is_consistent
    assert {d.entry for d in result.infos} >= {"Two", "two-a", "two-b"}


def test_implicits_carry_over(two: Environment) -> None:
    ctx = (("x", TWO),)
    assert two.expand(ctx, "elem", TWO_A, fullset(TWO)) == elem(TWO, TWO_A, fullset(TWO))
