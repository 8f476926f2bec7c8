"""Tests for proof scripts."""

import pytest

from typedsets.env import Environment
from typedsets.errors import IllTypedError, IncompleteProofError, TypeMismatchError
from typedsets.helpers import TYPE, impl, lam, v
from typedsets.prelude import and_
from typedsets.proof import Proof
from typedsets.terms import alpha_eq

A, B = v("A"), v("B")
AB = [("A", TYPE), ("B", TYPE)]


class TestAssume:
    def test_facts_are_abstracted_on_exit(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pf.assume(("x", A)):
            pf.have("a", A, by=v("x"))
            assert pf.type_of("a") == A
        assert alpha_eq(pf.type_of("a"), impl(A, A))
        assert pf.qed("a") == lam([("x", A)], v("x"))

    def test_nested_scopes(self, logic: Environment) -> None:
        pf = Proof(logic, AB)
        with pf.assume(("a", A)):
            with pf.assume(("b", B)):
                pf.have("c", and_(A, B), by=pf.call("and-intro%", v("a"), v("b")))
        assert alpha_eq(pf.type_of("c"), impl(A, B, and_(A, B)))
        entry = logic.theorem("pair", AB, impl(A, B, and_(A, B)), pf.qed("c"))
        assert entry.name == "pair"

    def test_shadowing_is_rejected(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pytest.raises(IllTypedError, match="shadows"):
            with pf.assume(("A", TYPE)):
                pass
        assert pf.ctx == (("A", TYPE),)

    def test_assumption_must_be_a_type(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE), ("a", A)], name="demo")
        with pytest.raises(IllTypedError) as info:
            with pf.assume(("h", v("a"))):
                pass
        assert info.value.entry == "demo"

    def test_failed_block_drops_its_facts(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pytest.raises(TypeMismatchError):
            with pf.assume(("x", A)):
                pf.have("a", A, by=v("x"))
                pf.have("b", and_(A, A), by=v("x"))
        with pytest.raises(IllTypedError):
            pf["a"]
        assert pf.ctx == (("A", TYPE),)


class TestSteps:
    def test_inferred_step(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE), ("a", A)])
        pf.have("a1", None, by=v("a"))
        assert pf.type_of("a1") == A

    def test_mismatch_names_the_step(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE), ("a", A)], name="demo")
        with pytest.raises(TypeMismatchError) as info:
            pf.have("h", and_(A, A), by=v("a"))
        assert "step <h>" in info.value.message
        assert info.value.entry == "demo"

    def test_labels_are_unique(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE), ("a", A)])
        pf.have("h", A, by=v("a"))
        with pytest.raises(IllTypedError, match="already used"):
            pf.have("h", A, by=v("a"))

    def test_unknown_label(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pytest.raises(IllTypedError, match="Unknown proof label"):
            pf["nothing"]

    def test_pose_is_scoped(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pf.assume(("x", A)):
            q = pf.pose("Q", lam([("y", A)], v("y")))
            assert pf["Q"] == q
        with pytest.raises(IllTypedError):
            pf["Q"]


class TestQed:
    def test_open_block(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pf.assume(("x", A)):
            pf.have("a", A, by=v("x"))
            with pytest.raises(IncompleteProofError, match="still open"):
                pf.qed("a")

    def test_unestablished_conclusion(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        with pytest.raises(IncompleteProofError, match="never established"):
            pf.qed("missing")

    def test_explicit_term(self, logic: Environment) -> None:
        pf = Proof(logic, [("A", TYPE)])
        term = lam([("x", A)], v("x"))
        assert pf.qed(term) == term
