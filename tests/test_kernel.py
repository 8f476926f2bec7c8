"""Tests for type inference, conversion and entry registration."""

import pytest

from typedsets.env import EntryKind, Environment
from typedsets.errors import (
    DuplicateNameError,
    IllTypedError,
    IncompleteProofError,
    TypeMismatchError,
    UnknownNameError,
    UnverifiedReferenceError,
)
from typedsets.helpers import KIND, TYPE, app, forall, impl, lam, ref, v
from typedsets.kernel import check, convertible, infer, whnf
from typedsets.prelude import absurd, and_, not_, truth
from typedsets.terms import Sort, alpha_eq

A, B = v("A"), v("B")


class TestInference:
    def test_type_has_type_kind(self, logic: Environment) -> None:
        assert infer(logic, (), TYPE) == KIND

    def test_kind_has_no_type(self, logic: Environment) -> None:
        with pytest.raises(IllTypedError):
            infer(logic, (), Sort("kind"))

    def test_unbound_variable(self, logic: Environment) -> None:
        with pytest.raises(IllTypedError, match="not bound"):
            infer(logic, (), v("x"))

    def test_product_is_impredicative(self, logic: Environment) -> None:
        assert infer(logic, (), forall([("alpha", TYPE)], v("alpha"))) == TYPE

    def test_lambda_gets_product_type(self, logic: Environment) -> None:
        ty = infer(logic, (("A", TYPE),), lam([("x", A)], v("x")))
        assert alpha_eq(ty, impl(A, A))

    def test_application_substitutes(self, logic: Environment) -> None:
        ctx = (("A", TYPE), ("a", A))
        ty = infer(logic, ctx, app(ref("impl-refl", A), v("a")))
        assert ty == A

    def test_application_of_non_product(self, logic: Environment) -> None:
        ctx = (("A", TYPE), ("a", A))
        with pytest.raises(IllTypedError, match="non-product"):
            infer(logic, ctx, app(v("a"), v("a")))

    def test_reference_arity(self, logic: Environment) -> None:
        with pytest.raises(IllTypedError, match="expects 1 arguments"):
            infer(logic, (), ref("not"))

    def test_unknown_reference(self, logic: Environment) -> None:
        with pytest.raises(UnknownNameError):
            infer(logic, (), ref("nope"))

    def test_check_reports_both_types(self, logic: Environment) -> None:
        ctx = (("A", TYPE), ("a", A))
        with pytest.raises(TypeMismatchError) as info:
            check(logic, ctx, v("a"), absurd())
        assert info.value.expected == "absurd"
        assert info.value.actual == "A"


class TestConversion:
    def test_whnf_beta_then_delta(self, logic: Environment) -> None:
        t = app(lam([("A", TYPE)], v("A")), absurd())
        assert whnf(logic, t) == forall([("alpha", TYPE)], v("alpha"))

    def test_definitions_unfold(self, logic: Environment) -> None:
        assert convertible(logic, truth(), not_(absurd()))
        assert convertible(logic, not_(A), impl(A, absurd()))

    def test_distinct_propositions(self, logic: Environment) -> None:
        assert not convertible(logic, and_(A, B), and_(B, A))

    def test_beta(self, logic: Environment) -> None:
        assert convertible(logic, app(lam([("x", TYPE)], v("x")), B), B)

    def test_eta(self, logic: Environment) -> None:
        assert convertible(logic, lam([("x", A)], app(v("f"), v("x"))), v("f"))

    def test_alpha(self, logic: Environment) -> None:
        assert convertible(logic, forall([("x", A)], B), forall([("y", A)], B))


class TestRegistration:
    def test_definition_records_inferred_type(self, logic: Environment) -> None:
        entry = logic.lookup("not")
        assert entry.kind == EntryKind.DEFINITION
        assert entry.type == TYPE
        assert entry.is_transparent

    def test_duplicate_name(self, logic: Environment) -> None:
        with pytest.raises(DuplicateNameError) as info:
            logic.define("absurd", [], TYPE)
        assert info.value.entry == "absurd"

    def test_unknown_name_leaves_env_unchanged(self, logic: Environment) -> None:
        before = len(logic)
        with pytest.raises(UnknownNameError, match="bar"):
            logic.define("foo", [], ref("bar"))
        assert len(logic) == before
        assert "foo" not in logic

    def test_wrong_proof(self, logic: Environment) -> None:
        with pytest.raises(TypeMismatchError) as info:
            logic.theorem(
                "bad", [("A", TYPE)], impl(A, A), lam([("x", A)], ref("truth-is-true"))
            )
        assert info.value.entry == "bad"
        assert "bad" not in logic

    def test_missing_proof(self, logic: Environment) -> None:
        with pytest.raises(IncompleteProofError):
            logic.theorem("later", [("A", TYPE)], impl(A, A), None)
        assert "later" not in logic

    def test_duplicate_parameter(self, logic: Environment) -> None:
        with pytest.raises(IllTypedError, match="declared twice"):
            logic.define("twice", [("A", TYPE), ("A", TYPE)], A)

    def test_parameter_must_be_a_type(self, logic: Environment) -> None:
        with pytest.raises(IllTypedError, match="is not a type"):
            logic.define("weird", [("A", TYPE), ("a", A), ("b", v("a"))], A)

    def test_theorem_is_opaque(self, logic: Environment) -> None:
        entry = logic.lookup("impl-refl")
        assert entry.kind == EntryKind.THEOREM
        assert not entry.is_transparent
        assert whnf(logic, ref("impl-refl", A)) == ref("impl-refl", A)

    def test_conjecture_cannot_be_used(self, logic: Environment) -> None:
        logic.conjecture("hope", [], absurd())
        assert logic.conjectures()[0].name == "hope"
        with pytest.raises(UnverifiedReferenceError) as info:
            logic.theorem("oops", [], absurd(), ref("hope"))
        assert info.value.entry == "oops"

    def test_conjecture_hidden_in_a_definition(self, logic: Environment) -> None:
        logic.conjecture("bogus", [], absurd())
        logic.define("laundered", [], ref("bogus"))
        with pytest.raises(UnverifiedReferenceError, match="bogus"):
            logic.theorem("false-thm", [], absurd(), ref("laundered"))
        assert "false-thm" not in logic

    def test_dependencies_follow_definitions(self, logic: Environment) -> None:
        deps = logic.dependencies(truth())
        assert {"truth", "not", "absurd"} <= deps

    def test_axiom_can_be_used(self, logic: Environment) -> None:
        logic.axiom("lem", [("A", TYPE)], ref("or", A, not_(A)))
        entry = logic.theorem(
            "lem-truth", [], ref("or", truth(), not_(truth())), ref("lem", truth())
        )
        assert entry.kind == EntryKind.THEOREM
        assert [e.name for e in logic.axioms()] == ["lem"]

    def test_describe_counts_kinds(self, logic: Environment) -> None:
        counts = logic.describe()
        assert counts["axiom"] == 0
        assert counts["conjecture"] == 0
        assert counts["definition"] + counts["theorem"] == len(logic)
