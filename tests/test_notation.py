import pytest

from typedsets.errors import NotationError
from typedsets.helpers import app, impl, lam, ref, v
from typedsets.notation import exists_in, forall_in
from typedsets.prelude import and_, ex
from typedsets.sets import elem

T, s, P, x = v("T"), v("s"), v("P"), v("x")


def test_forall_in_expansion() -> None:
    got = forall_in(("x", T, s), app(P, x))
    assert got.name == "x"
    assert got.domain == T
    assert got.body == impl(elem(T, x, s), app(P, x))


def test_exists_in_expansion() -> None:
    got = exists_in(("x", T, s), app(P, x))
    assert got == ex(T, lam([("x", T)], and_(elem(T, x, s), app(P, x))))


def test_elem_is_a_reference() -> None:
    assert elem(T, x, s) == ref("elem-def", T, x, s)


@pytest.mark.parametrize(
    "binding",
    [
        ("x", T),
        ("x", T, s, s),
        (T, T, s),
    ],
)
def test_malformed_binding(binding: tuple) -> None:
    with pytest.raises(NotationError) as info:
        forall_in(binding, app(P, x))  # type: ignore[arg-type]
    assert info.value.binding == binding
    assert info.value.message == "Binding of `forall-in` should be of the form `[x T s]`."


def test_malformed_exists_in_names_its_form() -> None:
    with pytest.raises(NotationError, match="exists-in"):
        exists_in(("x", T), app(P, x))  # type: ignore[arg-type]
