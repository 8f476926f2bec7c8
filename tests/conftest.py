import pytest

from typedsets.env import Environment
from typedsets.library import build_library
from typedsets.prelude import prop


@pytest.fixture(scope="session")
def library() -> Environment:
    """The full library; shared, so tests must not register into it."""
    return build_library()


@pytest.fixture
def logic() -> Environment:
    """A fresh environment holding only the propositional prelude."""
    env = Environment()
    prop.install(env)
    return env
