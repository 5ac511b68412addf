import pytest

from objdiff import LaxObjectDiff, StrictObjectDiff


@pytest.fixture
def lax_differ() -> LaxObjectDiff:
    """Fresh lax engine with nothing registered."""
    return LaxObjectDiff()


@pytest.fixture
def strict_differ() -> StrictObjectDiff:
    """Fresh strict engine with the builtin scalar types whitelisted."""
    differ = StrictObjectDiff()
    differ.add_default_value_types()
    return differ
