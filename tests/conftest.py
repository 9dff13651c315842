# tests/conftest.py
import pytest

from quantor.core import prefix_search
from quantor.units.registry import DEFAULT_REGISTRY as _ureg
from quantor.units.registry import _bootstrap_default_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture()
def reg():
    """Fresh, fully-bootstrapped UnitsRegistry for isolation per test."""
    return _bootstrap_default_registry()


@pytest.fixture()
def fresh_prefix_cache():
    prefix_search.clear_cache()
    yield
    prefix_search.clear_cache()
