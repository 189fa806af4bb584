import pytest
from jlview.context import Context
from jlview.core import init_stringers
from jlview.registry import reset_stringers


@pytest.fixture(scope="session", autouse=True)
def initialize_stringers():
    init_stringers()
    yield
    reset_stringers()


@pytest.fixture
def ctx() -> Context:
    return Context()
