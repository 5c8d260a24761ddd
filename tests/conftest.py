import pytest

from helpers import FakeConnector


@pytest.fixture
def connector():
    return FakeConnector()
