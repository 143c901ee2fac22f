import pytest

from restaurant_reservations.app.core.storage import MemoryKeyValueStore
from tests.fixtures_data import build_app


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def app(store):
    return build_app(store)
