import asyncio

import pytest

from restaurant_reservations.app.core.config import Settings
from restaurant_reservations.app.core.errors import StorageError
from restaurant_reservations.app.core.storage import (
    MemoryKeyValueStore,
    SqliteKeyValueStore,
    create_store,
    get_database_path,
)
from tests.fixtures_data import RESTAURANT, build_app


def test_memory_store_returns_none_for_unknown_key():
    store = MemoryKeyValueStore()

    assert asyncio.run(store.get("@users")) is None


def test_memory_store_rejects_non_string_values():
    store = MemoryKeyValueStore()

    with pytest.raises(StorageError):
        asyncio.run(store.set("@users", ["not", "a", "string"]))


def test_sqlite_store_persists_across_instances(tmp_path):
    path = str(tmp_path / "kv.db")

    async def scenario():
        await SqliteKeyValueStore(path).set("tables", "[]")
        await SqliteKeyValueStore(path).set("tables", "[1]")
        return await SqliteKeyValueStore(path).get("tables")

    assert asyncio.run(scenario()) == "[1]"


def test_sqlite_store_wraps_backend_failures(tmp_path):
    # A directory cannot be opened as a database file.
    store = SqliteKeyValueStore(str(tmp_path))

    with pytest.raises(StorageError):
        asyncio.run(store.get("tables"))
    with pytest.raises(StorageError):
        asyncio.run(store.set("tables", "[]"))


def test_records_survive_an_app_restart(tmp_path):
    path = str(tmp_path / "reservations.db")

    async def scenario():
        first = build_app(SqliteKeyValueStore(path))
        created = await first.restaurants.save(RESTAURANT)
        second = build_app(SqliteKeyValueStore(path))
        return created, await second.restaurants.get_by_id(created.id)

    created, reloaded = asyncio.run(scenario())

    assert reloaded == created


def test_create_store_selects_backend(tmp_path):
    memory = create_store(Settings(storage_backend="memory"))
    sqlite = create_store(Settings(storage_backend="sqlite", database_url=str(tmp_path / "x.db")))

    assert isinstance(memory, MemoryKeyValueStore)
    assert isinstance(sqlite, SqliteKeyValueStore)
    assert sqlite.path == str(tmp_path / "x.db")
    with pytest.raises(ValueError):
        create_store(Settings(storage_backend="redis"))


def test_relative_database_path_is_resolved_against_project_root():
    path = get_database_path(Settings(database_url="data/reservations.db"))

    assert path.endswith("data/reservations.db")
    assert path.startswith("/") or ":" in path
