import asyncio

from restaurant_reservations.app.core.storage import MemoryKeyValueStore
from tests.fixtures_data import build_app


def _reservation(customer_id):
    return {
        "restaurantId": "r1",
        "tableId": "t1",
        "customerId": customer_id,
        "date": "2026-11-01T20:00:00Z",
        "numberOfGuests": 2,
    }


def _create_two_concurrently(app):
    async def scenario():
        await asyncio.gather(
            app.reservations.save(_reservation("c1")),
            app.reservations.save(_reservation("c2")),
        )
        return await app.reservations.get_all()

    return asyncio.run(scenario())


def test_serialized_writes_persist_concurrent_creates():
    app = build_app(MemoryKeyValueStore(yield_on_io=True), serialize_writes=True)

    reservations = _create_two_concurrently(app)

    assert sorted(r.customer_id for r in reservations) == ["c1", "c2"]


def test_unserialized_writes_lose_an_update():
    # Both saves read the empty collection before either writes back.
    app = build_app(MemoryKeyValueStore(yield_on_io=True), serialize_writes=False)

    reservations = _create_two_concurrently(app)

    assert len(reservations) == 1


def test_serialized_updates_and_deletes_interleave_safely():
    app = build_app(MemoryKeyValueStore(yield_on_io=True))

    async def scenario():
        tables = [
            await app.tables.save({"restaurantId": "r1", "number": n, "capacity": 4})
            for n in range(1, 5)
        ]
        await asyncio.gather(
            app.tables.update_availability(tables[0].id, False),
            app.tables.delete(tables[1].id),
            app.tables.save({"id": tables[2].id, "capacity": 8}),
            app.tables.save({"restaurantId": "r1", "number": 5, "capacity": 2}),
        )
        return tables, await app.tables.get_all()

    tables, stored = asyncio.run(scenario())
    by_id = {t.id: t for t in stored}

    assert len(stored) == 4
    assert by_id[tables[0].id].is_available is False
    assert tables[1].id not in by_id
    assert by_id[tables[2].id].capacity == 8


def test_serialized_writes_work_across_event_loops():
    app = build_app(MemoryKeyValueStore(yield_on_io=True), serialize_writes=True)

    first = _create_two_concurrently(app)
    second = _create_two_concurrently(app)

    assert len(first) == 2
    assert sorted(r.customer_id for r in second) == ["c1", "c1", "c2", "c2"]
