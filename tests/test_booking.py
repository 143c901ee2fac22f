import asyncio
from datetime import datetime, timezone

import pytest

from restaurant_reservations.app.core.errors import NotFoundError, StorageError, ValidationError
from restaurant_reservations.app.core.storage import MemoryKeyValueStore
from restaurant_reservations.app.schemas import ReservationStatus
from tests.fixtures_data import CUSTOMER, RESTAURANT, build_app


DINNER = datetime(2026, 11, 1, 20, 0, tzinfo=timezone.utc)


class FailingTablesStore(MemoryKeyValueStore):
    """Memory store whose writes to the tables collection fail once armed."""

    armed = False

    async def set(self, key, value):
        if self.armed and key == "tables":
            raise StorageError("disk full")
        await super().set(key, value)


def _restaurant_with_table(app, capacity=4):
    async def scenario():
        restaurant = await app.restaurants.save(RESTAURANT)
        table = await app.tables.save(
            {"restaurantId": restaurant.id, "number": 1, "capacity": capacity, "isAvailable": True}
        )
        return restaurant, table

    return asyncio.run(scenario())


def test_new_reservation_workflow(app):
    restaurant, table = _restaurant_with_table(app)

    result = asyncio.run(
        app.booking.book(restaurant.id, table.id, number_of_guests=2, date=DINNER, **CUSTOMER)
    )

    customers = asyncio.run(app.customers.get_all())
    assert result.customer_created
    assert [c.email for c in customers] == ["a@b.com"]
    reservation = asyncio.run(app.reservations.get_by_id(result.reservation.id))
    assert reservation.status is ReservationStatus.PENDING
    assert reservation.restaurant_id == restaurant.id
    assert reservation.table_id == table.id
    assert reservation.customer_id == customers[0].id
    assert reservation.date == DINNER
    assert asyncio.run(app.tables.get_by_id(table.id)).is_available is False


def test_rebooking_reuses_existing_customer(app):
    restaurant, table = _restaurant_with_table(app)

    first = asyncio.run(app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER))
    second = asyncio.run(
        app.booking.book(restaurant.id, table.id, number_of_guests=2, **{**CUSTOMER, "customer_name": "Other"})
    )

    assert not second.customer_created
    assert second.customer == first.customer
    assert len(asyncio.run(app.customers.get_all())) == 1
    assert len(asyncio.run(app.reservations.get_all())) == 2


def test_book_validates_party_and_customer(app):
    restaurant, table = _restaurant_with_table(app, capacity=4)

    cases = [
        ({"number_of_guests": 5}, "number_of_guests"),
        ({"number_of_guests": 0}, "number_of_guests"),
        ({"number_of_guests": 2, "customer_email": "nope"}, "customer_email"),
        ({"number_of_guests": 2, "customer_name": ""}, "customer_name"),
        ({"number_of_guests": 2, "customer_phone": " "}, "customer_phone"),
    ]
    for overrides, field in cases:
        with pytest.raises(ValidationError) as excinfo:
            asyncio.run(app.booking.book(restaurant.id, table.id, **{**CUSTOMER, **overrides}))
        assert excinfo.value.field == field

    assert asyncio.run(app.customers.get_all()) == []
    assert asyncio.run(app.reservations.get_all()) == []
    assert asyncio.run(app.tables.get_by_id(table.id)).is_available is True


def test_book_checks_restaurant_and_table(app):
    restaurant, table = _restaurant_with_table(app)
    other = asyncio.run(app.restaurants.save({**RESTAURANT, "name": "Other"}))

    with pytest.raises(NotFoundError):
        asyncio.run(app.booking.book("missing", table.id, number_of_guests=2, **CUSTOMER))
    with pytest.raises(NotFoundError):
        asyncio.run(app.booking.book(restaurant.id, "missing", number_of_guests=2, **CUSTOMER))
    with pytest.raises(ValidationError):
        asyncio.run(app.booking.book(other.id, table.id, number_of_guests=2, **CUSTOMER))


def test_failed_table_update_does_not_roll_back_earlier_steps():
    store = FailingTablesStore()
    app = build_app(store)
    restaurant, table = _restaurant_with_table(app)
    store.armed = True

    with pytest.raises(StorageError):
        asyncio.run(app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER))

    assert len(asyncio.run(app.customers.get_all())) == 1
    assert len(asyncio.run(app.reservations.get_all())) == 1
    assert asyncio.run(app.tables.get_by_id(table.id)).is_available is True


def test_cancelling_releases_the_table(app):
    restaurant, table = _restaurant_with_table(app)
    result = asyncio.run(app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER))

    cancelled = asyncio.run(app.booking.change_status(result.reservation.id, ReservationStatus.CANCELLED))

    assert cancelled.status is ReservationStatus.CANCELLED
    assert cancelled.created_at == result.reservation.created_at
    assert asyncio.run(app.tables.get_by_id(table.id)).is_available is True


def test_confirming_keeps_the_table_occupied(app):
    restaurant, table = _restaurant_with_table(app)
    result = asyncio.run(app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER))

    confirmed = asyncio.run(app.booking.change_status(result.reservation.id, "CONFIRMED"))

    assert confirmed.status is ReservationStatus.CONFIRMED
    assert asyncio.run(app.tables.get_by_id(table.id)).is_available is False


def test_cancelling_after_table_was_deleted(app):
    restaurant, table = _restaurant_with_table(app)
    result = asyncio.run(app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER))
    asyncio.run(app.tables.delete(table.id))

    cancelled = asyncio.run(app.booking.change_status(result.reservation.id, ReservationStatus.CANCELLED))

    assert cancelled.status is ReservationStatus.CANCELLED
    assert asyncio.run(app.tables.get_all()) == []


def test_change_status_of_unknown_reservation(app):
    with pytest.raises(NotFoundError):
        asyncio.run(app.booking.change_status("missing", ReservationStatus.COMPLETED))


def test_search_matches_restaurant_and_customer(app):
    restaurant, table = _restaurant_with_table(app)

    async def scenario():
        cantina = await app.restaurants.save({**RESTAURANT, "name": "Cantina"})
        other_table = await app.tables.save({"restaurantId": cantina.id, "number": 1, "capacity": 6})
        first = await app.booking.book(restaurant.id, table.id, number_of_guests=2, **CUSTOMER)
        second = await app.booking.book(
            cantina.id,
            other_table.id,
            number_of_guests=4,
            customer_name="Carla",
            customer_email="carla@example.com",
            customer_phone="1",
        )
        return first.reservation, second.reservation

    first, second = asyncio.run(scenario())

    assert asyncio.run(app.booking.search("")) == [first, second]
    assert asyncio.run(app.booking.search("cantina")) == [second]
    assert asyncio.run(app.booking.search("BRUNO")) == [first]
    assert asyncio.run(app.booking.search("example.com")) == [second]
    assert asyncio.run(app.booking.search("nothing")) == []
