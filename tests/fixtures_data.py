"""Reusable data and app builder for the test suite."""

from restaurant_reservations.app.core.config import Settings
from restaurant_reservations.app.core.storage import MemoryKeyValueStore
from restaurant_reservations.app.main import create_app


def build_app(store=None, **overrides):
    options = {
        "storage_backend": "memory",
        "log_level": "WARNING",
        "log_file": "",
        "log_to_console": False,
        "serialize_writes": True,
        "integrity_policy": "none",
    }
    options.update(overrides)
    return create_app(Settings(**options), store=store if store is not None else MemoryKeyValueStore())


RESTAURANT = {
    "name": "Bistro",
    "address": "Rua das Flores 10",
    "phone": "11 5555-0000",
    "email": "bistro@example.com",
    "ownerId": "u1",
}

OWNER = {
    "name": "Ana Lima",
    "email": "ana@example.com",
    "phone": "11 98888-0000",
    "password": "s3nha",
}

CUSTOMER = {
    "customer_name": "Bruno",
    "customer_email": "a@b.com",
    "customer_phone": "11 97777-0000",
}
