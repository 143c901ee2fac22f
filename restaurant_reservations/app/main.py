"""
Main entrypoint for the reservation manager.

``create_app`` configures logging, opens the configured key-value
store and wires every service to it.  The returned ``ReservationApp``
is the single object a user interface needs::

    app = create_app()
    session = await app.auth.login("owner@example.com", "secret")
    restaurant = await app.management.add_restaurant(session, ...)

Tests pass their own ``Settings`` and ``MemoryKeyValueStore``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.storage import KeyValueStore, create_store
from .services.auth_service import AuthService
from .services.booking_service import BookingService
from .services.customer_service import CustomerService
from .services.integrity import IntegrityPolicy, ReferentialIntegrity
from .services.management_service import ManagementService
from .services.reservation_service import ReservationService
from .services.restaurant_service import RestaurantService
from .services.session_service import SessionService
from .services.table_service import TableService
from .services.user_service import UserService


logger = logging.getLogger(__name__)


@dataclass
class ReservationApp:
    """Every service of the application bound to one store."""

    settings: Settings
    store: KeyValueStore
    users: UserService
    restaurants: RestaurantService
    tables: TableService
    customers: CustomerService
    reservations: ReservationService
    sessions: SessionService
    integrity: ReferentialIntegrity
    auth: AuthService
    management: ManagementService
    booking: BookingService


def create_app(
    settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None
) -> ReservationApp:
    """Create and wire a ``ReservationApp``.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment based
        ``core.config.settings``.
    store : Optional[KeyValueStore]
        Store to bind the services to.  When omitted the backend named
        by ``settings.storage_backend`` is created.
    """
    settings = settings or default_settings
    setup_logging(settings)

    store = store if store is not None else create_store(settings)
    serialize = settings.serialize_writes

    users = UserService(store, serialize_writes=serialize)
    restaurants = RestaurantService(store, serialize_writes=serialize)
    tables = TableService(store, serialize_writes=serialize)
    customers = CustomerService(store, serialize_writes=serialize)
    reservations = ReservationService(store, serialize_writes=serialize)
    sessions = SessionService(store)
    integrity = ReferentialIntegrity(
        users,
        restaurants,
        tables,
        customers,
        reservations,
        policy=IntegrityPolicy(settings.integrity_policy.lower()),
    )

    logger.debug(
        "Reservation app ready (store=%s, serialize_writes=%s, integrity=%s)",
        type(store).__name__, serialize, integrity.policy.value,
    )
    return ReservationApp(
        settings=settings,
        store=store,
        users=users,
        restaurants=restaurants,
        tables=tables,
        customers=customers,
        reservations=reservations,
        sessions=sessions,
        integrity=integrity,
        auth=AuthService(users, sessions),
        management=ManagementService(restaurants, tables, integrity),
        booking=BookingService(restaurants, tables, customers, reservations),
    )
