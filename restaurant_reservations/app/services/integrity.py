"""
Referential integrity on top of the collection services.

The collection services know nothing about relationships: deleting a
restaurant leaves its tables and reservations pointing at nothing.
``ReferentialIntegrity`` applies one of three policies to deletes:

* ``NONE``: delete only the target (the behaviour of the raw services);
* ``RESTRICT``: refuse with ``ReferentialIntegrityError`` while
  dependents exist;
* ``CASCADE``: delete dependents first, then the target.

Relationships checked::

    user        -> restaurants (owner_id)
    restaurant  -> tables, reservations (restaurant_id)
    table       -> reservations (table_id)
    customer    -> reservations (customer_id)

Cascades are a sequence of independent collection writes; a failure
part way leaves the earlier deletes in place.
"""

import logging
from enum import Enum
from typing import Dict

from ..core.errors import ReferentialIntegrityError
from .customer_service import CustomerService
from .reservation_service import ReservationService
from .restaurant_service import RestaurantService
from .table_service import TableService
from .user_service import UserService


logger = logging.getLogger(__name__)


class IntegrityPolicy(str, Enum):
    NONE = "none"
    RESTRICT = "restrict"
    CASCADE = "cascade"


class ReferentialIntegrity:
    """Delete operations that honour an ``IntegrityPolicy``."""

    def __init__(
        self,
        users: UserService,
        restaurants: RestaurantService,
        tables: TableService,
        customers: CustomerService,
        reservations: ReservationService,
        policy: IntegrityPolicy = IntegrityPolicy.NONE,
    ) -> None:
        self.users = users
        self.restaurants = restaurants
        self.tables = tables
        self.customers = customers
        self.reservations = reservations
        self.policy = IntegrityPolicy(policy)

    def _check(self, entity: str, entity_id: str, dependents: Dict[str, int]) -> None:
        found = {name: count for name, count in dependents.items() if count}
        if found:
            raise ReferentialIntegrityError(entity, entity_id, found)

    async def delete_user(self, user_id: str) -> None:
        if self.policy is not IntegrityPolicy.NONE:
            owned = await self.restaurants.get_by_owner_id(user_id)
            if self.policy is IntegrityPolicy.RESTRICT:
                self._check("User", user_id, {"restaurants": len(owned)})
            for restaurant in owned:
                await self.delete_restaurant(restaurant.id)
        await self.users.delete(user_id)

    async def delete_restaurant(self, restaurant_id: str) -> None:
        if self.policy is not IntegrityPolicy.NONE:
            tables = await self.tables.get_by_restaurant_id(restaurant_id)
            reservations = await self.reservations.get_by_restaurant_id(restaurant_id)
            if self.policy is IntegrityPolicy.RESTRICT:
                self._check(
                    "Restaurant",
                    restaurant_id,
                    {"tables": len(tables), "reservations": len(reservations)},
                )
            for reservation in reservations:
                await self.reservations.delete(reservation.id)
            for table in tables:
                await self.delete_table(table.id)
            if tables or reservations:
                logger.info(
                    "Cascaded restaurant %s: %d tables, %d reservations",
                    restaurant_id, len(tables), len(reservations),
                )
        await self.restaurants.delete(restaurant_id)

    async def delete_table(self, table_id: str) -> None:
        if self.policy is not IntegrityPolicy.NONE:
            reservations = await self.reservations.get_by_table_id(table_id)
            if self.policy is IntegrityPolicy.RESTRICT:
                self._check("Table", table_id, {"reservations": len(reservations)})
            for reservation in reservations:
                await self.reservations.delete(reservation.id)
        await self.tables.delete(table_id)

    async def delete_customer(self, customer_id: str) -> None:
        if self.policy is not IntegrityPolicy.NONE:
            reservations = await self.reservations.get_by_customer_id(customer_id)
            if self.policy is IntegrityPolicy.RESTRICT:
                self._check("Customer", customer_id, {"reservations": len(reservations)})
            for reservation in reservations:
                await self.reservations.delete(reservation.id)
        await self.customers.delete(customer_id)

    async def delete_reservation(self, reservation_id: str) -> None:
        # Nothing references a reservation.
        await self.reservations.delete(reservation_id)
