"""
Business logic for reservations.

Reservations are stored under ``@reservations``.  The service does not
touch table availability; the booking workflow does that explicitly.
"""

from typing import List

from ..schemas.reservation import Reservation
from .base import CollectionService, UpsertMode


class ReservationService(CollectionService[Reservation]):
    """Service for reservations."""

    key = "@reservations"
    model = Reservation
    entity_name = "Reservation"
    upsert_mode = UpsertMode.STRICT

    async def get_by_restaurant_id(self, restaurant_id: str) -> List[Reservation]:
        return await self._filter(restaurant_id=restaurant_id)

    async def get_by_customer_id(self, customer_id: str) -> List[Reservation]:
        return await self._filter(customer_id=customer_id)

    async def get_by_table_id(self, table_id: str) -> List[Reservation]:
        return await self._filter(table_id=table_id)
