"""
Business logic for restaurants.

Restaurants are stored under ``restaurants`` (no ``@`` prefix, kept for
compatibility with existing data).  Saving with an id that is not
stored inserts a new restaurant under that id instead of failing.
Deleting a restaurant leaves its tables and reservations in place; use
``ReferentialIntegrity`` for restricted or cascading deletes.
"""

from typing import List

from ..schemas.restaurant import Restaurant
from .base import CollectionService, EntityInput, UpsertMode


class RestaurantService(CollectionService[Restaurant]):
    """Service for restaurants."""

    key = "restaurants"
    model = Restaurant
    entity_name = "Restaurant"
    upsert_mode = UpsertMode.LENIENT

    async def get_by_owner_id(self, owner_id: str) -> List[Restaurant]:
        """Return every restaurant owned by ``owner_id``."""
        return await self._filter(owner_id=owner_id)

    async def update(self, restaurant: EntityInput) -> Restaurant:
        """Persist changes to an existing restaurant.

        Same semantics as ``save``; the name documents intent at call
        sites that edit a restaurant they loaded earlier.
        """
        return await self.save(restaurant)
