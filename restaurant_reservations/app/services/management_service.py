"""
Restaurant and table management for owners.

These operations validate their input before touching the collection
services: restaurants need every contact field and a plausible email,
tables need a positive capacity and a number not yet used in the same
restaurant.  Removal goes through ``ReferentialIntegrity`` so the
configured delete policy applies.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.errors import NotFoundError, PermissionDeniedError, ValidationError
from ..core.validation import require_email, require_positive_int, require_text
from ..schemas.restaurant import Restaurant, RestaurantCreate
from ..schemas.table import Table, TableCreate
from .integrity import ReferentialIntegrity
from .restaurant_service import RestaurantService
from .session_service import Session
from .table_service import TableService


logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("name", "address", "phone", "email")


@dataclass
class RestaurantOverview:
    """A restaurant with its table counts."""

    restaurant: Restaurant
    table_count: int
    available_tables: int


class ManagementService:
    """Operations behind the owner's restaurant screens."""

    def __init__(
        self,
        restaurants: RestaurantService,
        tables: TableService,
        integrity: ReferentialIntegrity,
    ) -> None:
        self.restaurants = restaurants
        self.tables = tables
        self.integrity = integrity

    async def add_restaurant(
        self, session: Optional[Session], name: str, address: str, phone: str, email: str
    ) -> Restaurant:
        """Register a restaurant owned by the session user."""
        if session is None:
            raise PermissionDeniedError("Log in to add a restaurant")
        if not session.is_owner:
            raise PermissionDeniedError("Only restaurant owners can add restaurants")
        data = RestaurantCreate(
            name=require_text(name, "name"),
            address=require_text(address, "address"),
            phone=require_text(phone, "phone"),
            email=require_email(email),
            owner_id=session.user_id,
        )
        return await self.restaurants.save(data)

    async def edit_restaurant(self, restaurant_id: str, **changes: Any) -> Restaurant:
        """Change the contact fields of an existing restaurant."""
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot edit {', '.join(sorted(unknown))}")
        restaurant = await self.restaurants.get_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        cleaned = {}
        for field, value in changes.items():
            cleaned[field] = require_email(value) if field == "email" else require_text(value, field)
        return await self.restaurants.update({"id": restaurant.id, **cleaned})

    async def add_table(self, restaurant_id: str, number: Any, capacity: Any) -> Table:
        """Add an available table to a restaurant."""
        if await self.restaurants.get_by_id(restaurant_id) is None:
            raise NotFoundError("Restaurant", restaurant_id)
        if number is None or str(number).strip() == "":
            raise ValidationError("number is required", field="number")
        try:
            table_number = int(str(number).strip())
        except ValueError:
            raise ValidationError("number must be an integer", field="number")
        table_capacity = require_positive_int(capacity, "capacity")

        existing = await self.tables.get_by_restaurant_id(restaurant_id)
        if any(table.number == table_number for table in existing):
            raise ValidationError(f"Table {table_number} already exists", field="number")

        return await self.tables.save(
            TableCreate(
                restaurant_id=restaurant_id,
                number=table_number,
                capacity=table_capacity,
                is_available=True,
            )
        )

    async def available_tables(self, restaurant_id: str) -> List[Table]:
        return [table for table in await self.tables.get_by_restaurant_id(restaurant_id) if table.is_available]

    async def restaurant_overview(self, restaurant_id: str) -> Optional[RestaurantOverview]:
        restaurant = await self.restaurants.get_by_id(restaurant_id)
        if restaurant is None:
            return None
        return await self._overview(restaurant)

    async def list_restaurants(self, query: Optional[str] = None) -> List[RestaurantOverview]:
        """List restaurants with table counts.

        ``query`` filters case-insensitively on name or address.
        """
        restaurants = await self.restaurants.get_all()
        if query:
            needle = query.lower()
            restaurants = [
                r for r in restaurants if needle in r.name.lower() or needle in r.address.lower()
            ]
        return [await self._overview(restaurant) for restaurant in restaurants]

    async def _overview(self, restaurant: Restaurant) -> RestaurantOverview:
        tables = await self.tables.get_by_restaurant_id(restaurant.id)
        return RestaurantOverview(
            restaurant=restaurant,
            table_count=len(tables),
            available_tables=sum(1 for table in tables if table.is_available),
        )

    async def remove_restaurant(self, restaurant_id: str) -> None:
        await self.integrity.delete_restaurant(restaurant_id)

    async def remove_table(self, table_id: str) -> None:
        await self.integrity.delete_table(table_id)
