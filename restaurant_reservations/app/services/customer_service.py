"""Business logic for customers, stored under ``@customers``."""

from typing import Optional

from ..schemas.customer import Customer
from .base import CollectionService, UpsertMode


class CustomerService(CollectionService[Customer]):
    """Service for customers captured at booking time."""

    key = "@customers"
    model = Customer
    entity_name = "Customer"
    upsert_mode = UpsertMode.STRICT

    async def get_by_email(self, email: str) -> Optional[Customer]:
        """Return the first customer with ``email`` or ``None``."""
        return await self._first(email=email)
