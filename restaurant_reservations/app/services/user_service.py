"""
Business logic for users.

Users are stored under ``@users``.  Updating an unknown id raises
``NotFoundError`` (strict upsert).
"""

from typing import Optional

from ..schemas.user import User
from .base import CollectionService, UpsertMode


class UserService(CollectionService[User]):
    """Service for user accounts."""

    key = "@users"
    model = User
    entity_name = "User"
    upsert_mode = UpsertMode.STRICT

    async def get_by_email(self, email: str) -> Optional[User]:
        """Return the first user registered with ``email`` or ``None``."""
        return await self._first(email=email)
