"""
Business logic for restaurant tables.

Tables are stored under ``tables``.  Like restaurants, ``save`` inserts
when the supplied id is unknown.  ``update_availability`` is stricter
and raises ``NotFoundError`` for an unknown table.
"""

import logging
from typing import List

from ..core.errors import NotFoundError
from ..schemas.table import Table
from .base import CollectionService, EntityInput, UpsertMode


logger = logging.getLogger(__name__)


class TableService(CollectionService[Table]):
    """Service for tables."""

    key = "tables"
    model = Table
    entity_name = "Table"
    upsert_mode = UpsertMode.LENIENT

    async def get_by_restaurant_id(self, restaurant_id: str) -> List[Table]:
        """Return the tables of ``restaurant_id`` in storage order."""
        return await self._filter(restaurant_id=restaurant_id)

    async def update(self, table: EntityInput) -> Table:
        """Alias of ``save`` for call sites editing a loaded table."""
        return await self.save(table)

    async def update_availability(self, table_id: str, is_available: bool) -> Table:
        """Set ``is_available`` on an existing table."""
        async with self._write_guard():
            tables = await self.get_all()
            index = self._index_of(tables, table_id)
            if index is None:
                raise NotFoundError(self.entity_name, table_id)
            table = self._merge(tables, index, {"is_available": is_available})
            await self._write(tables)
        logger.info("Table %s is now %s", table_id, "available" if is_available else "occupied")
        return table
