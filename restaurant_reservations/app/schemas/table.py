"""
Pydantic models for restaurant tables.

``number`` is expected to be unique within a restaurant and
``capacity`` to be positive, but neither is checked here: the
management workflow validates them before saving.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel, Record


class TableBase(CamelModel):
    restaurant_id: str
    number: int
    capacity: int
    # Flipped to False while a reservation holds the table.
    is_available: bool = Field(True)


class TableCreate(TableBase):
    pass


class TableUpdate(CamelModel):
    id: str
    restaurant_id: Optional[str] = None
    number: Optional[int] = None
    capacity: Optional[int] = None
    is_available: Optional[bool] = None


class Table(Record, TableBase):
    """A stored table."""
