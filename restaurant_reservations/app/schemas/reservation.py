"""
Pydantic models for reservations.

A reservation ties a customer to a table of a restaurant for a date.
The status starts as ``PENDING`` and is moved by the booking workflow;
no transition rules are enforced on the stored record.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel, Record


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ReservationBase(CamelModel):
    restaurant_id: str
    table_id: str
    customer_id: str
    date: datetime
    number_of_guests: int
    status: ReservationStatus = Field(ReservationStatus.PENDING)
    notes: Optional[str] = None


class ReservationCreate(ReservationBase):
    pass


class ReservationUpdate(CamelModel):
    id: str
    restaurant_id: Optional[str] = None
    table_id: Optional[str] = None
    customer_id: Optional[str] = None
    date: Optional[datetime] = None
    number_of_guests: Optional[int] = None
    status: Optional[ReservationStatus] = None
    notes: Optional[str] = None


class Reservation(Record, ReservationBase):
    """A stored reservation."""
