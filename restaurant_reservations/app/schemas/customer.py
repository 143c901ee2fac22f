"""
Pydantic models for customers.

Customers are captured when a reservation is booked and are matched by
email; they are unrelated to user accounts.
"""

from typing import Optional

from .common import CamelModel, Record


class CustomerBase(CamelModel):
    name: str
    email: str
    phone: str


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CamelModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class Customer(Record, CustomerBase):
    """A stored customer."""
