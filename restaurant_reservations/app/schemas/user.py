"""
Pydantic models for users.

Users are restaurant owners or customers with an account.  The password
is stored in plain text and compared for equality at login; replace it
with a salted hash before using this anywhere real.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel, Record


class UserRole(str, Enum):
    CUSTOMER = "CUSTOMER"
    RESTAURANT_OWNER = "RESTAURANT_OWNER"


class UserBase(CamelModel):
    name: str = Field(..., examples=["Maria Souza"])
    email: str = Field(..., examples=["maria@example.com"])
    phone: str = Field(..., examples=["+55 11 99999-0000"])
    password: str
    role: UserRole = Field(UserRole.CUSTOMER)


class UserCreate(UserBase):
    """Schema for registering a user."""
    pass


class UserUpdate(CamelModel):
    """Partial update; only the fields that are set are merged."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None


class User(Record, UserBase):
    """A stored user."""
