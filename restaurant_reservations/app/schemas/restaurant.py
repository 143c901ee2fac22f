"""Pydantic models for restaurants."""

from typing import Optional

from .common import CamelModel, Record


class RestaurantBase(CamelModel):
    name: str
    address: str
    phone: str
    email: str
    owner_id: str


class RestaurantCreate(RestaurantBase):
    pass


class RestaurantUpdate(CamelModel):
    id: str
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    owner_id: Optional[str] = None


class Restaurant(Record, RestaurantBase):
    """A stored restaurant; ``owner_id`` references a user."""
