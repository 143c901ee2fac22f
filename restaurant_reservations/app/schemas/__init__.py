"""
Pydantic schema definitions for stored entities.

Each entity defines a ``*Create`` model (input for a new record), a
``*Update`` model (partial input keyed by id) and the full stored model.
"""

from .common import CamelModel, Record  # noqa: F401
from .customer import Customer, CustomerCreate, CustomerUpdate  # noqa: F401
from .reservation import (  # noqa: F401
    Reservation,
    ReservationCreate,
    ReservationStatus,
    ReservationUpdate,
)
from .restaurant import Restaurant, RestaurantCreate, RestaurantUpdate  # noqa: F401
from .table import Table, TableCreate, TableUpdate  # noqa: F401
from .user import User, UserCreate, UserRole, UserUpdate  # noqa: F401
