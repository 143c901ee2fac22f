"""
Business logic for booking tables.

``BookingService.book`` runs the new-reservation workflow:

1. find the customer by email, creating one if needed;
2. create a ``PENDING`` reservation;
3. mark the table as unavailable.

Each step is an independent write to its own collection.  If a later
step fails the earlier ones stay committed; there is no compensation.
Cancelling a reservation through ``change_status`` makes its table
available again.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.validation import require_email, require_positive_int, require_text
from ..schemas.customer import Customer, CustomerCreate
from ..schemas.reservation import Reservation, ReservationCreate, ReservationStatus
from ..schemas.table import Table
from .base import utcnow
from .customer_service import CustomerService
from .reservation_service import ReservationService
from .restaurant_service import RestaurantService
from .table_service import TableService


logger = logging.getLogger(__name__)


@dataclass
class BookingResult:
    """Records written by one run of the booking workflow."""

    customer: Customer
    reservation: Reservation
    table: Table
    customer_created: bool


class BookingService:
    """Service for booking, cancelling and searching reservations."""

    def __init__(
        self,
        restaurants: RestaurantService,
        tables: TableService,
        customers: CustomerService,
        reservations: ReservationService,
    ) -> None:
        self.restaurants = restaurants
        self.tables = tables
        self.customers = customers
        self.reservations = reservations

    async def book(
        self,
        restaurant_id: str,
        table_id: str,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        number_of_guests: int,
        date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> BookingResult:
        """Book ``table_id`` of ``restaurant_id`` for a customer.

        The table must belong to the restaurant and seat the party.
        Its current availability is not checked: the caller decides
        which tables to offer.  ``date`` defaults to now.
        """
        restaurant = await self.restaurants.get_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        table = await self.tables.get_by_id(table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        if table.restaurant_id != restaurant_id:
            raise ValidationError(
                f"Table {table_id} does not belong to restaurant {restaurant_id}", field="table_id"
            )

        guests = require_positive_int(number_of_guests, "number_of_guests")
        if guests > table.capacity:
            raise ValidationError(
                f"Table {table.number} seats only {table.capacity} guests", field="number_of_guests"
            )
        name = require_text(customer_name, "customer_name")
        email = require_email(customer_email, "customer_email")
        phone = require_text(customer_phone, "customer_phone")

        customer = await self.customers.get_by_email(email)
        customer_created = customer is None
        if customer is None:
            customer = await self.customers.save(CustomerCreate(name=name, email=email, phone=phone))

        reservation = await self.reservations.save(
            ReservationCreate(
                restaurant_id=restaurant_id,
                table_id=table_id,
                customer_id=customer.id,
                date=date or utcnow(),
                number_of_guests=guests,
                status=ReservationStatus.PENDING,
                notes=notes,
            )
        )
        table = await self.tables.update_availability(table_id, False)
        logger.info(
            "Booked table %s at %s for %s (%d guests)", table.number, restaurant.name, email, guests
        )
        return BookingResult(
            customer=customer,
            reservation=reservation,
            table=table,
            customer_created=customer_created,
        )

    async def change_status(self, reservation_id: str, status: ReservationStatus) -> Reservation:
        """Move a reservation to ``status``.

        Cancelling releases the table if it still exists.
        """
        status = ReservationStatus(status)
        reservation = await self.reservations.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)
        reservation = await self.reservations.save({"id": reservation_id, "status": status})
        if status is ReservationStatus.CANCELLED:
            if await self.tables.get_by_id(reservation.table_id) is not None:
                await self.tables.update_availability(reservation.table_id, True)
            else:
                logger.warning(
                    "Reservation %s cancelled but table %s no longer exists",
                    reservation_id, reservation.table_id,
                )
        return reservation

    async def search(self, query: Optional[str] = None) -> List[Reservation]:
        """Filter reservations by restaurant name, customer name or email.

        Matching is a case-insensitive substring test; an empty query
        returns every reservation.
        """
        reservations = await self.reservations.get_all()
        if not query:
            return reservations
        restaurants = {r.id: r for r in await self.restaurants.get_all()}
        customers = {c.id: c for c in await self.customers.get_all()}
        needle = query.lower()
        matches = []
        for reservation in reservations:
            restaurant = restaurants.get(reservation.restaurant_id)
            customer = customers.get(reservation.customer_id)
            haystacks = []
            if restaurant is not None:
                haystacks.append(restaurant.name)
            if customer is not None:
                haystacks.extend([customer.name, customer.email])
            if any(needle in text.lower() for text in haystacks):
                matches.append(reservation)
        return matches
