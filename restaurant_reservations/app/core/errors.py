"""
Exception types raised by the reservation manager.

Storage and decode failures wrap the backend exception (available as
``__cause__``).  Logical absence on read paths is never an error: the
services return ``None`` or an empty list instead.
"""

from typing import Optional


class ReservationsError(Exception):
    """Base class for all errors raised by this package."""


class StorageError(ReservationsError):
    """The key-value store failed to read or write a value."""


class DecodeError(ReservationsError):
    """A stored blob does not match the expected shape."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Cannot decode value stored under {key!r}: {message}")
        self.key = key


class NotFoundError(ReservationsError, LookupError):
    """A record addressed by id does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(ReservationsError, ValueError):
    """Workflow input rejected before reaching the collection services."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class AuthenticationError(ReservationsError):
    """Unknown email or wrong password."""


class PermissionDeniedError(ReservationsError):
    """The active session is not allowed to perform the operation."""


class ReferentialIntegrityError(ReservationsError):
    """A delete was refused because other records still reference the target."""

    def __init__(self, entity: str, entity_id: str, dependents: dict) -> None:
        summary = ", ".join(f"{count} {name}" for name, count in dependents.items())
        super().__init__(f"{entity} {entity_id} is still referenced by {summary}")
        self.entity = entity
        self.entity_id = entity_id
        self.dependents = dependents
