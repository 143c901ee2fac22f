"""
Persisted login session.

The user who logged in (or registered) last is kept under the
``@current_user`` key so it survives restarts.  Instead of letting any
component read that key, ``SessionService`` hands out an explicit
``Session`` value which callers pass to the operations that need the
active identity.  Logging out writes ``null`` to the key.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.codec import decode_record, encode_record
from ..core.storage import KeyValueStore
from ..schemas.user import User, UserRole


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """The authenticated user of the running application."""

    user: User

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def is_owner(self) -> bool:
        return self.user.role == UserRole.RESTAURANT_OWNER


class SessionService:
    """Load, start and clear the persisted session."""

    key = "@current_user"

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def start(self, user: User) -> Session:
        await self.store.set(self.key, encode_record(user))
        logger.info("Session started for %s", user.email)
        return Session(user=user)

    async def load(self) -> Optional[Session]:
        """Return the persisted session, or ``None`` when logged out."""
        raw = await self.store.get(self.key)
        if raw is None:
            return None
        user = decode_record(self.key, raw, User)
        return Session(user=user) if user is not None else None

    async def clear(self) -> None:
        await self.store.set(self.key, encode_record(None))
        logger.info("Session cleared")
