"""
Registration and login.

Both operations end by starting a persisted session for the user, so a
restarted application comes back logged in until ``logout`` is called.
"""

import logging
from typing import Optional

from ..core.errors import AuthenticationError, ValidationError
from ..core.security import verify_password
from ..core.validation import require_email, require_text
from ..schemas.user import User, UserCreate, UserRole
from .session_service import Session, SessionService
from .user_service import UserService


logger = logging.getLogger(__name__)


class AuthService:
    """Account registration, login and logout."""

    def __init__(self, users: UserService, sessions: SessionService) -> None:
        self.users = users
        self.sessions = sessions

    async def register(
        self,
        name: str,
        email: str,
        phone: str,
        password: str,
        confirm_password: str,
        role: UserRole = UserRole.CUSTOMER,
    ) -> Session:
        """Create an account and log it in.

        Every field is required, the two passwords must match and the
        email must not belong to an existing account.
        """
        name = require_text(name, "name")
        email = require_email(email)
        phone = require_text(phone, "phone")
        if not password:
            raise ValidationError("password is required", field="password")
        if not confirm_password:
            raise ValidationError("confirm_password is required", field="confirm_password")
        if password != confirm_password:
            raise ValidationError("Passwords do not match", field="confirm_password")

        if await self.users.get_by_email(email) is not None:
            raise ValidationError(f"{email} is already registered", field="email")

        user = await self.users.save(
            UserCreate(name=name, email=email, phone=phone, password=password, role=UserRole(role))
        )
        logger.info("Registered %s as %s", email, user.role.value)
        return await self.sessions.start(user)

    async def login(self, email: str, password: str) -> Session:
        """Check the credentials and start a session.

        Raises ``AuthenticationError`` for an unknown email or a wrong
        password.
        """
        if not email or not password:
            raise ValidationError("email and password are required")
        user: Optional[User] = await self.users.get_by_email(email)
        if user is None:
            logger.info("Login failed for unknown email %s", email)
            raise AuthenticationError("User not found")
        if not verify_password(password, user.password):
            logger.info("Login failed for %s: wrong password", email)
            raise AuthenticationError("Incorrect password")
        return await self.sessions.start(user)

    async def logout(self) -> None:
        await self.sessions.clear()

    async def current_session(self) -> Optional[Session]:
        return await self.sessions.load()
