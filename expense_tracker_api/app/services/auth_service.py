"""
Business logic for registration and login.

Registration validates the submitted profile, hashes the password and
assigns a role.  The bootstrap administrator address is always given
the admin role; any other account gets the requested role or
``user``.  Both operations return the public profile together with a
freshly issued access token.
"""

import logging
from typing import Optional

from ..core.config import settings
from ..core.db import Database
from ..core.errors import Conflict, InvalidCredentials, ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.user import AuthResponse, Role, UserRecord
from ..stores.user_store import UserStore
from .validation import EMAIL_MESSAGE, is_valid_email, validate_email, validate_name, validate_password


logger = logging.getLogger(__name__)

MIN_LOGIN_PASSWORD_LENGTH = 6


class AuthService:
    """Registration and login on top of the credential store."""

    def __init__(self, db: Database, admin_email: Optional[str] = None) -> None:
        self.users = UserStore(db)
        self.admin_email = admin_email or settings.admin_email

    def assign_role(self, email: str, requested: Optional[Role]) -> Role:
        if email == self.admin_email:
            return Role.ADMIN
        return requested or Role.USER

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Optional[Role] = None,
    ) -> AuthResponse:
        """Create an account and return its profile with a token.

        Raises
        ------
        ValidationError
            If the name, email or password is malformed (checked in that
            order; the first failure is reported).
        Conflict
            If an account with this email already exists.
        """
        validate_name(name)
        validate_email(email)
        validate_password(password)

        if self.users.get_by_email(email) is not None:
            raise Conflict("User already exists with this email")

        assigned = self.assign_role(email, role)
        user = self.users.create(name, email, hash_password(password), assigned)
        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return self._auth_response(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResponse:
        """Check credentials and return the profile with a fresh token."""
        if not is_valid_email(email):
            raise ValidationError(EMAIL_MESSAGE)
        if not password or len(password) < MIN_LOGIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters")

        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", email)
            raise InvalidCredentials("Invalid email or password")
        logger.info("User %s logged in", user.id)
        return self._auth_response(user)

    @staticmethod
    def _auth_response(user: UserRecord) -> AuthResponse:
        return AuthResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            token=create_access_token(user.id),
        )
