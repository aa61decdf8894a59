"""
Pydantic models for user data.

``UserRecord`` is the internal representation loaded from the
credential store and carries the password hash; it is never used as a
response model.  ``UserRead`` is the public profile returned by the
admin listing, and ``AuthResponse`` is what registration and login
return.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserRecord(CamelModel):
    id: str
    name: str
    email: str
    role: Role
    password_hash: str
    created_at: datetime
    updated_at: datetime


class UserRead(CamelModel):
    """Schema for reading a user from the API."""

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime


class RegisterRequest(CamelModel):
    """Payload for ``POST /auth/register``.

    Fields are optional at the schema level so that a missing field is
    reported by the auth service with the same message as a malformed
    one.
    """

    name: Optional[str] = Field(None, examples=["Bob Smith"])
    email: Optional[str] = Field(None, examples=["bob@example.com"])
    password: Optional[str] = Field(None, examples=["Passw0rd!"])
    role: Optional[Role] = Field(None, examples=["user"])


class LoginRequest(CamelModel):
    email: Optional[str] = Field(None, examples=["bob@example.com"])
    password: Optional[str] = Field(None, examples=["Passw0rd!"])


class AuthResponse(CamelModel):
    id: str
    name: str
    email: str
    role: Role
    token: str
