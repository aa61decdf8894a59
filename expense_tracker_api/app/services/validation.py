"""
Input validators shared by the auth and contact services.

Each ``validate_*`` function raises ``ValidationError`` with a
client-facing message when its value is unacceptable and returns the
value unchanged otherwise.
"""

import re
from typing import Optional

from ..core.errors import ValidationError


NAME_RE = re.compile(r"[a-zA-Z\s]{2,50}", re.ASCII)
EMAIL_RE = re.compile(r"\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+", re.ASCII)
PASSWORD_RE = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{6,}",
    re.ASCII,
)
# RFC 5321 path limit.
MAX_EMAIL_LENGTH = 254

NAME_MESSAGE = "Name must be 2-50 characters and contain only letters and spaces"
EMAIL_MESSAGE = "Please enter a valid email address"
PASSWORD_MESSAGE = (
    "Password must be at least 6 characters with uppercase, lowercase, number, and special character"
)


def is_valid_email(email: Optional[str]) -> bool:
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_RE.fullmatch(email) is not None


def validate_name(name: Optional[str]) -> str:
    if not name or NAME_RE.fullmatch(name) is None:
        raise ValidationError(NAME_MESSAGE)
    return name


def validate_email(email: Optional[str]) -> str:
    if not is_valid_email(email):
        raise ValidationError(EMAIL_MESSAGE)
    return email


def validate_password(password: Optional[str]) -> str:
    if not password or PASSWORD_RE.fullmatch(password) is None:
        raise ValidationError(PASSWORD_MESSAGE)
    return password


def validate_min_length(value: Optional[str], minimum: int, message: str) -> str:
    """Require at least ``minimum`` characters once surrounding whitespace is stripped."""
    if not value or len(value.strip()) < minimum:
        raise ValidationError(message)
    return value
