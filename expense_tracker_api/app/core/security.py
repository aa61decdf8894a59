"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens carry
the user id in the ``sub`` claim and an expiration timestamp
(``exp``).  Passwords are hashed with PBKDF2-HMAC-SHA256 and a random
salt.

The FastAPI dependencies at the bottom of the module form the auth
gate used by every protected route: ``get_current_user`` resolves the
bearer token to a stored user and ``require_admin`` additionally
insists on the admin role.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .db import Database, get_db
from .errors import Forbidden, InvalidToken, Unauthenticated
from ..schemas.user import Role, UserRecord
from ..stores.user_store import UserStore


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    user_id: str,
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Create a signed JWT for ``user_id``.

    Parameters
    ----------
    user_id : str
        Identifier stored in the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret_key : Optional[str]
        Signing key.  Defaults to ``settings.secret_key``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    now = int(time.time())
    claims: Dict[str, Any] = {"sub": user_id, "iat": now, "exp": now + exp_seconds}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def verify_access_token(token: str, secret_key: Optional[str] = None) -> str:
    """Verify a JWT and return the user id it was issued for.

    Raises
    ------
    InvalidToken
        If the token is malformed, its signature does not match, or it
        has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidToken("Malformed token")
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        claims = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidToken("Malformed token") from exc
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidToken("Bad signature")
    if not isinstance(claims, dict):
        raise InvalidToken("Malformed token")
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        raise InvalidToken("Token expired")
    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken("Token has no subject")
    return user_id


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The result
    is ``"<salt hex>$<hash hex>"``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``salt$hash`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


# ---------------------------------------------------------------------------
# Auth gate
# ---------------------------------------------------------------------------

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_db),
) -> UserRecord:
    """Dependency that resolves the bearer token to a stored user.

    Raises ``Unauthenticated`` when the header is missing, the token
    does not verify, or the user it names no longer exists.
    """
    if credentials is None:
        raise Unauthenticated("Not authorized, no token")
    try:
        user_id = verify_access_token(credentials.credentials)
    except InvalidToken as exc:
        logger.debug("Rejected token: %s", exc)
        raise Unauthenticated("Not authorized, token failed") from exc
    user = UserStore(db).get_by_id(user_id)
    if user is None:
        raise Unauthenticated("Not authorized, user not found")
    return user


async def require_admin(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    """Dependency that only lets administrators through."""
    if current_user.role != Role.ADMIN:
        raise Forbidden("Not authorized as an admin")
    return current_user
