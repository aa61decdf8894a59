"""
Authentication endpoints.

Both routes are public.  Registration and login return the user's
public profile together with a bearer token to use on every other
request.
"""

from fastapi import APIRouter, Depends, status

from ...schemas.user import AuthResponse, LoginRequest, RegisterRequest
from ...services.auth_service import AuthService
from ..deps import get_auth_service


router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new account.

    The name must be 2-50 letters or spaces, the email well formed and
    the password at least 6 characters with upper and lower case
    letters, a digit and one of ``@$!%*?&``.
    """
    return await service.register(payload.name, payload.email, payload.password, payload.role)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for a token."""
    return await service.login(payload.email, payload.password)
