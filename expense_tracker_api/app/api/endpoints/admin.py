"""
Administrator endpoints.

Every route depends on ``require_admin``, which first authenticates
the caller and then insists on the admin role (403 otherwise).
"""

from typing import List

from fastapi import APIRouter, Depends

from ...core.security import require_admin
from ...schemas.admin import AdminStats
from ...schemas.base import MessageResponse
from ...schemas.contact import ContactMessage, ContactStatusUpdate, ContactWithSubmitter
from ...schemas.user import UserRead, UserRecord
from ...services.admin_service import AdminService
from ..deps import get_admin_service


router = APIRouter()


@router.get("/users", response_model=List[UserRead])
async def list_users(
    current_user: UserRecord = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> List[UserRead]:
    """List all users, newest first.  Password hashes are never included."""
    return await service.list_users()


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current_user: UserRecord = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """Delete a user with all of their incomes, expenses and contact messages.

    Administrators cannot delete their own account.
    """
    return await service.delete_user(user_id, current_user.id)


@router.get("/contacts", response_model=List[ContactWithSubmitter])
async def list_contacts(
    current_user: UserRecord = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> List[ContactWithSubmitter]:
    return await service.list_contacts()


@router.put("/contacts/{contact_id}", response_model=ContactMessage)
async def update_contact(
    contact_id: str,
    payload: ContactStatusUpdate,
    current_user: UserRecord = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> ContactMessage:
    """Change the status of a contact message (e.g. to ``reviewed``)."""
    return await service.update_contact_status(contact_id, payload.status)


@router.get("/stats", response_model=AdminStats)
async def stats(
    current_user: UserRecord = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> AdminStats:
    """Return user, entry and pending-message counts plus grand totals."""
    return await service.stats()
