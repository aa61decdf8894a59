"""
Contact endpoints for signed-in users.

Users submit messages to the site administrators and can read back
what they have sent.  Triage happens under ``/admin/contacts``.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...core.security import get_current_user
from ...schemas.contact import ContactCreate, ContactMessage, ContactSubmitted
from ...schemas.user import UserRecord
from ...services.contact_service import ContactService
from ..deps import get_contact_service


router = APIRouter()


@router.post("", response_model=ContactSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: ContactCreate,
    current_user: UserRecord = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
) -> ContactSubmitted:
    return await service.submit(current_user.id, payload)


@router.get("", response_model=List[ContactMessage])
async def list_my_contacts(
    current_user: UserRecord = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
) -> List[ContactMessage]:
    """Return the caller's own messages, newest first."""
    return await service.list_mine(current_user.id)
