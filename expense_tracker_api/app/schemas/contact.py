"""
Pydantic schemas for contact messages.

A contact message is submitted by a signed-in user and later triaged
by an administrator, who moves its ``status`` away from ``pending``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


STATUS_PENDING = "pending"
STATUS_REVIEWED = "reviewed"


class ContactCreate(CamelModel):
    name: Optional[str] = Field(None, examples=["Bob Smith"])
    email: Optional[str] = Field(None, examples=["bob@example.com"])
    subject: Optional[str] = Field(None, examples=["Export to CSV"])
    message: Optional[str] = Field(None, examples=["Could you add a CSV export of my expenses?"])


class ContactMessage(CamelModel):
    id: str
    user_id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime
    updated_at: datetime


class ContactSubmitted(CamelModel):
    message: str
    contact: ContactMessage


class Submitter(CamelModel):
    id: str
    name: str
    email: str


class ContactWithSubmitter(ContactMessage):
    """Contact message as seen by administrators."""

    user: Optional[Submitter] = None


class ContactStatusUpdate(CamelModel):
    """Body of ``PUT /admin/contacts/{id}``.

    The value is stored as given.  Clients are expected to send
    ``pending`` or ``reviewed``.
    """

    status: Optional[str] = Field(None, examples=[STATUS_REVIEWED])
