"""
Business logic for contact messages submitted by users.

Messages start out ``pending``; only administrators change their
status (see ``AdminService``).
"""

import logging
from typing import List

from ..core.db import Database
from ..schemas.contact import ContactCreate, ContactMessage, ContactSubmitted
from ..stores.contact_store import ContactStore
from .validation import validate_email, validate_min_length, validate_name


logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = "Your message has been sent successfully!"


class ContactService:
    def __init__(self, db: Database) -> None:
        self.contacts = ContactStore(db)

    async def submit(self, user_id: str, data: ContactCreate) -> ContactSubmitted:
        """Validate and store a message from ``user_id``.

        The name and email follow the registration rules; the subject
        needs at least 3 and the message at least 10 non-blank
        characters.
        """
        validate_name(data.name)
        validate_email(data.email)
        validate_min_length(data.subject, 3, "Subject must be at least 3 characters")
        validate_min_length(data.message, 10, "Message must be at least 10 characters")
        contact = self.contacts.create(
            owner_id=user_id,
            name=data.name,
            email=data.email,
            subject=data.subject,
            message=data.message,
        )
        logger.info("User %s submitted contact message %s", user_id, contact.id)
        return ContactSubmitted(message=SUBMITTED_MESSAGE, contact=contact)

    async def list_mine(self, user_id: str) -> List[ContactMessage]:
        return self.contacts.list_for_owner(user_id)
