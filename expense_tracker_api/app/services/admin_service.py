"""
Service layer for administrator operations.

Administrators can list and delete users, triage contact messages and
read system-wide statistics.  The service composes the credential,
ledger and message stores; role checks happen in the auth gate before
any of these methods is called.
"""

import logging
from typing import List, Optional

from ..core.db import Database
from ..core.errors import NotFound, SelfDeletionDenied
from ..schemas.admin import AdminStats
from ..schemas.base import MessageResponse
from ..schemas.contact import STATUS_PENDING, ContactMessage, ContactWithSubmitter
from ..schemas.ledger import LedgerKind
from ..schemas.user import UserRead
from ..stores.contact_store import ContactStore
from ..stores.ledger_store import LedgerStore
from ..stores.user_store import UserStore


logger = logging.getLogger(__name__)


class AdminService:
    """Cross-user listings, deletion and statistics."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.users = UserStore(db)
        self.incomes = LedgerStore(db, LedgerKind.INCOME)
        self.expenses = LedgerStore(db, LedgerKind.EXPENSE)
        self.contacts = ContactStore(db)

    async def list_users(self) -> List[UserRead]:
        """Return all users, newest first, without password hashes."""
        return [UserRead(**user.model_dump(exclude={"password_hash"})) for user in self.users.list_all()]

    async def delete_user(self, target_id: str, requesting_admin_id: str) -> MessageResponse:
        """Delete a user together with their incomes, expenses and messages.

        The four deletions share one transaction: either all of them are
        committed or none is.

        Raises
        ------
        NotFound
            If ``target_id`` does not exist.
        SelfDeletionDenied
            If an administrator tries to delete their own account.
        """
        if self.users.get_by_id(target_id) is None:
            raise NotFound("User not found")
        if target_id == requesting_admin_id:
            raise SelfDeletionDenied("Cannot delete your own account")

        with self.db.transaction():
            self.users.delete(target_id)
            incomes = self.incomes.delete_by_owner(target_id)
            expenses = self.expenses.delete_by_owner(target_id)
            contacts = self.contacts.delete_by_owner(target_id)
        logger.info(
            "Admin %s deleted user %s (%d incomes, %d expenses, %d contacts)",
            requesting_admin_id,
            target_id,
            incomes,
            expenses,
            contacts,
        )
        return MessageResponse(message="User and associated data removed successfully")

    async def list_contacts(self) -> List[ContactWithSubmitter]:
        return self.contacts.list_with_submitters()

    async def update_contact_status(self, contact_id: str, status: Optional[str]) -> ContactMessage:
        """Set the status of a contact message.

        The value is stored as supplied; an empty or missing status keeps
        the current one.
        """
        contact = self.contacts.get(contact_id)
        if contact is None:
            raise NotFound("Contact message not found")
        updated = self.contacts.update_status(contact_id, status or contact.status)
        logger.info("Contact %s status set to %s", contact_id, updated.status)
        return updated

    async def stats(self) -> AdminStats:
        incomes = self.incomes.list_all()
        expenses = self.expenses.list_all()
        return AdminStats(
            total_users=self.users.count(),
            total_incomes=len(incomes),
            total_expenses=len(expenses),
            pending_contacts=self.contacts.count(STATUS_PENDING),
            total_income_amount=sum(entry.amount for entry in incomes),
            total_expense_amount=sum(entry.amount for entry in expenses),
        )
