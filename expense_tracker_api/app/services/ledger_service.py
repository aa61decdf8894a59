"""
Business logic for ledger entries.

``LedgerService`` is parametrised by ``LedgerKind`` and implements the
same contract for incomes and expenses: creation with validation,
owner-scoped listing with filters and sorting, single-entry access
guarded by an ownership check, partial updates, deletion and a
per-owner summary.

Ownership checks report a missing entry (404) before a foreign one
(403), so a caller can tell whether an id exists.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from ..core.db import Database, utcnow
from ..core.errors import Forbidden, NotFound, ValidationError
from ..schemas.base import MessageResponse
from ..schemas.ledger import (
    LedgerEntry,
    LedgerEntryCreate,
    LedgerEntryUpdate,
    LedgerFilters,
    LedgerKind,
    LedgerSummary,
)
from ..stores.ledger_store import LedgerStore


logger = logging.getLogger(__name__)


class LedgerService:
    """CRUD and aggregation for one kind of ledger entry."""

    def __init__(self, db: Database, kind: LedgerKind) -> None:
        self.kind = kind
        self.store = LedgerStore(db, kind)

    async def create(self, owner_id: str, data: LedgerEntryCreate) -> LedgerEntry:
        """Create an entry owned by ``owner_id``.

        Raises
        ------
        ValidationError
            If category, amount or description is missing or empty, or
            the amount is not positive.
        """
        if not data.category or not data.amount or not data.description:
            raise ValidationError("Please fill all required fields")
        if data.amount <= 0:
            raise ValidationError("Amount must be greater than 0")
        entry = self.store.create(
            owner_id=owner_id,
            category=data.category,
            amount=data.amount,
            description=data.description,
            date=data.date or utcnow(),
        )
        logger.info("User %s added %s %s", owner_id, self.kind.value, entry.id)
        return entry

    async def list(self, owner_id: str, filters: Optional[LedgerFilters] = None) -> List[LedgerEntry]:
        return self.store.list_for_owner(owner_id, filters)

    async def get_one(self, owner_id: str, entry_id: str, action: str = "view") -> LedgerEntry:
        """Return the entry if it exists and belongs to ``owner_id``."""
        entry = self.store.get(entry_id)
        if entry is None:
            raise NotFound(f"{self.kind.label} not found")
        if entry.user_id != owner_id:
            raise Forbidden(f"Not authorized to {action} this {self.kind.value}")
        return entry

    async def update(self, owner_id: str, entry_id: str, patch: LedgerEntryUpdate) -> LedgerEntry:
        """Apply a partial update.

        Every field is replaced only when the supplied value is truthy:
        ``0`` and ``""`` are treated like omitted fields and keep the
        stored value.  The amount is not re-checked for positivity.
        """
        entry = await self.get_one(owner_id, entry_id, action="update")
        updated = self.store.update(
            entry_id,
            category=patch.category or entry.category,
            amount=patch.amount or entry.amount,
            description=patch.description or entry.description,
            date=patch.date or entry.date,
        )
        logger.info("User %s updated %s %s", owner_id, self.kind.value, entry_id)
        return updated

    async def remove(self, owner_id: str, entry_id: str) -> MessageResponse:
        await self.get_one(owner_id, entry_id, action="delete")
        self.store.delete(entry_id)
        logger.info("User %s deleted %s %s", owner_id, self.kind.value, entry_id)
        return MessageResponse(message=f"{self.kind.label} removed successfully")

    async def summary(self, owner_id: str) -> LedgerSummary:
        entries = self.store.list_for_owner(owner_id)
        breakdown: Dict[str, float] = defaultdict(float)
        for entry in entries:
            breakdown[entry.category] += entry.amount
        return LedgerSummary(
            total=sum(entry.amount for entry in entries),
            count=len(entries),
            category_breakdown=dict(breakdown),
        )
