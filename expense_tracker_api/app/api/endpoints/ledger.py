"""
Income and expense endpoints.

``build_ledger_router`` produces the same set of routes for each
``LedgerKind``; the top-level router mounts one copy under
``/income`` and one under ``/expense``.  Every route requires an
authenticated user and only ever touches that user's entries.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.security import get_current_user
from ...schemas.base import MessageResponse
from ...schemas.ledger import (
    LedgerEntry,
    LedgerEntryCreate,
    LedgerEntryUpdate,
    LedgerFilters,
    LedgerKind,
    LedgerSummary,
    SortOrder,
)
from ...schemas.user import UserRecord
from ...services.ledger_service import LedgerService
from ..deps import ledger_service_dependency


def build_ledger_router(kind: LedgerKind) -> APIRouter:
    router = APIRouter()
    get_service = ledger_service_dependency(kind)
    noun = kind.value

    @router.post(
        "",
        response_model=LedgerEntry,
        status_code=status.HTTP_201_CREATED,
        summary=f"Add an {noun}",
    )
    async def create_entry(
        payload: LedgerEntryCreate,
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> LedgerEntry:
        return await service.create(current_user.id, payload)

    @router.get("", response_model=List[LedgerEntry], summary=f"List your {noun} entries")
    async def list_entries(
        sort: Optional[str] = Query(None, description="amount-asc, amount-desc, date-asc or date-desc (default)"),
        category: Optional[str] = Query(None),
        start_date: Optional[datetime] = Query(None, alias="startDate"),
        end_date: Optional[datetime] = Query(None, alias="endDate"),
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> List[LedgerEntry]:
        """Return the caller's entries.

        Filters combine: ``category`` is an exact match and
        ``startDate``/``endDate`` are inclusive date bounds.
        """
        filters = LedgerFilters(
            category=category,
            start_date=start_date,
            end_date=end_date,
            sort=SortOrder.parse(sort),
        )
        return await service.list(current_user.id, filters)

    # Declared before "/{entry_id}" so "stats" is not taken for an id.
    @router.get("/stats/summary", response_model=LedgerSummary, summary=f"Summarise your {noun} entries")
    async def summary(
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> LedgerSummary:
        return await service.summary(current_user.id)

    @router.get("/{entry_id}", response_model=LedgerEntry)
    async def get_entry(
        entry_id: str,
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> LedgerEntry:
        return await service.get_one(current_user.id, entry_id)

    @router.put("/{entry_id}", response_model=LedgerEntry)
    async def update_entry(
        entry_id: str,
        payload: LedgerEntryUpdate,
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> LedgerEntry:
        """Update some fields of an entry.

        Empty strings and zero are ignored and keep the stored value.
        """
        return await service.update(current_user.id, entry_id, payload)

    @router.delete("/{entry_id}", response_model=MessageResponse)
    async def delete_entry(
        entry_id: str,
        current_user: UserRecord = Depends(get_current_user),
        service: LedgerService = Depends(get_service),
    ) -> MessageResponse:
        return await service.remove(current_user.id, entry_id)

    return router


income_router = build_ledger_router(LedgerKind.INCOME)
expense_router = build_ledger_router(LedgerKind.EXPENSE)
