"""
Pydantic schemas for ledger entries (incomes and expenses).

Both kinds share one shape.  ``LedgerKind`` names the kind and knows
the table it is stored in and the word used in client-facing
messages.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import Field

from .base import CamelModel


class LedgerKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def table(self) -> str:
        return "incomes" if self is LedgerKind.INCOME else "expenses"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SortOrder(str, Enum):
    AMOUNT_ASC = "amount-asc"
    AMOUNT_DESC = "amount-desc"
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Map a query string value to a sort order, newest first by default."""
        try:
            return cls(value)
        except ValueError:
            return cls.DATE_DESC


class LedgerEntry(CamelModel):
    id: str
    user_id: str
    category: str
    amount: float
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime


class LedgerEntryCreate(CamelModel):
    """Body of ``POST /income`` and ``POST /expense``.

    Required fields are checked by the ledger service so that missing
    values produce a single, readable message.
    """

    category: Optional[str] = Field(None, examples=["Food"])
    amount: Optional[float] = Field(None, allow_inf_nan=False, examples=[50])
    description: Optional[str] = Field(None, examples=["lunch"])
    date: Optional[datetime] = Field(None, examples=["2024-05-01T12:00:00Z"])


class LedgerEntryUpdate(CamelModel):
    """Partial update.  Falsy values keep the stored value."""

    category: Optional[str] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    description: Optional[str] = None
    date: Optional[datetime] = None


class LedgerFilters(CamelModel):
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort: SortOrder = SortOrder.DATE_DESC


class LedgerSummary(CamelModel):
    total: float
    count: int
    category_breakdown: Dict[str, float]
