"""
Ledger store: persistence of income and expense entries.

One ``LedgerStore`` class serves both kinds; the ``LedgerKind`` given
at construction selects the table.  Table names come from the enum,
never from client input, so interpolating them into SQL is safe.
"""

import sqlite3
from datetime import datetime
from typing import List, Optional

from ..core.db import Database, from_db_timestamp, new_id, to_db_timestamp, utcnow
from ..schemas.ledger import LedgerEntry, LedgerFilters, LedgerKind, SortOrder


ENTRY_COLUMNS = "id, user_id, category, amount, description, date, created_at, updated_at"

ORDER_BY = {
    SortOrder.AMOUNT_ASC: "amount ASC",
    SortOrder.AMOUNT_DESC: "amount DESC",
    SortOrder.DATE_ASC: "date ASC",
    SortOrder.DATE_DESC: "date DESC",
}


def row_to_entry(row: sqlite3.Row) -> LedgerEntry:
    return LedgerEntry(
        id=row["id"],
        user_id=row["user_id"],
        category=row["category"],
        amount=row["amount"],
        description=row["description"],
        date=from_db_timestamp(row["date"]),
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


class LedgerStore:
    """Reads and writes rows of the ``incomes`` or ``expenses`` table."""

    def __init__(self, db: Database, kind: LedgerKind) -> None:
        self.db = db
        self.kind = kind
        self.table = kind.table

    def create(
        self,
        owner_id: str,
        category: str,
        amount: float,
        description: str,
        date: datetime,
    ) -> LedgerEntry:
        entry_id = new_id()
        now = to_db_timestamp(utcnow())
        # The re-read shares the transaction, so a row that cannot be read
        # back is not committed.
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO {self.table} ({ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (entry_id, owner_id, category, amount, description, to_db_timestamp(date), now, now),
            )
            return self.get(entry_id)

    def get(self, entry_id: str) -> Optional[LedgerEntry]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {ENTRY_COLUMNS} FROM {self.table} WHERE id = ?", (entry_id,)
            ).fetchone()
        return row_to_entry(row) if row else None

    def list_for_owner(self, owner_id: str, filters: Optional[LedgerFilters] = None) -> List[LedgerEntry]:
        """Return the owner's entries matching ``filters``.

        ``category`` is an exact match; ``start_date`` and ``end_date``
        are inclusive bounds on the entry date.
        """
        filters = filters or LedgerFilters()
        clauses = ["user_id = ?"]
        params: list = [owner_id]
        if filters.category:
            clauses.append("category = ?")
            params.append(filters.category)
        if filters.start_date:
            clauses.append("date >= ?")
            params.append(to_db_timestamp(filters.start_date))
        if filters.end_date:
            clauses.append("date <= ?")
            params.append(to_db_timestamp(filters.end_date))
        sql = (
            f"SELECT {ENTRY_COLUMNS} FROM {self.table} WHERE {' AND '.join(clauses)} "
            f"ORDER BY {ORDER_BY[filters.sort]}, rowid ASC"
        )
        with self.db.cursor() as cursor:
            rows = cursor.execute(sql, tuple(params)).fetchall()
        return [row_to_entry(row) for row in rows]

    def list_all(self) -> List[LedgerEntry]:
        with self.db.cursor() as cursor:
            rows = cursor.execute(f"SELECT {ENTRY_COLUMNS} FROM {self.table}").fetchall()
        return [row_to_entry(row) for row in rows]

    def update(
        self,
        entry_id: str,
        category: str,
        amount: float,
        description: str,
        date: datetime,
    ) -> LedgerEntry:
        with self.db.transaction() as cursor:
            cursor.execute(
                f"UPDATE {self.table} SET category = ?, amount = ?, description = ?, date = ?, updated_at = ? "
                "WHERE id = ?",
                (category, amount, description, to_db_timestamp(date), to_db_timestamp(utcnow()), entry_id),
            )
            return self.get(entry_id)

    def delete(self, entry_id: str) -> bool:
        with self.db.cursor() as cursor:
            cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (entry_id,))
            return cursor.rowcount > 0

    def delete_by_owner(self, owner_id: str) -> int:
        with self.db.cursor() as cursor:
            cursor.execute(f"DELETE FROM {self.table} WHERE user_id = ?", (owner_id,))
            return cursor.rowcount

    def count(self) -> int:
        with self.db.cursor() as cursor:
            return cursor.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()[0]
