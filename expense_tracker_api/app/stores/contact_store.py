"""Message store: persistence of contact messages."""

import sqlite3
from typing import List, Optional

from ..core.db import Database, from_db_timestamp, new_id, to_db_timestamp, utcnow
from ..schemas.contact import STATUS_PENDING, ContactMessage, ContactWithSubmitter, Submitter


CONTACT_COLUMNS = "id, user_id, name, email, subject, message, status, created_at, updated_at"


def _contact_fields(row: sqlite3.Row) -> dict:
    return {
        "id": row["id"],
        "user_id": row["user_id"],
        "name": row["name"],
        "email": row["email"],
        "subject": row["subject"],
        "message": row["message"],
        "status": row["status"],
        "created_at": from_db_timestamp(row["created_at"]),
        "updated_at": from_db_timestamp(row["updated_at"]),
    }


class ContactStore:
    """Reads and writes rows of the ``contacts`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, owner_id: str, name: str, email: str, subject: str, message: str) -> ContactMessage:
        contact_id = new_id()
        now = to_db_timestamp(utcnow())
        with self.db.cursor() as cursor:
            cursor.execute(
                f"INSERT INTO contacts ({CONTACT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (contact_id, owner_id, name, email, subject, message, STATUS_PENDING, now, now),
            )
        return self.get(contact_id)

    def get(self, contact_id: str) -> Optional[ContactMessage]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {CONTACT_COLUMNS} FROM contacts WHERE id = ?", (contact_id,)
            ).fetchone()
        return ContactMessage(**_contact_fields(row)) if row else None

    def list_for_owner(self, owner_id: str) -> List[ContactMessage]:
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {CONTACT_COLUMNS} FROM contacts WHERE user_id = ? "
                "ORDER BY created_at DESC, rowid DESC",
                (owner_id,),
            ).fetchall()
        return [ContactMessage(**_contact_fields(row)) for row in rows]

    def list_with_submitters(self) -> List[ContactWithSubmitter]:
        """Return every message, newest first, with the submitting user joined in."""
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT c.id, c.user_id, c.name, c.email, c.subject, c.message, c.status,
                       c.created_at, c.updated_at,
                       u.id AS submitter_id, u.name AS submitter_name, u.email AS submitter_email
                FROM contacts c
                LEFT JOIN users u ON u.id = c.user_id
                ORDER BY c.created_at DESC, c.rowid DESC
                """
            ).fetchall()
        contacts = []
        for row in rows:
            submitter = None
            if row["submitter_id"] is not None:
                submitter = Submitter(
                    id=row["submitter_id"],
                    name=row["submitter_name"],
                    email=row["submitter_email"],
                )
            contacts.append(ContactWithSubmitter(**_contact_fields(row), user=submitter))
        return contacts

    def update_status(self, contact_id: str, status: str) -> Optional[ContactMessage]:
        with self.db.cursor() as cursor:
            cursor.execute(
                "UPDATE contacts SET status = ?, updated_at = ? WHERE id = ?",
                (status, to_db_timestamp(utcnow()), contact_id),
            )
        return self.get(contact_id)

    def delete_by_owner(self, owner_id: str) -> int:
        with self.db.cursor() as cursor:
            cursor.execute("DELETE FROM contacts WHERE user_id = ?", (owner_id,))
            return cursor.rowcount

    def count(self, status: Optional[str] = None) -> int:
        with self.db.cursor() as cursor:
            if status is None:
                return cursor.execute("SELECT COUNT(*) FROM contacts").fetchone()[0]
            return cursor.execute("SELECT COUNT(*) FROM contacts WHERE status = ?", (status,)).fetchone()[0]
