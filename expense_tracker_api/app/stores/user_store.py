"""
Credential store: persistence of user accounts.

All statements are parameterised.  Rows are converted to
``UserRecord`` objects, which carry the password hash; callers are
responsible for never returning that model to clients.
"""

import sqlite3
from typing import List, Optional

from ..core.db import Database, from_db_timestamp, new_id, to_db_timestamp, utcnow
from ..core.errors import Conflict
from ..schemas.user import Role, UserRecord


USER_COLUMNS = "id, name, email, password, role, created_at, updated_at"


def row_to_user(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        password_hash=row["password"],
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


class UserStore:
    """Reads and writes rows of the ``users`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self.db.cursor() as cursor:
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        return row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        # Emails are matched exactly, as stored.
        with self.db.cursor() as cursor:
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE email = ?", (email,)).fetchone()
        return row_to_user(row) if row else None

    def create(self, name: str, email: str, password_hash: str, role: Role) -> UserRecord:
        user_id = new_id()
        now = to_db_timestamp(utcnow())
        try:
            with self.db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (id, name, email, password, role, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (user_id, name, email, password_hash, role.value, now, now),
                )
        except sqlite3.IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            raise Conflict("User already exists with this email") from exc
        return self.get_by_id(user_id)

    def list_all(self) -> List[UserRecord]:
        """Return every user, newest first."""
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
        return [row_to_user(row) for row in rows]

    def set_password(self, email: str, password_hash: str) -> bool:
        with self.db.cursor() as cursor:
            cursor.execute(
                "UPDATE users SET password = ?, updated_at = ? WHERE email = ?",
                (password_hash, to_db_timestamp(utcnow()), email),
            )
            return cursor.rowcount > 0

    def delete(self, user_id: str) -> bool:
        with self.db.cursor() as cursor:
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            return cursor.rowcount > 0

    def count(self) -> int:
        with self.db.cursor() as cursor:
            return cursor.execute("SELECT COUNT(*) FROM users").fetchone()[0]
