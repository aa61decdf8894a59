"""
SQLite database integration and simple migration system.

The ``Database`` class owns the single process-wide connection to the
SQLite file.  It is opened once when the application starts, handed
to the stores explicitly and closed on shutdown.  ``cursor()`` yields
a cursor and commits on success or rolls back on error; calls nested
inside ``transaction()`` join the outer transaction instead of
committing on their own.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from fastapi import Request

from .errors import ValidationError


logger = logging.getLogger(__name__)

# The year is formatted separately: strftime does not zero-pad years before 1000.
TIMESTAMP_TAIL_FORMAT = "%m-%dT%H:%M:%S.%f"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'user',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS incomes (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            category TEXT NOT NULL,
            amount REAL NOT NULL,
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS expenses (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            category TEXT NOT NULL,
            amount REAL NOT NULL,
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS contacts (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            subject TEXT NOT NULL,
            message TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: owner indices for per-user listings and cascade deletes
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_incomes_user_id ON incomes(user_id);
        CREATE INDEX IF NOT EXISTS idx_expenses_user_id ON expenses(user_id);
        CREATE INDEX IF NOT EXISTS idx_contacts_user_id ON contacts(user_id);
        CREATE INDEX IF NOT EXISTS idx_contacts_status ON contacts(status);
        """,
    ),
]


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    """Serialise a datetime as naive UTC text.

    Naive datetimes are taken to be UTC already.  The fixed-width
    format, with a four-digit year, keeps lexicographic order equal to
    chronological order, which the date range filters rely on.  Aware
    datetimes that leave the supported range once shifted to UTC raise
    ``ValidationError``.
    """
    if value.tzinfo is not None:
        try:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as exc:
            raise ValidationError("Date is out of range") from exc
    return f"{value.year:04d}-{value.strftime(TIMESTAMP_TAIL_FORMAT)}"


def from_db_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged; relative
    paths are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Handle to the application's SQLite database."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None
        self._depth = 0

    def connect(self) -> "Database":
        if self._conn is not None:
            return self
        # The connection is created on the startup thread but used from
        # the event loop thread, hence check_same_thread=False.
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        self._conn = conn
        logger.info("Opened database %s", self.path)
        return self

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.info("Closed database %s", self.path)

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, committing when the outermost block exits cleanly."""
        conn = self.connection
        cur = conn.cursor()
        self._depth += 1
        try:
            yield cur
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                conn.rollback()
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                conn.commit()
        finally:
            cur.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Group several store calls into a single commit or rollback."""
        with self.cursor() as cur:
            yield cur

    def init_db(self) -> None:
        """Apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version and applies any newer entries of
        ``MIGRATIONS`` in order.
        """
        with self.cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    # executescript commits implicitly, so each migration is
                    # recorded right after it is applied.
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied migration %s", version)
                    current_version = version


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the database attached at startup."""
    return request.app.state.db
