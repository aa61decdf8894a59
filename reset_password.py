#!/usr/bin/env python3
"""
Reset a user's password in the Expense Tracker SQLite database.

This script does not read or reveal any existing password.  It stores
a new PBKDF2 hash for the account with the given email, using the
same hashing routine as the API.

Usage:
    python reset_password.py --db ./expense_tracker.db --email bob@example.com --password "NewPassw0rd!"

If --password is omitted, you will be prompted to enter it securely.
If --db is omitted, the ``DATABASE_URL`` setting is used.
"""

import argparse
import getpass
import os
import sys
from typing import List, Optional

from expense_tracker_api.app.core.config import settings
from expense_tracker_api.app.core.db import Database, resolve_database_path
from expense_tracker_api.app.core.errors import ValidationError
from expense_tracker_api.app.core.security import hash_password
from expense_tracker_api.app.services.validation import validate_password
from expense_tracker_api.app.stores.user_store import UserStore


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset an Expense Tracker user's password (SQLite).")
    ap.add_argument("--db", help="Path to the SQLite DB file (defaults to DATABASE_URL)")
    ap.add_argument("--email", required=True, help="Email of the account to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    # An explicit --db is relative to the caller's working directory; the
    # configured DATABASE_URL is relative to the project root, as for the API.
    db_path = os.path.abspath(args.db) if args.db else resolve_database_path(settings.database_url)
    if not os.path.exists(db_path):
        print(f"[!] DB not found: {db_path}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    try:
        validate_password(new_password)
    except ValidationError as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        return 1

    db = Database(db_path).connect()
    try:
        if not UserStore(db).set_password(args.email, hash_password(new_password)):
            print(f"[!] No user found with email: {args.email}", file=sys.stderr)
            return 2
    finally:
        db.close()
    print(f"[+] Password updated for user: {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
