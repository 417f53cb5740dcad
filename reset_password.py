#!/usr/bin/env python3
"""
Reset a user's password in the User Accounts SQLite database.

This script DOES NOT read or reveal any existing passwords.  It sets a
new password hash for the user with the given email, using the same
hashing as the API.

Exit codes: 0 updated, 1 bad input or unusable database, 2 unknown email.

Usage:
    python reset_password.py --db ./user_accounts_api/user_accounts.db --email jane@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import logging
import os
import sys
from typing import List, Optional

from user_accounts_api.app.core.errors import RepositoryError
from user_accounts_api.app.core.logging_config import setup_logging
from user_accounts_api.app.core.security import hash_password
from user_accounts_api.app.repositories import SQLiteUserRepository

logger = logging.getLogger("reset_password")


async def reset_password(repository: SQLiteUserRepository, email: str, new_password: str) -> bool:
    """Store a new hash for ``email``.  Returns ``False`` for unknown emails."""
    user = await repository.find_by_email(email)
    if not user:
        return False
    result = await repository.update_password(user.id, hash_password(new_password))
    return result.succeeded


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a user's password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./user_accounts_api/user_accounts.db)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    setup_logging("INFO")

    if not os.path.exists(args.db):
        logger.error("DB not found: %s", args.db)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        logger.error("Empty password is not allowed.")
        return 1

    repository = SQLiteUserRepository(os.path.abspath(args.db))
    try:
        updated = asyncio.run(reset_password(repository, args.email, new_password))
    except RepositoryError as e:
        logger.error("Cannot update %s: %s", args.db, e)
        return 1
    if not updated:
        logger.error("No user found with email: %s", args.email)
        return 2

    logger.info("Password updated for user: %s", args.email)
    return 0


if __name__ == "__main__":
    sys.exit(main())
