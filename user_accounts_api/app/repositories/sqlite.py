"""
SQLite‑backed user repository.

Each method opens its own connection, runs one statement and closes the
connection again.  ``sqlite3.Error`` is re‑raised as
:class:`RepositoryError` so callers never depend on the driver.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_cursor, get_database_path, init_db
from ..core.errors import RepositoryError
from .base import MutationResult, UserRecord, UserRepository, new_user_id

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, email, password"


def _to_record(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password=row["password"],
    )


class SQLiteUserRepository(UserRepository):
    """User persistence on the ``users`` table created by ``core.db``."""

    def __init__(self, database_url: Optional[str] = None) -> None:
        # ``None`` means settings.database_url, resolved per connection.
        # Resolving here rejects ``:memory:`` before the app starts.
        get_database_path(database_url)
        self.database_url = database_url

    def init_schema(self) -> int:
        return init_db(self.database_url)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            with get_cursor(self.database_url) as cursor:
                row = cursor.execute(
                    f"SELECT {_COLUMNS} FROM users WHERE email = ? LIMIT 1",
                    (email,),
                ).fetchone()
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to look up user by email: {e}") from e
        return _to_record(row) if row else None

    async def get_users(self) -> List[UserRecord]:
        try:
            with get_cursor(self.database_url) as cursor:
                rows = cursor.execute(
                    f"SELECT {_COLUMNS} FROM users ORDER BY created_at, rowid"
                ).fetchall()
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to list users: {e}") from e
        return [_to_record(row) for row in rows]

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        try:
            with get_cursor(self.database_url) as cursor:
                row = cursor.execute(
                    f"SELECT {_COLUMNS} FROM users WHERE id = ?",
                    (user_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to load user {user_id}: {e}") from e
        return _to_record(row) if row else None

    async def create_user(self, name: str, email: str, password: str) -> Optional[UserRecord]:
        record = UserRecord(id=new_user_id(), name=name, email=email, password=password)
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute(
                    "INSERT INTO users (id, name, email, password) VALUES (?, ?, ?, ?)",
                    (record.id, record.name, record.email, record.password),
                )
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to create user: {e}") from e
        logger.debug("Inserted user %s", record.id)
        return record

    async def update_user(self, user_id: str, name: str, email: str) -> MutationResult:
        return self._update(
            "UPDATE users SET name = ?, email = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (name, email, user_id),
        )

    async def update_password(self, user_id: str, password: str) -> MutationResult:
        return self._update(
            "UPDATE users SET password = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (password, user_id),
        )

    async def delete_user(self, user_id: str) -> MutationResult:
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
                deleted = cursor.rowcount
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to delete user {user_id}: {e}") from e
        return MutationResult(matched_count=deleted, modified_count=deleted)

    def _update(self, sql: str, params: tuple) -> MutationResult:
        try:
            with get_cursor(self.database_url) as cursor:
                cursor.execute(sql, params)
                # SQLite counts every row matched by the WHERE clause as
                # changed, and updated_at always moves.
                changed = cursor.rowcount
        except sqlite3.Error as e:
            raise RepositoryError(f"Failed to update user: {e}") from e
        return MutationResult(matched_count=changed, modified_count=changed)
