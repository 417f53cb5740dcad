"""
Persistence operations for user records.

``UserRepository`` is the storage contract the request handlers depend
on; ``SQLiteUserRepository`` and ``InMemoryUserRepository`` implement
it.  ``build_repository`` picks one from the application settings.
"""

from typing import Optional

from ..core.config import settings
from .base import MutationResult, UserRecord, UserRepository
from .memory import InMemoryUserRepository
from .sqlite import SQLiteUserRepository

__all__ = [
    "MutationResult",
    "UserRecord",
    "UserRepository",
    "InMemoryUserRepository",
    "SQLiteUserRepository",
    "build_repository",
]


def build_repository(backend: Optional[str] = None) -> UserRepository:
    """Return the repository named by ``backend`` (default: settings)."""
    backend = (backend or settings.storage_backend).lower()
    if backend == "memory":
        return InMemoryUserRepository()
    if backend == "sqlite":
        return SQLiteUserRepository()
    raise ValueError(f"Unknown storage backend: {backend!r}")
