"""
Storage contract for user records.

Every persistence operation maps to exactly one store call.  Lookups
return ``None`` (or an empty list) when nothing matches; updates and
deletes return a :class:`MutationResult` whose ``succeeded`` flag the
caller checks instead of relying on the truthiness of a driver object.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class UserRecord:
    """One persisted user.  ``password`` always holds a hash."""

    id: str
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an update or delete.

    For deletes both counts are the number of removed records.
    """

    matched_count: int = 0
    modified_count: int = 0

    @property
    def succeeded(self) -> bool:
        # Succeeds iff the operation found its target, even when the
        # new values equal the stored ones (modified_count == 0).
        return self.matched_count >= 1


class UserRepository(ABC):
    """Abstract set of user persistence operations."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    async def duplicate_email_check(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """Return ``True`` if another user already uses ``email``.

        A record whose id equals ``exclude_id`` does not count, so a user
        may keep their own address on update.

        Fails open: if the lookup raises, the error is logged and the
        email is reported as free so registration and profile updates
        stay available while the store misbehaves.
        """
        try:
            user = await self.find_by_email(email)
        except Exception:
            logger.exception("Error occurred while checking for duplicate email %s", email)
            return False
        return user is not None and user.id != exclude_id

    @abstractmethod
    async def get_users(self) -> List[UserRecord]:
        ...

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def create_user(self, name: str, email: str, password: str) -> Optional[UserRecord]:
        """Insert a user.  ``password`` must already be hashed."""

    @abstractmethod
    async def update_user(self, user_id: str, name: str, email: str) -> MutationResult:
        ...

    @abstractmethod
    async def update_password(self, user_id: str, password: str) -> MutationResult:
        """Replace the stored hash.  ``password`` must already be hashed."""

    @abstractmethod
    async def delete_user(self, user_id: str) -> MutationResult:
        ...


def new_user_id() -> str:
    """Generate a store identifier for a new user."""
    return uuid.uuid4().hex
