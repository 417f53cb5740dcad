"""
In‑memory user repository.

Stores records in a dict keyed by id, preserving insertion order.
Records are copied on the way in and out so callers cannot change
stored state behind the repository's back.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from .base import MutationResult, UserRecord, UserRepository, new_user_id


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.email == email:
                return replace(user)
        return None

    async def get_users(self) -> List[UserRecord]:
        return [replace(user) for user in self._users.values()]

    async def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return replace(user) if user else None

    async def create_user(self, name: str, email: str, password: str) -> Optional[UserRecord]:
        record = UserRecord(id=new_user_id(), name=name, email=email, password=password)
        self._users[record.id] = record
        return replace(record)

    async def update_user(self, user_id: str, name: str, email: str) -> MutationResult:
        user = self._users.get(user_id)
        if user is None:
            return MutationResult()
        modified = int((user.name, user.email) != (name, email))
        user.name = name
        user.email = email
        return MutationResult(matched_count=1, modified_count=modified)

    async def update_password(self, user_id: str, password: str) -> MutationResult:
        user = self._users.get(user_id)
        if user is None:
            return MutationResult()
        modified = int(user.password != password)
        user.password = password
        return MutationResult(matched_count=1, modified_count=modified)

    async def delete_user(self, user_id: str) -> MutationResult:
        if self._users.pop(user_id, None) is None:
            return MutationResult()
        return MutationResult(matched_count=1, modified_count=1)
