"""
Business logic for users.

``UserService`` validates each request, delegates to a
:class:`~user_accounts_api.app.repositories.UserRepository` and raises
:class:`~user_accounts_api.app.core.errors.AppError` at the first
failing check.  Error formatting happens at the HTTP boundary, never
here.
"""

import logging
from typing import List, Optional

from ..core.errors import ErrorType, RepositoryError, error_responder
from ..core.security import hash_password, verify_password
from ..repositories import MutationResult, UserRecord, UserRepository
from ..schemas.user import UserCreated, UserId, UserRead

logger = logging.getLogger(__name__)


def _to_read(user: UserRecord) -> UserRead:
    return UserRead(id=user.id, name=user.name, email=user.email)


class UserService:
    """Request handlers for the user collection."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def list_users(self) -> List[UserRead]:
        """Return every user; no pagination or filtering."""
        users = await self.repository.get_users()
        return [_to_read(user) for user in users]

    async def get_user(self, user_id: str) -> UserRead:
        user = await self.repository.get_user(user_id)
        if not user:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, "Unknown user")
        return _to_read(user)

    async def create_user(self, name: str, email: str, password: str, password_confirm: str) -> UserCreated:
        """Register a user.

        Checks run in order: email already taken, then password
        confirmation, then the insert itself.  The password is hashed
        before it reaches the repository and is never echoed back.
        """
        if await self.repository.duplicate_email_check(email):
            raise error_responder(ErrorType.EMAIL_ALREADY_TAKEN, "This email has already been taken!")

        if password_confirm != password:
            raise error_responder(ErrorType.INVALID_PASSWORD, "Please make sure your password match!")

        try:
            created = await self.repository.create_user(name, email, hash_password(password))
        except RepositoryError:
            logger.exception("Creating user %s failed", email)
            created = None
        if not created:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, "Failed to create user")

        logger.info("Created user %s (%s)", created.id, email)
        return UserCreated(name=name, email=email)

    async def update_user(self, user_id: str, name: str, email: str) -> UserId:
        """Replace a user's name and email.

        The email may stay unchanged; it only conflicts when a different
        user already has it.
        """
        if await self.repository.duplicate_email_check(email, exclude_id=user_id):
            raise error_responder(ErrorType.EMAIL_ALREADY_TAKEN, "This email has already been taken!")

        result = await self._mutate("update user", self.repository.update_user(user_id, name, email))
        if not result.succeeded:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, "Failed to update user")

        logger.info("Updated user %s", user_id)
        return UserId(id=user_id)

    async def match_password(self, user_id: str, password: str) -> bool:
        """Return ``True`` if ``password`` matches the stored hash of ``user_id``."""
        user = await self.repository.get_user(user_id)
        if not user:
            return False
        return verify_password(password, user.password)

    async def update_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        password_confirm: str,
    ) -> UserId:
        if not await self.match_password(user_id, current_password):
            raise error_responder(ErrorType.INVALID_PASSWORD, "Password is incorrect!")

        if new_password == current_password:
            raise error_responder(
                ErrorType.INVALID_PASSWORD,
                "Please make sure your password is different than your old one!",
            )

        if password_confirm != new_password:
            raise error_responder(ErrorType.INVALID_PASSWORD, "Please make sure your password match!")

        result = await self._mutate(
            "change password",
            self.repository.update_password(user_id, hash_password(new_password)),
        )
        if not result.succeeded:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, "Failed to change password")

        logger.info("Changed password of user %s", user_id)
        return UserId(id=user_id)

    async def delete_user(self, user_id: str) -> UserId:
        result = await self._mutate("delete user", self.repository.delete_user(user_id))
        if not result.succeeded:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, "Failed to delete user")

        logger.info("Deleted user %s", user_id)
        return UserId(id=user_id)

    @staticmethod
    async def _mutate(action: str, operation) -> MutationResult:
        # A store failure during a write is reported like "no effect".
        try:
            result: Optional[MutationResult] = await operation
        except RepositoryError:
            logger.exception("Failed to %s", action)
            return MutationResult()
        return result or MutationResult()
