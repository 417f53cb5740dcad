"""
User endpoints for API v1.

Thin HTTP wrappers around :class:`UserService`.  Validation failures
surface as ``AppError`` and are rendered by the exception handlers
registered in ``core.errors``; nothing here builds an error response.
"""

from typing import List

from fastapi import APIRouter, Depends

from user_accounts_api.app.api.deps import get_user_service
from user_accounts_api.app.schemas.user import (
    PasswordChange,
    UserCreate,
    UserCreated,
    UserId,
    UserRead,
    UserUpdate,
)
from user_accounts_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return every user."""
    return await service.list_users()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    """Return one user; unknown ids yield ``UNPROCESSABLE_ENTITY``."""
    return await service.get_user(user_id)


@router.post("", response_model=UserCreated)
async def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)) -> UserCreated:
    """Register a user and echo back its name and email."""
    return await service.create_user(
        payload.name,
        payload.email,
        payload.password,
        payload.password_confirm,
    )


@router.put("/{user_id}", response_model=UserId)
@router.patch("/{user_id}", response_model=UserId)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserId:
    """Replace a user's name and email."""
    return await service.update_user(user_id, payload.name, payload.email)


@router.put("/{user_id}/password", response_model=UserId)
async def update_password(
    user_id: str,
    payload: PasswordChange,
    service: UserService = Depends(get_user_service),
) -> UserId:
    """Change a user's password after checking the current one."""
    return await service.update_password(
        user_id,
        payload.current_password,
        payload.new_password,
        payload.password_confirm,
    )


@router.delete("/{user_id}", response_model=UserId)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserId:
    return await service.delete_user(user_id)
