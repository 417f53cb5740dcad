"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Request

from ..repositories import UserRepository
from ..services.user_service import UserService


def get_repository(request: Request) -> UserRepository:
    """Return the repository installed on the application by ``create_app``."""
    return request.app.state.user_repository


def get_user_service(request: Request) -> UserService:
    return UserService(get_repository(request))
