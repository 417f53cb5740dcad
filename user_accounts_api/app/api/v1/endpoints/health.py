"""
Health endpoint for API v1.

Reports the service name, version and configured storage backend so
deployments and load balancers can probe the process.
"""

from typing import Dict

from fastapi import APIRouter, Depends

from user_accounts_api.app.api.deps import get_repository
from user_accounts_api.app.core.config import settings
from user_accounts_api.app.repositories import UserRepository

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health(repository: UserRepository = Depends(get_repository)) -> Dict[str, str]:
    return {
        "status": "ok",
        "project": settings.project_name,
        "version": settings.api_version,
        "storage": type(repository).__name__,
    }
