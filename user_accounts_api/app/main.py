"""
Main entrypoint for the User Accounts API.

This module assembles the FastAPI application: it sets up logging,
installs the user repository, registers the shared error handlers and
includes versioned routers.  The application is instantiated at module
import time as ``app`` so it can be served directly, e.g.::

    uvicorn user_accounts_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .repositories import SQLiteUserRepository, UserRepository, build_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Prepare the user store before the first request is served."""
    store = app.state.user_repository
    if isinstance(store, SQLiteUserRepository):
        version = store.init_schema()
        logger.info("User store ready (schema version %d)", version)
    else:
        logger.info("User store ready (%s)", type(store).__name__)
    yield


def create_app(repository: Optional[UserRepository] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    repository : Optional[UserRepository]
        Storage for user records.  When omitted, the backend named by
        ``settings.storage_backend`` is built.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.user_repository = repository if repository is not None else build_repository()

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


# Created at import time so that uvicorn can discover it.
app = create_app()
