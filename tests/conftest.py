"""
Pytest configuration and shared fixtures for the User Accounts API tests
"""
import os

import pytest

# Set test environment before importing the app: fast hashing and no
# database file created by the module-level application.
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from fastapi.testclient import TestClient  # noqa: E402

from user_accounts_api.app.main import create_app  # noqa: E402
from user_accounts_api.app.repositories import InMemoryUserRepository, SQLiteUserRepository  # noqa: E402
from user_accounts_api.app.services.user_service import UserService  # noqa: E402


@pytest.fixture
def repository():
    """Empty in-memory user store"""
    return InMemoryUserRepository()


@pytest.fixture
def sqlite_repository(tmp_path):
    """SQLite user store on a fresh temporary database file"""
    repo = SQLiteUserRepository(str(tmp_path / "users.db"))
    repo.init_schema()
    return repo


@pytest.fixture(params=["memory", "sqlite"])
def any_repository(request, tmp_path):
    """Each repository implementation in turn, for contract tests"""
    if request.param == "memory":
        return InMemoryUserRepository()
    repo = SQLiteUserRepository(str(tmp_path / "contract.db"))
    repo.init_schema()
    return repo


@pytest.fixture
def service(repository):
    return UserService(repository)


@pytest.fixture
def client(repository):
    """Test client for an application backed by ``repository``"""
    app = create_app(repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api():
    """Prefix under which the v1 routes are mounted"""
    from user_accounts_api.app.core.config import settings
    return settings.api_prefix
