"""
Tests for the user request handlers (UserService) against the in-memory store.
"""
import pytest

from user_accounts_api.app.core.errors import AppError, ErrorType, RepositoryError
from user_accounts_api.app.core.security import verify_password
from user_accounts_api.app.repositories import InMemoryUserRepository, MutationResult
from user_accounts_api.app.services.user_service import UserService


async def _register(service, name="A", email="a@x.com", password="p1"):
    await service.create_user(name, email, password, password)
    user = await service.repository.find_by_email(email)
    return user.id


@pytest.mark.asyncio
async def test_list_users_empty(service):
    assert await service.list_users() == []


@pytest.mark.asyncio
async def test_list_users_hides_passwords(service):
    await _register(service, "A", "a@x.com")
    await _register(service, "B", "b@x.com")

    users = await service.list_users()
    assert [u.email for u in users] == ["a@x.com", "b@x.com"]
    assert all("password" not in u.model_dump() for u in users)


@pytest.mark.asyncio
async def test_get_unknown_user_is_unprocessable(service):
    with pytest.raises(AppError) as exc:
        await service.get_user("does-not-exist")
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY
    assert exc.value.message == "Unknown user"


@pytest.mark.asyncio
async def test_get_user_returns_record(service):
    user_id = await _register(service)
    user = await service.get_user(user_id)
    assert (user.id, user.name, user.email) == (user_id, "A", "a@x.com")


@pytest.mark.asyncio
async def test_create_user_returns_only_name_and_email(service):
    created = await service.create_user("A", "a@x.com", "p1", "p1")
    assert created.model_dump() == {"name": "A", "email": "a@x.com"}


@pytest.mark.asyncio
async def test_create_user_stores_hash_not_plaintext(service, repository):
    await service.create_user("A", "a@x.com", "p1", "p1")
    stored = await repository.find_by_email("a@x.com")
    assert stored.password != "p1"
    assert verify_password("p1", stored.password)


@pytest.mark.asyncio
async def test_create_user_duplicate_email(service, repository):
    await service.create_user("A", "a@x.com", "p1", "p1")
    with pytest.raises(AppError) as exc:
        await service.create_user("Other", "a@x.com", "p2", "p2")
    assert exc.value.kind is ErrorType.EMAIL_ALREADY_TAKEN
    assert len(await repository.get_users()) == 1


@pytest.mark.asyncio
async def test_create_user_password_mismatch(service, repository):
    with pytest.raises(AppError) as exc:
        await service.create_user("A", "a@x.com", "p1", "p2")
    assert exc.value.kind is ErrorType.INVALID_PASSWORD
    assert await repository.get_users() == []


@pytest.mark.asyncio
async def test_create_user_email_check_runs_before_password_check(service):
    await service.create_user("A", "a@x.com", "p1", "p1")
    with pytest.raises(AppError) as exc:
        await service.create_user("A", "a@x.com", "p1", "mismatch")
    assert exc.value.kind is ErrorType.EMAIL_ALREADY_TAKEN


class _BrokenCreateRepository(InMemoryUserRepository):
    def __init__(self, outcome):
        super().__init__()
        self.outcome = outcome

    async def create_user(self, name, email, password):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [None, RepositoryError("disk full")])
async def test_create_user_persistence_failure(outcome):
    service = UserService(_BrokenCreateRepository(outcome))
    with pytest.raises(AppError) as exc:
        await service.create_user("A", "a@x.com", "p1", "p1")
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY
    assert exc.value.message == "Failed to create user"


@pytest.mark.asyncio
async def test_update_user(service, repository):
    user_id = await _register(service)
    result = await service.update_user(user_id, "Renamed", "new@x.com")
    assert result.id == user_id

    stored = await repository.get_user(user_id)
    assert (stored.name, stored.email) == ("Renamed", "new@x.com")


@pytest.mark.asyncio
async def test_update_user_email_of_another_user(service, repository):
    first = await _register(service, "A", "a@x.com")
    await _register(service, "B", "b@x.com")

    with pytest.raises(AppError) as exc:
        await service.update_user(first, "A", "b@x.com")
    assert exc.value.kind is ErrorType.EMAIL_ALREADY_TAKEN
    assert (await repository.get_user(first)).email == "a@x.com"


@pytest.mark.asyncio
async def test_update_user_keeping_own_email(service):
    user_id = await _register(service)
    result = await service.update_user(user_id, "Only name changed", "a@x.com")
    assert result.id == user_id
    assert (await service.get_user(user_id)).name == "Only name changed"


@pytest.mark.asyncio
async def test_update_unknown_user(service):
    with pytest.raises(AppError) as exc:
        await service.update_user("missing", "A", "a@x.com")
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY
    assert exc.value.message == "Failed to update user"


@pytest.mark.asyncio
async def test_update_password(service, repository):
    user_id = await _register(service, password="old")
    result = await service.update_password(user_id, "old", "new", "new")
    assert result.id == user_id

    stored = await repository.get_user(user_id)
    assert verify_password("new", stored.password)
    assert not verify_password("old", stored.password)


@pytest.mark.asyncio
async def test_update_password_wrong_current(service, repository):
    user_id = await _register(service, password="old")
    before = (await repository.get_user(user_id)).password

    with pytest.raises(AppError) as exc:
        await service.update_password(user_id, "wrong", "new", "new")
    assert exc.value.kind is ErrorType.INVALID_PASSWORD
    assert exc.value.message == "Password is incorrect!"
    assert (await repository.get_user(user_id)).password == before


@pytest.mark.asyncio
async def test_update_password_unknown_user(service):
    with pytest.raises(AppError) as exc:
        await service.update_password("missing", "old", "new", "new")
    assert exc.value.kind is ErrorType.INVALID_PASSWORD


@pytest.mark.asyncio
async def test_update_password_must_differ(service):
    user_id = await _register(service, password="same")
    with pytest.raises(AppError) as exc:
        await service.update_password(user_id, "same", "same", "same")
    assert exc.value.kind is ErrorType.INVALID_PASSWORD
    assert "different than your old one" in exc.value.message


@pytest.mark.asyncio
async def test_update_password_confirmation_mismatch(service):
    user_id = await _register(service, password="old")
    with pytest.raises(AppError) as exc:
        await service.update_password(user_id, "old", "new", "other")
    assert exc.value.kind is ErrorType.INVALID_PASSWORD
    assert "password match" in exc.value.message


class _NoEffectRepository(InMemoryUserRepository):
    async def update_password(self, user_id, password):
        return MutationResult(matched_count=0, modified_count=0)


@pytest.mark.asyncio
async def test_update_password_without_effect():
    service = UserService(_NoEffectRepository())
    user_id = await _register(service, password="old")
    with pytest.raises(AppError) as exc:
        await service.update_password(user_id, "old", "new", "new")
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_delete_user_twice(service, repository):
    user_id = await _register(service)

    result = await service.delete_user(user_id)
    assert result.id == user_id
    assert await repository.get_user(user_id) is None

    with pytest.raises(AppError) as exc:
        await service.delete_user(user_id)
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY
    assert exc.value.message == "Failed to delete user"


class _FailingDeleteRepository(InMemoryUserRepository):
    async def delete_user(self, user_id):
        raise RepositoryError("connection lost")


@pytest.mark.asyncio
async def test_delete_user_store_error():
    service = UserService(_FailingDeleteRepository())
    with pytest.raises(AppError) as exc:
        await service.delete_user("any")
    assert exc.value.kind is ErrorType.UNPROCESSABLE_ENTITY
