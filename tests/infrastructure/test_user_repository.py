"""User Repository — SQLAlchemy gateway against in-memory SQLite.

Tests cover:
    - list on an empty table is an empty list
    - create then get returns every field, datetimes UTC-aware
    - get on a missing id raises UserNotExistsError
    - update replaces mutable columns only; missing id is not an error
    - delete removes the row; missing id is not an error
    - SQLAlchemy failures are wrapped as OperationError
"""

import pytest
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import text

from user_service.core.domain_types import User
from user_service.core.errors import OperationError, UserNotExistsError
from user_service.infrastructure.user_repository import SqlUserRepository

CREATED = datetime(2022, 11, 17, 20, 0, tzinfo=timezone.utc)


def _user(**overrides) -> User:
    fields = dict(
        id=uuid4(), first_name="Elon", last_name="Musk",
        birthday="1971-06-28", created_at=CREATED,
    )
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def repo(test_db):
    return SqlUserRepository(test_db)


async def test_list_empty(repo):
    assert await repo.list() == []


async def test_create_then_get(repo):
    user = _user()
    await repo.create(user)

    fetched = await repo.get(user.id)
    assert fetched == user
    assert fetched.created_at.tzinfo is not None
    assert fetched.updated_at is None


async def test_create_ignores_updated_at(repo):
    user = _user(updated_at=CREATED)
    await repo.create(user)
    assert (await repo.get(user.id)).updated_at is None


async def test_list_returns_all_rows(repo):
    first, second = _user(), _user(first_name="Ada")
    await repo.create(first)
    await repo.create(second)
    users = await repo.list()
    assert {u.id for u in users} == {first.id, second.id}


async def test_get_missing_raises_not_exists(repo):
    with pytest.raises(UserNotExistsError):
        await repo.get(uuid4())


async def test_update_replaces_mutable_columns(repo):
    user = _user()
    await repo.create(user)
    updated_at = datetime(2022, 11, 18, tzinfo=timezone.utc)
    await repo.update(
        User(
            id=user.id, first_name="Yuri", last_name="Gagarin",
            birthday="1934-03-09", created_at=datetime.now(timezone.utc),
            updated_at=updated_at,
        ),
    )

    fetched = await repo.get(user.id)
    assert (fetched.first_name, fetched.last_name) == ("Yuri", "Gagarin")
    assert fetched.birthday == "1934-03-09"
    assert fetched.updated_at == updated_at
    assert fetched.created_at == CREATED


async def test_update_missing_row_is_not_an_error(repo):
    await repo.update(_user(updated_at=CREATED))
    assert await repo.list() == []


async def test_delete_removes_row(repo):
    user = _user()
    await repo.create(user)
    await repo.delete(user.id)
    with pytest.raises(UserNotExistsError):
        await repo.get(user.id)


async def test_delete_missing_row_is_not_an_error(repo):
    await repo.delete(uuid4())
    await repo.delete(uuid4())


async def test_duplicate_id_surfaces_as_operation_error(repo):
    user = _user()
    await repo.create(user)
    with pytest.raises(OperationError) as exc_info:
        await repo.create(user)
    assert exc_info.value.operation == "exec"


async def test_query_failure_wrapped(repo, test_db):
    await test_db.execute(text("DROP TABLE users"))
    await test_db.commit()
    with pytest.raises(OperationError) as exc_info:
        await repo.list()
    assert exc_info.value.operation == "query"
