"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - One parameterized statement (one round trip) per call, writes commit immediately
    - get raises UserNotExistsError on zero rows; nothing else is classified here
    - update and delete never check existence; zero affected rows is success
    - Every SQLAlchemyError is wrapped as OperationError("query" | "exec" | "commit")
    - Returned datetimes are UTC-aware even on backends that drop tzinfo

Design Decisions:
    - Core statements against the mapped table, rows mapped to the User dataclass:
      callers never hold ORM instances or lazy state
"""

from datetime import datetime, timezone

from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.domain_types import User, UserId
from user_service.core.errors import OperationError, UserNotExistsError
from user_service.models.user import UserRecord

_COLUMNS = (
    UserRecord.id,
    UserRecord.first_name,
    UserRecord.last_name,
    UserRecord.birthday,
    UserRecord.created_at,
    UserRecord.updated_at,
)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_user(row) -> User:
    return User(
        id=UserId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        birthday=row.birthday,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlUserRepository:
    """Persistence gateway for users over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list(self) -> list[User]:
        try:
            result = await self._db.execute(select(*_COLUMNS))
            rows = result.all()
        except SQLAlchemyError as e:
            raise OperationError("query", e) from e
        return [_to_user(row) for row in rows]

    async def get(self, user_id: UserId) -> User:
        try:
            result = await self._db.execute(
                select(*_COLUMNS).where(UserRecord.id == user_id),
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            raise OperationError("exec", e) from e
        if row is None:
            raise UserNotExistsError(str(user_id))
        return _to_user(row)

    async def create(self, user: User) -> None:
        await self._execute_write(
            insert(UserRecord).values(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                birthday=user.birthday,
                created_at=user.created_at,
            ),
        )

    async def update(self, user: User) -> None:
        await self._execute_write(
            update(UserRecord)
            .where(UserRecord.id == user.id)
            .values(
                first_name=user.first_name,
                last_name=user.last_name,
                birthday=user.birthday,
                updated_at=user.updated_at,
            ),
        )

    async def delete(self, user_id: UserId) -> None:
        await self._execute_write(
            delete(UserRecord).where(UserRecord.id == user_id),
        )

    async def _execute_write(self, statement) -> None:
        try:
            await self._db.execute(statement)
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise OperationError("exec", e) from e
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise OperationError("commit", e) from e
