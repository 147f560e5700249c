"""User Service — business rules for the user resource: validation, existence, derived fields.

Invariants:
    - Validation runs before any repository call; invalid DTOs never reach a write
    - UserNotExistsError becomes UserNotFoundError in get_user and update_user only
    - create assigns id (uuid4) and created_at (UTC now); updated_at stays None
    - update replaces first/last name and sets updated_at; birthday and
      created_at are never changed, even when the DTO carries a birthday
    - delete has no existence check; deleting a missing row is success
    - Nothing is retried; a failed storage call surfaces immediately

Design Decisions:
    - update_user ignores dto.birthday (create consumes three fields, update two).
      Kept as observed pending clarification of the intended contract
    - Write failure in update_user propagates unwrapped; other storage failures
      are wrapped as OperationError with the operation name
    - clock and id_factory injectable so tests can pin timestamps and ids
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from user_service.core.domain_types import ErrorCode, User, UserId
from user_service.core.enforce_user_input import find_missing_field
from user_service.core.errors import (
    OperationError, UserNotExistsError, UserNotFoundError, UserValidationError,
)
from user_service.core.repository_protocols import UserInputLike, UserRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserService:
    """Orchestrates user operations over a UserRepository."""

    def __init__(
        self,
        repo: UserRepository,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], UUID] = uuid.uuid4,
    ):
        self._repo = repo
        self._clock = clock
        self._id_factory = id_factory

    async def get_user(self, user_id: UserId) -> User:
        try:
            return await self._repo.get(user_id)
        except UserNotExistsError:
            logger.warning(
                "user not found",
                extra={"user_id": user_id, "error_code": ErrorCode.NOT_FOUND.value},
            )
            raise UserNotFoundError()
        except Exception as e:
            logger.error(f"could not get user: {e}", extra={"user_id": user_id})
            raise

    async def list_users(self) -> list[User]:
        try:
            return await self._repo.list()
        except Exception as e:
            logger.error(f"could not fetch users: {e}")
            raise OperationError("list", e) from e

    async def create_user(self, dto: UserInputLike) -> User:
        self._validate(dto)

        user = User(
            id=UserId(self._id_factory()),
            first_name=dto.first_name,
            last_name=dto.last_name,
            birthday=dto.birthday,
            created_at=self._clock(),
        )
        try:
            await self._repo.create(user)
        except Exception as e:
            logger.error(f"could not create user: {e}", extra={"user_id": user.id})
            raise OperationError("could not create user", e) from e
        logger.info("user created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: UserId, dto: UserInputLike) -> User:
        self._validate(dto)

        try:
            user = await self._repo.get(user_id)
        except UserNotExistsError:
            logger.warning(
                "user not found",
                extra={"user_id": user_id, "error_code": ErrorCode.NOT_FOUND.value},
            )
            raise UserNotFoundError()
        except Exception as e:
            logger.error(f"could not get user: {e}", extra={"user_id": user_id})
            raise OperationError("could not get user", e) from e

        user.first_name = dto.first_name
        user.last_name = dto.last_name
        user.updated_at = self._clock()

        try:
            await self._repo.update(user)
        except Exception as e:
            logger.error(f"update user error: {e}", extra={"user_id": user_id})
            raise
        return user

    async def delete_user(self, user_id: UserId) -> None:
        try:
            await self._repo.delete(user_id)
        except Exception as e:
            logger.error(f"could not delete user: {e}", extra={"user_id": user_id})
            raise OperationError("delete user", e) from e

    def _validate(self, dto: UserInputLike) -> None:
        message = find_missing_field(dto)
        if message is not None:
            logger.warning(
                f"dto validation error: {message}",
                extra={"error_code": ErrorCode.VALIDATION_ERROR.value},
            )
            raise UserValidationError(message)
