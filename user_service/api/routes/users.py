"""User Routes — /v1/users CRUD endpoints over the user service.

Invariants:
    - Per request: parse path id -> decode body -> call service -> encode envelope
    - A bad path id short-circuits before the body is read (400 INVALID_USER_ID)
    - A body that does not decode short-circuits before the service (400 INVALID_USER_DATA)
    - Success envelope is {"data": [...]}: list = all, get/create/update = one, delete = []
    - Create answers 201, every other success 200
    - Routes translate representation only; status policy lives on ServiceError

Design Decisions:
    - Body decoded in a dependency instead of a FastAPI body parameter, so the
      path id is always checked first and decode errors keep the {code, message} shape
    - get_user_service is the single wiring point; tests override it with fakes
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.api.error_handlers import describe_first_error
from user_service.core.domain_types import UserId
from user_service.core.enforce_user_input import parse_user_id
from user_service.core.errors import InvalidUserDataError, InvalidUserIdError
from user_service.core.repository_protocols import UserServiceLike
from user_service.infrastructure.database import get_db
from user_service.infrastructure.user_repository import SqlUserRepository
from user_service.schemas.user import (
    ErrorResponse, UserDTO, UserListResponse, UserResponse,
)
from user_service.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/users", tags=["users"])

_ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 404, 422, 500)
}


# ─── Dependencies ────────────────────────────────────────────────

def get_user_service(db: AsyncSession = Depends(get_db)) -> UserServiceLike:
    """Wire the service to a repository bound to this request's session."""
    return UserService(SqlUserRepository(db))


def path_user_id(user_id: str) -> UserId:
    """Parse the {user_id} path segment; raises InvalidUserIdError."""
    try:
        return UserId(parse_user_id(user_id))
    except InvalidUserIdError as e:
        logger.warning(f"could not parse user id: {e}", extra={"user_id": user_id})
        raise


async def user_dto_from_body(request: Request) -> UserDTO:
    """Decode the JSON body into a UserDTO; raises InvalidUserDataError."""
    raw = await request.body()
    try:
        return UserDTO.model_validate_json(raw)
    except ValidationError as e:
        message = describe_first_error(e)
        logger.warning(f"decode user data: {message}")
        raise InvalidUserDataError(message)


def _envelope(users) -> UserListResponse:
    return UserListResponse(
        data=[UserResponse.model_validate(u) for u in users],
    )


# ─── Routes ──────────────────────────────────────────────────────

@router.get(
    "", response_model=UserListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_users(
    service: UserServiceLike = Depends(get_user_service),
):
    """List all users."""
    return _envelope(await service.list_users())


@router.post(
    "", response_model=UserListResponse,
    status_code=status.HTTP_201_CREATED, responses=_ERROR_RESPONSES,
)
async def create_user(
    dto: UserDTO = Depends(user_dto_from_body),
    service: UserServiceLike = Depends(get_user_service),
):
    """Create a user from firstName, lastName and birthday."""
    return _envelope([await service.create_user(dto)])


@router.get(
    "/{user_id}", response_model=UserListResponse,
    responses=_ERROR_RESPONSES,
)
async def get_user(
    user_id: UserId = Depends(path_user_id),
    service: UserServiceLike = Depends(get_user_service),
):
    """Get one user by id."""
    return _envelope([await service.get_user(user_id)])


@router.put(
    "/{user_id}", response_model=UserListResponse,
    responses=_ERROR_RESPONSES,
)
async def update_user(
    user_id: UserId = Depends(path_user_id),
    dto: UserDTO = Depends(user_dto_from_body),
    service: UserServiceLike = Depends(get_user_service),
):
    """Replace firstName and lastName of an existing user."""
    return _envelope([await service.update_user(user_id, dto)])


@router.delete(
    "/{user_id}", response_model=UserListResponse,
    responses=_ERROR_RESPONSES,
)
async def delete_user(
    user_id: UserId = Depends(path_user_id),
    service: UserServiceLike = Depends(get_user_service),
):
    """Delete a user. Missing rows are not an error."""
    await service.delete_user(user_id)
    return UserListResponse(data=[])
