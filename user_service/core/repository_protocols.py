"""Boundary Protocols — contracts between the HTTP layer, the service and storage.

Invariants:
    - UserRepository has exactly list/get/create/update/delete
    - UserServiceLike has exactly get_user/list_users/create_user/update_user/delete_user
    - UserRepository.get raises UserNotExistsError on zero rows, never returns None
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no base class
    - Async methods: every implementation awaits a storage round trip
"""

from typing import Protocol

from user_service.core.domain_types import User, UserId


class UserInputLike(Protocol):
    """Structural contract for the create/update payload."""
    first_name: str | None
    last_name: str | None
    birthday: str | None


class UserRepository(Protocol):
    """Contract for user persistence, implemented by infrastructure."""
    async def list(self) -> list[User]: ...
    async def get(self, user_id: UserId) -> User: ...
    async def create(self, user: User) -> None: ...
    async def update(self, user: User) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...


class UserServiceLike(Protocol):
    """Contract for the domain service, consumed by the HTTP layer."""
    async def get_user(self, user_id: UserId) -> User: ...
    async def list_users(self) -> list[User]: ...
    async def create_user(self, dto: UserInputLike) -> User: ...
    async def update_user(self, user_id: UserId, dto: UserInputLike) -> User: ...
    async def delete_user(self, user_id: UserId) -> None: ...
