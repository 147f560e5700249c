"""User Schemas — Pydantic models for the /v1/users wire format.

Invariants:
    - Wire names are camelCase: firstName, lastName, birthday, createdAt, updatedAt
    - UserDTO only decodes; emptiness is checked by the service, not here
    - UserDTO rejects non-string values (decode error -> 400 INVALID_USER_DATA)
    - updatedAt serializes as null until the first update
    - Envelope is always {"data": [...]}, never null or absent

Design Decisions:
    - DTO fields Optional with None default: a missing field is a domain
      validation failure (422), not a decoding failure (400)
    - Unknown body keys ignored
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserDTO(BaseModel):
    """Create/update payload."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    birthday: str | None = None


class UserResponse(BaseModel):
    """Public user representation."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    first_name: str
    last_name: str
    birthday: str
    created_at: datetime
    updated_at: datetime | None = None


class UserListResponse(BaseModel):
    """Success envelope shared by every /v1/users route."""
    data: list[UserResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error envelope, documented on every route."""
    code: str
    message: str
