"""Domain Types — the User entity and the identifiers/codes shared across layers.

Invariants:
    - User.id is assigned once by the service and never changes
    - created_at is UTC-aware and never changes after creation
    - updated_at is None until the first update, then >= created_at
    - ErrorCode holds exactly the codes clients can receive

Design Decisions:
    - User as a plain dataclass, not the ORM row: the service and its test
      doubles never touch SQLAlchemy
    - updated_at is Optional, never a zero-timestamp sentinel
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ErrorCode(str, Enum):
    """Machine-readable error codes exposed in the {code, message} envelope."""
    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_USER_DATA = "INVALID_USER_DATA"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


# ─── Entities ────────────────────────────────────────────────────

@dataclass
class User:
    """Persisted user entity."""
    id: UserId
    first_name: str
    last_name: str
    birthday: str
    created_at: datetime
    updated_at: datetime | None = None
