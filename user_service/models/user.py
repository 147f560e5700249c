"""User ORM — the `users` table.

Invariants:
    - id is a UUID primary key assigned by the service, never by the database
    - first_name, last_name, birthday are non-nullable strings
    - created_at is written once on insert; updated_at is NULL until first update

Design Decisions:
    - No ORM defaults for id/created_at: the service owns both values
    - birthday stored as free text (no date-format enforcement)
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from user_service.db.base import Base


class UserRecord(Base):
    """Row mapping for a persisted user."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    birthday: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
