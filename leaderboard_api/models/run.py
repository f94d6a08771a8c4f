"""Database model for submitted runs."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import BigInteger
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Run(SQLModel, table=True):
    """A single attempt at a category.

    ``time_or_score`` holds nanoseconds for timed categories and the raw
    score for scored ones; the owning category's ``type`` decides which.
    """

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    category_id: int = ORMField(foreign_key="category.id", index=True)
    user_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    info: str = ORMField(default="", nullable=False)
    played_on: date
    time_or_score: int = ORMField(sa_type=BigInteger)
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


__all__ = ["Run"]
